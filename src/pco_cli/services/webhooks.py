"""
Webhooks service (``/webhooks/v2``) and delivery signature checks.
"""

import hashlib
import hmac
import logging
from typing import AsyncIterator, List, Optional, Union
from urllib.parse import urlencode

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.webhooks import AvailableEvent, WebhookEvent, WebhookSubscription, WebhookSubscriptionRequest
from .base import ServiceBase

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="


def compute_signature(payload: Union[str, bytes], secret: str) -> str:
    """Hex HMAC-SHA256 digest of ``payload`` keyed with ``secret``."""
    body = payload.encode("utf-8") if isinstance(payload, str) else payload
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def validate_event_signature(payload: Union[str, bytes], signature: str, secret: str) -> bool:
    """
    Check the signature Planning Center sent with a webhook delivery.

    Args:
        payload: Raw request body
        signature: Header value, with or without the ``sha256=`` prefix
        secret: Authenticity secret of the subscription

    Returns:
        True if the signature matches

    Raises:
        ValueError: If any argument is empty
    """
    if not payload:
        raise ValueError("payload must not be empty")
    if not signature or not signature.strip():
        raise ValueError("signature must not be empty")
    if not secret or not secret.strip():
        raise ValueError("secret must not be empty")

    received = signature.strip()
    if received.startswith(SIGNATURE_PREFIX):
        received = received[len(SIGNATURE_PREFIX):]

    expected = compute_signature(payload, secret)
    is_valid = hmac.compare_digest(received.lower().encode("utf-8"), expected.encode("utf-8"))
    logger.debug(f"Webhook signature valid: {is_valid}")
    return is_valid


class WebhooksService(ServiceBase):
    """Webhook subscriptions, the events they can receive and delivered events."""

    base_path = "/webhooks/v2"

    # Subscriptions

    async def get_subscription(self, subscription_id: str) -> Optional[WebhookSubscription]:
        subscription_id = self._require_id(subscription_id, "subscription_id")
        return await self._get(self._path("subscriptions", subscription_id), WebhookSubscription.from_resource)

    async def list_subscriptions(self, params: Optional[QueryParameters] = None) -> Page[WebhookSubscription]:
        return await self._list(self._path("subscriptions"), WebhookSubscription.from_resource, params)

    async def get_all_subscriptions(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[WebhookSubscription]:
        return await self._get_all(self._path("subscriptions"), WebhookSubscription.from_resource, params, options)

    def stream_subscriptions(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[WebhookSubscription]:
        return self._stream(self._path("subscriptions"), WebhookSubscription.from_resource, params, options)

    async def create_subscription(self, request: WebhookSubscriptionRequest) -> WebhookSubscription:
        return await self._create(
            self._path("subscriptions"), "Subscription", request, WebhookSubscription.from_resource
        )

    async def update_subscription(
        self, subscription_id: str, request: WebhookSubscriptionRequest
    ) -> WebhookSubscription:
        subscription_id = self._require_id(subscription_id, "subscription_id")
        return await self._update(
            self._path("subscriptions", subscription_id),
            "Subscription",
            subscription_id,
            request,
            WebhookSubscription.from_resource,
        )

    async def delete_subscription(self, subscription_id: str) -> None:
        subscription_id = self._require_id(subscription_id, "subscription_id")
        await self._delete(self._path("subscriptions", subscription_id))

    async def activate_subscription(self, subscription_id: str) -> Optional[WebhookSubscription]:
        subscription_id = self._require_id(subscription_id, "subscription_id")
        return await self._action(
            self._path("subscriptions", subscription_id, "activate"), WebhookSubscription.from_resource
        )

    async def deactivate_subscription(self, subscription_id: str) -> Optional[WebhookSubscription]:
        subscription_id = self._require_id(subscription_id, "subscription_id")
        return await self._action(
            self._path("subscriptions", subscription_id, "deactivate"), WebhookSubscription.from_resource
        )

    # Available events

    async def list_available_events(
        self,
        params: Optional[QueryParameters] = None,
        module: Optional[str] = None,
    ) -> Page[AvailableEvent]:
        """
        List the events a subscription can be created for.

        Args:
            params: Query parameters
            module: Only events of this product, e.g. ``people``
        """
        path = self._path("available_events")
        if module:
            path = (params or QueryParameters()).apply_to(path)
            separator = "&" if "?" in path else "?"
            path = f"{path}{separator}{urlencode({'filter[module]': module})}"
            params = None
        return await self._list(path, AvailableEvent.from_resource, params)

    async def get_available_event(self, event_id: str) -> Optional[AvailableEvent]:
        event_id = self._require_id(event_id, "event_id")
        return await self._get(self._path("available_events", event_id), AvailableEvent.from_resource)

    # Delivered events

    async def list_events(self, subscription_id: str, params: Optional[QueryParameters] = None) -> Page[WebhookEvent]:
        subscription_id = self._require_id(subscription_id, "subscription_id")
        return await self._list(
            self._path("subscriptions", subscription_id, "events"), WebhookEvent.from_resource, params
        )

    async def get_event(self, event_id: str) -> Optional[WebhookEvent]:
        event_id = self._require_id(event_id, "event_id")
        return await self._get(self._path("events", event_id), WebhookEvent.from_resource)

    async def redeliver_event(self, event_id: str) -> Optional[WebhookEvent]:
        event_id = self._require_id(event_id, "event_id")
        return await self._action(self._path("events", event_id, "redeliver"), WebhookEvent.from_resource)

    @staticmethod
    def validate_event_signature(payload: Union[str, bytes], signature: str, secret: str) -> bool:
        return validate_event_signature(payload, signature, secret)
