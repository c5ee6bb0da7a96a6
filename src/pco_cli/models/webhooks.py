"""
Webhooks module models.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_datetime


@dataclass
class WebhookSubscription(Record):
    name: str = ""
    url: str = ""
    active: bool = True
    authenticity_secret: Optional[str] = None
    application_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "WebhookSubscription":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            url=resource.get("url", ""),
            active=bool(resource.get("active", True)),
            authenticity_secret=resource.get("authenticity_secret"),
            application_id=resource.get("application_id"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class AvailableEvent(Record):
    name: str = ""
    app: Optional[str] = None
    version: Optional[str] = None
    resource: Optional[str] = None
    action: Optional[str] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "AvailableEvent":
        name = resource.get("name", "")
        # Event names look like "people.v2.events.person.created"
        parts = name.split(".")
        return cls(
            id=resource.id,
            name=name,
            app=resource.get("app") or (parts[0] if parts and parts[0] else None),
            version=resource.get("version") or (parts[1] if len(parts) > 1 else None),
            resource=parts[-2] if len(parts) >= 2 else None,
            action=parts[-1] if len(parts) >= 2 else None,
        )


@dataclass
class WebhookEvent(Record):
    status: Optional[str] = None
    uuid: Optional[str] = None
    payload: Optional[str] = None
    subscription_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def payload_json(self) -> Optional[Any]:
        """Decode the delivered payload, or None if it is not JSON."""
        if not self.payload:
            return None
        try:
            return json.loads(self.payload)
        except ValueError:
            return None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "WebhookEvent":
        known = {"status", "uuid", "payload", "created_at", "updated_at"}
        return cls(
            id=resource.id,
            status=resource.get("status"),
            uuid=resource.get("uuid"),
            payload=resource.get("payload"),
            subscription_id=resource.relationship_id("subscription"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
            extra={k: v for k, v in resource.attributes.items() if k not in known},
        )


class WebhookSubscriptionRequest(RequestModel):
    name: Optional[str] = None
    url: Optional[str] = Field(default=None, pattern=r"^https?://")
    active: Optional[bool] = None
