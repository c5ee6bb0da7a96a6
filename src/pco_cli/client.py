"""
Planning Center client facade.

PlanningCenterClient bundles one ApiConnection with a service per product.
Services receive the connection explicitly; nothing is looked up globally.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from .config.settings import PlanningCenterSettings
from .core.client.auth import create_authenticator
from .core.client.connection import ApiConnection
from .core.client.errors import PlanningCenterError, create_user_friendly_message
from .core.client.retry import create_retry_config
from .services import (
    CalendarService,
    CheckInsService,
    GivingService,
    GroupsService,
    PeopleService,
    PublishingService,
    RegistrationsService,
    ServicesService,
    WebhooksService,
)

logger = logging.getLogger(__name__)

HEALTH_CHECK_PATH = "/people/v2/me"


@dataclass
class HealthCheckResult:
    is_healthy: bool
    response_time_ms: float
    error: Optional[str] = None


class PlanningCenterClient:
    """Entry point to every Planning Center product API."""

    def __init__(self, connection: ApiConnection):
        self.connection = connection
        self.people = PeopleService(connection)
        self.calendar = CalendarService(connection)
        self.check_ins = CheckInsService(connection)
        self.giving = GivingService(connection)
        self.groups = GroupsService(connection)
        self.publishing = PublishingService(connection)
        self.registrations = RegistrationsService(connection)
        self.services = ServicesService(connection)
        self.webhooks = WebhooksService(connection)

    async def __aenter__(self) -> "PlanningCenterClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.connection.close()

    async def check_health(self) -> HealthCheckResult:
        """
        Check that the API is reachable and the credentials are accepted.

        Errors are reported in the result rather than raised.

        Returns:
            HealthCheckResult with the round trip time in milliseconds
        """
        started = time.perf_counter()
        try:
            await self.connection.get(HEALTH_CHECK_PATH)
        except PlanningCenterError as e:
            elapsed = (time.perf_counter() - started) * 1000
            logger.warning(f"Health check failed after {elapsed:.0f}ms: {e}")
            return HealthCheckResult(
                is_healthy=False,
                response_time_ms=elapsed,
                error=create_user_friendly_message(e),
            )
        elapsed = (time.perf_counter() - started) * 1000
        logger.info(f"Health check succeeded in {elapsed:.0f}ms")
        return HealthCheckResult(is_healthy=True, response_time_ms=elapsed)


def create_client(settings: PlanningCenterSettings, **connection_kwargs) -> PlanningCenterClient:
    """
    Build a client from settings.

    Args:
        settings: Validated settings with credentials
        **connection_kwargs: Extra ApiConnection arguments (e.g. ``transport``)

    Returns:
        Ready to use PlanningCenterClient

    Raises:
        ConfigurationError: If no credentials are configured
    """
    settings.validate_credentials()
    connection = ApiConnection(
        authenticator=create_authenticator(settings),
        base_url=settings.base_url,
        timeout=settings.timeout,
        user_agent=settings.user_agent,
        retry_config=create_retry_config(settings.max_retry_attempts, settings.retry_base_delay),
        detailed_logging=settings.detailed_logging,
        **connection_kwargs,
    )
    logger.debug(f"Created client for {settings.base_url} using {settings.auth_method}")
    return PlanningCenterClient(connection)
