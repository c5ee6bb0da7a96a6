"""
Module services, one per Planning Center product.
"""

from .base import ServiceBase
from .calendar import CalendarService
from .check_ins import CheckInsService
from .giving import GivingService
from .groups import GroupsService
from .people import PeopleService
from .publishing import PublishingService
from .registrations import RegistrationsService
from .services import ServicesService
from .webhooks import WebhooksService, validate_event_signature

__all__ = [
    "ServiceBase",
    "CalendarService",
    "CheckInsService",
    "GivingService",
    "GroupsService",
    "PeopleService",
    "PublishingService",
    "RegistrationsService",
    "ServicesService",
    "WebhooksService",
    "validate_event_signature",
]
