"""
Domain models for Planning Center resources.

Each module mirrors one Planning Center product. Records are dataclasses
built from JSON:API resources; request payloads are pydantic models.
"""

from .base import Record, RequestModel, parse_date, parse_datetime
from .calendar import CalendarResource, Event
from .check_ins import CheckIn, CheckInEvent
from .giving import Batch, Donation, Fund, PaymentSource, Pledge, RecurringDonation, Refund
from .groups import Group, GroupType, Membership
from .people import (
    Address,
    Campus,
    Email,
    FieldDatum,
    Form,
    FormSubmission,
    Household,
    ListMember,
    PeopleList,
    Person,
    PhoneNumber,
    Workflow,
    WorkflowCard,
)
from .publishing import Episode, Media, Series, Speaker, Speakership
from .registrations import (
    Attendee,
    Category,
    Registration,
    RegistrationCampus,
    SelectionType,
    Signup,
    SignupTime,
)
from .services import Item, Plan, ServiceType, Song
from .webhooks import AvailableEvent, WebhookEvent, WebhookSubscription

__all__ = [
    "Record",
    "RequestModel",
    "parse_date",
    "parse_datetime",
    "Address",
    "Attendee",
    "AvailableEvent",
    "Batch",
    "CalendarResource",
    "Campus",
    "Category",
    "CheckIn",
    "CheckInEvent",
    "Donation",
    "Email",
    "Episode",
    "Event",
    "FieldDatum",
    "Form",
    "FormSubmission",
    "Fund",
    "Group",
    "GroupType",
    "Household",
    "Item",
    "ListMember",
    "Media",
    "Membership",
    "PaymentSource",
    "PeopleList",
    "Person",
    "PhoneNumber",
    "Plan",
    "Pledge",
    "RecurringDonation",
    "Refund",
    "Registration",
    "RegistrationCampus",
    "SelectionType",
    "Series",
    "ServiceType",
    "Signup",
    "SignupTime",
    "Song",
    "Speaker",
    "Speakership",
    "WebhookEvent",
    "WebhookSubscription",
    "Workflow",
    "WorkflowCard",
]
