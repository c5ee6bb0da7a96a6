"""
Check-Ins module models.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Dict, Optional, Tuple

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_datetime


@dataclass
class CheckIn(Record):
    first_name: str = ""
    last_name: str = ""
    number: Optional[int] = None
    security_code: Optional[str] = None
    kind: str = "Regular"
    one_time_guest: bool = False
    medical_notes: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone_number: Optional[str] = None
    checked_out_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    person_id: Optional[str] = None
    event_id: Optional[str] = None
    event_period_id: Optional[str] = None
    location_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_checked_out(self) -> bool:
        return self.checked_out_at is not None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "CheckIn":
        return cls(
            id=resource.id,
            first_name=resource.get("first_name", ""),
            last_name=resource.get("last_name", ""),
            number=resource.get("number"),
            security_code=resource.get("security_code"),
            kind=resource.get("kind", "Regular"),
            one_time_guest=bool(resource.get("one_time_guest", False)),
            medical_notes=resource.get("medical_notes"),
            emergency_contact_name=resource.get("emergency_contact_name"),
            emergency_contact_phone_number=resource.get("emergency_contact_phone_number"),
            checked_out_at=parse_datetime(resource.get("checked_out_at")),
            confirmed_at=parse_datetime(resource.get("confirmed_at")),
            person_id=resource.relationship_id("person"),
            event_id=resource.relationship_id("event"),
            event_period_id=resource.relationship_id("event_period"),
            location_id=resource.relationship_id("location"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class CheckInEvent(Record):
    name: str = ""
    frequency: Optional[str] = None
    enable_services_integration: bool = False
    archived_at: Optional[datetime] = None
    integration_key: Optional[str] = None
    location_times_enabled: bool = False
    pre_select_enabled: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "CheckInEvent":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            frequency=resource.get("frequency"),
            enable_services_integration=bool(resource.get("enable_services_integration", False)),
            archived_at=parse_datetime(resource.get("archived_at")),
            integration_key=resource.get("integration_key"),
            location_times_enabled=bool(resource.get("location_times_enabled", False)),
            pre_select_enabled=bool(resource.get("pre_select_enabled", False)),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


class CheckInRequest(RequestModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    kind: Optional[str] = None
    medical_notes: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone_number: Optional[str] = None
    person_id: Optional[str] = None
    event_id: Optional[str] = None
    location_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "person_id": ("person", "Person"),
        "event_id": ("event", "Event"),
        "location_id": ("location", "Location"),
    }
