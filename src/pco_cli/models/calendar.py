"""
Calendar module models.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_datetime


@dataclass
class Event(Record):
    name: str = ""
    summary: Optional[str] = None
    description: Optional[str] = None
    approval_status: Optional[str] = None
    percent_approved: Optional[int] = None
    percent_rejected: Optional[int] = None
    visible_in_church_center: bool = False
    registration_url: Optional[str] = None
    image_url: Optional[str] = None
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Event":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            summary=resource.get("summary"),
            description=resource.get("description"),
            approval_status=resource.get("approval_status"),
            percent_approved=resource.get("percent_approved"),
            percent_rejected=resource.get("percent_rejected"),
            visible_in_church_center=bool(resource.get("visible_in_church_center", False)),
            registration_url=resource.get("registration_url"),
            image_url=resource.get("image_url"),
            owner_id=resource.relationship_id("owner"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class CalendarResource(Record):
    """A bookable room or resource."""

    name: str = ""
    kind: Optional[str] = None
    description: Optional[str] = None
    path_name: Optional[str] = None
    home_location: Optional[str] = None
    serial_number: Optional[str] = None
    quantity: int = 1
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "CalendarResource":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            kind=resource.get("kind"),
            description=resource.get("description"),
            path_name=resource.get("path_name"),
            home_location=resource.get("home_location"),
            serial_number=resource.get("serial_number"),
            quantity=resource.get("quantity", 1),
            expires_at=parse_datetime(resource.get("expires_at")),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


class EventRequest(RequestModel):
    name: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    visible_in_church_center: Optional[bool] = None
    registration_url: Optional[str] = None


class ResourceRequest(RequestModel):
    name: Optional[str] = None
    kind: Optional[str] = None
    description: Optional[str] = None
    home_location: Optional[str] = None
    serial_number: Optional[str] = None
    quantity: Optional[int] = None
