"""
Registrations module models.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar, Dict, Optional, Tuple

from pydantic import Field

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_datetime, to_int


@dataclass
class Signup(Record):
    name: str = ""
    description: Optional[str] = None
    archived: bool = False
    new_registration_url: Optional[str] = None
    logo_url: Optional[str] = None
    open_at: Optional[datetime] = None
    close_at: Optional[datetime] = None
    category_id: Optional[str] = None
    campus_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_open(self, now: Optional[datetime] = None) -> bool:
        """Whether registration is open at ``now`` (defaults to the current time)."""
        if self.archived:
            return False
        now = now or datetime.now(timezone.utc)
        if self.open_at and now < self.open_at:
            return False
        if self.close_at and now > self.close_at:
            return False
        return True

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Signup":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            description=resource.get("description"),
            archived=bool(resource.get("archived", False)),
            new_registration_url=resource.get("new_registration_url"),
            logo_url=resource.get("logo_url"),
            open_at=parse_datetime(resource.get("open_at")),
            close_at=parse_datetime(resource.get("close_at")),
            category_id=resource.relationship_id("category"),
            campus_id=resource.relationship_id("campus"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Registration(Record):
    signup_id: Optional[str] = None
    created_by_id: Optional[str] = None
    total_cents: int = 0
    total_currency: Optional[str] = None
    balance_due_cents: int = 0
    payment_status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Registration":
        return cls(
            id=resource.id,
            signup_id=resource.relationship_id("signup"),
            created_by_id=resource.relationship_id("created_by"),
            total_cents=to_int(resource.get("total_cents"), 0),
            total_currency=resource.get("total_currency"),
            balance_due_cents=to_int(resource.get("balance_due_cents"), 0),
            payment_status=resource.get("payment_status"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Attendee(Record):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    complete: bool = False
    active: bool = True
    canceled: bool = False
    waitlisted: bool = False
    signup_id: Optional[str] = None
    person_id: Optional[str] = None
    registration_id: Optional[str] = None
    selection_type_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Attendee":
        return cls(
            id=resource.id,
            first_name=resource.get("first_name"),
            last_name=resource.get("last_name"),
            email=resource.get("email"),
            phone_number=resource.get("phone_number"),
            complete=bool(resource.get("complete", False)),
            active=bool(resource.get("active", True)),
            canceled=bool(resource.get("canceled", False)),
            waitlisted=bool(resource.get("waitlisted", False)),
            signup_id=resource.relationship_id("signup"),
            person_id=resource.relationship_id("person"),
            registration_id=resource.relationship_id("registration"),
            selection_type_id=resource.relationship_id("selection_type"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class SelectionType(Record):
    name: str = ""
    price_cents: int = 0
    price_currency: Optional[str] = None
    publicly_available: bool = True
    signup_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "SelectionType":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            price_cents=to_int(resource.get("price_cents"), 0),
            price_currency=resource.get("price_currency"),
            publicly_available=bool(resource.get("publicly_available", True)),
            signup_id=resource.relationship_id("signup"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class SignupTime(Record):
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    all_day: bool = False
    signup_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "SignupTime":
        return cls(
            id=resource.id,
            starts_at=parse_datetime(resource.get("starts_at")),
            ends_at=parse_datetime(resource.get("ends_at")),
            all_day=bool(resource.get("all_day", False)),
            signup_id=resource.relationship_id("signup"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Category(Record):
    name: str = ""
    slug: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Category":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            slug=resource.get("slug"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class RegistrationCampus(Record):
    name: str = ""
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "RegistrationCampus":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            street=resource.get("street"),
            city=resource.get("city"),
            state=resource.get("state"),
            zip=resource.get("zip"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


class SignupRequest(RequestModel):
    name: Optional[str] = None
    description: Optional[str] = None
    archived: Optional[bool] = None
    open_at: Optional[datetime] = None
    close_at: Optional[datetime] = None
    category_id: Optional[str] = None
    campus_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "category_id": ("category", "Category"),
        "campus_id": ("campus", "Campus"),
    }


class AttendeeRequest(RequestModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    canceled: Optional[bool] = None
    waitlisted: Optional[bool] = None
    person_id: Optional[str] = None
    selection_type_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "person_id": ("person", "Person"),
        "selection_type_id": ("selection_type", "SelectionType"),
    }


class SelectionTypeRequest(RequestModel):
    name: Optional[str] = None
    price_cents: Optional[int] = Field(default=None, ge=0)
    publicly_available: Optional[bool] = None
