"""
People module models.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import Field

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_date, parse_datetime, to_int, to_str


@dataclass
class Person(Record):
    first_name: str = ""
    last_name: str = ""
    middle_name: Optional[str] = None
    nickname: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    gender: Optional[str] = None
    birthdate: Optional[date] = None
    anniversary: Optional[date] = None
    child: bool = False
    grade: Optional[int] = None
    graduation_year: Optional[int] = None
    school_type: Optional[str] = None
    membership: Optional[str] = None
    status: str = "active"
    medical_notes: Optional[str] = None
    avatar: Optional[str] = None
    remote_id: Optional[str] = None
    site_administrator: bool = False
    accounting_administrator: bool = False
    passed_background_check: bool = False
    people_permissions: Optional[str] = None
    primary_campus_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return self.name or " ".join(part for part in (self.first_name, self.last_name) if part)

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Person":
        return cls(
            id=resource.id,
            first_name=resource.get("first_name", ""),
            last_name=resource.get("last_name", ""),
            middle_name=resource.get("middle_name"),
            nickname=resource.get("nickname"),
            name=resource.get("name"),
            given_name=resource.get("given_name"),
            gender=resource.get("gender"),
            birthdate=parse_date(resource.get("birthdate")),
            anniversary=parse_date(resource.get("anniversary")),
            child=bool(resource.get("child", False)),
            grade=to_int(resource.get("grade")),
            graduation_year=to_int(resource.get("graduation_year")),
            school_type=resource.get("school_type"),
            membership=resource.get("membership"),
            status=resource.get("status", "active"),
            medical_notes=resource.get("medical_notes"),
            avatar=resource.get("avatar"),
            remote_id=to_str(resource.get("remote_id")),
            site_administrator=bool(resource.get("site_administrator", False)),
            accounting_administrator=bool(resource.get("accounting_administrator", False)),
            passed_background_check=bool(resource.get("passed_background_check", False)),
            people_permissions=resource.get("people_permissions"),
            primary_campus_id=resource.relationship_id("primary_campus"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Email(Record):
    address: str = ""
    location: Optional[str] = None
    primary: bool = False
    blocked: bool = False
    person_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Email":
        return cls(
            id=resource.id,
            address=resource.get("address", ""),
            location=resource.get("location"),
            primary=bool(resource.get("primary", False)),
            blocked=bool(resource.get("blocked", False)),
            person_id=resource.relationship_id("person"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Address(Record):
    street: Optional[str] = None
    street_line_1: Optional[str] = None
    street_line_2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country_code: Optional[str] = None
    location: Optional[str] = None
    primary: bool = False
    person_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Address":
        return cls(
            id=resource.id,
            street=resource.get("street"),
            street_line_1=resource.get("street_line_1"),
            street_line_2=resource.get("street_line_2"),
            city=resource.get("city"),
            state=resource.get("state"),
            zip=resource.get("zip"),
            country_code=resource.get("country_code"),
            location=resource.get("location"),
            primary=bool(resource.get("primary", False)),
            person_id=resource.relationship_id("person"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class PhoneNumber(Record):
    number: str = ""
    carrier: Optional[str] = None
    location: Optional[str] = None
    primary: bool = False
    e164: Optional[str] = None
    international: Optional[str] = None
    person_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "PhoneNumber":
        return cls(
            id=resource.id,
            number=resource.get("number", ""),
            carrier=resource.get("carrier"),
            location=resource.get("location"),
            primary=bool(resource.get("primary", False)),
            e164=resource.get("e164"),
            international=resource.get("international"),
            person_id=resource.relationship_id("person"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Household(Record):
    name: str = ""
    member_count: int = 0
    primary_contact_name: Optional[str] = None
    primary_contact_id: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Household":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            member_count=to_int(resource.get("member_count"), 0),
            primary_contact_name=resource.get("primary_contact_name"),
            primary_contact_id=to_str(resource.get("primary_contact_id"))
            or resource.relationship_id("primary_contact"),
            avatar=resource.get("avatar"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Workflow(Record):
    name: str = ""
    my_ready_card_count: int = 0
    total_ready_card_count: int = 0
    completed_card_count: int = 0
    total_cards_count: int = 0
    archived_at: Optional[datetime] = None
    campus_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Workflow":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            my_ready_card_count=to_int(resource.get("my_ready_card_count"), 0),
            total_ready_card_count=to_int(resource.get("total_ready_card_count"), 0),
            completed_card_count=to_int(resource.get("completed_card_count"), 0),
            total_cards_count=to_int(resource.get("total_cards_count"), 0),
            archived_at=parse_datetime(resource.get("archived_at")),
            campus_id=to_str(resource.get("campus_id")) or resource.relationship_id("campus"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class WorkflowCard(Record):
    stage: Optional[str] = None
    sticky_assignment: bool = False
    snooze_until: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    removed_at: Optional[datetime] = None
    flagged_for_notification_at: Optional[datetime] = None
    workflow_id: Optional[str] = None
    person_id: Optional[str] = None
    assignee_id: Optional[str] = None
    current_step_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "WorkflowCard":
        return cls(
            id=resource.id,
            stage=resource.get("stage"),
            sticky_assignment=bool(resource.get("sticky_assignment", False)),
            snooze_until=parse_datetime(resource.get("snooze_until")),
            completed_at=parse_datetime(resource.get("completed_at")),
            removed_at=parse_datetime(resource.get("removed_at")),
            flagged_for_notification_at=parse_datetime(resource.get("flagged_for_notification_at")),
            workflow_id=resource.relationship_id("workflow"),
            person_id=resource.relationship_id("person"),
            assignee_id=resource.relationship_id("assignee"),
            current_step_id=resource.relationship_id("current_step"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Form(Record):
    name: str = ""
    description: Optional[str] = None
    active: bool = True
    archived: bool = False
    submission_count: int = 0
    public_url: Optional[str] = None
    login_required: bool = False
    campus_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Form":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            description=resource.get("description"),
            active=bool(resource.get("active", True)),
            archived=bool(resource.get("archived", False)),
            submission_count=to_int(resource.get("submission_count"), 0),
            public_url=resource.get("public_url"),
            login_required=bool(resource.get("login_required", False)),
            campus_id=resource.relationship_id("campus"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class FormSubmission(Record):
    verified: bool = False
    requires_verification: bool = False
    form_id: Optional[str] = None
    person_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "FormSubmission":
        return cls(
            id=resource.id,
            verified=bool(resource.get("verified", False)),
            requires_verification=bool(resource.get("requires_verification", False)),
            form_id=resource.relationship_id("form"),
            person_id=resource.relationship_id("person"),
            created_at=parse_datetime(resource.get("created_at")),
        )


@dataclass
class PeopleList(Record):
    name: str = ""
    name_or_description: Optional[str] = None
    description: Optional[str] = None
    total_people: int = 0
    status: Optional[str] = None
    auto_refresh: bool = False
    has_inactive_results: bool = False
    refreshed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "PeopleList":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            name_or_description=resource.get("name_or_description"),
            description=resource.get("description"),
            total_people=to_int(resource.get("total_people"), 0),
            status=resource.get("status"),
            auto_refresh=bool(resource.get("auto_refresh", False)),
            has_inactive_results=bool(resource.get("has_inactive_results", False)),
            refreshed_at=parse_datetime(resource.get("refreshed_at")),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Campus(Record):
    name: str = ""
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    time_zone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Campus":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            street=resource.get("street"),
            city=resource.get("city"),
            state=resource.get("state"),
            zip=resource.get("zip"),
            country=resource.get("country"),
            phone_number=resource.get("phone_number"),
            website=resource.get("website"),
            time_zone=resource.get("time_zone"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class ListMember(Record):
    list_id: Optional[str] = None
    person_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "ListMember":
        return cls(
            id=resource.id,
            list_id=resource.relationship_id("list"),
            person_id=resource.relationship_id("person"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class FieldDatum(Record):
    """Value of a custom field on a person's profile."""

    value: Optional[str] = None
    file_name: Optional[str] = None
    file_content_type: Optional[str] = None
    file_size: Optional[int] = None
    field_definition_id: Optional[str] = None
    customizable_id: Optional[str] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "FieldDatum":
        return cls(
            id=resource.id,
            value=to_str(resource.get("value")),
            file_name=resource.get("file_name"),
            file_content_type=resource.get("file_content_type"),
            file_size=to_int(resource.get("file_size")),
            field_definition_id=resource.relationship_id("field_definition"),
            customizable_id=resource.relationship_id("customizable"),
        )


# Requests

class PersonCreateRequest(RequestModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    middle_name: Optional[str] = None
    nickname: Optional[str] = None
    given_name: Optional[str] = None
    gender: Optional[str] = None
    birthdate: Optional[date] = None
    anniversary: Optional[date] = None
    child: Optional[bool] = None
    grade: Optional[int] = None
    graduation_year: Optional[int] = None
    membership: Optional[str] = None
    status: Optional[str] = None
    medical_notes: Optional[str] = None
    remote_id: Optional[str] = None
    primary_campus_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "primary_campus_id": ("primary_campus", "Campus"),
    }


class PersonUpdateRequest(RequestModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    nickname: Optional[str] = None
    given_name: Optional[str] = None
    gender: Optional[str] = None
    birthdate: Optional[date] = None
    anniversary: Optional[date] = None
    child: Optional[bool] = None
    grade: Optional[int] = None
    graduation_year: Optional[int] = None
    membership: Optional[str] = None
    status: Optional[str] = None
    medical_notes: Optional[str] = None
    remote_id: Optional[str] = None


class EmailRequest(RequestModel):
    address: Optional[str] = None
    location: Optional[str] = None
    primary: Optional[bool] = None


class AddressRequest(RequestModel):
    street_line_1: Optional[str] = None
    street_line_2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country_code: Optional[str] = None
    location: Optional[str] = None
    primary: Optional[bool] = None


class PhoneNumberRequest(RequestModel):
    number: Optional[str] = None
    carrier: Optional[str] = None
    location: Optional[str] = None
    primary: Optional[bool] = None


class HouseholdRequest(RequestModel):
    name: Optional[str] = None
    primary_contact_id: Optional[str] = None
    member_ids: List[str] = Field(default_factory=list)

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {"primary_contact_id": ("primary_contact", "Person")}

    def to_attributes(self) -> Dict[str, Any]:
        attributes = super().to_attributes()
        attributes.pop("member_ids", None)
        return attributes

    def to_relationships(self) -> Dict[str, Any]:
        relationships: Dict[str, Any] = dict(super().to_relationships())
        if self.member_ids:
            relationships["people"] = {
                "data": [{"type": "Person", "id": member_id} for member_id in self.member_ids]
            }
        return relationships


class WorkflowCardRequest(RequestModel):
    person_id: Optional[str] = None
    assignee_id: Optional[str] = None
    sticky_assignment: Optional[bool] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "person_id": ("person", "Person"),
        "assignee_id": ("assignee", "Person"),
    }


class FormSubmitRequest(RequestModel):
    person_id: Optional[str] = None
    field_data: Dict[str, Any] = Field(default_factory=dict)

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {"person_id": ("person", "Person")}


class PeopleListCreateRequest(RequestModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    is_public: bool = False


class PeopleListUpdateRequest(RequestModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None


class ListMemberCreateRequest(RequestModel):
    person_id: str = Field(min_length=1)

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {"person_id": ("person", "Person")}
