"""
Groups module models.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Dict, Optional, Tuple

from pydantic import Field

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_datetime, to_int


@dataclass
class Group(Record):
    name: str = ""
    description: Optional[str] = None
    schedule: Optional[str] = None
    contact_email: Optional[str] = None
    memberships_count: int = 0
    archived_at: Optional[datetime] = None
    location_type_preference: Optional[str] = None
    virtual_location_url: Optional[str] = None
    events_visibility: Optional[str] = None
    chat_enabled: bool = False
    members_are_confidential: bool = False
    public_church_center_web_url: Optional[str] = None
    group_type_id: Optional[str] = None
    location_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Group":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            description=resource.get("description"),
            schedule=resource.get("schedule"),
            contact_email=resource.get("contact_email"),
            memberships_count=to_int(resource.get("memberships_count"), 0),
            archived_at=parse_datetime(resource.get("archived_at")),
            location_type_preference=resource.get("location_type_preference"),
            virtual_location_url=resource.get("virtual_location_url"),
            events_visibility=resource.get("events_visibility"),
            chat_enabled=bool(resource.get("chat_enabled", False)),
            members_are_confidential=bool(resource.get("members_are_confidential", False)),
            public_church_center_web_url=resource.get("public_church_center_web_url"),
            group_type_id=resource.relationship_id("group_type"),
            location_id=resource.relationship_id("location"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class GroupType(Record):
    name: str = ""
    description: Optional[str] = None
    color: Optional[str] = None
    position: Optional[int] = None
    church_center_visible: bool = False
    church_center_map_visible: bool = False

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "GroupType":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            description=resource.get("description"),
            color=resource.get("color"),
            position=to_int(resource.get("position")),
            church_center_visible=bool(resource.get("church_center_visible", False)),
            church_center_map_visible=bool(resource.get("church_center_map_visible", False)),
        )


@dataclass
class Membership(Record):
    role: str = "member"
    joined_at: Optional[datetime] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    phone_number: Optional[str] = None
    group_id: Optional[str] = None
    person_id: Optional[str] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Membership":
        return cls(
            id=resource.id,
            role=resource.get("role", "member"),
            joined_at=parse_datetime(resource.get("joined_at")),
            first_name=resource.get("first_name"),
            last_name=resource.get("last_name"),
            email_address=resource.get("email_address"),
            phone_number=resource.get("phone_number"),
            group_id=resource.relationship_id("group"),
            person_id=resource.relationship_id("person"),
        )


class GroupRequest(RequestModel):
    name: Optional[str] = None
    description: Optional[str] = None
    schedule: Optional[str] = None
    contact_email: Optional[str] = None
    location_type_preference: Optional[str] = None
    virtual_location_url: Optional[str] = None
    group_type_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "group_type_id": ("group_type", "GroupType"),
    }


class MembershipRequest(RequestModel):
    role: Optional[str] = Field(default=None, pattern="^(member|leader)$")
    joined_at: Optional[datetime] = None
    person_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "person_id": ("person", "Person"),
    }
