"""
Services module models (service planning).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Dict, List, Optional, Tuple

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_datetime, to_int


@dataclass
class ServiceType(Record):
    name: str = ""
    frequency: Optional[str] = None
    sequence: Optional[int] = None
    permissions: Optional[str] = None
    archived_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "ServiceType":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            frequency=resource.get("frequency"),
            sequence=to_int(resource.get("sequence")),
            permissions=resource.get("permissions"),
            archived_at=parse_datetime(resource.get("archived_at")),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Plan(Record):
    title: Optional[str] = None
    series_title: Optional[str] = None
    dates: Optional[str] = None
    short_dates: Optional[str] = None
    sort_date: Optional[datetime] = None
    items_count: int = 0
    plan_people_count: int = 0
    public: bool = False
    service_type_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Plan":
        return cls(
            id=resource.id,
            title=resource.get("title"),
            series_title=resource.get("series_title"),
            dates=resource.get("dates"),
            short_dates=resource.get("short_dates"),
            sort_date=parse_datetime(resource.get("sort_date")),
            items_count=to_int(resource.get("items_count"), 0),
            plan_people_count=to_int(resource.get("plan_people_count"), 0),
            public=bool(resource.get("public", False)),
            service_type_id=resource.relationship_id("service_type"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Item(Record):
    title: str = ""
    description: Optional[str] = None
    item_type: Optional[str] = None
    key_name: Optional[str] = None
    sequence: Optional[int] = None
    length: Optional[int] = None
    service_position: Optional[str] = None
    plan_id: Optional[str] = None
    song_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Item":
        return cls(
            id=resource.id,
            title=resource.get("title", ""),
            description=resource.get("description"),
            item_type=resource.get("item_type"),
            key_name=resource.get("key_name"),
            sequence=to_int(resource.get("sequence")),
            length=to_int(resource.get("length")),
            service_position=resource.get("service_position"),
            plan_id=resource.relationship_id("plan"),
            song_id=resource.relationship_id("song"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Song(Record):
    title: str = ""
    author: Optional[str] = None
    copyright: Optional[str] = None
    ccli_number: Optional[int] = None
    themes: Optional[str] = None
    hidden: bool = False
    last_scheduled_at: Optional[datetime] = None
    keys: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Song":
        return cls(
            id=resource.id,
            title=resource.get("title", ""),
            author=resource.get("author"),
            copyright=resource.get("copyright"),
            ccli_number=to_int(resource.get("ccli_number")),
            themes=resource.get("themes"),
            hidden=bool(resource.get("hidden", False)),
            last_scheduled_at=parse_datetime(resource.get("last_scheduled_at")),
            keys=resource.relationship_ids("keys"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


class PlanRequest(RequestModel):
    title: Optional[str] = None
    series_title: Optional[str] = None
    public: Optional[bool] = None


class ItemRequest(RequestModel):
    title: Optional[str] = None
    description: Optional[str] = None
    item_type: Optional[str] = None
    key_name: Optional[str] = None
    length: Optional[int] = None
    sequence: Optional[int] = None
    song_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "song_id": ("song", "Song"),
    }


class SongRequest(RequestModel):
    title: Optional[str] = None
    author: Optional[str] = None
    copyright: Optional[str] = None
    ccli_number: Optional[int] = None
    themes: Optional[str] = None
    hidden: Optional[bool] = None
