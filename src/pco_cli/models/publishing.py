"""
Publishing module models.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Dict, Optional, Tuple

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_datetime, to_int


@dataclass
class Episode(Record):
    title: str = ""
    description: Optional[str] = None
    art_url: Optional[str] = None
    church_center_url: Optional[str] = None
    video_url: Optional[str] = None
    sermon_audio_url: Optional[str] = None
    library_video_url: Optional[str] = None
    stream_type: Optional[str] = None
    published_to_library_at: Optional[datetime] = None
    published_live_at: Optional[datetime] = None
    series_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_published(self) -> bool:
        return self.published_to_library_at is not None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Episode":
        return cls(
            id=resource.id,
            title=resource.get("title", ""),
            description=resource.get("description"),
            art_url=resource.get("art_url"),
            church_center_url=resource.get("church_center_url"),
            video_url=resource.get("video_url"),
            sermon_audio_url=resource.get("sermon_audio_url"),
            library_video_url=resource.get("library_video_url"),
            stream_type=resource.get("stream_type"),
            published_to_library_at=parse_datetime(resource.get("published_to_library_at")),
            published_live_at=parse_datetime(resource.get("published_live_at")),
            series_id=resource.relationship_id("series"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Series(Record):
    title: str = ""
    description: Optional[str] = None
    art_url: Optional[str] = None
    church_center_url: Optional[str] = None
    episodes_count: int = 0
    published: bool = False
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Series":
        return cls(
            id=resource.id,
            title=resource.get("title", ""),
            description=resource.get("description"),
            art_url=resource.get("art_url"),
            church_center_url=resource.get("church_center_url"),
            episodes_count=to_int(resource.get("episodes_count"), 0),
            published=bool(resource.get("published", False)),
            started_at=parse_datetime(resource.get("started_at")),
            ended_at=parse_datetime(resource.get("ended_at")),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Speaker(Record):
    name: str = ""
    formatted_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    title: Optional[str] = None
    biography: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Speaker":
        first = resource.get("first_name")
        last = resource.get("last_name")
        name = resource.get("name") or " ".join(part for part in (first, last) if part)
        return cls(
            id=resource.id,
            name=name,
            formatted_name=resource.get("formatted_name"),
            first_name=first,
            last_name=last,
            display_name=resource.get("display_name"),
            title=resource.get("title"),
            biography=resource.get("biography"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Speakership(Record):
    """Link between a speaker and an episode."""

    episode_id: Optional[str] = None
    speaker_id: Optional[str] = None
    role: Optional[str] = None
    is_primary: bool = False
    sort_order: int = 0

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Speakership":
        return cls(
            id=resource.id,
            episode_id=resource.relationship_id("episode"),
            speaker_id=resource.relationship_id("speaker"),
            role=resource.get("role"),
            is_primary=bool(resource.get("is_primary", False)),
            sort_order=to_int(resource.get("sort_order"), 0),
        )


@dataclass
class Media(Record):
    title: Optional[str] = None
    media_type: Optional[str] = None
    url: Optional[str] = None
    file_size: Optional[int] = None
    duration: Optional[int] = None
    episode_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Media":
        return cls(
            id=resource.id,
            title=resource.get("title"),
            media_type=resource.get("media_type"),
            url=resource.get("url"),
            file_size=to_int(resource.get("file_size")),
            duration=to_int(resource.get("duration")),
            episode_id=resource.relationship_id("episode"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


class EpisodeRequest(RequestModel):
    title: Optional[str] = None
    description: Optional[str] = None
    video_url: Optional[str] = None
    sermon_audio_url: Optional[str] = None
    library_video_url: Optional[str] = None
    stream_type: Optional[str] = None
    series_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "series_id": ("series", "Series"),
    }


class SeriesRequest(RequestModel):
    title: Optional[str] = None
    description: Optional[str] = None


class SpeakerRequest(RequestModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    title: Optional[str] = None
    biography: Optional[str] = None
