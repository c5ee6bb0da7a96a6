"""
Shared helpers for domain models.
"""

from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as returned by the API (``Z`` suffix allowed)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date (``YYYY-MM-DD``)."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def to_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass
class Record:
    """Base class for domain records built from JSON:API resources."""

    id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def field_names(cls) -> list:
        return [f.name for f in fields(cls)]


class RequestModel(BaseModel):
    """
    Base for create/update payloads.

    Fields listed in ``RELATIONSHIPS`` (field name -> (relationship name,
    resource type)) are sent as JSON:API relationships instead of attributes.
    """

    model_config = ConfigDict(extra="forbid")

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {}

    def to_attributes(self) -> Dict[str, Any]:
        """Attributes for the JSON:API document, without unset values."""
        return self.model_dump(
            mode="json",
            exclude_none=True,
            exclude=set(self.RELATIONSHIPS),
        )

    def to_relationships(self) -> Dict[str, Tuple[str, str]]:
        relationships = {}
        for field_name, (name, resource_type) in self.RELATIONSHIPS.items():
            value = getattr(self, field_name)
            if value is not None:
                relationships[name] = (resource_type, str(value))
        return relationships
