"""
JSON:API envelope parsing.

Planning Center answers every request with a ``{data, included, meta, links}``
document. This module turns those documents into JsonApiResource records and
Page objects, and builds request bodies for create/update calls.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class JsonApiResource:
    """A single JSON:API resource object."""

    type: str
    id: Optional[str]
    attributes: Dict[str, Any] = field(default_factory=dict)
    relationships: Dict[str, Any] = field(default_factory=dict)
    links: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JsonApiResource":
        """Create a resource from the ``data`` member of a document."""
        resource_id = data.get("id")
        return cls(
            type=data.get("type", ""),
            id=str(resource_id) if resource_id is not None else None,
            attributes=data.get("attributes") or {},
            relationships=data.get("relationships") or {},
            links=data.get("links") or {},
        )

    def get(self, name: str, default: Any = None) -> Any:
        """Get an attribute value."""
        value = self.attributes.get(name, default)
        return default if value is None else value

    def relationship_id(self, name: str) -> Optional[str]:
        """Return the id of a to-one relationship, or None."""
        relationship = self.relationships.get(name)
        if not isinstance(relationship, dict):
            return None
        data = relationship.get("data")
        if isinstance(data, dict) and data.get("id") is not None:
            return str(data["id"])
        return None

    def relationship_ids(self, name: str) -> List[str]:
        """Return the ids of a to-many relationship."""
        relationship = self.relationships.get(name)
        if not isinstance(relationship, dict):
            return []
        data = relationship.get("data")
        if isinstance(data, list):
            return [str(item["id"]) for item in data if isinstance(item, dict) and "id" in item]
        return []


@dataclass
class PageMeta:
    """Pagination metadata reported by the API."""

    total_count: Optional[int] = None
    count: Optional[int] = None
    next_offset: Optional[int] = None
    prev_offset: Optional[int] = None
    can_order_by: List[str] = field(default_factory=list)
    can_query_by: List[str] = field(default_factory=list)
    can_include: List[str] = field(default_factory=list)
    can_filter: List[str] = field(default_factory=list)
    parent: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PageMeta":
        data = data or {}
        next_info = data.get("next") or {}
        prev_info = data.get("prev") or {}
        return cls(
            total_count=data.get("total_count"),
            count=data.get("count"),
            next_offset=next_info.get("offset") if isinstance(next_info, dict) else None,
            prev_offset=prev_info.get("offset") if isinstance(prev_info, dict) else None,
            can_order_by=list(data.get("can_order_by") or []),
            can_query_by=list(data.get("can_query_by") or []),
            can_include=list(data.get("can_include") or []),
            can_filter=list(data.get("can_filter") or []),
            parent=data.get("parent"),
        )


@dataclass
class PageLinks:
    """Navigation links of a page."""

    self: Optional[str] = None
    first: Optional[str] = None
    prev: Optional[str] = None
    next: Optional[str] = None
    last: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PageLinks":
        data = data or {}
        return cls(
            self=data.get("self"),
            first=data.get("first"),
            prev=data.get("prev") or data.get("previous"),
            next=data.get("next"),
            last=data.get("last"),
        )


@dataclass
class Page(Generic[T]):
    """
    A bounded batch of items plus the cursor to the next batch.

    ``next`` is None on the terminal page.
    """

    items: List[T] = field(default_factory=list)
    links: PageLinks = field(default_factory=PageLinks)
    meta: PageMeta = field(default_factory=PageMeta)
    included: List[JsonApiResource] = field(default_factory=list)

    @property
    def next(self) -> Optional[str]:
        """Cursor of the next page, or None when this is the last page."""
        return self.links.next

    @property
    def has_next_page(self) -> bool:
        return self.links.next is not None

    @property
    def total_count(self) -> Optional[int]:
        return self.meta.total_count

    def __len__(self) -> int:
        return len(self.items)

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        """Return a page with every item converted by ``func``."""
        return Page(
            items=[func(item) for item in self.items],
            links=self.links,
            meta=self.meta,
            included=self.included,
        )

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Page[JsonApiResource]":
        """
        Parse a JSON:API list document.

        A document whose ``data`` is a single object is treated as a page
        of one item.

        Args:
            document: Decoded response body

        Returns:
            Page of JsonApiResource
        """
        data = document.get("data")
        if data is None:
            raw_items: List[Dict[str, Any]] = []
        elif isinstance(data, list):
            raw_items = data
        else:
            raw_items = [data]

        return cls(
            items=[JsonApiResource.from_dict(item) for item in raw_items],
            links=PageLinks.from_dict(document.get("links")),
            meta=PageMeta.from_dict(document.get("meta")),
            included=[JsonApiResource.from_dict(item) for item in document.get("included") or []],
        )


def parse_resource(document: Dict[str, Any]) -> Optional[JsonApiResource]:
    """Parse the single resource of a JSON:API document, or None when empty."""
    data = document.get("data")
    if isinstance(data, list):
        data = data[0] if data else None
    if not isinstance(data, dict):
        return None
    return JsonApiResource.from_dict(data)


def build_document(
    resource_type: str,
    attributes: Dict[str, Any],
    resource_id: Optional[str] = None,
    relationships: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a JSON:API request body.

    Args:
        resource_type: JSON:API type name, e.g. ``Person``
        attributes: Attribute values; None values are dropped
        resource_id: Id for update requests
        relationships: Optional ``{name: (type, id)}`` or raw relationship objects

    Returns:
        Request document ``{"data": {...}}``
    """
    data: Dict[str, Any] = {
        "type": resource_type,
        "attributes": {k: v for k, v in attributes.items() if v is not None},
    }
    if resource_id is not None:
        data["id"] = resource_id
    if relationships:
        rels: Dict[str, Any] = {}
        for name, value in relationships.items():
            if isinstance(value, tuple):
                rel_type, rel_id = value
                if rel_id is None:
                    continue
                rels[name] = {"data": {"type": rel_type, "id": rel_id}}
            else:
                rels[name] = value
        if rels:
            data["relationships"] = rels
    return {"data": data}
