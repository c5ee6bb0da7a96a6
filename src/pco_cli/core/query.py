"""
Query parameters and pagination options for list requests.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlencode

MAX_PER_PAGE = 100


@dataclass
class QueryParameters:
    """
    Filtering, includes, sorting and paging for a list request.

    Serializes to ``where[key]=value&include=a,b&order=x&per_page=n&offset=m``.
    """

    where: Dict[str, str] = field(default_factory=dict)
    include: List[str] = field(default_factory=list)
    order: Optional[str] = None
    per_page: Optional[int] = None
    offset: Optional[int] = None

    def __post_init__(self):
        if self.per_page is not None and not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {self.per_page}")
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")

    def clone(self) -> "QueryParameters":
        return QueryParameters(
            where=dict(self.where),
            include=list(self.include),
            order=self.order,
            per_page=self.per_page,
            offset=self.offset,
        )

    def to_params(self) -> List[Tuple[str, str]]:
        """Return the parameters as ordered query pairs."""
        params: List[Tuple[str, str]] = []
        for key, value in self.where.items():
            params.append((f"where[{key}]", str(value)))
        if self.include:
            params.append(("include", ",".join(self.include)))
        if self.order:
            params.append(("order", self.order))
        if self.per_page is not None:
            params.append(("per_page", str(self.per_page)))
        if self.offset is not None:
            params.append(("offset", str(self.offset)))
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_params())

    def apply_to(self, path: str) -> str:
        """Append the query string to ``path``."""
        query = self.to_query_string()
        if not query:
            return path
        separator = "&" if "?" in path else "?"
        return f"{path}{separator}{query}"

    @classmethod
    def for_page(cls, page: int, page_size: int, **kwargs) -> "QueryParameters":
        """Build parameters for a 1-based page number."""
        if page < 1:
            raise ValueError(f"page must be 1 or greater, got {page}")
        return cls(per_page=page_size, offset=(page - 1) * page_size, **kwargs)


def parse_where(text: Optional[str]) -> Dict[str, str]:
    """
    Parse ``"key=value,key2=value2"`` into a where-condition dict.

    Surrounding quotes on values are stripped and empty pairs are skipped.

    Raises:
        ValueError: If a pair has no ``=`` or an empty key
    """
    conditions: Dict[str, str] = {}
    if not text:
        return conditions

    for pair in text.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            raise ValueError(f"Invalid where condition '{pair}'. Expected key=value")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid where condition '{pair}'. Key is empty")
        conditions[key] = value.strip().strip("'\"")
    return conditions


def parse_list(text: Optional[str]) -> List[str]:
    """Split a comma separated option value, dropping blanks."""
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


@dataclass
class PaginationOptions:
    """Options for walking every page of a list endpoint."""

    page_size: int = 25
    max_items: Optional[int] = None
    delay_between_pages: float = 0.0  # seconds

    def __post_init__(self):
        if not 1 <= self.page_size <= MAX_PER_PAGE:
            raise ValueError(f"page_size must be between 1 and {MAX_PER_PAGE}, got {self.page_size}")
        if self.max_items is not None and self.max_items < 0:
            raise ValueError("max_items must be non-negative")
        if self.delay_between_pages < 0:
            raise ValueError("delay_between_pages must be non-negative")

    @classmethod
    def for_memory_efficiency(cls) -> "PaginationOptions":
        return cls(page_size=25, delay_between_pages=0.1)

    @classmethod
    def for_speed(cls) -> "PaginationOptions":
        return cls(page_size=100)

    @classmethod
    def for_large_datasets(cls, max_items: Optional[int] = None) -> "PaginationOptions":
        return cls(page_size=100, max_items=max_items, delay_between_pages=0.05)
