"""
Base class for module services.

A service is a thin layer over ApiConnection that knows the paths of one
Planning Center product and maps JSON:API resources to domain records.
"""

import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, TypeVar

from ..core.client.connection import ApiConnection
from ..core.client.errors import NotFoundError, PlanningCenterError
from ..core.jsonapi import JsonApiResource, Page, build_document, parse_resource
from ..core.pagination import fetch_all, stream
from ..core.query import PaginationOptions, QueryParameters
from ..models.base import RequestModel

logger = logging.getLogger(__name__)

T = TypeVar("T")

Mapper = Callable[[JsonApiResource], T]


class ServiceBase:
    """Shared request helpers for module services."""

    #: Path prefix of the product API, e.g. ``/people/v2``
    base_path = ""

    def __init__(self, connection: ApiConnection):
        self.connection = connection

    def _path(self, *parts: str) -> str:
        return "/".join([self.base_path.rstrip("/")] + [str(part).strip("/") for part in parts])

    @staticmethod
    def _require_id(value: Optional[str], name: str = "id") -> str:
        if value is None or not str(value).strip():
            raise ValueError(f"{name} must not be empty")
        return str(value).strip()

    async def _get(
        self,
        path: str,
        mapper: Mapper,
        params: Optional[QueryParameters] = None,
    ) -> Optional[T]:
        """Fetch a single resource; None when the API answers 404."""
        try:
            document = await self.connection.get(path, params)
        except NotFoundError:
            logger.debug(f"Resource not found: {path}")
            return None
        resource = parse_resource(document)
        return mapper(resource) if resource is not None else None

    async def _list(
        self,
        path: str,
        mapper: Mapper,
        params: Optional[QueryParameters] = None,
    ) -> Page[T]:
        """Fetch one page."""
        page = await self.connection.get_page(path, params)
        return page.map(mapper)

    def _start_cursor(
        self,
        path: str,
        params: Optional[QueryParameters],
        options: Optional[PaginationOptions],
    ) -> str:
        query = params.clone() if params is not None else QueryParameters()
        if query.per_page is None:
            query.per_page = (options or PaginationOptions()).page_size
        return query.apply_to(path)

    def _fetch_page(self, mapper: Mapper) -> Callable[[str], Any]:
        async def fetch(cursor: str) -> Page[T]:
            page = await self.connection.get_page(cursor)
            return page.map(mapper)

        return fetch

    async def _get_all(
        self,
        path: str,
        mapper: Mapper,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[T]:
        """Fetch every page and return all records."""
        options = options or PaginationOptions()
        return await fetch_all(
            self._fetch_page(mapper),
            self._start_cursor(path, params, options),
            max_items=options.max_items,
            delay_between_pages=options.delay_between_pages,
        )

    def _stream(
        self,
        path: str,
        mapper: Mapper,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[T]:
        """Lazily iterate records across pages."""
        options = options or PaginationOptions()
        return stream(
            self._fetch_page(mapper),
            self._start_cursor(path, params, options),
            max_items=options.max_items,
            delay_between_pages=options.delay_between_pages,
        )

    async def _create(
        self,
        path: str,
        resource_type: str,
        request: RequestModel,
        mapper: Mapper,
        included: Optional[List[Dict[str, Any]]] = None,
    ) -> T:
        body = build_document(resource_type, request.to_attributes(), relationships=request.to_relationships())
        if included:
            body["included"] = included
        document = await self.connection.post(path, body)
        return self._expect_resource(document, mapper, path)

    async def _update(
        self,
        path: str,
        resource_type: str,
        resource_id: str,
        request: RequestModel,
        mapper: Mapper,
    ) -> T:
        body = build_document(
            resource_type,
            request.to_attributes(),
            resource_id=resource_id,
            relationships=request.to_relationships(),
        )
        document = await self.connection.patch(path, body)
        return self._expect_resource(document, mapper, path)

    async def _delete(self, path: str) -> None:
        await self.connection.delete(path)

    async def _action(
        self,
        path: str,
        mapper: Optional[Mapper] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Optional[T]:
        """POST to an action endpoint such as ``/commit`` or ``/publish``."""
        document = await self.connection.post(path, body)
        if mapper is None:
            return None
        resource = parse_resource(document)
        return mapper(resource) if resource is not None else None

    @staticmethod
    def _expect_resource(document: Dict[str, Any], mapper: Mapper, path: str) -> T:
        resource = parse_resource(document)
        if resource is None:
            raise PlanningCenterError(
                f"Response from {path} did not contain a resource",
                code="INVALID_RESPONSE",
                response_body=str(document),
            )
        return mapper(resource)
