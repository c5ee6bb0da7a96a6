"""
Calendar service (``/calendar/v2``).
"""

from datetime import date, datetime
from typing import AsyncIterator, List, Optional, Union

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.calendar import CalendarResource, Event, EventRequest, ResourceRequest
from .base import ServiceBase


def _as_date(value: Union[date, datetime, str]) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value if isinstance(value, str) else value.isoformat()


class CalendarService(ServiceBase):
    """Events and bookable resources."""

    base_path = "/calendar/v2"

    async def get_event(self, event_id: str, params: Optional[QueryParameters] = None) -> Optional[Event]:
        event_id = self._require_id(event_id, "event_id")
        return await self._get(self._path("events", event_id), Event.from_resource, params)

    async def list_events(self, params: Optional[QueryParameters] = None) -> Page[Event]:
        return await self._list(self._path("events"), Event.from_resource, params)

    async def list_events_by_date_range(
        self,
        start: Union[date, datetime, str],
        end: Union[date, datetime, str],
        params: Optional[QueryParameters] = None,
    ) -> Page[Event]:
        """
        List events with instances between two dates.

        Args:
            start: Earliest start (inclusive)
            end: Latest start (inclusive)
            params: Additional query parameters

        Raises:
            ValueError: If ``end`` is before ``start``
        """
        start_date, end_date = _as_date(start), _as_date(end)
        if end_date < start_date:
            raise ValueError("end must not be before start")
        query = params.clone() if params is not None else QueryParameters()
        query.where["starts_at"] = f"{start_date}..{end_date}"
        return await self._list(self._path("events"), Event.from_resource, query)

    async def get_all_events(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[Event]:
        return await self._get_all(self._path("events"), Event.from_resource, params, options)

    def stream_events(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[Event]:
        return self._stream(self._path("events"), Event.from_resource, params, options)

    async def create_event(self, request: EventRequest) -> Event:
        return await self._create(self._path("events"), "Event", request, Event.from_resource)

    async def update_event(self, event_id: str, request: EventRequest) -> Event:
        event_id = self._require_id(event_id, "event_id")
        return await self._update(self._path("events", event_id), "Event", event_id, request, Event.from_resource)

    async def delete_event(self, event_id: str) -> None:
        event_id = self._require_id(event_id, "event_id")
        await self._delete(self._path("events", event_id))

    # Resources

    async def get_resource(self, resource_id: str) -> Optional[CalendarResource]:
        resource_id = self._require_id(resource_id, "resource_id")
        return await self._get(self._path("resources", resource_id), CalendarResource.from_resource)

    async def list_resources(self, params: Optional[QueryParameters] = None) -> Page[CalendarResource]:
        return await self._list(self._path("resources"), CalendarResource.from_resource, params)

    async def create_resource(self, request: ResourceRequest) -> CalendarResource:
        return await self._create(self._path("resources"), "Resource", request, CalendarResource.from_resource)

    async def update_resource(self, resource_id: str, request: ResourceRequest) -> CalendarResource:
        resource_id = self._require_id(resource_id, "resource_id")
        return await self._update(
            self._path("resources", resource_id), "Resource", resource_id, request, CalendarResource.from_resource
        )

    async def delete_resource(self, resource_id: str) -> None:
        resource_id = self._require_id(resource_id, "resource_id")
        await self._delete(self._path("resources", resource_id))
