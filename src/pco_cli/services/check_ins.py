"""
Check-Ins service (``/check_ins/v2``).
"""

from typing import AsyncIterator, List, Optional

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.check_ins import CheckIn, CheckInEvent, CheckInRequest
from .base import ServiceBase


class CheckInsService(ServiceBase):
    base_path = "/check_ins/v2"

    async def get_check_in(self, check_in_id: str, params: Optional[QueryParameters] = None) -> Optional[CheckIn]:
        check_in_id = self._require_id(check_in_id, "check_in_id")
        return await self._get(self._path("check_ins", check_in_id), CheckIn.from_resource, params)

    async def list_check_ins(self, params: Optional[QueryParameters] = None) -> Page[CheckIn]:
        return await self._list(self._path("check_ins"), CheckIn.from_resource, params)

    async def get_all_check_ins(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[CheckIn]:
        return await self._get_all(self._path("check_ins"), CheckIn.from_resource, params, options)

    def stream_check_ins(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[CheckIn]:
        return self._stream(self._path("check_ins"), CheckIn.from_resource, params, options)

    async def create_check_in(self, request: CheckInRequest) -> CheckIn:
        return await self._create(self._path("check_ins"), "CheckIn", request, CheckIn.from_resource)

    async def update_check_in(self, check_in_id: str, request: CheckInRequest) -> CheckIn:
        check_in_id = self._require_id(check_in_id, "check_in_id")
        return await self._update(
            self._path("check_ins", check_in_id), "CheckIn", check_in_id, request, CheckIn.from_resource
        )

    async def check_out(self, check_in_id: str) -> Optional[CheckIn]:
        """Check a person out. Returns the updated check-in when the API sends one back."""
        check_in_id = self._require_id(check_in_id, "check_in_id")
        return await self._action(self._path("check_ins", check_in_id, "check_out"), CheckIn.from_resource, {})

    # Events

    async def get_event(self, event_id: str) -> Optional[CheckInEvent]:
        event_id = self._require_id(event_id, "event_id")
        return await self._get(self._path("events", event_id), CheckInEvent.from_resource)

    async def list_events(self, params: Optional[QueryParameters] = None) -> Page[CheckInEvent]:
        return await self._list(self._path("events"), CheckInEvent.from_resource, params)

    async def list_event_check_ins(
        self, event_id: str, params: Optional[QueryParameters] = None
    ) -> Page[CheckIn]:
        event_id = self._require_id(event_id, "event_id")
        return await self._list(self._path("events", event_id, "check_ins"), CheckIn.from_resource, params)
