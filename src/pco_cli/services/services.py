"""
Services service (``/services/v2``): service types, plans, items and songs.
"""

from typing import AsyncIterator, List, Optional

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.services import Item, ItemRequest, Plan, PlanRequest, ServiceType, Song, SongRequest
from .base import ServiceBase


class ServicesService(ServiceBase):
    base_path = "/services/v2"

    # Plans

    async def get_plan(self, plan_id: str, params: Optional[QueryParameters] = None) -> Optional[Plan]:
        plan_id = self._require_id(plan_id, "plan_id")
        return await self._get(self._path("plans", plan_id), Plan.from_resource, params)

    async def list_plans(self, params: Optional[QueryParameters] = None) -> Page[Plan]:
        return await self._list(self._path("plans"), Plan.from_resource, params)

    async def get_all_plans(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[Plan]:
        return await self._get_all(self._path("plans"), Plan.from_resource, params, options)

    def stream_plans(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[Plan]:
        return self._stream(self._path("plans"), Plan.from_resource, params, options)

    async def create_plan(self, request: PlanRequest) -> Plan:
        return await self._create(self._path("plans"), "Plan", request, Plan.from_resource)

    async def update_plan(self, plan_id: str, request: PlanRequest) -> Plan:
        plan_id = self._require_id(plan_id, "plan_id")
        return await self._update(self._path("plans", plan_id), "Plan", plan_id, request, Plan.from_resource)

    async def delete_plan(self, plan_id: str) -> None:
        plan_id = self._require_id(plan_id, "plan_id")
        await self._delete(self._path("plans", plan_id))

    # Service types

    async def get_service_type(self, service_type_id: str) -> Optional[ServiceType]:
        service_type_id = self._require_id(service_type_id, "service_type_id")
        return await self._get(self._path("service_types", service_type_id), ServiceType.from_resource)

    async def list_service_types(self, params: Optional[QueryParameters] = None) -> Page[ServiceType]:
        return await self._list(self._path("service_types"), ServiceType.from_resource, params)

    # Plan items

    async def list_plan_items(self, plan_id: str, params: Optional[QueryParameters] = None) -> Page[Item]:
        plan_id = self._require_id(plan_id, "plan_id")
        return await self._list(self._path("plans", plan_id, "items"), Item.from_resource, params)

    async def get_plan_item(self, plan_id: str, item_id: str) -> Optional[Item]:
        plan_id = self._require_id(plan_id, "plan_id")
        item_id = self._require_id(item_id, "item_id")
        return await self._get(self._path("plans", plan_id, "items", item_id), Item.from_resource)

    async def create_plan_item(self, plan_id: str, request: ItemRequest) -> Item:
        plan_id = self._require_id(plan_id, "plan_id")
        return await self._create(self._path("plans", plan_id, "items"), "Item", request, Item.from_resource)

    async def update_plan_item(self, plan_id: str, item_id: str, request: ItemRequest) -> Item:
        plan_id = self._require_id(plan_id, "plan_id")
        item_id = self._require_id(item_id, "item_id")
        return await self._update(
            self._path("plans", plan_id, "items", item_id), "Item", item_id, request, Item.from_resource
        )

    async def delete_plan_item(self, plan_id: str, item_id: str) -> None:
        plan_id = self._require_id(plan_id, "plan_id")
        item_id = self._require_id(item_id, "item_id")
        await self._delete(self._path("plans", plan_id, "items", item_id))

    # Songs

    async def get_song(self, song_id: str) -> Optional[Song]:
        song_id = self._require_id(song_id, "song_id")
        return await self._get(self._path("songs", song_id), Song.from_resource)

    async def list_songs(self, params: Optional[QueryParameters] = None) -> Page[Song]:
        return await self._list(self._path("songs"), Song.from_resource, params)

    async def create_song(self, request: SongRequest) -> Song:
        return await self._create(self._path("songs"), "Song", request, Song.from_resource)

    async def update_song(self, song_id: str, request: SongRequest) -> Song:
        song_id = self._require_id(song_id, "song_id")
        return await self._update(self._path("songs", song_id), "Song", song_id, request, Song.from_resource)

    async def delete_song(self, song_id: str) -> None:
        song_id = self._require_id(song_id, "song_id")
        await self._delete(self._path("songs", song_id))
