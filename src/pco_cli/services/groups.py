"""
Groups service (``/groups/v2``).
"""

from typing import AsyncIterator, List, Optional

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.groups import Group, GroupRequest, GroupType, Membership, MembershipRequest
from .base import ServiceBase


class GroupsService(ServiceBase):
    base_path = "/groups/v2"

    async def get_group(self, group_id: str, params: Optional[QueryParameters] = None) -> Optional[Group]:
        group_id = self._require_id(group_id, "group_id")
        return await self._get(self._path("groups", group_id), Group.from_resource, params)

    async def list_groups(self, params: Optional[QueryParameters] = None) -> Page[Group]:
        return await self._list(self._path("groups"), Group.from_resource, params)

    async def get_all_groups(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[Group]:
        return await self._get_all(self._path("groups"), Group.from_resource, params, options)

    def stream_groups(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[Group]:
        return self._stream(self._path("groups"), Group.from_resource, params, options)

    async def create_group(self, request: GroupRequest) -> Group:
        return await self._create(self._path("groups"), "Group", request, Group.from_resource)

    async def update_group(self, group_id: str, request: GroupRequest) -> Group:
        group_id = self._require_id(group_id, "group_id")
        return await self._update(self._path("groups", group_id), "Group", group_id, request, Group.from_resource)

    async def delete_group(self, group_id: str) -> None:
        group_id = self._require_id(group_id, "group_id")
        await self._delete(self._path("groups", group_id))

    # Group types

    async def get_group_type(self, group_type_id: str) -> Optional[GroupType]:
        group_type_id = self._require_id(group_type_id, "group_type_id")
        return await self._get(self._path("group_types", group_type_id), GroupType.from_resource)

    async def list_group_types(self, params: Optional[QueryParameters] = None) -> Page[GroupType]:
        return await self._list(self._path("group_types"), GroupType.from_resource, params)

    # Memberships

    async def list_memberships(self, group_id: str, params: Optional[QueryParameters] = None) -> Page[Membership]:
        group_id = self._require_id(group_id, "group_id")
        return await self._list(self._path("groups", group_id, "memberships"), Membership.from_resource, params)

    async def get_membership(self, group_id: str, membership_id: str) -> Optional[Membership]:
        group_id = self._require_id(group_id, "group_id")
        membership_id = self._require_id(membership_id, "membership_id")
        return await self._get(self._path("groups", group_id, "memberships", membership_id), Membership.from_resource)

    async def create_membership(self, group_id: str, request: MembershipRequest) -> Membership:
        group_id = self._require_id(group_id, "group_id")
        return await self._create(
            self._path("groups", group_id, "memberships"), "Membership", request, Membership.from_resource
        )

    async def update_membership(self, group_id: str, membership_id: str, request: MembershipRequest) -> Membership:
        group_id = self._require_id(group_id, "group_id")
        membership_id = self._require_id(membership_id, "membership_id")
        return await self._update(
            self._path("groups", group_id, "memberships", membership_id),
            "Membership",
            membership_id,
            request,
            Membership.from_resource,
        )

    async def delete_membership(self, group_id: str, membership_id: str) -> None:
        group_id = self._require_id(group_id, "group_id")
        membership_id = self._require_id(membership_id, "membership_id")
        await self._delete(self._path("groups", group_id, "memberships", membership_id))
