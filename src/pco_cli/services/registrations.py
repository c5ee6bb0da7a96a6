"""
Registrations service (``/registrations/v2``).
"""

from typing import AsyncIterator, List, Optional

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.registrations import (
    Attendee,
    AttendeeRequest,
    Category,
    Registration,
    RegistrationCampus,
    SelectionType,
    Signup,
    SignupRequest,
    SignupTime,
)
from .base import ServiceBase


class RegistrationsService(ServiceBase):
    """Signups with their registrations, attendees, selection types and times."""

    base_path = "/registrations/v2"

    # Signups

    async def get_signup(self, signup_id: str, params: Optional[QueryParameters] = None) -> Optional[Signup]:
        signup_id = self._require_id(signup_id, "signup_id")
        return await self._get(self._path("signups", signup_id), Signup.from_resource, params)

    async def list_signups(self, params: Optional[QueryParameters] = None) -> Page[Signup]:
        return await self._list(self._path("signups"), Signup.from_resource, params)

    async def get_all_signups(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[Signup]:
        return await self._get_all(self._path("signups"), Signup.from_resource, params, options)

    def stream_signups(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[Signup]:
        return self._stream(self._path("signups"), Signup.from_resource, params, options)

    async def create_signup(self, request: SignupRequest) -> Signup:
        return await self._create(self._path("signups"), "Signup", request, Signup.from_resource)

    async def update_signup(self, signup_id: str, request: SignupRequest) -> Signup:
        signup_id = self._require_id(signup_id, "signup_id")
        return await self._update(self._path("signups", signup_id), "Signup", signup_id, request, Signup.from_resource)

    async def delete_signup(self, signup_id: str) -> None:
        signup_id = self._require_id(signup_id, "signup_id")
        await self._delete(self._path("signups", signup_id))

    # Registrations

    async def get_registration(self, registration_id: str) -> Optional[Registration]:
        registration_id = self._require_id(registration_id, "registration_id")
        return await self._get(self._path("registrations", registration_id), Registration.from_resource)

    async def list_registrations(
        self, signup_id: str, params: Optional[QueryParameters] = None
    ) -> Page[Registration]:
        signup_id = self._require_id(signup_id, "signup_id")
        return await self._list(self._path("signups", signup_id, "registrations"), Registration.from_resource, params)

    # Attendees

    async def list_attendees(self, signup_id: str, params: Optional[QueryParameters] = None) -> Page[Attendee]:
        signup_id = self._require_id(signup_id, "signup_id")
        return await self._list(self._path("signups", signup_id, "attendees"), Attendee.from_resource, params)

    async def get_attendee(self, attendee_id: str) -> Optional[Attendee]:
        attendee_id = self._require_id(attendee_id, "attendee_id")
        return await self._get(self._path("attendees", attendee_id), Attendee.from_resource)

    async def add_attendee(self, signup_id: str, request: AttendeeRequest) -> Attendee:
        signup_id = self._require_id(signup_id, "signup_id")
        return await self._create(
            self._path("signups", signup_id, "attendees"), "Attendee", request, Attendee.from_resource
        )

    async def update_attendee(self, attendee_id: str, request: AttendeeRequest) -> Attendee:
        attendee_id = self._require_id(attendee_id, "attendee_id")
        return await self._update(
            self._path("attendees", attendee_id), "Attendee", attendee_id, request, Attendee.from_resource
        )

    async def delete_attendee(self, attendee_id: str) -> None:
        attendee_id = self._require_id(attendee_id, "attendee_id")
        await self._delete(self._path("attendees", attendee_id))

    async def promote_from_waitlist(self, attendee_id: str) -> Optional[Attendee]:
        attendee_id = self._require_id(attendee_id, "attendee_id")
        return await self._action(self._path("attendees", attendee_id, "promote_from_waitlist"), Attendee.from_resource)

    async def remove_from_waitlist(self, attendee_id: str) -> Optional[Attendee]:
        attendee_id = self._require_id(attendee_id, "attendee_id")
        return await self._action(self._path("attendees", attendee_id, "remove_from_waitlist"), Attendee.from_resource)

    # Selection types

    async def list_selection_types(
        self, signup_id: str, params: Optional[QueryParameters] = None
    ) -> Page[SelectionType]:
        signup_id = self._require_id(signup_id, "signup_id")
        return await self._list(
            self._path("signups", signup_id, "selection_types"), SelectionType.from_resource, params
        )

    async def get_selection_type(self, selection_type_id: str) -> Optional[SelectionType]:
        selection_type_id = self._require_id(selection_type_id, "selection_type_id")
        return await self._get(self._path("selection_types", selection_type_id), SelectionType.from_resource)

    # Signup times

    async def list_signup_times(
        self, signup_id: str, params: Optional[QueryParameters] = None
    ) -> Page[SignupTime]:
        signup_id = self._require_id(signup_id, "signup_id")
        return await self._list(self._path("signups", signup_id, "signup_times"), SignupTime.from_resource, params)

    async def get_signup_time(self, signup_time_id: str) -> Optional[SignupTime]:
        signup_time_id = self._require_id(signup_time_id, "signup_time_id")
        return await self._get(self._path("signup_times", signup_time_id), SignupTime.from_resource)

    # Categories and campuses

    async def list_categories(self, params: Optional[QueryParameters] = None) -> Page[Category]:
        return await self._list(self._path("categories"), Category.from_resource, params)

    async def get_category(self, category_id: str) -> Optional[Category]:
        category_id = self._require_id(category_id, "category_id")
        return await self._get(self._path("categories", category_id), Category.from_resource)

    async def list_campuses(self, params: Optional[QueryParameters] = None) -> Page[RegistrationCampus]:
        return await self._list(self._path("campuses"), RegistrationCampus.from_resource, params)

    async def get_campus(self, campus_id: str) -> Optional[RegistrationCampus]:
        campus_id = self._require_id(campus_id, "campus_id")
        return await self._get(self._path("campuses", campus_id), RegistrationCampus.from_resource)
