"""
People service (``/people/v2``).
"""

from typing import AsyncIterator, List, Optional

from ..core.jsonapi import Page
from ..core.query import MAX_PER_PAGE, PaginationOptions, QueryParameters
from ..models.people import (
    Address,
    AddressRequest,
    Campus,
    Email,
    EmailRequest,
    FieldDatum,
    Form,
    FormSubmission,
    FormSubmitRequest,
    Household,
    HouseholdRequest,
    ListMember,
    ListMemberCreateRequest,
    PeopleList,
    PeopleListCreateRequest,
    PeopleListUpdateRequest,
    Person,
    PersonCreateRequest,
    PersonUpdateRequest,
    PhoneNumber,
    PhoneNumberRequest,
    Workflow,
    WorkflowCard,
    WorkflowCardRequest,
)
from .base import ServiceBase


class PeopleService(ServiceBase):
    """People, their contact details, households, workflows, forms and lists."""

    base_path = "/people/v2"

    # People

    async def get_person(self, person_id: str, params: Optional[QueryParameters] = None) -> Optional[Person]:
        """
        Get a person by id.

        Args:
            person_id: Person id
            params: Optional includes

        Returns:
            The person, or None if no person has this id
        """
        person_id = self._require_id(person_id, "person_id")
        return await self._get(self._path("people", person_id), Person.from_resource, params)

    async def get_me(self) -> Optional[Person]:
        """Get the person the credentials belong to."""
        return await self._get(self._path("me"), Person.from_resource)

    async def list_people(self, params: Optional[QueryParameters] = None) -> Page[Person]:
        return await self._list(self._path("people"), Person.from_resource, params)

    async def get_all_people(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[Person]:
        return await self._get_all(self._path("people"), Person.from_resource, params, options)

    def stream_people(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[Person]:
        return self._stream(self._path("people"), Person.from_resource, params, options)

    async def create_person(self, request: PersonCreateRequest) -> Person:
        return await self._create(self._path("people"), "Person", request, Person.from_resource)

    async def update_person(self, person_id: str, request: PersonUpdateRequest) -> Person:
        person_id = self._require_id(person_id, "person_id")
        return await self._update(self._path("people", person_id), "Person", person_id, request, Person.from_resource)

    async def delete_person(self, person_id: str) -> None:
        person_id = self._require_id(person_id, "person_id")
        await self._delete(self._path("people", person_id))

    async def search_people(
        self, query: str, limit: int = 25, params: Optional[QueryParameters] = None
    ) -> Page[Person]:
        """
        Search people by name or email address.

        Args:
            query: Text matched against names and email addresses
            limit: Maximum number of results (1-100)
            params: Extra filters or includes

        Returns:
            One page of matching people

        Raises:
            ValueError: If the query is blank or the limit is out of range
        """
        if not query or not query.strip():
            raise ValueError("query must not be empty")
        if not 1 <= limit <= MAX_PER_PAGE:
            raise ValueError(f"limit must be between 1 and {MAX_PER_PAGE}, got {limit}")
        search = params.clone() if params is not None else QueryParameters()
        search.where["search_name_or_email"] = query.strip()
        search.per_page = limit
        return await self._list(self._path("people"), Person.from_resource, search)

    async def list_field_data(self, person_id: str, params: Optional[QueryParameters] = None) -> Page[FieldDatum]:
        """List the custom field values on a person's profile."""
        person_id = self._require_id(person_id, "person_id")
        return await self._list(self._path("people", person_id, "field_data"), FieldDatum.from_resource, params)

    # Emails

    async def list_emails(self, person_id: str, params: Optional[QueryParameters] = None) -> Page[Email]:
        person_id = self._require_id(person_id, "person_id")
        return await self._list(self._path("people", person_id, "emails"), Email.from_resource, params)

    async def add_email(self, person_id: str, request: EmailRequest) -> Email:
        person_id = self._require_id(person_id, "person_id")
        return await self._create(self._path("people", person_id, "emails"), "Email", request, Email.from_resource)

    async def update_email(self, person_id: str, email_id: str, request: EmailRequest) -> Email:
        person_id = self._require_id(person_id, "person_id")
        email_id = self._require_id(email_id, "email_id")
        return await self._update(
            self._path("people", person_id, "emails", email_id), "Email", email_id, request, Email.from_resource
        )

    async def delete_email(self, person_id: str, email_id: str) -> None:
        person_id = self._require_id(person_id, "person_id")
        email_id = self._require_id(email_id, "email_id")
        await self._delete(self._path("people", person_id, "emails", email_id))

    # Addresses

    async def list_addresses(self, person_id: str, params: Optional[QueryParameters] = None) -> Page[Address]:
        person_id = self._require_id(person_id, "person_id")
        return await self._list(self._path("people", person_id, "addresses"), Address.from_resource, params)

    async def add_address(self, person_id: str, request: AddressRequest) -> Address:
        person_id = self._require_id(person_id, "person_id")
        return await self._create(
            self._path("people", person_id, "addresses"), "Address", request, Address.from_resource
        )

    async def update_address(self, person_id: str, address_id: str, request: AddressRequest) -> Address:
        person_id = self._require_id(person_id, "person_id")
        address_id = self._require_id(address_id, "address_id")
        return await self._update(
            self._path("people", person_id, "addresses", address_id),
            "Address",
            address_id,
            request,
            Address.from_resource,
        )

    async def delete_address(self, person_id: str, address_id: str) -> None:
        person_id = self._require_id(person_id, "person_id")
        address_id = self._require_id(address_id, "address_id")
        await self._delete(self._path("people", person_id, "addresses", address_id))

    # Phone numbers

    async def list_phone_numbers(
        self, person_id: str, params: Optional[QueryParameters] = None
    ) -> Page[PhoneNumber]:
        person_id = self._require_id(person_id, "person_id")
        return await self._list(
            self._path("people", person_id, "phone_numbers"), PhoneNumber.from_resource, params
        )

    async def add_phone_number(self, person_id: str, request: PhoneNumberRequest) -> PhoneNumber:
        person_id = self._require_id(person_id, "person_id")
        return await self._create(
            self._path("people", person_id, "phone_numbers"), "PhoneNumber", request, PhoneNumber.from_resource
        )

    async def update_phone_number(
        self, person_id: str, phone_number_id: str, request: PhoneNumberRequest
    ) -> PhoneNumber:
        person_id = self._require_id(person_id, "person_id")
        phone_number_id = self._require_id(phone_number_id, "phone_number_id")
        return await self._update(
            self._path("people", person_id, "phone_numbers", phone_number_id),
            "PhoneNumber",
            phone_number_id,
            request,
            PhoneNumber.from_resource,
        )

    async def delete_phone_number(self, person_id: str, phone_number_id: str) -> None:
        person_id = self._require_id(person_id, "person_id")
        phone_number_id = self._require_id(phone_number_id, "phone_number_id")
        await self._delete(self._path("people", person_id, "phone_numbers", phone_number_id))

    # Households

    async def get_household(self, household_id: str) -> Optional[Household]:
        household_id = self._require_id(household_id, "household_id")
        return await self._get(self._path("households", household_id), Household.from_resource)

    async def list_households(self, params: Optional[QueryParameters] = None) -> Page[Household]:
        return await self._list(self._path("households"), Household.from_resource, params)

    async def create_household(self, request: HouseholdRequest) -> Household:
        return await self._create(self._path("households"), "Household", request, Household.from_resource)

    async def update_household(self, household_id: str, request: HouseholdRequest) -> Household:
        household_id = self._require_id(household_id, "household_id")
        return await self._update(
            self._path("households", household_id), "Household", household_id, request, Household.from_resource
        )

    async def list_people_in_household(
        self, household_id: str, params: Optional[QueryParameters] = None
    ) -> Page[Person]:
        household_id = self._require_id(household_id, "household_id")
        return await self._list(self._path("households", household_id, "people"), Person.from_resource, params)

    # Workflows

    async def get_workflow(self, workflow_id: str) -> Optional[Workflow]:
        workflow_id = self._require_id(workflow_id, "workflow_id")
        return await self._get(self._path("workflows", workflow_id), Workflow.from_resource)

    async def list_workflows(self, params: Optional[QueryParameters] = None) -> Page[Workflow]:
        return await self._list(self._path("workflows"), Workflow.from_resource, params)

    async def list_workflow_cards(
        self, workflow_id: str, params: Optional[QueryParameters] = None
    ) -> Page[WorkflowCard]:
        workflow_id = self._require_id(workflow_id, "workflow_id")
        return await self._list(self._path("workflows", workflow_id, "cards"), WorkflowCard.from_resource, params)

    async def get_workflow_card(self, workflow_id: str, card_id: str) -> Optional[WorkflowCard]:
        workflow_id = self._require_id(workflow_id, "workflow_id")
        card_id = self._require_id(card_id, "card_id")
        return await self._get(self._path("workflows", workflow_id, "cards", card_id), WorkflowCard.from_resource)

    async def create_workflow_card(self, workflow_id: str, request: WorkflowCardRequest) -> WorkflowCard:
        workflow_id = self._require_id(workflow_id, "workflow_id")
        return await self._create(
            self._path("workflows", workflow_id, "cards"), "WorkflowCard", request, WorkflowCard.from_resource
        )

    async def update_workflow_card(
        self, workflow_id: str, card_id: str, request: WorkflowCardRequest
    ) -> WorkflowCard:
        workflow_id = self._require_id(workflow_id, "workflow_id")
        card_id = self._require_id(card_id, "card_id")
        return await self._update(
            self._path("workflows", workflow_id, "cards", card_id),
            "WorkflowCard",
            card_id,
            request,
            WorkflowCard.from_resource,
        )

    async def delete_workflow_card(self, workflow_id: str, card_id: str) -> None:
        workflow_id = self._require_id(workflow_id, "workflow_id")
        card_id = self._require_id(card_id, "card_id")
        await self._delete(self._path("workflows", workflow_id, "cards", card_id))

    # Forms

    async def get_form(self, form_id: str) -> Optional[Form]:
        form_id = self._require_id(form_id, "form_id")
        return await self._get(self._path("forms", form_id), Form.from_resource)

    async def list_forms(self, params: Optional[QueryParameters] = None) -> Page[Form]:
        return await self._list(self._path("forms"), Form.from_resource, params)

    async def list_form_submissions(
        self, form_id: str, params: Optional[QueryParameters] = None
    ) -> Page[FormSubmission]:
        form_id = self._require_id(form_id, "form_id")
        return await self._list(self._path("forms", form_id, "form_submissions"), FormSubmission.from_resource, params)

    async def get_form_submission(self, form_id: str, submission_id: str) -> Optional[FormSubmission]:
        form_id = self._require_id(form_id, "form_id")
        submission_id = self._require_id(submission_id, "submission_id")
        return await self._get(
            self._path("forms", form_id, "form_submissions", submission_id), FormSubmission.from_resource
        )

    async def submit_form(self, form_id: str, request: FormSubmitRequest) -> FormSubmission:
        form_id = self._require_id(form_id, "form_id")
        return await self._create(
            self._path("forms", form_id, "form_submissions"), "FormSubmission", request, FormSubmission.from_resource
        )

    # Lists and campuses

    async def get_list(self, list_id: str) -> Optional[PeopleList]:
        list_id = self._require_id(list_id, "list_id")
        return await self._get(self._path("lists", list_id), PeopleList.from_resource)

    async def list_lists(self, params: Optional[QueryParameters] = None) -> Page[PeopleList]:
        return await self._list(self._path("lists"), PeopleList.from_resource, params)

    async def create_people_list(self, request: PeopleListCreateRequest) -> PeopleList:
        return await self._create(self._path("lists"), "List", request, PeopleList.from_resource)

    async def update_people_list(self, list_id: str, request: PeopleListUpdateRequest) -> PeopleList:
        list_id = self._require_id(list_id, "list_id")
        return await self._update(self._path("lists", list_id), "List", list_id, request, PeopleList.from_resource)

    async def list_people_in_list(self, list_id: str, params: Optional[QueryParameters] = None) -> Page[Person]:
        list_id = self._require_id(list_id, "list_id")
        return await self._list(self._path("lists", list_id, "people"), Person.from_resource, params)

    async def add_person_to_list(self, list_id: str, request: ListMemberCreateRequest) -> ListMember:
        list_id = self._require_id(list_id, "list_id")
        return await self._create(
            self._path("lists", list_id, "people"), "ListMember", request, ListMember.from_resource
        )

    async def list_campuses(self, params: Optional[QueryParameters] = None) -> Page[Campus]:
        return await self._list(self._path("campuses"), Campus.from_resource, params)
