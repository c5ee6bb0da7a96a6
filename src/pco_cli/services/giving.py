"""
Giving service (``/giving/v2``).
"""

import logging
from datetime import date, datetime
from typing import AsyncIterator, List, Optional, Union

from ..core.jsonapi import Page
from ..core.query import PaginationOptions, QueryParameters
from ..models.giving import (
    Batch,
    BatchRequest,
    Donation,
    DonationCreateRequest,
    DonationUpdateRequest,
    Fund,
    FundRequest,
    PaymentSource,
    Pledge,
    PledgeRequest,
    RecurringDonation,
    RecurringDonationRequest,
    Refund,
    RefundRequest,
)
from .base import ServiceBase

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


def _as_date(value: DateLike) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value if isinstance(value, str) else value.isoformat()


class GivingService(ServiceBase):
    """Donations, funds, batches, pledges, recurring donations and refunds."""

    base_path = "/giving/v2"

    # Donations

    async def get_donation(self, donation_id: str, params: Optional[QueryParameters] = None) -> Optional[Donation]:
        donation_id = self._require_id(donation_id, "donation_id")
        return await self._get(self._path("donations", donation_id), Donation.from_resource, params)

    async def list_donations(self, params: Optional[QueryParameters] = None) -> Page[Donation]:
        return await self._list(self._path("donations"), Donation.from_resource, params)

    async def list_donations_for_person(
        self, person_id: str, params: Optional[QueryParameters] = None
    ) -> Page[Donation]:
        person_id = self._require_id(person_id, "person_id")
        return await self._list(self._path("people", person_id, "donations"), Donation.from_resource, params)

    async def get_all_donations(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> List[Donation]:
        return await self._get_all(self._path("donations"), Donation.from_resource, params, options)

    def stream_donations(
        self,
        params: Optional[QueryParameters] = None,
        options: Optional[PaginationOptions] = None,
    ) -> AsyncIterator[Donation]:
        return self._stream(self._path("donations"), Donation.from_resource, params, options)

    async def create_donation(self, request: DonationCreateRequest) -> Donation:
        return await self._create(
            self._path("donations"), "Donation", request, Donation.from_resource, included=request.included
        )

    async def update_donation(self, donation_id: str, request: DonationUpdateRequest) -> Donation:
        donation_id = self._require_id(donation_id, "donation_id")
        return await self._update(
            self._path("donations", donation_id), "Donation", donation_id, request, Donation.from_resource
        )

    async def delete_donation(self, donation_id: str) -> None:
        donation_id = self._require_id(donation_id, "donation_id")
        await self._delete(self._path("donations", donation_id))

    async def get_total_giving(
        self,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        fund_id: Optional[str] = None,
        person_id: Optional[str] = None,
    ) -> int:
        """
        Sum ``amount_cents`` over every matching donation.

        Args:
            start: Earliest received date (inclusive); requires ``end``
            end: Latest received date (inclusive); requires ``start``
            fund_id: Only donations designated to this fund
            person_id: Only donations made by this person

        Returns:
            Total in cents

        Raises:
            ValueError: If only one bound is given or ``end`` is before ``start``
        """
        query = QueryParameters(per_page=100)
        if (start is None) != (end is None):
            raise ValueError("start and end must be given together")
        if start is not None and end is not None:
            start_date, end_date = _as_date(start), _as_date(end)
            if end_date < start_date:
                raise ValueError("end must not be before start")
            query.where["received_at"] = f"{start_date}..{end_date}"
        if fund_id:
            query.where["fund_id"] = fund_id

        if person_id:
            path = self._path("people", self._require_id(person_id, "person_id"), "donations")
        else:
            path = self._path("donations")

        total = 0
        count = 0
        async for donation in self._stream(path, Donation.from_resource, query):
            total += donation.amount_cents
            count += 1
        logger.info(f"Total giving over {count} donations: {total} cents")
        return total

    # Funds

    async def get_fund(self, fund_id: str) -> Optional[Fund]:
        fund_id = self._require_id(fund_id, "fund_id")
        return await self._get(self._path("funds", fund_id), Fund.from_resource)

    async def list_funds(self, params: Optional[QueryParameters] = None) -> Page[Fund]:
        return await self._list(self._path("funds"), Fund.from_resource, params)

    async def create_fund(self, request: FundRequest) -> Fund:
        return await self._create(self._path("funds"), "Fund", request, Fund.from_resource)

    async def update_fund(self, fund_id: str, request: FundRequest) -> Fund:
        fund_id = self._require_id(fund_id, "fund_id")
        return await self._update(self._path("funds", fund_id), "Fund", fund_id, request, Fund.from_resource)

    # Batches

    async def get_batch(self, batch_id: str) -> Optional[Batch]:
        batch_id = self._require_id(batch_id, "batch_id")
        return await self._get(self._path("batches", batch_id), Batch.from_resource)

    async def list_batches(self, params: Optional[QueryParameters] = None) -> Page[Batch]:
        return await self._list(self._path("batches"), Batch.from_resource, params)

    async def create_batch(self, request: BatchRequest) -> Batch:
        return await self._create(self._path("batches"), "Batch", request, Batch.from_resource)

    async def update_batch(self, batch_id: str, request: BatchRequest) -> Batch:
        batch_id = self._require_id(batch_id, "batch_id")
        return await self._update(self._path("batches", batch_id), "Batch", batch_id, request, Batch.from_resource)

    async def commit_batch(self, batch_id: str) -> Optional[Batch]:
        batch_id = self._require_id(batch_id, "batch_id")
        return await self._action(self._path("batches", batch_id, "commit"), Batch.from_resource)

    # Pledges

    async def get_pledge(self, pledge_id: str) -> Optional[Pledge]:
        pledge_id = self._require_id(pledge_id, "pledge_id")
        return await self._get(self._path("pledges", pledge_id), Pledge.from_resource)

    async def list_pledges(self, params: Optional[QueryParameters] = None) -> Page[Pledge]:
        return await self._list(self._path("pledges"), Pledge.from_resource, params)

    async def create_pledge(self, request: PledgeRequest) -> Pledge:
        return await self._create(self._path("pledges"), "Pledge", request, Pledge.from_resource)

    async def update_pledge(self, pledge_id: str, request: PledgeRequest) -> Pledge:
        pledge_id = self._require_id(pledge_id, "pledge_id")
        return await self._update(self._path("pledges", pledge_id), "Pledge", pledge_id, request, Pledge.from_resource)

    # Recurring donations

    async def get_recurring_donation(self, recurring_donation_id: str) -> Optional[RecurringDonation]:
        recurring_donation_id = self._require_id(recurring_donation_id, "recurring_donation_id")
        return await self._get(
            self._path("recurring_donations", recurring_donation_id), RecurringDonation.from_resource
        )

    async def list_recurring_donations(self, params: Optional[QueryParameters] = None) -> Page[RecurringDonation]:
        return await self._list(self._path("recurring_donations"), RecurringDonation.from_resource, params)

    async def create_recurring_donation(self, request: RecurringDonationRequest) -> RecurringDonation:
        return await self._create(
            self._path("recurring_donations"), "RecurringDonation", request, RecurringDonation.from_resource
        )

    async def update_recurring_donation(
        self, recurring_donation_id: str, request: RecurringDonationRequest
    ) -> RecurringDonation:
        recurring_donation_id = self._require_id(recurring_donation_id, "recurring_donation_id")
        return await self._update(
            self._path("recurring_donations", recurring_donation_id),
            "RecurringDonation",
            recurring_donation_id,
            request,
            RecurringDonation.from_resource,
        )

    # Refunds

    async def get_refund(self, donation_id: str) -> Optional[Refund]:
        """Get the refund of a donation."""
        donation_id = self._require_id(donation_id, "donation_id")
        return await self._get(self._path("donations", donation_id, "refund"), Refund.from_resource)

    async def list_refunds(self, params: Optional[QueryParameters] = None) -> Page[Refund]:
        return await self._list(self._path("refunds"), Refund.from_resource, params)

    async def issue_refund(self, donation_id: str, request: RefundRequest) -> Refund:
        donation_id = self._require_id(donation_id, "donation_id")
        return await self._create(
            self._path("donations", donation_id, "refund"), "Refund", request, Refund.from_resource
        )

    # Payment sources

    async def get_payment_source(self, payment_source_id: str) -> Optional[PaymentSource]:
        payment_source_id = self._require_id(payment_source_id, "payment_source_id")
        return await self._get(self._path("payment_sources", payment_source_id), PaymentSource.from_resource)

    async def list_payment_sources(self, params: Optional[QueryParameters] = None) -> Page[PaymentSource]:
        return await self._list(self._path("payment_sources"), PaymentSource.from_resource, params)
