"""
Giving module models.

Amounts are integer cents, as the API reports them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import Field

from ..core.jsonapi import JsonApiResource
from .base import Record, RequestModel, parse_date, parse_datetime, to_int


@dataclass
class Donation(Record):
    amount_cents: int = 0
    amount_currency: str = "USD"
    fee_cents: Optional[int] = None
    payment_method: Optional[str] = None
    payment_method_sub: Optional[str] = None
    payment_last4: Optional[str] = None
    payment_brand: Optional[str] = None
    payment_check_number: Optional[str] = None
    payment_check_dated_at: Optional[date] = None
    payment_status: Optional[str] = None
    refunded: bool = False
    received_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    person_id: Optional[str] = None
    batch_id: Optional[str] = None
    campus_id: Optional[str] = None
    payment_source_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def amount(self) -> float:
        return self.amount_cents / 100

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Donation":
        return cls(
            id=resource.id,
            amount_cents=to_int(resource.get("amount_cents"), 0),
            amount_currency=resource.get("amount_currency", "USD"),
            fee_cents=to_int(resource.get("fee_cents")),
            payment_method=resource.get("payment_method"),
            payment_method_sub=resource.get("payment_method_sub"),
            payment_last4=resource.get("payment_last4"),
            payment_brand=resource.get("payment_brand"),
            payment_check_number=resource.get("payment_check_number"),
            payment_check_dated_at=parse_date(resource.get("payment_check_dated_at")),
            payment_status=resource.get("payment_status"),
            refunded=bool(resource.get("refunded", False)),
            received_at=parse_datetime(resource.get("received_at")),
            completed_at=parse_datetime(resource.get("completed_at")),
            person_id=resource.relationship_id("person"),
            batch_id=resource.relationship_id("batch"),
            campus_id=resource.relationship_id("campus"),
            payment_source_id=resource.relationship_id("payment_source"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Fund(Record):
    name: str = ""
    description: Optional[str] = None
    code: Optional[str] = None
    color: Optional[str] = None
    visibility: Optional[str] = None
    default: bool = False
    deletable: bool = True
    ledger_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Fund":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            description=resource.get("description"),
            code=resource.get("code"),
            color=resource.get("color"),
            visibility=resource.get("visibility"),
            default=bool(resource.get("default", False)),
            deletable=bool(resource.get("deletable", True)),
            ledger_code=resource.get("ledger_code"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Batch(Record):
    description: Optional[str] = None
    status: Optional[str] = None
    donations_count: int = 0
    total_cents: int = 0
    total_currency: str = "USD"
    committed_at: Optional[datetime] = None
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_committed(self) -> bool:
        return self.committed_at is not None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Batch":
        return cls(
            id=resource.id,
            description=resource.get("description"),
            status=resource.get("status"),
            donations_count=to_int(resource.get("donations_count"), 0),
            total_cents=to_int(resource.get("total_cents"), 0),
            total_currency=resource.get("total_currency", "USD"),
            committed_at=parse_datetime(resource.get("committed_at")),
            owner_id=resource.relationship_id("owner"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Pledge(Record):
    amount_cents: int = 0
    amount_currency: str = "USD"
    donated_total_cents: int = 0
    joint_giver_amount_cents: Optional[int] = None
    person_id: Optional[str] = None
    pledge_campaign_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Pledge":
        return cls(
            id=resource.id,
            amount_cents=to_int(resource.get("amount_cents"), 0),
            amount_currency=resource.get("amount_currency", "USD"),
            donated_total_cents=to_int(resource.get("donated_total_cents"), 0),
            joint_giver_amount_cents=to_int(resource.get("joint_giver_amount_cents")),
            person_id=resource.relationship_id("person"),
            pledge_campaign_id=resource.relationship_id("pledge_campaign"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class RecurringDonation(Record):
    amount_cents: int = 0
    amount_currency: str = "USD"
    status: Optional[str] = None
    schedule: Dict[str, Any] = field(default_factory=dict)
    release_hold_at: Optional[datetime] = None
    last_donation_received_at: Optional[datetime] = None
    next_occurrence: Optional[date] = None
    person_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "RecurringDonation":
        return cls(
            id=resource.id,
            amount_cents=to_int(resource.get("amount_cents"), 0),
            amount_currency=resource.get("amount_currency", "USD"),
            status=resource.get("status"),
            schedule=resource.get("schedule", {}),
            release_hold_at=parse_datetime(resource.get("release_hold_at")),
            last_donation_received_at=parse_datetime(resource.get("last_donation_received_at")),
            next_occurrence=parse_date(resource.get("next_occurrence")),
            person_id=resource.relationship_id("person"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class Refund(Record):
    amount_cents: int = 0
    amount_currency: str = "USD"
    fee_cents: Optional[int] = None
    refunded_at: Optional[datetime] = None
    donation_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "Refund":
        return cls(
            id=resource.id,
            amount_cents=to_int(resource.get("amount_cents"), 0),
            amount_currency=resource.get("amount_currency", "USD"),
            fee_cents=to_int(resource.get("fee_cents")),
            refunded_at=parse_datetime(resource.get("refunded_at")),
            donation_id=resource.relationship_id("donation"),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


@dataclass
class PaymentSource(Record):
    name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> "PaymentSource":
        return cls(
            id=resource.id,
            name=resource.get("name", ""),
            created_at=parse_datetime(resource.get("created_at")),
            updated_at=parse_datetime(resource.get("updated_at")),
        )


class DesignationRequest(RequestModel):
    fund_id: str
    amount_cents: int = Field(gt=0)


class DonationCreateRequest(RequestModel):
    payment_method: str
    received_at: Optional[datetime] = None
    payment_check_number: Optional[str] = None
    payment_check_dated_at: Optional[date] = None
    payment_method_sub: Optional[str] = None
    payment_last4: Optional[str] = None
    payment_brand: Optional[str] = None
    fee_cents: Optional[int] = None
    person_id: Optional[str] = None
    payment_source_id: Optional[str] = None
    batch_id: Optional[str] = None
    campus_id: Optional[str] = None
    designations: List[DesignationRequest] = Field(default_factory=list)

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "person_id": ("person", "Person"),
        "payment_source_id": ("payment_source", "PaymentSource"),
        "batch_id": ("batch", "Batch"),
        "campus_id": ("campus", "Campus"),
    }

    def to_attributes(self) -> Dict[str, Any]:
        attributes = super().to_attributes()
        attributes.pop("designations", None)
        return attributes

    @property
    def included(self) -> List[Dict[str, Any]]:
        """Designation resources sent alongside the donation."""
        return [
            {
                "type": "Designation",
                "attributes": {"amount_cents": designation.amount_cents},
                "relationships": {"fund": {"data": {"type": "Fund", "id": designation.fund_id}}},
            }
            for designation in self.designations
        ]


class DonationUpdateRequest(RequestModel):
    payment_method: Optional[str] = None
    received_at: Optional[datetime] = None
    payment_check_number: Optional[str] = None
    payment_check_dated_at: Optional[date] = None
    fee_cents: Optional[int] = None


class FundRequest(RequestModel):
    name: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    color: Optional[str] = None
    visibility: Optional[str] = None
    ledger_code: Optional[str] = None


class BatchRequest(RequestModel):
    description: Optional[str] = None


class PledgeRequest(RequestModel):
    amount_cents: Optional[int] = Field(default=None, gt=0)
    joint_giver_amount_cents: Optional[int] = None
    person_id: Optional[str] = None
    pledge_campaign_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "person_id": ("person", "Person"),
        "pledge_campaign_id": ("pledge_campaign", "PledgeCampaign"),
    }


class RecurringDonationRequest(RequestModel):
    amount_cents: Optional[int] = Field(default=None, gt=0)
    status: Optional[str] = None
    schedule: Optional[Dict[str, Any]] = None
    release_hold_at: Optional[datetime] = None
    person_id: Optional[str] = None

    RELATIONSHIPS: ClassVar[Dict[str, Tuple[str, str]]] = {
        "person_id": ("person", "Person"),
    }


class RefundRequest(RequestModel):
    amount_cents: Optional[int] = Field(default=None, gt=0)
    refund_fees: Optional[bool] = None
