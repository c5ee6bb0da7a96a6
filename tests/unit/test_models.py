"""Tests for domain records and request payloads."""

from datetime import date, datetime, timedelta, timezone

import pytest

from pco_cli.core.jsonapi import JsonApiResource
from pco_cli.models import Batch, Donation, Person, Signup, Song, Speaker
from pco_cli.models.base import parse_date, parse_datetime, to_int
from pco_cli.models.giving import DesignationRequest, DonationCreateRequest
from pco_cli.models.groups import GroupRequest
from pco_cli.models.people import PersonUpdateRequest


def make_resource(resource_type: str, **attributes) -> JsonApiResource:
    return JsonApiResource(type=resource_type, id="1", attributes=attributes)


class TestParsing:
    """Test cases for the value parsers."""

    def test_parse_datetime(self) -> None:
        parsed = parse_datetime("2024-06-01T12:30:00Z")
        assert parsed == datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc)

    def test_parse_datetime_invalid(self) -> None:
        assert parse_datetime("yesterday") is None
        assert parse_datetime("") is None
        assert parse_datetime(None) is None

    def test_parse_date(self) -> None:
        assert parse_date("2024-06-01") == date(2024, 6, 1)
        assert parse_date("2024-06-01T00:00:00Z") == date(2024, 6, 1)
        assert parse_date("June") is None

    def test_to_int(self) -> None:
        assert to_int("12") == 12
        assert to_int("abc", 0) == 0
        assert to_int(None) is None


class TestRecords:
    """Test cases for records built from resources."""

    def test_person_defaults(self) -> None:
        person = Person.from_resource(make_resource("Person"))
        assert person.status == "active"
        assert person.child is False
        assert person.full_name == ""

    def test_person_prefers_name(self) -> None:
        person = Person.from_resource(make_resource("Person", name="Dr. Ann Lee", first_name="Ann", last_name="Lee"))
        assert person.full_name == "Dr. Ann Lee"

    def test_donation_amount(self) -> None:
        donation = Donation.from_resource(make_resource("Donation", amount_cents="1999", received_at="2024-01-01"))
        assert donation.amount_cents == 1999
        assert donation.amount == 19.99
        assert donation.received_at == datetime(2024, 1, 1)

    def test_batch_committed(self) -> None:
        assert not Batch.from_resource(make_resource("Batch")).is_committed
        assert Batch.from_resource(make_resource("Batch", committed_at="2024-01-01T00:00:00Z")).is_committed

    def test_speaker_name_from_parts(self) -> None:
        speaker = Speaker.from_resource(make_resource("Speaker", first_name="Sam", last_name="Ng"))
        assert speaker.name == "Sam Ng"

    def test_song_keys_from_relationship(self) -> None:
        resource = make_resource("Song", title="Amazing Grace")
        resource.relationships = {"keys": {"data": [{"type": "Key", "id": "1"}, {"type": "Key", "id": "2"}]}}
        assert Song.from_resource(resource).keys == ["1", "2"]

    def test_to_dict(self) -> None:
        data = Person(id="1", first_name="Ann").to_dict()
        assert data["id"] == "1"
        assert data["first_name"] == "Ann"
        assert "full_name" not in data


class TestSignupWindow:
    """Test cases for Signup.is_open."""

    now = datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_open_without_window(self) -> None:
        assert Signup(id="1").is_open(self.now)

    def test_before_open(self) -> None:
        assert not Signup(id="1", open_at=self.now + timedelta(days=1)).is_open(self.now)

    def test_after_close(self) -> None:
        assert not Signup(id="1", close_at=self.now - timedelta(days=1)).is_open(self.now)

    def test_archived(self) -> None:
        assert not Signup(id="1", archived=True).is_open(self.now)


class TestRequests:
    """Test cases for request payloads."""

    def test_none_values_are_omitted(self) -> None:
        request = PersonUpdateRequest(first_name="Ann")
        assert request.to_attributes() == {"first_name": "Ann"}
        assert request.to_relationships() == {}

    def test_relationship_fields(self) -> None:
        request = GroupRequest(name="Youth", group_type_id="7")
        assert request.to_attributes() == {"name": "Youth"}
        assert request.to_relationships() == {"group_type": ("GroupType", "7")}

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValueError):
            PersonUpdateRequest(favourite_color="blue")

    def test_designation_amount_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            DesignationRequest(fund_id="1", amount_cents=0)

    def test_donation_included_designations(self) -> None:
        request = DonationCreateRequest(
            payment_method="card",
            designations=[DesignationRequest(fund_id="1", amount_cents=500)],
        )
        assert "designations" not in request.to_attributes()
        assert request.included == [{
            "type": "Designation",
            "attributes": {"amount_cents": 500},
            "relationships": {"fund": {"data": {"type": "Fund", "id": "1"}}},
        }]
