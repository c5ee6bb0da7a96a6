"""Tests for JSON:API document parsing and building."""

from factories import document, resource
from pco_cli.core.jsonapi import JsonApiResource, Page, build_document, parse_resource


class TestJsonApiResource:
    """Test cases for JsonApiResource."""

    def test_from_dict(self) -> None:
        data = resource("Person", 42, relationships={"primary_campus": ("Campus", "7")}, first_name="Ann")
        data["relationships"]["emails"] = {"data": [{"type": "Email", "id": "1"}, {"type": "Email", "id": "2"}]}

        parsed = JsonApiResource.from_dict(data)

        assert parsed.type == "Person"
        assert parsed.id == "42"
        assert parsed.get("first_name") == "Ann"
        assert parsed.relationship_id("primary_campus") == "7"
        assert parsed.relationship_ids("emails") == ["1", "2"]

    def test_missing_values(self) -> None:
        parsed = JsonApiResource.from_dict({"type": "Person", "id": "1", "attributes": {"nickname": None}})

        assert parsed.get("nickname", "none") == "none"
        assert parsed.relationship_id("household") is None
        assert parsed.relationship_ids("emails") == []

    def test_null_relationship_data(self) -> None:
        parsed = JsonApiResource.from_dict(
            {"type": "Person", "id": "1", "relationships": {"primary_campus": {"data": None}}}
        )
        assert parsed.relationship_id("primary_campus") is None


class TestPage:
    """Test cases for Page.from_document."""

    def test_list_document(self) -> None:
        doc = document(
            [resource("Person", 1), resource("Person", 2)],
            next_link="https://api.example.test/people/v2/people?offset=2",
            total_count=5,
            included=[resource("Email", 9, address="a@example.com")],
        )
        doc["meta"]["next"] = {"offset": 2}
        doc["meta"]["can_include"] = ["emails"]

        page = Page.from_document(doc)

        assert [item.id for item in page.items] == ["1", "2"]
        assert page.has_next_page
        assert page.next.endswith("offset=2")
        assert page.total_count == 5
        assert page.meta.next_offset == 2
        assert page.meta.can_include == ["emails"]
        assert page.included[0].get("address") == "a@example.com"
        assert len(page) == 2

    def test_terminal_page(self) -> None:
        page = Page.from_document(document([]))
        assert page.items == []
        assert page.next is None
        assert not page.has_next_page

    def test_single_resource_document(self) -> None:
        page = Page.from_document(document(resource("Person", 1)))
        assert [item.id for item in page.items] == ["1"]

    def test_map_keeps_links(self) -> None:
        page = Page.from_document(document([resource("Person", 1)], next_link="next"))
        mapped = page.map(lambda item: item.id)
        assert mapped.items == ["1"]
        assert mapped.next == "next"


class TestParseResource:
    """Test cases for parse_resource."""

    def test_single(self) -> None:
        assert parse_resource(document(resource("Fund", 3))).id == "3"

    def test_empty(self) -> None:
        assert parse_resource({}) is None
        assert parse_resource(document([])) is None


class TestBuildDocument:
    """Test cases for build_document."""

    def test_create_body(self) -> None:
        body = build_document("Person", {"first_name": "Ann", "nickname": None})
        assert body == {"data": {"type": "Person", "attributes": {"first_name": "Ann"}}}

    def test_update_body_with_relationships(self) -> None:
        body = build_document(
            "Donation",
            {"payment_method": "cash"},
            resource_id="5",
            relationships={"person": ("Person", "9"), "batch": ("Batch", None)},
        )

        assert body["data"]["id"] == "5"
        assert body["data"]["relationships"] == {"person": {"data": {"type": "Person", "id": "9"}}}
