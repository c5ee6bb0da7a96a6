"""Tests for query parameters and pagination options."""

import pytest

from pco_cli.core.query import PaginationOptions, QueryParameters, parse_list, parse_where


class TestQueryParameters:
    """Test cases for QueryParameters."""

    def test_empty_parameters(self) -> None:
        params = QueryParameters()
        assert params.to_params() == []
        assert params.apply_to("/people/v2/people") == "/people/v2/people"

    def test_serialization_order(self) -> None:
        """where, include, order, per_page, offset in that order."""
        params = QueryParameters(
            where={"first_name": "Ann", "status": "active"},
            include=["emails", "addresses"],
            order="-created_at",
            per_page=50,
            offset=100,
        )

        assert params.to_params() == [
            ("where[first_name]", "Ann"),
            ("where[status]", "active"),
            ("include", "emails,addresses"),
            ("order", "-created_at"),
            ("per_page", "50"),
            ("offset", "100"),
        ]

    def test_query_string_is_encoded(self) -> None:
        params = QueryParameters(where={"name": "A&B"})
        assert params.to_query_string() == "where%5Bname%5D=A%26B"

    def test_apply_to_path_with_query(self) -> None:
        params = QueryParameters(per_page=10)
        assert params.apply_to("/x?filter=y") == "/x?filter=y&per_page=10"

    def test_per_page_bounds(self) -> None:
        QueryParameters(per_page=1)
        QueryParameters(per_page=100)
        with pytest.raises(ValueError):
            QueryParameters(per_page=0)
        with pytest.raises(ValueError):
            QueryParameters(per_page=101)

    def test_negative_offset(self) -> None:
        with pytest.raises(ValueError):
            QueryParameters(offset=-1)

    def test_clone_is_independent(self) -> None:
        original = QueryParameters(where={"a": "1"}, include=["x"])
        copy = original.clone()
        copy.where["b"] = "2"
        copy.include.append("y")
        assert original.where == {"a": "1"}
        assert original.include == ["x"]

    def test_for_page(self) -> None:
        params = QueryParameters.for_page(3, 25, order="name")
        assert params.per_page == 25
        assert params.offset == 50
        assert params.order == "name"

    def test_for_page_rejects_zero(self) -> None:
        with pytest.raises(ValueError):
            QueryParameters.for_page(0, 25)


class TestParseWhere:
    """Test cases for parse_where."""

    def test_pairs(self) -> None:
        assert parse_where("first_name=John, last_name = Smith") == {
            "first_name": "John",
            "last_name": "Smith",
        }

    def test_quotes_are_stripped(self) -> None:
        assert parse_where("name='Youth Group'") == {"name": "Youth Group"}

    def test_value_may_contain_equals(self) -> None:
        assert parse_where("search=a=b") == {"search": "a=b"}

    def test_empty_input(self) -> None:
        assert parse_where(None) == {}
        assert parse_where("") == {}
        assert parse_where("a=1,,") == {"a": "1"}

    def test_missing_equals(self) -> None:
        with pytest.raises(ValueError, match="Expected key=value"):
            parse_where("first_name")

    def test_empty_key(self) -> None:
        with pytest.raises(ValueError):
            parse_where("=value")


def test_parse_list() -> None:
    assert parse_list("emails, addresses,,") == ["emails", "addresses"]
    assert parse_list(None) == []


class TestPaginationOptions:
    """Test cases for PaginationOptions."""

    def test_defaults(self) -> None:
        options = PaginationOptions()
        assert options.page_size == 25
        assert options.max_items is None
        assert options.delay_between_pages == 0.0

    def test_presets(self) -> None:
        assert PaginationOptions.for_speed().page_size == 100
        assert PaginationOptions.for_memory_efficiency().delay_between_pages > 0
        assert PaginationOptions.for_large_datasets(max_items=500).max_items == 500

    def test_validation(self) -> None:
        with pytest.raises(ValueError):
            PaginationOptions(page_size=0)
        with pytest.raises(ValueError):
            PaginationOptions(page_size=101)
        with pytest.raises(ValueError):
            PaginationOptions(max_items=-1)
        with pytest.raises(ValueError):
            PaginationOptions(delay_between_pages=-0.5)
