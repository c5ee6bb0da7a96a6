"""Tests for ApiConnection against a mock transport."""

import httpx
import pytest

from factories import BASE_URL, document, json_response, resource
from pco_cli.core.client.errors import (
    AuthenticationError,
    InvalidRequestError,
    NetworkError,
    NotFoundError,
    PlanningCenterError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
)
from pco_cli.core.query import QueryParameters


class TestRequests:
    """Test cases for successful requests."""

    @pytest.mark.asyncio
    async def test_get_sends_headers_and_params(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(200, document(resource("Person", 1))))

        result = await connection.get("/people/v2/people/1", QueryParameters(include=["emails"]))

        request = transport.last_request
        assert result["data"]["id"] == "1"
        assert str(request.url) == f"{BASE_URL}/people/v2/people/1?include=emails"
        assert request.headers["Accept"] == "application/vnd.api+json"
        assert request.headers["Authorization"].startswith("Basic ")
        assert request.headers["User-Agent"].startswith("pco-cli/")
        await connection.close()

    @pytest.mark.asyncio
    async def test_absolute_next_link_is_used_as_is(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(200, document([])))
        link = "https://api.example.test/people/v2/people?offset=25&per_page=25"

        page = await connection.get_page(link)

        assert str(transport.last_request.url) == link
        assert page.items == []

    @pytest.mark.asyncio
    async def test_post_sends_json_api_body(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(201, document(resource("Person", 9))))
        body = {"data": {"type": "Person", "attributes": {"first_name": "Ann"}}}

        await connection.post("/people/v2/people", body)

        request = transport.last_request
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/vnd.api+json"
        assert transport.last_json() == body

    @pytest.mark.asyncio
    async def test_delete_no_content(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(204))
        assert await connection.delete("/people/v2/people/1") is None
        assert transport.last_request.method == "DELETE"

    @pytest.mark.asyncio
    async def test_get_page(self, make_connection) -> None:
        doc = document([resource("Person", 1), resource("Person", 2)], next_link="next-url", total_count=40)
        connection, _ = make_connection(lambda r: json_response(200, doc))

        page = await connection.get_page("/people/v2/people")

        assert [item.id for item in page.items] == ["1", "2"]
        assert page.next == "next-url"
        assert page.total_count == 40

    @pytest.mark.asyncio
    async def test_invalid_json(self, make_connection) -> None:
        connection, _ = make_connection(lambda r: httpx.Response(200, content=b"<html>"))
        with pytest.raises(PlanningCenterError) as exc_info:
            await connection.get("/people/v2/me")
        assert exc_info.value.code == "INVALID_RESPONSE"

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, make_connection) -> None:
        connection, _ = make_connection(lambda r: json_response(200, {}))
        async with connection as conn:
            await conn.get("/people/v2/me")
        assert connection._client.is_closed


class TestErrorHandling:
    """Test cases for error responses and retries."""

    @pytest.mark.asyncio
    async def test_not_found_is_not_retried(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(404, {"errors": []}))

        with pytest.raises(NotFoundError) as exc_info:
            await connection.get("/people/v2/people/404")

        assert len(transport.requests) == 1
        assert exc_info.value.request_method == "GET"
        assert exc_info.value.request_url.endswith("/people/v2/people/404")

    @pytest.mark.asyncio
    async def test_unauthorized(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(401, {}))
        with pytest.raises(AuthenticationError):
            await connection.get("/people/v2/me")
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_validation_error(self, make_connection) -> None:
        payload = {"errors": [{"detail": "last_name can't be blank"}]}
        connection, _ = make_connection(lambda r: json_response(422, payload))

        with pytest.raises(InvalidRequestError) as exc_info:
            await connection.post("/people/v2/people", {"data": {}})

        assert "last_name" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_unmapped_status_is_generic_api_error(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(418, {}))

        with pytest.raises(PlanningCenterError) as exc_info:
            await connection.get("/people/v2/people")

        assert type(exc_info.value) is PlanningCenterError
        assert exc_info.value.code == "API_ERROR"
        assert exc_info.value.status == 418
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_server_error_retried_then_succeeds(self, make_connection) -> None:
        responses = iter([json_response(500, {}), json_response(503, {}), json_response(200, {"data": []})])
        connection, transport = make_connection(lambda r: next(responses))

        result = await connection.get("/people/v2/people")

        assert result == {"data": []}
        assert len(transport.requests) == 3

    @pytest.mark.asyncio
    async def test_server_error_exhausts_attempts(self, make_connection) -> None:
        connection, transport = make_connection(lambda r: json_response(500, {}), max_attempts=2)

        with pytest.raises(ServerError):
            await connection.get("/people/v2/people")
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_rate_limit_retried(self, make_connection) -> None:
        responses = iter([
            json_response(429, {}, headers={"Retry-After": "0", "X-RateLimit-Limit": "100"}),
            json_response(200, {"data": []}),
        ])
        connection, transport = make_connection(lambda r: next(responses))

        await connection.get("/people/v2/people")
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_rate_limit_details(self, make_connection) -> None:
        connection, _ = make_connection(
            lambda r: json_response(429, {}, headers={"X-RateLimit-Remaining": "0"}), max_attempts=1
        )
        with pytest.raises(RateLimitError) as exc_info:
            await connection.get("/people/v2/people")
        assert exc_info.value.remaining == 0

    @pytest.mark.asyncio
    async def test_timeout_is_not_retried(self, make_connection) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        connection, transport = make_connection(handler)

        with pytest.raises(RequestTimeoutError):
            await connection.get("/people/v2/people")
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_network_error_retried(self, make_connection) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        connection, transport = make_connection(handler, max_attempts=3)

        with pytest.raises(NetworkError) as exc_info:
            await connection.get("/people/v2/people")

        assert len(transport.requests) == 3
        assert exc_info.value.request_method == "GET"
