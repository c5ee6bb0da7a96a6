"""Tests for the structured error types."""

import json

import httpx
import pytest

from pco_cli.core.client.errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    InvalidRequestError,
    NetworkError,
    NotFoundError,
    PlanningCenterError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    classify_error,
    create_user_friendly_message,
    error_from_response,
    get_retry_delay,
    is_retryable_error,
)


class TestErrorFromResponse:
    """Test cases for mapping HTTP failures to errors."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (400, InvalidRequestError),
            (401, AuthenticationError),
            (403, AuthorizationError),
            (404, NotFoundError),
            (422, InvalidRequestError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_status_mapping(self, status: int, expected: type) -> None:
        error = error_from_response(status, "{}", httpx.Headers({}), url="/x", method="GET")
        assert isinstance(error, expected)
        assert error.status == status
        assert error.request_url == "/x"
        assert error.request_method == "GET"

    def test_unexpected_status(self) -> None:
        error = error_from_response(418, "", httpx.Headers({}))
        assert type(error) is PlanningCenterError
        assert error.code == "API_ERROR"
        assert error.status == 418

    def test_request_id_and_body(self) -> None:
        headers = httpx.Headers({"X-Request-Id": "req-1"})
        error = error_from_response(404, "missing", headers)
        assert error.request_id == "req-1"
        assert error.response_body == "missing"
        assert "Request ID: req-1" in str(error)

    def test_validation_details(self) -> None:
        body = json.dumps({"errors": [{"title": "Invalid", "detail": "first_name can't be blank"}]})

        error = error_from_response(422, body, httpx.Headers({}))

        assert error.message == "Validation failed: first_name can't be blank"
        assert error.errors[0]["detail"] == "first_name can't be blank"

    def test_rate_limit_headers(self) -> None:
        headers = httpx.Headers({
            "Retry-After": "20",
            "X-RateLimit-Limit": "100",
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": "1700000000",
        })

        error = error_from_response(429, "", headers)

        assert error.retry_after == 20
        assert error.limit == 100
        assert error.remaining == 0
        assert error.reset_at is not None
        assert get_retry_delay(error) == 20


class TestClassifyError:
    """Test cases for classify_error."""

    def test_passthrough(self) -> None:
        error = NotFoundError()
        assert classify_error(error) is error

    def test_timeout(self) -> None:
        assert isinstance(classify_error(httpx.ReadTimeout("slow")), RequestTimeoutError)

    def test_network(self) -> None:
        assert isinstance(classify_error(httpx.ConnectError("refused")), NetworkError)

    def test_other_exception(self) -> None:
        original = RuntimeError("odd")
        error = classify_error(original)
        assert type(error) is PlanningCenterError
        assert error.original_error is original


class TestRetryability:
    """Test cases for is_retryable_error."""

    def test_retryable(self) -> None:
        assert is_retryable_error(RateLimitError())
        assert is_retryable_error(ServerError())
        assert is_retryable_error(NetworkError())

    def test_not_retryable(self) -> None:
        assert not is_retryable_error(RequestTimeoutError())
        assert not is_retryable_error(NotFoundError())
        assert not is_retryable_error(AuthenticationError())
        assert not is_retryable_error(InvalidRequestError())
        assert not is_retryable_error(ServerError(is_transient=False))


class TestUserFriendlyMessage:
    """Test cases for create_user_friendly_message."""

    def test_messages(self) -> None:
        assert "Personal Access Token" in create_user_friendly_message(AuthenticationError())
        assert "permission" in create_user_friendly_message(AuthorizationError())
        assert create_user_friendly_message(NotFoundError()) == "The requested resource was not found."
        assert "30 seconds" in create_user_friendly_message(RateLimitError(retry_after=30))
        assert "timed out" in create_user_friendly_message(RequestTimeoutError())
        assert create_user_friendly_message(ConfigurationError("no token")) == "no token"

    def test_validation_problems_joined(self) -> None:
        error = InvalidRequestError(errors=[{"detail": "a is bad"}, {"title": "b missing"}])
        assert create_user_friendly_message(error) == "Validation failed: a is bad; b missing"

    def test_to_dict(self) -> None:
        data = NotFoundError(resource_type="Person", resource_id="1").to_dict()
        assert data["type"] == "NotFoundError"
        assert data["code"] == "NOT_FOUND"
        assert data["details"] == {"resource_type": "Person", "resource_id": "1"}
