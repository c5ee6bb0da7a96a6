"""
Structured error system for the Planning Center API client.

Every failed request surfaces as a PlanningCenterError subclass that carries
the HTTP status, the raw response body, the request id reported by the API
and the url/method of the request that failed.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
import json
import logging

import httpx

logger = logging.getLogger(__name__)


class PlanningCenterError(Exception):
    """Base exception for all Planning Center API related errors."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
        request_url: Optional[str] = None,
        request_method: Optional[str] = None,
        response_body: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code or "API_ERROR"
        self.details = details or {}
        self.request_id = request_id
        self.request_url = request_url
        self.request_method = request_method
        self.response_body = response_body
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "details": self.details,
            "request_id": self.request_id,
            "request_url": self.request_url,
            "request_method": self.request_method,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.status:
            parts.append(f"(Status: {self.status})")
        if self.code:
            parts.append(f"(Code: {self.code})")
        if self.request_id:
            parts.append(f"(Request ID: {self.request_id})")
        return " ".join(parts)


class InvalidRequestError(PlanningCenterError):
    """The API rejected the request payload or query (400/422)."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ):
        kwargs.setdefault("status", 422)
        super().__init__(message, code="VALIDATION_ERROR", **kwargs)
        self.errors = errors or []
        if self.errors:
            self.details["errors"] = self.errors


class AuthenticationError(PlanningCenterError):
    """Error related to authentication issues."""

    def __init__(
        self,
        message: str = "Authentication failed",
        auth_type: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault("status", 401)
        super().__init__(message, code="AUTHENTICATION_ERROR", **kwargs)
        if auth_type:
            self.details["auth_type"] = auth_type


class AuthorizationError(PlanningCenterError):
    """Error related to authorization/permission issues."""

    def __init__(
        self,
        message: str = "Access denied",
        resource: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault("status", 403)
        super().__init__(message, code="AUTHORIZATION_ERROR", **kwargs)
        if resource:
            self.details["resource"] = resource


class NotFoundError(PlanningCenterError):
    """The requested resource does not exist."""

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault("status", 404)
        super().__init__(message, code="NOT_FOUND", **kwargs)
        self.resource_type = resource_type
        self.resource_id = resource_id
        if resource_type:
            self.details["resource_type"] = resource_type
        if resource_id:
            self.details["resource_id"] = resource_id


class RateLimitError(PlanningCenterError):
    """Error when the API rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        limit: Optional[int] = None,
        remaining: Optional[int] = None,
        reset_at: Optional[datetime] = None,
        **kwargs
    ):
        kwargs.setdefault("status", 429)
        super().__init__(message, code="RATE_LIMIT_EXCEEDED", **kwargs)
        self.retry_after = retry_after
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at
        if retry_after is not None:
            self.details["retry_after"] = retry_after
        if limit is not None:
            self.details["limit"] = limit
        if remaining is not None:
            self.details["remaining"] = remaining

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], **kwargs) -> "RateLimitError":
        """
        Build a rate limit error from the response headers.

        Args:
            headers: Response headers (case-insensitive mapping preferred)
            **kwargs: Request context passed through to the error

        Returns:
            RateLimitError with retry/limit information filled in
        """
        retry_after = _parse_int(headers.get("Retry-After"))
        limit = _parse_int(headers.get("X-RateLimit-Limit"))
        remaining = _parse_int(headers.get("X-RateLimit-Remaining"))
        reset_unix = _parse_int(headers.get("X-RateLimit-Reset"))
        reset_at = (
            datetime.fromtimestamp(reset_unix, tz=timezone.utc)
            if reset_unix is not None else None
        )

        if retry_after is not None:
            message = f"Rate limit exceeded. Retry after {retry_after} seconds."
        else:
            message = "Rate limit exceeded"

        return cls(
            message,
            retry_after=retry_after,
            limit=limit,
            remaining=remaining,
            reset_at=reset_at,
            **kwargs
        )


class ServerError(PlanningCenterError):
    """Error for server-side issues."""

    def __init__(
        self,
        message: str = "Server error",
        is_transient: bool = True,
        **kwargs
    ):
        kwargs.setdefault("status", 500)
        super().__init__(message, code="SERVER_ERROR", **kwargs)
        self.is_transient = is_transient


class NetworkError(PlanningCenterError):
    """Error for network-related issues."""

    def __init__(
        self,
        message: str = "Network error",
        **kwargs
    ):
        super().__init__(message, code="NETWORK_ERROR", **kwargs)


class RequestTimeoutError(PlanningCenterError):
    """Error for request timeouts."""

    def __init__(
        self,
        message: str = "Request timeout",
        timeout_seconds: Optional[float] = None,
        **kwargs
    ):
        super().__init__(message, code="TIMEOUT_ERROR", **kwargs)
        if timeout_seconds:
            self.details["timeout_seconds"] = timeout_seconds


class ConfigurationError(PlanningCenterError):
    """Error related to client configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_field: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="CONFIGURATION_ERROR", **kwargs)
        if config_field:
            self.details["config_field"] = config_field


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_api_errors(body: Optional[str]) -> List[Dict[str, Any]]:
    """Extract the JSON:API ``errors`` array from a response body."""
    if not body:
        return []
    try:
        document = json.loads(body)
    except ValueError:
        return []
    if isinstance(document, dict) and isinstance(document.get("errors"), list):
        return [error for error in document["errors"] if isinstance(error, dict)]
    return []


def error_from_response(
    status: int,
    body: Optional[str],
    headers: Mapping[str, str],
    url: Optional[str] = None,
    method: Optional[str] = None,
) -> PlanningCenterError:
    """
    Map a failed HTTP response to a structured error.

    Args:
        status: HTTP status code
        body: Raw response body
        headers: Response headers
        url: Request URL
        method: Request method

    Returns:
        PlanningCenterError subclass matching the status code
    """
    context = {
        "request_id": headers.get("X-Request-Id"),
        "request_url": url,
        "request_method": method,
        "response_body": body,
    }

    if status == 404:
        return NotFoundError(status=status, **context)
    if status == 401:
        return AuthenticationError(status=status, **context)
    if status == 403:
        return AuthorizationError(resource=url, status=status, **context)
    if status == 429:
        return RateLimitError.from_headers(headers, status=status, **context)
    if status in (400, 422):
        errors = _parse_api_errors(body)
        message = "Validation failed"
        if errors:
            first = errors[0]
            detail = first.get("detail") or first.get("title")
            if detail:
                message = f"Validation failed: {detail}"
        return InvalidRequestError(message, errors=errors, status=status, **context)
    if status >= 500:
        return ServerError(f"Server error: {status}", status=status, **context)

    return PlanningCenterError(f"Unexpected HTTP status: {status}", status=status, **context)


def classify_error(error: Exception) -> PlanningCenterError:
    """
    Classify a generic exception into a structured PlanningCenterError.

    Args:
        error: The original exception

    Returns:
        Classified PlanningCenterError instance
    """
    if isinstance(error, PlanningCenterError):
        return error

    if isinstance(error, httpx.TimeoutException):
        return RequestTimeoutError(str(error) or "Request timeout", original_error=error)
    if isinstance(error, httpx.TransportError):
        return NetworkError(str(error) or "Network error", original_error=error)
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return error_from_response(
            response.status_code,
            response.text,
            response.headers,
            url=str(error.request.url),
            method=error.request.method,
        )

    return PlanningCenterError(str(error), original_error=error)


def is_retryable_error(error: Exception) -> bool:
    """
    Check if an error is retryable.

    Rate limits, transient server errors and network failures are retried.
    Timeouts and client errors are not.

    Args:
        error: The error to check

    Returns:
        True if the error is retryable
    """
    if isinstance(error, ServerError):
        return error.is_transient
    return isinstance(error, (RateLimitError, NetworkError))


def get_retry_delay(error: Exception) -> Optional[int]:
    """
    Get the retry delay from an error if available.

    Args:
        error: The error to check

    Returns:
        Retry delay in seconds, or None if not specified
    """
    if isinstance(error, RateLimitError) and error.retry_after is not None:
        return error.retry_after
    return None


def create_user_friendly_message(error: PlanningCenterError) -> str:
    """
    Create a user-friendly error message.

    Args:
        error: The PlanningCenterError to convert

    Returns:
        User-friendly error message
    """
    if isinstance(error, AuthenticationError):
        return (
            "Authentication failed. Please check your Personal Access Token "
            "(format: app_id:secret) or OAuth credentials."
        )

    elif isinstance(error, AuthorizationError):
        return "You don't have permission to access this resource. Please check your Planning Center permissions."

    elif isinstance(error, NotFoundError):
        return "The requested resource was not found."

    elif isinstance(error, RateLimitError):
        if error.retry_after:
            return f"Rate limit exceeded. Please try again in {error.retry_after} seconds."
        return "Rate limit exceeded. Please try again later."

    elif isinstance(error, InvalidRequestError):
        if error.errors:
            problems = [
                e.get("detail") or e.get("title") or "invalid value"
                for e in error.errors
            ]
            return "Validation failed: " + "; ".join(problems)
        return "The request was rejected by the API. Please check your input."

    elif isinstance(error, NetworkError):
        return "Network error occurred. Please check your internet connection and try again."

    elif isinstance(error, RequestTimeoutError):
        return "The request timed out. Please try again."

    elif isinstance(error, ServerError):
        return "A Planning Center server error occurred. Please try again later."

    elif isinstance(error, ConfigurationError):
        return error.message

    else:
        return f"An error occurred: {error.message}"
