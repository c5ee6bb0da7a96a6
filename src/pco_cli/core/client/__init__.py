"""
HTTP client layer for the Planning Center API.

This package provides the API connection, authentication, retry logic and
the structured error types raised by every request.
"""

from .auth import (
    Authenticator,
    OAuthAuthenticator,
    PersonalAccessTokenAuthenticator,
    create_authenticator,
)
from .connection import ApiConnection, DEFAULT_BASE_URL
from .errors import (
    PlanningCenterError,
    InvalidRequestError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    NetworkError,
    RequestTimeoutError,
    ConfigurationError,
    classify_error,
    create_user_friendly_message,
)
from .retry import (
    RetryManager,
    RetryConfig,
    RetryStats,
    RetryStrategy,
    retry_with_backoff,
)

__all__ = [
    "Authenticator",
    "OAuthAuthenticator",
    "PersonalAccessTokenAuthenticator",
    "create_authenticator",
    "ApiConnection",
    "DEFAULT_BASE_URL",
    "PlanningCenterError",
    "InvalidRequestError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "NetworkError",
    "RequestTimeoutError",
    "ConfigurationError",
    "classify_error",
    "create_user_friendly_message",
    "RetryManager",
    "RetryConfig",
    "RetryStats",
    "RetryStrategy",
    "retry_with_backoff",
]
