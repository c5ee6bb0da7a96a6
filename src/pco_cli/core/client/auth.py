"""
Authentication for the Planning Center API.

Two schemes are supported: Personal Access Tokens (``app_id:secret`` sent as
HTTP Basic) and OAuth 2.0 bearer tokens obtained with the client credentials
or refresh token grant.
"""

import asyncio
import base64
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Protocol

import httpx

from .errors import AuthenticationError, ConfigurationError, classify_error

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URL = "https://api.planningcenteronline.com/oauth/token"
REFRESH_MARGIN = timedelta(minutes=5)


class Authenticator(Protocol):
    """Produces the Authorization header value for a request."""

    async def get_authorization_header(self) -> str:
        ...

    async def aclose(self) -> None:
        ...


def _basic(username: str, password: str) -> str:
    credentials = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {credentials}"


class PersonalAccessTokenAuthenticator:
    """Authenticates with a Personal Access Token in ``app_id:secret`` form."""

    def __init__(self, token: str):
        if not token or ":" not in token:
            raise ConfigurationError(
                "Personal Access Token must be in the format 'app_id:secret'",
                config_field="personal_access_token",
            )
        app_id, secret = token.split(":", 1)
        if not app_id or not secret:
            raise ConfigurationError(
                "Personal Access Token must include both app_id and secret",
                config_field="personal_access_token",
            )
        self._header = _basic(app_id, secret)

    async def get_authorization_header(self) -> str:
        return self._header

    async def aclose(self) -> None:
        return None


class OAuthAuthenticator:
    """
    OAuth 2.0 bearer token authenticator.

    Tokens are requested from the token endpoint when none is held or the
    current one expires within five minutes. With client credentials the
    ``client_credentials`` grant is used, or ``refresh_token`` when a refresh
    token is available. An access token given without client credentials is
    used as-is and never refreshed.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        token_url: str = DEFAULT_TOKEN_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not access_token and not (client_id and client_secret):
            raise ConfigurationError(
                "OAuth requires an access token or a client id and secret",
                config_field="client_id",
            )
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._expires_at: Optional[datetime] = None
        self._http_client = http_client
        self._owns_client = http_client is None
        self._lock = asyncio.Lock()

    @property
    def can_refresh(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _needs_token(self) -> bool:
        if not self._access_token:
            return True
        if self._expires_at is None:
            return False
        return datetime.now(timezone.utc) + REFRESH_MARGIN >= self._expires_at

    async def get_authorization_header(self) -> str:
        if self._needs_token():
            async with self._lock:
                if self._needs_token():
                    await self._request_token()
        return f"Bearer {self._access_token}"

    async def _request_token(self) -> None:
        if not self.can_refresh:
            raise AuthenticationError(
                "Access token expired and no client credentials are configured",
                auth_type="oauth",
            )

        if self._refresh_token:
            form: Dict[str, Any] = {
                "grant_type": "refresh_token",
                "refresh_token": self._refresh_token,
            }
        else:
            form = {"grant_type": "client_credentials"}

        if self._http_client is None:
            self._http_client = httpx.AsyncClient()

        logger.debug(f"Requesting OAuth token ({form['grant_type']}) from {self.token_url}")
        try:
            response = await self._http_client.post(
                self.token_url,
                data=form,
                headers={
                    "Authorization": _basic(self.client_id, self.client_secret),
                    "Accept": "application/json",
                },
            )
        except httpx.HTTPError as e:
            raise classify_error(e) from e

        if response.status_code >= 400:
            raise AuthenticationError(
                f"Token request failed with status {response.status_code}",
                auth_type="oauth",
                status=response.status_code,
                request_url=self.token_url,
                request_method="POST",
                response_body=response.text,
            )

        payload = response.json()
        token = payload.get("access_token")
        if not token:
            raise AuthenticationError("Token response did not contain an access_token", auth_type="oauth")

        self._access_token = token
        self._refresh_token = payload.get("refresh_token") or self._refresh_token
        expires_in = payload.get("expires_in")
        self._expires_at = (
            datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))
            if expires_in else None
        )
        logger.info("Obtained OAuth access token")

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


def create_authenticator(settings: Any) -> Authenticator:
    """
    Pick an authenticator from settings.

    A Personal Access Token wins over OAuth settings.

    Raises:
        ConfigurationError: If no credentials are configured
    """
    if settings.personal_access_token:
        return PersonalAccessTokenAuthenticator(settings.personal_access_token)
    if settings.access_token or (settings.client_id and settings.client_secret):
        return OAuthAuthenticator(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            access_token=settings.access_token,
            refresh_token=settings.refresh_token,
            token_url=settings.token_url,
        )
    raise ConfigurationError(
        "No Planning Center credentials configured. Set PLANNING_CENTER_PAT "
        "(app_id:secret) or OAuth client settings.",
        config_field="personal_access_token",
    )
