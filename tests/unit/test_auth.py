"""Tests for authentication."""

import base64
from types import SimpleNamespace

import httpx
import pytest

from pco_cli.core.client.auth import (
    OAuthAuthenticator,
    PersonalAccessTokenAuthenticator,
    create_authenticator,
)
from pco_cli.core.client.errors import AuthenticationError, ConfigurationError


def oauth_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestPersonalAccessToken:
    """Test cases for PersonalAccessTokenAuthenticator."""

    @pytest.mark.asyncio
    async def test_basic_header(self) -> None:
        header = await PersonalAccessTokenAuthenticator("app:secret").get_authorization_header()
        assert header == "Basic " + base64.b64encode(b"app:secret").decode("ascii")

    def test_secret_may_contain_colon(self) -> None:
        PersonalAccessTokenAuthenticator("app:sec:ret")

    @pytest.mark.parametrize("token", ["", "nocolon", ":secret", "app:"])
    def test_invalid_tokens(self, token: str) -> None:
        with pytest.raises(ConfigurationError):
            PersonalAccessTokenAuthenticator(token)


class TestOAuth:
    """Test cases for OAuthAuthenticator."""

    def test_requires_credentials(self) -> None:
        with pytest.raises(ConfigurationError):
            OAuthAuthenticator()

    @pytest.mark.asyncio
    async def test_static_access_token(self) -> None:
        auth = OAuthAuthenticator(access_token="abc")
        assert await auth.get_authorization_header() == "Bearer abc"

    @pytest.mark.asyncio
    async def test_client_credentials_grant(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"access_token": "fresh", "expires_in": 7200})

        auth = OAuthAuthenticator(client_id="id", client_secret="secret", http_client=oauth_client(handler))

        assert await auth.get_authorization_header() == "Bearer fresh"
        assert await auth.get_authorization_header() == "Bearer fresh"
        assert len(requests) == 1
        assert b"grant_type=client_credentials" in requests[0].content
        assert requests[0].headers["Authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_refresh_token_grant_when_expiring(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"access_token": f"token-{len(requests)}", "expires_in": 60})

        auth = OAuthAuthenticator(
            client_id="id",
            client_secret="secret",
            refresh_token="r1",
            http_client=oauth_client(handler),
        )

        first = await auth.get_authorization_header()
        # expires_in is inside the refresh margin, so the next call refreshes again
        second = await auth.get_authorization_header()

        assert first == "Bearer token-1"
        assert second == "Bearer token-2"
        assert b"grant_type=refresh_token" in requests[0].content

    @pytest.mark.asyncio
    async def test_token_request_failure(self) -> None:
        auth = OAuthAuthenticator(
            client_id="id",
            client_secret="bad",
            http_client=oauth_client(lambda request: httpx.Response(401, json={"error": "invalid_client"})),
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await auth.get_authorization_header()
        assert exc_info.value.status == 401


class TestCreateAuthenticator:
    """Test cases for create_authenticator."""

    @staticmethod
    def settings(**values) -> SimpleNamespace:
        defaults = dict(
            personal_access_token=None,
            client_id=None,
            client_secret=None,
            access_token=None,
            refresh_token=None,
            token_url="https://api.example.test/oauth/token",
        )
        defaults.update(values)
        return SimpleNamespace(**defaults)

    def test_prefers_personal_access_token(self) -> None:
        auth = create_authenticator(self.settings(personal_access_token="a:b", client_id="x", client_secret="y"))
        assert isinstance(auth, PersonalAccessTokenAuthenticator)

    def test_oauth(self) -> None:
        auth = create_authenticator(self.settings(client_id="x", client_secret="y"))
        assert isinstance(auth, OAuthAuthenticator)
        assert auth.token_url == "https://api.example.test/oauth/token"

    def test_no_credentials(self) -> None:
        with pytest.raises(ConfigurationError):
            create_authenticator(self.settings())
