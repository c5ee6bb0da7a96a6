"""
HTTP connection to the Planning Center API.

ApiConnection wraps an httpx.AsyncClient: it attaches authentication and
JSON:API headers, retries transient failures and turns error responses into
structured PlanningCenterError exceptions.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

import httpx

from pco_cli import USER_AGENT
from ..jsonapi import JsonApiResource, Page
from ..query import QueryParameters
from .auth import Authenticator
from .errors import PlanningCenterError, error_from_response, classify_error
from .retry import RetryConfig, RetryManager

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.planningcenteronline.com"
JSON_API_MEDIA_TYPE = "application/vnd.api+json"

Params = Union[QueryParameters, Dict[str, Any], None]


class ApiConnection:
    """Async JSON:API connection with auth, retries and error mapping."""

    def __init__(
        self,
        authenticator: Authenticator,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        user_agent: str = USER_AGENT,
        retry_config: Optional[RetryConfig] = None,
        detailed_logging: bool = False,
        default_headers: Optional[Dict[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the connection.

        Args:
            authenticator: Supplies the Authorization header
            base_url: API root URL
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            retry_config: Retry behavior for transient failures
            detailed_logging: Log request and response bodies at debug level
            default_headers: Extra headers sent with every request
            http_client: Pre-built client; the connection will not close it
            transport: Transport for a client built by the connection
        """
        self.authenticator = authenticator
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.detailed_logging = detailed_logging
        self.retry_manager = RetryManager(retry_config)

        headers = {
            "Accept": JSON_API_MEDIA_TYPE,
            "User-Agent": user_agent,
        }
        headers.update(default_headers or {})

        if http_client is not None:
            self._client = http_client
            self._owns_client = False
            self._client.headers.update(headers)
        else:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(timeout),
                transport=transport,
            )
            self._owns_client = True

    async def __aenter__(self) -> "ApiConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this connection created it."""
        if self._owns_client:
            await self._client.aclose()
        await self.authenticator.aclose()

    async def get(self, path: str, params: Params = None) -> Dict[str, Any]:
        """GET a path and return the decoded JSON document."""
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("POST", path, body=body)

    async def put(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("PUT", path, body=body)

    async def patch(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("PATCH", path, body=body)

    async def delete(self, path: str) -> None:
        await self._request("DELETE", path)

    async def get_page(self, path: str, params: Params = None) -> Page[JsonApiResource]:
        """
        GET one page of a list endpoint.

        Args:
            path: Relative path or absolute ``next`` link
            params: Query parameters

        Returns:
            Parsed page of resources
        """
        document = await self.get(path, params)
        return Page.from_document(document)

    async def _request(
        self,
        method: str,
        path: str,
        params: Params = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if isinstance(params, QueryParameters):
            query = params.to_params()
        elif params:
            query = list(params.items())
        else:
            query = None

        url = path if path.startswith(("http://", "https://")) else f"{self.base_url}/{path.lstrip('/')}"

        async def send() -> Dict[str, Any]:
            headers = {"Authorization": await self.authenticator.get_authorization_header()}
            content = None
            if body is not None:
                headers["Content-Type"] = JSON_API_MEDIA_TYPE
                content = json.dumps(body)
                if self.detailed_logging:
                    logger.debug(f"{method} {url} body: {content}")

            logger.debug(f"{method} request to {url}")
            try:
                response = await self._client.request(
                    method, url, params=query, headers=headers, content=content
                )
            except httpx.HTTPError as e:
                error = classify_error(e)
                error.request_url = url
                error.request_method = method
                raise error from e

            return self._handle_response(response, method)

        return await self.retry_manager.retry(send, context={"method": method, "url": url})

    def _handle_response(self, response: httpx.Response, method: str) -> Dict[str, Any]:
        url = str(response.request.url)
        logger.debug(f"{method} {url} -> {response.status_code}")
        if self.detailed_logging and response.content:
            logger.debug(f"Response body: {response.text}")

        if response.status_code >= 400:
            error = error_from_response(
                response.status_code,
                response.text,
                response.headers,
                url=url,
                method=method,
            )
            if response.status_code == 404:
                logger.debug(f"HTTP 404 for {method} {url}")
            else:
                logger.error(f"HTTP {response.status_code} error for {method} {url}: {response.text}")
            raise error

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise PlanningCenterError(
                "Response was not valid JSON",
                status=response.status_code,
                code="INVALID_RESPONSE",
                request_id=response.headers.get("X-Request-Id"),
                request_url=url,
                request_method=method,
                response_body=response.text,
                original_error=e,
            ) from e
