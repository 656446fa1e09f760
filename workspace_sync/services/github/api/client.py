"""
GitHub API client for making authenticated requests.

Every call either returns a parsed payload or raises a typed error carrying
the HTTP status and response body. No retries.
"""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from workspace_sync.config import config
from workspace_sync.services.github.errors import (
    MalformedResponseError,
    NotFoundError,
    RemoteAPIError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ACCEPT_JSON = "application/vnd.github.v3+json"
ACCEPT_RAW = "application/vnd.github.v3.raw"


class GitHubAPIClient:
    """Base client for GitHub API interactions authenticated with a personal access token."""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize GitHub API client.

        Args:
            token: GitHub personal access token
            base_url: API root (defaults to config)
            user_agent: Fixed client identifier (defaults to config)
            timeout: Request timeout in seconds (defaults to config)
            transport: Optional httpx transport, used to route requests in-process
        """
        self.token = token
        self.base_url = (base_url or config.GITHUB_API_URL).rstrip("/")
        self.user_agent = user_agent or config.GITHUB_USER_AGENT
        self.timeout = timeout if timeout is not None else config.GITHUB_REQUEST_TIMEOUT
        self._transport = transport

    def _get_headers(self, accept: str = ACCEPT_JSON) -> Dict[str, str]:
        return {
            "Authorization": f"token {self.token}",
            "Accept": accept,
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }

    def _build_url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        accept: str = ACCEPT_JSON,
    ) -> Any:
        """Make a GitHub API request and return the decoded JSON body.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: API path relative to the base URL, or an absolute URL
            data: Request body data
            params: Query parameters
            accept: Accept header value

        Returns:
            Decoded JSON payload, or an empty dict for empty bodies

        Raises:
            NotFoundError: On 404
            RemoteAPIError: On any other non-2xx status or transport failure
            MalformedResponseError: If a 2xx body is not valid JSON
        """
        response = await self._send(method, path, data, params, accept)
        if not response.content:
            return {}
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"GitHub API {method} {response.request.url} returned invalid JSON: {e}"
            ) from e

    async def request_text(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        accept: str = ACCEPT_RAW,
    ) -> str:
        """Make a GitHub API request and return the raw body text."""
        response = await self._send(method, path, None, params, accept)
        return response.text

    async def _send(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        accept: str,
    ) -> httpx.Response:
        url = self._build_url(path)
        headers = self._get_headers(accept)

        try:
            timeout_config = httpx.Timeout(self.timeout, connect=config.GITHUB_CONNECT_TIMEOUT)
            response = await self._execute_http_request(
                method, url, headers, data, params, timeout_config
            )
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error: {e}"
            logger.error(error_msg)
            raise RemoteAPIError(error_msg, status_code=None, body=str(e), method=method, url=url) from e

        self._process_response(response, method, url)
        return response

    async def _execute_http_request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        timeout_config: httpx.Timeout,
    ) -> httpx.Response:
        """Execute HTTP request with method routing.

        Raises:
            ValueError: If HTTP method is unsupported
        """
        method_upper = method.upper()
        if method_upper not in ("GET", "POST", "PUT", "PATCH", "DELETE"):
            raise ValueError(f"Unsupported HTTP method: {method}")

        async with httpx.AsyncClient(
            timeout=timeout_config,
            trust_env=False,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            if method_upper == "GET":
                return await client.get(url, headers=headers, params=params)
            # DELETE carries a body for the Contents API, which client.delete() cannot send
            return await client.request(method_upper, url, json=data, headers=headers, params=params)

    def _process_response(self, response: httpx.Response, method: str, url: str) -> None:
        """Raise a typed error unless the response status is 2xx."""
        if response.is_success:
            logger.info(
                f"GitHub API {method} request to {url} "
                f"successful (status: {response.status_code})"
            )
            return

        error_msg = f"GitHub API request failed (status {response.status_code}): {response.text}"
        if response.status_code == 404:
            logger.warning(f"GitHub API {method} {url} not found")
            raise NotFoundError(
                error_msg, status_code=404, body=response.text, method=method, url=url
            )
        logger.error(error_msg)
        raise RemoteAPIError(
            error_msg, status_code=response.status_code, body=response.text, method=method, url=url
        )

    @staticmethod
    def parse(schema: Union[Type[ModelT], TypeAdapter], payload: Any, what: str) -> Any:
        """Validate ``payload`` against ``schema`` (a model class or a TypeAdapter).

        Raises:
            MalformedResponseError: If validation fails
        """
        try:
            if isinstance(schema, TypeAdapter):
                return schema.validate_python(payload)
            return schema.model_validate(payload)
        except ValidationError as e:
            error_msg = f"Unexpected response shape for {what}: {e}"
            logger.error(error_msg)
            raise MalformedResponseError(error_msg) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, data=data)

    async def patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PATCH", path, data=data)

    async def delete(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return await self.request("DELETE", path, data=data, params=params)
