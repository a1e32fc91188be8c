"""Resilient HTTP client for the Jira REST API.

This module provides ResilientClient, the single request pipeline used for
every API call. Each request:

- carries the static Authorization/Accept/Content-Type headers derived once
  by AuthHeaderProvider;
- is bounded by the configured connect and read timeouts;
- is retried with deterministic exponential backoff when the failure is
  transient (5xx or network);
- surfaces failures as exactly one kind of RequestError.

Resource Management:
    The client owns one httpx.AsyncClient (and its connection pool).
    Use it as an async context manager for proper cleanup:

        async with ResilientClient(credentials) as client:
            issue = await client.get("/rest/api/3/issue/PROJ-1")

Testability:
    Pass ``transport=httpx.MockTransport(handler)`` to serve canned
    responses, and a no-op ``sleeper`` to skip backoff delays.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

import httpx

from jiralens.config.settings import Credentials
from jiralens.integrations.auth import AuthHeaderProvider
from jiralens.utils.errors import (
    AuthenticationError,
    ClientRequestError,
    NetworkError,
    RequestError,
    ResponseParseError,
    ServerError,
)
from jiralens.utils.retry import AsyncSleeper, RetryPolicy, retry_async

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

HTTP_UNAUTHORIZED = 401

# Maximum length for response bodies echoed into log lines
MAX_LOG_BODY_LENGTH = 200


def _truncate(body: str, limit: int = MAX_LOG_BODY_LENGTH) -> str:
    if len(body) <= limit:
        return body
    return body[:limit] + "... [truncated]"


def _describe_cause(error: Exception) -> str:
    detail = str(error)
    name = type(error).__name__
    return f"{name}: {detail}" if detail else name


def classify_status(
    status_code: int,
    response_body: str,
    identity: str,
    original_error: BaseException | None = None,
) -> RequestError:
    """Map a non-success HTTP status to its RequestError kind."""
    if status_code == HTTP_UNAUTHORIZED:
        return AuthenticationError(identity, response_body, original_error)
    if status_code >= 500:
        return ServerError(status_code, response_body, original_error)
    return ClientRequestError(status_code, response_body, original_error)


def classify_error(error: Exception, identity: str) -> RequestError:
    """Map a failure from one request attempt to exactly one RequestError kind.

    Args:
        error: Exception raised while sending the request or checking its status
        identity: Configured email, included in authentication failures

    Returns:
        The classified error (already-classified errors are returned as-is)
    """
    if isinstance(error, RequestError):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        return classify_status(
            error.response.status_code,
            error.response.text,
            identity,
            original_error=error,
        )
    # Transport, protocol and body-decoding failures alike
    return NetworkError(_describe_cause(error), original_error=error)


class ResilientClient:
    """Executes authenticated Jira API requests with timeouts and retries.

    The client keeps no per-request state, so any number of requests may run
    concurrently on one instance.

    Attributes:
        _credentials: Validated connection settings
        _auth: Header provider (computed once, shared by all requests)
        _retry_policy: Backoff policy applied to each request
        _sleeper: Async sleep callable (injectable for testing)
        _http_client: Underlying httpx client with base URL, headers and timeouts
    """

    def __init__(
        self,
        credentials: Credentials,
        auth: AuthHeaderProvider | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        sleeper: AsyncSleeper | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: Validated connection settings
            auth: Header provider; derived from credentials when omitted
            retry_policy: Backoff policy; derived from credentials when omitted
            sleeper: Optional async sleep callable (defaults to asyncio.sleep)
            transport: Optional httpx transport (e.g. MockTransport in tests)

        Raises:
            ConfigurationError: If the credentials cannot produce a header
        """
        self._credentials = credentials
        self._auth = auth if auth is not None else AuthHeaderProvider.from_credentials(credentials)
        self._retry_policy = (
            retry_policy if retry_policy is not None else RetryPolicy.from_credentials(credentials)
        )
        self._sleeper = sleeper

        timeout = httpx.Timeout(
            credentials.read_timeout_seconds,
            connect=credentials.connect_timeout_seconds,
        )
        self._http_client = httpx.AsyncClient(
            base_url=credentials.base_url,
            headers=self._auth.default_headers(),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client. Safe to call multiple times."""
        if not self._http_client.is_closed:
            await self._http_client.aclose()

    @property
    def is_closed(self) -> bool:
        return self._http_client.is_closed

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    @property
    def base_url(self) -> str:
        return self._credentials.base_url

    async def get(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET ``path`` and return the decoded JSON body."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        """POST a JSON body to ``path`` and return the decoded JSON body."""
        return await self.request("POST", path, json_body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        """PUT a JSON body to ``path`` and return the decoded JSON body."""
        return await self.request("PUT", path, json_body=body)

    async def delete(self, path: str) -> Any:
        """DELETE ``path``; returns the decoded body, or None when empty."""
        return await self.request("DELETE", path)

    async def request(
        self,
        method: HttpMethod,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> Any:
        """Execute a request through the auth/timeout/retry/classification pipeline.

        Args:
            method: HTTP method
            path: API path relative to the base URL (e.g. "/rest/api/3/issue/PROJ-1")
            params: Optional query parameters
            json_body: Optional JSON request body

        Returns:
            Decoded JSON response, or None for an empty body

        Raises:
            AuthenticationError: On HTTP 401 (never retried)
            ClientRequestError: On other 4xx statuses (never retried)
            ServerError: On 5xx statuses, after retries are exhausted
            NetworkError: On transport failures, after retries are exhausted
            ResponseParseError: If a successful body is not valid JSON
        """
        max_attempts = self._retry_policy.max_attempts

        async def attempt() -> Any:
            return await self._send_once(method, path, params=params, json_body=json_body)

        def log_retry(retry_number: int, delay: float, error: RequestError) -> None:
            logger.warning(
                "%s %s failed (attempt %d/%d), retrying in %.1fs: %s",
                method,
                path,
                retry_number,
                max_attempts,
                delay,
                _truncate(str(error)),
            )

        return await retry_async(
            attempt,
            self._retry_policy,
            sleeper=self._sleeper,
            on_retry=log_retry,
        )

    async def _send_once(
        self,
        method: HttpMethod,
        path: str,
        *,
        params: dict[str, str] | None,
        json_body: Any,
    ) -> Any:
        """Run one attempt and return the decoded body or raise a RequestError."""
        logger.debug("%s %s", method, path)
        kwargs: dict[str, Any] = {}
        if params is not None:
            kwargs["params"] = params
        if json_body is not None:
            kwargs["json"] = json_body

        try:
            response = await self._http_client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            error = classify_error(e, self._auth.identity)
            logger.debug(
                "%s %s -> %s (status=%s, body=%s)",
                method,
                path,
                type(error).__name__,
                error.status_code,
                _truncate(error.response_body),
            )
            raise error from e

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(
                f"Failed to parse API response as JSON: {_truncate(response.text)}",
                response_body=response.text,
                original_error=e,
            ) from e


__all__ = [
    "HttpMethod",
    "ResilientClient",
    "classify_error",
    "classify_status",
]
