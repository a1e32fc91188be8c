"""TicketService orchestration layer for ticket fetching.

This module provides the thin service that validates a ticket key, requests
the issue through ResilientClient, and builds a Ticket from the response.

Example usage:
    async with create_ticket_service(credentials) as service:
        ticket = await service.get_ticket("PROJ-123")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jiralens.integrations.auth import AuthHeaderProvider
from jiralens.integrations.client import ResilientClient
from jiralens.integrations.models import Ticket
from jiralens.utils.errors import InvalidArgumentError, ResponseParseError

if TYPE_CHECKING:
    from jiralens.config.settings import Credentials
    from jiralens.utils.retry import AsyncSleeper

logger = logging.getLogger(__name__)

TICKET_PATH_PREFIX = "/rest/api/3/issue/"


class TicketService:
    """Retrieves Jira issues by key.

    Attributes:
        _client: ResilientClient used for every request
    """

    def __init__(self, client: ResilientClient) -> None:
        self._client = client

    async def get_ticket(self, ticket_key: str | None) -> Ticket:
        """Fetch a ticket by key (e.g. "AI-6").

        Surrounding whitespace is trimmed before the key is used.

        Args:
            ticket_key: Issue key

        Returns:
            The fetched Ticket

        Raises:
            InvalidArgumentError: If the key is None, empty or whitespace-only
                (no request is made)
            ResponseParseError: If the response is not an issue object
            RequestError: Any classified request failure from the client
        """
        if ticket_key is None or not ticket_key.strip():
            raise InvalidArgumentError("Ticket key cannot be null or empty")

        key = ticket_key.strip()
        logger.info("Fetching ticket %s", key)
        payload = await self._client.get(TICKET_PATH_PREFIX + key)
        return self._build_ticket(payload)

    @staticmethod
    def _build_ticket(payload: Any) -> Ticket:
        if not isinstance(payload, dict):
            raise ResponseParseError(
                f"Expected an issue object, got {type(payload).__name__}",
            )
        try:
            return Ticket.from_api(payload)
        except ValueError as e:
            raise ResponseParseError(f"Malformed issue response: {e}", original_error=e) from e

    async def close(self) -> None:
        """Close the underlying client."""
        await self._client.close()

    async def __aenter__(self) -> TicketService:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def create_ticket_service(
    credentials: Credentials,
    *,
    sleeper: AsyncSleeper | None = None,
) -> TicketService:
    """Wire the header provider, client and service for the given credentials.

    The Authorization header is derived here, so blank credentials raise
    ConfigurationError before any request is attempted.
    """
    auth = AuthHeaderProvider.from_credentials(credentials)
    client = ResilientClient(credentials, auth, sleeper=sleeper)
    return TicketService(client)


__all__ = [
    "TICKET_PATH_PREFIX",
    "TicketService",
    "create_ticket_service",
]
