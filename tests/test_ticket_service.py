"""Tests for jiralens.integrations.ticket_service module."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from jiralens.integrations.client import ResilientClient
from jiralens.integrations.ticket_service import (
    TICKET_PATH_PREFIX,
    TicketService,
    create_ticket_service,
)
from jiralens.utils.errors import (
    AuthenticationError,
    ClientRequestError,
    InvalidArgumentError,
    ResponseParseError,
)


@pytest.fixture
def mock_client():
    client = MagicMock(spec=ResilientClient)
    client.get = AsyncMock()
    client.close = AsyncMock()
    return client


def service_for(credentials, handler, sleeper) -> TicketService:
    client = ResilientClient(
        credentials,
        sleeper=sleeper,
        transport=httpx.MockTransport(handler),
    )
    return TicketService(client)


class TestGetTicketValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", [None, "", "   ", "\n\t"])
    async def test_blank_key_rejected_without_request(self, mock_client, key):
        service = TicketService(mock_client)

        with pytest.raises(InvalidArgumentError, match="Ticket key cannot be null or empty"):
            await service.get_ticket(key)

        mock_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_key_is_trimmed(self, mock_client):
        mock_client.get.return_value = {"key": "AI-6"}
        service = TicketService(mock_client)

        ticket = await service.get_ticket("  AI-6  ")

        mock_client.get.assert_awaited_once_with(f"{TICKET_PATH_PREFIX}AI-6")
        assert ticket.key == "AI-6"


class TestGetTicket:
    @pytest.mark.asyncio
    async def test_returns_ticket(self, credentials, make_handler, sleeper, sample_issue):
        handler = make_handler(httpx.Response(200, json=sample_issue))

        async with service_for(credentials, handler, sleeper) as service:
            ticket = await service.get_ticket("AIP-6")

        assert handler.requests[0].url.path == "/rest/api/3/issue/AIP-6"
        assert handler.requests[0].method == "GET"
        assert ticket.key == "AIP-6"
        assert ticket.summary == "Add retry support"
        assert ticket.description == "Retry transient failures."

    @pytest.mark.asyncio
    async def test_authentication_failure_propagates(self, credentials, make_handler, sleeper):
        handler = make_handler(httpx.Response(401, content=b"Unauthorized"))

        async with service_for(credentials, handler, sleeper) as service:
            with pytest.raises(AuthenticationError):
                await service.get_ticket("AIP-6")

        assert handler.call_count == 1

    @pytest.mark.asyncio
    async def test_missing_ticket_propagates(self, credentials, make_handler, sleeper):
        handler = make_handler(httpx.Response(404, content=b"Issue does not exist"))

        async with service_for(credentials, handler, sleeper) as service:
            with pytest.raises(ClientRequestError) as exc_info:
                await service.get_ticket("AIP-404")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, [], "text", {"id": "1"}])
    async def test_unexpected_payload_raises_parse_error(self, mock_client, payload):
        mock_client.get.return_value = payload
        service = TicketService(mock_client)

        with pytest.raises(ResponseParseError):
            await service.get_ticket("AIP-6")


class TestServiceLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self, mock_client):
        async with TicketService(mock_client):
            pass

        mock_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_ticket_service(self, credentials):
        service = create_ticket_service(credentials)

        assert isinstance(service, TicketService)
        assert service._client.base_url == "https://company.atlassian.net"
        await service.close()
        assert service._client.is_closed is True
