"""Jira REST API integration for jiralens.

This package contains:
- auth: AuthHeaderProvider for the static Basic Auth header
- client: ResilientClient with timeouts, retry and error classification
- document: rich-text document tree parsing and plain-text extraction
- models: Ticket data model
- ticket_service: TicketService for fetching tickets by key
"""

from jiralens.integrations.auth import AuthHeaderProvider
from jiralens.integrations.client import ResilientClient, classify_error
from jiralens.integrations.document import (
    ArrayNode,
    DocumentNode,
    ObjectNode,
    OtherNode,
    TextNode,
    extract_description,
    extract_text,
    parse_document,
)
from jiralens.integrations.models import Ticket, TicketFields
from jiralens.integrations.ticket_service import (
    TICKET_PATH_PREFIX,
    TicketService,
    create_ticket_service,
)

__all__ = [
    "AuthHeaderProvider",
    "ResilientClient",
    "classify_error",
    "ArrayNode",
    "DocumentNode",
    "ObjectNode",
    "OtherNode",
    "TextNode",
    "extract_description",
    "extract_text",
    "parse_document",
    "Ticket",
    "TicketFields",
    "TICKET_PATH_PREFIX",
    "TicketService",
    "create_ticket_service",
]
