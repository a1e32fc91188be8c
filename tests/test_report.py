"""Tests for jiralens.ui.report module."""

from io import StringIO

import pytest
from rich.console import Console

from jiralens.integrations.models import Ticket
from jiralens.ui.report import render_ticket


def render(ticket: Ticket) -> str:
    buffer = StringIO()
    render_ticket(ticket, console=Console(file=buffer, width=120, color_system=None))
    return buffer.getvalue()


class TestRenderTicket:
    def test_full_report(self, sample_issue):
        output = render(Ticket.from_api(sample_issue))

        assert "JIRA TICKET DETAILS" in output
        assert "Key:" in output
        assert "AIP-6" in output
        assert "10006" in output
        assert "Add retry support" in output
        assert "Retry transient failures." in output
        assert "In Progress" in output
        assert "Story" in output
        assert "High" in output
        assert "Alex Doe" in output
        assert "alex@example.com" in output
        assert "Sam Roe" in output
        assert "AI Platform" in output
        assert "2024-01-15T10:30:00.000+0000" in output
        assert "Ticket details retrieved successfully!" in output

    def test_unassigned_and_missing_description(self, sample_issue):
        sample_issue["fields"]["assignee"] = None
        sample_issue["fields"]["description"] = None

        output = render(Ticket.from_api(sample_issue))

        assert "Unassigned" in output
        assert "N/A" in output

    def test_minimal_ticket(self):
        output = render(Ticket(key="AIP-1"))

        assert "AIP-1" in output
        assert "N/A" in output
        assert "Summary" not in output
        assert "Ticket details retrieved successfully!" in output

    @pytest.mark.parametrize("summary", ["[bold]not markup[/bold]", "list[int]"])
    def test_text_is_not_interpreted_as_markup(self, sample_issue, summary):
        sample_issue["fields"]["summary"] = summary

        output = render(Ticket.from_api(sample_issue))

        assert summary in output
