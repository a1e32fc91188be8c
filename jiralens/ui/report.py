"""Console report for a fetched ticket."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from jiralens.integrations.models import Ticket, User
from jiralens.utils.console import console as default_console

NOT_AVAILABLE = "N/A"
LABEL_WIDTH = 12


def _line(label: str, value: str | None) -> str:
    padded = f"{label}:".ljust(LABEL_WIDTH)
    return f"  [bold cyan]{padded}[/bold cyan]{escape(value or NOT_AVAILABLE)}"


def _person_lines(label: str, user: User | None, missing: str) -> list[str]:
    if user is None:
        return [_line(label, missing)]
    lines = [_line(label, user.display_name)]
    if user.email_address:
        lines.append(" " * (LABEL_WIDTH + 2) + escape(user.email_address))
    return lines


def render_ticket(ticket: Ticket, console: Console | None = None) -> None:
    """Print a formatted report of ``ticket``.

    Args:
        ticket: The ticket to render
        console: Target console (defaults to the shared stdout console)
    """
    out = console if console is not None else default_console

    out.print(Rule("[bold magenta]JIRA TICKET DETAILS[/bold magenta]"))

    out.print("\n[bold white]Basic Information[/bold white]")
    out.print(_line("Key", ticket.key))
    out.print(_line("ID", ticket.id))
    out.print(_line("URL", ticket.self_url))

    fields = ticket.fields
    if fields is not None:
        out.print("\n[bold white]Summary[/bold white]")
        out.print(f"  {escape(fields.summary or NOT_AVAILABLE)}")

        out.print("\n[bold white]Description[/bold white]")
        description = fields.description_text
        if description and description.strip():
            for text_line in description.split("\n"):
                out.print(f"  {escape(text_line)}")
        else:
            out.print(f"  {NOT_AVAILABLE}")

        out.print("\n[bold white]Status & Type[/bold white]")
        if fields.status is not None:
            out.print(_line("Status", fields.status.name))
        if fields.issue_type is not None:
            out.print(_line("Issue Type", fields.issue_type.name))
        if fields.priority is not None:
            out.print(_line("Priority", fields.priority.name))

        out.print("\n[bold white]People[/bold white]")
        for person_line in _person_lines("Assignee", fields.assignee, "Unassigned"):
            out.print(person_line)
        if fields.reporter is not None:
            for person_line in _person_lines("Reporter", fields.reporter, NOT_AVAILABLE):
                out.print(person_line)

        if fields.project is not None:
            out.print("\n[bold white]Project[/bold white]")
            out.print(_line("Key", fields.project.key))
            out.print(_line("Name", fields.project.name))

        out.print("\n[bold white]Dates[/bold white]")
        if fields.created is not None:
            out.print(_line("Created", fields.created))
        if fields.updated is not None:
            out.print(_line("Updated", fields.updated))

    out.print()
    out.print(Rule())
    out.print("[bold green]Ticket details retrieved successfully![/bold green]")


__all__ = [
    "NOT_AVAILABLE",
    "render_ticket",
]
