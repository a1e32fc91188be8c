"""Ticket data model for Jira REST API v3 issue responses.

Each record is a frozen dataclass built from one decoded API response by a
``from_api`` constructor. Unknown fields are ignored; missing nested objects
become None. The description is kept as a parsed DocumentNode and flattened
to text on access.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from jiralens.integrations.document import DocumentNode, extract_text, parse_document


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _mapping_or_none(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def parse_timestamp(timestamp_str: str | None) -> datetime | None:
    """Parse a Jira ISO timestamp such as ``2024-01-15T10:30:00.000+0000``.

    Returns:
        datetime object or None if the value is missing or unparseable
    """
    if not timestamp_str:
        return None
    normalized = timestamp_str
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    if re.search(r"[+-]\d{4}$", normalized):
        normalized = normalized[:-2] + ":" + normalized[-2:]
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


@dataclass(frozen=True)
class Status:
    id: str | None = None
    name: str | None = None
    description: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Status:
        return cls(
            id=_str_or_none(data.get("id")),
            name=_str_or_none(data.get("name")),
            description=_str_or_none(data.get("description")),
        )


@dataclass(frozen=True)
class User:
    """An assignee or reporter."""

    account_id: str | None = None
    display_name: str | None = None
    email_address: str | None = None
    active: bool | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> User:
        active = data.get("active")
        return cls(
            account_id=_str_or_none(data.get("accountId")),
            display_name=_str_or_none(data.get("displayName")),
            email_address=_str_or_none(data.get("emailAddress")),
            active=active if isinstance(active, bool) else None,
        )


@dataclass(frozen=True)
class Project:
    id: str | None = None
    key: str | None = None
    name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Project:
        return cls(
            id=_str_or_none(data.get("id")),
            key=_str_or_none(data.get("key")),
            name=_str_or_none(data.get("name")),
        )


@dataclass(frozen=True)
class IssueType:
    id: str | None = None
    name: str | None = None
    description: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> IssueType:
        return cls(
            id=_str_or_none(data.get("id")),
            name=_str_or_none(data.get("name")),
            description=_str_or_none(data.get("description")),
        )


@dataclass(frozen=True)
class Priority:
    id: str | None = None
    name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Priority:
        return cls(
            id=_str_or_none(data.get("id")),
            name=_str_or_none(data.get("name")),
        )


@dataclass(frozen=True)
class TicketFields:
    """The ``fields`` object of an issue response.

    Attributes:
        summary: One-line title
        description: Rich-text description tree, or None when absent/null
        status: Workflow status
        assignee: Assigned user, None when unassigned
        reporter: Reporting user
        project: Owning project
        issue_type: Issue type (story, bug, ...)
        priority: Priority
        created: Creation timestamp as sent by the API
        updated: Last update timestamp as sent by the API
    """

    summary: str | None = None
    description: DocumentNode | None = None
    status: Status | None = None
    assignee: User | None = None
    reporter: User | None = None
    project: Project | None = None
    issue_type: IssueType | None = None
    priority: Priority | None = None
    created: str | None = None
    updated: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> TicketFields:
        description = data.get("description")
        status = _mapping_or_none(data.get("status"))
        assignee = _mapping_or_none(data.get("assignee"))
        reporter = _mapping_or_none(data.get("reporter"))
        project = _mapping_or_none(data.get("project"))
        issue_type = _mapping_or_none(data.get("issuetype"))
        priority = _mapping_or_none(data.get("priority"))
        return cls(
            summary=_str_or_none(data.get("summary")),
            description=parse_document(description) if description is not None else None,
            status=Status.from_api(status) if status is not None else None,
            assignee=User.from_api(assignee) if assignee is not None else None,
            reporter=User.from_api(reporter) if reporter is not None else None,
            project=Project.from_api(project) if project is not None else None,
            issue_type=IssueType.from_api(issue_type) if issue_type is not None else None,
            priority=Priority.from_api(priority) if priority is not None else None,
            created=_str_or_none(data.get("created")),
            updated=_str_or_none(data.get("updated")),
        )

    @property
    def description_text(self) -> str | None:
        """Description flattened to plain text."""
        if self.description is None:
            return None
        return extract_text(self.description)

    @property
    def created_at(self) -> datetime | None:
        return parse_timestamp(self.created)

    @property
    def updated_at(self) -> datetime | None:
        return parse_timestamp(self.updated)


@dataclass(frozen=True)
class Ticket:
    """A Jira issue as returned by ``GET /rest/api/3/issue/{key}``.

    The convenience accessors (summary, description, status, assignee)
    return None when ``fields`` or the nested object is absent.

    Attributes:
        key: Issue key, e.g. "PROJ-123"
        id: Numeric issue id as a string
        self_url: API URL of the issue
        fields: Issue fields, None when the response carried none
    """

    key: str
    id: str | None = None
    self_url: str | None = None
    fields: TicketFields | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Ticket:
        """Build a Ticket from a decoded issue response.

        Raises:
            ValueError: If the response has no string ``key``
        """
        key = data.get("key")
        if not isinstance(key, str) or not key:
            raise ValueError("Issue response has no 'key'")
        fields = _mapping_or_none(data.get("fields"))
        return cls(
            key=key,
            id=_str_or_none(data.get("id")),
            self_url=_str_or_none(data.get("self")),
            fields=TicketFields.from_api(fields) if fields is not None else None,
        )

    @property
    def summary(self) -> str | None:
        return self.fields.summary if self.fields is not None else None

    @property
    def description(self) -> str | None:
        return self.fields.description_text if self.fields is not None else None

    @property
    def status(self) -> str | None:
        if self.fields is None or self.fields.status is None:
            return None
        return self.fields.status.name

    @property
    def assignee(self) -> str | None:
        if self.fields is None or self.fields.assignee is None:
            return None
        return self.fields.assignee.display_name


__all__ = [
    "IssueType",
    "Priority",
    "Project",
    "Status",
    "Ticket",
    "TicketFields",
    "User",
    "parse_timestamp",
]
