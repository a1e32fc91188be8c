"""Shared pytest fixtures for jiralens tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from jiralens.config.settings import Credentials

BASE_URL = "https://company.atlassian.net"
EMAIL = "user@example.com"
API_TOKEN = "test-token"

Outcome = httpx.Response | Exception | Callable[[], httpx.Response]


class RecordingSleeper:
    """Async sleeper that records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingHandler:
    """MockTransport handler replaying a scripted sequence of outcomes.

    Each outcome is an httpx.Response, an exception to raise, or a
    zero-argument callable building a fresh response (for streamed bodies
    that httpx must not read up front).
    The last outcome repeats once the script is exhausted.
    """

    def __init__(self, outcomes: list[Outcome]) -> None:
        self.outcomes = outcomes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome()
        # Fresh copy per call; outcomes may repeat
        return httpx.Response(
            outcome.status_code,
            headers=outcome.headers,
            content=outcome.content,
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def credentials() -> Credentials:
    """Valid credentials with default timeouts and retry settings."""
    return Credentials(base_url=BASE_URL, email=EMAIL, api_token=API_TOKEN)


@pytest.fixture
def sleeper() -> RecordingSleeper:
    """Sleeper that records backoff delays without waiting."""
    return RecordingSleeper()


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    """Factory for scripted MockTransport handlers."""

    def _make(*outcomes: Outcome) -> RecordingHandler:
        return RecordingHandler(list(outcomes))

    return _make


@pytest.fixture
def sample_issue() -> dict[str, Any]:
    """A representative GET /rest/api/3/issue/{key} response."""
    return {
        "id": "10006",
        "key": "AIP-6",
        "self": "https://company.atlassian.net/rest/api/3/issue/10006",
        "fields": {
            "summary": "Add retry support",
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {
                        "type": "paragraph",
                        "content": [
                            {"type": "text", "text": "Retry"},
                            {"type": "text", "text": "transient failures."},
                        ],
                    }
                ],
            },
            "status": {"id": "3", "name": "In Progress", "description": "Being worked on"},
            "assignee": {
                "accountId": "abc-123",
                "displayName": "Alex Doe",
                "emailAddress": "alex@example.com",
                "active": True,
            },
            "reporter": {"accountId": "def-456", "displayName": "Sam Roe", "active": True},
            "project": {"id": "10000", "key": "AIP", "name": "AI Platform"},
            "issuetype": {"id": "10001", "name": "Story"},
            "priority": {"id": "2", "name": "High"},
            "created": "2024-01-15T10:30:00.000+0000",
            "updated": "2024-01-16T08:00:00.000+0000",
            "customfield_10010": None,
        },
    }


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary global config file with sample values."""
    config_file = tmp_path / ".jiralens-config"
    config_file.write_text(
        """# jiralens configuration
JIRA_BASE_URL="https://file.atlassian.net/"
JIRA_EMAIL=file@example.com
JIRA_API_TOKEN='file-token'
JIRA_MAX_RETRIES=5
UNRELATED_KEY=ignored
"""
    )
    return config_file
