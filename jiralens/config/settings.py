"""Credentials dataclass for jiralens configuration.

This module defines the immutable Credentials value that carries everything
the API client needs: where the Jira instance lives, who is calling, and how
patient the client should be (timeouts and retry parameters).

Credentials validate themselves on construction. A violated invariant raises
ConfigurationError so that misconfiguration aborts startup before any
network activity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import httpx

from jiralens.utils.errors import ConfigurationError
from jiralens.utils.retry import longest_backoff_delay

DEFAULT_CONNECT_TIMEOUT_SECONDS = 30.0
DEFAULT_READ_TIMEOUT_SECONDS = 60.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_MULTIPLIER = 2.0
DEFAULT_BASE_DELAY_SECONDS = 1.0

# Config key -> Credentials attribute
CONFIG_KEYS: dict[str, str] = {
    "JIRA_BASE_URL": "base_url",
    "JIRA_EMAIL": "email",
    "JIRA_API_TOKEN": "api_token",
    "JIRA_CONNECTION_TIMEOUT": "connect_timeout_seconds",
    "JIRA_READ_TIMEOUT": "read_timeout_seconds",
    "JIRA_MAX_RETRIES": "max_retries",
    "JIRA_RETRY_BACKOFF_MULTIPLIER": "backoff_multiplier",
    "JIRA_RETRY_BASE_DELAY": "base_delay_seconds",
}

REQUIRED_KEYS: tuple[str, ...] = ("JIRA_BASE_URL", "JIRA_EMAIL", "JIRA_API_TOKEN")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _is_non_negative(value: float) -> bool:
    return math.isfinite(value) and value >= 0


def _is_http_url(value: str) -> bool:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL:
        return False
    return url.scheme in ("http", "https") and bool(url.host)


@dataclass(frozen=True)
class Credentials:
    """Validated, immutable settings for the Jira REST API client.

    Attributes:
        base_url: Jira instance URL (trailing slashes removed)
        email: Account email used as the Basic Auth identity
        api_token: API token used as the Basic Auth secret (hidden from repr)
        connect_timeout_seconds: Connection timeout, finite and > 0
        read_timeout_seconds: Read timeout, finite and > 0
        max_retries: Retries after the initial attempt, must be >= 0
        backoff_multiplier: Exponential backoff multiplier, finite and > 0
        base_delay_seconds: Delay before the first retry, finite and >= 0
    """

    base_url: str
    email: str
    api_token: str = field(repr=False)
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    read_timeout_seconds: float = DEFAULT_READ_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    base_delay_seconds: float = DEFAULT_BASE_DELAY_SECONDS

    def __post_init__(self) -> None:
        if _is_blank(self.base_url):
            raise ConfigurationError(
                "Jira base URL is required. Please set JIRA_BASE_URL environment variable.",
                setting="JIRA_BASE_URL",
            )
        if not _is_http_url(self.base_url.strip()):
            raise ConfigurationError(
                "Jira base URL must be an absolute http(s) URL such as "
                f"https://company.atlassian.net. Current value: {self.base_url}",
                setting="JIRA_BASE_URL",
            )
        if _is_blank(self.email):
            raise ConfigurationError(
                "Jira email is required. Please set JIRA_EMAIL environment variable.",
                setting="JIRA_EMAIL",
            )
        if _is_blank(self.api_token):
            raise ConfigurationError(
                "Jira API token is required. Please set JIRA_API_TOKEN environment variable.",
                setting="JIRA_API_TOKEN",
            )
        if not _is_positive(self.connect_timeout_seconds):
            raise ConfigurationError(
                "Jira connection timeout must be a finite number greater than 0. "
                f"Current value: {self.connect_timeout_seconds}",
                setting="JIRA_CONNECTION_TIMEOUT",
            )
        if not _is_positive(self.read_timeout_seconds):
            raise ConfigurationError(
                "Jira read timeout must be a finite number greater than 0. "
                f"Current value: {self.read_timeout_seconds}",
                setting="JIRA_READ_TIMEOUT",
            )
        if self.max_retries < 0:
            raise ConfigurationError(
                f"Jira max retries must be non-negative. Current value: {self.max_retries}",
                setting="JIRA_MAX_RETRIES",
            )
        if not _is_positive(self.backoff_multiplier):
            raise ConfigurationError(
                "Jira retry backoff multiplier must be a finite number greater than 0. "
                f"Current value: {self.backoff_multiplier}",
                setting="JIRA_RETRY_BACKOFF_MULTIPLIER",
            )
        if not _is_non_negative(self.base_delay_seconds):
            raise ConfigurationError(
                "Jira retry base delay must be a finite, non-negative number. "
                f"Current value: {self.base_delay_seconds}",
                setting="JIRA_RETRY_BASE_DELAY",
            )
        longest = longest_backoff_delay(
            self.base_delay_seconds, self.backoff_multiplier, self.max_retries
        )
        if not math.isfinite(longest):
            raise ConfigurationError(
                "Jira retry backoff overflows: "
                f"{self.base_delay_seconds}s x {self.backoff_multiplier}^{self.max_retries - 1} "
                "is not a finite delay. Lower JIRA_RETRY_BACKOFF_MULTIPLIER or JIRA_MAX_RETRIES.",
                setting="JIRA_RETRY_BACKOFF_MULTIPLIER",
            )

        # Normalize base URL for consistent endpoint building
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))

    @property
    def identity(self) -> str:
        """The identity half of the credential pair."""
        return self.email


__all__ = [
    "CONFIG_KEYS",
    "REQUIRED_KEYS",
    "DEFAULT_BACKOFF_MULTIPLIER",
    "DEFAULT_BASE_DELAY_SECONDS",
    "DEFAULT_CONNECT_TIMEOUT_SECONDS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_READ_TIMEOUT_SECONDS",
    "Credentials",
]
