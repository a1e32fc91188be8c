"""Authentication header derivation for the Jira REST API.

The Authorization header is a pure function of the configured email and API
token. AuthHeaderProvider computes it exactly once, at construction, and
fails fast on blank credentials so misconfiguration surfaces at startup
rather than on the first request.
"""

from __future__ import annotations

import base64

from jiralens.config.settings import Credentials
from jiralens.utils.errors import ConfigurationError
from jiralens.utils.logging import register_secret

JSON_CONTENT_TYPE = "application/json"


class AuthHeaderProvider:
    """Derives the static Basic Auth header from an email and API token.

    Instances are immutable after construction and safe to share between
    concurrent requests.
    """

    __slots__ = ("_email", "_header")

    def __init__(self, email: str | None, api_token: str | None) -> None:
        """Validate credentials and compute the header.

        Args:
            email: Account email (Basic Auth identity)
            api_token: API token (Basic Auth secret)

        Raises:
            ConfigurationError: If email or token is absent or blank
        """
        if email is None or not email.strip():
            raise ConfigurationError(
                "Jira email is required for authentication. "
                "Please set JIRA_EMAIL environment variable.",
                setting="JIRA_EMAIL",
            )
        if api_token is None or not api_token.strip():
            raise ConfigurationError(
                "Jira API token is required for authentication. "
                "Please set JIRA_API_TOKEN environment variable.",
                setting="JIRA_API_TOKEN",
            )

        self._email = email
        encoded = base64.b64encode(f"{email}:{api_token}".encode()).decode("ascii")
        self._header = f"Basic {encoded}"
        register_secret(api_token)
        register_secret(encoded)

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> AuthHeaderProvider:
        return cls(credentials.email, credentials.api_token)

    @staticmethod
    def is_valid(email: str | None, api_token: str | None) -> bool:
        """Check whether an email/token pair would be accepted."""
        return bool(email and email.strip() and api_token and api_token.strip())

    @property
    def header(self) -> str:
        """Authorization header value, e.g. ``Basic dXNlcjp0b2tlbg==``."""
        return self._header

    @property
    def identity(self) -> str:
        """Email the header was derived from."""
        return self._email

    def default_headers(self) -> dict[str, str]:
        """Headers sent with every API request (a fresh dict per call)."""
        return {
            "Authorization": self._header,
            "Accept": JSON_CONTENT_TYPE,
            "Content-Type": JSON_CONTENT_TYPE,
        }

    def __repr__(self) -> str:
        return f"AuthHeaderProvider(email={self._email!r})"


__all__ = [
    "AuthHeaderProvider",
    "JSON_CONTENT_TYPE",
]
