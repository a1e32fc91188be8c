"""Tests for jiralens.integrations.auth module."""

import base64

import pytest

from jiralens.integrations.auth import AuthHeaderProvider
from jiralens.utils.errors import ConfigurationError


class TestAuthHeaderProvider:
    def test_basic_header(self):
        provider = AuthHeaderProvider("user@example.com", "test-token")

        expected = base64.b64encode(b"user@example.com:test-token").decode("ascii")
        assert provider.header == f"Basic {expected}"

    def test_header_round_trips_credentials(self):
        provider = AuthHeaderProvider("user@example.com", "tok:with:colons")

        encoded = provider.header.removeprefix("Basic ")
        assert base64.b64decode(encoded).decode() == "user@example.com:tok:with:colons"

    def test_header_is_deterministic(self):
        first = AuthHeaderProvider("user@example.com", "test-token")
        second = AuthHeaderProvider("user@example.com", "test-token")

        assert first.header == second.header

    def test_from_credentials(self, credentials):
        provider = AuthHeaderProvider.from_credentials(credentials)

        assert provider.identity == "user@example.com"

    def test_default_headers(self):
        headers = AuthHeaderProvider("user@example.com", "test-token").default_headers()

        assert headers["Authorization"].startswith("Basic ")
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/json"

    def test_default_headers_returns_fresh_dict(self):
        provider = AuthHeaderProvider("user@example.com", "test-token")

        provider.default_headers()["Authorization"] = "tampered"

        assert provider.default_headers()["Authorization"] == provider.header

    def test_repr_hides_token(self):
        assert "test-token" not in repr(AuthHeaderProvider("user@example.com", "test-token"))

    @pytest.mark.parametrize("email", [None, "", "   "])
    def test_blank_email_rejected(self, email):
        with pytest.raises(ConfigurationError) as exc_info:
            AuthHeaderProvider(email, "test-token")

        assert exc_info.value.setting == "JIRA_EMAIL"

    @pytest.mark.parametrize("token", [None, "", "\t"])
    def test_blank_token_rejected(self, token):
        with pytest.raises(ConfigurationError) as exc_info:
            AuthHeaderProvider("user@example.com", token)

        assert exc_info.value.setting == "JIRA_API_TOKEN"

    @pytest.mark.parametrize(
        ("email", "token", "expected"),
        [
            ("user@example.com", "test-token", True),
            ("", "test-token", False),
            ("user@example.com", " ", False),
            (None, None, False),
        ],
    )
    def test_is_valid(self, email, token, expected):
        assert AuthHeaderProvider.is_valid(email, token) is expected
