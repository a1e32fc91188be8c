"""Custom exceptions and exit codes for jiralens.

This module defines the exit codes and exception hierarchy used throughout
the application. Two families of errors exist:

- Startup/input errors: ConfigurationError, InvalidArgumentError. These are
  raised before any network activity.
- Request-time errors: subclasses of RequestError, produced by the
  ResilientClient when an attempt fails. Each kind declares whether it is
  retryable.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Process exit codes reported by the CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIGURATION_ERROR = 2
    INVALID_ARGUMENT = 3
    AUTHENTICATION_ERROR = 4
    REQUEST_FAILED = 5


class JiralensError(Exception):
    """Base exception for jiralens errors.

    All custom exceptions in this application inherit from this class.
    Each exception type has an associated exit code for proper error reporting.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class ConfigurationError(JiralensError):
    """Configuration is missing or invalid.

    Raised at startup when:
    - Base URL, email, or API token is blank or absent
    - A timeout, retry count, or multiplier is out of range
    - A numeric setting cannot be parsed

    Attributes:
        setting: Name of the offending configuration key, if known
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.CONFIGURATION_ERROR

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


class InvalidArgumentError(JiralensError, ValueError):
    """Caller input was rejected before any request was made."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.INVALID_ARGUMENT


class RequestError(JiralensError):
    """Base class for failures of a single API request attempt.

    Attributes:
        status_code: HTTP status code, or None for transport failures
        response_body: Raw response body, empty when no response was received
        original_error: The underlying exception
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.REQUEST_FAILED
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: str = "",
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.original_error = original_error


class AuthenticationError(RequestError):
    """The API rejected the configured credentials (HTTP 401).

    Never retried: the same credentials will be rejected again.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.AUTHENTICATION_ERROR

    def __init__(
        self,
        identity: str,
        response_body: str = "",
        original_error: BaseException | None = None,
    ) -> None:
        self.identity = identity
        message = (
            "Jira API authentication failed (401 Unauthorized). "
            f"Please verify your email ({identity}) and API token are correct. "
            f"Response: {response_body}"
        )
        super().__init__(
            message,
            status_code=401,
            response_body=response_body,
            original_error=original_error,
        )


class ClientRequestError(RequestError):
    """The API rejected the request with a 4xx status other than 401."""

    def __init__(
        self,
        status_code: int,
        response_body: str = "",
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(
            f"Jira API request failed with status {status_code}: {response_body}",
            status_code=status_code,
            response_body=response_body,
            original_error=original_error,
        )


class ServerError(RequestError):
    """The API answered with a 5xx status. Retryable."""

    retryable: ClassVar[bool] = True

    def __init__(
        self,
        status_code: int,
        response_body: str = "",
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(
            f"Jira API server error with status {status_code}: {response_body}",
            status_code=status_code,
            response_body=response_body,
            original_error=original_error,
        )


class NetworkError(RequestError):
    """No usable response was received (refused, timed out, broken I/O). Retryable."""

    retryable: ClassVar[bool] = True

    def __init__(self, cause: str, original_error: BaseException | None = None) -> None:
        self.cause_description = cause
        super().__init__(
            f"Jira API request failed: {cause}",
            original_error=original_error,
        )


class ResponseParseError(RequestError):
    """A successful response could not be decoded into the expected shape."""

    def __init__(
        self,
        message: str,
        response_body: str = "",
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(
            message,
            response_body=response_body,
            original_error=original_error,
        )


__all__ = [
    "ExitCode",
    "JiralensError",
    "ConfigurationError",
    "InvalidArgumentError",
    "RequestError",
    "AuthenticationError",
    "ClientRequestError",
    "ServerError",
    "NetworkError",
    "ResponseParseError",
]
