"""Utility modules for jiralens.

This package contains:
- console: Rich-based terminal output utilities
- errors: Custom exceptions and exit codes
- logging: Logging configuration
- retry: Exponential backoff for transient API failures
"""

from jiralens.utils.console import (
    console,
    console_err,
    print_error,
)
from jiralens.utils.errors import (
    AuthenticationError,
    ClientRequestError,
    ConfigurationError,
    ExitCode,
    InvalidArgumentError,
    JiralensError,
    NetworkError,
    RequestError,
    ResponseParseError,
    ServerError,
)
from jiralens.utils.logging import log_message, setup_logging
from jiralens.utils.retry import RetryPolicy, is_transient_error, retry_async

__all__ = [
    # Console
    "console",
    "console_err",
    "print_error",
    # Errors
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
    # Logging
    "log_message",
    "setup_logging",
    # Retry
    "RetryPolicy",
    "is_transient_error",
    "retry_async",
]
