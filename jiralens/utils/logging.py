"""Logging configuration for jiralens.

Log output goes to a file so that it never interleaves with the ticket report
on stdout. Every record passes through a redaction filter that masks the API
token and the Authorization header derived from it.

Environment Variables:
    JIRALENS_LOG: Set to "true" to enable logging (default: "false")
    JIRALENS_LOG_FILE: Path to log file (default: ~/.jiralens.log)
    JIRALENS_LOG_LEVEL: Log level name when enabled (default: "INFO")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

PACKAGE_LOGGER = "jiralens"
REDACTED = "[REDACTED]"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_logger: logging.Logger | None = None
_secrets: set[str] = set()


@dataclass(frozen=True)
class LogSettings:
    """Where and how verbosely jiralens logs.

    Attributes:
        enabled: Write records to ``file`` when True; discard them otherwise
        file: Destination log file
        level: Numeric threshold for the package logger
    """

    enabled: bool = False
    file: Path = Path.home() / ".jiralens.log"
    level: int = logging.INFO

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> LogSettings:
        """Read the JIRALENS_LOG* variables.

        An unknown level name falls back to INFO.
        """
        env = os.environ if environ is None else environ
        default = cls()
        level_name = env.get("JIRALENS_LOG_LEVEL", "INFO").strip().upper()
        return cls(
            enabled=env.get("JIRALENS_LOG", "false").strip().lower() == "true",
            file=Path(env["JIRALENS_LOG_FILE"]).expanduser()
            if env.get("JIRALENS_LOG_FILE")
            else default.file,
            level=logging.getLevelNamesMapping().get(level_name, logging.INFO),
        )


def register_secret(value: str | None) -> None:
    """Mask ``value`` in every record logged from now on."""
    if value and value.strip():
        _secrets.add(value)


def redact(text: str) -> str:
    """Replace registered secrets in ``text``, longest first."""
    for secret in sorted(_secrets, key=len, reverse=True):
        text = text.replace(secret, REDACTED)
    return text


class SecretRedactingFilter(logging.Filter):
    """Rewrites records whose rendered message contains a registered secret."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not _secrets:
            return True
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


def setup_logging(settings: LogSettings | None = None) -> logging.Logger:
    """Configure the package logger once per process.

    Child loggers created with ``logging.getLogger(__name__)`` inside the
    package propagate to the handler installed here, so the redaction filter
    sits on the handler rather than on the logger.

    Args:
        settings: Explicit settings; read from the environment when omitted

    Returns:
        The configured ``jiralens`` logger
    """
    global _logger

    if _logger is not None:
        return _logger

    settings = settings if settings is not None else LogSettings.from_environ()
    logger = logging.getLogger(PACKAGE_LOGGER)
    _close_handlers(logger)

    handler: logging.Handler
    if settings.enabled:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(settings.file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.setLevel(settings.level)
    else:
        handler = logging.NullHandler()
    handler.addFilter(SecretRedactingFilter())
    logger.addHandler(handler)

    _logger = logger
    return logger


def reset_logging() -> None:
    """Close the package handlers and forget the cached logger and secrets."""
    global _logger
    logger = logging.getLogger(PACKAGE_LOGGER)
    _close_handlers(logger)
    logger.setLevel(logging.NOTSET)
    _secrets.clear()
    _logger = None


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def get_logger() -> logging.Logger:
    """Get the configured logger instance, creating it if necessary."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_message(message: str, level: int = logging.INFO) -> None:
    """Log a message through the package logger.

    Args:
        message: Message to log
        level: Numeric level, INFO unless given
    """
    get_logger().log(level, message)


__all__ = [
    "LogSettings",
    "SecretRedactingFilter",
    "get_logger",
    "log_message",
    "redact",
    "register_secret",
    "reset_logging",
    "setup_logging",
]
