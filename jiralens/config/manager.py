"""Configuration management for jiralens.

This module provides the ConfigManager class for loading Jira connection
settings from a cascading hierarchy of sources and turning them into a
validated Credentials value.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import TypeVar

from jiralens.config.settings import (
    CONFIG_KEYS,
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_BASE_DELAY_SECONDS,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_READ_TIMEOUT_SECONDS,
    Credentials,
)
from jiralens.utils.errors import ConfigurationError
from jiralens.utils.logging import log_message

logger = logging.getLogger(__name__)

N = TypeVar("N", int, float)

CONFIG_FILE = Path.home() / ".jiralens-config"

_LINE_PATTERN = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)=(.*)$")


class ConfigManager:
    """Loads configuration with cascading precedence.

    Configuration Precedence (highest to lowest):
    1. Environment Variables
    2. Local Config (.jiralens) - nearest file walking up from the CWD
    3. Global Config (~/.jiralens-config)
    4. Built-in Defaults

    Files contain KEY=VALUE or KEY="VALUE" lines; blank lines and lines
    starting with '#' are ignored. Only known keys are read from the
    environment.

    Attributes:
        global_config_path: Path to the global config file
        local_config_path: Path to the discovered local file (after load)
    """

    LOCAL_CONFIG_NAME = ".jiralens"

    def __init__(
        self,
        global_config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
        start_dir: Path | None = None,
    ) -> None:
        """Initialize the configuration manager.

        Args:
            global_config_path: Custom path to the global config file
            environ: Environment mapping to read (defaults to os.environ)
            start_dir: Directory where the local config search starts
                (defaults to the current working directory)
        """
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self._environ = environ if environ is not None else os.environ
        self._start_dir = start_dir
        self._raw_values: dict[str, str] = {}
        self._config_sources: dict[str, str] = {}

    def load(self) -> dict[str, str]:
        """Load configuration from all sources.

        Idempotent: each call starts from a clean state.

        Returns:
            Mapping of known keys to their raw string values
        """
        self.local_config_path = None
        self._raw_values = {}
        self._config_sources = {}

        if self.global_config_path.exists():
            log_message(f"Loading global configuration from {self.global_config_path}")
            self._load_file(self.global_config_path, source="global")

        local_path = self._find_local_config()
        if local_path:
            self.local_config_path = local_path
            log_message(f"Loading local configuration from {local_path}")
            self._load_file(local_path, source=f"local ({local_path})")

        self._load_environment()

        log_message(f"Configuration loaded successfully ({len(self._raw_values)} keys)")
        return dict(self._raw_values)

    def _find_local_config(self) -> Path | None:
        """Find the nearest local config file, stopping at the filesystem root."""
        current = (self._start_dir or Path.cwd()).resolve()
        while True:
            candidate = current / self.LOCAL_CONFIG_NAME
            if candidate.is_file():
                return candidate
            if current.parent == current:
                return None
            current = current.parent

    def _load_file(self, path: Path, source: str = "file") -> None:
        """Load known KEY=VALUE pairs from a config file."""
        with path.open() as f:
            for line in f:
                line = line.strip()

                if not line or line.startswith("#"):
                    continue

                match = _LINE_PATTERN.match(line)
                if not match:
                    logger.debug("Ignoring malformed config line in %s", source)
                    continue

                key, value = match.groups()
                if key not in CONFIG_KEYS:
                    continue

                if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                    value = value[1:-1]

                self._raw_values[key] = value
                self._config_sources[key] = source

    def _load_environment(self) -> None:
        """Override config with environment variables for known keys."""
        for key in CONFIG_KEYS:
            env_value = self._environ.get(key)
            if env_value is not None:
                self._raw_values[key] = env_value
                self._config_sources[key] = "environment"

    def get(self, key: str, default: str = "") -> str:
        """Get a raw configuration value."""
        return self._raw_values.get(key, default)

    def get_source(self, key: str) -> str | None:
        """Describe where a key's value came from, or None if unset."""
        return self._config_sources.get(key)

    def get_credentials(self) -> Credentials:
        """Build validated Credentials from the loaded values.

        Raises:
            ConfigurationError: If a required value is missing or a numeric
                value is malformed or out of range
        """
        return Credentials(
            base_url=self.get("JIRA_BASE_URL"),
            email=self.get("JIRA_EMAIL"),
            api_token=self.get("JIRA_API_TOKEN"),
            connect_timeout_seconds=self._get_number(
                "JIRA_CONNECTION_TIMEOUT", DEFAULT_CONNECT_TIMEOUT_SECONDS, float
            ),
            read_timeout_seconds=self._get_number(
                "JIRA_READ_TIMEOUT", DEFAULT_READ_TIMEOUT_SECONDS, float
            ),
            max_retries=self._get_number("JIRA_MAX_RETRIES", DEFAULT_MAX_RETRIES, int),
            backoff_multiplier=self._get_number(
                "JIRA_RETRY_BACKOFF_MULTIPLIER", DEFAULT_BACKOFF_MULTIPLIER, float
            ),
            base_delay_seconds=self._get_number(
                "JIRA_RETRY_BASE_DELAY", DEFAULT_BASE_DELAY_SECONDS, float
            ),
        )

    def _get_number(self, key: str, default: N, convert: type[N]) -> N:
        raw = self._raw_values.get(key)
        if raw is None or raw.strip() == "":
            return default
        try:
            return convert(raw.strip())
        except ValueError:
            raise ConfigurationError(
                f"Invalid {key} value '{raw}': expected a {convert.__name__}",
                setting=key,
            ) from None


def load_credentials(
    global_config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Credentials:
    """Load configuration from all sources and return validated Credentials."""
    manager = ConfigManager(global_config_path=global_config_path, environ=environ)
    manager.load()
    return manager.get_credentials()


__all__ = [
    "CONFIG_FILE",
    "ConfigManager",
    "load_credentials",
]
