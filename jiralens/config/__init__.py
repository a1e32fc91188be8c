"""Configuration management for jiralens.

This package contains:
- settings: Credentials dataclass and configuration key definitions
- manager: ConfigManager for cascading file/environment loading
"""

from jiralens.config.manager import CONFIG_FILE, ConfigManager, load_credentials
from jiralens.config.settings import CONFIG_KEYS, REQUIRED_KEYS, Credentials

__all__ = [
    "CONFIG_FILE",
    "CONFIG_KEYS",
    "REQUIRED_KEYS",
    "ConfigManager",
    "Credentials",
    "load_credentials",
]
