"""jiralens - Fetch a Jira ticket over the REST API and render it.

This package provides a Python CLI application that retrieves a single
issue through a resilient API client and prints a readable report.
"""

__version__ = "0.1.0"
SCRIPT_NAME = "jiralens"
DEFAULT_TICKET_KEY = "AIP-6"

__all__ = [
    "__version__",
    "SCRIPT_NAME",
    "DEFAULT_TICKET_KEY",
]
