"""UI components for jiralens.

This package contains:
- report: Rich console report for a fetched ticket
"""

from jiralens.ui.report import NOT_AVAILABLE, render_ticket

__all__ = [
    "NOT_AVAILABLE",
    "render_ticket",
]
