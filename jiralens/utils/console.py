"""Rich-based console output utilities."""

from rich.console import Console
from rich.theme import Theme

from jiralens import SCRIPT_NAME, __version__

custom_theme = Theme(
    {
        "error": "bold red",
        "version": "bold",
    }
)

# Global console instances
console = Console(theme=custom_theme)
console_err = Console(theme=custom_theme, stderr=True)


def print_error(message: str) -> None:
    """Print error message in red to stderr."""
    from jiralens.utils.logging import log_message

    console_err.print(f"[error][[ERROR]][/error] [red]{message}[/red]", highlight=False)
    log_message(f"ERROR: {message}")


def show_version() -> None:
    """Display version information."""
    console.print(f"[version]{SCRIPT_NAME}[/version] v{__version__}")


__all__ = [
    "console",
    "console_err",
    "custom_theme",
    "print_error",
    "show_version",
]
