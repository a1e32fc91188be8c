"""Entry point for running jiralens as a module.

Usage:
    python -m jiralens [TICKET_KEY]
"""

from jiralens.cli import app

if __name__ == "__main__":
    app()
