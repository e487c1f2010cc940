"""Web dashboard for the MBTA departure board."""

from .app import app, create_app

__all__ = [
    "app",
    "create_app",
]
