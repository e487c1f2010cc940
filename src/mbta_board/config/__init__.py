"""Configuration for the MBTA departure board."""

from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
