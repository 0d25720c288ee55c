"""Core module - Settings, logging, and shared exceptions."""

from travel_agent.core.config import settings

__all__ = [
    "settings",
]
