"""API v1 endpoints."""

from travel_agent.api.v1.endpoints import chat, planning, social, visa

__all__ = ["chat", "planning", "social", "visa"]
