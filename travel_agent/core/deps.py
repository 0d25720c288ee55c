"""FastAPI dependencies for the assistant services.

The orchestrator, the trip cost planner and the resolved capability set
are built once in the application lifespan and kept on ``app.state``.
"""

from fastapi import Request

from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.services import Orchestrator, TripCostPlanner


def get_capabilities(request: Request) -> AgentCapabilities:
    """Capability set resolved at startup."""
    return request.app.state.capabilities


def get_orchestrator(request: Request) -> Orchestrator:
    """Shared message orchestrator."""
    return request.app.state.orchestrator


def get_trip_planner(request: Request) -> TripCostPlanner:
    """Shared trip cost planner."""
    return request.app.state.trip_planner
