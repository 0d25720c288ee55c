"""Assistant services: message orchestration and trip costing."""

from travel_agent.domains.assistant.services.orchestrator import Orchestrator
from travel_agent.domains.assistant.services.trip_costing import TripCostPlanner

__all__ = ["Orchestrator", "TripCostPlanner"]
