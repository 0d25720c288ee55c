"""Per-domain agents: API, then cache, then estimator, then narrative."""

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.agents.flight import FlightAgent
from travel_agent.domains.assistant.agents.hotel import HotelAgent
from travel_agent.domains.assistant.agents.intent import IntentAgent, classify_by_rules
from travel_agent.domains.assistant.agents.local import LocalAgent
from travel_agent.domains.assistant.agents.planner import PlannerAgent
from travel_agent.domains.assistant.agents.visa import VisaAgent

__all__ = [
    "BaseAgent",
    "FlightAgent",
    "HotelAgent",
    "IntentAgent",
    "LocalAgent",
    "PlannerAgent",
    "VisaAgent",
    "classify_by_rules",
]
