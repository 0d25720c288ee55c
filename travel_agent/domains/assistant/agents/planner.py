"""
Travel Agent - Planner Agent
Creates and updates day-by-day itineraries.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.llm import parse_json_content
from travel_agent.domains.assistant.schemas import MAX_TRIP_DURATION, ItineraryDay, TripPlan

logger = logging.getLogger(__name__)

PLANNER_SYSTEM_PROMPT = (
    "You are an expert travel planner. Create detailed itineraries and "
    "return ONLY valid JSON."
)

PLANNER_USER_PROMPT = """You are PlannerAgent, an expert travel planner.

Create a detailed itinerary for:
- Destination: {destination}
- Duration: {duration} days
- Budget: {budget:.0f} THB

Return ONLY valid JSON:
{{
  "destination": "...",
  "duration": 0,
  "total_budget": 0,
  "itinerary": [
    {{
      "day": 1,
      "activities": ["Activity 1", "Activity 2"],
      "budget": 15000
    }}
  ],
  "summary": "Brief overview in markdown"
}}"""

UPDATE_SYSTEM_PROMPT = (
    "You are an expert travel planner. Update itineraries based on new "
    "conditions and return ONLY valid JSON."
)

UPDATE_USER_PROMPT = """You are PlannerAgent. The user currently has this plan:
{plan}

Update it according to this condition: {condition}

Return the revised plan in JSON with activities for each day."""


class PlannerAgent(BaseAgent):
    """Creates and updates travel itineraries."""

    name = "PlannerAgent"

    async def create_plan(self, destination: str, duration: int, budget: float) -> TripPlan:
        """An LLM itinerary when available, otherwise an equal-split plan."""
        duration = min(max(1, duration), MAX_TRIP_DURATION)
        budget = max(0.0, budget)

        content = await self._complete(
            PLANNER_SYSTEM_PROMPT,
            PLANNER_USER_PROMPT.format(destination=destination, duration=duration, budget=budget),
            max_tokens=1500,
        )
        if content is not None:
            plan = self._parse_plan(content)
            if plan is not None:
                plan = self._fit_plan(plan, duration, budget)
            if plan is not None:
                logger.info(f"PlannerAgent: created plan for {destination}, {plan.duration} days")
                return plan

        logger.info(f"PlannerAgent: using default plan for {destination}")
        return self._fallback_plan(destination, duration, budget)

    async def update_plan(self, current_plan: TripPlan, condition: str) -> TripPlan:
        """Revise a plan for a new condition. Keeps the current plan on any failure."""
        content = await self._complete(
            UPDATE_SYSTEM_PROMPT,
            UPDATE_USER_PROMPT.format(plan=current_plan.model_dump_json(), condition=condition),
            max_tokens=1500,
        )
        if content is None:
            logger.info("PlannerAgent: no revision available, returning current plan")
            return current_plan

        updated = self._parse_plan(content)
        if updated is None:
            return current_plan

        logger.info(f"PlannerAgent: updated plan for {current_plan.destination}")
        return updated

    def _parse_plan(self, content: str) -> TripPlan | None:
        try:
            return TripPlan.model_validate(parse_json_content(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"PlannerAgent: failed to parse LLM plan: {e}")
            return None

    def _fit_plan(self, plan: TripPlan, duration: int, budget: float) -> TripPlan | None:
        """Hold an LLM plan to the requested length and budget.

        A plan with the wrong number of days is rejected. Day budgets are
        rescaled so they add up to the requested total.
        """
        if plan.duration != duration:
            logger.warning(
                f"PlannerAgent: LLM plan has {plan.duration} days, expected {duration}"
            )
            return None

        spent = sum(day.budget for day in plan.itinerary)
        if spent > 0:
            days = [
                day.model_copy(update={"budget": budget * day.budget / spent})
                for day in plan.itinerary
            ]
        else:
            days = [day.model_copy(update={"budget": budget / duration}) for day in plan.itinerary]
        return plan.model_copy(update={"itinerary": days, "total_budget": budget})

    def _fallback_plan(self, destination: str, duration: int, budget: float) -> TripPlan:
        daily_budget = budget / duration
        itinerary = [
            ItineraryDay(
                day=day,
                activities=[
                    f"Explore {destination} attractions",
                    "Try local cuisine",
                    "Visit popular landmarks",
                ],
                budget=daily_budget,
            )
            for day in range(1, duration + 1)
        ]
        summary = (
            f"## {duration}-Day Trip to {destination}\n\n"
            f"Explore the best of {destination} with daily activities and local "
            f"experiences. Budget: {budget:.0f} THB"
        )
        return TripPlan(
            destination=destination,
            duration=duration,
            total_budget=budget,
            itinerary=itinerary,
            summary=summary,
        )
