"""
Travel Agent - Local Agent
Nearby places matching an interest.
"""

from __future__ import annotations

import json
import logging
import random

from pydantic import TypeAdapter, ValidationError

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.llm import parse_json_content
from travel_agent.domains.assistant.schemas import PlaceRecommendation

logger = logging.getLogger(__name__)

_place_list = TypeAdapter(list[PlaceRecommendation])

LOCAL_SYSTEM_PROMPT = (
    "You are a local recommendations expert. Provide realistic place "
    "recommendations and return ONLY valid JSON array."
)

LOCAL_USER_PROMPT = """You are LocalAgent.
Given current location (lat: {lat:.6f}, lng: {lng:.6f}) and preference: {interest},
recommend 3 options within 3 km.

Format (return ONLY valid JSON array):
[
  {{"name": "...", "type": "cafe", "rating": 4.6, "distance_km": 1.2, "address": "..."}},
  {{"name": "...", "type": "restaurant", "rating": 4.5, "distance_km": 0.8, "address": "..."}},
  {{"name": "...", "type": "cafe", "rating": 4.7, "distance_km": 2.1, "address": "..."}}
]"""


class LocalAgent(BaseAgent):
    """Finds nearby places based on interests."""

    name = "LocalAgent"

    async def get_recommendations(
        self,
        lat: float,
        lng: float,
        interest: str,
        rng: random.Random | None = None,
    ) -> list[PlaceRecommendation]:
        """Three places near (lat, lng) for an interest."""
        content = await self._complete(
            LOCAL_SYSTEM_PROMPT,
            LOCAL_USER_PROMPT.format(lat=lat, lng=lng, interest=interest),
            max_tokens=500,
        )
        if content is not None:
            try:
                places = _place_list.validate_python(parse_json_content(content))
                logger.info(f"LocalAgent: found {len(places)} recommendations for {interest}")
                return places
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning(f"LocalAgent: failed to parse LLM response: {e}, using fallback")

        return self._fallback_recommendations(interest, rng or random.Random())

    def _fallback_recommendations(
        self, interest: str, rng: random.Random
    ) -> list[PlaceRecommendation]:
        return [
            PlaceRecommendation(
                name=f"Popular {interest} Spot #1",
                type=interest,
                rating=4.5 + rng.random() * 0.5,
                distance_km=0.5 + rng.random() * 2.0,
                address="City Center Area",
            ),
            PlaceRecommendation(
                name=f"Local {interest} Place #2",
                type=interest,
                rating=4.3 + rng.random() * 0.5,
                distance_km=0.8 + rng.random() * 1.5,
                address="Downtown District",
            ),
            PlaceRecommendation(
                name=f"Best {interest} #3",
                type=interest,
                rating=4.6 + rng.random() * 0.4,
                distance_km=1.2 + rng.random() * 1.8,
                address="Tourist Area",
            ),
        ]
