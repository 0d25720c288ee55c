"""
Travel Agent - Hotel Agent
Hotel recommendations and whole-stay lodging prices.
"""

from __future__ import annotations

import json
import logging
import random

from pydantic import TypeAdapter, ValidationError

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.estimators import (
    DEFAULT_NIGHTLY_RATE,
    estimate_hotel_name,
    estimate_hotel_price_per_night,
)
from travel_agent.domains.assistant.llm import parse_json_content
from travel_agent.domains.assistant.schemas import HotelRecommendation

logger = logging.getLogger(__name__)

DEFAULT_HOTEL_NAME = "Budget Hotel"
ESTIMATED_HOTEL_COUNT = 3

_hotel_list = TypeAdapter(list[HotelRecommendation])

HOTEL_SYSTEM_PROMPT = (
    "You are a hotel search assistant. Generate realistic hotel "
    "recommendations and return ONLY valid JSON array."
)

HOTEL_USER_PROMPT = """You are HotelAgent. Search for 3 hotels in {destination} with nightly rate around {budget:.0f} THB per night.

Return ONLY valid JSON array:
[
  {{"name": "Hotel Name", "price_per_night": 2500.0, "rating": 4.5, "address": "Full address", "distance_km": 1.5}},
  ...
]

Generate realistic hotel names, addresses, and ratings for {destination}."""


class HotelAgent(BaseAgent):
    """Hotel search and recommendations."""

    name = "HotelAgent"

    async def search_hotels(
        self,
        destination: str,
        nightly_budget: float,
        rng: random.Random | None = None,
    ) -> list[HotelRecommendation]:
        """Hotels around a nightly budget: LLM generated, else estimated."""
        rng = rng or random.Random()

        hotels = await self._search_with_llm(destination, nightly_budget)
        if hotels:
            logger.info(
                f"HotelAgent: found {len(hotels)} hotels in {destination} "
                f"around {nightly_budget:.0f} THB"
            )
            return hotels

        hotels = self._estimate_hotels(destination, rng)
        logger.info(f"HotelAgent: generated {len(hotels)} estimated hotels for {destination}")
        return hotels

    async def _search_with_llm(
        self, destination: str, nightly_budget: float
    ) -> list[HotelRecommendation]:
        content = await self._complete(
            HOTEL_SYSTEM_PROMPT,
            HOTEL_USER_PROMPT.format(destination=destination, budget=nightly_budget),
            max_tokens=500,
        )
        if content is None:
            return []
        try:
            return _hotel_list.validate_python(parse_json_content(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"HotelAgent: failed to parse LLM hotels: {e}")
            return []

    def _estimate_hotels(
        self, destination: str, rng: random.Random
    ) -> list[HotelRecommendation]:
        base_price = estimate_hotel_price_per_night(destination)
        return [
            HotelRecommendation(
                name=estimate_hotel_name(destination, rng),
                price_per_night=base_price * rng.uniform(0.8, 1.2),
                rating=rng.uniform(4.0, 5.0),
                address=f"{destination} City Center",
                distance_km=rng.uniform(0.5, 3.5),
            )
            for _ in range(ESTIMATED_HOTEL_COUNT)
        ]

    # ============ Stay Price ============

    async def get_hotel_price(
        self,
        city: str,
        nights: int,
        rng: random.Random | None = None,
    ) -> tuple[int, str]:
        """
        Total lodging price in THB for a stay.

        Args:
            city: Destination city name (e.g., "Vancouver")
            nights: Number of nights

        Returns:
            (total price, hotel name)
        """
        if not city or nights <= 0:
            logger.warning(f"HotelAgent: invalid input city={city!r}, nights={nights}")
            return DEFAULT_NIGHTLY_RATE * max(1, nights), DEFAULT_HOTEL_NAME

        rng = rng or random.Random()
        cache_key = f"hotel:{city}:{nights}"

        cached = await self._cache_get(cache_key) or {}
        if isinstance(cached.get("price"), int) and cached["price"] > 0:
            return cached["price"], str(cached.get("name", DEFAULT_HOTEL_NAME))

        # No public hotel-rate provider exists, so a cache miss is estimated
        per_night = estimate_hotel_price_per_night(city)
        quote = (per_night * nights, estimate_hotel_name(city, rng))
        logger.info(
            f"HotelAgent: estimated {quote[1]} in {city} for {quote[0]} THB "
            f"({nights} nights x {per_night} THB/night)"
        )

        await self._cache_set(cache_key, {"price": quote[0], "name": quote[1]})
        return quote
