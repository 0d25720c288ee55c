"""
Travel Agent - Trip Cost Planner
Turns one travel request into a costed plan: budget split, cheapest
outbound fare, lodging for the stay, and the weather for the travel month.
"""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import date, timedelta

from travel_agent.core.config import Settings, settings as default_settings
from travel_agent.core.exceptions import OrchestrationTimeoutError
from travel_agent.domains.assistant.agents import FlightAgent, HotelAgent, IntentAgent
from travel_agent.domains.assistant.agents.weather import WeatherAgent
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.estimators import get_airport_code, split_budget
from travel_agent.domains.assistant.schemas import (
    FlightQuote,
    HotelQuote,
    TripCostPlan,
    WeatherSummary,
)

logger = logging.getLogger(__name__)

DEFAULT_DESTINATION = "Unknown"
DEFAULT_BUDGET = 50000
DEFAULT_DURATION = 7
DEPARTURE_LEAD_DAYS = 30


class TripCostPlanner:
    """Costs a trip from a free-text request."""

    def __init__(
        self,
        capabilities: AgentCapabilities | None = None,
        config: Settings | None = None,
    ) -> None:
        config = config or default_settings
        self.capabilities = capabilities or AgentCapabilities()
        self.origin = config.DEFAULT_ORIGIN_AIRPORT
        self.request_timeout = config.REQUEST_TIMEOUT_SECONDS

        self.intent_agent = IntentAgent(self.capabilities)
        self.flights = FlightAgent(self.capabilities)
        self.hotels = HotelAgent(self.capabilities)
        self.weather = WeatherAgent(self.capabilities)

    async def plan(
        self,
        message: str,
        rng: random.Random | None = None,
        today: date | None = None,
    ) -> TripCostPlan:
        """
        Build a costed plan for a request such as
        "I want to travel to Canada for 7 days with 100000 baht".

        Raises:
            OrchestrationTimeoutError: the overall deadline expired
        """
        try:
            async with asyncio.timeout(self.request_timeout):
                return await self._plan(message, rng or random.Random(), today or date.today())
        except TimeoutError as e:
            logger.error(f"TripCostPlanner: request exceeded {self.request_timeout:.0f}s deadline")
            raise OrchestrationTimeoutError(self.request_timeout) from e

    async def _plan(self, message: str, rng: random.Random, today: date) -> TripCostPlan:
        logger.info(f"TripCostPlanner: planning for message: {message[:100]}")

        entities = (await self.intent_agent.detect(message)).entities
        destination = entities.destination_or(DEFAULT_DESTINATION)
        budget = int(entities.budget_or(DEFAULT_BUDGET))
        if budget <= 0:
            budget = DEFAULT_BUDGET
        duration = entities.duration_or(DEFAULT_DURATION)

        logger.info(
            f"TripCostPlanner: destination={destination}, budget={budget} THB, "
            f"duration={duration} days"
        )

        budget_plan = split_budget(budget)

        departure = today + timedelta(days=DEPARTURE_LEAD_DAYS)
        departure_date = departure.isoformat()
        destination_code = get_airport_code(destination)
        weather_month = departure.strftime("%B")

        (flight_price, airline), (hotel_price, hotel_name), (avg_temp, condition) = (
            await asyncio.gather(
                self.flights.get_cheapest_flight(self.origin, destination_code, departure_date),
                self.hotels.get_hotel_price(destination, duration, rng),
                self.weather.get_weather_summary(destination, weather_month),
            )
        )

        total_cost = flight_price + hotel_price
        message_text = (
            f"Complete travel plan for {destination}: {duration} days trip costs "
            f"approximately {total_cost} THB (Flight: {flight_price} THB, Hotel: "
            f"{hotel_price} THB). Weather in {weather_month}: {avg_temp}°C, {condition}. "
            "Budget breakdown: Flight 45%, Hotel 25%, Food 15%, Transport 10%, Misc 5%."
        )

        logger.info(f"TripCostPlanner: plan complete, total cost {total_cost} THB")
        return TripCostPlan(
            destination=destination,
            budget_thb=budget,
            duration_days=duration,
            budget_plan=budget_plan,
            flight=FlightQuote(
                origin=self.origin,
                destination=destination_code,
                date=departure_date,
                price=flight_price,
                airline=airline,
            ),
            hotel=HotelQuote(
                city=destination,
                nights=duration,
                total_price=hotel_price,
                price_per_night=hotel_price // max(1, duration),
                name=hotel_name,
            ),
            weather=WeatherSummary(
                city=destination,
                month=weather_month,
                avg_temp=avg_temp,
                condition=condition,
            ),
            total_estimated_cost=total_cost,
            message=message_text,
        )
