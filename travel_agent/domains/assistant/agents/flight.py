"""
Travel Agent - Flight Agent
Flight status with delay notifications, and cheapest fare lookup.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.estimators import DEFAULT_FARE, estimate_fare
from travel_agent.domains.assistant.schemas import FlightStatus
from travel_agent.domains.assistant.tools.aviationstack import AviationStackClient
from travel_agent.domains.assistant.tools.skyscanner import SkyScrapperClient

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M"
ESTIMATED_GATE = "A12"
ESTIMATED_DELAY_MINUTES = 30

DELAY_SYSTEM_PROMPT = (
    "You are a professional airline notification system. "
    "Generate polite, brief delay notifications."
)

DELAY_USER_PROMPT = """You are FlightAgent. Flight {code} is delayed by {delay} minutes.
Generate a polite, brief notification message for the passenger. Include:
- Flight code
- Delay duration
- Apology
- Brief advice"""


class FlightAgent(BaseAgent):
    """Flight tracking and fare search."""

    name = "FlightAgent"

    # ============ Flight Status ============

    async def check_flight(self, flight_code: str) -> FlightStatus:
        """Live status when AviationStack is configured, otherwise an estimate."""
        status: FlightStatus | None = None

        if self.capabilities.flight_api_key:
            try:
                async with AviationStackClient(self.capabilities.flight_api_key) as client:
                    status = await client.get_flight_status(flight_code)
            except Exception as e:
                self._log_provider_failure("AviationStack", e)

        if status is None or status.status == "unknown":
            status = self._estimate_status(flight_code)

        if status.delay_minutes > 0:
            status.notification = await self._delay_notification(status)
        else:
            status.notification = f"Flight {flight_code} is {status.status}."

        logger.info(
            f"FlightAgent: checked {flight_code} - status: {status.status}, "
            f"delay: {status.delay_minutes} min"
        )
        return status

    def _estimate_status(self, flight_code: str) -> FlightStatus:
        """Codes starting at "J" or later are reported as delayed."""
        now = datetime.now()
        delayed = bool(flight_code) and flight_code[0] >= "J"

        return FlightStatus(
            flight_code=flight_code,
            status="delayed" if delayed else "on-time",
            departure_time=(now + timedelta(hours=2)).strftime(TIME_FORMAT),
            arrival_time=(now + timedelta(hours=6)).strftime(TIME_FORMAT),
            gate=ESTIMATED_GATE,
            delay_minutes=ESTIMATED_DELAY_MINUTES if delayed else 0,
        )

    async def _delay_notification(self, status: FlightStatus) -> str:
        fallback = (
            f"Your flight {status.flight_code} is delayed by {status.delay_minutes} minutes. "
            f"New departure time: {status.departure_time}. Please check the gate information."
        )
        return await self._narrate(
            DELAY_SYSTEM_PROMPT,
            DELAY_USER_PROMPT.format(code=status.flight_code, delay=status.delay_minutes),
            fallback,
            max_tokens=100,
        )

    # ============ Cheapest Fare ============

    async def get_cheapest_flight(
        self, origin: str, destination: str, date: str
    ) -> tuple[int, str]:
        """
        Cheapest one-way fare in THB.

        Args:
            origin: Origin airport code (e.g., "BKK")
            destination: Destination airport code (e.g., "YVR")
            date: Departure date, YYYY-MM-DD

        Returns:
            (price, airline)
        """
        if not self.capabilities.rapidapi_key:
            logger.info("FlightAgent: no fare API key configured, using default fare")
            return DEFAULT_FARE

        if not origin or not destination or not date:
            logger.warning(f"FlightAgent: invalid input from={origin}, to={destination}, date={date}")
            return DEFAULT_FARE

        try:
            datetime.strptime(date, "%Y-%m-%d")
        except ValueError:
            logger.warning(f"FlightAgent: invalid date format {date}, expected YYYY-MM-DD")
            return DEFAULT_FARE

        cache_key = f"flight:{origin}:{destination}:{date}"
        cached = await self._cache_get(cache_key) or {}
        if isinstance(cached.get("price"), int) and cached["price"] > 0:
            return cached["price"], str(cached.get("airline", ""))

        fare: tuple[int, str] | None = None
        try:
            async with SkyScrapperClient(self.capabilities.rapidapi_key) as client:
                fare = await client.search_cheapest(origin, destination, date)
        except Exception as e:
            self._log_provider_failure("Sky-Scrapper", e)

        if fare is not None and fare[0] > 0 and fare[1]:
            logger.info(f"FlightAgent: found {fare[1]} for {fare[0]} THB via Sky-Scrapper")
        else:
            fare = estimate_fare(origin, destination)
            logger.info(f"FlightAgent: fare search failed, estimated {fare[1]} for {fare[0]} THB")

        await self._cache_set(cache_key, {"price": fare[0], "airline": fare[1]})
        return fare
