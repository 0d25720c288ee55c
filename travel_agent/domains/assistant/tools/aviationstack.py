"""AviationStack client for live flight status."""

import logging

from travel_agent.core.config import settings
from travel_agent.domains.assistant.schemas import FlightStatus
from travel_agent.domains.assistant.tools.base import APIClientError, BaseAsyncAPIClient

logger = logging.getLogger(__name__)


class AviationStackClient(BaseAsyncAPIClient):
    """Async client for the AviationStack /flights endpoint."""

    def __init__(self, access_key: str, base_url: str | None = None):
        self.access_key = access_key
        super().__init__(base_url or settings.FLIGHT_API_BASE_URL)

    async def _get_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def get_flight_status(self, flight_code: str) -> FlightStatus | None:
        """
        Look up the first matching flight by IATA code.

        Returns:
            FlightStatus without a notification, or None when the flight is unknown
        """
        response = await self.get(
            "/flights",
            params={"access_key": self.access_key, "flight_iata": flight_code},
        )
        data = response.get("data") if isinstance(response, dict) else None
        if not isinstance(data, list):
            raise APIClientError("Unexpected flights payload", tool_name=self.tool_name)
        if not data:
            return None

        flight = data[0]
        departure = flight.get("departure") or {}
        arrival = flight.get("arrival") or {}
        delay = int(departure.get("delay") or 0)

        status = FlightStatus(
            flight_code=flight_code,
            status=flight.get("flight_status") or "unknown",
            departure_time=departure.get("scheduled") or "",
            arrival_time=arrival.get("scheduled") or "",
            gate=departure.get("gate") or "",
            delay_minutes=delay,
        )
        if delay > 0:
            status.status = "delayed"
        return status
