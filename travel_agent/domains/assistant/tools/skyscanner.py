"""Sky-Scrapper (Skyscanner on RapidAPI) client for cheapest fares."""

import logging
from typing import Any

from travel_agent.core.config import settings
from travel_agent.domains.assistant.tools.base import APIClientError, BaseAsyncAPIClient

logger = logging.getLogger(__name__)

RAPIDAPI_HOST = "sky-scrapper.p.rapidapi.com"


def parse_cheapest_itinerary(payload: Any) -> tuple[int, str] | None:
    """Return (price, airline) of the cheapest priced itinerary, if any.

    Itineraries with a missing or non-positive price are skipped. The
    airline is the first marketing carrier of the first leg and may be
    empty when the payload omits it.
    """
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if not isinstance(data, dict):
        logger.info("Sky-Scrapper response has no data object")
        return None
    itineraries = data.get("itineraries")
    if not isinstance(itineraries, list) or not itineraries:
        logger.info("No itineraries found in Sky-Scrapper response")
        return None

    best: tuple[int, str] | None = None
    for itinerary in itineraries:
        if not isinstance(itinerary, dict):
            continue
        price_info = itinerary.get("price")
        raw = price_info.get("raw") if isinstance(price_info, dict) else None
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            continue
        price = int(raw)
        if price <= 0 or (best is not None and price >= best[0]):
            continue

        airline = ""
        legs = itinerary.get("legs")
        if isinstance(legs, list) and legs and isinstance(legs[0], dict):
            carriers = legs[0].get("carriers")
            marketing = carriers.get("marketing") if isinstance(carriers, dict) else None
            if isinstance(marketing, list) and marketing and isinstance(marketing[0], dict):
                airline = marketing[0].get("name") or ""
        best = (price, airline)

    return best


class SkyScrapperClient(BaseAsyncAPIClient):
    """Async client for Sky-Scrapper flight search."""

    def __init__(self, api_key: str, base_url: str | None = None):
        self.api_key = api_key
        super().__init__(base_url or settings.SKYSCANNER_BASE_URL, timeout=15.0)

    async def _get_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": RAPIDAPI_HOST,
        }

    async def search_cheapest(
        self, origin: str, destination: str, date: str
    ) -> tuple[int, str] | None:
        """Search one-way fares in THB and return the cheapest (price, airline)."""
        response = await self.get(
            "/flights/searchFlights",
            params={
                "originSkyId": origin,
                "destinationSkyId": destination,
                "originEntityId": origin,
                "destinationEntityId": destination,
                "date": date,
                "adults": 1,
                "currency": "THB",
                "market": "TH",
                "locale": "en-US",
            },
        )
        if not isinstance(response, dict):
            raise APIClientError("Unexpected search payload", tool_name=self.tool_name)
        return parse_cheapest_itinerary(response)
