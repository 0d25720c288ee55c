"""Google Places Text Search client for socially popular spots."""

import logging
from typing import Protocol

from travel_agent.core.config import settings
from travel_agent.domains.assistant.schemas import PopularPlace
from travel_agent.domains.assistant.tools.base import APIClientError, BaseAsyncAPIClient

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class PopularPlacesProvider(Protocol):
    """Anything that can rank places for a keyword in a location."""

    async def get_top_rated_places(
        self, keyword: str, location: str, limit: int
    ) -> list[PopularPlace]: ...


class GooglePlacesClient(BaseAsyncAPIClient):
    """Async client for the Places /textsearch endpoint."""

    def __init__(self, api_key: str, base_url: str | None = None):
        self.api_key = api_key
        super().__init__(base_url or settings.GOOGLE_PLACES_BASE_URL, timeout=15.0)

    async def _get_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def text_search(self, query: str) -> list[PopularPlace]:
        """Search places by free text."""
        response = await self.get(
            "/textsearch/json",
            params={"query": query, "key": self.api_key},
        )
        if not isinstance(response, dict):
            raise APIClientError("Unexpected places payload", tool_name=self.tool_name)

        if response.get("status") not in ["OK", "ZERO_RESULTS"]:
            raise APIClientError(
                f"Places API error: {response.get('status')}",
                tool_name=self.tool_name,
                details={"error_message": response.get("error_message")},
            )

        places = []
        for result in response.get("results", []):
            places.append(
                PopularPlace(
                    place_id=result.get("place_id", ""),
                    name=result.get("name", ""),
                    address=result.get("formatted_address", ""),
                    rating=result.get("rating") or 0.0,
                    review_count=result.get("user_ratings_total") or 0,
                    types=result.get("types") or [],
                )
            )
        return places


class GooglePlacesService:
    """Top-rated places ranked by review count."""

    def __init__(self, api_key: str, base_url: str | None = None) -> None:
        self.api_key = api_key
        self.base_url = base_url

    async def get_top_rated_places(
        self, keyword: str, location: str, limit: int = DEFAULT_LIMIT
    ) -> list[PopularPlace]:
        """
        Find places for "<keyword> in <location>".

        Raises:
            ToolError: the provider is unavailable
        """
        if limit <= 0:
            limit = DEFAULT_LIMIT

        async with GooglePlacesClient(self.api_key, self.base_url) as client:
            places = await client.text_search(f"{keyword} in {location}")

        places.sort(key=lambda p: p.review_count, reverse=True)
        logger.info(f"Found {len(places)} places for '{keyword}' in {location}")
        return places[:limit]
