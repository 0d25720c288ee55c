"""
Travel Agent - Agent Capabilities
The set of optional collaborators an agent may use, resolved once at startup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from travel_agent.core.config import Settings, settings as default_settings
from travel_agent.domains.assistant.llm import LLMClient
from travel_agent.domains.assistant.tools.google_places import (
    GooglePlacesService,
    PopularPlacesProvider,
)
from travel_agent.infra.redis import CacheService

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class AgentCapabilities:
    """Optional collaborators. An absent one is None or an empty key."""

    llm: LLMClient | None = None
    cache: CacheService | None = None
    places: PopularPlacesProvider | None = None
    weather_api_key: str = ""
    flight_api_key: str = ""
    rapidapi_key: str = ""
    cache_ttl: int = CACHE_TTL_SECONDS

    @property
    def has_llm(self) -> bool:
        return self.llm is not None

    @property
    def has_cache(self) -> bool:
        return self.cache is not None

    @property
    def has_places(self) -> bool:
        return self.places is not None

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        cache: CacheService | None = None,
    ) -> AgentCapabilities:
        """Resolve capabilities from configuration. Empty keys mean absent."""
        config = config or default_settings

        capabilities = cls(
            llm=LLMClient(config.OPENAI_API_KEY, config.OPENAI_MODEL)
            if config.OPENAI_API_KEY
            else None,
            cache=cache,
            places=GooglePlacesService(
                config.GOOGLE_PLACES_API_KEY, config.GOOGLE_PLACES_BASE_URL
            )
            if config.GOOGLE_PLACES_API_KEY
            else None,
            weather_api_key=config.WEATHER_API_KEY,
            flight_api_key=config.FLIGHT_API_KEY,
            rapidapi_key=config.RAPIDAPI_KEY,
            cache_ttl=config.CACHE_TTL_SECONDS,
        )
        logger.info(
            f"Agent capabilities: llm={capabilities.has_llm}, "
            f"cache={capabilities.has_cache}, places={capabilities.has_places}, "
            f"weather_api={bool(config.WEATHER_API_KEY)}, "
            f"flight_api={bool(config.FLIGHT_API_KEY)}, "
            f"fare_api={bool(config.RAPIDAPI_KEY)}"
        )
        return capabilities
