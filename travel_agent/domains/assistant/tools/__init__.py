"""Async provider clients used by the domain agents.

- AviationStackClient: live flight status
- SkyScrapperClient: cheapest one-way fares
- WeatherClient: OpenWeatherMap current weather and forecast
- GooglePlacesService: socially popular spots
"""

from travel_agent.domains.assistant.tools.aviationstack import AviationStackClient
from travel_agent.domains.assistant.tools.base import (
    APIClientError,
    AuthenticationError,
    RateLimitError,
    ToolError,
    ToolErrorType,
    classify_error,
)
from travel_agent.domains.assistant.tools.google_places import (
    GooglePlacesService,
    PopularPlacesProvider,
)
from travel_agent.domains.assistant.tools.skyscanner import (
    SkyScrapperClient,
    parse_cheapest_itinerary,
)
from travel_agent.domains.assistant.tools.weather import WeatherClient

__all__ = [
    # Clients
    "AviationStackClient",
    "GooglePlacesService",
    "PopularPlacesProvider",
    "SkyScrapperClient",
    "WeatherClient",
    "parse_cheapest_itinerary",
    # Error Classes
    "ToolError",
    "APIClientError",
    "RateLimitError",
    "AuthenticationError",
    "ToolErrorType",
    "classify_error",
]
