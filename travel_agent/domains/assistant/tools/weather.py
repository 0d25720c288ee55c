"""OpenWeatherMap client for current conditions and short forecasts."""

import logging
from datetime import datetime

from travel_agent.core.config import settings
from travel_agent.domains.assistant.schemas import DayForecast
from travel_agent.domains.assistant.tools.base import APIClientError, BaseAsyncAPIClient

logger = logging.getLogger(__name__)

FORECAST_DAYS = 3


class WeatherClient(BaseAsyncAPIClient):
    """Async client for OpenWeatherMap API."""

    def __init__(self, api_key: str, base_url: str | None = None):
        self.api_key = api_key
        super().__init__(base_url or settings.WEATHER_API_BASE_URL)

    async def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        return {"Accept": "application/json"}

    def _params(self, city: str) -> dict[str, str]:
        return {"q": city, "appid": self.api_key, "units": "metric"}

    async def get_forecast(
        self, city: str, days: int = FORECAST_DAYS
    ) -> tuple[list[DayForecast], float]:
        """
        Get a per-day forecast from the 3-hourly /forecast feed.

        The first reading of each calendar date is kept, up to `days` dates.

        Returns:
            (daily forecasts, mean rain probability in percent)
        """
        response = await self.get("/forecast", params=self._params(city))
        if not isinstance(response, dict) or not isinstance(response.get("list"), list):
            raise APIClientError("Unexpected forecast payload", tool_name=self.tool_name)

        forecasts: list[DayForecast] = []
        seen_dates: set[str] = set()

        for item in response["list"]:
            if len(forecasts) >= days:
                break
            try:
                day = datetime.fromtimestamp(item["dt"]).strftime("%Y-%m-%d")
                temperature = float(item["main"]["temp"])
                pop = float(item.get("pop", 0))
            except (KeyError, TypeError, ValueError) as e:
                raise APIClientError(
                    f"Unexpected forecast payload: {e!r}", tool_name=self.tool_name
                ) from e
            if day in seen_dates:
                continue

            weather = item.get("weather") or [{}]
            forecasts.append(
                DayForecast(
                    date=day,
                    temperature=temperature,
                    condition=weather[0].get("main", "Clear"),
                    rain_probability=min(max(pop * 100, 0.0), 100.0),
                )
            )
            seen_dates.add(day)

        avg_rain = 0.0
        if forecasts:
            avg_rain = sum(f.rain_probability for f in forecasts) / len(forecasts)
        return forecasts, avg_rain

    async def get_current(self, city: str) -> tuple[int, str]:
        """Get (temperature in Celsius, main condition) from /weather."""
        response = await self.get("/weather", params=self._params(city))
        try:
            temperature = int(float(response["main"]["temp"]))
        except (KeyError, TypeError, ValueError) as e:
            raise APIClientError(
                f"Unexpected weather payload: {e!r}", tool_name=self.tool_name
            ) from e

        weather = response.get("weather") or [{}]
        return temperature, weather[0].get("main", "Clear")
