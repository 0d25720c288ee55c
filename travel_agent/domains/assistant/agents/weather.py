"""
Travel Agent - Weather Agent
Three day forecasts with rain suggestions, and monthly weather summaries.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from pydantic import ValidationError

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.estimators import (
    DEFAULT_TEMPERATURE,
    estimate_condition,
    estimate_rain_probability,
    estimate_temperature,
    normalize_month,
)
from travel_agent.domains.assistant.schemas import DayForecast, WeatherForecast
from travel_agent.domains.assistant.tools.weather import FORECAST_DAYS, WeatherClient

logger = logging.getLogger(__name__)

RAIN_ALERT_THRESHOLD = 60.0
GOOD_WEATHER_SUGGESTION = "Weather looks good for outdoor activities!"

RAIN_SYSTEM_PROMPT = (
    "You are a helpful weather advisor. "
    "Provide brief, friendly indoor activity suggestions."
)

RAIN_USER_PROMPT = """You are WeatherAgent. There's a {rain:.0f}% chance of rain in {city}.
Recommend 2-3 indoor activities suitable for rainy weather. Keep it brief and friendly."""


def _month_name(day: date) -> str:
    return day.strftime("%B").lower()


class WeatherAgent(BaseAgent):
    """Weather forecasting and suggestions."""

    name = "WeatherAgent"

    async def get_forecast(self, city: str) -> WeatherForecast:
        """Current conditions, a 3-day forecast, and a suggestion."""
        today = date.today()
        cache_key = f"forecast:{city}:{today.isoformat()}"

        cached = await self._cache_get(cache_key)
        if cached is not None:
            try:
                return WeatherForecast.model_validate(cached)
            except ValidationError as e:
                logger.warning(f"WeatherAgent: ignoring malformed cached forecast: {e}")

        forecast = WeatherForecast(city=city)

        if self.capabilities.weather_api_key:
            try:
                async with WeatherClient(self.capabilities.weather_api_key) as client:
                    days, avg_rain = await client.get_forecast(city)
                if days:
                    forecast.forecast = days
                    forecast.rain_probability = avg_rain
            except Exception as e:
                self._log_provider_failure("OpenWeatherMap", e)

        if not forecast.forecast:
            forecast.forecast = self._estimate_forecast(city, today)
            forecast.rain_probability = estimate_rain_probability(city, _month_name(today))

        forecast.temperature = forecast.forecast[0].temperature
        forecast.condition = forecast.forecast[0].condition

        if forecast.rain_probability > RAIN_ALERT_THRESHOLD:
            forecast.suggestion = await self._rain_suggestion(city, forecast.rain_probability)
        else:
            forecast.suggestion = GOOD_WEATHER_SUGGESTION

        logger.info(
            f"WeatherAgent: forecast for {city} - rain prob: "
            f"{forecast.rain_probability:.1f}%, suggestion: {forecast.suggestion}"
        )
        await self._cache_set(cache_key, forecast.model_dump())
        return forecast

    def _estimate_forecast(self, city: str, today: date) -> list[DayForecast]:
        month = _month_name(today)
        base_temp = estimate_temperature(city, month)
        condition = estimate_condition(city, month)
        rain = estimate_rain_probability(city, month)

        return [
            DayForecast(
                date=(today + timedelta(days=i)).isoformat(),
                temperature=float(base_temp + (i - 1)),
                condition=condition,
                rain_probability=rain,
            )
            for i in range(FORECAST_DAYS)
        ]

    async def _rain_suggestion(self, city: str, rain: float) -> str:
        fallback = (
            f"High chance of rain ({rain:.0f}%). Consider indoor activities like "
            "museums, shopping malls, or indoor entertainment."
        )
        return await self._narrate(
            RAIN_SYSTEM_PROMPT,
            RAIN_USER_PROMPT.format(rain=rain, city=city),
            fallback,
        )

    # ============ Monthly Summary ============

    async def get_weather_summary(self, city: str, month: str) -> tuple[int, str]:
        """
        Average temperature and main condition for a city in a month.

        Args:
            city: City name (e.g., "Tokyo")
            month: Month name, abbreviation, or number (e.g., "December", "12")

        Returns:
            (average temperature in Celsius, condition)
        """
        if not city:
            logger.warning("WeatherAgent: city is empty, using default summary")
            return DEFAULT_TEMPERATURE, "Sunny"

        month = normalize_month(month)
        cache_key = f"weather:{city}:{month}"

        cached = await self._cache_get(cache_key) or {}
        # A cached 0°C reads as a miss
        if isinstance(cached.get("avg_temp"), int) and cached["avg_temp"] != 0:
            return cached["avg_temp"], str(cached.get("condition", "Sunny"))

        summary: tuple[int, str] | None = None
        if self.capabilities.weather_api_key:
            try:
                async with WeatherClient(self.capabilities.weather_api_key) as client:
                    summary = await client.get_current(city)
            except Exception as e:
                self._log_provider_failure("OpenWeatherMap", e)

        if summary is None or summary[0] == 0:
            summary = (estimate_temperature(city, month), estimate_condition(city, month))
            logger.info(f"WeatherAgent: estimated {city} in {month}: {summary[0]}°C, {summary[1]}")

        await self._cache_set(cache_key, {"avg_temp": summary[0], "condition": summary[1]})
        return summary
