"""
Tests for the provider clients.

HTTP behaviour is exercised through httpx.MockTransport; payload parsing
through patched client.get calls.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from travel_agent.domains.assistant.schemas import PopularPlace
from travel_agent.domains.assistant.tools import (
    APIClientError,
    AuthenticationError,
    AviationStackClient,
    GooglePlacesService,
    RateLimitError,
    ToolErrorType,
    WeatherClient,
    classify_error,
    parse_cheapest_itinerary,
)
from travel_agent.domains.assistant.tools.google_places import GooglePlacesClient


def _attach_transport(client, handler) -> None:
    """Give a client an httpx client backed by a handler function."""
    client._client = httpx.AsyncClient(
        base_url=client.base_url,
        transport=httpx.MockTransport(handler),
    )


def _timestamp(day: int, hour: int = 12, minute: int = 0) -> int:
    return int(datetime(2025, 1, day, hour, minute, tzinfo=UTC).timestamp())


class TestClassifyError:
    """Tests for classify_error."""

    def test_typed_errors(self):
        assert classify_error(RateLimitError("slow down", tool_name="x")) == ToolErrorType.RATE_LIMIT
        assert classify_error(AuthenticationError("no", tool_name="x")) == ToolErrorType.AUTHENTICATION
        assert classify_error(TimeoutError()) == ToolErrorType.TIMEOUT

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("HTTP error: 503", ToolErrorType.SERVICE_UNAVAILABLE),
            ("Request error: connection refused", ToolErrorType.NETWORK_ERROR),
            ("Malformed JSON payload", ToolErrorType.INVALID_RESPONSE),
            ("something else", ToolErrorType.UNKNOWN),
        ],
    )
    def test_message_classification(self, message, expected):
        assert classify_error(APIClientError(message, tool_name="x")) == expected


class TestBaseClient:
    """Tests for BaseAsyncAPIClient.get."""

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        with pytest.raises(APIClientError):
            await WeatherClient("key").get("/weather")

    @pytest.mark.asyncio
    async def test_retries_server_errors(self):
        """Test that a 5xx answer is retried."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503)
            return httpx.Response(200, json={"ok": True})

        client = WeatherClient("key", base_url="https://weather.test")
        _attach_transport(client, handler)

        assert await client.get("/weather", params={"q": "Tokyo"}) == {"ok": True}
        assert len(calls) == 2
        assert calls[0].url.params["q"] == "Tokyo"

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        client = WeatherClient("key", base_url="https://weather.test")
        _attach_transport(client, lambda request: httpx.Response(500))

        with pytest.raises(APIClientError, match="500"):
            await client.get("/weather")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,error",
        [(401, AuthenticationError), (429, RateLimitError), (404, APIClientError)],
    )
    async def test_client_errors_are_not_retried(self, status_code, error):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(status_code)

        client = WeatherClient("key", base_url="https://weather.test")
        _attach_transport(client, handler)

        with pytest.raises(error):
            await client.get("/weather")
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        client = WeatherClient("key", base_url="https://weather.test")
        _attach_transport(client, lambda request: httpx.Response(200, content=b"<html>"))

        with pytest.raises(APIClientError, match="JSON"):
            await client.get("/weather")

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = WeatherClient("key", base_url="https://weather.test")
        _attach_transport(client, handler)

        with pytest.raises(APIClientError, match="Request error"):
            await client.get("/weather")


class TestWeatherClient:
    """Tests for WeatherClient payload parsing."""

    @pytest.mark.asyncio
    async def test_forecast_keeps_first_reading_per_day(self):
        payload = {
            "list": [
                {"dt": _timestamp(10), "main": {"temp": 20.5}, "weather": [{"main": "Rain"}], "pop": 0.8},
                {"dt": _timestamp(10, 12, 30), "main": {"temp": 25.0}, "weather": [{"main": "Clear"}], "pop": 0.0},
                {"dt": _timestamp(11), "main": {"temp": 21.0}, "weather": [{"main": "Clouds"}], "pop": 0.4},
                {"dt": _timestamp(12), "main": {"temp": 22.0}, "pop": 0.6},
                {"dt": _timestamp(13), "main": {"temp": 23.0}, "weather": [{"main": "Clear"}]},
            ]
        }
        client = WeatherClient("key")
        with patch.object(WeatherClient, "get", AsyncMock(return_value=payload)):
            forecasts, avg_rain = await client.get_forecast("Tokyo")

        assert [f.temperature for f in forecasts] == [20.5, 21.0, 22.0]
        assert [f.condition for f in forecasts] == ["Rain", "Clouds", "Clear"]
        assert len({f.date for f in forecasts}) == 3
        assert avg_rain == pytest.approx(60.0)

    @pytest.mark.asyncio
    async def test_unexpected_forecast_payload(self):
        client = WeatherClient("key")
        with patch.object(WeatherClient, "get", AsyncMock(return_value={"cod": "404"})):
            with pytest.raises(APIClientError):
                await client.get_forecast("Nowhere")

    @pytest.mark.asyncio
    async def test_current_weather(self):
        payload = {"main": {"temp": 12.7}, "weather": [{"main": "Clouds"}]}
        client = WeatherClient("key")
        with patch.object(WeatherClient, "get", AsyncMock(return_value=payload)):
            assert await client.get_current("Tokyo") == (12, "Clouds")

    @pytest.mark.asyncio
    async def test_current_weather_missing_temperature(self):
        client = WeatherClient("key")
        with patch.object(WeatherClient, "get", AsyncMock(return_value={"weather": []})):
            with pytest.raises(APIClientError):
                await client.get_current("Tokyo")


class TestAviationStackClient:
    """Tests for AviationStackClient payload parsing."""

    @pytest.mark.asyncio
    async def test_delay_marks_flight_delayed(self):
        payload = {
            "data": [
                {
                    "flight_status": "active",
                    "departure": {"scheduled": "2025-01-01T10:00", "gate": "B2", "delay": 45},
                    "arrival": {"scheduled": "2025-01-01T16:00"},
                }
            ]
        }
        client = AviationStackClient("key")
        with patch.object(AviationStackClient, "get", AsyncMock(return_value=payload)):
            status = await client.get_flight_status("JL708")

        assert status.status == "delayed"
        assert status.delay_minutes == 45
        assert status.gate == "B2"
        assert status.arrival_time == "2025-01-01T16:00"

    @pytest.mark.asyncio
    async def test_unknown_flight(self):
        client = AviationStackClient("key")
        with patch.object(AviationStackClient, "get", AsyncMock(return_value={"data": []})):
            assert await client.get_flight_status("XX000") is None

    @pytest.mark.asyncio
    async def test_error_payload(self):
        client = AviationStackClient("key")
        with patch.object(
            AviationStackClient, "get", AsyncMock(return_value={"error": {"code": "invalid_access_key"}})
        ):
            with pytest.raises(APIClientError):
                await client.get_flight_status("JL708")


class TestParseCheapestItinerary:
    """Tests for parse_cheapest_itinerary."""

    def test_cheapest_is_selected(self):
        payload = {
            "data": {
                "itineraries": [
                    {"price": {"raw": 18000.4}, "legs": [{"carriers": {"marketing": [{"name": "JAL"}]}}]},
                    {"price": {"raw": 14999.9}, "legs": [{"carriers": {"marketing": [{"name": "ANA"}]}}]},
                    {"price": {"raw": 0}, "legs": []},
                    {"price": {"raw": "cheap"}},
                ]
            }
        }
        assert parse_cheapest_itinerary(payload) == (14999, "ANA")

    def test_missing_carrier_gives_empty_airline(self):
        payload = {"data": {"itineraries": [{"price": {"raw": 5000}}]}}
        assert parse_cheapest_itinerary(payload) == (5000, "")

    @pytest.mark.parametrize(
        "payload",
        [None, [], {}, {"data": None}, {"data": {"itineraries": []}}, {"data": {"itineraries": "x"}}],
    )
    def test_no_itineraries(self, payload):
        assert parse_cheapest_itinerary(payload) is None


class TestGooglePlaces:
    """Tests for the Google Places client and service."""

    @pytest.mark.asyncio
    async def test_text_search_parses_results(self):
        payload = {
            "status": "OK",
            "results": [
                {
                    "place_id": "p1",
                    "name": "Senso-ji",
                    "formatted_address": "Asakusa, Tokyo",
                    "rating": 4.5,
                    "user_ratings_total": 80000,
                    "types": ["place_of_worship"],
                }
            ],
        }
        client = GooglePlacesClient("key")
        with patch.object(GooglePlacesClient, "get", AsyncMock(return_value=payload)):
            places = await client.text_search("tourist attractions in Tokyo")

        assert places == [
            PopularPlace(
                place_id="p1",
                name="Senso-ji",
                address="Asakusa, Tokyo",
                rating=4.5,
                review_count=80000,
                types=["place_of_worship"],
            )
        ]

    @pytest.mark.asyncio
    async def test_text_search_error_status(self):
        client = GooglePlacesClient("key")
        with patch.object(
            GooglePlacesClient, "get", AsyncMock(return_value={"status": "REQUEST_DENIED"})
        ):
            with pytest.raises(APIClientError, match="REQUEST_DENIED"):
                await client.text_search("anything")

    @pytest.mark.asyncio
    async def test_service_ranks_by_review_count(self):
        """Test that places are sorted by review count and truncated."""
        found = [
            PopularPlace(name="Quiet Garden", review_count=10),
            PopularPlace(name="Tokyo Tower", review_count=50000),
            PopularPlace(name="Senso-ji", review_count=80000),
        ]
        service = GooglePlacesService("key", "https://places.test")
        with patch.object(GooglePlacesClient, "text_search", AsyncMock(return_value=found)) as search:
            places = await service.get_top_rated_places("tourist attractions", "Tokyo", 2)

        assert [p.name for p in places] == ["Senso-ji", "Tokyo Tower"]
        search.assert_awaited_once_with("tourist attractions in Tokyo")
