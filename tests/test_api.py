"""
Tests for the HTTP API.

The lifespan is not run: services are attached directly so no Redis
connection is attempted.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from travel_agent.core.deps import get_capabilities, get_orchestrator, get_trip_planner
from travel_agent.core.exceptions import OrchestrationTimeoutError, RequiredAgentError
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.schemas import PopularPlace
from travel_agent.domains.assistant.tools import ToolError
from travel_agent.main import attach_services, create_application


@pytest.fixture
def app():
    application = create_application()
    attach_services(application, AgentCapabilities())
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestChatEndpoint:
    """Tests for POST /api/v1/chat."""

    def test_budget_message(self, client):
        response = client.post(
            "/api/v1/chat", json={"message": "What can I do with 50000 baht budget?"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["intent"] == "budget_inquiry"
        assert "**Total:** 50000 THB" in data["response"]

    def test_trip_message(self, client):
        response = client.post(
            "/api/v1/chat",
            json={"message": "I want to visit Tokyo for 5 days with 80000 baht"},
        )

        assert response.status_code == 200
        assert response.json()["response"].count("**Day ") == 7

    def test_message_too_long(self, client):
        response = client.post("/api/v1/chat", json={"message": "x" * 2001})
        assert response.status_code == 422

    def test_planner_failure_is_bad_gateway(self, app, client):
        orchestrator = MagicMock()
        orchestrator.run = AsyncMock(
            side_effect=RequiredAgentError("PlannerAgent", RuntimeError("boom"))
        )
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator

        response = client.post("/api/v1/chat", json={"message": "plan a trip"})

        assert response.status_code == 502
        assert response.json()["detail"] == "PlannerAgent is unavailable"

    def test_deadline_is_gateway_timeout(self, app, client):
        orchestrator = MagicMock()
        orchestrator.run = AsyncMock(side_effect=OrchestrationTimeoutError(30))
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator

        response = client.post("/api/v1/chat", json={"message": "plan a trip"})

        assert response.status_code == 504
        assert response.json()["detail"] == "Request did not complete within 30 seconds"


class TestPlanningEndpoints:
    """Tests for POST /api/v1/plan and /api/v1/budget."""

    def test_plan(self, client):
        response = client.post("/api/v1/plan", json={"message": "plan a trip"})

        assert response.status_code == 200
        data = response.json()
        assert data["destination"] == "Unknown"
        assert data["budget_thb"] == 50000
        assert data["budget_plan"]["total"] == 50000
        assert data["total_estimated_cost"] == data["flight"]["price"] + data["hotel"]["total_price"]

    def test_plan_timeout(self, app, client):
        planner = MagicMock()
        planner.plan = AsyncMock(side_effect=OrchestrationTimeoutError(30))
        app.dependency_overrides[get_trip_planner] = lambda: planner

        response = client.post("/api/v1/plan", json={"message": "plan a trip"})
        assert response.status_code == 504

    @pytest.mark.parametrize(
        "total,flight,total_out",
        [(100000, 45000, 100000), (0, 0, 0), (-500, 0, 0)],
    )
    def test_budget(self, client, total, flight, total_out):
        response = client.post("/api/v1/budget", json={"total": total})

        assert response.status_code == 200
        assert response.json()["flight"] == flight
        assert response.json()["total"] == total_out

    @pytest.mark.parametrize("total", ["inf", "-inf", "nan"])
    def test_budget_rejects_non_finite_total(self, client, total):
        response = client.post("/api/v1/budget", json={"total": total})
        assert response.status_code == 422

    def test_budget_rejects_overflowing_total(self, client):
        response = client.post(
            "/api/v1/budget",
            content=b'{"total": 1e400}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422


class TestVisaEndpoint:
    """Tests for POST /api/v1/visa."""

    def test_seeded_requirement(self, client):
        response = client.post(
            "/api/v1/visa",
            json={"nationality": "TH", "destination": "JP", "stay_days": 10},
        )

        assert response.status_code == 200
        assert response.json()["visa_required"] is False

    def test_unknown_pair_without_llm(self, client):
        response = client.post(
            "/api/v1/visa",
            json={"nationality": "TH", "destination": "ZZ", "stay_days": 10},
        )

        assert response.status_code == 200
        assert "could not be verified" in response.json()["disclaimer"]

    def test_invalid_stay(self, client):
        response = client.post(
            "/api/v1/visa",
            json={"nationality": "TH", "destination": "JP", "stay_days": 0},
        )
        assert response.status_code == 422


class TestSocialPlacesEndpoint:
    """Tests for POST /api/v1/social/places."""

    @pytest.fixture
    def places(self):
        provider = MagicMock()
        provider.get_top_rated_places = AsyncMock(
            return_value=[
                PopularPlace(place_id="p1", name="Ichiran", rating=4.6, review_count=9000),
                PopularPlace(place_id="p2", name="Afuri", rating=4.4, review_count=3000),
            ]
        )
        return provider

    @pytest.fixture
    def cache(self):
        cache = MagicMock()
        cache.safe_get_json = AsyncMock(return_value=None)
        cache.safe_set_json = AsyncMock(return_value=True)
        return cache

    def test_missing_keyword(self, client):
        response = client.post("/api/v1/social/places", json={"location": "Tokyo"})
        assert response.status_code == 422

    def test_empty_location(self, client):
        response = client.post(
            "/api/v1/social/places", json={"keyword": "ramen", "location": ""}
        )
        assert response.status_code == 422

    def test_unconfigured_provider(self, client):
        response = client.post(
            "/api/v1/social/places", json={"keyword": "ramen", "location": "Tokyo"}
        )

        assert response.status_code == 503
        assert response.json()["detail"] == "Social places service is not configured"

    def test_places_are_returned_and_cached(self, app, client, places, cache):
        capabilities = AgentCapabilities(places=places, cache=cache)
        app.dependency_overrides[get_capabilities] = lambda: capabilities

        response = client.post(
            "/api/v1/social/places",
            json={"keyword": "ramen", "location": "Tokyo", "limit": 2},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "ramen in Tokyo"
        assert data["count"] == 2
        assert [p["name"] for p in data["places"]] == ["Ichiran", "Afuri"]
        places.get_top_rated_places.assert_awaited_once_with("ramen", "Tokyo", 2)
        cache.safe_get_json.assert_awaited_once_with("social:ramen:Tokyo:2")
        key, payload = cache.safe_set_json.await_args.args
        assert key == "social:ramen:Tokyo:2"
        assert payload["count"] == 2
        assert cache.safe_set_json.await_args.kwargs["ttl"] == 3600

    @pytest.mark.parametrize("limit", [None, 0, -3])
    def test_default_limit(self, app, client, places, limit):
        capabilities = AgentCapabilities(places=places)
        app.dependency_overrides[get_capabilities] = lambda: capabilities
        body = {"keyword": "ramen", "location": "Tokyo"}
        if limit is not None:
            body["limit"] = limit

        response = client.post("/api/v1/social/places", json=body)

        assert response.status_code == 200
        places.get_top_rated_places.assert_awaited_once_with("ramen", "Tokyo", 10)

    def test_cache_hit_skips_provider(self, app, client, places, cache):
        cache.safe_get_json = AsyncMock(
            return_value={
                "places": [{"place_id": "c1", "name": "Cached Ramen"}],
                "query": "ramen in Tokyo",
                "count": 1,
            }
        )
        capabilities = AgentCapabilities(places=places, cache=cache)
        app.dependency_overrides[get_capabilities] = lambda: capabilities

        response = client.post(
            "/api/v1/social/places", json={"keyword": "ramen", "location": "Tokyo"}
        )

        assert response.status_code == 200
        assert response.json()["places"][0]["name"] == "Cached Ramen"
        places.get_top_rated_places.assert_not_awaited()
        cache.safe_set_json.assert_not_awaited()

    def test_cache_hit_without_provider(self, app, client, cache):
        cache.safe_get_json = AsyncMock(
            return_value={"places": [], "query": "ramen in Tokyo", "count": 0}
        )
        capabilities = AgentCapabilities(cache=cache)
        app.dependency_overrides[get_capabilities] = lambda: capabilities

        response = client.post(
            "/api/v1/social/places", json={"keyword": "ramen", "location": "Tokyo"}
        )
        assert response.status_code == 200

    def test_provider_failure_is_bad_gateway(self, app, client, places):
        places.get_top_rated_places = AsyncMock(
            side_effect=ToolError("quota exceeded", "google_places")
        )
        capabilities = AgentCapabilities(places=places)
        app.dependency_overrides[get_capabilities] = lambda: capabilities

        response = client.post(
            "/api/v1/social/places", json={"keyword": "ramen", "location": "Tokyo"}
        )
        assert response.status_code == 502
