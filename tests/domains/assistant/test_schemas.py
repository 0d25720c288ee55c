"""
Tests for assistant schemas.

Intent parsing, entity coercion, the EntityBag resolvers, and plan validation.
"""

import pytest
from pydantic import ValidationError

from travel_agent.domains.assistant.schemas import (
    BANGKOK,
    MAX_TRIP_DURATION,
    BudgetPlan,
    EntityBag,
    Intent,
    ItineraryDay,
    Location,
    TripPlan,
    get_float_entity,
    get_int_entity,
    get_str_entity,
)


class TestIntentEnum:
    """Tests for the Intent enum."""

    def test_intent_count(self):
        """Test that there are exactly 8 intents."""
        assert len(Intent) == 8

    def test_parse_known_label(self):
        assert Intent.parse("plan_trip") == Intent.PLAN_TRIP
        assert Intent.parse(" Weather_Check ") == Intent.WEATHER_CHECK

    @pytest.mark.parametrize("label", ["book_taxi", "", None, 42])
    def test_parse_unknown_label_is_general_chat(self, label):
        assert Intent.parse(label) == Intent.GENERAL_CHAT


class TestEntityCoercion:
    """Tests for the get_*_entity helpers."""

    @pytest.mark.parametrize("value", [7, 7.0, "7", " 7 "])
    def test_numbers_resolve_alike(self, value):
        """Test that 7, 7.0 and "7" resolve the same way."""
        assert get_int_entity({"duration": value}, "duration", 1) == 7
        assert get_float_entity({"duration": value}, "duration", 1.0) == 7.0

    @pytest.mark.parametrize("value", [None, True, "seven", [7], {"n": 7}, float("nan")])
    def test_unexpected_types_give_default(self, value):
        """Test that absent or odd values fall back to the default."""
        assert get_int_entity({"duration": value}, "duration", 3) == 3
        assert get_float_entity({"duration": value}, "duration", 3.5) == 3.5

    def test_string_entity(self):
        assert get_str_entity({"destination": "Tokyo"}, "destination", "Unknown") == "Tokyo"
        assert get_str_entity({"destination": ""}, "destination", "Unknown") == "Unknown"
        assert get_str_entity({"destination": 5}, "destination", "Unknown") == "Unknown"
        assert get_str_entity({}, "destination", "Unknown") == "Unknown"


class TestEntityBag:
    """Tests for EntityBag construction and default resolution."""

    def test_from_mapping_full(self):
        """Test a complete LLM entity object."""
        bag = EntityBag.from_mapping(
            {
                "destination": "Tokyo",
                "duration": "5",
                "budget": 80000,
                "date_from": "2025-04-01",
                "travelers": 2.0,
                "interests": ["ramen", "", 3],
                "location": {"lat": 35.68, "lng": 139.69},
                "flight_code": "JL708",
            }
        )
        assert bag.destination == "Tokyo"
        assert bag.duration == 5
        assert bag.budget == 80000.0
        assert bag.date_from == "2025-04-01"
        assert bag.date_to is None
        assert bag.travelers == 2
        assert bag.interests == ["ramen"]
        assert bag.location == Location(lat=35.68, lng=139.69)
        assert bag.flight_code == "JL708"

    @pytest.mark.parametrize("data", [None, "text", 42, []])
    def test_from_mapping_never_raises(self, data):
        assert EntityBag.from_mapping(data) == EntityBag()

    def test_single_interest_string(self):
        assert EntityBag.from_mapping({"interests": "cafe"}).interests == ["cafe"]

    def test_zero_location_is_absent(self):
        """Test that the placeholder 0.0/0.0 location is dropped."""
        bag = EntityBag.from_mapping({"location": {"lat": 0.0, "lng": 0.0}})
        assert bag.location is None
        assert bag.location_or() == BANGKOK

    def test_resolvers_use_defaults(self):
        bag = EntityBag()
        assert bag.destination_or("Unknown") == "Unknown"
        assert bag.duration_or(7) == 7
        assert bag.budget_or(50000) == 50000
        assert bag.interest_or("restaurant") == "restaurant"
        assert bag.flight_code_or() == ""
        assert bag.location_or() == Location(lat=13.7563, lng=100.5018)

    def test_duration_below_one_uses_default(self):
        assert EntityBag(duration=0).duration_or(7) == 7
        assert EntityBag(duration=-3).duration_or(7) == 7
        assert EntityBag(duration=4).duration_or(7) == 4

    def test_duration_is_capped(self):
        """Test that oversized durations resolve to the longest supported trip."""
        bag = EntityBag.from_mapping({"duration": 1_500_000})
        assert bag.duration_or(7) == MAX_TRIP_DURATION
        assert EntityBag(duration=MAX_TRIP_DURATION).duration_or(7) == MAX_TRIP_DURATION
        assert EntityBag().duration_or(100) == MAX_TRIP_DURATION

    def test_interest_uses_first_item(self):
        assert EntityBag(interests=["sushi", "bars"]).interest_or("restaurant") == "sushi"


class TestPlans:
    """Tests for BudgetPlan and TripPlan."""

    def test_budget_plan_total(self):
        plan = BudgetPlan(flight=10, hotel=5, food=3, transport=2, misc=1)
        assert plan.total == 21
        assert plan.model_dump()["total"] == 21

    def test_budget_plan_rejects_negative(self):
        with pytest.raises(ValidationError):
            BudgetPlan(flight=-1)

    def test_trip_plan_requires_one_day_per_duration(self):
        """Test that the itinerary length must equal the duration."""
        days = [ItineraryDay(day=1, activities=["Walk"], budget=100)]
        with pytest.raises(ValidationError):
            TripPlan(destination="Tokyo", duration=2, total_budget=200, itinerary=days)

        plan = TripPlan(destination="Tokyo", duration=1, total_budget=100, itinerary=days)
        assert plan.itinerary[0].day == 1

    def test_trip_plan_rejects_zero_duration(self):
        with pytest.raises(ValidationError):
            TripPlan(destination="Tokyo", duration=0, total_budget=0, itinerary=[])
