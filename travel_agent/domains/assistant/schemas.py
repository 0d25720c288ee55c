"""
Travel Agent - Assistant Schemas
Typed records shared by the intent agent, domain agents, and orchestrator.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field, model_validator

logger = logging.getLogger(__name__)


# ============ Intent ============


class Intent(str, Enum):
    """Coarse category assigned to one user message."""

    PLAN_TRIP = "plan_trip"
    FLIGHT_CHECK = "flight_check"
    WEATHER_CHECK = "weather_check"
    HOTEL_SEARCH = "hotel_search"
    LOCAL_RECOMMENDATION = "local_recommendation"
    BUDGET_INQUIRY = "budget_inquiry"
    PLAN_UPDATE = "plan_update"
    GENERAL_CHAT = "general_chat"

    @classmethod
    def parse(cls, value: Any) -> Intent:
        """Map a raw label to an Intent, unknown labels become general chat."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.GENERAL_CHAT


# ============ Entity Coercion ============


def _as_number(value: Any) -> float | None:
    """Read ints, floats, and numeric strings alike. Booleans are not numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def get_str_entity(entities: Mapping[str, Any], key: str, default: str) -> str:
    """Return a non-empty string entity or the default."""
    value = entities.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def get_int_entity(entities: Mapping[str, Any], key: str, default: int) -> int:
    """Return an integer entity, so 7, 7.0 and "7" resolve the same."""
    number = _as_number(entities.get(key))
    if number is None:
        return default
    return int(number)


def get_float_entity(entities: Mapping[str, Any], key: str, default: float) -> float:
    """Return a float entity, so 7, 7.0 and "7" resolve the same."""
    number = _as_number(entities.get(key))
    if number is None:
        return default
    return number


# ============ Entity Bag ============


class Location(BaseModel):
    """Latitude/longitude pair."""

    lat: float
    lng: float


BANGKOK = Location(lat=13.7563, lng=100.5018)

# Longest trip the planner will lay out day by day
MAX_TRIP_DURATION = 30


class EntityBag(BaseModel):
    """Entities extracted from a message. Every field is optional."""

    destination: str | None = None
    duration: int | None = None
    budget: float | None = None
    date_from: str | None = None
    date_to: str | None = None
    travelers: int | None = None
    interests: list[str] = Field(default_factory=list)
    location: Location | None = None
    flight_code: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> EntityBag:
        """Build a bag from a loosely typed mapping. Never raises."""
        if not isinstance(data, Mapping):
            return cls()

        duration = _as_number(data.get("duration"))
        budget = _as_number(data.get("budget"))
        travelers = _as_number(data.get("travelers"))

        interests: list[str] = []
        raw_interests = data.get("interests")
        if isinstance(raw_interests, str) and raw_interests.strip():
            interests = [raw_interests.strip()]
        elif isinstance(raw_interests, list):
            interests = [i.strip() for i in raw_interests if isinstance(i, str) and i.strip()]

        location = None
        raw_location = data.get("location")
        if isinstance(raw_location, Mapping):
            lat = _as_number(raw_location.get("lat"))
            lng = _as_number(raw_location.get("lng"))
            # The LLM fills 0.0/0.0 when it has no coordinates
            if lat is not None and lng is not None and (lat, lng) != (0.0, 0.0):
                location = Location(lat=lat, lng=lng)

        def _text(key: str) -> str | None:
            value = get_str_entity(data, key, "")
            return value or None

        return cls(
            destination=_text("destination"),
            duration=int(duration) if duration is not None else None,
            budget=budget,
            date_from=_text("date_from"),
            date_to=_text("date_to"),
            travelers=int(travelers) if travelers is not None else None,
            interests=interests,
            location=location,
            flight_code=_text("flight_code"),
        )

    # ============ Default Resolution ============

    def destination_or(self, default: str) -> str:
        return self.destination or default

    def duration_or(self, default: int) -> int:
        """The duration in days, capped at MAX_TRIP_DURATION."""
        if self.duration is None or self.duration < 1:
            return min(default, MAX_TRIP_DURATION)
        return min(self.duration, MAX_TRIP_DURATION)

    def budget_or(self, default: float) -> float:
        if self.budget is None:
            return default
        return self.budget

    def interest_or(self, default: str) -> str:
        return self.interests[0] if self.interests else default

    def location_or(self, default: Location = BANGKOK) -> Location:
        return self.location or default

    def flight_code_or(self, default: str = "") -> str:
        return self.flight_code or default


class IntentResult(BaseModel):
    """Detected intent and extracted entities."""

    intent: Intent
    entities: EntityBag = Field(default_factory=EntityBag)


# ============ Budget ============


class BudgetPlan(BaseModel):
    """Budget split into five expense buckets."""

    flight: int = Field(0, ge=0)
    hotel: int = Field(0, ge=0)
    food: int = Field(0, ge=0)
    transport: int = Field(0, ge=0)
    misc: int = Field(0, ge=0)

    @computed_field  # type: ignore[misc]
    @property
    def total(self) -> int:
        return self.flight + self.hotel + self.food + self.transport + self.misc


# ============ Trip Plan ============


class ItineraryDay(BaseModel):
    """Activities and budget for one day."""

    day: int = Field(..., ge=1)
    activities: list[str] = Field(default_factory=list)
    budget: float = Field(0, ge=0)


class TripPlan(BaseModel):
    """A complete day-by-day itinerary."""

    destination: str
    duration: int = Field(..., ge=1)
    total_budget: float = Field(..., ge=0)
    itinerary: list[ItineraryDay]
    summary: str = ""

    @model_validator(mode="after")
    def _itinerary_covers_duration(self) -> TripPlan:
        if len(self.itinerary) != self.duration:
            raise ValueError(
                f"itinerary has {len(self.itinerary)} days, expected {self.duration}"
            )
        return self


# ============ Domain Results ============


class FlightStatus(BaseModel):
    """Live or estimated status of one flight."""

    flight_code: str
    status: str = "unknown"
    departure_time: str = ""
    arrival_time: str = ""
    gate: str = ""
    delay_minutes: int = 0
    notification: str = ""


class HotelRecommendation(BaseModel):
    """One hotel search result."""

    name: str
    price_per_night: float
    rating: float
    address: str = ""
    distance_km: float = 0.0


class DayForecast(BaseModel):
    """Forecast for a single day."""

    date: str
    temperature: float
    condition: str
    rain_probability: float = Field(0, ge=0, le=100)


class WeatherForecast(BaseModel):
    """Current conditions plus a three day forecast."""

    city: str
    temperature: float = 0.0
    condition: str = ""
    rain_probability: float = Field(0, ge=0, le=100)
    forecast: list[DayForecast] = Field(default_factory=list)
    suggestion: str = ""


class PlaceRecommendation(BaseModel):
    """A nearby place matching an interest."""

    name: str
    type: str = ""
    rating: float = 0.0
    distance_km: float = 0.0
    address: str = ""


class PopularPlace(BaseModel):
    """A top-rated place ranked by review count."""

    place_id: str = ""
    name: str
    address: str = ""
    rating: float = 0.0
    review_count: int = 0
    types: list[str] = Field(default_factory=list)


class SocialPlacesResponse(BaseModel):
    """Popular places for one "<keyword> in <location>" query."""

    places: list[PopularPlace] = Field(default_factory=list)
    query: str
    count: int = 0


# ============ Visa ============


class ChecklistItem(BaseModel):
    """A document requirement."""

    item: str
    notes: str = ""


class FormInfo(BaseModel):
    """An official form."""

    name: str
    download_url: str


class FeeInfo(BaseModel):
    """Visa fee information."""

    amount: float
    currency: str


class VisaRequirement(BaseModel):
    """Visa requirements for one nationality/destination pair."""

    visa_required: bool
    visa_type: str = ""
    checklist: list[ChecklistItem] = Field(default_factory=list)
    forms: list[FormInfo] = Field(default_factory=list)
    processing_time: str = ""
    fees: FeeInfo | None = None
    validity: str = ""
    max_stay_days: int = 0
    disclaimer: str = ""


# ============ Trip Costing ============


class FlightQuote(BaseModel):
    """Cheapest fare found for the outbound leg."""

    origin: str
    destination: str
    date: str
    price: int
    airline: str


class HotelQuote(BaseModel):
    """Lodging cost for the whole stay."""

    city: str
    nights: int
    total_price: int
    price_per_night: int
    name: str


class WeatherSummary(BaseModel):
    """Average temperature and condition for the travel month."""

    city: str
    month: str
    avg_temp: int
    condition: str


class TripCostPlan(BaseModel):
    """Costed travel plan: budget split, fare, lodging, and weather."""

    destination: str
    budget_thb: int
    duration_days: int
    budget_plan: BudgetPlan
    flight: FlightQuote
    hotel: HotelQuote
    weather: WeatherSummary
    total_estimated_cost: int
    message: str
