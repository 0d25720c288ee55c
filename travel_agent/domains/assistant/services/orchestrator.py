"""
Travel Agent - Orchestrator
Routes a message through intent detection to one handler and composes
the markdown reply.

Flow (langgraph):
1. classify - IntentAgent.detect
2. route by intent to one handler node
3. handler composes the response, then END

Only the trip planner is required. Every other agent call is
best-effort: bounded by a per-branch timeout and dropped on failure.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable
from typing import TypedDict, TypeVar

from langgraph.graph import END, StateGraph

from travel_agent.core.config import Settings, settings as default_settings
from travel_agent.core.exceptions import OrchestrationTimeoutError, RequiredAgentError
from travel_agent.domains.assistant.agents import (
    FlightAgent,
    HotelAgent,
    IntentAgent,
    LocalAgent,
    PlannerAgent,
)
from travel_agent.domains.assistant.agents.weather import RAIN_ALERT_THRESHOLD, WeatherAgent
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.estimators import split_budget
from travel_agent.domains.assistant.schemas import (
    FlightStatus,
    HotelRecommendation,
    Intent,
    IntentResult,
    PlaceRecommendation,
    PopularPlace,
    TripPlan,
    WeatherForecast,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ============ Defaults ============

TRIP_DEFAULT_DESTINATION = "Unknown"
TRIP_DEFAULT_DURATION = 7
TRIP_DEFAULT_BUDGET = 50000.0
CITY_DEFAULT = "Bangkok"
HOTEL_DEFAULT_BUDGET = 3000.0
LOCAL_DEFAULT_INTEREST = "restaurant"
BUDGET_DEFAULT_TOTAL = 50000.0

TRIP_POPULAR_KEYWORD = "tourist attractions"
TRIP_POPULAR_LIMIT = 5
TRIP_HOTEL_LIMIT = 3
LOCAL_POPULAR_LIMIT = 3

PLAN_UPDATE_MESSAGE = "Plan update functionality coming soon!"
GENERAL_CHAT_MESSAGE = (
    "Hello! I'm your AI travel assistant. I can help you plan trips, check "
    "weather, find flights, search hotels, and get local recommendations. "
    "What would you like to do?"
)
MISSING_FLIGHT_CODE_MESSAGE = "Please provide a flight code (e.g., 'Is flight JL708 on time?')"


def title_words(text: str) -> str:
    """Capitalize the first letter of each word, leaving the rest untouched."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


# ============ Graph State ============


class OrchestratorState(TypedDict):
    """State for one message."""

    message: str
    rng: random.Random
    intent: IntentResult | None
    response: str | None


# ============ Orchestrator ============


class Orchestrator:
    """Coordinates the intent agent and the per-domain agents."""

    def __init__(
        self,
        capabilities: AgentCapabilities | None = None,
        config: Settings | None = None,
    ) -> None:
        config = config or default_settings
        self.capabilities = capabilities or AgentCapabilities()
        self.request_timeout = config.REQUEST_TIMEOUT_SECONDS
        self.agent_timeout = config.AGENT_TIMEOUT_SECONDS

        self.intent_agent = IntentAgent(self.capabilities)
        self.planner = PlannerAgent(self.capabilities)
        self.weather = WeatherAgent(self.capabilities)
        self.flights = FlightAgent(self.capabilities)
        self.hotels = HotelAgent(self.capabilities)
        self.local = LocalAgent(self.capabilities)

        self._graph = self._build_graph().compile()
        logger.info("Orchestrator initialized")

    # ============ Entry Points ============

    async def process_message(self, message: str, rng: random.Random | None = None) -> str:
        """
        Answer one user message with markdown.

        Raises:
            RequiredAgentError: the planner failed for a trip plan
            OrchestrationTimeoutError: the overall deadline expired
        """
        state = await self.run(message, rng)
        return state["response"] or ""

    async def run(self, message: str, rng: random.Random | None = None) -> OrchestratorState:
        """Run the graph and return the final state, intent included."""
        logger.info(f"Orchestrator: processing message: {message[:100]}")
        initial: OrchestratorState = {
            "message": message,
            "rng": rng or random.Random(),
            "intent": None,
            "response": None,
        }
        try:
            async with asyncio.timeout(self.request_timeout):
                state = await self._graph.ainvoke(initial)
        except TimeoutError as e:
            logger.error(f"Orchestrator: request exceeded {self.request_timeout:.0f}s deadline")
            raise OrchestrationTimeoutError(self.request_timeout) from e
        except RequiredAgentError as e:
            logger.error(f"Orchestrator: {e}")
            raise

        logger.info("Orchestrator: response generated")
        return state

    # ============ Graph ============

    def _build_graph(self) -> StateGraph:
        workflow = StateGraph(OrchestratorState)

        workflow.add_node("classify", self._classify_node)
        handlers = {
            Intent.PLAN_TRIP: self._plan_trip_node,
            Intent.WEATHER_CHECK: self._weather_node,
            Intent.FLIGHT_CHECK: self._flight_node,
            Intent.HOTEL_SEARCH: self._hotel_node,
            Intent.LOCAL_RECOMMENDATION: self._local_node,
            Intent.BUDGET_INQUIRY: self._budget_node,
            Intent.PLAN_UPDATE: self._plan_update_node,
            Intent.GENERAL_CHAT: self._general_chat_node,
        }
        for intent, handler in handlers.items():
            workflow.add_node(intent.value, handler)
            workflow.add_edge(intent.value, END)

        workflow.set_entry_point("classify")
        workflow.add_conditional_edges(
            "classify",
            route_by_intent,
            {intent.value: intent.value for intent in handlers},
        )
        return workflow

    async def _classify_node(self, state: OrchestratorState) -> dict:
        result = await self.intent_agent.detect(state["message"])
        logger.info(f"Orchestrator: detected intent={result.intent.value}")
        return {"intent": result}

    # ============ Concurrency Helpers ============

    async def _best_effort(self, label: str, call: Awaitable[T]) -> T | None:
        """Await an optional branch. None on timeout or failure."""
        try:
            return await asyncio.wait_for(call, self.agent_timeout)
        except TimeoutError:
            logger.warning(f"Orchestrator: {label} timed out after {self.agent_timeout:.0f}s")
        except Exception as e:
            logger.warning(f"Orchestrator: {label} failed: {e}")
        return None

    async def _popular_places(self, keyword: str, destination: str, limit: int) -> list[PopularPlace]:
        if not self.capabilities.has_places:
            return []
        return await self.capabilities.places.get_top_rated_places(keyword, destination, limit)

    # ============ Handlers ============

    async def _plan_trip_node(self, state: OrchestratorState) -> dict:
        entities = state["intent"].entities
        destination = entities.destination_or(TRIP_DEFAULT_DESTINATION)
        duration = entities.duration_or(TRIP_DEFAULT_DURATION)
        budget = entities.budget_or(TRIP_DEFAULT_BUDGET)

        logger.info(
            f"Creating plan: destination={destination}, duration={duration} days, "
            f"budget={budget:.0f} THB"
        )

        plan, weather, hotels, popular = await asyncio.gather(
            self.planner.create_plan(destination, duration, budget),
            self._best_effort("weather forecast", self.weather.get_forecast(destination)),
            self._best_effort(
                "hotel search",
                self.hotels.search_hotels(destination, budget / duration, state["rng"]),
            ),
            self._best_effort(
                "popular places",
                self._popular_places(TRIP_POPULAR_KEYWORD, destination, TRIP_POPULAR_LIMIT),
            ),
            return_exceptions=True,
        )
        if isinstance(plan, Exception):
            raise RequiredAgentError(self.planner.name, plan) from plan
        if isinstance(plan, BaseException):
            raise plan

        response = compose_trip_plan(plan, duration, destination, budget, weather, hotels, popular)
        return {"response": response}

    async def _weather_node(self, state: OrchestratorState) -> dict:
        city = state["intent"].entities.destination_or(CITY_DEFAULT)
        logger.info(f"Checking weather for: {city}")
        forecast = await self.weather.get_forecast(city)
        return {"response": compose_weather(city, forecast)}

    async def _flight_node(self, state: OrchestratorState) -> dict:
        flight_code = state["intent"].entities.flight_code_or("")
        if not flight_code:
            return {"response": MISSING_FLIGHT_CODE_MESSAGE}

        logger.info(f"Checking flight: {flight_code}")
        status = await self.flights.check_flight(flight_code)
        return {"response": compose_flight(status)}

    async def _hotel_node(self, state: OrchestratorState) -> dict:
        entities = state["intent"].entities
        destination = entities.destination_or(CITY_DEFAULT)
        budget = entities.budget_or(HOTEL_DEFAULT_BUDGET)

        logger.info(f"Searching hotels in {destination}, budget: {budget:.0f} THB/night")
        hotels = await self.hotels.search_hotels(destination, budget, state["rng"])
        return {"response": compose_hotels(destination, budget, hotels)}

    async def _local_node(self, state: OrchestratorState) -> dict:
        entities = state["intent"].entities
        interest = entities.interest_or(LOCAL_DEFAULT_INTEREST)
        destination = entities.destination_or("")
        location = entities.location_or()

        logger.info(f"Finding {interest} near ({location.lat:.4f}, {location.lng:.4f})")

        call = self.local.get_recommendations(location.lat, location.lng, interest, state["rng"])
        if destination:
            places, popular = await asyncio.gather(
                call,
                self._best_effort(
                    "popular places",
                    self._popular_places(interest, destination, LOCAL_POPULAR_LIMIT),
                ),
            )
        else:
            places, popular = await call, None

        return {"response": compose_local(interest, destination, places, popular)}

    async def _budget_node(self, state: OrchestratorState) -> dict:
        budget = state["intent"].entities.budget_or(BUDGET_DEFAULT_TOTAL)
        return {"response": compose_budget(budget)}

    async def _plan_update_node(self, state: OrchestratorState) -> dict:
        return {"response": PLAN_UPDATE_MESSAGE}

    async def _general_chat_node(self, state: OrchestratorState) -> dict:
        return {"response": GENERAL_CHAT_MESSAGE}


# ============ Routing Logic ============


def route_by_intent(state: OrchestratorState) -> str:
    """Route to the handler named after the detected intent."""
    result = state.get("intent")
    if result is None:
        return Intent.GENERAL_CHAT.value
    return result.intent.value


# ============ Composition ============


def compose_trip_plan(
    plan: TripPlan,
    duration: int,
    destination: str,
    budget: float,
    weather: WeatherForecast | None,
    hotels: list[HotelRecommendation] | None,
    popular: list[PopularPlace] | None,
) -> str:
    """Trip plan markdown. Sections always appear in the same order."""
    parts = [
        f"# {duration}-Day Trip to {destination}\n\n",
        f"**Budget:** {budget:.0f} THB\n\n",
        "## Itinerary\n",
    ]
    for day in plan.itinerary:
        parts.append(f"\n**Day {day.day}:**\n")
        parts.extend(f"- {activity}\n" for activity in day.activities)
        parts.append(f"*Daily Budget: {day.budget:.0f} THB*\n")

    if weather is not None:
        parts.append("\n## Weather Forecast\n")
        parts.append(f"Current: {weather.temperature:.0f}°C, {weather.condition}\n")
        if weather.rain_probability > RAIN_ALERT_THRESHOLD:
            parts.append(f"\n⚠️ {weather.suggestion}\n")

    if hotels:
        parts.append("\n## Recommended Hotels\n")
        for hotel in hotels[:TRIP_HOTEL_LIMIT]:
            parts.append(
                f"- **{hotel.name}** - {hotel.price_per_night:.0f} THB/night "
                f"(Rating: {hotel.rating:.1f}★)\n"
            )

    if popular:
        parts.append("\n## Socially Popular Spots\n")
        parts.append("*Top-rated places based on reviews*\n\n")
        for place in popular[:TRIP_POPULAR_LIMIT]:
            parts.append(f"- **{place.name}** ({place.rating:.1f}★, {place.review_count} reviews)\n")

    parts.append(f"\n{plan.summary}")
    return "".join(parts)


def compose_weather(city: str, forecast: WeatherForecast) -> str:
    parts = [
        f"# Weather Forecast for {city}\n\n",
        f"**Current:** {forecast.temperature:.0f}°C, {forecast.condition}\n\n",
        "## 3-Day Forecast\n",
    ]
    for day in forecast.forecast:
        parts.append(
            f"- {day.date}: {day.temperature:.0f}°C, {day.condition} "
            f"(Rain: {day.rain_probability:.0f}%)\n"
        )
    if forecast.rain_probability > RAIN_ALERT_THRESHOLD:
        parts.append(f"\n⚠️ **Rain Alert:** {forecast.suggestion}\n")
    return "".join(parts)


def compose_flight(status: FlightStatus) -> str:
    parts = [
        f"# Flight {status.flight_code} Status\n\n",
        f"**Status:** {title_words(status.status)}\n",
        f"**Departure:** {status.departure_time}\n",
        f"**Arrival:** {status.arrival_time}\n",
    ]
    if status.gate:
        parts.append(f"**Gate:** {status.gate}\n")
    if status.delay_minutes > 0:
        parts.append(f"\n⚠️ **Delayed by {status.delay_minutes} minutes**\n\n")
    parts.append(f"\n{status.notification}")
    return "".join(parts)


def compose_hotels(destination: str, budget: float, hotels: list[HotelRecommendation]) -> str:
    parts = [
        f"# Hotels in {destination}\n\n",
        f"Budget: Up to {budget:.0f} THB per night\n\n",
    ]
    for i, hotel in enumerate(hotels, start=1):
        parts.append(
            f"{i}. **{hotel.name}**\n"
            f"   - Price: {hotel.price_per_night:.0f} THB/night\n"
            f"   - Rating: {hotel.rating:.1f}★\n"
            f"   - Distance: {hotel.distance_km:.1f} km from center\n"
            f"   - Address: {hotel.address}\n\n"
        )
    return "".join(parts)


def compose_local(
    interest: str,
    destination: str,
    places: list[PlaceRecommendation],
    popular: list[PopularPlace] | None,
) -> str:
    parts = [f"# Nearby {title_words(interest)} Recommendations\n\n"]
    for i, place in enumerate(places, start=1):
        parts.append(
            f"{i}. **{place.name}**\n"
            f"   - Type: {place.type}\n"
            f"   - Rating: {place.rating:.1f}★\n"
            f"   - Distance: {place.distance_km:.1f} km away\n"
            f"   - Address: {place.address}\n\n"
        )

    if popular:
        parts.append(f"\n## Socially Popular {title_words(interest)} in {destination}\n")
        parts.append("*Top-rated by the community*\n\n")
        # Numbering continues after the nearby list
        for i, place in enumerate(popular, start=len(places) + 1):
            parts.append(
                f"{i}. **{place.name}** ({place.rating:.1f}★, {place.review_count} reviews)\n"
                f"   - Address: {place.address}\n\n"
            )
    return "".join(parts)


def compose_budget(budget: float) -> str:
    plan = split_budget(int(budget))
    lines = [
        f"# Budget Breakdown for {budget:.0f} THB\n\n",
        f"- **Flights:** {plan.flight} THB (45%)\n",
        f"- **Hotels:** {plan.hotel} THB (25%)\n",
        f"- **Food:** {plan.food} THB (15%)\n",
        f"- **Transport:** {plan.transport} THB (10%)\n",
        f"- **Miscellaneous:** {plan.misc} THB (5%)\n",
        f"\n**Total:** {plan.total} THB\n",
    ]
    return "".join(lines)
