"""
Travel Agent - Intent Agent
Classifies a message into one of eight intents and extracts entities.

The LLM path is tried only when a model is configured. Any failure on
that path falls back to keyword rules, so detect() always answers.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

from pydantic import ValidationError

from travel_agent.domains.assistant.agents.base import BaseAgent
from travel_agent.domains.assistant.llm import parse_json_content
from travel_agent.domains.assistant.schemas import EntityBag, Intent, IntentResult

logger = logging.getLogger(__name__)


# ============ Prompts ============


INTENT_SYSTEM_PROMPT = (
    "You are an intent detection assistant. Classify user intents and "
    "extract entities. Return ONLY valid JSON."
)

INTENT_USER_PROMPT = """Current Date and Time (UTC - YYYY-MM-DD HH:MM:SS formatted): {now}

You are an intent detection model for an AI travel assistant.
Classify the user message into one of the following:
[plan_trip, flight_check, weather_check, hotel_search, local_recommendation, budget_inquiry, plan_update, general_chat]

Message: "{message}"

Return ONLY valid JSON:
{{
  "intent": "one_of_the_intents_above",
  "entities": {{
    "destination": "city or country",
    "duration": number_of_days,
    "budget": amount_in_thb,
    "date_from": "YYYY-MM-DD",
    "date_to": "YYYY-MM-DD",
    "travelers": number,
    "interests": ["interest1"],
    "location": {{"lat": 0.0, "lng": 0.0}},
    "flight_code": "flight number"
  }}
}}"""


# ============ Keyword Rules ============

# Checked in this order; the first matching rule wins.
FLIGHT_KEYWORDS = ("status", "check", "on time", "is flight")
WEATHER_KEYWORDS = ("weather", "forecast", "rain", "ฝน")
HOTEL_KEYWORDS = ("hotel", "accommodation", "โรงแรม")
LOCAL_KEYWORDS = ("restaurant", "cafe", "nearby", "ร้านอาหาร", "ใกล้", "ราเมน")
TRIP_KEYWORDS = ("plan", "trip", "travel", "visit", "เที่ยว", "ไป")
BUDGET_KEYWORDS = ("budget", "cost", "price")
BUDGET_TRIP_KEYWORDS = ("trip", "travel", "เที่ยว")
UPDATE_KEYWORDS = ("update", "change", "modify", "เปลี่ยน")

DEFAULT_TRIP_DURATION = 7
DEFAULT_TRIP_BUDGET = 50000


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def extract_flight_code(message: str) -> str | None:
    """Return the token after the first "flight" token, if it looks like a code."""
    words = message.split()
    for i, word in enumerate(words):
        if word.lower() == "flight":
            if i + 1 < len(words):
                code = words[i + 1].removesuffix("?").removesuffix(".")
                if 3 <= len(code) <= 8:
                    return code
            return None
    return None


def classify_by_rules(message: str) -> IntentResult:
    """Deterministic keyword classification."""
    text = message.lower()
    trip_defaults = EntityBag(duration=DEFAULT_TRIP_DURATION, budget=DEFAULT_TRIP_BUDGET)

    if "flight" in text and _contains_any(text, FLIGHT_KEYWORDS):
        return IntentResult(
            intent=Intent.FLIGHT_CHECK,
            entities=EntityBag(flight_code=extract_flight_code(message)),
        )
    if _contains_any(text, WEATHER_KEYWORDS):
        return IntentResult(intent=Intent.WEATHER_CHECK)
    if _contains_any(text, HOTEL_KEYWORDS):
        return IntentResult(intent=Intent.HOTEL_SEARCH)
    if _contains_any(text, LOCAL_KEYWORDS):
        return IntentResult(intent=Intent.LOCAL_RECOMMENDATION)
    if _contains_any(text, TRIP_KEYWORDS):
        return IntentResult(intent=Intent.PLAN_TRIP, entities=trip_defaults)
    if _contains_any(text, BUDGET_KEYWORDS):
        if _contains_any(text, BUDGET_TRIP_KEYWORDS):
            return IntentResult(intent=Intent.PLAN_TRIP, entities=trip_defaults)
        return IntentResult(intent=Intent.BUDGET_INQUIRY)
    if _contains_any(text, UPDATE_KEYWORDS):
        return IntentResult(intent=Intent.PLAN_UPDATE)
    return IntentResult(intent=Intent.GENERAL_CHAT)


# ============ Agent ============


class IntentAgent(BaseAgent):
    """Intent detection and entity extraction."""

    name = "IntentAgent"

    async def detect(self, message: str) -> IntentResult:
        """Classify a message. Never raises."""
        if not self.capabilities.has_llm:
            logger.info("IntentAgent: no language model configured, using keyword rules")
            return classify_by_rules(message)

        prompt = INTENT_USER_PROMPT.format(
            now=datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S"),
            message=message,
        )
        content = await self._complete(
            INTENT_SYSTEM_PROMPT, prompt, temperature=0.3, max_tokens=300
        )
        if content is None:
            return classify_by_rules(message)

        try:
            data = parse_json_content(content)
            if not isinstance(data, dict) or not isinstance(data.get("intent"), str):
                raise ValueError("response is not an {intent, entities} object")
            result = IntentResult(
                intent=Intent.parse(data["intent"]),
                entities=EntityBag.from_mapping(data.get("entities")),
            )
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.warning(f"IntentAgent: failed to parse LLM response: {e}, using keyword rules")
            return classify_by_rules(message)

        logger.info(
            f"IntentAgent: detected intent={result.intent.value}, "
            f"entities={result.entities.model_dump(exclude_none=True)}"
        )
        return result
