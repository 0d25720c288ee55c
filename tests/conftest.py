"""Shared fixtures for the travel assistant tests."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from travel_agent.core.config import Settings
from travel_agent.domains.assistant.capabilities import AgentCapabilities


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no provider keys, independent of any local .env."""
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="",
        WEATHER_API_KEY="",
        FLIGHT_API_KEY="",
        RAPIDAPI_KEY="",
        GOOGLE_PLACES_API_KEY="",
        REDIS_ENABLED=False,
        REQUEST_TIMEOUT_SECONDS=5.0,
        AGENT_TIMEOUT_SECONDS=1.0,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic estimates."""
    return random.Random(42)


@pytest.fixture
def no_capabilities() -> AgentCapabilities:
    """No LLM, no cache, no providers."""
    return AgentCapabilities()


@pytest.fixture
def mock_llm() -> MagicMock:
    """LLM client whose complete() is an AsyncMock."""
    llm = MagicMock()
    llm.complete = AsyncMock()
    return llm


@pytest.fixture
def llm_capabilities(mock_llm) -> AgentCapabilities:
    """Only an LLM configured."""
    return AgentCapabilities(llm=mock_llm)


@pytest.fixture
def mock_cache() -> MagicMock:
    """Cache service that always misses and accepts writes."""
    cache = MagicMock()
    cache.safe_get_json = AsyncMock(return_value=None)
    cache.safe_set_json = AsyncMock(return_value=True)
    return cache
