"""Shared plumbing for the per-domain agents."""

import logging
from typing import Any

from travel_agent.core.exceptions import LLMError
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.tools.base import classify_error

logger = logging.getLogger(__name__)


class BaseAgent:
    """Holds the capability set and the cache/narrative helpers.

    Every helper here degrades instead of raising: a missing or failing
    collaborator turns into a cache miss, a skipped write, or the
    templated text.
    """

    name = "Agent"

    def __init__(self, capabilities: AgentCapabilities | None = None) -> None:
        self.capabilities = capabilities or AgentCapabilities()

    # ============ Cache ============

    async def _cache_get(self, key: str) -> dict[str, Any] | None:
        if not self.capabilities.has_cache:
            return None
        cached = await self.capabilities.cache.safe_get_json(key.lower())
        if not isinstance(cached, dict):
            return None
        logger.info(f"{self.name}: cache hit for {key.lower()}")
        return cached

    async def _cache_set(self, key: str, data: dict[str, Any]) -> None:
        if not self.capabilities.has_cache:
            return
        await self.capabilities.cache.safe_set_json(
            key.lower(), data, ttl=self.capabilities.cache_ttl
        )

    # ============ Language Model ============

    async def _complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str | None:
        """Run the LLM if configured. None when absent or failing."""
        if not self.capabilities.has_llm:
            return None
        try:
            return await self.capabilities.llm.complete(
                system_prompt, user_prompt, temperature, max_tokens
            )
        except LLMError as e:
            logger.warning(f"{self.name}: LLM call failed: {e}")
            return None

    async def _narrate(
        self,
        system_prompt: str,
        user_prompt: str,
        fallback: str,
        temperature: float = 0.7,
        max_tokens: int = 150,
    ) -> str:
        """LLM addendum, or the templated sentence."""
        text = await self._complete(system_prompt, user_prompt, temperature, max_tokens)
        return text or fallback

    def _log_provider_failure(self, provider: str, error: BaseException) -> None:
        logger.warning(
            f"{self.name}: {provider} unavailable ({classify_error(error)}): {error}"
        )
