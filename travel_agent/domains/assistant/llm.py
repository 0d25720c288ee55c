"""
Travel Agent - Language Model Collaborator
Thin wrapper over ChatOpenAI used by every agent that can narrate or generate.
"""

import json
import logging
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from travel_agent.core.config import settings
from travel_agent.core.exceptions import LLMError

logger = logging.getLogger(__name__)


def strip_code_fences(content: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    content = content.strip()
    if content.startswith("```"):
        content = content.split("```")[1]
        if content.startswith("json"):
            content = content[4:]
        content = content.strip()
    return content


def parse_json_content(content: str) -> Any:
    """Parse a model answer as JSON. Raises json.JSONDecodeError."""
    return json.loads(strip_code_fences(content))


class LLMClient:
    """Chat completion client with a (system, user) prompt contract."""

    def __init__(self, api_key: str, model: str | None = None) -> None:
        self.api_key = api_key
        self.model = model or settings.OPENAI_MODEL

    def _get_llm(self, temperature: float, max_tokens: int) -> ChatOpenAI:
        return ChatOpenAI(
            model=self.model,
            api_key=self.api_key,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """
        Run one chat completion.

        Returns:
            The stripped answer text

        Raises:
            LLMError: transport failure or empty answer
        """
        llm = self._get_llm(temperature, max_tokens)
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]

        try:
            response = await llm.ainvoke(messages)
        except Exception as e:
            raise LLMError(f"LLM request failed: {e}") from e

        content = response.content if isinstance(response.content, str) else ""
        content = content.strip()
        if not content:
            raise LLMError("LLM returned an empty response")
        return content
