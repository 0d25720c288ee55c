"""
Travel Agent - Chat API Endpoint
Conversational interface: one message in, one markdown answer out.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from travel_agent.core.deps import get_orchestrator
from travel_agent.core.exceptions import (
    OrchestrationTimeoutError,
    RequestTimeoutError,
    RequiredAgentError,
    UpstreamAgentError,
)
from travel_agent.domains.assistant.services import Orchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


# ============ Schemas ============


class ChatMessage(BaseModel):
    """Chat message request."""

    message: str = Field("", description="User message", max_length=2000)


class ChatResponse(BaseModel):
    """Chat response."""

    success: bool
    response: str = Field(..., description="Markdown answer")
    intent: str | None = Field(None, description="Detected intent, e.g. plan_trip")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "response": "# Budget Breakdown for 50000 THB\n\n- **Flights:** 22500 THB (45%)\n...",
                "intent": "budget_inquiry",
            }
        }
    }


# ============ Endpoints ============


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Send message to AI travel assistant",
    description="""
    Send a message to the travel assistant.

    The message is classified into one of: plan_trip, flight_check,
    weather_check, hotel_search, local_recommendation, budget_inquiry,
    plan_update, general_chat. The matching agents answer and the reply
    is composed as markdown.

    Examples:
    - "Plan a 5 day trip to Tokyo with 80000 baht"
    - "Is flight JL708 on time?"
    - "What's the weather in Bangkok?"
    - "What can I do with 50000 baht budget?"

    Returns 502 when the trip planner fails and 504 when the request
    exceeds its deadline.
    """,
)
async def send_chat_message(
    request: ChatMessage,
    orchestrator: Orchestrator = Depends(get_orchestrator),
) -> ChatResponse:
    """Route a message through the orchestrator."""
    try:
        state = await orchestrator.run(request.message)
    except RequiredAgentError as e:
        logger.error(f"Chat endpoint error: {e}")
        raise UpstreamAgentError(detail=f"{e.agent} is unavailable") from e
    except OrchestrationTimeoutError as e:
        logger.error(f"Chat endpoint timeout: {e}")
        raise RequestTimeoutError(detail=e.message) from e

    intent = state.get("intent")
    return ChatResponse(
        success=True,
        response=state.get("response") or "",
        intent=intent.intent.value if intent is not None else None,
    )
