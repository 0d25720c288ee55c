"""
Travel Agent - Planning API Endpoints
Costed trip plans and budget breakdowns.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from travel_agent.core.deps import get_trip_planner
from travel_agent.core.exceptions import OrchestrationTimeoutError, RequestTimeoutError
from travel_agent.domains.assistant.estimators import split_budget
from travel_agent.domains.assistant.schemas import BudgetPlan, TripCostPlan
from travel_agent.domains.assistant.services import TripCostPlanner

logger = logging.getLogger(__name__)

router = APIRouter()


# ============ Schemas ============


class PlanRequest(BaseModel):
    """Free-text travel request."""

    message: str = Field(
        ...,
        description="Travel request",
        max_length=2000,
        examples=["I want to travel to Canada for 7 days with 100000 baht"],
    )


class BudgetRequest(BaseModel):
    """Total budget to split."""

    total: float = Field(..., description="Total budget in THB", allow_inf_nan=False)


# ============ Endpoints ============


@router.post(
    "/plan",
    response_model=TripCostPlan,
    summary="Cost a trip",
    description="""
    Build a costed plan from a free-text request: budget split, cheapest
    outbound fare 30 days from today, lodging for the stay, and the
    weather for the travel month. Missing values default to a 7 day
    trip with a 50000 THB budget.
    """,
)
async def create_trip_plan(
    request: PlanRequest,
    planner: TripCostPlanner = Depends(get_trip_planner),
) -> TripCostPlan:
    """Cost a trip from a message."""
    try:
        return await planner.plan(request.message)
    except OrchestrationTimeoutError as e:
        logger.error(f"Plan endpoint timeout: {e}")
        raise RequestTimeoutError(detail=e.message) from e


@router.post(
    "/budget",
    response_model=BudgetPlan,
    summary="Split a budget",
    description="Split a total into flight 45%, hotel 25%, food 15%, transport 10% and misc 5%.",
)
async def split_trip_budget(request: BudgetRequest) -> BudgetPlan:
    """Budget breakdown for a total."""
    return split_budget(int(request.total))
