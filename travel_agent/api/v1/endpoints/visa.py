"""Visa requirement endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from travel_agent.core.deps import get_capabilities
from travel_agent.domains.assistant.agents import VisaAgent
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.schemas import VisaRequirement

router = APIRouter()


class VisaRequest(BaseModel):
    """Visa lookup request."""

    nationality: str = Field(..., min_length=2, description="ISO country code, e.g. TH")
    destination: str = Field(..., min_length=2, description="ISO country code, e.g. JP")
    stay_days: int = Field(..., ge=1, description="Length of stay in days")
    purpose: str = Field("tourism", description="Purpose of travel")


@router.post(
    "/visa",
    response_model=VisaRequirement,
    summary="Check visa requirements",
)
async def check_visa(
    request: VisaRequest,
    capabilities: AgentCapabilities = Depends(get_capabilities),
) -> VisaRequirement:
    """Visa requirements for a nationality and destination. Not legal advice."""
    agent = VisaAgent(capabilities)
    return await agent.check_visa(
        request.nationality,
        request.destination,
        request.stay_days,
        request.purpose,
    )
