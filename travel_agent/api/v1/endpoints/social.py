"""
Travel Agent - Social Places API Endpoint
Top-rated places for a keyword in a location, ranked by review count.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from travel_agent.core.deps import get_capabilities
from travel_agent.core.exceptions import ServiceUnavailableError, UpstreamAgentError
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.schemas import SocialPlacesResponse
from travel_agent.domains.assistant.tools import ToolError

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_PLACES_LIMIT = 10
SOCIAL_CACHE_TTL_SECONDS = 60 * 60


class SocialPlaceRequest(BaseModel):
    """Popular places lookup."""

    keyword: str = Field(..., min_length=1, description="What to look for, e.g. ramen")
    location: str = Field(..., min_length=1, description="City or area, e.g. Tokyo")
    limit: int = Field(DEFAULT_PLACES_LIMIT, description="Maximum number of places")

    @field_validator("limit")
    @classmethod
    def _default_limit(cls, value: int) -> int:
        return value if value > 0 else DEFAULT_PLACES_LIMIT


def social_cache_key(request: SocialPlaceRequest) -> str:
    return f"social:{request.keyword}:{request.location}:{request.limit}"


@router.post(
    "/social/places",
    response_model=SocialPlacesResponse,
    summary="Find socially popular places",
    description="""
    Look up top-rated places for a keyword in a location, ranked by the
    number of reviews. Answers are cached for one hour.

    Returns 503 when no places provider is configured and 502 when the
    provider fails.
    """,
)
async def get_social_places(
    request: SocialPlaceRequest,
    capabilities: AgentCapabilities = Depends(get_capabilities),
) -> SocialPlacesResponse:
    """Popular places for a keyword and location."""
    cache_key = social_cache_key(request)

    if capabilities.has_cache:
        cached = await capabilities.cache.safe_get_json(cache_key)
        if isinstance(cached, dict):
            try:
                response = SocialPlacesResponse.model_validate(cached)
            except ValueError as e:
                logger.warning(f"Ignoring malformed cached places for {cache_key}: {e}")
            else:
                logger.info(
                    f"Returning cached social places for {request.keyword} in {request.location}"
                )
                return response

    if not capabilities.has_places:
        raise ServiceUnavailableError(detail="Social places service is not configured")

    try:
        places = await capabilities.places.get_top_rated_places(
            request.keyword, request.location, request.limit
        )
    except ToolError as e:
        logger.error(f"Error fetching social places: {e}")
        raise UpstreamAgentError(detail="Social places provider is unavailable") from e

    response = SocialPlacesResponse(
        places=places,
        query=f"{request.keyword} in {request.location}",
        count=len(places),
    )
    if capabilities.has_cache:
        await capabilities.cache.safe_set_json(
            cache_key, response.model_dump(), ttl=SOCIAL_CACHE_TTL_SECONDS
        )
    return response
