"""API v1 main router - aggregates the assistant routers."""

from fastapi import APIRouter

from travel_agent.api.v1.endpoints import chat, planning, social, visa

api_router = APIRouter()

# Include conversational assistant endpoint
api_router.include_router(
    chat.router,
    tags=["Chat"],
)

# Include trip costing and budget endpoints
api_router.include_router(
    planning.router,
    tags=["Planning"],
)

# Include socially popular places endpoint
api_router.include_router(
    social.router,
    tags=["Social"],
)

# Include visa requirement endpoint
api_router.include_router(
    visa.router,
    tags=["Visa"],
)
