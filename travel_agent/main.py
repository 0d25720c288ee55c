"""FastAPI main application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError

from travel_agent.api.v1.router import api_router
from travel_agent.core.config import settings
from travel_agent.core.logging import setup_logging
from travel_agent.domains.assistant.capabilities import AgentCapabilities
from travel_agent.domains.assistant.services import Orchestrator, TripCostPlanner
from travel_agent.infra.redis import CacheService, close_redis, init_redis

logger = logging.getLogger(__name__)


def attach_services(app: FastAPI, capabilities: AgentCapabilities) -> None:
    """Build the shared services for one capability set and keep them on app.state."""
    app.state.capabilities = capabilities
    app.state.orchestrator = Orchestrator(capabilities, settings)
    app.state.trip_planner = TripCostPlanner(capabilities, settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    setup_logging()
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"📝 Environment: {settings.ENVIRONMENT}")
    logger.info(f"🔧 Debug mode: {settings.DEBUG}")

    # Redis is an optional cache: agents run uncached without it
    cache: CacheService | None = None
    if settings.REDIS_ENABLED:
        try:
            redis = await init_redis()
            cache = CacheService(redis, default_ttl=settings.REDIS_DEFAULT_TTL)
            logger.info("✅ Redis connected")
        except (RedisError, OSError) as e:
            logger.warning(f"⚠️ Redis connection failed, running without cache: {e}")
            await close_redis()

    attach_services(app, AgentCapabilities.from_settings(settings, cache=cache))

    yield

    # Shutdown
    logger.info("🛑 Shutting down...")
    await close_redis()
    logger.info("👋 Goodbye!")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Multi-agent AI travel assistant API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "travel_agent.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS if not settings.DEBUG else 1,
    )
