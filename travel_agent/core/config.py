"""Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
Every provider key is optional: an empty key means the matching agent
runs on its deterministic estimators.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, RedisDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ============ Application Settings ============
    APP_NAME: str = "Travel AI Agent"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # ============ Server Settings ============
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    WORKERS: int = 1

    # ============ CORS Settings ============
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # ============ Redis Settings ============
    REDIS_ENABLED: bool = Field(
        default=True,
        description="Use Redis as the optional agent cache",
    )
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None
    REDIS_DB: int = 0
    REDIS_MAX_CONNECTIONS: int = 10
    REDIS_DEFAULT_TTL: int = 86400  # 24 hours

    @computed_field  # type: ignore[misc]
    @property
    def REDIS_URL(self) -> RedisDsn:
        """Construct Redis connection URL."""
        if self.REDIS_PASSWORD:
            return RedisDsn.build(
                scheme="redis",
                password=self.REDIS_PASSWORD,
                host=self.REDIS_HOST,
                port=self.REDIS_PORT,
                path=str(self.REDIS_DB),
            )
        return RedisDsn.build(
            scheme="redis",
            host=self.REDIS_HOST,
            port=self.REDIS_PORT,
            path=str(self.REDIS_DB),
        )

    # ============ OpenAI Settings ============
    OPENAI_API_KEY: str = Field(
        default="",
        description="OpenAI API Key for intent detection and narratives",
    )
    OPENAI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model to use",
    )

    # ============ Weather API Settings ============
    WEATHER_API_KEY: str = Field(
        default="",
        description="OpenWeatherMap API Key",
    )
    WEATHER_API_BASE_URL: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="Weather API Base URL",
    )

    # ============ Flight API Settings ============
    FLIGHT_API_KEY: str = Field(
        default="",
        description="AviationStack access key for live flight status",
    )
    FLIGHT_API_BASE_URL: str = Field(
        default="https://api.aviationstack.com/v1",
        description="AviationStack API Base URL",
    )
    RAPIDAPI_KEY: str = Field(
        default="",
        description="RapidAPI key for Sky-Scrapper fare search",
    )
    SKYSCANNER_BASE_URL: str = Field(
        default="https://sky-scrapper.p.rapidapi.com/api/v1",
        description="Sky-Scrapper RapidAPI Base URL",
    )

    # ============ Google Places Settings ============
    GOOGLE_PLACES_API_KEY: str = Field(
        default="",
        description="Google Places API Key for socially popular spots",
    )
    GOOGLE_PLACES_BASE_URL: str = Field(
        default="https://maps.googleapis.com/maps/api/place",
        description="Google Places API Base URL",
    )

    # ============ Orchestration Settings ============
    REQUEST_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Overall deadline for one message, nested calls included",
    )
    AGENT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Deadline for each best-effort agent branch",
    )
    CACHE_TTL_SECONDS: int = Field(
        default=86400,
        description="Expiry of agent cache entries",
    )
    DEFAULT_ORIGIN_AIRPORT: str = Field(
        default="BKK",
        description="Departure airport used for trip costing",
    )

    # ============ Logging Settings ============
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
