"""Base classes and utilities for provider API clients."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ToolError(Exception):
    """Base exception for provider errors."""

    def __init__(self, message: str, tool_name: str, details: dict | None = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class APIClientError(ToolError):
    """Provider unavailable: transport error, non-2xx, or unexpected payload."""

    pass


class RateLimitError(ToolError):
    """Exception for rate limit errors."""

    pass


class AuthenticationError(ToolError):
    """Exception for authentication errors."""

    pass


# ============ Error Classification ============


class ToolErrorType:
    """Classification of provider errors for log lines."""

    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    AUTHENTICATION = "authentication"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NETWORK_ERROR = "network_error"
    INVALID_RESPONSE = "invalid_response"
    UNKNOWN = "unknown"


def classify_error(error: BaseException) -> str:
    """Classify an exception into a ToolErrorType."""
    if isinstance(error, RateLimitError):
        return ToolErrorType.RATE_LIMIT
    if isinstance(error, AuthenticationError):
        return ToolErrorType.AUTHENTICATION
    if isinstance(error, (TimeoutError, httpx.TimeoutException)):
        return ToolErrorType.TIMEOUT

    error_msg = str(error).lower()
    if "timeout" in error_msg or "timed out" in error_msg:
        return ToolErrorType.TIMEOUT
    elif "503" in error_msg or "502" in error_msg or "unavailable" in error_msg:
        return ToolErrorType.SERVICE_UNAVAILABLE
    elif "connection" in error_msg or "request error" in error_msg:
        return ToolErrorType.NETWORK_ERROR
    elif "json" in error_msg or "parse" in error_msg or "payload" in error_msg:
        return ToolErrorType.INVALID_RESPONSE
    else:
        return ToolErrorType.UNKNOWN


# ============ Async API Client ============


class BaseAsyncAPIClient(ABC):
    """Base class for async provider clients.

    Use as an async context manager; the underlying httpx client lives
    only for the duration of the block.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        max_retries: int = 2,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._client: httpx.AsyncClient | None = None

    @property
    def tool_name(self) -> str:
        return self.__class__.__name__

    async def __aenter__(self) -> "BaseAsyncAPIClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=await self._get_headers(),
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @abstractmethod
    async def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests. Override in subclasses."""
        pass

    async def get(self, endpoint: str, params: dict | None = None) -> Any:
        """GET a JSON document, retrying transport errors and 5xx answers."""
        if not self._client:
            raise APIClientError(
                "Client not initialized. Use async context manager.",
                tool_name=self.tool_name,
            )

        url = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        last_error: ToolError | None = None

        for attempt in range(self.max_retries):
            try:
                response = await self._client.get(url, params=params)
            except httpx.RequestError as e:
                last_error = APIClientError(
                    f"Request error: {e!r}",
                    tool_name=self.tool_name,
                )
                logger.warning(
                    f"{self.tool_name} attempt {attempt + 1}/{self.max_retries} failed: {e!r}"
                )
                continue

            if response.status_code == 401:
                raise AuthenticationError(
                    "Authentication failed",
                    tool_name=self.tool_name,
                )
            if response.status_code == 429:
                raise RateLimitError(
                    "Rate limit exceeded",
                    tool_name=self.tool_name,
                )
            if response.status_code >= 400:
                last_error = APIClientError(
                    f"HTTP error: {response.status_code}",
                    tool_name=self.tool_name,
                    details={"status_code": response.status_code},
                )
                if response.status_code < 500:
                    raise last_error
                logger.warning(
                    f"{self.tool_name} attempt {attempt + 1}/{self.max_retries} "
                    f"returned {response.status_code}"
                )
                continue

            try:
                return response.json()
            except ValueError as e:
                raise APIClientError(
                    f"Malformed JSON payload: {e}",
                    tool_name=self.tool_name,
                ) from e

        if last_error:
            raise last_error
        raise APIClientError(
            "Max retries exceeded",
            tool_name=self.tool_name,
        )
