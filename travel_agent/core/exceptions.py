"""Custom exceptions for the travel assistant.

Agents absorb provider and LLM failures and degrade to estimators.
Only the errors below that mark a required step are allowed to reach
the HTTP layer.
"""

from fastapi import HTTPException, status


class TravelAgentError(Exception):
    """Base exception for assistant errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class RequiredAgentError(TravelAgentError):
    """A required agent (the trip planner) could not produce a result."""

    def __init__(self, agent: str, cause: BaseException | None = None) -> None:
        self.agent = agent
        message = f"{agent} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, details={"agent": agent})


class OrchestrationTimeoutError(TravelAgentError):
    """The overall request deadline expired."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"Request did not complete within {timeout:.0f} seconds",
            details={"timeout": timeout},
        )


class LLMError(TravelAgentError):
    """Language model transport failure or empty answer."""

    pass


# ============ HTTP Exceptions ============


class UpstreamAgentError(HTTPException):
    """Raised when a required agent failed while serving a request."""

    def __init__(self, detail: str = "Trip planner is unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
        )


class RequestTimeoutError(HTTPException):
    """Raised when a request exceeded its overall deadline."""

    def __init__(self, detail: str = "Request timed out") -> None:
        super().__init__(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=detail,
        )


class ServiceUnavailableError(HTTPException):
    """Raised when the collaborator behind an endpoint is not configured."""

    def __init__(self, detail: str = "Service is not configured") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
        )
