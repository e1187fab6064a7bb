"""
Shared error handling for the Employee Gateway.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional

from opentelemetry import trace
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    status: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    details: Dict[str, Any] = {}


def current_trace_id() -> Optional[str]:
    """Return the active trace id as hex, if a span is recording."""
    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        span_context = current_span.get_span_context()
        if span_context.trace_id != 0:
            return f"{span_context.trace_id:032x}"
    return None


class GatewayException(Exception):
    """Base exception for gateway operations."""

    status_code: int = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            trace_id=current_trace_id(),
            code=self.code,
            message=self.message,
            status=self.status_code,
            details=self.details
        )


class EmployeeNotFoundError(GatewayException):
    """Upstream reported that the requested employee does not exist."""

    status_code = 404

    def __init__(self, message: str = "Employee not found", details: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_FOUND", message, details)


class RateLimitExceededError(GatewayException):
    """Upstream kept throttling until the retry ceiling was reached."""

    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded", details: Optional[Dict[str, Any]] = None):
        super().__init__("RATE_LIMIT_EXCEEDED", message, details)


class UpstreamUnavailableError(GatewayException):
    """Any other transport or envelope failure talking to the upstream."""

    status_code = 500

    def __init__(self, message: str = "Upstream service unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_UNAVAILABLE", message, details)


class DeleteFailedError(GatewayException):
    """Upstream accepted the delete call but reported nothing was deleted."""

    status_code = 500

    def __init__(self, message: str = "Failed to delete employee", details: Optional[Dict[str, Any]] = None):
        super().__init__("DELETE_FAILED", message, details)
