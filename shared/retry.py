"""
Retry mechanism for rate-limited upstream operations.

Each attempt reports a tagged ``AttemptResult`` instead of raising; the
executor branches on the tag. Only ``RATE_LIMITED`` is retried, with
exponential backoff and no jitter. Everything else is surfaced at once as
a typed ``GatewayException``.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from shared.errors import (
    EmployeeNotFoundError,
    GatewayException,
    RateLimitExceededError,
    UpstreamUnavailableError,
)
from shared.logging import get_logger

T = TypeVar("T")


class AttemptOutcome(Enum):
    """Outcome tag for a single attempt."""
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class AttemptResult(Generic[T]):
    """Result of one attempt: a value on success, otherwise a failure message."""

    outcome: AttemptOutcome
    value: Optional[T] = None
    message: str = ""
    status_code: Optional[int] = None

    @classmethod
    def ok(cls, value: T) -> "AttemptResult[T]":
        return cls(AttemptOutcome.SUCCESS, value=value)

    @classmethod
    def rate_limited(cls, message: str = "Too many requests", status_code: Optional[int] = 429) -> "AttemptResult[T]":
        return cls(AttemptOutcome.RATE_LIMITED, message=message, status_code=status_code)

    @classmethod
    def not_found(cls, message: str, status_code: Optional[int] = 404) -> "AttemptResult[T]":
        return cls(AttemptOutcome.NOT_FOUND, message=message, status_code=status_code)

    @classmethod
    def failed(cls, message: str, status_code: Optional[int] = None) -> "AttemptResult[T]":
        return cls(AttemptOutcome.FAILED, message=message, status_code=status_code)


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(self,
                 max_attempts: int = 3,
                 initial_delay: float = 2.0,
                 multiplier: float = 2.0):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if initial_delay < 0:
            raise ValueError("initial_delay must be non-negative")
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.multiplier = multiplier


@dataclass
class RetryState:
    """Per-call retry bookkeeping. Never shared between calls."""
    max_attempts: int
    delay: float
    attempt: int = 0


class RetryExecutor:
    """Runs attempt operations under the rate-limit retry policy."""

    def __init__(self,
                 config: Optional[RetryConfig] = None,
                 name: str = "default",
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
                 on_retry: Optional[Callable[[str], None]] = None):
        self.config = config or RetryConfig()
        self.name = name
        self._sleep = sleep
        self._on_retry = on_retry
        self.logger = get_logger(f"retry.{name}")

    async def execute(self,
                      operation: Callable[[], Awaitable[AttemptResult[T]]],
                      operation_name: str = "call") -> T:
        """Invoke ``operation`` until it succeeds or fails terminally."""
        state = RetryState(max_attempts=self.config.max_attempts, delay=self.config.initial_delay)

        while True:
            try:
                result = await operation()
            except GatewayException:
                raise
            except Exception as exc:
                self.logger.error(
                    "Unexpected error calling API",
                    operation=operation_name,
                    error=str(exc)
                )
                raise UpstreamUnavailableError(
                    f"Unexpected error calling API: {exc}",
                    details={"operation": operation_name}
                ) from exc

            if result.outcome is AttemptOutcome.SUCCESS:
                if state.attempt > 0:
                    self.logger.info(
                        "Retry succeeded",
                        operation=operation_name,
                        attempt=state.attempt + 1
                    )
                return result.value

            if result.outcome is AttemptOutcome.NOT_FOUND:
                raise EmployeeNotFoundError(result.message)

            if result.outcome is AttemptOutcome.FAILED:
                raise UpstreamUnavailableError(
                    result.message,
                    details={"operation": operation_name, "status_code": result.status_code}
                )

            state.attempt += 1
            if state.attempt >= state.max_attempts:
                self.logger.error(
                    "Max retry attempts reached for rate limit",
                    operation=operation_name,
                    max_attempts=state.max_attempts
                )
                raise RateLimitExceededError(
                    f"Rate limit exceeded after {state.max_attempts} attempts",
                    details={"operation": operation_name, "attempts": state.attempt}
                )

            self.logger.warning(
                "Rate limit hit, retrying",
                operation=operation_name,
                attempt=state.attempt,
                max_attempts=state.max_attempts,
                delay=state.delay
            )
            if self._on_retry is not None:
                self._on_retry(operation_name)

            try:
                await self._sleep(state.delay)
            except asyncio.CancelledError:
                self.logger.warning(
                    "Retry interrupted",
                    operation=operation_name,
                    attempt=state.attempt
                )
                raise
            state.delay *= self.config.multiplier
