"""Retry utilities for transient API failures.

This module provides deterministic exponential backoff for the API client:
- RetryPolicy: max retries, base delay, multiplier and a retryability predicate
- is_transient_error: default predicate (server and network failures only)
- retry_async: sequential retry loop around one awaitable attempt

Backoff is not jittered: the delay before retry ``i`` (0-indexed) is always
``base_delay_seconds * multiplier ** i``.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from jiralens.utils.errors import RequestError

if TYPE_CHECKING:
    from jiralens.config.settings import Credentials

T = TypeVar("T")

# Type alias for async sleep functions (for dependency injection in tests)
AsyncSleeper = Callable[[float], Awaitable[None]]

logger = logging.getLogger(__name__)


def longest_backoff_delay(base_delay_seconds: float, multiplier: float, max_retries: int) -> float:
    """Delay before the final retry, or ``math.inf`` if it overflows a float."""
    if max_retries <= 0:
        return 0.0
    try:
        return base_delay_seconds * (multiplier ** (max_retries - 1))
    except OverflowError:
        return math.inf


def is_transient_error(error: RequestError) -> bool:
    """Return True for failures that a later attempt could plausibly fix.

    Server errors (5xx) and network failures are transient. Authentication
    failures, other client errors and unparseable responses are not.
    """
    return error.retryable


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff policy.

    Attributes:
        max_retries: Retries after the initial attempt (0 disables retrying)
        base_delay_seconds: Delay before the first retry
        multiplier: Factor applied to the delay for each further retry
        is_retryable: Predicate deciding whether a classified failure is retried
    """

    max_retries: int = 3
    base_delay_seconds: float = 1.0
    multiplier: float = 2.0
    is_retryable: Callable[[RequestError], bool] = is_transient_error

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if not (math.isfinite(self.base_delay_seconds) and self.base_delay_seconds >= 0):
            raise ValueError(
                f"base_delay_seconds must be finite and >= 0, got {self.base_delay_seconds}"
            )
        if not (math.isfinite(self.multiplier) and self.multiplier > 0):
            raise ValueError(f"multiplier must be finite and > 0, got {self.multiplier}")
        longest = longest_backoff_delay(self.base_delay_seconds, self.multiplier, self.max_retries)
        if not math.isfinite(longest):
            raise ValueError(
                f"backoff delay overflows after {self.max_retries} retries "
                f"(base={self.base_delay_seconds}, multiplier={self.multiplier})"
            )

    @property
    def max_attempts(self) -> int:
        """Total number of attempts, including the initial one."""
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Delay in seconds to wait after the failed attempt ``attempt`` (0-indexed)."""
        return self.base_delay_seconds * (self.multiplier**attempt)

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> RetryPolicy:
        """Build the policy configured alongside the API credentials."""
        return cls(
            max_retries=credentials.max_retries,
            base_delay_seconds=credentials.base_delay_seconds,
            multiplier=credentials.backoff_multiplier,
        )


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleeper: AsyncSleeper | None = None,
    on_retry: Callable[[int, float, RequestError], None] | None = None,
) -> T:
    """Run ``operation`` until it succeeds or the policy gives up.

    Attempts run strictly one after another. Only RequestError failures are
    considered; any other exception propagates unchanged.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        policy: Retry policy to apply
        sleeper: Async sleep callable (defaults to asyncio.sleep)
        on_retry: Optional callback called before each retry.
                  Receives (retry_number, delay_seconds, error).

    Returns:
        The result of the first successful attempt

    Raises:
        RequestError: The first non-retryable failure, or the last failure
            once retries are exhausted
    """
    sleep = sleeper if sleeper is not None else asyncio.sleep
    attempt = 0

    while True:
        try:
            return await operation()
        except RequestError as e:
            if attempt >= policy.max_retries or not policy.is_retryable(e):
                raise

            delay = policy.delay_for(attempt)
            if on_retry:
                on_retry(attempt + 1, delay, e)
            else:
                logger.debug("Retrying after %.1fs: %s", delay, e)

            await sleep(delay)
            attempt += 1


__all__ = [
    "AsyncSleeper",
    "RetryPolicy",
    "is_transient_error",
    "longest_backoff_delay",
    "retry_async",
]
