"""
Exponential backoff retry system for the Planning Center API client.

Retries rate-limited, transient server and network failures with
exponential backoff and jitter. Only the API connection uses this; the
pagination walker never retries on its own.
"""

import asyncio
import random
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar
from dataclasses import dataclass
from enum import Enum
import logging

from .errors import (
    PlanningCenterError,
    is_retryable_error,
    get_retry_delay,
    classify_error,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RetryStrategy(Enum):
    """Retry strategy types."""
    EXPONENTIAL_BACKOFF = "exponential_backoff"
    LINEAR_BACKOFF = "linear_backoff"


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_attempts: int = 3
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL_BACKOFF
    jitter: bool = True
    jitter_range: float = 0.1  # ±10% jitter
    backoff_multiplier: float = 2.0
    respect_retry_after: bool = True

    # Awaited with the error and the number of the failed attempt
    on_retry_func: Optional[Callable[[Exception, int], Awaitable[None]]] = None


class RetryStats:
    """Statistics about retry attempts."""

    def __init__(self):
        self.total_attempts = 0
        self.successful_attempts = 0
        self.failed_attempts = 0
        self.total_delay_ms = 0
        self.error_counts: Dict[str, int] = {}
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def record_attempt(self, error: Optional[Exception] = None):
        """Record a retry attempt."""
        if self.start_time is None:
            self.start_time = time.time()

        self.total_attempts += 1
        if error:
            self.failed_attempts += 1
            error_type = type(error).__name__
            self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1
        else:
            self.successful_attempts += 1
            self.end_time = time.time()

    def record_delay(self, delay_ms: int):
        """Record delay time."""
        self.total_delay_ms += delay_ms

    @property
    def total_duration_ms(self) -> float:
        """Get total duration in milliseconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time) * 1000
        return 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "total_attempts": self.total_attempts,
            "successful_attempts": self.successful_attempts,
            "failed_attempts": self.failed_attempts,
            "total_delay_ms": self.total_delay_ms,
            "total_duration_ms": self.total_duration_ms,
            "error_counts": self.error_counts.copy(),
        }


class RetryManager:
    """Manages retry logic with exponential backoff."""

    def __init__(self, config: Optional[RetryConfig] = None):
        self.config = config or RetryConfig()
        self.last_stats: Optional[RetryStats] = None

    async def retry(
        self,
        func: Callable[[], Awaitable[T]],
        *,
        context: Optional[Dict[str, Any]] = None
    ) -> T:
        """
        Retry a function with exponential backoff.

        Args:
            func: Async function to retry
            context: Request context used in log messages

        Returns:
            Result of the function call

        Raises:
            PlanningCenterError: The classified error once it is not retryable
                or all attempts are used up
        """
        stats = RetryStats()
        self.last_stats = stats
        label = ""
        if context:
            label = f"{context.get('method', '')} {context.get('url', '')}".strip()
        last_error: Optional[PlanningCenterError] = None
        current_delay = self.config.initial_delay_ms
        attempts = max(1, self.config.max_attempts)

        for attempt in range(attempts):
            try:
                result = await func()
                stats.record_attempt()

                if attempt > 0:
                    logger.info(f"{label} succeeded after {attempt + 1} attempts")

                return result

            except Exception as e:
                stats.record_attempt(e)
                error = classify_error(e)
                last_error = error

                logger.warning(
                    f"Attempt {attempt + 1}/{attempts} for {label or 'request'} failed: {error}",
                    extra={"error_type": type(error).__name__, "attempt": attempt + 1}
                )

                if not self._should_retry(error, attempt, attempts):
                    if error is e:
                        raise
                    raise error from e

                delay_ms = self._calculate_delay(error, current_delay, attempt)

                if delay_ms > 0:
                    stats.record_delay(delay_ms)
                    logger.info(f"Waiting {delay_ms}ms before retry {attempt + 2}")
                    await asyncio.sleep(delay_ms / 1000.0)

                current_delay = self._update_delay(current_delay)

                if self.config.on_retry_func:
                    try:
                        await self.config.on_retry_func(error, attempt + 1)
                    except Exception as callback_error:
                        logger.error(f"Error in retry callback: {callback_error}")

        logger.error(f"All {attempts} retry attempts failed. Final stats: {stats.to_dict()}")
        if last_error is None:
            raise PlanningCenterError("All retry attempts failed with no recorded error")
        raise last_error

    def _should_retry(self, error: PlanningCenterError, attempt: int, attempts: int) -> bool:
        """Determine if an error should be retried."""
        if attempt >= attempts - 1:
            return False
        return is_retryable_error(error)

    def _calculate_delay(self, error: PlanningCenterError, current_delay: int, attempt: int) -> int:
        """Calculate delay for next retry attempt."""
        if self.config.respect_retry_after:
            retry_after = get_retry_delay(error)
            if retry_after:
                return min(retry_after * 1000, self.config.max_delay_ms)

        if self.config.strategy == RetryStrategy.LINEAR_BACKOFF:
            delay = self.config.initial_delay_ms * (attempt + 1)
        else:  # EXPONENTIAL_BACKOFF (default)
            delay = current_delay

        if self.config.jitter:
            jitter_amount = delay * self.config.jitter_range
            jitter = random.uniform(-jitter_amount, jitter_amount)
            delay = int(delay + jitter)

        return max(0, min(delay, self.config.max_delay_ms))

    def _update_delay(self, current_delay: int) -> int:
        """Update delay for next iteration."""
        if self.config.strategy == RetryStrategy.EXPONENTIAL_BACKOFF:
            return min(
                int(current_delay * self.config.backoff_multiplier),
                self.config.max_delay_ms
            )
        return current_delay


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    config: Optional[RetryConfig] = None,
    **kwargs
) -> T:
    """
    Convenience function for retrying with exponential backoff.

    Args:
        func: Async function to retry
        config: Retry configuration
        **kwargs: Additional arguments for retry

    Returns:
        Result of the function call
    """
    manager = RetryManager(config)
    return await manager.retry(func, **kwargs)


def create_retry_config(
    max_retry_attempts: int = 3,
    retry_base_delay: float = 1.0,
    max_delay_ms: int = 30000,
) -> RetryConfig:
    """Create a retry configuration from connection settings (delay in seconds)."""
    return RetryConfig(
        max_attempts=max(1, max_retry_attempts),
        initial_delay_ms=int(retry_base_delay * 1000),
        max_delay_ms=max_delay_ms,
    )
