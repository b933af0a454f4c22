"""
Retry-with-backoff policy for external calls.

A single policy object is shared by every boundary adapter: exponential
backoff with a cap plus random jitter, a bounded attempt budget, and an
optional per-attempt timeout. Configuration and validation failures are
never retried.

Dependencies: tenacity, asyncio
System role: Uniform transient-failure handling for embedding, chat, search and storage calls
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from legalchat.configs.http import RetrySettings
from legalchat.core.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_retryable(error: BaseException) -> bool:
    """Return False for errors no retry can fix."""
    return not isinstance(error, (ConfigurationError, ValidationError))


class RetryPolicy:
    """Backoff policy applied uniformly to outbound calls."""

    def __init__(
        self,
        max_retries: int = 2,
        base_delay: float = 0.4,
        multiplier: float = 2.0,
        max_delay: float = 5.0,
        jitter: float = 0.2,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize retry policy.

        Args:
            max_retries: Retries after the first attempt (attempts = max_retries + 1)
            base_delay: Delay before the first retry in seconds
            multiplier: Growth factor between consecutive delays
            max_delay: Cap on the exponential component
            jitter: Upper bound of uniform random delay added per attempt
            timeout: Optional per-attempt timeout in seconds
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay
        self.jitter = jitter
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryPolicy":
        """Build policy from RETRY_* settings."""
        return cls(
            max_retries=settings.max_retries,
            base_delay=settings.base_delay_seconds,
            multiplier=settings.multiplier,
            max_delay=settings.max_delay_seconds,
            jitter=settings.jitter_seconds,
        )

    def with_timeout(self, timeout: float | None) -> "RetryPolicy":
        """
        Copy of this policy with a different per-attempt timeout.

        Args:
            timeout: Seconds per attempt (None disables)

        Returns:
            RetryPolicy: New policy sharing the backoff parameters
        """
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            multiplier=self.multiplier,
            max_delay=self.max_delay,
            jitter=self.jitter,
            timeout=timeout,
        )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, retry_number: int) -> float:
        """
        Deterministic part of the backoff before the given retry (1-based).

        Args:
            retry_number: 1 for the first retry, 2 for the second, ...

        Returns:
            float: Delay in seconds without jitter
        """
        return min(self.base_delay * (self.multiplier ** (retry_number - 1)), self.max_delay)

    def _retrying(self, operation: str) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.base_delay,
                exp_base=self.multiplier,
                max=self.max_delay,
            )
            + wait_random(0, self.jitter),
            retry=retry_if_exception(is_retryable),
            before_sleep=self._log_retry(operation),
            reraise=True,
        )

    @staticmethod
    def _log_retry(operation: str) -> Callable[[RetryCallState], None]:
        def before_sleep(state: RetryCallState) -> None:
            error = state.outcome.exception() if state.outcome else None
            logger.warning(
                f"{__name__}:call - Retrying {operation}",
                extra={
                    "operation": operation,
                    "attempt": state.attempt_number,
                    "sleep_s": round(state.next_action.sleep, 3) if state.next_action else None,
                    "error_type": type(error).__name__ if error else None,
                    "error": str(error) if error else None,
                },
            )

        return before_sleep

    async def _attempt(self, fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        if self.timeout is None:
            return await fn(*args, **kwargs)
        return await asyncio.wait_for(fn(*args, **kwargs), timeout=self.timeout)

    async def call(
        self,
        fn: Callable[..., Awaitable[T]],
        *args: Any,
        operation: str = "external_call",
        **kwargs: Any,
    ) -> T:
        """
        Invoke an async callable under this policy.

        Args:
            fn: Coroutine function performing one attempt
            *args: Positional arguments for fn
            operation: Label used in retry logs
            **kwargs: Keyword arguments for fn

        Returns:
            T: Result of the first successful attempt

        Raises:
            Exception: Last error once the attempt budget is exhausted, or
                immediately for configuration/validation errors
        """
        return await self._retrying(operation)(self._attempt, fn, *args, **kwargs)
