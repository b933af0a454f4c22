"""
Test suite for RetryPolicy.

System role: Verification of shared backoff behaviour
"""

import asyncio

import pytest

from legalchat.boundary.http.retry_policy import RetryPolicy, is_retryable
from legalchat.configs.http import RetrySettings
from legalchat.core.exceptions import ConfigurationError, ValidationError, VectorStoreError


class Flaky:
    """Async callable failing a fixed number of times before succeeding."""

    def __init__(self, failures: int, error: Exception | None = None):
        self.failures = failures
        self.error = error or ConnectionError("reset by peer")
        self.calls = 0

    async def __call__(self, value: str) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return value


class TestRetryPolicy:
    """Test suite for retry behaviour."""

    def test_defaults_should_match_settings(self) -> None:
        """Test the default policy is 3 attempts with 0.4s base delay."""
        policy = RetryPolicy.from_settings(RetrySettings())

        assert policy.max_attempts == 3
        assert policy.delay_for(1) == pytest.approx(0.4)
        assert policy.delay_for(2) == pytest.approx(0.8)

    def test_delay_should_be_capped(self) -> None:
        policy = RetryPolicy(base_delay=0.4, multiplier=2.0, max_delay=5.0)

        assert policy.delay_for(10) == 5.0

    @pytest.mark.parametrize(
        "error,expected",
        [
            (ConnectionError("x"), True),
            (VectorStoreError("x"), True),
            (asyncio.TimeoutError(), True),
            (ConfigurationError("x"), False),
            (ValidationError("x"), False),
        ],
    )
    def test_is_retryable(self, error: Exception, expected: bool) -> None:
        assert is_retryable(error) is expected

    @pytest.mark.asyncio
    async def test_transient_failure_should_be_retried(self, fast_retry_policy) -> None:
        """Test success on the last allowed attempt."""
        fn = Flaky(failures=2)

        result = await fast_retry_policy.call(fn, "ok", operation="test")

        assert result == "ok"
        assert fn.calls == 3

    @pytest.mark.asyncio
    async def test_exhausted_budget_should_reraise_last_error(self, fast_retry_policy) -> None:
        fn = Flaky(failures=10)

        with pytest.raises(ConnectionError):
            await fast_retry_policy.call(fn, "ok")

        assert fn.calls == fast_retry_policy.max_attempts

    @pytest.mark.asyncio
    async def test_configuration_error_should_not_be_retried(self, fast_retry_policy) -> None:
        """Test non-transient errors fail on the first attempt."""
        fn = Flaky(failures=10, error=ConfigurationError("missing key"))

        with pytest.raises(ConfigurationError):
            await fast_retry_policy.call(fn, "ok")

        assert fn.calls == 1

    @pytest.mark.asyncio
    async def test_slow_attempt_should_time_out_and_retry(self, fast_retry_policy) -> None:
        """Test the per-attempt timeout counts as a retryable failure."""
        # Arrange
        calls = 0

        async def slow_then_fast() -> str:
            nonlocal calls
            calls += 1
            if calls == 1:
                await asyncio.sleep(1)
            return "done"

        policy = fast_retry_policy.with_timeout(0.05)

        # Act
        result = await policy.call(slow_then_fast)

        # Assert
        assert result == "done"
        assert calls == 2
        assert fast_retry_policy.timeout is None
