"""Tests for the retry manager."""

from unittest.mock import AsyncMock, patch

import pytest

from pco_cli.core.client.errors import (
    NotFoundError,
    PlanningCenterError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
)
from pco_cli.core.client.retry import (
    RetryConfig,
    RetryManager,
    RetryStrategy,
    create_retry_config,
    retry_with_backoff,
)


def no_delay(**kwargs) -> RetryConfig:
    return RetryConfig(initial_delay_ms=0, jitter=False, **kwargs)


class TestRetryManager:
    """Test cases for RetryManager."""

    @pytest.mark.asyncio
    async def test_success_first_try(self) -> None:
        func = AsyncMock(return_value="ok")
        manager = RetryManager(no_delay())

        assert await manager.retry(func) == "ok"
        assert func.await_count == 1
        assert manager.last_stats.successful_attempts == 1

    @pytest.mark.asyncio
    async def test_retries_transient_errors(self) -> None:
        func = AsyncMock(side_effect=[ServerError(), RateLimitError(), "ok"])

        assert await RetryManager(no_delay()).retry(func) == "ok"
        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self) -> None:
        func = AsyncMock(side_effect=ServerError("down"))

        with pytest.raises(ServerError):
            await RetryManager(no_delay(max_attempts=2)).retry(func)
        assert func.await_count == 2

    @pytest.mark.asyncio
    async def test_timeout_is_not_retried(self) -> None:
        func = AsyncMock(side_effect=RequestTimeoutError())

        with pytest.raises(RequestTimeoutError):
            await RetryManager(no_delay()).retry(func)
        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self) -> None:
        func = AsyncMock(side_effect=NotFoundError())

        with pytest.raises(NotFoundError):
            await RetryManager(no_delay()).retry(func)
        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_generic_exception_is_classified(self) -> None:
        func = AsyncMock(side_effect=RuntimeError("odd"))
        with pytest.raises(PlanningCenterError) as exc_info:
            await RetryManager(no_delay()).retry(func)
        assert isinstance(exc_info.value.original_error, RuntimeError)

    @pytest.mark.asyncio
    async def test_respects_retry_after(self) -> None:
        func = AsyncMock(side_effect=[RateLimitError(retry_after=2), "ok"])
        manager = RetryManager(RetryConfig(initial_delay_ms=100, jitter=False))

        with patch("pco_cli.core.client.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await manager.retry(func)

        mock_sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    async def test_exponential_backoff(self) -> None:
        func = AsyncMock(side_effect=[ServerError(), ServerError(), "ok"])
        manager = RetryManager(RetryConfig(initial_delay_ms=100, jitter=False))

        with patch("pco_cli.core.client.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await manager.retry(func)

        assert [call.args[0] for call in mock_sleep.await_args_list] == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_on_retry_callback(self) -> None:
        callback = AsyncMock()
        func = AsyncMock(side_effect=[ServerError(), "ok"])

        await RetryManager(no_delay(on_retry_func=callback)).retry(func)

        callback.assert_awaited_once()
        assert callback.await_args.args[1] == 1

    def test_delay_is_capped(self) -> None:
        manager = RetryManager(RetryConfig(initial_delay_ms=1000, max_delay_ms=1500, jitter=False))
        assert manager._calculate_delay(ServerError(), 4000, 2) == 1500

    def test_linear_strategy(self) -> None:
        manager = RetryManager(RetryConfig(initial_delay_ms=100, jitter=False, strategy=RetryStrategy.LINEAR_BACKOFF))
        assert manager._calculate_delay(ServerError(), 100, 2) == 300


@pytest.mark.asyncio
async def test_retry_with_backoff() -> None:
    func = AsyncMock(side_effect=[ServerError(), "done"])
    assert await retry_with_backoff(func, no_delay()) == "done"


def test_create_retry_config() -> None:
    config = create_retry_config(max_retry_attempts=5, retry_base_delay=0.5)
    assert config.max_attempts == 5
    assert config.initial_delay_ms == 500
    assert create_retry_config(max_retry_attempts=0).max_attempts == 1
