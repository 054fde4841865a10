# ==============================================================================
# RETRY SCHEDULER TESTS
# ==============================================================================

import asyncio

import pytest

from pawsitiv.core.exceptions import ConnectionClosedError
from pawsitiv.database.connection import (
    ConnectionConfig,
    ConnectionState,
    RetryPhase,
    RetryScheduler,
)


def make_scheduler(max_retries: int = 3, retry_delay_ms: int = 10) -> RetryScheduler:
    config = ConnectionConfig(
        uri="sqlite+aiosqlite:///:memory:",
        max_retries=max_retries,
        retry_delay_ms=retry_delay_ms,
    )
    return RetryScheduler(config, ConnectionState())


class TestAttemptCounting:

    def test_attempt_numbers_are_one_based(self):
        scheduler = make_scheduler()
        scheduler.reset()

        assert scheduler.begin_attempt() == 1
        scheduler.record_failure()
        assert scheduler.begin_attempt() == 2

    def test_failure_budget_is_total_attempts(self):
        scheduler = make_scheduler(max_retries=3)
        scheduler.reset()

        assert scheduler.record_failure() is True
        assert scheduler.record_failure() is True
        assert scheduler.record_failure() is False
        assert scheduler.phase == RetryPhase.EXHAUSTED

    def test_single_attempt_budget(self):
        scheduler = make_scheduler(max_retries=1)
        scheduler.reset()

        assert scheduler.record_failure() is False

    def test_success_resets_counter(self):
        scheduler = make_scheduler()
        scheduler.record_failure()

        scheduler.record_success()

        assert scheduler.state.current_attempt == 0
        assert scheduler.phase == RetryPhase.SUCCEEDED


class TestTimer:

    @pytest.mark.asyncio
    async def test_wait_sets_and_clears_handle(self):
        scheduler = make_scheduler(retry_delay_ms=20)

        task = asyncio.create_task(scheduler.wait())
        await asyncio.sleep(0)
        assert scheduler.is_waiting
        assert scheduler.phase == RetryPhase.WAITING

        await task
        assert scheduler.is_waiting is False
        assert scheduler.state.retry_handle is None

    @pytest.mark.asyncio
    async def test_cancel_wakes_waiter_with_closed_error(self):
        scheduler = make_scheduler(retry_delay_ms=10_000)

        task = asyncio.create_task(scheduler.wait())
        await asyncio.sleep(0)

        assert scheduler.cancel() is True
        with pytest.raises(ConnectionClosedError):
            await task
        assert scheduler.state.retry_handle is None
        assert scheduler.phase == RetryPhase.IDLE

    def test_cancel_without_pending_retry(self):
        scheduler = make_scheduler()

        assert scheduler.cancel() is False
        assert scheduler.cancel() is False


class TestConfig:

    def test_rejects_zero_retries(self):
        with pytest.raises(ValueError):
            ConnectionConfig(uri="sqlite://", max_retries=0)

    def test_rejects_negative_delay(self):
        with pytest.raises(ValueError):
            ConnectionConfig(uri="sqlite://", retry_delay_ms=-1)

    def test_redacts_password(self):
        config = ConnectionConfig(uri="postgresql+asyncpg://cats:geheim@db:5432/pawsitiv")

        assert config.redacted_uri() == "postgresql+asyncpg://cats:***@db:5432/pawsitiv"
        assert config.retry_delay == 5.0
