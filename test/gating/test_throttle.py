"""Tests for the per-client fixed-window rate limiter.

Windows are real ``limits`` windows, so the window tests use the shortest
allowed window (1 s) and wait it out.
"""

import asyncio

import pytest

from bookstack_mcp.config import ThrottlingSettings
from bookstack_mcp.gating import FixedWindowRateLimiter, ThrottleOutcome, UNKNOWN_CLIENT

WINDOW = 1
PAST_WINDOW = WINDOW + 0.2


def make_limiter(logger, **overrides):
    return FixedWindowRateLimiter(ThrottlingSettings(**overrides), logger)


async def wait_until(condition, timeout=1.0):
    """Yield to the loop until ``condition()`` holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        assert loop.time() < deadline, "condition not reached"
        await asyncio.sleep(0.01)


class TestDefaults:
    def test_defaults(self):
        settings = ThrottlingSettings()
        assert settings.enabled is True
        assert settings.permit_limit == 100
        assert settings.window_seconds == 60
        assert settings.queue_limit == 0

    @pytest.mark.asyncio
    async def test_hundred_and_first_request_rejected(self, logger):
        """101 requests from one client inside a window: 100 admitted, 1 rejected."""
        limiter = make_limiter(logger)
        outcomes = [(await limiter.admit("10.0.0.1")).outcome for _ in range(101)]

        assert outcomes.count(ThrottleOutcome.ADMIT) == 100
        assert outcomes[-1] is ThrottleOutcome.REJECT


class TestWindow:
    @pytest.mark.asyncio
    async def test_admission_resumes_after_window(self, logger):
        limiter = make_limiter(logger, permit_limit=3, window_seconds=WINDOW)
        for _ in range(3):
            assert (await limiter.admit("c")).outcome is ThrottleOutcome.ADMIT
        assert (await limiter.admit("c")).outcome is ThrottleOutcome.REJECT

        await asyncio.sleep(PAST_WINDOW)
        assert (await limiter.admit("c")).outcome is ThrottleOutcome.ADMIT
        assert await limiter.remaining("c") == 2

    @pytest.mark.asyncio
    async def test_permits_never_exceed_limit(self, logger):
        limiter = make_limiter(logger, permit_limit=5, window_seconds=60)
        admitted = 0
        for _ in range(50):
            if (await limiter.admit("c")).outcome is ThrottleOutcome.ADMIT:
                admitted += 1

        assert admitted == 5
        assert await limiter.remaining("c") == 0


class TestPartitions:
    @pytest.mark.asyncio
    async def test_clients_are_independent(self, logger):
        limiter = make_limiter(logger, permit_limit=1)
        assert (await limiter.admit("a")).outcome is ThrottleOutcome.ADMIT
        assert (await limiter.admit("a")).outcome is ThrottleOutcome.REJECT
        assert (await limiter.admit("b")).outcome is ThrottleOutcome.ADMIT

    @pytest.mark.asyncio
    async def test_unidentified_clients_share_one_partition(self, logger):
        limiter = make_limiter(logger, permit_limit=1)
        assert (await limiter.admit(None)).outcome is ThrottleOutcome.ADMIT
        decision = await limiter.admit("")
        assert decision.outcome is ThrottleOutcome.REJECT
        assert decision.client_key == UNKNOWN_CLIENT

    @pytest.mark.asyncio
    async def test_admitted_clients_leave_no_queue_state(self, logger):
        limiter = make_limiter(logger, permit_limit=1, window_seconds=WINDOW)
        for n in range(1000):
            await limiter.admit(f"10.1.{n // 256}.{n % 256}")

        assert limiter.tracked_clients == 0

    @pytest.mark.asyncio
    async def test_wait_queue_dropped_once_drained(self, logger):
        limiter = make_limiter(logger, permit_limit=1, window_seconds=WINDOW, queue_limit=1)
        clients = [f"client-{n}" for n in range(20)]
        for key in clients:
            assert await limiter.acquire(key) is True
        waiting = [asyncio.ensure_future(limiter.acquire(key)) for key in clients]
        await wait_until(lambda: limiter.tracked_clients == len(clients))

        assert await asyncio.wait_for(asyncio.gather(*waiting), timeout=3) == [True] * 20
        await wait_until(lambda: limiter.tracked_clients == 0)


class TestQueue:
    @pytest.mark.asyncio
    async def test_queue_limit_zero_rejects(self, logger):
        limiter = make_limiter(logger, permit_limit=1)
        assert await limiter.acquire("c") is True
        assert await limiter.acquire("c") is False
        assert limiter.tracked_clients == 0

    @pytest.mark.asyncio
    async def test_queued_request_granted_in_next_window(self, logger):
        limiter = make_limiter(logger, permit_limit=1, window_seconds=WINDOW, queue_limit=1)
        assert await limiter.acquire("c") is True

        waiting = asyncio.ensure_future(limiter.acquire("c"))
        await wait_until(lambda: limiter.queued("c") == 1)

        # Queue is full
        assert await limiter.acquire("c") is False

        assert await asyncio.wait_for(waiting, timeout=3) is True
        assert await limiter.remaining("c") == 0

    @pytest.mark.asyncio
    async def test_queue_is_fifo(self, logger):
        limiter = make_limiter(logger, permit_limit=1, window_seconds=WINDOW, queue_limit=2)
        await limiter.acquire("c")
        first = asyncio.ensure_future(limiter.acquire("c"))
        await wait_until(lambda: limiter.queued("c") == 1)
        second = asyncio.ensure_future(limiter.acquire("c"))
        await wait_until(lambda: limiter.queued("c") == 2)

        assert await asyncio.wait_for(first, timeout=3) is True
        assert not second.done()
        assert await asyncio.wait_for(second, timeout=3) is True

    @pytest.mark.asyncio
    async def test_abandoned_waiter_releases_its_slot(self, logger):
        limiter = make_limiter(logger, permit_limit=1, window_seconds=WINDOW, queue_limit=1)
        await limiter.acquire("c")
        waiting = asyncio.ensure_future(limiter.acquire("c"))
        await wait_until(lambda: limiter.queued("c") == 1)

        waiting.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiting
        assert limiter.queued("c") == 0

        await asyncio.sleep(PAST_WINDOW)
        await wait_until(lambda: limiter.tracked_clients == 0)
        assert await limiter.remaining("c") == 1

    @pytest.mark.asyncio
    async def test_permit_passes_to_next_live_waiter(self, logger):
        limiter = make_limiter(logger, permit_limit=1, window_seconds=WINDOW, queue_limit=2)
        await limiter.acquire("c")
        first = asyncio.ensure_future(limiter.acquire("c"))
        await wait_until(lambda: limiter.queued("c") == 1)
        second = asyncio.ensure_future(limiter.acquire("c"))
        await wait_until(lambda: limiter.queued("c") == 2)

        first.cancel()
        assert await asyncio.wait_for(second, timeout=3) is True
        assert first.cancelled()
        assert await limiter.remaining("c") == 0
