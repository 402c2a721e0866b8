"""Per-client fixed-window rate limiter.

Window counting is delegated to ``limits``: every client key gets its own
fixed-window counter of ``permit_limit`` hits per ``window_seconds`` in
in-memory storage, and expired counters are dropped by the storage itself.

When a client's window is exhausted up to ``queue_limit`` callers wait
(oldest first) for the next window and anything beyond that is rejected.
Wait queues exist only while a client has waiters.
"""

import asyncio
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, Optional

from limits import RateLimitItemPerSecond
from limits.aio import strategies
from limits.aio.storage import MemoryStorage

from bookstack_mcp.config.settings import ThrottlingSettings
from bookstack_mcp.logger import Logger

UNKNOWN_CLIENT = "unknown"
REJECTION_BODY = "Too many requests. Please try again later."

# Lower bound on a drain sleep, so a window that expires late cannot spin
MIN_WAIT_SECONDS = 0.01


class ThrottleOutcome(str, Enum):
    ADMIT = "admit"
    ENQUEUE = "enqueue"
    REJECT = "reject"


@dataclass
class ThrottleDecision:
    outcome: ThrottleOutcome
    client_key: str
    # Resolved with True once a queued request is granted a permit
    waiter: Optional["asyncio.Future[bool]"] = None


def _discard_abandoned(queue: "Deque[asyncio.Future[bool]]") -> None:
    live = [w for w in queue if not w.done()]
    if len(live) != len(queue):
        queue.clear()
        queue.extend(live)


class FixedWindowRateLimiter:
    """Keyed fixed-window admission with a bounded FIFO wait queue per key."""

    def __init__(
        self,
        settings: ThrottlingSettings,
        logger: Logger,
        storage: Optional[MemoryStorage] = None,
    ):
        self.settings = settings
        self.logger = logger
        self.storage = storage or MemoryStorage()
        self._strategy = strategies.FixedWindowRateLimiter(self.storage)
        self._item = RateLimitItemPerSecond(settings.permit_limit, settings.window_seconds)
        self._queues: Dict[str, "Deque[asyncio.Future[bool]]"] = {}
        self._drainers: Dict[str, "asyncio.Task[None]"] = {}

    @staticmethod
    def normalize_key(client_key: Optional[str]) -> str:
        return client_key or UNKNOWN_CLIENT

    @property
    def tracked_clients(self) -> int:
        """Number of clients that currently hold a wait queue."""
        return len(self._queues)

    def queued(self, client_key: Optional[str]) -> int:
        queue = self._queues.get(self.normalize_key(client_key))
        if not queue:
            return 0
        return sum(1 for w in queue if not w.done())

    async def remaining(self, client_key: Optional[str]) -> int:
        """Permits left in the client's current window."""
        stats = await self._strategy.get_window_stats(self._item, self.normalize_key(client_key))
        return stats.remaining

    async def admit(self, client_key: Optional[str]) -> ThrottleDecision:
        """Admit, enqueue or reject one request from ``client_key``.

        A client with waiters queues new arrivals behind them even when the
        window has just reset.
        """
        key = self.normalize_key(client_key)
        if not self.queued(key) and await self._strategy.hit(self._item, key):
            return ThrottleDecision(ThrottleOutcome.ADMIT, key)

        if self.queued(key) >= self.settings.queue_limit:
            self.logger.warning(
                "Rate limit exceeded",
                client=key,
                permit_limit=self.settings.permit_limit,
                window_seconds=self.settings.window_seconds,
            )
            return ThrottleDecision(ThrottleOutcome.REJECT, key)

        waiter: "asyncio.Future[bool]" = asyncio.get_running_loop().create_future()
        queue = self._queues.setdefault(key, deque())
        _discard_abandoned(queue)
        queue.append(waiter)
        if key not in self._drainers:
            self._drainers[key] = asyncio.ensure_future(self._drain(key, queue))
        self.logger.debug("Request queued for next window", client=key, queued=len(queue))
        return ThrottleDecision(ThrottleOutcome.ENQUEUE, key, waiter)

    async def acquire(self, client_key: Optional[str]) -> bool:
        """Wait for a permit. Returns False when the request is rejected.

        A cancelled wait leaves the queue without consuming a permit.
        """
        decision = await self.admit(client_key)
        waiter = decision.waiter
        if waiter is None:
            return decision.outcome is ThrottleOutcome.ADMIT
        try:
            return await waiter
        except asyncio.CancelledError:
            waiter.cancel()
            self.logger.debug("Queued request abandoned", client=decision.client_key)
            raise

    async def _drain(self, key: str, queue: "Deque[asyncio.Future[bool]]") -> None:
        try:
            while True:
                _discard_abandoned(queue)
                if not queue:
                    return
                if await self._strategy.hit(self._item, key):
                    # The permit goes to the oldest waiter still connected
                    _discard_abandoned(queue)
                    if queue:
                        queue.popleft().set_result(True)
                    continue
                stats = await self._strategy.get_window_stats(self._item, key)
                await asyncio.sleep(max(stats.reset_time - time.time(), MIN_WAIT_SECONDS))
        finally:
            for waiter in queue:
                waiter.cancel()
            self._drainers.pop(key, None)
            if self._queues.get(key) is queue:
                del self._queues[key]
