"""Named, tagged health checks and the three health surfaces built from them."""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, FrozenSet, Iterable, List, Optional

from bookstack_mcp.health.models import (
    AggregateHealthReport,
    HealthCheckEntry,
    HealthReport,
    HealthStatus,
    worst_status,
)
from bookstack_mcp.logger import Logger

READY_TAG = "ready"

HealthCheckFn = Callable[[Optional[asyncio.Event]], Awaitable[HealthReport]]


@dataclass(frozen=True)
class RegisteredCheck:
    name: str
    check: HealthCheckFn
    tags: FrozenSet[str] = field(default_factory=frozenset)


CheckPredicate = Callable[[RegisteredCheck], bool]


class HealthCheckRegistry:
    def __init__(self, logger: Logger):
        self.logger = logger
        self._checks: List[RegisteredCheck] = []

    @property
    def checks(self) -> List[RegisteredCheck]:
        return list(self._checks)

    def register(self, name: str, check: HealthCheckFn, tags: Iterable[str] = ()) -> None:
        if any(existing.name == name for existing in self._checks):
            raise ValueError(f"Health check '{name}' is already registered")
        self._checks.append(RegisteredCheck(name=name, check=check, tags=frozenset(tags)))

    async def run(
        self,
        predicate: Optional[CheckPredicate] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AggregateHealthReport:
        """Run the selected checks concurrently; status is the worst of them."""
        started = time.perf_counter()
        selected = [c for c in self._checks if predicate is None or predicate(c)]
        entries = await asyncio.gather(*(self._run_one(c, cancel_event) for c in selected))
        return AggregateHealthReport(
            status=worst_status(entry.report.status for entry in entries),
            entries=list(entries),
            total_duration_ms=(time.perf_counter() - started) * 1000,
        )

    async def liveness(self) -> AggregateHealthReport:
        return await self.run(lambda check: False)

    async def readiness(self, cancel_event: Optional[asyncio.Event] = None) -> AggregateHealthReport:
        return await self.run(lambda check: READY_TAG in check.tags, cancel_event)

    async def full(self, cancel_event: Optional[asyncio.Event] = None) -> AggregateHealthReport:
        return await self.run(cancel_event=cancel_event)

    async def _run_one(
        self, registered: RegisteredCheck, cancel_event: Optional[asyncio.Event]
    ) -> HealthCheckEntry:
        started = time.perf_counter()
        try:
            report = await registered.check(cancel_event)
        except Exception as exc:
            self.logger.error(
                "Health check raised", check=registered.name, error=str(exc)
            )
            report = HealthReport(
                status=HealthStatus.UNHEALTHY,
                description=f"Health check '{registered.name}' failed",
                data={"error": str(exc)},
            )
        if not report.duration_ms:
            report.duration_ms = (time.perf_counter() - started) * 1000
        return HealthCheckEntry(name=registered.name, report=report)
