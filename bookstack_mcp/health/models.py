"""Health report models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List


class HealthStatus(str, Enum):
    HEALTHY = "Healthy"
    DEGRADED = "Degraded"
    UNHEALTHY = "Unhealthy"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


def worst_status(statuses: Iterable[HealthStatus]) -> HealthStatus:
    """Aggregate status: the most severe one, Healthy when there are none."""
    return max(statuses, key=lambda status: status.severity, default=HealthStatus.HEALTHY)


@dataclass
class HealthReport:
    """Outcome of one check. Built fresh on every probe."""

    status: HealthStatus
    description: str
    data: Dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "description": self.description,
            "data": self.data,
            "duration": round(self.duration_ms, 3),
        }


@dataclass
class HealthCheckEntry:
    name: str
    report: HealthReport

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, **self.report.to_dict()}


@dataclass
class AggregateHealthReport:
    status: HealthStatus
    entries: List[HealthCheckEntry] = field(default_factory=list)
    total_duration_ms: float = 0.0

    @property
    def http_status(self) -> int:
        return 503 if self.status is HealthStatus.UNHEALTHY else 200

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "checks": [entry.to_dict() for entry in self.entries],
            "totalDuration": round(self.total_duration_ms, 3),
        }
