"""Upstream health probing and liveness/readiness surfaces."""

from bookstack_mcp.health.models import (
    AggregateHealthReport,
    HealthCheckEntry,
    HealthReport,
    HealthStatus,
    worst_status,
)
from bookstack_mcp.health.prober import BookStackHealthCheck
from bookstack_mcp.health.registry import READY_TAG, HealthCheckRegistry, RegisteredCheck
from bookstack_mcp.health.routes import create_health_routes

__all__ = [
    "HealthStatus",
    "HealthReport",
    "HealthCheckEntry",
    "AggregateHealthReport",
    "worst_status",
    "BookStackHealthCheck",
    "HealthCheckRegistry",
    "RegisteredCheck",
    "READY_TAG",
    "create_health_routes",
]
