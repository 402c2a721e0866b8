"""Active probe of the BookStack status endpoint.

Classification:
- 2xx                  -> Healthy (response body recorded)
- other status         -> Degraded (status code recorded)
- transport failure    -> Unhealthy, not reachable
- timeout              -> Unhealthy, timed out
- caller cancellation  -> Unhealthy, cancelled

The probe never raises; every failure is reported in the HealthReport.
"""

import asyncio
import time
from typing import Any, Dict, Optional

import httpx

from bookstack_mcp.client import BookStackClient
from bookstack_mcp.config_docs import DEFAULT_HEALTH_TIMEOUT_SECONDS
from bookstack_mcp.health.models import HealthReport, HealthStatus
from bookstack_mcp.logger import Logger


class BookStackHealthCheck:
    """Probes ``{base_url}/api/status`` once per call, without retries."""

    def __init__(self, client: BookStackClient, logger: Logger):
        self.client = client
        self.logger = logger

    async def probe(
        self,
        timeout: float = DEFAULT_HEALTH_TIMEOUT_SECONDS,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> HealthReport:
        """Run the probe.

        Args:
            timeout: Seconds before the probe is abandoned as timed out
            cancel_event: Set by the caller to abandon the probe; reported as
                cancelled rather than timed out
        """
        started = time.perf_counter()
        try:
            report = await self._probe(timeout, cancel_event)
        except Exception as exc:
            self.logger.error(
                "BookStack status check failed with unexpected exception",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            report = self._unhealthy("BookStack API health check failed", error=str(exc))
        report.duration_ms = (time.perf_counter() - started) * 1000
        return report

    async def _probe(self, timeout: float, cancel_event: Optional[asyncio.Event]) -> HealthReport:
        request_task = asyncio.ensure_future(self.client.fetch_status(timeout=timeout))
        pending = {request_task}
        cancel_task = None
        if cancel_event is not None:
            cancel_task = asyncio.ensure_future(cancel_event.wait())
            pending.add(cancel_task)

        try:
            done, _ = await asyncio.wait(
                pending, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in pending:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if request_task in done and not request_task.cancelled():
            return self._classify(request_task, timeout)
        if cancel_event is not None and cancel_event.is_set():
            self.logger.warning("BookStack status check cancelled by caller")
            return self._unhealthy("BookStack API health check was cancelled", error="cancelled")
        return self._timed_out(timeout)

    def _classify(self, request_task: "asyncio.Future[httpx.Response]", timeout: float) -> HealthReport:
        exc = request_task.exception()
        if exc is None:
            return self._from_response(request_task.result())
        if isinstance(exc, httpx.TimeoutException):
            return self._timed_out(timeout)
        if isinstance(exc, httpx.HTTPError):
            self.logger.error(
                "BookStack status check failed with HTTP request exception", error=str(exc)
            )
            return self._unhealthy("BookStack API is not reachable", error=str(exc) or type(exc).__name__)
        raise exc

    def _from_response(self, response: httpx.Response) -> HealthReport:
        status_url = self.client.status_url
        if response.is_success:
            self.logger.info("BookStack status check succeeded", status_code=response.status_code)
            return HealthReport(
                status=HealthStatus.HEALTHY,
                description="BookStack API is responding",
                data={"statusUrl": status_url, "response": response.text},
            )
        self.logger.warning(
            "BookStack status check returned status code", status_code=response.status_code
        )
        return HealthReport(
            status=HealthStatus.DEGRADED,
            description=f"BookStack API returned status code: {response.status_code}",
            data={"statusUrl": status_url, "statusCode": response.status_code},
        )

    def _timed_out(self, timeout: float) -> HealthReport:
        self.logger.warning("BookStack status check timed out", timeout_seconds=timeout)
        return self._unhealthy(
            f"BookStack API health check timed out after {timeout:g} seconds",
            error="timed out",
            timeoutSeconds=timeout,
        )

    def _unhealthy(self, description: str, **data: Any) -> HealthReport:
        payload: Dict[str, Any] = {"statusUrl": self.client.status_url}
        payload.update(data)
        return HealthReport(status=HealthStatus.UNHEALTHY, description=description, data=payload)
