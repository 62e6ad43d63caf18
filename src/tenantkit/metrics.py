"""Request metrics side-channel.

Best-effort and fire-and-forget: the dispatcher hands each finished
request to a ``MetricsSink`` on a detached task, and nothing a sink does
(slow endpoint, HTTP error, exception) can delay or alter the response.

``HttpMetricsSink`` posts each metric as JSON via httpx::

    sink = HttpMetricsSink(HttpMetricsConfig.from_env())
    dispatcher = Dispatcher(packages, auth, PipelineConfig(metrics=sink))

With no API key configured the sink is disabled and ``record`` returns
immediately.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

import httpx

from tenantkit._internal.invoke import invoke

logger = logging.getLogger("tenantkit.metrics")

SDK_VERSION = "1.0.0"

DEFAULT_METRICS_URL = "http://localhost:3005/api/v1/metrics/hooks"

API_KEY_ENV = "TENANTKIT_METRICS_API_KEY"
URL_ENV = "TENANTKIT_METRICS_URL"


@dataclass(frozen=True, slots=True)
class RequestMetric:
    """One finished request, as reported to the sink."""

    request_id: str
    method: str
    path: str
    status: int
    duration_ms: float
    route: str | None = None
    principal_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_payload(self) -> dict[str, Any]:
        return {
            "requestId": self.request_id,
            "method": self.method,
            "path": self.path,
            "route": self.route,
            "status": self.status,
            "durationMs": round(self.duration_ms, 3),
            "actorUserId": self.principal_id,
            "timestamp": self.timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "sdkVersion": SDK_VERSION,
        }


@runtime_checkable
class MetricsSink(Protocol):
    def record(self, metric: RequestMetric) -> None | Awaitable[None]: ...


@dataclass(frozen=True, slots=True)
class HttpMetricsConfig:
    """Where and how ``HttpMetricsSink`` reports.

    ``print_errors`` raises delivery failures from DEBUG to WARNING.
    """

    api_key: str | None = None
    url: str = DEFAULT_METRICS_URL
    timeout: float = 5.0
    print_errors: bool = False

    @classmethod
    def from_env(cls, *, print_errors: bool = False) -> HttpMetricsConfig:
        """Read ``TENANTKIT_METRICS_API_KEY`` and ``TENANTKIT_METRICS_URL``."""
        return cls(
            api_key=os.environ.get(API_KEY_ENV) or None,
            url=os.environ.get(URL_ENV) or DEFAULT_METRICS_URL,
            print_errors=print_errors,
        )


class HttpMetricsSink:
    """POSTs request metrics to an HTTP collector."""

    __slots__ = ("_config", "_transport")

    def __init__(
        self,
        config: HttpMetricsConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpMetricsConfig()
        self._transport = transport
        if not self._config.api_key:
            logger.warning("%s is not set; HTTP metrics are disabled", API_KEY_ENV)

    @property
    def enabled(self) -> bool:
        return bool(self._config.api_key)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": f"tenantkit/{SDK_VERSION}",
        }
        if self._config.api_key:
            headers["X-API-Key"] = self._config.api_key
        return headers

    async def record(self, metric: RequestMetric) -> None:
        if not self.enabled:
            return
        level = logging.WARNING if self._config.print_errors else logging.DEBUG
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self._config.url,
                    json=metric.to_payload(),
                    headers=self._headers(),
                    timeout=self._config.timeout,
                )
        except httpx.HTTPError as exc:
            logger.log(level, "Failed to send metrics for %s: %s", metric.request_id, exc)
            return
        if response.status_code >= 400:
            logger.log(
                level,
                "Metrics collector rejected %s with HTTP %d",
                metric.request_id,
                response.status_code,
            )


class MetricsNotifier:
    """Schedules sink deliveries as detached tasks.

    Tasks are held until they finish so they are not garbage-collected
    mid-flight; ``drain()`` waits for any still pending.
    """

    __slots__ = ("_sink", "_tasks")

    def __init__(self, sink: MetricsSink | None) -> None:
        self._sink = sink
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def notify(self, metric: RequestMetric) -> None:
        if self._sink is None:
            return
        task = asyncio.get_running_loop().create_task(self._deliver(metric))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(self, metric: RequestMetric) -> None:
        try:
            await invoke(self._sink.record, metric)
        except Exception:
            logger.debug("Metrics sink raised for %s", metric.request_id, exc_info=True)

    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*self._tasks)
