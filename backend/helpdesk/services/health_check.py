"""Health Aggregator: one synchronous pass over system metrics and dependency probes.

Invariants:
    - Steps: uptime/environment/timestamp -> system metrics -> probes -> overall status
    - System metric failure raises HealthReportUnavailableError before any probe runs
    - A probe never raises: timeouts and exceptions become `error` ProbeResults
    - Each probe is bounded by probe_timeout_seconds
    - Cache not configured (None) -> `unknown`, never `error`
    - No state survives between calls

Design Decisions:
    - Database and cache probes run concurrently via asyncio.gather; the report is
      assembled only after both finish
    - Collaborators (database, cache, metric collectors) are injected so tests can
      substitute fakes without patching modules
"""

import asyncio
import logging
import time
from typing import Callable

from helpdesk.core.envelope import utc_timestamp
from helpdesk.core.errors import HealthReportUnavailableError
from helpdesk.core.health_status import (
    DEFAULT_MEMORY_WARNING_PERCENT, ProbeResult, SystemSnapshot, build_health_report,
)
from helpdesk.core.repository_protocols import HealthProbe
from helpdesk.infrastructure.system_metrics import (
    collect_system_snapshot, process_uptime_seconds,
)

logger = logging.getLogger(__name__)

REDIS_NOT_CONFIGURED = "Redis not configured"


class HealthAggregator:
    def __init__(
        self,
        database: HealthProbe,
        cache: HealthProbe | None,
        environment: str,
        probe_timeout_seconds: float = 5.0,
        memory_warning_percent: float = DEFAULT_MEMORY_WARNING_PERCENT,
        collect_system: Callable[[], SystemSnapshot] = collect_system_snapshot,
        uptime: Callable[[], float] = process_uptime_seconds,
    ):
        self._database = database
        self._cache = cache
        self._environment = environment
        self._probe_timeout = probe_timeout_seconds
        self._memory_warning_percent = memory_warning_percent
        self._collect_system = collect_system
        self._uptime = uptime

    def basic_health(self) -> dict:
        return {
            "status": "ok",
            "timestamp": utc_timestamp(),
            "uptime": self._uptime(),
            "environment": self._environment,
        }

    async def detailed_health(self) -> dict:
        timestamp = utc_timestamp()
        try:
            uptime = self._uptime()
            system = self._collect_system()
        except Exception as e:
            logger.error(f"System metrics unavailable: {e}", exc_info=True)
            raise HealthReportUnavailableError(str(e)) from e

        database, cache = await asyncio.gather(
            self._probe("database", self._database),
            self._probe_cache(),
        )
        return build_health_report(
            timestamp=timestamp,
            uptime_seconds=uptime,
            environment=self._environment,
            system=system,
            database=database,
            cache=cache,
            memory_warning_percent=self._memory_warning_percent,
        )

    async def _probe_cache(self) -> ProbeResult:
        if self._cache is None:
            return ProbeResult.not_configured(REDIS_NOT_CONFIGURED)
        return await self._probe("redis", self._cache)

    async def _probe(self, name: str, target: HealthProbe) -> ProbeResult:
        start = time.perf_counter()
        try:
            await asyncio.wait_for(target.ping(), timeout=self._probe_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{name} health probe timed out after {self._probe_timeout}s")
            return ProbeResult.failed(f"timed out after {self._probe_timeout}s")
        except Exception as e:
            logger.error(f"{name} health check failed: {e}")
            return ProbeResult.failed(str(e) or type(e).__name__)
        elapsed_ms = round((time.perf_counter() - start) * 1000)
        return ProbeResult.ok(elapsed_ms)
