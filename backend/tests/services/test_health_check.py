"""Health Aggregator: verifies probe handling and fail-fast system metrics.

Invariants:
    - A probe that raises or times out becomes an `error` entry, never an exception
    - A missing cache reports `unknown` and leaves the status untouched
    - A system metric failure aborts before any probe runs

Design Decisions:
    - Fake probes and metric collectors injected through the constructor,
      no module patching
"""

import asyncio

import pytest

from helpdesk.core.errors import HealthReportUnavailableError
from helpdesk.core.health_status import MemoryStats, SystemSnapshot
from helpdesk.services.health_check import REDIS_NOT_CONFIGURED, HealthAggregator


class FakeProbe:
    def __init__(self, error: Exception | None = None, delay: float = 0.0):
        self.error = error
        self.delay = delay
        self.calls = 0

    async def ping(self):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error


def snapshot(memory_percent: int = 40) -> SystemSnapshot:
    return SystemSnapshot(
        memory=MemoryStats(total_bytes=1000, free_bytes=1000 - memory_percent * 10),
        cpu_cores=2,
        cpu_model="test-cpu",
        load_average=(0.0, 0.0, 0.0),
        platform_type="Linux",
        platform_release="test",
        architecture="x86_64",
    )


def make_aggregator(database=None, cache=None, memory_percent=40, collect_system=None):
    return HealthAggregator(
        database=database or FakeProbe(),
        cache=cache,
        environment="test",
        probe_timeout_seconds=0.05,
        collect_system=collect_system or (lambda: snapshot(memory_percent)),
        uptime=lambda: 12.5,
    )


async def test_all_dependencies_healthy():
    report = await make_aggregator(cache=FakeProbe()).detailed_health()
    assert report["status"] == "ok"
    assert report["uptime"] == 12.5
    assert report["environment"] == "test"
    db = report["services"]["database"]
    assert db["status"] == "ok"
    assert db["connection"] == "active"
    assert db["responseTime"].endswith("ms")
    assert report["services"]["redis"]["status"] == "ok"


async def test_database_failure_is_critical():
    report = await make_aggregator(
        database=FakeProbe(ConnectionError("connection refused")),
    ).detailed_health()
    assert report["status"] == "critical"
    assert report["services"]["database"] == {
        "status": "error", "error": "connection refused", "connection": "inactive",
    }


async def test_cache_failure_is_warning():
    report = await make_aggregator(
        cache=FakeProbe(ConnectionError("redis down")),
    ).detailed_health()
    assert report["status"] == "warning"
    assert report["services"]["redis"]["error"] == "redis down"


async def test_missing_cache_is_unknown():
    report = await make_aggregator(cache=None).detailed_health()
    assert report["status"] == "ok"
    assert report["services"]["redis"] == {
        "status": "unknown", "message": REDIS_NOT_CONFIGURED,
    }


async def test_memory_pressure_with_missing_cache_is_warning():
    report = await make_aggregator(cache=None, memory_percent=95).detailed_health()
    assert report["status"] == "warning"
    assert report["system"]["memory"]["usage"] == "95%"


async def test_probe_timeout_becomes_error():
    report = await make_aggregator(database=FakeProbe(delay=1.0)).detailed_health()
    assert report["status"] == "critical"
    assert "timed out" in report["services"]["database"]["error"]


async def test_exception_without_message_reports_type_name():
    report = await make_aggregator(database=FakeProbe(RuntimeError())).detailed_health()
    assert report["services"]["database"]["error"] == "RuntimeError"


async def test_metric_failure_raises_before_probing():
    database, cache = FakeProbe(), FakeProbe()

    def broken():
        raise OSError("proc unavailable")

    aggregator = make_aggregator(database=database, cache=cache, collect_system=broken)
    with pytest.raises(HealthReportUnavailableError) as exc_info:
        await aggregator.detailed_health()

    assert exc_info.value.reason == "proc unavailable"
    assert database.calls == 0
    assert cache.calls == 0


async def test_no_state_between_calls():
    database = FakeProbe(ConnectionError("down"))
    aggregator = make_aggregator(database=database)
    assert (await aggregator.detailed_health())["status"] == "critical"
    database.error = None
    assert (await aggregator.detailed_health())["status"] == "ok"


def test_basic_health():
    body = make_aggregator().basic_health()
    assert body["status"] == "ok"
    assert body["uptime"] == 12.5
    assert body["environment"] == "test"
    assert "timestamp" in body
