"""Health Policy: probe results, system snapshot, and overall-status derivation.

Invariants:
    - Overall status precedence (first match wins):
        database error          -> critical
        cache error (configured) -> warning
        memory usage > threshold -> warning
        otherwise                -> ok
    - A cache that is not configured reports `unknown` and never degrades the status
    - Memory usage is compared as the same rounded integer percent that is displayed
"""

from dataclasses import dataclass

from helpdesk.core.domain_types import HealthStatus, ProbeStatus

DEFAULT_MEMORY_WARNING_PERCENT = 90.0
_BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one dependency probe (database, cache)."""
    status: ProbeStatus
    response_time_ms: int | None = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def ok(cls, response_time_ms: int) -> "ProbeResult":
        return cls(ProbeStatus.OK, response_time_ms=response_time_ms)

    @classmethod
    def failed(cls, error: str) -> "ProbeResult":
        return cls(ProbeStatus.ERROR, error=error)

    @classmethod
    def not_configured(cls, message: str) -> "ProbeResult":
        return cls(ProbeStatus.UNKNOWN, message=message)

    def to_dict(self) -> dict:
        if self.status is ProbeStatus.OK:
            return {
                "status": self.status.value,
                "responseTime": f"{self.response_time_ms}ms",
                "connection": "active",
            }
        if self.status is ProbeStatus.ERROR:
            return {
                "status": self.status.value,
                "error": self.error,
                "connection": "inactive",
            }
        return {"status": self.status.value, "message": self.message}


@dataclass(frozen=True)
class MemoryStats:
    total_bytes: int
    free_bytes: int

    @property
    def used_percent(self) -> int:
        if self.total_bytes <= 0:
            return 0
        used = self.total_bytes - self.free_bytes
        return round(used / self.total_bytes * 100)

    def to_dict(self) -> dict:
        return {
            "total": format_bytes(self.total_bytes),
            "free": format_bytes(self.free_bytes),
            "usage": f"{self.used_percent}%",
        }


@dataclass(frozen=True)
class SystemSnapshot:
    """Read-only OS facts gathered once per detailed health request."""
    memory: MemoryStats
    cpu_cores: int
    cpu_model: str
    load_average: tuple[float, float, float]
    platform_type: str
    platform_release: str
    architecture: str

    def to_dict(self) -> dict:
        return {
            "memory": self.memory.to_dict(),
            "cpu": {
                "cores": self.cpu_cores,
                "model": self.cpu_model,
                "load": list(self.load_average),
            },
            "platform": {
                "type": self.platform_type,
                "release": self.platform_release,
                "architecture": self.architecture,
            },
        }


def derive_overall_status(
    database: ProbeResult,
    cache: ProbeResult,
    memory_used_percent: float,
    memory_warning_percent: float = DEFAULT_MEMORY_WARNING_PERCENT,
) -> HealthStatus:
    if database.status is ProbeStatus.ERROR:
        return HealthStatus.CRITICAL
    if cache.status is ProbeStatus.ERROR:
        return HealthStatus.WARNING
    if memory_used_percent > memory_warning_percent:
        return HealthStatus.WARNING
    return HealthStatus.OK


def format_bytes(num_bytes: int) -> str:
    """1536 -> '1.5 KB'. Two decimals max, trailing zeros dropped."""
    if num_bytes <= 0:
        return "0 Bytes"
    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(_BYTE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_BYTE_UNITS[unit]}"


def build_health_report(
    *,
    timestamp: str,
    uptime_seconds: float,
    environment: str,
    system: SystemSnapshot,
    database: ProbeResult,
    cache: ProbeResult,
    memory_warning_percent: float = DEFAULT_MEMORY_WARNING_PERCENT,
) -> dict:
    overall = derive_overall_status(
        database, cache, system.memory.used_percent, memory_warning_percent,
    )
    return {
        "status": overall.value,
        "timestamp": timestamp,
        "uptime": uptime_seconds,
        "environment": environment,
        "system": system.to_dict(),
        "services": {
            "database": database.to_dict(),
            "redis": cache.to_dict(),
        },
    }
