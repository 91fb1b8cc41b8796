"""System Metrics: read-only OS queries for the detailed health report.

Invariants:
    - No caching: every call reflects the current machine state
    - Failures propagate; the health aggregator turns them into a fail-fast error
"""

import platform
import time

import psutil

from helpdesk.core.health_status import MemoryStats, SystemSnapshot


def collect_system_snapshot() -> SystemSnapshot:
    memory = psutil.virtual_memory()
    load_1, load_5, load_15 = psutil.getloadavg()
    return SystemSnapshot(
        memory=MemoryStats(total_bytes=memory.total, free_bytes=memory.available),
        cpu_cores=psutil.cpu_count(logical=True) or 0,
        cpu_model=platform.processor() or platform.machine(),
        load_average=(load_1, load_5, load_15),
        platform_type=platform.system(),
        platform_release=platform.release(),
        architecture=platform.machine(),
    )


def process_uptime_seconds() -> float:
    """Seconds since this process started."""
    return time.time() - psutil.Process().create_time()
