"""Process resource sampling used by the performance log and sort benchmark."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import time
from typing import Any

import psutil

_BYTES_PER_MB = 1024 * 1024

_process = psutil.Process()


@dataclass(frozen=True)
class ResourceSample:
    rss: int
    heap_total: int
    heap_used: int
    load_average: float

    @property
    def heap_used_mb(self) -> float:
        return self.heap_used / _BYTES_PER_MB


def sample_resources() -> ResourceSample:
    """Capture current process memory figures and the 1-minute host load average.

    ``heap_total`` is the virtual memory size. ``heap_used`` is the data segment
    size on platforms that report it and the resident set size elsewhere; both are
    diagnostics rather than precise heap accounting.
    """

    info = _process.memory_info()
    return ResourceSample(
        rss=info.rss,
        heap_total=info.vms,
        heap_used=getattr(info, "data", info.rss),
        load_average=psutil.getloadavg()[0],
    )


def elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_performance_record(
    endpoint: str,
    started: float,
    sample: ResourceSample | None = None,
) -> dict[str, Any]:
    """Return one performance record for a request that began at ``started``."""

    elapsed = elapsed_ms(started)
    sample = sample or sample_resources()
    return {
        "timestamp": utc_timestamp(),
        "endpoint": endpoint,
        "rss": sample.rss,
        "heapTotal": sample.heap_total,
        "heapUsed": sample.heap_used,
        "elapsedTime": f"{elapsed:.2f}",
        "cpuUsage": f"{sample.load_average * 100:.2f}",
        "memoryUsage": f"{sample.heap_used_mb:.2f}",
    }
