"""Host metrics via psutil.

Every query degrades to a zero value on failure so the metrics endpoints stay
available on hosts where part of the data is not exposed.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

import psutil

from landing_api.models.schemas import CpuStats, MemoryStats, SystemStats

logger = logging.getLogger(__name__)

T = TypeVar("T")

_GIB = 1024**3


@dataclass(frozen=True)
class HostMetrics:
    load_avg_1m: float
    cpu_cores: int
    total_memory: int
    free_memory: int
    uptime_seconds: int

    @property
    def used_memory(self) -> int:
        return max(self.total_memory - self.free_memory, 0)

    @property
    def memory_used_percent(self) -> float:
        if self.total_memory <= 0:
            return 0.0
        return round(self.used_memory / self.total_memory * 100, 1)

    def as_stats(self) -> SystemStats:
        return SystemStats(
            cpu=CpuStats(load=round(self.load_avg_1m, 2), cores=self.cpu_cores),
            memory=MemoryStats(
                total=round(self.total_memory / _GIB, 2),
                used=round(self.used_memory / _GIB, 2),
                percent=self.memory_used_percent,
            ),
            uptime=self.uptime_seconds,
        )


def _query(name: str, fn: Callable[[], T], default: T) -> T:
    try:
        return fn()
    except (OSError, psutil.Error, RuntimeError, AttributeError):
        logger.warning("host metric %s unavailable, using %r", name, default, exc_info=True)
        return default


def read_host_metrics() -> HostMetrics:
    load_avg = _query("load_avg", lambda: float(psutil.getloadavg()[0]), 0.0)
    cores = _query("cpu_count", lambda: psutil.cpu_count(logical=True) or 0, 0)
    memory = _query("virtual_memory", psutil.virtual_memory, None)
    uptime = _query("uptime", lambda: int(time.time() - psutil.boot_time()), 0)

    return HostMetrics(
        load_avg_1m=load_avg,
        cpu_cores=int(cores),
        total_memory=int(memory.total) if memory is not None else 0,
        free_memory=int(memory.available) if memory is not None else 0,
        uptime_seconds=max(uptime, 0),
    )
