"""Synthetic landing-page metrics derived from host load.

None of these numbers are measured from traffic. They are formulas over the
host load factor, the hour of day and a little jitter, so the landing page shows
plausible, load-sensitive figures.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Protocol

from landing_api.models.schemas import LoadStatus, MetricsSnapshot, StatusColor
from landing_api.services.host_metrics import HostMetrics

BASE_USERS = 42
PEAK_HOURS = range(9, 19)
PEAK_MULTIPLIER = 1.5
OFF_PEAK_MULTIPLIER = 0.7

TOKEN_BASE = 1_200_000
TOKEN_JITTER = 50_000

BASE_LATENCY_MS = 45
LOAD_LATENCY_MS = 100
LATENCY_JITTER_MS = 20

DEGRADED_THRESHOLD = 0.95
HIGH_LOAD_THRESHOLD = 0.8


class RandomSource(Protocol):
    def random(self) -> float:
        """Return a float in [0, 1)."""
        ...


def iso_utc(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a `Z` suffix. Naive input is local time."""

    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def load_factor(load_avg_1m: float, cpu_cores: int) -> float:
    """1-minute load per logical core, clamped to at most 1.0."""

    if cpu_cores <= 0:
        return 0.0
    return min(load_avg_1m / cpu_cores, 1.0)


def classify_load(factor: float) -> tuple[LoadStatus, StatusColor]:
    # DEGRADED must be tested before HIGH_LOAD; its bound is the stricter one.
    if factor > DEGRADED_THRESHOLD:
        return LoadStatus.DEGRADED, StatusColor.ORANGE
    if factor > HIGH_LOAD_THRESHOLD:
        return LoadStatus.HIGH_LOAD, StatusColor.YELLOW
    return LoadStatus.OPERATIONAL, StatusColor.GREEN


def time_multiplier(hour: int) -> float:
    return PEAK_MULTIPLIER if hour in PEAK_HOURS else OFF_PEAK_MULTIPLIER


def active_users(factor: float, hour: int) -> int:
    return math.floor(BASE_USERS * time_multiplier(hour) * (0.8 + factor * 0.4))


def synthesize_metrics(
    host: HostMetrics,
    *,
    now: datetime,
    version: str,
    rng: RandomSource,
) -> MetricsSnapshot:
    """Build the landing-page snapshot.

    `now` should be local wall-clock time; its hour selects the peak/off-peak
    multiplier. The emitted timestamp is always UTC.
    """

    factor = load_factor(host.load_avg_1m, host.cpu_cores)
    status, color = classify_load(factor)

    tokens = TOKEN_BASE + math.floor(rng.random() * TOKEN_JITTER)
    latency = math.floor(BASE_LATENCY_MS + factor * LOAD_LATENCY_MS + rng.random() * LATENCY_JITTER_MS)

    return MetricsSnapshot(
        active_users=active_users(factor, now.hour),
        tokens_24h=tokens,
        latency=latency,
        status=status,
        status_color=color,
        version=version,
        uptime=host.uptime_seconds,
        cpu_load=round(host.load_avg_1m, 2),
        memory_used_percent=host.memory_used_percent,
        timestamp=iso_utc(now),
    )
