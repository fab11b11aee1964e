from __future__ import annotations

import random
from datetime import datetime

from landing_api.services.host_metrics import HostMetrics, read_host_metrics
from landing_api.services.synthesizer import RandomSource

_rng = random.Random()


def get_random_source() -> RandomSource:
    return _rng


def get_clock() -> datetime:
    """Local wall-clock time, timezone-aware."""

    return datetime.now().astimezone()


def get_host_metrics() -> HostMetrics:
    return read_host_metrics()
