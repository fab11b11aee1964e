import random
from datetime import datetime, timezone

import pytest

from landing_api.models.schemas import LoadStatus, StatusColor
from landing_api.services.host_metrics import HostMetrics
from landing_api.services.synthesizer import (
    active_users,
    classify_load,
    load_factor,
    synthesize_metrics,
)

from conftest import FixedRandom, make_host


NOON = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
NIGHT = datetime(2026, 3, 2, 23, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("factor", "status", "color"),
    [
        (0.0, LoadStatus.OPERATIONAL, StatusColor.GREEN),
        (0.8, LoadStatus.OPERATIONAL, StatusColor.GREEN),
        (0.81, LoadStatus.HIGH_LOAD, StatusColor.YELLOW),
        (0.95, LoadStatus.HIGH_LOAD, StatusColor.YELLOW),
        (0.951, LoadStatus.DEGRADED, StatusColor.ORANGE),
        (1.0, LoadStatus.DEGRADED, StatusColor.ORANGE),
    ],
)
def test_classify_load_thresholds(factor: float, status: LoadStatus, color: StatusColor) -> None:
    assert classify_load(factor) == (status, color)


def test_load_factor_is_clamped_and_tolerates_zero_cores() -> None:
    assert load_factor(1.0, 4) == 0.25
    assert load_factor(16.0, 4) == 1.0
    assert load_factor(3.0, 0) == 0.0


@pytest.mark.parametrize(
    ("factor", "hour", "expected"),
    [
        (0.5, 10, 63),
        (0.5, 20, 29),
        (0.0, 9, 50),
        (0.0, 18, 50),
        (0.0, 8, 23),
        (0.0, 19, 23),
        (1.0, 12, 75),
        (1.0, 3, 35),
    ],
)
def test_active_users_depends_only_on_load_and_hour(factor: float, hour: int, expected: int) -> None:
    assert active_users(factor, hour) == expected
    assert active_users(factor, hour) == active_users(factor, hour)


def test_synthesize_metrics_with_zero_jitter() -> None:
    snap = synthesize_metrics(make_host(load_avg=2.0, cores=4), now=NOON, version="1.2.3", rng=FixedRandom(0.0))

    assert snap.active_users == 63
    assert snap.tokens_24h == 1_200_000
    assert snap.latency == 95
    assert snap.status is LoadStatus.OPERATIONAL
    assert snap.status_color is StatusColor.GREEN
    assert snap.version == "1.2.3"
    assert snap.uptime == 3600
    assert snap.cpu_load == 2.0
    assert snap.memory_used_percent == 75.0
    assert snap.timestamp == "2026-03-02T12:00:00.000Z"


def test_synthesize_metrics_with_max_jitter_stays_below_upper_bounds() -> None:
    snap = synthesize_metrics(make_host(load_avg=8.0, cores=4), now=NIGHT, version="v", rng=FixedRandom(0.999999))

    assert snap.tokens_24h == 1_249_999
    assert snap.latency == 164
    assert snap.active_users == 35
    assert snap.status is LoadStatus.DEGRADED
    assert snap.status_color is StatusColor.ORANGE


def test_synthesized_values_stay_within_bounds() -> None:
    rng = random.Random(1234)
    for load in (0.0, 1.0, 3.3, 3.9, 12.0):
        for _ in range(200):
            snap = synthesize_metrics(make_host(load_avg=load, cores=4), now=NOON, version="v", rng=rng)
            assert 1_200_000 <= snap.tokens_24h < 1_250_000
            assert 45 <= snap.latency < 165


def test_rounding_of_cpu_load_and_memory() -> None:
    host = HostMetrics(load_avg_1m=1.23456, cpu_cores=8, total_memory=3000, free_memory=1000, uptime_seconds=5)
    snap = synthesize_metrics(host, now=NOON, version="v", rng=FixedRandom(0.5))

    assert snap.cpu_load == 1.23
    assert snap.memory_used_percent == 66.7


def test_zeroed_host_metrics_still_produce_a_snapshot() -> None:
    host = HostMetrics(load_avg_1m=0.0, cpu_cores=0, total_memory=0, free_memory=0, uptime_seconds=0)
    snap = synthesize_metrics(host, now=NOON, version="v", rng=FixedRandom(0.0))

    assert snap.status is LoadStatus.OPERATIONAL
    assert snap.memory_used_percent == 0.0
    assert snap.latency == 45


def test_snapshot_serializes_with_camel_case_keys() -> None:
    snap = synthesize_metrics(make_host(), now=NOON, version="v", rng=FixedRandom(0.0))
    payload = snap.model_dump(by_alias=True, mode="json")

    assert set(payload) == {
        "activeUsers",
        "tokens24h",
        "latency",
        "status",
        "statusColor",
        "version",
        "uptime",
        "cpuLoad",
        "memoryUsedPercent",
        "timestamp",
    }
    assert payload["status"] == "OPERATIONAL"
    assert payload["statusColor"] == "green"
