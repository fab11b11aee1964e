from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from landing_api.api.dependencies import get_clock, get_host_metrics, get_random_source
from landing_api.models.schemas import DatabaseStats, MetricsSnapshot, StatsResponse
from landing_api.services.counter_store import DurableCounterStore, get_counter_store
from landing_api.services.host_metrics import HostMetrics
from landing_api.services.synthesizer import RandomSource, synthesize_metrics


router = APIRouter(prefix="/api", tags=["metrics"])


@router.get("/metrics", response_model=MetricsSnapshot)
async def metrics(
    host: HostMetrics = Depends(get_host_metrics),
    now: datetime = Depends(get_clock),
    rng: RandomSource = Depends(get_random_source),
    store: DurableCounterStore = Depends(get_counter_store),
) -> MetricsSnapshot:
    snapshot = synthesize_metrics(host, now=now, version=store.version, rng=rng)
    # Persisted before the response goes out.
    store.record_request()
    return snapshot


@router.get("/stats", response_model=StatsResponse)
async def stats(
    host: HostMetrics = Depends(get_host_metrics),
    store: DurableCounterStore = Depends(get_counter_store),
) -> StatsResponse:
    state = store.snapshot()
    return StatsResponse(
        system=host.as_stats(),
        database=DatabaseStats(requests_served=state.requests_count, last_updated=state.last_updated_iso),
    )
