from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from landing_api.config import get_settings
from landing_api.db.session import get_engine
from landing_api.main import app
from landing_api.services.counter_store import set_counter_store
from landing_api.services.host_metrics import HostMetrics

GIB = 1024**3


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def make_host(
    load_avg: float = 2.0,
    cores: int = 4,
    total_gib: int = 8,
    free_gib: int = 2,
    uptime: int = 3600,
) -> HostMetrics:
    return HostMetrics(
        load_avg_1m=load_avg,
        cpu_cores=cores,
        total_memory=total_gib * GIB,
        free_memory=free_gib * GIB,
        uptime_seconds=uptime,
    )


def _reset_engine() -> None:
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("STATE_FILE", str(tmp_path / "data" / "dashboard.db.json"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'data' / 'landing.db'}")
    monkeypatch.setenv("APP_VERSION", "9.9.9-TEST")
    get_settings.cache_clear()
    _reset_engine()
    set_counter_store(None)

    yield

    app.dependency_overrides.clear()
    set_counter_store(None)
    _reset_engine()
    get_settings.cache_clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
