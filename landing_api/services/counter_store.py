from __future__ import annotations

import logging
import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from landing_api.config import get_settings

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _to_utc(epoch_ms: int) -> datetime:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)


class CounterState(BaseModel):
    """Persisted request accounting record.

    `activeUsers` and `tokenCount` are legacy fields. They are read and written
    back unchanged so older state files keep their shape.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    active_users: list[Any] = Field(default_factory=list, alias="activeUsers")
    token_count: int = Field(default=0, alias="tokenCount")
    requests_count: int = Field(default=0, ge=0, alias="requestsCount")
    last_updated: int = Field(default_factory=_now_ms, alias="lastUpdated")
    version: str = ""

    @field_validator("last_updated")
    @classmethod
    def _representable_timestamp(cls, value: int) -> int:
        try:
            _to_utc(value)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"lastUpdated {value} is not a valid epoch-millisecond timestamp") from exc
        return value

    @property
    def last_updated_iso(self) -> str:
        return _to_utc(self.last_updated).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DurableCounterStore:
    """File-backed request counter shared by all metrics requests."""

    def __init__(self, path: Path, version: str) -> None:
        self.path = Path(path)
        self.version = version
        self._lock = Lock()
        self._state = CounterState(version=version)

    def load(self) -> CounterState:
        """Read persisted state, falling back to defaults when it is missing or unreadable."""

        with self._lock:
            self._state = self._read()
            return self._state.model_copy()

    def _read(self) -> CounterState:
        if not self.path.exists():
            logger.info("no counter state at %s, starting fresh", self.path)
            return CounterState(version=self.version)

        try:
            raw = self.path.read_text(encoding="utf-8")
            state = CounterState.model_validate_json(raw)
        except (OSError, ValueError, ValidationError):
            logger.warning("counter state at %s is unreadable, starting fresh", self.path, exc_info=True)
            return CounterState(version=self.version)

        if state.version != self.version:
            logger.info("counter state version %r replaced by %r", state.version, self.version)
            state.version = self.version
        return state

    def record_request(self) -> CounterState:
        """Count one metrics request and persist before returning.

        A failed write is logged; the incremented in-memory value is kept.
        """

        with self._lock:
            self._state.requests_count += 1
            self._state.last_updated = _now_ms()
            try:
                self._write(self._state)
            except OSError:
                logger.exception("failed to persist counter state to %s", self.path)
            return self._state.model_copy()

    def snapshot(self) -> CounterState:
        with self._lock:
            return self._state.model_copy()

    def _write(self, state: CounterState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = state.model_dump_json(by_alias=True, indent=2)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


_store: DurableCounterStore | None = None
_store_lock = Lock()


def set_counter_store(store: DurableCounterStore | None) -> None:
    global _store
    _store = store


def get_counter_store() -> DurableCounterStore:
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                settings = get_settings()
                store = DurableCounterStore(settings.state_path, version=settings.app_version)
                store.load()
                _store = store
    return _store
