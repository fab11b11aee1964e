from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LoadStatus(str, Enum):
    OPERATIONAL = "OPERATIONAL"
    HIGH_LOAD = "HIGH_LOAD"
    DEGRADED = "DEGRADED"


class StatusColor(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    timestamp: str


class MetricsSnapshot(_CamelModel):
    active_users: int = Field(alias="activeUsers")
    tokens_24h: int = Field(alias="tokens24h")
    latency: int
    status: LoadStatus
    status_color: StatusColor = Field(alias="statusColor")
    version: str
    uptime: int
    cpu_load: float = Field(alias="cpuLoad")
    memory_used_percent: float = Field(alias="memoryUsedPercent")
    timestamp: str


class CpuStats(BaseModel):
    load: float
    cores: int


class MemoryStats(BaseModel):
    total: float
    used: float
    percent: float


class SystemStats(BaseModel):
    cpu: CpuStats
    memory: MemoryStats
    uptime: int


class DatabaseStats(_CamelModel):
    requests_served: int = Field(alias="requestsServed")
    last_updated: str = Field(alias="lastUpdated")


class StatsResponse(BaseModel):
    system: SystemStats
    database: DatabaseStats


# Any JSON scalar; stored as text.
ContactField = str | int | float | bool | None


class ContactRequest(BaseModel):
    name: ContactField = None
    email: ContactField = None
    telephone: ContactField = None
    city: ContactField = None
    interest: ContactField = None


class ContactResponse(BaseModel):
    id: int
    status: Literal["success"] = "success"
