from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngestResponse(CamelModel):
    status: Literal["ok", "warning"]
    message: str
    bars_count: int
    error: str | None = None
    delivered_to: int | None = None
    failed_deliveries: int | None = None


class ErrorResponse(CamelModel):
    status: Literal["error"] = "error"
    message: str


class HealthResponse(CamelModel):
    status: Literal["ok"] = "ok"
    service: str
    mode: str
    timestamp: str
    backend: str | None = None
    connected_backends: int | None = None
    has_latest_data: bool | None = None


class WelcomeFrame(CamelModel):
    type: Literal["welcome"] = "welcome"
    message: str = "Connected to MT5 relay"
    has_latest_data: bool = False
