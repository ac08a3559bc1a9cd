from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class RelayResult(BaseModel):
    status: Literal["ok", "error"] = "ok"
    error: str | None = None
    delivered: int | None = None
    failed: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"
