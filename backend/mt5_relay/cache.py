from __future__ import annotations

from typing import Any


class LatestDataCache:
    """Single-slot store holding the most recently ingested record.

    The slot starts empty, is overwritten on every ingest and is never
    cleared. ``null`` is a valid JSON record, so emptiness is tracked
    separately from the stored value. ``version`` increases on every write.
    """

    def __init__(self) -> None:
        self._record: Any = None
        self._version = 0

    @property
    def has_record(self) -> bool:
        return self._version > 0

    @property
    def version(self) -> int:
        return self._version

    def get(self) -> Any:
        return self._record

    def set(self, record: Any) -> None:
        self._record = record
        self._version += 1
