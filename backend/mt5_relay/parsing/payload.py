"""Helpers for the opaque records pushed by the MT5 terminal.

Records are never validated against a schema. The only requirement is that
the body is UTF-8 encoded JSON; ``symbol`` and ``bars`` are read when present
and only for logging and the ``barsCount`` reply field.
"""

from __future__ import annotations

import json
from typing import Any

UNKNOWN_SYMBOL = "Unknown"


def parse_record(body: bytes) -> Any:
    """Decode a complete request body.

    Raises:
        ValueError: The body is not UTF-8 or not valid JSON
            (``UnicodeDecodeError`` and ``json.JSONDecodeError`` are both
            ``ValueError`` subclasses).
    """
    return json.loads(body.decode("utf-8"))


def count_bars(record: Any) -> int:
    if not isinstance(record, dict):
        return 0
    bars = record.get("bars")
    if not isinstance(bars, list):
        return 0
    return len(bars)


def record_symbol(record: Any) -> str:
    if not isinstance(record, dict):
        return UNKNOWN_SYMBOL
    symbol = record.get("symbol")
    if not symbol:
        return UNKNOWN_SYMBOL
    return str(symbol)


def serialize_record(record: Any) -> str:
    return json.dumps(record)
