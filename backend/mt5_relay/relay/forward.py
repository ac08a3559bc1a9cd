from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from mt5_relay.parsing.payload import count_bars, record_symbol, serialize_record
from mt5_relay.schemas.relay import RelayResult


class BackendForwarder:
    """Relays each record to the backend with one outbound POST."""

    mode = "forward"

    def __init__(
        self,
        base_url: str,
        path: str = "/api/data",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.url = f"{self.base_url}{path}"
        self._transport = transport

    def health_fields(self) -> dict[str, Any]:
        return {"backend": self.base_url}

    async def relay(self, record: Any) -> RelayResult:
        content = serialize_record(record)
        try:
            # No timeout: a hung backend stalls only this request.
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    content=content,
                    headers={"Content-Type": "application/json"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            error = str(exc) or exc.__class__.__name__
            logger.error(f"Error forwarding to backend: {error}")
            return RelayResult(status="error", error=error)

        if response.status_code != 200:
            logger.error(f"Backend error: {response.status_code} - {response.text}")
            return RelayResult(
                status="error", error=f"Backend returned {response.status_code}"
            )

        try:
            response.json()
        except ValueError:
            logger.warning(f"Backend accepted data but replied with non-JSON body from {self.url}")

        logger.info(
            f"Forwarded to backend: {record_symbol(record)} | {count_bars(record)} bars"
        )
        return RelayResult(status="ok")
