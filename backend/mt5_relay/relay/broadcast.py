"""Pub/sub relay: push every ingested record to connected backend sockets."""

from __future__ import annotations

from typing import Any

from fastapi import WebSocket
from loguru import logger
from starlette.websockets import WebSocketState

from mt5_relay.cache import LatestDataCache
from mt5_relay.parsing.payload import serialize_record
from mt5_relay.schemas.ingest import WelcomeFrame
from mt5_relay.schemas.relay import RelayResult


def _is_open(websocket: WebSocket) -> bool:
    return (
        websocket.application_state == WebSocketState.CONNECTED
        and websocket.client_state == WebSocketState.CONNECTED
    )


class BroadcastHub:
    mode = "broadcast"

    def __init__(self, cache: LatestDataCache | None = None) -> None:
        self.clients: set[WebSocket] = set()
        self.cache = cache if cache is not None else LatestDataCache()

    @property
    def client_count(self) -> int:
        return len(self.clients)

    def health_fields(self) -> dict[str, Any]:
        return {
            "connected_backends": self.client_count,
            "has_latest_data": self.cache.has_record,
        }

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a backend socket, replay the latest record, then greet it.

        The socket joins the broadcast set only after the greeting. Records
        ingested while the greeting was being sent are replayed first, and
        the final version check and the ``add`` happen without an ``await``
        in between, so no ingest is lost or delivered out of order.
        """
        await websocket.accept()
        seen_version = self.cache.version
        if self.cache.has_record:
            await websocket.send_text(serialize_record(self.cache.get()))
        welcome = WelcomeFrame(has_latest_data=self.cache.has_record)
        await websocket.send_text(welcome.model_dump_json(by_alias=True))

        while self.cache.version != seen_version:
            seen_version = self.cache.version
            await websocket.send_text(serialize_record(self.cache.get()))

        self.clients.add(websocket)
        logger.info(f"Backend connected ({self.client_count} connected)")

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket not in self.clients:
            return
        self.clients.discard(websocket)
        logger.info(f"Backend disconnected ({self.client_count} connected)")

    async def relay(self, record: Any) -> RelayResult:
        self.cache.set(record)
        message = serialize_record(record)

        delivered = 0
        failed = 0
        for client in list(self.clients):
            if not _is_open(client):
                continue
            try:
                await client.send_text(message)
            except Exception as exc:
                failed += 1
                logger.warning(f"Failed to send data to backend client: {exc!r}")
                self.disconnect(client)
            else:
                delivered += 1

        logger.info(f"Broadcast to {delivered} backend(s)")
        if failed:
            return RelayResult(
                status="error",
                error=f"{failed} backend(s) failed to receive data",
                delivered=delivered,
                failed=failed,
            )
        return RelayResult(status="ok", delivered=delivered, failed=0)
