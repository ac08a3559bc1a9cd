from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from loguru import logger

from mt5_relay.relay.broadcast import BroadcastHub

ws_router = APIRouter()


@ws_router.websocket("/ws")
async def backend_socket(websocket: WebSocket) -> None:
    hub: BroadcastHub = websocket.app.state.relay
    try:
        await hub.connect(websocket)
        # Backends only listen; anything they send is read and dropped.
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except WebSocketDisconnect as exc:
        logger.info(f"Backend socket closed during handshake (code {exc.code})")
    except (RuntimeError, OSError) as exc:
        logger.error(f"Backend socket error: {exc!r}")
    finally:
        hub.disconnect(websocket)
