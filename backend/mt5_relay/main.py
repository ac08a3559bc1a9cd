from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from mt5_relay.api.errors import http_exception_handler
from mt5_relay.api.middleware import PermissiveCORSMiddleware
from mt5_relay.api.routes import router
from mt5_relay.api.websocket import ws_router
from mt5_relay.config.log import configure_logging
from mt5_relay.config.settings import Settings, settings
from mt5_relay.relay.selector import build_relay


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app_settings: Settings = app.state.settings
    configure_logging(app_settings.log_level, app_settings.log_json)
    logger.info(
        f"{app_settings.service_name} running on port {app_settings.port} "
        f"({app_settings.relay_mode} mode)"
    )
    if app_settings.relay_mode == "forward":
        logger.info(f"Backend server: {app_settings.backend_server_url}")
    else:
        logger.info("Backend socket: WS /ws")
    logger.info("Endpoint: POST /api/mt5-data")
    logger.info("Health check: GET /health")
    yield
    logger.info(f"{app_settings.service_name} shutting down")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(
        title="MT5 Relay",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = app_settings
    app.state.relay = build_relay(app_settings)

    app.add_middleware(PermissiveCORSMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.include_router(router)
    if app_settings.relay_mode == "broadcast":
        app.include_router(ws_router)
    return app


app = create_app()


def run() -> None:
    configure_logging(settings.log_level, settings.log_json)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
