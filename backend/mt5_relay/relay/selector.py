from __future__ import annotations

from typing import Union

from mt5_relay.config.settings import Settings
from mt5_relay.relay.broadcast import BroadcastHub
from mt5_relay.relay.forward import BackendForwarder

Relay = Union[BackendForwarder, BroadcastHub]


def build_relay(app_settings: Settings) -> Relay:
    if app_settings.relay_mode == "broadcast":
        return BroadcastHub()
    return BackendForwarder(app_settings.backend_server_url, app_settings.forward_path)
