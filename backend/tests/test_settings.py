import pytest
from pydantic import ValidationError

from mt5_relay.config.settings import Settings
from mt5_relay.relay.broadcast import BroadcastHub
from mt5_relay.relay.forward import BackendForwarder
from mt5_relay.relay.selector import build_relay


def test_settings_defaults(monkeypatch) -> None:
    for name in ("HOST", "PORT", "RELAY_MODE", "BACKEND_SERVER_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.host == "0.0.0.0"
    assert settings.port == 3001
    assert settings.relay_mode == "forward"
    assert settings.backend_server_url == "http://localhost:8080"
    assert settings.forward_path == "/api/data"
    assert settings.log_level == "INFO"


def test_settings_read_deployment_env_names(monkeypatch) -> None:
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("BACKEND_SERVER_URL", "https://backend.example.com/")
    monkeypatch.setenv("RELAY_MODE", "broadcast")
    monkeypatch.setenv("MT5_RELAY_FORWARD_PATH", "ingest")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.host == "127.0.0.1"
    assert settings.port == 9000
    assert settings.backend_server_url == "https://backend.example.com"
    assert settings.relay_mode == "broadcast"
    assert settings.forward_path == "/ingest"
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_mode() -> None:
    with pytest.raises(ValidationError):
        Settings(relay_mode="multicast", _env_file=None)


def test_build_relay_forward_mode_targets_backend_data_path() -> None:
    settings = Settings(
        relay_mode="forward",
        backend_server_url="http://backend.internal:8080/",
        _env_file=None,
    )

    relay = build_relay(settings)

    assert isinstance(relay, BackendForwarder)
    assert relay.url == "http://backend.internal:8080/api/data"
    assert relay.health_fields() == {"backend": "http://backend.internal:8080"}


def test_build_relay_broadcast_mode_starts_empty() -> None:
    relay = build_relay(Settings(relay_mode="broadcast", _env_file=None))

    assert isinstance(relay, BroadcastHub)
    assert relay.client_count == 0
    assert relay.cache.has_record is False
