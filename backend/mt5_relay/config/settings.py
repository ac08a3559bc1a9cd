from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RelayMode = Literal["forward", "broadcast"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MT5_RELAY_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "MT5_RELAY_HOST"),
    )
    port: int = Field(
        default=3001,
        validation_alias=AliasChoices("PORT", "MT5_RELAY_PORT"),
    )
    relay_mode: RelayMode = Field(
        default="forward",
        validation_alias=AliasChoices("RELAY_MODE", "MT5_RELAY_RELAY_MODE"),
    )
    backend_server_url: str = Field(
        default="http://localhost:8080",
        validation_alias=AliasChoices("BACKEND_SERVER_URL", "MT5_RELAY_BACKEND_SERVER_URL"),
    )
    forward_path: str = "/api/data"
    service_name: str = "MT5 Receiver"

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "MT5_RELAY_LOG_LEVEL"),
    )
    log_json: bool = False

    @field_validator("backend_server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("forward_path")
    @classmethod
    def _ensure_leading_slash(cls, value: str) -> str:
        value = value.strip()
        return value if value.startswith("/") else f"/{value}"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()


settings = Settings()
