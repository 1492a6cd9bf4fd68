"""Service settings read from ``MORPH_*`` environment variables."""

from __future__ import annotations

from typing import Tuple

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


TRANSPORTS = ("http", "rpc")


class Settings(BaseSettings):
    """Runtime configuration of ``morph-service``.

    ``MORPH_RPC_PORT`` falls back to ``PORT`` for container platforms that
    only hand out one port variable. ``MORPH_TRANSPORTS`` is a comma
    separated list.
    """

    model_config = SettingsConfigDict(
        env_prefix="MORPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    http_host: str = "0.0.0.0"
    http_port: int = Field(default=8080, ge=0, le=65535)
    rpc_port: int = Field(
        default=8081,
        ge=0,
        le=65535,
        validation_alias=AliasChoices("MORPH_RPC_PORT", "PORT"),
    )
    transports: str = ",".join(TRANSPORTS)
    lang: str = "ru"
    known_only: bool = False
    workers: int = Field(default=1, ge=1)
    rpc_max_workers: int = Field(default=10, ge=1)
    log_level: str = "INFO"

    @field_validator("transports")
    @classmethod
    def _check_transports(cls, value: str) -> str:
        names = [part.strip().lower() for part in value.split(",") if part.strip()]
        unknown = [name for name in names if name not in TRANSPORTS]
        if unknown:
            raise ValueError(f"unknown transport(s): {', '.join(unknown)}")
        if not names:
            raise ValueError("at least one transport must be enabled")
        return ",".join(dict.fromkeys(names))

    @property
    def enabled_transports(self) -> Tuple[str, ...]:
        return tuple(self.transports.split(","))


def get_settings() -> Settings:
    return Settings()
