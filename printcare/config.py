"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import logging

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class BookingsConfig(BaseSettings):
    service_type: str = "Antar ke Toko"
    unassigned_technician_label: str = "Belum ditugaskan"
    # Hide bookings whose brand/model/category/technician row was soft-deleted
    hide_inactive_references: bool = True


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/printcare.db"
    log_level: str = "INFO"
    bookings: BookingsConfig = Field(default_factory=BookingsConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PRINTCARE_"}


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    bookings = BookingsConfig(**y.get("bookings", {}))
    overrides = {"bookings": bookings}
    db_url = y.get("database", {}).get("url")
    if db_url:
        overrides["database_url"] = db_url
    if "log_level" in y:
        overrides["log_level"] = y["log_level"]
    return Settings(**overrides)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
