from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("html2pdf.toml")
ENV_PREFIX = "HTML2PDF_"


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime settings sourced from environment variables."""

    config_path: Path = DEFAULT_CONFIG_PATH
    log_file: Path | None = None


def _read_path(name: str) -> Path | None:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return Path(value.strip())


def _read_settings() -> Settings:
    config_path = _read_path("CONFIG_PATH") or DEFAULT_CONFIG_PATH
    return Settings(config_path=config_path, log_file=_read_path("LOG_FILE"))


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return _read_settings()


__all__ = ["DEFAULT_CONFIG_PATH", "ENV_PREFIX", "Settings", "get_settings"]
