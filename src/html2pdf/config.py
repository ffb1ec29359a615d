from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from .errors import ConfigError
from .settings import get_settings


@dataclass(slots=True)
class RuntimeConfig:
    log_file: Path | None = None


@dataclass(slots=True)
class RenderConfig:
    media_type: str = "print"
    presentational_hints: bool = False


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    fonts: tuple[str, ...] = ()


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration {path}: {exc}", code="INVALID_CONFIG") from exc


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    log_file = data.get("log_file")
    return RuntimeConfig(log_file=Path(str(log_file)) if log_file else None)


def _build_render(data: Mapping[str, object] | None) -> RenderConfig:
    if not data:
        return RenderConfig()
    return RenderConfig(
        media_type=str(data.get("media_type", "print")),
        presentational_hints=bool(data.get("presentational_hints", False)),
    )


def _tuple_of_strings(value: object | None) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value)
    raise ConfigError(f"Unsupported fonts configuration: {value!r}", code="INVALID_CONFIG")


def load_config(path: Path | None = None) -> AppConfig:
    settings = get_settings()
    path = path or settings.config_path
    raw = _read_toml(path)
    runtime_data = raw.get("runtime")
    render_data = raw.get("render")
    fonts_data = raw.get("fonts")
    runtime = _build_runtime(runtime_data if isinstance(runtime_data, Mapping) else None)
    if settings.log_file is not None:
        runtime.log_file = settings.log_file
    render = _build_render(render_data if isinstance(render_data, Mapping) else None)
    fonts = _tuple_of_strings(fonts_data.get("specs") if isinstance(fonts_data, Mapping) else None)
    return AppConfig(runtime=runtime, render=render, fonts=fonts)


__all__ = ["AppConfig", "RenderConfig", "RuntimeConfig", "load_config"]
