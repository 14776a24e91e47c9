from __future__ import annotations

from importlib.resources import files
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..core.errors import ConfigError


class EventCoreSettings(BaseModel):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    isolate_listener_errors: bool = True
    enable_prometheus: bool = False
    prometheus_port: int = Field(default=9109, ge=1024, le=65535)
    plugin_dir: str | None = None


def load_config(path: str | None = None) -> dict[str, Any]:
    try:
        if path:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        else:
            default = files("eventcore.config").joinpath("default.yaml")
            data = yaml.safe_load(default.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config {path or 'default.yaml'}: {exc}") from exc

    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
    return data


def parse_settings(config: dict[str, Any]) -> EventCoreSettings:
    """Validate a raw config mapping; unknown keys are ignored."""
    try:
        return EventCoreSettings(**{k: v for k, v in config.items() if k in EventCoreSettings.model_fields})
    except ValidationError as exc:
        raise ConfigError(f"Config validation failed: {exc}") from exc


def load_settings(path: str | None = None) -> EventCoreSettings:
    return parse_settings(load_config(path))
