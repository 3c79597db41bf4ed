from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml
from dotenv import load_dotenv

from src.core.capabilities import SystemCapabilities


class ErrorKind(str, Enum):
    MISSING_CONTAINER = "missing_container"
    CANVAS_UNSUPPORTED = "canvas_unsupported"
    MISSING_COMPONENTS = "missing_components"
    ANGLE_PARSE = "angle_parse"
    SPEED_PARSE = "speed_parse"
    INVALID_VALUE = "invalid_value"
    SETTINGS_FILE = "settings_file"


class ConfigError(Exception):
    """Raised when configuration parsing or validation fails."""

    def __init__(self, message: str, *, kind: ErrorKind = ErrorKind.INVALID_VALUE, option: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.option = option


@dataclass
class CapabilityConfig:
    canvas: bool = True
    webgl: bool = True
    fullscreen_event: str | None = "fullscreenchange"
    components: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CapabilityConfig":
        canvas = _coerce_bool(data.get("canvas"), "capabilities.canvas", default=True)
        webgl = _coerce_bool(data.get("webgl"), "capabilities.webgl", default=True)
        if "fullscreen_event" in data:
            fullscreen_event = _optional_string(data.get("fullscreen_event"), allow_empty=False)
        else:
            fullscreen_event = "fullscreenchange"
        components = _coerce_string_list(data.get("components"), "capabilities.components")
        return cls(canvas=canvas, webgl=webgl, fullscreen_event=fullscreen_event, components=components)

    def validate(self) -> None:
        if any(not name for name in self.components):
            raise ConfigError("capabilities.components cannot contain empty names", kind=ErrorKind.SETTINGS_FILE)

    def to_capabilities(self) -> SystemCapabilities:
        return SystemCapabilities(
            is_canvas_supported=self.canvas,
            is_webgl_supported=self.webgl,
            fullscreen_event=self.fullscreen_event,
            components=frozenset(self.components),
        )


@dataclass
class LoggingConfig:
    level: str = "info"
    stdout_format: str = "json"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoggingConfig":
        level = (_optional_string(data.get("level"), allow_empty=False) or "info").lower()
        stdout_format = (_optional_string(data.get("stdout_format"), allow_empty=False) or "json").lower()
        return cls(level=level, stdout_format=stdout_format)

    def validate(self) -> None:
        allowed = {"debug", "info", "warning", "error", "critical"}
        if self.level.lower() not in allowed:
            raise ConfigError(f"logging.level must be one of {sorted(allowed)}", kind=ErrorKind.SETTINGS_FILE)
        formats = {"json", "console"}
        if self.stdout_format not in formats:
            raise ConfigError(f"logging.stdout_format must be one of {sorted(formats)}", kind=ErrorKind.SETTINGS_FILE)


@dataclass
class AppSettings:
    options: dict[str, Any] = field(default_factory=dict)
    capabilities: CapabilityConfig = field(default_factory=CapabilityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppSettings":
        options = dict(_get_section(data, "options"))
        capabilities = CapabilityConfig.from_dict(_get_section(data, "capabilities"))
        logging = LoggingConfig.from_dict(_get_section(data, "logging"))
        return cls(options=options, capabilities=capabilities, logging=logging)

    def validate(self) -> None:
        self.capabilities.validate()
        self.logging.validate()


def load_settings(path: Path | str | None = None, *, env: Mapping[str, str] | None = None) -> AppSettings:
    """Load settings from YAML, apply environment overrides, and validate."""

    if env is None:
        load_dotenv()
        env = os.environ
    config_path = _resolve_config_path(path, env)

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse settings file: {exc}", kind=ErrorKind.SETTINGS_FILE) from exc

    if not isinstance(raw, MutableMapping):
        raise ConfigError("Settings root must be a mapping", kind=ErrorKind.SETTINGS_FILE)

    settings = AppSettings.from_dict(raw)
    _apply_env_overrides(settings, env)
    settings.validate()
    return settings


def _resolve_config_path(path: Path | str | None, env: Mapping[str, str]) -> Path:
    if path is not None:
        candidate = Path(path)
    else:
        env_path = env.get("SPHEREVIEW_CONFIG")
        candidate = Path(env_path) if env_path else Path("config") / "viewer.yaml"

    if not candidate.exists():
        raise FileNotFoundError(candidate)
    if not candidate.is_file():
        raise ConfigError(f"Settings path {candidate} is not a file", kind=ErrorKind.SETTINGS_FILE)
    return candidate


def _apply_env_overrides(settings: AppSettings, env: Mapping[str, str]) -> None:
    if "LOG_LEVEL" in env:
        value = env["LOG_LEVEL"].strip()
        if not value:
            raise ConfigError("LOG_LEVEL cannot be empty", kind=ErrorKind.SETTINGS_FILE)
        settings.logging.level = value.lower()
    if "LOG_STDOUT_FORMAT" in env:
        value = env["LOG_STDOUT_FORMAT"].strip()
        if not value:
            raise ConfigError("LOG_STDOUT_FORMAT cannot be empty", kind=ErrorKind.SETTINGS_FILE)
        settings.logging.stdout_format = value.lower()

    if "CAPABILITY_CANVAS" in env:
        settings.capabilities.canvas = _coerce_bool(env.get("CAPABILITY_CANVAS"), "CAPABILITY_CANVAS")
    if "CAPABILITY_WEBGL" in env:
        settings.capabilities.webgl = _coerce_bool(env.get("CAPABILITY_WEBGL"), "CAPABILITY_WEBGL")
    if "CAPABILITY_FULLSCREEN_EVENT" in env:
        # empty value means the runtime has no fullscreen support
        settings.capabilities.fullscreen_event = _optional_string(env.get("CAPABILITY_FULLSCREEN_EVENT"), allow_empty=False)
    if "CAPABILITY_COMPONENTS" in env:
        settings.capabilities.components = [
            name.strip() for name in env["CAPABILITY_COMPONENTS"].split(",") if name.strip()
        ]


def _get_section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = data.get(key, {})
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"{key} section must be a mapping", kind=ErrorKind.SETTINGS_FILE)
    return section


def _optional_string(value: Any, *, allow_empty: bool = True) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        trimmed = value.strip()
        return trimmed if trimmed or allow_empty else None
    raise ConfigError(f"Expected string or null, received {type(value).__name__}", kind=ErrorKind.SETTINGS_FILE)


def _coerce_string_list(value: Any, field_name: str) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        if not all(isinstance(item, str) for item in value):
            raise ConfigError(f"{field_name} must be a list of strings", kind=ErrorKind.SETTINGS_FILE)
        return [item.strip() for item in value]
    raise ConfigError(f"{field_name} must be a list of strings", kind=ErrorKind.SETTINGS_FILE)


def coerce_number(value: Any, field_name: str) -> int | float:
    """Accept ints, floats and numeric strings; reject everything else."""
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a number", option=field_name)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as exc:
            raise ConfigError(f"{field_name} must be a number", option=field_name) from exc
    else:
        raise ConfigError(f"{field_name} must be a number", option=field_name)

    if number != number or number in (float("inf"), float("-inf")):
        raise ConfigError(f"{field_name} must be a finite number", option=field_name)
    return number


def _coerce_bool(value: Any, field_name: str, *, default: bool | None = None) -> bool:
    if value is None or value == "":
        if default is None:
            raise ConfigError(f"{field_name} is required", kind=ErrorKind.SETTINGS_FILE)
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ConfigError(f"{field_name} must be a boolean", kind=ErrorKind.SETTINGS_FILE)


__all__ = [
    "AppSettings",
    "CapabilityConfig",
    "ConfigError",
    "ErrorKind",
    "LoggingConfig",
    "coerce_number",
    "load_settings",
]
