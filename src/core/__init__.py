"""Core package exports."""

from .config_builder import BuildResult, build_config, get_config
from .config_loader import AppSettings, ConfigError, ErrorKind, load_settings
from .defaults import DEFAULTS, PresetChoice

__all__ = [
    "AppSettings",
    "BuildResult",
    "ConfigError",
    "DEFAULTS",
    "ErrorKind",
    "PresetChoice",
    "build_config",
    "get_config",
    "load_settings",
]
