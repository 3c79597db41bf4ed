"""Merge user options with the defaults and normalize them.

The rules in :func:`build_config` run in a fixed order: structural fixes
(range lengths, fov ordering, presets) happen on the raw values before
any clamping or unit conversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from src.core.capabilities import CapabilityProvider, SystemCapabilities
from src.core.config_loader import ConfigError, ErrorKind, coerce_number
from src.core.defaults import (
    FALLBACK_COMPONENTS,
    PresetChoice,
    PresetKind,
    default_keyboard,
    default_navbar,
    get_defaults,
)
from src.core.diagnostics import CollectingSink, Diagnostic, DiagnosticsSink, LoggingSink
from src.core.math_utils import bound, is_integer, is_number
from src.core.merge import deep_merge
from src.core.units import AngleMode, parse_angle, parse_speed

FOV_RANGE = (1, 179)
ZOOM_RANGE = (0, 100)


@dataclass(frozen=True)
class BuildResult:
    config: Dict[str, Any]
    diagnostics: List[Diagnostic]


def _warn(sink: DiagnosticsSink, code: str, option: str, message: str) -> None:
    sink.emit(Diagnostic(code=code, message=message, option=option))


def _angle(value: Any, option: str, mode: AngleMode = AngleMode.FULL_TURN) -> float:
    return parse_angle(value, mode, option=option).radians


def _half_turn_or_none(value: Any) -> Optional[float]:
    try:
        return _angle(value, "latitudeRange", AngleMode.HALF_TURN)
    except ConfigError:
        return None


def _range_length(value: Any) -> int:
    if isinstance(value, (list, tuple)):
        return len(value)
    return -1


def _classify_navbar(value: Any) -> PresetChoice:
    if isinstance(value, PresetChoice):
        return value
    if value is True:
        return PresetChoice.default()
    if value is False or value is None:
        return PresetChoice.disabled()
    if isinstance(value, str):
        return PresetChoice.custom(value.split())
    if isinstance(value, (list, tuple)):
        return PresetChoice.custom(list(value))
    raise TypeError(type(value).__name__)


def _classify_keyboard(value: Any) -> PresetChoice:
    if isinstance(value, PresetChoice):
        return value
    if value is True:
        return PresetChoice.default()
    if value is False or value is None:
        return PresetChoice.disabled()
    if isinstance(value, Mapping):
        return PresetChoice.custom(dict(value))
    raise TypeError(type(value).__name__)


def _resolve_navbar(choice: PresetChoice) -> Any:
    if choice.kind is PresetKind.DEFAULT:
        return default_navbar()
    if choice.kind is PresetKind.DISABLED:
        return False
    value = choice.value
    if isinstance(value, str):
        return value.split()
    return list(value)


def _resolve_keyboard(choice: PresetChoice) -> Any:
    if choice.kind is PresetKind.DEFAULT:
        return default_keyboard()
    if choice.kind is PresetKind.DISABLED:
        return False
    return dict(choice.value)


def _sphere_correction(config: Dict[str, Any]) -> Dict[str, Any]:
    section = config.get("sphereCorrection")
    if section is None:
        section = {}
    if not isinstance(section, Mapping):
        raise ConfigError("sphereCorrection must be a mapping", option="sphereCorrection")
    section = dict(section)
    for key in ("pan", "tilt", "roll"):
        section.setdefault(key, 0)
    config["sphereCorrection"] = section
    return section


def build_config(
    options: Mapping[str, Any] | None,
    capabilities: CapabilityProvider | None = None,
) -> BuildResult:
    """Build the canonical viewer configuration.

    Returns the normalized record together with every corrective
    diagnostic raised along the way. Neither ``options`` nor the
    defaults are modified.

    Raises:
        ConfigError: on a missing container, missing canvas support,
            missing WebGL fallback components, or a malformed angle,
            speed or numeric option.
    """
    system = capabilities if capabilities is not None else SystemCapabilities()
    sink = CollectingSink()

    config = get_defaults()
    deep_merge(config, options)

    if not config.get("container"):
        raise ConfigError("No value given for container.", kind=ErrorKind.MISSING_CONTAINER, option="container")

    if not system.is_canvas_supported:
        raise ConfigError("Canvas is not supported.", kind=ErrorKind.CANVAS_UNSUPPORTED)

    if (not system.is_webgl_supported or not config.get("webgl")) and not system.has_components(*FALLBACK_COMPONENTS):
        raise ConfigError(
            f"Missing rendering components: {', '.join(FALLBACK_COMPONENTS)}.",
            kind=ErrorKind.MISSING_COMPONENTS,
        )

    longitude_range = config.get("longitudeRange")
    if longitude_range and _range_length(longitude_range) != 2:
        config["longitudeRange"] = None
        _warn(sink, "longitude_range_length", "longitudeRange", "longitudeRange must have exactly two elements.")

    latitude_range = config.get("latitudeRange")
    if latitude_range:
        if _range_length(latitude_range) != 2:
            config["latitudeRange"] = None
            _warn(sink, "latitude_range_length", "latitudeRange", "latitudeRange must have exactly two elements.")
        else:
            low, high = (_half_turn_or_none(item) for item in latitude_range)
            if low is not None and high is not None and low > high:
                config["latitudeRange"] = [latitude_range[1], latitude_range[0]]
                _warn(sink, "latitude_range_order", "latitudeRange", "latitudeRange values must be ordered.")

    min_fov = coerce_number(config.get("minFov"), "minFov")
    max_fov = coerce_number(config.get("maxFov"), "maxFov")
    if max_fov < min_fov:
        min_fov, max_fov = max_fov, min_fov
        _warn(sink, "fov_order", "maxFov", "maxFov cannot be lower than minFov.")

    cache_texture = config.get("cacheTexture")
    if not cache_texture:
        config["cacheTexture"] = 0
    elif not is_integer(cache_texture) or cache_texture < 0:
        config["cacheTexture"] = 0
        _warn(sink, "cache_texture", "cacheTexture", f"Invalid value for cacheTexture: {cache_texture!r}")
    else:
        config["cacheTexture"] = int(cache_texture)

    try:
        config["navbar"] = _resolve_navbar(_classify_navbar(config.get("navbar")))
    except (TypeError, ValueError):
        _warn(sink, "navbar_invalid", "navbar", f"Invalid value for navbar: {config.get('navbar')!r}")
        config["navbar"] = _resolve_navbar(PresetChoice.default())

    try:
        config["keyboard"] = _resolve_keyboard(_classify_keyboard(config.get("keyboard")))
    except (TypeError, ValueError):
        _warn(sink, "keyboard_invalid", "keyboard", f"Invalid value for keyboard: {config.get('keyboard')!r}")
        config["keyboard"] = _resolve_keyboard(PresetChoice.default())

    config["minFov"] = bound(min_fov, *FOV_RANGE)
    config["maxFov"] = bound(max_fov, *FOV_RANGE)

    config["defaultZoomLvl"] = bound(coerce_number(config.get("defaultZoomLvl"), "defaultZoomLvl"), *ZOOM_RANGE)

    config["defaultLong"] = _angle(config.get("defaultLong"), "defaultLong")
    config["defaultLat"] = _angle(config.get("defaultLat"), "defaultLat", AngleMode.HALF_TURN)

    correction = _sphere_correction(config)
    for key in ("pan", "tilt", "roll"):
        correction[key] = _angle(correction[key], f"sphereCorrection.{key}", AngleMode.HALF_TURN)

    if config.get("animLat") is None:
        config["animLat"] = config["defaultLat"]
    else:
        config["animLat"] = _angle(config["animLat"], "animLat", AngleMode.HALF_TURN)

    if config.get("longitudeRange"):
        config["longitudeRange"] = [_angle(item, "longitudeRange") for item in config["longitudeRange"]]
    else:
        config["longitudeRange"] = None

    if config.get("latitudeRange"):
        config["latitudeRange"] = [
            _angle(item, "latitudeRange", AngleMode.HALF_TURN) for item in config["latitudeRange"]
        ]
    else:
        config["latitudeRange"] = None

    config["animSpeed"] = parse_speed(config.get("animSpeed"), option="animSpeed").radians_per_second

    if config.get("caption") and config["navbar"] is False:
        config["navbar"] = ["caption"]

    fisheye = config.get("fisheye")
    if fisheye is True:
        config["fisheye"] = 1
    elif fisheye is False or fisheye is None:
        config["fisheye"] = 0
    elif not is_number(fisheye):
        config["fisheye"] = 0
        _warn(sink, "fisheye_invalid", "fisheye", f"Invalid value for fisheye: {fisheye!r}")

    return BuildResult(config=config, diagnostics=sink.diagnostics)


def get_config(
    options: Mapping[str, Any] | None,
    capabilities: CapabilityProvider | None = None,
    sink: DiagnosticsSink | None = None,
) -> Dict[str, Any]:
    """Build the canonical configuration and report corrections to ``sink``."""
    result = build_config(options, capabilities)
    target = sink if sink is not None else LoggingSink()
    for diagnostic in result.diagnostics:
        target.emit(diagnostic)
    return result.config


def supported_navbar_items(config: Mapping[str, Any], capabilities: CapabilityProvider) -> Any:
    """Drop navbar items the runtime cannot support (fullscreen without a fullscreen event)."""
    navbar = config.get("navbar")
    if not navbar:
        return navbar
    if capabilities.fullscreen_event:
        return list(navbar)
    return [item for item in navbar if item != "fullscreen"]


__all__ = ["BuildResult", "build_config", "get_config", "supported_navbar_items"]
