"""Default viewer options.

``DEFAULTS`` is a frozen snapshot: mappings are read-only proxies and
sequences are tuples. Callers that need a mutable record use
:func:`get_defaults`, which returns a fresh structural clone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from src.core.merge import clone


class Action(str, Enum):
    """Keyboard actions understood by the interaction layer."""

    ROTATE_LAT_UP = "rotateLatitudeUp"
    ROTATE_LAT_DOWN = "rotateLatitudeDown"
    ROTATE_LONG_RIGHT = "rotateLongitudeRight"
    ROTATE_LONG_LEFT = "rotateLongitudeLeft"
    ZOOM_IN = "zoomIn"
    ZOOM_OUT = "zoomOut"
    TOGGLE_AUTOROTATE = "toggleAutorotate"


class PresetKind(str, Enum):
    DISABLED = "disabled"
    DEFAULT = "default"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PresetChoice:
    """Explicit form of an option that can be off, the default preset, or a custom value."""

    kind: PresetKind
    value: Any = None

    @classmethod
    def disabled(cls) -> "PresetChoice":
        return cls(PresetKind.DISABLED)

    @classmethod
    def default(cls) -> "PresetChoice":
        return cls(PresetKind.DEFAULT)

    @classmethod
    def custom(cls, value: Any) -> "PresetChoice":
        return cls(PresetKind.CUSTOM, value)


FALLBACK_COMPONENTS: tuple[str, ...] = ("CanvasRenderer", "Projector")

DEFAULT_NAVBAR: tuple[str, ...] = (
    "autorotate",
    "zoom",
    "download",
    "markers",
    "caption",
    "gyroscope",
    "stereo",
    "fullscreen",
)

DEFAULT_KEYBOARD: Mapping[str, str] = MappingProxyType(
    {
        "ArrowUp": Action.ROTATE_LAT_UP.value,
        "ArrowDown": Action.ROTATE_LAT_DOWN.value,
        "ArrowRight": Action.ROTATE_LONG_RIGHT.value,
        "ArrowLeft": Action.ROTATE_LONG_LEFT.value,
        "PageUp": Action.ZOOM_IN.value,
        "PageDown": Action.ZOOM_OUT.value,
        "+": Action.ZOOM_IN.value,
        "-": Action.ZOOM_OUT.value,
        " ": Action.TOGGLE_AUTOROTATE.value,
    }
)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


DEFAULTS: Mapping[str, Any] = _freeze(
    {
        # rendering
        "panorama": None,
        "container": None,
        "caption": None,
        "useXmpData": True,
        "panoData": None,
        "webgl": True,
        "fisheye": False,
        "sphereCorrection": {"pan": 0, "tilt": 0, "roll": 0},
        "cacheTexture": 0,
        "withCredentials": False,
        "size": None,
        # navigation
        "minFov": 30,
        "maxFov": 90,
        "defaultZoomLvl": 50,
        "defaultLong": 0,
        "defaultLat": 0,
        "longitudeRange": None,
        "latitudeRange": None,
        "moveSpeed": 1,
        "zoomSpeed": 2,
        "timeAnim": 2000,
        "animSpeed": "2rpm",
        "animLat": None,
        "moveInertia": True,
        # interaction
        "mousewheel": True,
        "mousewheelFactor": 1,
        "mousemove": True,
        "mousemoveHover": False,
        "touchmoveTwoFingers": False,
        "keyboard": DEFAULT_KEYBOARD,
        "clickEventOnMarker": False,
        # presentation
        "navbar": DEFAULT_NAVBAR,
        "lang": {
            "autorotate": "Automatic rotation",
            "zoom": "Zoom",
            "zoomOut": "Zoom out",
            "zoomIn": "Zoom in",
            "download": "Download",
            "fullscreen": "Fullscreen",
            "markers": "Markers",
            "gyroscope": "Gyroscope",
            "stereo": "Stereo view",
            "stereoNotification": "Click anywhere to exit stereo view.",
            "pleaseRotate": ["Please rotate your device", "(or tap to continue)"],
            "twoFingers": ["Use two fingers to navigate"],
        },
        "transition": {"duration": 1500, "loader": True},
        "loadingImg": None,
        "loadingTxt": "Loading...",
        "templates": {},
        "icons": {},
        "markers": [],
    }
)


def get_defaults() -> dict[str, Any]:
    """Return a mutable clone of the default options."""
    return clone(DEFAULTS)


def default_navbar() -> list[str]:
    return list(DEFAULT_NAVBAR)


def default_keyboard() -> dict[str, str]:
    return dict(DEFAULT_KEYBOARD)


__all__ = [
    "Action",
    "DEFAULTS",
    "DEFAULT_KEYBOARD",
    "DEFAULT_NAVBAR",
    "FALLBACK_COMPONENTS",
    "PresetChoice",
    "PresetKind",
    "default_keyboard",
    "default_navbar",
    "get_defaults",
]
