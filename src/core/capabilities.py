"""Runtime capability facts consulted by the fatal configuration checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class CapabilityProvider(Protocol):
    """Read-only view of what the rendering runtime supports."""

    is_canvas_supported: bool
    is_webgl_supported: bool
    fullscreen_event: Optional[str]

    def has_components(self, *names: str) -> bool:
        ...


@dataclass(frozen=True)
class SystemCapabilities:
    """Static capability facts, usually read from the settings file."""

    is_canvas_supported: bool = True
    is_webgl_supported: bool = True
    fullscreen_event: Optional[str] = "fullscreenchange"
    components: frozenset[str] = field(default_factory=frozenset)

    def has_components(self, *names: str) -> bool:
        """Return True when every named rendering sub-component is available."""
        return all(name in self.components for name in names)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "canvas": self.is_canvas_supported,
            "webgl": self.is_webgl_supported,
            "fullscreen_event": self.fullscreen_event,
            "components": sorted(self.components),
        }


__all__ = ["CapabilityProvider", "SystemCapabilities"]
