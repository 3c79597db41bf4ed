"""Diagnostics sinks for non-fatal configuration corrections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

import structlog


@dataclass(frozen=True)
class Diagnostic:
    """A single correction applied while normalizing options."""

    code: str
    message: str
    option: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "option": self.option,
        }


class DiagnosticsSink(Protocol):
    def emit(self, diagnostic: Diagnostic) -> None:
        ...


class CollectingSink:
    """Sink that keeps every diagnostic in memory, in emission order."""

    def __init__(self) -> None:
        self._entries: List[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self._entries.append(diagnostic)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._entries)

    def codes(self) -> List[str]:
        return [entry.code for entry in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class LoggingSink:
    """Sink that forwards diagnostics to structured logging."""

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger or structlog.get_logger("sphereview.core")

    def emit(self, diagnostic: Diagnostic) -> None:
        self._logger.warning(
            "config-warning",
            code=diagnostic.code,
            option=diagnostic.option,
            detail=diagnostic.message,
        )


__all__ = [
    "CollectingSink",
    "Diagnostic",
    "DiagnosticsSink",
    "LoggingSink",
]
