from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable

import pytest
import yaml

from src.core.capabilities import SystemCapabilities
from src.core.diagnostics import CollectingSink


class FakeContainer:
    """Stand-in for the display surface handle."""

    def __init__(self, name: str = "viewer") -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"FakeContainer({self.name!r})"


@pytest.fixture
def container() -> FakeContainer:
    return FakeContainer()


@pytest.fixture
def capabilities_factory() -> Callable[..., SystemCapabilities]:
    def factory(
        *,
        canvas: bool = True,
        webgl: bool = True,
        fullscreen_event: str | None = "fullscreenchange",
        components: Iterable[str] = (),
    ) -> SystemCapabilities:
        return SystemCapabilities(
            is_canvas_supported=canvas,
            is_webgl_supported=webgl,
            fullscreen_event=fullscreen_event,
            components=frozenset(components),
        )

    return factory


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def settings_file(tmp_path: Path) -> Callable[[Any], Path]:
    def write(data: Any, name: str = "viewer.yaml") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    return write


@pytest.fixture
def config_env(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    def apply(**env: Any) -> None:
        for key, value in env.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, str(value))

    return apply


@pytest.fixture
def reset_structlog() -> Iterable[None]:
    import structlog

    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
