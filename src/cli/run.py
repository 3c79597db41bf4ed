from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO

import structlog
import yaml

from src.core import config_loader
from src.core.config_builder import build_config, supported_navbar_items
from src.core.diagnostics import LoggingSink
from src.core.log_setup import configure_logging
from src.core.version import get_version

logger = structlog.get_logger("sphereview.cli")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sphereview-config",
        description="Normalize panorama viewer options into a canonical configuration.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to the settings file (defaults to $SPHEREVIEW_CONFIG or ./config/viewer.yaml).",
    )
    parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        help="Output format for the canonical configuration.",
    )
    parser.add_argument(
        "--supported-only",
        action="store_true",
        help="Drop navbar items the configured runtime cannot support.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any option had to be corrected.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser.parse_args(argv)


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def render(config: dict[str, Any], output_format: str) -> str:
    data = _plain(config)
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=True, allow_unicode=True)
    return json.dumps(data, indent=2, sort_keys=True) + "\n"


def run(args: argparse.Namespace, out: TextIO) -> int:
    settings = config_loader.load_settings(args.config)
    configure_logging(settings.logging)
    capabilities = settings.capabilities.to_capabilities()
    logger.debug("capabilities-loaded", **capabilities.to_dict())

    result = build_config(settings.options, capabilities)
    sink = LoggingSink()
    for diagnostic in result.diagnostics:
        sink.emit(diagnostic)

    config = result.config
    if args.supported_only:
        config["navbar"] = supported_navbar_items(config, capabilities)

    out.write(render(config, args.format))
    logger.info("config-built", corrections=len(result.diagnostics))

    if args.strict and result.diagnostics:
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        return run(args, sys.stdout)
    except config_loader.ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"Settings file not found: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # pragma: no cover - defensive
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return 2


__all__ = ["main", "render", "run"]


if __name__ == "__main__":
    sys.exit(main())
