"""Version information for sphereview-config."""

import importlib.metadata


def get_version() -> str:
    """Return the installed sphereview-config version."""
    try:
        return importlib.metadata.version("sphereview-config")
    except importlib.metadata.PackageNotFoundError:
        # Fallback for development/uninstalled package
        return "0.1.0-dev"
