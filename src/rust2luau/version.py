"""Version utility for rust2luau."""

import sys
from importlib.metadata import version


def get_version() -> str:
    """Get the rust2luau package version.

    Returns:
        Version string or "unknown" if version cannot be determined

    """
    try:
        return version("rust2luau")
    except Exception:  # noqa: BLE001
        # Missing or corrupted package metadata when running from a checkout.
        return "unknown"


def show_version() -> None:
    """Display the application version and exit."""
    app_version = get_version()
    if app_version == "unknown":
        print("rust2luau (version unknown)")  # noqa: T201
    else:
        print(f"rust2luau {app_version}")  # noqa: T201
    sys.exit(0)
