"""Runtime path helpers for the plugin and its host installation."""

from __future__ import annotations

import os
from pathlib import Path

PLUGIN_DIR_ENV = "LOGIN_THEMES_PLUGIN_DIR"


def package_root() -> Path:
    """Return the directory that contains the `loginthemes` package."""
    return Path(__file__).resolve().parent


def plugin_root() -> Path:
    """Resolve the plugin directory, honoring ``LOGIN_THEMES_PLUGIN_DIR``."""
    override = os.environ.get(PLUGIN_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return package_root().parent


def host_root_for(plugin_dir: Path) -> Path:
    """The host application sits two levels above its plugins."""
    return plugin_dir.resolve().parent.parent


def login_stylesheet_path(host_root: Path) -> Path:
    return host_root / "public" / "css" / "login.css"
