"""Plugin settings: resolved storage paths plus optional YAML overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from loginthemes import runtime_paths
from loginthemes.errors import ErrorCode, ThemeError
from loginthemes.themes.constants import BACKUP_FILENAME

SETTINGS_FILE_ENV = "LOGIN_THEMES_SETTINGS"
SETTINGS_FILENAME = "settings.yaml"
DEFAULT_MOUNT_PATH = "/api/plugins/login-themes"

_PATH_KEYS: dict[str, str] = {
    "host_root": "host_root",
    "login_css": "login_css_path",
    "themes_dir": "themes_dir",
    "config_file": "config_path",
    "log_dir": "log_dir",
}
_ALLOWED_KEYS = set(_PATH_KEYS) | {"mount_path", "log_level"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class PluginSettings:
    """Every path the theme components touch, resolved once at startup."""

    plugin_dir: Path
    host_root: Path
    themes_dir: Path
    login_css_path: Path
    config_path: Path
    log_dir: Path
    mount_path: str = DEFAULT_MOUNT_PATH
    log_level: str = "INFO"

    @property
    def backup_css_path(self) -> Path:
        return self.themes_dir / BACKUP_FILENAME

    @classmethod
    def from_plugin_dir(cls, plugin_dir: Path, host_root: Path | None = None) -> PluginSettings:
        plugin_dir = Path(plugin_dir)
        root = Path(host_root) if host_root is not None else runtime_paths.host_root_for(plugin_dir)
        return cls(
            plugin_dir=plugin_dir,
            host_root=root,
            themes_dir=plugin_dir / "themes",
            login_css_path=runtime_paths.login_stylesheet_path(root),
            config_path=plugin_dir / "config.json",
            log_dir=plugin_dir / "logs",
        )


def load_settings(
    plugin_dir: Path | None = None,
    settings_file: Path | None = None,
) -> PluginSettings:
    """Build settings for a plugin directory, applying ``settings.yaml`` if present."""
    base_dir = Path(plugin_dir) if plugin_dir is not None else runtime_paths.plugin_root()
    if settings_file is None:
        env_file = os.environ.get(SETTINGS_FILE_ENV, "").strip()
        settings_file = Path(env_file).expanduser() if env_file else base_dir / SETTINGS_FILENAME
    overrides = _read_overrides(settings_file) if settings_file.exists() else {}
    return apply_overrides(base_dir, overrides, context=str(settings_file))


def apply_overrides(
    plugin_dir: Path,
    overrides: Mapping[str, Any],
    *,
    context: str = SETTINGS_FILENAME,
) -> PluginSettings:
    unknown = sorted(key for key in overrides if key not in _ALLOWED_KEYS)
    if unknown:
        raise ThemeError(
            ErrorCode.PARSE_FAILURE,
            message=f"{context}: unsupported keys found: {', '.join(unknown)}",
        )

    host_root = _path_value(overrides, "host_root", plugin_dir, context)
    settings = PluginSettings.from_plugin_dir(plugin_dir, host_root=host_root)

    changes: dict[str, Any] = {}
    for key, attr in _PATH_KEYS.items():
        if key == "host_root":
            continue
        value = _path_value(overrides, key, plugin_dir, context)
        if value is not None:
            changes[attr] = value

    mount_path = overrides.get("mount_path")
    if mount_path is not None:
        if not isinstance(mount_path, str) or not mount_path.startswith("/"):
            raise ThemeError(
                ErrorCode.PARSE_FAILURE,
                message=f"{context}: mount_path must be an absolute URL path",
            )
        changes["mount_path"] = mount_path.rstrip("/")

    log_level = overrides.get("log_level")
    if log_level is not None:
        level = str(log_level).strip().upper()
        if level not in _LOG_LEVELS:
            raise ThemeError(
                ErrorCode.PARSE_FAILURE,
                message=f"{context}: unknown log_level {log_level!r}",
            )
        changes["log_level"] = level

    return replace(settings, **changes) if changes else settings


def _read_overrides(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ThemeError(
            ErrorCode.IO_FAILURE, message=f"Unable to read {path}: {exc}", path=path
        ) from exc
    except yaml.YAMLError as exc:
        raise ThemeError(
            ErrorCode.PARSE_FAILURE, message=f"Invalid YAML in {path}: {exc}", path=path
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ThemeError(
            ErrorCode.PARSE_FAILURE, message=f"Expected a mapping in {path}", path=path
        )
    return data


def _path_value(
    overrides: Mapping[str, Any],
    key: str,
    plugin_dir: Path,
    context: str,
) -> Path | None:
    raw = overrides.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str) or not raw.strip():
        raise ThemeError(
            ErrorCode.PARSE_FAILURE,
            message=f"{context}: {key} must be a non-empty path string",
        )
    path = Path(raw.strip()).expanduser()
    if not path.is_absolute():
        path = plugin_dir / path
    return path
