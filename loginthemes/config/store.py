"""Persistence of the active theme pointer (``config.json``)."""

from __future__ import annotations

import logging
from pathlib import Path

from loginthemes import storage
from loginthemes.errors import ThemeError
from loginthemes.themes.constants import DEFAULT_THEME_ID
from loginthemes.themes.models import ThemeConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    """Reads and writes the plugin's single durable record."""

    def __init__(self, config_path: Path) -> None:
        self._config_path = config_path

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> ThemeConfig:
        """Return the persisted config, or defaults if it cannot be read."""
        if not self._config_path.exists():
            return ThemeConfig()
        try:
            data = storage.read_json_object(self._config_path)
        except ThemeError as exc:
            logger.warning("Error loading config, using defaults: %s", exc)
            return ThemeConfig()

        current = data.get("currentTheme")
        if not isinstance(current, str) or not current.strip():
            current = DEFAULT_THEME_ID
        themes = data.get("themes")
        if not isinstance(themes, dict):
            themes = {}
        return ThemeConfig(current_theme=current.strip(), themes=themes)

    def save(self, config: ThemeConfig) -> bool:
        try:
            storage.write_json(self._config_path, config.to_dict())
        except ThemeError as exc:
            logger.error("Error saving config: %s", exc)
            return False
        return True
