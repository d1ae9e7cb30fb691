"""Wiring of the theme components for one plugin installation."""

from __future__ import annotations

import logging
from typing import Any

from loginthemes.config.settings import PluginSettings
from loginthemes.config.store import ConfigStore
from loginthemes.errors import OperationResult, classify_os_error
from loginthemes.themes.backup import BackupManager
from loginthemes.themes.registry import ThemeRegistry
from loginthemes.themes.repository import ThemeRepository
from loginthemes.themes.service import ThemeApplier

logger = logging.getLogger(__name__)


class LoginThemeManager:
    """Builds every component from a single settings object."""

    def __init__(self, settings: PluginSettings) -> None:
        self.settings = settings
        self.config_store = ConfigStore(settings.config_path)
        self.backups = BackupManager(settings.login_css_path, settings.backup_css_path)
        self.registry = ThemeRegistry(settings.themes_dir)
        self.applier = ThemeApplier(
            settings.login_css_path,
            self.registry,
            self.config_store,
            self.backups,
        )
        self.repository = ThemeRepository(self.registry, self.config_store, self.applier)

    def initialize(self) -> OperationResult:
        """Prepare storage, capture the original stylesheet, heal drift."""
        themes_dir = self.settings.themes_dir
        if not themes_dir.exists():
            try:
                themes_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                error = classify_os_error(exc, themes_dir, "create")
                logger.error("Could not create themes directory: %s", error.to_dict())
                return OperationResult.fail(error)
            logger.info("Created themes directory %s", themes_dir)

        if not self.backups.ensure_backup():
            logger.warning(
                "No backup of %s; default theme will use the built-in stylesheet",
                self.settings.login_css_path,
            )
        result = self.applier.reconcile()
        if not result.success:
            logger.error("Could not restore active theme: %s", result.message)
        return result

    def list_payload(self) -> dict[str, Any]:
        return {
            "themes": [record.to_dict() for record in self.registry.list_themes()],
            "currentTheme": self.applier.resolve_current_theme(),
        }

    def current_payload(self) -> dict[str, Any]:
        current = self.applier.resolve_current_theme()
        record = self.registry.get_theme(current)
        return {
            "currentTheme": current,
            "themeInfo": record.to_dict() if record else None,
        }
