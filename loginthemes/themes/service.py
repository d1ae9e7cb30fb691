"""Applying themes to the active login stylesheet."""

from __future__ import annotations

import logging
from pathlib import Path

from loginthemes import storage
from loginthemes.config.store import ConfigStore
from loginthemes.errors import ErrorCode, OperationResult, ThemeError
from loginthemes.themes.backup import BackupManager
from loginthemes.themes.constants import DEFAULT_THEME_ID
from loginthemes.themes.registry import ThemeRegistry

logger = logging.getLogger(__name__)


class ThemeApplier:
    """Keeps the active stylesheet and the persisted pointer in lockstep.

    The pair is written stylesheet first, pointer second. When the pointer
    cannot be saved, the previous stylesheet is put back. If a crash lands
    between the two writes, :meth:`reconcile` treats the pointer as ground
    truth on the next start.
    """

    def __init__(
        self,
        login_css_path: Path,
        registry: ThemeRegistry,
        config_store: ConfigStore,
        backups: BackupManager,
    ) -> None:
        self._login_css_path = login_css_path
        self._registry = registry
        self._config_store = config_store
        self._backups = backups

    def resolve_content(self, theme_id: str) -> str:
        """CSS for a theme id; raises ThemeError(NOT_FOUND) for unknown ids."""
        if theme_id == DEFAULT_THEME_ID:
            return self._backups.get_default_content()
        return self._registry.read_css(theme_id)

    def resolve_current_theme(self) -> str:
        current = self._config_store.load().current_theme
        if self._registry.theme_exists(current):
            return current
        logger.warning("Configured theme %r no longer exists; using default", current)
        return DEFAULT_THEME_ID

    def apply_theme(self, theme_id: str) -> OperationResult:
        try:
            content = self.resolve_content(theme_id)
        except ThemeError as exc:
            return OperationResult.fail(exc)

        previous = self._read_active()
        try:
            storage.write_text(self._login_css_path, content)
        except ThemeError as exc:
            logger.error("Error applying theme %s: %s", theme_id, exc)
            return OperationResult.fail(exc)

        config = self._config_store.load()
        config.current_theme = theme_id
        if not self._config_store.save(config):
            self._restore_active(previous)
            return OperationResult.fail(
                ThemeError(
                    ErrorCode.IO_FAILURE,
                    message=f"Could not record active theme: {theme_id}",
                    path=self._config_store.config_path,
                )
            )

        logger.info("Applied theme: %s", theme_id)
        return OperationResult.ok(theme_id)

    def reconcile(self) -> OperationResult:
        """Bring the active stylesheet back in line with the saved pointer."""
        configured = self._config_store.load().current_theme
        target = self.resolve_current_theme()
        if target != configured:
            return self.apply_theme(target)

        try:
            expected = self.resolve_content(target)
        except ThemeError as exc:
            logger.error("Cannot resolve active theme %s: %s", target, exc)
            return self.apply_theme(DEFAULT_THEME_ID)

        if self._read_active() == expected:
            return OperationResult.ok(target)
        logger.warning("Active stylesheet drifted from theme %s; re-applying", target)
        return self.apply_theme(target)

    def _read_active(self) -> str | None:
        if not self._login_css_path.is_file():
            return None
        try:
            return storage.read_text(self._login_css_path)
        except ThemeError as exc:
            logger.warning("Could not read active stylesheet: %s", exc)
            return None

    def _restore_active(self, previous: str | None) -> None:
        try:
            if previous is None:
                storage.remove(self._login_css_path, missing_ok=True)
            else:
                storage.write_text(self._login_css_path, previous)
        except ThemeError as exc:
            logger.error("Could not restore previous stylesheet: %s", exc)
