"""One-time backup of the original login stylesheet."""

from __future__ import annotations

import logging
from pathlib import Path

from loginthemes import storage
from loginthemes.errors import ThemeError
from loginthemes.themes.constants import FALLBACK_STYLESHEET

logger = logging.getLogger(__name__)


class BackupManager:
    """Keeps a pristine copy of the stylesheet that existed before any theme."""

    def __init__(self, login_css_path: Path, backup_path: Path) -> None:
        self._login_css_path = login_css_path
        self._backup_path = backup_path

    def has_backup(self) -> bool:
        return self._backup_path.is_file()

    def ensure_backup(self) -> bool:
        """Capture the active stylesheet once; return whether a backup exists."""
        if self.has_backup():
            return True
        if not self._login_css_path.is_file():
            return False
        try:
            storage.copy_bytes(self._login_css_path, self._backup_path)
        except ThemeError as exc:
            logger.error("Error creating backup: %s", exc)
            return False
        logger.info("Created backup of original stylesheet at %s", self._backup_path)
        return True

    def get_default_content(self) -> str:
        if self.has_backup():
            try:
                return storage.read_text(self._backup_path)
            except ThemeError as exc:
                logger.error("Error reading backup: %s", exc)
        return FALLBACK_STYLESHEET
