"""Theme discovery over the themes directory."""

from __future__ import annotations

import logging
from pathlib import Path

from loginthemes import storage
from loginthemes.errors import ErrorCode, ThemeError
from loginthemes.themes.constants import (
    DEFAULT_THEME_ID,
    RESERVED_PREFIX,
    SIDECAR_EXTENSION,
    THEME_EXTENSION,
)
from loginthemes.themes.metadata import build_record, parse_css_header, sidecar_layer
from loginthemes.themes.models import BUILTIN_RECORD, ThemeRecord

logger = logging.getLogger(__name__)


class ThemeRegistry:
    """Enumerates stored themes and builds their display records.

    Nothing is cached: every call reads the directory again so external
    edits are picked up immediately.
    """

    def __init__(self, themes_dir: Path) -> None:
        self._themes_dir = themes_dir

    def list_themes(self) -> list[ThemeRecord]:
        records = [BUILTIN_RECORD]
        if not self._themes_dir.exists():
            return records
        try:
            entries = list(self._themes_dir.iterdir())
        except OSError as exc:
            logger.error("Error scanning themes in %s: %s", self._themes_dir, exc)
            return records

        for entry in entries:
            name = entry.name
            if not name.endswith(THEME_EXTENSION) or name.startswith(RESERVED_PREFIX):
                continue
            if not entry.is_file():
                continue
            theme_id = name[: -len(THEME_EXTENSION)]
            # Listed ids must be accepted by every lookup; "default" is never a file.
            if theme_id == DEFAULT_THEME_ID or not self.is_lookup_id(theme_id):
                continue
            records.append(self._load_record(theme_id, entry))
        return records

    def get_theme(self, theme_id: str) -> ThemeRecord | None:
        for record in self.list_themes():
            if record.theme_id == theme_id:
                return record
        return None

    def theme_exists(self, theme_id: str) -> bool:
        if theme_id == DEFAULT_THEME_ID:
            return True
        try:
            return self.theme_path(theme_id).is_file()
        except ThemeError:
            return False

    def theme_path(self, theme_id: str) -> Path:
        return self._themes_dir / f"{self._checked_id(theme_id)}{THEME_EXTENSION}"

    def sidecar_path(self, theme_id: str) -> Path:
        return self._themes_dir / f"{self._checked_id(theme_id)}{SIDECAR_EXTENSION}"

    def read_css(self, theme_id: str) -> str:
        path = self.theme_path(theme_id)
        if not path.is_file():
            raise ThemeError(ErrorCode.NOT_FOUND, message=f"Theme not found: {theme_id}")
        return storage.read_text(path)

    def read_sidecar(self, theme_id: str) -> dict[str, object]:
        """Raw sidecar contents; empty when the sidecar does not exist."""
        path = self.sidecar_path(theme_id)
        if not path.exists():
            return {}
        return storage.read_json_object(path)

    def _load_record(self, theme_id: str, css_path: Path) -> ThemeRecord:
        sidecar: dict[str, str | None] = {}
        try:
            sidecar = sidecar_layer(self.read_sidecar(theme_id))
        except ThemeError as exc:
            logger.debug("Ignoring sidecar for %s: %s", theme_id, exc)

        header: dict[str, str | None] = {}
        try:
            header = parse_css_header(storage.read_text(css_path))
        except ThemeError as exc:
            logger.debug("Ignoring CSS header for %s: %s", theme_id, exc)

        return build_record(theme_id, sidecar, header)

    @staticmethod
    def is_lookup_id(theme_id: str) -> bool:
        """Whether an id can name a stored theme file."""
        return not (
            not theme_id
            or theme_id.startswith(RESERVED_PREFIX)
            or "/" in theme_id
            or "\\" in theme_id
            or ".." in theme_id
            or "\x00" in theme_id
        )

    @classmethod
    def _checked_id(cls, theme_id: str) -> str:
        if not cls.is_lookup_id(theme_id):
            raise ThemeError(ErrorCode.NOT_FOUND, message=f"Theme not found: {theme_id}")
        return theme_id
