"""Create, update, delete and export theme bundles."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Mapping

from loginthemes import storage
from loginthemes.config.store import ConfigStore
from loginthemes.errors import ErrorCode, ExportResult, OperationResult, ThemeError
from loginthemes.themes.constants import (
    DEFAULT_AUTHOR,
    DEFAULT_DESCRIPTION,
    DEFAULT_IMPORT_VERSION,
    DEFAULT_THEME_ID,
    MAX_THEME_ID_LEN,
    RESERVED_PREFIX,
)
from loginthemes.themes.metadata import DISPLAY_FIELDS, utc_timestamp
from loginthemes.themes.models import ThemeRecord
from loginthemes.themes.registry import ThemeRegistry
from loginthemes.themes.service import ThemeApplier

logger = logging.getLogger(__name__)

# Latin lowercase, digits, underscore, hyphen and CJK unified ideographs.
_UNSAFE_ID_CHARS_RE = re.compile(r"[^a-z0-9\u4e00-\u9fa5_-]")
_HYPHEN_RUN_RE = re.compile(r"-+")


def make_theme_id(name: str) -> str:
    """Derive a filesystem-safe theme id from a display name."""
    theme_id = _UNSAFE_ID_CHARS_RE.sub("-", name.lower())
    theme_id = _HYPHEN_RUN_RE.sub("-", theme_id).strip("-")
    return theme_id[:MAX_THEME_ID_LEN].rstrip("-")


def _text(metadata: Mapping[str, object], key: str) -> str | None:
    value = metadata.get(key)
    if isinstance(value, str) and value:
        return value
    return None


class ThemeRepository:
    """CRUD surface over theme file pairs (``<id>.css`` + ``<id>.json``)."""

    def __init__(
        self,
        registry: ThemeRegistry,
        config_store: ConfigStore,
        applier: ThemeApplier,
    ) -> None:
        self._registry = registry
        self._config_store = config_store
        self._applier = applier

    def import_theme(
        self,
        name: str,
        css: str,
        metadata: Mapping[str, object] | None = None,
    ) -> OperationResult:
        metadata = metadata or {}
        theme_id = make_theme_id(name or "")
        if not theme_id or theme_id.startswith(RESERVED_PREFIX):
            return OperationResult.fail(
                ThemeError(ErrorCode.INVALID_INPUT, message="Invalid theme name")
            )

        if self._registry.theme_exists(theme_id):
            return OperationResult.fail(
                ThemeError(
                    ErrorCode.CONFLICT,
                    message=f"Theme with this name already exists: {theme_id}",
                )
            )

        meta = {
            "name": _text(metadata, "name") or name,
            "author": _text(metadata, "author") or DEFAULT_AUTHOR,
            "description": _text(metadata, "description") or DEFAULT_DESCRIPTION,
            "version": _text(metadata, "version") or DEFAULT_IMPORT_VERSION,
            "importedAt": utc_timestamp(),
        }
        css_path = self._registry.theme_path(theme_id)
        try:
            storage.write_text(css_path, css)
        except ThemeError as exc:
            logger.error("Error importing theme %s: %s", theme_id, exc)
            return OperationResult.fail(exc)
        try:
            storage.write_json(self._registry.sidecar_path(theme_id), meta)
        except ThemeError as exc:
            logger.error("Error writing metadata for %s: %s", theme_id, exc)
            # Leave no half-imported theme behind to block a retry.
            self._discard(css_path)
            return OperationResult.fail(exc)

        logger.info("Imported theme: %s", theme_id)
        return OperationResult.ok(theme_id)

    def update_theme(
        self,
        theme_id: str,
        css: str,
        metadata: Mapping[str, object] | None = None,
    ) -> OperationResult:
        if theme_id == DEFAULT_THEME_ID or not self._registry.theme_exists(theme_id):
            return OperationResult.fail(
                ThemeError(ErrorCode.NOT_FOUND, message=f"Theme not found: {theme_id}")
            )

        try:
            storage.write_text(self._registry.theme_path(theme_id), css)
            if metadata is not None:
                self._write_updated_metadata(theme_id, metadata)
        except ThemeError as exc:
            logger.error("Error updating theme %s: %s", theme_id, exc)
            return OperationResult.fail(exc)

        if self._config_store.load().current_theme == theme_id:
            result = self._applier.apply_theme(theme_id)
            if not result.success:
                return result

        logger.info("Updated theme: %s", theme_id)
        return OperationResult.ok(theme_id)

    def delete_theme(self, theme_id: str) -> OperationResult:
        if theme_id == DEFAULT_THEME_ID:
            return OperationResult.fail(
                ThemeError(ErrorCode.FORBIDDEN, message="Cannot delete default theme")
            )
        if not self._registry.theme_exists(theme_id):
            return OperationResult.fail(
                ThemeError(ErrorCode.NOT_FOUND, message=f"Theme not found: {theme_id}")
            )

        try:
            storage.remove(self._registry.theme_path(theme_id))
            storage.remove(self._registry.sidecar_path(theme_id), missing_ok=True)
        except ThemeError as exc:
            logger.error("Error deleting theme %s: %s", theme_id, exc)
            return OperationResult.fail(exc)

        if self._config_store.load().current_theme == theme_id:
            result = self._applier.apply_theme(DEFAULT_THEME_ID)
            if not result.success:
                return result

        logger.info("Deleted theme: %s", theme_id)
        return OperationResult.ok()

    def export_theme(self, theme_id: str) -> ExportResult:
        try:
            css = self._applier.resolve_content(theme_id)
        except ThemeError as exc:
            return ExportResult(success=False, error=exc)

        meta = self._registry.get_theme(theme_id) or ThemeRecord(theme_id=theme_id, name=theme_id)
        return ExportResult(success=True, theme_id=theme_id, css=css, meta=meta)

    def _write_updated_metadata(self, theme_id: str, metadata: Mapping[str, object]) -> None:
        try:
            existing = dict(self._registry.read_sidecar(theme_id))
        except ThemeError as exc:
            logger.warning("Replacing unreadable metadata for %s: %s", theme_id, exc)
            existing = {}

        merged = dict(existing)
        for key in DISPLAY_FIELDS:
            value = _text(metadata, key)
            if value is not None:
                merged[key] = value
        merged.setdefault("author", DEFAULT_AUTHOR)
        merged.setdefault("description", DEFAULT_DESCRIPTION)
        merged["updatedAt"] = utc_timestamp()
        storage.write_json(self._registry.sidecar_path(theme_id), merged)

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            storage.remove(path, missing_ok=True)
        except ThemeError as exc:
            logger.error("Could not remove partial import %s: %s", path, exc)
