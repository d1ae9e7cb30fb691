"""Theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loginthemes.themes.constants import (
    BUILTIN_AUTHOR,
    BUILTIN_DESCRIPTION,
    BUILTIN_NAME,
    DEFAULT_AUTHOR,
    DEFAULT_THEME_ID,
)


@dataclass(frozen=True, slots=True)
class ThemeRecord:
    """Display-ready theme metadata."""

    theme_id: str
    name: str
    author: str = DEFAULT_AUTHOR
    description: str = ""
    version: str | None = None
    is_builtin: bool = False
    imported_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.theme_id,
            "name": self.name,
            "author": self.author,
            "description": self.description,
        }
        if self.version is not None:
            payload["version"] = self.version
        payload["isBuiltIn"] = self.is_builtin
        if self.imported_at is not None:
            payload["importedAt"] = self.imported_at
        if self.updated_at is not None:
            payload["updatedAt"] = self.updated_at
        return payload


BUILTIN_RECORD = ThemeRecord(
    theme_id=DEFAULT_THEME_ID,
    name=BUILTIN_NAME,
    author=BUILTIN_AUTHOR,
    description=BUILTIN_DESCRIPTION,
    is_builtin=True,
)


@dataclass(slots=True)
class ThemeConfig:
    """Persisted plugin state: which theme is active.

    ``themes`` is kept as read from disk and written back unchanged.
    """

    current_theme: str = DEFAULT_THEME_ID
    themes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"currentTheme": self.current_theme, "themes": self.themes}
