"""Raw file access for theme storage.

Every helper here raises :class:`ThemeError` on failure. Callers decide
whether a failure is reported to the user or downgraded to a default.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from loginthemes.errors import ErrorCode, ThemeError, classify_os_error


def read_text(path: Path) -> str:
    """Read a UTF-8 file without newline translation."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise classify_os_error(exc, path, "read") from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ThemeError(
            ErrorCode.PARSE_FAILURE,
            message=f"{path.name} is not valid UTF-8",
            path=path,
        ) from exc


def write_text(path: Path, content: str) -> None:
    """Overwrite a file with UTF-8 content, byte for byte."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
    except OSError as exc:
        raise classify_os_error(exc, path, "write") from exc


def copy_bytes(source: Path, dest: Path) -> None:
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(source.read_bytes())
    except OSError as exc:
        raise classify_os_error(exc, dest, "copy to") from exc


def remove(path: Path, *, missing_ok: bool = False) -> None:
    try:
        path.unlink(missing_ok=missing_ok)
    except OSError as exc:
        raise classify_os_error(exc, path, "delete") from exc


def read_json_object(path: Path) -> dict[str, Any]:
    """Load a JSON file that must hold an object."""
    content = read_text(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ThemeError(
            ErrorCode.PARSE_FAILURE,
            message=f"Invalid JSON in {path.name}: {exc}",
            path=path,
        ) from exc
    if not isinstance(data, dict):
        raise ThemeError(
            ErrorCode.PARSE_FAILURE,
            message=f"Expected JSON object in {path.name}",
            path=path,
        )
    return data


def write_json(path: Path, data: Mapping[str, Any]) -> None:
    write_text(path, json.dumps(data, indent=2, ensure_ascii=False))
