"""Error codes and result types for the login theme manager."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from loginthemes.themes.models import ThemeRecord


class ErrorCode(Enum):
    """Standardized failure kinds for theme operations."""

    INVALID_INPUT = auto()
    NOT_FOUND = auto()
    CONFLICT = auto()
    FORBIDDEN = auto()
    IO_FAILURE = auto()
    PARSE_FAILURE = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_INPUT: "Invalid input.",
    ErrorCode.NOT_FOUND: "Theme not found.",
    ErrorCode.CONFLICT: "A theme with this name already exists.",
    ErrorCode.FORBIDDEN: "This operation is not allowed.",
    ErrorCode.IO_FAILURE: "Could not read or write theme storage.",
    ErrorCode.PARSE_FAILURE: "Stored data is malformed.",
}


@dataclass
class ThemeError(Exception):
    """Base exception for theme operations with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f" (file: {self.path})")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" [{details_str}]")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or API display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
        }


def classify_os_error(exc: OSError, path: Path | None = None, action: str = "access") -> ThemeError:
    """Wrap a filesystem exception into an IO_FAILURE ThemeError."""
    reason = exc.strerror or type(exc).__name__
    return ThemeError(
        ErrorCode.IO_FAILURE,
        message=f"Failed to {action} {path.name if path else 'file'}: {reason}",
        path=path,
        details={"original": str(exc)},
    )


@dataclass
class OperationResult:
    """Outcome of a mutating theme operation.

    Expected failures (missing theme, name conflict, I/O errors) are carried
    in ``error`` instead of being raised.
    """

    success: bool
    theme_id: str | None = None
    error: ThemeError | None = None

    @classmethod
    def ok(cls, theme_id: str | None = None) -> OperationResult:
        return cls(success=True, theme_id=theme_id)

    @classmethod
    def fail(cls, error: ThemeError) -> OperationResult:
        return cls(success=False, error=error)

    @property
    def code(self) -> ErrorCode | None:
        return self.error.code if self.error else None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""

    def to_dict(self, id_key: str = "themeId") -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.message}
        payload: dict[str, Any] = {"success": True}
        if self.theme_id is not None:
            payload[id_key] = self.theme_id
        return payload


@dataclass
class ExportResult(OperationResult):
    """Exported stylesheet paired with its display record."""

    css: str = ""
    meta: ThemeRecord | None = None

    def to_dict(self, id_key: str = "themeId") -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.message}
        return {
            "success": True,
            "css": self.css,
            "meta": self.meta.to_dict() if self.meta else None,
        }
