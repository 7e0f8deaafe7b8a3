"""Exception hierarchy for font-to-svg.

All library errors derive from FontToSvgError so callers can catch a single
type at the boundary (CLI, web handler) and map it to a user-facing response.
None of these are retried internally: repeating a resolution or a parse with
the same inputs cannot succeed.
"""

from __future__ import annotations

from pathlib import Path


class FontToSvgError(Exception):
    """Base exception for all font-to-svg errors."""


class FontNotFoundError(FontToSvgError):
    """Raised when no candidate path resolves to an existing font file."""

    def __init__(
        self,
        font_key: str | None,
        searched: list[Path] | None = None,
        message: str | None = None,
    ) -> None:
        self.font_key = font_key
        self.searched = list(searched or [])
        if message is None:
            message = f"Font not found: {font_key or 'default'}"
        super().__init__(message)


class FontParseError(FontToSvgError):
    """Raised when a font file exists but cannot be parsed."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = f" '{self.path}'" if self.path is not None else ""
        super().__init__(f"Invalid font{where}: {reason}")


class UnknownAnchorOptionError(FontToSvgError, ValueError):
    """Raised when an anchor axis value is not one of the recognized literals."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"Unknown anchor option: {option}")


class InvalidOptionError(FontToSvgError, ValueError):
    """Raised when a text option has an invalid type or value."""

    def __init__(self, option: str, reason: str) -> None:
        self.option = option
        self.reason = reason
        super().__init__(f"Invalid option '{option}': {reason}")


class ConfigError(FontToSvgError):
    """Raised when configuration cannot be loaded or holds invalid values."""
