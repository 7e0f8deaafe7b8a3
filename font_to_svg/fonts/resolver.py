#!/usr/bin/env python3
"""
Font resolution utilities.

Maps a requested font key (a path relative to one of the font roots, e.g.
"458/MPLUS2-Light.ttf") to a file on disk, and lists the fonts available
under the roots.

Candidates are probed in priority order:
    1. key under the default-fonts root
    2. key under the uploads root
    3. basename of key under the default-fonts root
    4. basename of key under the uploads root

Every candidate is canonicalized (symlinks and ".." resolved) and rejected
unless it is still inside its root, so a key can never reach outside the
font directories.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePath

from font_to_svg.config import DEFAULT_FONT_FILE, Config
from font_to_svg.exceptions import FontNotFoundError

FONT_SUFFIXES = (".ttf", ".otf")


@dataclass(frozen=True)
class FontInfo:
    name: str
    file: str
    family: str
    style: str = "Regular"


def sanitize_font_key(font_key: str) -> str:
    """Drop empty, "." and ".." segments and normalize separators to "/"."""
    parts = re.split(r"[\\/]+", font_key)
    return "/".join(p for p in parts if p not in ("", ".", ".."))


class FontResolver:
    """Resolves font keys against the default-fonts and uploads roots."""

    def __init__(
        self,
        fonts_dir: Path | str,
        uploads_dir: Path | str,
        default_font: str = DEFAULT_FONT_FILE,
    ) -> None:
        self.fonts_dir = Path(fonts_dir)
        self.uploads_dir = Path(uploads_dir)
        self.default_font = default_font

    @classmethod
    def from_config(cls, config: Config) -> FontResolver:
        return cls(config.fonts_dir, config.uploads_dir, config.default_font)

    def candidates(self, font_key: str) -> list[Path]:
        """Candidate paths for a key, highest priority first."""
        sanitized = sanitize_font_key(font_key)
        if not sanitized:
            return []
        basename = PurePath(sanitized).name
        return [
            self.fonts_dir / sanitized,
            self.uploads_dir / sanitized,
            self.fonts_dir / basename,
            self.uploads_dir / basename,
        ]

    def resolve(self, font_key: str | None = None) -> Path:
        """Resolve a key (or the default font when None) to an existing file.

        Raises:
            FontNotFoundError: If no contained candidate exists.
        """
        if not font_key:
            default_path = self.fonts_dir / self.default_font
            found = self._contained_file(default_path, self.fonts_dir)
            if found is None:
                raise FontNotFoundError(None, [default_path], f"Default font not found: {default_path}")
            return found

        searched = self.candidates(font_key)
        roots = [self.fonts_dir, self.uploads_dir, self.fonts_dir, self.uploads_dir]
        for candidate, root in zip(searched, roots):
            found = self._contained_file(candidate, root)
            if found is not None:
                return found
        raise FontNotFoundError(font_key, searched)

    @staticmethod
    def _contained_file(candidate: Path, root: Path) -> Path | None:
        try:
            real_root = root.resolve()
            real = candidate.resolve()
        except (OSError, RuntimeError):
            return None
        if real != real_root and real_root not in real.parents:
            return None
        return real if real.is_file() else None

    def list_fonts(self) -> list[FontInfo]:
        """All .ttf/.otf files under the roots, default fonts first."""
        fonts: list[FontInfo] = []
        for root, family in ((self.fonts_dir, "Default"), (self.uploads_dir, "Uploaded")):
            fonts.extend(self._scan(root, family))
        return fonts

    @staticmethod
    def _scan(root: Path, family: str) -> list[FontInfo]:
        if not root.is_dir():
            return []
        found = []
        for path in sorted(root.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in FONT_SUFFIXES:
                continue
            relative = path.relative_to(root)
            found.append(
                FontInfo(
                    name=relative.with_suffix("").as_posix(),
                    file=relative.as_posix(),
                    family=family,
                )
            )
        return found
