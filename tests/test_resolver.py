"""Unit tests for font_to_svg.fonts.resolver module."""

import os
from pathlib import Path

import pytest

from font_to_svg.exceptions import FontNotFoundError
from font_to_svg.fonts.resolver import FontInfo, FontResolver, sanitize_font_key


@pytest.fixture
def roots(tmp_path: Path) -> tuple[Path, Path]:
    """Empty fonts and uploads roots."""
    fonts = tmp_path / "fonts"
    uploads = tmp_path / "uploads"
    fonts.mkdir()
    uploads.mkdir()
    return fonts, uploads


def _touch(path: Path, size: int = 4) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path


class TestSanitizeFontKey:
    """Tests for key normalization."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("a.ttf", "a.ttf"),
            ("../../etc/passwd", "etc/passwd"),
            ("dir//sub\\font.otf", "dir/sub/font.otf"),
            ("./x/../y.ttf", "x/y.ttf"),
            ("/abs/font.ttf", "abs/font.ttf"),
            ("..", ""),
        ],
    )
    def test_drops_dot_segments(self, key, expected):
        """Verify empty, '.' and '..' segments are removed."""
        assert sanitize_font_key(key) == expected


class TestResolve:
    """Tests for candidate probing."""

    def test_candidates_in_priority_order(self, roots):
        """Verify fonts root, uploads root, then basenames under each."""
        fonts, uploads = roots
        resolver = FontResolver(fonts, uploads)
        assert resolver.candidates("458/Font.ttf") == [
            fonts / "458/Font.ttf",
            uploads / "458/Font.ttf",
            fonts / "Font.ttf",
            uploads / "Font.ttf",
        ]

    def test_fonts_root_wins(self, roots):
        """Verify a key present in both roots resolves to the fonts root."""
        fonts, uploads = roots
        _touch(fonts / "a.ttf")
        _touch(uploads / "a.ttf")
        assert FontResolver(fonts, uploads).resolve("a.ttf") == (fonts / "a.ttf").resolve()

    def test_uploads_before_basename(self, roots):
        """Verify the full key in uploads beats a basename match in fonts."""
        fonts, uploads = roots
        _touch(fonts / "a.ttf")
        _touch(uploads / "sub/a.ttf")
        assert FontResolver(fonts, uploads).resolve("sub/a.ttf") == (uploads / "sub/a.ttf").resolve()

    def test_basename_fallback(self, roots):
        """Verify an unknown directory falls back to the bare file name."""
        fonts, uploads = roots
        _touch(uploads / "b.otf")
        assert FontResolver(fonts, uploads).resolve("nested/dir/b.otf") == (uploads / "b.otf").resolve()

    def test_traversal_is_neutralized(self, roots, tmp_path):
        """Verify '..' cannot reach files outside the roots."""
        fonts, uploads = roots
        _touch(tmp_path / "secret.ttf")
        with pytest.raises(FontNotFoundError) as exc_info:
            FontResolver(fonts, uploads).resolve("../secret.ttf")
        assert exc_info.value.font_key == "../secret.ttf"
        assert len(exc_info.value.searched) == 4

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlink_escape_rejected(self, roots, tmp_path):
        """Verify a symlink pointing outside its root is not followed."""
        fonts, uploads = roots
        outside = _touch(tmp_path / "outside" / "evil.ttf")
        try:
            (fonts / "evil.ttf").symlink_to(outside)
        except OSError:
            pytest.skip("cannot create symlinks here")
        with pytest.raises(FontNotFoundError):
            FontResolver(fonts, uploads).resolve("evil.ttf")

    def test_directories_are_not_fonts(self, roots):
        """Verify a directory matching the key is skipped."""
        fonts, uploads = roots
        (fonts / "dir.ttf").mkdir()
        with pytest.raises(FontNotFoundError):
            FontResolver(fonts, uploads).resolve("dir.ttf")

    def test_default_font(self, roots):
        """Verify no key resolves the configured default under the fonts root."""
        fonts, uploads = roots
        _touch(fonts / "Default.otf")
        resolver = FontResolver(fonts, uploads, default_font="Default.otf")
        assert resolver.resolve() == (fonts / "Default.otf").resolve()
        assert resolver.resolve("") == (fonts / "Default.otf").resolve()

    def test_missing_default_font(self, roots):
        """Verify a missing default font raises FontNotFoundError."""
        fonts, uploads = roots
        with pytest.raises(FontNotFoundError, match="Default font not found"):
            FontResolver(fonts, uploads, default_font="Nope.otf").resolve()

    def test_from_config(self, config, font_path):
        """Verify the resolver built from config finds the fixture font."""
        assert FontResolver.from_config(config).resolve() == font_path.resolve()


class TestListFonts:
    """Tests for font discovery."""

    def test_lists_both_roots(self, roots):
        """Verify default fonts come first, then uploads, recursively."""
        fonts, uploads = roots
        _touch(fonts / "B.ttf")
        _touch(fonts / "A.OTF")
        _touch(uploads / "458" / "M.ttf")
        _touch(uploads / "notes.txt")
        listed = FontResolver(fonts, uploads).list_fonts()
        assert listed == [
            FontInfo(name="A", file="A.OTF", family="Default"),
            FontInfo(name="B", file="B.ttf", family="Default"),
            FontInfo(name="458/M", file="458/M.ttf", family="Uploaded"),
        ]

    def test_missing_roots(self, tmp_path):
        """Verify missing directories contribute nothing."""
        assert FontResolver(tmp_path / "x", tmp_path / "y").list_fonts() == []

    def test_listed_keys_resolve(self, roots):
        """Verify every listed file is usable as a font key."""
        fonts, uploads = roots
        _touch(uploads / "458" / "M.ttf")
        resolver = FontResolver(fonts, uploads)
        for info in resolver.list_fonts():
            assert resolver.resolve(info.file).name == "M.ttf"
