"""Pytest configuration and shared fixtures for font-to-svg tests.

The fixture font is generated once per session with fontTools FontBuilder:
unitsPerEm 1000, ascender 800, descender -200, every glyph advancing 600
units. Letters and digits are solid boxes [0,0]-[600,800] (no side bearing),
"|" is a narrow bar [200,0]-[400,800], space and .notdef are empty, and the
only kerning pair is A V = -100 (GPOS).
"""

import string
from pathlib import Path

import pytest
from fontTools.feaLib.builder import addOpenTypeFeaturesFromString
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from font_to_svg.config import Config
from font_to_svg.fonts.asset import FontAsset, load_font
from font_to_svg.fonts.cache import FontCache
from font_to_svg.fonts.resolver import FontResolver

UNITS_PER_EM = 1000
ASCENT = 800
DESCENT = -200
ADVANCE = 600

FIXTURE_FONT_FILE = "fixture.ttf"
KERNING_FEATURES = """
languagesystem DFLT dflt;
languagesystem latn dflt;
feature kern {
    pos A V -100;
} kern;
"""


def _rect_glyph(x0: int, y0: int, x1: int, y1: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def build_fixture_font(out_path: Path) -> Path:
    """Write the deterministic test font to out_path."""
    box_chars = string.ascii_uppercase + string.ascii_lowercase + string.digits
    box_names = [f"box_{ord(ch):04X}" for ch in box_chars]
    box_names = [ch if ch in string.ascii_uppercase else name for ch, name in zip(box_chars, box_names)]
    glyph_order = [".notdef", "space", "bar"] + box_names

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)

    glyf = {
        ".notdef": TTGlyphPen(None).glyph(),
        "space": TTGlyphPen(None).glyph(),
        "bar": _rect_glyph(200, 0, 400, 800),
    }
    for name in box_names:
        glyf[name] = _rect_glyph(0, 0, ADVANCE, ASCENT)
    fb.setupGlyf(glyf)

    # hmtx side bearings match each outline's xMin
    fb.setupHorizontalMetrics({name: (ADVANCE, 200 if name == "bar" else 0) for name in glyph_order})

    cmap = {0x20: "space", ord("|"): "bar"}
    cmap.update({ord(ch): name for ch, name in zip(box_chars, box_names)})
    fb.setupCharacterMap(cmap)

    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        usWinAscent=ASCENT,
        usWinDescent=-DESCENT,
    )
    fb.setupNameTable(
        {
            "familyName": "Fixture",
            "styleName": "Regular",
            "uniqueFontIdentifier": "Fixture-Regular",
            "fullName": "Fixture Regular",
            "psName": "Fixture-Regular",
            "version": "Version 1.000",
        }
    )
    fb.setupPost()
    addOpenTypeFeaturesFromString(fb.font, KERNING_FEATURES)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(out_path))
    return out_path


@pytest.fixture(scope="session")
def fonts_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Directory holding the fixture font, used as the default-fonts root."""
    root = tmp_path_factory.mktemp("fonts")
    build_fixture_font(root / FIXTURE_FONT_FILE)
    return root


@pytest.fixture(scope="session")
def font_path(fonts_dir: Path) -> Path:
    """Path of the generated fixture font."""
    return fonts_dir / FIXTURE_FONT_FILE


@pytest.fixture(scope="session")
def font(font_path: Path) -> FontAsset:
    """The fixture font parsed once per session."""
    return load_font(font_path)


@pytest.fixture
def uploads_dir(tmp_path: Path) -> Path:
    """An empty uploads root."""
    root = tmp_path / "uploads"
    root.mkdir()
    return root


@pytest.fixture
def config(fonts_dir: Path, uploads_dir: Path) -> Config:
    """Config pointing at the fixture font as the default font."""
    return Config(fonts_dir=fonts_dir, uploads_dir=uploads_dir, default_font=FIXTURE_FONT_FILE)


@pytest.fixture
def resolver(config: Config) -> FontResolver:
    return FontResolver.from_config(config)


@pytest.fixture
def font_cache(config: Config) -> FontCache:
    """A fresh FontCache over the fixture roots."""
    return FontCache.from_config(config)


@pytest.fixture
def config_file(tmp_path: Path, fonts_dir: Path, uploads_dir: Path) -> Path:
    """YAML config file equivalent to the config fixture."""
    path = tmp_path / "font2svg.yaml"
    path.write_text(
        f"fonts_dir: {fonts_dir.as_posix()}\n"
        f"uploads_dir: {uploads_dir.as_posix()}\n"
        f"default_font: {FIXTURE_FONT_FILE}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FONT2SVG_* variables from the outer environment out of tests."""
    for name in (
        "FONT2SVG_CONFIG",
        "FONT2SVG_FONTS_DIR",
        "FONT2SVG_UPLOADS_DIR",
        "FONT2SVG_DEFAULT_FONT",
        "FONT2SVG_CACHE_MAX_BYTES",
        "FONT2SVG_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
