"""Test configuration for pytest.

:author: Shay Hill
:created: 7/2/2019

`build_font` builds a small TrueType font with fontTools so every expected width,
height, and coordinate in the tests is a round number. The `font_path` fixture is
that font with one GPOS glyph-pair kerning rule. Tests that need other kerning or
vertical metrics call `build_font` themselves.

- units per em: 1000
- hhea ascender 800, descender -200 (OS/2 typo metrics match unless given)
- advances: .notdef 500, A 600, V 600, H 700, i 300, o 500, space 250
- GPOS kerning: A V -80
- A is a triangle (0, 0) (300, 700) (600, 0)
- o is drawn with quadratic curves
"""

from __future__ import annotations

import itertools as it
from typing import TYPE_CHECKING, Any

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import newTable
from fontTools.ttLib.tables._k_e_r_n import KernTable_format_0
from svg_path_data import get_cpts_from_svgd

from text_to_svg import TextToSVG

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from pathlib import Path


def pytest_assertrepr_compare(
    config: Any, op: str, left: str, right: str
) -> list[str] | None:
    """See full error diffs"""
    del config
    if op in ("==", "!="):
        return [f"{left} {op} {right}"]
    return None


UNITS_PER_EM = 1000
ASCENDER = 800
DESCENDER = -200
ADVANCES = {
    ".notdef": 500,
    "A": 600,
    "V": 600,
    "H": 700,
    "i": 300,
    "o": 500,
    "space": 250,
}
KERN_AV = -80

_CMAP = {ord(c): n for c, n in zip("AVHio ", ("A", "V", "H", "i", "o", "space"))}

PAIR_FEATURES = """
languagesystem DFLT dflt;
feature kern {
    pos A V -80;
} kern;
"""


def path_points(svgd: str) -> list[tuple[float, float]]:
    """Return every distinct point in svg path data, in order.

    Uses svg_path_data to expand H, V, and Z shorthand and implicit commands.
    """
    points: list[tuple[float, float]] = []
    for x, y in it.chain(*get_cpts_from_svgd(svgd)):
        if (x, y) not in points:
            points.append((x, y))
    return points


def _draw_polygon(pen: TTGlyphPen, *pts: tuple[int, int]) -> None:
    pen.moveTo(pts[0])
    for pt in pts[1:]:
        pen.lineTo(pt)
    pen.closePath()


def _build_glyphs() -> dict[str, Any]:
    """Return a dict of glyph name to glyf Glyph."""
    glyphs: dict[str, Any] = {}

    pen = TTGlyphPen(None)
    _draw_polygon(pen, (50, 0), (50, 700), (450, 700), (450, 0))
    glyphs[".notdef"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, (0, 0), (300, 700), (600, 0))
    glyphs["A"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, (0, 700), (600, 700), (300, 0))
    glyphs["V"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, (0, 0), (0, 700), (100, 700), (100, 0))
    _draw_polygon(pen, (600, 0), (600, 700), (700, 700), (700, 0))
    glyphs["H"] = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_polygon(pen, (100, 0), (100, 500), (200, 500), (200, 0))
    _draw_polygon(pen, (100, 600), (100, 700), (200, 700), (200, 600))
    glyphs["i"] = pen.glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((250, 0))
    pen.qCurveTo((450, 0), (450, 250))
    pen.qCurveTo((450, 500), (250, 500))
    pen.qCurveTo((50, 500), (50, 250))
    pen.qCurveTo((50, 0), (250, 0))
    pen.closePath()
    glyphs["o"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()
    return glyphs


def _new_kern_table(pairs: Mapping[tuple[str, str], int]) -> Any:
    """Return a legacy (version 0) kern table with one format 0 subtable."""
    subtable = KernTable_format_0()
    subtable.coverage = 1
    subtable.kernTable = dict(pairs)
    kern = newTable("kern")
    kern.version = 0
    kern.kernTables = [subtable]
    return kern


def build_font(
    path: Path,
    *,
    features: str = "",
    kern_pairs: Mapping[tuple[str, str], int] | None = None,
    typo_metrics: tuple[int, int] = (ASCENDER, DESCENDER),
) -> Path:
    """Build and save a test font.

    :param path: where to save the font
    :param features: OpenType feature code compiled into GSUB / GPOS
    :param kern_pairs: if given, pairs for a legacy kern table
    :param typo_metrics: OS/2 sTypoAscender and sTypoDescender
    :return: path
    """
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(list(ADVANCES))
    fb.setupCharacterMap(_CMAP)
    fb.setupGlyf(_build_glyphs())
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {n: (adv, getattr(glyf[n], "xMin", 0)) for n, adv in ADVANCES.items()}
    )
    fb.setupHorizontalHeader(ascent=ASCENDER, descent=DESCENDER)
    fb.setupNameTable({"familyName": "TextToSVGTest", "styleName": "Regular"})
    typo_ascender, typo_descender = typo_metrics
    fb.setupOS2(
        sTypoAscender=typo_ascender,
        sTypoDescender=typo_descender,
        usWinAscent=ASCENDER,
        usWinDescent=-DESCENDER,
    )
    fb.setupPost()
    if features:
        fb.addOpenTypeFeatures(features)
    if kern_pairs is not None:
        fb.font["kern"] = _new_kern_table(kern_pairs)
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Build and save the test font. Return its path."""
    path = tmp_path_factory.mktemp("fonts") / "TextToSVGTest.ttf"
    return build_font(path, features=PAIR_FEATURES)


@pytest.fixture
def t2s(font_path: Path) -> Iterator[TextToSVG]:
    """A TextToSVG instance with the test font."""
    with TextToSVG.load_sync(font_path) as text_to_svg:
        yield text_to_svg
