"""Use fontTools to read glyph advances, kerning, and outlines from a font.

This is the only module that touches fontTools tables. Everything above it sees a
font as

- units_per_em, ascender, descender (font design units, +y is up)
- a run of text as a list of Glyph instances (one per code point)
- a kerning value for a pair of glyphs
- an outline path for a run of text, already scaled to a font size and moved to a
  baseline origin in svg coordinates (+y is down)

Text is not shaped. There are no ligatures, no contextual alternates, and no bidi
reordering. Each code point maps to one glyph through the font's best cmap. Code
points the font does not cover map to the first glyph in the glyph order (.notdef).

Kerning comes from the legacy `kern` table and from glyph-pair (Format 1) and
class-pair (Format 2) GPOS PairPos lookups. Other GPOS lookup types are ignored.

:author: Shay Hill
:created: 2025-05-31
"""

# pyright: reportUnknownMemberType = false
# pyright: reportAttributeAccessIssue = false
# pyright: reportUnknownArgumentType = false
# pyright: reportUnknownVariableType = false
# pyright: reportMissingTypeStubs = false

from __future__ import annotations

import functools as ft
import itertools as it
import logging
import os
import struct
import weakref
from contextlib import suppress
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO, NamedTuple, TypeAlias, cast

from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont, TTLibError
from paragraphs import par
from typing_extensions import Self

from text_to_svg.exceptions import FontLoadError, GlyphOutlineError
from text_to_svg.font_tools.glyph_path import GlyphPath

if TYPE_CHECKING:
    from collections.abc import Iterator

logging.getLogger("fontTools").setLevel(logging.ERROR)

_LOGGER = logging.getLogger(__name__)

# Errors fontTools raises (lazily, on first table access) for a malformed font.
_FONT_DATA_ERRORS = (
    TTLibError,
    struct.error,
    KeyError,
    IndexError,
    AttributeError,
    ValueError,
    AssertionError,
)

FontArg: TypeAlias = "str | os.PathLike[str] | BinaryIO | TTFont | FTFontInfo"


def get_spacing(
    font_size: float, letter_spacing: float | None, tracking: float | None
) -> float:
    """Return the extra space added after each glyph.

    :param font_size: pixels per em
    :param letter_spacing: fraction of font_size. Used if not None or 0.
    :param tracking: 1/1000 em. Used if letter_spacing is not used and tracking is
        not None or 0.
    :return: pixels added after each glyph
    """
    if letter_spacing:
        return letter_spacing * font_size
    if tracking:
        return tracking / 1000 * font_size
    return 0


def _iter_pair_pos_subtables(lookups: Any) -> Iterator[Any]:
    """Yield PairPos subtables, unwrapping Extension (type 9) lookups."""
    for lookup in lookups:
        for subtable in lookup.SubTable:
            if lookup.LookupType == 2:
                yield subtable
            elif lookup.LookupType == 9 and subtable.ExtensionLookupType == 2:
                yield subtable.ExtSubTable


class PairKerning:
    """Kerning values from one GPOS PairPos subtable.

    A subtable applies to a pair when the left glyph is in its coverage. Glyph-pair
    (Format 1) subtables then look up the right glyph. If it is not listed, the
    pair falls through to the next subtable. Class-pair (Format 2) subtables always
    give a value once the left glyph is covered. Glyphs missing from a class
    definition are in class 0, and feaLib routinely puts a whole left class there.
    """

    def __init__(self, subtable: Any) -> None:
        """Index a PairPos subtable.

        :param subtable: a fontTools otTables.PairPos instance, Format 1 or 2
        """
        self.format = cast("int", subtable.Format)
        self._coverage = set(cast("list[str]", subtable.Coverage.glyphs))
        self._pairs: dict[tuple[str, str], int] = {}
        self._class_defs_1: dict[str, int] = {}
        self._class_defs_2: dict[str, int] = {}
        self._class_1_records: list[Any] = []
        if self.format == 1:
            for pair_set, glyph1 in zip(
                subtable.PairSet, subtable.Coverage.glyphs, strict=True
            ):
                for pair_value in pair_set.PairValueRecord:
                    value = _get_x_advance(pair_value.Value1)
                    _ = self._pairs.setdefault((glyph1, pair_value.SecondGlyph), value)
        elif self.format == 2:
            self._class_defs_1 = dict(subtable.ClassDef1.classDefs)
            self._class_defs_2 = dict(subtable.ClassDef2.classDefs)
            self._class_1_records = list(subtable.Class1Record)

    def get(self, left: str, right: str) -> int | None:
        """Return the kerning value for a pair, None if this subtable does not apply.

        :param left: glyph name of the first glyph
        :param right: glyph name of the second glyph
        :return: horizontal adjustment in font design units or None
        """
        if left not in self._coverage:
            return None
        if self.format == 1:
            return self._pairs.get((left, right))
        class1 = self._class_defs_1.get(left, 0)
        class2 = self._class_defs_2.get(right, 0)
        if class1 >= len(self._class_1_records):
            return 0
        class2_records = self._class_1_records[class1].Class2Record
        if class2 >= len(class2_records):
            return 0
        return _get_x_advance(class2_records[class2].Value1)


def _get_gpos_kerning(font: TTFont) -> list[PairKerning]:
    """Extract the pair kerning subtables from the GPOS table of a font.

    :param font: A fontTools TTFont object.
    :return: PairKerning instances in lookup order. Empty if the font has no GPOS
        table.

    This is the more elaborate kerning that is used in OTF fonts and some TTF fonts.
    It has several flavors. Only glyph-pair (Format 1) and class-pair (Format 2)
    kerning are read. Kerning lookups are not filtered by feature, script, or
    language.
    """
    if "GPOS" not in font:
        return []
    gpos = font["GPOS"].table
    if gpos.LookupList is None:
        return []
    subtables = _iter_pair_pos_subtables(gpos.LookupList.Lookup)
    return [PairKerning(x) for x in subtables if x.Format in (1, 2)]


def _get_x_advance(value_record: Any) -> int:
    """Return the horizontal adjustment in a GPOS ValueRecord."""
    xadv = getattr(value_record, "XAdvance", None)
    xpla = getattr(value_record, "XPlacement", None)
    return xadv or xpla or 0


class Glyph(NamedTuple):
    """One glyph in a run of text."""

    char: str
    name: str
    advance_width: int


class ScaledPathPen(BasePen):
    """A pen to collect svg path commands from glyphs.

    Points are scaled from font design units and flipped into svg coordinates around
    a baseline origin (x, y).
    """

    def __init__(
        self, glyph_set: Any, x: float, y: float, scale: float, path: GlyphPath
    ) -> None:
        """Initialize the ScaledPathPen.

        :param glyph_set: TTFont(path).getGlyphSet()
        :param x: x coordinate of the glyph origin in svg coordinates
        :param y: y coordinate of the baseline in svg coordinates
        :param scale: font_size / units_per_em
        :param path: commands are appended to this path
        """
        super().__init__(glyph_set)
        self._x = x
        self._y = y
        self._scale = scale
        self.path = path

    def _xy(self, pt: tuple[float, float]) -> tuple[float, float]:
        px, py = pt
        return self._x + px * self._scale, self._y - py * self._scale

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.path.move_to(self._xy(pt))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.path.line_to(self._xy(pt))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.path.curve_to(self._xy(pt1), self._xy(pt2), self._xy(pt3))

    def _qCurveToOne(
        self, pt1: tuple[float, float], pt2: tuple[float, float]
    ) -> None:
        self.path.quad_to(self._xy(pt1), self._xy(pt2))

    def _closePath(self) -> None:
        self.path.close()


class FTFontInfo:
    """Hide all the type kludging necessary to use fontTools."""

    def __new__(cls, font: FontArg) -> Self:
        """Return an FTFontInfo argument unchanged."""
        if isinstance(font, FTFontInfo):
            return cast("Self", font)
        return super().__new__(cls)

    def __init__(self, font: FontArg) -> None:
        """Open a font from a path, a binary file object, or a TTFont instance.

        :param font: path to a ttf or otf file, an open binary file, or an already
            loaded fontTools TTFont. A TTFont passed in is not closed by this
            instance.
        :raises FontLoadError: if the file does not exist or cannot be parsed
        """
        if self is font:
            return
        self._path: Path | None = None
        if isinstance(font, TTFont):
            self._ttfont_local_to_instance = False
            self._font = font
        else:
            self._ttfont_local_to_instance = True
            if isinstance(font, (str, os.PathLike)):
                self._path = Path(font)
                if not self._path.is_file():
                    msg = f"Font file '{self._path}' does not exist."
                    raise FontLoadError(msg)
            try:
                self._font = TTFont(self._path or font)
            except (*_FONT_DATA_ERRORS, OSError) as e:
                msg = f"Failed to read font '{self.name}': {e}"
                raise FontLoadError(msg) from e
        self._finalizer = weakref.finalize(self, self._font.close)
        if not self._ttfont_local_to_instance:
            _ = self._finalizer.detach()
        self._validate()
        _LOGGER.debug("loaded font %s", self.name)

    def _validate(self) -> None:
        """Read every table layout needs so a bad font fails on load, not later.

        :raises FontLoadError: if a required table is missing or malformed
        """
        try:
            _ = self.units_per_em, self.ascender, self.descender
            _ = self.cmap, self.notdef, self.glyph_set
            _ = self.font["hmtx"].metrics
        except _FONT_DATA_ERRORS as e:
            self.maybe_close()
            msg = par(
                f"""Font '{self.name}' cannot be used for text layout. It is missing
                or has a malformed head, hhea, hmtx, or cmap table: {e}"""
            )
            raise FontLoadError(msg) from e

    def __close__(self) -> None:
        """Close the font file if this instance opened it."""
        self._finalizer()

    def maybe_close(self) -> None:
        """Close the TTFont instance if it is was opened by this instance."""
        if self._ttfont_local_to_instance:
            self.__close__()

    def __enter__(self) -> Self:
        """Enter the context manager."""
        return self

    def __exit__(self, exc_type: object, exc_value: object, traceback: object) -> None:
        """Exit the context manager."""
        del exc_type, exc_value, traceback
        self.maybe_close()

    @property
    def path(self) -> Path | None:
        """Return the path to the font file, if the font was read from a path."""
        return self._path

    @property
    def name(self) -> str:
        """Return a name for the font to use in messages."""
        if self._path is not None:
            return str(self._path)
        with suppress(*_FONT_DATA_ERRORS):
            return str(self.font["name"].getDebugName(4))
        return "<unnamed font>"

    @property
    def font(self) -> TTFont:
        """Return the fontTools TTFont object."""
        return self._font

    @ft.cached_property
    def units_per_em(self) -> int:
        """Get the units per em for the font.

        :return: The units per em for the font. For a ttf, this will usually
            (always?) be 2048 or 1000.
        :raises ValueError: If the font does not have a 'head' table or 'unitsPerEm'
            attribute.
        """
        try:
            maybe_units_per_em = cast("int | None", self.font["head"].unitsPerEm)
        except (KeyError, AttributeError) as e:
            msg = (
                f"Font '{self.name}' does not have"
                + f" 'head' table or 'unitsPerEm' attribute: {e}"
            )
            raise ValueError(msg) from e
        if not maybe_units_per_em:
            msg = f"Font '{self.name}' does not have 'unitsPerEm' defined."
            raise ValueError(msg)
        return maybe_units_per_em

    @ft.cached_property
    def ascender(self) -> int:
        """Get the ascender for the font.

        :return: hhea ascent, falling back to OS/2 typo ascender
        """
        with suppress(KeyError, AttributeError):
            return self.font["hhea"].ascent
        with suppress(KeyError, AttributeError):
            return self.font["OS/2"].sTypoAscender
        msg = f"Failed to find ascender for font '{self.name}'."
        raise AttributeError(msg)

    @ft.cached_property
    def descender(self) -> int:
        """Get the descender for the font.

        :return: hhea descent, falling back to OS/2 typo descender. This is
            usually negative.
        """
        with suppress(KeyError, AttributeError):
            return self.font["hhea"].descent
        with suppress(KeyError, AttributeError):
            return self.font["OS/2"].sTypoDescender
        msg = f"Failed to find descender for font '{self.name}'."
        raise AttributeError(msg)

    @ft.cached_property
    def cmap(self) -> dict[int, str]:
        """Map code points to glyph names."""
        char_map = cast("dict[int, str] | None", self.font.getBestCmap())
        if char_map is None:
            msg = f"Font '{self.name}' does not have a unicode cmap."
            raise KeyError(msg)
        return char_map

    @ft.cached_property
    def notdef(self) -> str:
        """Return the name of the glyph used for characters not in the font."""
        return cast("list[str]", self.font.getGlyphOrder())[0]

    @ft.cached_property
    def glyph_set(self) -> Any:
        """Return the fontTools glyph set."""
        return self.font.getGlyphSet()

    @ft.cached_property
    def kern_table(self) -> dict[tuple[str, str], int]:
        """Get the kerning pairs from the legacy kern table.

        :return: A dictionary mapping glyph pairs to their kerning values.

        If a font had multiple kern tables and the same pair were defined in
        multiple tables, the first occurrence wins.
        """
        try:
            kern_tables = cast(
                "list[dict[tuple[str, str], int]]",
                [x.kernTable for x in self.font["kern"].kernTables],
            )
        except (KeyError, AttributeError):
            return {}
        return dict(x for d in reversed(kern_tables) for x in d.items())

    @ft.cached_property
    def gpos_kerning(self) -> list[PairKerning]:
        """Get the GPOS pair kerning subtables in lookup order."""
        return _get_gpos_kerning(self.font)

    def try_glyph_name(self, char: str) -> str | None:
        """Try to get the glyph name for a character in the font.

        :param char: The character to get the glyph name for.
        :return: The glyph name for the character, or None if not found.
        """
        return self.cmap.get(ord(char))

    def get_glyph(self, char: str) -> Glyph:
        """Get the glyph for a character, or .notdef if the font lacks it."""
        name = self.try_glyph_name(char) or self.notdef
        hmtx = cast("dict[str, tuple[int, int]]", self.font["hmtx"])
        advance, _ = hmtx[name]
        return Glyph(char, name, advance)

    def string_to_glyphs(self, text: str) -> list[Glyph]:
        """Return one Glyph per code point in text."""
        return [self.get_glyph(c) for c in text]

    def get_kerning_value(self, left: Glyph | str, right: Glyph | str) -> int:
        """Return the kerning adjustment between two glyphs in font design units.

        :param left: a Glyph instance or glyph name
        :param right: a Glyph instance or glyph name
        :return: the kerning value, 0 if the pair is not kerned

        The first GPOS subtable that applies to the pair gives the value. The legacy
        kern table is only consulted if none does.
        """
        left_name = left.name if isinstance(left, Glyph) else left
        right_name = right.name if isinstance(right, Glyph) else right
        for subtable in self.gpos_kerning:
            value = subtable.get(left_name, right_name)
            if value is not None:
                return value
        return self.kern_table.get((left_name, right_name), 0)

    def get_glyph_path(
        self, glyph: Glyph, x: float, y: float, font_size: float
    ) -> GlyphPath:
        """Return the outline of one glyph.

        :param glyph: the glyph to draw
        :param x: x coordinate of the glyph origin
        :param y: y coordinate of the baseline
        :param font_size: pixels per em
        :return: the glyph outline in svg coordinates
        :raises GlyphOutlineError: if fontTools cannot draw the glyph
        """
        path = GlyphPath()
        pen = ScaledPathPen(self.glyph_set, x, y, font_size / self.units_per_em, path)
        try:
            self.glyph_set[glyph.name].draw(pen)
        except (*_FONT_DATA_ERRORS, NotImplementedError) as e:
            msg = par(
                f"""Failed to extract the outline of glyph '{glyph.name}' (for
                {glyph.char!r}) from font '{self.name}': {e}"""
            )
            raise GlyphOutlineError(msg) from e
        return path

    def _iter_pen_positions(
        self,
        glyphs: list[Glyph],
        x: float,
        font_size: float,
        *,
        kerning: bool,
        letter_spacing: float | None,
        tracking: float | None,
    ) -> Iterator[float]:
        """Yield the pen x before each glyph, then the pen x after the last glyph.

        Each glyph moves the pen by its advance, the kerning between it and the next
        glyph, and the letter spacing or tracking. Spacing follows every glyph,
        including the last.
        """
        font_scale = font_size / self.units_per_em
        spacing = get_spacing(font_size, letter_spacing, tracking)
        for glyph, next_glyph in it.zip_longest(glyphs, glyphs[1:]):
            yield x
            if glyph.advance_width:
                x += glyph.advance_width * font_scale
            if kerning and next_glyph is not None:
                x += self.get_kerning_value(glyph, next_glyph) * font_scale
            x += spacing
        yield x

    def iter_glyph_positions(
        self,
        text: str,
        x: float = 0,
        font_size: float = 72,
        *,
        kerning: bool = True,
        letter_spacing: float | None = None,
        tracking: float | None = None,
    ) -> Iterator[tuple[Glyph, float]]:
        """Yield each glyph in text with the x coordinate of its origin.

        :param text: a single line of text
        :param x: x coordinate of the first glyph origin
        :param font_size: pixels per em
        :param kerning: apply kerning between adjacent glyphs
        :param letter_spacing: extra space after each glyph as a fraction of
            font_size
        :param tracking: extra space after each glyph in 1/1000 em
        :return: (glyph, x) tuples
        """
        glyphs = self.string_to_glyphs(text)
        positions = self._iter_pen_positions(
            glyphs,
            x,
            font_size,
            kerning=kerning,
            letter_spacing=letter_spacing,
            tracking=tracking,
        )
        yield from zip(glyphs, positions)

    def get_advance(
        self,
        text: str,
        font_size: float = 72,
        *,
        kerning: bool = True,
        letter_spacing: float | None = None,
        tracking: float | None = None,
    ) -> float:
        """Return how far a single line of text moves the pen.

        :param text: a single line of text
        :param font_size: pixels per em
        :param kerning: apply kerning between adjacent glyphs
        :param letter_spacing: extra space after each glyph as a fraction of
            font_size
        :param tracking: extra space after each glyph in 1/1000 em
        :return: the sum of glyph advances, kerning, and spacing in pixels. This is
            where `get_path` would place one more glyph.
        """
        *_, end = self._iter_pen_positions(
            self.string_to_glyphs(text),
            0.0,
            font_size,
            kerning=kerning,
            letter_spacing=letter_spacing,
            tracking=tracking,
        )
        return end

    def get_path(
        self,
        text: str,
        x: float = 0,
        y: float = 0,
        font_size: float = 72,
        *,
        kerning: bool = True,
        letter_spacing: float | None = None,
        tracking: float | None = None,
    ) -> GlyphPath:
        """Return the outline of a single line of text.

        :param text: a single line of text
        :param x: x coordinate of the first glyph origin
        :param y: y coordinate of the baseline
        :param font_size: pixels per em
        :param kerning: apply kerning between adjacent glyphs
        :param letter_spacing: extra space after each glyph as a fraction of
            font_size
        :param tracking: extra space after each glyph in 1/1000 em
        :return: the outline of every glyph in text, in svg coordinates
        :raises GlyphOutlineError: if fontTools cannot draw a glyph
        """
        path = GlyphPath()
        positions = self.iter_glyph_positions(
            text,
            x,
            font_size,
            kerning=kerning,
            letter_spacing=letter_spacing,
            tracking=tracking,
        )
        for glyph, glyph_x in positions:
            path.extend(self.get_glyph_path(glyph, glyph_x, y, font_size))
        return path
