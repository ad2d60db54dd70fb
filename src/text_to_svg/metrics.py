"""Measure text and resolve an anchor point into absolute coordinates.

:author: Shay Hill
:created: 2025-01-15

Every quantity read from the font is in font design units. It is multiplied by
`font_size / units_per_em` before it is combined with anything from TextOptions
(letter_spacing, x, y), which are already in pixels.

`get_metrics` measures a whole (possibly multi-line) block: the width is the widest
line and the height is the sum of line heights. `get_metrics_for_line` measures one
line and anchors it against its own width and height. Multi-line output places each
line with `get_metrics_for_line`, so each line is aligned horizontally on its own,
while the block metrics (used to size an svg root) are anchored against the whole
block. For vertical anchors other than "top" and "baseline", the two do not agree on
where the first line sits.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from text_to_svg.exceptions import UnknownAnchorError

if TYPE_CHECKING:
    from text_to_svg.font_tools.font_info import FTFontInfo
    from text_to_svg.options import TextOptions


@dataclasses.dataclass(frozen=True)
class LineMetrics:
    """Position and size of a line or block of text in pixels.

    :param x: left edge after anchoring
    :param y: top edge (the ascender line of the first line) after anchoring
    :param baseline: y + ascender
    :param width: advance width of the text (widest line for a block)
    :param height: ascender - descender (summed over lines for a block)
    :param ascender: distance from the top of a line to its baseline
    :param descender: distance from the baseline to the bottom of a line. This is
        usually negative.
    """

    x: float
    y: float
    baseline: float
    width: float
    height: float
    ascender: float
    descender: float


def split_lines(text: str) -> list[str]:
    """Split text into lines. There is always at least one line."""
    return text.split("\n")


def get_font_scale(font: FTFontInfo, font_size: float) -> float:
    """Return the factor that converts font design units to pixels."""
    return font_size / font.units_per_em


def get_width(font: FTFontInfo, text: str, options: TextOptions) -> float:
    """Return the advance width of a single line of text.

    :param font: the font to measure with
    :param text: a single line of text
    :param options: font_size, kerning, letter_spacing, and tracking are used
    :return: the sum of glyph advances, kerning, and per-glyph spacing in pixels

    Spacing is added after every glyph, including the last. This is the same pen
    movement `FTFontInfo.get_path` uses to place glyphs.
    """
    return font.get_advance(
        text,
        options.font_size,
        kerning=options.kerning,
        letter_spacing=options.letter_spacing,
        tracking=options.tracking,
    )


def get_height(font: FTFontInfo, font_size: float) -> float:
    """Return the height of one line of text in pixels.

    :param font: the font to measure with
    :param font_size: pixels per em
    :return: (ascender - descender) scaled to font_size. Independent of the text.
    """
    return (font.ascender - font.descender) * get_font_scale(font, font_size)


def _get_x_offset(horizontal: str, width: float) -> float:
    """Return the distance from the left edge of the text to the anchor point."""
    if horizontal == "left":
        return 0
    if horizontal == "center":
        return width / 2
    if horizontal == "right":
        return width
    msg = f"Unknown anchor option: {horizontal}"
    raise UnknownAnchorError(msg)


def _get_y_offset(vertical: str, ascender: float, height: float) -> float:
    """Return the distance from the top edge of the text to the anchor point."""
    if vertical == "baseline":
        return ascender
    if vertical == "top":
        return 0
    if vertical == "middle":
        return height / 2
    if vertical == "bottom":
        return height
    msg = f"Unknown anchor option: {vertical}"
    raise UnknownAnchorError(msg)


def _anchor(
    font: FTFontInfo, options: TextOptions, width: float, height: float
) -> LineMetrics:
    """Place a box of width x height so that its anchor point is at (x, y).

    :param font: the font to read ascender and descender from
    :param options: font_size, anchor, x, and y are used
    :param width: width of the text in pixels
    :param height: height of the text in pixels
    :return: LineMetrics for the anchored box
    """
    font_scale = get_font_scale(font, options.font_size)
    ascender = font.ascender * font_scale
    descender = font.descender * font_scale
    anchor = options.anchor_keywords

    x = options.x - _get_x_offset(anchor.horizontal, width)
    y = options.y - _get_y_offset(anchor.vertical, ascender, height)
    return LineMetrics(
        x=x,
        y=y,
        baseline=y + ascender,
        width=width,
        height=height,
        ascender=ascender,
        descender=descender,
    )


def get_metrics(font: FTFontInfo, text: str, options: TextOptions) -> LineMetrics:
    """Measure and anchor a block of text.

    :param font: the font to measure with
    :param text: one or more lines of text separated by "\\n"
    :param options: layout options
    :return: LineMetrics with the widest line width and the summed line heights
    """
    lines = split_lines(text)
    width = max(get_width(font, line, options) for line in lines)
    height = sum(get_height(font, options.font_size) for _ in lines)
    return _anchor(font, options, width, height)


def get_metrics_for_line(
    font: FTFontInfo, text: str, options: TextOptions
) -> LineMetrics:
    """Measure and anchor a single line of text.

    :param font: the font to measure with
    :param text: a single line of text
    :param options: layout options
    :return: LineMetrics anchored against this line's own width and height
    """
    width = get_width(font, text, options)
    height = get_height(font, options.font_size)
    return _anchor(font, options, width, height)
