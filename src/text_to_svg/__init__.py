"""Import functions into the package namespace.

:author: ShayHill
:created: 2025-07-09
"""

from text_to_svg.anchor import Anchor, parse_anchor
from text_to_svg.exceptions import (
    FontLoadError,
    GlyphOutlineError,
    TextToSVGError,
    UnknownAnchorError,
)
from text_to_svg.font_tools.font_info import FTFontInfo, Glyph
from text_to_svg.font_tools.font_loader import DEFAULT_FONT
from text_to_svg.font_tools.glyph_path import GlyphPath
from text_to_svg.metrics import LineMetrics
from text_to_svg.nsmap import NSMAP, new_qname
from text_to_svg.options import TextOptions
from text_to_svg.string_conversion import format_number, format_numbers
from text_to_svg.text_to_svg import TextToSVG

__all__ = [
    "DEFAULT_FONT",
    "NSMAP",
    "Anchor",
    "FTFontInfo",
    "FontLoadError",
    "Glyph",
    "GlyphOutlineError",
    "GlyphPath",
    "LineMetrics",
    "TextOptions",
    "TextToSVG",
    "TextToSVGError",
    "UnknownAnchorError",
    "format_number",
    "format_numbers",
    "new_qname",
    "parse_anchor",
]
