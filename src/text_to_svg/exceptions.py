"""Exceptions raised while loading fonts or laying out text.

:author: Shay Hill
:created: 2025-07-09

Every error the package raises on purpose is a TextToSVGError. Each also inherits from
the builtin a caller would otherwise expect (OSError for loading, ValueError for bad
input), so `except OSError` around a font load keeps working.
"""


class TextToSVGError(Exception):
    """Base class for text_to_svg errors."""


class FontLoadError(TextToSVGError, OSError):
    """A font file or url could not be read or parsed."""


class UnknownAnchorError(TextToSVGError, ValueError):
    """An anchor keyword resolved to something the layout cannot place.

    `parse_anchor` only returns known keywords, so this is raised only if the
    keyword sets and the offset tables fall out of step.
    """


class GlyphOutlineError(TextToSVGError, ValueError):
    """Glyph outline data could not be extracted from the font."""
