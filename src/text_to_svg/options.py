"""Per-call text layout options.

:author: Shay Hill
:created: 2025-07-09

Every TextToSVG query and render method takes a TextOptions instance, a mapping of
option names to values, or keyword arguments. All three are turned into a TextOptions
instance once, at the top of the public method, so nothing below has to check
whether an option is present.

Mapping keys may be given in snake_case (`font_size`) or camelCase (`fontSize`), so
option dictionaries from JSON configuration can be passed unchanged.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING

from paragraphs import par

from text_to_svg.anchor import Anchor, parse_anchor

if TYPE_CHECKING:
    from typing_extensions import Self

    from text_to_svg.attrib_hints import ElemAttrib, OptionValue

DEFAULT_FONT_SIZE = 72.0

_CAMEL_CASE_ALIASES = {
    "fontSize": "font_size",
    "letterSpacing": "letter_spacing",
}


@dataclasses.dataclass(frozen=True)
class TextOptions:
    """Layout options for one call.

    :param font_size: pixels per em. Font design units are scaled by
        font_size / units_per_em.
    :param kerning: apply kerning between adjacent glyphs.
    :param letter_spacing: extra space after each glyph as a fraction of font_size.
        Takes priority over tracking when both are set.
    :param tracking: extra space after each glyph in 1/1000 em.
    :param anchor: free-form string naming where (x, y) sits on the text, e.g.,
        "center middle". See `parse_anchor`.
    :param x: x coordinate of the anchor point
    :param y: y coordinate of the anchor point
    :param attributes: attributes written, unescaped, onto the output path
        element. Values are trusted. Escape anything from an untrusted source
        before passing it here.
    """

    font_size: float = DEFAULT_FONT_SIZE
    kerning: bool = True
    letter_spacing: float | None = None
    tracking: float | None = None
    anchor: str = ""
    x: float = 0
    y: float = 0
    attributes: Mapping[str, ElemAttrib] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate font_size and take a private copy of attributes."""
        if isinstance(self.font_size, bool) or not isinstance(
            self.font_size, (int, float)
        ):
            msg = f"font_size must be a number, not {self.font_size!r}."
            raise TypeError(msg)
        if self.font_size <= 0:
            msg = f"font_size must be greater than 0, not {self.font_size}."
            raise ValueError(msg)
        object.__setattr__(self, "attributes", dict(self.attributes))

    @property
    def anchor_keywords(self) -> Anchor:
        """Return the horizontal and vertical keywords found in anchor."""
        return parse_anchor(self.anchor)

    def replace(self, **changes: OptionValue) -> Self:
        """Return a copy with some fields changed."""
        return dataclasses.replace(self, **changes)  # pyright: ignore

    @classmethod
    def new(
        cls,
        options: TextOptions | Mapping[str, OptionValue] | None = None,
        **overrides: OptionValue,
    ) -> TextOptions:
        """Create a TextOptions instance from whatever the caller passed.

        :param options: an existing TextOptions instance, a mapping of option names
            to values, or None
        :param overrides: option names and values that replace anything in options
        :return: a new TextOptions instance (or options itself if there is nothing
            to change)
        :raises ValueError: if an option name is not recognized

        A None value means "not given". It leaves the default (or the value in
        options) in place.
        """
        if isinstance(options, TextOptions):
            base = options
            changes: dict[str, OptionValue] = {}
        else:
            base = None
            changes = dict(options or {})
        changes.update(overrides)
        changes = {_CAMEL_CASE_ALIASES.get(k, k): v for k, v in changes.items()}

        field_names = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(changes) - field_names)
        if unknown:
            msg = par(
                f"""Unrecognized text option(s): {", ".join(unknown)}. Expected some
                of: {", ".join(sorted(field_names))}."""
            )
            raise ValueError(msg)

        changes = {k: v for k, v in changes.items() if v is not None}
        if base is None:
            return cls(**changes)  # pyright: ignore[reportArgumentType]
        if not changes:
            return base
        return base.replace(**changes)
