"""Parse a free-form anchor string into horizontal and vertical keywords.

:author: Shay Hill
:created: 2025-07-09

An anchor is any string. "center middle", "Right-Bottom", and "top of the left
margin" are all valid. The first horizontal keyword and the first vertical keyword
found (case-insensitive, scanning left to right) are used. Missing keywords default
to "left" and "baseline".
"""

from __future__ import annotations

import re
from typing import Literal, NamedTuple

Horizontal = Literal["left", "center", "right"]
Vertical = Literal["baseline", "top", "bottom", "middle"]

HORIZONTAL_KEYWORDS: tuple[Horizontal, ...] = ("left", "center", "right")
VERTICAL_KEYWORDS: tuple[Vertical, ...] = ("baseline", "top", "bottom", "middle")

_HORIZONTAL = re.compile("|".join(HORIZONTAL_KEYWORDS), re.IGNORECASE)
_VERTICAL = re.compile("|".join(VERTICAL_KEYWORDS), re.IGNORECASE)


class Anchor(NamedTuple):
    """Resolved anchor keywords."""

    horizontal: Horizontal
    vertical: Vertical


def parse_anchor(anchor: str) -> Anchor:
    """Find the horizontal and vertical keywords in an anchor string.

    :param anchor: any string, e.g., "center middle"
    :return: Anchor("center", "middle"). Anchor("left", "baseline") if no keywords
        are found.
    """
    h_match = _HORIZONTAL.search(anchor)
    v_match = _VERTICAL.search(anchor)
    horizontal = h_match.group(0).lower() if h_match else "left"
    vertical = v_match.group(0).lower() if v_match else "baseline"
    return Anchor(horizontal, vertical)  # pyright: ignore[reportArgumentType]
