"""Absolute svg path commands collected from glyph outlines.

:author: Shay Hill
:created: 2025-07-09
"""

from __future__ import annotations

import itertools as it
from typing import TYPE_CHECKING, Literal, NamedTuple

from svg_path_data import format_svgd_absolute

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_XYTuple = tuple[float, float]

PathCommandType = Literal["M", "L", "C", "Q", "Z"]


class PathCommand(NamedTuple):
    """One absolute path command and its points."""

    cmd: PathCommandType
    pts: tuple[_XYTuple, ...] = ()


class GlyphPath:
    """An outline path in svg coordinates (+y is down)."""

    def __init__(self, commands: Iterable[PathCommand] = ()) -> None:
        """Initialize with an optional sequence of commands."""
        self.commands: list[PathCommand] = list(commands)

    def __iter__(self) -> Iterator[PathCommand]:
        """Iterate over the commands."""
        return iter(self.commands)

    def __len__(self) -> int:
        """Return the number of commands."""
        return len(self.commands)

    def move_to(self, pt: _XYTuple) -> None:
        """Start a new subpath."""
        self.commands.append(PathCommand("M", (pt,)))

    def line_to(self, pt: _XYTuple) -> None:
        """Add a line segment."""
        self.commands.append(PathCommand("L", (pt,)))

    def curve_to(self, pt1: _XYTuple, pt2: _XYTuple, pt3: _XYTuple) -> None:
        """Add a cubic Bezier segment."""
        self.commands.append(PathCommand("C", (pt1, pt2, pt3)))

    def quad_to(self, pt1: _XYTuple, pt2: _XYTuple) -> None:
        """Add a quadratic Bezier segment."""
        self.commands.append(PathCommand("Q", (pt1, pt2)))

    def close(self) -> None:
        """Close the current subpath."""
        self.commands.append(PathCommand("Z"))

    def extend(self, other: GlyphPath) -> None:
        """Append the commands of another path."""
        self.commands.extend(other.commands)

    def to_path_data(self, decimal_places: int = 2) -> str:
        """Return an absolute svg path data string.

        :param decimal_places: number of digits after the decimal point
        :return: svg path data, e.g., "M10 20 30-5Z". An empty string for an empty
            path.

        svg_path_data writes the shortest absolute form, so repeated command
        letters are dropped and a line may be written as H, V, or Z.
        """
        svgd = " ".join(
            " ".join((cmd, *map(str, it.chain(*pts)))) for cmd, pts in self.commands
        )
        return format_svgd_absolute(svgd, resolution=decimal_places)
