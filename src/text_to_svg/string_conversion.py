"""Quasi-private functions for high-level string conversion.

:author: Shay Hill
:created: 7/26/2020

Rounding some numbers to ensure quality svg rendering:
* Rounding floats to six digits after the decimal for svg dimensions
* Rounding floats to two digits after the decimal for glyph outlines

Nothing here escapes xml. Attribute values are written exactly as given, so callers
embedding untrusted strings in `attributes` must escape them first.
"""

from __future__ import annotations

import itertools as it
from typing import TYPE_CHECKING

import svg_path_data

from text_to_svg.nsmap import NSMAP

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from text_to_svg.attrib_hints import ElemAttrib


def format_number(num: float | str, resolution: int | None = 6) -> str:
    """Format a number into an svg-readable float string with resolution = 6.

    :param num: number to format (string or float)
    :param resolution: number of digits after the decimal point, defaults to 6. None
        to match behavior of `str(num)`.
    :return: string representation of the number with six digits after the decimal
        (if in fixed-point notation). Will return exponential notation when shorter.
    """
    return svg_path_data.format_number(num, resolution=resolution)


def format_numbers(
    nums: Iterable[float] | Iterable[str] | Iterable[float | str],
) -> list[str]:
    """Format multiple strings to limited precision.

    :param nums: iterable of floats
    :return: list of formatted strings
    """
    return [format_number(num) for num in nums]


def _format_val(val: ElemAttrib) -> str:
    """Format one attribute value.

    :param val: element attribute value
    :return: None as "none", numbers formatted, strings unchanged
    """
    if val is None:
        return "none"
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, (int, float)):
        return format_number(val)
    return val


def format_attr_dict(attributes: Mapping[str, ElemAttrib]) -> dict[str, str]:
    """Create a dict of string attribute values.

    :param attributes: element attribute names and values.
    :return: dict of attributes, each key as given, each value a str

    Unlike an lxml constructor, keys are not translated (`stroke_width` stays
    `stroke_width`) because they arrive in a mapping, not as keyword arguments.
    """
    return {k: _format_val(v) for k, v in attributes.items()}


def format_attr_string(attributes: Mapping[str, ElemAttrib]) -> str:
    """Serialize attributes as space-delimited `name="value"` pairs.

    :param attributes: element attribute names and values.
    :return: 'fill="red" stroke="none"' or an empty string
    """
    items = format_attr_dict(attributes).items()
    return " ".join(f'{k}="{v}"' for k, v in items)


def svg_open_tag(width: float, height: float) -> str:
    """Open an svg root element with the svg and xlink namespaces.

    :param width: width attribute of the svg element
    :param height: height attribute of the svg element
    :return: '<svg xmlns="..." xmlns:xlink="..." width="w" height="h">'
    """
    namespaces = " ".join(
        it.chain(
            (f'xmlns="{NSMAP[None]}"',),
            (f'xmlns:{k}="{v}"' for k, v in NSMAP.items() if k is not None),
        )
    )
    dims = format_attr_string({"width": width, "height": height})
    return f"<svg {namespaces} {dims}>"
