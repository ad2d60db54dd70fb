"""xml namespace entries for svg output.

:author: Shay Hill
:created: 1/14/2021

Only the two namespaces declared on every svg root this package writes.
"""

from __future__ import annotations

from lxml.etree import QName

_SVG_NAMESPACE = "http://www.w3.org/2000/svg"
NSMAP = {
    None: _SVG_NAMESPACE,
    "xlink": "http://www.w3.org/1999/xlink",
}


def new_qname(namespace_abbreviation: str | None, tag: str) -> QName:
    """Create a qualified name for an svg element.

    :param namespace_abbreviation: The namespace abbreviation. This
        will have to be a key in NSMAP (None or "xlink").
    :param tag: The tag name of the element.
    :return: A qualified name for the element.
    """
    return QName(NSMAP[namespace_abbreviation], tag)
