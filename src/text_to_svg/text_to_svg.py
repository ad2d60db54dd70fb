"""Convert text to svg path data with an outline font.

:author: Shay Hill
:created: 2025-07-09

A TextToSVG instance wraps one open font. Every query and render method is a pure
function of its arguments and that font, so one instance can be shared between
threads.

Every method that takes `options` accepts a TextOptions instance, a mapping of option
names to values, or None, plus keyword overrides:

```
t2s = TextToSVG.load_sync("font.ttf")
t2s.get_svg("Hello", font_size=48, anchor="center middle", x=100, y=50)
t2s.get_svg("Hello", {"fontSize": 48, "attributes": {"fill": "red"}})
```

Attribute values in `options.attributes` are written into the output without
escaping. Escape any untrusted values before passing them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from lxml import etree

from text_to_svg import metrics
from text_to_svg.font_tools.font_info import FTFontInfo
from text_to_svg.font_tools.font_loader import (
    DEFAULT_FONT,
    DEFAULT_TIMEOUT,
    open_font,
    submit_load,
)
from text_to_svg.options import DEFAULT_FONT_SIZE, TextOptions
from text_to_svg.string_conversion import (
    format_attr_string,
    format_numbers,
    svg_open_tag,
)

if TYPE_CHECKING:
    import os
    from collections.abc import Callable, Mapping
    from concurrent.futures import Future

    from lxml.etree import (
        _Element as EtreeElement,  # pyright: ignore[reportPrivateUsage]
    )
    from typing_extensions import Self

    from text_to_svg.attrib_hints import OptionValue
    from text_to_svg.font_tools.font_info import FontArg

OptionsArg: TypeAlias = "TextOptions | Mapping[str, OptionValue] | None"

# path data precision in digits after the decimal point
_PATH_DATA_DECIMAL_PLACES = 2

_AXIS_ATTRIBUTES = {"fill": "none", "stroke": "red", "stroke-width": 1}


class TextToSVG:
    """Lay out text and convert it to svg paths with one font."""

    def __init__(self, font: FontArg) -> None:
        """Wrap a font.

        :param font: an FTFontInfo instance, a fontTools TTFont, an open binary
            file, or a path to a ttf or otf file
        :raises FontLoadError: if font is a path that cannot be read or parsed
        """
        self._font = FTFontInfo(font)

    @classmethod
    def create(cls, font: FontArg) -> Self:
        """Wrap an already loaded font. Same as TextToSVG(font)."""
        return cls(font)

    @classmethod
    def load_sync(
        cls,
        path: str | os.PathLike[str] = DEFAULT_FONT,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Self:
        """Load a font and block until it is ready.

        :param path: path to a ttf or otf file, or a url. Defaults to the font
            bundled with this package.
        :param timeout: request timeout in seconds if path is a url
        :return: a new TextToSVG instance
        :raises FontLoadError: if the font cannot be read or parsed
        """
        return cls(open_font(path, timeout))

    @classmethod
    def load(
        cls,
        url: str | os.PathLike[str],
        callback: Callable[[BaseException | None, Self | None], object] | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Future[Self]:
        """Load a font in a worker thread.

        :param url: url or path to a ttf or otf file
        :param callback: optional function called exactly once, with
            (error, None) on failure or (None, text_to_svg) on success
        :param timeout: request timeout in seconds if url is a url
        :return: a Future resolving to a new TextToSVG instance. The Future raises
            FontLoadError if the font cannot be read or parsed.
        """
        return submit_load(lambda: cls(open_font(url, timeout)), callback)

    @property
    def font(self) -> FTFontInfo:
        """Return the wrapped font."""
        return self._font

    def close(self) -> None:
        """Close the font file if this instance (or its FTFontInfo) opened it."""
        self._font.maybe_close()

    def __enter__(self) -> Self:
        """Enter the context manager."""
        return self

    def __exit__(self, exc_type: object, exc_value: object, traceback: object) -> None:
        """Exit the context manager."""
        del exc_type, exc_value, traceback
        self.close()

    # ===============================================================================
    #   Measure
    # ===============================================================================

    def get_width(
        self, text: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> float:
        """Return the advance width of a single line of text in pixels."""
        return metrics.get_width(self._font, text, TextOptions.new(options, **kwargs))

    def get_height(self, font_size: float = DEFAULT_FONT_SIZE) -> float:
        """Return the height of one line of text in pixels.

        :param font_size: pixels per em. Must be greater than 0.
        :return: (ascender - descender) scaled to font_size
        """
        font_size = TextOptions(font_size=font_size).font_size
        return metrics.get_height(self._font, font_size)

    def get_metrics(
        self, text: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> metrics.LineMetrics:
        """Measure and anchor a block of text.

        :param text: one or more lines of text separated by "\\n"
        :param options: layout options
        :return: position and size of the whole block
        """
        opts = TextOptions.new(options, **kwargs)
        return metrics.get_metrics(self._font, text, opts)

    def get_metrics_for_line(
        self, text: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> metrics.LineMetrics:
        """Measure and anchor a single line of text against its own size."""
        return metrics.get_metrics_for_line(
            self._font, text, TextOptions.new(options, **kwargs)
        )

    # ===============================================================================
    #   Render
    # ===============================================================================

    def get_path_data(
        self, line: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> str:
        """Return the svg path data (`d` attribute) for a single line of text.

        :param line: a single line of text
        :param options: layout options
        :return: svg path data with coordinates rounded to two decimal places
        :raises GlyphOutlineError: if a glyph outline cannot be extracted
        """
        opts = TextOptions.new(options, **kwargs)
        line_metrics = metrics.get_metrics_for_line(self._font, line, opts)
        path = self._font.get_path(
            line,
            line_metrics.x,
            line_metrics.baseline,
            opts.font_size,
            kerning=opts.kerning,
            letter_spacing=opts.letter_spacing,
            tracking=opts.tracking,
        )
        return path.to_path_data(_PATH_DATA_DECIMAL_PLACES)

    get_d = get_path_data

    def get_path(
        self, text: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> str:
        """Return an svg path element for one or more lines of text.

        :param text: one or more lines of text separated by "\\n"
        :param options: layout options. Each line is anchored on its own, then
            moved down font_size pixels per line.
        :return: '<path fill="red" d="..."/>'. options.attributes are written
            without escaping.
        :raises GlyphOutlineError: if a glyph outline cannot be extracted
        """
        opts = TextOptions.new(options, **kwargs)
        svgds = [
            self.get_path_data(line, opts.replace(y=opts.y + opts.font_size * i))
            for i, line in enumerate(metrics.split_lines(text))
        ]
        svgd = " ".join(svgds)
        attributes = format_attr_string(opts.attributes)
        if attributes:
            return f'<path {attributes} d="{svgd}"/>'
        return f'<path d="{svgd}"/>'

    def get_svg(
        self, text: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> str:
        """Return an svg element sized to the text.

        :param text: one or more lines of text separated by "\\n"
        :param options: layout options
        :return: '<svg xmlns=... width="w" height="h"><path d="..."/></svg>'
        """
        opts = TextOptions.new(options, **kwargs)
        block = metrics.get_metrics(self._font, text, opts)
        path = self.get_path(text, opts)
        return svg_open_tag(block.width, block.height) + path + "</svg>"

    def get_debug_svg(
        self, text: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> str:
        """Return an svg element with the text and red lines through its anchor.

        :param text: one or more lines of text separated by "\\n"
        :param options: layout options
        :return: an svg element large enough to show the text and the anchor
            point, with the text shifted so nothing has a negative coordinate

        The horizontal line is drawn at the anchor y, the vertical line at the
        anchor x.
        """
        opts = TextOptions.new(options, **kwargs)
        block = metrics.get_metrics(self._font, text, opts)
        right = max(block.x + block.width, 0)
        bottom = max(block.y + block.height, 0)
        box_width = right - min(block.x, 0)
        box_height = bottom - min(block.y, 0)
        origin_x = box_width - right
        origin_y = box_height - bottom

        shifted = opts.replace(x=opts.x + origin_x, y=opts.y + origin_y)

        box_w, box_h, org_x, org_y = format_numbers(
            (box_width, box_height, origin_x, origin_y)
        )
        axis_attributes = format_attr_string(_AXIS_ATTRIBUTES)
        x_axis = f'<path {axis_attributes} d="M0,{org_y}L{box_w},{org_y}"/>'
        y_axis = f'<path {axis_attributes} d="M{org_x},0L{org_x},{box_h}"/>'
        return (
            svg_open_tag(box_width, box_height)
            + x_axis
            + y_axis
            + self.get_path(text, shifted)
            + "</svg>"
        )

    def get_svg_element(
        self, text: str, options: OptionsArg = None, **kwargs: OptionValue
    ) -> EtreeElement:
        """Return the output of `get_svg` as an lxml element.

        :raises lxml.etree.XMLSyntaxError: if options.attributes produced malformed
            markup
        """
        return etree.fromstring(self.get_svg(text, options, **kwargs))
