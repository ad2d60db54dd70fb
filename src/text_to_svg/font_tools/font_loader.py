"""Open fonts from local paths or urls, blocking or in a worker thread.

:author: Shay Hill
:created: 2025-07-09

`open_font` blocks. `submit_load` runs any loading function in a worker thread and
returns a Future. If a callback is given, it is called exactly once, with either
(error, None) or (None, result), when the Future is done.
"""

from __future__ import annotations

import io
import logging
import urllib.error
import urllib.request
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import urlparse

from text_to_svg.exceptions import FontLoadError
from text_to_svg.font_tools.font_info import FTFontInfo

if TYPE_CHECKING:
    import os
    from collections.abc import Callable

_LOGGER = logging.getLogger(__name__)

R = TypeVar("R")

# Bundled with the package. Lato is released under the SIL Open Font License.
DEFAULT_FONT = Path(__file__).parent.parent / "fonts" / "Lato-Regular.ttf"

# Default timeout for url requests (seconds)
DEFAULT_TIMEOUT = 30

_URL_SCHEMES = {"http", "https", "file"}


def is_url(source: str | os.PathLike[str]) -> bool:
    """Return True if source is an http, https, or file url."""
    if not isinstance(source, str):
        return False
    return urlparse(source.strip()).scheme.lower() in _URL_SCHEMES


def fetch_font_bytes(url: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Download the contents of a font file.

    :param url: http, https, or file url
    :param timeout: request timeout in seconds
    :return: the font file contents
    :raises FontLoadError: if the request fails or returns nothing
    """
    _LOGGER.debug("fetching font %s", url)
    try:
        with urllib.request.urlopen(url.strip(), timeout=timeout) as response:
            data = response.read()
    except urllib.error.HTTPError as e:
        msg = f"HTTP {e.code} fetching font '{url}': {e.reason}"
        raise FontLoadError(msg) from e
    except urllib.error.URLError as e:
        msg = f"Failed to fetch font '{url}': {e.reason}"
        raise FontLoadError(msg) from e
    except (TimeoutError, OSError, ValueError) as e:
        msg = f"Failed to fetch font '{url}': {e}"
        raise FontLoadError(msg) from e
    if not data:
        msg = f"Font url '{url}' returned no data."
        raise FontLoadError(msg)
    return data


def open_font(
    source: str | os.PathLike[str] = DEFAULT_FONT, timeout: float = DEFAULT_TIMEOUT
) -> FTFontInfo:
    """Open a font from a path or url. Block until done.

    :param source: path to a ttf or otf file, or a url
    :param timeout: request timeout in seconds if source is a url
    :return: an open FTFontInfo instance
    :raises FontLoadError: if the font cannot be read or parsed
    """
    if is_url(source):
        return FTFontInfo(io.BytesIO(fetch_font_bytes(str(source), timeout)))
    return FTFontInfo(source)


def submit_load(
    load: Callable[[], R],
    callback: Callable[[BaseException | None, R | None], object] | None = None,
) -> Future[R]:
    """Run a loading function in a worker thread.

    :param load: function that returns a loaded object or raises
    :param callback: optional function called exactly once with (error, None) or
        (None, result)
    :return: a Future resolving to the result of load
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="text_to_svg")
    future = executor.submit(load)
    executor.shutdown(wait=False)

    def _on_done(done: Future[R]) -> None:
        error = CancelledError() if done.cancelled() else done.exception()
        if error is not None:
            _LOGGER.warning("asynchronous font load failed: %s", error)
        if callback is None:
            return
        if error is not None:
            callback(error, None)
        else:
            callback(None, done.result())

    future.add_done_callback(_on_done)
    return future
