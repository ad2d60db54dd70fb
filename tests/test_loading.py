"""Test blocking and asynchronous font loading.

:author: Shay Hill
:created: 2025-07-09
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest
from fontTools.ttLib import TTFont

from text_to_svg import DEFAULT_FONT, FontLoadError, FTFontInfo, TextToSVG
from text_to_svg.font_tools.font_loader import is_url

if TYPE_CHECKING:
    from pathlib import Path

_WAIT = 10


class _Recorder:
    """Record every call to a load callback."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException | None, TextToSVG | None]] = []
        self.called = threading.Event()

    def __call__(self, error: BaseException | None, result: TextToSVG | None) -> None:
        self.calls.append((error, result))
        self.called.set()


class TestLoadSync:
    def test_default_font(self):
        """Load the bundled font when no path is given."""
        with TextToSVG.load_sync() as t2s:
            assert t2s.font.path == DEFAULT_FONT
            assert t2s.get_width("Hello") > 0
            assert t2s.get_path_data("Hello")

    def test_default_font_license(self):
        """Ship the license and copyright notice beside the bundled font."""
        license_text = (DEFAULT_FONT.parent / "OFL.txt").read_text(encoding="utf-8")
        assert 'Reserved Font Name "Lato"' in license_text
        assert "SIL OPEN FONT LICENSE Version 1.1" in license_text

    def test_path(self, font_path: Path):
        """Load from a path."""
        with TextToSVG.load_sync(font_path) as t2s:
            assert t2s.font.units_per_em == 1000

    def test_str_path(self, font_path: Path):
        """Load from a str path."""
        with TextToSVG.load_sync(str(font_path)) as t2s:
            assert t2s.get_height(100) == pytest.approx(100)

    def test_file_url(self, font_path: Path):
        """Load from a file url."""
        with TextToSVG.load_sync(font_path.as_uri()) as t2s:
            assert t2s.font.path is None
            assert t2s.get_width("A", font_size=100) == pytest.approx(60)

    def test_missing(self, tmp_path: Path):
        """Raise FontLoadError for a path that does not exist."""
        with pytest.raises(FontLoadError):
            _ = TextToSVG.load_sync(tmp_path / "missing.ttf")

    def test_missing_file_url(self, tmp_path: Path):
        """Raise FontLoadError for a file url that does not exist."""
        with pytest.raises(FontLoadError):
            _ = TextToSVG.load_sync((tmp_path / "missing.ttf").as_uri())

    def test_not_a_font(self, tmp_path: Path):
        """Raise FontLoadError for a file that is not a font."""
        path = tmp_path / "not_a_font.ttf"
        _ = path.write_bytes(b"this is not a font")
        with pytest.raises(FontLoadError):
            _ = TextToSVG.load_sync(path)


class TestCreate:
    def test_font_info(self, font_path: Path):
        """Wrap an FTFontInfo instance without copying it."""
        with FTFontInfo(font_path) as font_info:
            t2s = TextToSVG.create(font_info)
            assert t2s.font is font_info

    def test_ttfont(self, font_path: Path):
        """Wrap a TTFont and leave it open when closed."""
        ttfont = TTFont(font_path)
        with TextToSVG.create(ttfont) as t2s:
            assert t2s.font.font is ttfont
        assert ttfont["head"].unitsPerEm == 1000
        ttfont.close()


class TestLoad:
    def test_future(self, font_path: Path):
        """Resolve to a TextToSVG instance."""
        future = TextToSVG.load(font_path)
        with future.result(timeout=_WAIT) as t2s:
            assert t2s.get_width("AV", font_size=100) == pytest.approx(112)

    def test_file_url(self, font_path: Path):
        """Load a file url in a worker thread."""
        future = TextToSVG.load(font_path.as_uri())
        with future.result(timeout=_WAIT) as t2s:
            assert t2s.font.units_per_em == 1000

    def test_callback_success(self, font_path: Path):
        """Call back once with (None, result)."""
        recorder = _Recorder()
        future = TextToSVG.load(font_path, recorder)
        t2s = future.result(timeout=_WAIT)
        assert recorder.called.wait(_WAIT)
        assert recorder.calls == [(None, t2s)]
        t2s.close()

    def test_future_error(self, tmp_path: Path):
        """Raise FontLoadError from the Future."""
        future = TextToSVG.load(tmp_path / "missing.ttf")
        with pytest.raises(FontLoadError):
            _ = future.result(timeout=_WAIT)

    def test_callback_error(self, tmp_path: Path):
        """Call back once with (error, None)."""
        recorder = _Recorder()
        future = TextToSVG.load(tmp_path / "missing.ttf", recorder)
        assert isinstance(future.exception(timeout=_WAIT), FontLoadError)
        assert recorder.called.wait(_WAIT)
        assert len(recorder.calls) == 1
        error, result = recorder.calls[0]
        assert isinstance(error, FontLoadError)
        assert result is None

    def test_failure_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        """Log a warning when an asynchronous load fails."""
        recorder = _Recorder()
        future = TextToSVG.load(tmp_path / "missing.ttf", recorder)
        _ = future.exception(timeout=_WAIT)
        assert recorder.called.wait(_WAIT)
        assert any(r.levelname == "WARNING" for r in caplog.records)


class TestIsUrl:
    @pytest.mark.parametrize(
        "source", ["http://example.com/a.ttf", "HTTPS://example.com/a.ttf", "file:///a"]
    )
    def test_url(self, source: str):
        assert is_url(source)

    @pytest.mark.parametrize("source", ["a.ttf", "/fonts/a.ttf", "C:fonts/a.ttf"])
    def test_not_url(self, source: str):
        assert not is_url(source)

    def test_path_object(self):
        assert not is_url(DEFAULT_FONT)
