"""Shared test fixtures for the miniprinter test suite.

Provides a small but realistic puzzle payload (same shape as the live
endpoint, including fields the model ignores), a 300x300 board SVG, a
recording print transport, and a rasterizer stand-in for tests that are
about composition rather than rendering.
"""

import copy
from io import BytesIO
from typing import Any, Dict, List, Optional, Tuple

import pytest
from PIL import Image

from miniprinter.config.settings import get_settings
from miniprinter.errors import TransportError
from miniprinter.graphics.rasterizer import Bitmap
from miniprinter.hardware.base import Printer


# ---------------------------------------------------------------------------
# Board markup
# ---------------------------------------------------------------------------

# 5x5 grid of 60-unit cells; cell (1, 0) is a black square
BOARD_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="300" height="300" viewBox="0 0 300 300">'
    '<rect x="0" y="0" width="300" height="300" fill="white"/>'
    '<rect x="60" y="0" width="60" height="60" fill="black"/>'
    '<g stroke="black" stroke-width="1">'
    '<line x1="0" y1="60" x2="300" y2="60"/>'
    '<line x1="0" y1="120" x2="300" y2="120"/>'
    '<line x1="0" y1="180" x2="300" y2="180"/>'
    '<line x1="0" y1="240" x2="300" y2="240"/>'
    '<line x1="60" y1="0" x2="60" y2="300"/>'
    '<line x1="120" y1="0" x2="120" y2="300"/>'
    '<line x1="180" y1="0" x2="180" y2="300"/>'
    '<line x1="240" y1="0" x2="240" y2="300"/>'
    '</g>'
    '</svg>'
)


# ---------------------------------------------------------------------------
# Puzzle payload
# ---------------------------------------------------------------------------

SAMPLE_PAYLOAD: Dict[str, Any] = {
    "body": [
        {
            "board": BOARD_SVG,
            "cells": [{"answer": "C"}, {}],
            "clueLists": [
                {"name": "Across", "clues": [0, 1]},
                {"name": "Down", "clues": [2, 3]},
            ],
            "clues": [
                {
                    "label": "1",
                    "text": [{"plain": "Feline pet", "formatted": "<i>Feline</i> pet"}],
                    "cells": [0, 1, 2],
                    "direction": "Across",
                },
                {
                    "label": "4",
                    "text": [{"plain": "Place where you might order a flat white and a croissant"}],
                },
                {"label": "1", "text": [{"plain": "Taxi"}]},
                {"label": "2", "text": [{"plain": "Capital of France"}]},
            ],
            "dimensions": {"height": 5, "width": 5},
        }
    ],
    "constructors": ["Alex Rivera"],
    "editor": "Jordan Lee",
    "publicationDate": "2024-03-04",
    "id": 21234,
}


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """A deep copy of the sample payload, safe to mutate."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def board_svg() -> str:
    return BOARD_SVG


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def make_bitmap(width: int, height: int, scale: float = 1.0) -> Bitmap:
    """A blank white 1-bit bitmap."""
    buf = BytesIO()
    Image.new("1", (width, height), 1).save(buf, format="PNG")
    return Bitmap(width=width, height=height, scale=scale, png=buf.getvalue())


class FakeRasterizer:
    """Rasterizer stand-in producing a square blank bitmap."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, int, float]] = []

    def __call__(self, markup: str, target_width: int, dpi: float) -> Bitmap:
        self.calls.append((markup, target_width, dpi))
        return make_bitmap(target_width, target_width)


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def cairosvg_available():
    """Skip when CairoSVG or the Cairo shared library cannot be loaded."""
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as e:
        pytest.skip(f"CairoSVG unavailable: {e}")


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class RecordingPrinter(Printer):
    """Printer that records every directive it receives.

    ``fail_on`` names an operation ("line", "feed", "bitmap", "cut") that
    raises TransportError instead of being recorded.
    """

    def __init__(self, fail_on: Optional[str] = None) -> None:
        self.records: List[Tuple[Any, ...]] = []
        self.closed = False
        self._fail_on = fail_on

    def _record(self, *entry: Any) -> None:
        if entry[0] == self._fail_on:
            raise TransportError(f"simulated {entry[0]} failure")
        self.records.append(entry)

    def write_line(self, text: str) -> None:
        self._record("line", text)

    def feed(self) -> None:
        self._record("feed")

    def write_bitmap(self, bitmap: Bitmap) -> None:
        self._record("bitmap", bitmap.width, bitmap.height)

    def cut(self) -> None:
        self._record("cut")

    def close(self) -> None:
        self.closed = True

    @property
    def lines(self) -> List[str]:
        return [r[1] for r in self.records if r[0] == "line"]


@pytest.fixture
def recording_printer() -> RecordingPrinter:
    return RecordingPrinter()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
