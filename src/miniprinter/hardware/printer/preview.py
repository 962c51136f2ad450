"""Text preview printer.

Draws the receipt as a boxed ASCII column instead of sending ESC/POS, for
checking layout without paper.
"""

import sys
from typing import Optional, TextIO

from miniprinter.errors import TransportError
from miniprinter.graphics.rasterizer import Bitmap
from miniprinter.hardware.base import Printer
from miniprinter.printing.layout import text_width


class PreviewPrinter(Printer):
    """Mock printer that renders a text preview of the receipt."""

    def __init__(self, chars_per_line: int = 32, stream: Optional[TextIO] = None):
        self._chars_per_line = chars_per_line
        self._stream = stream if stream is not None else sys.stdout
        self._started = False

    def write_line(self, text: str) -> None:
        pad = max(0, self._chars_per_line - text_width(text))
        self._row(text + " " * pad)

    def feed(self) -> None:
        self._row(" " * self._chars_per_line)

    def write_bitmap(self, bitmap: Bitmap) -> None:
        label = f"[IMAGE {bitmap.width}x{bitmap.height}]"
        self._row(label.center(self._chars_per_line))

    def cut(self) -> None:
        self._border()
        self._started = False

    def _border(self) -> None:
        self._write("+" + "-" * self._chars_per_line + "+")

    def _row(self, text: str) -> None:
        if not self._started:
            self._border()
            self._started = True
        self._write("|" + text + "|")

    def _write(self, line: str) -> None:
        try:
            self._stream.write(line + "\n")
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise TransportError(f"Preview write failed: {e}") from e
