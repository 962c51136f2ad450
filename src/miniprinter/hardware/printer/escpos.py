"""ESC/POS thermal printer driver.

Encodes print directives as ESC/POS commands and writes them to a binary
stream: stdout (pipe it to the printer), a file, or a device node such as
/dev/usb/lp0.

Hardware assumptions (EM5820-class 58mm printer):
- Paper width: 58mm (~384 dots at 203 DPI)
- Raster images via GS v 0, rows packed MSB first, 1 = black dot
- Partial cut via GS V 1
"""

import logging
from typing import BinaryIO

import numpy as np

from miniprinter.errors import TransportError
from miniprinter.graphics.rasterizer import Bitmap
from miniprinter.hardware.base import Printer

logger = logging.getLogger(__name__)


class EscPosPrinter(Printer):
    """ESC/POS encoder writing to a byte stream."""

    # ESC/POS command constants
    ESC = b'\x1b'
    GS = b'\x1d'
    LF = b'\x0a'

    def __init__(
        self,
        stream: BinaryIO,
        encoding: str = "utf-8",
        cut_feed_lines: int = 3,
        owns_stream: bool = False,
    ):
        """Initialize the driver and reset the printer.

        Args:
            stream: Writable binary stream
            encoding: Text encoding understood by the printer
            cut_feed_lines: Lines fed before cutting so the last line clears the blade
            owns_stream: Close the stream on close()
        """
        self._stream = stream
        self._encoding = encoding
        self._cut_feed_lines = cut_feed_lines
        self._owns_stream = owns_stream
        self._send(self._cmd_init())

    def write_line(self, text: str) -> None:
        self._send(text.encode(self._encoding, errors="replace") + self.LF)

    def feed(self) -> None:
        self._send(self.LF)

    def write_bitmap(self, bitmap: Bitmap) -> None:
        """Print a bitmap using raster bit image mode."""
        self._send(self._image_to_raster(bitmap))

    def cut(self) -> None:
        self._send(self._cmd_feed(self._cut_feed_lines) + self._cmd_cut())

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()

    def _cmd_init(self) -> bytes:
        """Initialize printer command."""
        return self.ESC + b'@'

    def _cmd_feed(self, lines: int) -> bytes:
        """ESC d n - Feed n lines."""
        return self.ESC + b'd' + bytes([lines])

    def _cmd_cut(self) -> bytes:
        """Partial paper cut command."""
        return self.GS + b'V' + b'\x01'

    def _image_to_raster(self, bitmap: Bitmap) -> bytes:
        """Convert a bitmap to a GS v 0 raster command."""
        img = bitmap.image().convert("L")
        width, height = img.size

        black = np.asarray(img) < 128

        # Ensure width is multiple of 8
        padded_width = (width + 7) // 8 * 8
        if padded_width != width:
            black = np.pad(black, ((0, 0), (0, padded_width - width)), constant_values=False)

        bytes_per_line = padded_width // 8
        raster_data = np.packbits(black, axis=1).tobytes()

        # GS v 0 - Print raster bit image
        # Format: GS v 0 m xL xH yL yH data
        # m = 0 (normal), xL xH = width in bytes, yL yH = height in dots
        commands = []
        commands.append(self.GS + b'v0')
        commands.append(b'\x00')  # m = normal
        commands.append(bytes([bytes_per_line & 0xFF, (bytes_per_line >> 8) & 0xFF]))
        commands.append(bytes([height & 0xFF, (height >> 8) & 0xFF]))
        commands.append(raster_data)

        return b''.join(commands)

    def _send(self, data: bytes) -> None:
        """Write command bytes and flush.

        Raises:
            TransportError: if the stream rejects the write
        """
        try:
            self._stream.write(data)
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise TransportError(f"Printer write failed: {e}") from e
        logger.debug(f"Sent {len(data)} bytes")
