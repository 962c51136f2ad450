"""EM5820 thermal printer over UART (serial).

Same ESC/POS encoding as EscPosPrinter, sent through pyserial in small
chunks so the printer's receive buffer does not overflow.
"""

import logging
import time

import serial

from miniprinter.errors import TransportError
from miniprinter.hardware.printer.escpos import EscPosPrinter

logger = logging.getLogger(__name__)


class SerialPrinter(EscPosPrinter):
    """Driver for an ESC/POS printer on a serial port."""

    # Default UART settings
    DEFAULT_BAUD = 9600
    DEFAULT_PORT = "/dev/serial0"  # Pi GPIO UART

    CHUNK_SIZE = 256
    CHUNK_DELAY = 0.01

    def __init__(
        self,
        port: str = DEFAULT_PORT,
        baud: int = DEFAULT_BAUD,
        encoding: str = "utf-8",
        cut_feed_lines: int = 3,
    ):
        """Open the port and reset the printer.

        Args:
            port: Serial port path
            baud: Baud rate

        Raises:
            TransportError: if the port cannot be opened
        """
        try:
            stream = serial.Serial(
                port=port,
                baudrate=baud,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=2.0,
            )
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Cannot open printer on {port}: {e}") from e

        logger.info(f"Printer connected on {port} at {baud} baud")
        super().__init__(stream, encoding=encoding, cut_feed_lines=cut_feed_lines, owns_stream=True)

    def _send(self, data: bytes) -> None:
        """Send command data in chunks."""
        try:
            for i in range(0, len(data), self.CHUNK_SIZE):
                chunk = data[i:i + self.CHUNK_SIZE]
                self._stream.write(chunk)
                self._stream.flush()
                time.sleep(self.CHUNK_DELAY)
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Serial write failed: {e}") from e
        logger.debug(f"Sent {len(data)} bytes")
