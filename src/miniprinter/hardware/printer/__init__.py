"""Printer drivers for miniprinter."""

import logging
import sys

from miniprinter.config.settings import PrinterSettings
from miniprinter.errors import TransportError
from miniprinter.hardware.base import Printer
from miniprinter.hardware.printer.escpos import EscPosPrinter
from miniprinter.hardware.printer.preview import PreviewPrinter

logger = logging.getLogger(__name__)


def create_printer(settings: PrinterSettings) -> Printer:
    """Factory function to create the configured printer.

    Args:
        settings: Printer section of the application settings

    Returns:
        Printer instance; use it as a context manager to release the device

    Raises:
        TransportError: if the output device cannot be opened
    """
    if settings.transport == "preview":
        return PreviewPrinter(chars_per_line=settings.chars_per_line)

    if settings.transport == "serial":
        from miniprinter.hardware.printer.uart import SerialPrinter

        return SerialPrinter(
            port=settings.port,
            baud=settings.baudrate,
            encoding=settings.encoding,
            cut_feed_lines=settings.cut_feed_lines,
        )

    if settings.output is None:
        logger.info("Writing ESC/POS to stdout")
        return EscPosPrinter(
            sys.stdout.buffer,
            encoding=settings.encoding,
            cut_feed_lines=settings.cut_feed_lines,
        )

    try:
        stream = open(settings.output, "wb")
    except OSError as e:
        raise TransportError(f"Cannot open printer output {settings.output}: {e}") from e

    logger.info(f"Writing ESC/POS to {settings.output}")
    return EscPosPrinter(
        stream,
        encoding=settings.encoding,
        cut_feed_lines=settings.cut_feed_lines,
        owns_stream=True,
    )


__all__ = [
    "Printer",
    "EscPosPrinter",
    "PreviewPrinter",
    "create_printer",
]
