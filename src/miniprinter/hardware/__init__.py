"""Hardware abstraction layer for miniprinter."""

from miniprinter.hardware.base import Printer

__all__ = [
    "Printer",
]
