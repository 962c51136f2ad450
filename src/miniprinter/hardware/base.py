"""
Abstract base class for the print transport.

Both real printer drivers and the text preview implement this contract.
Every operation may fail with TransportError; nothing is retried.
"""

from abc import ABC, abstractmethod

from miniprinter.graphics.rasterizer import Bitmap


class Printer(ABC):
    """Abstract base class for thermal printer."""

    @abstractmethod
    def write_line(self, text: str) -> None:
        """Print one line of text followed by a line feed."""
        ...

    @abstractmethod
    def feed(self) -> None:
        """Advance the paper by one line."""
        ...

    @abstractmethod
    def write_bitmap(self, bitmap: Bitmap) -> None:
        """Print a monochrome bitmap inline."""
        ...

    @abstractmethod
    def cut(self) -> None:
        """Cut paper (if cutter available)."""
        ...

    def close(self) -> None:
        """Release the underlying device."""

    def __enter__(self) -> "Printer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
