"""Receipt composer for the mini crossword.

Builds the ordered print directives for one puzzle:
- Title and publication date
- Board bitmap at full paper width
- Across/Down clue lists with hanging indents
- Constructor and editor credits
- Paper cut
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Iterator, Union

from miniprinter.errors import RenderError
from miniprinter.graphics.rasterizer import Bitmap, render_board
from miniprinter.hardware.base import Printer
from miniprinter.printing.layout import join_names, label_indents, wrap
from miniprinter.puzzle.models import Direction, PuzzleDocument

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "The NYT Mini Crossword"

_HEADERS = {
    Direction.ACROSS: "Across:",
    Direction.DOWN: "Down:",
}

Rasterizer = Callable[[str, int, float], Bitmap]


@dataclass(frozen=True)
class TextLine:
    """A single printed line."""

    text: str


@dataclass(frozen=True)
class Feed:
    """One blank line of paper."""


@dataclass(frozen=True)
class ImageBlock:
    """An inline bitmap."""

    bitmap: Bitmap


@dataclass(frozen=True)
class Cut:
    """End of receipt."""


Directive = Union[TextLine, Feed, ImageBlock, Cut]


def format_publication_date(value: date) -> str:
    """Format as e.g. "Monday, March 4, 2024"."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


class ReceiptComposer:
    """Composer for mini crossword receipts.

    Device geometry is passed in explicitly; the composer holds no other
    state and can compose any number of documents.
    """

    def __init__(
        self,
        chars_per_line: int = 32,
        pixels_per_char: int = 12,
        dpi: float = 203.0,
        rasterizer: Rasterizer = render_board,
        title: str = DEFAULT_TITLE,
    ):
        """Initialize the composer.

        Args:
            chars_per_line: Printer text columns
            pixels_per_char: Dots per text column
            dpi: Print resolution, used to resolve units in the board markup
            rasterizer: Board renderer, ``render_board`` unless overridden
            title: First line of the receipt
        """
        self._chars_per_line = chars_per_line
        self._pixels_per_char = pixels_per_char
        self._dpi = dpi
        self._rasterizer = rasterizer
        self._title = title

    @property
    def dot_width(self) -> int:
        """Bitmap width in dots."""
        return self._chars_per_line * self._pixels_per_char

    def compose(self, document: PuzzleDocument) -> Iterator[Directive]:
        """Compose the receipt for a puzzle.

        The board is rasterized before this returns, so a RenderError
        surfaces before any directive exists. Everything after that is
        produced lazily; a bad clue index raises ClueIndexError at the
        point in the sequence where the clue is needed.

        Args:
            document: Puzzle to print

        Returns:
            Iterator of print directives in paper order

        Raises:
            RenderError: if the board cannot be rasterized
        """
        bitmap = self._rasterizer(document.board.markup, self.dot_width, self._dpi)
        if bitmap.width != self.dot_width:
            raise RenderError(
                f"Board rendered {bitmap.width} dots wide, expected {self.dot_width}"
            )
        return self._directives(document, bitmap)

    def _directives(self, document: PuzzleDocument, bitmap: Bitmap) -> Iterator[Directive]:
        board = document.board

        yield TextLine(self._title)
        yield TextLine(format_publication_date(document.publication_date))
        yield Feed()

        yield ImageBlock(bitmap)
        yield Feed()
        yield Feed()

        for group in board.clue_lists:
            yield TextLine(_HEADERS[group.direction])
            for index in group.clue_indices:
                clue = board.clue(index)
                initial, subsequent = label_indents(clue.label)
                yield from self._wrapped(clue.plain_text, initial, subsequent)
            yield Feed()

        yield from self._wrapped(join_names(document.constructors), "By ", "   ")
        yield TextLine("Edited by " + document.editor)

        yield Cut()

    def _wrapped(self, text: str, initial_indent: str, subsequent_indent: str) -> Iterator[TextLine]:
        for line in wrap(text, self._chars_per_line, initial_indent, subsequent_indent):
            yield TextLine(line)


def print_receipt(directives: Iterable[Directive], printer: Printer) -> int:
    """Send directives to the printer as they are produced.

    Stops at the first error from either side; whatever was already sent
    stays on the paper.

    Args:
        directives: Directives in paper order
        printer: Print transport

    Returns:
        Number of directives sent
    """
    sent = 0
    for directive in directives:
        if isinstance(directive, TextLine):
            printer.write_line(directive.text)
        elif isinstance(directive, Feed):
            printer.feed()
        elif isinstance(directive, ImageBlock):
            printer.write_bitmap(directive.bitmap)
        elif isinstance(directive, Cut):
            printer.cut()
        else:
            raise TypeError(f"Unknown print directive: {directive!r}")
        sent += 1
        logger.debug(f"Sent {type(directive).__name__}")

    logger.info(f"Receipt sent ({sent} directives)")
    return sent
