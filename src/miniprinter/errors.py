"""Exception types for miniprinter.

Every failure is fatal for a run: the pipeline never retries and never
prints a degraded receipt. ``main`` turns these into a one-line message
and a non-zero exit status.
"""


class MiniPrinterError(Exception):
    """Base class for all expected miniprinter failures."""


class FetchError(MiniPrinterError):
    """The puzzle document could not be retrieved."""


class SchemaError(MiniPrinterError):
    """The retrieved document does not match the puzzle model."""


class RenderError(MiniPrinterError):
    """The board markup could not be rasterized."""


class ClueIndexError(MiniPrinterError, IndexError):
    """A clue list references a clue that does not exist."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Clue index {index} out of range ({count} clues)")


class TransportError(MiniPrinterError):
    """The print transport failed to accept a directive."""
