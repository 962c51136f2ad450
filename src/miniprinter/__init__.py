"""miniprinter - daily mini crossword on a thermal receipt printer."""

__version__ = "0.1.0"
