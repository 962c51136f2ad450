"""Puzzle document model and retrieval."""

from miniprinter.puzzle.fetch import fetch_puzzle, load_puzzle, parse_puzzle
from miniprinter.puzzle.models import (
    Board,
    Clue,
    ClueGroup,
    Direction,
    PuzzleDocument,
    TextVariant,
)

__all__ = [
    # Model
    "Board",
    "Clue",
    "ClueGroup",
    "Direction",
    "PuzzleDocument",
    "TextVariant",
    # Retrieval
    "fetch_puzzle",
    "load_puzzle",
    "parse_puzzle",
]
