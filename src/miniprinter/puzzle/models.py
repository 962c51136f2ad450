"""Typed model of the mini crossword puzzle document.

Mirrors the JSON served by the puzzle endpoint. Field aliases carry the
camelCase wire names; anything the receipt does not use is ignored.
"""

from datetime import date
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from miniprinter.errors import ClueIndexError


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Direction(Enum):
    """Clue list direction."""

    ACROSS = "Across"
    DOWN = "Down"


class TextVariant(_Frozen):
    """One rendition of a clue's text. Only the plain form is kept."""

    plain_text: str = Field(alias="plain")


class Clue(_Frozen):
    """A single clue with its display label (the clue number)."""

    label: str
    texts: List[TextVariant] = Field(alias="text", min_length=1)

    @property
    def plain_text(self) -> str:
        """Plain text of the first variant."""
        return self.texts[0].plain_text


class ClueGroup(_Frozen):
    """Clue indices for one direction, in display order."""

    direction: Direction = Field(alias="name")
    clue_indices: List[NonNegativeInt] = Field(alias="clues")


class Board(_Frozen):
    """Board SVG markup plus its clues."""

    markup: str = Field(alias="board")
    clue_lists: List[ClueGroup] = Field(alias="clueLists")
    clues: List[Clue]

    def clue(self, index: int) -> Clue:
        """Look up a clue by position.

        Raises:
            ClueIndexError: if ``index`` is outside the clue sequence
        """
        if not 0 <= index < len(self.clues):
            raise ClueIndexError(index, len(self.clues))
        return self.clues[index]


class PuzzleDocument(_Frozen):
    """The fetched puzzle document."""

    boards: List[Board] = Field(alias="body", min_length=1)
    constructors: List[str] = Field(min_length=1)
    editor: str
    publication_date: date = Field(alias="publicationDate")

    @property
    def board(self) -> Board:
        """The board to print. Mini puzzles carry exactly one."""
        return self.boards[0]
