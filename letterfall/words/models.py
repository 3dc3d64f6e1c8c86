"""Data models for word finding."""

from typing import List, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field


Axis = Literal["horizontal", "vertical"]


class CellRef(BaseModel):
    """A grid cell and the letter it showed when it was read.

    The letter is a snapshot: it is only meaningful against the grid it
    was read from.
    """
    model_config = ConfigDict(frozen=True)

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    letter: str = Field(..., pattern=r'^[A-Z]$')

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)


class MatchCandidate(BaseModel):
    """A dictionary word found on the grid."""
    word: str = Field(..., min_length=1, pattern=r'^[a-z]+$')
    cells: List[CellRef]
    axis: Axis

    @property
    def length(self) -> int:
        return len(self.cells)

    def covers(self, row: int, col: int) -> bool:
        """Whether the candidate uses the cell at (row, col)."""
        return any(cell.row == row and cell.col == col for cell in self.cells)
