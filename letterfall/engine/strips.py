from typing import Dict, Iterable, List
from pydantic import BaseModel, Field, model_validator

from .grid import Grid, project_grid
from .letters import LetterSource
from .models import Direction
from ..words.models import CellRef


class StripStore(BaseModel):
    """
    Owns the circular letter strips behind the visible grid.

    There is one strip per grid row. Each strip holds ``capacity`` letters
    and a viewport position; the visible row is the ``grid_size`` letters
    starting at that position, wrapping around the end of the strip. The
    strips are the only copy of the letters: the grid is always projected
    from them.

    Attributes:
        grid_size: Number of visible rows and columns
        capacity: Letters per strip
        strips: The letters of each strip
        positions: Viewport position of each strip
        source: Where replacement letters come from
    """

    grid_size: int = Field(default=5, ge=1)
    capacity: int = Field(default=10, ge=1)
    strips: List[List[str]] = Field(default_factory=list)
    positions: List[int] = Field(default_factory=list)
    source: LetterSource = Field(default_factory=LetterSource)

    @model_validator(mode="after")
    def _check_shape(self) -> "StripStore":
        if self.capacity < self.grid_size:
            raise ValueError(f"Strip capacity {self.capacity} is smaller than grid size {self.grid_size}")
        if len(self.strips) != self.grid_size:
            raise ValueError(f"Expected {self.grid_size} strips, got {len(self.strips)}")
        if not self.positions:
            self.positions = [0] * self.grid_size
        if len(self.positions) != self.grid_size:
            raise ValueError(f"Expected {self.grid_size} viewport positions, got {len(self.positions)}")

        for i, strip in enumerate(self.strips):
            if len(strip) != self.capacity:
                raise ValueError(f"Strip {i} has {len(strip)} letters, expected {self.capacity}")
            self.strips[i] = [letter.upper() for letter in strip]
            if not all(len(letter) == 1 and "A" <= letter <= "Z" for letter in self.strips[i]):
                raise ValueError(f"Strip {i} contains non-letters: {strip}")

        for i, position in enumerate(self.positions):
            if not 0 <= position < self.capacity:
                raise ValueError(f"Viewport position {position} of strip {i} out of range")
        return self

    @classmethod
    def create(
        cls,
        source: LetterSource,
        grid_size: int = 5,
        capacity: int = 10,
    ) -> "StripStore":
        """
        Factory method to create a store filled with fresh letters.

        Args:
            source: Letter source used for the initial fill and every refill
            grid_size: Number of strips (and visible columns)
            capacity: Letters per strip

        Returns:
            A new StripStore with every viewport at position 0
        """
        strips = [source.letters(capacity) for _ in range(grid_size)]
        return cls(grid_size=grid_size, capacity=capacity, strips=strips, source=source)

    def _check_index(self, index: int, what: str = "Strip") -> None:
        if not 0 <= index < self.grid_size:
            raise ValueError(f"{what} index {index} out of range (0-{self.grid_size - 1})")

    def absolute_position(self, row: int, col: int) -> int:
        """Position in strip ``row`` of the letter shown at (row, col)."""
        self._check_index(row, "Row")
        self._check_index(col, "Column")
        return (self.positions[row] + col) % self.capacity

    def shift(self, index: int, direction: Direction = "forward") -> int:
        """
        Move one strip's viewport by one letter.

        Forward advances the viewport, so the visible letters move one
        column to the left and a new letter enters on the right.

        Returns:
            The new viewport position
        """
        self._check_index(index)
        step = 1 if direction == "forward" else -1
        self.positions[index] = (self.positions[index] + step) % self.capacity
        return self.positions[index]

    def shift_column(self, col: int, direction: Direction = "forward") -> None:
        """
        Rotate one visible column by one row.

        Forward moves every letter of the column up one row, the top letter
        wrapping to the bottom. The letters are written back into the row
        strips at their visible positions.
        """
        self._check_index(col, "Column")
        slots = [(r, self.absolute_position(r, col)) for r in range(self.grid_size)]
        letters = [self.strips[r][p] for r, p in slots]

        if direction == "forward":
            letters = letters[1:] + letters[:1]
        else:
            letters = letters[-1:] + letters[:-1]

        for (r, p), letter in zip(slots, letters):
            self.strips[r][p] = letter

    def remove_and_refill(self, strip_index: int, position: int) -> str:
        """
        Remove the letter at an absolute strip position.

        Later letters move one slot toward the gap and a fresh letter is
        appended at the tail, so the strip keeps its length. When removing
        several letters from one strip, go from the highest position down.

        Returns:
            The newly drawn letter
        """
        self._check_index(strip_index)
        if not 0 <= position < self.capacity:
            raise ValueError(f"Strip position {position} out of range (0-{self.capacity - 1})")

        strip = self.strips[strip_index]
        del strip[position]
        letter = self.source.next_letter()
        strip.append(letter)
        return letter

    def remove_cells(self, cells: Iterable[CellRef]) -> None:
        """Remove and refill every given grid cell, highest strip position first."""
        by_strip: Dict[int, List[int]] = {}
        for cell in cells:
            by_strip.setdefault(cell.row, []).append(self.absolute_position(cell.row, cell.col))

        for strip_index, strip_positions in by_strip.items():
            for position in sorted(set(strip_positions), reverse=True):
                self.remove_and_refill(strip_index, position)

    def snapshot_grid(self) -> Grid:
        """Project the visible grid from the strips."""
        return project_grid(self.strips, self.positions, self.grid_size)

    def get_state(self) -> Dict:
        return {
            "grid_size": self.grid_size,
            "capacity": self.capacity,
            "strips": [''.join(strip) for strip in self.strips],
            "positions": list(self.positions),
        }
