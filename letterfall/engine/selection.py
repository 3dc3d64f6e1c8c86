"""
Selection state machines for the two interaction styles.

``DragSelector`` turns pointer-down / pointer-enter / pointer-up events into
a straight run of cells, wrapping around the grid edges. ``ClickSelector``
picks a highlighted word on the first click and confirms it on the second.
Neither touches the strips: they only decide which cells are selected.
"""

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field

from ..words.finder import candidates_at, pick_candidate
from ..words.models import Axis, MatchCandidate


DragState = Literal["idle", "undirected", "directed"]
ClickState = Literal["no_selection", "word_chosen"]

Position = Tuple[int, int]


class DragSelector(BaseModel):
    """
    Drag selection: idle -> undirected -> directed -> idle.

    The first pointer-enter that shares a row or column with the anchor
    locks the axis. From then on the selection is the run from the anchor
    to the pointer along that axis. Coordinates along the axis may run past
    the grid edge and wrap. Dragging a full lap or more keeps going, so the
    run can revisit cells; confirming such a loop is rejected.

    Attributes:
        grid_size: Size of the grid being selected on
        state: Current state
        anchor: Cell where the drag started
        axis: Locked direction, once known
        cells: Selected cells in traversal order
    """

    grid_size: int = Field(default=5, ge=1)
    state: DragState = "idle"
    anchor: Optional[Position] = None
    axis: Optional[Axis] = None
    cells: List[Position] = Field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.state != "idle"

    def pointer_down(self, row: int, col: int) -> None:
        """Start a new selection at (row, col)."""
        if not (0 <= row < self.grid_size and 0 <= col < self.grid_size):
            raise ValueError(f"Cell ({row}, {col}) is outside the {self.grid_size}x{self.grid_size} grid")

        self.state = "undirected"
        self.anchor = (row, col)
        self.axis = None
        self.cells = [(row, col)]

    def pointer_enter(self, row: int, col: int) -> bool:
        """
        Extend the selection toward (row, col).

        Returns:
            True if the selection changed
        """
        if not self.active:
            return False

        anchor_row, anchor_col = self.anchor

        if self.state == "undirected":
            if (row, col) == self.anchor:
                return False
            if row == anchor_row:
                self.axis = "horizontal"
            elif col == anchor_col:
                self.axis = "vertical"
            else:
                # Diagonal
                return False
            self.state = "directed"

        if self.axis == "horizontal" and row != anchor_row:
            return False
        if self.axis == "vertical" and col != anchor_col:
            return False

        cells = self._run(row, col)
        if cells == self.cells:
            return False
        self.cells = cells
        return True

    def _run(self, row: int, col: int) -> List[Position]:
        """Cells from the anchor to (row, col) along the locked axis, wrapping."""
        anchor_row, anchor_col = self.anchor
        if self.axis == "horizontal":
            start, end = anchor_col, col
        else:
            start, end = anchor_row, row

        step = 1 if end >= start else -1
        run: List[Position] = []

        for i in range(start, end + step, step):
            index = i % self.grid_size
            run.append((anchor_row, index) if self.axis == "horizontal" else (index, anchor_col))

        return run

    def release(self) -> List[Position]:
        """End the drag and hand back the selected cells."""
        cells = self.cells if self.active else []
        self.cancel()
        return cells

    def cancel(self) -> None:
        """Drop the selection without confirming it."""
        self.state = "idle"
        self.anchor = None
        self.axis = None
        self.cells = []


class ClickSelector(BaseModel):
    """
    Click selection: no_selection -> word_chosen -> no_selection.

    The first click on a highlighted cell chooses the longest word through
    that cell. The next click, wherever it lands, confirms it.
    """

    state: ClickState = "no_selection"
    chosen: Optional[MatchCandidate] = None

    def choose(self, row: int, col: int, candidates: List[MatchCandidate]) -> Optional[MatchCandidate]:
        """Choose the best candidate covering (row, col), if any."""
        choice = pick_candidate(candidates_at(candidates, row, col))
        if choice is not None:
            self.chosen = choice
            self.state = "word_chosen"
        return choice

    def take(self) -> Optional[MatchCandidate]:
        """Hand back the chosen word and return to no_selection."""
        chosen = self.chosen
        self.clear()
        return chosen

    def clear(self) -> None:
        self.state = "no_selection"
        self.chosen = None
