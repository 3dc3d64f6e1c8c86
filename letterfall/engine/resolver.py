"""
Match resolution: scoring a confirmed word, replacing its letters, and
chaining any words the new letters form.

Resolution order:
1. Oracle readiness (nothing happens until the dictionary is loaded)
2. Selection length (short selections never reach the oracle)
3. Loops (a drag that wrapped onto its own cells is never scored)
4. Dictionary lookup
5. Score, combo, letter removal and refill
6. Cascade: repeat 4-5 on the best word now on the grid until none is left
"""

import logging
from typing import Any, Iterator, List

from pydantic import BaseModel, ConfigDict, Field

from .models import ConfirmResult, GameConfig, Rejection, ResolutionEvent
from .strips import StripStore
from ..words.dictionary import ensure_ready
from ..words.finder import find_all, pick_candidate
from ..words.models import CellRef

logger = logging.getLogger("letterfall.engine")


# Rejection codes
TOO_SHORT = "TOO_SHORT"
LOOPED = "LOOPED"
NOT_A_WORD = "NOT_A_WORD"


def points_for(length: int, table: dict) -> int:
    """Points for a word of the given length, with a length * 20 fallback."""
    return table.get(length, length * 20)


def selection_word(selection: List[CellRef]) -> str:
    return "".join(cell.letter for cell in selection).lower()


class MatchResolver(BaseModel):
    """
    Scores confirmed selections and runs the cascade that follows.

    Attributes:
        store: Strip store the matched letters are removed from
        oracle: Word validity lookup (see ``WordOracle``)
        config: Game configuration (point table, thresholds, mode)
        score: Session score
        combo: Consecutive successful confirms (drag mode only)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    store: StripStore
    oracle: Any
    config: GameConfig = Field(default_factory=GameConfig)
    score: int = Field(default=0, ge=0)
    combo: int = Field(default=0, ge=0)

    @property
    def ready(self) -> bool:
        return bool(self.oracle.is_ready)

    def _check_cells(self, selection: List[CellRef]) -> None:
        """Reject malformed selections: out of bounds, stale, or not a straight run."""
        grid = self.store.snapshot_grid()
        size = self.store.grid_size

        for cell in selection:
            if cell.row >= size or cell.col >= size:
                raise ValueError(f"Cell ({cell.row}, {cell.col}) is outside the grid")
            if grid[cell.row][cell.col] != cell.letter:
                raise ValueError(
                    f"Stale selection: cell ({cell.row}, {cell.col}) shows "
                    f"'{grid[cell.row][cell.col]}', not '{cell.letter}'"
                )

        if len(selection) < 2:
            return

        if len({cell.row for cell in selection}) == 1:
            along = [cell.col for cell in selection]
        elif len({cell.col for cell in selection}) == 1:
            along = [cell.row for cell in selection]
        else:
            raise ValueError("Selected cells must share one row or one column")

        # Every step moves one cell the same way, wrapping at the edge
        steps = {(b - a) % size for a, b in zip(along, along[1:])}
        if steps not in ({1}, {size - 1}):
            raise ValueError(f"Selected cells {[cell.position for cell in selection]} are not a straight run")

    def _reject(self, code: str, message: str, word: str) -> ConfirmResult:
        if self.config.tracks_combo:
            self.combo = 0
        logger.debug("Rejected selection %r: %s", word, code)
        return ConfirmResult(
            outcome="no_match",
            word=word or None,
            rejection=Rejection(code=code, message=message, word=word or None),
        )

    def _apply(self, word: str, cells: List[CellRef], depth: int) -> ResolutionEvent:
        """Score a valid word and replace its letters."""
        points = points_for(len(cells), self.config.points)
        self.score += points
        if self.config.tracks_combo:
            self.combo += 1

        self.store.remove_cells(cells)

        logger.info(
            "Matched %r for %d points (cascade depth %d, score %d)",
            word, points, depth, self.score,
        )
        return ResolutionEvent(
            word=word,
            points=points,
            cascade_depth=depth,
            cells=list(cells),
            score=self.score,
            combo=self.combo,
        )

    def confirm(self, selection: List[CellRef]) -> ConfirmResult:
        """
        Confirm a selection and run the cascade it triggers.

        Rejections are returned, never raised, and leave the strips and
        score untouched.

        Args:
            selection: Selected cells in traversal order

        Returns:
            ConfirmResult with the confirmed word's event followed by every
            cascade event

        Raises:
            ValueError: If the selection is not a straight run along one
                row or column, leaves the grid, or no longer matches the
                grid's letters
        """
        if not self.ready:
            return ConfirmResult(outcome="unavailable")

        self._check_cells(selection)
        word = selection_word(selection)

        threshold = self.config.selection_threshold
        if len(selection) < threshold:
            return self._reject(
                TOO_SHORT,
                f"Selection has {len(selection)} letters; at least {threshold} needed",
                word,
            )

        if len({cell.position for cell in selection}) < len(selection):
            return self._reject(
                LOOPED,
                f"Selection of {len(selection)} letters wraps onto its own cells",
                word,
            )

        if not self.oracle.is_valid_word(word):
            return self._reject(NOT_A_WORD, f"'{word}' is not in the dictionary", word)

        event = self._apply(word, selection, depth=0)
        result = ConfirmResult(
            outcome="match",
            word=word,
            points=event.points,
            events=[event],
        )
        result.events.extend(self.cascade())
        return result

    def cascade(self) -> Iterator[ResolutionEvent]:
        """
        Resolve words formed by refilled letters, one event per step.

        Each step takes the longest word on the grid (first in scan order
        on ties). Stops when no word is left or ``max_cascade_depth`` steps
        have run.
        """
        ensure_ready(self.oracle)
        low, high = self.config.word_length_bounds
        depth = 0

        while True:
            candidate = pick_candidate(find_all(self.store.snapshot_grid(), self.oracle, low, high))
            if candidate is None:
                return
            if depth >= self.config.max_cascade_depth:
                logger.warning(
                    "Cascade stopped after %d steps with %r still on the grid",
                    depth, candidate.word,
                )
                return

            depth += 1
            yield self._apply(candidate.word, candidate.cells, depth)

    def reset(self) -> None:
        self.score = 0
        self.combo = 0
