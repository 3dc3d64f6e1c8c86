"""Scan a letter grid for dictionary words."""

from typing import List, Optional, Sequence

from .dictionary import WordOracle, ensure_ready
from .models import Axis, CellRef, MatchCandidate


def _scan_line(
    letters: Sequence[str],
    cells: Sequence[tuple],
    axis: Axis,
    oracle: WordOracle,
    min_length: int,
    max_length: int,
) -> List[MatchCandidate]:
    """Check every run of one row or column, by start offset then length."""
    found: List[MatchCandidate] = []
    size = len(letters)

    for start in range(size):
        for length in range(min_length, max_length + 1):
            end = start + length
            if end > size:
                break
            word = "".join(letters[start:end]).lower()
            if oracle.is_valid_word(word):
                found.append(MatchCandidate(
                    word=word,
                    cells=[
                        CellRef(row=r, col=c, letter=letters[i])
                        for i, (r, c) in enumerate(cells[start:end], start=start)
                    ],
                    axis=axis,
                ))

    return found


def find_all(
    grid: List[List[str]],
    oracle: WordOracle,
    min_length: int = 3,
    max_length: Optional[int] = None,
) -> List[MatchCandidate]:
    """
    Find every dictionary word in the grid's rows and columns.

    Runs are read left to right and top to bottom only, without wrapping.
    Candidates come back in scan order: rows top to bottom, then columns
    left to right; within a line by start offset, then by length.
    Overlapping candidates are all kept.

    Args:
        grid: Square letter grid
        oracle: Word validity lookup
        min_length: Shortest run to check
        max_length: Longest run to check (defaults to the grid size)

    Returns:
        List of match candidates in scan order

    Raises:
        OracleUnavailable: If the oracle is not ready
    """
    ensure_ready(oracle)

    size = len(grid)
    if max_length is None or max_length > size:
        max_length = size

    candidates: List[MatchCandidate] = []

    for r in range(size):
        cells = [(r, c) for c in range(size)]
        candidates.extend(_scan_line(grid[r], cells, "horizontal", oracle, min_length, max_length))

    for c in range(size):
        cells = [(r, c) for r in range(size)]
        column = [grid[r][c] for r in range(size)]
        candidates.extend(_scan_line(column, cells, "vertical", oracle, min_length, max_length))

    return candidates


def pick_candidate(candidates: List[MatchCandidate]) -> Optional[MatchCandidate]:
    """Longest candidate, ties going to the first in scan order."""
    if not candidates:
        return None
    # max() keeps the first of equal keys
    return max(candidates, key=lambda candidate: candidate.length)


def candidates_at(candidates: List[MatchCandidate], row: int, col: int) -> List[MatchCandidate]:
    """Candidates that use the cell at (row, col), in scan order."""
    return [candidate for candidate in candidates if candidate.covers(row, col)]
