"""Grid projection and rendering utilities."""

from typing import Iterable, List, Tuple

Grid = List[List[str]]


def project_grid(strips: List[List[str]], positions: List[int], grid_size: int) -> Grid:
    """Build the visible grid: row r shows grid_size letters of strip r from its viewport."""
    grid: Grid = []
    for strip, position in zip(strips, positions):
        capacity = len(strip)
        grid.append([strip[(position + c) % capacity] for c in range(grid_size)])
    return grid


def grid_column(grid: Grid, col: int) -> List[str]:
    return [row[col] for row in grid]


def render_grid(grid: Grid, marked: Iterable[Tuple[int, int]] = ()) -> str:
    """Render the grid to a string, bracketing marked cells."""
    if not grid:
        return ""

    marked = set(marked)
    lines = [
        ' '.join(
            f"[{letter}]" if (r, c) in marked else f" {letter} "
            for c, letter in enumerate(row)
        )
        for r, row in enumerate(grid)
    ]

    return '\n'.join(lines)
