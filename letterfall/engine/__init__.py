"""Game engine for LetterFall."""

from .models import (
    Direction,
    InteractionMode,
    Outcome,
    Rejection,
    ResolutionEvent,
    ConfirmResult,
    GameConfig,
    DRAG_POINT_TABLE,
    SHIFT_POINT_TABLE,
)
from .letters import LetterSource, LETTER_FREQUENCIES
from .grid import project_grid, render_grid
from .strips import StripStore
from .selection import DragSelector, ClickSelector
from .resolver import MatchResolver, points_for, TOO_SHORT, LOOPED, NOT_A_WORD
from .letterfall import LetterFall

__all__ = [
    "Direction",
    "InteractionMode",
    "Outcome",
    "Rejection",
    "ResolutionEvent",
    "ConfirmResult",
    "GameConfig",
    "DRAG_POINT_TABLE",
    "SHIFT_POINT_TABLE",
    "LetterSource",
    "LETTER_FREQUENCIES",
    "project_grid",
    "render_grid",
    "StripStore",
    "DragSelector",
    "ClickSelector",
    "MatchResolver",
    "points_for",
    "TOO_SHORT",
    "LOOPED",
    "NOT_A_WORD",
    "LetterFall",
]
