"""
Pydantic models for the engine layer.

This module contains the configuration and result models used throughout
the engine. The main logic classes (LetterSource, StripStore, the selectors,
MatchResolver, LetterFall) remain in their respective files.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from ..words.models import CellRef


# Type aliases
Direction = Literal["forward", "backward"]
InteractionMode = Literal["drag", "click", "shift"]
Outcome = Literal["match", "no_match", "unavailable"]

# Points per word length; lengths outside the table score length * 20
DRAG_POINT_TABLE: Dict[int, int] = {2: 10, 3: 20, 4: 40, 5: 80}
SHIFT_POINT_TABLE: Dict[int, int] = {3: 20, 4: 40, 5: 80}

# Shortest selection a confirm will send to the oracle
MIN_SELECTION_LENGTH: Dict[str, int] = {
    "drag": 2,
    "click": 3,
    "shift": 3,
}


class Rejection(BaseModel):
    """Why a selection was not accepted."""
    code: str
    message: str
    word: Optional[str] = None


class ResolutionEvent(BaseModel):
    """One scored word, either confirmed by the player or found by a cascade."""
    word: str
    points: int
    cascade_depth: int = 0  # 0 for the player's own word
    cells: List[CellRef] = Field(default_factory=list)
    score: int = 0  # Score after this event
    combo: int = 0  # Combo after this event


class ConfirmResult(BaseModel):
    """Result of confirming a selection, including any cascade it set off."""
    outcome: Outcome
    word: Optional[str] = None
    points: int = 0
    rejection: Optional[Rejection] = None
    events: List[ResolutionEvent] = Field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.outcome == "match"

    @property
    def cascades(self) -> List[ResolutionEvent]:
        """Events found automatically after the confirmed word."""
        return [event for event in self.events if event.cascade_depth > 0]

    @property
    def total_points(self) -> int:
        return sum(event.points for event in self.events)


class GameConfig(BaseModel):
    """Configuration for a game session."""
    mode: InteractionMode = "drag"
    grid_size: int = Field(default=5, ge=3, le=12)
    strip_capacity: int = Field(default=10, ge=3)
    min_word_length: int = Field(default=3, ge=1)
    max_word_length: Optional[int] = Field(default=None, ge=1)
    min_selection_length: Optional[int] = Field(default=None, ge=1)
    point_table: Optional[Dict[int, int]] = None
    max_cascade_depth: int = Field(default=100, ge=0)
    cascade_delay: float = Field(default=0.3, ge=0.0)
    seed: Optional[int] = None
    dictionary_path: Optional[str] = None
    letter_frequencies: Optional[Dict[str, float]] = None

    @model_validator(mode="after")
    def _check_sizes(self) -> "GameConfig":
        if self.strip_capacity < self.grid_size:
            raise ValueError(
                f"strip_capacity ({self.strip_capacity}) must be at least "
                f"grid_size ({self.grid_size})"
            )
        if self.max_word_length is not None and self.max_word_length < self.min_word_length:
            raise ValueError(
                f"max_word_length ({self.max_word_length}) must be at least "
                f"min_word_length ({self.min_word_length})"
            )
        return self

    @property
    def word_length_bounds(self) -> tuple:
        """(shortest, longest) run the word finder checks."""
        longest = self.max_word_length or self.grid_size
        return self.min_word_length, min(longest, self.grid_size)

    @property
    def selection_threshold(self) -> int:
        if self.min_selection_length is not None:
            return self.min_selection_length
        return MIN_SELECTION_LENGTH[self.mode]

    @property
    def points(self) -> Dict[int, int]:
        if self.point_table is not None:
            return self.point_table
        return DRAG_POINT_TABLE if self.mode == "drag" else SHIFT_POINT_TABLE

    @property
    def tracks_combo(self) -> bool:
        """Combos are only counted for drag selection."""
        return self.mode == "drag"
