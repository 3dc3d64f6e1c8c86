import logging
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .grid import Grid, render_grid
from .letters import LetterSource
from .models import ConfirmResult, Direction, GameConfig, ResolutionEvent
from .resolver import MatchResolver
from .selection import ClickSelector, DragSelector
from .strips import StripStore
from ..words.dictionary import OracleUnavailable, WordDictionary
from ..words.finder import find_all
from ..words.models import Axis, CellRef, MatchCandidate

logger = logging.getLogger("letterfall.engine")


class LetterFall(BaseModel):
    """
    One game session: strips, score, and the current interaction.

    Routes input events to the selector for the configured mode, sends
    confirmed selections to the resolver, and exposes what a front-end
    needs to draw (grid, selection, highlighted words, score, events).

    Attributes:
        config: Session configuration
        oracle: Word validity lookup
        letters: Letter source for strips and refills
        store: The letter strips
        resolver: Scoring and cascade logic (holds score and combo)
        drag: Drag selection state
        clicker: Click selection state
        history: Every resolution event this session
        on_event: Optional callback called for each resolution event
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    oracle: Any = None
    letters: Optional[LetterSource] = None
    store: Optional[StripStore] = None
    resolver: Optional[MatchResolver] = None
    drag: DragSelector = Field(default_factory=DragSelector)
    clicker: ClickSelector = Field(default_factory=ClickSelector)
    history: List[ResolutionEvent] = Field(default_factory=list)
    on_event: Optional[Callable[[ResolutionEvent], None]] = None

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        oracle: Any = None,
        store: Optional[StripStore] = None,
        **config_kwargs: Any
    ) -> "LetterFall":
        """
        Factory method to create a session with strips and a dictionary.

        Args:
            config: Optional GameConfig instance
            oracle: Word oracle; a WordDictionary is built from the config when omitted
            store: Pre-filled strip store (mainly for tests); filled randomly when omitted
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured LetterFall instance
        """
        if config is None:
            config = GameConfig(**config_kwargs)

        if oracle is None:
            low, high = config.word_length_bounds
            oracle = WordDictionary(min_length=low, max_length=high)
            try:
                if config.dictionary_path:
                    oracle.load(config.dictionary_path)
                else:
                    oracle.load_sample_words()
            except OracleUnavailable as e:
                # The session still starts; it reports the failed oracle as its status
                logger.warning("Starting without a dictionary: %s", e)

        if store is None:
            letters_kwargs: Dict[str, Any] = {"seed": config.seed}
            if config.letter_frequencies:
                letters_kwargs["frequencies"] = config.letter_frequencies
            letters = LetterSource(**letters_kwargs)
            store = StripStore.create(letters, grid_size=config.grid_size, capacity=config.strip_capacity)
        else:
            letters = store.source

        resolver = MatchResolver(store=store, oracle=oracle, config=config)
        return cls(
            config=config,
            oracle=oracle,
            letters=letters,
            store=store,
            resolver=resolver,
            drag=DragSelector(grid_size=config.grid_size),
        )

    def reset(self) -> None:
        """Start over: fresh strips, zero score, no selection."""
        self.store = StripStore.create(
            self.letters,
            grid_size=self.config.grid_size,
            capacity=self.config.strip_capacity,
        )
        self.resolver.store = self.store
        self.resolver.reset()
        self.drag.cancel()
        self.clicker.clear()
        self.history = []
        logger.info("Game reset")

    # -- Outputs -------------------------------------------------------

    @property
    def score(self) -> int:
        return self.resolver.score

    @property
    def combo(self) -> int:
        return self.resolver.combo

    @property
    def ready(self) -> bool:
        return self.resolver.ready

    @property
    def status(self) -> str:
        """Oracle state: "ready", or why the engine is waiting."""
        if self.ready:
            return "ready"
        return getattr(self.oracle, "status", "loading")

    @property
    def grid(self) -> Grid:
        return self.store.snapshot_grid()

    @property
    def selection(self) -> List[CellRef]:
        """The in-progress selection with the letters currently shown."""
        if self.drag.active:
            grid = self.grid
            return [CellRef(row=r, col=c, letter=grid[r][c]) for r, c in self.drag.cells]
        if self.clicker.chosen is not None:
            return list(self.clicker.chosen.cells)
        return []

    def highlighted(self) -> List[MatchCandidate]:
        """Words currently on the grid; empty while the oracle is not ready."""
        if not self.ready:
            return []
        low, high = self.config.word_length_bounds
        return find_all(self.grid, self.oracle, low, high)

    def render(self) -> str:
        return render_grid(self.grid, [cell.position for cell in self.selection])

    # -- Confirmation --------------------------------------------------

    def confirm(self, selection: List[CellRef]) -> ConfirmResult:
        """Confirm a selection, record its events, and notify ``on_event``."""
        result = self.resolver.confirm(selection)
        for event in result.events:
            self.history.append(event)
            if self.on_event:
                self.on_event(event)
        return result

    def _require_mode(self, *modes: str) -> None:
        if self.config.mode not in modes:
            raise ValueError(f"Input not available in {self.config.mode} mode")

    # -- Drag mode -----------------------------------------------------

    def pointer_down(self, row: int, col: int) -> None:
        self._require_mode("drag")
        self.drag.pointer_down(row, col)

    def pointer_enter(self, row: int, col: int) -> bool:
        self._require_mode("drag")
        return self.drag.pointer_enter(row, col)

    def pointer_up(self) -> Optional[ConfirmResult]:
        """Confirm the dragged selection; None if nothing was being dragged."""
        self._require_mode("drag")
        if not self.drag.active:
            return None
        selection = self.selection
        self.drag.release()
        return self.confirm(selection)

    def pointer_leave(self) -> None:
        """Pointer left the grid: abandon the selection and the combo."""
        self._require_mode("drag")
        if self.drag.active:
            self.drag.cancel()
            self.resolver.combo = 0
            logger.debug("Selection abandoned")

    # -- Click / shift mode --------------------------------------------

    def click(self, row: int, col: int) -> Optional[ConfirmResult]:
        """
        First click chooses the longest highlighted word through the cell;
        the next click confirms it.

        Returns:
            ConfirmResult when the click confirmed a word, None otherwise
        """
        self._require_mode("click", "shift")
        if not (0 <= row < self.config.grid_size and 0 <= col < self.config.grid_size):
            raise ValueError(f"Cell ({row}, {col}) is outside the grid")

        if self.clicker.state == "word_chosen":
            chosen = self.clicker.take()
            return self.confirm(chosen.cells)

        self.clicker.choose(row, col, self.highlighted())
        return None

    def shift(self, index: int, direction: Direction = "forward", axis: Axis = "horizontal") -> None:
        """Shift a row strip, or rotate a column, by one letter."""
        self._require_mode("shift")
        # A chosen word's letters are stale once anything moves
        self.clicker.clear()
        if axis == "horizontal":
            self.store.shift(index, direction)
        else:
            self.store.shift_column(index, direction)

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Returns:
            Dictionary containing session state
        """
        return {
            "mode": self.config.mode,
            "status": self.status,
            "score": self.score,
            "combo": self.combo,
            "grid": [''.join(row) for row in self.grid],
            "selection": [cell.model_dump() for cell in self.selection],
            "highlighted": [candidate.word for candidate in self.highlighted()],
            "strips": self.store.get_state(),
            "events": len(self.history),
        }
