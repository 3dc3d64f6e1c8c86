"""Test match resolution, scoring, and cascades."""

import logging

import pytest

from letterfall.engine import (
    DRAG_POINT_TABLE,
    LOOPED,
    NOT_A_WORD,
    SHIFT_POINT_TABLE,
    TOO_SHORT,
    GameConfig,
    LetterSource,
    MatchResolver,
    StripStore,
    points_for,
)
from letterfall.words import CellRef, WordDictionary


FILLER = "ZZZZZZZZZZ"
WORDS = ["cat", "dog", "use", "house"]


def make_store(first_row: str) -> StripStore:
    """Row 0 holds the given strip; other rows and every refill are filler."""
    return StripStore(
        strips=[list(first_row)] + [list(FILLER) for _ in range(4)],
        source=LetterSource(frequencies={"Q": 1.0}),
    )


def make_oracle(words=WORDS) -> WordDictionary:
    oracle = WordDictionary()
    oracle.load_words(words)
    return oracle


def make_resolver(first_row: str = "CATXXJVZJV", mode: str = "drag", **config_kwargs) -> MatchResolver:
    return MatchResolver(
        store=make_store(first_row),
        oracle=make_oracle(),
        config=GameConfig(mode=mode, **config_kwargs),
    )


def cells(resolver: MatchResolver, *positions):
    """Cell references with the letters currently shown."""
    grid = resolver.store.snapshot_grid()
    return [CellRef(row=r, col=c, letter=grid[r][c]) for r, c in positions]


class SpyOracle:
    """Accepts every word and counts lookups."""

    is_ready = True

    def __init__(self):
        self.calls = 0

    def is_valid_word(self, word: str) -> bool:
        self.calls += 1
        return True


class TestPoints:
    """Test the point tables."""

    def test_drag_table(self):
        """Drag mode scores 2-5 letter words from its table."""
        assert [points_for(n, DRAG_POINT_TABLE) for n in (2, 3, 4, 5)] == [10, 20, 40, 80]

    def test_fallback(self):
        """Lengths outside the table score length * 20."""
        assert points_for(6, DRAG_POINT_TABLE) == 120
        assert points_for(2, SHIFT_POINT_TABLE) == 40

    def test_mode_defaults(self):
        """Each mode picks its own table and threshold."""
        assert GameConfig(mode="drag").points == DRAG_POINT_TABLE
        assert GameConfig(mode="shift").points == SHIFT_POINT_TABLE
        assert GameConfig(mode="drag").selection_threshold == 2
        assert GameConfig(mode="click").selection_threshold == 3

    def test_custom_table(self):
        """A configured table overrides the defaults."""
        config = GameConfig(point_table={3: 100})
        assert config.points == {3: 100}


class TestConfirm:
    """Test confirming a player selection."""

    def test_cat_scenario(self):
        """Confirming C-A-T scores the word and refills row 0."""
        resolver = make_resolver()
        result = resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 2)))

        assert result.outcome == "match"
        assert result.word == "cat"
        assert result.points == DRAG_POINT_TABLE[3]
        assert resolver.score == DRAG_POINT_TABLE[3]
        assert resolver.store.strips[0] == list("XXJVZJVQQQ")
        assert resolver.store.snapshot_grid()[0] == list("XXJVZ")
        assert len(result.events) == 1
        assert result.events[0].cascade_depth == 0
        assert result.events[0].score == 20

    def test_not_a_word(self):
        """Invalid words are rejected without touching the strips or score."""
        resolver = make_resolver()
        before = resolver.store.get_state()

        result = resolver.confirm(cells(resolver, (0, 1), (0, 2), (0, 3)))

        assert result.outcome == "no_match"
        assert result.rejection.code == NOT_A_WORD
        assert result.rejection.word == "atx"
        assert result.events == []
        assert resolver.store.get_state() == before
        assert resolver.score == 0

    def test_rejection_repeatable(self):
        """Rejecting the same selection twice changes nothing."""
        resolver = make_resolver()
        selection = cells(resolver, (0, 1), (0, 2), (0, 3))
        before = resolver.store.get_state()

        resolver.confirm(selection)
        resolver.confirm(selection)

        assert resolver.store.get_state() == before
        assert resolver.score == 0

    def test_short_click_selection_skips_oracle(self):
        """A one-letter click selection is rejected by length alone."""
        oracle = SpyOracle()
        resolver = MatchResolver(store=make_store("CATXXJVZJV"), oracle=oracle, config=GameConfig(mode="click"))

        result = resolver.confirm(cells(resolver, (0, 0)))

        assert result.outcome == "no_match"
        assert result.rejection.code == TOO_SHORT
        assert oracle.calls == 0

    def test_two_letters_reach_oracle_in_drag_mode(self):
        """Drag mode lets two-letter selections through to the oracle."""
        resolver = make_resolver()
        result = resolver.confirm(cells(resolver, (0, 0), (0, 1)))
        assert result.rejection.code == NOT_A_WORD

    def test_two_letters_too_short_in_shift_mode(self):
        """Shift mode needs three letters."""
        resolver = make_resolver(mode="shift")
        result = resolver.confirm(cells(resolver, (0, 0), (0, 1)))
        assert result.rejection.code == TOO_SHORT

    def test_empty_selection(self):
        """An empty selection is too short."""
        resolver = make_resolver()
        result = resolver.confirm([])
        assert result.rejection.code == TOO_SHORT
        assert result.word is None

    def test_oracle_not_ready(self):
        """Nothing is confirmed while the dictionary is loading."""
        resolver = MatchResolver(store=make_store("CATXXJVZJV"), oracle=WordDictionary())
        before = resolver.store.get_state()

        result = resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 2)))

        assert result.outcome == "unavailable"
        assert resolver.store.get_state() == before
        assert resolver.score == 0

    def test_stale_selection(self):
        """Letters that no longer match the grid are a caller error."""
        resolver = make_resolver()
        with pytest.raises(ValueError):
            resolver.confirm([
                CellRef(row=0, col=0, letter="D"),
                CellRef(row=0, col=1, letter="O"),
                CellRef(row=0, col=2, letter="G"),
            ])

    def test_backtracking_selection(self):
        """A selection that turns back on itself is not a straight run."""
        resolver = make_resolver()
        with pytest.raises(ValueError):
            resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 0)))

    def test_scattered_cells(self):
        """Cells spread over several rows and columns are refused before any lookup."""
        oracle = SpyOracle()
        resolver = MatchResolver(store=make_store("CATXXJVZJV"), oracle=oracle)
        with pytest.raises(ValueError):
            resolver.confirm(cells(resolver, (0, 0), (2, 3), (4, 1)))
        assert oracle.calls == 0
        assert resolver.score == 0

    def test_gap_in_run(self):
        """Skipping a cell breaks the run."""
        resolver = make_resolver()
        with pytest.raises(ValueError):
            resolver.confirm(cells(resolver, (0, 0), (0, 2), (0, 3)))

    def test_wrapped_run_accepted(self):
        """A run that wraps past the edge is still a straight run."""
        resolver = make_resolver("ATZZCJVJVJ")
        result = resolver.confirm(cells(resolver, (0, 4), (0, 0), (0, 1)))
        assert result.outcome == "match"
        assert result.word == "cat"

    def test_vertical_run_accepted(self):
        """Runs down a column are accepted."""
        resolver = make_resolver()
        result = resolver.confirm(cells(resolver, (0, 3), (1, 3), (2, 3)))
        assert result.rejection.code == NOT_A_WORD

    def test_looped_selection(self):
        """A selection that laps its row is rejected without a lookup."""
        oracle = SpyOracle()
        resolver = MatchResolver(store=make_store("CATXXJVZJV"), oracle=oracle)
        resolver.combo = 2
        before = resolver.store.get_state()

        result = resolver.confirm(cells(resolver, *[(0, i % 5) for i in range(8)]))

        assert result.outcome == "no_match"
        assert result.rejection.code == LOOPED
        assert result.word == "catxxcat"
        assert oracle.calls == 0
        assert resolver.combo == 0
        assert resolver.score == 0
        assert resolver.store.get_state() == before

    def test_cell_outside_grid(self):
        """Cells beyond the grid are a caller error."""
        resolver = make_resolver()
        with pytest.raises(ValueError):
            resolver.confirm([CellRef(row=0, col=7, letter="A")])


class TestCombo:
    """Test the drag-mode combo counter."""

    def test_combo_increments(self):
        """Each successful drag confirm adds to the combo."""
        resolver = make_resolver()
        resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 2)))
        assert resolver.combo == 1

    def test_rejection_resets_combo(self):
        """A failed confirm resets the combo."""
        resolver = make_resolver()
        resolver.combo = 3
        resolver.confirm(cells(resolver, (0, 1), (0, 2), (0, 3)))
        assert resolver.combo == 0

    def test_no_combo_in_click_mode(self):
        """Click mode leaves the combo alone."""
        resolver = make_resolver(mode="click")
        resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 2)))
        assert resolver.combo == 0


class TestCascade:
    """Test cascading matches."""

    def test_cascade_follows_match(self):
        """Letters sliding in after a match can form a new word."""
        resolver = make_resolver("CATDOGXXXX")
        result = resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 2)))

        assert [e.word for e in result.events] == ["cat", "dog"]
        assert [e.cascade_depth for e in result.events] == [0, 1]
        assert [e.score for e in result.events] == [20, 40]
        assert result.total_points == 40
        assert [e.word for e in result.cascades] == ["dog"]
        assert resolver.score == 40
        assert resolver.combo == 2
        assert resolver.store.snapshot_grid()[0] == list("XXXXQ")

    def test_cascade_prefers_longest(self):
        """Overlapping HOUSE and USE: the five-letter word goes first."""
        resolver = make_resolver("CATHOUSEXX")
        result = resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 2)))

        assert [e.word for e in result.events] == ["cat", "house"]
        assert result.events[1].points == DRAG_POINT_TABLE[5]
        assert resolver.score == 20 + 80

    def test_cascade_generator_steps(self):
        """cascade() yields one event at a time."""
        resolver = make_resolver("DOGXXXXXXX")
        steps = resolver.cascade()

        event = next(steps)
        assert event.word == "dog"
        assert event.cascade_depth == 1
        assert resolver.score == 20
        with pytest.raises(StopIteration):
            next(steps)

    def test_cascade_depth_limit(self, caplog):
        """max_cascade_depth stops the chain with a warning."""
        resolver = make_resolver("CATDOGXXXX", max_cascade_depth=0)

        with caplog.at_level(logging.WARNING, logger="letterfall.engine"):
            result = resolver.confirm(cells(resolver, (0, 0), (0, 1), (0, 2)))

        assert [e.word for e in result.events] == ["cat"]
        assert "Cascade stopped" in caplog.text

    def test_cascade_terminates(self):
        """A random game's cascades always end."""
        store = StripStore.create(LetterSource(seed=8))
        resolver = MatchResolver(store=store, oracle=WordDictionary.create())
        events = list(resolver.cascade())
        assert len(events) <= resolver.config.max_cascade_depth
