"""
Word oracle for LetterFall.

The engine only needs to ask "is this a word?" and "can I ask yet?".
``WordOracle`` is that contract; ``WordDictionary`` is the in-memory
implementation that loads plain text or JSON word lists.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, Protocol, Set

from pydantic import BaseModel, Field

log = logging.getLogger("letterfall.words")


OracleStatus = Literal["empty", "loading", "ready", "failed"]

# Report load progress every this many lines
PROGRESS_INTERVAL = 5000

SAMPLE_WORDS = (
    # 3-letter words
    "cat", "dog", "hat", "bat", "rat", "sat", "mat", "fat", "pat",
    "run", "sun", "fun", "bun", "gun", "hut", "cut", "nut", "but",
    "rip", "sip", "tip", "lip", "hip", "dip", "nip", "zip", "pip",
    # 4-letter words
    "cake", "make", "take", "lake", "fake", "sake", "wake", "bake",
    "time", "lime", "dime", "mime", "rime", "fish", "dish", "wish",
    "risk", "disk", "mask", "task", "dusk",
    # 5-letter words
    "chime", "grime", "prime", "stare", "flare", "snare", "spare",
    "share", "scare", "glare", "place", "trace", "grace", "brace",
    "space", "plane", "flame", "house", "mouse", "louse", "greet",
    "sheet", "sweet", "fleet",
)


class OracleUnavailable(RuntimeError):
    """The word oracle cannot answer yet (still loading, or failed to load)."""

    def __init__(self, status: str, detail: Optional[str] = None):
        self.status = status
        self.detail = detail
        message = f"Word oracle is not ready (status: {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class WordOracle(Protocol):
    """Anything the engine can ask about word validity."""

    @property
    def is_ready(self) -> bool: ...

    def is_valid_word(self, word: str) -> bool: ...


def ensure_ready(oracle: WordOracle) -> None:
    """
    Readiness gate: every lookup path goes through here first.

    Raises:
        OracleUnavailable: If the oracle has not finished loading
    """
    if not oracle.is_ready:
        status = getattr(oracle, "status", "loading")
        raise OracleUnavailable(status, getattr(oracle, "error", None))


class WordDictionary(BaseModel):
    """
    In-memory word list with length bounds.

    Words are stored lowercase and only kept when they are alphabetic and
    within ``min_length..max_length``. Lookups are case-insensitive and
    enforce the same bounds independently of the caller.

    Attributes:
        min_length: Shortest accepted word
        max_length: Longest accepted word
        words: The loaded words (lowercase)
        status: Loading state; lookups are only answered once "ready"
        error: Message of the last load failure, if any
        source: Where the words came from
    """

    min_length: int = Field(default=3, ge=1)
    max_length: int = Field(default=5, ge=1)
    words: Set[str] = Field(default_factory=set)
    status: OracleStatus = "empty"
    error: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def create(
        cls,
        path: Optional[str | Path] = None,
        min_length: int = 3,
        max_length: int = 5,
    ) -> "WordDictionary":
        """
        Factory method returning a loaded dictionary.

        Args:
            path: Word list to load; the built-in sample words are used when omitted
            min_length: Shortest accepted word
            max_length: Longest accepted word

        Returns:
            A ready WordDictionary

        Raises:
            OracleUnavailable: If the word list could not be read
        """
        dictionary = cls(min_length=min_length, max_length=max_length)
        if path is None:
            dictionary.load_sample_words()
        else:
            dictionary.load(path)
        return dictionary

    @property
    def is_ready(self) -> bool:
        return self.status == "ready"

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: str) -> bool:
        return self.is_valid_word(word)

    def _accepts(self, word: str) -> bool:
        return self.min_length <= len(word) <= self.max_length and word.isalpha()

    def is_valid_word(self, word: str) -> bool:
        """Check a word against the list and the length bounds."""
        normalized = word.strip().lower()
        return self._accepts(normalized) and normalized in self.words

    def add_words(self, words: Iterable[str]) -> int:
        """
        Add words that pass the length and alphabet filter.

        Returns:
            Number of words added
        """
        added = 0
        for i, word in enumerate(words, start=1):
            normalized = word.strip().lower()
            if normalized and self._accepts(normalized) and normalized not in self.words:
                self.words.add(normalized)
                added += 1
            if i % PROGRESS_INTERVAL == 0:
                log.debug("Processed %d entries (%d words kept)", i, len(self.words))
        return added

    def load(self, path: str | Path) -> int:
        """
        Load a word list, choosing the format from the file suffix.

        ``.json`` files may hold a flat array of words or the grouped form
        ``{length: {first_letter: [words]}}``; anything else is read as one
        word per line.

        Returns:
            Number of words added

        Raises:
            OracleUnavailable: If the file is missing or malformed
        """
        path = Path(path)
        self.status = "loading"
        self.error = None
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix == ".json":
                    entries = list(_iter_json_words(json.load(f)))
                else:
                    entries = f.read().split("\n")
        except (OSError, ValueError) as e:
            self.status = "failed"
            self.error = str(e)
            log.error("Error loading dictionary from %s: %s", path, e)
            raise OracleUnavailable(self.status, self.error) from e

        added = self.add_words(entries)
        self.source = str(path)
        self.status = "ready"
        log.info(
            "Dictionary loaded with %d words (%d-%d letters) from %s",
            len(self.words), self.min_length, self.max_length, path,
        )
        return added

    def load_sample_words(self) -> int:
        """Load the built-in sample words (for development and demos)."""
        self.status = "loading"
        added = self.add_words(SAMPLE_WORDS)
        self.source = "sample"
        self.status = "ready"
        log.info("Sample dictionary loaded with %d words", len(self.words))
        return added

    def load_words(self, words: Iterable[str]) -> int:
        """Load words from memory and mark the dictionary ready."""
        self.status = "loading"
        added = self.add_words(words)
        self.source = "memory"
        self.status = "ready"
        return added

    def get_state(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "words": len(self.words),
            "min_length": self.min_length,
            "max_length": self.max_length,
            "source": self.source,
            "error": self.error,
        }


def _iter_json_words(data: Any) -> Iterable[str]:
    """Flatten a JSON word list (array, or nested dicts of arrays)."""
    if isinstance(data, str):
        yield data
    elif isinstance(data, list):
        for item in data:
            yield from _iter_json_words(item)
    elif isinstance(data, dict):
        for value in data.values():
            yield from _iter_json_words(value)
    else:
        raise ValueError(f"Unexpected entry in JSON word list: {data!r}")


def group_words(words: Iterable[str]) -> Dict[str, Dict[str, List[str]]]:
    """Group words by length, then by first letter."""
    grouped: Dict[str, Dict[str, List[str]]] = {}
    for word in words:
        grouped.setdefault(str(len(word)), {}).setdefault(word[0], []).append(word)
    return grouped
