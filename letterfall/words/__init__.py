"""Word lookup and word finding for LetterFall."""

from .models import Axis, CellRef, MatchCandidate
from .dictionary import (
    OracleStatus,
    OracleUnavailable,
    WordOracle,
    WordDictionary,
    SAMPLE_WORDS,
    ensure_ready,
)
from .finder import find_all, pick_candidate, candidates_at
from .convert import convert_dictionary, read_word_list

__all__ = [
    # Models
    "Axis",
    "CellRef",
    "MatchCandidate",
    # Oracle
    "OracleStatus",
    "OracleUnavailable",
    "WordOracle",
    "WordDictionary",
    "SAMPLE_WORDS",
    "ensure_ready",
    # Finding
    "find_all",
    "pick_candidate",
    "candidates_at",
    # Conversion
    "convert_dictionary",
    "read_word_list",
]
