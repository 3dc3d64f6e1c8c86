import random
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


# English letter weights, nudged toward vowels and common consonants for
# playability (standard frequencies: E ~12%, T ~9%, Q ~0.1%)
LETTER_FREQUENCIES: Dict[str, float] = {
    "A": 8.5, "E": 12.5, "I": 7.5, "O": 8.0, "U": 3.0,
    "R": 6.0, "T": 6.0, "N": 6.0, "S": 5.5, "L": 4.0,
    "C": 3.0, "D": 3.5, "P": 2.0, "M": 2.5, "H": 4.0,
    "G": 2.0, "B": 1.5, "F": 2.0, "Y": 1.5, "W": 1.5,
    "K": 1.5, "V": 1.0,
    "X": 0.5, "Z": 0.5, "J": 0.5, "Q": 0.3,
}


class LetterSource(BaseModel):
    """
    Draws single random letters from a weighted distribution.

    Each draw is independent; the only state is the weight table and the
    random generator.

    Attributes:
        frequencies: Relative weight per letter (A-Z)
        seed: Optional random seed for reproducibility
    """

    frequencies: Dict[str, float] = Field(default_factory=lambda: dict(LETTER_FREQUENCIES))
    seed: Optional[int] = None
    _rng: random.Random = None

    @field_validator("frequencies")
    @classmethod
    def _check_frequencies(cls, value: Dict[str, float]) -> Dict[str, float]:
        if not value:
            raise ValueError("Letter frequency table is empty")
        table = {}
        for letter, weight in value.items():
            key = letter.upper()
            if len(key) != 1 or not ("A" <= key <= "Z"):
                raise ValueError(f"Invalid letter in frequency table: {letter!r}")
            if weight <= 0:
                raise ValueError(f"Weight for {key} must be positive, got {weight}")
            table[key] = float(weight)
        return table

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @property
    def total_weight(self) -> float:
        return sum(self.frequencies.values())

    def next_letter(self) -> str:
        """Draw one uppercase letter."""
        letters = list(self.frequencies)
        weights = list(self.frequencies.values())
        return self._rng.choices(letters, weights=weights, k=1)[0]

    def letters(self, count: int) -> List[str]:
        """Draw ``count`` letters, e.g. to fill a new strip."""
        return [self.next_letter() for _ in range(count)]
