"""Convert plain word lists into the JSON forms WordDictionary can load."""

import json
import logging
from pathlib import Path
from typing import List, Optional

from .dictionary import group_words

log = logging.getLogger("letterfall.words")


def read_word_list(path: str | Path, max_length: int = 5) -> List[str]:
    """Read one word per line, keeping lowercase alphabetic words up to max_length."""
    with open(path, encoding="utf-8") as f:
        words = [line.strip().lower() for line in f]
    return [word for word in words if word and len(word) <= max_length and word.isalpha()]


def convert_dictionary(
    input_path: str | Path,
    output_path: Optional[str | Path] = None,
    max_length: int = 5,
    optimized: bool = False,
) -> Path:
    """
    Convert a plain word list to JSON.

    Args:
        input_path: Word list with one word per line
        output_path: Output path for the JSON array (defaults to same name with .json)
        max_length: Longest word to keep
        optimized: Also write ``<stem>.optimized.json`` grouped by length and first letter

    Returns:
        Path to the generated JSON array
    """
    input_path = Path(input_path)

    if output_path is None:
        output_path = input_path.with_suffix(".json")
    else:
        output_path = Path(output_path)

    words = read_word_list(input_path, max_length=max_length)
    log.info("Found %d valid words in %s", len(words), input_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(words, f)

    if optimized:
        optimized_path = output_path.with_name(f"{output_path.stem}.optimized.json")
        with open(optimized_path, "w") as f:
            json.dump(group_words(words), f)
        log.info("Saved grouped dictionary to %s", optimized_path)

    return output_path
