"""
Standalone CLI for converting word lists into JSON dictionaries.

Usage:
    python -m letterfall.convert words.txt
    python -m letterfall.convert words.txt --output dictionary.json --optimized
"""

import argparse
import logging
import sys
from pathlib import Path

from .words import convert_dictionary


def main():
    parser = argparse.ArgumentParser(
        description="Convert a plain word list into a LetterFall JSON dictionary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m letterfall.convert words.txt
  python -m letterfall.convert words.txt --output dictionary.json
  python -m letterfall.convert words.txt --max-length 6 --optimized
        """
    )
    parser.add_argument(
        "input",
        help="Path to the word list (one word per line)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output path for the JSON file (default: same as input with .json extension)"
    )
    parser.add_argument(
        "--max-length",
        type=int,
        default=5,
        help="Longest word to keep (default: 5)"
    )
    parser.add_argument(
        "--optimized",
        action="store_true",
        help="Also write <name>.optimized.json grouped by length and first letter"
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    # Validate input file
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Word list not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    try:
        output_path = convert_dictionary(
            input_path,
            args.output,
            max_length=args.max_length,
            optimized=args.optimized,
        )
        print(f"Dictionary written: {output_path}")
    except Exception as e:
        print(f"Error converting dictionary: {e}", file=sys.stderr)
        sys.exit(1)

    return 0


if __name__ == "__main__":
    sys.exit(main())
