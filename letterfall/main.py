"""
Text front-end for playing LetterFall in a terminal.

Usage:
    python -m letterfall.main
    python -m letterfall.main config.yaml --words words.txt
    python -m letterfall.main --mode shift --auto 20 --seed 7
"""

import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

import yaml

from .engine import ConfirmResult, GameConfig, LetterFall, ResolutionEvent
from .words import pick_candidate


HELP = """Commands:
  drag R C R C     drag from one cell to another (drag mode; columns/rows may run past the edge)
  click R C        click a cell (click and shift modes)
  shift R [+|-]    shift row R forward (+) or backward (-) (shift mode)
  shiftcol C [+|-] rotate column C (shift mode)
  words            list the words currently on the grid
  show             redraw the grid
  new              start a new game
  quit             leave"""


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def print_board(game: LetterFall) -> None:
    print()
    print(game.render())
    print(f"Score: {game.score}" + (f"   Combo: {game.combo}x" if game.config.mode == "drag" else ""))


def make_event_printer(delay: float):
    """Print each resolution event, pausing before cascade steps."""
    def on_event(event: ResolutionEvent) -> None:
        if event.cascade_depth > 0:
            time.sleep(delay)
            print(f"  Cascade x{event.cascade_depth}: {event.word.upper()} +{event.points}")
        else:
            print(f"  {event.word.upper()} +{event.points}")
    return on_event


def report(result: Optional[ConfirmResult]) -> None:
    if result is None:
        return
    if result.outcome == "unavailable":
        print("Dictionary not ready yet")
    elif result.rejection:
        print(f"  No match: {result.rejection.message}")
    elif result.cascades:
        print(f"  Chain of {len(result.events)} words for {result.total_points} points")


def run_command(game: LetterFall, line: str) -> bool:
    """
    Run one typed command.

    Returns:
        False when the player asked to quit
    """
    parts = line.split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit", "q"):
        return False
    if command in ("help", "?"):
        print(HELP)
    elif command == "show":
        print_board(game)
    elif command == "new":
        game.reset()
        print_board(game)
    elif command == "words":
        candidates = game.highlighted()
        if candidates:
            print("  " + ", ".join(c.word.upper() for c in candidates))
        else:
            print("  (no words on the grid)" if game.ready else f"  (dictionary {game.status})")
    elif command == "drag":
        r1, c1, r2, c2 = (int(a) for a in args)
        game.pointer_down(r1, c1)
        game.pointer_enter(r2, c2)
        report(game.pointer_up())
        print_board(game)
    elif command == "click":
        row, col = (int(a) for a in args)
        result = game.click(row, col)
        if result is None and game.selection:
            print(f"  Selected {''.join(cell.letter for cell in game.selection)} (click again to confirm)")
        report(result)
        print_board(game)
    elif command in ("shift", "shiftcol"):
        index = int(args[0])
        direction = "backward" if len(args) > 1 and args[1] == "-" else "forward"
        axis = "vertical" if command == "shiftcol" else "horizontal"
        game.shift(index, direction, axis)
        print_board(game)
    else:
        print(f"Unknown command: {command} (type 'help')")

    return True


def play_best(game: LetterFall, rng: random.Random) -> bool:
    """
    Make one automatic move.

    Returns:
        False when no move is possible
    """
    candidate = pick_candidate(game.highlighted())

    if candidate is None:
        if game.config.mode != "shift":
            return False
        game.shift(rng.randrange(game.config.grid_size), rng.choice(["forward", "backward"]))
        return True

    print(f"Playing {candidate.word.upper()}")
    if game.config.mode == "drag":
        first, last = candidate.cells[0], candidate.cells[-1]
        game.pointer_down(first.row, first.col)
        game.pointer_enter(last.row, last.col)
        report(game.pointer_up())
    else:
        first = candidate.cells[0]
        game.click(first.row, first.col)
        report(game.click(first.row, first.col))
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Play LetterFall in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  mode: shift
  seed: 42
  dictionary_path: words.txt
  cascade_delay: 0.3
  point_table:
    3: 20
    4: 40
    5: 80
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--words", "-w",
        help="Word list to load (text, one word per line, or JSON)"
    )
    parser.add_argument(
        "--mode", "-m",
        choices=["drag", "click", "shift"],
        help="Interaction mode (overrides the config file)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible games"
    )
    parser.add_argument(
        "--auto",
        type=int,
        metavar="N",
        help="Play up to N moves automatically instead of reading commands"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GameConfig()
        overrides = {}
        if args.words:
            overrides["dictionary_path"] = args.words
        if args.mode:
            overrides["mode"] = args.mode
        if args.seed is not None:
            overrides["seed"] = args.seed
        if overrides:
            config = GameConfig(**{**config.model_dump(), **overrides})
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    game = LetterFall.create(config=config)
    game.on_event = make_event_printer(config.cascade_delay)

    if not game.ready:
        print(f"Error: dictionary {game.status}: {getattr(game.oracle, 'error', '')}", file=sys.stderr)
        sys.exit(1)

    print(f"LetterFall ({config.mode} mode)")
    print_board(game)

    try:
        if args.auto is not None:
            rng = random.Random(config.seed)
            moves = 0
            while moves < args.auto and play_best(game, rng):
                moves += 1
            print_board(game)
        else:
            print("Type 'help' for commands.")
            while True:
                try:
                    line = input("> ")
                except EOFError:
                    break
                try:
                    if not run_command(game, line):
                        break
                except (ValueError, IndexError) as e:
                    print(f"  Invalid command: {e}")
    except KeyboardInterrupt:
        print("\nGame interrupted")

    # Print summary
    print()
    print("=== Game Summary ===")
    print(f"Score: {game.score}")
    print(f"Words: {len(game.history)}")
    if game.history:
        best = max(game.history, key=lambda event: event.points)
        print(f"Best word: {best.word.upper()} ({best.points} points)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
