"""
Command line front end for the Minesweeper engine.

Usage:
    minefield [--dimensions WxH | --width W --height H] --mines N [--seed S]

Commands during play (1-based coordinates):
    x,y     sweep tile
    fx,y    flag tile
    ?x,y    question tile
    q       quit
"""
import argparse
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from .board import BoardConfig, InvalidConfiguration
from .engine import GameState, Minesweeper
from .events import FlagTile, GameEnd, SweepDone
from .render import render_board, render_status

logger = logging.getLogger(__name__)

InputFn = Callable[[], str]
OutputFn = Callable[[str], None]

# Defaults offered by the interactive settings prompt
PROMPT_DEFAULTS = (16, 16, 40)
PROMPT_NAMES = ("Width:", "Height:", "Number of Mines:")

# Board used when no settings can be read at all
DEFAULT_CONFIG = BoardConfig(30, 16, 99)


# ============================================================================
# Input Parsing
# ============================================================================

class InvalidInput(ValueError):
    """Raised when a line typed by the player is not a valid command."""


class ActionKind(Enum):
    """Commands the player can issue."""

    SWEEP = auto()
    FLAG = auto()
    QUESTION = auto()
    QUIT = auto()


@dataclass(frozen=True)
class Action:
    """A parsed player command with 0-based coordinates."""

    kind: ActionKind
    x: int = 0
    y: int = 0


PREFIXES = {
    "f": ActionKind.FLAG,
    "?": ActionKind.QUESTION,
}


def parse_action(line: str, width: int, height: int) -> Action:
    """
    Parse one line of player input.

    Args:
        line: Raw text such as "3,4", "f3,4", "?3,4" or "q".
        width: Board width for bounds checking.
        height: Board height for bounds checking.

    Returns:
        Action with coordinates converted to 0-based.

    Raises:
        InvalidInput: If the line is not a command or is off the board.
    """
    text = line.strip().lower()
    if not text:
        raise InvalidInput("Enter a command")
    if text == "q":
        return Action(ActionKind.QUIT)

    kind = ActionKind.SWEEP
    if text[0] in PREFIXES:
        kind = PREFIXES[text[0]]
        text = text[1:]

    parts = text.split(",")
    if len(parts) != 2:
        raise InvalidInput("Invalid Location")
    try:
        x, y = (int(part.strip()) for part in parts)
    except ValueError:
        raise InvalidInput("Invalid Location") from None

    if not (1 <= x <= width and 1 <= y <= height):
        raise InvalidInput("Invalid Location")
    return Action(kind, x - 1, y - 1)


def parse_dimensions(text: str) -> Tuple[int, int]:
    """Parse "WxH" into (width, height) for argparse."""
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(
            "Two dimensions separated by an `x` are required."
        )
    try:
        width, height = (int(part) for part in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(
            "Each dimension must be a number."
        ) from None
    if width < 1 or height < 1:
        raise argparse.ArgumentTypeError(
            "Two dimensions separated by an `x` are required."
        )
    return width, height


# ============================================================================
# Settings
# ============================================================================

def prompt_settings(
    input_fn: InputFn = input, output: OutputFn = print
) -> BoardConfig:
    """
    Ask the player for width, height and mine count.

    Pressing Enter keeps the default. Non-numeric or zero answers are
    asked again.

    Raises:
        EOFError: If input ends before all values are read.
        InvalidConfiguration: If the chosen values cannot form a board.
    """
    output("Input options:")
    params: List[int] = list(PROMPT_DEFAULTS)
    for i, name in enumerate(PROMPT_NAMES):
        while True:
            output(f"{name} (Press Enter for default: {params[i]})")
            answer = input_fn().strip()
            if not answer:
                output(f"default {params[i]}")
                break
            try:
                value = int(answer)
            except ValueError:
                continue
            if value > 0:
                params[i] = value
                break
    return BoardConfig(*params)


def settings_from_args(args: argparse.Namespace) -> Optional[BoardConfig]:
    """Build a config from command line arguments, or None if incomplete."""
    if args.mines is None:
        return None
    if args.width is not None and args.height is not None:
        return BoardConfig(args.width, args.height, args.mines)
    if args.dimensions is not None:
        width, height = args.dimensions
        return BoardConfig(width, height, args.mines)
    return None


# ============================================================================
# Game Loop
# ============================================================================

def _render(engine: Minesweeper) -> str:
    return "\n".join([
        render_board(engine.get_observation()),
        render_status(engine.elapsed),
    ])


def play(
    engine: Minesweeper,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> GameState:
    """
    Run the interactive loop until the game ends or the player quits.

    Args:
        engine: Game to drive.
        input_fn: Reads one command line.
        output: Writes one block of text.

    Returns:
        The engine state when the loop stopped.
    """
    output(_render(engine))

    while True:
        for event in engine.events:
            if isinstance(event, GameEnd):
                output(render_board(event.board.get_observation(reveal_mines=True)))
            elif isinstance(event, (SweepDone, FlagTile)):
                output(_render(engine))

        if engine.state == GameState.GAME_OVER:
            output("Game Over!")
            break
        if engine.state == GameState.VICTORY:
            output("You Win!")
            break

        try:
            line = input_fn()
        except EOFError:
            break

        try:
            action = parse_action(line, engine.width, engine.height)
        except InvalidInput as error:
            output(str(error))
            continue

        if action.kind == ActionKind.QUIT:
            break
        if action.kind == ActionKind.SWEEP:
            engine.sweep(action.x, action.y)
        elif action.kind == ActionKind.FLAG:
            engine.flag(action.x, action.y)
        elif action.kind == ActionKind.QUESTION:
            engine.question(action.x, action.y)

    return engine.state


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="minefield", description="Minesweeper in the terminal"
    )
    parser.add_argument(
        "-d", "--dimensions", type=parse_dimensions, default=None,
        help="Size of game board as WIDTHxHEIGHT",
    )
    parser.add_argument("--width", type=int, default=None, help="Width of game board")
    parser.add_argument("--height", type=int, default=None, help="Height of game board")
    parser.add_argument("-m", "--mines", type=int, default=None, help="Number of mines")
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible mine layouts"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity",
    )
    return parser


def _check_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Enforce the argument combinations argparse cannot express."""
    sized = args.width is not None or args.height is not None
    if sized and args.dimensions is not None:
        parser.error("--width/--height conflict with --dimensions")
    if sized and (args.width is None or args.height is None or args.mines is None):
        parser.error("--width and --height require each other and --mines")


def main(
    argv: Optional[List[str]] = None,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> int:
    """Parse arguments and play one game."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _check_args(parser, args)

    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = settings_from_args(args)
        if config is None:
            try:
                config = prompt_settings(input_fn, output)
            except EOFError:
                logger.info("No settings entered, using defaults")
                config = DEFAULT_CONFIG
    except InvalidConfiguration as error:
        parser.error(str(error))

    rng = random.Random(args.seed)
    engine = Minesweeper(config, rng=rng)
    play(engine, input_fn, output)
    return 0
