"""
Engine module for the Minesweeper game.

Owns the board and the game state machine. Implements first-touch mine
generation around a safe zone, breadth-first cascade reveal, flag toggling
and victory/defeat detection. Every action appends events describing what
changed to the engine's queue.
"""
import logging
import random
import time
from collections import deque
from enum import Enum, auto
from typing import Deque, Dict, FrozenSet, Optional, Tuple

import numpy as np

from .board import Board, BoardConfig, BoardSnapshot
from .events import (
    EventQueue,
    FlagAllMines,
    FlagTile,
    GameEnd,
    GameStart,
    InitDone,
    RevealMine,
    RevealTile,
    SweepBegin,
    SweepDone,
)
from .tile import Tile, TileModifier, TileState

logger = logging.getLogger(__name__)


# ============================================================================
# Game State
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    EMPTY = auto()
    PLAYING = auto()
    GAME_OVER = auto()
    VICTORY = auto()


TRANSITIONS: Dict[GameState, FrozenSet[GameState]] = {
    GameState.EMPTY: frozenset({GameState.PLAYING}),
    GameState.PLAYING: frozenset({GameState.GAME_OVER, GameState.VICTORY}),
    GameState.GAME_OVER: frozenset(),
    GameState.VICTORY: frozenset(),
}


# ============================================================================
# Engine Class
# ============================================================================

class Minesweeper:
    """
    Minesweeper rules engine.

    Mines are placed lazily on the first sweep so that the first move and
    its surrounding tiles are never mines. Actions on a finished game, or on
    tiles they cannot apply to, are silently ignored.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            rng: Random source used to place mines.
        """
        self._board = Board(config or BoardConfig())
        self._rng = rng or random.Random()
        self._state = GameState.EMPTY
        self._start_time: Optional[float] = None
        self.events = EventQueue()

    # ========================================================================
    # State Machine (Low-level)
    # ========================================================================

    def _transition(self, new_state: GameState) -> None:
        """Move to a new state, enforcing the transition table."""
        if new_state not in TRANSITIONS[self._state]:
            raise RuntimeError(
                f"Illegal transition {self._state.name} -> {new_state.name}"
            )
        logger.debug("State %s -> %s", self._state.name, new_state.name)
        self._state = new_state

    # ========================================================================
    # Generation (Low-level)
    # ========================================================================

    def _generate(self, avoid_x: int, avoid_y: int) -> None:
        """
        Place mines and compute counts, keeping (avoid_x, avoid_y) clear.

        Args:
            avoid_x: Column of the first sweep.
            avoid_y: Row of the first sweep.
        """
        self.events.add(GameStart())

        for x, y in self._board.area(avoid_x, avoid_y):
            self._board.update(x, y, safe=True)

        self._place_mines()
        self._calculate_counts()

        self._start_time = time.monotonic()
        self._transition(GameState.PLAYING)
        self.events.add(InitDone())
        logger.debug(
            "Generated %d mines on %dx%d board around (%d, %d)",
            self._board.mines, self._board.width, self._board.height,
            avoid_x, avoid_y,
        )

    def _place_mines(self) -> None:
        """Scatter mines uniformly over tiles outside the safe zone."""
        placed = 0
        while placed < self._board.mines:
            x = self._rng.randrange(self._board.width)
            y = self._rng.randrange(self._board.height)
            tile = self._board.tile(x, y)
            if tile.is_mine or tile.safe:
                continue
            self._board.update(x, y, state=TileState.MINE)
            placed += 1

    def _calculate_counts(self) -> None:
        """Add each mine to the count of its non-mine neighbors."""
        for x, y, tile in self._board.tiles():
            if not tile.is_mine:
                continue
            for nx, ny in self._board.neighbors(x, y):
                self._board.put(nx, ny, self._board.tile(nx, ny).with_adjacent_mine())

    # ========================================================================
    # Game Actions
    # ========================================================================

    def sweep(self, x: int, y: int) -> None:
        """
        Reveal the tile at (x, y).

        The first sweep generates the mines. Sweeping a mine ends the game;
        sweeping an empty tile cascades across its connected empty region
        and the numbered tiles bordering it.

        Args:
            x: Column to sweep.
            y: Row to sweep.
        """
        self._board.tile(x, y)  # bounds check before generation
        if self._state == GameState.EMPTY:
            self._generate(x, y)
        if self._state != GameState.PLAYING:
            logger.debug("Ignoring sweep at (%d, %d) in %s", x, y, self._state.name)
            return

        tile = self._board.tile(x, y)
        if tile.modifier is not None or tile.swept:
            return

        tile = self._board.update(x, y, swept=True)
        self.events.add(RevealTile(x, y, tile))

        if tile.is_mine:
            self.events.add(RevealMine(x, y, tile))
            self.events.add(GameEnd(self._board.snapshot()))
            self._transition(GameState.GAME_OVER)
            logger.info("Mine swept at (%d, %d), game over", x, y)
            return

        self.events.add(SweepBegin())
        self._cascade(x, y)
        self.events.add(SweepDone())

    def _cascade(self, x: int, y: int) -> None:
        """Breadth-first reveal outward from an already swept tile."""
        queue: Deque[Tuple[int, int]] = deque([(x, y)])
        while queue:
            cx, cy = queue.popleft()
            if not self._board.tile(cx, cy).is_empty:
                continue
            for nx, ny in self._board.neighbors(cx, cy):
                if self._board.tile(nx, ny).swept:
                    continue
                neighbor = self._board.update(nx, ny, swept=True)
                self.events.add(RevealTile(nx, ny, neighbor))
                queue.append((nx, ny))

    def flag(self, x: int, y: int) -> None:
        """
        Toggle a flag on the unswept tile at (x, y).

        Flagging the last unflagged mine wins the game.

        Args:
            x: Column to flag.
            y: Row to flag.
        """
        if self._state != GameState.PLAYING:
            logger.debug("Ignoring flag at (%d, %d) in %s", x, y, self._state.name)
            return

        board = self._board
        tile = board.tile(x, y)
        if tile.swept:
            return

        if tile.is_flagged:
            tile = board.update(x, y, modifier=None)
            board.flags -= 1
            if tile.is_mine:
                board.valid_flags -= 1
            self.events.add(FlagTile(x, y, tile))
        elif tile.modifier is None:
            tile = board.update(x, y, modifier=TileModifier.FLAGGED)
            board.flags += 1
            if tile.is_mine:
                board.valid_flags += 1
            self.events.add(FlagTile(x, y, tile))

            if board.valid_flags == board.mines:
                self.events.add(FlagAllMines())
                self._transition(GameState.VICTORY)
                logger.info("All %d mines flagged, victory", board.mines)

    def question(self, x: int, y: int) -> None:
        """Placeholder for question marks; has no effect on the game."""
        logger.debug("Question mark at (%d, %d) ignored", x, y)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        """Check if actions currently have effect."""
        return self._state == GameState.PLAYING

    @property
    def is_finished(self) -> bool:
        """Check if the game was won or lost."""
        return self._state in (GameState.GAME_OVER, GameState.VICTORY)

    @property
    def start_time(self) -> Optional[float]:
        """Monotonic timestamp of the first sweep."""
        return self._start_time

    @property
    def elapsed(self) -> Optional[float]:
        """Seconds since the first sweep, or None before it."""
        if self._start_time is None:
            return None
        return time.monotonic() - self._start_time

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def mines(self) -> int:
        return self._board.mines

    @property
    def flags(self) -> int:
        return self._board.flags

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is on the board."""
        return self._board.in_bounds(x, y)

    def tile(self, x: int, y: int) -> Tile:
        """Get the tile at (x, y)."""
        return self._board.tile(x, y)

    def snapshot(self) -> BoardSnapshot:
        """Get an immutable copy of the whole board."""
        return self._board.snapshot()

    def get_observation(self, reveal_mines: bool = False) -> np.ndarray:
        """Get player-visible board state, see Board.get_observation."""
        return self._board.get_observation(reveal_mines=reveal_mines)
