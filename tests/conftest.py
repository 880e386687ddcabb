"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Set, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Minesweeper, Tile


# ============================================================================
# Helpers
# ============================================================================

def mine_positions(engine: Minesweeper) -> List[Tuple[int, int]]:
    """List every mine on the engine's board."""
    return [(x, y) for x, y, tile in engine.snapshot().tiles() if tile.is_mine]


def swept_positions(engine: Minesweeper) -> Set[Tuple[int, int]]:
    """Set of every swept position on the engine's board."""
    return {(x, y) for x, y, tile in engine.snapshot().tiles() if tile.swept}


def scripted(lines: Iterable[str]) -> Callable[[], str]:
    """Build an input function that replays lines then raises EOFError."""
    remaining = iter(lines)

    def read() -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return read


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


@pytest.fixture
def default_engine(rng: random.Random) -> Minesweeper:
    """Create a default 9x9 engine with 10 mines."""
    return Minesweeper(BoardConfig(9, 9, 10), rng=rng)


@pytest.fixture
def empty_engine() -> Minesweeper:
    """Create a 3x3 engine with no mines for cascade testing."""
    return Minesweeper(BoardConfig(3, 3, 0))


@pytest.fixture
def packed_engine(rng: random.Random) -> Minesweeper:
    """
    Create a 5x5 engine holding the maximum 16 mines.

    Sweeping the center (2, 2) first leaves mines on exactly the outer
    ring of 16 tiles.
    """
    return Minesweeper(BoardConfig(5, 5, 16), rng=rng)


@pytest.fixture
def started_engine(rng: random.Random) -> Minesweeper:
    """16x16 engine with 40 mines after its first sweep at (4, 4), events drained."""
    engine = Minesweeper(BoardConfig(16, 16, 40), rng=rng)
    engine.sweep(4, 4)
    engine.events.drain()
    return engine


# ============================================================================
# Board and Tile Fixtures
# ============================================================================

@pytest.fixture
def small_board() -> Board:
    """Create a 4x3 board (4 columns, 3 rows)."""
    return Board(BoardConfig(4, 3, 0))


@pytest.fixture
def blank_tile() -> Tile:
    """Create an unswept empty tile."""
    return Tile()
