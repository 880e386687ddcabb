"""
Board module for the Minesweeper engine.

Holds the validated board configuration and the grid of tiles with its
aggregate flag counters. The board is pure storage: mine placement,
sweeping and flagging rules live in the engine.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, List, Sequence, Tuple

import numpy as np

from .tile import Tile


# Offsets of the 8 tiles surrounding a position
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)

# Tiles kept free of mines around the first sweep (3x3 block)
SAFE_ZONE_SIZE = 9


class InvalidConfiguration(ValueError):
    """Raised when a board can never be built from the given parameters."""


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        if self.mines > self.max_mines:
            raise InvalidConfiguration(f"Too many mines (max {self.max_mines})")

    @property
    def max_mines(self) -> int:
        """Largest mine count that still leaves room for the safe zone."""
        return self.width * self.height - SAFE_ZONE_SIZE


# ============================================================================
# Read-only Grid Access
# ============================================================================

class BoardView:
    """
    Read access shared by the live board and its snapshots.

    Tiles are stored column-major and addressed as (x, y) with
    0 <= x < width and 0 <= y < height.
    """

    config: BoardConfig
    flags: int
    valid_flags: int
    _tiles: Sequence[Sequence[Tile]]

    # ========================================================================
    # Dimensions
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mines(self) -> int:
        return self.config.mines

    # ========================================================================
    # Tile Access
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        """
        Get the tile at a position.

        Raises:
            IndexError: If (x, y) lies outside the board.
        """
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Position ({x}, {y}) outside {self.width}x{self.height} board"
            )
        return self._tiles[x][y]

    def positions(self) -> Iterator[Tuple[int, int]]:
        """Iterate over every (x, y) on the board, column by column."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def tiles(self) -> Iterator[Tuple[int, int, Tile]]:
        """Iterate over every tile with its position."""
        for x, y in self.positions():
            yield x, y, self._tiles[x][y]

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get in-bounds positions surrounding (x, y).

        Returns:
            Up to 8 (x, y) tuples, fewer at edges and corners.
        """
        return [
            (x + dx, y + dy)
            for dx, dy in NEIGHBOR_OFFSETS
            if self.in_bounds(x + dx, y + dy)
        ]

    def area(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Get the 3x3 block centered on (x, y), clipped to the board."""
        return [(x, y)] + self.neighbors(x, y)

    # ========================================================================
    # Aggregates
    # ========================================================================

    def mine_count(self) -> int:
        """Count tiles holding a mine."""
        return sum(1 for _, _, tile in self.tiles() if tile.is_mine)

    def swept_count(self) -> int:
        """Count tiles already revealed."""
        return sum(1 for _, _, tile in self.tiles() if tile.swept)

    def get_observation(self, reveal_mines: bool = False) -> np.ndarray:
        """
        Get player-visible board state as a numpy array.

        Args:
            reveal_mines: Show every unflagged mine (end of game view).

        Returns:
            2D int8 array of shape (height, width) indexed [y, x] where:
                -1 = hidden
                -2 = flagged
                -3 = unsure
                0-8 = swept with adjacent count
                9 = mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y, tile in self.tiles():
            obs[y, x] = tile.to_observation(reveal_mine=reveal_mines)
        return obs


# ============================================================================
# Board Classes
# ============================================================================

@dataclass(frozen=True)
class BoardSnapshot(BoardView):
    """Immutable, hashable copy of a board at one moment."""

    config: BoardConfig
    flags: int
    valid_flags: int
    _tiles: Tuple[Tuple[Tile, ...], ...] = field(repr=False)


@dataclass
class Board(BoardView):
    """
    Fixed-size grid of tiles.

    Attributes:
        config: Dimensions and target mine count.
        flags: Tiles currently flagged.
        valid_flags: Flagged tiles that actually hold a mine.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    flags: int = 0
    valid_flags: int = 0
    _tiles: List[List[Tile]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._tiles:
            self._tiles = [
                [Tile() for _ in range(self.config.height)]
                for _ in range(self.config.width)
            ]

    def put(self, x: int, y: int, tile: Tile) -> None:
        """Replace the tile at (x, y)."""
        self.tile(x, y)
        self._tiles[x][y] = tile

    def update(self, x: int, y: int, **changes: Any) -> Tile:
        """
        Replace fields of the tile at (x, y).

        Returns:
            The new tile now stored at (x, y).
        """
        tile = replace(self.tile(x, y), **changes)
        self._tiles[x][y] = tile
        return tile

    def snapshot(self) -> BoardSnapshot:
        """Return an immutable copy of the board."""
        return BoardSnapshot(
            config=self.config,
            flags=self.flags,
            valid_flags=self.valid_flags,
            _tiles=tuple(tuple(column) for column in self._tiles),
        )
