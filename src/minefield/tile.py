"""
Tile module for the Minesweeper engine.

Represents individual tiles on the game board with their true content
(empty/count/mine) and their player-visible state (swept/flagged/unsure).
"""
from dataclasses import dataclass, replace
from enum import Enum, IntEnum, auto
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class TileState(IntEnum):
    """True content of a tile: an adjacent mine count or a mine."""

    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    MINE = 9


class TileModifier(Enum):
    """Player-placed marker on an unswept tile."""

    FLAGGED = auto()
    UNSURE = auto()


# Observation values for tiles the player cannot see into
HIDDEN = -1
FLAGGED = -2
UNSURE = -3


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass(frozen=True)
class Tile:
    """
    Represents a single tile in the Minesweeper grid.

    Tiles are immutable values; the board swaps in updated copies.

    Attributes:
        state: True content, fixed once mines have been generated.
        modifier: Flag or question marker, only ever set while unswept.
        swept: Whether the tile has been revealed. Never reset.
        safe: Whether the tile lies in the first-move safe zone.
    """

    state: TileState = TileState.ZERO
    modifier: Optional[TileModifier] = None
    swept: bool = False
    safe: bool = False

    @property
    def is_mine(self) -> bool:
        """Check if tile holds a mine."""
        return self.state == TileState.MINE

    @property
    def is_empty(self) -> bool:
        """Check if tile has no adjacent mines."""
        return self.state == TileState.ZERO

    @property
    def is_flagged(self) -> bool:
        """Check if tile is flagged."""
        return self.modifier == TileModifier.FLAGGED

    @property
    def is_unsure(self) -> bool:
        """Check if tile is marked with a question."""
        return self.modifier == TileModifier.UNSURE

    @property
    def count(self) -> int:
        """Adjacent mine count (0 for mines)."""
        if self.is_mine:
            return 0
        return int(self.state)

    def with_adjacent_mine(self) -> "Tile":
        """Return this tile with one more adjacent mine, saturating at eight."""
        if self.is_mine:
            return self
        return replace(self, state=TileState(min(self.state + 1, TileState.EIGHT)))

    def to_observation(self, reveal_mine: bool = False) -> int:
        """
        Convert tile to its player-visible value.

        Args:
            reveal_mine: Show an unflagged mine even if it was never swept.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            -3: Unsure tile
            0-8: Swept tile with adjacent mine count
            9: Mine
        """
        if self.is_flagged:
            return FLAGGED
        if self.swept or (reveal_mine and self.is_mine):
            return int(self.state)
        if self.is_unsure:
            return UNSURE
        return HIDDEN
