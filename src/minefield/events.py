"""
Game events emitted by the Minesweeper engine.

Every action appends records describing exactly what changed. Events and
the tiles and boards they carry are immutable and hashable.
"""
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Iterator, List, Optional

from .tile import Tile

if TYPE_CHECKING:
    from .board import BoardSnapshot


# ============================================================================
# Event Records
# ============================================================================

@dataclass(frozen=True)
class Event:
    """Base class for all engine events."""


@dataclass(frozen=True)
class TileEvent(Event):
    """An event about a single tile."""

    x: int
    y: int
    tile: Tile


@dataclass(frozen=True)
class RevealTile(TileEvent):
    """A tile was swept."""


@dataclass(frozen=True)
class RevealMine(TileEvent):
    """A swept tile turned out to be a mine."""


@dataclass(frozen=True)
class FlagTile(TileEvent):
    """A flag was placed on or removed from a tile."""


@dataclass(frozen=True)
class SweepBegin(Event):
    """A cascade reveal is starting."""


@dataclass(frozen=True)
class SweepDone(Event):
    """A cascade reveal finished."""


@dataclass(frozen=True)
class GameStart(Event):
    """Mine generation began on the first sweep."""


@dataclass(frozen=True)
class InitDone(Event):
    """Mine generation finished and play has started."""


@dataclass(frozen=True)
class FlagAllMines(Event):
    """Every mine is flagged."""


@dataclass(frozen=True)
class GameEnd(Event):
    """The game was lost; carries the final board."""

    board: "BoardSnapshot"


# ============================================================================
# Event Queue
# ============================================================================

class EventQueue:
    """
    First-in-first-out buffer between the engine and its consumer.

    The engine is the only writer. Consumers should drain the queue after
    every action since it is unbounded.
    """

    def __init__(self) -> None:
        self._events: Deque[Event] = deque()

    def add(self, event: Event) -> None:
        """Append an event in causal order."""
        self._events.append(event)

    def poll(self) -> Optional[Event]:
        """Remove and return the oldest event, or None when empty."""
        if self._events:
            return self._events.popleft()
        return None

    def drain(self) -> List[Event]:
        """Remove and return all pending events, oldest first."""
        events = list(self._events)
        self._events.clear()
        return events

    def __iter__(self) -> Iterator[Event]:
        """Consume events one at a time until the queue is empty."""
        while self._events:
            yield self._events.popleft()

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)
