"""
Minesweeper rules engine.

Provides board storage, first-move-safe mine generation, cascading
reveals, flagging and win/loss detection, reported through an event queue.
"""
from .tile import Tile, TileModifier, TileState
from .board import Board, BoardConfig, BoardSnapshot, InvalidConfiguration
from .engine import GameState, Minesweeper
from .events import (
    Event,
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

__all__ = [
    "Tile",
    "TileModifier",
    "TileState",
    "Board",
    "BoardConfig",
    "InvalidConfiguration",
    "BoardSnapshot",
    "GameState",
    "Minesweeper",
    "Event",
    "EventQueue",
    "FlagAllMines",
    "FlagTile",
    "GameEnd",
    "GameStart",
    "InitDone",
    "RevealMine",
    "RevealTile",
    "SweepBegin",
    "SweepDone",
]
