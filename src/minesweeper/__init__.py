"""
Minesweeper game engine.

Provides the board data model, mine generation with a safe first click,
flood-fill reveal, flagging and the win/loss state machine.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    ConfigurationError,
    Difficulty,
    DIFFICULTY_PRESETS,
)
from .gameplay import GamePlay, GameSession, GameState
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "ConfigurationError",
    "Difficulty",
    "DIFFICULTY_PRESETS",
    "GamePlay",
    "GameSession",
    "GameState",
    "MinesweeperEnv",
]
