"""
Board module for Minesweeper game.

Implements the rectangular cell grid, board configuration with its
validation, and the difficulty presets.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

import numpy as np

from .cell import Cell


# ============================================================================
# Constants
# ============================================================================

# (dx, dy) offsets of the 8 grid-adjacent neighbors
NEIGHBOR_OFFSETS = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)

RENDER_SYMBOLS = {-1: ".", -2: "F", 9: "*", 0: " "}


class ConfigurationError(ValueError):
    """Raised when a board cannot hold the requested number of mines."""


class Difficulty(Enum):
    """Named difficulty levels."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def parse(cls, text: str) -> "Difficulty":
        """Look up a difficulty by case-insensitive name."""
        for difficulty in cls:
            if difficulty.value.lower() == text.strip().lower():
                return difficulty
        raise ValueError(f"Unknown difficulty: {text!r}")


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 16
    height: int = 16
    num_mines: int = 40

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        if self.num_mines > self.max_mines:
            raise ConfigurationError(
                f"Too many mines for a {self.width}x{self.height} board "
                f"(max {self.max_mines})"
            )

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def max_mines(self) -> int:
        """Most mines that still leave room for any safe first click."""
        exclusion = min(3, self.width) * min(3, self.height)
        return self.cell_count - exclusion


DIFFICULTY_PRESETS: Dict[Difficulty, BoardConfig] = {
    Difficulty.EASY: BoardConfig(8, 8, 10),
    Difficulty.MEDIUM: BoardConfig(16, 16, 40),
    Difficulty.HARD: BoardConfig(30, 16, 99),
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Rectangular grid of cells.

    Rows are indexed by ``y`` and columns by ``x``. The board is a plain data
    structure; game rules live in :class:`~minesweeper.gameplay.GamePlay`.
    """

    width: int
    height: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self._grid = [
            [Cell(x, y) for x in range(self.width)]
            for y in range(self.height)
        ]

    @classmethod
    def from_config(cls, config: BoardConfig) -> "Board":
        return cls(config.width, config.height)

    # ========================================================================
    # Cell Access
    # ========================================================================

    @property
    def rows(self) -> List[List[Cell]]:
        """Rows of cells, top to bottom."""
        return self._grid

    def __iter__(self) -> Iterator[Cell]:
        for row in self._grid:
            yield from row

    def __len__(self) -> int:
        return self.width * self.height

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(x, y):
            return None
        return self._grid[y][x]

    def owns(self, cell: Cell) -> bool:
        """Check that ``cell`` is this board's cell object at its position."""
        return self.cell(cell.x, cell.y) is cell

    def index_of(self, cell: Cell) -> int:
        """Row-major index of a cell."""
        return cell.y * self.width + cell.x

    def cell_at_index(self, index: int) -> Cell:
        """Cell at a row-major index."""
        y, x = divmod(index, self.width)
        return self._grid[y][x]

    def neighbors(self, cell: Cell) -> List[Cell]:
        """
        Get the grid-adjacent cells of ``cell``.

        Args:
            cell: Center cell.

        Returns:
            Up to 8 neighbors, clipped to the board edges.
        """
        neighbors = []
        for dx, dy in NEIGHBOR_OFFSETS:
            neighbor = self.cell(cell.x + dx, cell.y + dy)
            if neighbor is not None:
                neighbors.append(neighbor)
        return neighbors

    # ========================================================================
    # Bulk Updates
    # ========================================================================

    def update_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for every non-mine cell."""
        for cell in self:
            if cell.mine:
                continue
            cell.adjacent_mines = sum(
                1 for neighbor in self.neighbors(cell) if neighbor.mine
            )

    def reveal_all_mines(self) -> None:
        for cell in self:
            if cell.mine:
                cell.reveal()

    # ========================================================================
    # Queries
    # ========================================================================

    def all_safe_revealed(self) -> bool:
        """Check if every cell is either a mine or revealed."""
        return all(cell.mine or cell.revealed for cell in self)

    def count_mines(self) -> int:
        return sum(1 for cell in self if cell.mine)

    def count_revealed(self) -> int:
        return sum(1 for cell in self if cell.revealed)

    def get_observation(self, show_hidden: bool = False) -> np.ndarray:
        """
        Get board state as a numpy array.

        Args:
            show_hidden: Expose the content of hidden cells.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self:
            obs[cell.y, cell.x] = cell.to_observation(show_hidden)
        return obs

    def render(self, show_hidden: bool = False) -> str:
        """Render board as ASCII string, one line per row."""
        obs = self.get_observation(show_hidden)
        lines = []
        for row in obs:
            lines.append(
                " ".join(RENDER_SYMBOLS.get(int(val), str(val)) for val in row)
            )
        return "\n".join(lines)
