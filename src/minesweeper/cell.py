"""
Cell module for Minesweeper game.

Represents one grid position with its mine, reveal, flag and
adjacency state.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_VALUE = -1
FLAGGED_VALUE = -2
MINE_VALUE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(eq=False)
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Cells compare by identity: two cells are the same only if they are the
    same object on the same board.

    Attributes:
        x: Column index.
        y: Row index.
        revealed: Whether the cell has been revealed. Never reverts.
        mine: Whether this cell contains a mine.
        flagged: Whether the player has flagged the cell.
        adjacent_mines: Count of mines in neighboring cells (0-8).
    """

    x: int
    y: int
    revealed: bool = False
    mine: bool = False
    flagged: bool = False
    adjacent_mines: int = 0

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell was newly revealed, False if already revealed.
        """
        if self.revealed:
            return False
        self.revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.revealed:
            return False
        self.flagged = not self.flagged
        return True

    @property
    def state(self) -> CellState:
        """Visual state; a revealed cell reads as revealed even if flagged."""
        if self.revealed:
            return CellState.REVEALED
        if self.flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden and unflagged."""
        return self.state == CellState.HIDDEN

    @property
    def position(self):
        return self.x, self.y

    def to_observation(self, show_hidden: bool = False) -> int:
        """
        Convert cell to an integer snapshot value.

        Args:
            show_hidden: Expose the content of unrevealed, unflagged cells
                (developer view).

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if not self.revealed:
            if self.flagged:
                return FLAGGED_VALUE
            if not show_hidden:
                return HIDDEN_VALUE
        if self.mine:
            return MINE_VALUE
        return self.adjacent_mines
