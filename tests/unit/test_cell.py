"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, and observation conversion.
"""
import pytest
from minesweeper import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        cell = Cell(0, 0)
        assert cell.mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden and unflagged."""
        cell = Cell(0, 0)
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.flagged is False

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        cell = Cell(0, 0)
        assert cell.adjacent_mines == 0

    def test_cell_keeps_position(self) -> None:
        cell = Cell(3, 7)
        assert cell.position == (3, 7)

    def test_cells_compare_by_identity(self) -> None:
        """Two cells at the same position are still different cells."""
        assert Cell(1, 1) != Cell(1, 1)


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        assert hidden_cell.reveal() is True

    def test_reveal_changes_state_to_revealed(self, hidden_cell: Cell) -> None:
        hidden_cell.reveal()
        assert hidden_cell.state == CellState.REVEALED
        assert hidden_cell.revealed is True

    def test_reveal_twice_returns_false(self, hidden_cell: Cell) -> None:
        """Revealing is monotonic and idempotent."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False
        assert hidden_cell.revealed is True

    def test_revealed_flagged_cell_reads_as_revealed(self) -> None:
        cell = Cell(0, 0, flagged=True)
        cell.reveal()
        assert cell.state == CellState.REVEALED


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_hidden_cell(self, hidden_cell: Cell) -> None:
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.flagged is True
        assert hidden_cell.state == CellState.FLAGGED

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_cannot_flag_revealed_cell(self, numbered_cell: Cell) -> None:
        assert numbered_cell.toggle_flag() is False
        assert numbered_cell.flagged is False


# ============================================================================
# Observation Tests
# ============================================================================

class TestCellObservation:
    """Test conversion to snapshot values."""

    def test_hidden_cell_observation(self, hidden_cell: Cell) -> None:
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    def test_numbered_cell_observation(self, numbered_cell: Cell) -> None:
        assert numbered_cell.to_observation() == 3

    def test_revealed_mine_observation(self, mine_cell: Cell) -> None:
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9

    @pytest.mark.parametrize(
        "cell, expected",
        [
            (Cell(0, 0, mine=True), 9),
            (Cell(0, 0, adjacent_mines=4), 4),
            (Cell(0, 0, mine=True, flagged=True), -2),
        ],
    )
    def test_show_hidden_exposes_content(self, cell: Cell, expected: int) -> None:
        """Developer view shows hidden content but keeps flags."""
        assert cell.to_observation(show_hidden=True) == expected
