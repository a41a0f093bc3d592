"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, Difficulty, GamePlay


# ============================================================================
# Test Doubles
# ============================================================================

class ScriptedRng:
    """Stand-in for numpy's Generator that draws from a fixed sequence."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = iter(values)
        self.calls = 0

    def integers(self, low: int, high: int) -> int:
        self.calls += 1
        value = next(self._values)
        assert low <= value < high
        return value


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def default_game(clock: ManualClock) -> GamePlay:
    """Medium game with a fixed seed."""
    return GamePlay(Difficulty.MEDIUM, clock=clock, seed=1234)


@pytest.fixture
def empty_game(clock: ManualClock) -> GamePlay:
    """A 5x5 board with no mines for cascade testing."""
    return GamePlay(config=BoardConfig(5, 5, 0), clock=clock)


@pytest.fixture
def wall_game(clock: ManualClock) -> GamePlay:
    """
    5x5 board with a wall of mines down column x=2, before the first click.

        . . * . .
        . . * . .
        . . * . .
        . . * . .
        . . * . .
    """
    rng = ScriptedRng([2, 7, 12, 17, 22])
    return GamePlay(config=BoardConfig(5, 5, 5), clock=clock, rng=rng)


@pytest.fixture
def started_wall_game(wall_game: GamePlay) -> GamePlay:
    """Wall game after clicking the top-left corner."""
    wall_game.on_click(wall_game.cell(0, 0))
    return wall_game


@pytest.fixture
def strip_game(clock: ManualClock) -> GamePlay:
    """
    7x1 strip with a mine at x=3, after clicking x=0.

        0 0 1 * . . .
    """
    rng = ScriptedRng([3])
    game = GamePlay(config=BoardConfig(7, 1, 1), clock=clock, rng=rng)
    game.on_click(game.cell(0, 0))
    return game


# ============================================================================
# Board and Cell Fixtures
# ============================================================================

@pytest.fixture
def board() -> Board:
    """Empty 5x4 board (5 columns, 4 rows)."""
    return Board(5, 4)


@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(0, 0, mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(1, 1, adjacent_mines=3)
    cell.reveal()
    return cell
