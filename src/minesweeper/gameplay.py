"""
GamePlay engine for Minesweeper.

Owns the board and the session state, and implements mine generation
with a safe first click, flood-fill reveal, flagging, chording and the
win/loss state machine.
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Set

import numpy as np

from .board import (
    Board,
    BoardConfig,
    ConfigurationError,
    Difficulty,
    DIFFICULTY_PRESETS,
)
from .cell import Cell
from .timer import Clock, elapsed_seconds, monotonic_ms

logger = logging.getLogger(__name__)


# ============================================================================
# Session State
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class GameSession:
    """
    Aggregate state of one game.

    Attributes:
        difficulty: Preset the board came from, or None for a custom board.
        config: Board dimensions and mine count.
        game_state: Current phase of the state machine.
        mine_generated: Whether mines have been placed (first reveal done).
        flags: Number of currently flagged cells.
        start_time: Clock stamp (ms) of mine generation.
        end_time: Clock stamp (ms) of the transition to WON or LOST.
    """

    difficulty: Optional[Difficulty]
    config: BoardConfig
    game_state: GameState = GameState.PLAYING
    mine_generated: bool = False
    flags: int = 0
    start_time: int = 0
    end_time: int = 0


# ============================================================================
# GamePlay Engine
# ============================================================================

class GamePlay:
    """
    Minesweeper game engine.

    The rendering layer reads :attr:`board` and the derived queries, and
    mutates state only through :meth:`on_click`, :meth:`on_right_click`,
    :meth:`expand_siblings` and :meth:`reset`. Each mutating operation
    returns True if it changed anything and is a no-op once the game is over.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        *,
        config: Optional[BoardConfig] = None,
        clock: Optional[Clock] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        dev_mode: bool = False,
    ) -> None:
        """
        Initialize the engine and start a fresh game.

        Args:
            difficulty: Preset used when no explicit config is given.
            config: Custom board configuration, overrides ``difficulty``.
            clock: Millisecond clock used for start/end stamps.
            rng: Random generator used for mine placement.
            seed: Seed for a new generator when ``rng`` is not given.
            dev_mode: Show hidden cell content in snapshots.
        """
        self.clock = clock or monotonic_ms
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.dev_mode = dev_mode
        self.reset(difficulty or Difficulty.MEDIUM, config=config)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def reset(
        self,
        difficulty: Optional[Difficulty] = None,
        *,
        config: Optional[BoardConfig] = None,
    ) -> None:
        """
        Start a new game on a fresh board.

        With no arguments the current board configuration is reused.

        Args:
            difficulty: Preset to switch to.
            config: Custom board configuration, overrides ``difficulty``.
        """
        if config is not None:
            difficulty = None
        elif difficulty is None:
            difficulty = self.session.difficulty
            config = self.session.config
        else:
            config = DIFFICULTY_PRESETS[difficulty]

        now = self.clock()
        self.session = GameSession(
            difficulty=difficulty,
            config=config,
            start_time=now,
            end_time=now,
        )
        self.board = Board.from_config(config)
        logger.debug(
            "New game: %dx%d with %d mines",
            config.width, config.height, config.num_mines,
        )

    def toggle_dev_mode(self) -> bool:
        """Flip developer view and return the new setting."""
        self.dev_mode = not self.dev_mode
        return self.dev_mode

    # ========================================================================
    # Player Actions
    # ========================================================================

    def on_click(self, cell: Cell) -> bool:
        """
        Reveal a cell.

        The first reveal of a session places the mines around it. Flagged
        cells cannot be revealed until unflagged.

        Args:
            cell: A cell of the current board.

        Returns:
            True if the board changed.
        """
        if not self.is_playing or not self.board.owns(cell):
            return False
        if cell.flagged or cell.revealed:
            return False

        if not self.session.mine_generated:
            self.generate_mines(cell)

        self._reveal(cell)
        if cell.mine:
            self._lose(cell)
            return True
        if cell.adjacent_mines == 0:
            self.expand_zero_blocks(cell)
        self.check_game_state()
        return True

    def on_right_click(self, cell: Cell) -> bool:
        """
        Toggle the flag on a hidden cell.

        Returns:
            True if the flag was toggled.
        """
        if not self.is_playing or not self.board.owns(cell):
            return False
        if not cell.toggle_flag():
            return False
        self.session.flags += 1 if cell.flagged else -1
        return True

    def expand_siblings(self, cell: Cell) -> bool:
        """
        Chord: reveal every unflagged hidden neighbor of a numbered cell.

        Any neighbor that is a mine loses the game; zero-adjacency neighbors
        flood-fill as if clicked.

        Args:
            cell: A revealed cell with at least one adjacent mine.

        Returns:
            True if any neighbor was revealed.
        """
        if not self.is_playing or not self.board.owns(cell):
            return False
        if not cell.revealed or cell.mine or cell.adjacent_mines == 0:
            return False

        changed = False
        for neighbor in self.board.neighbors(cell):
            if neighbor.revealed or neighbor.flagged:
                continue
            self._reveal(neighbor)
            changed = True
            if neighbor.mine:
                self._lose(neighbor)
                return True
            if neighbor.adjacent_mines == 0:
                self.expand_zero_blocks(neighbor)

        if changed:
            self.check_game_state()
        return changed

    # ========================================================================
    # Mine Generation
    # ========================================================================

    def generate_mines(self, initial_cell: Cell) -> None:
        """
        Place mines anywhere except ``initial_cell`` and its neighbors.

        Positions are drawn uniformly with rejection sampling, then adjacency
        counts are computed for every safe cell.

        Args:
            initial_cell: The first clicked cell.

        Raises:
            ConfigurationError: If the board cannot hold the mines outside
                the exclusion zone.
            RuntimeError: If mines were already generated this session.
        """
        if self.session.mine_generated:
            raise RuntimeError("Mines have already been generated")

        total_cells = len(self.board)
        num_mines = self.total_mines
        taken: Set[int] = {self.board.index_of(initial_cell)}
        taken.update(
            self.board.index_of(s) for s in self.board.neighbors(initial_cell)
        )
        if num_mines > total_cells - len(taken):
            raise ConfigurationError(
                f"Can't place {num_mines} mines on {total_cells} cells "
                f"with {len(taken)} kept safe"
            )

        target = len(taken) + num_mines
        while len(taken) < target:
            index = int(self.rng.integers(0, total_cells))
            if index in taken:
                continue
            taken.add(index)
            self.board.cell_at_index(index).mine = True

        self.board.update_adjacent_mines()
        self.session.mine_generated = True
        self.session.start_time = self.clock()
        logger.debug(
            "Placed %d mines, first click at (%d, %d)",
            num_mines, initial_cell.x, initial_cell.y,
        )

    # ========================================================================
    # Reveal Propagation
    # ========================================================================

    def expand_zero_blocks(self, origin: Cell) -> None:
        """
        Breadth-first reveal around a zero-adjacency cell.

        Each neighbor that is neither revealed nor a mine is revealed, and
        zero-adjacency neighbors are queued in turn.
        """
        queue = deque([origin])
        while queue:
            block = queue.popleft()
            for neighbor in self.board.neighbors(block):
                if neighbor.revealed or neighbor.mine:
                    continue
                self._reveal(neighbor)
                if neighbor.adjacent_mines == 0:
                    queue.append(neighbor)

    def _reveal(self, cell: Cell) -> None:
        if cell.flagged:
            cell.flagged = False
            self.session.flags -= 1
        cell.reveal()

    # ========================================================================
    # State Machine
    # ========================================================================

    def check_game_state(self) -> None:
        """Move to WON once every non-mine cell is revealed."""
        if not self.is_playing:
            return
        if self.board.all_safe_revealed():
            self._finish(GameState.WON)

    def _lose(self, cell: Cell) -> None:
        logger.debug("Mine hit at (%d, %d)", cell.x, cell.y)
        self.board.reveal_all_mines()
        self._finish(GameState.LOST)

    def _finish(self, state: GameState) -> None:
        self.session.game_state = state
        self.session.end_time = self.clock()
        logger.info(
            "Game %s after %d seconds",
            state.name.lower(), self.elapsed_seconds(),
        )

    # ========================================================================
    # Derived Values
    # ========================================================================

    @property
    def phase(self) -> GameState:
        return self.session.game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.session.game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self.session.game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self.session.game_state == GameState.LOST

    @property
    def width(self) -> int:
        return self.session.config.width

    @property
    def height(self) -> int:
        return self.session.config.height

    @property
    def total_mines(self) -> int:
        return self.session.config.num_mines

    @property
    def difficulty(self) -> Optional[Difficulty]:
        return self.session.difficulty

    def cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell of the current board, or None if out of bounds."""
        return self.board.cell(x, y)

    def remaining_mines(self) -> int:
        """Mines not yet accounted for by flags, never negative."""
        return max(0, self.total_mines - self.session.flags)

    def elapsed_seconds(self) -> int:
        """
        Whole seconds of play.

        Zero before the first reveal, counts against the clock while
        playing, and is frozen at the end stamp once the game is over.
        """
        if not self.session.mine_generated:
            return 0
        if self.is_playing:
            end = self.clock()
        else:
            end = self.session.end_time
        return elapsed_seconds(self.session.start_time, end)

    def get_observation(self, show_hidden: Optional[bool] = None) -> np.ndarray:
        """
        Snapshot of the board for rendering.

        Args:
            show_hidden: Expose hidden content; defaults to ``dev_mode``.
        """
        if show_hidden is None:
            show_hidden = self.dev_mode
        return self.board.get_observation(show_hidden)

    def render(self, show_hidden: Optional[bool] = None) -> str:
        if show_hidden is None:
            show_hidden = self.dev_mode
        return self.board.render(show_hidden)
