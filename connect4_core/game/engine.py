"""
engine.py - Drop validation, status transitions and turn hand-off

The MoveEngine is the only component that commits real moves to a Grid. Every
invalid request is answered with a rejected DropResult and leaves all state
untouched; only a broken grid invariant raises.
"""

import abc
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from connect4_core.debug import debug
from connect4_core.game.grid import Grid
from connect4_core.game.win_detector import check_win
from connect4_core.utils import GameStatus, GridInvariantError, Player


class TurnCollaborator(abc.ABC):
    """Owner of whose turn it is. The engine reads and advances it."""

    @abc.abstractmethod
    def current_player(self) -> Player:
        raise NotImplementedError

    @abc.abstractmethod
    def advance_turn(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def reset(self) -> None:
        raise NotImplementedError


class TurnState(TurnCollaborator):
    """Plain alternating turns, Player.ONE first."""

    def __init__(self, first: Player = Player.ONE):
        self._first = first
        self._current = first

    def current_player(self) -> Player:
        return self._current

    def advance_turn(self) -> None:
        self._current = self._current.other()

    def reset(self) -> None:
        self._current = self._first


class RejectReason(Enum):
    COLUMN_OUT_OF_RANGE = auto()
    COLUMN_FULL = auto()
    GAME_OVER = auto()
    DROP_IN_PROGRESS = auto()
    NOT_YOUR_TURN = auto()


@dataclass(frozen=True)
class DropResult:
    """Outcome of a drop request. ``row`` is None when rejected."""
    accepted: bool
    column: int
    row: Optional[int] = None
    player: Optional[Player] = None
    is_win: bool = False
    status: GameStatus = GameStatus.IN_PROGRESS
    reason: Optional[RejectReason] = None

    @classmethod
    def rejected(cls, column: int, reason: RejectReason,
                 status: GameStatus = GameStatus.IN_PROGRESS) -> 'DropResult':
        return cls(accepted=False, column=column, status=status, reason=reason)

    def __bool__(self) -> bool:
        return self.accepted


class MoveEngine:
    """
    Validates and applies drops to a grid and tracks the game status.

    A successful drop leaves the engine "in flight" until complete_drop() is
    called; new drops are rejected meanwhile. complete_drop() hands the turn
    to the other player if the game is still going.
    """

    def __init__(self, grid: Grid, turns: TurnCollaborator):
        self.grid = grid
        self.turns = turns
        self.status = GameStatus.IN_PROGRESS
        self.drop_in_progress = False

    def reset(self) -> None:
        debug.debug("Resetting move engine", "engine")
        self.grid.clear()
        self.turns.reset()
        self.status = GameStatus.IN_PROGRESS
        self.drop_in_progress = False

    def can_drop(self, column: int) -> Optional[RejectReason]:
        """Return the reason a drop into column would be rejected, or None."""
        # A finished game outranks a drop still presenting.
        if self.status.is_game_over():
            return RejectReason.GAME_OVER
        if self.drop_in_progress:
            return RejectReason.DROP_IN_PROGRESS
        if not 0 <= column < self.grid.columns:
            return RejectReason.COLUMN_OUT_OF_RANGE
        if self.grid.column_height(column) >= self.grid.max_rows:
            return RejectReason.COLUMN_FULL
        return None

    def try_drop(self, column: int, player: Optional[Player] = None) -> DropResult:
        """
        Drop a piece for player (default: whoever's turn it is) into column.

        Args:
            column: Target column (0-indexed)
            player: Piece owner; must be Player.ONE or Player.TWO

        Returns:
            DropResult with the placed cell and resulting status, or a
            rejection carrying its reason
        """
        if player is None:
            player = self.turns.current_player()
        if player == Player.EMPTY:
            raise GridInvariantError("A drop needs Player.ONE or Player.TWO, got EMPTY")

        reason = self.can_drop(column)
        if reason is not None:
            debug.debug(f"Rejected drop in column {column} for {player.name}: {reason.name}", "engine")
            return DropResult.rejected(column, reason, self.status)

        row = self.grid.column_height(column)
        if self.grid.cell_state(column, row) != Player.EMPTY:
            raise GridInvariantError(f"Cell ({column}, {row}) should be empty at column height {row}")

        self.grid.set_cell(column, row, player)
        debug.trace(f"Placed {player.name} at ({column}, {row})", "engine")

        is_win = check_win(self.grid, column, row, player)
        if is_win:
            self.status = GameStatus.win_for(player)
            debug.info(f"Player {player.name} wins with ({column}, {row})", "engine")
        elif self.grid.is_full():
            self.status = GameStatus.DRAW
            debug.info("Game ends in a draw", "engine")

        self.drop_in_progress = True
        return DropResult(accepted=True, column=column, row=row, player=player,
                          is_win=is_win, status=self.status)

    def complete_drop(self) -> bool:
        """
        Signal that the pending drop has finished presenting.

        Returns:
            False if no drop was pending, True otherwise
        """
        if not self.drop_in_progress:
            debug.debug("complete_drop called with no drop pending", "engine")
            return False

        self.drop_in_progress = False
        if not self.status.is_game_over():
            self.turns.advance_turn()
            debug.debug(f"Turn passes to {self.turns.current_player().name}", "engine")
        return True
