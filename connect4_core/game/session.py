"""
session.py - One game's state and its outbound notifications

A GameSession owns the grid, the move engine and the turn state for a single
game and is passed explicitly to whatever drives it. Only one caller may
commit drops at a time; the session does no locking.

Listeners registered on the session are told about every accepted drop
(DropEvent) and about the end of the game (GameOverEvent). With
``GameConfig.await_presentation`` set, a drop stays pending until the
presentation layer calls complete_drop(); otherwise it completes at once.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from connect4_core.config import GameConfig
from connect4_core.debug import debug
from connect4_core.game.engine import DropResult, MoveEngine, TurnCollaborator, TurnState
from connect4_core.game.grid import Grid
from connect4_core.game.win_detector import winning_line
from connect4_core.utils import GameStatus, Player


@dataclass(frozen=True)
class DropEvent:
    column: int
    row: int
    player: Player
    status: GameStatus


@dataclass(frozen=True)
class GameOverEvent:
    status: GameStatus
    winner: Optional[Player]
    winning_line: List[Tuple[int, int]] = field(default_factory=list)


DropListener = Callable[[DropEvent], None]
GameOverListener = Callable[[GameOverEvent], None]


class GameSession:
    """Grid, move engine and turn state for one game."""

    def __init__(self, config: Optional[GameConfig] = None,
                 turns: Optional[TurnCollaborator] = None):
        self.config = config or GameConfig()
        self.grid = Grid(self.config.columns, self.config.max_rows)
        self.turns = turns or TurnState()
        self.engine = MoveEngine(self.grid, self.turns)
        self.moves: List[DropEvent] = []
        self._drop_listeners: List[DropListener] = []
        self._game_over_listeners: List[GameOverListener] = []
        self._completion_listeners: List[Callable[[], None]] = []
        debug.debug(f"Session started with {self.config}", "session")

    # --- listeners ---

    def add_drop_listener(self, listener: DropListener) -> None:
        self._drop_listeners.append(listener)

    def add_game_over_listener(self, listener: GameOverListener) -> None:
        self._game_over_listeners.append(listener)

    def add_completion_listener(self, listener: Callable[[], None]) -> None:
        """Called after each drop completes and the turn has been handed over."""
        self._completion_listeners.append(listener)

    # --- state ---

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    @property
    def drop_in_progress(self) -> bool:
        return self.engine.drop_in_progress

    def current_player(self) -> Player:
        return self.turns.current_player()

    def is_game_over(self) -> bool:
        return self.engine.status.is_game_over()

    def get_winner(self) -> Optional[Player]:
        return self.engine.status.winner

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.grid.available_columns()

    # --- commands ---

    def request_drop(self, column: int) -> DropResult:
        """
        Drop the current player's piece into column.

        Returns:
            The engine's DropResult; rejected requests change nothing
        """
        player = self.turns.current_player()
        result = self.engine.try_drop(column, player)
        if not result.accepted:
            return result

        event = DropEvent(result.column, result.row, result.player, result.status)
        self.moves.append(event)
        for listener in list(self._drop_listeners):
            listener(event)

        if result.status.is_game_over():
            self._announce_game_over(result)

        if not self.config.await_presentation:
            self.complete_drop()
        return result

    def complete_drop(self) -> bool:
        """
        Finish the pending drop and pass the turn if the game continues.

        Returns:
            False if there was no pending drop
        """
        if not self.engine.complete_drop():
            return False
        for listener in list(self._completion_listeners):
            listener()
        return True

    def reset_board(self) -> None:
        debug.info("Resetting board", "session")
        self.engine.reset()
        self.moves = []

    def _announce_game_over(self, result: DropResult) -> None:
        line = winning_line(self.grid, result.column, result.row) if result.is_win else []
        event = GameOverEvent(result.status, result.status.winner, line)
        debug.info(f"Game over: {result.status.name}", "session")
        for listener in list(self._game_over_listeners):
            listener(event)

    def render(self) -> str:
        return self.grid.render()
