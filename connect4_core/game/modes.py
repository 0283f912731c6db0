"""
modes.py - Routing drop requests for local, vs-AI and networked play

The core itself is mode-agnostic. GameController sits in front of a
GameSession and decides, per mode, whether a request is applied, refused, or
forwarded to the party that commits moves, and it plays the AI's reply in
VS_AI games.
"""

import time
from enum import Enum, auto
from typing import Callable, Optional

from connect4_core.ai.minimax import MinimaxPlayer
from connect4_core.debug import debug
from connect4_core.game.engine import DropResult, RejectReason
from connect4_core.game.session import DropEvent, GameSession
from connect4_core.utils import Player

# Column reported on AI rejections, where no column was chosen
NO_COLUMN = -1


class GameMode(Enum):
    LOCAL = auto()
    VS_AI = auto()
    NETWORKED = auto()


class GameController:
    """
    Mode-aware front end for a GameSession.

    In NETWORKED mode exactly one controller is the authority and commits
    moves; the others forward their own-turn requests through ``forward`` and
    mirror the authority's moves with apply_replicated().
    """

    def __init__(self, session: GameSession, mode: GameMode = GameMode.LOCAL,
                 ai: Optional[MinimaxPlayer] = None,
                 local_side: Optional[Player] = None,
                 is_authority: bool = True,
                 forward: Optional[Callable[[int], None]] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.session = session
        self.mode = mode
        self.local_side = local_side
        self.is_authority = is_authority
        self.forward = forward
        self._sleep = sleep
        self.ai: Optional[MinimaxPlayer] = None

        config = session.config
        if mode == GameMode.VS_AI:
            self.ai = ai or MinimaxPlayer(depth=config.search_depth,
                                          randomize=config.randomize,
                                          reshuffle_each_node=config.reshuffle_each_node,
                                          rng=config.make_rng())
            session.add_completion_listener(self._on_drop_completed)
        elif mode == GameMode.NETWORKED:
            if local_side not in (Player.ONE, Player.TWO):
                raise ValueError("NETWORKED mode needs local_side set to Player.ONE or Player.TWO")
            if not is_authority and forward is None:
                raise ValueError("A non-authority controller needs a forward callable")

    @property
    def ai_player(self) -> Player:
        return self.session.config.ai_player

    @property
    def human_player(self) -> Player:
        return self.session.config.human_player

    def is_my_turn(self, side: Player) -> bool:
        """Whether a request made on behalf of ``side`` may go ahead now."""
        current = self.session.current_player()
        if self.mode == GameMode.LOCAL:
            return True
        if self.mode == GameMode.VS_AI:
            return side == self.human_player and current == self.human_player
        return side == current and self.local_side == current

    def start(self) -> None:
        """Let the AI open the game when it plays first."""
        if self.mode == GameMode.VS_AI and self._ai_to_move():
            self.play_ai_turn()

    def request_drop(self, column: int) -> Optional[DropResult]:
        """
        Handle a drop request from local input.

        Returns:
            The DropResult, or None when the request was forwarded to the
            authority instead of being applied here
        """
        if self.session.is_game_over():
            return self._game_over(column)

        if self.mode == GameMode.LOCAL:
            return self.session.request_drop(column)

        if self.mode == GameMode.VS_AI:
            if not self.is_my_turn(self.human_player):
                debug.debug("Wait for the AI to move", "session")
                return self._not_your_turn(column)
            return self.session.request_drop(column)

        if not self.is_my_turn(self.local_side):
            debug.debug(f"Not {self.local_side.name}'s turn", "session")
            return self._not_your_turn(column)

        if self.is_authority:
            return self.session.request_drop(column)

        debug.debug(f"Forwarding drop in column {column} to the authority", "session")
        self.forward(column)
        return None

    def submit_remote(self, column: int, side: Player) -> DropResult:
        """Authority side: apply a drop requested by a remote party."""
        if self.mode != GameMode.NETWORKED or not self.is_authority:
            raise RuntimeError("Only the networked authority accepts remote drops")
        if self.session.is_game_over():
            return self._game_over(column)
        if side != self.session.current_player():
            debug.debug(f"Remote drop from {side.name} out of turn", "session")
            return self._not_your_turn(column)
        return self.session.request_drop(column)

    def apply_replicated(self, event: DropEvent) -> DropResult:
        """Non-authority side: mirror a drop the authority has committed."""
        if self.mode != GameMode.NETWORKED or self.is_authority:
            raise RuntimeError("Only non-authority controllers apply replicated drops")
        if self.session.is_game_over():
            return self._game_over(event.column)
        if event.player != self.session.current_player():
            debug.warning(f"Replicated drop by {event.player.name} does not match local turn "
                          f"{self.session.current_player().name}", "session")
            return self._not_your_turn(event.column)
        result = self.session.request_drop(event.column)
        if result.accepted and result.row != event.row:
            debug.error(f"Replica placed column {event.column} at row {result.row}, "
                        f"authority used row {event.row}", "session")
        return result

    def play_ai_turn(self) -> Optional[DropResult]:
        """
        Run the search and drop the AI's piece.

        Returns:
            The DropResult, a rejection if the game is over or it is not the
            AI's turn, or None if the AI had no legal move
        """
        if self.mode != GameMode.VS_AI:
            raise RuntimeError("Only VS_AI controllers have an AI to move")
        session = self.session
        if session.is_game_over():
            return self._game_over(NO_COLUMN)
        if session.current_player() != self.ai_player or session.drop_in_progress:
            debug.debug("play_ai_turn called while the AI is not to move", "session")
            return self._not_your_turn(NO_COLUMN)
        column = self.ai.choose_move(session.grid, self.ai_player, self.human_player)
        if column is None:
            debug.warning("AI found no legal move; treating the game as finished", "session")
            return None
        return session.request_drop(column)

    def _ai_to_move(self) -> bool:
        return (not self.session.is_game_over()
                and self.session.current_player() == self.ai_player)

    def _on_drop_completed(self) -> None:
        if not self._ai_to_move():
            return
        self._sleep(self.session.config.ai_delay)
        # Anything may have happened during the pause, e.g. a reset.
        if self._ai_to_move() and not self.session.drop_in_progress:
            self.play_ai_turn()

    def _not_your_turn(self, column: int) -> DropResult:
        return DropResult.rejected(column, RejectReason.NOT_YOUR_TURN, self.session.status)

    def _game_over(self, column: int) -> DropResult:
        return DropResult.rejected(column, RejectReason.GAME_OVER, self.session.status)
