"""
connect4_core.game - Grid, win detection, move engine and session

Everything needed to play a game by the rules, without any opponent logic.
GameController (connect4_core.game.modes) is not imported here because it
depends on the AI package.
"""

from connect4_core.game.engine import (DropResult, MoveEngine, RejectReason,
                                       TurnCollaborator, TurnState)
from connect4_core.game.grid import Grid
from connect4_core.game.session import DropEvent, GameOverEvent, GameSession
from connect4_core.game.win_detector import check_win, has_any_win, winning_line

__all__ = ['Grid', 'check_win', 'has_any_win', 'winning_line',
           'MoveEngine', 'DropResult', 'RejectReason', 'TurnCollaborator', 'TurnState',
           'GameSession', 'DropEvent', 'GameOverEvent']
