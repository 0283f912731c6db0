"""Tests for GameSession notifications and lifecycle."""

import numpy as np
import pytest

from connect4_core.config import GameConfig
from connect4_core.game.engine import RejectReason, TurnCollaborator
from connect4_core.game.session import DropEvent, GameSession
from connect4_core.utils import GameStatus, Player


def play(session, columns):
    for column in columns:
        assert session.request_drop(column).accepted


class TestNotifications:
    def test_drop_event(self, session):
        events = []
        session.add_drop_listener(events.append)
        session.request_drop(3)
        session.request_drop(3)
        assert events == [DropEvent(3, 0, Player.ONE, GameStatus.IN_PROGRESS),
                          DropEvent(3, 1, Player.TWO, GameStatus.IN_PROGRESS)]
        assert session.moves == events

    def test_rejected_drop_is_not_reported(self, session):
        events = []
        session.add_drop_listener(events.append)
        assert session.request_drop(9).reason == RejectReason.COLUMN_OUT_OF_RANGE
        assert events == []

    def test_game_over_event(self, session):
        endings = []
        session.add_game_over_listener(endings.append)
        play(session, [0, 6, 1, 6, 2, 6])
        assert endings == []
        session.request_drop(3)
        assert len(endings) == 1
        assert endings[0].status == GameStatus.PLAYER_ONE_WIN
        assert endings[0].winner == Player.ONE
        assert endings[0].winning_line == [(0, 0), (1, 0), (2, 0), (3, 0)]
        assert session.get_winner() == Player.ONE
        assert session.get_valid_moves() == []

    def test_vertical_scenario(self, session):
        play(session, [3, 0, 3, 0, 3, 0])
        result = session.request_drop(3)
        assert (result.column, result.row, result.is_win) == (3, 3, True)
        assert session.status == GameStatus.PLAYER_ONE_WIN


class TestPresentationGating:
    @pytest.fixture
    def gated(self):
        return GameSession(GameConfig(await_presentation=True))

    def test_drop_stays_pending(self, gated):
        assert gated.request_drop(2).accepted
        assert gated.drop_in_progress
        assert gated.current_player() == Player.ONE

        busy = gated.request_drop(4)
        assert busy.reason == RejectReason.DROP_IN_PROGRESS
        assert gated.grid.column_height(4) == 0

        assert gated.complete_drop()
        assert gated.current_player() == Player.TWO
        assert not gated.complete_drop()
        assert gated.request_drop(4).accepted

    def test_completion_listener_runs_after_turn_change(self, gated):
        seen = []
        gated.add_completion_listener(lambda: seen.append(gated.current_player()))
        gated.request_drop(0)
        assert seen == []
        gated.complete_drop()
        assert seen == [Player.TWO]


class TestLifecycle:
    def test_reset_board(self, session):
        play(session, [0, 6, 1, 6, 2, 6, 3])
        assert session.is_game_over()
        session.reset_board()
        assert session.status == GameStatus.IN_PROGRESS
        assert session.current_player() == Player.ONE
        assert session.moves == []
        assert np.count_nonzero(session.grid.cells) == 0
        assert session.request_drop(0).accepted

    def test_custom_turn_collaborator(self):
        class Recorder(TurnCollaborator):
            def __init__(self):
                self.calls = []
                self.player = Player.TWO

            def current_player(self):
                return self.player

            def advance_turn(self):
                self.calls.append('advance')
                self.player = self.player.other()

            def reset(self):
                self.calls.append('reset')
                self.player = Player.TWO

        turns = Recorder()
        session = GameSession(GameConfig(), turns=turns)
        result = session.request_drop(1)
        assert result.player == Player.TWO
        assert turns.calls == ['advance']
        session.reset_board()
        assert turns.calls == ['advance', 'reset']

    def test_grid_dimensions_follow_config(self):
        session = GameSession(GameConfig(columns=5, max_rows=4))
        assert session.grid.cells.shape == (5, 4)
        assert session.request_drop(5).reason == RejectReason.COLUMN_OUT_OF_RANGE

    def test_small_board_draw(self):
        session = GameSession(GameConfig(columns=2, max_rows=2))
        play(session, [0, 0, 1])
        result = session.request_drop(1)
        assert result.status == GameStatus.DRAW
        assert session.is_game_over()
        assert session.get_winner() is None
