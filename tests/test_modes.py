"""Tests for mode-aware request routing and the AI reply."""

import pytest

from connect4_core.config import GameConfig
from connect4_core.game.engine import RejectReason
from connect4_core.game.modes import GameController, GameMode
from connect4_core.game.session import DropEvent, GameSession
from connect4_core.utils import GameStatus, Player


@pytest.fixture
def delays():
    return []


def vs_ai(delays, **overrides):
    settings = dict(search_depth=1, ai_delay=0.25, seed=3)
    settings.update(overrides)
    session = GameSession(GameConfig(**settings))
    return GameController(session, GameMode.VS_AI, sleep=delays.append)


class TestLocal:
    def test_both_sides_play(self, session):
        controller = GameController(session)
        assert controller.request_drop(0).player == Player.ONE
        assert controller.request_drop(0).player == Player.TWO
        assert controller.is_my_turn(Player.TWO) and controller.is_my_turn(Player.ONE)


class TestVsAI:
    def test_ai_answers_after_delay(self, delays):
        controller = vs_ai(delays)
        session = controller.session
        result = controller.request_drop(3)
        assert result.accepted and result.player == Player.ONE
        assert delays == [0.25]
        assert len(session.moves) == 2
        assert session.moves[1].player == Player.TWO
        assert session.current_player() == Player.ONE

    def test_ai_blocks_threat(self, delays):
        controller = vs_ai(delays)
        session = controller.session
        for col in (0, 1):
            session.grid.set_cell(col, 0, Player.ONE)
            session.grid.set_cell(col, 1, Player.TWO)
        controller.request_drop(2)
        assert session.moves[-1] == DropEvent(3, 0, Player.TWO, GameStatus.IN_PROGRESS)

    def test_human_cannot_move_for_ai(self, delays):
        controller = vs_ai(delays, await_presentation=True)
        session = controller.session

        controller.request_drop(3)
        assert session.current_player() == Player.ONE
        session.complete_drop()
        # The AI replied straight away and its drop is now pending.
        assert len(session.moves) == 2
        assert session.current_player() == Player.TWO
        assert controller.request_drop(4).reason == RejectReason.NOT_YOUR_TURN

        session.complete_drop()
        assert session.current_player() == Player.ONE
        assert controller.request_drop(4).accepted

    def test_ai_opens_when_playing_first(self, delays):
        controller = vs_ai(delays, ai_player=Player.ONE)
        controller.start()
        session = controller.session
        assert len(session.moves) == 1
        assert session.moves[0].player == Player.ONE
        assert session.current_player() == Player.TWO
        assert delays == []

    def test_no_ai_move_after_game_over(self, delays):
        controller = vs_ai(delays)
        session = controller.session
        # Put X one move from a vertical win without the AI replying.
        for row in range(3):
            session.grid.set_cell(6, row, Player.ONE)
        result = controller.request_drop(6)
        assert result.is_win
        assert session.status == GameStatus.PLAYER_ONE_WIN
        assert delays == []
        assert len(session.moves) == 1

    def test_no_legal_move(self, delays, full_draw_grid):
        controller = vs_ai(delays, ai_player=Player.ONE)
        controller.session.grid.cells[:] = full_draw_grid.cells
        assert controller.play_ai_turn() is None

    def test_ai_waits_for_its_own_turn(self, delays):
        controller = vs_ai(delays)
        session = controller.session
        result = controller.play_ai_turn()
        assert result.reason == RejectReason.NOT_YOUR_TURN
        assert session.moves == []
        assert not session.grid.cells.any()

    def test_ai_turn_needs_vs_ai_mode(self, session):
        with pytest.raises(RuntimeError):
            GameController(session).play_ai_turn()

    def test_requests_after_ai_win_report_game_over(self, delays):
        controller = vs_ai(delays)
        session = controller.session
        for row in range(3):
            session.grid.set_cell(6, row, Player.TWO)
        controller.request_drop(0)
        assert session.status == GameStatus.PLAYER_TWO_WIN
        assert session.current_player() == Player.TWO
        assert controller.request_drop(1).reason == RejectReason.GAME_OVER
        assert controller.play_ai_turn().reason == RejectReason.GAME_OVER


class TestNetworked:
    def test_authority_applies_local_and_remote(self, session):
        controller = GameController(session, GameMode.NETWORKED, local_side=Player.ONE)
        assert controller.request_drop(2).accepted
        assert controller.request_drop(2).reason == RejectReason.NOT_YOUR_TURN
        assert controller.submit_remote(2, Player.ONE).reason == RejectReason.NOT_YOUR_TURN
        assert controller.submit_remote(2, Player.TWO).accepted
        assert session.grid.column_height(2) == 2

    def test_non_authority_forwards(self, session):
        sent = []
        controller = GameController(session, GameMode.NETWORKED, local_side=Player.ONE,
                                    is_authority=False, forward=sent.append)
        assert controller.request_drop(5) is None
        assert sent == [5]
        assert session.grid.column_height(5) == 0

        mirrored = controller.apply_replicated(DropEvent(5, 0, Player.ONE, GameStatus.IN_PROGRESS))
        assert mirrored.accepted
        assert session.current_player() == Player.TWO
        assert controller.request_drop(1).reason == RejectReason.NOT_YOUR_TURN
        assert sent == [5]

    def test_replica_rejects_out_of_turn_event(self, session):
        controller = GameController(session, GameMode.NETWORKED, local_side=Player.TWO,
                                    is_authority=False, forward=lambda column: None)
        event = DropEvent(0, 0, Player.TWO, GameStatus.IN_PROGRESS)
        assert controller.apply_replicated(event).reason == RejectReason.NOT_YOUR_TURN

    def test_only_authority_takes_remote_drops(self, session):
        controller = GameController(session, GameMode.NETWORKED, local_side=Player.TWO,
                                    is_authority=False, forward=lambda column: None)
        with pytest.raises(RuntimeError):
            controller.submit_remote(0, Player.ONE)

    def test_configuration_errors(self, session):
        with pytest.raises(ValueError):
            GameController(session, GameMode.NETWORKED)
        with pytest.raises(ValueError):
            GameController(session, GameMode.NETWORKED, local_side=Player.ONE, is_authority=False)

    def test_finished_game_reports_game_over(self, session):
        controller = GameController(session, GameMode.NETWORKED, local_side=Player.ONE)
        for row in range(3):
            session.grid.set_cell(0, row, Player.ONE)
        assert controller.request_drop(0).is_win
        assert controller.submit_remote(1, Player.ONE).reason == RejectReason.GAME_OVER
        assert controller.request_drop(1).reason == RejectReason.GAME_OVER

    def test_replica_does_not_forward_after_game_over(self, session):
        sent = []
        controller = GameController(session, GameMode.NETWORKED, local_side=Player.TWO,
                                    is_authority=False, forward=sent.append)
        for row in range(3):
            session.grid.set_cell(0, row, Player.ONE)
        won = controller.apply_replicated(DropEvent(0, 3, Player.ONE, GameStatus.PLAYER_ONE_WIN))
        assert won.is_win
        assert controller.request_drop(2).reason == RejectReason.GAME_OVER
        late = DropEvent(2, 0, Player.TWO, GameStatus.IN_PROGRESS)
        assert controller.apply_replicated(late).reason == RejectReason.GAME_OVER
        assert sent == []
