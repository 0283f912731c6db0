import random

import pytest

from connect4_core.config import GameConfig
from connect4_core.game.grid import Grid
from connect4_core.game.session import GameSession
from connect4_core.utils import Player


def draw_pattern(col: int, row: int) -> Player:
    """A full-board fill with no four in a row on any axis."""
    return Player.ONE if ((col // 2) + row) % 2 == 0 else Player.TWO


@pytest.fixture
def grid():
    return Grid()


@pytest.fixture
def session():
    return GameSession(GameConfig(ai_delay=0, search_depth=1, seed=7))


@pytest.fixture
def random_position():
    """Factory: a mid-game grid reached by random legal moves."""
    def make(seed: int, moves: int = 10) -> Grid:
        rng = random.Random(seed)
        game = GameSession(GameConfig())
        for _ in range(moves):
            valid = game.get_valid_moves()
            if not valid:
                break
            game.request_drop(rng.choice(valid))
        return game.grid
    return make


@pytest.fixture
def full_draw_grid():
    grid = Grid()
    for col in range(grid.columns):
        for row in range(grid.max_rows):
            grid.set_cell(col, row, draw_pattern(col, row))
    return grid
