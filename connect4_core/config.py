"""
config.py - Session configuration for the Connect Four core

A GameConfig is fixed when a session starts; changing settings means building
a new session.
"""

import random
from dataclasses import dataclass
from typing import Optional

from connect4_core.utils import (DEFAULT_COLUMNS, DEFAULT_MAX_ROWS,
                                 DEFAULT_SEARCH_DEPTH, Player)


@dataclass(frozen=True)
class GameConfig:
    """
    Settings for one game session.

    Attributes:
        columns: Number of columns on the grid
        max_rows: Number of rows in each column
        search_depth: Plies the AI searches below each of its candidate moves
        ai_delay: Seconds to wait before the AI answers a move
        ai_player: Side played by the computer in VS_AI mode
        randomize: Shuffle the center-biased move order
        reshuffle_each_node: Draw a new order at every search node instead of
            once per search call
        await_presentation: Leave each drop pending until complete_drop()
            is called by the presentation layer
        seed: Seed for the AI's random move ordering
    """
    columns: int = DEFAULT_COLUMNS
    max_rows: int = DEFAULT_MAX_ROWS
    search_depth: int = DEFAULT_SEARCH_DEPTH
    ai_delay: float = 1.0
    ai_player: Player = Player.TWO
    randomize: bool = True
    reshuffle_each_node: bool = True
    await_presentation: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        if self.columns < 1 or self.max_rows < 1:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.columns}x{self.max_rows}")
        if self.search_depth < 0:
            raise ValueError(f"search_depth must be >= 0, got {self.search_depth}")
        if self.ai_delay < 0:
            raise ValueError(f"ai_delay must be >= 0, got {self.ai_delay}")
        if self.ai_player not in (Player.ONE, Player.TWO):
            raise ValueError(f"ai_player must be Player.ONE or Player.TWO, got {self.ai_player}")

    @property
    def human_player(self) -> Player:
        return self.ai_player.other()

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)
