"""
utils.py - Shared constants, enumerations and helpers for the Connect Four core

Coordinates are always (column, row) with row 0 at the bottom of the grid.
"""

from enum import Enum, auto
from typing import Optional

# Game constants
DEFAULT_COLUMNS = 7
DEFAULT_MAX_ROWS = 6
DEFAULT_SEARCH_DEPTH = 3
CONNECT_N = 4  # Number of pieces in a row to win


class Player(Enum):
    """Cell states; ONE and TWO double as the two players."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameStatus(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameStatus.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameStatus.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def win_for(cls, player: Player) -> 'GameStatus':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"{player!r} cannot win a game")


class Direction(Enum):
    """The four win axes."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# Direction vectors (delta_col, delta_row) for each axis
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (1, 0),
    Direction.VERTICAL: (0, 1),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1),
}


class GridInvariantError(AssertionError):
    """Raised when the grid reaches a state the drop rules make impossible."""


def render_board_ascii(grid) -> str:
    """
    Render a grid as ASCII art, top row first.

    Args:
        grid: A connect4_core.game.grid.Grid

    Returns:
        ASCII representation of the board
    """
    width = grid.columns * 2 - 1
    lines = ["|" + "-" * width + "|"]

    for row in range(grid.max_rows - 1, -1, -1):
        cells = [str(grid.cell_state(col, row)) for col in range(grid.columns)]
        lines.append("|" + " ".join(cells) + "|")

    lines.append("|" + "-" * width + "|")
    lines.append("|" + " ".join(str(col % 10) for col in range(grid.columns)) + "|")

    return "\n".join(lines)
