"""
win_detector.py - Four-in-a-row detection

check_win() is a local test anchored at the cell just played and must run once
per move, right after the move is applied. has_any_win() scans the whole grid
and is what the search uses, since it does not track the latest move while it
explores.
"""

from typing import Callable, List, Tuple

from connect4_core.game.grid import Grid
from connect4_core.utils import CONNECT_N, DIRECTION_VECTORS, Player

CellReader = Callable[[int, int], int]


def _reader_for(grid: Grid) -> CellReader:
    """Bounds-safe cell reader over a list snapshot of the grid."""
    cells = grid.cells.tolist()
    columns, max_rows = grid.columns, grid.max_rows
    empty = Player.EMPTY.value

    def read(col: int, row: int) -> int:
        if 0 <= col < columns and 0 <= row < max_rows:
            return cells[col][row]
        return empty

    return read


def _count_run(read: CellReader, col: int, row: int, d_col: int, d_row: int, value: int) -> int:
    count = 0
    col, row = col + d_col, row + d_row
    while read(col, row) == value:
        count += 1
        col, row = col + d_col, row + d_row
    return count


def _wins_at(read: CellReader, col: int, row: int, value: int) -> bool:
    if read(col, row) != value:
        return False
    for d_col, d_row in DIRECTION_VECTORS.values():
        count = (1 + _count_run(read, col, row, d_col, d_row, value)
                 + _count_run(read, col, row, -d_col, -d_row, value))
        if count >= CONNECT_N:
            return True
    return False


def count_direction(grid: Grid, col: int, row: int, d_col: int, d_row: int,
                    player: Player) -> int:
    """Count consecutive ``player`` cells starting one step from (col, row)."""
    return _count_run(_reader_for(grid), col, row, d_col, d_row, player.value)


def check_win(grid: Grid, col: int, row: int, player: Player) -> bool:
    """
    Check whether the piece at (col, row) completes four in a row for player.

    Args:
        grid: The grid the move was applied to
        col: Column of the cell just set
        row: Row of the cell just set
        player: The player who owns that cell

    Returns:
        True if any of the four axes through the cell holds CONNECT_N or more
    """
    if player == Player.EMPTY:
        return False
    return _wins_at(_reader_for(grid), col, row, player.value)


def has_any_win(grid: Grid, player: Player) -> bool:
    """Scan every cell for a completed line belonging to player."""
    if player == Player.EMPTY:
        return False
    read = _reader_for(grid)
    value = player.value
    for col in range(grid.columns):
        for row in range(grid.max_rows):
            if _wins_at(read, col, row, value):
                return True
    return False


def winning_line(grid: Grid, col: int, row: int) -> List[Tuple[int, int]]:
    """
    Get the cells of the line completed through (col, row).

    Returns:
        (col, row) pairs of the first winning axis found, or an empty list
    """
    player = grid.cell_state(col, row)
    if player == Player.EMPTY:
        return []

    for d_col, d_row in DIRECTION_VECTORS.values():
        positions = [(col, row)]
        for sign in (1, -1):
            c, r = col + sign * d_col, row + sign * d_row
            while grid.cell_state(c, r) == player:
                positions.append((c, r))
                c, r = c + sign * d_col, r + sign * d_row
        if len(positions) >= CONNECT_N:
            return sorted(positions)

    return []
