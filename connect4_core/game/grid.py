"""
grid.py - Cell occupancy for a fixed-size Connect Four grid

The Grid is plain data with bounds-safe accessors. It applies no game policy:
the move engine decides which cells may be set, and the search uses
hypothetical_drop() to explore and undo moves in place.
"""

from contextlib import contextmanager
from typing import Iterator, List, Sequence

import numpy as np

from connect4_core.debug import debug
from connect4_core.utils import (DEFAULT_COLUMNS, DEFAULT_MAX_ROWS, Player,
                                 GridInvariantError, render_board_ascii)


class Grid:
    """
    A columns x max_rows board addressed as (col, row), row 0 at the bottom.

    Cells are held in a numpy int8 array of Player values indexed [col, row].
    Within a column the occupied rows always form a prefix starting at row 0,
    so a column's height is its count of occupied cells.
    """

    def __init__(self, columns: int = DEFAULT_COLUMNS, max_rows: int = DEFAULT_MAX_ROWS):
        self.initialize(columns, max_rows)

    def initialize(self, columns: int, max_rows: int) -> None:
        """Allocate an all-empty grid. Safe to call repeatedly."""
        debug.debug(f"Initializing {columns}x{max_rows} grid", "grid")
        self.columns = columns
        self.max_rows = max_rows
        self.cells = np.zeros((columns, max_rows), dtype=np.int8)

    def clear(self) -> None:
        self.initialize(self.columns, self.max_rows)

    @classmethod
    def from_columns(cls, stacks: Sequence[Sequence[Player]],
                     max_rows: int = DEFAULT_MAX_ROWS) -> 'Grid':
        """
        Build a grid from bottom-up column stacks.

        Args:
            stacks: One sequence per column, listing pieces from row 0 upward
            max_rows: Height of every column

        Returns:
            A new Grid holding those pieces
        """
        grid = cls(len(stacks), max_rows)
        for col, stack in enumerate(stacks):
            if len(stack) > max_rows:
                raise ValueError(f"Column {col} holds {len(stack)} pieces, max is {max_rows}")
            for row, state in enumerate(stack):
                grid.set_cell(col, row, state)
        grid.check_gravity()
        return grid

    def copy(self) -> 'Grid':
        new_grid = Grid.__new__(Grid)
        new_grid.columns = self.columns
        new_grid.max_rows = self.max_rows
        new_grid.cells = self.cells.copy()
        return new_grid

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.columns and 0 <= row < self.max_rows

    def cell_state(self, col: int, row: int) -> Player:
        """Return the state of a cell, EMPTY for anything off the grid."""
        if not self.in_bounds(col, row):
            return Player.EMPTY
        return Player(int(self.cells[col, row]))

    def column_height(self, col: int) -> int:
        """Number of occupied cells in a column (0 for columns off the grid)."""
        if not 0 <= col < self.columns:
            return 0
        return int(np.count_nonzero(self.cells[col]))

    def has_room(self, col: int) -> bool:
        return 0 <= col < self.columns and self.column_height(col) < self.max_rows

    def available_columns(self) -> List[int]:
        return [col for col in range(self.columns) if self.has_room(col)]

    def set_cell(self, col: int, row: int, state: Player) -> None:
        """Set one cell. Callers are responsible for picking a legal cell."""
        self.cells[col, row] = state.value

    def is_full(self) -> bool:
        return bool(np.count_nonzero(self.cells) == self.columns * self.max_rows)

    def snapshot(self) -> np.ndarray:
        return self.cells.copy()

    def check_gravity(self) -> None:
        """Raise GridInvariantError if any piece floats above an empty cell."""
        for col in range(self.columns):
            occupied = self.cells[col] != Player.EMPTY.value
            height = int(np.count_nonzero(occupied))
            if not occupied[:height].all():
                raise GridInvariantError(
                    f"Column {col} has a gap below its top piece: {self.cells[col].tolist()}")

    @contextmanager
    def hypothetical_drop(self, col: int, state: Player) -> Iterator[int]:
        """
        Temporarily drop ``state`` into ``col`` and restore the cell on exit.

        The cell is emptied again however the block exits, including early
        returns and exceptions. Yields the row that was filled.
        """
        row = self.column_height(col)
        if row >= self.max_rows:
            raise GridInvariantError(f"Hypothetical drop into full column {col}")
        if self.cells[col, row] != Player.EMPTY.value:
            raise GridInvariantError(f"Cell ({col}, {row}) is occupied but above the column height")

        self.cells[col, row] = state.value
        try:
            yield row
        finally:
            if self.cells[col, row] != state.value:
                raise GridInvariantError(
                    f"Cell ({col}, {row}) changed during a hypothetical drop")
            self.cells[col, row] = Player.EMPTY.value

    def render(self) -> str:
        return render_board_ascii(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.columns == other.columns and self.max_rows == other.max_rows
                and np.array_equal(self.cells, other.cells))

    def __str__(self) -> str:
        return self.render()
