"""
minimax.py - Minimax with alpha-beta pruning for the computer opponent

The search explores moves in place on the caller's grid: every candidate is
dropped with Grid.hypothetical_drop(), searched, and emptied again before the
next one, so the grid is unchanged when choose_move() returns.

Scoring, from the AI's point of view:
1. AI owns a completed line: +1000
2. Opponent owns a completed line: -1000
3. Depth exhausted or grid full: static window evaluation
"""

import math
import random
from typing import Dict, List, Optional

from connect4_core.debug import debug
from connect4_core.game.grid import Grid
from connect4_core.game.win_detector import has_any_win
from connect4_core.utils import (CONNECT_N, DEFAULT_SEARCH_DEPTH,
                                 DIRECTION_VECTORS, Player)

WIN_SCORE = 1000

# Window score by number of pieces of a single owner in an unblocked window
AI_WINDOW_SCORES = {4: 100, 3: 10, 2: 5}
OPPONENT_WINDOW_SCORES = {4: -100, 3: -80, 2: -10}


def center_biased_order(columns: int) -> List[int]:
    """Columns from the center outward: center, center-1, center+1, ..."""
    center = columns // 2
    order = [center]
    for offset in range(1, center + 1):
        order.append(center - offset)
        if center + offset < columns:
            order.append(center + offset)
    return order


def shuffled_center_biased_order(columns: int, rng: random.Random) -> List[int]:
    """Center column first, the remaining columns in random order."""
    order = center_biased_order(columns)
    rest = order[1:]
    rng.shuffle(rest)
    return order[:1] + rest


def _window_score(ai_count: int, opponent_count: int) -> int:
    if ai_count and opponent_count:
        return 0
    if ai_count:
        return AI_WINDOW_SCORES.get(ai_count, 0)
    return OPPONENT_WINDOW_SCORES.get(opponent_count, 0)


def evaluate_window(grid: Grid, col: int, row: int, d_col: int, d_row: int,
                    ai_player: Player, opponent: Player) -> int:
    """
    Score the CONNECT_N-cell window starting at (col, row) along one axis.

    Returns:
        0 if the window leaves the grid or holds both players' pieces,
        otherwise the table score for whichever side owns pieces in it
    """
    ai_count = 0
    opponent_count = 0
    for i in range(CONNECT_N):
        c, r = col + d_col * i, row + d_row * i
        if not grid.in_bounds(c, r):
            return 0
        state = grid.cell_state(c, r)
        if state == ai_player:
            ai_count += 1
        elif state == opponent:
            opponent_count += 1

    return _window_score(ai_count, opponent_count)


def evaluate_board(grid: Grid, ai_player: Player, opponent: Player) -> int:
    """
    Static evaluation: sum of window scores anchored at every occupied cell
    along each of the four axes.
    """
    cells = grid.cells.tolist()
    columns, max_rows = grid.columns, grid.max_rows
    ai_value, opponent_value = ai_player.value, opponent.value
    empty = Player.EMPTY.value
    score = 0

    for col in range(columns):
        for row in range(max_rows):
            if cells[col][row] == empty:
                continue
            for d_col, d_row in DIRECTION_VECTORS.values():
                end_col = col + d_col * (CONNECT_N - 1)
                end_row = row + d_row * (CONNECT_N - 1)
                if not (0 <= end_col < columns and 0 <= end_row < max_rows):
                    continue

                ai_count = 0
                opponent_count = 0
                for i in range(CONNECT_N):
                    value = cells[col + d_col * i][row + d_row * i]
                    if value == ai_value:
                        ai_count += 1
                    elif value == opponent_value:
                        opponent_count += 1

                score += _window_score(ai_count, opponent_count)

    return score


class MinimaxPlayer:
    """
    Depth-limited minimax player with alpha-beta pruning.

    The AI maximizes and its opponent minimizes. Moves are tried center-first;
    with ``randomize`` the non-center columns are shuffled so equally scored
    moves are picked at random rather than by column index.
    """

    def __init__(self, depth: int = DEFAULT_SEARCH_DEPTH,
                 randomize: bool = True,
                 reshuffle_each_node: bool = True,
                 use_pruning: bool = True,
                 rng: Optional[random.Random] = None):
        """
        Initialize the minimax player.

        Args:
            depth: Plies searched below each candidate move
            randomize: Shuffle the non-center columns of the move order
            reshuffle_each_node: Draw a fresh order at every node rather than
                once per choose_move() call
            use_pruning: Apply alpha-beta cutoffs (disable for plain minimax)
            rng: Random source for move ordering
        """
        if depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {depth}")
        self.depth = depth
        self.randomize = randomize
        self.reshuffle_each_node = reshuffle_each_node
        self.use_pruning = use_pruning
        self.rng = rng if rng is not None else random.Random()

        self.nodes_evaluated = 0
        self.last_scores: Dict[int, float] = {}
        self._search_order: Optional[List[int]] = None

    def _move_order(self, columns: int) -> List[int]:
        if not self.randomize:
            return center_biased_order(columns)
        if self.reshuffle_each_node or self._search_order is None:
            order = shuffled_center_biased_order(columns, self.rng)
            if not self.reshuffle_each_node:
                self._search_order = order
            return order
        return self._search_order

    def choose_move(self, grid: Grid, ai_player: Player, opponent: Player,
                    depth: Optional[int] = None) -> Optional[int]:
        """
        Pick the AI's column.

        Args:
            grid: Current grid; explored in place and left unchanged
            ai_player: Side the search maximizes for
            opponent: Side the search minimizes for
            depth: Overrides the player's default depth for this call

        Returns:
            The chosen column, or None if no column has room
        """
        if depth is None:
            depth = self.depth

        self.nodes_evaluated = 0
        self.last_scores = {}
        self._search_order = None

        best_score = -math.inf
        best_column = None

        with debug.timed("choose_move", "ai"):
            for column in self._move_order(grid.columns):
                if not grid.has_room(column):
                    continue

                # Each root candidate gets a full window so its score is exact.
                with grid.hypothetical_drop(column, ai_player):
                    score = self._minimax(grid, depth, False, -math.inf, math.inf,
                                          ai_player, opponent)

                self.last_scores[column] = score
                debug.trace(f"Root column {column} scored {score}", "ai")
                if score > best_score:
                    best_score = score
                    best_column = column

        if best_column is None:
            debug.warning("No legal move available to the AI", "ai")
        else:
            debug.debug(f"AI {ai_player.name} chooses column {best_column} "
                        f"(score {best_score}, {self.nodes_evaluated} nodes)", "ai")
        return best_column

    def _minimax(self, grid: Grid, depth: int, is_maximizing: bool,
                 alpha: float, beta: float,
                 ai_player: Player, opponent: Player) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            grid: Grid in its hypothetical state
            depth: Remaining search depth
            is_maximizing: True if the AI moves at this node
            alpha: Best score the maximizer can guarantee so far
            beta: Best score the minimizer can guarantee so far

        Returns:
            The evaluation score for this position
        """
        self.nodes_evaluated += 1

        if has_any_win(grid, ai_player):
            return WIN_SCORE
        if has_any_win(grid, opponent):
            return -WIN_SCORE
        if depth == 0 or grid.is_full():
            return evaluate_board(grid, ai_player, opponent)

        mover = ai_player if is_maximizing else opponent
        best = -math.inf if is_maximizing else math.inf

        for column in self._move_order(grid.columns):
            if not grid.has_room(column):
                continue

            with grid.hypothetical_drop(column, mover):
                score = self._minimax(grid, depth - 1, not is_maximizing, alpha, beta,
                                      ai_player, opponent)

            if is_maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)

            if self.use_pruning and beta <= alpha:
                break

        return best
