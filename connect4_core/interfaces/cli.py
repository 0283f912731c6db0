"""
cli.py - Command-line interface for the Connect Four core

Commands:
    play       play interactively, two humans or against the search AI
    analyze    inspect a board position and ask the AI for a move
    benchmark  time the search at a given depth
"""

import argparse
import random
import sys
from typing import List, Optional

from connect4_core.ai.minimax import MinimaxPlayer, evaluate_board
from connect4_core.config import GameConfig
from connect4_core.debug import debug
from connect4_core.game.grid import Grid
from connect4_core.game.modes import GameController, GameMode
from connect4_core.game.session import GameOverEvent, GameSession
from connect4_core.game.win_detector import has_any_win
from connect4_core.utils import (DEFAULT_COLUMNS, DEFAULT_MAX_ROWS,
                                 DEFAULT_SEARCH_DEPTH, GridInvariantError, Player)


def parse_position(position: str, columns: int = DEFAULT_COLUMNS,
                   max_rows: int = DEFAULT_MAX_ROWS) -> Grid:
    """
    Parse a comma-separated position, top row first, values 0/1/2.

    Raises:
        ValueError: on a malformed string
        GridInvariantError: if a piece floats above an empty cell
    """
    values = [int(v) for v in position.split(',')]
    if len(values) != columns * max_rows:
        raise ValueError(f"Position string must have {columns * max_rows} values, got {len(values)}")

    grid = Grid(columns, max_rows)
    for index, value in enumerate(values):
        display_row, col = divmod(index, columns)
        grid.set_cell(col, max_rows - 1 - display_row, Player(value))
    grid.check_gravity()
    return grid


def non_negative_int(value: str) -> int:
    """argparse type for search depths."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def non_negative_float(value: str) -> float:
    """argparse type for delays."""
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def side_to_move(grid: Grid) -> Player:
    """Player.ONE moves first, so equal piece counts mean it is ONE's turn."""
    ones = int((grid.cells == Player.ONE.value).sum())
    twos = int((grid.cells == Player.TWO.value).sum())
    return Player.ONE if ones == twos else Player.TWO


class SimpleCLI:
    """Simple command-line interface for the Connect Four core."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None

    def parse_args(self) -> None:
        parser = argparse.ArgumentParser(description='Connect Four CLI')
        parser.add_argument('--debug_level',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            default='warning', help='Logging verbosity')
        parser.add_argument('--log_file', type=str, help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--ai', choices=['minimax', 'none'], default='minimax',
                                 help='AI opponent type: minimax, or none for two humans')
        play_parser.add_argument('--ai_first', action='store_true',
                                 help='Let the AI play X and move first')
        play_parser.add_argument('--depth', type=non_negative_int, default=DEFAULT_SEARCH_DEPTH,
                                 help='AI search depth')
        play_parser.add_argument('--delay', type=non_negative_float, default=1.0,
                                 help='Seconds the AI waits before answering')
        play_parser.add_argument('--seed', type=int, help='Seed for the AI move ordering')

        analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help='Comma-separated cells, top row first (0 empty, 1 X, 2 O)')
        analyze_parser.add_argument('--depth', type=non_negative_int, default=DEFAULT_SEARCH_DEPTH,
                                    help='AI search depth')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the search')
        benchmark_parser.add_argument('--iterations', type=int, default=5,
                                      help='Number of searches to time')
        benchmark_parser.add_argument('--depth', type=non_negative_int, default=DEFAULT_SEARCH_DEPTH,
                                      help='AI search depth')
        benchmark_parser.add_argument('--no_pruning', action='store_true',
                                      help='Time plain minimax without alpha-beta cutoffs')

        self.args = parser.parse_args(self.argv)
        debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a Connect Four game interactively."""
        vs_ai = self.args.ai == 'minimax'
        config = GameConfig(search_depth=self.args.depth,
                            ai_delay=self.args.delay,
                            ai_player=Player.ONE if self.args.ai_first else Player.TWO,
                            seed=self.args.seed)
        session = GameSession(config)
        controller = GameController(session, GameMode.VS_AI if vs_ai else GameMode.LOCAL)

        def announce(event: GameOverEvent) -> None:
            print(session.render())
            if event.winner is None:
                print("It's a draw!")
            elif vs_ai and event.winner == config.ai_player:
                print("AI wins! Better luck next time.")
            else:
                print(f"Player {event.winner} wins!")

        session.add_game_over_listener(announce)
        session.add_drop_listener(
            lambda event: print(f"{event.player} plays column {event.column}"))

        print("Starting a new Connect Four game!")
        print(f"Enter a column number (0-{config.columns - 1}), 'q' to quit, 'r' to restart.")
        controller.start()

        while not session.is_game_over():
            print(session.render())
            move = self.get_human_move(session)
            if move is None:
                continue
            if move == 'q':
                print("Quitting game.")
                return
            if move == 'r':
                session.reset_board()
                controller.start()
                print("Game restarted.")
                continue

            result = controller.request_drop(move)
            if not result.accepted:
                print(f"Invalid move: {move} ({result.reason.name.lower().replace('_', ' ')})")

    def get_human_move(self, session: GameSession):
        """
        Read one command from stdin.

        Returns:
            A column index, 'q' or 'r', or None for unparseable input
        """
        user_input = input(f"Player {session.current_player()} move: ").strip().lower()
        if user_input in ('q', 'r'):
            return user_input
        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

    def analyze_position(self) -> int:
        """Print wins, free columns and the AI's choice for a position."""
        try:
            grid = parse_position(self.args.position)
        except (ValueError, GridInvariantError) as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(grid.render())

        for player in (Player.ONE, Player.TWO):
            if has_any_win(grid, player):
                print(f"Win for {player} on the board")
        print("Board is full" if grid.is_full() else f"Valid moves: {grid.available_columns()}")

        mover = side_to_move(grid)
        print(f"Static evaluation for {mover}: {evaluate_board(grid, mover, mover.other())}")

        ai = MinimaxPlayer(depth=self.args.depth)
        column = ai.choose_move(grid, mover, mover.other())
        if column is None:
            print("No legal move")
        else:
            print(f"AI move for {mover}: column {column} ({ai.nodes_evaluated} nodes)")
            print(f"Root scores: {dict(sorted(ai.last_scores.items()))}")
        return 0

    def benchmark(self) -> None:
        """Time choose_move on random mid-game positions."""
        iterations = self.args.iterations
        ai = MinimaxPlayer(depth=self.args.depth, use_pruning=not self.args.no_pruning)
        print(f"Running {iterations} searches at depth {self.args.depth}...")

        total_time = 0.0
        total_nodes = 0
        for _ in range(iterations):
            session = GameSession(GameConfig())
            for _ in range(random.randint(4, 12)):
                moves = session.get_valid_moves()
                if not moves:
                    break
                session.request_drop(random.choice(moves))
            if session.is_game_over():
                continue

            mover = session.current_player()
            debug.start_timer("benchmark_search")
            ai.choose_move(session.grid, mover, mover.other())
            total_time += debug.end_timer("benchmark_search", "cli") or 0.0
            total_nodes += ai.nodes_evaluated

        print(f"Searched {total_nodes} nodes in {total_time:.3f} seconds")
        if total_time > 0:
            print(f"{total_nodes / total_time:.0f} nodes per second")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
