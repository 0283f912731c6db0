"""
connect4_core - Rules and search core of a Connect Four game

This package provides the grid model, four-in-a-row detection, the move engine
with its game status and turn hand-off, and a minimax opponent with
alpha-beta pruning. Presentation, input and networking are left to callers,
which talk to the core through GameSession and GameController.
"""

__version__ = '0.2.0'
