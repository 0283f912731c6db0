"""
connect4_core/ai/__init__.py - Computer opponent for Connect Four

Depth-limited minimax with alpha-beta pruning over the shared grid.
"""

from connect4_core.ai.minimax import MinimaxPlayer, evaluate_board

__all__ = ['MinimaxPlayer', 'evaluate_board']
