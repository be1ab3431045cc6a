"""
Search Module

This module implements the perfect-play move search: exhaustive minimax
with depth-biased terminal scores, enhanced with a transposition table
for caching previously scored positions.

Key Components:
    - MoveSearch: Owns a maximizing mark and its cache; best_move() entry point
    - find_best_move: Root-level search function
    - minimax: Recursive scoring of a position
    - order_moves: Center → corners → edges
    - TranspositionTable: Thread-safe (board, side to move) → score cache
"""

from tictactoe_engine.search.minimax import MoveSearch, find_best_move, minimax, order_moves
from tictactoe_engine.search.transposition import TranspositionTable, position_key

__all__ = [
    'MoveSearch',
    'find_best_move',
    'minimax',
    'order_moves',
    'TranspositionTable',
    'position_key',
]
