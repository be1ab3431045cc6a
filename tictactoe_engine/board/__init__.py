"""
Board Module

This module provides the board value type and the helpers built around it.

Key Components:
    - Cell: EMPTY / X / O
    - Board: 9 cells with push/pop move stack
    - LINES: the 8 winning triples
    - move_focus: arrow-key navigation between squares
    - board_to_array / symmetries: numpy views for position analysis

Data Flow:
    "XX.OO...." → Board.from_string() → Board → evaluate() / best_move()
"""

from tictactoe_engine.board.representation import (
    Board,
    Cell,
    GameOverError,
    IllegalMoveError,
    LINES,
    MARKS,
    NUM_SQUARES,
    array_to_board,
    board_to_array,
    canonical_key,
    coordinates_to_index,
    index_to_coordinates,
    move_focus,
    symmetries,
)

__all__ = [
    'Board',
    'Cell',
    'GameOverError',
    'IllegalMoveError',
    'LINES',
    'MARKS',
    'NUM_SQUARES',
    'array_to_board',
    'board_to_array',
    'canonical_key',
    'coordinates_to_index',
    'index_to_coordinates',
    'move_focus',
    'symmetries',
]
