"""
Utilities Module

This module provides utility functions for testing and benchmarking the
engine.

Key Components:
    - Tactical suite: positions with known best moves
    - verify_unbeatable: engine vs every possible opponent
    - self_play / play_random_games: whole games
    - count_positions: reachable-position census

Success Metrics:
    - Tactical suite: all positions correct
    - verify_unbeatable: zero computer losses, as first or second player
    - self_play: draw
"""

from tictactoe_engine.utils.testing import (
    TACTICAL_POSITIONS,
    count_positions,
    evaluate_position,
    play_random_games,
    run_tactics_suite,
    self_play,
    verify_unbeatable,
)

__all__ = [
    'TACTICAL_POSITIONS',
    'count_positions',
    'evaluate_position',
    'play_random_games',
    'run_tactics_suite',
    'self_play',
    'verify_unbeatable',
]
