"""
Evaluation Module

This module provides the rules evaluator for the engine. It is the only
place that knows what a finished game looks like; the search asks it at
every node.

Key Components:
    - evaluate: Board → Outcome (win for a mark, draw, in progress)
    - terminal_score: Outcome → depth-adjusted minimax score
    - Outcome / OutcomeKind: tagged result value

Data Flow:
    Board → evaluate() → Outcome → terminal_score() → int
                                    Positive = maximizer wins
                                    Negative = minimizer wins
"""

from tictactoe_engine.evaluation.base import (
    Outcome,
    OutcomeKind,
    WIN_SCORE,
    evaluate,
    terminal_score,
)

__all__ = ['Outcome', 'OutcomeKind', 'WIN_SCORE', 'evaluate', 'terminal_score']
