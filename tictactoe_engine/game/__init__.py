"""
Game Module

Live game state for a front end: turn order, mode toggle and the delayed
computer reply.

Key Components:
    - GameSession: InProgress → Terminal state machine around a Board
    - result_text: Outcome → banner text ("X wins!", "It's a draw!")
"""

from tictactoe_engine.game.session import GameSession, result_text

__all__ = ['GameSession', 'result_text']
