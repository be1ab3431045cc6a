"""
Text Protocol Interface

This module implements the line protocol that lets a front end (terminal,
GUI process, test harness) drive the engine over stdin/stdout.

Protocol Flow:
    Front end → "hello"
    Engine → "id name TicTacToe Engine 0.1.0"
    Engine → "hellook"
    Front end → "mode computer"
    Engine → "mode computer"
    Front end → "move 0"
    Engine → board + "Turn: O"
    Engine → "bestmove 4"            (after the reply delay)
    Front end → "position XX.OO.... turn O"
    Front end → "go"
    Engine → "info score 10 nodes <n> time <ms>"
    Engine → "bestmove 5"
"""

from tictactoe_engine.protocol.interface import ProtocolEngine, setup_logger

__all__ = ['ProtocolEngine', 'setup_logger']
