"""
TicTacToe Engine

A perfect-play 3x3 tic-tac-toe engine: a rules evaluator, an exhaustive
minimax search, and a small game/session layer for front ends.

## Architecture

The engine is organized into several key modules:

1. **board**: Board representation
   - Cell enum (EMPTY / X / O) and the 9-square Board with push/pop
   - Winning-line table, coordinate and keyboard-navigation helpers
   - numpy array form and symmetry helpers for analysis

2. **evaluation**: Rules evaluator
   - evaluate(): win for a mark, draw, or in progress
   - terminal_score(): depth-adjusted minimax scores

3. **search**: Move search
   - Exhaustive minimax, center → corners → edges move ordering
   - Thread-safe transposition table
   - MoveSearch.best_move(): the engine's entry point

4. **game**: Game session
   - InProgress → Terminal state machine
   - Human-vs-human / human-vs-computer modes, delayed computer reply

5. **protocol**: Text protocol over stdin/stdout

6. **utils**: Tactical suite, unbeatable check, position census

## Quick Start

### As a Python Library

```python
from tictactoe_engine.board import Board, Cell
from tictactoe_engine.evaluation import evaluate
from tictactoe_engine.search import MoveSearch

board = Board.from_string("XX..O....")
search = MoveSearch(maximizer=Cell.O)

print(evaluate(board))                  # in_progress
print(search.best_move(board, Cell.O))  # 2
```

### As a Text Engine

```bash
python -m tictactoe_engine.protocol
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from tictactoe_engine.board import Board, Cell
from tictactoe_engine.config import EngineConfig
from tictactoe_engine.evaluation import Outcome, OutcomeKind, evaluate
from tictactoe_engine.game import GameSession
from tictactoe_engine.search import MoveSearch, TranspositionTable, find_best_move

__all__ = [
    'Board',
    'Cell',
    'EngineConfig',
    'Outcome',
    'OutcomeKind',
    'evaluate',
    'GameSession',
    'MoveSearch',
    'TranspositionTable',
    'find_best_move',
]
