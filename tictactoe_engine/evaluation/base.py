"""
Position Evaluation

This module decides whether a board is finished and, if so, how.

Key Principles:
    1. evaluate() is a pure function of the board
    2. Lines are scanned in a fixed order, so the reported winning line
       is deterministic
    3. Terminal scores are depth-adjusted so the search prefers faster
       wins and slower losses

Convention:
    - Maximizer win  →  WIN_SCORE - depth  (positive)
    - Minimizer win  →  depth - WIN_SCORE  (negative)
    - Draw           →  0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

from tictactoe_engine.board.representation import Cell, LINES, NUM_SQUARES


WIN_SCORE = 10  # Score of a win found at depth 0


class OutcomeKind(Enum):
    WIN = "win"
    DRAW = "draw"
    IN_PROGRESS = "in_progress"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    Attributes:
        kind: WIN, DRAW or IN_PROGRESS
        winner: The winning mark for WIN, otherwise None
        line: The completed line for WIN (not part of equality)
    """
    kind: OutcomeKind
    winner: Optional[Cell] = None
    line: Optional[Tuple[int, int, int]] = field(default=None, compare=False)

    @classmethod
    def win_for(cls, mark: Cell, line: Optional[Tuple[int, int, int]] = None) -> "Outcome":
        return cls(OutcomeKind.WIN, mark, line)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeKind.DRAW)

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeKind.IN_PROGRESS)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.IN_PROGRESS

    def __str__(self) -> str:
        if self.kind is OutcomeKind.WIN:
            return f"win {self.winner.value}"
        return self.kind.value


def evaluate(board: Sequence[Cell]) -> Outcome:
    """
    Determine the state of a board.

    Args:
        board: Board (or any sequence of 9 Cell values)

    Returns:
        Outcome.win_for(mark) for the first completed line in LINES order,
        Outcome.draw() if the board is full, Outcome.in_progress() otherwise
    """
    for a, b, c in LINES:
        mark = board[a]
        if mark is not Cell.EMPTY and mark is board[b] and mark is board[c]:
            return Outcome.win_for(mark, (a, b, c))

    if all(board[i] is not Cell.EMPTY for i in range(NUM_SQUARES)):
        return Outcome.draw()

    return Outcome.in_progress()


def terminal_score(outcome: Outcome, maximizer: Cell, depth: int = 0) -> Optional[int]:
    """
    Score a terminal outcome from the maximizer's point of view.

    Args:
        outcome: Result of evaluate()
        maximizer: Mark whose wins score positive
        depth: Plies between the scored position and the search root's child

    Returns:
        int: Depth-adjusted score if the outcome is terminal
        None: If the game is still in progress
    """
    if outcome.kind is OutcomeKind.IN_PROGRESS:
        return None
    if outcome.kind is OutcomeKind.DRAW:
        return 0
    if outcome.winner is maximizer:
        return WIN_SCORE - depth  # prefer quicker wins
    return depth - WIN_SCORE  # prefer slower losses
