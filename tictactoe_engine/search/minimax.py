"""
Minimax Search

This module implements the move search. The 3x3 game tree is small enough
to search exhaustively, so there is no depth limit and no heuristic
evaluation: every line is played out to a win or a draw.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Depth bias: Wins score WIN_SCORE - depth, losses depth - WIN_SCORE,
      so the engine wins as fast and loses as slowly as possible
    - Move Ordering: Center, then corners, then edges. Every move is still
      searched; the order only decides ties (first best move wins)
    - Transposition Table: Scores cached by (board, side to move)

Depth Convention:
    The position right after the root move is depth 0. A move that wins
    on the spot therefore scores WIN_SCORE.

Complexity:
    At most 9! move sequences, but the table collapses them to the 5478
    reachable positions (times two sides to move).
"""

import logging
from typing import List, Optional, Tuple

from tictactoe_engine.board.representation import Board, Cell, GameOverError, MARKS
from tictactoe_engine.evaluation.base import evaluate, terminal_score
from tictactoe_engine.search.transposition import TranspositionTable, position_key

logger = logging.getLogger(__name__)

CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)
MOVE_ORDER = (CENTER,) + CORNERS + EDGES


def order_moves(board: Board) -> List[int]:
    """
    List the empty squares in search order: center, corners, edges.
    """
    return [i for i in MOVE_ORDER if board[i] is Cell.EMPTY]


def minimax(
    board: Board,
    maximizing: bool,
    maximizer: Cell,
    depth: int = 0,
    transposition_table: Optional[TranspositionTable] = None,
    nodes_searched: Optional[List[int]] = None,
) -> int:
    """
    Score a position assuming optimal play by both sides.

    The board is modified in place while searching and restored before
    returning.

    Args:
        board: Position to score
        maximizing: True if the maximizer is to move
        maximizer: Mark whose wins score positive
        depth: Plies from the root's child to this position
        transposition_table: Optional cache for previously scored positions
        nodes_searched: Optional mutable list [count] to track positions visited

    Returns:
        int: Score from the maximizer's point of view

    Algorithm:
        1. Terminal position → depth-adjusted score (never cached)
        2. Cached position → cached score
        3. For each empty square in order:
            a. Place the mover's mark
            b. Recursively score with the other side to move (depth + 1)
            c. Undo
        4. Max (maximizer to move) or min of the child scores, cached
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    score = terminal_score(evaluate(board), maximizer, depth)
    if score is not None:
        return score

    key = position_key(board, maximizing)
    if transposition_table is not None:
        cached = transposition_table.lookup(key)
        if cached is not None:
            return cached

    mark = maximizer if maximizing else maximizer.opponent
    child_scores = []
    for move in order_moves(board):
        board.push(move, mark)
        child_scores.append(
            minimax(
                board,
                not maximizing,
                maximizer,
                depth + 1,
                transposition_table,
                nodes_searched,
            )
        )
        board.pop()

    best = max(child_scores) if maximizing else min(child_scores)

    if transposition_table is not None:
        best = transposition_table.store(key, best)
    return best


def find_best_move(
    board: Board,
    mark: Cell,
    transposition_table: Optional[TranspositionTable] = None,
    maximizer: Optional[Cell] = None,
    verbose: bool = False,
) -> Tuple[int, int, int]:
    """
    Find the best move for `mark` in the current position.

    The root loop does not consult the table for its own decision; each
    root move is scored by minimax(), which does. Ties go to the move
    searched first (a later move must be strictly better to replace it).

    Args:
        board: Current position (restored before returning)
        mark: Mark to move
        transposition_table: Optional cache, bound to `maximizer`
        maximizer: Mark whose wins score positive (default: `mark`)
        verbose: If True, print the score of every root move

    Returns:
        Tuple of (best_move, score, nodes)
            - best_move: Square index 0-8
            - score: Score of the best move, maximizer's point of view
            - nodes: Number of positions visited

    Raises:
        ValueError: If mark is not X or O
        GameOverError: If the position is already decided
    """
    if mark not in MARKS:
        raise ValueError(f"Mark to move must be X or O, got {mark!r}")

    outcome = evaluate(board)
    if outcome.is_terminal:
        raise GameOverError(f"No move to search, game is over ({outcome})")

    if maximizer is None:
        maximizer = mark
    if transposition_table is not None:
        transposition_table.bind(maximizer)

    # Every first move draws with best play; the center is first in order.
    if board.is_empty():
        logger.debug("Empty board, playing center")
        return CENTER, 0, 0

    maximizing = mark is maximizer
    best_move = -1
    best_score = -float("inf") if maximizing else float("inf")

    nodes = [0]
    for move in order_moves(board):
        board.push(move, mark)
        score = minimax(
            board,
            not maximizing,
            maximizer,
            0,
            transposition_table,
            nodes,
        )
        board.pop()

        if maximizing:
            if score > best_score:
                best_score = score
                best_move = move
        else:
            if score < best_score:
                best_score = score
                best_move = move

        logger.debug(f"Move {move}: score {score}")
        if verbose:
            print(f"Move: {move}, Score: {score}")

    if verbose:
        print(f"\nNodes searched: {nodes[0]}")
        print(f"Best move: {best_move}, Score: {best_score}")

    return best_move, int(best_score), nodes[0]


class MoveSearch:
    """
    Perfect-play move search with its own transposition table.

    The maximizing mark is fixed for the lifetime of the object, so the
    cache stays valid across every game played with it.

    Attributes:
        maximizer: Mark whose wins score positive
        transposition_table: Cache owned by this search
    """

    def __init__(
        self,
        maximizer: Cell = Cell.O,
        transposition_table: Optional[TranspositionTable] = None,
    ):
        self.maximizer = Cell.parse_mark(maximizer)
        if transposition_table is None:
            transposition_table = TranspositionTable(self.maximizer)
        transposition_table.bind(self.maximizer)
        self.transposition_table = transposition_table

    def search(self, board: Board, mark: Cell) -> Tuple[int, int, int]:
        """Run find_best_move() with this object's table and maximizer."""
        return find_best_move(
            board,
            Cell.parse_mark(mark),
            self.transposition_table,
            maximizer=self.maximizer,
        )

    def best_move(self, board: Board, mark: Cell) -> int:
        """
        Return the optimal square for `mark`.

        Raises:
            GameOverError: If the position is already decided
        """
        return self.search(board, mark)[0]

    def __repr__(self) -> str:
        return f"MoveSearch(maximizer={self.maximizer.value}, table={self.transposition_table!r})"
