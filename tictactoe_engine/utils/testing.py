"""
Engine Testing and Benchmarking

This module provides test suites and analysis tools for checking that the
engine plays perfectly.

Test Suites:
    1. Tactical positions: Small set of positions with known best moves
       - Immediate wins, forced blocks, fork prevention
       - Each position lists every acceptable move

    2. Exhaustive opponent check (verify_unbeatable):
       - The engine plays one side, every possible reply sequence is
         tried for the other side
       - A perfect engine never loses

    3. Random opponent games (play_random_games):
       - numpy-seeded random opponent, tqdm progress bar

Analysis:
    - count_positions: Census of reachable positions, terminal positions,
      distinct games, and symmetry classes (numpy rotations/reflections)

Known Values:
    - 5478 reachable positions, 765 up to symmetry
    - 958 terminal positions
    - 255168 distinct games
"""

import time
import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from tqdm import tqdm

from tictactoe_engine.board.representation import Board, Cell, canonical_key
from tictactoe_engine.evaluation.base import Outcome, OutcomeKind, evaluate
from tictactoe_engine.search.minimax import MoveSearch


@dataclass
class TacticalPosition:
    """
    A position with expected best move(s).

    Attributes:
        board: Board in text form ("XX.OO....")
        mark: Mark to move
        best_moves: Every acceptable move
        description: Human-readable description of the position
        id: Position identifier (e.g., "TT.01")
    """
    board: str
    mark: Cell
    best_moves: List[int]
    description: str = ""
    id: str = ""


@dataclass
class PositionResult:
    """
    Result of searching a single tactical position.

    Attributes:
        position: The tactical position
        found_move: Move the engine found (-1 on error)
        score: Score of the move, maximizer's point of view
        correct: Whether the engine found an acceptable move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of positions visited
    """
    position: TacticalPosition
    found_move: int
    score: int
    correct: bool
    time_taken: float
    nodes_searched: int = 0


# ============================================================================
# Tactical Suite
# ============================================================================

TACTICAL_POSITIONS = [
    TacticalPosition(
        id="TT.01",
        board=".........",
        mark=Cell.X,
        best_moves=[4],
        description="Opening move takes the center"
    ),
    TacticalPosition(
        id="TT.02",
        board="XX.OO....",
        mark=Cell.O,
        best_moves=[5],
        description="O completes the middle row instead of blocking"
    ),
    TacticalPosition(
        id="TT.03",
        board="XX.OO....",
        mark=Cell.X,
        best_moves=[2],
        description="X completes the top row"
    ),
    TacticalPosition(
        id="TT.04",
        board="XX..O....",
        mark=Cell.O,
        best_moves=[2],
        description="O must block the top row"
    ),
    TacticalPosition(
        id="TT.05",
        board="OO.XX...X",
        mark=Cell.O,
        best_moves=[2],
        description="O wins at once rather than blocking X"
    ),
    TacticalPosition(
        id="TT.06",
        board="X...O...X",
        mark=Cell.O,
        best_moves=[1, 3, 5, 7],
        description="Opposite corners: O must take an edge, a corner allows a fork"
    ),
    TacticalPosition(
        id="TT.07",
        board="O.O.X...X",
        mark=Cell.X,
        best_moves=[1],
        description="X has no win and must block the top row"
    ),
]


def evaluate_position(
    position: TacticalPosition,
    search: Optional[MoveSearch] = None,
    verbose: bool = False,
) -> PositionResult:
    """
    Search a single tactical position.

    Args:
        position: Tactical position to search
        search: Move search to use (default: fresh MoveSearch)
        verbose: If True, print detailed output

    Returns:
        PositionResult with the engine's move and whether it was correct
    """
    search = search if search else MoveSearch()
    board = Board.from_string(position.board)

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(board)
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()

    try:
        best_move, score, nodes = search.search(board, position.mark)

        time_taken = time.time() - start_time
        correct = best_move in position.best_moves

        if verbose:
            print(f"Engine found: {best_move} (score: {score})")
            print(f"Nodes searched: {nodes:,}")
            print(f"Time: {time_taken:.3f}s")
            print(f"Result: {'✓ CORRECT' if correct else '✗ WRONG'}")

        return PositionResult(
            position=position,
            found_move=best_move,
            score=score,
            correct=correct,
            time_taken=time_taken,
            nodes_searched=nodes,
        )

    except ValueError as e:
        print(f"Error evaluating position {position.id}: {e}")
        return PositionResult(
            position=position,
            found_move=-1,
            score=0,
            correct=False,
            time_taken=time.time() - start_time,
        )


def run_tactics_suite(
    search: Optional[MoveSearch] = None,
    positions: Optional[List[TacticalPosition]] = None,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Run the tactical suite.

    Args:
        search: Move search to use (default: fresh MoveSearch)
        positions: Positions to test (default: TACTICAL_POSITIONS)
        verbose: If True, print detailed results

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of PositionResult objects
            - avg_time: Average time per position
            - total_time: Total time
    """
    search = search if search else MoveSearch()
    positions = positions if positions is not None else TACTICAL_POSITIONS

    if verbose:
        print("=" * 70)
        print("TACTICAL TEST SUITE")
        print("=" * 70)

    results = []
    correct_count = 0
    total_time = 0.0

    for position in positions:
        result = evaluate_position(position, search, verbose=verbose)
        results.append(result)

        if result.correct:
            correct_count += 1

        total_time += result.time_taken

    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(positions)} ({percentage:.1f}%)")
        print(f"Average time: {avg_time:.3f}s")
        print(f"Total time: {total_time:.3f}s")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
    }


# ============================================================================
# Whole-game checks
# ============================================================================

def _tally(counts: Dict[str, int], outcome: Outcome, computer_mark: Cell):
    counts['games'] += 1
    if outcome.kind is OutcomeKind.DRAW:
        counts['draws'] += 1
    elif outcome.winner is computer_mark:
        counts['computer_wins'] += 1
    else:
        counts['computer_losses'] += 1


def verify_unbeatable(
    search: MoveSearch,
    computer_mark: Cell = Cell.O,
    first_mark: Cell = Cell.X,
) -> Dict[str, int]:
    """
    Play the engine against every possible opponent.

    The engine answers with best_move(); at the opponent's turns every
    empty square is tried.

    Args:
        search: Move search playing computer_mark
        computer_mark: Mark played by the engine
        first_mark: Mark that moves first

    Returns:
        Dictionary with counts: games, computer_wins, draws, computer_losses
    """
    counts = {'games': 0, 'computer_wins': 0, 'draws': 0, 'computer_losses': 0}
    board = Board()

    def play(turn: Cell):
        outcome = evaluate(board)
        if outcome.is_terminal:
            _tally(counts, outcome, computer_mark)
            return

        if turn is computer_mark:
            moves = [search.best_move(board, turn)]
        else:
            moves = board.empty_squares()

        for move in moves:
            board.push(move, turn)
            play(turn.opponent)
            board.pop()

    play(first_mark)
    return counts


def self_play(search: MoveSearch, first_mark: Cell = Cell.X) -> Tuple[Outcome, List[int]]:
    """
    Let the engine play both sides from the empty board.

    Returns:
        Tuple of (final outcome, moves played)
    """
    board = Board()
    turn = first_mark
    outcome = evaluate(board)
    while not outcome.is_terminal:
        board.push(search.best_move(board, turn), turn)
        outcome = evaluate(board)
        turn = turn.opponent
    return outcome, list(board.move_stack)


def play_random_games(
    search: MoveSearch,
    num_games: int,
    computer_mark: Cell = Cell.O,
    first_mark: Cell = Cell.X,
    seed: Optional[int] = 42,
    progress: bool = False,
) -> Dict[str, int]:
    """
    Play the engine against a uniformly random opponent.

    Args:
        search: Move search playing computer_mark
        num_games: Number of games
        computer_mark: Mark played by the engine
        first_mark: Mark that moves first
        seed: Seed for the opponent's numpy generator (None for random)
        progress: Show a tqdm progress bar

    Returns:
        Dictionary with counts: games, computer_wins, draws, computer_losses
    """
    rng = np.random.default_rng(seed)
    counts = {'games': 0, 'computer_wins': 0, 'draws': 0, 'computer_losses': 0}

    for _ in tqdm(range(num_games), desc="Random games", disable=not progress, leave=False):
        board = Board()
        turn = first_mark
        outcome = evaluate(board)
        while not outcome.is_terminal:
            if turn is computer_mark:
                move = search.best_move(board, turn)
            else:
                move = int(rng.choice(board.empty_squares()))
            board.push(move, turn)
            outcome = evaluate(board)
            turn = turn.opponent
        _tally(counts, outcome, computer_mark)

    return counts


def count_positions(first_mark: Cell = Cell.X) -> Dict[str, int]:
    """
    Census of every position reachable by legal play.

    Play stops at the first win or a full board.

    Returns:
        Dictionary with counts:
            - positions: Distinct reachable boards (empty board included)
            - classes: Distinct boards up to rotation/reflection
            - terminal: Distinct finished boards
            - games: Distinct move sequences from the empty board to an end
    """
    games_from: Dict[str, int] = {}
    terminal = set()
    board = Board()

    def walk(turn: Cell) -> int:
        key = board.to_string()
        if key in games_from:
            return games_from[key]

        if evaluate(board).is_terminal:
            terminal.add(key)
            games = 1
        else:
            games = 0
            for move in board.empty_squares():
                board.push(move, turn)
                games += walk(turn.opponent)
                board.pop()

        games_from[key] = games
        return games

    total_games = walk(first_mark)
    classes = {canonical_key(Board.from_string(key)) for key in games_from}

    return {
        'positions': len(games_from),
        'classes': len(classes),
        'terminal': len(terminal),
        'games': total_games,
    }
