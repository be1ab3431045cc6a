"""
Unit Tests for Evaluation Module

Tests for the rules evaluator, focusing on:
    - Win detection on every line, for both marks
    - Draw detection on full boards
    - In-progress positions
    - Depth-adjusted terminal scores
"""

import pytest
from tictactoe_engine.board import Board, Cell, LINES
from tictactoe_engine.evaluation import (
    Outcome,
    OutcomeKind,
    WIN_SCORE,
    evaluate,
    terminal_score,
)


def board_with_line(line, mark: Cell) -> Board:
    board = Board()
    for index in line:
        board.push(index, mark)
    return board


class TestEvaluate:
    """Tests for evaluate()."""

    @pytest.mark.parametrize("line", LINES)
    @pytest.mark.parametrize("mark", [Cell.X, Cell.O])
    def test_every_line_wins(self, line, mark):
        board = board_with_line(line, mark)

        outcome = evaluate(board)

        assert outcome == Outcome.win_for(mark)
        assert outcome.kind is OutcomeKind.WIN
        assert outcome.winner is mark
        assert outcome.line == line
        assert outcome.is_terminal

    def test_win_on_full_board(self):
        """A line completed by the last move is a win, not a draw."""

        board = Board.from_string("XOXOXOOXX")

        outcome = evaluate(board)

        assert outcome == Outcome.win_for(Cell.X)
        assert outcome.line == (0, 4, 8)

    def test_first_line_in_scan_order(self):
        """With two completed lines the first in LINES order is reported."""

        board = Board.from_string("XXXX..X..")

        assert evaluate(board).line == (0, 1, 2)

    def test_draw(self):
        board = Board.from_string("XOXXOOOXX")

        outcome = evaluate(board)

        assert outcome == Outcome.draw()
        assert outcome.winner is None
        assert outcome.is_terminal

    @pytest.mark.parametrize("text", [".........", "XO.......", "XX.OO....", "XOXXOOOX."])
    def test_in_progress(self, text):
        outcome = evaluate(Board.from_string(text))

        assert outcome == Outcome.in_progress()
        assert not outcome.is_terminal

    def test_mixed_line_is_not_a_win(self):
        assert evaluate(Board.from_string("XXO......")) == Outcome.in_progress()

    def test_accepts_plain_sequence(self):
        cells = [Cell.O, Cell.O, Cell.O] + [Cell.EMPTY] * 6

        assert evaluate(cells) == Outcome.win_for(Cell.O)

    def test_repeatable(self):
        board = Board.from_string("XOX.O..O.")

        assert evaluate(board) == evaluate(board)
        assert board.to_string() == "XOX.O..O.", "evaluate must not modify the board"

    def test_outcome_str(self):
        assert str(Outcome.win_for(Cell.X)) == "win X"
        assert str(Outcome.draw()) == "draw"
        assert str(Outcome.in_progress()) == "in_progress"


class TestTerminalScore:
    """Tests for terminal_score()."""

    def test_in_progress_has_no_score(self):
        assert terminal_score(Outcome.in_progress(), Cell.O, depth=3) is None

    def test_draw_scores_zero(self):
        assert terminal_score(Outcome.draw(), Cell.O, depth=5) == 0

    def test_maximizer_win(self):
        assert terminal_score(Outcome.win_for(Cell.O), Cell.O, depth=0) == WIN_SCORE
        assert terminal_score(Outcome.win_for(Cell.O), Cell.O, depth=3) == WIN_SCORE - 3

    def test_minimizer_win(self):
        assert terminal_score(Outcome.win_for(Cell.X), Cell.O, depth=0) == -WIN_SCORE
        assert terminal_score(Outcome.win_for(Cell.X), Cell.O, depth=4) == 4 - WIN_SCORE

    def test_faster_win_scores_higher(self):
        win = Outcome.win_for(Cell.X)

        assert terminal_score(win, Cell.X, depth=1) > terminal_score(win, Cell.X, depth=5)
        assert terminal_score(win, Cell.O, depth=1) < terminal_score(win, Cell.O, depth=5)
