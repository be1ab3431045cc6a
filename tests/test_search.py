"""
Unit Tests for Search Module

Tests for the minimax search, transposition table and move ordering.
Every reachable position is checked against an independent game-value
solver to confirm the engine never gives up a better result.
"""

from functools import lru_cache

import pytest
from tictactoe_engine.board import Board, Cell, GameOverError
from tictactoe_engine.evaluation import OutcomeKind, WIN_SCORE, evaluate
from tictactoe_engine.search import (
    MoveSearch,
    TranspositionTable,
    find_best_move,
    minimax,
    order_moves,
    position_key,
)


@lru_cache(maxsize=None)
def game_value(cells: str, to_move: str) -> int:
    """+1 / 0 / -1 for the side to move, with perfect play (no depth bias)."""
    board = Board.from_string(cells)
    outcome = evaluate(board)
    if outcome.kind is OutcomeKind.WIN:
        return 1 if outcome.winner.value == to_move else -1
    if outcome.kind is OutcomeKind.DRAW:
        return 0

    mark = Cell(to_move)
    best = -1
    for move in board.empty_squares():
        board.push(move, mark)
        best = max(best, -game_value(board.to_string(), mark.opponent.value))
        board.pop()
    return best


def reachable_positions():
    """Every non-terminal (board, turn) reachable with X moving first."""
    seen = {}
    board = Board()

    def walk(turn: Cell):
        key = board.to_string()
        if key in seen or evaluate(board).is_terminal:
            return
        seen[key] = turn
        for move in board.empty_squares():
            board.push(move, turn)
            walk(turn.opponent)
            board.pop()

    walk(Cell.X)
    return sorted(seen.items())


def immediate_wins(board: Board, mark: Cell):
    wins = []
    for move in board.empty_squares():
        board.push(move, mark)
        if evaluate(board).winner is mark:
            wins.append(move)
        board.pop()
    return wins


class TestBestMove:
    """Tests for MoveSearch.best_move()."""

    @pytest.fixture
    def search(self):
        return MoveSearch(maximizer=Cell.O)

    def test_empty_board_takes_center(self, search):
        assert search.best_move(Board(), Cell.X) == 4
        assert search.best_move(Board(), Cell.O) == 4

    def test_takes_immediate_win_over_block(self, search):
        """Both sides threaten a row; O wins at once instead of blocking."""

        board = Board.from_string("XX.OO....")

        assert search.best_move(board, Cell.O) == 5

    def test_completes_row(self, search):
        board = Board.from_string("XX.OO....")

        assert search.best_move(board, Cell.X) == 2

    def test_blocks_row(self, search):
        board = Board.from_string("XX..O....")

        assert search.best_move(board, Cell.O) == 2

    def test_minimizing_side_blocks(self, search):
        """X is the minimizer for this search and must still block."""

        board = Board.from_string("O.O.X...X")

        assert search.best_move(board, Cell.X) == 1

    def test_prefers_win_now_to_blocking(self, search):
        board = Board.from_string("OO.XX...X")

        assert search.best_move(board, Cell.O) == 2

    def test_opposite_corners_takes_edge(self, search):
        """A corner reply loses to a fork; the first edge in order is chosen."""

        board = Board.from_string("X...O...X")

        assert search.best_move(board, Cell.O) == 1

    def test_corner_opening_answered_in_center(self, search):
        board = Board.from_string("X........")

        assert search.best_move(board, Cell.O) == 4

    def test_board_restored_after_search(self, search):
        board = Board.from_string("X...O....")
        board.push(8, Cell.X)

        search.best_move(board, Cell.O)

        assert board.to_string() == "X...O...X"
        assert board.move_stack == [8]

    def test_terminal_board_raises(self, search):
        with pytest.raises(GameOverError):
            search.best_move(Board.from_string("XXXOO...."), Cell.O)

    def test_full_board_raises(self, search):
        with pytest.raises(GameOverError):
            search.best_move(Board.from_string("XOXXOOOXX"), Cell.X)

    def test_empty_mark_raises(self, search):
        with pytest.raises(ValueError):
            search.best_move(Board(), Cell.EMPTY)

    def test_accepts_mark_strings(self, search):
        assert search.best_move(Board.from_string("XX..O...."), "O") == 2


class TestPerfectPlay:
    """Exhaustive checks over every reachable position."""

    @pytest.fixture(scope="class")
    def search(self):
        return MoveSearch(maximizer=Cell.O)

    def test_never_gives_up_value(self, search):
        """The chosen move keeps the game-theoretic value of the position."""

        for cells, turn in reachable_positions():
            board = Board.from_string(cells)
            move = search.best_move(board, turn)

            assert board[move] is Cell.EMPTY, f"{cells}: engine chose occupied square {move}"

            board.push(move, turn)
            after = -game_value(board.to_string(), turn.opponent.value)
            assert after == game_value(cells, turn.value), (
                f"{cells} ({turn.value} to move): move {move} drops the value"
            )

    def test_takes_every_available_win(self, search):
        for cells, turn in reachable_positions():
            board = Board.from_string(cells)
            wins = immediate_wins(board, turn)
            if wins:
                assert search.best_move(board, turn) in wins, (
                    f"{cells} ({turn.value} to move): missed win at {wins}"
                )

    def test_self_play_is_a_draw(self, search):
        board = Board()
        turn = Cell.X
        while not evaluate(board).is_terminal:
            board.push(search.best_move(board, turn), turn)
            turn = turn.opponent

        assert evaluate(board).kind is OutcomeKind.DRAW


class TestFindBestMove:
    """Tests for find_best_move() and minimax()."""

    def test_returns_score_and_nodes(self):
        board = Board.from_string("XX.OO....")

        move, score, nodes = find_best_move(board, Cell.O)

        assert move == 5
        assert score == WIN_SCORE, "Immediate win scores WIN_SCORE for the maximizer"
        assert nodes > 0

    def test_minimizer_score_is_negative(self):
        board = Board.from_string("XX.OO....")

        move, score, nodes = find_best_move(board, Cell.O, maximizer=Cell.X)

        assert move == 5
        assert score == -WIN_SCORE

    def test_empty_board_shortcut(self):
        move, score, nodes = find_best_move(Board(), Cell.X)

        assert (move, score, nodes) == (4, 0, 0)

    def test_table_reduces_nodes(self):
        board = Board.from_string("X........")

        _, score_plain, nodes_plain = find_best_move(board, Cell.O)
        _, score_cached, nodes_cached = find_best_move(
            board, Cell.O, transposition_table=TranspositionTable()
        )

        assert nodes_cached < nodes_plain
        assert score_plain == 0 and score_cached == 0, "Corner opening is a draw"

    def test_verbose_prints_moves(self, capsys):
        find_best_move(Board.from_string("XX..O...."), Cell.O, verbose=True)

        output = capsys.readouterr().out
        assert "Move: 2" in output
        assert "Best move: 2" in output

    def test_minimax_terminal_is_depth_adjusted(self):
        board = Board.from_string("XXXOO....")

        assert minimax(board, False, Cell.X, depth=3) == WIN_SCORE - 3
        assert minimax(board, True, Cell.O, depth=3) == 3 - WIN_SCORE

    def test_minimax_counts_nodes(self):
        nodes = [0]

        minimax(Board.from_string("XOXOXO..."), True, Cell.X, nodes_searched=nodes)

        assert nodes[0] > 1

    def test_minimax_restores_board(self):
        board = Board.from_string("XO..X....")

        minimax(board, False, Cell.X)

        assert board.to_string() == "XO..X...."


class TestTranspositionTable:
    """Tests for transposition table."""

    def test_store_and_lookup(self):
        tt = TranspositionTable()
        key = position_key(Board.from_string("X........"), True)

        assert tt.lookup(key) is None
        tt.store(key, 7)

        assert tt.lookup(key) == 7
        assert tt.hits == 1
        assert tt.misses == 1

    def test_store_never_overwrites(self):
        tt = TranspositionTable()
        key = position_key(Board.from_string("X........"), True)

        assert tt.store(key, 7) == 7
        assert tt.store(key, 3) == 7, "First stored score wins"
        assert tt.lookup(key) == 7

    def test_key_includes_side_to_move(self):
        board = Board.from_string("X........")

        assert position_key(board, True) != position_key(board, False)

    def test_bound_to_one_maximizer(self):
        tt = TranspositionTable()
        board = Board.from_string("XX..O....")

        find_best_move(board, Cell.O, transposition_table=tt)
        assert tt.maximizer is Cell.O

        with pytest.raises(ValueError):
            find_best_move(board, Cell.X, transposition_table=tt, maximizer=Cell.X)

    def test_search_is_stable_with_warm_table(self):
        search = MoveSearch(maximizer=Cell.O)
        board = Board.from_string("X...O....")

        first = search.search(board, Cell.X)
        entries = len(search.transposition_table)
        snapshot = dict(search.transposition_table.table)
        second = search.search(board, Cell.X)

        assert first[:2] == second[:2]
        assert len(search.transposition_table) == entries, "No new entries on repeat"
        assert search.transposition_table.table == snapshot, "Stored scores never change"

    def test_clear_table(self):
        tt = TranspositionTable(Cell.O)

        for i in range(9):
            board = Board()
            board.push(i, Cell.X)
            tt.store(position_key(board, True), i)

        assert len(tt) == 9

        tt.clear()

        assert len(tt) == 0
        assert tt.maximizer is None
        assert tt.hits == 0
        assert tt.misses == 0

    def test_stats(self):
        tt = TranspositionTable()
        key = position_key(Board(), True)
        tt.lookup(key)
        tt.store(key, 0)
        tt.lookup(key)

        stats = tt.get_stats()

        assert stats['entries'] == 1
        assert stats['hit_rate'] == 50.0


class TestMoveOrdering:
    """Tests for move ordering."""

    def test_center_corners_edges(self):
        assert order_moves(Board()) == [4, 0, 2, 6, 8, 1, 3, 5, 7]

    def test_skips_occupied(self):
        board = Board.from_string("X...O..O.")

        assert order_moves(board) == [2, 6, 8, 1, 3, 5]
