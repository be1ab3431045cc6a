"""
Unit Tests for Testing Utilities

Tests for the tactical suite and the whole-game checks.
"""

import pytest
from tictactoe_engine.board import Cell
from tictactoe_engine.evaluation import OutcomeKind
from tictactoe_engine.search import MoveSearch
from tictactoe_engine.utils import (
    TACTICAL_POSITIONS,
    count_positions,
    evaluate_position,
    play_random_games,
    run_tactics_suite,
    self_play,
    verify_unbeatable,
)
from tictactoe_engine.utils.testing import TacticalPosition


@pytest.fixture(scope="module")
def search():
    return MoveSearch(maximizer=Cell.O)


class TestTacticsSuite:
    """Tests for the tactical suite."""

    def test_all_positions_solved(self, search):
        result = run_tactics_suite(search, verbose=False)

        failed = [r.position.id for r in result['results'] if not r.correct]
        assert failed == []
        assert result['score'] == result['total'] == len(TACTICAL_POSITIONS)
        assert result['percentage'] == 100.0

    def test_verbose_output(self, search, capsys):
        run_tactics_suite(search, positions=TACTICAL_POSITIONS[:1], verbose=True)

        output = capsys.readouterr().out
        assert "TT.01" in output
        assert "Score: 1/1" in output

    def test_finished_position_is_reported_not_raised(self, search, capsys):
        position = TacticalPosition(
            id="BAD", board="XXXOO....", mark=Cell.O, best_moves=[5]
        )

        result = evaluate_position(position, search)

        assert not result.correct
        assert result.found_move == -1
        assert "BAD" in capsys.readouterr().out


class TestWholeGames:
    """Tests for whole-game checks."""

    @pytest.mark.parametrize("computer_mark", [Cell.X, Cell.O])
    def test_unbeatable(self, search, computer_mark):
        counts = verify_unbeatable(search, computer_mark=computer_mark)

        assert counts['games'] > 0
        assert counts['computer_losses'] == 0
        assert counts['games'] == (
            counts['computer_wins'] + counts['draws'] + counts['computer_losses']
        )

    def test_self_play_draws(self, search):
        outcome, moves = self_play(search)

        assert outcome.kind is OutcomeKind.DRAW
        assert len(moves) == 9
        assert moves[0] == 4

    @pytest.mark.parametrize("computer_mark", [Cell.X, Cell.O])
    def test_random_opponent(self, search, computer_mark):
        counts = play_random_games(search, 30, computer_mark=computer_mark, seed=1)

        assert counts['games'] == 30
        assert counts['computer_losses'] == 0
        assert counts['computer_wins'] > 0, "A random opponent should lose some games"

    def test_random_games_are_reproducible(self, search):
        first = play_random_games(search, 10, seed=3)
        second = play_random_games(search, 10, seed=3)

        assert first == second


class TestCountPositions:
    """Tests for the position census."""

    def test_known_counts(self):
        census = count_positions()

        assert census['positions'] == 5478
        assert census['classes'] == 765
        assert census['terminal'] == 958
        assert census['games'] == 255168
