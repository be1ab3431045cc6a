"""
Game Session

This module owns a live game: the board, whose turn it is, and whether
the game is over. It is the layer a front end talks to.

State Machine:
    InProgress(board, turn) --place(i)--> InProgress(board', other turn)
    InProgress(board, turn) --place(i)--> Terminal(board', outcome)
    Terminal is absorbing until new_game() / reset().

Modes:
    - Human vs human: every move comes from play()
    - Human vs computer: after a human move, the computer's reply is
      scheduled on a timer (reply_delay_ms) so it does not appear instantly

Threading:
    - Caller thread: play(), new_game(), snapshot(), ...
    - Timer thread: computer reply
    - All state is guarded by one re-entrant lock; new_game() invalidates
      any reply that is still pending
    - The engine searches a copy of the board outside the lock, so reads
      such as snapshot() never wait for a search
"""

import logging
import threading
from typing import Callable, Optional, Tuple

from tictactoe_engine.board.representation import Board, Cell, GameOverError, IllegalMoveError
from tictactoe_engine.config import EngineConfig
from tictactoe_engine.evaluation.base import Outcome, OutcomeKind, evaluate
from tictactoe_engine.search.minimax import MoveSearch

logger = logging.getLogger(__name__)


def result_text(outcome: Outcome) -> str:
    """Banner text for a finished game."""
    if outcome.kind is OutcomeKind.WIN:
        return f"{outcome.winner.value} wins!"
    if outcome.kind is OutcomeKind.DRAW:
        return "It's a draw!"
    return ""


class GameSession:
    """
    A single game between two humans or a human and the engine.

    Attributes:
        config: Session configuration
        search: Move search used for computer moves
        board: Live board
        turn: Mark to move
        outcome: Result of evaluating the live board
        vs_computer: True in human-vs-computer mode
        on_update: Optional callback(session, move) run after a computer reply
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        search: Optional[MoveSearch] = None,
        on_update: Optional[Callable[["GameSession", int], None]] = None,
    ):
        self.config = config if config else EngineConfig()
        self.search = search if search else MoveSearch(maximizer=self.config.computer_mark)
        self.on_update = on_update
        self.vs_computer = self.config.vs_computer

        self._lock = threading.RLock()
        self._reply_timer: Optional[threading.Timer] = None
        self._generation = 0

        self.board = Board()
        self.turn = self.config.first_mark
        self.outcome = Outcome.in_progress()
        self.new_game()

    @property
    def is_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def computer_to_move(self) -> bool:
        return (
            self.vs_computer
            and not self.is_over
            and self.turn is self.config.computer_mark
        )

    @property
    def human_to_move(self) -> bool:
        """True if play() accepts a move now (either side in human-vs-human mode)."""
        if self.is_over:
            return False
        return not self.vs_computer or self.turn is self.config.human_mark

    def place(self, index: int) -> Outcome:
        """
        Place the current mark on a square and advance the game.

        This is the only transition of the state machine.

        Raises:
            GameOverError: If the game has already ended
            IllegalMoveError: If the square is off the board or occupied
        """
        with self._lock:
            if self.is_over:
                raise GameOverError(f"Game is over ({self.outcome})")

            mark = self.turn
            self.board.push(index, mark)
            self.outcome = evaluate(self.board)
            if not self.is_over:
                self.turn = mark.opponent

            logger.debug(f"{mark.value} → {index}: {self.board.to_string()} ({self.outcome})")
            if self.is_over:
                logger.info(f"Game over: {result_text(self.outcome)}")
            return self.outcome

    def play(self, index: int) -> Outcome:
        """
        Play a human move.

        In human-vs-computer mode only the human's mark may be played here,
        and the computer's reply is scheduled after the configured delay.

        Raises:
            IllegalMoveError: If it is the computer's turn, or the square
                is off the board or occupied
            GameOverError: If the game has already ended
        """
        with self._lock:
            if not self.is_over and not self.human_to_move:
                raise IllegalMoveError(f"It is the computer's turn ({self.turn.value})")
            outcome = self.place(index)
            if self.computer_to_move:
                self._schedule_reply()
            return outcome

    def computer_move(self) -> int:
        """
        Let the engine play the current turn immediately.

        The search runs on a copy of the board without holding the session
        lock. If the position changes meanwhile, the move is not played.

        Returns:
            Square the engine played

        Raises:
            GameOverError: If the game has already ended
            IllegalMoveError: If the position changed during the search
        """
        move = self._engine_move()
        if move is None:
            raise IllegalMoveError("Position changed during the search, move not played")
        return move

    def _engine_move(self, generation: Optional[int] = None) -> Optional[int]:
        with self._lock:
            if generation is not None and (
                generation != self._generation or not self.computer_to_move
            ):
                return None
            if self.is_over:
                raise GameOverError(f"Game is over ({self.outcome})")
            board, turn, generation = self.board.copy(), self.turn, self._generation

        move = self.search.best_move(board.copy(), turn)

        with self._lock:
            if generation != self._generation or self.turn is not turn or self.board != board:
                logger.debug(f"Position changed during search, dropping move {move}")
                return None
            self.place(move)
            return move

    def _schedule_reply(self):
        timer = threading.Timer(
            self.config.reply_delay, self._reply, args=(self._generation,)
        )
        timer.daemon = True
        self._reply_timer = timer
        logger.debug(f"Computer reply scheduled in {self.config.reply_delay_ms} ms")
        timer.start()

    def _reply(self, generation: int):
        try:
            move = self._engine_move(generation)
            if move is None:
                logger.debug("Stale computer reply dropped")
                return

            if self.on_update:
                self.on_update(self, move)

        except Exception as e:
            logger.error(f"Computer reply failed: {e}", exc_info=True)

    def wait_for_reply(self, timeout: Optional[float] = None) -> bool:
        """
        Block until a pending computer reply has been played.

        Returns:
            True if no reply is pending any more
        """
        timer = self._reply_timer
        if timer is None or timer is threading.current_thread():
            return True
        timer.join(timeout)
        return not timer.is_alive()

    def new_game(self):
        """Start a fresh game in the current mode ("play again")."""
        with self._lock:
            self._generation += 1
            if self._reply_timer is not None:
                self._reply_timer.cancel()
                self._reply_timer = None

            self.board = Board()
            self.turn = self.config.first_mark
            self.outcome = Outcome.in_progress()
            logger.info(
                f"New game: {'human vs computer' if self.vs_computer else 'human vs human'}, "
                f"{self.turn.value} to move"
            )

            if self.computer_to_move:
                self._schedule_reply()

    def reset(self):
        """Return to the configured mode and start a fresh game."""
        with self._lock:
            self.vs_computer = self.config.vs_computer
            self.new_game()

    def set_mode(self, vs_computer: bool):
        """Switch between human-vs-human and human-vs-computer; starts a new game."""
        with self._lock:
            self.vs_computer = vs_computer
            self.new_game()

    def set_position(self, board: Board, turn: Cell):
        """
        Replace the live position (analysis / protocol use).

        The turn is kept as given even if the position is finished. In
        human-vs-computer mode, a position with the computer to move gets
        its reply scheduled as after a human move.
        """
        with self._lock:
            self._generation += 1
            if self._reply_timer is not None:
                self._reply_timer.cancel()
                self._reply_timer = None
            self.board = board.copy()
            self.turn = Cell.parse_mark(turn)
            self.outcome = evaluate(self.board)

            if self.computer_to_move:
                self._schedule_reply()

    def status_text(self) -> str:
        with self._lock:
            return "Game over" if self.is_over else f"Turn: {self.turn.value}"

    def result_text(self) -> str:
        with self._lock:
            return result_text(self.outcome)

    def snapshot(self) -> Tuple[str, Cell, Outcome]:
        """Consistent (board text, turn, outcome) triple."""
        with self._lock:
            return self.board.to_string(), self.turn, self.outcome

    def __repr__(self) -> str:
        board, turn, outcome = self.snapshot()
        return f"GameSession(board='{board}', turn={turn.value}, outcome={outcome})"
