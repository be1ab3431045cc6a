"""
Text Protocol Implementation

This module implements a line-oriented protocol for driving the engine
from a terminal or from a GUI process over stdin/stdout.

Commands Supported:
    - hello: Identify engine
    - isready: Synchronization check (waits for a pending computer reply)
    - newgame: Start a new game in the current mode
    - reset: Back to the configured mode, new game
    - mode human|computer: Switch mode (starts a new game)
    - position <board> [turn X|O]: Set the position
    - move <index>: Play a human move
    - go: Search the current position, report best move
    - stop: Wait for a running search
    - eval: Report the outcome of the current position
    - show: Print the board
    - nav <index> <key>: Arrow-key focus navigation
    - quit: Shutdown engine

Threading:
    - Main thread: Listen for commands
    - Search thread: Run the move search for 'go'
    - Timer thread: Computer reply in human-vs-computer mode
"""

import sys
import threading
import time
import logging
from pathlib import Path
from typing import Optional

from tictactoe_engine.board.representation import Board, Cell, move_focus
from tictactoe_engine.config import EngineConfig
from tictactoe_engine.game.session import GameSession, result_text
from tictactoe_engine.search.minimax import MoveSearch


def setup_logger(log_dir: Optional[Path] = None, debug=True, log_file="engine.log"):
    """
    Setup file-based logger for protocol debugging.

    Args:
        log_dir: Directory for the log file (default: ~/.tictactoe)
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: Log file name

    Returns:
        Configured logger instance
    """
    log_dir = Path(log_dir) if log_dir else Path.home() / ".tictactoe"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("tictactoe_engine")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handler = logging.FileHandler(log_dir / log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class ProtocolEngine:
    """
    Command loop around a GameSession.

    Attributes:
        config: Engine configuration
        search: Move search shared by the session and 'go'
        session: Live game
        search_thread: Background thread for 'go'

    Methods:
        run: Main command loop
        handle_*: One method per command
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the protocol engine.

        Args:
            config: Engine configuration (default: EngineConfig())
        """
        self.config = config if config else EngineConfig()
        self.search = MoveSearch(maximizer=self.config.computer_mark)
        self.session = GameSession(self.config, self.search, on_update=self._on_computer_move)

        self.searching = False
        self.search_thread: Optional[threading.Thread] = None
        self._output_lock = threading.Lock()

        self.name = "TicTacToe Engine"
        self.version = "0.1.0"

        self.logger = setup_logger(self.config.log_dir, self.config.debug, self.config.log_file)
        self.logger.info("=== Engine Started ===")
        self.logger.info(f"Log file: {self.config.log_path}")

    def send(self, *lines: str):
        """Write response lines to stdout."""
        with self._output_lock:
            for line in lines:
                print(line)
                self.logger.debug(f"<<< {line}")
            sys.stdout.flush()

    def run(self):
        """
        Main command loop.

        Reads commands from stdin until 'quit' or EOF. A failing command is
        logged and reported on stderr; the loop keeps running.
        """
        while True:
            try:
                command = input().strip()

                if not command:
                    continue

                self.logger.debug(f">>> {command}")

                tokens = command.split()
                cmd = tokens[0].lower()

                if cmd == "hello":
                    self.handle_hello()

                elif cmd == "isready":
                    self.handle_isready()

                elif cmd == "newgame":
                    self.handle_newgame()

                elif cmd == "reset":
                    self.handle_reset()

                elif cmd == "mode":
                    self.handle_mode(tokens)

                elif cmd == "position":
                    self.handle_position(tokens)

                elif cmd == "move":
                    self.handle_move(tokens)

                elif cmd == "go":
                    self.handle_go(tokens)

                elif cmd == "stop":
                    self.handle_stop()

                elif cmd == "eval":
                    self.handle_eval()

                elif cmd == "show":
                    self.handle_show()

                elif cmd == "nav":
                    self.handle_nav(tokens)

                elif cmd == "quit":
                    self.handle_quit()
                    break

                else:
                    self.logger.debug(f"Unknown command ignored: {command}")

            except EOFError:
                self.logger.info("EOF received, shutting down")
                break
            except Exception as e:
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def handle_hello(self):
        """
        Handle 'hello' command - identify engine.

        Response:
            id name TicTacToe Engine 0.1.0
            option name Mode type combo default human var human var computer
            option name ReplyDelay type spin default 80 min 0 max 5000
            hellook
        """
        self.logger.info("Handling: hello")
        default_mode = "computer" if self.config.vs_computer else "human"
        self.send(
            f"id name {self.name} {self.version}",
            f"option name Mode type combo default {default_mode} var human var computer",
            f"option name ReplyDelay type spin default {self.config.reply_delay_ms} min 0 max 5000",
            "hellook",
        )

    def handle_isready(self):
        """Handle 'isready' command - waits for any pending computer reply."""
        self.logger.info("Handling: isready")
        self.session.wait_for_reply()
        self.handle_stop()
        self.send("readyok")

    def handle_newgame(self):
        """Handle 'newgame' command - play again in the current mode."""
        self.logger.info("Handling: newgame")
        self.session.new_game()
        self.send(self.session.status_text())

    def handle_reset(self):
        """Handle 'reset' command - configured mode, fresh board."""
        self.logger.info("Handling: reset")
        self.session.reset()
        self.send(self.session.status_text())

    def handle_mode(self, tokens):
        """
        Handle 'mode' command.

        Formats:
            mode human
            mode computer
        """
        if len(tokens) < 2 or tokens[1].lower() not in ("human", "computer"):
            self.logger.warning(f"Invalid mode command: {' '.join(tokens)}")
            print("# Usage: mode human|computer", file=sys.stderr)
            return

        vs_computer = tokens[1].lower() == "computer"
        self.logger.info(f"Handling: mode {tokens[1].lower()}")
        self.session.set_mode(vs_computer)
        self.send(f"mode {'computer' if vs_computer else 'human'}", self.session.status_text())

    def handle_position(self, tokens):
        """
        Handle 'position' command - set board position.

        Formats:
            position startpos
            position XX.OO....
            position XX.OO.... turn O

        Without 'turn', the side to move is inferred from the mark counts.
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        if len(tokens) < 2:
            self.logger.warning("Position command with insufficient arguments")
            return

        if tokens[1] == "startpos":
            self.session.new_game()
            return

        try:
            board = Board.from_string(tokens[1])
        except ValueError as e:
            self.logger.error(f"Invalid board: {e}")
            print(f"# Invalid board: {e}", file=sys.stderr)
            return

        if len(tokens) >= 4 and tokens[2] == "turn":
            turn = Cell.parse_mark(tokens[3])
        else:
            first = self.config.first_mark
            turn = first if board.count(first) == board.count(first.opponent) else first.opponent

        self.session.set_position(board, turn)
        self.logger.info(f"Position updated: {board.to_string()} turn {turn.value}")

    def handle_move(self, tokens):
        """
        Handle 'move' command - play a human move.

        Response:
            the board, then the status line or the result banner
            (the computer's reply follows as 'bestmove <i>' after the delay)
        """
        if len(tokens) < 2:
            self.logger.warning("Move command without a square")
            return

        index = int(tokens[1])
        self.logger.info(f"Handling: move {index}")
        self.session.play(index)
        self._report()

    def handle_go(self, tokens):
        """
        Handle 'go' command - start search on the current position.

        Response (from the search thread):
            info score <s> nodes <n> time <ms>
            bestmove <index>
        """
        self.logger.info("Handling: go")
        self.handle_stop()

        # The search walks the board in place; give it its own copy
        board_text, turn, outcome = self.session.snapshot()
        if outcome.is_terminal:
            self.logger.warning(f"go on a finished game ({outcome})")
            self.send("bestmove none")
            return

        self.searching = True
        self.search_thread = threading.Thread(
            target=self._search_thread,
            args=(Board.from_string(board_text), turn),
        )
        self.search_thread.start()

    def _search_thread(self, board: Board, turn: Cell):
        """
        Background thread for search.

        Output:
            info score X nodes Y time Z
            bestmove <index>
        """
        start_time = time.time()

        try:
            self.logger.info(f"Search started: {board.to_string()} {turn.value} to move")
            best_move, score, nodes = self.search.search(board, turn)
            elapsed_ms = int((time.time() - start_time) * 1000)
            self.logger.info(
                f"Search complete: best_move={best_move}, score={score}, "
                f"nodes={nodes}, time={elapsed_ms}ms"
            )
            self.send(
                f"info score {score} nodes {nodes} time {elapsed_ms}",
                f"bestmove {best_move}",
            )

        except Exception as e:
            elapsed_time = time.time() - start_time
            self.logger.error(f"Search error after {elapsed_time:.3f}s: {e}", exc_info=True)
            print(f"# Search error: {e}", file=sys.stderr)

        finally:
            self.searching = False
            self.logger.debug("Search thread finished")

    def handle_stop(self):
        """Handle 'stop' command - wait for a running search to finish."""
        if self.search_thread and self.search_thread.is_alive():
            self.logger.debug("Waiting for search thread to finish (timeout=5.0s)")
            self.search_thread.join(timeout=5.0)
            if self.search_thread.is_alive():
                self.logger.warning("Search thread did not finish within timeout")

    def handle_eval(self):
        """Handle 'eval' command - report the outcome of the current position."""
        _, _, outcome = self.session.snapshot()
        self.send(f"outcome {outcome}")

    def handle_show(self):
        """Handle 'show' command - print board and status."""
        board_text, _, _ = self.session.snapshot()
        self.send(*str(Board.from_string(board_text)).splitlines(), self.session.status_text())

    def handle_nav(self, tokens):
        """
        Handle 'nav' command - keyboard focus navigation.

        Format:
            nav <index> <ArrowLeft|ArrowRight|ArrowUp|ArrowDown>

        Response:
            focus <index>
        """
        if len(tokens) < 3:
            self.logger.warning("Nav command needs a square and a key")
            return
        self.send(f"focus {move_focus(int(tokens[1]), tokens[2])}")

    def handle_quit(self):
        """Handle 'quit' command - shutdown engine."""
        self.logger.info("Handling: quit - shutting down engine")

        if self.search_thread and self.search_thread.is_alive():
            self.logger.debug("Waiting for search thread to complete before quitting")
            self.search_thread.join()

        self.logger.info("=== Engine Stopped ===")
        sys.exit(0)

    def _on_computer_move(self, session: GameSession, move: int):
        """Called from the session's timer thread after the computer plays."""
        self.send(f"bestmove {move}")
        self._report()

    def _report(self):
        board_text, _, outcome = self.session.snapshot()
        lines = str(Board.from_string(board_text)).splitlines()
        if outcome.is_terminal:
            lines.append(result_text(outcome))
        else:
            lines.append(self.session.status_text())
        self.send(*lines)


def main():
    """Console entry point."""
    engine = ProtocolEngine()
    engine.run()
