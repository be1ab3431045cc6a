"""
Engine configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path

from tictactoe_engine.board.representation import Cell


@dataclass
class EngineConfig:
    """Configuration for a game session and its front end.

    Marks may be given as Cell values or as "X" / "O" strings; they are
    normalized to Cell in __post_init__.
    """

    # Players
    first_mark: Cell = Cell.X
    """Mark that moves first in every new game"""

    human_mark: Cell = Cell.X
    """Mark played by the human in human-vs-computer mode"""

    computer_mark: Cell = Cell.O
    """Mark played by the engine in human-vs-computer mode"""

    # Mode
    vs_computer: bool = False
    """Start in human-vs-computer mode (False = human vs human)"""

    reply_delay_ms: int = 80
    """Pause before the computer answers a human move, in milliseconds"""

    # Logging
    log_dir: Path = field(default_factory=lambda: Path.home() / ".tictactoe")
    """Directory for the engine log file"""

    log_file: str = "engine.log"
    """Log file name inside log_dir"""

    debug: bool = True
    """Log at DEBUG level (INFO otherwise)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.first_mark = Cell.parse_mark(self.first_mark)
        self.human_mark = Cell.parse_mark(self.human_mark)
        self.computer_mark = Cell.parse_mark(self.computer_mark)
        self.log_dir = Path(self.log_dir)

        if self.human_mark is self.computer_mark:
            raise ValueError(
                f"human_mark and computer_mark must differ, both are {self.human_mark.value}"
            )

        if self.reply_delay_ms < 0:
            raise ValueError(f"reply_delay_ms must be non-negative, got {self.reply_delay_ms}")

    @property
    def reply_delay(self) -> float:
        """Reply delay in seconds."""
        return self.reply_delay_ms / 1000.0

    @property
    def log_path(self) -> Path:
        return self.log_dir / self.log_file

    def __repr__(self) -> str:
        """String representation of config."""
        mode = "human vs computer" if self.vs_computer else "human vs human"
        return (
            f"EngineConfig(\n"
            f"  Players: first={self.first_mark.value}, human={self.human_mark.value}, "
            f"computer={self.computer_mark.value}\n"
            f"  Mode: {mode}, reply delay {self.reply_delay_ms} ms\n"
            f"  Log: {self.log_path} (debug={self.debug})\n"
            f")"
        )
