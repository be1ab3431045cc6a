"""
Board Representation

This module defines the 3x3 board used by the engine, the marks that can
occupy its cells, and conversions to array form for analysis.

Board Layout (row-major indices):
    0 | 1 | 2
    ---------
    3 | 4 | 5
    ---------
    6 | 7 | 8

    row = index // 3
    col = index % 3

Text Form:
    9 characters, one per cell: 'X', 'O' or '.' for empty.
    '_' and '-' are also read as empty; '/' and whitespace are ignored,
    so "XX./OO./..." and "XX.OO...." describe the same board.

Array Form:
    3*3 int8 numpy array: 0 = empty, 1 = X, 2 = O
"""

import numpy as np
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class IllegalMoveError(ValueError):
    """Raised when a mark cannot be placed (bad index, occupied cell, wrong side)."""


class GameOverError(ValueError):
    """Raised when a move or search is requested on a finished game."""


class Cell(Enum):
    """
    Content of a single square.

    X and O are the two marks; EMPTY is an unoccupied square.
    """
    EMPTY = "."
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Cell":
        """The other mark. EMPTY has no opponent."""
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("EMPTY has no opponent")

    @classmethod
    def parse_mark(cls, value) -> "Cell":
        """Convert 'X'/'O' (any case) or a mark Cell into a mark Cell."""
        if isinstance(value, Cell):
            mark = value
        else:
            try:
                mark = cls(str(value).strip().upper())
            except ValueError:
                raise ValueError(f"Unknown mark: {value!r}") from None
        if mark is Cell.EMPTY:
            raise ValueError("EMPTY is not a mark")
        return mark


MARKS = (Cell.X, Cell.O)

BOARD_SIZE = 3
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE

# Winning lines, in scan order: rows, columns, diagonals
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

_EMPTY_CHARS = {".", "_", "-"}

CELL_TO_CODE = {Cell.EMPTY: 0, Cell.X: 1, Cell.O: 2}
CODE_TO_CELL = {v: k for k, v in CELL_TO_CODE.items()}


class Board:
    """
    A 3x3 board with a move stack.

    push() is the only way a mark lands on the board; pop() undoes the
    last push. The search uses push/pop to walk the game tree in place.

    Attributes:
        cells: List of 9 Cell values
        move_stack: Indices pushed so far, oldest first
    """

    def __init__(self, cells: Optional[Iterable[Cell]] = None):
        if cells is None:
            self.cells: List[Cell] = [Cell.EMPTY] * NUM_SQUARES
        else:
            self.cells = list(cells)
            if len(self.cells) != NUM_SQUARES:
                raise ValueError(
                    f"Board needs {NUM_SQUARES} cells, got {len(self.cells)}"
                )
            for cell in self.cells:
                if not isinstance(cell, Cell):
                    raise ValueError(f"Invalid cell value: {cell!r}")
        self.move_stack: List[int] = []

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Parse a board from its text form.

        Args:
            text: e.g. "XX.OO...." or "XX./OO./..."

        Returns:
            Board with an empty move stack

        Raises:
            ValueError: On unknown characters or wrong length
        """
        cells = []
        for char in text:
            if char.isspace() or char == "/":
                continue
            if char in _EMPTY_CHARS:
                cells.append(Cell.EMPTY)
            elif char.upper() in ("X", "O"):
                cells.append(Cell(char.upper()))
            else:
                raise ValueError(f"Invalid board character: {char!r}")
        return cls(cells)

    def to_string(self) -> str:
        return "".join(cell.value for cell in self.cells)

    def push(self, index: int, mark: Cell) -> None:
        """
        Place a mark on an empty square.

        Raises:
            IllegalMoveError: If index is out of range, the square is
                occupied, or mark is EMPTY
        """
        if not 0 <= index < NUM_SQUARES:
            raise IllegalMoveError(f"Square {index} is off the board")
        if mark not in MARKS:
            raise IllegalMoveError(f"Cannot place {mark!r}")
        if self.cells[index] is not Cell.EMPTY:
            raise IllegalMoveError(
                f"Square {index} is already occupied by {self.cells[index].value}"
            )
        self.cells[index] = mark
        self.move_stack.append(index)

    def pop(self) -> int:
        """Undo the last push and return its index."""
        if not self.move_stack:
            raise IllegalMoveError("No move to undo")
        index = self.move_stack.pop()
        self.cells[index] = Cell.EMPTY
        return index

    def empty_squares(self) -> List[int]:
        return [i for i, cell in enumerate(self.cells) if cell is Cell.EMPTY]

    def is_empty(self) -> bool:
        return all(cell is Cell.EMPTY for cell in self.cells)

    def is_full(self) -> bool:
        return all(cell is not Cell.EMPTY for cell in self.cells)

    def count(self, cell: Cell) -> int:
        return self.cells.count(cell)

    def copy(self) -> "Board":
        board = Board(self.cells)
        board.move_stack = list(self.move_stack)
        return board

    def key(self) -> Tuple[Cell, ...]:
        """Hashable snapshot of the occupancy pattern."""
        return tuple(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self):
        return iter(self.cells)

    def __len__(self) -> int:
        return NUM_SQUARES

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.key())

    def __str__(self) -> str:
        rows = []
        for row in range(BOARD_SIZE):
            start = row * BOARD_SIZE
            rows.append(" ".join(c.value for c in self.cells[start:start + BOARD_SIZE]))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Board('{self.to_string()}')"


def index_to_coordinates(index: int) -> Tuple[int, int]:
    """
    Convert a square index (0-8) to (row, col).

    Raises:
        ValueError: If index is off the board
    """
    if not 0 <= index < NUM_SQUARES:
        raise ValueError(f"Square {index} is off the board")
    return index // BOARD_SIZE, index % BOARD_SIZE


def coordinates_to_index(row: int, col: int) -> int:
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise ValueError(f"Coordinates ({row}, {col}) are off the board")
    return row * BOARD_SIZE + col


# Arrow keys -> (row delta, col delta)
_KEY_DELTAS = {
    "arrowleft": (0, -1),
    "left": (0, -1),
    "arrowright": (0, 1),
    "right": (0, 1),
    "arrowup": (-1, 0),
    "up": (-1, 0),
    "arrowdown": (1, 0),
    "down": (1, 0),
}


def move_focus(index: int, key: str) -> int:
    """
    Keyboard navigation between squares.

    Moves one square in the arrow's direction, clamped at the grid edge
    (no wrap-around). Keys other than the arrows leave focus where it is.

    Args:
        index: Currently focused square
        key: Key name, e.g. "ArrowLeft" or "left"

    Returns:
        Index of the square that should receive focus
    """
    row, col = index_to_coordinates(index)
    delta = _KEY_DELTAS.get(key.lower())
    if delta is None:
        return index
    row = min(BOARD_SIZE - 1, max(0, row + delta[0]))
    col = min(BOARD_SIZE - 1, max(0, col + delta[1]))
    return coordinates_to_index(row, col)


def board_to_array(board: Board) -> np.ndarray:
    """
    Convert a board to a 3*3 int8 array (0 = empty, 1 = X, 2 = O).
    """
    codes = [CELL_TO_CODE[cell] for cell in board]
    return np.array(codes, dtype=np.int8).reshape(BOARD_SIZE, BOARD_SIZE)


def array_to_board(array: np.ndarray) -> Board:
    """
    Inverse of board_to_array().

    Raises:
        ValueError: On wrong shape or unknown cell codes
    """
    if array.shape != (BOARD_SIZE, BOARD_SIZE):
        raise ValueError(f"Invalid array shape: {array.shape}. Expected (3, 3)")
    try:
        cells = [CODE_TO_CELL[int(code)] for code in array.flatten()]
    except KeyError as e:
        raise ValueError(f"Invalid cell code: {e.args[0]}") from None
    return Board(cells)


def symmetries(board: Board) -> List[Board]:
    """
    The 8 images of a board under rotation and reflection (dihedral group).

    The first entry is the board itself.
    """
    array = board_to_array(board)
    images = []
    for k in range(4):
        rotated = np.rot90(array, k)
        images.append(array_to_board(rotated))
        images.append(array_to_board(np.fliplr(rotated)))
    return images


def canonical_key(board: Board) -> str:
    """Smallest text form among all symmetric images of the board."""
    return min(image.to_string() for image in symmetries(board))
