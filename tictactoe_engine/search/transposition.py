"""
Transposition Table

This module implements the search cache: a table mapping a position
(occupancy pattern + which side is to move) to its minimax score, so
that positions reached through different move orders are searched once.

Key Format:
    (cells, maximizing)
        cells: tuple of 9 Cell values
        maximizing: True if the maximizing mark is to move

Depth is NOT part of the key. A position reached at several depths
reuses the score computed the first time it was seen, including that
visit's depth bias. The sign of the score (who wins) does not depend on
depth, so this only affects how strongly a faster win is preferred
across transpositions.

Threading:
    Entries are insert-if-absent under a lock. Once stored, a score for
    a key never changes, so concurrent searches sharing one table never
    observe different values for the same position.
"""

import threading
from typing import Dict, Optional, Tuple

from tictactoe_engine.board.representation import Board, Cell

PositionKey = Tuple[Tuple[Cell, ...], bool]


def position_key(board: Board, maximizing: bool) -> PositionKey:
    """Cache key for a board with the given side to move."""
    return board.key(), maximizing


class TranspositionTable:
    """
    Thread-safe cache of position scores.

    Scores are relative to one maximizing mark, so a table is bound to the
    first maximizer that uses it and refuses any other.

    Attributes:
        table: Dictionary mapping PositionKey → score
        maximizer: Mark the stored scores are relative to (None until bound)
    """

    def __init__(self, maximizer: Optional[Cell] = None):
        self.table: Dict[PositionKey, int] = {}
        self.maximizer = maximizer
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def bind(self, maximizer: Cell) -> None:
        """
        Bind the table to a maximizing mark.

        Raises:
            ValueError: If already bound to the other mark
        """
        with self._lock:
            if self.maximizer is None:
                self.maximizer = maximizer
            elif self.maximizer is not maximizer:
                raise ValueError(
                    f"Table holds scores for maximizer {self.maximizer.value}, "
                    f"cannot search for maximizer {maximizer.value}"
                )

    def store(self, key: PositionKey, value: int) -> int:
        """
        Store a score unless the key is already present.

        Returns:
            The score held by the table for this key after the call
        """
        with self._lock:
            return self.table.setdefault(key, value)

    def lookup(self, key: PositionKey) -> Optional[int]:
        with self._lock:
            value = self.table.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def clear(self):
        """Clear all entries and unbind the maximizer."""
        with self._lock:
            self.table.clear()
            self.maximizer = None
            self.hits = 0
            self.misses = 0

    def get_stats(self) -> Dict[str, int | float]:
        """Get statistics about table usage."""
        with self._lock:
            total_lookups = self.hits + self.misses
            hit_rate = (self.hits / total_lookups * 100) if total_lookups > 0 else 0
            return {
                'entries': len(self.table),
                'hits': self.hits,
                'misses': self.misses,
                'hit_rate': hit_rate,
            }

    def __len__(self) -> int:
        return len(self.table)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"TranspositionTable(entries={stats['entries']}, "
            f"hit_rate={stats['hit_rate']:.1f}%)"
        )
