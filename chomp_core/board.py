from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

ROWS = 5
COLS = 8

Coord = Tuple[int, int]


class InvalidBoardEncoding(ValueError):
    """Raised when an externally supplied height sequence is not a well-formed board."""


@dataclass(frozen=True)
class Move:
    """A zero-indexed (row, col) cell to eat."""
    row: int
    col: int

    def to_tuple(self) -> Coord:
        return (self.row, self.col)

    def to_one_indexed(self) -> Coord:
        """Coordinates as shown to players (1..ROWS, 1..COLS)."""
        return (self.row + 1, self.col + 1)

    @classmethod
    def from_one_indexed(cls, row: int, col: int) -> 'Move':
        if not 1 <= row <= ROWS:
            raise ValueError(f"row must be between 1 and {ROWS}")
        if not 1 <= col <= COLS:
            raise ValueError(f"column must be between 1 and {COLS}")
        return cls(row - 1, col - 1)


POISON = Move(ROWS - 1, COLS - 1)


@dataclass(frozen=True)
class BoardState:
    """Column heights of the eaten staircase.

    heights[c] == h means rows 0..h of column c are eaten; -1 means untouched.
    Heights never increase from left to right.
    """
    heights: Tuple[int, ...]  # length == COLS

    @classmethod
    def initial(cls) -> 'BoardState':
        return cls(tuple([-1] * COLS))

    @classmethod
    def from_heights(cls, heights: Iterable[int]) -> 'BoardState':
        """Unchecked constructor for heights the caller already validated."""
        return cls(tuple(heights))

    def is_eaten(self, row: int, col: int) -> bool:
        return self.heights[col] >= row

    def key(self) -> str:
        """Canonical text form used as the policy table key, e.g. '[0, 0, -1, ...]'."""
        return "[" + ", ".join(str(h) for h in self.heights) + "]"

    def pretty(self) -> str:
        """Human-readable grid: X poison, . eaten, o still on the board."""
        lines: List[str] = []
        for r in range(ROWS):
            row: List[str] = []
            for c in range(COLS):
                if (r, c) == POISON.to_tuple():
                    row.append("X")
                elif self.is_eaten(r, c):
                    row.append(".")
                else:
                    row.append("o")
            lines.append("  " + "  ".join(row))
        return "\n".join(lines)


def parse_heights(values: Sequence[int]) -> BoardState:
    """Validating constructor for heights coming from outside the solver."""
    if len(values) != COLS:
        raise InvalidBoardEncoding(f"expected {COLS} columns, got {len(values)}")
    heights: List[int] = []
    for c, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidBoardEncoding(f"column {c + 1}: height must be an integer, got {v!r}")
        if not -1 <= v <= ROWS - 1:
            raise InvalidBoardEncoding(f"column {c + 1}: height {v} outside [-1, {ROWS - 1}]")
        heights.append(v)
    for c in range(1, COLS):
        if heights[c] > heights[c - 1]:
            raise InvalidBoardEncoding(
                f"heights must be non-increasing: column {c + 1} ({heights[c]}) "
                f"> column {c} ({heights[c - 1]})"
            )
    return BoardState(tuple(heights))


def parse_state(text: str) -> BoardState:
    """Parses comma-separated heights such as '0,0,-1,-1,-1,-1,-1,-1'."""
    tokens = [t.strip() for t in (text or "").split(',')]
    values: List[int] = []
    for tok in tokens:
        try:
            values.append(int(tok))
        except ValueError:
            raise InvalidBoardEncoding(f"invalid height {tok!r}") from None
    return parse_heights(values)
