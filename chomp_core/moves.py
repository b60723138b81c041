from __future__ import annotations

from typing import List

from .board import COLS, POISON, ROWS, BoardState, Move


class IllegalMove(ValueError):
    """Raised when a move is not legal for the given state."""


def legal_moves(state: BoardState) -> List[Move]:
    """All legal moves, column by column, rows ascending. The poison square is never included."""
    moves: List[Move] = []
    for c in range(COLS):
        for r in range(state.heights[c] + 1, ROWS):
            mv = Move(r, c)
            if mv == POISON:
                continue
            moves.append(mv)
    return moves


def apply_move(state: BoardState, move: Move) -> BoardState:
    """Eats the chosen cell and every cell above and to the left of it.

    The move must be legal for the state; no checks are done here.
    """
    heights = list(state.heights)
    for c in range(move.col + 1):
        if move.row > heights[c]:
            heights[c] = move.row
    return BoardState(tuple(heights))


def is_terminal(state: BoardState) -> bool:
    return not legal_moves(state)


def is_legal(state: BoardState, move: Move) -> bool:
    if not (0 <= move.row < ROWS and 0 <= move.col < COLS):
        return False
    return move != POISON and move.row > state.heights[move.col]


def play_move(state: BoardState, move: Move) -> BoardState:
    """Checked variant of apply_move for moves coming from players."""
    if not is_legal(state, move):
        r, c = move.to_one_indexed()
        raise IllegalMove(f"illegal move ({r},{c})")
    return apply_move(state, move)
