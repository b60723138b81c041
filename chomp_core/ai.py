from __future__ import annotations

from typing import Optional

from .board import BoardState, Move
from .moves import legal_moves
from .solver import Solver


def ai_pick_move(state: BoardState, solver: Solver) -> Optional[Move]:
    """Picks the first winning move; from a losing state, the first legal move. None when no move is left."""
    res = solver.evaluate(state)
    if res.recommended is not None:
        return res.recommended
    moves = legal_moves(state)
    return moves[0] if moves else None
