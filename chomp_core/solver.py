from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .board import BoardState, Move
from .moves import apply_move, legal_moves


@dataclass(frozen=True)
class Evaluation:
    """Result of solving a state for the player to move."""
    winning: bool
    winning_moves: Tuple[Move, ...]

    @property
    def recommended(self) -> Optional[Move]:
        return self.winning_moves[0] if self.winning_moves else None


_LOSS = Evaluation(winning=False, winning_moves=())


class Solver:
    """Memoized backward induction over the move DAG.

    The cache belongs to this instance only. States passed to evaluate() must be
    reachable boards (see board.parse_heights); they are not validated here.
    """

    def __init__(self) -> None:
        self._cache: Dict[BoardState, Evaluation] = {}

    def cache_size(self) -> int:
        return len(self._cache)

    def evaluate(self, state: BoardState) -> Evaluation:
        cached = self._cache.get(state)
        if cached is not None:
            return cached

        moves = legal_moves(state)
        if not moves:
            # Only the poison is left: the player to move loses.
            self._cache[state] = _LOSS
            return _LOSS

        winning_moves = []
        for mv in moves:
            # Depth is bounded by the number of cells, so plain recursion is fine.
            if not self.evaluate(apply_move(state, mv)).winning:
                winning_moves.append(mv)

        result = Evaluation(winning=bool(winning_moves), winning_moves=tuple(winning_moves))
        self._cache[state] = result
        return result
