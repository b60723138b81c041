from __future__ import annotations

from collections import deque
from typing import Deque, Set

from .board import BoardState
from .moves import apply_move, legal_moves


def enumerate_states() -> Set[BoardState]:
    """Every board reachable from the fresh board, found breadth-first."""
    start = BoardState.initial()
    seen: Set[BoardState] = {start}
    queue: Deque[BoardState] = deque([start])
    while queue:
        state = queue.popleft()
        for mv in legal_moves(state):
            nxt = apply_move(state, mv)
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen
