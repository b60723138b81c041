"""Policy table: every reachable board paired with its evaluation.

The exported JSON maps the canonical key of each board ("[h0, h1, ..., h7]")
to {"winning": bool, "winning_moves": [{"row": r, "col": c}, ...]} with
zero-indexed moves. Keys are sorted, so two exports are byte-identical.
"""
from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from .board import BoardState, InvalidBoardEncoding, Move, parse_heights
from .solver import Evaluation, Solver
from .states import enumerate_states


def _debug() -> bool:
    return os.getenv('CHOMP_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def build_policy_table(solver: Optional[Solver] = None) -> Dict[str, Evaluation]:
    """Evaluates every reachable state with one solver, keyed and ordered by canonical key."""
    solver = solver or Solver()
    states = enumerate_states()
    if _debug():
        print(f"[policy] enumerated {len(states)} states")
    table = {state.key(): solver.evaluate(state) for state in states}
    return {k: table[k] for k in sorted(table)}


def evaluation_to_json(ev: Evaluation) -> Dict[str, Any]:
    return {
        "winning": ev.winning,
        "winning_moves": [{"row": mv.row, "col": mv.col} for mv in ev.winning_moves],
    }


def evaluation_from_json(obj: Dict[str, Any]) -> Evaluation:
    try:
        winning = obj["winning"]
        moves = tuple(Move(int(m["row"]), int(m["col"])) for m in obj["winning_moves"])
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed policy entry: {e}") from None
    if not isinstance(winning, bool) or winning != bool(moves):
        raise ValueError("malformed policy entry: winning flag disagrees with winning_moves")
    return Evaluation(winning=winning, winning_moves=moves)


def export_policy_json(path: str, table: Optional[Dict[str, Evaluation]] = None) -> int:
    """Writes the policy table to path and returns the number of entries.

    I/O errors propagate to the caller unchanged.
    """
    table = table if table is not None else build_policy_table()
    payload = {key: evaluation_to_json(ev) for key, ev in table.items()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
        f.write("\n")
    if _debug():
        print(f"[policy] wrote {len(payload)} entries to {path}")
    return len(payload)


def load_policy_json(path: str) -> Dict[BoardState, Evaluation]:
    """Reads an exported table back into a BoardState -> Evaluation lookup."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("policy file must contain a JSON object")
    out: Dict[BoardState, Evaluation] = {}
    for key, entry in data.items():
        try:
            heights = json.loads(key)
        except json.JSONDecodeError:
            raise InvalidBoardEncoding(f"invalid policy key {key!r}") from None
        if not isinstance(heights, list):
            raise InvalidBoardEncoding(f"invalid policy key {key!r}")
        out[parse_heights(heights)] = evaluation_from_json(entry)
    return out


def policy_stats(table: Dict[Any, Evaluation]) -> Dict[str, int]:
    winning = sum(1 for ev in table.values() if ev.winning)
    return {"total": len(table), "winning": winning, "losing": len(table) - winning}
