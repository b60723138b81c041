from __future__ import annotations

import os
import threading
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

try:
    from .game import (  # type: ignore
        BoardState,
        Evaluation,
        IllegalMove,
        InvalidBoardEncoding,
        Move,
        Solver,
        enumerate_states,
        legal_moves,
        load_policy_json,
        parse_heights,
        play_move,
        policy_stats,
    )
except ImportError:
    from game import (  # type: ignore
        BoardState,
        Evaluation,
        IllegalMove,
        InvalidBoardEncoding,
        Move,
        Solver,
        enumerate_states,
        legal_moves,
        load_policy_json,
        parse_heights,
        play_move,
        policy_stats,
    )

app = Flask(__name__)

# One solver for the process; its cache is not safe for concurrent evaluate() calls.
_solver = Solver()
_solver_lock = threading.Lock()
_policy: Optional[Dict[BoardState, Evaluation]] = None


def _policy_table() -> Optional[Dict[BoardState, Evaluation]]:
    """Loads the exported table named by CHOMP_POLICY_JSON once, if set."""
    global _policy
    path = os.getenv("CHOMP_POLICY_JSON")
    if not path:
        return None
    if _policy is None:
        _policy = load_policy_json(path)
    return _policy


def evaluate(state: BoardState) -> Evaluation:
    table = _policy_table()
    if table is not None and state in table:
        return table[state]
    with _solver_lock:
        return _solver.evaluate(state)


def pick_move(state: BoardState) -> Optional[Move]:
    """First winning move, otherwise the first legal move; None when none remain."""
    best = evaluate(state).recommended
    if best is not None:
        return best
    moves = legal_moves(state)
    return moves[0] if moves else None


# ---------- JSON helpers ----------

def move_to_json(mv: Move) -> Dict[str, Any]:
    r1, c1 = mv.to_one_indexed()
    return {"row": mv.row, "col": mv.col, "display": [r1, c1]}


def moves_to_json(moves: List[Move]) -> List[Dict[str, Any]]:
    return [move_to_json(mv) for mv in moves]


def state_to_json(s: BoardState) -> Dict[str, Any]:
    return {"heights": list(s.heights), "key": s.key()}


def json_to_state(obj: Any) -> BoardState:
    if not isinstance(obj, dict) or not isinstance(obj.get("heights"), list):
        raise InvalidBoardEncoding("state.heights must be a list")
    return parse_heights(obj["heights"])


def _json_int(v: Any, name: str) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{name} must be an integer, got {v!r}")
    return v


def json_to_move(obj: Any) -> Move:
    if isinstance(obj, dict):
        if "row" not in obj or "col" not in obj:
            raise ValueError("move needs row and col")
        return Move(_json_int(obj["row"], "row"), _json_int(obj["col"], "col"))
    if not isinstance(obj, list) or len(obj) != 2:
        raise ValueError("move must be [row, col] or {row, col}")
    return Move(_json_int(obj[0], "row"), _json_int(obj[1], "col"))


def _json_body() -> Optional[Dict[str, Any]]:
    """Request body as a dict; an empty or unparseable body reads as {}, any other JSON value as None."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def evaluation_to_json(ev: Evaluation) -> Dict[str, Any]:
    best = ev.recommended
    return {
        "winning": ev.winning,
        "winningMoves": moves_to_json(list(ev.winning_moves)),
        "recommended": move_to_json(best) if best is not None else None,
    }


def _bad_request(msg: str, **extra: Any) -> Any:
    body: Dict[str, Any] = {"ok": False, "error": msg}
    body.update(extra)
    return jsonify(body), 400


@app.errorhandler(InvalidBoardEncoding)
def _invalid_board(e: InvalidBoardEncoding) -> Any:
    return _bad_request(f"bad state: {e}")


# ---------- Core Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    state = BoardState.initial()
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "legalMoves": moves_to_json(legal_moves(state)),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    state = json_to_state(body.get("state"))
    return jsonify({"ok": True, "legalMoves": moves_to_json(legal_moves(state))})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    state = json_to_state(body.get("state"))
    try:
        move = json_to_move(body["move"])
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad move: {e}")
    try:
        next_state = play_move(state, move)
    except IllegalMove:
        return _bad_request("Illegal move", legalMoves=moves_to_json(legal_moves(state)))
    next_legal = legal_moves(next_state)
    return jsonify({
        "ok": True,
        "state": state_to_json(next_state),
        "legalMoves": moves_to_json(next_legal),
        "gameOver": not next_legal,
    })


@app.post("/api/solve")
def api_solve() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    state = json_to_state(body.get("state"))
    out: Dict[str, Any] = {"ok": True}
    out.update(evaluation_to_json(evaluate(state)))
    return jsonify(out)


@app.post("/api/ai")
def api_ai() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    state = json_to_state(body.get("state"))
    move = pick_move(state)
    if move is None:
        # The side to move must eat the poison.
        return jsonify({
            "ok": True,
            "move": None,
            "state": state_to_json(state),
            "legalMoves": [],
            "winner": "human",
        })
    next_state = play_move(state, move)
    next_legal = legal_moves(next_state)
    return jsonify({
        "ok": True,
        "move": move_to_json(move),
        "state": state_to_json(next_state),
        "legalMoves": moves_to_json(next_legal),
        "winner": "ai" if not next_legal else None,
    })


@app.get("/api/policy/stats")
def api_policy_stats() -> Any:
    table = _policy_table()
    if table is None:
        with _solver_lock:
            table = {s: _solver.evaluate(s) for s in enumerate_states()}
    stats = policy_stats(table)
    return jsonify({"ok": True, **stats})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
