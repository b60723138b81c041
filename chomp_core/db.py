from __future__ import annotations

import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Tuple

from .board import BoardState, Move
from .solver import Evaluation


def _debug() -> bool:
    return os.getenv('CHOMP_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def _writable_path(db_path: str) -> str:
    """Returns db_path once its parent directory exists.

    When that directory cannot be created, the file name is kept and moved
    under CHOMP_DB_DIR, or the system temp directory when that is unset.
    """
    parent = os.path.dirname(db_path)
    try:
        if parent:
            os.makedirs(parent, exist_ok=True)
        return db_path
    except PermissionError:
        fallback = os.getenv('CHOMP_DB_DIR') or tempfile.gettempdir()
    os.makedirs(fallback, exist_ok=True)
    moved = os.path.join(fallback, os.path.basename(db_path) or 'chomp_policy.db')
    if _debug():
        print(f"[db] cannot create {parent}, using {moved}")
    return moved


def _moves_to_str(moves: Iterable[Move]) -> str:
    return ";".join(f"{mv.row},{mv.col}" for mv in moves)


def _moves_from_str(text: str) -> Tuple[Move, ...]:
    if not text:
        return ()
    out = []
    for tok in text.split(';'):
        r_s, c_s = tok.split(',')
        out.append(Move(int(r_s), int(c_s)))
    return tuple(out)


def _ensure_db(conn: sqlite3.Connection) -> None:
    """Ensures the table for solved states exists."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS states (
            key TEXT PRIMARY KEY,
            heights TEXT NOT NULL,
            winning INTEGER NOT NULL,
            winning_moves TEXT NOT NULL,
            solved_at TEXT NOT NULL
        )
        """
    )
    conn.commit()


def _row(state: BoardState, ev: Evaluation, solved_at: str) -> Tuple[str, str, int, str, str]:
    return (
        state.key(),
        ",".join(str(h) for h in state.heights),
        1 if ev.winning else 0,
        _moves_to_str(ev.winning_moves),
        solved_at,
    )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='seconds').replace('+00:00', 'Z')


def db_store_state(db_path: str, state: BoardState, evaluation: Evaluation) -> None:
    """Stores one solved state."""
    resolved = _writable_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        conn.execute(
            "INSERT OR REPLACE INTO states (key, heights, winning, winning_moves, solved_at) VALUES (?, ?, ?, ?, ?)",
            _row(state, evaluation, _now()),
        )
        conn.commit()
    finally:
        conn.close()


def db_lookup_state(db_path: str, state: BoardState) -> Optional[Evaluation]:
    """Looks up a solved state; None when the DB has no entry for it."""
    resolved = _writable_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        cur = conn.execute("SELECT winning, winning_moves FROM states WHERE key = ?", (state.key(),))
        row = cur.fetchone()
        if not row:
            return None
        winning_int, moves_str = row
        return Evaluation(winning=bool(winning_int), winning_moves=_moves_from_str(moves_str))
    finally:
        conn.close()


def export_policy_db(db_path: str, table: Dict[str, Evaluation]) -> str:
    """Writes a whole policy table (as built by policy.build_policy_table) and returns the DB path used."""
    resolved = _writable_path(db_path)
    solved_at = _now()
    rows = []
    for key, ev in table.items():
        heights = [int(t) for t in key.strip('[]').split(',')]
        rows.append(_row(BoardState.from_heights(heights), ev, solved_at))
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        conn.executemany(
            "INSERT OR REPLACE INTO states (key, heights, winning, winning_moves, solved_at) VALUES (?, ?, ?, ?, ?)",
            rows,
        )
        conn.commit()
    finally:
        conn.close()
    if _debug():
        print(f"[db] stored {len(rows)} states in {resolved}")
    return resolved


def db_count_states(db_path: str) -> int:
    resolved = _writable_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        return int(conn.execute("SELECT COUNT(*) FROM states").fetchone()[0])
    finally:
        conn.close()
