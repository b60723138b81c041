from __future__ import annotations

import argparse
import json
from typing import List, Optional, Tuple

from .ai import ai_pick_move
from .board import BoardState, InvalidBoardEncoding, Move, parse_state
from .codec import heights_from_row_masks
from .db import export_policy_db
from .moves import legal_moves, play_move
from .policy import build_policy_table, export_policy_json
from .solver import Solver


def _fmt(mv: Move) -> str:
    r, c = mv.to_one_indexed()
    return f"({r},{c})"


def _resolve_state(args: argparse.Namespace) -> BoardState:
    if args.state and args.masks:
        raise InvalidBoardEncoding("use either --state or --masks, not both")
    if args.state:
        return parse_state(args.state)
    if args.masks:
        try:
            data = bytes.fromhex(args.masks)
        except ValueError:
            raise InvalidBoardEncoding(f"invalid hex row masks {args.masks!r}") from None
        return heights_from_row_masks(data)
    return BoardState.initial()


def _suggest(args: argparse.Namespace) -> int:
    state = _resolve_state(args)
    res = Solver().evaluate(state)
    if args.json:
        best = res.recommended
        print(json.dumps({
            "winning": res.winning,
            "winning_moves": [list(mv.to_one_indexed()) for mv in res.winning_moves],
            "recommended": list(best.to_one_indexed()) if best is not None else None,
        }, indent=2))
        return 0
    print('Current board:')
    print(state.pretty())
    print('Winning position:', 'true' if res.winning else 'false')
    if res.winning:
        print('Winning moves:', ", ".join(_fmt(mv) for mv in res.winning_moves))
        print('Recommended move:', _fmt(res.winning_moves[0]))
    else:
        print('No forced win from this position; play for asymmetry and hope the opponent errs.')
    return 0


def _export(args: argparse.Namespace) -> int:
    table = build_policy_table()
    export_policy_json(args.output, table)
    print(f"Policy written to {args.output}")
    if args.db:
        used = export_policy_db(args.db, table)
        print(f"Policy DB written to {used}")
    return 0


def _parse_move_text(text: str) -> Tuple[int, int]:
    sep = ',' if ',' in text else ' '
    r_s, c_s = [t for t in text.split(sep) if t != '']
    return int(r_s), int(c_s)


def _play(args: argparse.Namespace) -> int:
    state = _resolve_state(args)
    solver = Solver()
    ai_turn = bool(args.ai_first)
    print('Initial board:')
    print(state.pretty())

    def prompt_human_move(s: BoardState) -> Move:
        print('Your legal moves:', ", ".join(_fmt(mv) for mv in legal_moves(s)))
        while True:
            text = input('Enter your move as r,c or r c: ').strip()
            try:
                row, col = _parse_move_text(text)
            except ValueError:
                print('Could not parse. Try again.')
                continue
            try:
                move = Move.from_one_indexed(row, col)
                play_move(s, move)
            except ValueError as e:
                print(f"{e}. Try again.")
                continue
            return move

    while True:
        if not legal_moves(state):
            loser, winner = ('AI', 'You') if ai_turn else ('You', 'AI')
            print(f"{loser} must eat the poison. {winner} won!")
            return 0
        if ai_turn:
            move = ai_pick_move(state, solver)
            if move is None:
                print("AI must eat the poison. You won!")
                return 0
            print(f"AI plays {_fmt(move)}")
        else:
            move = prompt_human_move(state)
        state = play_move(state, move)
        print(state.pretty())
        ai_turn = not ai_turn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='chomp', description='Chomping Glass solver')
    sub = parser.add_subparsers(dest='command', required=True)

    def add_state_args(p: argparse.ArgumentParser) -> None:
        p.add_argument('--state', default=None, help='Column heights, e.g. "0,0,-1,-1,-1,-1,-1,-1"')
        p.add_argument('--masks', default=None, help='Hex row bitmasks, one byte per row (e.g. "c000000000")')

    p_suggest = sub.add_parser('suggest', help='Suggest winning moves for a board state')
    add_state_args(p_suggest)
    p_suggest.add_argument('--json', action='store_true', help='Emit JSON instead of text')
    p_suggest.set_defaults(func=_suggest)

    p_export = sub.add_parser('export-policy', help='Export the policy table to JSON')
    p_export.add_argument('output', help='Output JSON path')
    p_export.add_argument('--db', default=None, help='Also write the table to this SQLite DB')
    p_export.set_defaults(func=_export)

    p_play = sub.add_parser('play', help='Play against the solver')
    add_state_args(p_play)
    p_play.add_argument('--ai-first', action='store_true', help='Let the solver move first')
    p_play.set_defaults(func=_play)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except InvalidBoardEncoding as e:
        print(f"error: {e}")
        return 2
    except OSError as e:
        print(f"error: {e}")
        return 1


if __name__ == '__main__':
    raise SystemExit(main())
