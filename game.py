from __future__ import annotations

# Facade module that re-exports the solver core for the Flask app and tests.
# Single-responsibility modules live under chomp_core/*.

try:
    from .chomp_core.board import (  # type: ignore
        COLS,
        ROWS,
        POISON,
        BoardState,
        InvalidBoardEncoding,
        Move,
        parse_heights,
        parse_state,
    )
    from .chomp_core.moves import (  # type: ignore
        IllegalMove,
        apply_move,
        is_legal,
        is_terminal,
        legal_moves,
        play_move,
    )
    from .chomp_core.solver import Evaluation, Solver  # type: ignore
    from .chomp_core.states import enumerate_states  # type: ignore
    from .chomp_core.ai import ai_pick_move  # type: ignore
    from .chomp_core.codec import heights_from_row_masks, row_masks_from_state  # type: ignore
    from .chomp_core.policy import (  # type: ignore
        build_policy_table,
        export_policy_json,
        load_policy_json,
        policy_stats,
    )
    from .chomp_core.db import (  # type: ignore
        db_count_states,
        db_lookup_state,
        db_store_state,
        export_policy_db,
    )
except ImportError:
    from chomp_core.board import (  # type: ignore
        COLS,
        ROWS,
        POISON,
        BoardState,
        InvalidBoardEncoding,
        Move,
        parse_heights,
        parse_state,
    )
    from chomp_core.moves import (  # type: ignore
        IllegalMove,
        apply_move,
        is_legal,
        is_terminal,
        legal_moves,
        play_move,
    )
    from chomp_core.solver import Evaluation, Solver  # type: ignore
    from chomp_core.states import enumerate_states  # type: ignore
    from chomp_core.ai import ai_pick_move  # type: ignore
    from chomp_core.codec import heights_from_row_masks, row_masks_from_state  # type: ignore
    from chomp_core.policy import (  # type: ignore
        build_policy_table,
        export_policy_json,
        load_policy_json,
        policy_stats,
    )
    from chomp_core.db import (  # type: ignore
        db_count_states,
        db_lookup_state,
        db_store_state,
        export_policy_db,
    )


def main() -> int:
    # CLI driver delegated to chomp_core.cli
    try:
        from .chomp_core.cli import main as _main  # type: ignore
    except ImportError:
        from chomp_core.cli import main as _main  # type: ignore
    return _main()


if __name__ == '__main__':
    raise SystemExit(main())
