"""
Chomping Glass core Python package.

Exact solver for Chomp on a fixed 5x8 board with the poison square in the
bottom-right corner.
Modules:
- board.py: BoardState, Move, board constants and validating parsers
- moves.py: legal_moves, apply_move, play_move
- solver.py: Solver, Evaluation
- states.py: enumerate_states
- policy.py: policy table build/export/load
- db.py: SQLite storage of solved states
- codec.py: row-bitmask <-> heights translation
"""
