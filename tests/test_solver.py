import unittest

from game import (
    BoardState,
    Evaluation,
    Move,
    Solver,
    ai_pick_move,
    apply_move,
    enumerate_states,
    legal_moves,
)


class TestSolver(unittest.TestCase):
    def test_given_fresh_board_when_evaluating_then_unique_winning_opening(self):
        solver = Solver()
        ev = solver.evaluate(BoardState.initial())
        self.assertTrue(ev.winning)
        self.assertEqual(ev.winning_moves, (Move(0, 1),))
        self.assertEqual(ev.recommended.to_one_indexed(), (1, 2))

    def test_given_opening_reply_when_evaluating_then_second_move_book_matches(self):
        solver = Solver()
        start = apply_move(BoardState.initial(), Move(0, 1))
        book = [
            (Move(1, 0), {Move(0, 4)}),
            (Move(0, 2), {Move(3, 1)}),
            (Move(2, 0), {Move(1, 2), Move(0, 3)}),
            (Move(3, 0), {Move(2, 7)}),
            (Move(4, 0), {Move(3, 5)}),
        ]
        for reply, expected in book:
            ev = solver.evaluate(apply_move(start, reply))
            self.assertTrue(ev.winning, reply)
            self.assertEqual(set(ev.winning_moves), expected, reply)

    def test_given_reply_2_1_when_evaluating_then_only_1_5_wins(self):
        state = apply_move(apply_move(BoardState.initial(), Move(0, 1)), Move(1, 0))
        self.assertEqual(state.heights, (1, 0, -1, -1, -1, -1, -1, -1))
        ev = Solver().evaluate(state)
        self.assertEqual([mv.to_one_indexed() for mv in ev.winning_moves], [(1, 5)])

    def test_given_terminal_state_when_evaluating_then_losing_without_moves(self):
        ev = Solver().evaluate(BoardState.from_heights([4, 4, 4, 4, 4, 4, 4, 3]))
        self.assertEqual(ev, Evaluation(winning=False, winning_moves=()))
        self.assertIsNone(ev.recommended)

    def test_given_one_move_from_end_when_evaluating_then_winning(self):
        ev = Solver().evaluate(BoardState.from_heights([4, 4, 4, 4, 4, 4, 4, 2]))
        self.assertTrue(ev.winning)
        self.assertEqual(ev.winning_moves, (Move(3, 7),))

    def test_given_repeated_calls_when_evaluating_then_cached_object_returned(self):
        solver = Solver()
        s = BoardState.from_heights([2, 1, 0, -1, -1, -1, -1, -1])
        first = solver.evaluate(s)
        size = solver.cache_size()
        self.assertIs(solver.evaluate(s), first)
        self.assertIs(solver.evaluate(BoardState.from_heights([2, 1, 0, -1, -1, -1, -1, -1])), first)
        self.assertEqual(solver.cache_size(), size)

    def test_given_two_solvers_when_evaluating_then_caches_independent(self):
        a = Solver()
        b = Solver()
        a.evaluate(BoardState.initial())
        self.assertEqual(a.cache_size(), 1286)
        self.assertEqual(b.cache_size(), 0)

    def test_given_all_reachable_states_when_evaluating_then_backward_induction_holds(self):
        solver = Solver()
        for s in enumerate_states():
            ev = solver.evaluate(s)
            moves = legal_moves(s)
            losing_children = [mv for mv in moves if not solver.evaluate(apply_move(s, mv)).winning]
            self.assertEqual(ev.winning, bool(losing_children))
            # Winning moves keep legality order.
            self.assertEqual(list(ev.winning_moves), losing_children)
            if not moves:
                self.assertEqual(ev.winning_moves, ())

    def test_given_winning_and_losing_states_when_ai_picks_then_winning_or_first_legal(self):
        solver = Solver()
        self.assertEqual(ai_pick_move(BoardState.initial(), solver), Move(0, 1))
        losing = apply_move(BoardState.initial(), Move(0, 1))
        self.assertFalse(solver.evaluate(losing).winning)
        self.assertEqual(ai_pick_move(losing, solver), legal_moves(losing)[0])
        self.assertIsNone(ai_pick_move(BoardState.from_heights([4, 4, 4, 4, 4, 4, 4, 3]), solver))


if __name__ == '__main__':
    unittest.main(verbosity=2)
