import unittest

from game import (
    COLS,
    ROWS,
    POISON,
    BoardState,
    Evaluation,
    InvalidBoardEncoding,
    Move,
    Solver,
    legal_moves,
    parse_heights,
    parse_state,
)


class TestBoardUnit(unittest.TestCase):
    def test_given_fresh_board_when_constructed_then_all_columns_untouched(self):
        s = BoardState.initial()
        self.assertEqual(s.heights, tuple([-1] * COLS))
        self.assertEqual(len(s.heights), 8)
        self.assertFalse(s.is_eaten(0, 0))

    def test_given_equal_heights_when_comparing_states_then_equal_and_same_hash(self):
        a = BoardState.from_heights([1, 0, -1, -1, -1, -1, -1, -1])
        b = BoardState((1, 0, -1, -1, -1, -1, -1, -1))
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)
        self.assertNotEqual(a, BoardState.initial())

    def test_given_state_when_key_then_canonical_list_text(self):
        s = BoardState.from_heights([0, 0, -1, -1, -1, -1, -1, -1])
        self.assertEqual(s.key(), "[0, 0, -1, -1, -1, -1, -1, -1]")

    def test_given_state_when_pretty_then_poison_eaten_and_uneaten_symbols(self):
        s = BoardState.from_heights([1, 0, -1, -1, -1, -1, -1, -1])
        lines = s.pretty().splitlines()
        self.assertEqual(len(lines), ROWS)
        self.assertEqual(lines[0].split(), ['.', '.', 'o', 'o', 'o', 'o', 'o', 'o'])
        self.assertEqual(lines[1].split(), ['.', 'o', 'o', 'o', 'o', 'o', 'o', 'o'])
        self.assertEqual(lines[-1].split()[-1], 'X')

    def test_given_moves_when_converting_indices_then_shift_by_one(self):
        self.assertEqual(POISON, Move(4, 7))
        self.assertEqual(Move(0, 1).to_one_indexed(), (1, 2))
        self.assertEqual(Move(0, 1).to_tuple(), (0, 1))
        self.assertEqual(Move.from_one_indexed(1, 1), Move(0, 0))
        self.assertEqual(Move.from_one_indexed(5, 8).to_one_indexed(), (5, 8))

    def test_given_out_of_range_one_indexed_when_converting_then_raises(self):
        for r, c, msg in [(0, 1, "row must be"), (9, 1, "row must be"), (1, 0, "column must be"), (1, 9, "column must be")]:
            with self.assertRaises(ValueError) as ctx:
                Move.from_one_indexed(r, c)
            self.assertIn(msg, str(ctx.exception))

    def test_given_valid_text_when_parse_state_then_heights_match(self):
        s = parse_state("0,0,-1,-1,-1,-1,-1,-1")
        self.assertEqual(s.heights[0], 0)
        self.assertEqual(s.heights[1], 0)
        self.assertEqual(s.heights[2], -1)
        self.assertEqual(parse_state(" 1, 0 ,-1,-1,-1,-1,-1,-1"), BoardState.from_heights([1, 0] + [-1] * 6))

    def test_given_wrong_column_count_when_parse_state_then_invalid_encoding(self):
        with self.assertRaises(InvalidBoardEncoding) as ctx:
            parse_state("0,0,-1")
        self.assertIn("expected 8 columns, got 3", str(ctx.exception))

    def test_given_non_integer_token_when_parse_state_then_invalid_encoding(self):
        with self.assertRaises(InvalidBoardEncoding):
            parse_state("0,0,-1,-1,-1,-1,-1,x")
        with self.assertRaises(InvalidBoardEncoding):
            parse_state("")

    def test_given_malformed_heights_when_parse_heights_then_invalid_encoding(self):
        bad = [
            [-1, 0, -1, -1, -1, -1, -1, -1],  # increases left to right
            [5, -1, -1, -1, -1, -1, -1, -1],  # above the board
            [-2, -2, -2, -2, -2, -2, -2, -2],  # below -1
            [0.0, -1, -1, -1, -1, -1, -1, -1],
            [True, -1, -1, -1, -1, -1, -1, -1],
        ]
        for heights in bad:
            with self.assertRaises(InvalidBoardEncoding, msg=str(heights)):
                parse_heights(heights)

    def test_given_invalid_encoding_when_caught_as_value_error_then_matches(self):
        with self.assertRaises(ValueError):
            parse_heights([0])

    def test_given_last_reachable_board_when_parse_heights_then_accepted(self):
        s = parse_heights([4, 4, 4, 4, 4, 4, 4, 3])
        self.assertEqual(s.heights[-1], 3)

    def test_given_poison_eaten_board_when_parse_heights_then_accepted_as_lost(self):
        s = parse_heights([4] * COLS)
        self.assertEqual(s.heights, tuple([4] * COLS))
        self.assertEqual(legal_moves(s), [])
        self.assertEqual(Solver().evaluate(s), Evaluation(False, ()))


if __name__ == '__main__':
    unittest.main(verbosity=2)
