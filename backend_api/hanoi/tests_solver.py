from django.test import SimpleTestCase

from hanoi.puzzles import (
    InvalidLevel,
    apply_move,
    get_hint,
    hint_for_move_count,
    hint_message,
    initialize,
    solve,
)
from hanoi.puzzles.solver import Move


class SolveTests(SimpleTestCase):
    def test_move_count_is_two_to_the_n_minus_one(self):
        for n in range(1, 11):
            self.assertEqual(len(solve(n)), 2 ** n - 1)

    def test_single_disk(self):
        self.assertEqual(solve(1), (Move(0, 2, 1),))

    def test_three_disk_sequence(self):
        expected = [
            (0, 2, 1), (0, 1, 2), (2, 1, 1), (0, 2, 3),
            (1, 0, 1), (1, 2, 2), (0, 2, 1),
        ]
        self.assertEqual([tuple(m) for m in solve(3)], expected)

    def test_deterministic(self):
        self.assertEqual(solve(5), solve(5))

    def test_custom_towers(self):
        moves = solve(2, source=2, destination=0, auxiliary=1)
        self.assertEqual(moves, (Move(2, 1, 1), Move(2, 0, 2), Move(1, 0, 1)))

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            solve(0)
        with self.assertRaises(ValueError):
            solve(3, source=0, destination=0, auxiliary=1)

    def test_solution_replays_to_a_win_for_every_level(self):
        for level in (1, 2, 3):
            state = initialize(level)
            solution = solve(state.disk_count)
            for index, move in enumerate(solution):
                self.assertFalse(state.is_complete)
                moving_disk = state.towers[move.from_tower][-1]
                self.assertEqual(moving_disk, move.disk)
                state = apply_move(state, move.from_tower, move.to_tower)
                self.assertIsNone(state.error, f"move {index} rejected")
            self.assertTrue(state.is_complete)
            self.assertEqual(state.move_count, 2 ** state.disk_count - 1)


class HintTests(SimpleTestCase):
    def test_first_hint(self):
        hint = get_hint(initialize(1))
        self.assertEqual(hint, Move(0, 2, 1))
        self.assertEqual(hint_message(hint), "Move disk from Tower 1 to Tower 3")

    def test_hint_follows_canonical_sequence_by_move_count(self):
        state = initialize(2)
        solution = solve(4)
        for move in solution[:5]:
            state = apply_move(state, move.from_tower, move.to_tower)
        self.assertEqual(get_hint(state), solution[5])

    def test_hint_indexes_by_move_count_even_after_detours(self):
        state = initialize(1)
        state = apply_move(state, 0, 1)
        state = apply_move(state, 1, 2)
        # Two moves made, so the third canonical move is suggested regardless of layout
        self.assertEqual(get_hint(state), solve(3)[2])
        self.assertEqual(get_hint(state), Move(2, 1, 1))

    def test_no_hint_once_solution_is_exhausted(self):
        self.assertIsNone(hint_for_move_count(1, 7))
        self.assertIsNone(hint_for_move_count(1, 100))
        self.assertIsNotNone(hint_for_move_count(1, 6))

    def test_invalid_input(self):
        with self.assertRaises(InvalidLevel):
            hint_for_move_count(9, 0)
        with self.assertRaises(ValueError):
            hint_for_move_count(1, -1)
