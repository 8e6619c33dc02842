from django.test import SimpleTestCase

from hanoi.puzzles import InvalidLevel, calculate_score, get_level, is_optimal_run, min_moves, score_breakdown


class ScoringTests(SimpleTestCase):
    def test_easy_optimal_example(self):
        self.assertEqual(calculate_score(7, 10, 1, True), 1400)

    def test_hard_non_optimal_example(self):
        breakdown = score_breakdown(40, 60, 3, False)
        self.assertEqual(breakdown["time_penalty"], 600)
        self.assertEqual(breakdown["moves_penalty"], 180)
        self.assertEqual(breakdown["level_bonus"], 500)
        self.assertEqual(breakdown["optimal_bonus"], 0)
        self.assertEqual(breakdown["score"], 720)

    def test_min_moves(self):
        self.assertEqual([min_moves(level) for level in (1, 2, 3)], [7, 15, 31])
        self.assertEqual(get_level(2).min_moves, 15)
        self.assertTrue(is_optimal_run(2, 15))
        self.assertFalse(is_optimal_run(2, 16))

    def test_optimal_instant_run_is_the_maximum(self):
        for level in (1, 2, 3):
            best = calculate_score(min_moves(level), 0, level, True)
            for moves in range(0, min_moves(level) + 20):
                for seconds in (0, 1, 5, 30):
                    for optimal in (True, False):
                        self.assertLessEqual(calculate_score(moves, seconds, level, optimal), best)

    def test_maximum_values(self):
        self.assertEqual(calculate_score(7, 0, 1, True), 1500)
        self.assertEqual(calculate_score(15, 0, 2, True), 1700)
        self.assertEqual(calculate_score(31, 0, 3, True), 2000)

    def test_monotonic_in_time(self):
        for level in (1, 2, 3):
            previous = None
            for seconds in range(0, 300, 7):
                current = calculate_score(min_moves(level) + 3, seconds, level, False)
                if previous is not None:
                    self.assertLessEqual(current, previous)
                previous = current

    def test_monotonic_in_extra_moves(self):
        for level in (1, 2, 3):
            previous = None
            for moves in range(min_moves(level), min_moves(level) + 120):
                current = calculate_score(moves, 20, level, False)
                if previous is not None:
                    self.assertLessEqual(current, previous)
                self.assertGreaterEqual(current, 0)
                previous = current

    def test_fractional_time_is_floored(self):
        self.assertEqual(calculate_score(7, 10.99, 1, True), 1400)

    def test_clamps_to_zero(self):
        self.assertEqual(calculate_score(500, 10_000, 1, False), 0)

    def test_fewer_moves_than_minimum_has_no_penalty(self):
        self.assertEqual(score_breakdown(3, 0, 1, False)["moves_penalty"], 0)

    def test_invalid_level(self):
        for level in (0, 4, None):
            with self.assertRaises(InvalidLevel):
                calculate_score(7, 10, level, True)

    def test_negative_inputs(self):
        with self.assertRaises(ValueError):
            calculate_score(-1, 10, 1, False)
        with self.assertRaises(ValueError):
            calculate_score(7, -1, 1, False)
