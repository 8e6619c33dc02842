import random
from collections import Counter

from django.test import SimpleTestCase

from hanoi.puzzles import (
    InvalidLevel,
    Selection,
    apply_move,
    check_win_condition,
    click_tower,
    elapsed_seconds,
    format_time,
    initialize,
    is_valid_move,
    lock,
    score_game,
    solve,
    unlock,
)
from hanoi.puzzles.engines import GameState


def _state(towers, disk_count=3, level=1):
    return GameState(level=level, disk_count=disk_count, towers=towers, start_time=0.0)


def _assert_invariants(test, state):
    disks = Counter(d for tower in state.towers for d in tower)
    test.assertEqual(disks, Counter(range(1, state.disk_count + 1)))
    for tower in state.towers:
        test.assertEqual(list(tower), sorted(tower, reverse=True))
        test.assertEqual(len(set(tower)), len(tower))


class InitializeTests(SimpleTestCase):
    def test_levels_place_all_disks_on_first_tower(self):
        for level, disks in ((1, 3), (2, 4), (3, 5)):
            state = initialize(level, now=100.0)
            self.assertEqual(state.disk_count, disks)
            self.assertEqual(state.towers, (tuple(range(disks, 0, -1)), (), ()))
            self.assertEqual(state.move_count, 0)
            self.assertEqual(state.start_time, 100.0)
            self.assertIsNone(state.end_time)
            self.assertFalse(state.is_complete)
            self.assertIsNone(state.selected_tower_index)
            self.assertIsNone(state.error)

    def test_invalid_level_raises(self):
        for level in (0, 4, -1, "1", None, True):
            with self.assertRaises(InvalidLevel):
                initialize(level)


class MoveValidationTests(SimpleTestCase):
    def test_rejects_same_tower(self):
        self.assertFalse(is_valid_move(initialize(1), 0, 0))

    def test_rejects_empty_source(self):
        self.assertFalse(is_valid_move(initialize(1), 1, 2))

    def test_rejects_larger_on_smaller(self):
        state = _state(((3, 2), (1,), ()))
        self.assertFalse(is_valid_move(state, 0, 1))

    def test_accepts_empty_destination_and_larger_top(self):
        state = _state(((3, 1), (2,), ()))
        self.assertTrue(is_valid_move(state, 0, 2))
        self.assertTrue(is_valid_move(state, 0, 1))

    def test_rejects_out_of_range_towers(self):
        state = initialize(1)
        self.assertFalse(is_valid_move(state, 0, 3))
        self.assertFalse(is_valid_move(state, -1, 2))


class ApplyMoveTests(SimpleTestCase):
    def test_valid_move_updates_towers_and_count(self):
        state = apply_move(initialize(1, now=0.0), 0, 2, now=1.0)
        self.assertEqual(state.towers, ((3, 2), (), (1,)))
        self.assertEqual(state.move_count, 1)
        self.assertIsNone(state.error)
        self.assertFalse(state.is_complete)
        self.assertIsNone(state.end_time)

    def test_invalid_move_leaves_state_untouched(self):
        start = apply_move(initialize(1), 0, 1)
        result = apply_move(start, 0, 1)
        self.assertEqual(result.error, "Invalid move!")
        self.assertEqual(result.towers, start.towers)
        self.assertEqual(result.move_count, start.move_count)

    def test_original_state_is_not_mutated(self):
        state = initialize(2)
        apply_move(state, 0, 1)
        self.assertEqual(state.towers[0], (4, 3, 2, 1))
        self.assertEqual(state.move_count, 0)

    def test_winning_move_locks_end_time(self):
        state = initialize(1, now=0.0)
        for move in solve(3):
            state = apply_move(state, move.from_tower, move.to_tower, now=42.5)
        self.assertTrue(state.is_complete)
        self.assertEqual(state.end_time, 42.5)
        self.assertEqual(elapsed_seconds(state, now=1000.0), 42)

        after = apply_move(state, 2, 0, now=99.0)
        self.assertEqual(after.towers, state.towers)
        self.assertEqual(after.end_time, 42.5)
        self.assertEqual(after.error, "Invalid move!")

    def test_random_play_preserves_invariants(self):
        rng = random.Random(1234)
        for level in (1, 2, 3):
            state = initialize(level)
            moves = 0
            for _ in range(500):
                before = state
                state = apply_move(state, rng.randrange(3), rng.randrange(3))
                if state.error is None:
                    moves += 1
                else:
                    self.assertEqual(state.towers, before.towers)
                self.assertEqual(state.move_count, moves)
                _assert_invariants(self, state)
                if state.is_complete:
                    break


class WinConditionTests(SimpleTestCase):
    def test_all_disks_on_destination(self):
        self.assertTrue(check_win_condition(((), (), (3, 2, 1)), 3))

    def test_missing_disks(self):
        self.assertFalse(check_win_condition(((1,), (), (3, 2)), 3))

    def test_disks_on_middle_tower_do_not_count(self):
        self.assertFalse(check_win_condition(((), (3, 2, 1), ()), 3))

    def test_unsorted_destination(self):
        self.assertFalse(check_win_condition(((), (), (3, 1, 2)), 3))


class SelectionProtocolTests(SimpleTestCase):
    def test_click_non_empty_tower_selects(self):
        state = click_tower(initialize(1), 0)
        self.assertEqual(state.selection, Selection.selected(0))
        self.assertEqual(state.selected_tower_index, 0)

    def test_click_empty_tower_when_idle_is_noop(self):
        start = initialize(1)
        self.assertEqual(click_tower(start, 1), start)

    def test_click_same_tower_deselects(self):
        state = click_tower(click_tower(initialize(1), 0), 0)
        self.assertIsNone(state.selected_tower_index)
        self.assertEqual(state.move_count, 0)

    def test_click_other_tower_moves_and_returns_to_idle(self):
        state = click_tower(click_tower(initialize(1), 0), 2)
        self.assertEqual(state.towers, ((3, 2), (), (1,)))
        self.assertEqual(state.move_count, 1)
        self.assertIsNone(state.selected_tower_index)

    def test_failed_move_returns_to_idle(self):
        state = apply_move(initialize(1), 0, 1)
        state = click_tower(click_tower(state, 0), 1)
        self.assertEqual(state.error, "Invalid move!")
        self.assertEqual(state.move_count, 1)
        self.assertIsNone(state.selected_tower_index)

    def test_locked_state_ignores_clicks(self):
        locked = lock(click_tower(initialize(1), 0))
        self.assertTrue(locked.is_locked)
        self.assertIsNone(locked.selected_tower_index)
        self.assertEqual(click_tower(locked, 2), locked)
        self.assertEqual(unlock(locked).selection, Selection())

    def test_completed_game_ignores_clicks(self):
        state = initialize(1)
        for move in solve(3):
            state = click_tower(click_tower(state, move.from_tower), move.to_tower)
        self.assertTrue(state.is_complete)
        self.assertEqual(state.move_count, 7)
        self.assertEqual(click_tower(state, 2), state)

    def test_selection_rejects_inconsistent_combinations(self):
        with self.assertRaises(ValueError):
            Selection(kind="selected")
        with self.assertRaises(ValueError):
            Selection(kind="idle", tower=1)
        with self.assertRaises(ValueError):
            Selection(kind="locked", tower=0)

    def test_locked_state_rejects_direct_moves(self):
        locked = lock(initialize(1, now=0.0))
        after = apply_move(locked, 0, 2, now=1.0)
        self.assertTrue(after.is_locked)
        self.assertEqual(after.towers, locked.towers)
        self.assertEqual(after.move_count, 0)
        self.assertIsNone(after.error)

        moved = apply_move(unlock(after), 0, 2, now=1.0)
        self.assertEqual(moved.towers, ((3, 2), (), (1,)))
        self.assertEqual(moved.move_count, 1)


class TimerAndScoreTests(SimpleTestCase):
    def test_elapsed_seconds_while_playing(self):
        state = initialize(1, now=10.0)
        self.assertEqual(elapsed_seconds(state, now=15.9), 5)

    def test_format_time(self):
        self.assertEqual(format_time(0), "00:00")
        self.assertEqual(format_time(75), "01:15")
        self.assertEqual(format_time(600), "10:00")

    def test_score_game_zero_until_complete(self):
        self.assertEqual(score_game(initialize(1)), 0)

    def test_score_game_matches_formula(self):
        state = initialize(1, now=0.0)
        for move in solve(3):
            state = apply_move(state, move.from_tower, move.to_tower, now=10.0)
        self.assertEqual(score_game(state), 1400)
