from datetime import timedelta
from io import StringIO
from unittest import mock

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from hanoi.models import Score
from hanoi.puzzles import InvalidLevel
from hanoi.ranking import (
    ScoreValidationError,
    StorageUnavailable,
    leaderboard,
    player_summary,
    resolve_limit,
    stats,
    submit_score,
)
from hanoi.seed_utils import ensure_demo_scores, play_canonical_game


def _record(name, score, created_at, level=1, moves=7, seconds=10, optimal=True):
    record = Score.objects.create(
        player_name=name, level=level, moves=moves, time_in_seconds=seconds, score=score, is_optimal=optimal
    )
    Score.objects.filter(pk=record.pk).update(created_at=created_at)
    return record


class SubmitScoreTests(TestCase):
    def test_server_recomputes_score_and_optimal_flag(self):
        record = submit_score("  Ada  ", 1, 7, 10)
        self.assertEqual(record.player_name, "Ada")
        self.assertEqual(record.score, 1400)
        self.assertTrue(record.is_optimal)
        self.assertIsNotNone(record.created_at)

    def test_non_optimal_submission(self):
        record = submit_score("Bob", 3, 40, 60)
        self.assertEqual(record.score, 720)
        self.assertFalse(record.is_optimal)

    def test_rejections_write_nothing(self):
        cases = [
            ("", 1, 7, 10),
            ("   ", 1, 7, 10),
            (None, 1, 7, 10),
            ("x" * 51, 1, 7, 10),
            ("Ada", 0, 7, 10),
            ("Ada", 4, 7, 10),
            ("Ada", 1, -1, 10),
            ("Ada", 1, 7, -1),
            ("Ada", 1, 7.5, 10),
        ]
        for args in cases:
            with self.subTest(args=args):
                with self.assertRaises(ScoreValidationError):
                    submit_score(*args)
        self.assertEqual(Score.objects.count(), 0)

    def test_name_of_exactly_fifty_chars_is_accepted(self):
        self.assertEqual(submit_score("x" * 50, 1, 7, 10).player_name, "x" * 50)

    def test_storage_failure_is_reported_as_unavailable(self):
        with mock.patch.object(Score.objects, "create", side_effect=DatabaseError("down")):
            with self.assertRaises(StorageUnavailable):
                submit_score("Ada", 1, 7, 10)

    def test_level_error_does_not_chain_the_lookup_failure(self):
        with self.assertRaises(ScoreValidationError) as ctx:
            submit_score("Ada", 9, 7, 10)
        self.assertIsNone(ctx.exception.__cause__)
        self.assertTrue(ctx.exception.__suppress_context__)

    def test_read_failures_are_reported_as_unavailable(self):
        with mock.patch("django.db.models.query.QuerySet._fetch_all", side_effect=DatabaseError("down")):
            with self.assertRaises(StorageUnavailable):
                leaderboard()
            with self.assertRaises(StorageUnavailable):
                leaderboard(level=2)
            with self.assertRaises(StorageUnavailable):
                player_summary("Ada")
        with mock.patch.object(Score.objects, "count", side_effect=DatabaseError("down")):
            with self.assertRaises(StorageUnavailable):
                stats()

    def test_records_are_immutable(self):
        record = submit_score("Ada", 1, 7, 10)
        record.score = 99999
        with self.assertRaises(ValidationError):
            record.save()
        self.assertEqual(Score.objects.get(pk=record.pk).score, 1400)


class LeaderboardTests(TestCase):
    def test_ties_are_won_by_earlier_submission(self):
        now = timezone.now()
        t1, t2, t3, t4 = (now + timedelta(seconds=i) for i in range(4))
        _record("p1", 500, t1)
        # Inserted first, so only created_at can put p2 ahead of it
        _record("p3", 900, t3)
        _record("p2", 900, t2)
        _record("p4", 300, t4)

        names = [r.player_name for r in leaderboard()]
        self.assertEqual(names, ["p2", "p3", "p1", "p4"])

    def test_level_filter_and_limit(self):
        now = timezone.now()
        for i in range(12):
            _record(f"easy{i}", 1000 + i, now, level=1)
        _record("medium", 5000, now, level=2)

        easy = leaderboard(level=1)
        self.assertEqual(len(easy), 10)
        self.assertTrue(all(r.level == 1 for r in easy))
        self.assertEqual(easy[0].score, 1011)

        self.assertEqual(len(leaderboard(level=1, limit=3)), 3)
        self.assertEqual(leaderboard()[0].player_name, "medium")
        self.assertEqual(len(leaderboard()), 13)

    def test_invalid_level(self):
        with self.assertRaises(InvalidLevel):
            leaderboard(level=5)

    def test_resolve_limit(self):
        self.assertEqual(resolve_limit(None, 1), 10)
        self.assertEqual(resolve_limit(None, None), 30)
        self.assertEqual(resolve_limit(0, None), 30)
        self.assertEqual(resolve_limit(5, 2), 5)
        self.assertEqual(resolve_limit(10_000, None), 100)


class PlayerAndStatsTests(TestCase):
    def setUp(self):
        submit_score("Ada", 1, 7, 10)    # 1400
        submit_score("Ada", 1, 9, 5)     # 1000 - 50 - 40 = 910
        submit_score("Ada", 2, 15, 20)   # 1000 - 200 + 200 + 500 = 1500
        submit_score("Bob", 1, 7, 30)    # 1200

    def test_player_summary(self):
        summary = player_summary("Ada")
        self.assertEqual(summary["playerName"], "Ada")
        self.assertEqual(summary["totalGames"], 3)
        self.assertEqual([(r.level, r.score) for r in summary["bestScores"]], [(1, 1400), (2, 1500)])

    def test_unknown_player(self):
        summary = player_summary("Nobody")
        self.assertEqual(summary["totalGames"], 0)
        self.assertEqual(summary["bestScores"], [])

    def test_stats(self):
        payload = stats()
        self.assertEqual(payload["totalGames"], 4)
        self.assertEqual(payload["uniquePlayers"], 2)
        by_level = {row["level"]: row for row in payload["levelStats"]}
        self.assertEqual(sorted(by_level), [1, 2])
        self.assertEqual(by_level[1]["totalGames"], 3)
        self.assertAlmostEqual(by_level[1]["avgMoves"], 23 / 3)
        self.assertAlmostEqual(by_level[1]["avgTime"], 15.0)
        self.assertEqual(by_level[1]["bestScore"], 1400)
        self.assertEqual(by_level[1]["optimalSolutions"], 2)
        self.assertEqual(by_level[2]["optimalSolutions"], 1)


class SeedTests(TestCase):
    def test_canonical_game_is_optimal(self):
        self.assertEqual(play_canonical_game(3, 90), (31, 90))

    def test_seed_only_when_empty(self):
        inserted = ensure_demo_scores()
        self.assertGreater(inserted, 0)
        self.assertEqual(Score.objects.count(), inserted)
        self.assertTrue(all(Score.objects.values_list("is_optimal", flat=True)))
        self.assertEqual(ensure_demo_scores(), 0)

    def test_explicit_empty_list_seeds_nothing(self):
        self.assertEqual(ensure_demo_scores([]), 0)
        self.assertEqual(Score.objects.count(), 0)

    def test_seed_command_is_idempotent(self):
        out = StringIO()
        call_command("seed_scores", stdout=out)
        self.assertIn("Seeded", out.getvalue())
        out = StringIO()
        call_command("seed_scores", stdout=out)
        self.assertIn("already present", out.getvalue())
