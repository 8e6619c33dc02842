from unittest import mock

from django.db import DatabaseError
from django.urls import reverse
from rest_framework.test import APITestCase

from hanoi.models import Score


class ScoreSubmissionTests(APITestCase):
    def test_submit_score_success(self):
        resp = self.client.post(
            reverse('submit-score'),
            {"playerName": "Ada", "level": 1, "moves": 7, "timeInSeconds": 10},
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["playerName"], "Ada")
        self.assertEqual(data["score"], 1400)
        self.assertTrue(data["isOptimal"])
        self.assertIn("createdAt", data)
        self.assertIn("id", data)

    def test_client_score_is_ignored(self):
        resp = self.client.post(
            reverse('submit-score'),
            {"playerName": "Eve", "level": 3, "moves": 40, "timeInSeconds": 60, "score": 99999, "isOptimal": True},
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["score"], 720)
        self.assertFalse(resp.json()["isOptimal"])

    def test_validation_failures(self):
        bad_payloads = [
            {},
            {"level": 1, "moves": 7, "timeInSeconds": 10},
            {"playerName": "", "level": 1, "moves": 7, "timeInSeconds": 10},
            {"playerName": "x" * 51, "level": 1, "moves": 7, "timeInSeconds": 10},
            {"playerName": "Ada", "level": 4, "moves": 7, "timeInSeconds": 10},
            {"playerName": "Ada", "level": 1, "moves": -1, "timeInSeconds": 10},
            {"playerName": "Ada", "level": 1, "moves": 7, "timeInSeconds": -5},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                resp = self.client.post(reverse('submit-score'), payload, format="json")
                self.assertEqual(resp.status_code, 400)
        self.assertEqual(Score.objects.count(), 0)

    def test_storage_failure_returns_500(self):
        with mock.patch.object(Score.objects, "create", side_effect=DatabaseError("down")):
            resp = self.client.post(
                reverse('submit-score'),
                {"playerName": "Ada", "level": 1, "moves": 7, "timeInSeconds": 10},
                format="json",
            )
        self.assertEqual(resp.status_code, 500)
        self.assertIn("error", resp.json())

    def test_read_failures_return_500(self):
        urls = [
            reverse('global-leaderboard'),
            reverse('level-leaderboard', kwargs={"level": 1}),
            reverse('player-scores', kwargs={"player_name": "Ada"}),
        ]
        with mock.patch("django.db.models.query.QuerySet._fetch_all", side_effect=DatabaseError("down")):
            for url in urls:
                with self.subTest(url=url):
                    resp = self.client.get(url)
                    self.assertEqual(resp.status_code, 500)
                    self.assertIn("error", resp.json())
        with mock.patch.object(Score.objects, "count", side_effect=DatabaseError("down")):
            resp = self.client.get(reverse('score-stats'))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["error"], "Failed to fetch statistics")

    def test_estimate_uses_the_same_formula(self):
        resp = self.client.post(
            reverse('estimate-score'), {"level": 3, "moves": 40, "timeInSeconds": 60}, format="json"
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["score"], 720)
        self.assertEqual(data["minMoves"], 31)
        self.assertEqual(data["movesPenalty"], 180)
        self.assertEqual(data["timePenalty"], 600)
        self.assertFalse(data["isOptimal"])
        self.assertEqual(Score.objects.count(), 0)


class LeaderboardApiTests(APITestCase):
    def setUp(self):
        for name, level, moves, seconds in [
            ("Ada", 1, 7, 10),
            ("Bob", 1, 9, 10),
            ("Cy", 2, 15, 30),
            ("Ada", 3, 31, 100),
        ]:
            self.client.post(
                reverse('submit-score'),
                {"playerName": name, "level": level, "moves": moves, "timeInSeconds": seconds},
                format="json",
            )

    def test_level_leaderboard(self):
        resp = self.client.get(reverse('level-leaderboard', kwargs={"level": 1}))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual([e["playerName"] for e in data], ["Ada", "Bob"])
        self.assertEqual([e["rank"] for e in data], [1, 2])

    def test_level_leaderboard_limit(self):
        resp = self.client.get(reverse('level-leaderboard', kwargs={"level": 1}), {"limit": 1})
        self.assertEqual(len(resp.json()), 1)

    def test_invalid_level(self):
        resp = self.client.get(reverse('level-leaderboard', kwargs={"level": 7}))
        self.assertEqual(resp.status_code, 400)

    def test_global_leaderboard_is_sorted(self):
        resp = self.client.get(reverse('global-leaderboard'))
        self.assertEqual(resp.status_code, 200)
        scores = [e["score"] for e in resp.json()]
        self.assertEqual(len(scores), 4)
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_empty_leaderboard(self):
        Score.objects.all().delete()
        resp = self.client.get(reverse('global-leaderboard'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_player_scores(self):
        resp = self.client.get(reverse('player-scores', kwargs={"player_name": "Ada"}))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["playerName"], "Ada")
        self.assertEqual(data["totalGames"], 2)
        self.assertEqual([r["level"] for r in data["bestScores"]], [1, 3])

    def test_stats(self):
        resp = self.client.get(reverse('score-stats'))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["totalGames"], 4)
        self.assertEqual(data["uniquePlayers"], 3)
        self.assertEqual([row["level"] for row in data["levelStats"]], [1, 2, 3])
        self.assertEqual(data["levelStats"][0]["optimalSolutions"], 1)
        self.assertEqual(data["levelStats"][0]["avgMoves"], 8.0)


class PuzzleApiTests(APITestCase):
    def test_health(self):
        resp = self.client.get(reverse('health'))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["status"], "OK")
        self.assertEqual(data["database"]["totalScores"], 0)

    def test_levels(self):
        resp = self.client.get(reverse('levels'))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual([(lvl["level"], lvl["disks"], lvl["minMoves"]) for lvl in data], [(1, 3, 7), (2, 4, 15), (3, 5, 31)])
        self.assertEqual(data[0]["name"], "Easy")

    def test_solution(self):
        resp = self.client.get(reverse('level-solution', kwargs={"level": 2}))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["totalMoves"], 15)
        self.assertEqual(len(data["moves"]), 15)
        self.assertEqual(data["moves"][0], {"fromTower": 0, "toTower": 1, "disk": 1})

    def test_hint(self):
        resp = self.client.get(reverse('level-hint', kwargs={"level": 1}), {"moves": 0})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual((data["fromTower"], data["toTower"], data["disk"]), (0, 2, 1))
        self.assertEqual(data["message"], "Move disk from Tower 1 to Tower 3")
        self.assertEqual(data["moveNumber"], 1)

    def test_hint_exhausted(self):
        resp = self.client.get(reverse('level-hint', kwargs={"level": 1}), {"moves": 7})
        self.assertEqual(resp.status_code, 404)

    def test_hint_bad_params(self):
        self.assertEqual(self.client.get(reverse('level-hint', kwargs={"level": 1})).status_code, 400)
        self.assertEqual(self.client.get(reverse('level-hint', kwargs={"level": 1}), {"moves": -2}).status_code, 400)
        self.assertEqual(self.client.get(reverse('level-hint', kwargs={"level": 9}), {"moves": 0}).status_code, 400)
