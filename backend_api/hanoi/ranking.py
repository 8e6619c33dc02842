from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Avg, Count, Max, Q, QuerySet

from .models import Score
from .puzzles import InvalidLevel, calculate_score, get_level, is_optimal_run

logger = logging.getLogger(__name__)

PLAYER_NAME_MAX_LENGTH = 50
DEFAULT_LEVEL_LIMIT = 10
DEFAULT_GLOBAL_LIMIT = 30
LEADERBOARD_ORDERING = ("-score", "created_at", "id")


# PUBLIC_INTERFACE
class ScoreValidationError(ValueError):
    """Raised when a submission is rejected before anything is persisted."""


# PUBLIC_INTERFACE
class StorageUnavailable(RuntimeError):
    """Raised when the score store cannot be reached. Callers may retry."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# PUBLIC_INTERFACE
def validate_submission(player_name: Any, level: Any, moves: Any, time_in_seconds: Any) -> str:
    """Check a submission and return the normalized player name.

    Raises:
        ScoreValidationError: on a missing/blank/too long name, an unknown
                              level, or negative or non-integer moves/time.
    """
    if player_name is not None and not isinstance(player_name, str):
        raise ScoreValidationError("playerName must be a string.")
    name = (player_name or "").strip()
    if not name:
        raise ScoreValidationError("playerName is required.")
    if len(name) > PLAYER_NAME_MAX_LENGTH:
        raise ScoreValidationError(f"playerName must be at most {PLAYER_NAME_MAX_LENGTH} characters.")
    try:
        get_level(level)
    except InvalidLevel:
        raise ScoreValidationError("Level must be 1, 2, or 3") from None
    if not _is_int(moves) or not _is_int(time_in_seconds):
        raise ScoreValidationError("Moves and time must be integers.")
    if moves < 0 or time_in_seconds < 0:
        raise ScoreValidationError("Moves and time must be non-negative")
    return name


# PUBLIC_INTERFACE
def submit_score(player_name: str, level: int, moves: int, time_in_seconds: int) -> Score:
    """Validate, score and persist a completed game.

    The score and optimal flag are always recomputed here from moves, time
    and level; any client-side estimate is ignored.

    Raises:
        ScoreValidationError: if the submission is invalid (nothing written).
        StorageUnavailable: if the database write fails.
    """
    name = validate_submission(player_name, level, moves, time_in_seconds)
    is_optimal = is_optimal_run(level, moves)
    score = calculate_score(moves, time_in_seconds, level, is_optimal)
    try:
        with transaction.atomic():
            record = Score.objects.create(
                player_name=name,
                level=level,
                moves=moves,
                time_in_seconds=time_in_seconds,
                score=score,
                is_optimal=is_optimal,
            )
    except DatabaseError as e:
        logger.exception("Error saving score for %r", name)
        raise StorageUnavailable("Failed to save score") from e
    logger.info("Saved score %s for %r on level %s (moves=%s, optimal=%s)", score, name, level, moves, is_optimal)
    return record


# PUBLIC_INTERFACE
def resolve_limit(limit: Optional[int], level: Optional[int]) -> int:
    """Apply the default for the board type and clamp to the configured maximum."""
    maximum = getattr(settings, "HANOI_LEADERBOARD_MAX_LIMIT", 100)
    if not limit or limit < 1:
        limit = DEFAULT_GLOBAL_LIMIT if level is None else DEFAULT_LEVEL_LIMIT
    return min(limit, maximum)


# PUBLIC_INTERFACE
def leaderboard(level: Optional[int] = None, limit: Optional[int] = None) -> List[Score]:
    """Return the top records, best score first.

    Ties on score are won by the earlier submission (created_at ascending).
    ``level=None`` ranks all levels together.

    Raises:
        InvalidLevel: if level is given and not a configured tier.
        StorageUnavailable: if the database read fails.
    """
    qs: QuerySet = Score.objects.all()
    if level is not None:
        get_level(level)
        qs = qs.filter(level=level)
    qs = qs.order_by(*LEADERBOARD_ORDERING)[: resolve_limit(limit, level)]
    try:
        return list(qs)
    except DatabaseError as e:
        logger.exception("Error fetching leaderboard (level=%s)", level)
        raise StorageUnavailable("Failed to fetch leaderboard") from e


# PUBLIC_INTERFACE
def player_summary(player_name: str) -> Dict[str, Any]:
    """Best record per level plus the total number of games for a player.

    Returns:
        {"playerName": str, "bestScores": List[Score], "totalGames": int}
    """
    try:
        scores = list(Score.objects.filter(player_name=player_name).order_by("level", *LEADERBOARD_ORDERING))
    except DatabaseError as e:
        logger.exception("Error fetching player scores for %r", player_name)
        raise StorageUnavailable("Failed to fetch player scores") from e

    best: Dict[int, Score] = {}
    for record in scores:
        # Rows arrive best-first within a level
        best.setdefault(record.level, record)
    return {
        "playerName": player_name,
        "bestScores": [best[key] for key in sorted(best)],
        "totalGames": len(scores),
    }


# PUBLIC_INTERFACE
def stats() -> Dict[str, Any]:
    """Aggregate counters across all submitted games.

    Returns:
        {
            "totalGames": int,
            "uniquePlayers": int,
            "levelStats": [
                {"level", "totalGames", "avgMoves", "avgTime", "bestScore", "optimalSolutions"}, ...
            ]
        }
    """
    try:
        total_games = Score.objects.count()
        unique_players = Score.objects.order_by().values("player_name").distinct().count()
        rows = (
            Score.objects.order_by()
            .values("level")
            .annotate(
                total_games=Count("id"),
                avg_moves=Avg("moves"),
                avg_time=Avg("time_in_seconds"),
                best_score=Max("score"),
                optimal_solutions=Count("id", filter=Q(is_optimal=True)),
            )
            .order_by("level")
        )
        level_stats = [
            {
                "level": row["level"],
                "totalGames": row["total_games"],
                "avgMoves": float(row["avg_moves"] or 0),
                "avgTime": float(row["avg_time"] or 0),
                "bestScore": row["best_score"],
                "optimalSolutions": row["optimal_solutions"],
            }
            for row in rows
        ]
    except DatabaseError as e:
        logger.exception("Error fetching stats")
        raise StorageUnavailable("Failed to fetch statistics") from e
    return {
        "totalGames": total_games,
        "uniquePlayers": unique_players,
        "levelStats": level_stats,
    }
