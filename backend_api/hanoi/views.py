from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status, permissions
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from .models import Score
from .serializers import (
    ScoreSubmitRequestSerializer,
    ScoreRecordSerializer,
    LeaderboardEntrySerializer,
    PlayerSummarySerializer,
    StatsSerializer,
    ScoreEstimateRequestSerializer,
    ScoreEstimateResponseSerializer,
    LevelSerializer,
    SolutionResponseSerializer,
    HintResponseSerializer,
)
from .ranking import StorageUnavailable, leaderboard, player_summary, stats, submit_score
from hanoi.puzzles import (
    InvalidLevel,
    LevelRegistry,
    get_level,
    hint_for_move_count,
    hint_message,
    is_optimal_run,
    score_breakdown,
    solve,
)

logger = logging.getLogger(__name__)

_LEVEL_ERROR = "Level must be 1, 2, or 3"


def _parse_limit(request) -> Optional[int]:
    """Read ?limit=N; anything unparsable falls back to the default."""
    raw = request.GET.get("limit")
    try:
        return int(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None


def _ranked(records):
    for rank, record in enumerate(records, start=1):
        record.rank = rank
    return records


_limit_param = openapi.Parameter(
    "limit", openapi.IN_QUERY, type=openapi.TYPE_INTEGER, required=False, description="Maximum number of entries."
)


# PUBLIC_INTERFACE
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with service status and database details
    - 503 if the database cannot be queried
    """
    payload = {
        "status": "OK",
        "timestamp": timezone.now().isoformat(),
        "service": "Towers of Hanoi API",
        "version": settings.HANOI_VERSION,
        "database": {"status": "connected", "vendor": connection.vendor},
    }
    try:
        payload["database"]["totalScores"] = Score.objects.count()
    except DatabaseError as e:
        logger.exception("Health check database query failed")
        return Response(
            {
                "status": "ERROR",
                "timestamp": timezone.now().isoformat(),
                "service": "Towers of Hanoi API",
                "error": str(e),
            },
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return Response(payload)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="submit_score",
    operation_summary="Submit a completed game",
    operation_description="""
Persist the result of a completed game. The server recomputes the score and
the optimal flag from moves, time and level; a client-provided score is ignored.

Request body:
- playerName (string, required, max 50 chars)
- level (int, required): 1 | 2 | 3
- moves (int, required, >= 0)
- timeInSeconds (int, required, >= 0)

Response:
- 201 with the stored record (id, playerName, level, moves, timeInSeconds, score, isOptimal, createdAt)
- 400 on validation failure, 500 if the score could not be stored
""",
    request_body=ScoreSubmitRequestSerializer,
    responses={201: ScoreRecordSerializer},
    tags=["scores"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def submit_score_view(request):
    """Validate and store a completed game with a server-computed score."""
    serializer = ScoreSubmitRequestSerializer(data=request.data or {})
    if not serializer.is_valid():
        logger.info("Rejected score submission: %s", serializer.errors)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    vd = serializer.validated_data

    try:
        record = submit_score(vd["playerName"], vd["level"], vd["moves"], vd["timeInSeconds"])
    except StorageUnavailable as e:
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(ScoreRecordSerializer(record).data, status=status.HTTP_201_CREATED)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="estimate_score",
    operation_summary="Estimate the score of a finished game",
    operation_description="""
Compute the score for a finished game without storing it, using the same
formula as score submission.

Request body:
- level (int): 1 | 2 | 3
- moves (int, >= 0)
- timeInSeconds (int, >= 0)
""",
    request_body=ScoreEstimateRequestSerializer,
    responses={200: ScoreEstimateResponseSerializer},
    tags=["scores"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def estimate_score(request):
    """Return the score breakdown for a finished game."""
    serializer = ScoreEstimateRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    vd = serializer.validated_data

    level, moves, seconds = vd["level"], vd["moves"], vd["timeInSeconds"]
    optimal = is_optimal_run(level, moves)
    breakdown = score_breakdown(moves, seconds, level, optimal)
    resp = {
        "level": level,
        "moves": moves,
        "timeInSeconds": seconds,
        "isOptimal": optimal,
        "minMoves": get_level(level).min_moves,
        "score": breakdown["score"],
        "baseScore": breakdown["base_score"],
        "timePenalty": breakdown["time_penalty"],
        "levelBonus": breakdown["level_bonus"],
        "optimalBonus": breakdown["optimal_bonus"],
        "movesPenalty": breakdown["moves_penalty"],
    }
    return Response(ScoreEstimateResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="level_leaderboard",
    operation_summary="Get the leaderboard for one level",
    operation_description="""
Returns the best scores for a level, sorted by score (desc), then earliest
submission. Default limit is 10.
""",
    manual_parameters=[_limit_param],
    responses={200: LeaderboardEntrySerializer(many=True)},
    tags=["scores"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_level_leaderboard(request, level: int):
    """Leaderboard restricted to one level."""
    try:
        records = leaderboard(level=level, limit=_parse_limit(request))
    except InvalidLevel:
        return Response({"error": _LEVEL_ERROR}, status=status.HTTP_400_BAD_REQUEST)
    except StorageUnavailable as e:
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    serializer = LeaderboardEntrySerializer(_ranked(records), many=True)
    return Response(serializer.data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="global_leaderboard",
    operation_summary="Get the leaderboard across all levels",
    operation_description="""
Returns the best scores across all levels, sorted by score (desc), then
earliest submission. Default limit is 30.
""",
    manual_parameters=[_limit_param],
    responses={200: LeaderboardEntrySerializer(many=True)},
    tags=["scores"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_global_leaderboard(request):
    """Leaderboard across all levels."""
    try:
        records = leaderboard(level=None, limit=_parse_limit(request))
    except StorageUnavailable as e:
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    serializer = LeaderboardEntrySerializer(_ranked(records), many=True)
    return Response(serializer.data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="player_scores",
    operation_summary="Get a player's best scores",
    operation_description="Best record per level and total number of games for the given player name.",
    responses={200: PlayerSummarySerializer},
    tags=["scores"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_player_scores(request, player_name: str):
    """Best scores per level for one player."""
    try:
        summary = player_summary(player_name)
    except StorageUnavailable as e:
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(PlayerSummarySerializer(summary).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="score_stats",
    operation_summary="Get game statistics",
    operation_description="Total games, distinct players and per-level averages, best score and optimal runs.",
    responses={200: StatsSerializer},
    tags=["scores"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_stats(request):
    """Aggregate statistics across all stored scores."""
    try:
        payload = stats()
    except StorageUnavailable as e:
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(StatsSerializer(payload).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="get_levels",
    operation_summary="List difficulty levels",
    operation_description="Returns every level with its disk count and minimum number of moves.",
    responses={200: LevelSerializer(many=True)},
    tags=["meta"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_levels(request):
    """List configured difficulty levels."""
    return Response(LevelSerializer(LevelRegistry.levels(), many=True).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="level_solution",
    operation_summary="Get the canonical solution for a level",
    operation_description="Ordered minimum-move solution (2^disks - 1 moves) with 0-based tower indices.",
    responses={200: SolutionResponseSerializer},
    tags=["game"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_solution(request, level: int):
    """Canonical optimal solution for a level."""
    try:
        config = get_level(level)
    except InvalidLevel:
        return Response({"error": _LEVEL_ERROR}, status=status.HTTP_400_BAD_REQUEST)
    moves = solve(config.disks)
    resp = {"level": config.level, "disks": config.disks, "totalMoves": len(moves), "moves": moves}
    return Response(SolutionResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="level_hint",
    operation_summary="Get a hint for the next move",
    operation_description="""
Returns the canonical solution's move at index `moves`, i.e. what the optimal
solver would do after that many moves. The current tower layout is not
considered.

Query params:
- moves (int, required, >= 0): moves made so far

404 when the canonical solution has no move at that index.
""",
    manual_parameters=[
        openapi.Parameter("moves", openapi.IN_QUERY, type=openapi.TYPE_INTEGER, required=True),
    ],
    responses={200: HintResponseSerializer},
    tags=["game", "hints"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_hint_view(request, level: int):
    """Next canonical move for a level after a number of moves."""
    try:
        move_count = int(request.GET.get("moves", ""))
    except ValueError:
        return Response({"error": "Query parameter 'moves' must be an integer."}, status=status.HTTP_400_BAD_REQUEST)
    try:
        move = hint_for_move_count(level, move_count)
    except InvalidLevel:
        return Response({"error": _LEVEL_ERROR}, status=status.HTTP_400_BAD_REQUEST)
    except ValueError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if move is None:
        return Response({"error": "No hint available."}, status=status.HTTP_404_NOT_FOUND)

    resp = {
        "level": level,
        "moveNumber": move_count + 1,
        "from_tower": move.from_tower,
        "to_tower": move.to_tower,
        "disk": move.disk,
        "message": hint_message(move),
    }
    return Response(HintResponseSerializer(resp).data, status=status.HTTP_200_OK)
