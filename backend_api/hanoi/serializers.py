from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .models import Score
from .ranking import PLAYER_NAME_MAX_LENGTH, ScoreValidationError, validate_submission


# PUBLIC_INTERFACE
class ScoreSubmitRequestSerializer(serializers.Serializer):
    """Request payload to submit a completed game.

    Fields:
    - playerName (required, 1..50 chars after trimming)
    - level (required): 1, 2 or 3
    - moves (required, >= 0)
    - timeInSeconds (required, >= 0)

    Any score or optimal flag sent by the client is ignored.
    """

    playerName = serializers.CharField(max_length=PLAYER_NAME_MAX_LENGTH)
    level = serializers.IntegerField(min_value=1, max_value=3)
    moves = serializers.IntegerField(min_value=0)
    timeInSeconds = serializers.IntegerField(min_value=0)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        try:
            attrs["playerName"] = validate_submission(
                attrs["playerName"], attrs["level"], attrs["moves"], attrs["timeInSeconds"]
            )
        except ScoreValidationError as e:
            raise serializers.ValidationError(str(e))
        return attrs


# PUBLIC_INTERFACE
class ScoreRecordSerializer(serializers.ModelSerializer):
    """A persisted score record."""

    playerName = serializers.CharField(source="player_name", read_only=True)
    timeInSeconds = serializers.IntegerField(source="time_in_seconds", read_only=True)
    isOptimal = serializers.BooleanField(source="is_optimal", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Score
        fields = ["id", "playerName", "level", "moves", "timeInSeconds", "score", "isOptimal", "createdAt"]
        read_only_fields = fields


# PUBLIC_INTERFACE
class LeaderboardEntrySerializer(ScoreRecordSerializer):
    """Leaderboard entry: a score record plus its 1-based rank."""

    rank = serializers.IntegerField(read_only=True)

    class Meta(ScoreRecordSerializer.Meta):
        fields = ["rank"] + ScoreRecordSerializer.Meta.fields
        read_only_fields = fields


# PUBLIC_INTERFACE
class PlayerSummarySerializer(serializers.Serializer):
    """Best record per level and total games for one player."""

    playerName = serializers.CharField()
    bestScores = ScoreRecordSerializer(many=True)
    totalGames = serializers.IntegerField()


# PUBLIC_INTERFACE
class LevelStatsSerializer(serializers.Serializer):
    """Aggregates for one level."""

    level = serializers.IntegerField()
    totalGames = serializers.IntegerField()
    avgMoves = serializers.FloatField()
    avgTime = serializers.FloatField()
    bestScore = serializers.IntegerField()
    optimalSolutions = serializers.IntegerField()


# PUBLIC_INTERFACE
class StatsSerializer(serializers.Serializer):
    """Game statistics across all submissions."""

    totalGames = serializers.IntegerField()
    uniquePlayers = serializers.IntegerField()
    levelStats = LevelStatsSerializer(many=True)


# PUBLIC_INTERFACE
class ScoreEstimateRequestSerializer(serializers.Serializer):
    """Request payload for a score estimate of a finished game."""

    level = serializers.IntegerField(min_value=1, max_value=3)
    moves = serializers.IntegerField(min_value=0)
    timeInSeconds = serializers.IntegerField(min_value=0)


# PUBLIC_INTERFACE
class ScoreEstimateResponseSerializer(serializers.Serializer):
    """Score with every term of the formula."""

    level = serializers.IntegerField()
    moves = serializers.IntegerField()
    timeInSeconds = serializers.IntegerField()
    isOptimal = serializers.BooleanField()
    minMoves = serializers.IntegerField()
    score = serializers.IntegerField()
    baseScore = serializers.IntegerField()
    timePenalty = serializers.IntegerField()
    levelBonus = serializers.IntegerField()
    optimalBonus = serializers.IntegerField()
    movesPenalty = serializers.IntegerField()


# PUBLIC_INTERFACE
class LevelSerializer(serializers.Serializer):
    """Difficulty tier description."""

    level = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField()
    disks = serializers.IntegerField()
    minMoves = serializers.IntegerField(source="min_moves")


# PUBLIC_INTERFACE
class MoveSerializer(serializers.Serializer):
    """One move of the canonical solution (0-based tower indices)."""

    fromTower = serializers.IntegerField(source="from_tower")
    toTower = serializers.IntegerField(source="to_tower")
    disk = serializers.IntegerField()


# PUBLIC_INTERFACE
class SolutionResponseSerializer(serializers.Serializer):
    """Canonical solution for a level."""

    level = serializers.IntegerField()
    disks = serializers.IntegerField()
    totalMoves = serializers.IntegerField()
    moves = MoveSerializer(many=True)


# PUBLIC_INTERFACE
class HintResponseSerializer(MoveSerializer):
    """Next canonical move for a given move count, with display text."""

    level = serializers.IntegerField()
    moveNumber = serializers.IntegerField()
    message = serializers.CharField()
