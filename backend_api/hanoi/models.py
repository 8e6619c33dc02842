from __future__ import annotations

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


# PUBLIC_INTERFACE
class CreatedAtModel(models.Model):
    """Abstract base model providing a server-assigned creation timestamp."""
    created_at = models.DateTimeField(auto_now_add=True, db_index=True, help_text="Time when the record was created.")

    class Meta:
        abstract = True


# PUBLIC_INTERFACE
class Score(CreatedAtModel):
    """A completed and submitted game. Immutable once persisted.

    Fields:
    - player_name: display name of the player (1..50 chars, trimmed)
    - level: difficulty tier (1 = Easy, 2 = Medium, 3 = Hard)
    - moves: number of moves the player made
    - time_in_seconds: whole seconds the game took
    - score: server-computed score, never taken from the client
    - is_optimal: whether moves equals the level's minimum
    - created_at: submission time, used to break score ties
    """
    LEVEL_CHOICES = (
        (1, "Easy"),
        (2, "Medium"),
        (3, "Hard"),
    )

    player_name = models.CharField(max_length=50, db_index=True, help_text="Player display name.")
    level = models.PositiveSmallIntegerField(
        choices=LEVEL_CHOICES,
        validators=[MinValueValidator(1), MaxValueValidator(3)],
        help_text="Difficulty level.",
    )
    moves = models.PositiveIntegerField(help_text="Number of moves made.")
    time_in_seconds = models.PositiveIntegerField(help_text="Time taken in whole seconds.")
    score = models.IntegerField(help_text="Server-computed score.")
    is_optimal = models.BooleanField(default=False, help_text="True if solved in the minimum number of moves.")

    class Meta:
        ordering = ["-score", "created_at", "id"]
        indexes = [
            models.Index(fields=["level", "-score"], name="score_level_rank_idx"),
        ]
        verbose_name = "Score"
        verbose_name_plural = "Scores"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Score records are immutable once persisted.")
        if self.player_name:
            self.player_name = self.player_name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.player_name} - level {self.level}: {self.score}"
