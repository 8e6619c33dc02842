import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Score",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Time when the record was created.")),
                ("player_name", models.CharField(db_index=True, help_text="Player display name.", max_length=50)),
                (
                    "level",
                    models.PositiveSmallIntegerField(
                        choices=[(1, "Easy"), (2, "Medium"), (3, "Hard")],
                        help_text="Difficulty level.",
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(3),
                        ],
                    ),
                ),
                ("moves", models.PositiveIntegerField(help_text="Number of moves made.")),
                ("time_in_seconds", models.PositiveIntegerField(help_text="Time taken in whole seconds.")),
                ("score", models.IntegerField(help_text="Server-computed score.")),
                ("is_optimal", models.BooleanField(default=False, help_text="True if solved in the minimum number of moves.")),
            ],
            options={
                "verbose_name": "Score",
                "verbose_name_plural": "Scores",
                "ordering": ["-score", "created_at", "id"],
                "indexes": [models.Index(fields=["level", "-score"], name="score_level_rank_idx")],
            },
        ),
    ]
