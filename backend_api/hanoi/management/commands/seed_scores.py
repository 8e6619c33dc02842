from django.core.management.base import BaseCommand

from hanoi.models import Score
from hanoi.seed_utils import ensure_demo_scores


class Command(BaseCommand):
    help = "Seed demo leaderboard scores if the Scores table is empty."

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        # This command is idempotent and safe to run multiple times.
        count_before = Score.objects.count()
        if count_before > 0:
            self.stdout.write(self.style.WARNING(f"Scores already present: {count_before}. No action taken."))
            return

        inserted = ensure_demo_scores()
        self.stdout.write(self.style.SUCCESS(f"Seeded {inserted} scores."))
