from typing import List, Tuple

from .models import Score
from .puzzles import apply_move, elapsed_seconds, get_level, initialize, solve
from .ranking import submit_score

# (player name, level, seconds taken)
DEMO_PLAYERS: List[Tuple[str, int, int]] = [
    ("Ada", 1, 12),
    ("Brahma", 1, 25),
    ("Lucas", 2, 40),
    ("Ada", 2, 55),
    ("Edouard", 3, 90),
]


def play_canonical_game(level: int, seconds: int) -> Tuple[int, int]:
    """Play a level's canonical solution through the engine.

    Returns (moves, time_in_seconds) of the finished game.
    """
    start = 0.0
    state = initialize(level, now=start)
    for move in solve(get_level(level).disks):
        state = apply_move(state, move.from_tower, move.to_tower, now=start + seconds)
    if not state.is_complete:
        raise RuntimeError(f"Canonical solution did not solve level {level}")
    return state.move_count, elapsed_seconds(state)


# PUBLIC_INTERFACE
def ensure_demo_scores(players: List[Tuple[str, int, int]] | None = None) -> int:
    """Ensure the Score table has a few records to show on the leaderboards.

    Returns number of scores inserted (0 if already present).
    """
    if Score.objects.exists():
        return 0
    entries = DEMO_PLAYERS if players is None else players
    for name, level, seconds in entries:
        moves, elapsed = play_canonical_game(level, seconds)
        submit_score(name, level, moves, elapsed)
    return len(entries)
