from __future__ import annotations

import math
from typing import Dict

from .levels import get_level

BASE_SCORE = 1000
TIME_PENALTY_PER_SECOND = 10
EXTRA_MOVE_PENALTY = 20
OPTIMAL_BONUS = 500
LEVEL_BONUS: Dict[int, int] = {1: 0, 2: 200, 3: 500}


# PUBLIC_INTERFACE
def min_moves(level: int) -> int:
    """Minimum number of moves for a level: ``2**(level + 2) - 1``."""
    return get_level(level).min_moves


# PUBLIC_INTERFACE
def is_optimal_run(level: int, moves: int) -> bool:
    """True when the run used exactly the minimum number of moves."""
    return moves == min_moves(level)


def _check_non_negative(moves, time_in_seconds) -> None:
    if moves < 0:
        raise ValueError("moves must be non-negative")
    if time_in_seconds < 0:
        raise ValueError("time_in_seconds must be non-negative")


# PUBLIC_INTERFACE
def score_breakdown(moves: int, time_in_seconds: float, level: int, is_optimal: bool) -> Dict[str, int]:
    """Return the score together with every term that produced it.

    Returns:
        {
            "score": int,           # clamped at 0
            "base_score": int,
            "time_penalty": int,
            "level_bonus": int,
            "optimal_bonus": int,
            "moves_penalty": int,
        }

    Raises:
        InvalidLevel: if level is not 1, 2 or 3.
        ValueError: if moves or time_in_seconds is negative.
    """
    required = min_moves(level)
    _check_non_negative(moves, time_in_seconds)

    time_penalty = math.floor(time_in_seconds) * TIME_PENALTY_PER_SECOND
    level_bonus = LEVEL_BONUS[level]
    optimal_bonus = OPTIMAL_BONUS if is_optimal else 0
    moves_penalty = (moves - required) * EXTRA_MOVE_PENALTY if moves > required else 0

    score = max(BASE_SCORE - time_penalty + level_bonus + optimal_bonus - moves_penalty, 0)
    return {
        "score": score,
        "base_score": BASE_SCORE,
        "time_penalty": time_penalty,
        "level_bonus": level_bonus,
        "optimal_bonus": optimal_bonus,
        "moves_penalty": moves_penalty,
    }


# PUBLIC_INTERFACE
def calculate_score(moves: int, time_in_seconds: float, level: int, is_optimal: bool) -> int:
    """Score a completed game.

    Both the display estimate and the authoritative server recompute call
    this function, so the two can never disagree.

    Example:
        calculate_score(7, 10, 1, True)    # 1400
        calculate_score(40, 60, 3, False)  # 720
    """
    return score_breakdown(moves, time_in_seconds, level, is_optimal)["score"]
