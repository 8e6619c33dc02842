"""
Hanoi app package initializer.

Re-exports the puzzle engine, scoring and hint utilities so callers can
import from hanoi directly, e.g.:

    from hanoi import initialize, apply_move, calculate_score
"""

# PUBLIC_INTERFACE
from .puzzles import (
    InvalidLevel,
    get_level,
    initialize,
    is_valid_move,
    apply_move,
    check_win_condition,
    solve,
    get_hint,
    calculate_score,
)

__all__ = [
    "InvalidLevel",
    "get_level",
    "initialize",
    "is_valid_move",
    "apply_move",
    "check_win_condition",
    "solve",
    "get_hint",
    "calculate_score",
]
