"""
Puzzle engine, solver, hints and scoring for Towers of Hanoi.

Exports:
- LevelRegistry and get_level for resolving difficulty tiers
- the game engine operations (initialize, is_valid_move, apply_move, ...)
- solve for the canonical optimal solution and get_hint built on it
- calculate_score, the single scoring formula used by client and server

These modules are framework-agnostic and can be reused by views or services
without importing request objects.
"""

from .exceptions import InvalidLevel
from .levels import LevelConfig, LevelRegistry, get_level
from .solver import Move, solve
from .scoring import calculate_score, score_breakdown, min_moves, is_optimal_run
from .engines import (
    GameState,
    Selection,
    initialize,
    is_valid_move,
    apply_move,
    check_win_condition,
    click_tower,
    lock,
    unlock,
    elapsed_seconds,
    format_time,
    score_game,
)
from .hints import get_hint, hint_for_move_count, hint_message

__all__ = [
    "InvalidLevel",
    "LevelConfig",
    "LevelRegistry",
    "get_level",
    "Move",
    "solve",
    "calculate_score",
    "score_breakdown",
    "min_moves",
    "is_optimal_run",
    "GameState",
    "Selection",
    "initialize",
    "is_valid_move",
    "apply_move",
    "check_win_condition",
    "click_tower",
    "lock",
    "unlock",
    "elapsed_seconds",
    "format_time",
    "score_game",
    "get_hint",
    "hint_for_move_count",
    "hint_message",
]
