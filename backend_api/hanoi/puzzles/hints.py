from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .levels import get_level
from .solver import Move, solve


@runtime_checkable
class _GameLike(Protocol):
    """Minimal interface required from a game state for hint computations."""
    level: int
    move_count: int


# PUBLIC_INTERFACE
def hint_message(move: Move) -> str:
    """Human readable hint text with 1-based tower numbers."""
    return f"Move disk from Tower {move.from_tower + 1} to Tower {move.to_tower + 1}"


# PUBLIC_INTERFACE
def hint_for_move_count(level: int, move_count: int) -> Optional[Move]:
    """Return the canonical solution's move at index ``move_count``.

    The canonical sequence does not look at the current towers, so after
    non-optimal play the returned move may no longer be legal.

    Returns:
        The Move, or None when move_count is past the end of the solution.

    Raises:
        InvalidLevel: if level is not a configured tier.
        ValueError: if move_count is negative.
    """
    if move_count < 0:
        raise ValueError("move_count must be non-negative")
    solution = solve(get_level(level).disks)
    if move_count >= len(solution):
        return None
    return solution[move_count]


# PUBLIC_INTERFACE
def get_hint(state: _GameLike) -> Optional[Move]:
    """Next move the optimal solver would make after ``state.move_count`` moves."""
    return hint_for_move_count(state.level, state.move_count)
