from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Literal, Optional, Tuple

from .levels import LevelConfig, get_level
from .scoring import calculate_score, is_optimal_run

TOWER_COUNT = 3
DESTINATION_TOWER = 2
INVALID_MOVE_MESSAGE = "Invalid move!"

Tower = Tuple[int, ...]
Towers = Tuple[Tower, Tower, Tower]
SelectionKind = Literal["idle", "selected", "locked"]


@dataclass(frozen=True)
class Selection:
    """Two-click selection state: Idle, Selected(tower) or Locked.

    ``tower`` is set exactly when kind is "selected".
    """

    kind: SelectionKind = "idle"
    tower: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.kind == "selected") != (self.tower is not None):
            raise ValueError("tower must be set if and only if the selection kind is 'selected'")

    @classmethod
    def selected(cls, tower: int) -> "Selection":
        return cls(kind="selected", tower=tower)


IDLE = Selection()
LOCKED = Selection(kind="locked")


@dataclass(frozen=True)
class GameState:
    """State of a single play session.

    Fields:
    - level / disk_count: difficulty tier and its number of disks
    - towers: three stacks, bottom-to-top, each strictly decreasing
    - move_count: number of successfully applied moves
    - start_time / end_time: epoch seconds; end_time stays None until the win
    - is_complete: all disks sit on the destination tower
    - selection: Idle, Selected(tower) or Locked
    - error: message of the last rejected move attempt, if any
    """

    level: int
    disk_count: int
    towers: Towers
    start_time: float
    move_count: int = 0
    end_time: Optional[float] = None
    is_complete: bool = False
    selection: Selection = field(default=IDLE)
    error: Optional[str] = None

    @property
    def config(self) -> LevelConfig:
        return get_level(self.level)

    @property
    def selected_tower_index(self) -> Optional[int]:
        return self.selection.tower

    @property
    def is_locked(self) -> bool:
        return self.selection.kind == "locked"


def _now(now: Optional[float]) -> float:
    return time.time() if now is None else now


def _top(tower: Tower) -> Optional[int]:
    return tower[-1] if tower else None


# PUBLIC_INTERFACE
def initialize(level: int, now: Optional[float] = None) -> GameState:
    """Create a fresh game for a level with every disk on tower 0.

    Raises:
        InvalidLevel: if level is not one of the configured tiers.
    """
    config = get_level(level)
    first: Tower = tuple(range(config.disks, 0, -1))
    return GameState(
        level=config.level,
        disk_count=config.disks,
        towers=(first, (), ()),
        start_time=_now(now),
    )


# PUBLIC_INTERFACE
def is_valid_move(state: GameState, from_tower: int, to_tower: int) -> bool:
    """Return True if the top disk of from_tower may be placed on to_tower.

    An empty destination accepts any disk; otherwise the moving disk must
    be smaller than the destination's top disk.
    """
    if not (0 <= from_tower < TOWER_COUNT and 0 <= to_tower < TOWER_COUNT):
        return False
    if from_tower == to_tower:
        return False
    moving = _top(state.towers[from_tower])
    if moving is None:
        return False
    target = _top(state.towers[to_tower])
    return target is None or moving < target


# PUBLIC_INTERFACE
def check_win_condition(towers: Towers, disk_count: int) -> bool:
    """True iff the destination tower holds all disks in descending order."""
    last = towers[DESTINATION_TOWER]
    if len(last) != disk_count:
        return False
    return all(lower > upper for lower, upper in zip(last, last[1:]))


# PUBLIC_INTERFACE
def apply_move(state: GameState, from_tower: int, to_tower: int, now: Optional[float] = None) -> GameState:
    """Move the top disk of from_tower onto to_tower.

    An invalid move returns the same towers and move count, annotated with
    ``error = "Invalid move!"`` and the selection reset to Idle. A valid
    move that completes the puzzle records end_time once, at this instant.
    A completed game rejects further moves so its end_time stays locked.
    While the animation lock is held the state is returned unchanged.
    """
    if state.is_locked:
        return state
    if state.is_complete or not is_valid_move(state, from_tower, to_tower):
        return replace(state, selection=IDLE, error=INVALID_MOVE_MESSAGE)

    towers = [list(tower) for tower in state.towers]
    disk = towers[from_tower].pop()
    towers[to_tower].append(disk)
    new_towers: Towers = (tuple(towers[0]), tuple(towers[1]), tuple(towers[2]))

    is_complete = check_win_condition(new_towers, state.disk_count)
    return replace(
        state,
        towers=new_towers,
        move_count=state.move_count + 1,
        is_complete=is_complete,
        end_time=_now(now) if is_complete else None,
        selection=IDLE,
        error=None,
    )


# PUBLIC_INTERFACE
def click_tower(state: GameState, tower: int, now: Optional[float] = None) -> GameState:
    """Advance the two-click selection protocol with a click on ``tower``.

    - Idle + click on a non-empty tower selects it; an empty tower is ignored.
    - Selected(t) + click on t deselects.
    - Selected(t) + click on u attempts the move t -> u and returns to Idle.
    Clicks are ignored while locked or once the game is complete.
    """
    if state.is_complete or state.is_locked:
        return state
    if not 0 <= tower < TOWER_COUNT:
        return state

    if state.selection.kind == "idle":
        if not state.towers[tower]:
            return state
        return replace(state, selection=Selection.selected(tower), error=None)

    if state.selection.tower == tower:
        return replace(state, selection=IDLE)

    return apply_move(state, state.selection.tower, tower, now=now)


# PUBLIC_INTERFACE
def lock(state: GameState) -> GameState:
    """Enter the animation lock; pending selections are dropped."""
    if state.is_complete:
        return state
    return replace(state, selection=LOCKED)


# PUBLIC_INTERFACE
def unlock(state: GameState) -> GameState:
    """Leave the animation lock and return to Idle."""
    if not state.is_locked:
        return state
    return replace(state, selection=IDLE)


# PUBLIC_INTERFACE
def elapsed_seconds(state: GameState, now: Optional[float] = None) -> int:
    """Whole seconds played so far; frozen at end_time once complete."""
    end = state.end_time if state.end_time is not None else _now(now)
    return max(int(end - state.start_time), 0)


# PUBLIC_INTERFACE
def format_time(seconds: int) -> str:
    """Format a duration as MM:SS."""
    mins, secs = divmod(int(seconds), 60)
    return f"{mins:02d}:{secs:02d}"


# PUBLIC_INTERFACE
def score_game(state: GameState) -> int:
    """Local score estimate for a finished game, 0 while still in progress."""
    if not state.is_complete or state.end_time is None:
        return 0
    return calculate_score(
        state.move_count,
        elapsed_seconds(state),
        state.level,
        is_optimal_run(state.level, state.move_count),
    )
