from __future__ import annotations

from functools import lru_cache
from typing import List, NamedTuple, Tuple


class Move(NamedTuple):
    """A single disk move between two towers."""

    from_tower: int
    to_tower: int
    disk: int


def _hanoi(n: int, source: int, destination: int, auxiliary: int, out: List[Move]) -> None:
    if n == 1:
        out.append(Move(source, destination, 1))
        return
    _hanoi(n - 1, source, auxiliary, destination, out)
    out.append(Move(source, destination, n))
    _hanoi(n - 1, auxiliary, destination, source, out)


# PUBLIC_INTERFACE
@lru_cache(maxsize=None)
def solve(disk_count: int, source: int = 0, destination: int = 2, auxiliary: int = 1) -> Tuple[Move, ...]:
    """Return the canonical minimum-move solution for ``disk_count`` disks.

    Moving n disks from source to destination is: n-1 disks to the auxiliary
    tower, disk n to the destination, then the n-1 disks on top of it. The
    result always holds exactly ``2**disk_count - 1`` moves and is identical
    for identical arguments, which lets callers index into it by move count.

    Raises:
        ValueError: if disk_count is smaller than 1 or the tower indices
                    are not a permutation of 0, 1, 2.
    """
    if disk_count < 1:
        raise ValueError("disk_count must be >= 1")
    if sorted((source, destination, auxiliary)) != [0, 1, 2]:
        raise ValueError("source, destination and auxiliary must be distinct towers 0..2")
    moves: List[Move] = []
    _hanoi(disk_count, source, destination, auxiliary, moves)
    return tuple(moves)
