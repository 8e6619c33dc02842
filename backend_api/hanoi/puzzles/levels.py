from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .exceptions import InvalidLevel


@dataclass(frozen=True)
class LevelConfig:
    """Static configuration for one difficulty tier."""

    level: int
    disks: int
    name: str
    description: str

    @property
    def min_moves(self) -> int:
        return 2 ** self.disks - 1


# Disk count is level + 2: Easy 3, Medium 4, Hard 5
LEVELS: Dict[int, LevelConfig] = {
    1: LevelConfig(level=1, disks=3, name="Easy", description="3 disks - Learn the basics"),
    2: LevelConfig(level=2, disks=4, name="Medium", description="4 disks - Getting challenging"),
    3: LevelConfig(level=3, disks=5, name="Hard", description="5 disks - Master level"),
}


# PUBLIC_INTERFACE
class LevelRegistry:
    """Registry mapping level identifiers to their tier configuration."""

    _registry: Dict[int, LevelConfig] = dict(LEVELS)

    @classmethod
    def get(cls, level) -> LevelConfig:
        """Return the configuration for a level, or raise InvalidLevel."""
        # bool is an int subclass; True must not resolve to level 1
        if isinstance(level, bool) or not isinstance(level, int):
            raise InvalidLevel(level)
        if level not in cls._registry:
            raise InvalidLevel(level)
        return cls._registry[level]

    @classmethod
    def levels(cls) -> List[LevelConfig]:
        """All configured tiers ordered by level."""
        return [cls._registry[key] for key in sorted(cls._registry)]


# PUBLIC_INTERFACE
def get_level(level) -> LevelConfig:
    """Convenience function to resolve a level configuration.

    Example:
        config = get_level(2)
        config.disks      # 4
        config.min_moves  # 15
    """
    return LevelRegistry.get(level)
