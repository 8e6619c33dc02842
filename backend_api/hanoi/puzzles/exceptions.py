from __future__ import annotations


# PUBLIC_INTERFACE
class InvalidLevel(ValueError):
    """Raised when a difficulty tier outside the configured levels is requested."""

    def __init__(self, level) -> None:
        super().__init__(f"Invalid level: {level!r}. Level must be 1, 2, or 3.")
        self.level = level
