from __future__ import annotations


class LevelGenerationError(RuntimeError):
    """A generation attempt cannot produce a valid level (retry with a new seed)."""

    def __init__(self, message: str, level: int | None = None, seed: int | None = None):
        super().__init__(message)
        self.level = level
        self.seed = seed


class PlacementError(Exception):
    """A single room or spawn could not be placed within its attempt budget."""


__all__ = ["LevelGenerationError", "PlacementError"]
