from __future__ import annotations


class ShapeClickError(Exception):
    """Base class for everything the engine raises on purpose."""


class ConfigError(ShapeClickError, ValueError):
    """Configuration values that cannot produce a playable game."""


class LayoutError(ShapeClickError, RuntimeError):
    """No non-overlapping layout was found within the retry budget."""

    def __init__(self, message: str, shape_count: int, placed: int):
        super().__init__(message)
        self.shape_count = shape_count
        self.placed = placed


class GameStateError(ShapeClickError, RuntimeError):
    """An operation was called in a phase that does not accept it."""
