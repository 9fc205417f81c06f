"""Internal application services (pure helpers, no I/O)."""

from .validation import (
    ValidationError,
    validate_frame_throws,
    validate_game_frames,
    validate_pin_selection,
    validate_throw,
)

__all__ = [
    "ValidationError",
    "validate_frame_throws",
    "validate_game_frames",
    "validate_pin_selection",
    "validate_throw",
]
