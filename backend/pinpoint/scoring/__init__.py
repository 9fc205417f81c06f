"""Ten-pin bowling scoring engine."""

from . import calculator, frames, pin_entry, splits
from .calculator import (
    calculate_game_score,
    get_game_statistics,
    is_frame_complete,
    is_game_complete,
)
from .frames import Frame, Game, PinSetMap, create_empty_game
from .pin_entry import PinEntrySession
from .splits import SplitInfo, analyze_split_from_pins

__all__ = [
    "calculator",
    "frames",
    "pin_entry",
    "splits",
    "calculate_game_score",
    "get_game_statistics",
    "is_frame_complete",
    "is_game_complete",
    "Frame",
    "Game",
    "PinSetMap",
    "create_empty_game",
    "PinEntrySession",
    "SplitInfo",
    "analyze_split_from_pins",
]
