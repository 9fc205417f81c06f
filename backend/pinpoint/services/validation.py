from typing import Any, List, Optional, Sequence

from ..scoring.frames import MAX_FRAMES, MAX_PINS


class ValidationError(Exception):
    """Raised when submitted throws or pins are invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _as_pin_count(raw: Any, label: str) -> int:
    # bool is a subclass of int in Python
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValidationError(f"{label} must be an integer between 0 and {MAX_PINS}.")
    if raw < 0 or raw > MAX_PINS:
        raise ValidationError(f"{label} must be an integer between 0 and {MAX_PINS}.")
    return raw


def _nth(throws: Sequence[int], index: int) -> int:
    return throws[index] if index < len(throws) else 0


def validate_throw(
    frame_number: int,
    throw_index: int,
    value: int,
    existing_throws: Sequence[int] = (),
) -> Optional[str]:
    """Return an error message for a single throw, or ``None`` if it is valid.

    ``throw_index`` is 0-based and ``existing_throws`` holds the throws
    already bowled in the same frame.
    """
    if value < 0 or value > MAX_PINS:
        return f"Pins must be between 0 and {MAX_PINS}"

    first = _nth(existing_throws, 0)
    if frame_number < MAX_FRAMES:
        if throw_index > 1:
            return f"Frame {frame_number} can have at most 2 throws"
        if throw_index == 1:
            if first == MAX_PINS:
                return "A strike is the only throw of its frame"
            if first + value > MAX_PINS:
                return f"Total pins cannot exceed {MAX_PINS} in a frame"
        return None

    if throw_index > 2:
        return f"Frame {MAX_FRAMES} can have at most 3 throws"
    if throw_index == 1:
        if first != MAX_PINS and first + value > MAX_PINS:
            return f"Total pins cannot exceed {MAX_PINS} in a frame"
    elif throw_index == 2:
        second = _nth(existing_throws, 1)
        if first == MAX_PINS:
            if second != MAX_PINS and second + value > MAX_PINS:
                return f"Total pins cannot exceed {MAX_PINS} on the second rack"
        elif first + second != MAX_PINS:
            return f"Frame {MAX_FRAMES} has no third throw without a strike or spare"
    return None


def validate_frame_throws(throws: Sequence[Any], frame_number: int) -> List[int]:
    """Validate the throws of one finished frame.

    Rules:
    - At least one throw is required and every throw is an integer 0-10
      (booleans are rejected)
    - Frames 1-9 hold at most two throws totalling <= 10, and a strike is
      the only throw of its frame
    - Frame 10 holds two throws, or three after a strike or spare; pins
      bowled at a partial rack may not exceed what was standing
    """
    if not isinstance(throws, (list, tuple)) or len(throws) == 0:
        raise ValidationError(f"Frame {frame_number} must include at least one throw.")

    normalized = [
        _as_pin_count(raw, f"Frame {frame_number} throw #{i}")
        for i, raw in enumerate(throws, start=1)
    ]

    if frame_number < MAX_FRAMES:
        if len(normalized) > 2:
            raise ValidationError(f"Frame {frame_number} can have at most 2 throws.")
        if sum(normalized) > MAX_PINS:
            raise ValidationError(
                f"Frame {frame_number} pins cannot exceed {MAX_PINS}."
            )
        if normalized[0] == MAX_PINS and len(normalized) > 1:
            raise ValidationError(
                f"Frame {frame_number} is a strike and must have only one throw."
            )
        return normalized

    if len(normalized) < 2:
        raise ValidationError("Frame 10 must have at least 2 throws.")
    if len(normalized) > 3:
        raise ValidationError("Frame 10 can have at most 3 throws.")

    first, second = normalized[0], normalized[1]
    third = normalized[2] if len(normalized) > 2 else None
    if first == MAX_PINS:
        if third is None:
            raise ValidationError("Frame 10 with a strike needs 3 throws.")
        if second != MAX_PINS and second + third > MAX_PINS:
            raise ValidationError("Frame 10 has an invalid pin combination.")
    elif first + second == MAX_PINS:
        if third is None:
            raise ValidationError("Frame 10 with a spare needs 3 throws.")
    else:
        if first + second > MAX_PINS:
            raise ValidationError(
                f"Frame 10 first two throws cannot exceed {MAX_PINS} pins."
            )
        if third is not None:
            raise ValidationError(
                "Frame 10 without a strike or spare must have only 2 throws."
            )
    return normalized


def validate_game_frames(frames: Sequence[Any]) -> List[List[int]]:
    """Validate a complete game given as ``[{frameNumber, throws}, ...]``.

    Returns the normalized throw lists in frame order.
    """
    if not isinstance(frames, (list, tuple)):
        raise ValidationError("Frames must be provided as a list.")
    if len(frames) != MAX_FRAMES:
        raise ValidationError(f"A game must have exactly {MAX_FRAMES} frames.")

    normalized: List[List[int]] = []
    for expected, frame in enumerate(frames, start=1):
        if not isinstance(frame, dict):
            raise ValidationError(f"Frame #{expected} must be an object.")
        if frame.get("frameNumber") != expected:
            raise ValidationError(
                f"Frame #{expected} must have frameNumber {expected}."
            )
        normalized.append(validate_frame_throws(frame.get("throws"), expected))
    return normalized


def validate_pin_selection(pins: Sequence[Any]) -> List[int]:
    if not isinstance(pins, (list, tuple, set, frozenset)):
        raise ValidationError("Pins must be provided as a list of integers.")
    normalized: List[int] = []
    for raw in pins:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise ValidationError("Pins must be integers.")
        if raw < 1 or raw > MAX_PINS:
            raise ValidationError(f"Pin {raw} is out of range (1-{MAX_PINS}).")
        if raw in normalized:
            raise ValidationError(f"Pin {raw} is listed more than once.")
        normalized.append(raw)
    return sorted(normalized)
