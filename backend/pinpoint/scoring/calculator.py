"""Ten-pin bowling score calculator.

Scores are recomputed from scratch over all ten frames after every change.
Strike and spare bonuses look ahead at most two frames, so each lookup is an
explicit, bounds-checked index rather than a recursive walk. Throws that have
not been bowled yet count as zero.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .frames import MAX_FRAMES, MAX_PINS, Frame


def _throw(frames: Sequence[Frame], index: int, slot: int) -> int:
    if index >= len(frames):
        return 0
    throws = frames[index].throws
    return throws[slot] if slot < len(throws) else 0


def _is_strike(throws: Sequence[int]) -> bool:
    return bool(throws) and throws[0] == MAX_PINS


def _strike_bonus(frames: Sequence[Frame], index: int) -> int:
    if index + 1 >= len(frames):
        return 0
    nxt = frames[index + 1]
    if _is_strike(nxt.throws) and not nxt.is_tenth:
        return MAX_PINS + _throw(frames, index + 2, 0)
    return _throw(frames, index + 1, 0) + _throw(frames, index + 1, 1)


def _spare_bonus(frames: Sequence[Frame], index: int) -> int:
    return _throw(frames, index + 1, 0)


def frame_score(frames: Sequence[Frame], index: int) -> int:
    """Score contributed by a single frame, bonuses included."""
    frame = frames[index]
    throws = frame.throws
    total = sum(throws)
    if frame.frame_number >= MAX_FRAMES:
        # No frame 11 to borrow from; the bonus balls are in this frame.
        return total
    if _is_strike(throws):
        return MAX_PINS + _strike_bonus(frames, index)
    if total == MAX_PINS and len(throws) == 2:
        return MAX_PINS + _spare_bonus(frames, index)
    return total


def is_frame_complete(throws: Sequence[int], frame_number: int) -> bool:
    if frame_number < MAX_FRAMES:
        return _is_strike(throws) or len(throws) >= 2

    if len(throws) < 2:
        return False
    if len(throws) >= 3:
        return True
    first, second = throws[0], throws[1]
    # A strike or spare opens a third ball.
    return not (first == MAX_PINS or first + second == MAX_PINS)


def calculate_game_score(frames: Sequence[Frame]) -> List[Frame]:
    """Return copies of ``frames`` with cumulative scores and completion set.

    The input is never mutated, so the result can be fed back in and will
    score identically.
    """
    scored: List[Frame] = []
    cumulative = 0
    for index, frame in enumerate(frames):
        cumulative += frame_score(frames, index)
        updated = frame.copy()
        updated.cumulative_score = cumulative
        updated.is_complete = is_frame_complete(frame.throws, frame.frame_number)
        scored.append(updated)
    return scored


def is_game_complete(frames: Sequence[Frame]) -> bool:
    return all(is_frame_complete(f.throws, f.frame_number) for f in frames)


def get_game_statistics(frames: Sequence[Frame]) -> Dict[str, int]:
    """Count strikes, spares and open frames.

    Frame 10 can hold up to three marks. A ten on the second ball only counts
    as a strike when the first ball was a strike (fresh rack); otherwise it
    finishes a spare. The third ball is judged against whatever rack it was
    bowled at.

    An open tenth counts as an open, and a spare made on the third ball counts
    as a spare. Tallies that skip the tenth frame's open and fill-ball spare
    (one fewer open for a gutter game) will therefore differ from these.
    """
    strikes = spares = opens = 0
    for frame in frames:
        throws = frame.throws
        if not throws:
            continue
        if frame.frame_number < MAX_FRAMES:
            if throws[0] == MAX_PINS:
                strikes += 1
            elif len(throws) == 2 and sum(throws) == MAX_PINS:
                spares += 1
            elif len(throws) == 2:
                opens += 1
            continue

        first = throws[0]
        if first == MAX_PINS:
            strikes += 1
        if len(throws) < 2:
            continue
        second = throws[1]
        if first == MAX_PINS:
            if second == MAX_PINS:
                strikes += 1
        elif first + second == MAX_PINS:
            spares += 1
        else:
            opens += 1
        if len(throws) < 3:
            continue
        third = throws[2]
        fresh_rack = second == MAX_PINS or (
            first != MAX_PINS and first + second == MAX_PINS
        )
        if fresh_rack:
            if third == MAX_PINS:
                strikes += 1
        elif second + third == MAX_PINS:
            spares += 1
    return {"strikes": strikes, "spares": spares, "opens": opens}


def throw_display(frame_number: int, throw_index: int, throws: Sequence[int]) -> str:
    """Scorecard mark for ``throws[throw_index]`` (0-based index)."""
    value: Optional[int] = throws[throw_index] if throw_index < len(throws) else None
    if value is None:
        return "-"

    if frame_number >= MAX_FRAMES:
        if throw_index > 0:
            previous = throws[throw_index - 1]
            fresh = throw_index == 1 and previous == MAX_PINS
            if throw_index == 2:
                fresh = throws[1] == MAX_PINS or (
                    throws[0] != MAX_PINS and throws[0] + throws[1] == MAX_PINS
                )
            if not fresh and previous + value == MAX_PINS:
                return "/"
        if value == MAX_PINS:
            return "X"
    else:
        if throw_index == 0 and value == MAX_PINS:
            return "X"
        if throw_index == 1 and throws[0] + value == MAX_PINS:
            return "/"
    return "-" if value == 0 else str(value)
