"""Frame, game and per-throw pin-set records shared by the scoring engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from ..time_utils import utc_now

MAX_PINS = 10
MAX_FRAMES = 10
ALL_PINS: frozenset[int] = frozenset(range(1, MAX_PINS + 1))


@dataclass
class Frame:
    """One of the ten scoring units of a game.

    ``throws`` is always a list, in the order the balls were bowled.
    ``cumulative_score`` and ``is_complete`` are derived by the score
    calculator and should not be edited by hand.
    """

    frame_number: int
    throws: List[int] = field(default_factory=list)
    cumulative_score: Optional[int] = None
    is_complete: bool = False

    @property
    def is_tenth(self) -> bool:
        return self.frame_number == MAX_FRAMES

    def copy(self) -> "Frame":
        return Frame(
            frame_number=self.frame_number,
            throws=list(self.throws),
            cumulative_score=self.cumulative_score,
            is_complete=self.is_complete,
        )

    def to_dict(self) -> Dict:
        return {
            "frameNumber": self.frame_number,
            "throws": list(self.throws),
            "cumulativeScore": self.cumulative_score,
            "isComplete": self.is_complete,
        }


@dataclass
class Game:
    frames: List[Frame]
    created_at: datetime = field(default_factory=utc_now)

    @property
    def total_score(self) -> int:
        return self.frames[-1].cumulative_score or 0

    @property
    def is_complete(self) -> bool:
        return all(f.is_complete for f in self.frames)

    def frame(self, frame_number: int) -> Frame:
        return self.frames[frame_number - 1]

    def to_record(self) -> Dict:
        """Return the hand-off shape consumed by the persistence layer."""
        # Imported lazily: the calculator depends on this module.
        from .calculator import get_game_statistics

        stats = get_game_statistics(self.frames)
        return {
            "frames": [f.to_dict() for f in self.frames],
            "totalScore": self.total_score,
            "strikes": stats["strikes"],
            "spares": stats["spares"],
            "opens": stats["opens"],
            "createdAt": self.created_at.isoformat(),
        }


def create_empty_game(created_at: datetime | None = None) -> Game:
    """Build a game of ten empty frames numbered 1-10."""
    frames = [Frame(frame_number=n) for n in range(1, MAX_FRAMES + 1)]
    if created_at is None:
        return Game(frames=frames)
    return Game(frames=frames, created_at=created_at)


def frames_from_throws(throws_by_frame: Iterable[Iterable[int]]) -> List[Frame]:
    """Fill a fresh set of frames with the given throw lists, in frame order."""
    frames = create_empty_game().frames
    for frame, throws in zip(frames, throws_by_frame):
        frame.throws = [int(t) for t in throws]
    return frames


PinSetKey = Tuple[int, int]


class PinSetMap:
    """Knocked-down pin sets keyed by ``(frame_number, throw_index)``.

    ``throw_index`` is 1-based, matching the throw numbers shown to the
    bowler. The map is owned by the session that owns the game and is
    discarded together with it.
    """

    def __init__(self) -> None:
        self._sets: Dict[PinSetKey, frozenset[int]] = {}

    def get(self, frame_number: int, throw_index: int) -> Optional[frozenset[int]]:
        return self._sets.get((frame_number, throw_index))

    def store(self, frame_number: int, throw_index: int, pins: Iterable[int]) -> None:
        self._sets[(frame_number, throw_index)] = frozenset(pins)

    def discard(self, frame_number: int, throw_index: int) -> None:
        self._sets.pop((frame_number, throw_index), None)

    def discard_frame(self, frame_number: int) -> None:
        for key in [k for k in self._sets if k[0] == frame_number]:
            self._sets.pop(key, None)

    def clear(self) -> None:
        self._sets.clear()

    def __contains__(self, key: PinSetKey) -> bool:
        return key in self._sets

    def __len__(self) -> int:
        return len(self._sets)

    def to_dict(self) -> Dict[str, List[int]]:
        return {
            f"{frame}-{throw}": sorted(pins)
            for (frame, throw), pins in sorted(self._sets.items())
        }
