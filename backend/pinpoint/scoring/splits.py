"""Split detection for pin-by-pin entry.

A leave is a split when the head pin is down and at least two of the pins
still standing do not touch each other. Classification is advisory only and
never feeds back into scoring.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from .frames import ALL_PINS

HEAD_PIN = 1

PIN_ADJACENCY: Dict[int, Tuple[int, ...]] = {
    1: (2, 3),
    2: (1, 3, 4, 5),
    3: (1, 2, 5, 6),
    4: (2, 5, 7, 8),
    5: (2, 3, 4, 6, 8, 9),
    6: (3, 5, 9, 10),
    7: (4, 8),
    8: (4, 5, 7, 9),
    9: (5, 6, 8, 10),
    10: (6, 9),
}

DIFFICULTY_SCORES: Dict[str, int] = {
    "very_easy": 1,
    "easy": 2,
    "medium": 3,
    "hard": 4,
    "very_hard": 5,
    "unknown": 3,
}

DEFAULT_ADVICE = "Focus on accuracy and try to hit one pin into the other."

SPLIT_ADVICE: Dict[str, str] = {
    "7-10": "Aim for the 7 pin and try to slide it into the 10. Use a straight ball with power.",
    "4-6": "Hit either pin at an angle to slide it into the other. Medium speed works best.",
    "2-7": "Easy conversion - aim between the pins or hit the 2 pin at an angle.",
    "3-10": "Hit the 3 pin at an angle to send it across the lane to the 10.",
    "5-7": "Aim for the 5 pin to deflect into the 7.",
    "5-10": "Aim for the 5 pin to deflect into the 10.",
    "8-10": "Hit the 8 pin firmly to slide it into the 10.",
    "7-9": "Hit either pin at an angle to convert.",
}


def split_key(pins: Iterable[int]) -> str:
    return "-".join(str(p) for p in sorted(pins))


@dataclass(frozen=True)
class SplitInfo:
    name: str
    pins: Tuple[int, ...]
    difficulty: str
    conversion_rate: float
    description: str

    @property
    def key(self) -> str:
        return split_key(self.pins)

    @property
    def advice(self) -> str:
        return split_advice(self)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "pins": list(self.pins),
            "difficulty": self.difficulty,
            "conversionRate": self.conversion_rate,
            "description": self.description,
            "advice": self.advice,
        }


def _entry(name, pins, difficulty, rate, description) -> Tuple[str, SplitInfo]:
    info = SplitInfo(name, tuple(pins), difficulty, rate, description)
    return info.key, info


# Conversion rates are approximate professional percentages.
SPLIT_CATALOG: Dict[str, SplitInfo] = dict(
    [
        _entry("7-10 Split", (7, 10), "very_hard", 0.5, "The most famous split in bowling"),
        _entry("4-6 Split", (4, 6), "medium", 15.2, "Common middle split"),
        _entry("4-6-7 Split", (4, 6, 7), "hard", 8.5, "Three-pin split on left side"),
        _entry("Big Four", (4, 6, 7, 10), "very_hard", 2.1, "Four corner pins remaining"),
        _entry("4-6-10 Split", (4, 6, 10), "hard", 6.8, "Wide three-pin split"),
        _entry("Greek Church", (7, 8, 9, 10), "very_hard", 1.8, "Back row standing"),
        _entry("8-10 Split", (8, 10), "hard", 12.3, "Right side split"),
        _entry("7-9 Split", (7, 9), "hard", 11.7, "Left side split"),
        _entry("2-7 Split", (2, 7), "easy", 65.2, "Baby split on left"),
        _entry("3-10 Split", (3, 10), "easy", 68.1, "Baby split on right"),
        _entry("5-7 Split", (5, 7), "medium", 25.4, "Left lane split"),
        _entry("5-10 Split", (5, 10), "medium", 24.8, "Right lane split"),
        _entry("6-7-10 Split", (6, 7, 10), "very_hard", 3.2, "Three wide pins"),
        _entry("4-7-10 Split", (4, 7, 10), "very_hard", 2.8, "Triangle split"),
        _entry("2-4-7 Split", (2, 4, 7), "hard", 9.2, "Left side cluster"),
        _entry("3-6-10 Split", (3, 6, 10), "hard", 8.8, "Right side cluster"),
    ]
)


def is_split(standing_pins: Iterable[int]) -> bool:
    standing = sorted(set(standing_pins))
    if len(standing) < 2 or HEAD_PIN in standing:
        return False
    for i, pin in enumerate(standing):
        for other in standing[i + 1:]:
            if other not in PIN_ADJACENCY.get(pin, ()):
                return True
    return False


def identify_split(
    standing_pins: Iterable[int], *, policy: str = "catalog"
) -> Optional[SplitInfo]:
    """Classify a leave by its standing pins.

    With ``policy="catalog"`` only named splits are returned. With
    ``policy="any"`` an uncatalogued split gets a generic entry.
    """
    standing = tuple(sorted(set(standing_pins)))
    if not is_split(standing):
        return None
    key = split_key(standing)
    found = SPLIT_CATALOG.get(key)
    if found is not None or policy != "any":
        return found
    return SplitInfo(
        name=f"{key} Split",
        pins=standing,
        difficulty="unknown",
        conversion_rate=0.0,
        description="Uncommon split pattern",
    )


def analyze_split_from_pins(
    knocked_down_pins: Iterable[int], *, policy: str = "catalog"
) -> Optional[SplitInfo]:
    standing = ALL_PINS - set(knocked_down_pins)
    return identify_split(standing, policy=policy)


def split_difficulty_score(split: Optional[SplitInfo]) -> int:
    if split is None:
        return 0
    return DIFFICULTY_SCORES.get(split.difficulty, 3)


def split_advice(split: Optional[SplitInfo]) -> Optional[str]:
    if split is None:
        return None
    return SPLIT_ADVICE.get(split.key, DEFAULT_ADVICE)


def catalog_entries() -> Sequence[SplitInfo]:
    return sorted(SPLIT_CATALOG.values(), key=lambda s: (len(s.pins), s.pins))
