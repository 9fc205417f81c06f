"""Pin-by-pin throw entry.

:class:`PinEntrySession` owns one game being entered by a single bowler. It
tracks which pins are standing for every throw, records the literal set of
pins knocked down on each throw, rescoring the whole game after every
confirmation, and moves the current frame/throw forward following the
completion rules of the score calculator.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Set

from .calculator import calculate_game_score, is_frame_complete, is_game_complete
from .frames import ALL_PINS, MAX_FRAMES, MAX_PINS, Game, PinSetMap, create_empty_game
from .splits import SplitInfo, analyze_split_from_pins

logger = logging.getLogger(__name__)

FrameChangedListener = Callable[[int, int], None]

QUICK_SELECT_KINDS = ("gutter", "strike", "half")


class PinEntryError(ValueError):
    """Raised when the session is driven in a way the bowler never could."""


class InvalidPinSelection(PinEntryError):
    pass


class GameNotFinished(PinEntryError):
    pass


class PinEntrySession:
    def __init__(self, *, split_policy: str = "catalog") -> None:
        self.split_policy = split_policy
        self.on_frame_changed: List[FrameChangedListener] = []
        self._init_state()

    def _init_state(self) -> None:
        self.game: Game = create_empty_game()
        self.pin_sets = PinSetMap()
        self.current_frame = 1
        self.current_throw = 1
        self.selected_pins: Set[int] = set()
        self.game_complete = False
        self.last_split: Optional[SplitInfo] = None

    # ------------------------------------------------------------------
    # Rack state
    # ------------------------------------------------------------------
    def _knocked(self, frame_number: int, throw_number: int) -> frozenset[int]:
        return self.pin_sets.get(frame_number, throw_number) or frozenset()

    def _is_fresh_rack(self, frame_number: int, throw_number: int) -> bool:
        if throw_number == 1:
            return True
        if frame_number < MAX_FRAMES:
            return False
        throws = self.game.frame(frame_number).throws
        if throw_number == 2:
            return len(throws) >= 1 and throws[0] == MAX_PINS
        if len(throws) < 2:
            return False
        if throws[0] == MAX_PINS:
            return throws[1] == MAX_PINS
        return throws[0] + throws[1] == MAX_PINS

    def available_pins(
        self, frame_number: Optional[int] = None, throw_number: Optional[int] = None
    ) -> frozenset[int]:
        """Pins standing, and so selectable, for the given throw."""
        if frame_number is None:
            frame_number = self.current_frame
        if throw_number is None:
            throw_number = self.current_throw
        if not 1 <= frame_number <= MAX_FRAMES:
            raise PinEntryError(f"frame {frame_number} is out of range")
        throws = self.game.frame(frame_number).throws

        if throw_number == 1:
            return ALL_PINS

        if frame_number < MAX_FRAMES:
            if throw_number != 2 or (throws and throws[0] == MAX_PINS):
                return frozenset()
            return ALL_PINS - self._knocked(frame_number, 1)

        if throw_number == 2:
            if throws and throws[0] == MAX_PINS:
                return ALL_PINS
            return ALL_PINS - self._knocked(frame_number, 1)

        if throw_number == 3:
            if len(throws) < 2:
                return frozenset()
            if self._is_fresh_rack(frame_number, 3):
                return ALL_PINS
            if throws[0] == MAX_PINS:
                return ALL_PINS - self._knocked(frame_number, 2)
            # Open tenth: no third ball.
            return frozenset()

        return frozenset()

    def standing_pins(self) -> frozenset[int]:
        return self.available_pins()

    @property
    def is_editing(self) -> bool:
        throws = self.game.frame(self.current_frame).throws
        return len(throws) >= self.current_throw

    # ------------------------------------------------------------------
    # Selection buffer
    # ------------------------------------------------------------------
    def toggle_pin(self, pin: int) -> Set[int]:
        """Add or remove ``pin`` from the selection.

        Pins that are not standing are ignored.
        """
        if self.game_complete:
            return self.selected_pins
        if pin in self.selected_pins:
            self.selected_pins.discard(pin)
            return self.selected_pins
        if pin not in self.available_pins():
            return self.selected_pins
        self.selected_pins.add(pin)
        return self.selected_pins

    def quick_select(self, kind: str) -> Set[int]:
        if kind not in QUICK_SELECT_KINDS:
            raise PinEntryError(f"unknown quick select {kind!r}")
        available = sorted(self.available_pins())
        if kind == "gutter":
            self.selected_pins = set()
        elif kind == "strike":
            self.selected_pins = set(available)
        else:
            self.selected_pins = set(available[: len(available) // 2])
        return self.selected_pins

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _move_to(self, frame_number: int, throw_number: int) -> None:
        previous = self.current_frame
        self.current_frame = frame_number
        self.current_throw = throw_number
        if previous != frame_number:
            self.last_split = None
            for listener in list(self.on_frame_changed):
                listener(previous, frame_number)

    def confirm_throw(self, selected_pins: Optional[Iterable[int]] = None) -> bool:
        """Record the selected pins as the current throw and advance.

        Returns ``False`` without changing anything once the game is complete.
        """
        if self.game_complete:
            return False

        pins = frozenset(self.selected_pins if selected_pins is None else selected_pins)
        available = self.available_pins()
        if not pins <= available:
            raise InvalidPinSelection(
                f"pins {sorted(pins - available)} are not standing for frame "
                f"{self.current_frame} throw {self.current_throw}"
            )

        frame_number, throw_number = self.current_frame, self.current_throw
        frame = self.game.frame(frame_number)
        index = throw_number - 1
        if index > len(frame.throws):
            raise PinEntryError(
                f"throw {throw_number} of frame {frame_number} cannot be bowled yet"
            )

        count = len(pins)
        if index < len(frame.throws):
            self._overwrite(frame_number, index, count)
        else:
            frame.throws.append(count)
        self.pin_sets.store(frame_number, throw_number, pins)
        logger.debug(
            "Frame %s throw %s: %s pin(s) %s",
            frame_number,
            throw_number,
            count,
            sorted(pins),
        )

        self.game.frames = calculate_game_score(self.game.frames)

        if count < MAX_PINS and self._is_fresh_rack(frame_number, throw_number):
            self.last_split = analyze_split_from_pins(pins, policy=self.split_policy)
        else:
            self.last_split = None

        self.selected_pins = set()
        self._advance(frame_number, throw_number)
        return True

    def _overwrite(self, frame_number: int, index: int, count: int) -> None:
        frame = self.game.frame(frame_number)
        frame.throws[index] = count
        if frame_number < MAX_FRAMES:
            if index == 0:
                # The rack the second ball faced is gone with the old first ball.
                del frame.throws[1:]
                self.pin_sets.discard(frame_number, 2)
            return
        if index < 2:
            del frame.throws[index + 1:]
            for later in range(index + 2, 4):
                self.pin_sets.discard(frame_number, later)

    def _advance(self, frame_number: int, throw_number: int) -> None:
        if is_game_complete(self.game.frames):
            self.game_complete = True
            logger.info("Game complete with score %s", self.game.total_score)
            return

        throws = self.game.frame(frame_number).throws
        if frame_number < MAX_FRAMES:
            if throws[0] == MAX_PINS or len(throws) == 2:
                self._move_to(frame_number + 1, 1)
            else:
                self._move_to(frame_number, 2)
            return

        if not is_frame_complete(throws, frame_number):
            self._move_to(frame_number, min(throw_number + 1, 3))
            return

        # Tenth frame is done but an earlier frame was left open by an edit.
        for frame in self.game.frames:
            if not frame.is_complete:
                self.select_frame_for_editing(frame.frame_number)
                return

    def select_frame_for_editing(self, frame_number: int) -> None:
        if not 1 <= frame_number <= MAX_FRAMES:
            raise PinEntryError(f"frame {frame_number} is out of range")
        if self.game_complete:
            return
        throws = self.game.frame(frame_number).throws
        if not throws:
            throw_number = 1
        elif frame_number < MAX_FRAMES:
            throw_number = 1 if throws[0] == MAX_PINS else 2
        elif len(throws) == 1:
            throw_number = 2
        elif len(throws) == 2:
            needs_third = throws[0] == MAX_PINS or throws[0] + throws[1] == MAX_PINS
            throw_number = 3 if needs_third else 2
        else:
            throw_number = 3
        self.selected_pins = set()
        self._move_to(frame_number, throw_number)

    def select_throw(self, frame_number: int, throw_number: int) -> None:
        """Position on a specific recorded (or next) throw for editing."""
        if not 1 <= frame_number <= MAX_FRAMES:
            raise PinEntryError(f"frame {frame_number} is out of range")
        throws = self.game.frame(frame_number).throws
        max_throw = 3 if frame_number == MAX_FRAMES else 2
        reachable = 1 <= throw_number <= min(len(throws) + 1, max_throw)
        if not reachable or (
            throw_number > 1 and not self.available_pins(frame_number, throw_number)
        ):
            raise PinEntryError(
                f"throw {throw_number} of frame {frame_number} is not available"
            )
        if self.game_complete:
            return
        self.selected_pins = set()
        self._move_to(frame_number, throw_number)

    def reset(self) -> None:
        previous = self.current_frame
        self._init_state()
        if previous != self.current_frame:
            for listener in list(self.on_frame_changed):
                listener(previous, self.current_frame)

    # ------------------------------------------------------------------
    # Hand-off
    # ------------------------------------------------------------------
    def to_record(self) -> Dict:
        if not self.game_complete:
            raise GameNotFinished("game is not complete")
        return self.game.to_record()

