"""Translate raw key and pointer input into game commands."""

from __future__ import annotations

import enum
import logging

from ouroboros.vector import Direction, Vector

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_DISTANCE = 25.0

PAUSE_KEY = " "

# Arrow keys and the WASD letters (either case) steer the same way.
_KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowLeft": Direction.LEFT,
    "ArrowUp": Direction.UP,
    "ArrowRight": Direction.RIGHT,
    "ArrowDown": Direction.DOWN,
    "a": Direction.LEFT,
    "w": Direction.UP,
    "d": Direction.RIGHT,
    "s": Direction.DOWN,
    "A": Direction.LEFT,
    "W": Direction.UP,
    "D": Direction.RIGHT,
    "S": Direction.DOWN,
}


class Modifier(enum.Flag):
    """Modifier keys that turn a key press into a non-game shortcut.

    Shift is deliberately absent: it only changes letter case.
    """

    NONE = 0
    ALT = enum.auto()
    CTRL = enum.auto()
    META = enum.auto()


class GestureInterpreter:
    """Stateless mapping from input gestures to commands.

    Every method returns a :class:`Direction` (``Direction.NONE`` meaning
    "toggle pause") or ``None`` when the input is not a game command.
    """

    def __init__(self, minimum_distance: float = DEFAULT_MINIMUM_DISTANCE) -> None:
        self.minimum_distance = minimum_distance

    @staticmethod
    def from_key(key: str, modifiers: Modifier = Modifier.NONE) -> Direction | None:
        if modifiers:
            return None
        if key == PAUSE_KEY:
            return Direction.NONE
        return _KEY_DIRECTIONS.get(key)

    def from_drag(
        self,
        start: Vector,
        end: Vector,
        minimum_distance: float | None = None,
    ) -> Direction:
        """Interpret a drag or swipe from *start* to *end*.

        Drags shorter than *minimum_distance* count as a tap. Otherwise the
        axis with the larger travel wins; ties go to the vertical axis.
        """
        if minimum_distance is None:
            minimum_distance = self.minimum_distance
        diff = end - start
        if diff.hypot() < minimum_distance:
            return Direction.NONE
        if abs(diff.x) > abs(diff.y):
            return Direction.RIGHT if diff.x > 0 else Direction.LEFT
        return Direction.DOWN if diff.y > 0 else Direction.UP

    @staticmethod
    def from_tap() -> Direction:
        return Direction.NONE


class DragTracker:
    """Pairs pointer-down and pointer-up positions into a single drag."""

    def __init__(self, interpreter: GestureInterpreter | None = None) -> None:
        self.interpreter = interpreter if interpreter is not None else GestureInterpreter()
        self._start: Vector | None = None

    @property
    def active(self) -> bool:
        return self._start is not None

    def press(self, point: Vector) -> None:
        self._start = point

    def release(self, point: Vector) -> Direction | None:
        """Finish the drag at *point*; ``None`` if no press was seen."""
        if self._start is None:
            logger.debug("Release at %s without a matching press.", point.to_tuple())
            return None
        start, self._start = self._start, None
        return self.interpreter.from_drag(start, point)

    def cancel(self) -> None:
        self._start = None
