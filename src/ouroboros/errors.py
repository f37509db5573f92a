"""Exception hierarchy for the game core."""

from __future__ import annotations


class OuroborosError(Exception):
    """Base class for all errors raised by the game core."""


class InvalidConfigError(OuroborosError, ValueError):
    """A game was configured with an unusable grid size or speed."""


class InvalidRangeError(OuroborosError, ValueError):
    """An integer range was requested whose upper bound is not above its lower bound."""


class EmptyOptionsError(OuroborosError, IndexError):
    """A random choice was requested from an empty sequence."""


class BoardFullError(OuroborosError):
    """No free cell is left on the board for a new target."""


class ClockError(OuroborosError, RuntimeError):
    """The game clock was used out of order."""


class AlreadyRunningError(ClockError):
    """``start`` was called on a clock that is already started."""


class ClockNotStartedError(ClockError):
    """The clock was asked to resume or tick before ``start``."""
