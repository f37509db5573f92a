"""Ouroboros — grid snake game core."""

from ouroboros.board import BoardState, DeathCause, Died, Grew, Moved
from ouroboros.clock import GameClock
from ouroboros.config import GameConfig
from ouroboros.controller import GameController, GameListener
from ouroboros.errors import (
    AlreadyRunningError,
    BoardFullError,
    ClockNotStartedError,
    EmptyOptionsError,
    InvalidConfigError,
    InvalidRangeError,
    OuroborosError,
)
from ouroboros.gestures import DragTracker, GestureInterpreter, Modifier
from ouroboros.random_source import RandomSource
from ouroboros.vector import Direction, Vector

__all__ = [
    "AlreadyRunningError",
    "BoardFullError",
    "BoardState",
    "ClockNotStartedError",
    "DeathCause",
    "Died",
    "Direction",
    "DragTracker",
    "EmptyOptionsError",
    "GameClock",
    "GameConfig",
    "GameController",
    "GameListener",
    "GestureInterpreter",
    "Grew",
    "InvalidConfigError",
    "InvalidRangeError",
    "Modifier",
    "Moved",
    "OuroborosError",
    "RandomSource",
    "Vector",
]
