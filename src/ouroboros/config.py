"""Game configuration."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass
from numbers import Integral, Real
from pathlib import Path

from ouroboros.errors import InvalidConfigError

logger = logging.getLogger(__name__)


def _is_finite_number(value: object) -> bool:
    return (
        not isinstance(value, bool)
        and isinstance(value, Real)
        and math.isfinite(value)
    )


def check_grid_size(grid_size: object) -> int:
    """Return *grid_size* if it is an odd integer above 3, else raise.

    The fresh body is laid out symmetrically around a single center cell,
    which needs an odd side length.
    """
    if isinstance(grid_size, bool) or not isinstance(grid_size, Integral):
        raise InvalidConfigError(f"grid_size must be an integer, got {grid_size!r}.")
    if grid_size <= 3:
        raise InvalidConfigError("grid_size must be greater than 3.")
    if grid_size % 2 != 1:
        raise InvalidConfigError("grid_size must be odd.")
    return int(grid_size)


@dataclass(frozen=True)
class GameConfig:
    """Settings for a single game.

    Validated on construction so an invalid value never produces a
    partially-initialized game. Supports JSON round trips via
    :meth:`save` and :meth:`load`.
    """

    grid_size: int = 35
    ticks_per_second: float = 8.0
    minimum_drag_distance: float = 25.0
    pause_after_death: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        check_grid_size(self.grid_size)
        if not _is_finite_number(self.ticks_per_second) or self.ticks_per_second < 1:
            raise InvalidConfigError("ticks_per_second must be a finite number >= 1.")
        if (
            not _is_finite_number(self.minimum_drag_distance)
            or self.minimum_drag_distance < 0
        ):
            raise InvalidConfigError("minimum_drag_distance must be a finite number >= 0.")

    @property
    def tick_interval_ms(self) -> float:
        """Milliseconds between two scheduled ticks."""
        return 1000 / self.ticks_per_second

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
