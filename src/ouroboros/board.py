"""Board state and the single-tick simulation rules."""

from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import dataclass

from ouroboros.config import check_grid_size
from ouroboros.errors import BoardFullError
from ouroboros.grid import CellType, Grid
from ouroboros.random_source import RandomSource
from ouroboros.vector import Direction, Vector

logger = logging.getLogger(__name__)

# Rejected samples allowed per grid cell before placement scans for free cells.
_PLACEMENT_ATTEMPTS_PER_CELL = 4


class DeathCause(enum.Enum):
    """Why a tick ended the round."""

    SELF = "self"
    WALL = "wall"
    FILLED = "filled"


@dataclass(frozen=True)
class Moved:
    """The body slid forward one cell; *tail* is the cell it vacated."""

    head: Vector
    tail: Vector


@dataclass(frozen=True)
class Grew:
    """The head reached the target; *target* is the newly placed one."""

    head: Vector
    target: Vector


@dataclass(frozen=True)
class Died:
    """The head would have entered *next_head*, which is fatal."""

    next_head: Vector
    cause: DeathCause


TickResult = Moved | Grew | Died


class BoardState:
    """Grid, body, heading and target of one round.

    The body is a deque ordered tail (``body[0]``) to head (``body[-1]``).
    :meth:`advance` is a pure step: it never restarts the round on death,
    it only reports :class:`Died` and leaves the body untouched.
    """

    def __init__(
        self,
        grid_size: int,
        random_source: RandomSource | None = None,
    ) -> None:
        self.grid_size = check_grid_size(grid_size)
        self.random = random_source if random_source is not None else RandomSource()
        self.grid = Grid(self.grid_size)
        self.heading: Direction = Direction.RIGHT
        self.body: deque[Vector] = deque()
        self.target = Vector(0, 0)
        self.ticks = 0
        self.initialize()

    @property
    def center(self) -> Vector:
        middle = self.grid_size // 2
        return Vector(middle, middle)

    @property
    def head(self) -> Vector:
        return self.body[-1]

    @property
    def tail(self) -> Vector:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def initialize(self, grid_size: int | None = None) -> None:
        """Spawn a fresh three-cell body through the center and place a target."""
        if grid_size is not None and grid_size != self.grid_size:
            self.grid_size = check_grid_size(grid_size)
            self.grid = Grid(self.grid_size)
        self.grid.clear()
        self.ticks = 0

        self.heading = self.random.choice(Direction.movements())
        center = self.center
        step = self.heading.vector
        self.body = deque([center - step, center, center + step])
        for cell in self.body:
            self.grid.set(cell, CellType.BODY)

        self.place_target()
        logger.debug(
            "Spawned body %s heading %s, target at %s.",
            [c.to_tuple() for c in self.body], self.heading.name,
            self.target.to_tuple(),
        )

    def set_state(
        self,
        body: list[Vector],
        heading: Direction,
        target: Vector,
    ) -> None:
        """Replace the round with an explicit layout (tail first).

        Used to replay a known position, e.g. in tests or puzzles.
        """
        if not body:
            raise ValueError("body must contain at least one cell.")
        if len(set(body)) != len(body):
            raise ValueError("body cells must be distinct.")
        if not heading.is_movement:
            raise ValueError("heading must be a movement direction.")
        for cell in (*body, target):
            if not self.grid.in_bounds(cell):
                raise ValueError(f"Cell {cell.to_tuple()} is outside the grid.")
        if target in body:
            raise ValueError("target must not lie on the body.")

        self.grid.clear()
        self.body = deque(body)
        for cell in self.body:
            self.grid.set(cell, CellType.BODY)
        self.heading = heading
        self.target = target
        self.grid.set(target, CellType.TARGET)
        self.ticks = 0

    def occupies(self, cell: Vector) -> bool:
        """Check whether the body covers *cell*."""
        return self.grid.in_bounds(cell) and self.grid.get(cell) == CellType.BODY

    def place_target(self) -> Vector:
        """Move the target to a random cell not covered by the body.

        Samples uniformly until a free cell turns up. On a nearly full board
        the sampling gives up after a bounded number of misses and picks
        uniformly among the remaining free cells instead.
        """
        if self.grid.in_bounds(self.target) and self.grid.get(self.target) == CellType.TARGET:
            self.grid.set(self.target, CellType.EMPTY)

        attempts = _PLACEMENT_ATTEMPTS_PER_CELL * self.grid_size * self.grid_size
        for _ in range(attempts):
            candidate = Vector(
                self.random.int_in_range(0, self.grid_size),
                self.random.int_in_range(0, self.grid_size),
            )
            if not self.occupies(candidate):
                break
        else:
            free = self.grid.empty_cells()
            if not free:
                raise BoardFullError(
                    f"No free cell left for a target on a {self.grid_size}x"
                    f"{self.grid_size} board."
                )
            logger.warning(
                "Target sampling missed %d times; choosing among %d free cells.",
                attempts, len(free),
            )
            candidate = self.random.choice(free)

        self.target = candidate
        self.grid.set(candidate, CellType.TARGET)
        return candidate

    def set_heading(self, direction: Direction) -> bool:
        """Request a turn.

        ``Direction.NONE`` is not a heading and is ignored here; the
        controller treats it as the pause toggle. A 180° reversal is ignored
        as well. Returns whether the request was accepted.
        """
        if direction is Direction.NONE:
            return False
        if direction.is_inverse(self.heading):
            logger.debug("Ignored reversal from %s to %s.", self.heading.name, direction.name)
            return False
        self.heading = direction
        return True

    def advance(self) -> TickResult:
        """Move the body one cell along the heading."""
        next_head = self.head + self.heading.vector

        if self.occupies(next_head):
            return Died(next_head, DeathCause.SELF)
        if not self.grid.in_bounds(next_head):
            return Died(next_head, DeathCause.WALL)

        ate_target = next_head == self.target
        self.body.append(next_head)
        self.grid.set(next_head, CellType.BODY)
        self.ticks += 1

        if ate_target:
            return Grew(next_head, self.place_target())

        tail = self.body.popleft()
        self.grid.set(tail, CellType.EMPTY)
        return Moved(next_head, tail)

    def snapshot(self) -> dict:
        """Return the full board as plain, JSON-serializable data."""
        return {
            "grid_size": self.grid_size,
            "heading": self.heading.name,
            "body": [list(cell.to_tuple()) for cell in self.body],
            "target": list(self.target.to_tuple()),
            "length": len(self.body),
            "ticks": self.ticks,
            "grid": self.grid.to_dict(),
        }
