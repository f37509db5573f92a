"""Game controller: owns the board and clock and talks to the outside."""

from __future__ import annotations

import logging

from ouroboros.board import BoardState, DeathCause, Died, Grew, Moved, TickResult
from ouroboros.clock import GameClock
from ouroboros.config import GameConfig
from ouroboros.errors import AlreadyRunningError, BoardFullError
from ouroboros.gestures import GestureInterpreter, Modifier
from ouroboros.random_source import RandomSource
from ouroboros.vector import Direction, Vector

logger = logging.getLogger(__name__)


class GameListener:
    """Receives render events. Override only the hooks you need.

    All coordinates are grid cells, never pixels. Payloads are copies, so
    holding on to them cannot affect the game.
    """

    def on_spawn(self, body: tuple[Vector, ...], target: Vector) -> None:
        """A fresh round started; draw everything from scratch."""

    def on_move(self, head: Vector, tail: Vector) -> None:
        """Draw *head* and erase *tail*."""

    def on_grow(self, head: Vector, target: Vector) -> None:
        """Draw *head* and the relocated *target*; nothing to erase."""

    def on_death(self) -> None:
        """The round ended; an ``on_spawn`` follows."""


class GameController:
    """Runs one game: board simulation, tick clock and render events.

    The controller is the only mutator of its board and the only owner of
    its clock. Call :meth:`start` from inside a running event loop, feed
    commands to :meth:`handle_gesture`, and :meth:`dispose` (or use it as a
    context manager) when done.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        random_source: RandomSource | None = None,
        clock: GameClock | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.random = (
            random_source if random_source is not None
            else RandomSource(self.config.seed)
        )
        self.clock = clock if clock is not None else GameClock()
        self.interpreter = GestureInterpreter(self.config.minimum_drag_distance)
        self.board = BoardState(self.config.grid_size, self.random)
        self.rounds = 0
        self.best_length = len(self.board)
        self._listeners: list[GameListener] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add_listener(self, listener: GameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self, paused: bool = False) -> None:
        """Spawn a round and start ticking at the configured speed."""
        if self._disposed:
            raise RuntimeError("GameController has been disposed.")
        if self.clock.started:
            raise AlreadyRunningError("Game is already started.")
        try:
            self._spawn()
            self.clock.start(self.config.tick_interval_ms, self.tick)
            if paused:
                self.clock.pause()
        except Exception:
            self.dispose()
            raise
        logger.info(
            "Game started on a %dx%d grid at %.1f ticks/s%s.",
            self.config.grid_size, self.config.grid_size,
            self.config.ticks_per_second, " (paused)" if paused else "",
        )

    def tick(self) -> TickResult:
        """Advance one step and notify listeners; restart on death."""
        try:
            result = self.board.advance()
        except BoardFullError:
            result = Died(self.board.head, DeathCause.FILLED)

        if isinstance(result, Moved):
            for listener in list(self._listeners):
                listener.on_move(result.head, result.tail)
        elif isinstance(result, Grew):
            self.best_length = max(self.best_length, len(self.board))
            for listener in list(self._listeners):
                listener.on_grow(result.head, result.target)
        else:
            logger.info(
                "Died (%s) at length %d after %d ticks.",
                result.cause.value, len(self.board), self.board.ticks,
            )
            self._end_round()
        return result

    def handle_gesture(self, command: Direction | None) -> None:
        """Apply an input command.

        ``Direction.NONE`` toggles pause. An accepted turn ticks immediately
        so the player sees it without waiting out the current interval.
        Commands arriving before :meth:`start` or after :meth:`dispose` are
        ignored.
        """
        if command is None or self._disposed or not self.clock.started:
            return
        if command is Direction.NONE:
            self.clock.toggle()
            return
        if self.board.set_heading(command):
            self.clock.restart_immediately(self.tick)

    def handle_key(self, key: str, modifiers: Modifier = Modifier.NONE) -> None:
        """Interpret a key press and apply the resulting command."""
        self.handle_gesture(self.interpreter.from_key(key, modifiers))

    def handle_drag(self, start: Vector, end: Vector) -> None:
        """Interpret a drag using the configured minimum drag distance."""
        self.handle_gesture(self.interpreter.from_drag(start, end))

    def handle_tap(self) -> None:
        self.handle_gesture(self.interpreter.from_tap())

    def snapshot(self) -> dict:
        state = self.board.snapshot()
        state["running"] = self.clock.running
        state["rounds"] = self.rounds
        state["best_length"] = self.best_length
        return state

    def dispose(self) -> None:
        """Stop the clock and drop listeners. Safe to call more than once.

        The board is left as-is and must not be used afterwards.
        """
        if self._disposed:
            return
        self._disposed = True
        self.clock.close()
        self._listeners.clear()
        logger.info("Game disposed after %d rounds.", self.rounds)

    def __enter__(self) -> GameController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def _end_round(self) -> None:
        for listener in list(self._listeners):
            listener.on_death()
        self.rounds += 1
        self._spawn()
        if self.config.pause_after_death:
            self.clock.pause()

    def _spawn(self) -> None:
        self.board.initialize()
        body = tuple(self.board.body)
        for listener in list(self._listeners):
            listener.on_spawn(body, self.board.target)
