"""Repeating tick timer driven by the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ouroboros.errors import AlreadyRunningError, ClockNotStartedError

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


class GameClock:
    """Fires a callback at a fixed interval, with pause and immediate ticks.

    A single asyncio task sleeps between ticks. Callbacks run synchronously
    on the event loop, so two ticks can never execute at the same time; a
    tick requested from inside a running tick is dropped.

    All methods must be called from the thread running the event loop, and
    :meth:`start`, :meth:`resume` and :meth:`restart_immediately` need a
    running loop.
    """

    def __init__(self) -> None:
        self._interval: float | None = None
        self._on_tick: TickCallback | None = None
        self._task: asyncio.Task | None = None
        self._in_tick = False
        self._held = False
        self.ticks = 0

    @property
    def started(self) -> bool:
        return self._on_tick is not None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval_ms(self) -> float | None:
        return None if self._interval is None else self._interval * 1000

    def start(self, interval_ms: float, on_tick: TickCallback) -> None:
        """Begin calling *on_tick* every *interval_ms* milliseconds."""
        if self.started:
            raise AlreadyRunningError("Clock is already started.")
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self._interval = interval_ms / 1000.0
        self._on_tick = on_tick
        self._held = False
        self._schedule()
        logger.debug("Clock started at %.1f ms per tick.", interval_ms)

    def pause(self) -> None:
        """Stop firing. Does nothing if already paused."""
        self._held = True
        if self.running:
            self._cancel()
            logger.debug("Clock paused after %d ticks.", self.ticks)

    def resume(self) -> None:
        """Resume firing at the configured interval."""
        self._require_started()
        self._held = False
        if not self.running:
            self._schedule()
            logger.debug("Clock resumed.")

    def toggle(self) -> None:
        """Pause a running clock or resume a paused one."""
        if self.running:
            self.pause()
        else:
            self.resume()

    def restart_immediately(self, on_tick: TickCallback) -> None:
        """Tick right now, then restart the period from this moment.

        The pending periodic tick is cancelled first so no tick scheduled
        before this call can fire afterwards. A paused clock is resumed,
        unless the tick itself pauses or closes it.
        """
        self._require_started()
        if self._in_tick:
            logger.debug("Dropped immediate tick requested during a tick.")
            return
        self._cancel()
        self._on_tick = on_tick
        self._held = False
        try:
            self._fire()
        finally:
            if self.started and not self._held:
                self._schedule()

    def close(self) -> None:
        """Stop the clock for good. Safe to call more than once."""
        self._cancel()
        self._on_tick = None
        self._interval = None

    def _require_started(self) -> None:
        if not self.started:
            raise ClockNotStartedError("Clock has not been started.")

    def _schedule(self) -> None:
        self._task = asyncio.get_running_loop().create_task(self._run())

    def _cancel(self) -> None:
        if self._task is not None:
            if not self._task.done():
                self._task.cancel()
            self._task = None

    def _fire(self) -> None:
        if self._in_tick:
            logger.debug("Dropped overlapping tick.")
            return
        assert self._on_tick is not None  # noqa: S101
        self._in_tick = True
        try:
            self._on_tick()
        finally:
            self._in_tick = False
        self.ticks += 1

    async def _run(self) -> None:
        interval = self._interval
        assert interval is not None  # noqa: S101
        try:
            while True:
                await asyncio.sleep(interval)
                self._fire()
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Tick callback failed; clock stopped.")
            if self._task is asyncio.current_task():
                self._task = None
