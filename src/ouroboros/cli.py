"""Command-line tools: headless simulation, a timed demo game, config files."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time

from ouroboros.board import BoardState, Died, Grew
from ouroboros.config import GameConfig
from ouroboros.controller import GameController, GameListener
from ouroboros.errors import InvalidConfigError
from ouroboros.random_source import RandomSource
from ouroboros.vector import Direction, Vector

logger = logging.getLogger(__name__)


def greedy_direction(state: dict) -> Direction:
    """Pick the safe turn that gets closest to the target.

    *state* is a board snapshot. Falls back to the current heading when no
    neighbouring cell is safe.
    """
    heading = Direction[state["heading"]]
    size = state["grid_size"]
    body = {Vector(x, y) for x, y in state["body"]}
    head = Vector(*state["body"][-1])
    target = Vector(*state["target"])

    best: tuple[int, Direction] | None = None
    for direction in Direction.movements():
        if direction.is_inverse(heading):
            continue
        cell = head + direction.vector
        if not (0 <= cell.x < size and 0 <= cell.y < size) or cell in body:
            continue
        distance = abs(target.x - cell.x) + abs(target.y - cell.y)
        if best is None or distance < best[0]:
            best = (distance, direction)
    return heading if best is None else best[1]


class _LoggingListener(GameListener):
    """Logs render events and keeps simple tallies for the summary."""

    def __init__(self) -> None:
        self.moves = 0
        self.growths = 0
        self.deaths = 0

    def on_spawn(self, body: tuple[Vector, ...], target: Vector) -> None:
        logger.info(
            "Spawn: head %s, target %s.", body[-1].to_tuple(), target.to_tuple(),
        )

    def on_move(self, head: Vector, tail: Vector) -> None:
        self.moves += 1
        logger.debug("Move: +%s -%s", head.to_tuple(), tail.to_tuple())

    def on_grow(self, head: Vector, target: Vector) -> None:
        self.growths += 1
        logger.info("Grow: head %s, next target %s.", head.to_tuple(), target.to_tuple())

    def on_death(self) -> None:
        self.deaths += 1
        logger.info("Death #%d.", self.deaths)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ouroboros",
        description="Ouroboros snake engine: simulation and demo tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Fast-forward a board with a greedy autopilot.",
    )
    sim_p.add_argument("--ticks", type=int, default=1_000)
    sim_p.add_argument("--grid-size", type=int, default=15)
    sim_p.add_argument("--seed", type=int, default=None)

    # --- play ---
    play_p = sub.add_parser(
        "play", help="Run a real-time game driven by the autopilot.",
    )
    play_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (overrides other flags).",
    )
    play_p.add_argument("--seconds", type=float, default=5.0)
    play_p.add_argument("--grid-size", type=int, default=None)
    play_p.add_argument("--speed", type=float, default=None)
    play_p.add_argument("--seed", type=int, default=None)

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write a game config JSON file.")
    cfg_p.add_argument("output", help="Path of the config file to write.")
    cfg_p.add_argument("--grid-size", type=int, default=None)
    cfg_p.add_argument("--speed", type=float, default=None)
    cfg_p.add_argument("--seed", type=int, default=None)
    cfg_p.add_argument("--pause-after-death", action="store_true")

    return parser


def _config_from_args(args: argparse.Namespace) -> GameConfig:
    base = GameConfig.load(args.config) if getattr(args, "config", None) else GameConfig()
    overrides: dict = {}
    flag_map = {
        "grid_size": "grid_size",
        "speed": "ticks_per_second",
        "seed": "seed",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    if getattr(args, "pause_after_death", False):
        overrides["pause_after_death"] = True

    if not overrides:
        return base
    d = base.to_dict()
    d.update(overrides)
    return GameConfig(**d)


def _run_simulate(args: argparse.Namespace) -> int:
    board = BoardState(args.grid_size, RandomSource(args.seed))
    deaths = 0
    growths = 0
    best = len(board)
    for _ in range(args.ticks):
        board.set_heading(greedy_direction(board.snapshot()))
        result = board.advance()
        if isinstance(result, Died):
            deaths += 1
            board.initialize()
        elif isinstance(result, Grew):
            growths += 1
            best = max(best, len(board))
    print(  # noqa: T201
        f"Simulated: {args.ticks} ticks, {growths} targets, "
        f"{deaths} deaths, best length {best}"
    )
    return 0


async def _play(config: GameConfig, seconds: float) -> None:
    listener = _LoggingListener()
    controller = GameController(config)
    controller.add_listener(listener)
    controller.start()
    try:
        deadline = time.monotonic() + seconds
        poll = config.tick_interval_ms / 2000.0
        while time.monotonic() < deadline:
            await asyncio.sleep(poll)
            state = controller.snapshot()
            direction = greedy_direction(state)
            if direction.name != state["heading"]:
                controller.handle_gesture(direction)
    finally:
        controller.dispose()
    print(  # noqa: T201
        f"Played: {seconds:.1f}s, {listener.moves + listener.growths} ticks, "
        f"{listener.growths} targets, {controller.rounds} deaths, "
        f"best length {controller.best_length}"
    )


def _run_play(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    asyncio.run(_play(config, args.seconds))
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``ouroboros`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "play": _run_play,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except InvalidConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
