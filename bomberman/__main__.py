"""Entry point: ``python -m bomberman``.

Supports two modes:
  - ``python -m bomberman``        → Launch the FastAPI server with a live game
  - ``python -m bomberman cli``    → Headless game driven by a command script
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

# Script letters for the headless mode; "." is a tick with no input.
SCRIPT_KEYS = {
    "w": "MOVE_UP",
    "s": "MOVE_DOWN",
    "a": "MOVE_LEFT",
    "d": "MOVE_RIGHT",
    "b": "PLANT_BOMB",
    "e": "SAVE",
    "q": "QUIT",
    ".": None,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="The Legend of Bomberman — grid arcade engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI game server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--save-file", type=str, default="game_save.txt")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless game from a command script")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--commands", type=str, default="", help="One letter per tick: w a s d b e q .")
    cli.add_argument("--load", action="store_true", help="Start from the save file instead of a new world")
    cli.add_argument("--save-file", type=str, default="game_save.txt")
    cli.add_argument("--replay", type=str, default="", help="Write a JSON replay of the run to this path")
    cli.add_argument("--from-replay", type=str, default="", help="Replay the seed and commands of a replay file")
    cli.add_argument("--realtime", action="store_true", help="Pace ticks on the wall clock")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def parse_script(script: str) -> list:
    """Turn a command script into one entry per tick (None = no input)."""
    from bomberman.core.enums import Command

    ticks = []
    for ch in script.lower():
        if ch.isspace():
            continue
        if ch not in SCRIPT_KEYS:
            raise ValueError(f"Unknown command letter {ch!r}")
        name = SCRIPT_KEYS[ch]
        ticks.append(Command[name] if name else None)
    return ticks


class TickClock:
    """Simulated clock that advances a fixed interval per tick."""

    __slots__ = ("_interval", "_now")

    def __init__(self, interval: float) -> None:
        self._interval = interval
        self._now = 0.0

    def __call__(self) -> float:
        return self._now

    def advance(self) -> None:
        self._now += self._interval


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from bomberman.api.app import create_app
    from bomberman.config import GameConfig

    config = GameConfig(seed=args.seed, save_file=args.save_file, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> int:
    import time

    from bomberman.config import GameConfig
    from bomberman.engine.game_loop import GameLoop
    from bomberman.systems.generator import WorldGenerator
    from bomberman.utils.logging import setup_logging
    from bomberman.utils.replay import ReplayRecorder, read_replay

    seed = args.seed
    script = parse_script(args.commands)
    if args.from_replay:
        seed, script = read_replay(args.from_replay)

    config = GameConfig(
        seed=seed,
        max_ticks=args.ticks,
        save_file=args.save_file,
        replay_file=args.replay,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    clock = TickClock(config.tick_interval)
    recorder = ReplayRecorder(config.replay_file, config.seed) if config.replay_file else None
    world = WorldGenerator(config).initialize(config.seed)
    loop = GameLoop(
        config=config, world=world, recorder=recorder,
        clock=time.monotonic if args.realtime else clock,
    )

    if args.load and not loop.load():
        print("No saved game found.")
        return 1

    try:
        for tick in range(config.max_ticks):
            if tick < len(script) and script[tick] is not None:
                loop.commands.push(script[tick])
            result = loop.tick_once()
            if result.saved is not None:
                print("Game saved successfully!" if result.saved else "Unable to save game!")
            if result.terminal:
                break
            clock.advance()
            if args.realtime:
                time.sleep(config.tick_interval)
    finally:
        if recorder:
            recorder.flush()

    snapshot = loop.create_snapshot()
    print("\n".join(snapshot.render_rows()))
    print(snapshot.status_line())
    if loop.outcome is not None:
        print(loop.outcome.message)
    return 0


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        raise SystemExit(_run_cli(args))


if __name__ == "__main__":
    main()
