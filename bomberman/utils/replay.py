"""Replay files: per-tick commands plus the positions they produced.

Because every random draw is keyed on the seed, a replay's command column
together with its seed is enough to play the same game again.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from bomberman.core.enums import Command

if TYPE_CHECKING:
    from bomberman.core.enums import Outcome
    from bomberman.core.world_state import WorldState

logger = logging.getLogger(__name__)

REPLAY_VERSION = "1.0"


class ReplayRecorder:
    """Accumulates tick records in memory and writes them out as JSON."""

    __slots__ = ("_path", "_ticks", "_seed")

    def __init__(self, path: str | Path, seed: int) -> None:
        self._path = Path(path)
        self._seed = seed
        self._ticks: list[dict[str, Any]] = []

    @property
    def ticks(self) -> list[dict[str, Any]]:
        return self._ticks

    def record_tick(
        self,
        tick: int,
        command: Command | None,
        world: WorldState,
        outcome: Outcome | None = None,
    ) -> None:
        reg = world.registry
        self._ticks.append(
            {
                "tick": tick,
                "command": command.name if command is not None else None,
                "player": [reg.player.pos.x, reg.player.pos.y],
                "capacity": reg.player.capacity,
                "enemies": [[e.pos.x, e.pos.y] for e in reg.enemies],
                "bombs": [[b.pos.x, b.pos.y] for b in reg.bombs],
                "door_visible": reg.door.visible,
                "outcome": outcome.name if outcome is not None else None,
            }
        )

    def flush(self) -> None:
        replay = {
            "version": REPLAY_VERSION,
            "seed": self._seed,
            "total_ticks": len(self._ticks),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))


def read_replay(path: str | Path) -> tuple[int, list[Command | None]]:
    """Return the seed and the per-tick command column of a replay file.

    Raises ValueError if the file is not a replay this version understands.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if data.get("version") != REPLAY_VERSION:
        raise ValueError(f"Unsupported replay version: {data.get('version')!r}")
    try:
        commands = [Command[t["command"]] if t["command"] else None for t in data["ticks"]]
    except KeyError as exc:
        raise ValueError(f"Malformed replay tick: {exc}") from exc
    return int(data["seed"]), commands
