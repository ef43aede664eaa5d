"""POST /api/v1/control/{action} and /command/{command} — lifecycle and input."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from bomberman.api.dependencies import get_engine_manager
from bomberman.api.engine_manager import EngineManager
from bomberman.api.schemas import ControlResponse
from bomberman.core.enums import Command

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


class CommandName(str, Enum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    bomb = "bomb"
    save = "save"
    quit = "quit"


_COMMANDS: dict[CommandName, Command] = {
    CommandName.up: Command.MOVE_UP,
    CommandName.down: Command.MOVE_DOWN,
    CommandName.left: Command.MOVE_LEFT,
    CommandName.right: Command.MOVE_RIGHT,
    CommandName.bomb: Command.PLANT_BOMB,
    CommandName.save: Command.SAVE,
    CommandName.quit: Command.QUIT,
}


def _tick(manager: EngineManager) -> int:
    snapshot = manager.get_snapshot()
    return snapshot.tick if snapshot else 0


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    tick = _tick(manager)

    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Already running.", tick=tick)
            manager.start()
            return ControlResponse(status="ok", message="Game started.", tick=tick)

        case ControlAction.pause:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=tick)
            manager.pause()
            return ControlResponse(status="ok", message="Game paused.", tick=tick)

        case ControlAction.resume:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=tick)
            manager.resume()
            return ControlResponse(status="ok", message="Game resumed.", tick=tick)

        case ControlAction.step:
            if not manager.running:
                manager.start()
                manager.pause()
            manager.step()
            return ControlResponse(status="ok", message="Single tick executed.", tick=tick)

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Game reset.", tick=_tick(manager))


@router.post("/command/{command}", response_model=ControlResponse)
def command(
    command: CommandName,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    if manager.outcome is not None:
        raise HTTPException(status_code=409, detail=f"Game is over: {manager.outcome.message}")
    manager.push_command(_COMMANDS[command])
    return ControlResponse(status="ok", message=f"Queued {command.value}.", tick=_tick(manager))


@router.post("/save", response_model=ControlResponse)
def save(manager: EngineManager = Depends(get_engine_manager)) -> ControlResponse:
    if manager.save():
        return ControlResponse(status="ok", message="Game saved successfully!", tick=_tick(manager))
    return ControlResponse(status="error", message="Unable to save game!", tick=_tick(manager))


@router.post("/load", response_model=ControlResponse)
def load(manager: EngineManager = Depends(get_engine_manager)) -> ControlResponse:
    if manager.load():
        return ControlResponse(status="ok", message="Game loaded.", tick=_tick(manager))
    return ControlResponse(status="error", message="No saved game found.", tick=_tick(manager))


@router.post("/speed")
def set_speed(
    tps: float = Query(20.0, gt=0.5, le=100.0, description="Ticks per second"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    return ControlResponse(status="ok", message=f"Speed set to {tps:.1f} tps.", tick=_tick(manager))
