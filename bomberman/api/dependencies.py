"""FastAPI dependency: the EngineManager owned by the running app."""

from __future__ import annotations

from fastapi import HTTPException, Request

from bomberman.api.engine_manager import EngineManager


def get_engine_manager(request: Request) -> EngineManager:
    manager: EngineManager | None = getattr(request.app.state, "engine_manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Game engine is not running.")
    return manager
