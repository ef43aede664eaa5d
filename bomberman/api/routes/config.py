"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from bomberman.api.dependencies import get_engine_manager
from bomberman.api.engine_manager import EngineManager
from bomberman.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        seed=cfg.seed,
        width=cfg.width,
        height=cfg.height,
        num_bombs=cfg.num_bombs,
        fuse_ms=cfg.fuse_ms,
        blast_range=cfg.blast_range,
        enemy_move_interval=cfg.enemy_move_interval,
        tick_rate=manager.tick_rate,
        save_file=cfg.save_file,
    )
