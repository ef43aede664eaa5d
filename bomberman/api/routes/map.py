"""GET /api/v1/map — grid rows as symbol strings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from bomberman.api.dependencies import get_engine_manager
from bomberman.api.engine_manager import EngineManager
from bomberman.api.schemas import MapResponse

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(
    entities: bool = Query(False, description="Draw player, enemies and bombs on top of the terrain"),
    manager: EngineManager = Depends(get_engine_manager),
) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Game not initialized yet.")

    rows = snapshot.render_rows() if entities else snapshot.terrain_rows()
    return MapResponse(width=snapshot.width, height=snapshot.height, rows=rows)
