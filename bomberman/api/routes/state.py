"""GET /api/v1/state — dynamic entity & event data (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from bomberman.api.dependencies import get_engine_manager
from bomberman.api.engine_manager import EngineManager
from bomberman.api.schemas import (
    BombSchema,
    DoorSchema,
    EnemySchema,
    EventSchema,
    GameStateResponse,
    PositionSchema,
)

router = APIRouter()


@router.get("/state", response_model=GameStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    category: str | None = Query(None, description="Only return events of this category"),
    manager: EngineManager = Depends(get_engine_manager),
) -> GameStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    # The door position stays secret until it has been blasted open.
    door = (
        DoorSchema(x=snapshot.door.x, y=snapshot.door.y, visible=True)
        if snapshot.door_visible
        else DoorSchema(visible=False)
    )

    return GameStateResponse(
        tick=snapshot.tick,
        player=PositionSchema(x=snapshot.player.x, y=snapshot.player.y),
        capacity=snapshot.capacity,
        bombs_planted=snapshot.bombs_planted,
        enemies=[
            EnemySchema(id=e.id, x=e.pos.x, y=e.pos.y, pattern=e.pattern.name.lower())
            for e in snapshot.enemies
        ],
        bombs=[
            BombSchema(x=b.pos.x, y=b.pos.y, remaining_ms=b.remaining_ms)
            for b in snapshot.bombs
        ],
        door=door,
        outcome=snapshot.outcome.name if snapshot.outcome else None,
        message=snapshot.outcome.message if snapshot.outcome else None,
        events=[
            EventSchema(tick=ev.tick, category=ev.category, message=ev.message)
            for ev in manager.event_log.since_tick(since_tick, category)
        ],
        event_counts=manager.event_log.counts(),
    )
