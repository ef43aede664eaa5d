"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Entities ---

class PositionSchema(BaseModel):
    x: int
    y: int


class EnemySchema(BaseModel):
    id: int
    x: int
    y: int
    pattern: str


class BombSchema(BaseModel):
    x: int
    y: int
    remaining_ms: float


class DoorSchema(BaseModel):
    x: int | None = None
    y: int | None = None
    visible: bool = False


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str


# --- State ---

class GameStateResponse(BaseModel):
    tick: int
    player: PositionSchema
    capacity: int
    bombs_planted: int
    enemies: list[EnemySchema] = Field(default_factory=list)
    bombs: list[BombSchema] = Field(default_factory=list)
    door: DoorSchema
    outcome: str | None = None
    message: str | None = None
    events: list[EventSchema] = Field(default_factory=list)
    event_counts: dict[str, int] = Field(default_factory=dict)


class MapResponse(BaseModel):
    width: int
    height: int
    rows: list[str]


class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int


# --- Config ---

class GameConfigResponse(BaseModel):
    seed: int
    width: int
    height: int
    num_bombs: int
    fuse_ms: int
    blast_range: int
    enemy_move_interval: int
    tick_rate: float
    save_file: str
