"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bomberman.api.engine_manager import EngineManager
from bomberman.api.routes import api_router
from bomberman.config import GameConfig
from bomberman.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        app.state.engine_manager = manager
        if autostart:
            manager.start()
        logger.info("API server started — game running.")
        yield
        manager.stop()
        app.state.engine_manager = None
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Bomberman Engine",
        description=(
            "Grid arcade simulation — command input and world view API.\n\n"
            "## API Groups\n\n"
            "- **State** — Live game state: player, enemies, bombs, door, events, outcome\n"
            "- **Map** — Grid rows as symbol strings\n"
            "- **Control** — Lifecycle (start, pause, resume, step, reset), player commands, save/load\n"
            "- **Config** — Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live game state polled by a renderer."},
            {"name": "Map", "description": "Grid rows using the save-file symbols, optionally with entities drawn on top."},
            {"name": "Control", "description": "Lifecycle controls, one-command-per-tick player input, save and load."},
            {"name": "Config", "description": "Read-only game configuration parameters."},
        ],
    )

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
