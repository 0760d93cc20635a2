"""RPSLS HTTP server with RPC-style endpoint dispatch."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from loguru import logger

from rpsls import __version__
from rpsls.game_server.api import (
    session_choose as api_session_choose,
    session_create as api_session_create,
    session_delete as api_session_delete,
    session_join as api_session_join,
    session_list as api_session_list,
    session_start as api_session_start,
    session_status as api_session_status,
)
from rpsls.game_server.game.models import RoundReport
from rpsls.game_server.game.registry import SessionRegistry
from rpsls.utils.config import Settings, load_settings

RPCHandler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


def on_round_resolved(session_id: str, report: RoundReport) -> None:
    logger.info(
        "Round {} resolved in session {}: {} battles, tied={}",
        report.round_number,
        session_id,
        len(report.results),
        report.tied,
    )


def on_session_finished(session_id: str, report: RoundReport) -> None:
    leader = report.leaderboard[0] if report.leaderboard else None
    logger.info("Session {} finished after round {}; leader={}", session_id, report.round_number, leader)


def build_rpc_handlers(registry: SessionRegistry, settings: Settings) -> Dict[str, RPCHandler]:
    return {
        "session.create": lambda payload: api_session_create.handle(payload, registry, settings),
        "session.join": lambda payload: api_session_join.handle(payload, registry),
        "session.start": lambda payload: api_session_start.handle(payload, registry),
        "session.choose": lambda payload: api_session_choose.handle(payload, registry),
        "session.status": lambda payload: api_session_status.handle(payload, registry),
        "session.delete": lambda payload: api_session_delete.handle(payload, registry),
        "session.list": lambda payload: api_session_list.handle(payload, registry),
    }


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[SessionRegistry] = None,
) -> FastAPI:
    if settings is None:
        settings = load_settings()
    if registry is None:
        registry = SessionRegistry()

    @asynccontextmanager
    async def app_lifespan(app: FastAPI):
        registry.configure_callbacks(
            on_round_resolved=on_round_resolved,
            on_session_finished=on_session_finished,
        )
        logger.info("RPSLS server ready (max_rounds={})", settings.max_rounds)
        yield
        logger.info("RPSLS server shutting down with {} open sessions", len(registry))

    app = FastAPI(title="RPSLS", version=__version__, lifespan=app_lifespan)
    app.state.settings = settings
    app.state.registry = registry
    app.state.rpc_handlers = build_rpc_handlers(registry, settings)

    @app.get("/")
    async def root() -> Dict[str, Any]:
        return {
            "name": "RPSLS",
            "version": __version__,
            "status": "running",
            "sessions": len(registry),
        }

    @app.post("/api/{endpoint}")
    async def rpc(
        endpoint: str,
        request: Request,
        payload: Optional[Dict[str, Any]] = Body(default=None),
    ) -> Dict[str, Any]:
        handler = request.app.state.rpc_handlers.get(endpoint)
        if handler is None:
            raise HTTPException(status_code=404, detail=f"Unknown endpoint: {endpoint}")
        return await handler(payload or {})

    return app
