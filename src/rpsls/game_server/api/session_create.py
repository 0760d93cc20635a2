from fastapi import HTTPException

from rpsls.game_server.api.utils import optional_int, require_session, rpc_success
from rpsls.utils.config import Settings


async def handle(request: dict, registry, settings: Settings) -> dict:
    rounds = optional_int(request, "rounds")
    if rounds is None:
        rounds = settings.default_rounds
    if rounds < 1 or rounds > settings.max_rounds:
        raise HTTPException(
            status_code=400,
            detail=f"rounds must be between 1 and {settings.max_rounds}",
        )

    session_id = registry.create_session(rounds)
    handle = require_session(registry, session_id)
    return rpc_success({"session_id": session_id, "session": handle.snapshot()})
