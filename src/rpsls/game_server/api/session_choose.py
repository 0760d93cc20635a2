from __future__ import annotations

from fastapi import HTTPException

from rpsls.game_server.api.utils import optional_int, require_session, require_str, rpc_success
from rpsls.game_server.game.utils import serialize_round


async def handle(request: dict, registry) -> dict:
    session_id = require_str(request, "session_id")
    player_id = require_str(request, "player_id")
    choice = request.get("choice")
    round_hint = optional_int(request, "round")

    if choice is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    handle = require_session(registry, session_id)
    if round_hint is not None:
        current = handle.snapshot()["round"]
        if current != round_hint:
            raise HTTPException(status_code=409, detail="Round mismatch for choice submission")

    # Unknown players and malformed choices are not errors; they just don't apply.
    accepted, outcome = handle.submit(player_id, choice, round_hint=round_hint)

    response = {
        "accepted": accepted,
        "session_id": session_id,
        "round_resolved": outcome is not None,
        "finished": handle.is_finished(),
    }
    if outcome is not None:
        response["outcome"] = serialize_round(outcome)
    return rpc_success(response)
