from rpsls.game_server.api.utils import require_session, require_str, rpc_success


async def handle(request: dict, registry) -> dict:
    session_id = require_str(request, "session_id")

    handle = require_session(registry, session_id)
    started = handle.start()
    return rpc_success({"started": started, "session": handle.snapshot()})
