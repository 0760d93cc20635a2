from rpsls.game_server.api.utils import require_str, rpc_success


async def handle(request: dict, registry) -> dict:
    session_id = require_str(request, "session_id")
    return rpc_success({"deleted": registry.delete_session(session_id)})
