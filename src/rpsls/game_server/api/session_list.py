from rpsls.game_server.api.utils import rpc_success


async def handle(_: dict, registry) -> dict:
    return rpc_success({"sessions": registry.list_sessions()})
