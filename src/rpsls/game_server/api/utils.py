from typing import Any, Dict, Optional

from fastapi import HTTPException

from rpsls.game_server.game.registry import SessionHandle, SessionRegistry


def rpc_success(data: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Return standardized success response for RPC handlers."""
    response: Dict[str, Any] = {"success": True}
    if data:
        response.update(data)
    return response


def require_str(request: dict, field: str) -> str:
    value = request.get(field)
    if not isinstance(value, str) or not value:
        raise HTTPException(status_code=422, detail=f"Invalid or missing {field}")
    return value


def optional_int(request: dict, field: str) -> Optional[int]:
    value = request.get(field)
    if value is None:
        return None
    if isinstance(value, bool):
        raise HTTPException(status_code=422, detail=f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=f"{field} must be an integer") from exc


def require_session(registry: SessionRegistry, session_id: str) -> SessionHandle:
    handle = registry.get(session_id)
    if handle is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return handle
