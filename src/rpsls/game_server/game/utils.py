"""High-level helpers for session ids and serialization."""

from __future__ import annotations

import uuid
from typing import Any, Dict

from rpsls.game_server.game.models import BattleResult, RoundReport
from rpsls.game_server.game.session import GameSession


def new_session_id() -> str:
    return uuid.uuid4().hex


def serialize_battle(result: BattleResult) -> Dict[str, Any]:
    return {
        "winner": str(result.winner),
        "winner_choice": result.winner_choice.value,
        "loser": str(result.loser),
        "loser_choice": result.loser_choice.value,
        "verb": result.verb,
    }


def serialize_round(report: RoundReport) -> Dict[str, Any]:
    """Return a JSON-safe payload for a resolved round."""
    return {
        "round": report.round_number,
        "battles": [serialize_battle(result) for result in report.results],
        "tied": report.tied,
        "tied_choice": report.tied_choice.value if report.tied_choice else None,
        "points_awarded": {str(player): points for player, points in report.points_awarded.items()},
        "leaderboard": [
            {"player": str(player), "points": points} for player, points in report.leaderboard
        ],
        "finished": report.finished,
    }


def serialize_session(session: GameSession) -> Dict[str, Any]:
    """Return a JSON-safe snapshot of a session.

    Current-round choices are reported only as who has committed, never what
    they chose.
    """
    return {
        "session_id": session.id,
        "state": session.state.value,
        "rounds": session.rounds,
        "round": session.current_round(),
        "completed_rounds": session.round,
        "players": [str(player) for player in session.players],
        "committed": [str(player) for player in session.choices],
        "leaderboard": [
            {"player": str(player), "points": points} for player, points in session.leaderboard()
        ],
        "last_round": serialize_round(session.logs[-1]) if session.logs else None,
        "created_at": session.created_at.isoformat(),
    }
