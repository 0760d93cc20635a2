"""Game subsystem: outcome table, round resolution, sessions and registry."""

from .models import (
    BattleResult,
    Choice,
    RoundOutcome,
    RoundReport,
    SessionState,
    Side,
)
from .engine import dominance, evaluate_battle, resolve_round
from .session import GameSession
from .registry import SessionHandle, SessionRegistry
from .render import ChatResponder, render

__all__ = [
    "BattleResult",
    "Choice",
    "RoundOutcome",
    "RoundReport",
    "SessionState",
    "Side",
    "dominance",
    "evaluate_battle",
    "resolve_round",
    "GameSession",
    "SessionHandle",
    "SessionRegistry",
    "ChatResponder",
    "render",
]
