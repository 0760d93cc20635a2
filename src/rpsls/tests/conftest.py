"""Shared fixtures for RPSLS unit tests."""

from __future__ import annotations

from typing import Callable, List

import pytest

from rpsls.game_server.game.registry import SessionRegistry
from rpsls.game_server.game.session import GameSession
from rpsls.utils.config import Settings


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def settings() -> Settings:
    return Settings(default_rounds=1, max_rounds=5)


@pytest.fixture
def make_session() -> Callable[..., GameSession]:
    """Build a session with the given players already joined."""

    def _make(players: List[str], *, rounds: int = 1, start: bool = True) -> GameSession:
        session = GameSession("test-session", rounds)
        for player in players:
            assert session.join(player)
        if start:
            assert session.start()
        return session

    return _make
