"""Game session state machine."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple, Union

from rpsls.game_server.game.engine import resolve_round
from rpsls.game_server.game.models import (
    Choice,
    Player,
    RoundReport,
    SessionState,
)

logger = logging.getLogger("rpsls.game.session")


class GameSession:
    """One game: membership, current-round choices and cumulative points.

    The session does no locking of its own; the owning registry serializes
    access to it.
    """

    def __init__(self, session_id: str, rounds: int) -> None:
        if rounds < 1:
            raise ValueError(f"rounds must be at least 1, got {rounds}")
        self.id = session_id
        self.rounds = rounds
        self.round = 0
        self.started = False
        self.players: List[Player] = []
        self.choices: Dict[Player, Choice] = {}
        self.points: Dict[Player, int] = {}
        self.logs: List[RoundReport] = []
        self.created_at = datetime.now(timezone.utc)

    @property
    def state(self) -> SessionState:
        if not self.started:
            return SessionState.FORMING
        if self.round >= self.rounds:
            return SessionState.FINISHED
        return SessionState.CHOOSING

    @property
    def finished(self) -> bool:
        return self.state == SessionState.FINISHED

    def player_count(self) -> int:
        return len(self.players)

    def committed_count(self) -> int:
        return len(self.choices)

    def current_round(self) -> int:
        """1-based number of the round being played."""
        return min(self.round + 1, self.rounds)

    def join(self, player: Player) -> bool:
        if self.state != SessionState.FORMING:
            logger.debug("Join rejected: session_id=%s state=%s", self.id, self.state.value)
            return False
        if player in self.points:
            logger.debug("Join rejected: session_id=%s player=%s already joined", self.id, player)
            return False
        self.players.append(player)
        self.points[player] = 0
        return True

    def start(self) -> bool:
        if self.state != SessionState.FORMING or self.player_count() < 2:
            logger.debug(
                "Start rejected: session_id=%s state=%s players=%s",
                self.id,
                self.state.value,
                self.player_count(),
            )
            return False
        self.started = True
        return True

    def submit_choice(self, player: Player, choice: Union[Choice, str]) -> bool:
        """Record or overwrite a player's choice for the current round.

        Unknown players and unrecognized symbols are ignored.
        """
        if self.state != SessionState.CHOOSING or player not in self.points:
            return False
        parsed = Choice.from_symbol(choice)
        if parsed is None:
            logger.debug("Ignoring malformed choice %r in session %s", choice, self.id)
            return False
        self.choices[player] = parsed
        return True

    def all_committed(self) -> bool:
        return len(self.choices) == len(self.players)

    def leaderboard(self) -> List[Tuple[Player, int]]:
        # sorted() is stable, so equal scores stay in join order
        return sorted(self.points.items(), key=lambda item: -item[1])

    def resolve_round(self) -> Optional[RoundReport]:
        if self.state != SessionState.CHOOSING or not self.all_committed():
            return None

        outcome = resolve_round(self.choices)
        for player, gained in outcome.points_awarded.items():
            self.points[player] += gained

        self.choices.clear()
        self.round += 1

        report = RoundReport(
            round_number=self.round,
            results=outcome.results,
            tied=outcome.tied,
            tied_choice=outcome.tied_choice,
            points_awarded=outcome.points_awarded,
            leaderboard=self.leaderboard(),
            finished=self.finished,
        )
        self.logs.append(report)
        return report
