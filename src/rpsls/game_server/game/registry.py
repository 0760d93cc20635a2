"""Runtime registry for active game sessions."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from rpsls.game_server.game.models import Choice, Player, RoundReport
from rpsls.game_server.game.render import render
from rpsls.game_server.game.session import GameSession
from rpsls.game_server.game.utils import new_session_id, serialize_session

RoundResolvedCallback = Callable[[str, RoundReport], None]
SessionFinishedCallback = Callable[[str, RoundReport], None]


logger = logging.getLogger("rpsls.game.registry")


class SessionHandle:
    """Mutable view of one registered session.

    Every call runs under the registry lock and fails once the session has
    been removed from the registry.
    """

    def __init__(self, registry: "SessionRegistry", session: GameSession) -> None:
        self._registry = registry
        self._session = session

    @property
    def session_id(self) -> str:
        return self._session.id

    def join(self, player: Player) -> bool:
        with self._registry._lock:
            if not self._registered_locked():
                return False
            joined = self._session.join(player)
        if joined:
            logger.info("Player joined: session_id=%s player=%s", self.session_id, player)
        return joined

    def start(self) -> bool:
        with self._registry._lock:
            if not self._registered_locked():
                return False
            started = self._session.start()
        if started:
            logger.info(
                "Session started: session_id=%s players=%s rounds=%s",
                self.session_id,
                self._session.player_count(),
                self._session.rounds,
            )
        return started

    def submit_choice(
        self,
        player: Player,
        choice: Union[Choice, str],
        *,
        round_hint: Optional[int] = None,
    ) -> Optional[RoundReport]:
        """Submit or replace a choice for the current round.

        Returns a :class:`RoundReport` if the round is resolved by this
        submission.
        """
        _, report = self.submit(player, choice, round_hint=round_hint)
        return report

    def submit(
        self,
        player: Player,
        choice: Union[Choice, str],
        *,
        round_hint: Optional[int] = None,
    ) -> Tuple[bool, Optional[RoundReport]]:
        """Like :meth:`submit_choice` but also reports whether the choice applied.

        Resolution, clearing and removal of a finished session happen in the
        same critical section as the submission that completed the round.
        """

        with self._registry._lock:
            if not self._registered_locked():
                return False, None
            session = self._session
            if round_hint is not None and round_hint != session.current_round():
                logger.debug(
                    "Round mismatch: session_id=%s hint=%s current=%s",
                    session.id,
                    round_hint,
                    session.current_round(),
                )
                return False, None
            if not session.submit_choice(player, choice):
                return False, None
            if not session.all_committed():
                return True, None

            logger.debug(
                "Resolving round: session_id=%s round=%s choices=%s",
                session.id,
                session.current_round(),
                {str(p): c.value for p, c in session.choices.items()},
            )
            report = session.resolve_round()
            if report is not None and report.finished:
                self._registry._sessions.pop(session.id, None)

        if report is None:
            return True, None
        logger.info(
            "Round resolved: session_id=%s round=%s/%s battles=%s tied=%s",
            session.id,
            report.round_number,
            session.rounds,
            len(report.results),
            report.tied,
        )
        self._registry._emit_round_resolved(session.id, report)
        if report.finished:
            logger.info("Session finished: session_id=%s", session.id)
            self._registry._emit_session_finished(session.id, report)
        return True, report

    def is_finished(self) -> bool:
        with self._registry._lock:
            return self._session.finished or not self._registered_locked()

    def render(self, display: Callable[[Player], str] = str) -> str:
        with self._registry._lock:
            return render(self._session, display)

    def snapshot(self) -> Dict[str, Any]:
        with self._registry._lock:
            return serialize_session(self._session)

    def _registered_locked(self) -> bool:
        return self._registry._sessions.get(self._session.id) is self._session


class SessionRegistry:
    """Coordinates active sessions behind a single lock.

    One lock covers both the id map and session contents, which serializes
    unrelated sessions in exchange for a simple locking story.
    """

    def __init__(
        self,
        *,
        on_round_resolved: Optional[RoundResolvedCallback] = None,
        on_session_finished: Optional[SessionFinishedCallback] = None,
    ) -> None:
        self._sessions: Dict[str, GameSession] = {}
        self._lock = threading.RLock()
        self._on_round_resolved = on_round_resolved
        self._on_session_finished = on_session_finished

    def configure_callbacks(
        self,
        *,
        on_round_resolved: Optional[RoundResolvedCallback] = None,
        on_session_finished: Optional[SessionFinishedCallback] = None,
    ) -> None:
        """Update callback hooks at runtime."""

        if on_round_resolved is not None:
            self._on_round_resolved = on_round_resolved
        if on_session_finished is not None:
            self._on_session_finished = on_session_finished

    # ------------------------------------------------------------------
    # Registry structure
    # ------------------------------------------------------------------
    def create(self, rounds: int) -> str:
        with self._lock:
            session_id = new_session_id()
            while session_id in self._sessions:
                session_id = new_session_id()
            self._sessions[session_id] = GameSession(session_id, rounds)
        logger.info("Session created: session_id=%s rounds=%s", session_id, rounds)
        return session_id

    def get(self, session_id: str) -> Optional[SessionHandle]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            return SessionHandle(self, session)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Session deleted: session_id=%s", session_id)
        return removed

    def list_sessions(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    # ------------------------------------------------------------------
    # Session operations by id
    # ------------------------------------------------------------------
    def create_session(self, rounds: int) -> str:
        return self.create(rounds)

    def join_session(self, session_id: str, player: Player) -> bool:
        handle = self.get(session_id)
        return handle.join(player) if handle else False

    def start_session(self, session_id: str) -> bool:
        handle = self.get(session_id)
        return handle.start() if handle else False

    def submit_choice(
        self,
        session_id: str,
        player: Player,
        symbol: Union[Choice, str],
        *,
        round_hint: Optional[int] = None,
    ) -> Optional[RoundReport]:
        handle = self.get(session_id)
        if handle is None:
            return None
        return handle.submit_choice(player, symbol, round_hint=round_hint)

    def is_session_finished(self, session_id: str) -> bool:
        """Finished sessions are removed, so unknown ids count as finished."""
        handle = self.get(session_id)
        return handle.is_finished() if handle else True

    def delete_session(self, session_id: str) -> bool:
        return self.delete(session_id)

    def render_session(
        self, session_id: str, display: Callable[[Player], str] = str
    ) -> Optional[str]:
        handle = self.get(session_id)
        return handle.render(display) if handle else None

    # ------------------------------------------------------------------
    # Internal mechanics
    # ------------------------------------------------------------------
    def _emit_round_resolved(self, session_id: str, report: RoundReport) -> None:
        if not self._on_round_resolved:
            return
        try:
            self._on_round_resolved(session_id, report)
        except Exception:
            logger.exception("Callback failure: session_id=%s tag=resolved", session_id)
            raise

    def _emit_session_finished(self, session_id: str, report: RoundReport) -> None:
        if not self._on_session_finished:
            return
        try:
            self._on_session_finished(session_id, report)
        except Exception:
            logger.exception("Callback failure: session_id=%s tag=finished", session_id)
            raise
