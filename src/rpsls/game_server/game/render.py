"""Plain-text rendering of session state for the chat collaborator."""

from __future__ import annotations

from typing import Callable, List, Protocol, Sequence

from rpsls.game_server.game.models import BattleResult, Choice, Player, RoundReport, SessionState
from rpsls.game_server.game.session import GameSession

TITLE = "Rock Paper Scissors Lizard Spock"

PlayerDisplay = Callable[[Player], str]


class ChatResponder(Protocol):
    """Capabilities the chat platform offers to present a session.

    The core never calls this; collaborators feed it with :func:`render`
    output and :func:`choice_buttons` labels.
    """

    def respond(self, text: str) -> None:
        ...

    def render_buttons(self, labels: Sequence[str]) -> None:
        ...


def choice_buttons() -> List[str]:
    """Button labels of the form ``<emoji> <code>`` in declaration order."""
    return [f"{choice.emoji} {choice.symbol}" for choice in Choice]


def narrate(result: BattleResult, display: PlayerDisplay = str) -> str:
    return (
        f"{display(result.winner)} {result.winner_choice.emoji} {result.verb} "
        f"{result.loser_choice.emoji} {display(result.loser)}"
    )


def _narrate_round(report: RoundReport, display: PlayerDisplay) -> List[str]:
    if report.tied:
        emoji = report.tied_choice.emoji if report.tied_choice else ""
        return [f"All players chose {emoji}", "No one wins"]
    return [narrate(result, display) for result in report.results]


def render(session: GameSession, display: PlayerDisplay = str) -> str:
    """Render a session snapshot as deterministic text."""

    lines: List[str] = [TITLE]

    if session.state == SessionState.FORMING:
        lines.append(f"Rounds: {session.rounds}")
        lines.append("Players:")
        lines.extend(display(player) for player in session.players)
        return "\n".join(lines)

    if session.rounds > 1:
        lines.append(f"Round {session.current_round()}/{session.rounds}")

    if session.logs:
        lines.append("")
        lines.append("Choices:")
        lines.extend(_narrate_round(session.logs[-1], display))

    if not session.finished:
        lines.append("")
        lines.append("Choose your weapon")
        lines.append(f"{session.committed_count()}/{session.player_count()} players chose")

    lines.append("")
    lines.append("Points:")
    lines.extend(f"{display(player)}: {points} points" for player, points in session.leaderboard())
    return "\n".join(lines)
