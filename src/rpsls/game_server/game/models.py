"""Data models for the game subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Hashable, List, Optional, Tuple

Player = Hashable


class Choice(Enum):
    """Playable weapons."""

    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"
    LIZARD = "lizard"
    SPOCK = "spock"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @classmethod
    def from_symbol(cls, value: object) -> Optional["Choice"]:
        """Map a short code (``r``, ``p``, ``s``, ``l``, ``v``) to a choice.

        Returns ``None`` for anything that is not a known code.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _BY_SYMBOL.get(value.strip().lower())


_SYMBOLS: Dict[Choice, str] = {
    Choice.ROCK: "r",
    Choice.PAPER: "p",
    Choice.SCISSORS: "s",
    Choice.LIZARD: "l",
    Choice.SPOCK: "v",
}

_BY_SYMBOL: Dict[str, Choice] = {symbol: choice for choice, symbol in _SYMBOLS.items()}

_EMOJI: Dict[Choice, str] = {
    Choice.ROCK: "🪨",
    Choice.PAPER: "📄",
    Choice.SCISSORS: "✂️",
    Choice.LIZARD: "🦎",
    Choice.SPOCK: "🖖",
}


class Side(Enum):
    """Which argument of a comparison wins."""

    FIRST = "first"
    SECOND = "second"


class SessionState(Enum):
    """Lifecycle state of a game session."""

    FORMING = "forming"
    CHOOSING = "choosing"
    FINISHED = "finished"


@dataclass(frozen=True)
class BattleResult:
    """Directed outcome of one pairwise battle."""

    winner: Player
    winner_choice: Choice
    loser: Player
    loser_choice: Choice
    verb: str


@dataclass
class RoundOutcome:
    """Aggregated outcome information returned from the engine."""

    results: List[BattleResult]
    tied: bool
    tied_choice: Optional[Choice]
    points_awarded: Dict[Player, int]


@dataclass
class RoundReport:
    """Record of a resolved round, as applied to a session."""

    round_number: int
    results: List[BattleResult]
    tied: bool
    tied_choice: Optional[Choice]
    points_awarded: Dict[Player, int]
    leaderboard: List[Tuple[Player, int]] = field(default_factory=list)
    finished: bool = False
