"""Round resolution logic."""

from __future__ import annotations

from itertools import combinations
from typing import Dict, List, Mapping, Optional, Tuple

from rpsls.game_server.game.models import (
    BattleResult,
    Choice,
    Player,
    RoundOutcome,
    Side,
)

# (winner, loser) -> what the winner does to the loser
BEATS: Dict[Tuple[Choice, Choice], str] = {
    (Choice.ROCK, Choice.SCISSORS): "crushes",
    (Choice.ROCK, Choice.LIZARD): "crushes",
    (Choice.PAPER, Choice.ROCK): "covers",
    (Choice.PAPER, Choice.SPOCK): "disproves",
    (Choice.SCISSORS, Choice.PAPER): "cuts",
    (Choice.SCISSORS, Choice.LIZARD): "decapitates",
    (Choice.LIZARD, Choice.PAPER): "eats",
    (Choice.LIZARD, Choice.SPOCK): "poisons",
    (Choice.SPOCK, Choice.ROCK): "vaporizes",
    (Choice.SPOCK, Choice.SCISSORS): "smashes",
}


def dominance(first: Choice, second: Choice) -> Optional[Tuple[Side, str]]:
    """Return which side wins and the verb, or ``None`` on a tie."""

    if first == second:
        return None
    verb = BEATS.get((first, second))
    if verb is not None:
        return Side.FIRST, verb
    return Side.SECOND, BEATS[(second, first)]


def evaluate_battle(
    player1: Player,
    choice1: Choice,
    player2: Player,
    choice2: Choice,
) -> Optional[BattleResult]:
    outcome = dominance(choice1, choice2)
    if outcome is None:
        return None
    side, verb = outcome
    if side == Side.FIRST:
        return BattleResult(player1, choice1, player2, choice2, verb)
    return BattleResult(player2, choice2, player1, choice1, verb)


def all_same_choice(choices: Mapping[Player, Choice]) -> Optional[Choice]:
    """Return the shared choice when every player picked the same weapon."""

    distinct = set(choices.values())
    if len(distinct) == 1:
        return next(iter(distinct))
    return None


def resolve_round(choices: Mapping[Player, Choice]) -> RoundOutcome:
    """Resolve every pairwise battle for one round of committed choices.

    Pairs are enumerated in the mapping's insertion order. Results that are
    equal in every field are counted once.
    """

    tied_choice = all_same_choice(choices)
    if tied_choice is not None:
        return RoundOutcome(results=[], tied=True, tied_choice=tied_choice, points_awarded={})

    battles = (
        evaluate_battle(p1, c1, p2, c2)
        for (p1, c1), (p2, c2) in combinations(list(choices.items()), 2)
    )
    # dict keeps first-seen order while dropping equal results
    results: List[BattleResult] = list(
        dict.fromkeys(result for result in battles if result is not None)
    )

    points_awarded: Dict[Player, int] = {}
    for result in results:
        points_awarded[result.winner] = points_awarded.get(result.winner, 0) + 1

    return RoundOutcome(
        results=results,
        tied=False,
        tied_choice=None,
        points_awarded=points_awarded,
    )
