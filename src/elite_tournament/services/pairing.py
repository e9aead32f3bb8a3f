"""Single-elimination pairing for ELITE Tournament."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

import structlog

from elite_tournament.core.errors import InvalidStateError
from elite_tournament.models import Match, Player

logger = structlog.get_logger()


def generate_round(
    pool: Sequence[Player],
    bye_history: Iterable[str] = (),
    rng: random.Random | None = None,
) -> tuple[list[Match], list[Player], set[str]]:
    """Generate the matches for one knockout round.

    The pool is shuffled uniformly, then:

    1. If the pool is odd, one player sits out with a bye. The first player
       in shuffle order who has not had a bye yet is chosen; once everyone
       has had one, the first player in shuffle order gets it again.
    2. The remaining players are paired off in shuffle order: first with
       second, third with fourth, and so on.

    A pool of one yields no matches and a bye for that player.

    Args:
        pool: Distinct players entering the round.
        bye_history: IDs of players who already received a bye this
            tournament. Not mutated.
        rng: Random source for the shuffle. Defaults to a fresh
            ``random.Random``.

    Returns:
        Tuple of (matches, byes, updated_bye_history). ``byes`` holds zero
        or one player.

    Raises:
        InvalidStateError: If the pool is empty.
    """
    if not pool:
        msg = "Cannot generate a round from an empty pool"
        raise InvalidStateError(msg)

    rng = rng or random.Random()  # noqa: S311
    shuffled = list(pool)
    rng.shuffle(shuffled)

    history = set(bye_history)
    byes: list[Player] = []
    if len(shuffled) % 2 == 1:
        bye = _assign_bye(shuffled, history)
        history.add(bye.id)
        byes.append(bye)

    matches = _create_pairs_from_shuffled(shuffled)

    logger.debug(
        "round_generated",
        pool=len(pool),
        matches=len(matches),
        byes=[p.name for p in byes],
    )
    return matches, byes, history


def _assign_bye(shuffled: list[Player], bye_history: set[str]) -> Player:
    """Remove and return the bye recipient from a shuffled pool.

    Args:
        shuffled: Mutable, already shuffled pool.
        bye_history: IDs of players who already had a bye.

    Returns:
        The player who sits out this round.
    """
    for i, player in enumerate(shuffled):
        if player.id not in bye_history:
            return shuffled.pop(i)

    return shuffled.pop(0)


def _create_pairs_from_shuffled(shuffled: list[Player]) -> list[Match]:
    """Pair adjacent players. Expects an even-sized pool."""
    return [
        Match(player1=shuffled[i], player2=shuffled[i + 1])
        for i in range(0, len(shuffled) - 1, 2)
    ]
