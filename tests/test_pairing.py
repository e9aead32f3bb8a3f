"""Tests for single-elimination pairing."""

import random

import pytest

from elite_tournament.core.errors import InvalidStateError
from elite_tournament.models import Player
from elite_tournament.services.pairing import generate_round


class IdentityRandom(random.Random):
    """Random source whose shuffle keeps the input order."""

    def shuffle(self, x):
        return None


def make_players(count: int) -> list[Player]:
    return [Player(name=f"p{i:02d}") for i in range(count)]


class TestGenerateRound:
    """Tests for round generation."""

    @pytest.mark.parametrize("count", range(1, 18))
    def test_every_player_placed_once(self, count):
        """Test each player lands in exactly one match or the bye list."""
        pool = make_players(count)

        matches, byes, _ = generate_round(pool, set(), rng=random.Random(count))

        placed = [p.id for m in matches for p in (m.player1, m.player2)]
        placed += [p.id for p in byes]
        assert len(matches) * 2 + len(byes) == count
        assert sorted(placed) == sorted(p.id for p in pool)
        assert len(byes) == count % 2

    def test_matches_start_unresolved(self):
        """Test new matches carry no winner."""
        matches, _, _ = generate_round(make_players(4), set(), rng=random.Random(1))

        assert all(not m.is_resolved and m.winner is None for m in matches)
        assert len({m.id for m in matches}) == 2

    def test_pairs_sequentially_in_shuffle_order(self):
        """Test first two form a match, next two the next match."""
        pool = make_players(4)

        matches, byes, _ = generate_round(pool, set(), rng=IdentityRandom())

        assert byes == []
        assert [(m.player1.name, m.player2.name) for m in matches] == [
            ("p00", "p01"),
            ("p02", "p03"),
        ]

    def test_bye_goes_to_first_player_without_one(self):
        """Test the bye skips players who already had one, in shuffle order."""
        pool = make_players(5)
        history = {pool[0].id, pool[1].id}

        matches, byes, updated = generate_round(pool, history, rng=IdentityRandom())

        assert [p.name for p in byes] == ["p02"]
        assert [(m.player1.name, m.player2.name) for m in matches] == [
            ("p00", "p01"),
            ("p03", "p04"),
        ]
        assert updated == history | {pool[2].id}

    @pytest.mark.parametrize("seed", range(20))
    def test_byed_player_skipped_while_eligible_exist(self, seed):
        """Test a player in the history never gets a bye over an eligible one."""
        pool = make_players(7)
        eligible = pool[3]
        history = {p.id for p in pool if p is not eligible}

        _, byes, _ = generate_round(pool, history, rng=random.Random(seed))

        assert byes == [eligible]

    def test_exhausted_history_falls_back_to_first(self):
        """Test everyone having had a bye repeats it for the first player."""
        pool = make_players(3)
        history = {p.id for p in pool}

        _, byes, updated = generate_round(pool, history, rng=IdentityRandom())

        assert byes == [pool[0]]
        assert updated == history

    def test_history_not_mutated(self):
        """Test the caller's bye history is left untouched."""
        pool = make_players(3)
        history: set[str] = set()

        _, byes, updated = generate_round(pool, history, rng=random.Random(3))

        assert history == set()
        assert updated == {byes[0].id}

    def test_even_pool_keeps_history(self):
        """Test an even pool hands out no bye."""
        pool = make_players(4)

        _, byes, updated = generate_round(pool, {"someone"}, rng=random.Random(2))

        assert byes == []
        assert updated == {"someone"}

    def test_single_player_is_sole_bye(self):
        """Test a pool of one yields zero matches and one bye."""
        pool = make_players(1)

        matches, byes, updated = generate_round(pool, set())

        assert matches == []
        assert byes == pool
        assert updated == {pool[0].id}

    def test_empty_pool_rejected(self):
        """Test empty input is invalid."""
        with pytest.raises(InvalidStateError, match="empty pool"):
            generate_round([], set())

    def test_deterministic_with_seed(self):
        """Test pairing is reproducible with the same seed."""
        pool = make_players(6)

        first, _, _ = generate_round(pool, set(), rng=random.Random(42))
        second, _, _ = generate_round(pool, set(), rng=random.Random(42))

        assert [(m.player1.id, m.player2.id) for m in first] == [
            (m.player1.id, m.player2.id) for m in second
        ]

    def test_input_pool_not_reordered(self):
        """Test the shuffle works on a copy."""
        pool = make_players(6)
        before = list(pool)

        generate_round(pool, set(), rng=random.Random(9))

        assert pool == before
