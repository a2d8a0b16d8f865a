import math
import random
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from dojo.models.match import Match
from dojo.models.tournament import Tournament
from dojo.services import bracket_service


@pytest.fixture
def tournament(db):
    t = Tournament(name="-80 kg", code="ABC123")
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


def _players_in(matches):
    ids = []
    for m in matches:
        ids.extend(pid for pid in (m.player1_id, m.player2_id) if pid is not None)
    return ids


class TestPairRoundOne:

    def test_even_count_has_no_bye(self):
        pairings = bracket_service.pair_round_one([10, 11, 12, 13])
        assert pairings == [(1, 10, 11), (2, 12, 13)]

    def test_odd_count_gives_last_participant_a_bye(self):
        pairings = bracket_service.pair_round_one([10, 11, 12])
        assert pairings == [(1, 10, 11), (2, 12, None)]

    def test_empty_list(self):
        assert bracket_service.pair_round_one([]) == []

    def test_single_participant(self):
        assert bracket_service.pair_round_one([7]) == [(1, 7, None)]


class TestShuffleParticipants:

    def test_is_a_permutation_in_place(self):
        ids = list(range(1, 21))
        result = bracket_service.shuffle_participants(ids, rng=random.Random(3))
        assert result is ids
        assert sorted(result) == list(range(1, 21))

    def test_walks_from_the_last_index_down(self):
        calls = []

        class RecordingRandom:
            def randint(self, a, b):
                calls.append((a, b))
                return a

        bracket_service.shuffle_participants([1, 2, 3, 4], rng=RecordingRandom())
        assert calls == [(0, 3), (0, 2), (0, 1)]

    def test_unseeded_runs_can_differ(self):
        ids = list(range(12))
        orders = {tuple(bracket_service.shuffle_participants(list(ids))) for _ in range(30)}
        assert len(orders) > 1


class TestInitializeBracket:

    @pytest.mark.parametrize("count", [0, 1, 2, 3, 4, 7, 8, 11, 16])
    def test_produces_ceil_half_matches(self, db, tournament, make_participants, count):
        people = make_participants(*[f"P{i}" for i in range(count)])
        ids = [p.id for p in people]

        matches = bracket_service.initialize_bracket(db, tournament.id, ids)

        assert len(matches) == math.ceil(count / 2)
        byes = [m for m in matches if m.player2_id is None]
        assert len(byes) == count % 2
        assert sorted(_players_in(matches)) == sorted(ids)

    def test_rows_are_pending_round_one_winner_bracket(self, db, tournament, make_participants):
        people = make_participants("A", "B", "C", "D", "E")

        bracket_service.initialize_bracket(db, tournament.id, [p.id for p in people])

        stored = db.query(Match).filter(Match.tournament_id == tournament.id).order_by(Match.slot).all()
        assert [m.slot for m in stored] == [1, 2, 3]
        for m in stored:
            assert m.round == 1
            assert m.status == "pending"
            assert m.winner_id is None
            assert m.bracket_type == "winner"

    def test_zero_participants_is_not_an_error(self, db, tournament):
        assert bracket_service.initialize_bracket(db, tournament.id, []) == []
        assert db.query(Match).count() == 0

    def test_duplicate_ids_appear_once(self, db, tournament, make_participants):
        a, b, c = make_participants("A", "B", "C")

        matches = bracket_service.initialize_bracket(db, tournament.id, [a.id, b.id, a.id, c.id])

        assert len(matches) == 2
        assert sorted(_players_in(matches)) == sorted([a.id, b.id, c.id])

    def test_three_participants_scenario(self, db, tournament, make_participants):
        a, b, c = make_participants("A", "B", "C")

        # Identity shuffle keeps the input order
        with patch.object(bracket_service, "shuffle_participants", side_effect=lambda ids, rng=None: ids):
            matches = bracket_service.initialize_bracket(db, tournament.id, [a.id, b.id, c.id])

        assert [(m.slot, m.player1_id, m.player2_id) for m in matches] == [
            (1, a.id, b.id),
            (2, c.id, None),
        ]


class TestClearAndRegenerate:

    def test_clear_matches_only_touches_one_tournament(self, db, tournament, make_participants):
        other = Tournament(name="Other", code="ZZZ999")
        db.add(other)
        db.commit()
        people = make_participants("A", "B", "C", "D")
        ids = [p.id for p in people]
        bracket_service.initialize_bracket(db, tournament.id, ids)
        bracket_service.initialize_bracket(db, other.id, ids)

        deleted = bracket_service.clear_matches(db, tournament.id)

        assert deleted == 2
        assert db.query(Match).filter(Match.tournament_id == tournament.id).count() == 0
        assert db.query(Match).filter(Match.tournament_id == other.id).count() == 2

    def test_regenerate_from_selection_replaces_round_one(self, db, tournament, make_participants):
        people = make_participants("A", "B", "C", "D", "E", "F")
        ids = [p.id for p in people]
        bracket_service.initialize_bracket(db, tournament.id, ids)

        matches = bracket_service.regenerate_bracket(db, tournament.id, ids[:4])

        assert len(matches) == 2
        assert db.query(Match).filter(Match.tournament_id == tournament.id).count() == 2
        assert sorted(_players_in(matches)) == sorted(ids[:4])

    def test_regenerate_accepts_any_size_and_leaves_byes_pending(self, db, tournament, make_participants):
        people = make_participants("A", "B", "C", "D", "E")

        matches = bracket_service.regenerate_bracket(db, tournament.id, [p.id for p in people])

        assert len(matches) == 3
        assert all(m.round == 1 and m.status == "pending" and m.winner_id is None for m in matches)
        assert [m.player2_id for m in matches].count(None) == 1

    def test_regenerate_with_unknown_participant(self, db, tournament, make_participants):
        (a,) = make_participants("A")
        with pytest.raises(HTTPException) as exc_info:
            bracket_service.regenerate_bracket(db, tournament.id, [a.id, 9999])
        assert exc_info.value.status_code == 404

    def test_regenerate_unknown_tournament(self, db):
        with pytest.raises(HTTPException) as exc_info:
            bracket_service.regenerate_bracket(db, 12345, [])
        assert exc_info.value.status_code == 404
