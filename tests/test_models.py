"""
Unit tests for the data model and rating rendering
"""

from dataclasses import FrozenInstanceError

import pytest

from elobot.models import (
    NO_RATINGS_MESSAGE,
    Player,
    PlayerSearchResult,
    RatingEntry,
    SearchQuery,
    TimeControl,
)


class TestTimeControl:

    def test_codes_follow_declared_order(self):
        assert [tc.code for tc in TimeControl] == [1, 2, 3]
        assert [tc.value for tc in TimeControl] == ["Lente", "Semi-rapide", "Rapide"]


class TestSearchQuery:

    def test_empty_query(self):
        assert SearchQuery().is_empty
        assert SearchQuery(member_id=0).is_empty

    def test_name_only(self):
        query = SearchQuery(last_name="Doe")
        assert query.has_name
        assert not query.is_empty

    def test_id_only(self):
        query = SearchQuery(member_id=42)
        assert not query.has_name
        assert not query.is_empty


class TestPlayerSummary:

    def test_empty_ratings(self):
        assert Player(member_id=1).summary == NO_RATINGS_MESSAGE

    def test_last_entry_is_current(self):
        player = Player(member_id=1, ratings={
            TimeControl.LENTE: [
                RatingEntry(date="2020-01-01", value=1500),
                RatingEntry(date="2021-01-01", value=1550),
            ],
            TimeControl.SEMI_RAPIDE: [],
            TimeControl.RAPIDE: [],
        })
        assert player.summary == "Lente: 1550 (2021-01-01)\nSemi-rapide: ?\nRapide: ?"

    def test_fixed_order_regardless_of_insertion(self):
        player = Player(member_id=1)
        player.ratings[TimeControl.RAPIDE] = [RatingEntry(date="2022-05-01", value=1400)]
        player.ratings[TimeControl.LENTE] = [RatingEntry(date="2022-06-01", value=1600)]

        assert player.summary.splitlines() == [
            "Lente: 1600 (2022-06-01)",
            "Rapide: 1400 (2022-05-01)",
        ]

    def test_missing_time_control_is_not_rendered(self):
        player = Player(member_id=1, ratings={TimeControl.SEMI_RAPIDE: []})
        assert player.summary == "Semi-rapide: ?"

    def test_rendering_is_idempotent(self):
        player = Player(member_id=1, ratings={
            TimeControl.LENTE: [RatingEntry(date="2021-01-01", value=1550)],
        })
        assert player.summary == player.summary


def test_search_result_is_immutable():
    result = PlayerSearchResult(name="Jane Doe", member_id=42)
    with pytest.raises(FrozenInstanceError):
        result.member_id = 7
