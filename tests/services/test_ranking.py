"""Tests for extreme-mover selection and ranked lists."""

import pytest

from stockdrop.services.ranking import Direction, rank_by_change, select_extreme
from tests.helpers import make_quote


@pytest.fixture
def batch():
    return [make_quote("AAPL", -5.2), make_quote("MSFT", -1.0), make_quote("TSLA", 3.0)]


class TestSelectExtreme:
    def test_max_decline(self, batch):
        assert select_extreme(batch, Direction.MAX_DECLINE).symbol == "AAPL"

    def test_max_gain(self, batch):
        assert select_extreme(batch, Direction.MAX_GAIN).symbol == "TSLA"

    @pytest.mark.parametrize("direction", list(Direction))
    def test_empty_returns_none(self, direction):
        assert select_extreme([], direction) is None

    def test_tie_goes_to_first(self):
        quotes = [make_quote("A", -2.0), make_quote("B", -2.0)]
        for _ in range(20):
            assert select_extreme(quotes, Direction.MAX_DECLINE).symbol == "A"

    def test_gain_tie_goes_to_first(self):
        quotes = [make_quote("A", 4.0), make_quote("B", 4.0)]
        assert select_extreme(quotes, Direction.MAX_GAIN).symbol == "A"

    def test_no_threshold(self):
        quotes = [make_quote("A", 2.0), make_quote("B", 0.5)]
        assert select_extreme(quotes, Direction.MAX_DECLINE).symbol == "B"

    def test_accepts_generators(self, batch):
        assert select_extreme((q for q in batch), Direction.MAX_GAIN).symbol == "TSLA"

    def test_duplicates_not_collapsed(self):
        first = make_quote("AAPL", -3.0, price=10.0)
        second = make_quote("AAPL", -3.0, price=20.0)
        assert select_extreme([first, second], Direction.MAX_DECLINE) is first


class TestRankByChange:
    def test_decline_order(self, batch):
        assert [q.symbol for q in rank_by_change(batch, Direction.MAX_DECLINE)] == ["AAPL", "MSFT", "TSLA"]

    def test_gain_order(self, batch):
        assert [q.symbol for q in rank_by_change(batch, Direction.MAX_GAIN)] == ["TSLA", "MSFT", "AAPL"]

    def test_loser_threshold(self, batch):
        ranked = rank_by_change(batch, Direction.MAX_DECLINE, threshold=-5.0)
        assert [q.symbol for q in ranked] == ["AAPL"]

    def test_gainer_threshold(self, batch):
        ranked = rank_by_change(batch, Direction.MAX_GAIN, threshold=0.0)
        assert [q.symbol for q in ranked] == ["TSLA"]

    @pytest.mark.parametrize("direction,threshold", [(Direction.MAX_DECLINE, -5.2), (Direction.MAX_GAIN, 3.0)])
    def test_threshold_excludes_exact_match(self, batch, direction, threshold):
        symbols = [q.symbol for q in rank_by_change(batch, direction, threshold=threshold)]
        assert symbols == []

    def test_limit(self, batch):
        assert len(rank_by_change(batch, Direction.MAX_DECLINE, limit=2)) == 2

    def test_stable_for_ties(self):
        quotes = [make_quote("A", -2.0), make_quote("B", -7.0), make_quote("C", -2.0)]
        ranked = rank_by_change(quotes, Direction.MAX_DECLINE)
        assert [q.symbol for q in ranked] == ["B", "A", "C"]
        ranked = rank_by_change(quotes, Direction.MAX_GAIN)
        assert [q.symbol for q in ranked] == ["A", "C", "B"]

    def test_empty(self):
        assert rank_by_change([], Direction.MAX_DECLINE, limit=5) == []
