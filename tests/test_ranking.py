"""Tests for the live-score tick and its ticker."""

import random

import pytest

from services.ranking import LiveTicker, rerank, tick
from tests.conftest import ScriptedRandom, make_team


def sample_leaderboard():
    return rerank([
        make_team("Midnight Spades", 2850, live=True),
        make_team("Scarlet Hearts", 2400),
        make_team("Emerald Clover", 1980),
        make_team("Glacier Diamonds", 1850),
    ])


class TestTick:
    def test_empty_leaderboard_is_returned_unchanged(self):
        assert tick([]) == []

    def test_forced_pick_reorders_and_reranks(self):
        leaderboard = [make_team("A", 100, rank=1), make_team("B", 90, rank=2)]

        result = tick(leaderboard, ScriptedRandom(1, 15))

        assert [(t["name"], t["score"], t["rank"], t["live"]) for t in result] == [
            ("B", 105, 1, True),
            ("A", 100, 2, False),
        ]

    def test_draws_index_then_delta(self):
        rng = ScriptedRandom(0, 0)
        tick(sample_leaderboard(), rng)
        assert rng.calls == [4, 20]

    @pytest.mark.parametrize("seed", range(25))
    def test_rank_order_and_single_live(self, seed):
        result = tick(sample_leaderboard(), random.Random(seed))

        for position, team in enumerate(result):
            assert team["rank"] == position + 1
        for current, following in zip(result, result[1:]):
            assert current["score"] >= following["score"]
        assert sum(team["live"] for team in result) == 1

    @pytest.mark.parametrize("seed", range(25))
    def test_live_team_score_never_drops(self, seed):
        before = {team["name"]: team["score"] for team in sample_leaderboard()}

        result = tick(sample_leaderboard(), random.Random(seed))

        live_team = next(team for team in result if team["live"])
        assert 0 <= live_team["score"] - before[live_team["name"]] < 20
        for team in result:
            if not team["live"]:
                assert team["score"] == before[team["name"]]

    def test_ties_keep_previous_order(self):
        leaderboard = [make_team("A", 100, rank=1), make_team("B", 100, rank=2), make_team("C", 50, rank=3)]

        result = tick(leaderboard, ScriptedRandom(2, 0))

        assert [team["name"] for team in result] == ["A", "B", "C"]

    def test_input_is_not_mutated(self):
        leaderboard = sample_leaderboard()
        originals = [dict(team) for team in leaderboard]

        result = tick(leaderboard, ScriptedRandom(3, 19))

        assert result is not leaderboard
        assert leaderboard == originals
        assert all(new is not old for new, old in zip(result, leaderboard))

    def test_history_is_shared_not_copied(self):
        leaderboard = sample_leaderboard()
        by_name = {team["name"]: team for team in leaderboard}

        result = tick(leaderboard, ScriptedRandom(1, 5))

        for team in result:
            assert team["details"] is by_name[team["name"]]["details"]
            assert team["previous_scores"] is by_name[team["name"]]["previous_scores"]


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestLiveTicker:
    def test_not_due_until_started(self):
        clock = FakeClock()
        ticker = LiveTicker(interval=3, clock=clock)
        clock.now += 10
        assert not ticker.due()

    def test_poll_fires_once_per_interval(self):
        clock = FakeClock()
        ticker = LiveTicker(interval=3, clock=clock)
        calls = []
        ticker.start()

        assert not ticker.poll(lambda: calls.append(clock.now))
        clock.now += 3
        assert ticker.poll(lambda: calls.append(clock.now))
        assert not ticker.poll(lambda: calls.append(clock.now))
        clock.now += 2
        assert not ticker.poll(lambda: calls.append(clock.now))
        clock.now += 1
        assert ticker.poll(lambda: calls.append(clock.now))

        assert len(calls) == 2

    def test_long_gap_yields_a_single_tick(self):
        clock = FakeClock()
        ticker = LiveTicker(interval=3, clock=clock)
        calls = []
        ticker.start()

        clock.now += 30
        ticker.poll(lambda: calls.append(1))
        ticker.poll(lambda: calls.append(1))

        assert calls == [1]

    def test_stop_is_idempotent(self):
        clock = FakeClock()
        ticker = LiveTicker(interval=3, clock=clock)
        ticker.start()
        ticker.stop()
        ticker.stop()

        clock.now += 10
        assert not ticker.is_running
        assert not ticker.poll(lambda: pytest.fail("stopped ticker fired"))

    def test_restart_resets_schedule(self):
        clock = FakeClock()
        ticker = LiveTicker(interval=3, clock=clock)
        for _ in range(3):
            ticker.start()
            ticker.stop()
        ticker.start()
        ticker.start()

        assert ticker.is_running
        assert not ticker.due()
        clock.now += 3
        assert ticker.due()

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            LiveTicker(interval=0)
