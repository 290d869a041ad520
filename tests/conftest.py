"""Shared fixtures for the SIMS dashboard tests."""

import pytest

from store import DEFAULT_SERIES, build_store
from services import EventManagementService, ScoringService


class ScriptedRandom:
    """Stand-in RNG that returns scripted randrange values in order."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        value = self.values.pop(0)
        assert 0 <= value < stop, f"scripted value {value} outside [0, {stop})"
        return value


def make_team(name, score, rank=0, live=False):
    return {
        "rank": rank, "name": name, "score": score, "previous_scores": [score],
        "wins": 0, "losses": 0, "players": 5, "live": live,
        "details": {"merits": [], "demerits": [], "event_scores": []},
    }


@pytest.fixture
def store():
    return build_store(DEFAULT_SERIES)


@pytest.fixture
def event_service(store):
    return EventManagementService(store)


@pytest.fixture
def scoring_service(store):
    return ScoringService(store)


@pytest.fixture
def valid_event():
    return {
        "name": "Volleyball",
        "category": "Hoop & Spike",
        "participants": "6",
        "officer": "Joshua",
        "judges": ["Coach Reyes"],
        "description": "Best of three sets.",
        "details": [],
    }
