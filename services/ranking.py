"""
SIMS Dashboard - Ranking Engine
Simulated live-score ticks and the timer that schedules them
"""

import logging
import random
import time
from typing import Callable, List, Optional

from store.schema import TeamRecord, rerank

logger = logging.getLogger(__name__)

MAX_TICK_DELTA = 20  # deltas are drawn from [0, MAX_TICK_DELTA)

_default_rng = random.Random()


def tick(leaderboard: List[TeamRecord], rng: Optional[random.Random] = None) -> List[TeamRecord]:
    """
    Apply one simulated score update and return a new, re-ranked leaderboard.

    One team is picked uniformly at random, becomes the only live team and gains
    a random delta in [0, 20). The input list and its team records are left
    untouched; history fields are shared with the new records.
    """
    if not leaderboard:
        return leaderboard

    rng = rng or _default_rng
    picked = rng.randrange(len(leaderboard))
    delta = rng.randrange(MAX_TICK_DELTA)

    teams = [{**team, "live": False} for team in leaderboard]
    teams[picked]["live"] = True
    teams[picked]["score"] = teams[picked]["score"] + delta

    logger.debug("Live tick: %s +%d -> %d", teams[picked]["name"], delta, teams[picked]["score"])
    return rerank(teams)


class LiveTicker:
    """Fixed-interval tick schedule for one mounted leaderboard view"""

    def __init__(self, interval: float = 3.0, clock: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval = interval
        self._clock = clock
        self._running = False
        self._last_tick = None

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        """Arm the ticker; a running ticker keeps its schedule"""
        if self._running:
            return
        self._running = True
        self._last_tick = self._clock()

    def stop(self):
        """Disarm the ticker; safe to call more than once"""
        self._running = False
        self._last_tick = None

    def due(self) -> bool:
        if not self._running:
            return False
        return self._clock() - self._last_tick >= self.interval

    def poll(self, callback: Callable[[], object]) -> bool:
        """Run ``callback`` once if a tick is due; returns whether it ran"""
        if not self.due():
            return False
        self._last_tick = self._clock()
        callback()
        return True
