"""
SIMS Dashboard - Scoring Service
Leaderboard projections, team breakdowns and live score updates
"""

import logging
import math
import random
from typing import Dict, List, Optional

import pandas as pd

from store import EventRecordStore
from store.schema import TeamRecord, with_leaderboard
from .access import RoleLike, can_view_sensitive
from .ranking import tick

logger = logging.getLogger(__name__)

HIDDEN = "[Hidden]"


class ScoringService:
    """Read side of the leaderboard plus the simulated live ticker"""

    def __init__(self, store: EventRecordStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng

    def get_leaderboard(self) -> List[TeamRecord]:
        return self.store.series()["leaderboard"]

    def get_live_team(self) -> Optional[str]:
        """Name of the team currently marked live, if any"""
        return next((team["name"] for team in self.get_leaderboard() if team["live"]), None)

    def get_team_leaderboard(self) -> pd.DataFrame:
        """Get team leaderboard ordered by rank"""
        columns = ["rank", "team_name", "score", "wins", "losses", "players", "live"]
        rows = [{
            "rank": team["rank"],
            "team_name": team["name"],
            "score": team["score"],
            "wins": team["wins"],
            "losses": team["losses"],
            "players": team["players"],
            "live": team["live"],
        } for team in self.get_leaderboard()]
        return pd.DataFrame(rows, columns=columns)

    def get_team_details(self, team_name: str, role: RoleLike = None) -> Optional[Dict]:
        """Merits, demerits and event scores for a team"""
        team = next((t for t in self.get_leaderboard() if t["name"] == team_name), None)
        if team is None:
            return None

        details = team["details"]
        demerits = details["demerits"]
        if not can_view_sensitive(role):
            demerits = [{**demerit, "person": HIDDEN} for demerit in demerits]

        return {
            "team": {key: team[key] for key in ("rank", "name", "score", "wins", "losses", "players")},
            "merits": details["merits"],
            "demerits": demerits,
            "event_scores": details["event_scores"],
            "merit_total": sum(merit["points"] for merit in details["merits"]),
            "demerit_total": sum(demerit["points"] for demerit in details["demerits"]),
        }

    def get_score_history(self) -> pd.DataFrame:
        """Long-form scores per team for the dashboard chart"""
        rows = []
        for team in self.get_leaderboard():
            history = team["previous_scores"]
            rows.append({"team": team["name"], "series": "Previous Score",
                         "score": history[0] if len(history) > 0 else 0})
            rows.append({"team": team["name"], "series": "Current Score", "score": team["score"]})
            rows.append({"team": team["name"], "series": "Historic Score",
                         "score": history[1] if len(history) > 1 else 0})
        return pd.DataFrame(rows, columns=["team", "series", "score"])

    def chart_axis_max(self) -> int:
        """Top of the score axis, rounded up to the next thousand"""
        leaderboard = self.get_leaderboard()
        if not leaderboard:
            return 0
        return int(math.ceil(max(team["score"] for team in leaderboard) / 1000) * 1000)

    def advance_live_scores(self) -> List[TeamRecord]:
        """Run one tick on the selected leaderboard and commit it"""
        series = self.store.selected_series
        leaderboard = self.get_leaderboard()
        if not leaderboard:
            return leaderboard

        new_leaderboard = tick(leaderboard, self.rng)
        self.store.commit(with_leaderboard(self.store.snapshot, series, new_leaderboard))
        return new_leaderboard
