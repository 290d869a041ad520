"""
SIMS Dashboard - Event Series Store
Record shapes and the single-snapshot store that every view reads from
"""

import logging
from typing import Any, Dict, List, Optional, TypedDict, Union

logger = logging.getLogger(__name__)


# ================== RECORD SHAPES ==================

class Merit(TypedDict):
    category: str
    points: int
    description: str
    updated_by: str


class Demerit(TypedDict):
    reason: str
    points: int
    person: str
    updated_by: str


class JudgeScore(TypedDict):
    criteria: str
    score: int


class Scorecard(TypedDict):
    judge: str
    scores: List[JudgeScore]


class EventScore(TypedDict):
    event_name: str
    placement: int
    base_points: int
    competition_points: int
    scorecard: List[Scorecard]


class TeamDetails(TypedDict):
    merits: List[Merit]
    demerits: List[Demerit]
    event_scores: List[EventScore]


class TeamRecord(TypedDict):
    rank: int
    name: str
    score: int
    previous_scores: List[int]
    wins: int
    losses: int
    players: int
    live: bool
    details: TeamDetails


class Criterion(TypedDict):
    name: str
    description: str
    points: Union[int, float, str]


class GuidelineSection(TypedDict, total=False):
    title: str
    description: str
    guidelines: List[str]
    criteria: List[Criterion]
    competition_points: Union[int, float, str, None]


class EventDefinition(TypedDict, total=False):
    id: int
    category: str
    name: str
    officer: str
    participants: str
    judges: List[str]
    description: str
    details: List[GuidelineSection]


class StatCard(TypedDict):
    team: str
    points: str
    games: int
    change: float
    color: str


class User(TypedDict):
    id: int
    name: str
    email: str
    role: str
    avatar: str


class SeriesRecord(TypedDict):
    stat_cards: List[StatCard]
    leaderboard: List[TeamRecord]
    events: List[EventDefinition]
    top_players: List[User]
    rules: Optional[Dict[str, Any]]


Snapshot = Dict[str, SeriesRecord]


# ================== STORE ==================

class EventRecordStore:
    """Holds exactly one current snapshot of every event series"""

    def __init__(self, data: Snapshot, selected_series: Optional[str] = None):
        if not data:
            raise ValueError("Store needs at least one event series")
        self._snapshot = {
            name: {**record, "leaderboard": rerank(record.get("leaderboard") or [])}
            for name, record in data.items()
        }
        self._selected_series = selected_series or next(iter(data))
        if self._selected_series not in data:
            raise KeyError(f"Unknown event series: {self._selected_series}")

    @property
    def snapshot(self) -> Snapshot:
        """Current snapshot; treat as read-only"""
        return self._snapshot

    @property
    def series_names(self) -> List[str]:
        return list(self._snapshot.keys())

    @property
    def selected_series(self) -> str:
        return self._selected_series

    @selected_series.setter
    def selected_series(self, name: str):
        if name not in self._snapshot:
            raise KeyError(f"Unknown event series: {name}")
        if name != self._selected_series:
            logger.info("Selected event series changed: %s -> %s", self._selected_series, name)
        self._selected_series = name

    def series(self, name: Optional[str] = None) -> SeriesRecord:
        """Get the record for a series (the selected one by default)"""
        return self._snapshot[name or self._selected_series]

    def commit(self, new_snapshot: Snapshot):
        """Replace the current snapshot with a new one"""
        if self._selected_series not in new_snapshot:
            raise KeyError(f"New snapshot is missing selected series: {self._selected_series}")
        self._snapshot = new_snapshot

    def validate_integrity(self) -> Dict[str, Any]:
        """Check store consistency and return a report"""
        integrity_report = {
            "valid": True,
            "issues": [],
            "stats": {}
        }

        for series_name, record in self._snapshot.items():
            # Event ids must be unique within a series
            event_ids = [event.get("id") for event in record["events"]]
            duplicates = sorted({i for i in event_ids if event_ids.count(i) > 1})
            if duplicates:
                integrity_report["valid"] = False
                integrity_report["issues"].append(
                    f"{series_name}: duplicate event ids {duplicates}")

            leaderboard = record["leaderboard"]
            for position, team in enumerate(leaderboard):
                if team["rank"] != position + 1:
                    integrity_report["valid"] = False
                    integrity_report["issues"].append(
                        f"{series_name}: {team['name']} has rank {team['rank']}, expected {position + 1}")
                if position and leaderboard[position - 1]["score"] < team["score"]:
                    integrity_report["valid"] = False
                    integrity_report["issues"].append(
                        f"{series_name}: {team['name']} is out of score order")

            live_teams = [team["name"] for team in leaderboard if team["live"]]
            if len(live_teams) > 1:
                integrity_report["valid"] = False
                integrity_report["issues"].append(
                    f"{series_name}: more than one live team ({', '.join(live_teams)})")

            integrity_report["stats"][series_name] = {
                "teams": len(leaderboard),
                "events": len(record["events"]),
                "top_players": len(record["top_players"]),
            }

        return integrity_report


# ================== PURE MUTATORS ==================

def rerank(leaderboard: List[TeamRecord]) -> List[TeamRecord]:
    """Stable-sort by score descending and reassign 1-based ranks"""
    ordered = sorted(leaderboard, key=lambda team: team["score"], reverse=True)
    return [{**team, "rank": position + 1} for position, team in enumerate(ordered)]


def _with_series(snapshot: Snapshot, series: str, **changes) -> Snapshot:
    """Copy the snapshot with one series record shallow-updated"""
    new_snapshot = dict(snapshot)
    new_snapshot[series] = {**snapshot[series], **changes}
    return new_snapshot


def with_event_added(snapshot: Snapshot, series: str, new_event: Dict[str, Any],
                     event_id: int) -> Snapshot:
    """Append an event with the given id"""
    events = snapshot[series]["events"]
    return _with_series(snapshot, series, events=[*events, {**new_event, "id": event_id}])


def with_event_updated(snapshot: Snapshot, series: str, event: Dict[str, Any]) -> Snapshot:
    """Replace the event whose id matches; unknown ids leave the events as they were"""
    events = snapshot[series]["events"]
    new_events = [event if e.get("id") == event.get("id") else e for e in events]
    return _with_series(snapshot, series, events=new_events)


def with_event_deleted(snapshot: Snapshot, series: str, event_id: int) -> Snapshot:
    """Remove the event whose id matches"""
    events = snapshot[series]["events"]
    return _with_series(snapshot, series, events=[e for e in events if e.get("id") != event_id])


def with_leaderboard(snapshot: Snapshot, series: str, leaderboard: List[TeamRecord]) -> Snapshot:
    """Replace the leaderboard slice of a series"""
    return _with_series(snapshot, series, leaderboard=leaderboard)


def next_event_id(events: List[Dict[str, Any]], floor: int = 0) -> int:
    """Next id: one past the largest of the existing ids and ``floor``"""
    return max([floor, *(e.get("id", 0) for e in events)]) + 1
