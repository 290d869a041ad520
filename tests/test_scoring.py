"""Tests for leaderboard projections and live score updates."""

from services import ScoringService
from services.access import UserRole
from tests.conftest import ScriptedRandom


class TestLeaderboardFrames:
    def test_team_leaderboard_columns_and_order(self, scoring_service):
        df = scoring_service.get_team_leaderboard()

        assert list(df.columns) == ["rank", "team_name", "score", "wins", "losses", "players", "live"]
        assert df["rank"].tolist() == [1, 2, 3, 4]
        assert df["team_name"].tolist()[0] == "Midnight Spades"

    def test_empty_series(self, store):
        store.selected_series = "Campus Clash"
        scoring = ScoringService(store)

        assert scoring.get_team_leaderboard().empty
        assert scoring.get_score_history().empty
        assert scoring.chart_axis_max() == 0

    def test_score_history(self, scoring_service):
        df = scoring_service.get_score_history()
        spades = df[df["team"] == "Midnight Spades"].set_index("series")["score"].to_dict()

        assert spades == {"Previous Score": 2800, "Current Score": 2850, "Historic Score": 2750}
        assert len(df) == 12

    def test_live_team_follows_ticks(self, store):
        scoring = ScoringService(store, rng=ScriptedRandom(3, 5))
        assert scoring.get_live_team() == "Midnight Spades"

        scoring.advance_live_scores()

        assert scoring.get_live_team() == "Glacier Diamonds"

    def test_no_live_team_in_empty_series(self, store):
        store.selected_series = "Intramurals"
        assert ScoringService(store).get_live_team() is None

    def test_chart_axis_rounds_up_to_thousand(self, scoring_service):
        assert scoring_service.chart_axis_max() == 3000


class TestTeamDetails:
    def test_unknown_team(self, scoring_service):
        assert scoring_service.get_team_details("Nobody") is None

    def test_demerit_person_hidden_from_users(self, scoring_service):
        details = scoring_service.get_team_details("Midnight Spades", UserRole.USER)
        assert details["demerits"][0]["person"] == "[Hidden]"
        assert details["demerits"][0]["updated_by"] == "Chris Lee"

    def test_demerit_person_visible_to_officers(self, scoring_service, store):
        details = scoring_service.get_team_details("Midnight Spades", "officer")
        assert details["demerits"][0]["person"] == "John Doe"

    def test_masking_does_not_touch_store(self, scoring_service, store):
        scoring_service.get_team_details("Midnight Spades", UserRole.USER)
        spades = store.series()["leaderboard"][0]
        assert spades["details"]["demerits"][0]["person"] == "John Doe"

    def test_totals(self, scoring_service):
        details = scoring_service.get_team_details("Midnight Spades", UserRole.ADMIN)
        assert details["merit_total"] == 550
        assert details["demerit_total"] == 20
        assert len(details["event_scores"]) == 2


class TestAdvanceLiveScores:
    def test_commits_ticked_leaderboard(self, store):
        scoring = ScoringService(store, rng=ScriptedRandom(3, 10))
        before = store.snapshot

        leaderboard = scoring.advance_live_scores()

        assert store.series()["leaderboard"] is leaderboard
        assert store.snapshot is not before
        diamonds = next(team for team in leaderboard if team["name"] == "Glacier Diamonds")
        assert diamonds["score"] == 1860
        assert diamonds["live"] is True
        assert [team for team in leaderboard if team["live"]] == [diamonds]

    def test_other_series_untouched(self, store):
        scoring = ScoringService(store, rng=ScriptedRandom(0, 1))
        events_before = store.series()["events"]
        campus_before = store.series("Campus Clash")

        scoring.advance_live_scores()

        assert store.series()["events"] is events_before
        assert store.series("Campus Clash") is campus_before

    def test_empty_leaderboard_is_a_no_op(self, store):
        store.selected_series = "Intramurals"
        snapshot = store.snapshot

        assert ScoringService(store).advance_live_scores() == []
        assert store.snapshot is snapshot

    def test_integrity_holds_after_many_ticks(self, store):
        import random
        scoring = ScoringService(store, rng=random.Random(7))
        for _ in range(50):
            scoring.advance_live_scores()

        assert store.validate_integrity()["valid"]
