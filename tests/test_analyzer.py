"""Tests for the roster analyzer and team win model."""

import math
from pathlib import Path

import pytest

from roster_grader.analyzer import (
    analyze_players,
    analyze_roster,
    expected_wins,
    playoff_odds_pct,
    projected_record,
    round_half_up,
    safe_ratio,
    win_probability,
)
from roster_grader.config import STARTER_SLOTS, LeagueSettings, RosterSettings
from roster_grader.data_io import load_catalog_csv
from roster_grader.models import Dataset, Player

FIXTURES = Path(__file__).parent / "fixtures"

ROSTER_NAMES = [
    "Josh Allen",
    "Christian McCaffrey",
    "Bijan Robinson",
    "Breece Hall",
    "Justin Jefferson",
    "CeeDee Lamb",
    "Travis Kelce",
    "Harrison Butker",
    "San Francisco 49ers",
    "Tony Pollard",
    "Nobody Special",
]


@pytest.fixture
def catalog() -> Dataset:
    """Fixture catalog loaded from CSV."""
    return load_catalog_csv(FIXTURES / "sample_catalog.csv")


@pytest.fixture
def two_team_settings() -> LeagueSettings:
    """Default roster in a two-team league (matches the fixture depth)."""
    return LeagueSettings(teams=2)


def make_player(name: str, position: str, proj: float) -> Player:
    return Player(player_id=name, name=name, team="TST", position=position, proj_ppg=proj)


class TestAnalyzeRoster:
    """Tests for the full analysis pipeline."""

    def test_starters_and_grades(
        self, catalog: Dataset, two_team_settings: LeagueSettings
    ) -> None:
        """Test slot placement and per-slot grades for a strong roster."""
        result = analyze_roster(ROSTER_NAMES, catalog, two_team_settings)

        placed = {a.slot: a.player.name for a in result.starters}
        assert placed == {
            "QB1": "Josh Allen",
            "RB1": "Christian McCaffrey",
            "RB2": "Bijan Robinson",
            "WR1": "Justin Jefferson",
            "WR2": "CeeDee Lamb",
            "TE": "Travis Kelce",
            "FLEX": "Breece Hall",
            "K": "Harrison Butker",
            "DST": "San Francisco 49ers",
        }
        assert list(placed) == list(STARTER_SLOTS)

        grades = {a.slot: a.grade for a in result.starters}
        assert grades["QB1"] == "B-"
        assert grades["RB1"] == "A-"
        assert grades["RB2"] == "A"
        assert grades["FLEX"] == "A+"
        assert grades["TE"] == "B"

        flex = result.starters_in("FLEX")[0]
        assert flex.baseline == 10.5
        assert flex.delta == pytest.approx(6.7)
        assert flex.delta_pct == pytest.approx(6.7 / 10.5)

    def test_bench_and_team_summary(
        self, catalog: Dataset, two_team_settings: LeagueSettings
    ) -> None:
        """Test bench contents and the aggregate team statistics."""
        result = analyze_roster(ROSTER_NAMES, catalog, two_team_settings)

        assert [p.name for p in result.bench] == ["Tony Pollard", "Nobody Special"]

        team = result.team
        assert team.sum_proj == pytest.approx(147.5)
        assert team.sum_baseline == pytest.approx(130.2)
        assert team.delta == pytest.approx(17.3)
        assert team.delta_pct == pytest.approx(17.3 / 130.2)
        assert team.advantages_count == 9
        assert team.star_count == 2
        assert team.bench_depth_count == 1
        assert team.overall_grade == "A-"
        assert team.projected_record == "11-3"
        assert team.playoff_odds_pct == 94

    def test_team_at_exact_baseline(self) -> None:
        """Test a roster whose starters exactly match fallback baselines."""
        roster = [
            make_player("QB", "QB", 15.0),
            make_player("RB-a", "RB", 12.0),
            make_player("RB-b", "RB", 10.0),
            make_player("WR-a", "WR", 12.0),
            make_player("WR-b", "WR", 10.0),
            make_player("TE", "TE", 8.0),
            make_player("RB-c", "RB", 9.0),
            make_player("K", "K", 7.0),
            make_player("DST", "DST", 7.0),
        ]

        result = analyze_players(roster, Dataset(players=[]), LeagueSettings())
        team = result.team

        assert team.sum_proj == team.sum_baseline == 90.0
        assert team.delta_pct == 0
        assert team.overall_grade == "B-"
        assert team.expected_wins == 7.0
        assert team.projected_record == "7-7"
        assert team.playoff_odds_pct == 27
        assert team.advantages_count == 9
        assert team.star_count == 0
        assert all(a.grade == "B-" for a in result.starters)

    def test_empty_roster(self, catalog: Dataset) -> None:
        """Test that no names yields baseline-only team stats."""
        result = analyze_roster([], catalog, LeagueSettings(teams=2))

        assert result.starters == []
        assert result.bench == []
        assert result.team.sum_proj == 0
        assert result.team.sum_baseline == pytest.approx(130.2)
        assert result.team.overall_grade == "F"
        assert result.team.projected_record == "0-14"
        assert result.team.playoff_odds_pct == 0

    def test_degenerate_inputs_do_not_raise(self) -> None:
        """Test empty catalog and zero teams."""
        result = analyze_roster(["Someone"], Dataset(players=[]), LeagueSettings(teams=0))

        assert len(result.starters) == 1
        assert result.starters[0].slot == "WR1"
        assert result.starters[0].baseline == 12.0
        assert result.starters[0].delta == pytest.approx(-5.0)

    def test_unresolved_name_is_analyzed(self, catalog: Dataset) -> None:
        """Test that an unknown name is analyzed as a 7.0 PPG receiver."""
        result = analyze_roster(["Nonexistent Player XYZ"], catalog, LeagueSettings(teams=2))

        wr1 = result.starters_in("WR1")[0]
        assert wr1.player.proj_ppg == 7.0
        assert wr1.player.position == "WR"
        assert wr1.baseline == 18.1

    def test_zero_baseline_slot_has_zero_pct(self) -> None:
        """Test the division guard for a zero baseline."""
        catalog = Dataset(
            players=[make_player("Zero K", "K", 0.0)],
            name_index={"zero k": "Zero K"},
        )
        result = analyze_roster(["Zero K"], catalog, LeagueSettings(teams=1))

        kicker = result.starters_in("K")[0]
        assert kicker.baseline == 0.0
        assert kicker.delta_pct == 0.0
        assert kicker.grade == "B-"

    def test_analysis_is_deterministic(
        self, catalog: Dataset, two_team_settings: LeagueSettings
    ) -> None:
        """Test that repeated calls give equal results and leave inputs intact."""
        before = tuple(catalog.players)

        first = analyze_roster(ROSTER_NAMES, catalog, two_team_settings)
        second = analyze_roster(ROSTER_NAMES, catalog, two_team_settings)

        assert first == second
        assert catalog.players == before

    def test_custom_roster_settings(self, catalog: Dataset) -> None:
        """Test a league without kickers and with two FLEX spots."""
        settings = LeagueSettings(teams=2, roster=RosterSettings(K=0, FLEX=2))
        result = analyze_roster(ROSTER_NAMES, catalog, settings)

        assert result.starters_in("K") == []
        assert [a.player.name for a in result.starters_in("FLEX")] == [
            "Breece Hall",
            "Tony Pollard",
        ]
        assert "Harrison Butker" in [p.name for p in result.bench]
        # Every slot still counts toward the league-average total
        assert result.team.sum_baseline == pytest.approx(130.2)


class TestWinModel:
    """Tests for the win probability and playoff odds helpers."""

    def test_average_team_wins_half(self) -> None:
        """Test a team exactly at the league average."""
        assert win_probability(100.0, 100.0) == 0.5
        assert expected_wins(100.0, 100.0) == 7.0

    def test_zero_baseline_is_coin_flip(self) -> None:
        """Test the guard when the league-average total is zero."""
        assert win_probability(50.0, 0.0) == 0.5

    def test_one_sigma_above_average(self) -> None:
        """Test the normal CDF one standard deviation above average."""
        # sigma = 0.18 * 100 = 18
        assert win_probability(118.0, 100.0) == pytest.approx(0.841345, abs=1e-6)

    def test_win_probability_monotonic(self) -> None:
        """Test that higher projections never lower win probability."""
        values = [win_probability(p, 100.0) for p in range(50, 151, 5)]
        assert values == sorted(values)
        assert all(0.0 <= v <= 1.0 for v in values)

    def test_projected_record(self) -> None:
        """Test record formatting and half-up rounding."""
        assert projected_record(7.0) == "7-7"
        assert projected_record(7.5) == "8-6"
        assert projected_record(10.49) == "10-4"
        assert projected_record(0.0) == "0-14"

    def test_playoff_odds(self) -> None:
        """Test the logistic playoff odds transform."""
        assert playoff_odds_pct(8.0) == 50
        assert playoff_odds_pct(7.0) == round(100 / (1 + math.e))
        assert playoff_odds_pct(14.0) == 100
        assert playoff_odds_pct(0.0) == 0

    def test_helpers(self) -> None:
        """Test rounding and guarded division helpers."""
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2
        assert safe_ratio(1.0, 0.0) == 0.0
        assert safe_ratio(1.0, -2.0) == 0.0
        assert safe_ratio(1.0, 4.0) == 0.25
