"""Tests for replacement-level baseline calculation."""

import random
from pathlib import Path

import pytest

from roster_grader.baselines import compute_baselines, replacement_value
from roster_grader.config import BASELINE_FALLBACKS, POSITIONS, STARTER_SLOTS
from roster_grader.data_io import load_catalog_csv
from roster_grader.models import Player

FIXTURES = Path(__file__).parent / "fixtures"


def make_player(name: str, position: str, proj: float) -> Player:
    return Player(player_id=name, name=name, team="TST", position=position, proj_ppg=proj)


def test_empty_catalog_uses_fallbacks() -> None:
    """Test that every slot falls back to its documented constant."""
    baselines = compute_baselines([], teams=12)

    assert baselines == {
        "QB1": 15.0,
        "RB1": 12.0,
        "RB2": 10.0,
        "WR1": 12.0,
        "WR2": 10.0,
        "TE": 8.0,
        "FLEX": 9.0,
        "K": 7.0,
        "DST": 7.0,
    }
    assert baselines == BASELINE_FALLBACKS


def test_baselines_cover_every_starting_slot() -> None:
    """Test that baselines have exactly the starting slots, in order."""
    baselines = compute_baselines([make_player("A", "QB", 20.0)], teams=1)
    assert list(baselines) == list(STARTER_SLOTS)
    assert "BENCH" not in baselines


def test_zero_teams_uses_fallbacks() -> None:
    """Test that a zero team count degrades to fallbacks instead of raising."""
    players = [make_player(f"P{i}", pos, 10.0 + i) for i, pos in enumerate(POSITIONS)]
    assert compute_baselines(players, teams=0) == BASELINE_FALLBACKS


def test_single_team_qb_baseline() -> None:
    """Test that one team makes the best QB the replacement level."""
    players = [make_player("A", "QB", 20.0), make_player("B", "QB", 15.0)]
    baselines = compute_baselines(players, teams=1)
    assert baselines["QB1"] == 20.0


def test_short_pool_uses_last_player() -> None:
    """Test that a pool smaller than the rank uses its lowest player."""
    players = [make_player("A", "QB", 20.0), make_player("B", "QB", 15.0)]
    baselines = compute_baselines(players, teams=10)
    assert baselines["QB1"] == 15.0


def test_rb2_uses_double_rank() -> None:
    """Test RB1 at rank N and RB2 at rank 2N."""
    players = [make_player(f"RB{i}", "RB", proj) for i, proj in enumerate([20, 18, 16, 14])]
    baselines = compute_baselines(players, teams=1)
    assert baselines["RB1"] == 20
    assert baselines["RB2"] == 18


def test_flex_pool_combines_leftovers() -> None:
    """Test FLEX from RB/WR beyond 2N and TE beyond N, re-sorted."""
    players = (
        [make_player(f"RB{p}", "RB", p) for p in [20.0, 18.0, 16.0, 14.0]]
        + [make_player(f"WR{p}", "WR", p) for p in [19.0, 17.0, 15.0, 13.0]]
        + [make_player(f"TE{p}", "TE", p) for p in [10.0, 9.0]]
    )

    # Leftovers: RB 16, 14 / WR 15, 13 / TE 9 -> rank 1 is 16
    assert compute_baselines(players, teams=1)["FLEX"] == 16.0

    # With two teams nothing is left over
    assert compute_baselines(players, teams=2)["FLEX"] == BASELINE_FALLBACKS["FLEX"]


def test_fixture_catalog_baselines() -> None:
    """Test baselines for a two-team league over the fixture catalog."""
    catalog = load_catalog_csv(FIXTURES / "sample_catalog.csv")
    baselines = compute_baselines(catalog.players, teams=2)

    assert baselines["QB1"] == 23.8
    assert baselines["RB1"] == 19.0
    assert baselines["RB2"] == 15.4
    assert baselines["WR1"] == 18.1
    assert baselines["WR2"] == 16.0
    assert baselines["TE"] == 11.9
    assert baselines["FLEX"] == 10.5
    assert baselines["K"] == 8.0
    assert baselines["DST"] == 7.5
    assert sum(baselines.values()) == pytest.approx(130.2)


def test_catalog_not_mutated() -> None:
    """Test that baseline calculation leaves the catalog order intact."""
    players = [make_player(f"WR{p}", "WR", p) for p in [5.0, 15.0, 10.0]]
    original = list(players)
    compute_baselines(players, teams=1)
    assert players == original


def test_baselines_never_negative() -> None:
    """Test non-negative baselines over random catalogs and league sizes."""
    rng = random.Random(42)
    for _ in range(50):
        players = [
            make_player(f"P{i}", rng.choice(POSITIONS), rng.uniform(0, 30))
            for i in range(rng.randint(0, 60))
        ]
        baselines = compute_baselines(players, teams=rng.randint(1, 14))
        assert all(value >= 0 for value in baselines.values())


def test_replacement_value_rank_below_one() -> None:
    """Test that a non-positive rank returns the fallback."""
    pool = [make_player("A", "K", 9.0)]
    assert replacement_value(pool, 0, 7.0) == 7.0
    assert replacement_value(pool, 1, 7.0) == 9.0
