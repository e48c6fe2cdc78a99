"""Roster analysis: resolve, optimize, grade and aggregate."""

import logging
import math
from collections.abc import Iterable

from roster_grader.baselines import compute_baselines
from roster_grader.config import (
    BENCH_DEPTH_FACTOR,
    PLAYOFF_WIN_PIVOT,
    SEASON_WEEKS,
    SIGMA_FACTOR,
    STAR_DELTA_PCT,
    STARTER_SLOTS,
    LeagueSettings,
)
from roster_grader.grades import grade_from_delta_pct
from roster_grader.lineup import pick_best_lineup
from roster_grader.models import (
    AnalysisResult,
    Dataset,
    Player,
    StarterAssignment,
    TeamSummary,
)
from roster_grader.names import resolve_roster

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is not positive."""
    return numerator / denominator if denominator > 0 else 0.0


def score_starter(slot: str, player: Player, baseline: float) -> StarterAssignment:
    """Score a starter against its slot baseline."""
    delta = player.proj_ppg - baseline
    delta_pct = safe_ratio(delta, baseline)
    return StarterAssignment(
        slot=slot,
        player=player,
        baseline=baseline,
        delta=delta,
        delta_pct=delta_pct,
        grade=grade_from_delta_pct(delta_pct),
    )


def win_probability(sum_proj: float, sum_baseline: float) -> float:
    """Weekly probability of beating a league-average team.

    Team scores are modeled as normal around the league-average team total
    with a spread of SIGMA_FACTOR times that total.
    """
    sigma = sum_baseline * SIGMA_FACTOR
    z = (sum_proj - sum_baseline) / (math.sqrt(2) * sigma) if sigma > 0 else 0.0
    return 0.5 * (1 + math.erf(z))


def expected_wins(sum_proj: float, sum_baseline: float) -> float:
    """Expected wins over a SEASON_WEEKS regular season."""
    return win_probability(sum_proj, sum_baseline) * SEASON_WEEKS


def projected_record(exp_wins: float) -> str:
    """Format expected wins as a "W-L" record."""
    wins = round_half_up(exp_wins)
    return f"{wins}-{SEASON_WEEKS - wins}"


def playoff_odds_pct(exp_wins: float) -> int:
    """Logistic playoff odds centered on PLAYOFF_WIN_PIVOT wins."""
    odds = 1 / (1 + math.exp(-(exp_wins - PLAYOFF_WIN_PIVOT)))
    return round_half_up(100 * odds)


def summarize_team(
    assignments: list[StarterAssignment],
    bench: list[Player],
    baselines: dict[str, float],
) -> TeamSummary:
    """Aggregate starter scores into team-level statistics.

    Args:
        assignments: Scored starters
        bench: Bench players
        baselines: Baseline per slot; every slot counts toward the total

    Returns:
        TeamSummary with grade, projected record and playoff odds
    """
    sum_proj = sum(a.player.proj_ppg for a in assignments)
    sum_baseline = sum(baselines.values())
    delta_pct = safe_ratio(sum_proj - sum_baseline, sum_baseline)

    depth_line = baselines["FLEX"] * BENCH_DEPTH_FACTOR
    exp_wins = expected_wins(sum_proj, sum_baseline)

    return TeamSummary(
        sum_proj=sum_proj,
        sum_baseline=sum_baseline,
        delta=sum_proj - sum_baseline,
        delta_pct=delta_pct,
        advantages_count=sum(1 for a in assignments if a.delta >= 0),
        star_count=sum(1 for a in assignments if a.delta_pct >= STAR_DELTA_PCT),
        bench_depth_count=sum(1 for p in bench if p.proj_ppg >= depth_line),
        overall_grade=grade_from_delta_pct(delta_pct),
        expected_wins=exp_wins,
        projected_record=projected_record(exp_wins),
        playoff_odds_pct=playoff_odds_pct(exp_wins),
    )


def analyze_players(
    roster: list[Player], catalog: Dataset, settings: LeagueSettings
) -> AnalysisResult:
    """Analyze an already-resolved roster against the catalog."""
    baselines = compute_baselines(catalog.players, settings.teams)
    lineup = pick_best_lineup(roster, settings.roster)

    assignments = [
        score_starter(slot, player, baselines[slot])
        for slot in STARTER_SLOTS
        for player in lineup.starters[slot]
    ]
    team = summarize_team(assignments, lineup.bench, baselines)

    logger.debug(
        f"Analyzed {len(roster)} players: {team.sum_proj:.1f} vs "
        f"{team.sum_baseline:.1f} baseline, grade {team.overall_grade}"
    )
    return AnalysisResult(
        starters=assignments, bench=lineup.bench, baselines=baselines, team=team
    )


def analyze_roster(
    names: Iterable[str], catalog: Dataset, settings: LeagueSettings | None = None
) -> AnalysisResult:
    """Analyze a roster given as free-text player names.

    Args:
        names: Player names as typed or imported
        catalog: Player catalog snapshot
        settings: League settings (defaults to a 12-team PPR league)

    Returns:
        AnalysisResult with scored starters, bench, baselines and team summary
    """
    if settings is None:
        settings = LeagueSettings()
    return analyze_players(resolve_roster(names, catalog), catalog, settings)
