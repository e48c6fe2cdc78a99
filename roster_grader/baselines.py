"""Replacement-level baselines per starting slot."""

import logging
from collections import defaultdict
from collections.abc import Iterable

from roster_grader.config import BASELINE_FALLBACKS, POSITIONS
from roster_grader.models import Player

logger = logging.getLogger(__name__)


def sort_by_projection(players: Iterable[Player]) -> list[Player]:
    """Sort players by projected PPG descending, keeping input order on ties."""
    return sorted(players, key=lambda p: p.proj_ppg, reverse=True)


def group_by_position(players: Iterable[Player]) -> dict[str, list[Player]]:
    """Group catalog players by position, each group sorted by projection."""
    by_position: dict[str, list[Player]] = defaultdict(list)
    for player in players:
        by_position[player.position].append(player)

    return {pos: sort_by_projection(by_position[pos]) for pos in POSITIONS}


def replacement_value(pool: list[Player], rank: int, fallback: float) -> float:
    """Return the projection of the rank-th player (1-indexed) in a sorted pool.

    Args:
        pool: Players sorted by projection descending
        rank: Replacement rank
        fallback: Value used when the pool is empty or rank < 1

    Returns:
        Projection at the rank, or of the last player if the pool is shorter
    """
    if not pool or rank < 1:
        return fallback
    index = min(len(pool), rank) - 1
    return max(pool[index].proj_ppg, 0.0)


def compute_baselines(players: Iterable[Player], teams: int) -> dict[str, float]:
    """Calculate replacement-level projections for every starting slot.

    Args:
        players: Full player catalog (not modified)
        teams: Number of teams in the league

    Returns:
        Dictionary mapping slot -> baseline projected PPG

    Replacement ranks:
        - QB1, RB1, WR1, TE, K, DST: rank N
        - RB2, WR2: rank 2N
        - FLEX: rank N of the combined RB/WR beyond 2N and TE beyond N
    """
    pos = group_by_position(players)

    baselines = {
        "QB1": replacement_value(pos["QB"], teams, BASELINE_FALLBACKS["QB1"]),
        "RB1": replacement_value(pos["RB"], teams, BASELINE_FALLBACKS["RB1"]),
        "RB2": replacement_value(pos["RB"], teams * 2, BASELINE_FALLBACKS["RB2"]),
        "WR1": replacement_value(pos["WR"], teams, BASELINE_FALLBACKS["WR1"]),
        "WR2": replacement_value(pos["WR"], teams * 2, BASELINE_FALLBACKS["WR2"]),
        "TE": replacement_value(pos["TE"], teams, BASELINE_FALLBACKS["TE"]),
    }

    # FLEX pool is everyone left after the positional starters are taken
    skip_rbwr = max(teams * 2, 0)
    skip_te = max(teams, 0)
    flex_pool = sort_by_projection(
        pos["RB"][skip_rbwr:] + pos["WR"][skip_rbwr:] + pos["TE"][skip_te:]
    )
    baselines["FLEX"] = replacement_value(flex_pool, teams, BASELINE_FALLBACKS["FLEX"])

    baselines["K"] = replacement_value(pos["K"], teams, BASELINE_FALLBACKS["K"])
    baselines["DST"] = replacement_value(pos["DST"], teams, BASELINE_FALLBACKS["DST"])

    logger.debug(f"Baselines for {teams} teams: {baselines}")
    return baselines
