"""Greedy starting-lineup selection for a single roster."""

import logging
from dataclasses import dataclass, field

from roster_grader.baselines import sort_by_projection
from roster_grader.config import FLEX_POSITIONS, STARTER_SLOTS, RosterSettings
from roster_grader.models import Player

logger = logging.getLogger(__name__)

# Positions whose starters are split across numbered slots
SPLIT_SLOTS = {
    "RB": ("RB1", "RB2"),
    "WR": ("WR1", "WR2"),
}

# Positions that fill a single slot directly
DIRECT_SLOTS = {
    "QB": "QB1",
    "TE": "TE",
    "K": "K",
    "DST": "DST",
}


@dataclass
class Lineup:
    """Starters and bench for a roster.

    Attributes:
        starters: Slot -> players placed in that slot (may be empty)
        bench: Players not placed in any starting slot
    """

    starters: dict[str, list[Player]] = field(
        default_factory=lambda: {slot: [] for slot in STARTER_SLOTS}
    )
    bench: list[Player] = field(default_factory=list)

    def starting_players(self) -> list[Player]:
        """Return every starter in slot display order."""
        return [player for slot in STARTER_SLOTS for player in self.starters[slot]]


def _take(pool: list[Player], eligible: set[str], count: int) -> list[Player]:
    """Remove and return the top `count` eligible players from the pool."""
    if count <= 0:
        return []
    chosen = sort_by_projection([p for p in pool if p.position in eligible])[:count]
    for player in chosen:
        pool.remove(player)
    return chosen


def pick_best_lineup(roster: list[Player], settings: RosterSettings) -> Lineup:
    """Assign a roster to starting slots, maximizing projected PPG greedily.

    Args:
        roster: Resolved players (duplicates are kept, not merged)
        settings: Slot counts for the league

    Returns:
        Lineup partitioning every input player into starters or bench

    Logic:
        - Each position fills its own slots first, best projection first
        - RB and WR fill their numbered slots in projection order (RB1, RB2)
        - FLEX takes the best remaining RB/WR/TE
        - K and DST are only filled when the league starts them
        - Everyone left over is bench
    """
    lineup = Lineup()
    pool = list(roster)

    for position in ("QB", "TE"):
        lineup.starters[DIRECT_SLOTS[position]] = _take(
            pool, {position}, settings.count(position)
        )

    for position, slots in SPLIT_SLOTS.items():
        # Extra starters beyond the numbered slots compete for FLEX instead
        count = min(settings.count(position), len(slots))
        chosen = _take(pool, {position}, count)
        for slot, player in zip(slots, chosen):
            lineup.starters[slot] = [player]

    lineup.starters["FLEX"] = _take(pool, FLEX_POSITIONS, settings.FLEX)

    for position in ("K", "DST"):
        if settings.count(position) > 0:
            lineup.starters[DIRECT_SLOTS[position]] = _take(
                pool, {position}, settings.count(position)
            )

    lineup.bench = pool

    logger.debug(
        f"Lineup: {len(lineup.starting_players())} starters, "
        f"{len(lineup.bench)} bench"
    )
    return lineup
