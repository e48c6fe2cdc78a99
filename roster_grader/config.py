"""Configuration data structures and settings for roster analysis."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Positions tracked in the player catalog
POSITIONS = ("QB", "RB", "WR", "TE", "K", "DST")

# Positions eligible for FLEX slots
FLEX_POSITIONS = {"RB", "WR", "TE"}

# Starting lineup slots in display order (BENCH is not a starting slot)
STARTER_SLOTS = ("QB1", "RB1", "RB2", "WR1", "WR2", "TE", "FLEX", "K", "DST")

# Replacement values used when a position pool is empty
BASELINE_FALLBACKS = {
    "QB1": 15.0,
    "RB1": 12.0,
    "RB2": 10.0,
    "WR1": 12.0,
    "WR2": 10.0,
    "TE": 8.0,
    "K": 7.0,
    "DST": 7.0,
    "FLEX": 9.0,
}

# Placeholder used for names that are not in the catalog
UNRESOLVED_ID_PREFIX = "unknown_"
UNRESOLVED_TEAM = "UNK"
UNRESOLVED_POSITION = "WR"
UNRESOLVED_PROJ_PPG = 7.0

# Season model
SEASON_WEEKS = 14  # Regular season length used for the projected record
PLAYOFF_WIN_PIVOT = 8  # Expected wins at which playoff odds reach 50%
SIGMA_FACTOR = 0.18  # Weekly score spread as a fraction of the league-average team
STAR_DELTA_PCT = 0.18  # Starters at or above this deltaPct count as stars
BENCH_DEPTH_FACTOR = 0.9  # Bench players within this share of the FLEX baseline

SCORING_SYSTEMS = ("PPR", "HALF_PPR", "STANDARD")

# Global league configuration
NUM_TEAMS = 12  # Number of teams in the league


@dataclass
class RosterSettings:
    """Slot counts for a league roster.

    Attributes:
        QB: Quarterback starters
        RB: Running back starters (filled into RB1/RB2)
        WR: Wide receiver starters (filled into WR1/WR2)
        TE: Tight end starters
        FLEX: FLEX starters (RB/WR/TE eligible)
        K: Kicker starters
        DST: Defense/special teams starters
        BENCH: Bench spots
    """

    QB: int = 1
    RB: int = 2
    WR: int = 2
    TE: int = 1
    FLEX: int = 1
    K: int = 1
    DST: int = 1
    BENCH: int = 6

    def count(self, slot: str) -> int:
        """Return the configured count for a position or slot name."""
        return int(getattr(self, slot))


@dataclass
class LeagueSettings:
    """League-wide settings consumed by the analyzer.

    Attributes:
        teams: Number of teams, used as the replacement-rank denominator
        roster: Slot counts per position
        scoring: Scoring system tag (already baked into each projection)
    """

    teams: int = NUM_TEAMS
    roster: RosterSettings = field(default_factory=RosterSettings)
    scoring: str = "PPR"


def load_league_settings(path: str | Path | None = None) -> LeagueSettings:
    """Load league settings from a TOML file, falling back to defaults.

    Args:
        path: Path to a TOML file with optional [league] and [roster] tables.
              If None or missing, defaults are returned.

    Returns:
        LeagueSettings populated from the file

    Raises:
        ValueError: If a count is negative or the scoring tag is unknown
    """
    if path is None:
        return LeagueSettings()

    try:
        with open(path, "rb") as f:
            cfg = tomllib.load(f)
    except FileNotFoundError:
        logger.debug(f"No settings file at {path}, using defaults")
        return LeagueSettings()

    league_cfg = cfg.get("league", {})
    roster_cfg = cfg.get("roster", {})

    defaults = RosterSettings()
    roster_values = {}
    for slot in ("QB", "RB", "WR", "TE", "FLEX", "K", "DST", "BENCH"):
        value = int(roster_cfg.get(slot, defaults.count(slot)))
        if value < 0:
            raise ValueError(f"Roster count for {slot} must be non-negative: {value}")
        roster_values[slot] = value

    teams = int(league_cfg.get("teams", NUM_TEAMS))
    if teams < 0:
        raise ValueError(f"Team count must be non-negative: {teams}")

    scoring = str(league_cfg.get("scoring", "PPR")).upper()
    if scoring not in SCORING_SYSTEMS:
        raise ValueError(f"Unknown scoring system: {scoring}")

    return LeagueSettings(
        teams=teams, roster=RosterSettings(**roster_values), scoring=scoring
    )
