"""Data structures for players, catalogs and analysis results."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Player:
    """Player record loaded from the catalog.

    Attributes:
        player_id: Unique catalog identifier
        name: Display name
        team: NFL team abbreviation
        position: Position (QB, RB, WR, TE, K, DST)
        proj_ppg: Projected fantasy points per game
        adp: Average draft position, lower is earlier (optional)
        headshot: Display image reference (optional)
    """

    player_id: str
    name: str
    team: str
    position: str
    proj_ppg: float
    adp: float | None = None
    headshot: str | None = None


@dataclass(frozen=True)
class Dataset:
    """Immutable player catalog for a season plus a normalized-name lookup index.

    Attributes:
        players: All known players, in catalog order (stored as a tuple)
        name_index: Normalized name -> player_id (many-to-one)
    """

    players: tuple[Player, ...]
    name_index: dict[str, str] = field(default_factory=dict)
    _by_id: dict[str, Player] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze the player list and build the id lookup."""
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(self, "name_index", dict(self.name_index))
        object.__setattr__(
            self, "_by_id", {player.player_id: player for player in self.players}
        )

    def get(self, player_id: str) -> Player | None:
        """Look up a player by identifier."""
        return self._by_id.get(player_id)

    def __len__(self) -> int:
        return len(self.players)


@dataclass(frozen=True)
class StarterAssignment:
    """A player placed in a starting slot, scored against the slot baseline."""

    slot: str
    player: Player
    baseline: float
    delta: float
    delta_pct: float
    grade: str


@dataclass(frozen=True)
class TeamSummary:
    """Team-level aggregates for an analyzed roster.

    Attributes:
        sum_proj: Total starter projected PPG
        sum_baseline: Total of every slot baseline
        delta: sum_proj - sum_baseline
        delta_pct: delta relative to sum_baseline (0 when the baseline is 0)
        advantages_count: Starters at or above their baseline
        star_count: Starters at least STAR_DELTA_PCT above baseline
        bench_depth_count: Bench players close to the FLEX baseline
        overall_grade: Grade of delta_pct
        expected_wins: Expected wins over the season
        projected_record: "W-L" string
        playoff_odds_pct: Playoff odds as a whole percentage
    """

    sum_proj: float
    sum_baseline: float
    delta: float
    delta_pct: float
    advantages_count: int
    star_count: int
    bench_depth_count: int
    overall_grade: str
    expected_wins: float
    projected_record: str
    playoff_odds_pct: int


@dataclass(frozen=True)
class AnalysisResult:
    """Full output of a roster analysis."""

    starters: list[StarterAssignment]
    bench: list[Player]
    baselines: dict[str, float]
    team: TeamSummary

    def starters_in(self, slot: str) -> list[StarterAssignment]:
        """Return the assignments placed in a given slot."""
        return [a for a in self.starters if a.slot == slot]
