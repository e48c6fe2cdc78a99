"""Rule-based insight lines for a single player on a roster."""

from roster_grader.models import Player

# Curated archetype tags
DUAL_THREAT_QBS = {
    "Lamar Jackson", "Jalen Hurts", "Josh Allen", "Anthony Richardson",
    "Kyler Murray", "Justin Fields", "Daniel Jones",
}
ELITE_TES = {
    "Travis Kelce", "Sam LaPorta", "Mark Andrews", "T.J. Hockenson", "George Kittle",
}
TARGET_HOG_WRS = {
    "Justin Jefferson", "CeeDee Lamb", "Ja'Marr Chase", "Amon-Ra St. Brown",
    "Davante Adams", "Tyreek Hill", "A.J. Brown", "Puka Nacua", "Cooper Kupp",
    "Garrett Wilson",
}
DEEP_THREAT_WRS = {
    "Marquise Brown", "Jaylen Waddle", "DK Metcalf", "Christian Watson",
    "Gabe Davis", "Tyler Lockett",
}
WORKHORSE_RBS = {
    "Christian McCaffrey", "Bijan Robinson", "Breece Hall", "Saquon Barkley",
    "Jonathan Taylor", "Derrick Henry", "Josh Jacobs", "Jahmyr Gibbs", "Alvin Kamara",
}
VOLATILE_PROFILES = {
    "Marquise Brown", "Gabe Davis", "Rashod Bateman", "Kadarius Toney", "Brandin Cooks",
}

PASS_CATCHERS = {"WR", "TE"}

# Smallest PPG gap worth calling out against a baseline
MIN_BASELINE_GAP = 1.0

DEFAULT_INSIGHT = "Solid, startable profile with no standout flags."


def baseline_slot_for(position: str) -> str:
    """Baseline slot a position is compared against (QB1, TE, else FLEX)."""
    if position == "QB":
        return "QB1"
    if position == "TE":
        return "TE"
    return "FLEX"


def _archetype_lines(player: Player) -> list[str]:
    lines = []
    if player.position == "QB" and player.name in DUAL_THREAT_QBS:
        lines.append(
            "Dual-threat profile: rushing attempts add a weekly floor and spike-week ceiling."
        )
    if player.position == "RB" and player.name in WORKHORSE_RBS:
        lines.append(
            "Workhorse usage profile: strong touch share and stable weekly volume."
        )
    if player.position == "WR" and player.name in TARGET_HOG_WRS:
        lines.append(
            "Alpha receiver outlook: top-tier target share and consistent WR1/WR2 production."
        )
    if player.position == "WR" and player.name in DEEP_THREAT_WRS:
        lines.append("Downfield role: boom-bust scoring but a high weekly ceiling.")
    if player.position == "TE" and player.name in ELITE_TES:
        lines.append(
            "Elite TE profile: sustained target share with red-zone involvement."
        )
    return lines


def _stack_lines(player: Player, roster: list[Player]) -> list[str]:
    teammates = [
        p for p in roster if p.team == player.team and p.name != player.name
    ]
    has_qb = any(p.position == "QB" for p in teammates)
    has_catcher = any(p.position in PASS_CATCHERS for p in teammates)

    if player.position == "QB" and has_catcher:
        return ["Positive correlation: QB is stacked with a pass catcher from the same team."]
    if player.position in PASS_CATCHERS and has_qb:
        return ["Positive correlation: pass catcher stacked with your QB."]
    return []


def _market_line(adp: float) -> str:
    if adp <= 24:
        return "Market price: early-round pick by ADP."
    if adp <= 60:
        return "Market price: mid-round value by ADP."
    return "Market price: late-round/bench value by ADP."


def build_insights(
    player: Player, baselines: dict[str, float], roster: list[Player]
) -> list[str]:
    """Build short insight lines for a player in the context of a roster.

    Args:
        player: Player to describe
        baselines: Slot baselines from the analysis
        roster: Full roster, used for same-team stacking notes

    Returns:
        Non-empty list of insight strings
    """
    lines = _archetype_lines(player)
    lines.extend(_stack_lines(player, roster))

    slot = baseline_slot_for(player.position)
    base = baselines.get(slot, baselines.get("FLEX", 10.0))
    diff = player.proj_ppg - base
    if abs(diff) >= MIN_BASELINE_GAP:
        lines.append(f"Projects {diff:+.1f} PPG vs {slot} baseline.")

    if player.name in VOLATILE_PROFILES:
        lines.append(
            "Volatility watch: weekly range of outcomes is wider than average."
        )

    if player.adp is not None:
        lines.append(_market_line(player.adp))

    return lines or [DEFAULT_INSIGHT]
