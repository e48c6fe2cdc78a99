"""Narrative analysis records exchanged with an external text-generation service.

The service is given the numeric analysis as context and answers with JSON.
This module builds that context, parses and validates the answers into
explicit records, and produces a rule-based team narrative when the service
is unavailable.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

from roster_grader.grades import grade_tier
from roster_grader.insights import build_insights
from roster_grader.models import AnalysisResult, Dataset, Player, StarterAssignment

logger = logging.getLogger(__name__)

NarrativeSource = Literal["service", "fallback"]

# Display color per grade tier
TIER_COLORS = {
    "elite": "green",
    "solid": "teal",
    "average": "yellow",
    "weak": "orange",
    "poor": "red",
}

MAX_TRADE_TARGETS = 3


class NarrativeFormatError(ValueError):
    """Raised when a narrative response is not the expected JSON shape."""


@dataclass(frozen=True)
class PlayerNarrative:
    """Narrative analysis of a single player."""

    analysis: str
    grade: str
    grade_color: str
    strengths: list[str]
    weaknesses: list[str]
    recommendations: list[str]
    weekly_outlook: str
    trade_value: str
    roster_strategy: str
    risk_factors: str
    source: NarrativeSource = "service"


@dataclass(frozen=True)
class TeamNarrative:
    """Narrative analysis of a full roster."""

    team_ppg: float
    league_average: float
    overall_grade: str
    grade_color: str
    projected_record: str
    playoff_odds: str
    percent_above_average: float
    positional_advantages: str
    star_players: int
    bench_depth: int
    weakest_position: str
    trade_recommendations: list[str]
    team_strengths: list[str]
    team_weaknesses: list[str]
    improvement_strategy: str
    source: NarrativeSource = "service"


# (response key, record field)
_PLAYER_TEXT_FIELDS = [
    ("analysis", "analysis"),
    ("grade", "grade"),
    ("gradeColor", "grade_color"),
    ("weeklyOutlook", "weekly_outlook"),
    ("tradeValue", "trade_value"),
    ("rosterStrategy", "roster_strategy"),
    ("riskFactors", "risk_factors"),
]
_PLAYER_LIST_FIELDS = [
    ("strengths", "strengths"),
    ("weaknesses", "weaknesses"),
    ("recommendations", "recommendations"),
]

_TEAM_TEXT_FIELDS = [
    ("overallGrade", "overall_grade"),
    ("gradeColor", "grade_color"),
    ("projectedRecord", "projected_record"),
    ("playoffOdds", "playoff_odds"),
    ("positionalAdvantages", "positional_advantages"),
    ("weakestPosition", "weakest_position"),
    ("improvementStrategy", "improvement_strategy"),
]
_TEAM_LIST_FIELDS = [
    ("tradeRecommendations", "trade_recommendations"),
    ("teamStrengths", "team_strengths"),
    ("teamWeaknesses", "team_weaknesses"),
]
_TEAM_FLOAT_FIELDS = [
    ("teamPPG", "team_ppg"),
    ("leagueAverage", "league_average"),
    ("percentAboveAverage", "percent_above_average"),
]
_TEAM_INT_FIELDS = [
    ("starPlayers", "star_players"),
    ("benchDepth", "bench_depth"),
]


def clean_text(text: str) -> str:
    """Add missing spaces after sentence punctuation and collapse whitespace."""
    text = re.sub(r"([.!?])([A-Z])", r"\1 \2", text)
    return re.sub(r"\s+", " ", text).strip()


def extract_json_block(text: str) -> dict[str, Any]:
    """Parse the JSON object out of model output, fenced or bare.

    Raises:
        NarrativeFormatError: If no JSON object can be parsed
    """
    json_text = text
    if "```json" in text:
        json_text = text.split("```json", 1)[1].split("```", 1)[0]
    elif "```" in text:
        json_text = text.split("```", 2)[1]

    try:
        payload = json.loads(json_text.strip())
    except json.JSONDecodeError as e:
        raise NarrativeFormatError(f"Response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise NarrativeFormatError("Response JSON must be an object")
    return payload


def _text(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise NarrativeFormatError(f"Field {key!r} must be a string")
    return clean_text(value)


def _text_list(payload: dict[str, Any], key: str) -> list[str]:
    value = payload.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise NarrativeFormatError(f"Field {key!r} must be a list of strings")
    return [clean_text(v) for v in value]


def _number(payload: dict[str, Any], key: str) -> float:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise NarrativeFormatError(f"Field {key!r} must be a number")
    return float(value)


def _as_payload(response: str | dict[str, Any]) -> dict[str, Any]:
    if isinstance(response, str):
        return extract_json_block(response)
    if isinstance(response, dict):
        return response
    raise NarrativeFormatError(f"Unsupported response type: {type(response).__name__}")


def parse_player_narrative(response: str | dict[str, Any]) -> PlayerNarrative:
    """Validate a player narrative response (raw text or decoded JSON)."""
    payload = _as_payload(response)
    fields: dict[str, Any] = {}
    for key, name in _PLAYER_TEXT_FIELDS:
        fields[name] = _text(payload, key)
    for key, name in _PLAYER_LIST_FIELDS:
        fields[name] = _text_list(payload, key)
    return PlayerNarrative(**fields)


def parse_team_narrative(response: str | dict[str, Any]) -> TeamNarrative:
    """Validate a team narrative response (raw text or decoded JSON)."""
    payload = _as_payload(response)
    fields: dict[str, Any] = {}
    for key, name in _TEAM_TEXT_FIELDS:
        fields[name] = _text(payload, key)
    for key, name in _TEAM_LIST_FIELDS:
        fields[name] = _text_list(payload, key)
    for key, name in _TEAM_FLOAT_FIELDS:
        fields[name] = _number(payload, key)
    for key, name in _TEAM_INT_FIELDS:
        fields[name] = int(_number(payload, key))
    return TeamNarrative(**fields)


def _player_dict(player: Player) -> dict[str, Any]:
    return {
        "name": player.name,
        "team": player.team,
        "position": player.position,
        "proj_ppg": player.proj_ppg,
        "adp": player.adp,
    }


def build_player_context(
    player: Player, baselines: dict[str, float], roster: list[Player]
) -> dict[str, Any]:
    """Context sent with a player narrative request."""
    context = _player_dict(player)
    context["insights"] = build_insights(player, baselines, roster)
    return context


def build_team_context(result: AnalysisResult) -> dict[str, Any]:
    """Render an analysis as the plain-data context of a team narrative request."""
    team = result.team
    return {
        "teamPPG": round(team.sum_proj, 1),
        "leagueAverage": round(team.sum_baseline, 1),
        "percentAboveAverage": round(100 * team.delta_pct, 1),
        "overallGrade": team.overall_grade,
        "projectedRecord": team.projected_record,
        "playoffOdds": f"{team.playoff_odds_pct}%",
        "positionalAdvantages": f"{team.advantages_count}/{len(result.starters)}",
        "starPlayers": team.star_count,
        "benchDepth": team.bench_depth_count,
        "starters": [
            {
                "slot": a.slot,
                **_player_dict(a.player),
                "baseline": round(a.baseline, 1),
                "delta": round(a.delta, 1),
                "grade": a.grade,
            }
            for a in result.starters
        ],
        "bench": [_player_dict(p) for p in result.bench],
        "baselines": dict(result.baselines),
    }


def _trade_targets(
    weakest: StarterAssignment, catalog: Dataset, owned: set[str]
) -> list[Player]:
    candidates = [
        p
        for p in catalog.players
        if p.position == weakest.player.position
        and p.proj_ppg > weakest.player.proj_ppg
        and p.player_id not in owned
    ]
    candidates.sort(key=lambda p: p.proj_ppg, reverse=True)
    return candidates[:MAX_TRADE_TARGETS]


def fallback_team_narrative(result: AnalysisResult, catalog: Dataset) -> TeamNarrative:
    """Rule-based team narrative used when the text service is unavailable."""
    team = result.team
    context = build_team_context(result)

    strengths = [
        f"{a.player.name} gives you an edge at {a.slot} ({a.delta:+.1f} PPG)."
        for a in result.starters
        if a.grade.startswith("A")
    ]
    weaknesses = [
        f"{a.player.name} trails the {a.slot} baseline ({a.delta:+.1f} PPG)."
        for a in result.starters
        if a.delta < 0
    ]

    recommendations: list[str] = []
    if result.starters:
        weakest = min(result.starters, key=lambda a: a.delta)
        weakest_position = weakest.slot
        owned = {a.player.player_id for a in result.starters}
        owned.update(p.player_id for p in result.bench)
        for target in _trade_targets(weakest, catalog, owned):
            recommendations.append(
                f"Target {target.name} ({target.team}, {target.proj_ppg:.1f} PPG) "
                f"to upgrade {weakest.player.name} at {weakest.slot}."
            )
        if not recommendations:
            recommendations.append(
                f"No clear upgrade over {weakest.player.name} at {weakest.slot} in the catalog."
            )
    else:
        weakest_position = "FLEX"
        recommendations.append("Add starters before evaluating trades.")

    if team.bench_depth_count == 0:
        strategy = f"Shore up {weakest_position} and add bench depth near the FLEX baseline."
    else:
        strategy = f"Use bench depth to trade for an upgrade at {weakest_position}."

    logger.debug(f"Fallback team narrative, weakest slot {weakest_position}")
    return TeamNarrative(
        team_ppg=context["teamPPG"],
        league_average=context["leagueAverage"],
        overall_grade=team.overall_grade,
        grade_color=TIER_COLORS[grade_tier(team.overall_grade)],
        projected_record=team.projected_record,
        playoff_odds=context["playoffOdds"],
        percent_above_average=context["percentAboveAverage"],
        positional_advantages=context["positionalAdvantages"],
        star_players=team.star_count,
        bench_depth=team.bench_depth_count,
        weakest_position=weakest_position,
        trade_recommendations=recommendations,
        team_strengths=strengths or ["No starter is clearly above replacement level."],
        team_weaknesses=weaknesses or ["Every starter meets its slot baseline."],
        improvement_strategy=strategy,
        source="fallback",
    )
