"""Command-line interface for roster analysis."""

import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from roster_grader.analyzer import analyze_roster
from roster_grader.baselines import compute_baselines
from roster_grader.config import LeagueSettings, load_league_settings
from roster_grader.data_io import CatalogError, load_catalog
from roster_grader.insights import build_insights
from roster_grader.league_import import LeagueImportError, load_league_teams, roster_names
from roster_grader.models import AnalysisResult
from roster_grader.names import is_unresolved
from roster_grader.narrative import TeamNarrative, fallback_team_narrative

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Log formatter that marks and colors records by level."""

    # level -> (marker, click style)
    LEVEL_STYLES: dict[int, tuple[str, dict[str, Any]]] = {
        logging.DEBUG: ("🔍 ", {"fg": "blue"}),
        logging.WARNING: ("⚠️  ", {"fg": "yellow"}),
        logging.ERROR: ("❌ ", {"fg": "red"}),
        logging.CRITICAL: ("💥 ", {"fg": "red", "bold": True}),
    }

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno not in self.LEVEL_STYLES:
            return message
        marker, style = self.LEVEL_STYLES[record.levelno]
        return marker + click.style(message, **style)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through ColoredFormatter.

    Args:
        verbose: If True, enable DEBUG level logging
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


def _read_names(names: tuple[str, ...], names_file: str | None) -> list[str]:
    """Combine positional names with one-name-per-line file contents."""
    collected = list(names)
    if names_file:
        lines = Path(names_file).read_text(encoding="utf-8").splitlines()
        collected.extend(line for line in lines if line.strip())
    return collected


def _settings(settings_file: str | None, teams: int | None) -> LeagueSettings:
    settings = load_league_settings(settings_file)
    if teams is not None:
        settings.teams = teams
    return settings


def _player_notes(result: AnalysisResult) -> list[tuple[str, list[str]]]:
    """Insight lines for every starter, in lineup order."""
    roster = [a.player for a in result.starters] + list(result.bench)
    return [
        (a.player.name, build_insights(a.player, result.baselines, roster))
        for a in result.starters
    ]


def format_report(result: AnalysisResult) -> str:
    """Render an analysis as a plain-text lineup table and summary."""
    lines = [f"{'SLOT':<5} {'PLAYER':<26} {'POS':<4} {'PROJ':>5} {'BASE':>5} {'DELTA':>6}  GRADE"]
    for a in result.starters:
        name = a.player.name + (" (?)" if is_unresolved(a.player) else "")
        lines.append(
            f"{a.slot:<5} {name:<26} {a.player.position:<4} {a.player.proj_ppg:>5.1f} "
            f"{a.baseline:>5.1f} {a.delta:>+6.1f}  {a.grade}"
        )

    if result.bench:
        bench = ", ".join(f"{p.name} ({p.position})" for p in result.bench)
        lines.append(f"BENCH: {bench}")

    team = result.team
    lines.extend(
        [
            "",
            f"Team PPG: {team.sum_proj:.1f} vs {team.sum_baseline:.1f} baseline "
            f"({100 * team.delta_pct:+.1f}%)",
            f"Overall grade: {team.overall_grade}",
            f"Advantages: {team.advantages_count}/{len(result.starters)}  "
            f"Stars: {team.star_count}  Bench depth: {team.bench_depth_count}",
            f"Projected record: {team.projected_record}  "
            f"Playoff odds: {team.playoff_odds_pct}%",
        ]
    )
    return "\n".join(lines)


def format_narrative(narrative: TeamNarrative, notes: list[tuple[str, list[str]]]) -> str:
    """Render a team narrative and per-starter notes as plain text."""
    lines = ["", f"Weakest position: {narrative.weakest_position}"]
    for title, items in (
        ("Strengths", narrative.team_strengths),
        ("Weaknesses", narrative.team_weaknesses),
        ("Trade ideas", narrative.trade_recommendations),
    ):
        lines.append(f"{title}:")
        lines.extend(f"  - {item}" for item in items)
    lines.append(f"Strategy: {narrative.improvement_strategy}")

    if notes:
        lines.append("Player notes:")
        for name, insights in notes:
            lines.append(f"  {name}: {' '.join(insights)}")
    return "\n".join(lines)


@click.group()
def main() -> None:
    """Grade fantasy football rosters against replacement-level baselines."""


@main.command()
@click.argument("catalog_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("names", nargs=-1)
@click.option(
    "--names-file",
    type=click.Path(exists=True, dir_okay=False),
    help="File with one player name per line",
)
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(dir_okay=False),
    help="TOML file with [league] and [roster] tables",
)
@click.option("--teams", type=int, default=None, help="Override the number of teams")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.option(
    "--narrative",
    is_flag=True,
    help="Add strengths, weaknesses, trade ideas and per-player notes",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (DEBUG level) logging")
def analyze(
    catalog_file: str,
    names: tuple[str, ...],
    names_file: str | None,
    settings_file: str | None,
    teams: int | None,
    as_json: bool,
    narrative: bool,
    verbose: bool,
) -> None:
    """Analyze a roster given as player NAMES against CATALOG_FILE."""
    setup_logging(verbose)

    try:
        catalog = load_catalog(catalog_file)
        settings = _settings(settings_file, teams)
    except (CatalogError, ValueError) as e:
        logger.error(f"Could not load inputs: {e}")
        sys.exit(1)

    roster = _read_names(names, names_file)
    if not roster:
        logger.warning("No player names given; reporting baseline-only team stats")

    result = analyze_roster(roster, catalog, settings)

    unresolved = [a.player.name for a in result.starters if is_unresolved(a.player)]
    unresolved += [p.name for p in result.bench if is_unresolved(p)]
    if unresolved:
        logger.warning(f"Not found in catalog: {', '.join(unresolved)}")

    team_narrative = fallback_team_narrative(result, catalog) if narrative else None
    notes = _player_notes(result) if narrative else []

    if as_json:
        payload = dataclasses.asdict(result)
        if team_narrative is not None:
            payload["narrative"] = dataclasses.asdict(team_narrative)
            payload["insights"] = [{"name": name, "insights": lines} for name, lines in notes]
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(format_report(result))
    if team_narrative is not None:
        click.echo(format_narrative(team_narrative, notes))


@main.command()
@click.argument("catalog_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--teams", type=int, default=None, help="Override the number of teams")
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(dir_okay=False),
    help="TOML file with [league] and [roster] tables",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (DEBUG level) logging")
def baselines(
    catalog_file: str, teams: int | None, settings_file: str | None, verbose: bool
) -> None:
    """Print replacement-level baselines for CATALOG_FILE."""
    setup_logging(verbose)

    try:
        catalog = load_catalog(catalog_file)
        settings = _settings(settings_file, teams)
    except (CatalogError, ValueError) as e:
        logger.error(f"Could not load inputs: {e}")
        sys.exit(1)

    for slot, value in compute_baselines(catalog.players, settings.teams).items():
        click.echo(f"{slot:<5} {value:>5.1f}")


@main.command("import-league")
@click.argument("users_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("rosters_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("catalog_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--starters-only", is_flag=True, help="Grade each team's declared starters only"
)
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(dir_okay=False),
    help="TOML file with [league] and [roster] tables",
)
@click.option("--teams", type=int, default=None, help="Override the number of teams")
@click.option("--verbose", is_flag=True, help="Enable verbose (DEBUG level) logging")
def import_league(
    users_file: str,
    rosters_file: str,
    catalog_file: str,
    starters_only: bool,
    settings_file: str | None,
    teams: int | None,
    verbose: bool,
) -> None:
    """Grade every roster of a league export (USERS_FILE, ROSTERS_FILE)."""
    setup_logging(verbose)

    try:
        catalog = load_catalog(catalog_file)
        settings = _settings(settings_file, teams)
        league = load_league_teams(users_file, rosters_file)
    except (CatalogError, LeagueImportError, ValueError) as e:
        logger.error(f"Could not load inputs: {e}")
        sys.exit(1)

    click.echo(f"{'OWNER':<24} {'GRADE':<5} {'PPG':>6} {'RECORD':>7} {'ODDS':>5}")
    for imported in league:
        names = roster_names(imported, catalog, starters_only=starters_only)
        team = analyze_roster(names, catalog, settings).team
        click.echo(
            f"{imported.owner_name:<24} {team.overall_grade:<5} {team.sum_proj:>6.1f} "
            f"{team.projected_record:>7} {team.playoff_odds_pct:>4}%"
        )


if __name__ == "__main__":
    main()
