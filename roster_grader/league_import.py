"""League roster import: platform league payloads to per-team name lists."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from roster_grader.models import Dataset

logger = logging.getLogger(__name__)


class LeagueImportError(ValueError):
    """Raised when a league payload has the wrong shape."""


@dataclass
class ImportedTeam:
    """One team's roster as exported by the league platform.

    Attributes:
        roster_id: Platform roster identifier
        owner_id: Platform user identifier of the owner
        owner_name: Display name, falling back to username then "Unknown"
        starters: Player ids in the starting lineup
        players: Player ids on the full roster
    """

    roster_id: int | str | None
    owner_id: str | None
    owner_name: str
    starters: list[str] = field(default_factory=list)
    players: list[str] = field(default_factory=list)


def _id_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def parse_league_teams(
    users: list[dict[str, Any]], rosters: list[dict[str, Any]]
) -> list[ImportedTeam]:
    """Join league users and rosters into ImportedTeam records.

    Args:
        users: League users ({"user_id", "display_name", "username"})
        rosters: League rosters ({"roster_id", "owner_id", "starters", "players"})

    Returns:
        One ImportedTeam per roster, in roster order

    Raises:
        LeagueImportError: If either payload is not a list of objects
    """
    if not isinstance(users, list) or not isinstance(rosters, list):
        raise LeagueImportError("Users and rosters must be JSON lists")
    if not all(isinstance(u, dict) for u in users + rosters):
        raise LeagueImportError("Users and rosters must contain JSON objects")

    user_by_id = {u.get("user_id"): u for u in users}

    teams = []
    for roster in rosters:
        user = user_by_id.get(roster.get("owner_id"), {})
        owner_name = user.get("display_name") or user.get("username") or "Unknown"
        teams.append(
            ImportedTeam(
                roster_id=roster.get("roster_id"),
                owner_id=roster.get("owner_id"),
                owner_name=owner_name,
                starters=_id_list(roster.get("starters")),
                players=_id_list(roster.get("players")),
            )
        )

    logger.info(f"Imported {len(teams)} league rosters")
    return teams


def roster_names(
    team: ImportedTeam, catalog: Dataset, starters_only: bool = False
) -> list[str]:
    """Map a team's player ids to catalog display names.

    Ids missing from the catalog are passed through unchanged, so they later
    resolve to placeholder players.
    """
    ids = team.starters if starters_only else team.players
    names = []
    for player_id in ids:
        player = catalog.get(player_id)
        if player is None:
            logger.debug(f"Player id {player_id} not in catalog")
            names.append(player_id)
        else:
            names.append(player.name)
    return names


def _read_json(path: str | Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise LeagueImportError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LeagueImportError(f"{path} is not valid JSON: {e}") from e


def load_league_teams(users_path: str | Path, rosters_path: str | Path) -> list[ImportedTeam]:
    """Load saved league users and rosters exports and join them.

    Args:
        users_path: JSON file holding the league users list
        rosters_path: JSON file holding the league rosters list

    Returns:
        One ImportedTeam per roster

    Raises:
        LeagueImportError: If a file is unreadable, not JSON or the wrong shape
    """
    return parse_league_teams(_read_json(users_path), _read_json(rosters_path))
