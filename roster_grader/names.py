"""Free-text player name resolution against the catalog."""

import logging
import re
from collections.abc import Iterable

from roster_grader.config import (
    UNRESOLVED_ID_PREFIX,
    UNRESOLVED_POSITION,
    UNRESOLVED_PROJ_PPG,
    UNRESOLVED_TEAM,
)
from roster_grader.models import Dataset, Player

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_name(raw: str | None) -> str:
    """Lowercase, collapse non-alphanumeric runs to one space, and trim.

    Example:
        "Ja'Marr  Chase" -> "ja marr chase"
    """
    return _NON_ALNUM.sub(" ", (raw or "").lower()).strip()


def build_name_index(
    entries: Iterable[tuple[str, Iterable[str | None]]],
) -> dict[str, str]:
    """Build a normalized-name index.

    Args:
        entries: (player_id, name variants) pairs. Later entries win when
                 two players normalize to the same key.

    Returns:
        Dictionary mapping normalized name -> player_id
    """
    index: dict[str, str] = {}
    for player_id, variants in entries:
        for variant in variants:
            key = normalize_name(variant)
            if key:
                index[key] = player_id
    return index


def unresolved_player(raw: str) -> Player:
    """Create the placeholder used for a name missing from the catalog."""
    return Player(
        player_id=f"{UNRESOLVED_ID_PREFIX}{normalize_name(raw)}",
        name=raw.strip(),
        team=UNRESOLVED_TEAM,
        position=UNRESOLVED_POSITION,
        proj_ppg=UNRESOLVED_PROJ_PPG,
    )


def is_unresolved(player: Player) -> bool:
    """Check whether a player is a placeholder rather than a catalog record."""
    return player.player_id.startswith(UNRESOLVED_ID_PREFIX)


def resolve_player(raw: str, catalog: Dataset) -> Player:
    """Resolve a free-text name to a catalog player.

    Never fails: names missing from the index (or pointing at an id the
    catalog no longer carries) resolve to a placeholder player.
    """
    player_id = catalog.name_index.get(normalize_name(raw))
    if player_id is not None:
        player = catalog.get(player_id)
        if player is not None:
            return player

    logger.debug(f"Unresolved player name: {raw!r}")
    return unresolved_player(raw)


def resolve_roster(names: Iterable[str], catalog: Dataset) -> list[Player]:
    """Resolve every name in input order; duplicates are kept."""
    return [resolve_player(raw, catalog) for raw in names]
