"""Data input module for the player catalog."""

import csv
import json
import logging
import math
from pathlib import Path
from typing import Any

from roster_grader.cache import TTLCache
from roster_grader.config import POSITIONS
from roster_grader.models import Dataset, Player
from roster_grader.names import build_name_index
from roster_grader.team_assets import team_logo

logger = logging.getLogger(__name__)

# Feed positions kept in the catalog (DEF is renamed to DST)
FEED_POSITIONS = {"QB", "RB", "WR", "TE", "K", "DEF"}

# Projection curve per position: (base, floor, curve)
PROJECTION_CURVES = {
    "QB": (24.0, 12.0, 0.55),
    "RB": (20.0, 8.0, 0.62),
    "WR": (19.0, 8.0, 0.60),
    "TE": (14.0, 6.0, 0.58),
    "K": (9.0, 5.0, 0.45),
    "DST": (8.0, 5.0, 0.40),
}
DEFAULT_CURVE = (16.0, 6.0, 0.55)

# ADP at which the projection curve bottoms out
ADP_HORIZON = 250


class CatalogError(ValueError):
    """Raised when a catalog file or feed payload cannot be used."""


def _round1(value: float) -> float:
    """Round to one decimal with halves rounding up."""
    return math.floor(value * 10 + 0.5) / 10


def _optional_float(value: Any) -> float | None:
    """Convert a blank/None field to None, anything else to float."""
    if value is None or value == "":
        return None
    return float(value)


def estimate_projection(position: str, adp: float | None) -> float:
    """Estimate projected PPG from ADP along a per-position decay curve.

    Args:
        position: Catalog position (DEF is treated as DST)
        adp: Average draft position; None, zero, negative or non-finite
            values count as undrafted

    Returns:
        Projected PPG rounded to one decimal
    """
    position = "DST" if position == "DEF" else position.upper()
    base, floor, curve = PROJECTION_CURVES.get(position, DEFAULT_CURVE)

    if adp is None or not math.isfinite(adp) or adp <= 0:
        return _round1(base * 0.6)

    pct = min(1.0, max(0.0, math.log(adp + 1) / math.log(ADP_HORIZON)))
    value = floor + (base - floor) * math.pow(1 - pct, 1 + curve)
    return _round1(value)


def select_adp_rows(candidates: list[list[dict[str, Any]] | None]) -> list[dict]:
    """Pick the first non-empty ADP list from ordered candidates.

    Candidates are typically ordered (current season, then previous) by
    scoring format; feeds that failed or returned nothing are None or [].
    """
    for rows in candidates:
        if isinstance(rows, list) and rows:
            return rows
    return []


def build_catalog_from_feed(
    players_json: dict[str, dict[str, Any]], adp_rows: list[dict[str, Any]]
) -> Dataset:
    """Translate a raw platform player map plus ADP rows into a catalog.

    Args:
        players_json: Mapping player_id -> platform player record
        adp_rows: List of {"player_id": ..., "adp": ...} rows

    Returns:
        Dataset ordered by (position, name) with a normalized name index

    Raises:
        CatalogError: If the payloads have the wrong shape
    """
    if not isinstance(players_json, dict):
        raise CatalogError("Player feed must be a JSON object keyed by player id")
    if not isinstance(adp_rows, list):
        raise CatalogError("ADP feed must be a JSON list")

    adp_map: dict[str, float] = {}
    for row in adp_rows:
        if not isinstance(row, dict):
            continue
        player_id = row.get("player_id")
        adp = row.get("adp")
        if not player_id or isinstance(adp, bool) or not isinstance(adp, (int, float)):
            continue
        # Non-positive or non-finite ADP means the player was not drafted
        if math.isfinite(adp) and adp > 0:
            adp_map[str(player_id)] = float(adp)

    players: list[Player] = []
    index_entries: list[tuple[str, list[str | None]]] = []

    for player_id, raw in players_json.items():
        if not isinstance(raw, dict):
            continue

        feed_pos = str(raw.get("position") or "").upper()
        if feed_pos not in FEED_POSITIONS:
            continue

        first = raw.get("first_name") or ""
        last = raw.get("last_name") or ""
        name = raw.get("full_name") or f"{first} {last}".strip()
        if not name:
            continue

        position = "DST" if feed_pos == "DEF" else feed_pos
        team = raw.get("team") or "FA"
        adp = adp_map.get(player_id)

        players.append(
            Player(
                player_id=player_id,
                name=name,
                team=team,
                position=position,
                proj_ppg=estimate_projection(position, adp),
                adp=adp,
                headshot=team_logo(team),
            )
        )
        full_name = f"{first} {last}" if first and last else None
        index_entries.append((player_id, [name, raw.get("search_full_name"), full_name]))

    players.sort(key=lambda p: (p.position, p.name))
    logger.info(f"Built catalog with {len(players)} players ({len(adp_map)} with ADP)")

    return Dataset(players=players, name_index=build_name_index(index_entries))


def _read_json(path: str | Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read {path}: {e}") from e


def load_feed_catalog(
    players_path: str | Path,
    adp_path: str | Path | None = None,
    cache: TTLCache | None = None,
) -> Dataset:
    """Load a catalog from saved feed payloads, reusing a cached copy if fresh.

    Args:
        players_path: JSON file with the platform player map
        adp_path: Optional JSON file with ADP rows
        cache: Optional cache; the catalog is stored under the file paths

    Returns:
        Dataset built from the feed
    """
    key = f"feed:{players_path}:{adp_path}"
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            logger.debug(f"Using cached catalog for {players_path}")
            return cached

    players_json = _read_json(players_path)
    adp_rows = select_adp_rows([_read_json(adp_path)]) if adp_path else []
    catalog = build_catalog_from_feed(players_json, adp_rows)

    if cache is not None:
        cache.set(key, catalog)
    return catalog


def player_from_record(record: dict[str, Any]) -> Player:
    """Build a Player from a catalog record.

    Raises:
        CatalogError: If required fields are missing or invalid
    """
    try:
        position = str(record["position"]).upper()
        proj_ppg = float(record["proj_ppg"])
        adp = _optional_float(record.get("adp"))
        player_id = str(record["player_id"])
        name = str(record["name"])
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Invalid player record {record!r}: {e}") from e

    if position not in POSITIONS:
        raise CatalogError(f"Unknown position {position!r} for {name}")
    if proj_ppg < 0 or not math.isfinite(proj_ppg):
        raise CatalogError(f"Invalid projection {proj_ppg} for {name}")

    return Player(
        player_id=player_id,
        name=name,
        team=str(record.get("team") or "FA"),
        position=position,
        proj_ppg=proj_ppg,
        adp=adp,
        headshot=record.get("headshot") or None,
    )


def load_catalog_csv(csv_path: str | Path) -> Dataset:
    """Load a catalog from CSV.

    Args:
        csv_path: CSV with columns player_id,name,team,position,adp,proj_ppg,headshot

    Returns:
        Dataset with a name index built from display names

    Rows with missing essentials, unknown positions or non-numeric
    projections are skipped.
    """
    players = []

    try:
        with open(csv_path, "r", newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)

            for row in reader:
                # Skip empty rows or rows with missing essential data
                if not row or not row.get("player_id") or not row.get("name"):
                    continue

                try:
                    players.append(player_from_record(row))
                except CatalogError as e:
                    logger.warning(f"Skipping catalog row: {e}")
    except OSError as e:
        raise CatalogError(f"Could not read {csv_path}: {e}") from e

    name_index = build_name_index((p.player_id, [p.name]) for p in players)
    logger.debug(f"Loaded {len(players)} players from {csv_path}")
    return Dataset(players=players, name_index=name_index)


def load_catalog_json(json_path: str | Path) -> Dataset:
    """Load a catalog from a bootstrap payload {"players": [...], "nameIndex": {...}}.

    Invalid player records are skipped with a warning, as in load_catalog_csv.

    Raises:
        CatalogError: If the file is not JSON or has no players list
    """
    payload = _read_json(json_path)
    if not isinstance(payload, dict) or not isinstance(payload.get("players"), list):
        raise CatalogError(f"{json_path} has no players list")

    players = []
    for record in payload["players"]:
        try:
            players.append(player_from_record(record))
        except CatalogError as e:
            logger.warning(f"Skipping catalog record: {e}")

    name_index = payload.get("nameIndex")
    if not isinstance(name_index, dict):
        name_index = build_name_index((p.player_id, [p.name]) for p in players)

    return Dataset(players=players, name_index={str(k): str(v) for k, v in name_index.items()})


def load_catalog(path: str | Path, cache: TTLCache | None = None) -> Dataset:
    """Load a catalog file, choosing the reader by extension.

    Args:
        path: .csv or .json catalog file
        cache: Optional cache keyed by path

    Raises:
        CatalogError: For unsupported extensions or unreadable files
    """
    key = f"catalog:{path}"
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        catalog = load_catalog_csv(path)
    elif suffix == ".json":
        catalog = load_catalog_json(path)
    else:
        raise CatalogError(f"Unsupported catalog format: {path}")

    if cache is not None:
        cache.set(key, catalog)
    return catalog
