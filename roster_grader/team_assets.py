"""Static team logo lookup shared by catalog ingestion and display code."""

_ESPN_LOGO = "https://a.espncdn.com/i/teamlogos/nfl/500/{code}.png"

PLACEHOLDER_LOGO = "https://placehold.co/96x96/png?text=Team"

NFL_TEAMS = [
    # NFC
    "SF", "LAR", "SEA", "ARI",
    "GB", "MIN", "CHI", "DET",
    "TB", "CAR", "NO", "ATL",
    "DAL", "PHI", "WAS", "NYG",
    # AFC
    "KC", "LAC", "LV", "DEN",
    "BAL", "CIN", "PIT", "CLE",
    "TEN", "IND", "JAX", "HOU",
    "BUF", "MIA", "NE", "NYJ",
]

# Legacy or alternate codes seen in feeds
TEAM_ALIASES = {
    "LA": "LAR",
    "STL": "LAR",
    "OAK": "LV",
    "SD": "LAC",
    "JAC": "JAX",
    "WSH": "WAS",
}

TEAM_LOGOS = {code: _ESPN_LOGO.format(code=code.lower()) for code in NFL_TEAMS}
TEAM_LOGOS["FA"] = "https://placehold.co/80x80/64748b/ffffff?text=FA"


def team_logo(code: str | None) -> str:
    """Return the logo URL for a team code, or a placeholder."""
    key = (code or "").upper()
    key = TEAM_ALIASES.get(key, key)
    return TEAM_LOGOS.get(key, PLACEHOLDER_LOGO)
