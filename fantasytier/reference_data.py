"""Static player and team reference data loaded from CSV with polars."""

import logging
from pathlib import Path
from typing import Mapping

import polars as pl

from .constants import UNKNOWN_POSITION_ID, UNKNOWN_TEAM_ID
from .parsing import parse_int, unknown_player
from .schemas import Player, Team

logger = logging.getLogger('fantasytier.reference_data')


def _read_text_csv(path: Path | str) -> pl.DataFrame | None:
    """Read a CSV with every column as text. Returns None if it can't be read."""
    path = Path(path)
    if not path.exists():
        logger.warning(f'Reference file not found: {path}')
        return None

    try:
        return pl.read_csv(path, infer_schema_length=0)
    except (OSError, pl.exceptions.PolarsError) as e:
        logger.error(f'Could not read reference file {path}: {e}')
        return None


def load_players(path: Path | str) -> dict[str, Player]:
    """
    Load players.csv into a player id -> Player mapping.

    Columns: id,name,positionId,teamId,leagueId. Numeric columns that
    don't parse fall back to the unknown position / team 0. Rows with
    a blank id are skipped.

    Args:
        path: Path to players.csv

    Returns:
        Dict of players (empty if the file is missing or unreadable)
    """
    df = _read_text_csv(path)
    if df is None:
        return {}

    players = {}
    for row in df.iter_rows(named=True):
        player_id = (row.get('id') or '').strip()
        if not player_id:
            continue

        players[player_id] = Player(
            id=player_id,
            name=row.get('name') or '',
            positionId=parse_int(row.get('positionId'), default=UNKNOWN_POSITION_ID),
            teamId=parse_int(row.get('teamId'), default=UNKNOWN_TEAM_ID),
            leagueId=row.get('leagueId') or '',
        )

    logger.info(f'Loaded {len(players)} players from {path}')
    return players


def load_teams(path: Path | str) -> dict[str, Team]:
    """
    Load teams.csv into a team id -> Team mapping.

    Columns: id,team,leagueId,logo (the name lives in the "team" column).
    """
    df = _read_text_csv(path)
    if df is None:
        return {}

    teams = {}
    for row in df.iter_rows(named=True):
        team_id = (row.get('id') or '').strip()
        if not team_id:
            continue

        teams[team_id] = Team(
            id=team_id,
            name=row.get('team') or '',
            leagueId=row.get('leagueId') or '',
            logo=row.get('logo') or '',
        )

    logger.info(f'Loaded {len(teams)} teams from {path}')
    return teams


def lookup_player(players: Mapping[str, Player], player_id: str) -> Player:
    """Get a player, or a placeholder if the id has no reference entry."""
    return players.get(player_id) or unknown_player(player_id)


def team_logo(teams: Mapping[str, Team], team_id: int | str) -> str:
    """Get a team's logo URL ('' for unknown teams)."""
    team = teams.get(str(team_id))
    return team.logo if team else ''


def team_name(teams: Mapping[str, Team], team_id: int | str) -> str:
    """Get a team's name ('Unknown' for unknown teams)."""
    team = teams.get(str(team_id))
    return team.name if team else 'Unknown'
