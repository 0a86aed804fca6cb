"""Scoring engine: player points, squad totals and processed squads.

Every surface (squad list, gameweek results, gameweek stats, exports)
goes through these functions so captaincy and totals are computed one way.
"""

import logging
from typing import Iterable, Mapping, Optional

from . import lineup
from .constants import CAPTAIN_MULTIPLIER
from .models import PlayerPoints, SquadPlayer, SquadResult, SquadTotal
from .parsing import parse_token_id, unknown_player
from .schemas import GameweekStats, Player, PlayerStat, Squad, SquadPoints

logger = logging.getLogger('fantasytier.scoring')


def points_for(
    player_id: str,
    is_starting: bool,
    is_captain: bool,
    stats_table: Mapping[str, PlayerStat],
) -> Optional[PlayerPoints]:
    """
    Calculate a player's points for the gameweek.

    Scoring:
        - Bench players score nothing (None)
        - Starters without a stats entry score 0, flagged no_stats
        - Captains score double, but only if they actually played

    Args:
        player_id: Player id from the squad roster
        is_starting: Whether the roster slot is in the starting lineup
        is_captain: Whether the player is the squad's captain
        stats_table: Player id -> PlayerStat for the gameweek

    Returns:
        PlayerPoints, or None for bench players
    """
    if not is_starting:
        return None

    stat = stats_table.get(player_id)
    if stat is None:
        return PlayerPoints(points=0, base_points=0, is_multiplied=False, no_stats=True)

    base = stat.points
    if is_captain and stat.played:
        return PlayerPoints(points=base * CAPTAIN_MULTIPLIER, base_points=base, is_multiplied=True)

    return PlayerPoints(points=base, base_points=base)


def find_squad_points(squad: Squad, squad_points: Iterable[SquadPoints]) -> Optional[SquadPoints]:
    """Find the snapshot record whose squad_id matches the squad's token id."""
    token_id = parse_token_id(squad.token_id)
    if token_id is None:
        return None

    for record in squad_points:
        if record.squad_id == token_id:
            return record
    return None


def squad_total(
    squad: Squad,
    stats_table: Mapping[str, PlayerStat],
    squad_points: Iterable[SquadPoints],
) -> SquadTotal:
    """
    Calculate total points and rank for a squad.

    A matching SquadPoints record is authoritative and used as-is.
    Otherwise starters' points are summed locally and rank is 0.

    Args:
        squad: Squad to total
        stats_table: Player id -> PlayerStat for the gameweek
        squad_points: Published squad totals for the gameweek

    Returns:
        SquadTotal with total_points and rank
    """
    record = find_squad_points(squad, squad_points)
    if record is not None:
        return SquadTotal(total_points=record.points, rank=record.rank, from_snapshot=True)

    total = 0
    for index, player_id in enumerate(squad.players):
        starting = lineup.is_starting(squad.lineup_priority, index)
        if not starting:
            continue
        result = points_for(player_id, starting, player_id == squad.captain, stats_table)
        if result is not None:
            total += result.points

    return SquadTotal(total_points=total, rank=0)


def build_squad_players(
    squad: Squad,
    players_table: Mapping[str, Player],
    stats_table: Mapping[str, PlayerStat],
) -> list[SquadPlayer]:
    """
    Enrich each roster slot with reference data, lineup status and points.

    Ids missing from players_table get a placeholder player rather
    than failing.

    Args:
        squad: Squad to expand
        players_table: Player id -> Player reference data
        stats_table: Player id -> PlayerStat for the gameweek

    Returns:
        SquadPlayer list in roster order
    """
    result = []

    for index, player_id in enumerate(squad.players):
        player = players_table.get(player_id)
        if player is None:
            logger.debug(f'No reference entry for player {player_id} in squad {squad.id}')
            player = unknown_player(player_id)

        starting = lineup.is_starting(squad.lineup_priority, index)
        is_captain = player_id == squad.captain

        result.append(
            SquadPlayer(
                id=player_id,
                name=player.name,
                position_id=player.position_id,
                team_id=player.team_id,
                roster_index=index,
                is_starting=starting,
                is_captain=is_captain,
                is_vice_captain=player_id == squad.vice_captain,
                stat=stats_table.get(player_id),
                player_points=points_for(player_id, starting, is_captain, stats_table),
            )
        )

    return result


def process_squad(
    squad: Squad,
    players_table: Mapping[str, Player],
    stats: Optional[GameweekStats] = None,
    favorite_ids: Iterable[str] = (),
) -> SquadResult:
    """
    Build the full display result for a squad.

    Args:
        squad: Squad to process
        players_table: Player id -> Player reference data
        stats: Gameweek statistics (None when no gameweek is loaded)
        favorite_ids: Squad ids the user marked as favourites

    Returns:
        SquadResult with players, total, rank and formation
    """
    stats_table = stats.player_stats if stats else {}
    squad_points = stats.squad_points if stats else []

    players = build_squad_players(squad, players_table, stats_table)
    total = squad_total(squad, stats_table, squad_points)

    return SquadResult(
        squad=squad,
        players=players,
        total_points=total.total_points,
        rank=total.rank,
        formation=lineup.formation(players),
        is_favorite=squad.id in set(favorite_ids),
    )


def process_squads(
    squads: Iterable[Squad],
    players_table: Mapping[str, Player],
    stats: Optional[GameweekStats] = None,
    favorite_ids: Iterable[str] = (),
) -> list[SquadResult]:
    """Process every squad for a gameweek."""
    favorites = set(favorite_ids)
    return [process_squad(squad, players_table, stats, favorites) for squad in squads]
