"""Filtering, sorting and grouping for the viewer's tables."""

from typing import Any, Iterable, Mapping, Optional

from . import lineup
from .constants import FORWARD, GOALKEEPER, POSITION_NAMES, SORT_ASC, SORT_DESC
from .models import PopularityEntry, SquadPlayer, SquadResult
from .parsing import parse_int, parse_token_id
from .schemas import GameweekStats, Player, Squad
from .scoring import points_for


def position_order(sort_order: str = SORT_ASC) -> list[int]:
    """Position ids in display order: GK -> FWD for ASC, FWD -> GK for DESC."""
    order = list(range(GOALKEEPER, FORWARD + 1))
    return list(reversed(order)) if sort_order == SORT_DESC else order


def sort_squad_players(players: Iterable[SquadPlayer], sort_order: str = SORT_ASC) -> list[SquadPlayer]:
    """Starters first, then by position in the chosen direction; unknown positions go last."""
    sign = -1 if sort_order == SORT_DESC else 1
    return sorted(
        players,
        key=lambda p: (not p.is_starting, p.position_id not in POSITION_NAMES, sign * p.position_id),
    )


def group_by_position(
    players: Iterable[SquadPlayer], sort_order: str = SORT_ASC
) -> list[tuple[int, list[SquadPlayer]]]:
    """
    Group a squad's players by position for display.

    Empty positions are omitted and unknown positions are left out.

    Returns:
        List of (position_id, players) in position_order(sort_order)
    """
    ordered = sort_squad_players(players, sort_order)
    groups = []
    for position_id in position_order(sort_order):
        members = [p for p in ordered if p.position_id == position_id]
        if members:
            groups.append((position_id, members))
    return groups


def owner_label(owner: str) -> str:
    """Shorten a wallet address to 0x1234...abcd."""
    return f'{owner[:6]}...{owner[38:]}'


def filter_squads(
    results: Iterable[SquadResult],
    search_term: str = '',
    search_mode: str = 'team',
    favorites_only: bool = False,
) -> list[SquadResult]:
    """
    Filter processed squads by favourites and a search term.

    Args:
        results: Processed squads
        search_term: Case-insensitive substring ('' matches everything)
        search_mode: 'team' (squad name), 'player' (any roster player) or 'any'
        favorites_only: Keep only squads marked as favourites

    Returns:
        Matching squads in their original order
    """
    term = search_term.lower()

    def team_matches(result: SquadResult) -> bool:
        return term in result.name.lower()

    def player_matches(result: SquadResult) -> bool:
        return any(term in p.name.lower() for p in result.players)

    filtered = []
    for result in results:
        if favorites_only and not result.is_favorite:
            continue

        if search_mode == 'team':
            matched = team_matches(result)
        elif search_mode == 'player':
            matched = player_matches(result)
        else:
            matched = team_matches(result) or player_matches(result)

        if matched:
            filtered.append(result)

    return filtered


def sort_squads(results: Iterable[SquadResult], sort_by: str = 'points') -> list[SquadResult]:
    """Sort squads by points (descending) or name (ascending)."""
    if sort_by == 'name':
        return sorted(results, key=lambda r: r.name.lower())
    return sorted(results, key=lambda r: r.total_points, reverse=True)


def standings_rows(stats: GameweekStats, squads: Iterable[Squad]) -> list[dict[str, Any]]:
    """
    Build the squad points table for a gameweek snapshot.

    Published ranks are zero-based; the displayed rank adds one.

    Returns:
        One dict per SquadPoints record, in snapshot order
    """
    by_token: dict[int, Squad] = {}
    for squad in squads:
        token_id = parse_token_id(squad.token_id)
        if token_id is not None and token_id not in by_token:
            by_token[token_id] = squad

    rows = []
    for record in stats.squad_points:
        squad = by_token.get(record.squad_id)
        rows.append(
            {
                'rank': record.rank + 1,
                'squad_id': record.squad_id,
                'name': squad.name if squad else 'Unknown Squad',
                'owner': squad.owner if squad else '',
                'points': record.points,
                'teams_with_same_rank': record.teams_with_same_rank,
            }
        )
    return rows


def gameweek_player_rows(
    stats: GameweekStats,
    squads: Iterable[Squad],
    players_table: Mapping[str, Player],
) -> list[dict[str, Any]]:
    """
    Build the per-player statistics table for a gameweek.

    The first squad that rosters a player decides whether they started
    and whether they captained. Only starters are listed.
    """
    squads = list(squads)
    rows = []

    for player_id, stat in stats.player_stats.items():
        owning_squad: Optional[Squad] = next((s for s in squads if player_id in s.players), None)
        if owning_squad is None:
            continue

        index = owning_squad.players.index(player_id)
        if not lineup.is_starting(owning_squad.lineup_priority, index):
            continue

        is_captain = owning_squad.captain == player_id
        player_points = points_for(player_id, True, is_captain, stats.player_stats)

        player = players_table.get(player_id)
        rows.append(
            {
                'player_id': player_id,
                'name': player.name if player else 'Unknown Player',
                'squad': owning_squad.name,
                'minutes': stat.minutes,
                'goals': stat.goals,
                'assists': stat.assists,
                'clean_sheet': stat.clean_sheet,
                'yellow_cards': stat.yellow_cards,
                'red_cards': stat.red_cards,
                'base_points': stat.points,
                'points': player_points.points,
                'is_captain': is_captain,
                'is_multiplied': player_points.is_multiplied,
            }
        )

    return rows


def filter_popularity(
    entries: Iterable[PopularityEntry],
    search_term: str = '',
    position: str = 'all',
    team: str = 'all',
) -> list[PopularityEntry]:
    """Filter popularity entries by name substring, position id and team id ('all' disables)."""
    term = search_term.lower()
    position_id = None if position == 'all' else parse_int(position, default=-1)
    team_id = None if team == 'all' else parse_int(team, default=-1)

    return [
        e
        for e in entries
        if term in e.name.lower()
        and (position_id is None or e.position_id == position_id)
        and (team_id is None or e.team_id == team_id)
    ]


def sort_popularity(entries: Iterable[PopularityEntry], direction: str = 'desc') -> list[PopularityEntry]:
    """Sort by selection count; ties keep their aggregate order."""
    return sorted(entries, key=lambda e: e.count, reverse=direction == 'desc')
