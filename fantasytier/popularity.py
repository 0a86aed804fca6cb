"""Player popularity across all squads in the league."""

from typing import Iterable, Mapping, Optional

from .models import PopularityEntry
from .schemas import Player, Squad


def popularity(squads: Iterable[Squad], players_table: Mapping[str, Player]) -> list[PopularityEntry]:
    """
    Count how many squads selected each player and how many made them captain.

    Every roster slot counts, bench included. Ids with no reference
    entry are skipped entirely.

    Args:
        squads: All squads in the league
        players_table: Player id -> Player reference data

    Returns:
        PopularityEntry list in first-seen order (squad order, then roster order)
    """
    frequency: dict[str, PopularityEntry] = {}

    for squad in squads:
        for player_id in squad.players:
            player = players_table.get(player_id)
            if player is None:
                continue

            entry = frequency.get(player_id)
            if entry is None:
                entry = PopularityEntry(
                    player_id=player_id,
                    name=player.name,
                    position_id=player.position_id,
                    team_id=player.team_id,
                )
                frequency[player_id] = entry

            entry.count += 1
            if player_id == squad.captain:
                entry.captain_count += 1

    return list(frequency.values())


def most_selected_player(entries: Iterable[PopularityEntry]) -> Optional[PopularityEntry]:
    """Most selected player; the first one seen wins ties. None if nobody is picked."""
    best = None
    for entry in entries:
        if entry.count > (best.count if best else 0):
            best = entry
    return best


def most_selected_captain(entries: Iterable[PopularityEntry]) -> Optional[PopularityEntry]:
    """Most frequent captain; the first one seen wins ties. None if no captains."""
    best = None
    for entry in entries:
        if entry.captain_count > (best.captain_count if best else 0):
            best = entry
    return best
