"""Lineup bitmap decoding and formation tallies."""

from typing import Iterable

from .constants import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER, STARTING_SLOT
from .parsing import strip_hex_prefix


def is_starting(lineup_priority: str, roster_index: int) -> bool:
    """
    Check whether a roster slot is in the starting lineup.

    The bitmap holds one hex byte per roster slot, in roster order,
    optionally prefixed with '0x'. Byte "01" marks a starter; any other
    value, or a missing byte, marks the bench.

    Args:
        lineup_priority: Hex bitmap from the squad (e.g., "0x0100010100")
        roster_index: Position of the player in squad.players

    Returns:
        True if the slot's byte is exactly "01"

    Example:
        >>> is_starting("0x0100010100", 2)
        True
    """
    if not isinstance(lineup_priority, str) or roster_index < 0:
        return False

    priority_hex = strip_hex_prefix(lineup_priority)
    offset = roster_index * 2
    return priority_hex[offset:offset + 2] == STARTING_SLOT


def starting_indices(lineup_priority: str, roster_size: int) -> list[int]:
    """Get the roster indices marked as starters."""
    return [i for i in range(roster_size) if is_starting(lineup_priority, i)]


def formation(players: Iterable) -> str:
    """
    Build the "D-M-F" formation string for a squad's starters.

    Goalkeepers are counted but not displayed; players whose position is
    outside 0..3 are ignored.

    Args:
        players: Objects exposing position_id and is_starting

    Returns:
        Formation string such as "4-4-2"
    """
    counts = {GOALKEEPER: 0, DEFENDER: 0, MIDFIELDER: 0, FORWARD: 0}

    for player in players:
        if player.is_starting and player.position_id in counts:
            counts[player.position_id] += 1

    return f'{counts[DEFENDER]}-{counts[MIDFIELDER]}-{counts[FORWARD]}'
