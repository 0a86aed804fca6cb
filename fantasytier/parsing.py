"""Total (non-raising) coercions for values that arrive as text.

Reference CSVs, subgraph responses and snapshots all carry numbers as
strings in places. Every conversion lives here so call sites never
parse ad hoc.
"""

import re
from typing import Any, Optional

from .constants import (
    POSITION_NAMES,
    UNKNOWN_POSITION_ID,
    UNKNOWN_POSITION_NAME,
    UNKNOWN_TEAM_ID,
)
from .schemas import Player

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')
_HEX_PREFIX = re.compile(r'^\s*[+-]?0[xX]')
_LEADING_HEX = re.compile(r'^\s*([+-]?)0[xX]([0-9a-fA-F]+)')


def parse_int(value: Any, default: int = 0) -> int:
    """
    Parse a leading integer from value.

    Mirrors the lenient parsing the CSV source expects: "12" -> 12,
    " 7abc" -> 7, "" or "n/a" -> default. Booleans are not numbers here.

    Args:
        value: Raw value (str, int, float or None)
        default: Returned when nothing numeric can be read

    Returns:
        Parsed integer or default
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return default
        return int(value)

    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def parse_token_id(token_id: Any) -> Optional[int]:
    """Parse a squad token id for matching against SquadPoints.squad_id.

    Decimal ids ("42") and 0x-prefixed hex ids ("0x2a") are both read;
    anything else returns None so it never matches a record.
    """
    if token_id is None or isinstance(token_id, bool):
        return None
    if isinstance(token_id, int):
        return token_id

    text = str(token_id)
    if _HEX_PREFIX.match(text):
        match = _LEADING_HEX.match(text)
        if not match:
            return None
        value = int(match.group(2), 16)
        return -value if match.group(1) == '-' else value

    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def strip_hex_prefix(value: str) -> str:
    """Remove a single leading '0x' from a hex string."""
    return value[2:] if value.startswith('0x') else value


def position_name(position_id: int) -> str:
    """Get the display name for a position id."""
    return POSITION_NAMES.get(position_id, UNKNOWN_POSITION_NAME)


def unknown_player(player_id: str) -> Player:
    """Placeholder for a roster id that has no reference entry."""
    return Player(
        id=player_id,
        name=f'Unknown Player ({player_id[:8]}...)',
        positionId=UNKNOWN_POSITION_ID,
        teamId=UNKNOWN_TEAM_ID,
        leagueId='',
    )
