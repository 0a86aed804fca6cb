"""Validation functions for squads and gameweek snapshots."""

import string
from typing import Iterable

from .parsing import parse_token_id, strip_hex_prefix
from .schemas import GameweekStats, Squad

HEX_DIGITS = set(string.hexdigits)

# Per-player gameweek points outside this range suggest a bad snapshot
MIN_PLAYER_POINTS = -10
MAX_PLAYER_POINTS = 40


def validate_squad(squad: Squad) -> list[str]:
    """
    Check that a squad's roster and lineup bitmap are consistent.

    Checks:
    - Roster is not empty
    - Lineup bitmap is hex and covers every roster slot
    - Captain and vice-captain are on the roster
    - No duplicate player ids

    Args:
        squad: Squad to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    label = squad.name or squad.id

    if not squad.players:
        errors.append(f'{label} has an empty roster')

    priority_hex = strip_hex_prefix(squad.lineup_priority)
    if any(c not in HEX_DIGITS for c in priority_hex):
        errors.append(f'{label} lineup bitmap is not hex: {squad.lineup_priority!r}')

    required = 2 * len(squad.players)
    if len(priority_hex) < required:
        errors.append(
            f'{label} lineup bitmap covers {len(priority_hex) // 2} of {len(squad.players)} roster slots'
        )

    if squad.captain and squad.captain not in squad.players:
        errors.append(f'{label} captain {squad.captain} is not on the roster')
    if squad.vice_captain and squad.vice_captain not in squad.players:
        errors.append(f'{label} vice-captain {squad.vice_captain} is not on the roster')

    seen = set()
    duplicates = set()
    for player_id in squad.players:
        if player_id in seen:
            duplicates.add(player_id)
        seen.add(player_id)

    if duplicates:
        errors.append(f'{label} has duplicate players: {", ".join(sorted(duplicates))}')

    return errors


def validate_gameweek_stats(stats: GameweekStats, squads: Iterable[Squad]) -> list[str]:
    """
    Sanity-check a gameweek snapshot against the known squads.

    Checks:
    - Every published squad total belongs to a known squad
    - No squad id is published twice
    - Player points fall in a plausible range

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    token_ids = {parse_token_id(s.token_id) for s in squads}

    seen = set()
    for record in stats.squad_points:
        if record.squad_id in seen:
            warnings.append(f'Gameweek {stats.game_week} lists squad {record.squad_id} more than once')
        seen.add(record.squad_id)

        if record.squad_id not in token_ids:
            warnings.append(f'Gameweek {stats.game_week} has points for unknown squad {record.squad_id}')

    for player_id, stat in stats.player_stats.items():
        if not MIN_PLAYER_POINTS <= stat.points <= MAX_PLAYER_POINTS:
            warnings.append(
                f'Player {player_id} scored {stat.points} pts (unusual - check the snapshot)'
            )
        if not stat.played and stat.points:
            warnings.append(f'Player {player_id} has {stat.points} pts but did not play')

    return warnings


def validate_all_squads(
    squads: Iterable[Squad],
    stats: GameweekStats | None = None,
) -> tuple[list[str], list[str]]:
    """
    Validate all squads and, optionally, the gameweek snapshot.

    Returns:
        Tuple of (errors, warnings)
        - errors: Squads whose lineup or captaincy can't be trusted
        - warnings: Snapshot issues to review
    """
    squads = list(squads)
    errors: list[str] = []
    warnings: list[str] = []

    for squad in squads:
        errors.extend(validate_squad(squad))

    if stats is not None:
        warnings.extend(validate_gameweek_stats(stats, squads))

    return errors, warnings
