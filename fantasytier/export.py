"""Export gameweek results to JSON and Excel."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

import openpyxl
from openpyxl.styles import Font

from .models import PopularityEntry, SquadResult
from .parsing import position_name
from .utils import save_json
from .views import owner_label, sort_squads

logger = logging.getLogger('fantasytier.export')

STANDINGS_HEADER = ['Rank', 'Squad', 'Owner', 'Formation', 'Points']
POPULARITY_HEADER = ['Player', 'Position', 'Team', 'Selected', 'Captain']


def squad_result_to_dict(result: SquadResult) -> dict[str, Any]:
    """Serialize a processed squad, listing only starters with points."""
    return {
        'id': result.squad.id,
        'token_id': result.squad.token_id,
        'name': result.name,
        'owner': result.squad.owner,
        'formation': result.formation,
        'total_points': result.total_points,
        'rank': result.rank,
        'starters': [
            {
                'id': p.id,
                'name': p.name,
                'position': position_name(p.position_id),
                'points': p.points,
                'captain': p.is_captain,
                'vice_captain': p.is_vice_captain,
                'no_stats': bool(p.player_points and p.player_points.no_stats),
            }
            for p in result.starters
        ],
        'bench': [p.id for p in result.players if not p.is_starting],
    }


def save_gameweek_results(
    output_path: str | Path,
    gameweek: int,
    results: Iterable[SquadResult],
) -> None:
    """
    Save processed squads for a gameweek to JSON.

    Squads are written highest total first with a 1-based position.

    Args:
        output_path: Path to output JSON file
        gameweek: Gameweek number
        results: Processed squads
    """
    squads_data = []
    for position, result in enumerate(sort_squads(results, 'points'), 1):
        squad_dict = squad_result_to_dict(result)
        squad_dict['position'] = position
        squads_data.append(squad_dict)

    save_json(
        output_path,
        {
            'gameweek': gameweek,
            'exported_at': datetime.now(timezone.utc).isoformat(),
            'squads': squads_data,
            'has_scores': any(s['total_points'] != 0 for s in squads_data),
        },
    )
    logger.info(f'Results saved to {output_path}')


def _replace_sheet(wb: openpyxl.Workbook, title: str):
    if title in wb.sheetnames:
        del wb[title]
    return wb.create_sheet(title)


def write_results_workbook(
    excel_path: str | Path,
    gameweek: int,
    results: Iterable[SquadResult],
    entries: Iterable[PopularityEntry] = (),
    team_names: dict[str, str] | None = None,
) -> None:
    """
    Write standings and popularity sheets to an Excel workbook.

    An existing workbook keeps its other sheets; the "Gameweek N" and
    "Popularity" sheets are replaced.

    Args:
        excel_path: Path to the .xlsx file
        gameweek: Gameweek number
        results: Processed squads
        entries: Player popularity entries (already sorted for display)
        team_names: Optional team id -> name mapping for the popularity sheet
    """
    excel_path = Path(excel_path)
    team_names = team_names or {}

    if excel_path.exists():
        wb = openpyxl.load_workbook(excel_path)
    else:
        excel_path.parent.mkdir(parents=True, exist_ok=True)
        wb = openpyxl.Workbook()
        wb.remove(wb.active)

    ws = _replace_sheet(wb, f'Gameweek {gameweek}')
    ws.append(STANDINGS_HEADER)
    for position, result in enumerate(sort_squads(results, 'points'), 1):
        ws.append(
            [position, result.name, owner_label(result.squad.owner), result.formation, result.total_points]
        )

    ws = _replace_sheet(wb, 'Popularity')
    ws.append(POPULARITY_HEADER)
    for entry in entries:
        ws.append(
            [
                entry.name,
                position_name(entry.position_id),
                team_names.get(str(entry.team_id), 'Unknown'),
                entry.count,
                entry.captain_count,
            ]
        )

    for sheet in (wb[f'Gameweek {gameweek}'], wb['Popularity']):
        for cell in sheet[1]:
            cell.font = Font(bold=True)

    wb.save(excel_path)
    wb.close()
    logger.info(f'Workbook saved to {excel_path}')
