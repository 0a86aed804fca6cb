#!/usr/bin/env python3
"""
Fantasy Tier Results Viewer CLI

Shows league squads, gameweek results, gameweek statistics and player
popularity for the Fantasy Tier league.

Usage:
    python viewer.py --view teams
    python viewer.py --view results --gameweek 28 --sort points
    python viewer.py --view stats --gameweek 28
    python viewer.py --view popularity --position 3 --direction desc
    python viewer.py --view results --output out/gw28.json --excel out/results.xlsx
    python viewer.py --view teams --log-dir logs
"""

import argparse
import logging
import sys
from pathlib import Path

from fantasytier.config import (
    get_available_gameweeks,
    get_default_gameweek,
    get_league_id,
    get_page_size,
    get_players_csv,
    get_request_timeout,
    get_snapshots_dir,
    get_stats_url,
    get_subgraph_url,
    get_teams_csv,
)
from fantasytier.constants import (
    PREF_ACTIVE_TAB,
    PREF_FAVORITE_SQUADS,
    PREF_FAVORITE_TEAMS,
    PREF_SORT_ORDER,
)
from fantasytier.data_fetcher import GameweekDataFetcher, SquadRegistryClient
from fantasytier.export import save_gameweek_results, write_results_workbook
from fantasytier.logging_config import setup_logging
from fantasytier.parsing import position_name
from fantasytier.popularity import most_selected_captain, most_selected_player, popularity
from fantasytier.preferences import PreferenceStore
from fantasytier.reference_data import load_players, load_teams, team_name
from fantasytier.scoring import process_squads
from fantasytier.validators import validate_all_squads
from fantasytier.views import (
    filter_popularity,
    filter_squads,
    gameweek_player_rows,
    group_by_position,
    owner_label,
    sort_popularity,
    sort_squads,
    standings_rows,
)

VIEW_TABS = {
    'teams': 'teams',
    'popularity': 'players',
    'results': 'gameweek',
    'stats': 'gameweek',
}


def print_squad(result, teams, sort_order: str, show_points: bool = True) -> None:
    """Print one squad grouped by position."""
    favorite = ' ★' if result.is_favorite else ''
    print(f'\n{result.name}{favorite}  [{result.formation}]  {result.total_points} pts')
    print(f'  Owner: {owner_label(result.squad.owner)}')

    for position_id, players in group_by_position(result.players, sort_order):
        print(f'  {position_name(position_id)}s')
        for p in players:
            marks = ''
            if p.is_captain:
                marks += ' (C)'
            if p.is_vice_captain:
                marks += ' (VC)'
            line = f'    {p.name}{marks} - {team_name(teams, p.team_id)}'
            if not p.is_starting:
                line += ' [BENCH]'
            elif show_points and p.player_points:
                if p.player_points.no_stats:
                    line += ' - no stats'
                else:
                    line += f' - {p.points} pts'
            print(line)


def main():
    parser = argparse.ArgumentParser(description='Fantasy Tier league results viewer')
    parser.add_argument(
        '--view', '-v',
        choices=sorted(VIEW_TABS),
        default=None,
        help='What to show (defaults to the last used view)',
    )
    parser.add_argument(
        '--gameweek', '-g',
        type=int,
        default=None,
        help='Gameweek number (defaults to the configured gameweek)',
    )
    parser.add_argument('--search', '-s', default='', help='Filter by squad or player name')
    parser.add_argument(
        '--search-mode',
        choices=['team', 'player'],
        default='team',
        help='Search squad names or player names (teams view)',
    )
    parser.add_argument('--favorites-only', action='store_true', help='Only show favourite squads')
    parser.add_argument('--toggle-favorite', metavar='SQUAD_ID', help='Add/remove a favourite squad')
    parser.add_argument('--sort', choices=['points', 'name'], default='points', help='Squad ordering')
    parser.add_argument(
        '--sort-order',
        choices=['ASC', 'DESC'],
        default=None,
        help='Position order inside squads (saved as a preference)',
    )
    parser.add_argument('--position', default='all', help='Popularity position filter (0-3 or all)')
    parser.add_argument('--team', default='all', help='Popularity team id filter (or all)')
    parser.add_argument('--direction', choices=['asc', 'desc'], default='desc', help='Popularity order')
    parser.add_argument('--output', '-o', default=None, help='Save gameweek results JSON to this path')
    parser.add_argument('--excel', default=None, help='Write standings/popularity workbook to this path')
    parser.add_argument('--prefs', default='preferences.json', help='Preferences file')
    parser.add_argument('--validate', action='store_true', help='Validate squads and the snapshot')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only log warnings')
    parser.add_argument('--log-dir', default=None, help='Also write a detailed log file to this directory')

    args = parser.parse_args()

    setup_logging(level=logging.WARNING if args.quiet else logging.INFO, log_dir=args.log_dir)

    prefs = PreferenceStore(Path(args.prefs))
    if args.sort_order:
        prefs.set(PREF_SORT_ORDER, args.sort_order)

    view = args.view
    if view is None:
        view = {'teams': 'teams', 'players': 'popularity', 'gameweek': 'results'}[prefs.active_tab]
    prefs.set(PREF_ACTIVE_TAB, VIEW_TABS[view])

    favorites_key = PREF_FAVORITE_SQUADS if view == 'results' else PREF_FAVORITE_TEAMS
    if args.toggle_favorite:
        added = prefs.toggle_favorite(favorites_key, args.toggle_favorite)
        print(f"{'Added' if added else 'Removed'} favourite: {args.toggle_favorite}")

    gameweek = args.gameweek or get_default_gameweek()
    if gameweek not in get_available_gameweeks():
        print(f'⚠️  Gameweek {gameweek} is not in the published gameweeks {get_available_gameweeks()}')

    players = load_players(get_players_csv())
    teams = load_teams(get_teams_csv())

    gameweek_data = GameweekDataFetcher(
        gameweek,
        snapshots_dir=get_snapshots_dir(),
        stats_url=get_stats_url(gameweek),
        timeout=get_request_timeout(),
    )

    if view in ('results', 'stats') and gameweek_data.has_squads_snapshot():
        squads = gameweek_data.squads
    else:
        registry = SquadRegistryClient(
            get_subgraph_url(), get_league_id(), page_size=get_page_size(), timeout=get_request_timeout()
        )
        squads = registry.fetch_squads()

    if not squads:
        print('⚠️  No squads available (data source unreachable?)')

    stats = gameweek_data.stats

    if args.validate:
        errors, warnings = validate_all_squads(squads, stats)
        for error in errors:
            print(f'❌ {error}')
        for warning in warnings:
            print(f'⚠️  {warning}')
        if errors:
            sys.exit(1)

    results = process_squads(squads, players, stats, prefs.favorites(favorites_key))
    entries = sort_popularity(popularity(squads, players), args.direction)

    if view == 'teams':
        shown = filter_squads(results, args.search, args.search_mode, args.favorites_only)
        print(f'Fantasy Teams - {len(shown)} of {len(results)} squads')
        for result in shown:
            print_squad(result, teams, prefs.sort_order)

    elif view == 'results':
        shown = sort_squads(filter_squads(results, args.search, 'any', args.favorites_only), args.sort)
        print(f'Gameweek {gameweek} Results - Total Teams: {len(shown)}')
        if not shown:
            if args.favorites_only:
                print("You haven't marked any teams as favorites yet.")
            else:
                print(f'No teams match "{args.search}"')
        for result in shown:
            print_squad(result, teams, prefs.sort_order)

    elif view == 'stats':
        print(f'Gameweek {gameweek} Statistics')
        print('=' * 60)
        for row in standings_rows(stats, squads):
            print(f"  #{row['rank']:<4} {row['name']:<30} {row['points']:>5} pts")
        print('\nStarting players')
        print('-' * 60)
        for row in gameweek_player_rows(stats, squads, players):
            captain = ' (C)' if row['is_captain'] else ''
            print(
                f"  {row['name']}{captain} [{row['squad']}] "
                f"{row['minutes']}' G{row['goals']} A{row['assists']} - {row['points']} pts"
            )

    else:
        shown = filter_popularity(entries, args.search, args.position, args.team)
        top = most_selected_player(entries)
        top_captain = most_selected_captain(entries)
        print('Player Popularity')
        print(f"  Most selected: {top.name if top else 'None'} ({top.count if top else 0} teams)")
        print(
            f"  Most captained: {top_captain.name if top_captain else 'None'} "
            f"({top_captain.captain_count if top_captain else 0} teams)"
        )
        print('-' * 60)
        for entry in shown:
            print(
                f'  {entry.name:<28} {position_name(entry.position_id):<11} '
                f'{team_name(teams, entry.team_id):<20} {entry.count:>4} ({entry.captain_count} C)'
            )

    if args.output:
        save_gameweek_results(args.output, gameweek, results)
        print(f'Results saved to {args.output}')

    if args.excel:
        write_results_workbook(
            args.excel, gameweek, results, entries, {tid: t.name for tid, t in teams.items()}
        )
        print(f'Workbook saved to {args.excel}')


if __name__ == '__main__':
    main()
