from .schemas import Player, Team, Squad, PlayerStat, SquadPoints, GameweekStats
from .models import PlayerPoints, SquadPlayer, SquadTotal, SquadResult, PopularityEntry
from .lineup import is_starting, starting_indices, formation
from .scoring import (
    points_for,
    find_squad_points,
    squad_total,
    build_squad_players,
    process_squad,
    process_squads,
)
from .popularity import popularity, most_selected_player, most_selected_captain
from .reference_data import load_players, load_teams, lookup_player, team_logo
from .data_fetcher import SquadRegistryClient, GameweekDataFetcher
from .preferences import PreferenceStore
from .export import save_gameweek_results, write_results_workbook

__all__ = [
    # Schemas
    'Player',
    'Team',
    'Squad',
    'PlayerStat',
    'SquadPoints',
    'GameweekStats',
    # Results
    'PlayerPoints',
    'SquadPlayer',
    'SquadTotal',
    'SquadResult',
    'PopularityEntry',
    # Scoring engine
    'is_starting',
    'starting_indices',
    'formation',
    'points_for',
    'find_squad_points',
    'squad_total',
    'build_squad_players',
    'process_squad',
    'process_squads',
    'popularity',
    'most_selected_player',
    'most_selected_captain',
    # Data sources
    'load_players',
    'load_teams',
    'lookup_player',
    'team_logo',
    'SquadRegistryClient',
    'GameweekDataFetcher',
    'PreferenceStore',
    # Exports
    'save_gameweek_results',
    'write_results_workbook',
]
