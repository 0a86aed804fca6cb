"""League configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from .schemas import LeagueConfig
from .utils import load_json

PROJECT_DIR = Path(__file__).parent.parent


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load.

    Returns:
        LeagueConfig object with validated settings

    Raises:
        FileNotFoundError: If league_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from fantasytier.config import get_config
        config = get_config()
        print(f"League: {config.league_id}")
    """
    config_path = PROJECT_DIR / 'data' / 'league_config.json'
    return load_json(config_path, schema=LeagueConfig)


def resolve_path(path: str | Path) -> Path:
    """Resolve a config path relative to the project directory."""
    path = Path(path)
    return path if path.is_absolute() else PROJECT_DIR / path


def get_league_id() -> str:
    """Get the league contract address the squads are filtered by."""
    return get_config().league_id


def get_subgraph_url() -> str:
    """Get the squad registry GraphQL endpoint."""
    return get_config().subgraph_url


def get_page_size() -> int:
    """Get the number of squads requested per GraphQL page."""
    return get_config().page_size


def get_request_timeout() -> float:
    """Get the HTTP timeout in seconds."""
    return get_config().request_timeout


def get_available_gameweeks() -> list[int]:
    """Get the gameweeks that have published snapshots."""
    return get_config().available_gameweeks


def get_default_gameweek() -> int:
    """Get the gameweek shown when none is selected."""
    return get_config().default_gameweek


def get_stats_url(gameweek: int) -> Optional[str]:
    """Get the remote stats document URL for a gameweek, if one is published."""
    return get_config().stats_urls.get(gameweek)


def get_snapshots_dir() -> Path:
    """Get the directory holding local gameweek snapshots."""
    return resolve_path(get_config().snapshots_dir)


def get_players_csv() -> Path:
    """Get the path of the players reference CSV."""
    return resolve_path(get_config().players_csv)


def get_teams_csv() -> Path:
    """Get the path of the teams reference CSV."""
    return resolve_path(get_config().teams_csv)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime.
    """
    get_config.cache_clear()
