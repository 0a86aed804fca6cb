"""Squad registry and gameweek snapshot fetching using requests."""

import logging
from pathlib import Path
from typing import Any, Optional

import requests
from pydantic import ValidationError

from .constants import SQUADS_QUERY, SQUADS_SNAPSHOT, STATS_SNAPSHOT
from .schemas import GameweekStats, PlayerStat, Squad, SquadPoints
from .utils import load_json_safe

logger = logging.getLogger('fantasytier.data_fetcher')

GRAPHQL_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': '*/*',
}


def _error_messages(errors: Any) -> str:
    """Join GraphQL error messages; errors may be dicts, strings or a single value."""
    if not isinstance(errors, list):
        errors = [errors]
    return '; '.join(str(err.get('message', err)) if isinstance(err, dict) else str(err) for err in errors)


def _squads_list(payload: dict[str, Any]) -> Optional[list[Any]]:
    """Get data.squads from a GetSquads-shaped document, or None if it isn't there."""
    data = payload.get('data')
    if not isinstance(data, dict):
        return None
    squads = data.get('squads')
    return squads if isinstance(squads, list) else None


def parse_squads(raw_squads: list[Any]) -> list[Squad]:
    """Validate raw squad dicts, skipping (and logging) malformed entries."""
    squads = []
    for raw in raw_squads:
        try:
            squads.append(Squad.model_validate(raw))
        except ValidationError as e:
            squad_id = raw.get('id') if isinstance(raw, dict) else raw
            logger.warning(f'Skipping malformed squad {squad_id}: {e.error_count()} validation error(s)')
    return squads


class SquadRegistryClient:
    """Fetches a league's squads from the indexing subgraph."""

    def __init__(
        self,
        url: str,
        league_id: str,
        page_size: int = 50,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.league_id = league_id
        self.page_size = page_size
        self.timeout = timeout
        self.session = session or requests.Session()

    def _query_page(self, variables: dict[str, Any]) -> Optional[list[Any]]:
        """Run one GetSquads query. Returns None on any failure."""
        try:
            response = self.session.post(
                self.url,
                json={'query': SQUADS_QUERY, 'variables': variables},
                headers=GRAPHQL_HEADERS,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f'Squad registry request failed: {e}')
            return None
        except ValueError as e:
            logger.error(f'Squad registry returned invalid JSON: {e}')
            return None

        if not isinstance(payload, dict):
            logger.error('Squad registry returned an unexpected payload')
            return None

        if payload.get('errors'):
            logger.error(f'Squad registry query errors: {_error_messages(payload["errors"])}')
            return None

        squads = _squads_list(payload)
        if squads is None:
            logger.error('Squad registry response has no squads list')
            return None

        return squads

    def fetch_squads(self, order_by: str = 'tokenId', order_direction: str = 'asc') -> list[Squad]:
        """
        Fetch every squad registered in the league.

        Pages through the subgraph with skip/first until a short page
        comes back. If any page fails the whole result is empty, so a
        partial league is never shown as complete.

        Args:
            order_by: Squad field to order by
            order_direction: 'asc' or 'desc'

        Returns:
            List of Squad objects (empty on failure)
        """
        raw_squads: list[Any] = []
        skip = 0

        while True:
            page = self._query_page(
                {
                    'skip': skip,
                    'first': self.page_size,
                    'orderBy': order_by,
                    'orderDirection': order_direction,
                    'where': {'league': self.league_id},
                }
            )
            if page is None:
                return []

            raw_squads.extend(page)
            if len(page) < self.page_size:
                break
            skip += self.page_size

        squads = parse_squads(raw_squads)
        logger.info(f'Fetched {len(squads)} squads for league {self.league_id}')
        return squads


class GameweekDataFetcher:
    """
    Loads and caches one gameweek's snapshot.

    Statistics come from the local snapshot file when present, otherwise
    from the published URL. Create a new fetcher when the selected
    gameweek changes; nothing carries over between gameweeks.
    """

    def __init__(
        self,
        gameweek: int,
        snapshots_dir: Optional[Path | str] = None,
        stats_url: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.gameweek = gameweek
        self.snapshots_dir = Path(snapshots_dir) if snapshots_dir else None
        self.stats_url = stats_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._stats: Optional[GameweekStats] = None
        self._squads: Optional[list[Squad]] = None

    @property
    def stats_path(self) -> Optional[Path]:
        if self.snapshots_dir is None:
            return None
        return self.snapshots_dir / STATS_SNAPSHOT.format(gameweek=self.gameweek)

    @property
    def squads_path(self) -> Optional[Path]:
        if self.snapshots_dir is None:
            return None
        return self.snapshots_dir / SQUADS_SNAPSHOT.format(gameweek=self.gameweek)

    @property
    def stats(self) -> GameweekStats:
        """Lazy load the gameweek statistics document."""
        if self._stats is None:
            self._stats = self._load_stats()
        return self._stats

    @property
    def player_stats(self) -> dict[str, PlayerStat]:
        return self.stats.player_stats

    @property
    def squad_points(self) -> list[SquadPoints]:
        return self.stats.squad_points

    @property
    def squads(self) -> list[Squad]:
        """Lazy load the squads snapshot taken for this gameweek."""
        if self._squads is None:
            self._squads = self._load_squads()
        return self._squads

    def has_squads_snapshot(self) -> bool:
        return self.squads_path is not None and self.squads_path.exists()

    def _load_stats(self) -> GameweekStats:
        stats = None

        if self.stats_path is not None and self.stats_path.exists():
            stats = load_json_safe(self.stats_path, schema=GameweekStats)
            if stats is None:
                logger.warning(f'Stats snapshot {self.stats_path} is unreadable')

        if stats is None and self.stats_url:
            stats = self._fetch_remote_stats()

        if stats is None:
            logger.warning(f'No statistics available for gameweek {self.gameweek}; using empty snapshot')
            return GameweekStats.empty(self.gameweek)

        if stats.game_week != self.gameweek:
            logger.warning(
                f"Stats document gameweek ({stats.game_week}) doesn't match requested gameweek ({self.gameweek})"
            )

        logger.info(
            f'Loaded gameweek {self.gameweek}: {len(stats.player_stats)} player stats, '
            f'{len(stats.squad_points)} squad totals'
        )
        return stats

    def _fetch_remote_stats(self) -> Optional[GameweekStats]:
        try:
            response = self.session.get(self.stats_url, timeout=self.timeout)
            response.raise_for_status()
            return GameweekStats.model_validate(response.json())
        except requests.RequestException as e:
            logger.error(f'Failed to fetch gameweek {self.gameweek} stats: {e}')
        except ValueError as e:
            logger.error(f'Invalid stats document for gameweek {self.gameweek}: {e}')
        return None

    def _load_squads(self) -> list[Squad]:
        if not self.has_squads_snapshot():
            logger.warning(f'No squads snapshot for gameweek {self.gameweek}')
            return []

        snapshot = load_json_safe(self.squads_path)
        if not isinstance(snapshot, dict):
            logger.warning(f'Squads snapshot {self.squads_path} is unreadable')
            return []

        raw_squads = _squads_list(snapshot)
        if raw_squads is None:
            logger.warning(f'Squads snapshot {self.squads_path} has no squads list')
            return []
        return parse_squads(raw_squads)
