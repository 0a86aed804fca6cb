"""Data models for derived scoring results."""

from dataclasses import dataclass, field
from typing import List, Optional

from .schemas import PlayerStat, Squad


@dataclass
class PlayerPoints:
    """Points a starting player contributes for the gameweek."""
    points: int
    base_points: int
    is_multiplied: bool = False
    no_stats: bool = False  # Starter with no stats entry (still 0 points)


@dataclass
class SquadPlayer:
    """One roster slot of a squad, enriched for display."""
    id: str
    name: str
    position_id: int
    team_id: int
    roster_index: int
    is_starting: bool
    is_captain: bool = False
    is_vice_captain: bool = False
    stat: Optional[PlayerStat] = None
    player_points: Optional[PlayerPoints] = None  # None for bench players

    @property
    def points(self) -> int:
        return self.player_points.points if self.player_points else 0


@dataclass
class SquadTotal:
    """Total points and rank for a squad."""
    total_points: int
    rank: int
    from_snapshot: bool = False


@dataclass
class SquadResult:
    """A squad with its processed players and gameweek total."""
    squad: Squad
    players: List[SquadPlayer] = field(default_factory=list)
    total_points: int = 0
    rank: int = 0
    formation: str = '0-0-0'
    is_favorite: bool = False

    @property
    def name(self) -> str:
        return self.squad.name

    @property
    def starters(self) -> List[SquadPlayer]:
        return [p for p in self.players if p.is_starting]


@dataclass
class PopularityEntry:
    """How many squads picked a player, and how many made them captain."""
    player_id: str
    name: str
    position_id: int
    team_id: int
    count: int = 0
    captain_count: int = 0
