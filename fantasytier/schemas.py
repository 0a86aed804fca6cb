"""Pydantic schemas for reference data, subgraph squads and gameweek snapshots."""

from pydantic import BaseModel, Field, field_validator


class Player(BaseModel):
    """Player reference entry (players.csv)."""

    id: str
    name: str
    position_id: int = Field(..., alias='positionId')
    team_id: int = Field(..., alias='teamId')
    league_id: str = Field(default='', alias='leagueId')

    class Config:
        populate_by_name = True
        frozen = True


class Team(BaseModel):
    """Club reference entry (teams.csv)."""

    id: str
    name: str
    league_id: str = Field(default='', alias='leagueId')
    logo: str = ''

    class Config:
        populate_by_name = True
        frozen = True


class League(BaseModel):
    """League a squad is registered in."""

    id: str
    name: str = ''


class Squad(BaseModel):
    """Fantasy squad as indexed by the subgraph.

    players[i] pairs with byte i of lineup_priority.
    """

    id: str
    token_id: str = Field(..., alias='tokenId')
    owner: str = ''
    name: str = ''
    league: League | None = None
    players: list[str] = Field(default_factory=list)
    lineup_priority: str = Field(default='', alias='lineupPriority')
    captain: str = ''
    vice_captain: str = Field(default='', alias='viceCaptain')

    @field_validator('token_id', mode='before')
    @classmethod
    def coerce_token_id(cls, v):
        """Token ids sometimes arrive as JSON numbers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('lineup_priority', 'captain', 'vice_captain', mode='before')
    @classmethod
    def null_to_empty(cls, v):
        """The subgraph returns null for unset designations."""
        return '' if v is None else v

    class Config:
        populate_by_name = True
        extra = 'ignore'


class PlayerStat(BaseModel):
    """A player's statistics for one gameweek."""

    minutes: int = 0
    played: bool = False
    position: int = 0
    goals: int = 0
    assists: int = 0
    goals_conceded: int = Field(default=0, alias='goalsConceded')
    clean_sheet: bool = Field(default=False, alias='cleanSheet')
    saves: int = 0
    penalty_saves: int = Field(default=0, alias='penaltySaves')
    penalty_misses: int = Field(default=0, alias='penaltyMisses')
    yellow_cards: int = Field(default=0, alias='yellowCards')
    red_cards: int = Field(default=0, alias='redCards')
    own_goals: int = Field(default=0, alias='ownGoals')
    points: int = 0

    class Config:
        populate_by_name = True
        extra = 'ignore'


class SquadPoints(BaseModel):
    """Authoritative squad total published with a gameweek snapshot."""

    squad_id: int = Field(..., alias='squadId')
    points: int = 0
    rank: int = 0
    teams_with_same_rank: int = Field(default=0, alias='teamsWithSameRank')
    proof: list[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = 'ignore'


class GameweekStats(BaseModel):
    """Complete per-gameweek statistics document."""

    league_id: str = Field(default='', alias='leagueId')
    game_week: int = Field(..., alias='gameWeek')
    root: str = ''
    squad_points: list[SquadPoints] = Field(default_factory=list, alias='squadPoints')
    player_stats: dict[str, PlayerStat] = Field(default_factory=dict, alias='playerStats')

    @classmethod
    def empty(cls, gameweek: int) -> 'GameweekStats':
        """Document used when a gameweek's data can't be loaded."""
        return cls(leagueId='', gameWeek=gameweek, root='', squadPoints=[], playerStats={})

    class Config:
        populate_by_name = True
        extra = 'ignore'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    league_id: str = Field(..., pattern=r'^0x[0-9a-fA-F]+$')
    subgraph_url: str = Field(..., min_length=1)
    page_size: int = Field(default=50, ge=1, le=1000)
    request_timeout: float = Field(default=30.0, gt=0)
    available_gameweeks: list[int]
    default_gameweek: int = Field(..., ge=1, le=60)
    stats_urls: dict[int, str] = Field(default_factory=dict)
    snapshots_dir: str = 'data/snapshots'
    players_csv: str = 'data/players.csv'
    teams_csv: str = 'data/teams.csv'

    @field_validator('available_gameweeks')
    @classmethod
    def validate_gameweeks(cls, v):
        """Ensure gameweek numbers are positive."""
        for gw in v:
            if gw < 1:
                raise ValueError(f'Invalid gameweek: {gw}')
        return v

    class Config:
        extra = 'forbid'
