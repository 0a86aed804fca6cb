"""Constants and mappings for the Fantasy Tier results viewer."""

# Position ids used by the reference data
GOALKEEPER = 0
DEFENDER = 1
MIDFIELDER = 2
FORWARD = 3

POSITION_NAMES = {
    GOALKEEPER: 'Goalkeeper',
    DEFENDER: 'Defender',
    MIDFIELDER: 'Midfielder',
    FORWARD: 'Forward',
}
UNKNOWN_POSITION_NAME = 'Unknown'

# Position id given to roster ids missing from players.csv
UNKNOWN_POSITION_ID = 99
UNKNOWN_TEAM_ID = 0

# Lineup bitmap slot value that marks a starting player
STARTING_SLOT = '01'

CAPTAIN_MULTIPLIER = 2

# Sort orders for players inside a squad
SORT_ASC = 'ASC'
SORT_DESC = 'DESC'

# Preference keys (same names the web client kept in localStorage)
PREF_FAVORITE_TEAMS = 'favoriteTeamIds'
PREF_FAVORITE_SQUADS = 'favoriteSquadIds'
PREF_SORT_ORDER = 'sortOrder'
PREF_ACTIVE_TAB = 'activeTab'

ACTIVE_TABS = ('teams', 'players', 'gameweek')

PREFERENCE_DEFAULTS = {
    PREF_FAVORITE_TEAMS: [],
    PREF_FAVORITE_SQUADS: [],
    PREF_SORT_ORDER: SORT_ASC,
    PREF_ACTIVE_TAB: 'teams',
}

# GraphQL query for the squad registry subgraph
SQUADS_QUERY = """
query GetSquads($skip: Int = 0, $first: Int = 50, $orderBy: Squad_orderBy, $orderDirection: OrderDirection, $where: Squad_filter, $block: Block_height, $subgraphError: _SubgraphErrorPolicy_! = deny) {
  squads(
    skip: $skip
    first: $first
    orderBy: $orderBy
    orderDirection: $orderDirection
    where: $where
    block: $block
    subgraphError: $subgraphError
  ) {
    ...Squad
  }
}

fragment Squad on Squad {
  id
  tokenId
  owner
  name
  league {
    id
    name
  }
  players
  lineupPriority
  captain
  viceCaptain
}
"""

# Snapshot file names inside the snapshots directory
STATS_SNAPSHOT = 'gameweek_{gameweek}_stats.json'
SQUADS_SNAPSHOT = 'gameweek_{gameweek}_squads.json'
