"""Unit tests for validation functions."""

from fantasytier.schemas import GameweekStats, PlayerStat, SquadPoints
from fantasytier.validators import validate_all_squads, validate_gameweek_stats, validate_squad

from conftest import make_squad


class TestSquadValidation:
    """Tests for squad validation."""

    def test_valid_squad(self, full_squad):
        """Test that a consistent squad passes all checks."""
        assert validate_squad(full_squad) == []

    def test_empty_roster(self):
        """Test squad with no players."""
        errors = validate_squad(make_squad([], name='Empty'))
        assert errors == ['Empty has an empty roster']

    def test_short_bitmap(self):
        """Test lineup bitmap that doesn't cover the roster."""
        errors = validate_squad(make_squad(['a', 'b', 'c'], lineup='0x0101', name='TST'))
        assert len(errors) == 1
        assert 'covers 2 of 3 roster slots' in errors[0]

    def test_non_hex_bitmap(self):
        """Test lineup bitmap with non-hex characters."""
        errors = validate_squad(make_squad(['a'], lineup='0xzz', name='TST'))
        assert len(errors) == 1
        assert 'not hex' in errors[0]

    def test_captain_not_on_roster(self):
        """Test captain and vice-captain outside the roster."""
        squad = make_squad(['a', 'b'], lineup='0101', captain='x', vice_captain='y', name='TST')
        errors = validate_squad(squad)
        assert len(errors) == 2
        assert 'captain x is not on the roster' in errors[0]
        assert 'vice-captain y' in errors[1]

    def test_duplicate_players(self):
        """Test roster listing the same player twice."""
        errors = validate_squad(make_squad(['a', 'b', 'a'], lineup='010101', name='TST'))
        assert errors == ['TST has duplicate players: a']


class TestGameweekValidation:
    """Tests for snapshot sanity checks."""

    def test_clean_snapshot(self):
        """Test a consistent snapshot raises no warnings."""
        squads = [make_squad(['a'], '01', token_id='1')]
        stats = GameweekStats(
            gameWeek=28,
            squadPoints=[SquadPoints(squadId=1, points=10)],
            playerStats={'a': PlayerStat(points=10, played=True)},
        )
        assert validate_gameweek_stats(stats, squads) == []

    def test_unknown_and_duplicate_squads(self):
        """Test totals for unknown squads and repeated ids."""
        squads = [make_squad(['a'], '01', token_id='1')]
        stats = GameweekStats(
            gameWeek=28,
            squadPoints=[
                SquadPoints(squadId=1, points=10),
                SquadPoints(squadId=1, points=10),
                SquadPoints(squadId=2, points=5),
            ],
        )
        warnings = validate_gameweek_stats(stats, squads)
        assert len(warnings) == 2
        assert 'more than once' in warnings[0]
        assert 'unknown squad 2' in warnings[1]

    def test_implausible_player_points(self):
        """Test out-of-range points and points without playing."""
        stats = GameweekStats(
            gameWeek=28,
            playerStats={
                'a': PlayerStat(points=55, played=True),
                'b': PlayerStat(points=2, played=False),
            },
        )
        warnings = validate_gameweek_stats(stats, [])
        assert len(warnings) == 2
        assert 'a scored 55 pts' in warnings[0]
        assert 'did not play' in warnings[1]

    def test_validate_all(self, full_squad):
        """Test combined validation returns errors and warnings separately."""
        bad = make_squad(['a'], lineup='', name='Bad', token_id='2')
        stats = GameweekStats(gameWeek=28, squadPoints=[SquadPoints(squadId=3, points=1)])
        errors, warnings = validate_all_squads([full_squad, bad], stats)
        assert len(errors) == 1
        assert errors[0].startswith('Bad')
        assert len(warnings) == 1
