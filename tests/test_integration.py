"""Integration tests for end-to-end workflows."""

import json
import sys

import openpyxl
import pytest

from fantasytier.data_fetcher import GameweekDataFetcher
from fantasytier.export import save_gameweek_results, write_results_workbook
from fantasytier.popularity import popularity
from fantasytier.reference_data import load_players, load_teams
from fantasytier.scoring import process_squads
from fantasytier.validators import validate_all_squads
from fantasytier.views import sort_popularity

LEAGUE = '0xd1006d96bbb6b5fb744959f390735d5be8126631'


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create temporary data directory with reference CSVs and a gameweek snapshot."""
    data_dir = tmp_path / 'data'
    snapshots = data_dir / 'snapshots'
    snapshots.mkdir(parents=True)

    (data_dir / 'players.csv').write_text(
        'id,name,positionId,teamId,leagueId\n'
        '1001,Thibaut Courtois,0,1,140\n'
        '1002,Antonio Rudiger,1,1,140\n'
        '1003,Federico Valverde,2,1,140\n'
        '1004,Kylian Mbappe,3,1,140\n'
        '2001,Wojciech Szczesny,0,2,140\n'
        '2004,Pedri,2,2,140\n'
        '2007,Lamine Yamal,3,2,140\n'
    )
    (data_dir / 'teams.csv').write_text(
        'id,team,leagueId,logo\n'
        '1,Real Madrid,140,https://example.com/541.png\n'
        '2,Barcelona,140,https://example.com/529.png\n'
    )

    squads = {
        'data': {
            'squads': [
                {
                    'id': f'{LEAGUE}-1',
                    'tokenId': '1',
                    'owner': '0x5a3f0e2c9b1d4e6f7a8b9c0d1e2f3a4b5c6d7e8f',
                    'name': 'Los Galacticos',
                    'players': ['1001', '1002', '1003', '1004', '2001'],
                    'lineupPriority': '0x0101010100',
                    'captain': '1004',
                    'viceCaptain': '1003',
                },
                {
                    'id': f'{LEAGUE}-2',
                    'tokenId': '2',
                    'owner': '0x9c8b7a6f5e4d3c2b1a0f9e8d7c6b5a4f3e2d1c0b',
                    'name': 'Blaugrana',
                    'players': ['2001', '1002', '2004', '2007', '1001'],
                    'lineupPriority': '0x0101010100',
                    'captain': '2007',
                    'viceCaptain': '2004',
                },
                {
                    'id': f'{LEAGUE}-3',
                    'tokenId': '3',
                    'owner': '0x1111111111111111111111111111111111111111',
                    'name': 'Late Entry',
                    'players': ['1001', '2004', 'ffff0000', '1004', '2007'],
                    'lineupPriority': '0x0101010101',
                    'captain': '1004',
                    'viceCaptain': '',
                },
            ]
        }
    }
    (snapshots / 'gameweek_28_squads.json').write_text(json.dumps(squads))

    stats = {
        'leagueId': LEAGUE,
        'gameWeek': 28,
        'root': '0xabc',
        'squadPoints': [
            {'squadId': 1, 'points': 31, 'rank': 0, 'teamsWithSameRank': 1, 'proof': ['0x01']},
            {'squadId': 2, 'points': 12, 'rank': 1, 'teamsWithSameRank': 1, 'proof': ['0x02']},
        ],
        'playerStats': {
            '1001': {'minutes': 90, 'played': True, 'points': 3},
            '1002': {'minutes': 90, 'played': True, 'points': 1},
            '1003': {'minutes': 90, 'played': True, 'points': 7},
            '1004': {'minutes': 90, 'played': True, 'points': 10},
            '2001': {'minutes': 90, 'played': True, 'points': 2},
            '2004': {'minutes': 0, 'played': False, 'points': 0},
            '2007': {'minutes': 0, 'played': False, 'points': 0},
        },
    }
    (snapshots / 'gameweek_28_stats.json').write_text(json.dumps(stats))

    return data_dir


class TestGameweekWorkflow:
    """Integration tests for loading, scoring and exporting a gameweek."""

    def load(self, data_dir):
        fetcher = GameweekDataFetcher(28, snapshots_dir=data_dir / 'snapshots')
        players = load_players(data_dir / 'players.csv')
        squads = fetcher.squads
        results = process_squads(squads, players, fetcher.stats, favorite_ids=[f'{LEAGUE}-2'])
        return fetcher, players, squads, results

    def test_totals_from_snapshot_and_fallback(self, temp_data_dir):
        """Test published totals win and unpublished squads are summed locally."""
        _, _, _, results = self.load(temp_data_dir)
        by_name = {r.name: r for r in results}

        assert by_name['Los Galacticos'].total_points == 31
        assert by_name['Blaugrana'].total_points == 12
        assert by_name['Blaugrana'].rank == 1
        # 3 + 0 (Pedri) + 0 (unknown) + 10 * 2 (captain) + 0 (Yamal)
        assert by_name['Late Entry'].total_points == 23
        assert by_name['Late Entry'].rank == 0
        assert by_name['Blaugrana'].is_favorite is True

    def test_formations(self, temp_data_dir):
        """Test formations come from starters only."""
        _, _, _, results = self.load(temp_data_dir)
        by_name = {r.name: r for r in results}
        assert by_name['Los Galacticos'].formation == '1-1-1'
        assert by_name['Late Entry'].formation == '0-1-2'

    def test_popularity_across_league(self, temp_data_dir):
        """Test popularity counts every roster in the snapshot."""
        _, players, squads, _ = self.load(temp_data_dir)
        entries = {e.player_id: e for e in popularity(squads, players)}

        assert entries['1001'].count == 3
        assert entries['1004'].count == 2
        assert entries['1004'].captain_count == 2
        assert 'ffff0000' not in entries

    def test_validation(self, temp_data_dir):
        """Test the sample league validates cleanly."""
        fetcher, _, squads, _ = self.load(temp_data_dir)
        errors, warnings = validate_all_squads(squads, fetcher.stats)
        assert errors == []
        assert warnings == []

    def test_json_export(self, temp_data_dir, tmp_path):
        """Test results are exported highest total first."""
        _, _, _, results = self.load(temp_data_dir)
        output = tmp_path / 'out' / 'gameweek_28.json'

        save_gameweek_results(output, 28, results)

        data = json.loads(output.read_text())
        assert data['gameweek'] == 28
        assert data['has_scores'] is True
        assert [s['name'] for s in data['squads']] == ['Los Galacticos', 'Late Entry', 'Blaugrana']
        assert data['squads'][0]['position'] == 1
        captain = next(p for p in data['squads'][0]['starters'] if p['captain'])
        assert captain['points'] == 20
        assert data['squads'][0]['bench'] == ['2001']

    def test_workbook_export(self, temp_data_dir, tmp_path):
        """Test standings and popularity sheets are written and replaced."""
        _, players, squads, results = self.load(temp_data_dir)
        teams = load_teams(temp_data_dir / 'teams.csv')
        entries = sort_popularity(popularity(squads, players), 'desc')
        path = tmp_path / 'results.xlsx'
        team_names = {tid: t.name for tid, t in teams.items()}

        write_results_workbook(path, 28, results, entries, team_names)
        write_results_workbook(path, 28, results, entries, team_names)

        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ['Gameweek 28', 'Popularity']
        standings = wb['Gameweek 28']
        assert [c.value for c in standings[1]] == ['Rank', 'Squad', 'Owner', 'Formation', 'Points']
        assert [c.value for c in standings[2]] == [1, 'Los Galacticos', '0x5a3f...7e8f', '1-1-1', 31]
        assert standings.max_row == 4
        popular = wb['Popularity']
        assert popular.cell(row=2, column=1).value == 'Thibaut Courtois'
        assert popular.cell(row=2, column=3).value == 'Real Madrid'
        assert popular.cell(row=2, column=4).value == 3
        wb.close()


class TestConfigIntegration:
    """Test the bundled league configuration."""

    def test_config_loaded(self):
        """Test configuration values are read and validated."""
        from fantasytier.config import get_available_gameweeks, get_default_gameweek, get_league_id

        assert get_league_id() == LEAGUE
        assert get_default_gameweek() in get_available_gameweeks()

    def test_stats_url_per_gameweek(self):
        """Test only published gameweeks have a stats URL."""
        from fantasytier.config import get_stats_url

        assert get_stats_url(28).endswith('_28.json')
        assert get_stats_url(1) is None

    def test_paths_are_absolute(self):
        """Test configured paths resolve against the project directory."""
        from fantasytier.config import get_players_csv, get_snapshots_dir

        assert get_players_csv().is_absolute()
        assert get_snapshots_dir().name == 'snapshots'


class TestViewerCli:
    """Run the CLI against the bundled gameweek 28 sample."""

    def test_results_view(self, tmp_path, monkeypatch, capsys):
        """Test the results view prints standings and writes exports."""
        import viewer

        output = tmp_path / 'gw28.json'
        prefs = tmp_path / 'prefs.json'
        monkeypatch.setattr(
            sys,
            'argv',
            [
                'viewer.py', '--view', 'results', '--gameweek', '28', '--quiet',
                '--prefs', str(prefs), '--output', str(output), '--validate',
            ],
        )

        viewer.main()

        out = capsys.readouterr().out
        assert 'Gameweek 28 Results - Total Teams: 2' in out
        data = json.loads(output.read_text())
        assert [s['total_points'] for s in data['squads']] == [43, 34]
        assert json.loads(prefs.read_text())['activeTab'] == 'gameweek'

    def test_toggle_favorite(self, tmp_path, monkeypatch, capsys):
        """Test toggling a favourite persists it for the results view."""
        import viewer

        prefs = tmp_path / 'prefs.json'
        squad_id = f'{LEAGUE}-2'
        monkeypatch.setattr(
            sys,
            'argv',
            [
                'viewer.py', '--view', 'results', '--quiet', '--prefs', str(prefs),
                '--toggle-favorite', squad_id, '--favorites-only',
            ],
        )

        viewer.main()

        out = capsys.readouterr().out
        assert f'Added favourite: {squad_id}' in out
        assert 'Total Teams: 1' in out
        assert json.loads(prefs.read_text())['favoriteSquadIds'] == [squad_id]

    def test_log_dir_writes_run_log(self, tmp_path, monkeypatch, capsys):
        """Test --log-dir keeps a detailed log even when the console is quiet."""
        import viewer

        log_dir = tmp_path / 'logs'
        monkeypatch.setattr(
            sys,
            'argv',
            [
                'viewer.py', '--view', 'stats', '--gameweek', '28', '--quiet',
                '--prefs', str(tmp_path / 'prefs.json'), '--log-dir', str(log_dir),
            ],
        )

        viewer.main()

        captured = capsys.readouterr()
        assert 'Gameweek 28 Statistics' in captured.out
        assert 'Loaded gameweek 28' not in captured.err
        log_files = list(log_dir.glob('fantasytier_*.log'))
        assert len(log_files) == 1
        assert 'Loaded gameweek 28' in log_files[0].read_text()
