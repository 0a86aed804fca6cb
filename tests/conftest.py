"""Shared fixtures for scoring tests."""

import logging

import pytest

from fantasytier.schemas import Player, PlayerStat, Squad


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers a test attached to the 'fantasytier' logger."""
    yield
    logger = logging.getLogger('fantasytier')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def make_squad(players, lineup='', captain='', vice_captain='', token_id='1', name='Test Squad', squad_id=None):
    """Build a Squad with sensible defaults."""
    return Squad(
        id=squad_id or f'squad-{token_id}',
        tokenId=token_id,
        owner='0x5a3f0e2c9b1d4e6f7a8b9c0d1e2f3a4b5c6d7e8f',
        name=name,
        players=players,
        lineupPriority=lineup,
        captain=captain,
        viceCaptain=vice_captain,
    )


@pytest.fixture
def players_table():
    """Reference data: 1 GK, 4 DEF, 4 MID, 2 FWD starters plus a bench GK."""
    rows = [
        ('gk1', 'Jan Oblak', 0, 3),
        ('d1', 'Jules Kounde', 1, 2),
        ('d2', 'Pau Cubarsi', 1, 2),
        ('d3', 'Antonio Rudiger', 1, 1),
        ('d4', 'Dani Vivian', 1, 4),
        ('m1', 'Pedri', 2, 2),
        ('m2', 'Federico Valverde', 2, 1),
        ('m3', 'Koke', 2, 3),
        ('m4', 'Oihan Sancet', 2, 4),
        ('f1', 'Kylian Mbappe', 3, 1),
        ('f2', 'Nico Williams', 3, 4),
        ('gk2', 'Unai Simon', 0, 4),
    ]
    return {
        pid: Player(id=pid, name=name, positionId=pos, teamId=team, leagueId='140')
        for pid, name, pos, team in rows
    }


@pytest.fixture
def full_squad():
    """Eleven starters and one bench goalkeeper, Mbappe captain."""
    return make_squad(
        ['gk1', 'd1', 'd2', 'd3', 'd4', 'm1', 'm2', 'm3', 'm4', 'f1', 'f2', 'gk2'],
        lineup='0x' + '01' * 11 + '00',
        captain='f1',
        vice_captain='m1',
    )


@pytest.fixture
def stats_table():
    """Gameweek stats for most of full_squad (m4 has no entry)."""
    points = {
        'gk1': 6, 'd1': 2, 'd2': 1, 'd3': 2, 'd4': 1,
        'm1': 5, 'm2': 3, 'm3': 1, 'f1': 8, 'f2': 2, 'gk2': 9,
    }
    return {pid: PlayerStat(points=pts, played=True, minutes=90) for pid, pts in points.items()}
