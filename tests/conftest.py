"""
Shared pytest fixtures for the league engine tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from league.lifecycle import MatchLifecycleManager
from league.models import Player, ROLE_ADMIN
from league.repositories import ResultRepository, ScheduleRepository, RosterRepository
from league.store import MemoryStore

DIVISION = 'Oro'
TOURNAMENT = 'PPC Winter 2025/2026'


def make_player(name, division=DIVISION, tournaments=(TOURNAMENT,), role='player'):
    """Build a roster player."""
    return Player(
        name=name,
        email=f'{name.lower().replace(" ", ".")}@example.com',
        password_hash='hash',
        role=role,
        division=division,
        tournaments=list(tournaments),
    )


@pytest.fixture
def store():
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def results(store):
    return ResultRepository(store)


@pytest.fixture
def schedule(store):
    return ScheduleRepository(store)


@pytest.fixture
def roster(store):
    return RosterRepository(store)


@pytest.fixture
def manager(results, schedule, roster):
    return MatchLifecycleManager(results, schedule, roster)


@pytest.fixture
def three_players(roster):
    """Players A, B and C in Oro, plus an admin who must never count."""
    for name in ('A', 'B', 'C'):
        roster.add(make_player(name))
    roster.add(make_player('Admin User', division='', tournaments=(), role=ROLE_ADMIN))
    return roster


@pytest.fixture
def record(manager):
    """Record a result between two players in Oro."""
    def _record(player1, player2, sets, **extra):
        data = {
            'player1': player1,
            'player2': player2,
            'sets': sets,
            'division': DIVISION,
            'tournament': TOURNAMENT,
        }
        data.update(extra)
        return manager.record_result(data)
    return _record
