"""
Tests for player registration.

Covers:
- Division capacity (12 per league division, 20 in a Cup)
- Admins never taking a place
- Capacity across several selected tournaments
- Field, catalogue and duplicate checks on sign-up
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from league.exceptions import DivisionFullError, DuplicatePlayerError, ValidationError
from league.models import Player, ROLE_ADMIN, ROLE_PLAYER
from league.reference import get_default_tournaments
from league.registration import (
    CUP_CAPACITY, DEFAULT_CAPACITY, can_register, check_registration, division_capacity,
    register_player,
)
from conftest import DIVISION, TOURNAMENT, make_player

CUP = 'PPC Cup'


def fill(count, division=DIVISION, tournaments=(TOURNAMENT,)):
    return [make_player(f'P{i}', division=division, tournaments=tournaments) for i in range(count)]


def new_player(name='Newcomer', email=None, division=DIVISION, tournaments=(TOURNAMENT,)):
    return Player(
        name=name,
        email=email or f'{name.lower()}@example.com',
        password_hash='hash',
        division=division,
        tournaments=list(tournaments),
    )


class TestCapacity:
    """Tests for division capacity."""

    def test_capacity_by_tournament_name(self):
        """Any tournament name containing Cup holds 20 players."""
        assert division_capacity(TOURNAMENT) == DEFAULT_CAPACITY == 12
        assert division_capacity(CUP) == CUP_CAPACITY == 20
        assert division_capacity('Summer Cup 2026') == 20

    def test_league_division_boundary(self):
        """11 players leave one place, 12 leave none."""
        assert can_register(TOURNAMENT, DIVISION, fill(11))
        assert not can_register(TOURNAMENT, DIVISION, fill(12))

    def test_cup_division_boundary(self):
        """19 players leave one place in a Cup, 20 leave none."""
        assert can_register(CUP, 'Elite', fill(19, 'Elite', (CUP,)))
        assert not can_register(CUP, 'Elite', fill(20, 'Elite', (CUP,)))

    def test_admins_not_counted(self):
        """An admin in the division never takes a place."""
        players = fill(11)
        players.append(make_player('Admin', role=ROLE_ADMIN))
        assert can_register(TOURNAMENT, DIVISION, players)

    def test_other_scopes_not_counted(self):
        """Players of another division or tournament do not fill this one."""
        players = fill(12, division='Plata') + fill(12, tournaments=('PPC Spring 2026',))
        assert can_register(TOURNAMENT, DIVISION, players)

    def test_check_every_tournament(self):
        """The first full tournament is reported."""
        players = fill(12, tournaments=('PPC Spring 2026',))
        check_registration([TOURNAMENT], DIVISION, players)
        with pytest.raises(DivisionFullError) as exc:
            check_registration([TOURNAMENT, 'PPC Spring 2026'], DIVISION, players)
        assert exc.value.tournament == 'PPC Spring 2026'
        assert str(exc.value) == (
            'Division Oro is full for PPC Spring 2026! Please choose another division.')


class TestRegisterPlayer:
    """Tests for signing up through the roster."""

    @pytest.fixture
    def catalogue(self):
        return get_default_tournaments()

    def test_registers_player(self, roster, catalogue):
        """A valid player lands in the roster with the player role."""
        player = register_player(roster, new_player(), catalogue)
        assert player.role == ROLE_PLAYER
        assert [p.name for p in roster.division_players(DIVISION, TOURNAMENT)] == ['Newcomer']

    def test_role_cannot_be_chosen(self, roster, catalogue):
        """A sign-up never creates an admin."""
        player = new_player()
        player.role = ROLE_ADMIN
        register_player(roster, player, catalogue)
        assert not roster.find_by_name('Newcomer').is_admin

    @pytest.mark.parametrize('field', ['name', 'email'])
    def test_name_and_email_required(self, roster, catalogue, field):
        player = new_player()
        setattr(player, field, '  ')
        with pytest.raises(ValidationError, match='Name and email'):
            register_player(roster, player, catalogue)
        assert roster.list() == []

    def test_password_and_division_required(self, roster, catalogue):
        player = new_player()
        player.password_hash = ''
        with pytest.raises(ValidationError, match='including password'):
            register_player(roster, player, catalogue)
        with pytest.raises(ValidationError):
            register_player(roster, new_player(tournaments=()), catalogue)

    def test_division_must_exist_in_tournament(self, roster, catalogue):
        """League divisions are not played in the Cup."""
        with pytest.raises(ValidationError, match='valid division'):
            register_player(roster, new_player(tournaments=(CUP,)), catalogue)
        with pytest.raises(ValidationError):
            register_player(roster, new_player(tournaments=('Unknown Open',)), catalogue)
        assert roster.list() == []

    def test_duplicate_email_case_insensitive(self, roster, catalogue):
        register_player(roster, new_player('Ana', email='ana@example.com'), catalogue)
        with pytest.raises(DuplicatePlayerError, match='already exists'):
            register_player(roster, new_player('Other', email='ANA@example.com'), catalogue)

    def test_duplicate_name(self, roster, catalogue):
        """Names identify players in results, so they are unique."""
        register_player(roster, new_player('Ana', email='ana@example.com'), catalogue)
        with pytest.raises(DuplicatePlayerError):
            register_player(roster, new_player('Ana', email='ana2@example.com'), catalogue)
        assert len(roster.list()) == 1

    def test_full_division_rejected(self, roster, catalogue):
        """The thirteenth league player is turned away."""
        for player in fill(12):
            roster.add(player)
        with pytest.raises(DivisionFullError):
            register_player(roster, new_player(), catalogue)
        assert roster.find_by_name('Newcomer') is None

    def test_last_place_taken(self, roster, catalogue):
        """The twelfth league player still fits."""
        for player in fill(11):
            roster.add(player)
        register_player(roster, new_player(), catalogue)
        assert len(roster.division_players(DIVISION, TOURNAMENT)) == 12

    @pytest.mark.parametrize('name', ['Pending', 'pending', ' PENDING '])
    def test_open_slot_name_reserved(self, roster, catalogue, name):
        """Open matches store 'Pending' as player2, so no player may use it."""
        with pytest.raises(ValidationError, match='reserved'):
            register_player(roster, new_player(name, email='slot@example.com'), catalogue)
        assert roster.list() == []
