"""
Registration rules: division capacity and the checks run when a player signs up.
"""
import logging

from .exceptions import DivisionFullError, DuplicatePlayerError, ValidationError
from .models import PENDING_PLAYER, ROLE_PLAYER

logger = logging.getLogger(__name__)

CUP_CAPACITY = 20
DEFAULT_CAPACITY = 12


def division_capacity(tournament) -> int:
    """Maximum players per division: 20 for a Cup tournament, 12 otherwise."""
    return CUP_CAPACITY if 'Cup' in (tournament or '') else DEFAULT_CAPACITY


def can_register(tournament, division, roster_players) -> bool:
    """True if the division still has room for one more player in the tournament."""
    division_players = [p for p in roster_players if p.plays_in(division, tournament)]
    return len(division_players) < division_capacity(tournament)


def check_registration(tournaments, division, roster_players):
    """Check capacity for every selected tournament.

    Raises:
        DivisionFullError: for the first tournament whose division is full.
    """
    for tournament in tournaments:
        if not can_register(tournament, division, roster_players):
            raise DivisionFullError(division, tournament)


def register_player(roster, player, catalogue):
    """Validate a new player and add them to the roster.

    Args:
        roster: RosterRepository.
        player: Player with name, email, password_hash, division and tournaments set.
        catalogue: tournament -> divisions mapping.

    Raises:
        ValidationError: a required field is missing or the division is not
            played in a selected tournament.
        DuplicatePlayerError: the email or name is already registered.
        DivisionFullError: the division is full for a selected tournament.
    """
    player.name = (player.name or '').strip()
    player.email = (player.email or '').strip()
    if not player.name or not player.email:
        raise ValidationError('Name and email are required')
    if player.name.casefold() == PENDING_PLAYER.casefold():
        raise ValidationError(f'The name "{PENDING_PLAYER}" is reserved. Please choose another name.')
    if not player.password_hash or not player.tournaments or not player.division:
        raise ValidationError('Please fill in all required fields including password')

    for tournament in player.tournaments:
        if tournament not in catalogue:
            raise ValidationError(f'Unknown tournament: {tournament}')
        if player.division not in catalogue[tournament]:
            raise ValidationError('Please select a valid division')

    player.role = ROLE_PLAYER

    with roster.store.locked():
        if roster.find_by_email(player.email):
            raise DuplicatePlayerError('User with this email already exists! Please login instead.')
        if roster.find_by_name(player.name):
            raise DuplicatePlayerError('A player with this name is already registered.')
        try:
            check_registration(player.tournaments, player.division, roster.list())
        except DivisionFullError as e:
            logger.warning(f'Registration rejected for {player.name}: {e}')
            raise
        roster.add(player)

    logger.info(f'Registered {player.name} in {player.division} for {", ".join(player.tournaments)}')
    return player
