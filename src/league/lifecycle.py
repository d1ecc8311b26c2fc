"""
Match lifecycle: recording results, scheduling matches and joining open ones.

Every operation validates its input before touching a repository, so a
rejected request leaves the stores unchanged.
"""
import logging

from .exceptions import DuplicateMatchError, MatchNotFoundError, ValidationError
from .models import MatchResult, STATUS_PENDING, ScheduledMatch

logger = logging.getLogger(__name__)

SCHEDULE_REQUIRED_FIELDS = [
    ('player1', 'Please select Player 1'),
    ('division', 'Division is missing'),
    ('tournament', 'Tournament is missing'),
    ('location', 'Please enter a location'),
    ('date', 'Please select a date'),
    ('time', 'Please select a time'),
]


def _text(data, field):
    value = data.get(field)
    if value is None:
        return ''
    return str(value).strip()


class MatchLifecycleManager:
    def __init__(self, results, schedule, roster):
        self.results = results
        self.schedule = schedule
        self.roster = roster

    def record_result(self, data) -> MatchResult:
        """Validate and store a played match, then drop its scheduled entries.

        Args:
            data: dict with player1, player2, sets, division, tournament and
                optionally had_pint, pints_count, location, time.

        Raises:
            ValidationError: no set with two valid scores, or a player missing.
        """
        match = MatchResult(
            player1=_text(data, 'player1'),
            player2=_text(data, 'player2'),
            sets=data.get('sets') or [],
            division=_text(data, 'division'),
            tournament=_text(data, 'tournament'),
            had_pint=data.get('had_pint', False),
            pints_count=data.get('pints_count', 1),
            location=_text(data, 'location'),
            time=_text(data, 'time'),
        )
        if not match.valid_sets:
            raise ValidationError('Please enter valid scores for at least one set')
        if not match.player1 or not match.player2:
            raise ValidationError('Please fill in all required fields')

        # One lock for the result and its schedule cleanup
        with self.results.store.locked():
            self.results.add(match)
            removed = self.schedule.remove_pair(match.division, match.tournament,
                                                match.player1, match.player2)
        logger.info(f'Recorded result {match!r} in {match.division}/{match.tournament}')
        for scheduled in removed:
            logger.debug(f'Removed scheduled match {scheduled.id} ({scheduled.status}) after result')
        return match

    def schedule_match(self, data) -> ScheduledMatch:
        """Validate and store a future match.

        With player2 the match is confirmed, without it the match is pending
        and any other player may join.

        Raises:
            DuplicateMatchError: the pair already has a pending or confirmed match.
            ValidationError: a required field is missing.
        """
        player1 = _text(data, 'player1')
        player2 = _text(data, 'player2')
        division = _text(data, 'division')
        tournament = _text(data, 'tournament')

        if player2 and self.schedule.find_open(division, tournament, player1, player2):
            raise DuplicateMatchError(
                'A match between these players already exists in this division and tournament!')

        for field, message in SCHEDULE_REQUIRED_FIELDS:
            if not _text(data, field):
                raise ValidationError(message)

        match = ScheduledMatch(
            player1=player1,
            player2=player2 or None,
            division=division,
            tournament=tournament,
            location=_text(data, 'location'),
            date=_text(data, 'date'),
            time=_text(data, 'time'),
        )
        self.schedule.add(match)
        logger.info(f'Scheduled {match!r} in {division}/{tournament}')
        return match

    def join_pending_match(self, match_id, joining_player) -> ScheduledMatch:
        """Fill the open slot of a pending match and confirm it.

        Raises:
            MatchNotFoundError: unknown id, or the match is no longer pending.
            ValidationError: the joiner created the match, is blank, or
                already has an open match against player1.
        """
        joining_player = (joining_player or '').strip()
        if not joining_player:
            raise ValidationError('A player is required to join a match')

        match = self.schedule.get(match_id)
        if match is None or not match.is_pending:
            raise MatchNotFoundError('This match is no longer open for joining')
        if match.player1 == joining_player:
            raise ValidationError('You cannot join your own match')
        if self.schedule.find_open(match.division, match.tournament, match.player1, joining_player):
            raise DuplicateMatchError(
                'A match between these players already exists in this division and tournament!')

        # Only flips the status if nobody joined in the meantime
        updated = self.schedule.confirm(match_id, joining_player, expected_status=STATUS_PENDING)
        if updated is None:
            raise MatchNotFoundError('This match is no longer open for joining')
        logger.info(f'{joining_player} joined {match.player1}\'s match {match_id}')
        return updated

    def pending_matches(self, division, tournament):
        """Scheduled matches still waiting for a second player."""
        if not division or not tournament:
            return []
        return [m for m in self.schedule.list(division, tournament) if m.is_pending]

    def confirmed_matches(self, division, tournament):
        if not division or not tournament:
            return []
        return [m for m in self.schedule.list(division, tournament) if m.is_confirmed]

    def player_matches(self, division, tournament, player_name):
        """Return a player's played and confirmed matches and the opponents still to meet.

        Returns: {'played': [MatchResult], 'scheduled': [ScheduledMatch],
                  'upcoming': [opponent name]}
        """
        if not division or not tournament or not player_name:
            return {'played': [], 'scheduled': [], 'upcoming': []}

        played = [m for m in self.results.list(division, tournament) if m.involves(player_name)]
        scheduled = [m for m in self.confirmed_matches(division, tournament)
                     if m.involves(player_name)]

        upcoming = []
        for opponent in self.roster.division_players(division, tournament):
            if opponent.name == player_name:
                continue
            if any(m.is_between(player_name, opponent.name) for m in played):
                continue
            if any(m.is_between(player_name, opponent.name) for m in scheduled):
                continue
            upcoming.append(opponent.name)

        return {'played': played, 'scheduled': scheduled, 'upcoming': upcoming}
