"""Errors raised by the league engine."""


class LeagueError(Exception):
    """Base class for all league errors."""


class ValidationError(LeagueError, ValueError):
    """Submitted data is missing or invalid. Nothing was written."""


class DuplicateMatchError(ValidationError):
    """The two players already have a pending or confirmed match."""


class DivisionFullError(ValidationError):
    """The division reached its player capacity for a tournament."""

    def __init__(self, division, tournament):
        self.division = division
        self.tournament = tournament
        super().__init__(f'Division {division} is full for {tournament}! Please choose another division.')


class DuplicatePlayerError(ValidationError):
    """A player with the same email or name is already registered."""


class MatchNotFoundError(LeagueError, LookupError):
    """No scheduled match with the given id is open for joining."""
