import uuid
import unicodedata
from datetime import date as date_cls

ROLE_ADMIN = 'admin'
ROLE_PLAYER = 'player'

STATUS_PENDING = 'pending'
STATUS_CONFIRMED = 'confirmed'
OPEN_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED)

# Stored as player2 while a scheduled match waits for an opponent
PENDING_PLAYER = 'Pending'

WIN = 'win'
LOSS = 'loss'
DRAW = 'draw'


def new_id() -> str:
    """Return a new unique record id."""
    return uuid.uuid4().hex


def parse_score(value):
    """Parse one game count. Returns a non-negative int, or None if blank/invalid."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        return int(value) if value >= 0 and value == int(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        score = int(text)
    except ValueError:
        return None
    return score if score >= 0 else None


def normalize_set(set_score):
    """Convert a submitted set into a [score1, score2] pair.

    Accepts a two-item list/tuple or a mapping with score1/score2 keys.
    Blank or invalid scores become None.
    """
    if isinstance(set_score, dict):
        raw = (set_score.get('score1'), set_score.get('score2'))
    elif isinstance(set_score, (list, tuple)) and len(set_score) >= 2:
        raw = (set_score[0], set_score[1])
    else:
        raw = (None, None)
    return [parse_score(raw[0]), parse_score(raw[1])]


def same_pair(a1, a2, b1, b2):
    """True if {a1, a2} and {b1, b2} are the same unordered pair."""
    return (a1 == b1 and a2 == b2) or (a1 == b2 and a2 == b1)


def parse_flag(value):
    """Parse a yes/no form value. Text such as 'false' or '0' is False."""
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def name_sort_key(name):
    """Sort key ordering names alphabetically the way a person reads them.

    Accents and case are ignored first, so 'alice' < 'Álvaro' < 'Bob'.
    Names equal on letters alone fall back to accents, then lower case
    before upper case.
    """
    decomposed = unicodedata.normalize('NFKD', name or '')
    base = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), (name or '').casefold(), (name or '').swapcase())


class Player:
    def __init__(self, name, email='', password_hash='', role=ROLE_PLAYER, division='',
                 tournaments=None, availability=None, locations=None, id=None):
        self.id = id or new_id()
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.role = role
        self.division = division
        self.tournaments = list(tournaments) if tournaments else []
        self.availability = dict(availability) if availability else {}
        self.locations = list(locations) if locations else []

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def plays_in(self, division, tournament):
        """True if this is an active player of the division for the tournament."""
        return (not self.is_admin
                and self.division == division
                and tournament in self.tournaments)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'password_hash': self.password_hash,
            'role': self.role,
            'division': self.division,
            'tournaments': list(self.tournaments),
            'availability': dict(self.availability),
            'locations': list(self.locations),
        }

    def to_public_dict(self):
        """Player data without credentials."""
        data = self.to_dict()
        data.pop('password_hash')
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data.get('name', ''),
            email=data.get('email', ''),
            password_hash=data.get('password_hash', ''),
            role=data.get('role', ROLE_PLAYER),
            division=data.get('division', ''),
            tournaments=data.get('tournaments') or [],
            availability=data.get('availability') or {},
            locations=data.get('locations') or [],
            id=data.get('id'),
        )

    def __repr__(self):
        return f"Player(name={self.name}, division={self.division}, tournaments={self.tournaments})"


class MatchResult:
    """A played match. Derived game and set totals are computed once from the sets."""

    def __init__(self, player1, player2, sets, division='', tournament='', had_pint=False,
                 pints_count=1, date=None, location='', time='', id=None):
        self.id = id or new_id()
        self.player1 = player1
        self.player2 = player2
        self.sets = [normalize_set(s) for s in sets or []]
        self.division = division
        self.tournament = tournament
        self.had_pint = parse_flag(had_pint)
        self.pints_count = parse_score(pints_count) or 1
        self.date = date or date_cls.today().isoformat()
        self.location = location or ''
        self.time = time or ''

        self.player1_games_won = 0
        self.player2_games_won = 0
        self.player1_sets_won = 0
        self.player2_sets_won = 0
        for score1, score2 in self.valid_sets:
            self.player1_games_won += score1
            self.player2_games_won += score2
            if score1 > score2:
                self.player1_sets_won += 1
            elif score2 > score1:
                self.player2_sets_won += 1

    @property
    def valid_sets(self):
        """Sets where both game counts are valid integers."""
        return [(s[0], s[1]) for s in self.sets if s[0] is not None and s[1] is not None]

    def involves(self, player_name):
        return player_name in (self.player1, self.player2)

    def is_between(self, player_a, player_b):
        return same_pair(self.player1, self.player2, player_a, player_b)

    def games_for(self, player_name):
        """Return (games won, games lost) from the player's side."""
        if self.player1 == player_name:
            return self.player1_games_won, self.player2_games_won
        return self.player2_games_won, self.player1_games_won

    def sets_for(self, player_name):
        """Return (sets won, sets lost) from the player's side."""
        if self.player1 == player_name:
            return self.player1_sets_won, self.player2_sets_won
        return self.player2_sets_won, self.player1_sets_won

    def outcome_for(self, player_name):
        """Return WIN, LOSS or DRAW for the player, decided on sets won."""
        won, lost = self.sets_for(player_name)
        if won > lost:
            return WIN
        if lost > won:
            return LOSS
        return DRAW

    def to_dict(self):
        return {
            'id': self.id,
            'player1': self.player1,
            'player2': self.player2,
            'sets': [list(s) for s in self.sets],
            'division': self.division,
            'tournament': self.tournament,
            'had_pint': self.had_pint,
            'pints_count': self.pints_count,
            'date': self.date,
            'location': self.location,
            'time': self.time,
            'player1_games_won': self.player1_games_won,
            'player2_games_won': self.player2_games_won,
            'player1_sets_won': self.player1_sets_won,
            'player2_sets_won': self.player2_sets_won,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            player1=data.get('player1', ''),
            player2=data.get('player2', ''),
            sets=data.get('sets') or [],
            division=data.get('division', ''),
            tournament=data.get('tournament', ''),
            had_pint=data.get('had_pint', False),
            pints_count=data.get('pints_count', 1),
            date=data.get('date'),
            location=data.get('location', ''),
            time=data.get('time', ''),
            id=data.get('id'),
        )

    def __repr__(self):
        score = ', '.join(f'{s[0]}-{s[1]}' for s in self.valid_sets)
        return f"MatchResult({self.player1} vs {self.player2}: {score})"


class ScheduledMatch:
    def __init__(self, player1, player2=None, division='', tournament='', location='',
                 date='', time='', status=None, id=None):
        self.id = id or new_id()
        self.player1 = player1
        self.player2 = player2 or PENDING_PLAYER
        self.division = division
        self.tournament = tournament
        self.location = location
        self.date = date
        self.time = time
        if status is None:
            status = STATUS_CONFIRMED if player2 else STATUS_PENDING
        self.status = status

    @property
    def is_pending(self):
        return self.status == STATUS_PENDING

    @property
    def is_confirmed(self):
        return self.status == STATUS_CONFIRMED

    def involves(self, player_name):
        return player_name in (self.player1, self.player2)

    def is_between(self, player_a, player_b):
        return same_pair(self.player1, self.player2, player_a, player_b)

    def in_scope(self, division, tournament):
        return self.division == division and self.tournament == tournament

    def to_dict(self):
        return {
            'id': self.id,
            'player1': self.player1,
            'player2': self.player2,
            'division': self.division,
            'tournament': self.tournament,
            'location': self.location,
            'date': self.date,
            'time': self.time,
            'status': self.status,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            player1=data.get('player1', ''),
            player2=data.get('player2'),
            division=data.get('division', ''),
            tournament=data.get('tournament', ''),
            location=data.get('location', ''),
            date=data.get('date', ''),
            time=data.get('time', ''),
            status=data.get('status'),
            id=data.get('id'),
        )

    def __repr__(self):
        return f"ScheduledMatch({self.player1} vs {self.player2}, {self.date} {self.time}, status={self.status})"


class PlayerStats:
    """Aggregate league statistics of one player in a division and tournament.

    sets_won/sets_lost/sets_difference carry the league's "sets" label but
    are measured in games.
    """

    def __init__(self, name):
        self.name = name
        self.points = 0
        self.matches_played = 0
        self.matches_scheduled = 0
        self.matches_pending = 0
        self.matches_won = 0
        self.matches_drawn = 0
        self.matches_lost = 0
        self.sets_won = 0
        self.sets_lost = 0
        self.sets_difference = 0
        self.pints = 0

    def to_dict(self):
        return {
            'name': self.name,
            'points': self.points,
            'matches_played': self.matches_played,
            'matches_scheduled': self.matches_scheduled,
            'matches_pending': self.matches_pending,
            'matches_won': self.matches_won,
            'matches_drawn': self.matches_drawn,
            'matches_lost': self.matches_lost,
            'sets_won': self.sets_won,
            'sets_lost': self.sets_lost,
            'sets_difference': self.sets_difference,
            'pints': self.pints,
        }

    def __repr__(self):
        return f"PlayerStats(name={self.name}, points={self.points}, sets_difference={self.sets_difference})"
