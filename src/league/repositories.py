"""Repositories for results, scheduled matches and the player roster."""
from typing import List, Optional

from .models import (
    MatchResult, OPEN_STATUSES, Player, STATUS_CONFIRMED, ScheduledMatch, name_sort_key,
)
from .store import MATCHES, SCHEDULED, USERS


class ResultRepository:
    """Played matches. Append-only."""

    def __init__(self, store):
        self.store = store

    def list(self, division=None, tournament=None) -> List[MatchResult]:
        results = [MatchResult.from_dict(d) for d in self.store.load(MATCHES)]
        if division is not None:
            results = [m for m in results if m.division == division]
        if tournament is not None:
            results = [m for m in results if m.tournament == tournament]
        return results

    def add(self, match: MatchResult) -> MatchResult:
        with self.store.locked():
            items = self.store.load(MATCHES)
            items.append(match.to_dict())
            self.store.save(MATCHES, items)
        return match


class ScheduleRepository:
    """Future matches, pending or confirmed."""

    def __init__(self, store):
        self.store = store

    def list(self, division=None, tournament=None, status=None) -> List[ScheduledMatch]:
        matches = [ScheduledMatch.from_dict(d) for d in self.store.load(SCHEDULED)]
        if division is not None:
            matches = [m for m in matches if m.division == division]
        if tournament is not None:
            matches = [m for m in matches if m.tournament == tournament]
        if status is not None:
            matches = [m for m in matches if m.status == status]
        return matches

    def get(self, match_id) -> Optional[ScheduledMatch]:
        for data in self.store.load(SCHEDULED):
            if data.get('id') == match_id:
                return ScheduledMatch.from_dict(data)
        return None

    def find_open(self, division, tournament, player_a, player_b) -> Optional[ScheduledMatch]:
        """Return the pending or confirmed match between two players, if any."""
        for match in self.list(division, tournament):
            if match.status in OPEN_STATUSES and match.is_between(player_a, player_b):
                return match
        return None

    def add(self, match: ScheduledMatch) -> ScheduledMatch:
        with self.store.locked():
            items = self.store.load(SCHEDULED)
            items.append(match.to_dict())
            self.store.save(SCHEDULED, items)
        return match

    def remove_pair(self, division, tournament, player_a, player_b) -> List[ScheduledMatch]:
        """Remove every entry for the unordered pair in the division and tournament.

        Returns the removed matches.
        """
        with self.store.locked():
            kept, removed = [], []
            for data in self.store.load(SCHEDULED):
                match = ScheduledMatch.from_dict(data)
                if match.in_scope(division, tournament) and match.is_between(player_a, player_b):
                    removed.append(match)
                else:
                    kept.append(data)
            if removed:
                self.store.save(SCHEDULED, kept)
        return removed

    def confirm(self, match_id, player2, expected_status) -> Optional[ScheduledMatch]:
        """Set player2 and confirm the match if its status is still expected_status.

        Returns the updated match, or None when the match is gone or its
        status changed in the meantime.
        """
        with self.store.locked():
            items = self.store.load(SCHEDULED)
            for data in items:
                if data.get('id') != match_id:
                    continue
                if data.get('status') != expected_status:
                    return None
                data['player2'] = player2
                data['status'] = STATUS_CONFIRMED
                self.store.save(SCHEDULED, items)
                return ScheduledMatch.from_dict(data)
        return None


class RosterRepository:
    """Registered players."""

    def __init__(self, store):
        self.store = store

    def list(self) -> List[Player]:
        return [Player.from_dict(d) for d in self.store.load(USERS)]

    def get(self, player_id) -> Optional[Player]:
        for player in self.list():
            if player.id == player_id:
                return player
        return None

    def find_by_email(self, email) -> Optional[Player]:
        email = (email or '').strip().lower()
        for player in self.list():
            if player.email.strip().lower() == email:
                return player
        return None

    def find_by_name(self, name) -> Optional[Player]:
        for player in self.list():
            if player.name == name:
                return player
        return None

    def division_players(self, division, tournament) -> List[Player]:
        """Active players of a division for a tournament, sorted by name."""
        if not division or not tournament:
            return []
        players = [p for p in self.list() if p.plays_in(division, tournament)]
        return sorted(players, key=lambda p: name_sort_key(p.name))

    def add(self, player: Player) -> Player:
        with self.store.locked():
            items = self.store.load(USERS)
            items.append(player.to_dict())
            self.store.save(USERS, items)
        return player
