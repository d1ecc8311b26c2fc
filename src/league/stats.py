"""
League statistics for a single player.

Scoring: 3 points for a match win, 1 for a draw, 0 for a loss. The match
outcome is decided on sets won, never on games.
"""
from .models import DRAW, LOSS, PlayerStats, WIN

POINTS = {WIN: 3, DRAW: 1, LOSS: 0}


def compute_stats(division, tournament, player_name, results, schedule, roster) -> PlayerStats:
    """Compute a player's statistics for a division and tournament.

    Args:
        division: Division name.
        tournament: Tournament name.
        player_name: Display name of the player.
        results: ResultRepository with the played matches.
        schedule: ScheduleRepository with the future matches.
        roster: RosterRepository, used for the round-robin size.

    Returns:
        PlayerStats. All zeros when any argument is blank or the player
        has no matches.
    """
    stats = PlayerStats(player_name or '')
    if not division or not tournament or not player_name:
        return stats

    for match in results.list(division, tournament):
        if not match.involves(player_name):
            continue
        stats.matches_played += 1

        games_won, games_lost = match.games_for(player_name)
        stats.sets_won += games_won
        stats.sets_lost += games_lost

        outcome = match.outcome_for(player_name)
        if outcome == WIN:
            stats.matches_won += 1
        elif outcome == LOSS:
            stats.matches_lost += 1
        else:
            stats.matches_drawn += 1
        stats.points += POINTS[outcome]

        if match.had_pint:
            stats.pints += match.pints_count

    stats.sets_difference = stats.sets_won - stats.sets_lost

    stats.matches_scheduled = sum(
        1 for m in schedule.list(division, tournament)
        if m.is_confirmed and m.involves(player_name)
    )

    # Round robin: everyone plays every other division player once
    opponents = len(roster.division_players(division, tournament)) - 1
    stats.matches_pending = max(0, opponents - stats.matches_played - stats.matches_scheduled)

    return stats
