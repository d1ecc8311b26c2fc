"""
League table ordering.

Players are compared pairwise: points, then sets difference, then the
head-to-head result between the two, then name. The head-to-head step makes
the comparison non-transitive (A beats B, B beats C, C beats A); the order
produced is still deterministic for a given set of results.
"""
from functools import cmp_to_key

from .models import WIN, name_sort_key
from .stats import compute_stats


def _head_to_head(matches, player_a, player_b):
    h2h_matches = [m for m in matches if m.is_between(player_a, player_b)]
    if not h2h_matches:
        return None

    wins_a = 0
    wins_b = 0
    for match in h2h_matches:
        # Anything that is not a clear win for A, draws included, counts for B
        if match.outcome_for(player_a) == WIN:
            wins_a += 1
        else:
            wins_b += 1

    return {
        'winner': player_a if wins_a > wins_b else player_b,
        'wins_a': wins_a,
        'wins_b': wins_b,
    }


def head_to_head(division, tournament, player_a, player_b, results):
    """Return the head-to-head record of two players, or None if they never met.

    Returns: {'winner': name, 'wins_a': n, 'wins_b': n}

    A draw is counted as a win for player_b, and player_b is the winner
    when the counts are level.
    """
    return _head_to_head(results.list(division, tournament), player_a, player_b)


def compare_standings(a, b, matches):
    """Compare two PlayerStats. Negative when a ranks above b."""
    if a.points != b.points:
        return b.points - a.points
    if a.sets_difference != b.sets_difference:
        return b.sets_difference - a.sets_difference

    h2h = _head_to_head(matches, a.name, b.name)
    if h2h:
        if h2h['winner'] == a.name:
            return -1
        if h2h['winner'] == b.name:
            return 1

    key_a, key_b = name_sort_key(a.name), name_sort_key(b.name)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def rank(division, tournament, results, schedule, roster):
    """Return the ordered league table (list of PlayerStats) of a division."""
    players = roster.division_players(division, tournament)
    all_stats = [
        compute_stats(division, tournament, p.name, results, schedule, roster)
        for p in players
    ]
    matches = results.list(division, tournament)
    return sorted(all_stats, key=cmp_to_key(lambda a, b: compare_standings(a, b, matches)))


def pints_leaderboard(all_stats):
    """Order players by celebratory drinks, most first. Not the league rank."""
    return sorted(all_stats, key=lambda s: -s.pints)


def top_pints_player(all_stats):
    """Return the PlayerStats with the most pints, or None for an empty division."""
    leaderboard = pints_leaderboard(all_stats)
    return leaderboard[0] if leaderboard else None


def division_summary(division, tournament, results, schedule, roster):
    """Standings plus the headline numbers shown for a division."""
    standings = rank(division, tournament, results, schedule, roster)
    top = top_pints_player(standings)
    scheduled = schedule.list(division, tournament)
    return {
        'division': division,
        'tournament': tournament,
        'standings': standings,
        'total_players': len(standings),
        'total_pints': sum(s.pints for s in standings),
        'top_pints_player': top,
        'pending_matches': [m for m in scheduled if m.is_pending],
        'confirmed_matches': [m for m in scheduled if m.is_confirmed],
    }


def tournament_summary(tournament, divisions, results, schedule, roster):
    """Summaries of every division of a tournament plus tournament-wide totals."""
    tournament_matches = results.list(tournament=tournament)
    return {
        'tournament': tournament,
        'divisions': [
            division_summary(d, tournament, results, schedule, roster) for d in divisions
        ],
        'matches_played': len(tournament_matches),
        'total_pints': sum(m.pints_count for m in tournament_matches if m.had_pint),
    }
