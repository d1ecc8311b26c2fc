"""
Text renderings of the confirmed schedule of a tournament, for pasting into
chats or documents.
"""
DEFAULT_LEAGUE_NAME = 'Pinta Post Championship'

DATE_WIDTH = 10
TIME_WIDTH = 10
PLAYERS_WIDTH = 30
DIVISION_WIDTH = 10
LOCATION_WIDTH = 20

TITLE_RULE = '=' * 47


def _confirmed_for_tournament(scheduled, tournament):
    matches = [m for m in scheduled if m.tournament == tournament and m.is_confirmed]
    return sorted(matches, key=lambda m: m.date)


def _short_time(time_slot):
    """'Morning (07:00-12:00)' -> 'Morning'."""
    return (time_slot or '').split('(')[0].strip()


def format_schedule_row(match):
    """One fixed-width, pipe-delimited table row."""
    players = f'{match.player1} vs {match.player2}'
    return (f'| {match.date.ljust(DATE_WIDTH)} '
            f'| {_short_time(match.time).ljust(TIME_WIDTH)} '
            f'| {players.ljust(PLAYERS_WIDTH)} '
            f'| {match.division.ljust(DIVISION_WIDTH)} '
            f'| {match.location.ljust(LOCATION_WIDTH)} |')


def format_schedule_table(scheduled, tournament, league_name=DEFAULT_LEAGUE_NAME):
    """Render confirmed matches of a tournament as a table, earliest first.

    Returns None when the tournament has no confirmed matches.
    """
    matches = _confirmed_for_tournament(scheduled, tournament)
    if not matches:
        return None

    title = f'{league_name} - Partidos Programados'
    lines = [title, TITLE_RULE]
    lines.extend(format_schedule_row(m) for m in matches)
    lines.append('')
    lines.append(f'Copied from {league_name} Tennis League')
    return '\n'.join(lines)


def format_share_message(scheduled, tournament, league_name=DEFAULT_LEAGUE_NAME):
    """Render confirmed matches as a plain message, one block per match.

    Returns None when the tournament has no confirmed matches.
    """
    matches = _confirmed_for_tournament(scheduled, tournament)
    if not matches:
        return None

    blocks = []
    for match in matches:
        blocks.append('\n'.join([
            f'{match.division} Div',
            f'{match.date} - {match.player1} vs {match.player2}',
            f'L: {match.location} | H: {match.time}',
        ]))
    return f'{league_name} - Partidos Programados:\n\n' + '\n\n'.join(blocks)
