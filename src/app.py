"""
Flask web application for the tennis league.

Thin JSON layer over the league engine: every route loads the repositories
from the data directory, calls one engine operation and returns the result.
"""
import os
import logging
from datetime import timedelta
from functools import wraps
from flask import Flask, request, jsonify, session, g
from werkzeug.security import generate_password_hash, check_password_hash
from league.exceptions import LeagueError, MatchNotFoundError, ValidationError
from league.export import DEFAULT_LEAGUE_NAME, format_schedule_table, format_share_message
from league.lifecycle import MatchLifecycleManager
from league.models import Player, ROLE_ADMIN
from league.ranking import division_summary, tournament_summary
from league.reference import load_tournaments, all_divisions
from league.registration import register_player
from league.repositories import ResultRepository, ScheduleRepository, RosterRepository
from league.stats import compute_stats
from league.store import YamlStore

app = Flask(__name__)
app.logger.setLevel(logging.INFO)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('LEAGUE_DATA_DIR', os.path.join(BASE_DIR, 'data'))
LEAGUE_NAME = os.environ.get('LEAGUE_NAME', DEFAULT_LEAGUE_NAME)
ADMIN_EMAIL = os.environ.get('LEAGUE_ADMIN_EMAIL', 'admin@ppc.com')
ADMIN_PASSWORD = os.environ.get('LEAGUE_ADMIN_PASSWORD', 'admin123')


def _get_or_create_secret_key() -> bytes:
    """Get SECRET_KEY from env, or generate and persist to file."""
    env_key = os.environ.get('SECRET_KEY')
    if env_key:
        return env_key.encode() if isinstance(env_key, str) else env_key
    key_file = os.path.join(DATA_DIR, '.secret_key')
    if os.path.exists(key_file):
        with open(key_file, 'rb') as f:
            return f.read()
    key = os.urandom(24)
    os.makedirs(os.path.dirname(key_file), exist_ok=True)
    with open(key_file, 'wb') as f:
        f.write(key)
    return key


app.secret_key = _get_or_create_secret_key()
app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(days=3650)


def get_repositories():
    """Return (results, schedule, roster) for the current request's data directory."""
    if 'repositories' not in g:
        store = YamlStore(DATA_DIR)
        g.repositories = (ResultRepository(store), ScheduleRepository(store), RosterRepository(store))
    return g.repositories


def get_lifecycle_manager() -> MatchLifecycleManager:
    results, schedule, roster = get_repositories()
    return MatchLifecycleManager(results, schedule, roster)


def get_catalogue() -> dict:
    return load_tournaments(DATA_DIR)


def ensure_admin_user(roster):
    """Seed the admin account when the roster is empty."""
    if roster.list():
        return
    admin = Player(
        name='Admin User',
        email=ADMIN_EMAIL,
        password_hash=generate_password_hash(ADMIN_PASSWORD),
        role=ROLE_ADMIN,
    )
    roster.add(admin)
    app.logger.info(f'Created admin account {ADMIN_EMAIL}')


def authenticate_player(email: str, password: str):
    """Check email/password. Returns the Player, or None if invalid."""
    _, _, roster = get_repositories()
    player = roster.find_by_email(email)
    if player and player.password_hash and check_password_hash(player.password_hash, password):
        return player
    return None


def current_player():
    """The logged-in Player, or None."""
    player_id = session.get('user')
    if not player_id:
        return None
    _, _, roster = get_repositories()
    return roster.get(player_id)


def login_required(f):
    """Reject the request if no player is logged in."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_player() is None:
            return jsonify({'success': False, 'error': 'Login required'}), 401
        return f(*args, **kwargs)
    return decorated_function


@app.before_request
def prepare_data():
    """Make sure the data directory and the admin account exist."""
    os.makedirs(DATA_DIR, exist_ok=True)
    _, _, roster = get_repositories()
    ensure_admin_user(roster)


@app.errorhandler(LeagueError)
def handle_league_error(e):
    status = 404 if isinstance(e, MatchNotFoundError) else 400
    return jsonify({'success': False, 'error': str(e)}), status


def _scope_args():
    return request.args.get('division', '').strip(), request.args.get('tournament', '').strip()


def _summary_to_json(summary):
    top = summary['top_pints_player']
    return {
        'division': summary['division'],
        'tournament': summary['tournament'],
        'standings': [s.to_dict() for s in summary['standings']],
        'total_players': summary['total_players'],
        'total_pints': summary['total_pints'],
        'top_pints_player': top.to_dict() if top else None,
        'pending_matches': [m.to_dict() for m in summary['pending_matches']],
        'confirmed_matches': [m.to_dict() for m in summary['confirmed_matches']],
    }


@app.route('/login', methods=['POST'])
def login():
    """Log a player in with email and password."""
    data = request.get_json(silent=True) or {}
    player = authenticate_player(data.get('email', ''), data.get('password', ''))
    if player is None:
        return jsonify({'success': False, 'error': 'Invalid credentials!'}), 401
    session['user'] = player.id
    session.permanent = True
    return jsonify({'success': True, 'player': player.to_public_dict()})


@app.route('/register', methods=['POST'])
def register():
    """Register a new player and log them in."""
    data = request.get_json(silent=True) or {}
    password = data.get('password', '')
    tournaments = data.get('tournaments') or []
    if isinstance(tournaments, str):
        tournaments = [tournaments]

    player = Player(
        name=data.get('name', ''),
        email=data.get('email', ''),
        password_hash=generate_password_hash(password) if password else '',
        division=data.get('division', ''),
        tournaments=tournaments,
        availability=data.get('availability') or {},
        locations=data.get('locations') or [],
    )
    _, _, roster = get_repositories()
    register_player(roster, player, get_catalogue())

    session['user'] = player.id
    session.permanent = True
    return jsonify({'success': True, 'player': player.to_public_dict()}), 201


@app.route('/logout', methods=['POST'])
def logout():
    """Clear the session."""
    session.clear()
    return jsonify({'success': True})


@app.route('/api/tournaments')
@login_required
def api_tournaments():
    """Tournament catalogue with the divisions of each tournament."""
    catalogue = get_catalogue()
    return jsonify({'tournaments': catalogue, 'divisions': all_divisions(catalogue)})


@app.route('/api/standings')
@login_required
def api_standings():
    """Ranked table and headline numbers of one division."""
    division, tournament = _scope_args()
    if not division or not tournament:
        raise ValidationError('Tournament and division are required')
    results, schedule, roster = get_repositories()
    summary = division_summary(division, tournament, results, schedule, roster)
    return jsonify(_summary_to_json(summary))


@app.route('/api/tournament-summary')
@login_required
def api_tournament_summary():
    """Standings of every division of a tournament."""
    tournament = request.args.get('tournament', '').strip()
    catalogue = get_catalogue()
    if tournament not in catalogue:
        raise ValidationError(f'Unknown tournament: {tournament}')
    results, schedule, roster = get_repositories()
    summary = tournament_summary(tournament, catalogue[tournament], results, schedule, roster)
    return jsonify({
        'tournament': summary['tournament'],
        'matches_played': summary['matches_played'],
        'total_pints': summary['total_pints'],
        'divisions': [_summary_to_json(d) for d in summary['divisions']],
    })


@app.route('/api/players/stats')
@login_required
def api_player_stats():
    """Statistics and matches of one player. Defaults to the logged-in player."""
    division, tournament = _scope_args()
    player_name = request.args.get('player', '').strip() or current_player().name
    results, schedule, roster = get_repositories()
    stats = compute_stats(division, tournament, player_name, results, schedule, roster)
    matches = get_lifecycle_manager().player_matches(division, tournament, player_name)
    return jsonify({
        'stats': stats.to_dict(),
        'played': [m.to_dict() for m in matches['played']],
        'scheduled': [m.to_dict() for m in matches['scheduled']],
        'upcoming': matches['upcoming'],
    })


@app.route('/api/results', methods=['POST'])
@login_required
def api_record_result():
    """Record a played match. Removes the matching scheduled entries."""
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError('No data provided')
    match = get_lifecycle_manager().record_result(data)
    return jsonify({'success': True, 'match': match.to_dict()}), 201


@app.route('/api/schedule', methods=['POST'])
@login_required
def api_schedule_match():
    """Schedule a match. Without player2 it stays open for anyone to join."""
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError('No data provided')
    match = get_lifecycle_manager().schedule_match(data)
    return jsonify({'success': True, 'match': match.to_dict()}), 201


@app.route('/api/schedule/<match_id>/join', methods=['POST'])
@login_required
def api_join_match(match_id):
    """Join a pending match as the logged-in player."""
    match = get_lifecycle_manager().join_pending_match(match_id, current_player().name)
    return jsonify({'success': True, 'match': match.to_dict()})


@app.route('/api/schedule/export')
@login_required
def api_export_schedule():
    """Confirmed matches of a tournament as a text table or a share message."""
    tournament = request.args.get('tournament', '').strip()
    if not tournament:
        raise ValidationError('Please select a tournament first')
    _, schedule, _ = get_repositories()
    scheduled = schedule.list(tournament=tournament)
    if request.args.get('format', 'table') == 'message':
        text = format_share_message(scheduled, tournament, league_name=LEAGUE_NAME)
    else:
        text = format_schedule_table(scheduled, tournament, league_name=LEAGUE_NAME)
    if text is None:
        return jsonify({'success': False, 'error': 'No scheduled matches to copy'}), 404
    return jsonify({'success': True, 'text': text})


if __name__ == '__main__':
    app.run(debug=True)
