"""
Flask web application for the duo tournament bracket.
"""
import os
import logging
from functools import wraps

import yaml
from flask import Flask, request, jsonify, g

from bracket.auth import AdminAuth, DEFAULT_TOKEN_MAX_AGE
from bracket.errors import BracketError, StorageError, ValidationError
from bracket.pools import MAX_TEAMS
from bracket.service import BracketService
from bracket.store import TournamentStore

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('TOURNAMENT_DATA_DIR', os.path.join(BASE_DIR, 'data'))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
app.logger.setLevel(LOG_LEVEL)


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


def _get_admin_password_hash():
    """Admin password hash from env; a plain ADMIN_PASSWORD is hashed on load."""
    password_hash = os.environ.get('ADMIN_PASSWORD_HASH')
    if password_hash:
        return password_hash
    password = os.environ.get('ADMIN_PASSWORD')
    if password:
        from werkzeug.security import generate_password_hash
        return generate_password_hash(password)
    return None


app.secret_key = _get_or_create_secret_key()

ADMIN_PASSWORD_HASH = _get_admin_password_hash()
ADMIN_TOKEN_MAX_AGE = int(os.environ.get('ADMIN_TOKEN_MAX_AGE', DEFAULT_TOKEN_MAX_AGE))

if not ADMIN_PASSWORD_HASH:
    app.logger.warning('No ADMIN_PASSWORD_HASH or ADMIN_PASSWORD configured; admin login is disabled')

DEFAULT_SETTINGS = {
    'tournament_name': 'The Call of the Coders',
    'registration_message': 'Registration successful! You will be added to the players group for payment.',
}


def load_settings() -> dict:
    """Load tournament settings from YAML file, merged over defaults."""
    path = os.path.join(DATA_DIR, 'settings.yaml')
    if not os.path.exists(path):
        return dict(DEFAULT_SETTINGS)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        app.logger.warning(f'Failed to parse {path}: {e}')
        return dict(DEFAULT_SETTINGS)
    if not isinstance(data, dict):
        return dict(DEFAULT_SETTINGS)
    return {**DEFAULT_SETTINGS, **data}


def get_service() -> BracketService:
    """Service bound to the current data directory."""
    return BracketService(TournamentStore(DATA_DIR, max_teams=MAX_TEAMS))


def get_admin_auth() -> AdminAuth:
    return AdminAuth(app.secret_key, ADMIN_PASSWORD_HASH, ADMIN_TOKEN_MAX_AGE)


def admin_required(f):
    """Require a valid admin token in the Authorization header."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization', '')
        if not auth_header.startswith('Bearer '):
            app.logger.warning(f'Admin request without token: {request.method} {request.path}')
            return jsonify({'success': False, 'error': 'Missing or invalid Authorization header'}), 401

        token = auth_header[7:]  # Strip "Bearer "
        g.is_admin = get_admin_auth().verify_token(token)
        if not g.is_admin:
            app.logger.warning(f'Admin request with invalid token: {request.method} {request.path}')
            return jsonify({'success': False, 'error': 'Unauthorized'}), 401

        return f(*args, **kwargs)
    return decorated_function


@app.errorhandler(BracketError)
def handle_bracket_error(e):
    if isinstance(e, StorageError):
        app.logger.error(f'Storage failure on {request.method} {request.path}: {e}', exc_info=e)
    return jsonify(e.to_dict()), e.status_code


def _team_json(team, private=False):
    if team is None:
        return None
    return team.to_dict() if private else team.to_public_dict()


def _match_json(match):
    return {
        'match_id': match['match_id'],
        'round': match['round'],
        'block': match['block'],
        'team1': _team_json(match['team1']),
        'team2': _team_json(match['team2']),
        'labels': list(match['labels']),
        'winner': _team_json(match['winner']),
    }


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object.')
    return data


def _team_id_from(data) -> int:
    team_id = data.get('team_id')
    if isinstance(team_id, bool) or not isinstance(team_id, int):
        raise ValidationError('team_id must be an integer.')
    return team_id


# Public routes

@app.route('/api/settings')
def api_settings():
    settings = load_settings()
    return jsonify({
        'tournament_name': settings.get('tournament_name'),
        'max_teams': MAX_TEAMS,
    })


@app.route('/api/register', methods=['POST'])
def api_register():
    """Public team registration."""
    team = get_service().register_team(_json_body())
    app.logger.info(f'New registration: {team.team_name} (id {team.id})')
    return jsonify({
        'success': True,
        'message': load_settings().get('registration_message'),
        'team': _team_json(team),
    })


@app.route('/api/registrations')
def api_registrations():
    teams = get_service().list_teams()
    return jsonify([_team_json(t) for t in teams])


@app.route('/api/pools')
def api_pools():
    pools = get_service().get_pools()
    return jsonify({'pools': {name: [_team_json(t) for t in teams] for name, teams in pools.items()}})


@app.route('/api/matches')
def api_matches():
    return jsonify({'winners': get_service().get_winners()})


@app.route('/api/bracket')
def api_bracket():
    """Whole bracket, resolved from the current roster and recorded winners."""
    bracket = get_service().get_bracket()
    return jsonify({
        'pools': {name: [_team_json(t) for t in teams] for name, teams in bracket['pools'].items()},
        'rounds': {name: [_match_json(m) for m in matches] for name, matches in bracket['rounds'].items()},
        'block_champions': {block: _team_json(t) for block, t in bracket['block_champions'].items()},
        'champion': _team_json(bracket['champion']),
    })


@app.route('/api/bracket/<match_id>')
def api_bracket_match(match_id):
    return jsonify(_match_json(get_service().resolve_match(match_id)))


@app.route('/api/champion')
def api_champion():
    return jsonify({'champion': _team_json(get_service().get_champion())})


# Admin routes

@app.route('/api/admin/login', methods=['POST'])
def api_admin_login():
    """Exchange the admin password for a signed, time-limited token."""
    password = _json_body().get('password', '')
    auth = get_admin_auth()
    if not auth.enabled:
        return jsonify({'success': False, 'error': 'Admin access is not configured'}), 500
    if not isinstance(password, str) or not auth.check_password(password):
        app.logger.warning(f'Failed admin login from {request.remote_addr}')
        return jsonify({'success': False, 'error': 'Invalid password'}), 401
    app.logger.info('Admin login')
    return jsonify({'success': True, 'token': auth.issue_token(), 'expires_in': auth.max_age})


@app.route('/api/admin/registrations')
@admin_required
def api_admin_registrations():
    teams = get_service().list_teams()
    return jsonify([_team_json(t, private=True) for t in teams])


@app.route('/api/admin/unpaid-teams')
@admin_required
def api_unpaid_teams():
    """Get list of unpaid teams with their contact details."""
    teams = get_service().get_unpaid_teams(g.is_admin)
    return jsonify({'success': True, 'unpaid_teams': [_team_json(t, private=True) for t in teams]})


@app.route('/api/admin/teams/<int:team_id>/paid', methods=['PATCH'])
@admin_required
def api_set_paid(team_id):
    paid = _json_body().get('paid')
    if not isinstance(paid, bool):
        raise ValidationError('paid must be true or false.')
    team = get_service().set_paid(g.is_admin, team_id, paid)
    app.logger.info(f'Team {team_id} marked {"paid" if paid else "unpaid"}')
    return jsonify({'success': True, 'paid': team.paid})


@app.route('/api/admin/teams/<int:team_id>', methods=['DELETE'])
@admin_required
def api_delete_team(team_id):
    get_service().delete_team(g.is_admin, team_id)
    return jsonify({'success': True})


@app.route('/api/admin/matches', methods=['POST'])
@admin_required
def api_record_winner():
    """Record the winner of a bracket match (replaces any previous winner)."""
    data = _json_body()
    match_id = data.get('match_id')
    if not isinstance(match_id, str) or not match_id:
        raise ValidationError('match_id is required.')
    team = get_service().record_winner(g.is_admin, match_id, _team_id_from(data))
    return jsonify({'success': True, 'match_id': match_id, 'winner': _team_json(team)})


@app.route('/api/admin/matches', methods=['DELETE'])
@admin_required
def api_clear_winners():
    """Reset the bracket by erasing every recorded winner."""
    get_service().clear_winners(g.is_admin)
    app.logger.info('Bracket reset')
    return jsonify({'success': True})


if __name__ == '__main__':
    app.run(debug=True, port=5000)
