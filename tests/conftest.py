"""
Shared pytest fixtures for bracket tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from werkzeug.security import generate_password_hash

from bracket.models import Team
from bracket.service import BracketService
from bracket.store import TournamentStore

ADMIN_PASSWORD = 'test-admin-pass'


def make_team(team_id, name=None, paid=False):
    """Build an in-memory team without going through the store."""
    return Team(
        id=team_id,
        team_name=name or f"T{team_id}",
        player1_pseudo=f"p{team_id}a",
        player2_pseudo=f"p{team_id}b",
        player1_email=f"p{team_id}a@example.com",
        player2_email=f"p{team_id}b@example.com",
        player1_whatsapp="0102030405",
        player2_whatsapp="0102030406",
        paid=paid,
        created_at=f"2026-03-01T10:{team_id:02d}:00",
    )


def registration_payload(team_name):
    """A valid public registration submission."""
    slug = team_name.lower().replace(' ', '')
    return {
        'team_name': team_name,
        'player1_pseudo': f'{slug}_one',
        'player1_email': f'{slug}.one@example.com',
        'player1_whatsapp': '+22501020304',
        'player2_pseudo': f'{slug}_two',
        'player2_email': f'{slug}.two@example.com',
        'player2_whatsapp': '+22501020305',
    }


@pytest.fixture
def make_teams():
    """Factory for T1..Tn in registration order."""
    def _make(n):
        return [make_team(i) for i in range(1, n + 1)]
    return _make


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return str(path)


@pytest.fixture
def store(data_dir):
    return TournamentStore(data_dir)


@pytest.fixture
def service(store):
    return BracketService(store)


@pytest.fixture
def register_teams(service):
    """Register teams named Team 1..Team n through the service and return them."""
    def _register(n, start=1):
        return [service.register_team(registration_payload(f"Team {i}")) for i in range(start, start + n)]
    return _register


@pytest.fixture
def app_env(data_dir, monkeypatch):
    """Point the Flask app at a temporary data directory with a known admin password."""
    import app as app_module
    monkeypatch.setattr(app_module, 'DATA_DIR', data_dir)
    monkeypatch.setattr(app_module, 'ADMIN_PASSWORD_HASH', generate_password_hash(ADMIN_PASSWORD))
    return app_module


@pytest.fixture
def client(app_env):
    """Create a test client."""
    app = app_env.app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def admin_headers(client):
    """Authorization header carrying a freshly issued admin token."""
    response = client.post('/api/admin/login', json={'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    return {'Authorization': f"Bearer {response.get_json()['token']}"}
