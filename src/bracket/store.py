"""
YAML-backed storage for team registrations and recorded match winners.

Layout of the data directory:
    registrations.yaml   {next_id: int, teams: [team dicts]}
    winners.yaml         {winners: {match_id: team_id}}
    .lock                file lock serializing every write

Reads always go to disk so callers see a fresh snapshot.
"""
import logging
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, List, Optional

import yaml
from filelock import FileLock, Timeout

from .errors import CapacityExceeded, NotFound, StorageError, ValidationError
from .models import Team
from .pools import MAX_TEAMS

logger = logging.getLogger(__name__)


class TournamentStore:
    def __init__(self, data_dir: str, max_teams: int = MAX_TEAMS, lock_timeout: float = 10):
        self.data_dir = data_dir
        self.max_teams = max_teams
        self.registrations_file = os.path.join(data_dir, 'registrations.yaml')
        self.winners_file = os.path.join(data_dir, 'winners.yaml')
        os.makedirs(data_dir, exist_ok=True)
        self._lock = FileLock(os.path.join(data_dir, '.lock'), timeout=lock_timeout)

    @contextmanager
    def _locked(self):
        try:
            with self._lock:
                yield
        except Timeout:
            logger.error(f'Timed out waiting for data lock in {self.data_dir}')
            raise StorageError('Data store is busy, try again.')

    def _read_yaml(self, path: str) -> dict:
        if not os.path.exists(path):
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f'Failed to read {path}: {e}')
            raise StorageError('Failed to read tournament data.')
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.error(f'Unexpected content in {path}: expected a mapping')
            raise StorageError('Failed to read tournament data.')
        return data

    def _write_yaml(self, path: str, data: dict):
        # Write to a temp file then rename so readers never see a partial file.
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, suffix='.tmp')
        except OSError as e:
            logger.error(f'Failed to write {path}: {e}')
            raise StorageError('Failed to save tournament data.')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False)
            os.replace(tmp_path, path)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f'Failed to write {path}: {e}')
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError('Failed to save tournament data.')


    def _load_registrations(self) -> dict:
        data = self._read_yaml(self.registrations_file)
        teams = data.get('teams') or []
        next_id = data.get('next_id')
        if next_id is None:
            next_id = max((t['id'] for t in teams), default=0) + 1
        return {'next_id': next_id, 'teams': teams}

    # Teams

    def list_teams(self) -> List[Team]:
        """All teams in creation order. Ids are allocated under the lock, so id order is creation order."""
        teams = [Team.from_dict(t) for t in self._load_registrations()['teams']]
        teams.sort(key=lambda t: t.id)
        return teams

    def count_teams(self) -> int:
        return len(self._load_registrations()['teams'])

    def get_team(self, team_id: int) -> Optional[Team]:
        for team in self.list_teams():
            if team.id == team_id:
                return team
        return None

    def insert_team(self, fields: Dict[str, str]) -> Team:
        """
        Register a new team.

        The capacity check, the duplicate-name check and the write all
        happen under the data lock, so concurrent registrations cannot
        push the roster past max_teams.
        """
        with self._locked():
            data = self._load_registrations()
            if len(data['teams']) >= self.max_teams:
                raise CapacityExceeded(f'Tournament is full! (Max {self.max_teams} teams)')
            name = fields['team_name'].strip().lower()
            if any(t['team_name'].strip().lower() == name for t in data['teams']):
                raise ValidationError('This team name is already registered.',
                                      details={'team_name': 'Already registered.'})
            team = Team(id=data['next_id'], created_at=datetime.now().isoformat(), paid=False, **fields)
            data['teams'].append(team.to_dict())
            data['next_id'] += 1
            self._write_yaml(self.registrations_file, data)
        logger.info(f'Registered team {team.id} "{team.team_name}"')
        return team

    def set_paid(self, team_id: int, paid: bool) -> Team:
        with self._locked():
            data = self._load_registrations()
            for entry in data['teams']:
                if entry['id'] == team_id:
                    entry['paid'] = bool(paid)
                    self._write_yaml(self.registrations_file, data)
                    return Team.from_dict(entry)
        raise NotFound(f'Team {team_id} not found.')

    def delete_team(self, team_id: int):
        """Remove a team. Winner records pointing at it are kept; resolution ignores them."""
        with self._locked():
            data = self._load_registrations()
            remaining = [t for t in data['teams'] if t['id'] != team_id]
            if len(remaining) == len(data['teams']):
                raise NotFound(f'Team {team_id} not found.')
            data['teams'] = remaining
            self._write_yaml(self.registrations_file, data)
        logger.info(f'Deleted team {team_id}')

    # Winners

    def list_winners(self) -> Dict[str, int]:
        return dict(self._read_yaml(self.winners_file).get('winners') or {})

    def upsert_winner(self, match_id: str, team_id: int):
        """Record (or replace) the winner of a match. The team must exist."""
        with self._locked():
            team_ids = {t['id'] for t in self._load_registrations()['teams']}
            if team_id not in team_ids:
                raise ValidationError(f'Team {team_id} does not exist.')
            winners = self.list_winners()
            winners[match_id] = team_id
            self._write_yaml(self.winners_file, {'winners': winners})
        logger.info(f'Recorded winner {team_id} for {match_id}')

    def clear_winners(self):
        with self._locked():
            self._write_yaml(self.winners_file, {'winners': {}})
        logger.info('Cleared all match winners')
