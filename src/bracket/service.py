"""
Operations exposed to the HTTP layer and the admin gate in front of mutations.

Every mutating call takes an is_admin flag that the transport layer has
already verified; the service refuses the call when it is False.
"""
from typing import Dict, List, Optional

from . import resolver
from .errors import NotFound, Unauthorized, ValidationError
from .matches import is_valid_match
from .models import Team
from .pools import pools_by_name
from .registration import validate_registration
from .store import TournamentStore


def require_admin(is_admin: bool):
    if is_admin is not True:
        raise Unauthorized('Unauthorized')


class BracketService:
    def __init__(self, store: TournamentStore):
        self.store = store

    # Reads

    def list_teams(self) -> List[Team]:
        return self.store.list_teams()

    def get_pools(self) -> Dict[str, List[Team]]:
        return pools_by_name(self.store.list_teams())

    def get_winners(self) -> Dict[str, int]:
        return self.store.list_winners()

    def resolve_match(self, match_id: str) -> Dict:
        if not is_valid_match(match_id):
            raise NotFound(f'Unknown match "{match_id}".')
        return resolver.resolve_match(match_id, self.store.list_teams(), self.store.list_winners())

    def get_bracket(self) -> Dict:
        return resolver.get_bracket_display(self.store.list_teams(), self.store.list_winners())

    def get_champion(self) -> Optional[Team]:
        return resolver.get_champion(self.store.list_teams(), self.store.list_winners())

    def get_block_champion(self, block: str) -> Optional[Team]:
        return resolver.get_block_champion(block, self.store.list_teams(), self.store.list_winners())

    def get_unpaid_teams(self, is_admin: bool) -> List[Team]:
        require_admin(is_admin)
        return [t for t in self.store.list_teams() if not t.paid]

    # Mutations

    def register_team(self, data) -> Team:
        """Public registration. Validation and the capacity cap apply; no admin needed."""
        return self.store.insert_team(validate_registration(data))

    def set_paid(self, is_admin: bool, team_id: int, paid: bool) -> Team:
        require_admin(is_admin)
        return self.store.set_paid(team_id, paid)

    def delete_team(self, is_admin: bool, team_id: int):
        require_admin(is_admin)
        self.store.delete_team(team_id)

    def record_winner(self, is_admin: bool, match_id: str, team_id: int) -> Team:
        """
        Designate the winner of a match.

        The team must currently occupy one of the match's resolved sides;
        anything else is rejected, so winners cannot be recorded for
        slots that are still undetermined.
        """
        require_admin(is_admin)
        if not is_valid_match(match_id):
            raise NotFound(f'Unknown match "{match_id}".')
        if isinstance(team_id, bool) or not isinstance(team_id, int):
            raise ValidationError('team_id must be an integer.')
        teams = self.store.list_teams()
        if not any(t.id == team_id for t in teams):
            raise ValidationError(f'Team {team_id} does not exist.')
        match = resolver.resolve_match(match_id, teams, self.store.list_winners())
        sides = [t for t in (match['team1'], match['team2']) if t is not None]
        for team in sides:
            if team.id == team_id:
                self.store.upsert_winner(match_id, team_id)
                return team
        raise ValidationError(f'Team {team_id} is not playing in {match_id}.')

    def clear_winners(self, is_admin: bool):
        require_admin(is_admin)
        self.store.clear_winners()
