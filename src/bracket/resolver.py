"""
Read-time resolution of the bracket from the roster and recorded winners.

Everything here is a pure function of (creation-ordered teams, winner map).
Nothing is cached between calls and nothing raises for missing data: a
slot that cannot be filled yet resolves to None.
"""
from typing import Dict, List, Mapping, Optional, Sequence

from .matches import (BLOCKS, GRAND_FINAL, all_match_ids, block_final, get_block,
                      get_round_name, get_source_label, get_sources)
from .models import Team
from .pools import POOL_NAMES, get_pool_slot, partition_pools


def _resolve_source(source, pools: List[List[Team]], teams_by_id: Dict[int, Team],
                    winners: Mapping[str, int]) -> Optional[Team]:
    if source[0] == 'pool':
        return get_pool_slot(pools, source[1], source[2])
    return _match_winner(source[1], pools, teams_by_id, winners)


def _match_sides(match_id, pools, teams_by_id, winners):
    sources = get_sources(match_id)
    if sources is None:
        return None, None
    return tuple(_resolve_source(s, pools, teams_by_id, winners) for s in sources)


def _match_winner(match_id, pools, teams_by_id, winners) -> Optional[Team]:
    winner_id = winners.get(match_id)
    if winner_id is None:
        return None
    # A recorded winner only counts while it still occupies one of the sides.
    for team in _match_sides(match_id, pools, teams_by_id, winners):
        if team is not None and team.id == winner_id:
            return team
    return None


def _context(teams: Sequence[Team]):
    return partition_pools(teams), {t.id: t for t in teams}


def resolve_slot(match_id: str, side: int, teams: Sequence[Team],
                 winners: Mapping[str, int]) -> Optional[Team]:
    """
    Return the team occupying one side (0 or 1) of a match.

    Quarterfinal sides come from pool positions. Later sides are the
    recorded winner of the feeding match; a team is never advanced
    unless an admin recorded it, even when its predecessor has both
    sides filled.
    """
    if side not in (0, 1):
        return None
    pools, teams_by_id = _context(teams)
    return _match_sides(match_id, pools, teams_by_id, winners)[side]


def resolve_match(match_id: str, teams: Sequence[Team], winners: Mapping[str, int]) -> Dict:
    """
    Resolve both sides and the winner of a match.

    Returns dict with:
    - match_id, round, block
    - team1, team2: Team or None
    - labels: placeholder text for each side
    - winner: Team or None
    """
    pools, teams_by_id = _context(teams)
    return _resolve_match(match_id, pools, teams_by_id, winners)


def _resolve_match(match_id, pools, teams_by_id, winners) -> Dict:
    sources = get_sources(match_id) or ()
    team1, team2 = _match_sides(match_id, pools, teams_by_id, winners)
    return {
        'match_id': match_id,
        'round': get_round_name(match_id),
        'block': get_block(match_id),
        'team1': team1,
        'team2': team2,
        'labels': tuple(get_source_label(s) for s in sources),
        'winner': _match_winner(match_id, pools, teams_by_id, winners),
    }


def get_block_champion(block: str, teams: Sequence[Team], winners: Mapping[str, int]) -> Optional[Team]:
    """Winner of a block final, or None while it is undecided."""
    if block not in BLOCKS:
        return None
    pools, teams_by_id = _context(teams)
    return _match_winner(block_final(block), pools, teams_by_id, winners)


def get_champion(teams: Sequence[Team], winners: Mapping[str, int]) -> Optional[Team]:
    """Tournament champion: the resolved winner of the grand final."""
    pools, teams_by_id = _context(teams)
    return _match_winner(GRAND_FINAL, pools, teams_by_id, winners)


def get_bracket_display(teams: Sequence[Team], winners: Mapping[str, int]) -> Dict:
    """
    Get bracket data formatted for UI display.

    Returns dict with:
    - pools: pool letter -> list of teams
    - rounds: round name -> list of resolved matches, in play order
    - block_champions: block -> Team or None
    - champion: Team or None
    """
    pools, teams_by_id = _context(teams)
    rounds = {}
    for match_id in all_match_ids():
        match = _resolve_match(match_id, pools, teams_by_id, winners)
        rounds.setdefault(match['round'], []).append(match)
    return {
        'pools': dict(zip(POOL_NAMES, pools)),
        'rounds': rounds,
        'block_champions': {
            block: _match_winner(block_final(block), pools, teams_by_id, winners) for block in BLOCKS
        },
        'champion': _match_winner(GRAND_FINAL, pools, teams_by_id, winners),
    }
