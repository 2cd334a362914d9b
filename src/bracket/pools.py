"""
Pool partitioning of the registration roster.

Pools are never stored: they are sliced out of the creation-ordered team
list on every read, so adding or deleting a team reshuffles membership.
"""
from typing import Dict, List, Optional, Sequence

from .models import Team

POOL_NAMES = ['A', 'B', 'C', 'D']
POOL_SIZE = 4
MAX_TEAMS = POOL_SIZE * len(POOL_NAMES)


def partition_pools(teams: Sequence[Team]) -> List[List[Team]]:
    """
    Split teams into 4 pools by registration order.

    Pool i holds teams[4i:4i+4]. Partially filled pools are shorter
    lists, empty pools are empty lists. Teams beyond the 16th are ignored.
    """
    return [list(teams[i * POOL_SIZE:(i + 1) * POOL_SIZE]) for i in range(len(POOL_NAMES))]


def pools_by_name(teams: Sequence[Team]) -> Dict[str, List[Team]]:
    """Same as partition_pools, keyed by pool letter."""
    return dict(zip(POOL_NAMES, partition_pools(teams)))


def get_pool_slot(pools: List[List[Team]], pool_index: int, position: int) -> Optional[Team]:
    """Return the team at a pool position, or None when the slot is empty."""
    if pool_index < 0 or pool_index >= len(pools):
        return None
    pool = pools[pool_index]
    if position < 0 or position >= len(pool):
        return None
    return pool[position]


def get_position_label(pool_index: int, position: int) -> str:
    """Human label for a pool position used as a bracket source, e.g. '1st Pool A'."""
    ordinal = {0: '1st', 1: '2nd', 2: '3rd'}.get(position, f'{position + 1}th')
    return f"{ordinal} Pool {POOL_NAMES[pool_index]}"
