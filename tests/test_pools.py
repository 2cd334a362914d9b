"""
Unit tests for pool partitioning by registration order.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket.pools import (
    POOL_NAMES,
    MAX_TEAMS,
    partition_pools,
    pools_by_name,
    get_pool_slot,
    get_position_label,
)


class TestPartitionPools:
    """Tests for slicing the roster into four pools."""

    def test_no_teams_gives_four_empty_pools(self):
        """0 teams -> 4 empty pools."""
        assert partition_pools([]) == [[], [], [], []]

    def test_full_roster(self, make_teams):
        """16 teams -> 4 full pools in order."""
        teams = make_teams(16)
        pools = partition_pools(teams)
        assert [len(p) for p in pools] == [4, 4, 4, 4]
        assert pools[0] == teams[0:4]
        assert pools[3] == teams[12:16]

    def test_partial_pool(self, make_teams):
        """6 teams -> one full pool, one half pool, two empty."""
        teams = make_teams(6)
        pools = partition_pools(teams)
        assert [len(p) for p in pools] == [4, 2, 0, 0]
        assert [t.team_name for t in pools[1]] == ['T5', 'T6']

    @pytest.mark.parametrize('count', range(0, MAX_TEAMS + 1))
    def test_concatenation_preserves_order(self, make_teams, count):
        """Concatenated pools equal the roster, in groups of 4."""
        teams = make_teams(count)
        pools = partition_pools(teams)
        flattened = [t for pool in pools for t in pool]
        assert flattened == teams
        for i, pool in enumerate(pools):
            assert pool == teams[4 * i:4 * i + 4]

    def test_pools_by_name(self, make_teams):
        """Pools are keyed A-D."""
        pools = pools_by_name(make_teams(5))
        assert list(pools) == POOL_NAMES
        assert [t.team_name for t in pools['B']] == ['T5']
        assert pools['C'] == []

    def test_removing_a_team_shifts_membership(self, make_teams):
        """Pools are positional, so deleting an early team moves later ones up."""
        teams = make_teams(5)
        del teams[0]
        pools = partition_pools(teams)
        assert [t.team_name for t in pools[0]] == ['T2', 'T3', 'T4', 'T5']
        assert pools[1] == []


class TestPoolSlots:
    """Tests for individual pool position lookups."""

    def test_filled_slot(self, make_teams):
        pools = partition_pools(make_teams(8))
        assert get_pool_slot(pools, 1, 1).team_name == 'T6'

    def test_empty_slot_is_none(self, make_teams):
        pools = partition_pools(make_teams(5))
        assert get_pool_slot(pools, 1, 1) is None
        assert get_pool_slot(pools, 3, 0) is None

    def test_out_of_range_is_none(self, make_teams):
        pools = partition_pools(make_teams(4))
        assert get_pool_slot(pools, 4, 0) is None
        assert get_pool_slot(pools, 0, 4) is None

    def test_position_labels(self):
        assert get_position_label(0, 0) == '1st Pool A'
        assert get_position_label(3, 1) == '2nd Pool D'
