"""
Fixed match identifiers of the bracket and the sources feeding each side.

Two blocks (ALPHA fed by pools A and B, BRAVO fed by pools C and D) each
play two quarterfinals and a block final; the block winners meet in the
grand final.

A source is either ('pool', pool_index, position) for quarterfinal sides,
or ('winner', match_id) for sides filled by an earlier match.
"""
from typing import Dict, List, Optional, Tuple

from .pools import get_position_label

BLOCKS = {
    'ALPHA': (0, 1),
    'BRAVO': (2, 3),
}
GRAND_FINAL = 'GRAND-FINAL'

ROUND_QUARTERFINAL = 'Quarterfinal'
ROUND_BLOCK_FINAL = 'Block Final'
ROUND_GRAND_FINAL = 'Grand Final'

Source = Tuple


def left_quarterfinal(block: str) -> str:
    return f"{block}-L-QF"


def right_quarterfinal(block: str) -> str:
    return f"{block}-R-QF"


def block_final(block: str) -> str:
    return f"{block}-FINAL"


def _build_sources() -> Dict[str, Tuple[Source, Source]]:
    sources = {}
    for block, (first_pool, second_pool) in BLOCKS.items():
        # 1st of one pool meets 2nd of the other
        sources[left_quarterfinal(block)] = (('pool', first_pool, 0), ('pool', second_pool, 1))
        sources[right_quarterfinal(block)] = (('pool', second_pool, 0), ('pool', first_pool, 1))
    for block in BLOCKS:
        sources[block_final(block)] = (('winner', left_quarterfinal(block)),
                                       ('winner', right_quarterfinal(block)))
    blocks = list(BLOCKS)
    sources[GRAND_FINAL] = (('winner', block_final(blocks[0])), ('winner', block_final(blocks[1])))
    return sources


# Insertion order is round order: every match comes after the matches it depends on.
MATCH_SOURCES = _build_sources()


def all_match_ids() -> List[str]:
    """All match identifiers, quarterfinals first and the grand final last."""
    return list(MATCH_SOURCES)


def is_valid_match(match_id: str) -> bool:
    return match_id in MATCH_SOURCES


def is_leaf(match_id: str) -> bool:
    """True for quarterfinals, whose sides come straight from pool positions."""
    sources = MATCH_SOURCES.get(match_id)
    return sources is not None and all(s[0] == 'pool' for s in sources)


def get_sources(match_id: str) -> Optional[Tuple[Source, Source]]:
    return MATCH_SOURCES.get(match_id)


def get_block(match_id: str) -> Optional[str]:
    """Block a match belongs to, or None for the grand final."""
    for block in BLOCKS:
        if match_id.startswith(block + '-'):
            return block
    return None


def get_round_name(match_id: str) -> str:
    if match_id == GRAND_FINAL:
        return ROUND_GRAND_FINAL
    if is_leaf(match_id):
        return ROUND_QUARTERFINAL
    return ROUND_BLOCK_FINAL


def get_source_label(source: Source) -> str:
    """Placeholder text for a side that has no team yet."""
    if source[0] == 'pool':
        return get_position_label(source[1], source[2])
    return f"Winner {source[1]}"
