"""Creator-diversity selection over score-sorted candidates."""

from collections import defaultdict
from typing import Dict, List, Sequence, TypeVar

T = TypeVar("T")

MAX_PER_CREATOR = 2


def select_diverse(ranked: Sequence[T], limit: int, max_per_creator: int = MAX_PER_CREATOR) -> List[T]:
    """
    Pick up to ``limit`` entries, at most ``max_per_creator`` per creator.

    Greedy and single pass: a skipped entry is never reconsidered. When the
    input already fits in ``limit`` it is returned as-is without applying
    the creator cap.

    Args:
        ranked: Entries sorted by score descending, each with a ``creator_id``
        limit: Maximum feed size
        max_per_creator: Per-creator cap

    Returns:
        Selected entries in input order
    """
    if len(ranked) <= limit:
        return list(ranked)

    selected: List[T] = []
    creator_counts: Dict[str, int] = defaultdict(int)

    for entry in ranked:
        if len(selected) >= limit:
            break
        creator = entry.creator_id
        if creator_counts[creator] >= max_per_creator:
            continue
        creator_counts[creator] += 1
        selected.append(entry)

    return selected
