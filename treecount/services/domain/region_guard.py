"""
Region guard: map regions where nothing is tracked.

The Woodcutting Guild spans two regions. Its trees are crowded by design and
counting choppers there is meaningless, so the guild is excluded entirely.
"""
from typing import AbstractSet

WOODCUTTING_GUILD_REGION_IDS = frozenset({6198, 6454})


def is_guarded(
    region_id: int,
    guarded_region_ids: AbstractSet[int] = WOODCUTTING_GUILD_REGION_IDS,
) -> bool:
    """
    Check whether a region is excluded from tracking.

    Args:
        region_id: Region id of a tile
        guarded_region_ids: Guarded set, the Woodcutting Guild by default

    Returns:
        True if the region is guarded
    """
    return region_id in guarded_region_ids
