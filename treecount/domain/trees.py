"""
Tree catalog: which game object types are choppable trees.

Regular trees fall and respawn within seconds, so the overlay never labels
them; every other kind is a forestry tree that players group up on.
"""
from enum import Enum
from typing import Optional


class Tree(Enum):
    """Known tree kinds and the object type ids that represent them."""
    REGULAR = (True, frozenset({
        1276, 1277, 1278, 1279, 1280, 1330, 1331, 1332, 2409, 3879, 3881, 3882, 3883,
    }))
    OAK = (False, frozenset({1751, 4540, 10820}))
    WILLOW = (False, frozenset({10819, 10829, 10831, 10833}))
    TEAK = (False, frozenset({9036, 15062, 36686, 40758}))
    MAPLE = (False, frozenset({10832, 36681, 40754}))
    ARCTIC_PINE = (False, frozenset({3037}))
    HOLLOW = (False, frozenset({10821, 10830}))
    MAHOGANY = (False, frozenset({9034, 36688, 40760}))
    YEW = (False, frozenset({10822, 36683, 40756}))
    MAGIC = (False, frozenset({10834, 36685}))
    REDWOOD = (False, frozenset({29668, 29670}))

    def __init__(self, regular: bool, object_ids: frozenset):
        self.regular = regular
        self.object_ids = object_ids


_TREES_BY_OBJECT_ID = {
    object_id: tree
    for tree in Tree
    for object_id in tree.object_ids
}


def find_tree(type_id: int) -> Optional[Tree]:
    """
    Look up the tree kind for a game object type id.

    Args:
        type_id: Game object type id

    Returns:
        Tree kind, or None if the object is not a tree
    """
    return _TREES_BY_OBJECT_ID.get(type_id)


def find_forestry_tree(type_id: int) -> Optional[Tree]:
    """Like find_tree, but ignores regular trees."""
    tree = find_tree(type_id)
    if tree is None or tree.regular:
        return None
    return tree
