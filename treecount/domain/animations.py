"""
Player animation ids the tracker reacts to.
"""

IDLE = -1

# One woodcutting animation per axe
WOODCUTTING_BRONZE = 879
WOODCUTTING_IRON = 877
WOODCUTTING_STEEL = 875
WOODCUTTING_BLACK = 873
WOODCUTTING_MITHRIL = 871
WOODCUTTING_ADAMANT = 869
WOODCUTTING_RUNE = 867
WOODCUTTING_GILDED = 8303
WOODCUTTING_DRAGON = 2846
WOODCUTTING_DRAGON_OR = 24
WOODCUTTING_INFERNAL = 2117
WOODCUTTING_3A_AXE = 7264
WOODCUTTING_CRYSTAL = 8324
WOODCUTTING_TRAILBLAZER = 8778

WOODCUTTING_ANIMATION_IDS = frozenset({
    WOODCUTTING_BRONZE,
    WOODCUTTING_IRON,
    WOODCUTTING_STEEL,
    WOODCUTTING_BLACK,
    WOODCUTTING_MITHRIL,
    WOODCUTTING_ADAMANT,
    WOODCUTTING_RUNE,
    WOODCUTTING_GILDED,
    WOODCUTTING_DRAGON,
    WOODCUTTING_DRAGON_OR,
    WOODCUTTING_INFERNAL,
    WOODCUTTING_3A_AXE,
    WOODCUTTING_CRYSTAL,
    WOODCUTTING_TRAILBLAZER,
})


def is_woodcutting(animation: int) -> bool:
    return animation in WOODCUTTING_ANIMATION_IDS
