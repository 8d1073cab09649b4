"""
Domain service: Assignment of chopping players to trees.

Nothing in the game protocol says which tree a player is cutting. The engine
infers it from two local signals:
- the player plays one of the woodcutting animations
- the tile directly in front of the player belongs to a tree

Each tracked player is either unassigned or assigned to exactly one tree, and
each tree keeps a running count of the players assigned to it. Every handler
leaves the counts equal to the number of assigned players before it returns.
"""
from typing import AbstractSet, Optional
import logging

from treecount.domain import animations
from treecount.domain.models import OrientationChanged, Player, Tile, TreeObject
from treecount.domain.trees import find_tree
from treecount.services.domain.orientation_tracker import OrientationTracker
from treecount.services.domain.region_guard import (
    WOODCUTTING_GUILD_REGION_IDS,
    is_guarded,
)
from treecount.services.domain.spatial_index import TreeSpatialIndex

logger = logging.getLogger(__name__)


class ChopperAssignmentEngine:
    """
    State machine mapping players to the tree they are chopping.

    Events are expected on a single thread, in the order the host delivers
    them. On login the host sends object spawns first, then player spawns,
    then the first tick.
    """

    def __init__(
        self,
        guarded_region_ids: AbstractSet[int] = WOODCUTTING_GUILD_REGION_IDS,
        spatial_index: Optional[TreeSpatialIndex] = None,
        orientation_tracker: Optional[OrientationTracker] = None,
    ):
        """
        Initialize the engine.

        Args:
            guarded_region_ids: Regions excluded from all tracking
            spatial_index: Tree/tile index, a fresh one if omitted
            orientation_tracker: Orientation poller, a fresh one if omitted
        """
        self.guarded_region_ids = frozenset(guarded_region_ids)
        self.spatial_index = spatial_index or TreeSpatialIndex()
        self.orientation_tracker = orientation_tracker or OrientationTracker()
        self.orientation_tracker.add_listener(self.on_orientation_changed)

        self.local_player: Optional[Player] = None
        self.previous_plane: Optional[int] = None

        self._tree_counts: dict[TreeObject, int] = {}
        self._assignments: dict[int, TreeObject] = {}

    # ------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------

    def set_local_player(self, player: Optional[Player]) -> None:
        """Remember the local player, dropping them from tracking if they were tracked."""
        self.local_player = player
        if player is not None and self.orientation_tracker.is_tracked(player.id):
            self.on_player_despawned(player.id)

    def is_local_player(self, player: Player) -> bool:
        return self.local_player is not None and player.id == self.local_player.id

    def is_region_guarded(self, region_id: int) -> bool:
        return is_guarded(region_id, self.guarded_region_ids)

    def is_player_guarded(self, player: Player) -> bool:
        return self.is_region_guarded(player.region_id)

    def is_tree_guarded(self, tree: TreeObject) -> bool:
        return self.is_region_guarded(tree.region_id)

    def _ignores_player(self, player: Player) -> bool:
        return self.is_local_player(player) or self.is_player_guarded(player)

    # ------------------------------------------------------------
    # Object events
    # ------------------------------------------------------------

    def on_object_spawned(self, tree: TreeObject) -> bool:
        """
        Start tracking a spawned object if it is a tree outside guarded regions.

        Returns:
            True if the object is now tracked
        """
        kind = find_tree(tree.type_id)
        if kind is None or self.is_tree_guarded(tree):
            return False

        self.spatial_index.register(tree)
        # Re-key so snapshots carry the latest payload for this handle
        self._tree_counts[tree] = self._tree_counts.pop(tree, 0)
        logger.debug(f"Tree {kind.name} spawned at {tree.location}")
        return True

    def on_object_despawned(self, tree: TreeObject) -> bool:
        """
        Stop tracking a despawned tree.

        Players still assigned to it become unassigned.

        Returns:
            True if the tree was tracked
        """
        if find_tree(tree.type_id) is None or self.is_tree_guarded(tree):
            return False

        self._tree_counts.pop(tree, None)
        removed = self.spatial_index.unregister(tree) is not None

        stale = [pid for pid, assigned in self._assignments.items() if assigned == tree]
        for player_id in stale:
            del self._assignments[player_id]

        if removed:
            logger.debug(f"Tree {tree.handle} despawned, released {len(stale)} chopper(s)")
        return removed

    # ------------------------------------------------------------
    # Player events
    # ------------------------------------------------------------

    def on_player_spawned(self, player: Player) -> bool:
        """
        Start tracking a player.

        A player who is already chopping when first seen is assigned right
        away, since no animation change will follow for them.

        Returns:
            True if the player is now tracked
        """
        if self._ignores_player(player):
            return False

        logger.debug(f"Player {player.name} spawned at {player.location}")
        self.orientation_tracker.track(player)
        if animations.is_woodcutting(player.animation):
            self._assign_facing_tree(player)
        return True

    def on_player_despawned(self, player_id: int) -> bool:
        """
        Release a player's assignment and stop tracking them.

        Returns:
            True if the player was tracked
        """
        self._release(player_id)
        return self.orientation_tracker.untrack(player_id)

    def on_animation_changed(self, player: Player) -> None:
        """
        React to a player's new animation.

        A woodcutting animation assigns the player to the tree they face. The
        idle animation releases them. Anything else leaves them as they are.
        A player never announced by a spawn event is tracked from here on.
        """
        if self._ignores_player(player):
            return

        self.orientation_tracker.track(player)

        if animations.is_woodcutting(player.animation):
            self._assign_facing_tree(player)
        elif player.animation == animations.IDLE:
            self._release(player.id)

    def on_orientation_changed(self, event: OrientationChanged) -> None:
        """
        Re-resolve the tree of a tracked player who turned.

        A player still facing their assigned tree keeps it, whatever their
        animation. A player facing no tree becomes unassigned. A player facing
        a different tree moves to it only while chopping, otherwise they are
        released.
        """
        player = event.player
        if not self.orientation_tracker.is_tracked(player.id) or self._ignores_player(player):
            return

        target = self.get_facing_tree(player)
        if target == self._assignments.get(player.id):
            return

        if target is None or not animations.is_woodcutting(player.animation):
            self._release(player.id)
        else:
            self._assign(player.id, target)

    # ------------------------------------------------------------
    # World events
    # ------------------------------------------------------------

    def on_game_tick(self, plane: int) -> None:
        """
        Per-tick work: detect plane changes, then poll orientations.

        A plane change zeroes every count but keeps trees and assignments,
        because some trees stay visible across planes. The first plane seen
        after start-up or a reload is taken as the baseline.
        """
        if self.local_player is not None and self.is_player_guarded(self.local_player):
            return

        if self.previous_plane is None:
            self.previous_plane = plane
        elif self.previous_plane != plane:
            logger.info(f"Plane changed from {self.previous_plane} to {plane}, resetting counts")
            for tree in self._tree_counts:
                self._tree_counts[tree] = 0
            self.previous_plane = plane

        self.orientation_tracker.sample()

    def on_world_reload(self) -> None:
        """Drop all state. The host is about to respawn everything."""
        logger.info(
            f"World reloading, dropping {len(self._tree_counts)} tree(s) "
            f"and {len(self.orientation_tracker)} player(s)"
        )
        self._tree_counts.clear()
        self._assignments.clear()
        self.spatial_index.clear()
        self.orientation_tracker.clear()
        self.previous_plane = None

    def reset(self) -> None:
        """Drop all state including the local player."""
        self.on_world_reload()
        self.local_player = None

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def get_tree_counts(self) -> dict[TreeObject, int]:
        return dict(self._tree_counts)

    def get_tree_footprints(self) -> dict[TreeObject, list[Tile]]:
        return self.spatial_index.footprints()

    def get_count(self, tree: TreeObject) -> int:
        return self._tree_counts.get(tree, 0)

    def get_assignment(self, player_id: int) -> Optional[TreeObject]:
        return self._assignments.get(player_id)

    def get_assignments(self) -> dict[int, TreeObject]:
        return dict(self._assignments)

    def get_facing_tree(self, player: Player) -> Optional[TreeObject]:
        """
        Find the tree on the tile directly in front of a player.

        Only the adjacent tile in the player's cardinal direction counts.

        Args:
            player: Player to resolve

        Returns:
            The faced tree, or None
        """
        if self.spatial_index.is_empty():
            return None

        direction = player.direction
        facing_tile = player.location.neighbor(direction)
        if not self.is_local_player(player):
            logger.debug(f"Actor: {player.name}, Direction: {direction.name}")
        return self.spatial_index.lookup(facing_tile)

    # ------------------------------------------------------------
    # Assignment bookkeeping
    # ------------------------------------------------------------

    def _assign_facing_tree(self, player: Player) -> None:
        tree = self.get_facing_tree(player)
        if tree is not None:
            self._assign(player.id, tree)

    def _assign(self, player_id: int, tree: TreeObject) -> None:
        previous = self._assignments.get(player_id)
        if previous == tree:
            return
        if previous is not None:
            self._decrement(previous)
        self._assignments[player_id] = tree
        self._tree_counts[tree] = self._tree_counts.get(tree, 0) + 1

    def _release(self, player_id: int) -> None:
        tree = self._assignments.pop(player_id, None)
        if tree is not None:
            self._decrement(tree)

    def _decrement(self, tree: TreeObject) -> None:
        # Never below zero, even if a release is processed twice
        if tree in self._tree_counts:
            self._tree_counts[tree] = max(0, self._tree_counts[tree] - 1)
