"""
Application service: Bridge between the game host and the tracking engine.
"""
from dataclasses import dataclass, field
from typing import Iterable, Optional
import logging
import threading

from treecount.config import settings
from treecount.domain.models import GameState, Player, Tile, TreeObject
from treecount.domain.trees import find_forestry_tree
from treecount.services.domain.chopper_engine import ChopperAssignmentEngine

logger = logging.getLogger(__name__)


class TrackingError(ValueError):
    """Base exception for requests the tracker cannot serve."""
    pass


class UnknownActorError(TrackingError):
    """The host referenced a player it never announced."""

    def __init__(self, player_id: int):
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not known")


@dataclass
class TreeSnapshot:
    """One tracked tree as seen by the render boundary."""
    tree: TreeObject
    choppers: int
    tiles: list[Tile]


@dataclass
class OverlaySnapshot:
    """Everything an overlay draws for one frame."""
    labels: list[TreeSnapshot] = field(default_factory=list)
    facing_tree: Optional[TreeObject] = None
    tree_tiles: dict[TreeObject, list[Tile]] = field(default_factory=dict)


class TreeCountService:
    """
    Application service for the tree count tracker.

    Owns the live player registry the host refreshes, forwards host events to
    the engine and serves snapshots to readers. All access goes through one
    lock so a render thread can read while events are applied.
    """

    def __init__(
        self,
        engine: Optional[ChopperAssignmentEngine] = None,
        render_facing_tree: Optional[bool] = None,
        render_tree_tiles: Optional[bool] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            engine: Assignment engine, built from settings if omitted
            render_facing_tree: Overlay debug flag, from settings if omitted
            render_tree_tiles: Overlay debug flag, from settings if omitted
        """
        self.engine = engine or ChopperAssignmentEngine(
            guarded_region_ids=settings.guarded_region_ids,
        )
        self.render_facing_tree = (
            settings.render_facing_tree if render_facing_tree is None else render_facing_tree
        )
        self.render_tree_tiles = (
            settings.render_tree_tiles if render_tree_tiles is None else render_tree_tiles
        )
        self._lock = threading.RLock()
        self._players: dict[int, Player] = {}
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    # ============================================================
    # Lifecycle
    # ============================================================

    def start(self) -> None:
        with self._lock:
            self._running = True
            logger.info("Tree count tracking started")

    def stop(self) -> None:
        """Stop tracking and drop every map."""
        with self._lock:
            self.engine.reset()
            self._players.clear()
            self._running = False
            logger.info("Tree count tracking stopped")

    # ============================================================
    # Host events
    # ============================================================
    #
    # While stopped every event is dropped and reported as not applied.

    def object_spawned(self, tree: TreeObject) -> bool:
        with self._lock:
            if not self._running:
                return False
            return self.engine.on_object_spawned(tree)

    def object_despawned(self, tree: TreeObject) -> bool:
        with self._lock:
            if not self._running:
                return False
            return self.engine.on_object_despawned(tree)

    def player_spawned(self, player: Player) -> bool:
        with self._lock:
            if not self._running:
                return False
            live = self._refresh(player)
            return self.engine.on_player_spawned(live)

    def player_despawned(self, player_id: int) -> bool:
        with self._lock:
            if not self._running:
                return False
            self._players.pop(player_id, None)
            return self.engine.on_player_despawned(player_id)

    def animation_changed(self, player: Player) -> bool:
        with self._lock:
            if not self._running:
                return False
            live = self._refresh(player)
            self.engine.on_animation_changed(live)
            return True

    def game_tick(
        self,
        plane: int,
        local_player: Optional[Player] = None,
        players: Iterable[Player] = (),
    ) -> bool:
        """
        Apply one game tick.

        Args:
            plane: Plane the local player is on
            local_player: Current local player state, if the host sent it
            players: Fresh state of visible players, applied before polling

        Returns:
            False if tracking is stopped
        """
        with self._lock:
            if not self._running:
                return False
            if local_player is not None:
                self.engine.set_local_player(self._refresh(local_player))
            for player in players:
                self._refresh(player)
            self.engine.on_game_tick(plane)
            return True

    def game_state_changed(self, state: GameState) -> bool:
        """
        Handle a client state change.

        Returns:
            True if the change triggered a full reload
        """
        if state is not GameState.LOADING:
            return False

        with self._lock:
            if not self._running:
                return False
            self.engine.on_world_reload()
            local_player = self.engine.local_player
            self._players.clear()
            if local_player is not None:
                self._players[local_player.id] = local_player
            return True

    def _refresh(self, player: Player) -> Player:
        """
        Copy fresh host state onto the live player object the engine holds.

        Returns:
            The live player object
        """
        live = self._players.get(player.id)
        if live is None:
            self._players[player.id] = player
            return player

        live.name = player.name
        live.location = player.location
        live.orientation = player.orientation
        live.animation = player.animation
        return live

    # ============================================================
    # Render boundary
    # ============================================================

    def tree_snapshots(self) -> list[TreeSnapshot]:
        """Every tracked tree with its chopper count and footprint."""
        with self._lock:
            counts = self.engine.get_tree_counts()
            footprints = self.engine.get_tree_footprints()

        return [
            TreeSnapshot(tree=tree, choppers=count, tiles=footprints.get(tree, []))
            for tree, count in counts.items()
        ]

    def overlay_snapshot(self) -> OverlaySnapshot:
        """
        What the overlay draws this frame.

        Nothing is drawn while the local player stands in a guarded region.
        Labels only cover forestry trees with at least one chopper.
        """
        with self._lock:
            local_player = self.engine.local_player
            if local_player is not None and self.engine.is_player_guarded(local_player):
                return OverlaySnapshot()

            snapshot = OverlaySnapshot()
            footprints = self.engine.get_tree_footprints()

            for tree, choppers in self.engine.get_tree_counts().items():
                if choppers <= 0 or find_forestry_tree(tree.type_id) is None:
                    continue
                snapshot.labels.append(
                    TreeSnapshot(tree=tree, choppers=choppers, tiles=footprints.get(tree, []))
                )

            if self.render_facing_tree and local_player is not None:
                snapshot.facing_tree = self.engine.get_facing_tree(local_player)

            if self.render_tree_tiles:
                snapshot.tree_tiles = footprints

            return snapshot

    def facing_tree(self, player_id: int) -> Optional[TreeObject]:
        """
        Tree the given player is facing.

        Raises:
            UnknownActorError: If the host never sent this player
        """
        with self._lock:
            player = self._players.get(player_id)
            if player is None:
                raise UnknownActorError(player_id)
            return self.engine.get_facing_tree(player)

    def chopper_count(self, tree: TreeObject) -> int:
        with self._lock:
            return self.engine.get_count(tree)

    def assignment(self, player_id: int) -> Optional[TreeObject]:
        with self._lock:
            return self.engine.get_assignment(player_id)
