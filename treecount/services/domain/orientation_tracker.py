"""
Domain service: Per-tick orientation polling for tracked players.

The host only lets us read an actor's orientation, it never reports turns.
Each tick the tracker samples every tracked player, compares the cardinal
direction with the previous sample and emits OrientationChanged for the ones
that turned.
"""
from typing import Callable, Optional
import logging
import threading

from treecount.domain.models import Direction, OrientationChanged, Player

logger = logging.getLogger(__name__)

OrientationListener = Callable[[OrientationChanged], None]


class OrientationTracker:
    """
    Sample-and-diff tracker of player facing directions.

    A newly tracked player is seeded with its current direction, so tracking
    a player never emits a change on its own. The spawn handler is expected
    to process the player's initial facing.

    The per-player map is guarded by a lock because a render thread may read
    it while the tick handler updates it.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._players: dict[int, Player] = {}
        self._directions: dict[int, Direction] = {}
        self._listeners: list[OrientationListener] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._players)

    def add_listener(self, listener: OrientationListener) -> None:
        self._listeners.append(listener)

    def track(self, player: Player) -> None:
        """
        Start tracking a player, or refresh the state object of a tracked one.

        A refreshed player keeps its last sampled direction so a turn that
        happened in between is still reported on the next tick.
        """
        with self._lock:
            self._players[player.id] = player
            self._directions.setdefault(player.id, player.direction)

    def untrack(self, player_id: int) -> bool:
        """
        Stop tracking a player.

        Returns:
            True if the player was tracked
        """
        with self._lock:
            self._directions.pop(player_id, None)
            return self._players.pop(player_id, None) is not None

    def is_tracked(self, player_id: int) -> bool:
        with self._lock:
            return player_id in self._players

    def get(self, player_id: int) -> Optional[Player]:
        with self._lock:
            return self._players.get(player_id)

    def players(self) -> list[Player]:
        with self._lock:
            return list(self._players.values())

    def last_direction(self, player_id: int) -> Optional[Direction]:
        with self._lock:
            return self._directions.get(player_id)

    def directions(self) -> dict[int, Direction]:
        """Snapshot of the last sampled direction per player id."""
        with self._lock:
            return dict(self._directions)

    def sample(self) -> list[OrientationChanged]:
        """
        Poll every tracked player once and notify listeners of turns.

        Returns:
            The changes detected in this sample, in tracking order
        """
        changes = []
        with self._lock:
            for player_id, player in self._players.items():
                previous = self._directions[player_id]
                current = player.direction
                if current != previous:
                    self._directions[player_id] = current
                    changes.append(OrientationChanged(player, previous, current))

        for change in changes:
            logger.debug(
                f"Player {change.player.name or change.player.id} orientation changed "
                f"from {change.previous.name} to {change.current.name}"
            )
            for listener in self._listeners:
                listener(change)

        return changes

    def clear(self) -> None:
        with self._lock:
            self._players.clear()
            self._directions.clear()
