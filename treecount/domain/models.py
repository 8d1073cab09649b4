"""
Domain models for game world entities.

These models mirror what the game host exposes about the world (tiles,
objects, players) and are independent of the HTTP layer that feeds them in.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Orientation is expressed in fine-angle units, 2048 per full turn
ORIENTATION_UNITS = 2048


class Direction(str, Enum):
    """Cardinal facing direction of an actor."""
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @classmethod
    def from_orientation(cls, orientation: int) -> "Direction":
        """
        Round a fine-grained orientation to the nearest cardinal direction.

        0 faces south and the angle grows clockwise seen from above, so 512
        is west, 1024 north and 1536 east. Diagonals round up to the next axis.

        Args:
            orientation: Orientation in the range 0..2047

        Returns:
            Nearest Direction

        Raises:
            AssertionError: If the orientation does not fall in a cardinal bucket
        """
        if not 0 <= orientation < ORIENTATION_UNITS:
            raise AssertionError(f"Orientation out of range: {orientation}")

        bucket = orientation >> 9
        if orientation & 256:
            bucket += 1

        direction = _BUCKET_DIRECTIONS.get(bucket & 3)
        if direction is None:
            raise AssertionError(f"Orientation {orientation} resolved to no direction")
        return direction


_BUCKET_DIRECTIONS = {
    0: Direction.SOUTH,
    1: Direction.WEST,
    2: Direction.NORTH,
    3: Direction.EAST,
}


class Tile(BaseModel):
    """A world tile coordinate."""
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    plane: int = Field(default=0, ge=0, le=3)

    @property
    def region_id(self) -> int:
        """Id of the 64x64 map region containing this tile."""
        return ((self.x >> 6) << 8) | (self.y >> 6)

    def dx(self, offset: int) -> "Tile":
        return Tile(x=self.x + offset, y=self.y, plane=self.plane)

    def dy(self, offset: int) -> "Tile":
        return Tile(x=self.x, y=self.y + offset, plane=self.plane)

    def neighbor(self, direction: Direction) -> "Tile":
        """Tile directly adjacent in the given direction."""
        if direction is Direction.NORTH:
            return self.dy(1)
        if direction is Direction.SOUTH:
            return self.dy(-1)
        if direction is Direction.EAST:
            return self.dx(1)
        if direction is Direction.WEST:
            return self.dx(-1)
        raise AssertionError(f"Unknown direction: {direction}")


class TreeObject(BaseModel):
    """
    A spawned game object that may be a tree.

    `sw` and `ne` are the world tiles of the object's scene min/max corners.
    Single-tile objects only need `sw`. Two objects are the same tree when
    they share a handle, whatever the rest of the payload says.
    """
    model_config = ConfigDict(frozen=True)

    handle: int = Field(description="Unique handle of this object instance")
    type_id: int = Field(description="Game object type id")
    sw: Tile
    ne: Optional[Tile] = None

    @model_validator(mode="after")
    def check_corners(self) -> "TreeObject":
        if self.ne is not None and (self.ne.x < self.sw.x or self.ne.y < self.sw.y):
            raise ValueError(
                f"North-east corner ({self.ne.x}, {self.ne.y}) lies south or west "
                f"of south-west corner ({self.sw.x}, {self.sw.y})"
            )
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeObject):
            return NotImplemented
        return self.handle == other.handle

    def __hash__(self) -> int:
        return hash(self.handle)

    @property
    def location(self) -> Tile:
        return self.sw

    @property
    def region_id(self) -> int:
        return self.sw.region_id


class Player(BaseModel):
    """Live state of a player actor, refreshed in place by the host."""
    id: int = Field(description="Player index in the host client")
    name: str = ""
    location: Tile
    orientation: int = Field(default=0, ge=0, lt=ORIENTATION_UNITS)
    animation: int = -1

    @property
    def direction(self) -> Direction:
        return Direction.from_orientation(self.orientation)

    @property
    def region_id(self) -> int:
        return self.location.region_id


@dataclass
class OrientationChanged:
    """A tracked player turned to a new cardinal direction between two ticks."""
    player: Player
    previous: Direction
    current: Direction


class GameState(str, Enum):
    """Client connection states the host reports."""
    LOGIN_SCREEN = "LOGIN_SCREEN"
    LOGGING_IN = "LOGGING_IN"
    LOADING = "LOADING"
    LOGGED_IN = "LOGGED_IN"
    CONNECTION_LOST = "CONNECTION_LOST"
    HOPPING = "HOPPING"
