"""
API response models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from treecount.domain.models import Tile, TreeObject


class EventAck(BaseModel):
    """Acknowledgement of a host event."""
    event: str = Field(description="Name of the processed event")
    applied: bool = Field(
        description="Whether the event changed tracked state"
    )


class TreeCount(BaseModel):
    """One tracked tree with its chopper count."""
    tree: TreeObject
    choppers: int = Field(ge=0, description="Players currently chopping the tree")
    tiles: List[Tile] = Field(description="Tiles the tree occupies")


class TreesResponse(BaseModel):
    """Response model for the trees snapshot endpoint."""
    tree_count: int = Field(description="Number of tracked trees")
    trees: List[TreeCount]


class TreeTiles(BaseModel):
    """Footprint of one tree for the tile debug overlay."""
    tree: TreeObject
    tiles: List[Tile]


class OverlayResponse(BaseModel):
    """Response model for the overlay snapshot endpoint."""
    labels: List[TreeCount] = Field(
        description="Forestry trees with at least one chopper"
    )
    facing_tree: Optional[TreeObject] = Field(
        default=None,
        description="Tree the local player faces, when that debug view is enabled"
    )
    tree_tiles: List[TreeTiles] = Field(
        default_factory=list,
        description="Every tree footprint, when that debug view is enabled"
    )


class FacingTreeResponse(BaseModel):
    """Response model for the facing tree endpoint."""
    player_id: int
    tree: Optional[TreeObject] = None
    choppers: int = Field(default=0, ge=0)


class SessionResponse(BaseModel):
    """Response model for session start and stop."""
    running: bool
