"""
API router for tree count snapshots read by the render boundary.
"""
from fastapi import APIRouter, Path, Request
from typing import Annotated

from treecount.api.dependencies import TreeCountServiceDep, limiter
from treecount.api.v1.models.responses import (
    FacingTreeResponse,
    OverlayResponse,
    TreeCount,
    TreesResponse,
    TreeTiles,
)
from treecount.config import settings


router = APIRouter(
    tags=["trees"],
)

RATE_LIMIT = f"{settings.rate_limit_requests}/minute"

RATE_LIMITED_RESPONSES = {
    429: {
        "description": "Too many snapshot reads",
    },
}


@router.get(
    "/trees",
    response_model=TreesResponse,
    summary="Get every tracked tree",
    description="""
    Return every tracked tree with its current chopper count and footprint.

    Counts include regular trees and trees nobody is chopping.
    """,
    responses=RATE_LIMITED_RESPONSES,
)
@limiter.limit(RATE_LIMIT)
async def get_trees(request: Request, service: TreeCountServiceDep) -> TreesResponse:
    snapshots = service.tree_snapshots()
    return TreesResponse(
        tree_count=len(snapshots),
        trees=[
            TreeCount(tree=s.tree, choppers=s.choppers, tiles=s.tiles)
            for s in snapshots
        ],
    )


@router.get(
    "/overlay",
    response_model=OverlayResponse,
    summary="Get the overlay for this frame",
    description="""
    Return what the overlay draws: a chopper count label for every forestry
    tree with at least one chopper, plus the enabled debug views.

    Empty while the local player is inside the Woodcutting Guild.
    """,
    responses=RATE_LIMITED_RESPONSES,
)
@limiter.limit(RATE_LIMIT)
async def get_overlay(request: Request, service: TreeCountServiceDep) -> OverlayResponse:
    snapshot = service.overlay_snapshot()
    return OverlayResponse(
        labels=[
            TreeCount(tree=s.tree, choppers=s.choppers, tiles=s.tiles)
            for s in snapshot.labels
        ],
        facing_tree=snapshot.facing_tree,
        tree_tiles=[
            TreeTiles(tree=tree, tiles=tiles)
            for tree, tiles in snapshot.tree_tiles.items()
        ],
    )


@router.get(
    "/players/{player_id}/facing-tree",
    response_model=FacingTreeResponse,
    summary="Get the tree a player faces",
    responses={
        404: {
            "description": "Player not known",
        },
        **RATE_LIMITED_RESPONSES,
    },
)
@limiter.limit(RATE_LIMIT)
async def get_facing_tree(
    request: Request,
    player_id: Annotated[int, Path(description="Player index in the host client")],
    service: TreeCountServiceDep,
) -> FacingTreeResponse:
    """
    Get the tree on the tile directly in front of a player.

    Raises:
        UnknownActorError: If the host never sent this player (mapped to 404)
    """
    tree = service.facing_tree(player_id)
    choppers = service.chopper_count(tree) if tree is not None else 0
    return FacingTreeResponse(player_id=player_id, tree=tree, choppers=choppers)
