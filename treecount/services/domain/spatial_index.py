"""
Domain service: Bidirectional index between trees and the tiles they cover.

Provides:
- Footprint computation from an object's corner tiles
- Registration on spawn and removal on despawn
- Constant-time tile to tree lookup
"""
from typing import Optional
import logging

from treecount.domain.models import Tile, TreeObject

logger = logging.getLogger(__name__)


def compute_footprint(tree: TreeObject) -> list[Tile]:
    """
    Compute every tile a tree occupies.

    A tree without a distinct north-east corner covers one tile. Otherwise it
    covers the inclusive rectangle between its corners, on the south-west
    corner's plane.

    Args:
        tree: Tree object with world corner tiles

    Returns:
        Tiles ordered by x, then y
    """
    sw = tree.sw
    ne = tree.ne

    if ne is None or ne == sw:
        return [sw]

    return [
        Tile(x=x, y=y, plane=sw.plane)
        for x in range(sw.x, ne.x + 1)
        for y in range(sw.y, ne.y + 1)
    ]


class TreeSpatialIndex:
    """
    Tree to footprint map plus its tile to tree inverse.

    If two footprints overlap, the tile belongs to the tree registered last.
    """

    def __init__(self):
        self._tree_tiles: dict[TreeObject, list[Tile]] = {}
        self._tile_trees: dict[Tile, TreeObject] = {}

    def __len__(self) -> int:
        return len(self._tree_tiles)

    def __contains__(self, tree: TreeObject) -> bool:
        return tree in self._tree_tiles

    def register(
        self,
        tree: TreeObject,
        footprint: Optional[list[Tile]] = None,
    ) -> list[Tile]:
        """
        Index a tree under every tile of its footprint.

        Args:
            tree: Tree to index
            footprint: Tiles to index it under, computed from the tree if omitted

        Returns:
            The footprint stored for the tree
        """
        if tree in self._tree_tiles:
            self.unregister(tree)

        tiles = list(footprint) if footprint is not None else compute_footprint(tree)
        self._tree_tiles[tree] = tiles
        for tile in tiles:
            self._tile_trees[tile] = tree

        logger.debug(f"Indexed tree {tree.handle} over {len(tiles)} tile(s)")
        return tiles

    def unregister(self, tree: TreeObject) -> Optional[list[Tile]]:
        """
        Drop a tree and its tiles. Unknown trees are ignored.

        Returns:
            The removed footprint, or None if the tree was not indexed
        """
        tiles = self._tree_tiles.pop(tree, None)
        if tiles is None:
            return None

        for tile in tiles:
            # An overlapping tree registered later owns the tile now
            if self._tile_trees.get(tile) == tree:
                del self._tile_trees[tile]
        return tiles

    def lookup(self, tile: Tile) -> Optional[TreeObject]:
        return self._tile_trees.get(tile)

    def footprint(self, tree: TreeObject) -> Optional[list[Tile]]:
        tiles = self._tree_tiles.get(tree)
        return list(tiles) if tiles is not None else None

    def footprints(self) -> dict[TreeObject, list[Tile]]:
        """Copy of the tree to footprint map."""
        return {tree: list(tiles) for tree, tiles in self._tree_tiles.items()}

    def trees(self) -> list[TreeObject]:
        return list(self._tree_tiles)

    def is_empty(self) -> bool:
        return not self._tile_trees

    def clear(self) -> None:
        self._tree_tiles.clear()
        self._tile_trees.clear()
