"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Tree and player factories
- A fresh engine and service per test
- FastAPI test client bound to a fresh service
"""
import pytest
from itertools import count
from fastapi.testclient import TestClient

from treecount.main import app
from treecount.api.dependencies import get_tree_count_service
from treecount.domain import animations
from treecount.domain.models import Player, Tile, TreeObject
from treecount.services.application.tree_count_service import TreeCountService
from treecount.services.domain.chopper_engine import ChopperAssignmentEngine


OAK_ID = 10820
YEW_ID = 10822
REGULAR_TREE_ID = 1276
NOT_A_TREE_ID = 12345

# Orientations facing each cardinal direction
SOUTH = 0
WEST = 512
NORTH = 1024
EAST = 1536

CHOPPING = animations.WOODCUTTING_RUNE
IDLE = animations.IDLE

# A tile inside the Woodcutting Guild (region 6198)
GUILD_TILE = Tile(x=1580, y=3480, plane=0)


# ============================================================
# Factories
# ============================================================

@pytest.fixture
def make_tree():
    """Build tree objects with unique handles."""
    handles = count(1)

    def _make(x, y, plane=0, type_id=OAK_ID, ne=None):
        ne_tile = Tile(x=ne[0], y=ne[1], plane=plane) if ne is not None else None
        return TreeObject(
            handle=next(handles),
            type_id=type_id,
            sw=Tile(x=x, y=y, plane=plane),
            ne=ne_tile,
        )

    return _make


@pytest.fixture
def make_player():
    """Build players with unique ids."""
    ids = count(100)

    def _make(x, y, plane=0, orientation=SOUTH, animation=IDLE, name=None):
        player_id = next(ids)
        return Player(
            id=player_id,
            name=name or f"player{player_id}",
            location=Tile(x=x, y=y, plane=plane),
            orientation=orientation,
            animation=animation,
        )

    return _make


# ============================================================
# Engine and Service Fixtures
# ============================================================

@pytest.fixture
def engine() -> ChopperAssignmentEngine:
    """Create a fresh assignment engine."""
    return ChopperAssignmentEngine()


@pytest.fixture
def service() -> TreeCountService:
    """Create a fresh, started tree count service."""
    svc = TreeCountService(render_facing_tree=False, render_tree_tiles=False)
    svc.start()
    return svc


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(service) -> TestClient:
    """Create a test client whose routes share the fresh service."""
    app.dependency_overrides[get_tree_count_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
