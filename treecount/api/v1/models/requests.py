"""
API request models using Pydantic.

Event payloads pushed by the game host.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from treecount.domain.models import GameState, Player, TreeObject


class ObjectEvent(BaseModel):
    """Payload for object spawn and despawn events."""
    game_object: TreeObject


class PlayerEvent(BaseModel):
    """Payload for player spawn and animation change events."""
    player: Player


class PlayerDespawnedEvent(BaseModel):
    """Payload for player despawn events."""
    player_id: int = Field(description="Player index in the host client")


class GameTickEvent(BaseModel):
    """Payload for a game tick."""
    plane: int = Field(ge=0, le=3, description="Plane the local player is on")
    local_player: Optional[Player] = Field(
        default=None,
        description="Current state of the local player"
    )
    players: List[Player] = Field(
        default_factory=list,
        description="Current state of visible players, applied before orientation polling"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "plane": 0,
                "local_player": {
                    "id": 1,
                    "name": "Zezima",
                    "location": {"x": 3200, "y": 3200, "plane": 0},
                    "orientation": 0,
                    "animation": -1,
                },
                "players": [
                    {
                        "id": 7,
                        "name": "Woox",
                        "location": {"x": 3205, "y": 3201, "plane": 0},
                        "orientation": 1024,
                        "animation": 867,
                    }
                ],
            }
        }


class GameStateEvent(BaseModel):
    """Payload for a client state change."""
    game_state: GameState
