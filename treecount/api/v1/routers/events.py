"""
API router for host events.

Each endpoint forwards one game event to the tracker, in the order received.
"""
from fastapi import APIRouter

from treecount.api.dependencies import TreeCountServiceDep
from treecount.api.v1.models.requests import (
    GameStateEvent,
    GameTickEvent,
    ObjectEvent,
    PlayerDespawnedEvent,
    PlayerEvent,
)
from treecount.api.v1.models.responses import EventAck, SessionResponse


router = APIRouter(
    tags=["events"],
)


@router.post("/events/object-spawned", response_model=EventAck)
async def object_spawned(event: ObjectEvent, service: TreeCountServiceDep) -> EventAck:
    applied = service.object_spawned(event.game_object)
    return EventAck(event="object-spawned", applied=applied)


@router.post("/events/object-despawned", response_model=EventAck)
async def object_despawned(event: ObjectEvent, service: TreeCountServiceDep) -> EventAck:
    applied = service.object_despawned(event.game_object)
    return EventAck(event="object-despawned", applied=applied)


@router.post("/events/player-spawned", response_model=EventAck)
async def player_spawned(event: PlayerEvent, service: TreeCountServiceDep) -> EventAck:
    applied = service.player_spawned(event.player)
    return EventAck(event="player-spawned", applied=applied)


@router.post("/events/player-despawned", response_model=EventAck)
async def player_despawned(event: PlayerDespawnedEvent, service: TreeCountServiceDep) -> EventAck:
    applied = service.player_despawned(event.player_id)
    return EventAck(event="player-despawned", applied=applied)


@router.post("/events/animation-changed", response_model=EventAck)
async def animation_changed(event: PlayerEvent, service: TreeCountServiceDep) -> EventAck:
    applied = service.animation_changed(event.player)
    return EventAck(event="animation-changed", applied=applied)


@router.post("/events/game-tick", response_model=EventAck)
async def game_tick(event: GameTickEvent, service: TreeCountServiceDep) -> EventAck:
    """
    Apply one game tick.

    Player states in the payload are applied first, then the tracker checks
    for a plane change and polls every tracked player's orientation.
    """
    applied = service.game_tick(event.plane, event.local_player, event.players)
    return EventAck(event="game-tick", applied=applied)


@router.post("/events/game-state-changed", response_model=EventAck)
async def game_state_changed(event: GameStateEvent, service: TreeCountServiceDep) -> EventAck:
    """Only LOADING matters: it drops every tracked tree and player."""
    applied = service.game_state_changed(event.game_state)
    return EventAck(event="game-state-changed", applied=applied)


@router.post("/session/start", response_model=SessionResponse)
async def start_session(service: TreeCountServiceDep) -> SessionResponse:
    service.start()
    return SessionResponse(running=service.running)


@router.post("/session/stop", response_model=SessionResponse)
async def stop_session(service: TreeCountServiceDep) -> SessionResponse:
    service.stop()
    return SessionResponse(running=service.running)
