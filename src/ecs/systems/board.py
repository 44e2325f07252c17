from __future__ import annotations

import random
from typing import List, Tuple

from esper import World

from ecs.components.board_settings import BoardSettings
from ecs.components.game_state import GameMode
from ecs.components.settle_state import SettleState
from ecs.components.tile import Tile
from ecs.events.bus import (
    EVENT_BOARD_CLEARED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_NEW_GAME_STARTED,
    EVENT_TILE_SPAWNED,
    EventBus,
)
from ecs.systems.grid_ops import cell_at, clear_board, place_tile, position_of
from ecs.systems.spawn import spawn_tile
from ecs.utils.game_state import set_game_mode

Position = Tuple[int, int]


def get_board_settings(world: World) -> BoardSettings:
    for _, settings in world.get_component(BoardSettings):
        return settings
    raise RuntimeError("BoardSettings not found")


def populate_board(world: World, event_bus: EventBus, rng: random.Random | None = None) -> List[Position]:
    """Seed the configured layout, or spawn the starting tiles at random."""
    settings = get_board_settings(world)
    placed: List[Position] = []
    if settings.layout is not None:
        for y, row in enumerate(settings.layout):
            for x, value in enumerate(row):
                if not value:
                    continue
                cell_entity = cell_at(world, x, y)
                tile_entity = place_tile(world, cell_entity, value)
                event_bus.emit(EVENT_TILE_SPAWNED, entity=tile_entity, x=x, y=y, value=value)
                placed.append((x, y))
        return placed
    for _ in range(settings.initial_tiles):
        tile_entity = spawn_tile(world, event_bus, settings.spawn_value, rng)
        if tile_entity is None:
            break
        placed.append(position_of(world, world.component_for_entity(tile_entity, Tile).cell))
    return placed


class BoardSystem:
    """Owns the board lifecycle: clearing it and starting a fresh game."""

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self.rng = rng or getattr(world, "random", None)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game_request)

    def on_new_game_request(self, sender, **kwargs):
        self.new_game()

    def clear(self) -> None:
        clear_board(self.world)
        for _, settle in self.world.get_component(SettleState):
            settle.waiting = False
            settle.remaining = 0.0
        self.event_bus.emit(EVENT_BOARD_CLEARED)

    def new_game(self) -> List[Position]:
        self.clear()
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        placed = populate_board(self.world, self.event_bus, self.rng)
        self.event_bus.emit(EVENT_NEW_GAME_STARTED, tiles=placed)
        return placed
