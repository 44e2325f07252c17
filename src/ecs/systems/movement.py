from __future__ import annotations

import logging
from typing import Any

from esper import World

from ecs.components.cell import Cell
from ecs.components.game_state import GameMode
from ecs.components.settle_state import SettleState
from ecs.components.tile import Tile
from ecs.events.bus import (
    EVENT_MOVE_IGNORED,
    EVENT_MOVE_REQUEST,
    EVENT_MOVE_RESOLVED,
    EVENT_SCORE_GAINED,
    EVENT_SETTLE_STARTED,
    EVENT_TILE_MOVED,
    EVENT_TILES_MERGED,
    EventBus,
)
from ecs.systems.grid_ops import (
    adjacent_cell,
    can_merge,
    cell_at,
    get_grid,
    position_of,
    relocate_tile,
    remove_tile,
)
from ecs.utils.direction import Direction, scan_cells, scan_order
from ecs.utils.game_state import get_game_mode

logger = logging.getLogger(__name__)


class MovementSystem:
    """Slides and merges tiles for one direction at a time.

    Only one move is in flight: while the settle window is open further
    requests are dropped, not queued.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_MOVE_REQUEST, self.on_move_request)

    def on_move_request(self, sender: Any, **payload: Any) -> None:
        self.request_move(payload.get("direction"))

    def request_move(self, direction: Direction | str | None) -> bool:
        """Run a move unless the board is settling or the game is over."""
        parsed = Direction.parse(direction)
        if parsed is None:
            return False
        settle = self._settle_state()
        if settle is not None and settle.waiting:
            logger.debug("Dropping %s move while settling", parsed.name)
            self.event_bus.emit(EVENT_MOVE_IGNORED, direction=parsed, reason="settling")
            return False
        if get_game_mode(self.world) == GameMode.GAME_OVER:
            self.event_bus.emit(EVENT_MOVE_IGNORED, direction=parsed, reason="game_over")
            return False
        changed = self.move(parsed)
        self.event_bus.emit(EVENT_MOVE_RESOLVED, direction=parsed, changed=changed)
        if changed and settle is not None:
            settle.waiting = True
            settle.remaining = settle.delay
            self.event_bus.emit(EVENT_SETTLE_STARTED, delay=settle.delay)
        return changed

    def move(self, direction: Direction) -> bool:
        """Apply ``direction`` to every tile; True if any tile moved or merged."""
        grid = get_grid(self.world)
        order = scan_order(direction, grid.width, grid.height)
        changed = False
        for x, y in scan_cells(order, grid.width, grid.height):
            cell_entity = cell_at(self.world, x, y)
            tile_entity = self.world.component_for_entity(cell_entity, Cell).tile
            if tile_entity is not None:
                changed |= self.move_tile(tile_entity, direction)
        return changed

    def move_tile(self, tile_entity: int, direction: Direction) -> bool:
        world = self.world
        tile = world.component_for_entity(tile_entity, Tile)
        target: int | None = None
        adjacent = adjacent_cell(world, tile.cell, direction)
        while adjacent is not None:
            occupant = world.component_for_entity(adjacent, Cell).tile
            if occupant is not None:
                if can_merge(tile, world.component_for_entity(occupant, Tile)):
                    self.merge(tile_entity, occupant)
                    return True
                break
            target = adjacent
            adjacent = adjacent_cell(world, adjacent, direction)

        if target is not None:
            src = position_of(world, tile.cell)
            relocate_tile(world, tile_entity, target)
            self.event_bus.emit(
                EVENT_TILE_MOVED,
                entity=tile_entity,
                src=src,
                dst=position_of(world, target),
            )
            return True
        return False

    def merge(self, tile_entity: int, into_entity: int) -> None:
        """Absorb ``tile_entity`` into ``into_entity``, doubling and locking it."""
        world = self.world
        src = position_of(world, world.component_for_entity(tile_entity, Tile).cell)
        remove_tile(world, tile_entity)
        survivor = world.component_for_entity(into_entity, Tile)
        survivor.value *= 2
        survivor.locked = True
        self.event_bus.emit(
            EVENT_TILES_MERGED,
            entity=into_entity,
            src=src,
            dst=position_of(world, survivor.cell),
            value=survivor.value,
        )
        self.event_bus.emit(EVENT_SCORE_GAINED, amount=survivor.value)

    def _settle_state(self) -> SettleState | None:
        for _, state in self.world.get_component(SettleState):
            return state
        return None
