from __future__ import annotations

import random

from esper import World

from ecs.events.bus import EVENT_TILE_SPAWNED, EventBus
from ecs.systems.grid_ops import place_tile, position_of, random_empty_cell


def spawn_tile(
    world: World,
    event_bus: EventBus,
    value: int,
    rng: random.Random | None = None,
) -> int | None:
    """Place a ``value`` tile on a random empty cell.

    Returns the new tile entity, or None when the grid is full.
    """
    cell_entity = random_empty_cell(world, rng or getattr(world, "random", None))
    if cell_entity is None:
        return None
    tile_entity = place_tile(world, cell_entity, value)
    x, y = position_of(world, cell_entity)
    event_bus.emit(EVENT_TILE_SPAWNED, entity=tile_entity, x=x, y=y, value=value)
    return tile_entity
