from __future__ import annotations

from esper import World

from ecs.components.cell import Cell
from ecs.components.tile import Tile
from ecs.systems.grid_ops import adjacent_cell, can_merge, is_full
from ecs.utils.direction import Direction


def has_mergeable_neighbour(world: World, tile: Tile) -> bool:
    for direction in Direction:
        neighbour = adjacent_cell(world, tile.cell, direction)
        if neighbour is None:
            continue
        other_entity = world.component_for_entity(neighbour, Cell).tile
        if other_entity is None:
            continue
        if can_merge(tile, world.component_for_entity(other_entity, Tile)):
            return True
    return False


def is_game_over(world: World) -> bool:
    """True only when the grid is full and no tile has a mergeable neighbour."""
    if not is_full(world):
        return False
    for _, tile in world.get_component(Tile):
        if has_mergeable_neighbour(world, tile):
            return False
    return True
