from __future__ import annotations

import random
from typing import List, Tuple

from esper import World

from ecs.components.cell import Cell
from ecs.components.grid import Grid
from ecs.components.tile import Tile
from ecs.utils.direction import Direction

Position = Tuple[int, int]


def get_grid(world: World) -> Grid:
    for _, grid in world.get_component(Grid):
        return grid
    raise RuntimeError("Grid definition not found")


def cell_at(world: World, x: int, y: int) -> int | None:
    """Cell entity at (x, y), or None when outside the grid."""
    grid = get_grid(world)
    if 0 <= x < grid.width and 0 <= y < grid.height:
        return grid.cells[y * grid.width + x]
    return None


def adjacent_cell(world: World, cell_entity: int, direction: Direction) -> int | None:
    """Neighbour one step in ``direction``; up decreases y, down increases it."""
    cell = world.component_for_entity(cell_entity, Cell)
    return cell_at(world, cell.x + direction.dx, cell.y - direction.dy)


def random_empty_cell(world: World, rng: random.Random | None = None) -> int | None:
    """Linear probe (with wrap) from a random start index for an unoccupied cell.

    Returns None once every cell has been visited, i.e. the grid is full.
    """
    grid = get_grid(world)
    if not grid.cells:
        return None
    rng = rng or random
    start = rng.randrange(len(grid.cells))
    idx = start
    while world.component_for_entity(grid.cells[idx], Cell).occupied:
        idx += 1
        if idx >= len(grid.cells):
            idx = 0
        if idx == start:
            return None
    return grid.cells[idx]


def position_of(world: World, cell_entity: int) -> Position:
    return world.component_for_entity(cell_entity, Cell).coordinates


def tile_at(world: World, x: int, y: int) -> int | None:
    cell_entity = cell_at(world, x, y)
    if cell_entity is None:
        return None
    return world.component_for_entity(cell_entity, Cell).tile


def live_tiles(world: World) -> List[Tuple[int, Tile]]:
    return list(world.get_component(Tile))


def tile_count(world: World) -> int:
    return len(world.get_component(Tile))


def is_full(world: World) -> bool:
    return tile_count(world) >= get_grid(world).size


def can_merge(tile: Tile, other: Tile | None) -> bool:
    """True if ``tile`` may be absorbed into ``other`` this move."""
    if other is None:
        return False
    return tile.value == other.value and not other.locked


def place_tile(world: World, cell_entity: int, value: int) -> int:
    """Create a tile entity on an empty cell and link both sides."""
    cell = world.component_for_entity(cell_entity, Cell)
    if cell.occupied:
        raise ValueError(f"Cell {cell.coordinates} already holds a tile")
    tile_entity = world.create_entity(Tile(value=value, cell=cell_entity))
    cell.tile = tile_entity
    return tile_entity


def relocate_tile(world: World, tile_entity: int, cell_entity: int) -> None:
    """Move a tile to an empty cell, updating both back references together."""
    tile = world.component_for_entity(tile_entity, Tile)
    target = world.component_for_entity(cell_entity, Cell)
    if target.occupied:
        raise ValueError(f"Cell {target.coordinates} already holds a tile")
    world.component_for_entity(tile.cell, Cell).tile = None
    target.tile = tile_entity
    tile.cell = cell_entity


def remove_tile(world: World, tile_entity: int) -> None:
    """Vacate the tile's cell and drop it from the live tile set."""
    tile = world.component_for_entity(tile_entity, Tile)
    cell = world.component_for_entity(tile.cell, Cell)
    if cell.tile == tile_entity:
        cell.tile = None
    world.delete_entity(tile_entity, immediate=True)


def clear_board(world: World) -> int:
    """Remove every live tile; returns how many were removed."""
    removed = 0
    for tile_entity, _ in live_tiles(world):
        remove_tile(world, tile_entity)
        removed += 1
    for _, cell in world.get_component(Cell):
        cell.tile = None
    return removed


def reset_locks(world: World) -> None:
    for _, tile in world.get_component(Tile):
        tile.locked = False


def board_values(world: World) -> List[List[int]]:
    """Row-major snapshot of tile values (top row first, 0 = empty)."""
    grid = get_grid(world)
    rows: List[List[int]] = []
    for y in range(grid.height):
        row: List[int] = []
        for x in range(grid.width):
            cell = world.component_for_entity(grid.cells[y * grid.width + x], Cell)
            if cell.tile is None:
                row.append(0)
            else:
                row.append(world.component_for_entity(cell.tile, Tile).value)
        rows.append(row)
    return rows


def highest_tile(world: World) -> int:
    return max((tile.value for _, tile in world.get_component(Tile)), default=0)
