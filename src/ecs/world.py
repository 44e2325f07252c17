from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from esper import World
from .events.bus import EventBus
from ecs.components.board_settings import BoardSettings
from ecs.components.cell import Cell
from ecs.components.game_state import GameMode, GameState
from ecs.components.grid import Grid
from ecs.components.score import Score
from ecs.components.settle_state import SettleState
from ecs.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    INITIAL_TILES,
    SETTLE_DELAY,
    SPAWN_VALUE,
)

logger = logging.getLogger(__name__)

Layout = Tuple[Tuple[int, ...], ...]


class BoardConfigError(ValueError):
    """Raised once at setup when the board configuration cannot produce a grid."""


@dataclass(frozen=True)
class BoardConfig:
    """Inputs for ``create_world``.

    layout: optional rows of tile values, top row first, 0 for an empty cell.
    When given it seeds the board instead of ``initial_tiles`` random spawns
    and its shape must agree with width/height.
    """
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    settle_delay: float = SETTLE_DELAY
    spawn_value: int = SPAWN_VALUE
    initial_tiles: int = INITIAL_TILES
    layout: Layout | None = field(default=None)

    @classmethod
    def from_layout(cls, rows: Sequence[Sequence[int]], **overrides) -> "BoardConfig":
        if not rows:
            raise BoardConfigError("Layout has no rows")
        layout = tuple(tuple(row) for row in rows)
        return cls(width=len(layout[0]), height=len(layout), layout=layout, **overrides)


def _is_tile_value(value: int) -> bool:
    return isinstance(value, int) and value >= 2 and (value & (value - 1)) == 0


def validate_config(config: BoardConfig) -> None:
    if config.width <= 0 or config.height <= 0:
        raise BoardConfigError(f"Grid must have at least one row and column, got {config.width}x{config.height}")
    if config.settle_delay < 0:
        raise BoardConfigError("settle_delay cannot be negative")
    if not _is_tile_value(config.spawn_value):
        raise BoardConfigError(f"spawn_value must be a power of two >= 2, got {config.spawn_value}")
    if config.layout is None:
        if config.initial_tiles < 0 or config.initial_tiles > config.width * config.height:
            raise BoardConfigError(f"initial_tiles out of range: {config.initial_tiles}")
        return
    if len(config.layout) == 0:
        raise BoardConfigError("Layout has no rows")
    if len(config.layout) != config.height:
        raise BoardConfigError(f"Layout has {len(config.layout)} rows, expected {config.height}")
    for y, row in enumerate(config.layout):
        if len(row) != config.width:
            raise BoardConfigError(f"Row {y} has {len(row)} cells, expected {config.width}")
        for value in row:
            if value != 0 and not _is_tile_value(value):
                raise BoardConfigError(f"Row {y} holds invalid tile value {value!r}")


def create_world(
    event_bus: EventBus,
    config: BoardConfig | None = None,
    *,
    rng: random.Random | None = None,
    populate: bool = True,
) -> World:
    """Build the grid, singleton state and (optionally) the starting tiles."""
    config = config or BoardConfig()
    try:
        validate_config(config)
    except BoardConfigError:
        logger.error("Rejected board configuration %r", config)
        raise

    world = World()
    setattr(world, "random", rng or random.Random())

    grid = Grid(width=config.width, height=config.height)
    for y in range(config.height):
        for x in range(config.width):
            grid.cells.append(world.create_entity(Cell(x=x, y=y)))
    world.create_entity(grid)

    world.create_entity(
        GameState(mode=GameMode.PLAYING),
        SettleState(delay=config.settle_delay),
        Score(),
        BoardSettings(
            spawn_value=config.spawn_value,
            initial_tiles=config.initial_tiles,
            layout=config.layout,
        ),
    )

    if populate:
        from ecs.systems.board import populate_board

        populate_board(world, event_bus)
    return world
