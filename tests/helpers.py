from __future__ import annotations

import random
from typing import Sequence

from esper import World

from ecs.events.bus import EVENT_TICK, EventBus
from ecs.systems.grid_ops import board_values
from ecs.world import BoardConfig, create_world


def board_world(rows: Sequence[Sequence[int]], *, seed: int = 0, **overrides) -> tuple[EventBus, World]:
    """Build a world seeded with ``rows`` (top row first, 0 = empty)."""

    bus = EventBus()
    config = BoardConfig.from_layout(rows, **overrides)
    world = create_world(bus, config, rng=random.Random(seed))
    return bus, world


def values(world: World) -> list[list[int]]:
    return board_values(world)


def drive_ticks(bus: EventBus, count: int = 10, dt: float = 0.02) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)
