from __future__ import annotations

import logging
import random
from typing import Any

from esper import World

from ecs.components.board_settings import BoardSettings
from ecs.components.game_state import GameMode
from ecs.components.settle_state import SettleState
from ecs.events.bus import EVENT_GAME_OVER, EVENT_SETTLE_COMPLETE, EVENT_TICK, EventBus
from ecs.systems.game_over import is_game_over
from ecs.systems.grid_ops import get_grid, highest_tile, reset_locks, tile_count
from ecs.systems.spawn import spawn_tile
from ecs.utils.game_state import set_game_mode

logger = logging.getLogger(__name__)


class SettleSystem:
    """Counts down the settle window and finishes the move when it expires.

    Expiry runs lock reset, spawn and the game-over check in one handler, so
    no move request can interleave with them.
    """

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self.rng = rng or getattr(world, "random", None)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def _state(self) -> SettleState | None:
        for _, state in self.world.get_component(SettleState):
            return state
        return None

    @property
    def waiting(self) -> bool:
        state = self._state()
        return bool(state and state.waiting)

    def on_tick(self, sender: Any, **kwargs: Any) -> None:
        state = self._state()
        if state is None or not state.waiting:
            return
        dt = kwargs.get("dt", 1 / 60)
        try:
            state.remaining -= float(dt)
        except (TypeError, ValueError):
            state.remaining -= 1 / 60
        if state.remaining <= 0.0:
            self.complete()

    def complete(self) -> None:
        state = self._state()
        if state is None or not state.waiting:
            return
        state.waiting = False
        state.remaining = 0.0
        reset_locks(self.world)
        spawned = None
        if tile_count(self.world) < get_grid(self.world).size:
            spawned = spawn_tile(self.world, self.event_bus, self._spawn_value(), self.rng)
        game_over = is_game_over(self.world)
        if game_over:
            highest = highest_tile(self.world)
            logger.info("No moves left; highest tile %d", highest)
            set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
            self.event_bus.emit(EVENT_GAME_OVER, highest_tile=highest)
        self.event_bus.emit(EVENT_SETTLE_COMPLETE, spawned=spawned, game_over=game_over)

    def _spawn_value(self) -> int:
        for _, settings in self.world.get_component(BoardSettings):
            return settings.spawn_value
        return 2
