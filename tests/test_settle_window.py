import pytest

from ecs.components.game_state import GameMode
from ecs.components.settle_state import SettleState
from ecs.components.tile import Tile
from ecs.events.bus import (
    EVENT_GAME_OVER,
    EVENT_MOVE_IGNORED,
    EVENT_MOVE_REQUEST,
    EVENT_MOVE_RESOLVED,
    EVENT_SETTLE_COMPLETE,
    EVENT_TILE_SPAWNED,
)
from ecs.systems.grid_ops import tile_count
from ecs.systems.movement import MovementSystem
from ecs.systems.settle import SettleSystem
from ecs.utils.direction import Direction
from ecs.utils.game_state import get_game_mode
from tests.helpers import board_world, drive_ticks, values


@pytest.fixture
def setup_env():
    bus, world = board_world([[2, 2, 0], [0, 0, 0], [0, 0, 0]], settle_delay=0.1)
    movement = MovementSystem(world, bus)
    settle = SettleSystem(world, bus)
    return bus, world, movement, settle


def test_changed_move_opens_settle_window(setup_env):
    bus, world, movement, settle = setup_env
    assert movement.request_move(Direction.LEFT) is True
    assert settle.waiting
    state = world.get_component(SettleState)[0][1]
    assert state.remaining == pytest.approx(0.1)


def test_requests_dropped_while_settling(setup_env):
    bus, world, movement, settle = setup_env
    ignored = []
    bus.subscribe(EVENT_MOVE_IGNORED, lambda s, **k: ignored.append(k))
    movement.request_move(Direction.LEFT)
    snapshot = values(world)
    assert movement.request_move(Direction.RIGHT) is False
    assert values(world) == snapshot
    assert ignored == [{"direction": Direction.RIGHT, "reason": "settling"}]


def test_dropped_requests_are_not_replayed(setup_env):
    bus, world, movement, settle = setup_env
    resolved = []
    bus.subscribe(EVENT_MOVE_RESOLVED, lambda s, **k: resolved.append(k["direction"]))
    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.LEFT)
    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.DOWN)
    drive_ticks(bus, 10)
    assert resolved == [Direction.LEFT]


def test_settle_expiry_resets_locks_and_spawns_one_tile(setup_env):
    bus, world, movement, settle = setup_env
    spawned = []
    completed = []
    bus.subscribe(EVENT_TILE_SPAWNED, lambda s, **k: spawned.append(k))
    bus.subscribe(EVENT_SETTLE_COMPLETE, lambda s, **k: completed.append(k))
    movement.request_move(Direction.LEFT)
    assert any(tile.locked for _, tile in world.get_component(Tile))

    drive_ticks(bus, 2, dt=0.02)
    assert settle.waiting
    assert not spawned

    drive_ticks(bus, 5, dt=0.02)
    assert not settle.waiting
    assert len(spawned) == 1
    assert spawned[0]["value"] == 2
    assert tile_count(world) == 2
    assert not any(tile.locked for _, tile in world.get_component(Tile))
    assert completed == [{"spawned": spawned[0]["entity"], "game_over": False}]


def test_blocked_move_does_not_settle_or_spawn():
    bus, world = board_world([[2, 4], [0, 0]])
    movement = MovementSystem(world, bus)
    SettleSystem(world, bus)
    spawned = []
    bus.subscribe(EVENT_TILE_SPAWNED, lambda s, **k: spawned.append(k))
    assert movement.request_move(Direction.UP) is False
    drive_ticks(bus, 20)
    assert spawned == []
    assert values(world) == [[2, 4], [0, 0]]


def test_move_accepted_again_after_settle(setup_env):
    bus, world, movement, settle = setup_env
    movement.request_move(Direction.LEFT)
    drive_ticks(bus, 10)
    assert not settle.waiting
    # The merged 4 sits on the top row, so moving down always changes the board.
    assert movement.request_move(Direction.DOWN) is True
    assert settle.waiting


def test_settle_reports_game_over_on_full_dead_board():
    bus, world = board_world([[2, 2, 8], [16, 32, 64], [128, 256, 512]], seed=5)
    movement = MovementSystem(world, bus)
    settle = SettleSystem(world, bus)
    over = []
    bus.subscribe(EVENT_GAME_OVER, lambda s, **k: over.append(k))
    assert movement.request_move(Direction.RIGHT) is True
    assert values(world)[0] == [0, 4, 8]
    settle.complete()
    # The only hole is refilled with a 2 and no neighbours are equal.
    assert values(world)[0] == [2, 4, 8]
    assert over == [{"highest_tile": 512}]
    assert get_game_mode(world) == GameMode.GAME_OVER
    assert movement.request_move(Direction.LEFT) is False


def test_unknown_direction_is_ignored(setup_env):
    bus, world, movement, settle = setup_env
    assert movement.request_move(None) is False
    assert movement.request_move("sideways") is False
    assert not settle.waiting


def test_direction_name_accepted(setup_env):
    bus, world, movement, settle = setup_env
    assert movement.request_move("left") is True
    assert values(world)[0] == [4, 0, 0]
