import pytest

from ecs.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_UP,
)
from ecs.systems.input import InputSystem, resolve_swipe
from ecs.utils.direction import Direction


@pytest.fixture
def bus_and_requests():
    bus = EventBus()
    InputSystem(bus)
    requests = []
    bus.subscribe(EVENT_MOVE_REQUEST, lambda s, **k: requests.append(k["direction"]))
    return bus, requests


@pytest.mark.parametrize(
    "key, direction",
    [
        ("W", Direction.UP),
        ("UP", Direction.UP),
        ("s", Direction.DOWN),
        ("DOWN", Direction.DOWN),
        ("A", Direction.LEFT),
        ("LEFT", Direction.LEFT),
        ("D", Direction.RIGHT),
        ("RIGHT", Direction.RIGHT),
    ],
)
def test_keys_map_to_directions(bus_and_requests, key, direction):
    bus, requests = bus_and_requests
    bus.emit(EVENT_KEY_PRESS, key=key)
    assert requests == [direction]


def test_unmapped_key_ignored(bus_and_requests):
    bus, requests = bus_and_requests
    bus.emit(EVENT_KEY_PRESS, key="Q")
    bus.emit(EVENT_KEY_PRESS, key=None)
    assert requests == []


def test_r_requests_new_game(bus_and_requests):
    bus, requests = bus_and_requests
    new_games = []
    bus.subscribe(EVENT_NEW_GAME_REQUEST, lambda s, **k: new_games.append(k))
    bus.emit(EVENT_KEY_PRESS, key="R")
    assert new_games == [{}]
    assert requests == []


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ((100, 100), (100, 150), Direction.UP),
        ((100, 100), (100, 50), Direction.DOWN),
        ((100, 100), (50, 100), Direction.LEFT),
        ((100, 100), (150, 100), Direction.RIGHT),
        ((100, 100), (130, 140), Direction.UP),
        ((100, 100), (140, 140), Direction.RIGHT),
        ((100, 100), (105, 104), None),
        ((100, 100), (100, 110), None),
    ],
)
def test_resolve_swipe(start, end, expected):
    assert resolve_swipe(start, end) is expected


def test_swipe_emits_single_move(bus_and_requests):
    bus, requests = bus_and_requests
    bus.emit(EVENT_POINTER_DOWN, x=200, y=200)
    bus.emit(EVENT_POINTER_UP, x=120, y=205)
    assert requests == [Direction.LEFT]


def test_release_without_fresh_press_is_not_replayed(bus_and_requests):
    bus, requests = bus_and_requests
    bus.emit(EVENT_POINTER_DOWN, x=200, y=200)
    bus.emit(EVENT_POINTER_UP, x=200, y=300)
    bus.emit(EVENT_POINTER_UP, x=200, y=300)
    assert requests == [Direction.UP]


def test_short_drag_emits_nothing(bus_and_requests):
    bus, requests = bus_and_requests
    bus.emit(EVENT_POINTER_DOWN, x=10, y=10)
    bus.emit(EVENT_POINTER_UP, x=12, y=11)
    assert requests == []
