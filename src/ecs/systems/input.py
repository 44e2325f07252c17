from __future__ import annotations

from typing import Any, Dict, Tuple

from ecs.constants import SWIPE_THRESHOLD
from ecs.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_UP,
)
from ecs.utils.direction import Direction

KEY_DIRECTIONS: Dict[str, Direction] = {
    "W": Direction.UP,
    "UP": Direction.UP,
    "S": Direction.DOWN,
    "DOWN": Direction.DOWN,
    "A": Direction.LEFT,
    "LEFT": Direction.LEFT,
    "D": Direction.RIGHT,
    "RIGHT": Direction.RIGHT,
}
NEW_GAME_KEYS = frozenset({"R"})


def resolve_swipe(
    start: Tuple[float, float],
    end: Tuple[float, float],
    threshold: float = SWIPE_THRESHOLD,
) -> Direction | None:
    """Map a pointer drag to a direction; screen y grows upwards.

    The vertical axis wins only when it strictly dominates. Drags shorter than
    ``threshold`` on the winning axis resolve to None.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) < abs(dy):
        if dy > threshold:
            return Direction.UP
        if dy < -threshold:
            return Direction.DOWN
        return None
    if dx < -threshold:
        return Direction.LEFT
    if dx > threshold:
        return Direction.RIGHT
    return None


class InputSystem:
    """Resolves raw key and pointer events into move requests.

    Every gesture yields at most one direction: the stored press point is
    consumed on release, so a release without a fresh press emits nothing.
    """

    def __init__(self, event_bus: EventBus, *, swipe_threshold: float = SWIPE_THRESHOLD):
        self.event_bus = event_bus
        self.swipe_threshold = swipe_threshold
        self._press_point: Tuple[float, float] | None = None
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_POINTER_DOWN, self.on_pointer_down)
        self.event_bus.subscribe(EVENT_POINTER_UP, self.on_pointer_up)

    def on_key_press(self, sender: Any, **kwargs: Any) -> None:
        key = kwargs.get('key')
        if not isinstance(key, str):
            return
        name = key.upper()
        if name in NEW_GAME_KEYS:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
            return
        direction = KEY_DIRECTIONS.get(name)
        if direction is not None:
            self.event_bus.emit(EVENT_MOVE_REQUEST, direction=direction)

    def on_pointer_down(self, sender: Any, **kwargs: Any) -> None:
        point = self._point(kwargs)
        if point is not None:
            self._press_point = point

    def on_pointer_up(self, sender: Any, **kwargs: Any) -> None:
        start = self._press_point
        self._press_point = None
        end = self._point(kwargs)
        if start is None or end is None:
            return
        direction = resolve_swipe(start, end, self.swipe_threshold)
        if direction is not None:
            self.event_bus.emit(EVENT_MOVE_REQUEST, direction=direction)

    @staticmethod
    def _point(payload: Dict[str, Any]) -> Tuple[float, float] | None:
        x = payload.get('x')
        y = payload.get('y')
        if x is None or y is None:
            return None
        try:
            return float(x), float(y)
        except (TypeError, ValueError):
            return None
