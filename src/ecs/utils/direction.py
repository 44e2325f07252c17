from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Move directions as math-space unit vectors (``UP`` points to +y).

    The grid flips the y component when stepping, so ``UP`` walks towards
    row 0 and ``DOWN`` towards the last row.
    """
    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def parse(cls, value: Direction | str | None) -> Direction | None:
        """Accept a Direction or its (case-insensitive) name; anything else is None."""
        if value is None or isinstance(value, Direction):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


@dataclass(frozen=True, slots=True)
class ScanOrder:
    """Start/step pairs for the nested x-then-y scan of a move."""
    start_x: int
    step_x: int
    start_y: int
    step_y: int


def scan_order(direction: Direction, width: int, height: int) -> ScanOrder:
    """Return the traversal that visits cells nearest the leading edge first.

    The line already on the leading edge is skipped since it cannot move.
    """
    if direction is Direction.UP:
        return ScanOrder(0, 1, 1, 1)
    if direction is Direction.DOWN:
        return ScanOrder(0, 1, height - 2, -1)
    if direction is Direction.LEFT:
        return ScanOrder(1, 1, 0, 1)
    return ScanOrder(width - 2, -1, 0, 1)


def scan_cells(order: ScanOrder, width: int, height: int):
    """Yield (x, y) pairs following ``order`` while both stay in bounds."""
    x = order.start_x
    while 0 <= x < width:
        y = order.start_y
        while 0 <= y < height:
            yield x, y
            y += order.step_y
        x += order.step_x
