from dataclasses import dataclass


@dataclass(slots=True)
class Cell:
    """One addressable grid slot.

    ``tile`` is the entity id of the occupying tile, if any. It only records
    occupancy; the tile entity's lifetime belongs to the world.
    """
    x: int
    y: int
    tile: int | None = None

    @property
    def occupied(self) -> bool:
        return self.tile is not None

    @property
    def coordinates(self) -> tuple[int, int]:
        return self.x, self.y
