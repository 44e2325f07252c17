from dataclasses import dataclass


@dataclass(slots=True)
class Tile:
    """Numbered piece living on exactly one cell.

    locked: set once the tile has been merged into during the current move so
    it cannot absorb a second tile before the settle window clears it.
    """
    value: int
    cell: int
    locked: bool = False
