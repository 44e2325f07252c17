from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class Grid:
    """Fixed cell layout of the board.

    ``cells`` holds the cell entity ids in row-major order (index ``y * width + x``).
    Dimensions never change after the world is created.
    """
    width: int
    height: int
    cells: List[int] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.width * self.height
