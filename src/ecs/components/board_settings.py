from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class BoardSettings:
    """Per-world gameplay tunables copied from the BoardConfig at creation."""
    spawn_value: int
    initial_tiles: int
    layout: Tuple[Tuple[int, ...], ...] | None = None
