from dataclasses import dataclass


@dataclass(slots=True)
class SettleState:
    """Singleton tracking the post-move settle window."""
    delay: float
    waiting: bool = False
    remaining: float = 0.0
