from typing import Optional
import numpy as np
from .model import HOME_X, Position

class DRNG:
    """Deterministic Random Number Generator wrapper."""

    def __init__(self, seed: Optional[int] = None):
        self.g = np.random.Generator(np.random.PCG64(seed))

    def integers(self, low: int, high: int) -> int:
        """Return a random int in [low, high)."""
        return int(self.g.integers(low, high))

    def random_cell(self, width: int, height: int) -> Optional[Position]:
        """Return a random in-bounds cell outside the HQ column, or None if there is none."""
        if width <= HOME_X + 1 or height <= 0:
            return None
        return (self.integers(HOME_X + 1, width), self.integers(0, height))
