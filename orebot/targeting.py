from typing import Optional
from .grid import Grid
from .model import Order, Position
from .rng import DRNG


def manhattan(a: Position, b: Position) -> int:
    """Calculate Manhattan distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def nearest_ore(grid: Grid, origin: Position) -> Optional[Position]:
    """Closest cell with known positive ore; first in row-major order wins ties."""
    best = None
    best_d = None
    for pos, cell in grid.scan():
        if cell.ore is None or cell.ore <= 0:
            continue
        d = manhattan(pos, origin)
        if best_d is None or d < best_d:
            best, best_d = pos, d
    return best


def choose_order(grid: Grid, origin: Position, rng: DRNG) -> Optional[Order]:
    """Find the most appealing order for a robot standing at `origin`.

    Digs the nearest known ore if there is any, otherwise explores a random
    cell outside the HQ column. The chosen cell is not reserved, so several
    robots may end up heading to the same one.
    """
    target = nearest_ore(grid, origin)
    if target is not None:
        return Order("dig_at", *target)
    cell = rng.random_cell(grid.width, grid.height)
    if cell is None:
        return None
    return Order("goto", *cell)
