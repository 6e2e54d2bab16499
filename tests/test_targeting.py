"""Test nearest-ore target selection."""
from orebot.grid import Grid
from orebot.model import Order
from orebot.rng import DRNG
from orebot.targeting import choose_order, manhattan, nearest_ore


class FixedRNG:
    def __init__(self, cells):
        self.cells = list(cells)

    def random_cell(self, width, height):
        return self.cells.pop(0)


def test_manhattan():
    assert manhattan((0, 0), (5, 3)) == 8
    assert manhattan((4, 1), (1, 4)) == 6


def test_single_ore_cell_is_chosen():
    grid = Grid(10, 8)
    grid.set_cell(5, 3, 2, False)
    assert choose_order(grid, (0, 0), FixedRNG([])) == Order("dig_at", 5, 3)


def test_closer_ore_wins():
    grid = Grid(10, 8)
    grid.set_cell(9, 7, 3, False)
    grid.set_cell(2, 2, 1, True)
    assert nearest_ore(grid, (1, 1)) == (2, 2)


def test_equal_distance_prefers_earlier_row():
    """Ties resolve to the first cell in y-outer, x-inner order."""
    grid = Grid(10, 8)
    grid.set_cell(2, 4, 1, False)
    grid.set_cell(4, 2, 1, False)
    assert nearest_ore(grid, (2, 2)) == (4, 2)


def test_equal_distance_same_row_prefers_smaller_x():
    grid = Grid(10, 8)
    grid.set_cell(3, 2, 1, False)
    grid.set_cell(1, 2, 1, False)
    assert nearest_ore(grid, (2, 2)) == (1, 2)


def test_zero_and_unknown_ore_are_ignored():
    grid = Grid(10, 8)
    grid.set_cell(1, 0, 0, True)
    grid.set_cell(2, 0, None, False)
    assert nearest_ore(grid, (0, 0)) is None


def test_explores_when_no_ore_is_known():
    grid = Grid(10, 8)
    assert choose_order(grid, (0, 0), FixedRNG([(7, 5)])) == Order("goto", 7, 5)


def test_random_fallback_stays_off_hq_column():
    rng = DRNG(7)
    for _ in range(200):
        x, y = rng.random_cell(5, 3)
        assert 1 <= x < 5
        assert 0 <= y < 3


def test_no_order_without_a_playable_column():
    assert choose_order(Grid(1, 4), (0, 0), DRNG(0)) is None
