from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
from .model import Cell, Position

@dataclass
class Grid:
    """Fixed-size ore/hole knowledge of the board, stored row-major."""
    width: int
    height: int
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self):
        if not self.cells:
            self.cells = [Cell() for _ in range(self.width * self.height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        """Get the cell at (x, y); raises IndexError when out of bounds."""
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.cells[y * self.width + x]

    def set_cell(self, x: int, y: int, ore: Optional[int], hole: bool) -> None:
        """Replace what we know about (x, y) with this turn's observation."""
        c = self.cell(x, y)
        c.ore = ore
        c.has_hole = hole

    def scan(self) -> Iterator[Tuple[Position, Cell]]:
        """Yield every cell in row-major order (y outer, x inner)."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y), self.cells[y * self.width + x]

    def render(self) -> str:
        """Debug dump: 'o' for a hole, 'x' otherwise, followed by the known ore amount."""
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                c = self.cells[y * self.width + x]
                ore = f"{c.ore:2}" if c.ore is not None else "  "
                row.append(("o" if c.has_hole else "x") + ore)
            rows.append(" ".join(row))
        return "\n".join(rows)
