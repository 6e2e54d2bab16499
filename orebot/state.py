from dataclasses import dataclass, field
from .grid import Grid
from .registry import EntityRegistry

@dataclass
class GameState:
    """Everything the agent remembers between turns."""
    grid: Grid
    registry: EntityRegistry = field(default_factory=EntityRegistry)
    turn: int = 0
    my_score: int = 0
    opponent_score: int = 0
    radar_cooldown: int = 0
    trap_cooldown: int = 0

    @classmethod
    def new(cls, width: int, height: int) -> "GameState":
        return cls(grid=Grid(width, height))

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height
