from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
from .model import ConsistencyError, EntityRef, EntityType, Item, Position, Robot

@dataclass
class EntityRegistry:
    """Identity-stable record of every entity seen during the game.

    Ids are never reused, so `entities` only grows. Robot records live in two
    arenas (owned and opponent) and are referenced by index; buried radars and
    traps only keep a position, which later sightings may correct.
    """
    entities: Dict[int, EntityRef] = field(default_factory=dict)
    robots: List[Robot] = field(default_factory=list)
    opponents: List[Robot] = field(default_factory=list)
    radars: Dict[int, Position] = field(default_factory=dict)
    traps: Dict[int, Position] = field(default_factory=dict)

    def __contains__(self, uid: int) -> bool:
        return uid in self.entities

    def ref(self, uid: int) -> Optional[EntityRef]:
        return self.entities.get(uid)

    def add_robot(self, robot: Robot) -> int:
        """Register an owned robot and return its arena index."""
        index = len(self.robots)
        self.robots.append(robot)
        self.entities[robot.id] = EntityRef(EntityType.OWNED_ROBOT, index)
        return index

    def add_opponent(self, robot: Robot) -> int:
        index = len(self.opponents)
        self.opponents.append(robot)
        self.entities[robot.id] = EntityRef(EntityType.OPPONENT_ROBOT, index)
        return index

    def bury_radar(self, uid: int, x: int, y: int) -> None:
        self.entities[uid] = EntityRef(EntityType.BURIED_RADAR)
        self.radars[uid] = (x, y)

    def bury_trap(self, uid: int, x: int, y: int) -> None:
        self.entities[uid] = EntityRef(EntityType.BURIED_TRAP)
        self.traps[uid] = (x, y)

    def robot(self, uid: int) -> Robot:
        """Resolve an owned or opponent robot by id, validating the arena index."""
        r = self.entities.get(uid)
        if r is None:
            raise ConsistencyError(f"entity {uid} is unknown")
        if r.kind == EntityType.OWNED_ROBOT:
            arena = self.robots
        elif r.kind == EntityType.OPPONENT_ROBOT:
            arena = self.opponents
        else:
            raise ConsistencyError(f"entity {uid} is a {r.kind.name}, not a robot")
        if r.index is None or not 0 <= r.index < len(arena):
            raise ConsistencyError(f"entity {uid} points outside the {r.kind.name} arena")
        return arena[r.index]

    def update_robot(self, uid: int, x: int, y: int, item: Optional[Item]) -> None:
        robot = self.robot(uid)
        robot.x = x
        robot.y = y
        robot.item = item

    def kill(self, uid: int) -> bool:
        """Mark a robot dead. Returns True only the first time."""
        robot = self.robot(uid)
        if not robot.alive:
            return False
        robot.alive = False
        return True

    def update_radar_position(self, uid: int, x: int, y: int) -> None:
        if uid not in self.radars:
            raise ConsistencyError(f"buried radar {uid} is not registered")
        self.radars[uid] = (x, y)

    def update_trap_position(self, uid: int, x: int, y: int) -> None:
        if uid not in self.traps:
            raise ConsistencyError(f"buried trap {uid} is not registered")
        self.traps[uid] = (x, y)

    def living(self) -> Iterator[Tuple[int, Robot]]:
        """Yield (index, robot) for owned robots still on the board."""
        for i, r in enumerate(self.robots):
            if r.alive:
                yield i, r
