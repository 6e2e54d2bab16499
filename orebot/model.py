from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

Position = Tuple[int, int]  # (x, y) cell coordinates

HOME_X = 0  # HQ column, where ore is delivered and items are requested
DEAD_POSITION: Position = (-1, -1)  # reported for robots that were destroyed
NO_ITEM = -1


class DecodeError(ValueError):
    """Malformed field or unknown code in an observation."""


class ConsistencyError(LookupError):
    """Observation references an entity under the wrong category."""


class InvariantError(RuntimeError):
    """The order state machine reached a structurally impossible branch."""


class EntityType(Enum):
    """Kind of a visible entity, keyed by its wire code"""
    OWNED_ROBOT = 0
    OPPONENT_ROBOT = 1
    BURIED_RADAR = 2
    BURIED_TRAP = 3

    @classmethod
    def decode(cls, code: int) -> "EntityType":
        try:
            return cls(code)
        except ValueError:
            raise DecodeError(f"unknown entity type: {code}") from None

    @property
    def is_robot(self) -> bool:
        return self in (EntityType.OWNED_ROBOT, EntityType.OPPONENT_ROBOT)


class Item(Enum):
    """Item a robot can carry"""
    RADAR = 2
    TRAP = 3
    ORE = 4

    @classmethod
    def decode(cls, code: int) -> Optional["Item"]:
        """Map a wire code to an item; -1 means the robot carries nothing."""
        if code == NO_ITEM:
            return None
        try:
            return cls(code)
        except ValueError:
            raise DecodeError(f"unknown item: {code}") from None


OrderKind = Literal["goto", "dig_at", "deploy_radar_at", "deliver"]


@dataclass(frozen=True)
class Order:
    """Multi-turn intention of an owned robot.

    goto            -- exploring toward a cell, may be abandoned for a dig target
    dig_at          -- committed to digging this cell
    deploy_radar_at -- carrying the shared radar mission (see RadarPolicy)
    deliver         -- bringing ore back to HQ; (x, y) is the dig site it came from
    """
    kind: OrderKind
    x: int
    y: int

    @property
    def destination(self) -> Position:
        return (self.x, self.y)

    @property
    def is_digging(self) -> bool:
        return self.kind == "dig_at"


@dataclass
class Cell:
    ore: Optional[int] = None  # None = unknown
    has_hole: bool = False


@dataclass
class Robot:
    id: int
    x: int
    y: int
    item: Optional[Item] = None
    alive: bool = True
    order: Optional[Order] = None  # always None for opponent robots

    @property
    def pos(self) -> Position:
        return (self.x, self.y)

    def at(self, pos: Position) -> bool:
        return self.pos == pos


@dataclass(frozen=True)
class EntityRef:
    """Tagged reference from an entity id to its record.

    Robots carry an index into the owned or opponent arena; buried items
    are looked up by id in the matching position map.
    """
    kind: EntityType
    index: Optional[int] = None


@dataclass
class CellObservation:
    x: int
    y: int
    ore: Optional[int]
    hole: bool


@dataclass
class EntityObservation:
    id: int
    type_code: int
    x: int
    y: int
    item_code: int = NO_ITEM


@dataclass
class Snapshot:
    """Everything the game reports for one turn."""
    my_score: int = 0
    opponent_score: int = 0
    radar_cooldown: int = 0
    trap_cooldown: int = 0
    cells: List[CellObservation] = field(default_factory=list)
    entities: List[EntityObservation] = field(default_factory=list)


ActionKind = Literal["move", "wait", "dig", "request"]


@dataclass
class Action:
    kind: ActionKind
    x: Optional[int] = None
    y: Optional[int] = None
    item: Optional[Item] = None
    comment: Optional[str] = None

    @classmethod
    def move(cls, pos: Position, comment: Optional[str] = None) -> "Action":
        return cls("move", pos[0], pos[1], comment=comment)

    @classmethod
    def dig(cls, pos: Position, comment: Optional[str] = None) -> "Action":
        return cls("dig", pos[0], pos[1], comment=comment)

    @classmethod
    def wait(cls, comment: Optional[str] = None) -> "Action":
        return cls("wait", comment=comment)

    @classmethod
    def request(cls, item: Item, comment: Optional[str] = None) -> "Action":
        return cls("request", item=item, comment=comment)

    @classmethod
    def back_to_hq(cls, y: int, comment: Optional[str] = None) -> "Action":
        return cls("move", HOME_X, y, comment=comment)


@dataclass
class Event:
    kind: str
    turn: int
    data: Dict
