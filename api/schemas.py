from typing import Optional
from pydantic import BaseModel, Field

class StartRequest(BaseModel):
    """Game start request schema."""
    width: int = Field(default=30, gt=0)
    height: int = Field(default=15, gt=0)
    seed: int = 42

class CellIn(BaseModel):
    """One cell observation; ore is None when unknown."""
    x: int
    y: int
    ore: Optional[int] = None
    hole: bool = False

class EntityIn(BaseModel):
    """Entity observation with raw wire codes (validated by the engine, not here)."""
    id: int
    type: int
    x: int
    y: int
    item: int = -1

class TurnIn(BaseModel):
    """Turn snapshot schema."""
    my_score: int = Field(default=0, ge=0)
    opponent_score: int = Field(default=0, ge=0)
    radar_cooldown: int = Field(default=0, ge=0)
    trap_cooldown: int = Field(default=0, ge=0)
    cells: list[CellIn] = Field(default_factory=list)
    entities: list[EntityIn] = Field(default_factory=list)

class TurnResponse(BaseModel):
    """Actions for one turn, one command line per owned robot."""
    turn: int
    actions: list[str]

class EventsResponse(BaseModel):
    """Events response schema."""
    next_offset: int
    events: list[dict]
