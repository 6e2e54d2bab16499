import sys
from typing import List, Optional
from .applier import apply_snapshot
from .model import Action, Event, Snapshot
from .orders import OrderEngine
from .radar import RadarPolicy
from .rng import DRNG
from .state import GameState

class Engine:
    """Turn-by-turn decision engine for our robots.

    Owns the game state and the radar policy; nothing else persists between
    turns. Pass `rng` to control exploration targets, or `seed` to build one.
    """

    def __init__(self, width: int, height: int, seed: Optional[int] = None, rng: Optional[DRNG] = None):
        self.state = GameState.new(width, height)
        self.radar = RadarPolicy()
        self._rng = rng if rng is not None else DRNG(seed)
        self._events: List[Event] = []

    def step(self, snapshot: Snapshot) -> List[Action]:
        """Consume one turn of observations and return one action per owned robot."""
        self.state.turn += 1
        evts: List[Event] = []
        evts += apply_snapshot(self.state, snapshot, self._rng)
        # reassign before the per-robot loop so every robot sees the same holder
        evts += self.radar.assign(self.state, self._rng)

        orders = OrderEngine(self.state, self.radar, self._rng)
        actions = [orders.decide(i) for i in range(len(self.state.registry.robots))]
        evts += orders.events

        if evts:
            print(f"[Engine] Turn {self.state.turn} produced {len(evts)} events", file=sys.stderr)
        self._events += evts
        return actions

    def drain_events(self) -> List[Event]:
        """Return and forget the events recorded since the last call."""
        evts, self._events = self._events, []
        return evts
