import sys
from typing import List, Optional
from .model import Event, InvariantError, Order
from .rng import DRNG
from .state import GameState

class RadarPolicy:
    """Decides which single owned robot carries the radar mission.

    This is the only place that creates `deploy_radar_at` orders, so at most
    one robot holds one at any time.
    """

    def __init__(self):
        self.holder: Optional[int] = None

    def holds(self, index: int) -> bool:
        return self.holder == index

    def release(self, index: int) -> None:
        if self.holder != index:
            raise InvariantError(f"robot #{index} released the radar mission held by {self.holder}")
        self.holder = None

    def _set_order(self, state: GameState, index: int, order: Optional[Order]) -> Event:
        robot = state.registry.robots[index]
        evt = Event("OrderChanged", state.turn, {
            "robot_id": robot.id,
            "from": robot.order.kind if robot.order else None,
            "to": order.kind if order else None,
            "dest": list(order.destination) if order else None,
        })
        robot.order = order
        return evt

    def assign(self, state: GameState, rng: DRNG) -> List[Event]:
        """Hand the mission to the living robot closest to the middle row."""
        evts: List[Event] = []
        robots = state.registry.robots

        if self.holder is not None and not robots[self.holder].alive:
            print(f"[Radar] holder #{self.holder} died, releasing mission", file=sys.stderr)
            evts.append(Event("RadarReleased", state.turn, {"index": self.holder, "reason": "dead"}))
            # a dead robot keeps no mission order
            evts.append(self._set_order(state, self.holder, None))
            self.holder = None
        if self.holder is not None:
            return evts

        middle = state.height // 2
        best = None
        best_d = None
        for i, r in state.registry.living():
            d = abs(r.y - middle)
            if best_d is None or d < best_d:
                best, best_d = i, d
        if best is None:
            return evts

        cell = rng.random_cell(state.width, state.height)
        if cell is None:
            return evts
        evts.append(self._set_order(state, best, Order("deploy_radar_at", *cell)))
        self.holder = best
        evts.append(Event("RadarAssigned", state.turn, {"index": best, "robot_id": robots[best].id, "to": list(cell)}))
        return evts
