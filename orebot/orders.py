from typing import List, Optional
from .model import HOME_X, Action, Event, InvariantError, Item, Order, Robot
from .radar import RadarPolicy
from .rng import DRNG
from .state import GameState
from .targeting import choose_order

class OrderEngine:
    """Per-robot order state machine.

    Every turn each owned robot keeps, advances or replaces its order and
    gets exactly one action back. Order changes are recorded in `events`.
    """

    def __init__(self, state: GameState, radar: RadarPolicy, rng: DRNG):
        self.state = state
        self.radar = radar
        self._rng = rng
        self.events: List[Event] = []

    def _set_order(self, index: int, order: Optional[Order]) -> None:
        robot = self.state.registry.robots[index]
        if order == robot.order:
            return
        self.events.append(Event("OrderChanged", self.state.turn, {
            "robot_id": robot.id,
            "from": robot.order.kind if robot.order else None,
            "to": order.kind if order else None,
            "dest": list(order.destination) if order else None,
        }))
        robot.order = order

    def _reorder(self, index: int, comment: Optional[str] = None) -> Action:
        """Adopt a fresh heuristic order and head for it."""
        robot = self.state.registry.robots[index]
        order = choose_order(self.state.grid, robot.pos, self._rng)
        self._set_order(index, order)
        if order is None:
            return Action.wait("no target")
        return Action.move(order.destination, comment)

    def _radar_mission(self, index: int, robot: Robot) -> Action:
        order = robot.order
        if order is None or order.kind != "deploy_radar_at":
            raise InvariantError(f"robot #{index} holds the radar mission with order {order}")
        if robot.item == Item.RADAR:
            if robot.at(order.destination):
                # bury it, then go back to normal work right away
                self.radar.release(index)
                self.events.append(Event("RadarReleased", self.state.turn, {"index": index, "reason": "buried"}))
                self._set_order(index, choose_order(self.state.grid, robot.pos, self._rng))
                return Action.dig(order.destination, "burying radar")
            return Action.move(order.destination)
        if robot.x != HOME_X:
            return Action.back_to_hq(robot.y, "fetching radar")
        return Action.request(Item.RADAR)

    def _travel_or_dig(self, index: int, robot: Robot) -> Action:
        order = robot.order
        dest = order.destination

        if not robot.at(dest):
            # newly revealed ore (e.g. from a radar) can redirect us mid-way
            other = choose_order(self.state.grid, robot.pos, self._rng)
            if other is not None and other.is_digging:
                self._set_order(index, other)
                return Action.move(other.destination)
            return Action.move(dest)

        if robot.item == Item.ORE:
            self._set_order(index, Order("deliver", *dest))
            return Action.back_to_hq(dest[1])
        cell = self.state.grid.cell(*dest)
        if cell.ore is None and not cell.has_hole:
            return Action.dig(dest, "probing")
        if cell.ore is not None and cell.ore > 0:
            self._set_order(index, Order("deliver", *dest))
            return Action.dig(dest)
        return self._reorder(index)

    def _deliver(self, index: int, robot: Robot) -> Action:
        if robot.x != HOME_X:
            return Action.back_to_hq(robot.y, "going back to HQ!")
        return self._reorder(index, "changing order!")

    def decide(self, index: int) -> Action:
        """Advance robot #index's order and return its action for this turn."""
        robot = self.state.registry.robots[index]
        if not robot.alive:
            return Action.wait("dead")

        if self.radar.holds(index):
            return self._radar_mission(index, robot)

        if robot.order is None:
            return self._reorder(index)
        kind = robot.order.kind
        if kind == "deploy_radar_at":
            raise InvariantError(f"robot #{index} has a radar order but the policy holder is {self.radar.holder}")
        if kind in ("goto", "dig_at"):
            return self._travel_or_dig(index, robot)
        if kind == "deliver":
            return self._deliver(index, robot)
        raise InvariantError(f"robot #{index} has unknown order kind {kind!r}")
