import sys
from typing import List
from .model import (DEAD_POSITION, CellObservation, ConsistencyError, DecodeError, EntityObservation,
                    EntityType, Event, Item, Order, Robot, Snapshot)
from .rng import DRNG
from .state import GameState


def _log(msg: str) -> None:
    print(f"[Applier] {msg}", file=sys.stderr)


def _apply_cell(state: GameState, obs: CellObservation) -> None:
    if not state.grid.in_bounds(obs.x, obs.y):
        raise DecodeError(f"cell ({obs.x}, {obs.y}) is off the board")
    if obs.ore is not None and obs.ore < 0:
        raise DecodeError(f"negative ore amount {obs.ore} at ({obs.x}, {obs.y})")
    state.grid.set_cell(obs.x, obs.y, obs.ore, obs.hole)


def _explore_order(state: GameState, rng: DRNG):
    cell = rng.random_cell(state.width, state.height)
    return Order("goto", *cell) if cell else None


def _create(state: GameState, obs: EntityObservation, kind: EntityType, item, rng: DRNG) -> List[Event]:
    """Register an entity seen for the first time."""
    reg = state.registry
    alive = (obs.x, obs.y) != DEAD_POSITION
    if kind == EntityType.OWNED_ROBOT:
        robot = Robot(obs.id, obs.x, obs.y, item, alive, _explore_order(state, rng))
        index = reg.add_robot(robot)
        return [Event("RobotSpawned", state.turn, {"robot_id": obs.id, "index": index, "owned": True,
                                                   "order": robot.order.kind if robot.order else None})]
    if kind == EntityType.OPPONENT_ROBOT:
        index = reg.add_opponent(Robot(obs.id, obs.x, obs.y, item, alive))
        return [Event("RobotSpawned", state.turn, {"robot_id": obs.id, "index": index, "owned": False})]
    if kind == EntityType.BURIED_RADAR:
        reg.bury_radar(obs.id, obs.x, obs.y)
    else:
        reg.bury_trap(obs.id, obs.x, obs.y)
    return [Event("ItemBuried", state.turn, {"entity_id": obs.id, "kind": kind.name, "pos": [obs.x, obs.y]})]


def _update(state: GameState, obs: EntityObservation, kind: EntityType, item) -> List[Event]:
    """Refresh an entity we already know about."""
    reg = state.registry
    known = reg.ref(obs.id)
    if known.kind != kind:
        raise ConsistencyError(f"entity {obs.id} was registered as {known.kind.name}, now reported as {kind.name}")

    if kind.is_robot:
        if (obs.x, obs.y) == DEAD_POSITION:
            if reg.kill(obs.id):
                return [Event("RobotDied", state.turn, {"robot_id": obs.id, "owned": kind == EntityType.OWNED_ROBOT})]
            return []
        reg.update_robot(obs.id, obs.x, obs.y, item)
    elif kind == EntityType.BURIED_RADAR:
        reg.update_radar_position(obs.id, obs.x, obs.y)
    else:
        reg.update_trap_position(obs.id, obs.x, obs.y)
    return []


def apply_snapshot(state: GameState, snapshot: Snapshot, rng: DRNG) -> List[Event]:
    """Merge one turn of observations into the grid and the registry.

    Bad records are logged and skipped one at a time; nothing here aborts
    the turn.
    """
    evts: List[Event] = []
    state.my_score = snapshot.my_score
    state.opponent_score = snapshot.opponent_score
    state.radar_cooldown = snapshot.radar_cooldown
    state.trap_cooldown = snapshot.trap_cooldown

    for c in snapshot.cells:
        try:
            _apply_cell(state, c)
        except DecodeError as e:
            _log(f"skipping cell: {e}")
            evts.append(Event("DecodeError", state.turn, {"error": str(e)}))

    for obs in snapshot.entities:
        try:
            kind = EntityType.decode(obs.type_code)
            item = Item.decode(obs.item_code)
            if obs.id in state.registry:
                evts += _update(state, obs, kind, item)
            else:
                evts += _create(state, obs, kind, item, rng)
        except DecodeError as e:
            _log(f"skipping entity {obs.id}: {e}")
            evts.append(Event("DecodeError", state.turn, {"entity_id": obs.id, "error": str(e)}))
        except ConsistencyError as e:
            _log(f"WARNING: {e}")
            evts.append(Event("ConsistencyError", state.turn, {"entity_id": obs.id, "error": str(e)}))
    return evts
