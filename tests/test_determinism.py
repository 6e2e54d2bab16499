"""Test whole turns through the engine."""
from orebot.engine import Engine
from orebot.model import CellObservation, EntityObservation, Snapshot


def make_turn(dead=(), cells=()) -> Snapshot:
    """Five robots of ours on the HQ column, five opponents on the far side."""
    entities = []
    for i in range(5):
        pos = (-1, -1) if i in dead else (0, i * 3)
        entities.append(EntityObservation(i, 0, pos[0], pos[1], -1))
    for i in range(5, 10):
        entities.append(EntityObservation(i, 1, 29, (i - 5) * 3, -1))
    return Snapshot(cells=list(cells), entities=entities)


def radar_holders(engine: Engine):
    return [r for r in engine.state.registry.robots if r.order and r.order.kind == "deploy_radar_at"]


def test_engine_determinism():
    """Same seed and snapshots should produce identical actions."""
    eng1 = Engine(30, 15, seed=42)
    eng2 = Engine(30, 15, seed=42)
    for _ in range(5):
        assert eng1.step(make_turn()) == eng2.step(make_turn())
    assert eng1.state.registry == eng2.state.registry


def test_different_seeds_produce_different_targets():
    eng1 = Engine(30, 15, seed=1)
    eng2 = Engine(30, 15, seed=2)
    eng1.step(make_turn())
    eng2.step(make_turn())

    orders1 = [r.order for r in eng1.state.registry.robots]
    orders2 = [r.order for r in eng2.state.registry.robots]
    assert orders1 != orders2


def test_first_turn_assigns_radar_to_central_robot():
    """Robot at y=6 is closest to the middle row (7) and asks HQ for a radar."""
    eng = Engine(30, 15, seed=42)
    actions = eng.step(make_turn())

    assert len(actions) == 5
    assert eng.radar.holder == 2
    assert actions[2].kind == "request"
    assert len(radar_holders(eng)) == 1
    kinds = [e.kind for e in eng.drain_events()]
    assert kinds.count("RobotSpawned") == 10
    assert kinds.count("RadarAssigned") == 1
    assert eng.drain_events() == []


def test_one_action_per_owned_robot_even_when_dead():
    eng = Engine(30, 15, seed=42)
    eng.step(make_turn())
    actions = eng.step(make_turn(dead={0}))

    assert len(actions) == 5
    assert actions[0].kind == "wait"
    assert not eng.state.registry.robots[0].alive


def test_radar_mission_moves_on_when_holder_dies():
    eng = Engine(30, 15, seed=42)
    eng.step(make_turn())
    assert eng.radar.holder == 2

    eng.step(make_turn(dead={2}))
    assert eng.radar.holder == 3
    assert eng.state.registry.robots[eng.radar.holder].alive
    assert radar_holders(eng) == [eng.state.registry.robots[3]]
    assert eng.state.registry.robots[2].order is None


def test_robots_redirect_to_revealed_ore():
    eng = Engine(30, 15, seed=42)
    eng.step(make_turn())
    actions = eng.step(make_turn(cells=[CellObservation(4, 0, 3, False)]))

    # every non-radar robot now heads for the only known ore
    for i, a in enumerate(actions):
        if i == eng.radar.holder:
            continue
        assert (a.kind, a.x, a.y) == ("move", 4, 0)
