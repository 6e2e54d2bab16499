from fastapi import FastAPI, HTTPException
from orebot.engine import Engine
from orebot.model import CellObservation, EntityObservation, Snapshot
from runtime.eventlog import EventLog
from runtime.protocol import format_action
from .schemas import EventsResponse, StartRequest, TurnIn, TurnResponse

app = FastAPI(title="Ore Bot API")
engine: Engine | None = None
events = EventLog()


def _to_snapshot(turn: TurnIn) -> Snapshot:
    return Snapshot(
        my_score=turn.my_score,
        opponent_score=turn.opponent_score,
        radar_cooldown=turn.radar_cooldown,
        trap_cooldown=turn.trap_cooldown,
        cells=[CellObservation(c.x, c.y, c.ore, c.hole) for c in turn.cells],
        entities=[EntityObservation(e.id, e.type, e.x, e.y, e.item) for e in turn.entities],
    )


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Ore Bot API",
        "docs": "/docs",
    }

@app.post("/game/start")
async def start_game(req: StartRequest):
    """Start a new game on a width x height board."""
    global engine, events
    engine = Engine(req.width, req.height, seed=req.seed)
    events = EventLog()
    print(f"[API] Started {req.width}x{req.height} game, seed={req.seed}")
    return {"width": req.width, "height": req.height, "seed": req.seed}

@app.post("/game/turn", response_model=TurnResponse)
async def play_turn(turn: TurnIn):
    """Feed one turn snapshot and get back the robots' commands."""
    if not engine:
        raise HTTPException(400, "Game not started")
    actions = engine.step(_to_snapshot(turn))
    events.append_many(engine.drain_events())
    return TurnResponse(turn=engine.state.turn, actions=[format_action(a) for a in actions])

@app.get("/game/state")
async def get_state():
    """Get the agent's current model of the game."""
    if not engine:
        raise HTTPException(400, "Game not started")
    s = engine.state
    reg = s.registry
    return {
        "turn": s.turn,
        "scores": [s.my_score, s.opponent_score],
        "cooldowns": {"radar": s.radar_cooldown, "trap": s.trap_cooldown},
        "radar_holder": engine.radar.holder,
        "robots": [
            {
                "id": r.id,
                "pos": list(r.pos),
                "item": r.item.name if r.item else None,
                "alive": r.alive,
                "order": {"kind": r.order.kind, "dest": list(r.order.destination)} if r.order else None,
            } for r in reg.robots
        ],
        "opponents": [
            {"id": r.id, "pos": list(r.pos), "alive": r.alive} for r in reg.opponents
        ],
        "radars": {str(uid): list(p) for uid, p in reg.radars.items()},
        "traps": {str(uid): list(p) for uid, p in reg.traps.items()},
        "board": s.grid.render().split("\n"),
    }

@app.get("/game/events")
async def get_events(since: int = 0, limit: int = 500):
    """Get events since offset."""
    if not engine:
        raise HTTPException(400, "Game not started")
    evts, next_offset = events.since(since, limit)
    return EventsResponse(
        next_offset=next_offset,
        events=[{"kind": e.kind, "turn": e.turn, "data": e.data} for e in evts]
    )
