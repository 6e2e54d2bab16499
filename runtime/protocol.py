"""Line protocol spoken with the referee.

Input, once:    ``width height``
Input, per turn:
    ``my_score opponent_score``
    ``height`` rows of ``ore hole`` pairs (ore is ``?`` when unknown)
    ``entity_count radar_cooldown trap_cooldown``
    ``entity_count`` lines of ``id type x y item``
Output, per turn: one command line per owned robot.
"""
import sys
from typing import Callable, List, Optional, Tuple
from orebot.model import HOME_X, Action, CellObservation, DecodeError, EntityObservation, Snapshot

ReadLine = Callable[[], str]

UNKNOWN_ORE = "?"


def _log(msg: str) -> None:
    print(f"[Protocol] {msg}", file=sys.stderr)


def parse_int(token: str, what: str) -> int:
    try:
        return int(token.strip())
    except ValueError:
        raise DecodeError(f"bad {what}: {token!r}") from None


def _next_line(readline: ReadLine) -> str:
    line = readline()
    if not line:
        raise EOFError("referee closed the input stream")
    return line


def _ints(line: str, count: int, what: str) -> List[int]:
    tokens = line.split()
    if len(tokens) < count:
        raise DecodeError(f"expected {count} fields for {what}, got {line.strip()!r}")
    return [parse_int(t, what) for t in tokens[:count]]


def parse_dimensions(line: str) -> Tuple[int, int]:
    width, height = _ints(line, 2, "map size")
    return width, height


def parse_ore(token: str) -> Optional[int]:
    if token.strip() == UNKNOWN_ORE:
        return None
    ore = parse_int(token, "ore amount")
    if ore < 0:
        raise DecodeError(f"negative ore amount: {ore}")
    return ore


def parse_row(line: str, y: int, width: int) -> List[CellObservation]:
    """Decode one grid row, skipping the HQ column and any malformed cell."""
    tokens = line.split()
    cells: List[CellObservation] = []
    for x in range(HOME_X + 1, width):
        if 2 * x + 1 >= len(tokens):
            _log(f"row {y} truncated at x={x}")
            break
        try:
            ore = parse_ore(tokens[2 * x])
            hole = parse_int(tokens[2 * x + 1], "hole flag") == 1
        except DecodeError as e:
            _log(f"skipping cell ({x}, {y}): {e}")
            continue
        cells.append(CellObservation(x, y, ore, hole))
    return cells


def parse_entity(line: str) -> EntityObservation:
    uid, type_code, x, y, item_code = _ints(line, 5, "entity")
    return EntityObservation(uid, type_code, x, y, item_code)


def read_turn(readline: ReadLine, width: int, height: int) -> Snapshot:
    """Read one turn from the referee.

    Malformed scores and cooldowns fall back to 0 and malformed cells or
    entity lines are skipped. A malformed entity count raises DecodeError,
    since the number of lines that follow is then unknown.
    """
    snap = Snapshot()
    try:
        snap.my_score, snap.opponent_score = _ints(_next_line(readline), 2, "scores")
    except DecodeError as e:
        _log(f"{e}; keeping scores at 0")

    for y in range(height):
        snap.cells += parse_row(_next_line(readline), y, width)

    header = _next_line(readline).split()
    count = parse_int(header[0] if header else "", "entity count")
    try:
        snap.radar_cooldown, snap.trap_cooldown = _ints(" ".join(header[1:]), 2, "cooldowns")
    except DecodeError as e:
        _log(f"{e}; keeping cooldowns at 0")
    for _ in range(count):
        line = _next_line(readline)
        try:
            snap.entities.append(parse_entity(line))
        except DecodeError as e:
            _log(f"skipping entity line: {e}")
    return snap


def format_action(action: Action) -> str:
    if action.kind == "move":
        cmd = f"MOVE {action.x} {action.y}"
    elif action.kind == "dig":
        cmd = f"DIG {action.x} {action.y}"
    elif action.kind == "request":
        cmd = f"REQUEST {action.item.name}"
    else:
        cmd = "WAIT"
    if action.comment:
        cmd += f" {action.comment}"
    return cmd
