import argparse
import contextlib
import os
import sys
from typing import List, Optional, TextIO
from orebot.engine import Engine
from orebot.model import Action, DecodeError
from .eventlog import EventLog
from .protocol import format_action, parse_dimensions, read_turn

class TurnRunner:
    """Synchronous driver: read a turn, step the engine, write one line per robot."""

    def __init__(self, engine: Engine, stdin: TextIO, stdout: TextIO):
        self.engine = engine
        self.stdin = stdin
        self.stdout = stdout
        self.events = EventLog()

    def _fallback(self) -> List[Action]:
        return [Action.wait("input error") for _ in self.engine.state.registry.robots]

    def run_turn(self) -> List[Action]:
        """Play one turn. Raises EOFError once the referee is done."""
        state = self.engine.state
        try:
            snapshot = read_turn(self.stdin.readline, state.width, state.height)
        except DecodeError as e:
            print(f"[Runner] Turn {state.turn + 1}: unreadable input ({e}), waiting", file=sys.stderr)
            actions = self._fallback()
        else:
            actions = self.engine.step(snapshot)
        self.events.append_many(self.engine.drain_events())

        for a in actions:
            print(format_action(a), file=self.stdout)
        self.stdout.flush()
        return actions

    def run(self) -> int:
        """Play until the input stream closes; return the number of turns played."""
        turns = 0
        while True:
            try:
                self.run_turn()
            except EOFError:
                print(f"[Runner] Input closed after {turns} turns, {len(self.events)} events", file=sys.stderr)
                return turns
            turns += 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Ore mining bot speaking the referee line protocol on stdin/stdout.")
    parser.add_argument("--seed", type=int, default=None, help="seed for exploration targets (random if omitted)")
    parser.add_argument("--quiet", action="store_true", help="suppress diagnostics on stderr")
    args = parser.parse_args(argv)

    with contextlib.ExitStack() as stack:
        if args.quiet:
            devnull = stack.enter_context(open(os.devnull, "w"))
            stack.enter_context(contextlib.redirect_stderr(devnull))
        width, height = parse_dimensions(sys.stdin.readline())
        print(f"[Runner] Map {width}x{height}, seed={args.seed}", file=sys.stderr)
        runner = TurnRunner(Engine(width, height, seed=args.seed), sys.stdin, sys.stdout)
        runner.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
