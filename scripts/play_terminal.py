# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import argparse

from numpath.config import load_config
from numpath.events import (
    CellActivated,
    InputEvent,
    Notification,
    OperationChosen,
    ResetRequested,
    SessionController,
    UndoRequested,
)
from numpath.models import Operation
from numpath.prng import seed_from_time
from numpath.session import GameSession

HELP = """Commands:
  <row> <col>   select a cell (selecting a cell already on the path goes back to it)
  + - * /       choose the operation for the next cell
  clear         clear the chosen operation
  undo          remove the last cell
  reset         go back to the start cell
  quit          leave the game"""


def render(session: GameSession) -> str:
    grid = session.puzzle.grid
    on_path = set(session.path)
    lines = []
    for r in range(grid.size):
        row = []
        for c in range(grid.size):
            if grid.is_blocked((r, c)):
                row.append("  X  ")
                continue
            text = str(session.display_value((r, c)))
            row.append(f"[{text:^3}]" if (r, c) in on_path else f" {text:^3} ")
        lines.append("".join(row))
    lines.append(f"Target: {session.target}   Equation: {session.equation().text}")
    return "\n".join(lines)


def parse_command(line: str) -> InputEvent | None:
    words = line.split()
    if len(words) == 2 and all(w.lstrip("-").isdigit() for w in words):
        return CellActivated(int(words[0]), int(words[1]))
    if len(words) == 1 and words[0] in {op.value for op in Operation}:
        return OperationChosen(Operation(words[0]))
    if words == ["clear"]:
        return OperationChosen(None)
    if words == ["undo"]:
        return UndoRequested()
    if words == ["reset"]:
        return ResetRequested()
    return None


def main() -> None:
    parser = argparse.ArgumentParser(description="Play numpath in the terminal")
    parser.add_argument("--seed", type=int, default=None, help="Seed (defaults to the current time as HHMMSS)")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    args = parser.parse_args()

    seed = args.seed if args.seed is not None else seed_from_time()
    print(f"Seed: {seed}")
    controller = SessionController(GameSession.new(seed, load_config(args.config)))

    def on_notification(notification: Notification, session: GameSession) -> None:
        if notification == Notification.MOVE_REJECTED:
            print("*** Invalid move ***")
        elif notification == Notification.TARGET_ACHIEVED:
            print(f"*** Target {session.target} reached! ***")

    controller.subscribe(on_notification)
    print(HELP)
    controller.start()

    while True:
        print()
        print(render(controller.session))
        chosen = controller.operation.value if controller.operation is not None else "none"
        print(f"Operation: {chosen}")
        try:
            line = input("> ").strip()
        except EOFError:
            break
        if line == "quit":
            break
        event = parse_command(line)
        if event is None:
            print(HELP)
            continue
        controller.dispatch(event)


if __name__ == "__main__":
    main()
