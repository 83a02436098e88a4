from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from numpath.models import Operation
from numpath.session import GameSession, InvalidMoveError, SessionState


@dataclass(frozen=True)
class CellActivated:
    row: int
    col: int


@dataclass(frozen=True)
class OperationChosen:
    # None clears the selection; the next cell activation is then rejected.
    operation: Optional[Operation | str]


@dataclass(frozen=True)
class UndoRequested:
    pass


@dataclass(frozen=True)
class ResetRequested:
    pass


InputEvent = Union[CellActivated, OperationChosen, UndoRequested, ResetRequested]


class Notification(Enum):
    PATH_CHANGED = "PATH_CHANGED"
    MOVE_REJECTED = "MOVE_REJECTED"
    TARGET_ACHIEVED = "TARGET_ACHIEVED"


Listener = Callable[[Notification, GameSession], None]


class SessionController:
    """
    Dispatches input events into a GameSession and notifies listeners.

    The controller tracks the operation the player currently has selected;
    it starts as addition and is None once the selection is cleared.
    """

    def __init__(self, session: GameSession, operation: Optional[Operation] = Operation.ADD):
        self.session = session
        self.operation: Optional[Operation] = operation
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def start(self) -> None:
        """Reports the initial state: a puzzle whose start value is the target is won at once."""
        if self.session.state == SessionState.ACHIEVED:
            self._notify(Notification.TARGET_ACHIEVED)

    def dispatch(self, event: InputEvent) -> None:
        was_achieved = self.session.state == SessionState.ACHIEVED

        if isinstance(event, OperationChosen):
            self._choose(event.operation)
            return

        if isinstance(event, CellActivated):
            changed = self._activate(event.row, event.col)
        elif isinstance(event, UndoRequested):
            changed = self.session.undo()
        elif isinstance(event, ResetRequested):
            changed = self.session.reset()
        else:
            raise ValueError(f"Unknown event type: {type(event)}")

        if not changed:
            return
        self._notify(Notification.PATH_CHANGED)
        if not was_achieved and self.session.state == SessionState.ACHIEVED:
            self._notify(Notification.TARGET_ACHIEVED)

    def _choose(self, operation: Optional[Operation | str]) -> None:
        if operation is None:
            self.operation = None
            return
        try:
            self.operation = Operation(operation)
        except ValueError:
            self._notify(Notification.MOVE_REJECTED)

    def _activate(self, row: int, col: int) -> bool:
        coord = (row, col)
        grid = self.session.puzzle.grid
        if grid.in_bounds(coord) and grid.is_blocked(coord):
            self._notify(Notification.MOVE_REJECTED)
            return False

        before = self.session.path
        try:
            self.session.select_cell(coord, self.operation)
        except InvalidMoveError:
            self._notify(Notification.MOVE_REJECTED)
            return False
        return self.session.path != before

    def _notify(self, notification: Notification) -> None:
        for listener in list(self._listeners):
            listener(notification, self.session)
