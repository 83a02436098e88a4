import pytest

from numpath.events import (
    CellActivated,
    Notification,
    OperationChosen,
    ResetRequested,
    SessionController,
    UndoRequested,
)
from numpath.config import GeneratorConfig
from numpath.models import BLOCKED, Grid, Operation, Puzzle
from numpath.session import GameSession, SessionState


class Recorder:
    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def __call__(self, notification: Notification, session: GameSession) -> None:
        self.notifications.append(notification)


def create_controller() -> tuple[SessionController, Recorder]:
    # 2 3 X
    # 4 5 6
    # X 7 8
    grid = Grid(size=3, cells=[[2, 3, BLOCKED], [4, 5, 6], [BLOCKED, 7, 8]])
    controller = SessionController(GameSession(Puzzle(grid=grid, target=25)))
    recorder = Recorder()
    controller.subscribe(recorder)
    return controller, recorder


def test_default_operation_is_addition() -> None:
    controller, recorder = create_controller()
    assert controller.operation == Operation.ADD

    controller.dispatch(CellActivated(0, 1))
    assert controller.session.current_result() == 5
    assert recorder.notifications == [Notification.PATH_CHANGED]


def test_operation_chosen() -> None:
    controller, recorder = create_controller()
    controller.dispatch(OperationChosen(Operation.MULTIPLY))

    assert controller.operation == Operation.MULTIPLY
    assert recorder.notifications == []

    controller.dispatch(CellActivated(1, 0))
    assert controller.session.current_result() == 8


def test_target_achieved_notification() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(0, 1))
    controller.dispatch(OperationChosen(Operation.MULTIPLY))
    controller.dispatch(CellActivated(1, 1))

    assert recorder.notifications == [
        Notification.PATH_CHANGED,
        Notification.PATH_CHANGED,
        Notification.TARGET_ACHIEVED,
    ]


def test_target_achieved_fires_on_each_transition() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(0, 1))
    controller.dispatch(OperationChosen(Operation.MULTIPLY))
    controller.dispatch(CellActivated(1, 1))
    controller.dispatch(UndoRequested())
    controller.dispatch(CellActivated(1, 1))

    assert recorder.notifications.count(Notification.TARGET_ACHIEVED) == 2


def test_blocked_cell_rejected() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(0, 1))
    controller.dispatch(CellActivated(0, 2))

    assert recorder.notifications == [Notification.PATH_CHANGED, Notification.MOVE_REJECTED]
    assert controller.session.path == ((0, 0), (0, 1))


def test_invalid_move_rejected() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(2, 2))
    controller.dispatch(CellActivated(9, 9))

    assert recorder.notifications == [Notification.MOVE_REJECTED, Notification.MOVE_REJECTED]
    assert controller.session.path == ((0, 0),)


def test_reclick_truncates() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(0, 1))
    controller.dispatch(CellActivated(1, 2))
    controller.dispatch(CellActivated(0, 1))

    assert controller.session.path == ((0, 0), (0, 1))
    assert recorder.notifications == [Notification.PATH_CHANGED] * 3


def test_reclick_last_cell_is_silent() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(0, 1))
    controller.dispatch(CellActivated(0, 1))

    assert recorder.notifications == [Notification.PATH_CHANGED]


def test_undo_and_reset_without_changes_are_silent() -> None:
    controller, recorder = create_controller()
    controller.dispatch(UndoRequested())
    controller.dispatch(ResetRequested())

    assert recorder.notifications == []


def test_reset() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(1, 1))
    controller.dispatch(CellActivated(2, 2))
    controller.dispatch(ResetRequested())

    assert controller.session.path == ((0, 0),)
    assert recorder.notifications == [Notification.PATH_CHANGED] * 3


def test_unsubscribe() -> None:
    controller, recorder = create_controller()
    controller.unsubscribe(recorder)
    controller.dispatch(CellActivated(0, 1))

    assert recorder.notifications == []


def test_unknown_event() -> None:
    controller, _ = create_controller()
    with pytest.raises(ValueError):
        controller.dispatch("click")  # type: ignore[arg-type]


def test_listener_receives_session() -> None:
    controller, _ = create_controller()
    seen: list[int] = []
    controller.subscribe(lambda notification, session: seen.append(session.current_result()))

    controller.dispatch(CellActivated(1, 0))
    assert seen == [6]


def test_start_reports_puzzle_won_at_start() -> None:
    # Target equal to the start value
    grid = Grid(size=2, cells=[[4, 1], [2, BLOCKED]])
    controller = SessionController(GameSession(Puzzle(grid=grid, target=4)))
    recorder = Recorder()
    controller.subscribe(recorder)

    controller.start()
    assert recorder.notifications == [Notification.TARGET_ACHIEVED]


def test_start_is_silent_when_not_achieved() -> None:
    controller, recorder = create_controller()
    controller.start()

    assert recorder.notifications == []


def test_generated_puzzle_won_at_start() -> None:
    config = GeneratorConfig(target_min=1, target_max=9)
    session = GameSession.new(12, config)
    assert session.state == SessionState.ACHIEVED

    controller = SessionController(session)
    recorder = Recorder()
    controller.subscribe(recorder)
    controller.start()

    assert Notification.TARGET_ACHIEVED in recorder.notifications


def test_cleared_operation_rejects_next_move() -> None:
    controller, recorder = create_controller()
    controller.dispatch(OperationChosen(None))
    assert controller.operation is None
    assert recorder.notifications == []

    controller.dispatch(CellActivated(0, 1))
    assert recorder.notifications == [Notification.MOVE_REJECTED]
    assert controller.session.path == ((0, 0),)


def test_cleared_operation_still_allows_reclick() -> None:
    controller, recorder = create_controller()
    controller.dispatch(CellActivated(0, 1))
    controller.dispatch(CellActivated(1, 1))
    controller.dispatch(OperationChosen(None))
    controller.dispatch(CellActivated(0, 1))

    assert controller.session.path == ((0, 0), (0, 1))
    assert recorder.notifications == [Notification.PATH_CHANGED] * 3


def test_unknown_operation_symbol_rejected() -> None:
    controller, recorder = create_controller()
    controller.dispatch(OperationChosen(Operation.MULTIPLY))
    controller.dispatch(OperationChosen("%"))

    assert recorder.notifications == [Notification.MOVE_REJECTED]
    assert controller.operation == Operation.MULTIPLY


def test_operation_symbol_accepted() -> None:
    controller, _ = create_controller()
    controller.dispatch(OperationChosen("-"))

    assert controller.operation == Operation.SUBTRACT


def test_activation_uses_operation_chosen_before_it() -> None:
    controller, _ = create_controller()
    controller.dispatch(OperationChosen(Operation.MULTIPLY))
    controller.dispatch(CellActivated(0, 1))
    controller.dispatch(OperationChosen(Operation.SUBTRACT))
    controller.dispatch(CellActivated(1, 1))

    assert controller.session.operations == (None, Operation.MULTIPLY, Operation.SUBTRACT)
    assert controller.session.current_result() == 2 * 3 - 5
