from dataclasses import dataclass
from enum import Enum
from typing import Optional, cast

from numpath.config import GeneratorConfig
from numpath.generator import Generator
from numpath.models import Coord, Operation, Puzzle, is_adjacent


class InvalidMoveError(ValueError):
    def __init__(self, coord: object, reason: str):
        super().__init__(f"Invalid move to {coord}: {reason}")
        self.coord = coord
        self.reason = reason


class SessionState(Enum):
    IDLE = "IDLE"
    IN_PROGRESS = "IN_PROGRESS"
    ACHIEVED = "ACHIEVED"


class MoveOutcome(Enum):
    APPENDED = "APPENDED"
    TRUNCATED = "TRUNCATED"


@dataclass(frozen=True)
class Equation:
    # (value, operation) per path cell; the first term has no operation.
    terms: tuple[tuple[int, Optional[Operation]], ...]
    result: int

    @property
    def text(self) -> str:
        parts = []
        for value, op in self.terms:
            parts.append(str(value) if op is None else f"{op.value} {value}")
        return " ".join(parts) + f" = {self.result}"


class GameSession:
    """
    One attempt at a puzzle: the player's path from the start cell and the
    operation chosen for every step after the first.

    Cell values are read from a snapshot taken when the session is created,
    so the running result never depends on what a UI shows in a cell.
    """

    def __init__(self, puzzle: Puzzle):
        self.puzzle = puzzle
        self._original_values: dict[Coord, int] = {
            coord: puzzle.grid.value_at(coord) for coord in puzzle.grid.coords() if not puzzle.grid.is_blocked(coord)
        }
        self._path: list[Coord] = [puzzle.start]
        self._operations: list[Optional[Operation]] = [None]

    @classmethod
    def new(cls, seed: int | str, config: GeneratorConfig | None = None) -> "GameSession":
        puzzle, _ = Generator(config).generate(seed)
        return cls(puzzle)

    @property
    def target(self) -> int:
        return self.puzzle.target

    @property
    def path(self) -> tuple[Coord, ...]:
        return tuple(self._path)

    @property
    def operations(self) -> tuple[Optional[Operation], ...]:
        return tuple(self._operations)

    @property
    def last(self) -> Coord:
        return self._path[-1]

    @property
    def state(self) -> SessionState:
        if self.is_achieved():
            return SessionState.ACHIEVED
        if len(self._path) == 1:
            return SessionState.IDLE
        return SessionState.IN_PROGRESS

    def original_value(self, coord: Coord) -> int:
        return self._original_values[coord]

    def select_cell(self, coord: Coord, operation: Operation | str | None) -> MoveOutcome:
        """
        Selecting a cell already on the path truncates the path so that it ends
        there. Any other cell is appended with the given operation if it is an
        unblocked neighbour of the last path cell.

        Raises InvalidMoveError and leaves the session untouched otherwise.
        """
        grid = self.puzzle.grid
        if not (isinstance(coord, tuple) and len(coord) == 2 and all(isinstance(x, int) for x in coord)):
            raise InvalidMoveError(coord, "not a (row, col) pair")
        if not grid.in_bounds(coord):
            raise InvalidMoveError(coord, "outside the grid")

        if coord in self._path:
            index = self._path.index(coord)
            del self._path[index + 1 :]
            del self._operations[index + 1 :]
            return MoveOutcome.TRUNCATED

        if operation is None:
            raise InvalidMoveError(coord, "no operation chosen")
        try:
            op = Operation(operation)
        except ValueError:
            raise InvalidMoveError(coord, f"unknown operation '{operation}'") from None
        if grid.is_blocked(coord):
            raise InvalidMoveError(coord, "cell is blocked")
        if not is_adjacent(self.last, coord):
            raise InvalidMoveError(coord, f"not adjacent to {self.last}")

        self._path.append(coord)
        self._operations.append(op)
        return MoveOutcome.APPENDED

    def undo(self) -> bool:
        if len(self._path) <= 1:
            return False
        self._path.pop()
        self._operations.pop()
        return True

    def reset(self) -> bool:
        if len(self._path) == 1:
            return False
        del self._path[1:]
        del self._operations[1:]
        return True

    def current_result(self) -> int:
        result = self._original_values[self._path[0]]
        for coord, op in zip(self._path[1:], self._operations[1:]):
            result = cast(Operation, op).apply(result, self._original_values[coord])
        return result

    def is_achieved(self) -> bool:
        return self.current_result() == self.target

    def equation(self) -> Equation:
        terms = tuple((self._original_values[coord], op) for coord, op in zip(self._path, self._operations))
        return Equation(terms=terms, result=self.current_result())

    def display_value(self, coord: Coord) -> int | None:
        """
        The number to show in a cell: the running result on the last path cell,
        the original value elsewhere, None for blocked cells.
        """
        if coord == self.last:
            return self.current_result()
        return self._original_values.get(coord)

    def valid_moves(self) -> list[Coord]:
        visited = set(self._path)
        return [coord for coord in self.puzzle.grid.neighbours(self.last) if coord not in visited]
