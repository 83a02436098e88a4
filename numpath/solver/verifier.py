from dataclasses import dataclass, field
from enum import Enum

from numpath.models import Coord, Grid, Operation


class SolverStatus(Enum):
    SOLVED = "SOLVED"
    NO_SOLUTION = "NO_SOLUTION"


@dataclass
class Solution:
    """A path from the start cell and the operation chosen for each step after the first."""

    path: list[Coord]
    operations: list[Operation]

    def result(self, grid: Grid) -> int:
        value = grid.value_at(self.path[0])
        for coord, op in zip(self.path[1:], self.operations):
            value = op.apply(value, grid.value_at(coord))
        return value

    def to_equation(self, grid: Grid) -> str:
        parts = [str(grid.value_at(self.path[0]))]
        for coord, op in zip(self.path[1:], self.operations):
            parts.append(f"{op.value} {grid.value_at(coord)}")
        return " ".join(parts) + f" = {self.result(grid)}"


@dataclass
class SolverResult:
    status: SolverStatus
    solution: Solution | None = None
    nodes_expanded: int = 0


@dataclass
class Verifier:
    """
    Exhaustive depth-first search over paths from the start cell.

    Each step moves to an unvisited, non-blocked 8-neighbour and combines the
    running result with the neighbour's value using one of the four operations.
    The search succeeds as soon as the running result equals the target, which
    includes the bare start value before any move.
    """

    grid: Grid
    target: int
    start: Coord = (0, 0)
    nodes_expanded: int = 0
    _visited: set[Coord] = field(default_factory=set, init=False, repr=False)
    _path: list[Coord] = field(default_factory=list, init=False, repr=False)
    _operations: list[Operation] = field(default_factory=list, init=False, repr=False)

    def solve(self) -> SolverResult:
        self.nodes_expanded = 0
        self._visited = set()
        self._path = [self.start]
        self._operations = []

        if self._search(self.start, self.grid.value_at(self.start)):
            solution = Solution(path=list(self._path), operations=list(self._operations))
            return SolverResult(SolverStatus.SOLVED, solution, self.nodes_expanded)
        return SolverResult(SolverStatus.NO_SOLUTION, None, self.nodes_expanded)

    def _search(self, coord: Coord, result: int) -> bool:
        self.nodes_expanded += 1
        if result == self.target:
            return True

        self._visited.add(coord)

        for neighbour in self.grid.neighbours(coord):
            if neighbour in self._visited:
                continue
            value = self.grid.value_at(neighbour)

            for op in Operation:
                if op is Operation.DIVIDE and value == 0:
                    continue

                self._path.append(neighbour)
                self._operations.append(op)
                if self._search(neighbour, op.apply(result, value)):
                    return True
                # Undo
                self._path.pop()
                self._operations.pop()

        self._visited.discard(coord)
        return False


def has_solution(grid: Grid, target: int, start: Coord = (0, 0)) -> bool:
    return Verifier(grid, target, start).solve().status == SolverStatus.SOLVED


def find_solution(grid: Grid, target: int, start: Coord = (0, 0)) -> Solution | None:
    return Verifier(grid, target, start).solve().solution
