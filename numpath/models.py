import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

Coord = Tuple[int, int]
Cell = Optional[int]

# Sentinel stored in the grid for cells that cannot be entered.
BLOCKED: Cell = None
BLOCKED_SYMBOL = "X"


class Operation(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def function(self) -> Callable[[int, int], int]:
        mapping = {
            Operation.ADD: operator.add,
            Operation.SUBTRACT: operator.sub,
            Operation.MULTIPLY: operator.mul,
            # Floor division, so results stay integers and round toward negative infinity.
            Operation.DIVIDE: operator.floordiv,
        }
        return mapping[self]

    def apply(self, left: int, right: int) -> int:
        return self.function(left, right)


class Direction(str, Enum):
    # Declaration order is the order in which neighbours are explored.
    NORTH = "↑"
    SOUTH = "↓"
    WEST = "←"
    EAST = "→"
    NORTH_WEST = "↖"
    NORTH_EAST = "↗"
    SOUTH_WEST = "↙"
    SOUTH_EAST = "↘"

    @property
    def delta(self) -> Tuple[int, int]:
        mapping = {
            Direction.NORTH: (-1, 0),
            Direction.SOUTH: (1, 0),
            Direction.WEST: (0, -1),
            Direction.EAST: (0, 1),
            Direction.NORTH_WEST: (-1, -1),
            Direction.NORTH_EAST: (-1, 1),
            Direction.SOUTH_WEST: (1, -1),
            Direction.SOUTH_EAST: (1, 1),
        }
        return mapping[self]


def is_adjacent(a: Coord, b: Coord) -> bool:
    """True if b is one of the 8 neighbours of a."""
    dr = abs(a[0] - b[0])
    dc = abs(a[1] - b[1])
    return dr <= 1 and dc <= 1 and (dr, dc) != (0, 0)


@dataclass
class Grid:
    size: int
    cells: List[List[Cell]]

    def __post_init__(self) -> None:
        if len(self.cells) != self.size:
            raise ValueError(f"Grid has {len(self.cells)} rows, expected {self.size}")
        for i, row in enumerate(self.cells):
            if len(row) != self.size:
                raise ValueError(f"Row {i} has {len(row)} cols, expected {self.size}")

    @classmethod
    def empty(cls, size: int) -> "Grid":
        return cls(size=size, cells=[[0] * size for _ in range(size)])

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.size and 0 <= c < self.size

    def is_blocked(self, coord: Coord) -> bool:
        r, c = coord
        return self.cells[r][c] is BLOCKED

    def value_at(self, coord: Coord) -> int:
        r, c = coord
        value = self.cells[r][c]
        if value is None:
            raise ValueError(f"Cell {coord} is blocked")
        return value

    def blocked_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is BLOCKED)

    def coords(self) -> Iterator[Coord]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def neighbours(self, coord: Coord) -> Iterator[Coord]:
        """Yields the in-bounds, non-blocked neighbours of coord in search order."""
        r, c = coord
        for direction in Direction:
            dr, dc = direction.delta
            nxt = (r + dr, c + dc)
            if self.in_bounds(nxt) and not self.is_blocked(nxt):
                yield nxt

    def to_string(self) -> str:
        texts = [[BLOCKED_SYMBOL if cell is BLOCKED else str(cell) for cell in row] for row in self.cells]
        width = max((len(t) for row in texts for t in row), default=1)

        res = []
        border = "+" + "+".join(["-" * (width + 2)] * self.size) + "+"
        res.append(border)
        for row in texts:
            res.append("|" + "|".join(f" {t.rjust(width)} " for t in row) + "|")
            res.append(border)
        return "\n".join(res) + "\n"

    @classmethod
    def from_string(cls, text: str) -> "Grid":
        lines = text.strip().splitlines()
        content_lines = [line.strip() for line in lines if line.strip() and not line.strip().startswith("+")]

        cells: List[List[Cell]] = []
        for line in content_lines:
            # "| 3 | X |" splits into ['', ' 3 ', ' X ', '']
            parts = line.strip("|").split("|")
            row: List[Cell] = []
            for part in parts:
                token = part.strip()
                if token == BLOCKED_SYMBOL:
                    row.append(BLOCKED)
                else:
                    try:
                        row.append(int(token))
                    except ValueError:
                        raise ValueError(f"Invalid cell string: '{token}'") from None
            cells.append(row)

        return cls(size=len(cells), cells=cells)


@dataclass
class Puzzle:
    grid: Grid
    target: int
    seed: Optional[int] = None
    start: Coord = (0, 0)

    def __post_init__(self) -> None:
        if not self.grid.in_bounds(self.start):
            raise ValueError(f"Start {self.start} is outside the grid")
        if self.grid.is_blocked(self.start):
            raise ValueError("Start cell must not be blocked")

    @property
    def start_value(self) -> int:
        return self.grid.value_at(self.start)

    def to_string(self) -> str:
        header = [f"Target: {self.target}"]
        if self.seed is not None:
            header.append(f"Seed: {self.seed}")
        if self.start != (0, 0):
            header.append(f"Start: {self.start[0]},{self.start[1]}")
        return "\n".join(header) + "\n" + self.grid.to_string()

    @classmethod
    def from_string(cls, text: str) -> "Puzzle":
        target: Optional[int] = None
        seed: Optional[int] = None
        start: Coord = (0, 0)
        grid_lines = []

        for line in text.strip().splitlines():
            stripped = line.strip()
            if stripped.startswith(("+", "|")):
                grid_lines.append(stripped)
                continue
            if not stripped:
                continue
            key, _, value = stripped.partition(":")
            key = key.strip().lower()
            if key == "target":
                target = int(value)
            elif key == "seed":
                seed = int(value)
            elif key == "start":
                r, c = value.split(",")
                start = (int(r), int(c))
            else:
                raise ValueError(f"Unknown header line: '{stripped}'")

        if target is None:
            raise ValueError("Puzzle text has no 'Target' line")
        return cls(grid=Grid.from_string("\n".join(grid_lines)), target=target, seed=seed, start=start)
