# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from numpath.models import BLOCKED, Grid, Puzzle
from numpath.solver import find_solution


def main() -> None:
    # A sample 4x4 grid with three obstacles
    grid = Grid(
        size=4,
        cells=[
            [3, 7, BLOCKED, 2],
            [5, 1, 4, 8],
            [BLOCKED, 6, 9, 2],
            [4, 2, BLOCKED, 1],
        ],
    )

    puzzle = Puzzle(grid=grid, target=42)

    print("Example 4x4 numpath puzzle:")
    print(puzzle.to_string())

    solution = find_solution(puzzle.grid, puzzle.target, puzzle.start)
    if solution is not None:
        print(f"One way to reach {puzzle.target}: {solution.to_equation(puzzle.grid)}")


if __name__ == "__main__":
    main()
