# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import argparse

from numpath.config import load_config
from numpath.generator import GenerationStats, Generator, UngeneratablePuzzleError
from numpath.io import write_puzzle
from numpath.prng import seed_from_time
from numpath.solver import find_solution


def main() -> None:
    parser = argparse.ArgumentParser(description="numpath puzzle generator")
    parser.add_argument("--seed", type=int, default=None, help="Seed (defaults to the current time as HHMMSS)")
    parser.add_argument("--count", type=int, default=1, help="Number of puzzles, using consecutive seeds")
    parser.add_argument("--jobs", type=int, default=1, help="Worker processes (-1 for all cores)")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument("--out", type=str, default=None, help="Write the first puzzle to this .txt or .svg file")
    args = parser.parse_args()

    config = load_config(args.config)
    gen = Generator(config)
    first_seed = args.seed if args.seed is not None else seed_from_time()
    seeds = [first_seed + i for i in range(args.count)]

    print(f"Generating {args.count} puzzle(s) of size {config.grid_size}x{config.grid_size} from seed {first_seed}...")

    if args.count == 1:
        try:
            puzzle, stats = gen.generate(first_seed)
        except UngeneratablePuzzleError as e:
            print(f"\n{e}")
            puzzles, stats = [], e.stats
        else:
            puzzles = [puzzle]
    else:
        puzzles, stats = gen.generate_many(seeds, n_jobs=args.jobs)

    for puzzle in puzzles:
        print(f"\nPuzzle (seed {puzzle.seed}):")
        print(puzzle.to_string())
        solution = find_solution(puzzle.grid, puzzle.target, puzzle.start)
        if solution is not None:
            print(f"  Example solution: {solution.to_equation(puzzle.grid)}")
            print(f"  Path: {solution.path}")

    if puzzles and args.out:
        write_puzzle(puzzles[0], args.out)
        print(f"\nSaved first puzzle to {args.out}")

    print_stats(stats)


def print_stats(stats: GenerationStats) -> None:
    print("\nGeneration Statistics:")
    print(f"  Puzzles successfully generated: {stats.puzzles_successfully_generated}")
    print(f"  Seeds that failed: {stats.puzzles_failed}")
    print(f"  Numeric refills: {stats.refills}")
    print(f"  Obstacles removed by relaxation: {stats.obstacles_relaxed}")
    print(f"  Verifier nodes expanded: {stats.verifier_nodes}")


if __name__ == "__main__":
    main()
