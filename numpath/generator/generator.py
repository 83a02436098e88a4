import multiprocessing
from collections.abc import Iterable
from dataclasses import dataclass

from joblib import effective_n_jobs

from numpath.config import GeneratorConfig
from numpath.models import BLOCKED, Coord, Grid, Puzzle
from numpath.prng import Prng
from numpath.solver import SolverStatus, Verifier

START: Coord = (0, 0)


@dataclass
class GenerationStats:
    puzzles_successfully_generated: int = 0
    puzzles_failed: int = 0
    refills: int = 0
    obstacles_relaxed: int = 0
    verifier_nodes: int = 0

    def add(self, other: "GenerationStats") -> None:
        self.puzzles_successfully_generated += other.puzzles_successfully_generated
        self.puzzles_failed += other.puzzles_failed
        self.refills += other.refills
        self.obstacles_relaxed += other.obstacles_relaxed
        self.verifier_nodes += other.verifier_nodes


class UngeneratablePuzzleError(RuntimeError):
    def __init__(self, seed: int | str, stats: GenerationStats):
        super().__init__(f"Could not generate a solvable puzzle for seed {seed}")
        self.seed = seed
        self.stats = stats


class Generator:
    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config if config is not None else GeneratorConfig()

    def generate(self, seed: int | str) -> tuple[Puzzle, GenerationStats]:
        """
        Generates the puzzle for a seed.

        The target is drawn first, then every cell value in row-major order, then
        the obstacles. While the grid has no solution, every cell that is neither
        blocked nor the start is refilled from the same random stream. After
        max_refills failed refills the most recently placed obstacle is removed,
        as long as at least blocked_min obstacles remain.
        """
        cfg = self.config
        prng = Prng(seed)
        stats = GenerationStats()

        target = prng.next_int(cfg.target_min, cfg.target_max)
        grid = self._create_random_grid(prng)
        obstacles = self._place_obstacles(grid, prng)

        refills_for_layout = 0
        while True:
            result = Verifier(grid, target, START).solve()
            stats.verifier_nodes += result.nodes_expanded

            if result.status == SolverStatus.SOLVED:
                stats.puzzles_successfully_generated += 1
                return Puzzle(grid=grid, target=target, seed=int(seed), start=START), stats

            if refills_for_layout >= cfg.max_refills:
                if len(obstacles) <= cfg.blocked_min:
                    stats.puzzles_failed += 1
                    raise UngeneratablePuzzleError(seed, stats)

                # The freed cell gets its value from the refill below.
                r, c = obstacles.pop()
                grid.cells[r][c] = cfg.value_min
                stats.obstacles_relaxed += 1
                refills_for_layout = 0

            self._refill(grid, prng)
            stats.refills += 1
            refills_for_layout += 1

    def generate_many(self, seeds: Iterable[int | str], n_jobs: int = 1) -> tuple[list[Puzzle], GenerationStats]:
        """
        Generates one puzzle per seed, in seed order. Seeds that cannot produce
        a puzzle are skipped and counted in puzzles_failed.
        """
        seeds = list(seeds)
        n_workers = min(effective_n_jobs(n_jobs), max(len(seeds), 1))
        puzzles: list[Puzzle] = []
        total_stats = GenerationStats()

        if n_workers == 1:
            results = map(self._generate_or_none, seeds)
            self._collect(results, len(seeds), puzzles, total_stats)
            return puzzles, total_stats

        pool = multiprocessing.Pool(processes=n_workers)
        try:
            results = pool.imap(self._generate_or_none, seeds)
            self._collect(results, len(seeds), puzzles, total_stats)
        finally:
            pool.terminate()
            pool.join()

        return puzzles, total_stats

    def _generate_or_none(self, seed: int | str) -> tuple[Puzzle | None, GenerationStats]:
        try:
            return self.generate(seed)
        except UngeneratablePuzzleError as e:
            return None, e.stats

    def _collect(
        self,
        results: Iterable[tuple[Puzzle | None, GenerationStats]],
        count: int,
        puzzles: list[Puzzle],
        total_stats: GenerationStats,
    ) -> None:
        for done, (puzzle, stats) in enumerate(results, 1):
            total_stats.add(stats)
            if puzzle is not None:
                puzzles.append(puzzle)

            if done % 10 == 0 or done == count:
                print(
                    f"[Generator] Seeds: {done}/{count} | Generated: {len(puzzles)} | "
                    f"Failed: {total_stats.puzzles_failed} | Refills: {total_stats.refills}"
                )

    def _create_random_grid(self, prng: Prng) -> Grid:
        size = self.config.grid_size
        grid = Grid.empty(size)
        for r in range(size):
            for c in range(size):
                grid.cells[r][c] = prng.next_int(self.config.value_min, self.config.value_max)
        return grid

    def _place_obstacles(self, grid: Grid, prng: Prng) -> list[Coord]:
        """Blocks a random number of cells and returns them in placement order."""
        size = self.config.grid_size
        count = prng.next_int(self.config.blocked_min, self.config.blocked_max)
        placed: list[Coord] = []

        while len(placed) < count:
            r = prng.next_int(0, size - 1)
            c = prng.next_int(0, size - 1)
            if (r, c) == START or grid.cells[r][c] is BLOCKED:
                continue
            grid.cells[r][c] = BLOCKED
            placed.append((r, c))

        return placed

    def _refill(self, grid: Grid, prng: Prng) -> None:
        for r in range(grid.size):
            for c in range(grid.size):
                if grid.cells[r][c] is BLOCKED or (r, c) == START:
                    continue
                grid.cells[r][c] = prng.next_int(self.config.value_min, self.config.value_max)
