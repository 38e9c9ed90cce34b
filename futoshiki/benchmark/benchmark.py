"""Benchmarking framework for puzzle generation and solving."""

from __future__ import annotations
import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

import numpy as np
from tqdm import tqdm

from ..core.puzzle import Puzzle
from ..generator import PuzzleGenerator, Difficulty, GenerationError
from ..solvers import PropagationSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from generating and re-solving a single puzzle."""
    puzzle_id: int
    difficulty: str
    generated: bool
    generation_seconds: float
    hints: int = 0
    relations: int = 0
    attempts: int = 0
    relaxed: bool = False
    unique: bool = False
    solve_seconds: float = 0.0
    memory_bytes: int = 0
    nodes_explored: int = 0
    backtracks: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "generated": self.generated,
            "generation_seconds": self.generation_seconds,
            "hints": self.hints,
            "relations": self.relations,
            "attempts": self.attempts,
            "relaxed": self.relaxed,
            "unique": self.unique,
            "solve_seconds": self.solve_seconds,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            **self.extra
        }


class GenerationBenchmark:
    """
    Measures puzzle generation per difficulty.

    Every generated puzzle is solved again with the propagation solver to
    confirm it is unique and to record how much search it takes.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            seed: Random seed for reproducibility.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.seed = seed
        self.solver = PropagationSolver(limit=2)
        self.puzzles: Dict[str, List[Puzzle]] = {}
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        generator = PuzzleGenerator(seed=self.seed)
        self.results = []
        self.puzzles = {d.value: [] for d in self.difficulties}

        total = len(self.difficulties) * self.puzzles_per_difficulty
        pbar = tqdm(total=total, desc="Benchmarking", disable=not show_progress)

        for difficulty in self.difficulties:
            for puzzle_id in range(self.puzzles_per_difficulty):
                self.results.append(self._run_single(generator, difficulty, puzzle_id))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, generator: PuzzleGenerator, difficulty: Difficulty,
                    puzzle_id: int) -> BenchmarkResult:
        start = time.perf_counter()
        try:
            puzzle = generator.generate(difficulty)
        except GenerationError as e:
            logger.warning("Benchmark puzzle %d (%s) failed: %s", puzzle_id, difficulty.value, e)
            return BenchmarkResult(
                puzzle_id=puzzle_id,
                difficulty=difficulty.value,
                generated=False,
                generation_seconds=time.perf_counter() - start,
                extra={"error": str(e)}
            )
        generation_seconds = time.perf_counter() - start
        self.puzzles[difficulty.value].append(puzzle)

        _, stats = self.solver.solve(puzzle.to_board(), puzzle.relations)
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty.value,
            generated=True,
            generation_seconds=generation_seconds,
            hints=puzzle.hint_count,
            relations=len(puzzle.relations),
            attempts=puzzle.attempts,
            relaxed=puzzle.relaxed,
            unique=stats.solutions == 1,
            solve_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            nodes_explored=stats.nodes_explored,
            backtracks=stats.backtracks,
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics per difficulty."""
        summary: Dict[str, Any] = {
            "puzzles_per_difficulty": self.puzzles_per_difficulty,
            "difficulties": [d.value for d in self.difficulties],
            "results_by_difficulty": {}
        }

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if not diff_results:
                continue
            generated = [r for r in diff_results if r.generated]
            entry: Dict[str, Any] = {
                "generated": len(generated),
                "tested": len(diff_results),
                "avg_generation_seconds": float(np.mean([r.generation_seconds for r in diff_results])),
            }
            if generated:
                hints = [r.hints for r in generated]
                entry.update({
                    "avg_hints": float(np.mean(hints)),
                    "min_hints": int(min(hints)),
                    "max_hints": int(max(hints)),
                    "avg_relations": float(np.mean([r.relations for r in generated])),
                    "avg_attempts": float(np.mean([r.attempts for r in generated])),
                    "relaxed": sum(1 for r in generated if r.relaxed),
                    "unique": sum(1 for r in generated if r.unique),
                    "avg_solve_seconds": float(np.mean([r.solve_seconds for r in generated])),
                    "avg_nodes_explored": float(np.mean([r.nodes_explored for r in generated])),
                })
            summary["results_by_difficulty"][difficulty.value] = entry

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        with open(os.path.join(output_dir, "benchmark_results.json"), "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        with open(os.path.join(output_dir, "benchmark_summary.json"), "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        with open(os.path.join(output_dir, "puzzles.json"), "w") as f:
            json.dump(
                {name: [p.to_dict() for p in puzzles] for name, puzzles in self.puzzles.items()},
                f, indent=2
            )

        logger.info("Results and puzzles saved to %s", output_dir)
