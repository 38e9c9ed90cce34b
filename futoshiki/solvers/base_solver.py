"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Sequence, Tuple
import time
import tracemalloc

from ..core.board import Board
from ..core.relations import Relation


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    solutions: int = 0
    backtracks: int = 0
    nodes_explored: int = 0

    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "solutions": self.solutions,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for inequality Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: Board, relations: Sequence[Relation]) -> Tuple[Optional[Board], SolverStats]:
        """
        Solve a puzzle with timing and memory tracking.

        Args:
            board: The hints, 0 for empty cells.
            relations: Ordering relations the solution must satisfy.

        Returns:
            Tuple of (solution or None, stats).
        """
        self.reset_stats()

        tracemalloc.start()
        start_time = time.perf_counter()

        try:
            solution = self._solve(board.copy(), relations)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        self.stats.solved = solution is not None and solution.is_solved() and all(
            relation.holds(solution) for relation in relations
        )
        return solution, self.stats

    @abstractmethod
    def _solve(self, board: Board, relations: Sequence[Relation]) -> Optional[Board]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A copy of the puzzle to solve (can be modified).
            relations: Ordering relations.

        Returns:
            The solved board, or None if no solution found.
        """
        pass

    def reset_stats(self) -> None:
        self.stats = SolverStats(algorithm=self.name)
