"""Solvers module for inequality Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .propagation import DomainState, SolutionSearch, count_solutions, find_solution, propagate_all
from .propagation_solver import PropagationSolver

__all__ = [
    "BaseSolver",
    "SolverStats",
    "DomainState",
    "SolutionSearch",
    "count_solutions",
    "find_solution",
    "propagate_all",
    "PropagationSolver",
]
