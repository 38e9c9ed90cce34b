"""Inequality Sudoku puzzle generator and solver."""

from .core import Board, Puzzle, Relation, NO_HINT
from .generator import Difficulty, PuzzleGenerator, GenerationError, generate_puzzle
from .solvers import count_solutions

__version__ = "1.0.0"

__all__ = [
    "Board",
    "Puzzle",
    "Relation",
    "NO_HINT",
    "Difficulty",
    "PuzzleGenerator",
    "GenerationError",
    "generate_puzzle",
    "count_solutions",
]
