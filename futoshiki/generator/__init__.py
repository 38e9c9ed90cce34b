"""Generator module for creating inequality Sudoku puzzles."""

from .difficulty import Difficulty, DifficultyProfile
from .generator import PuzzleGenerator, GenerationError, generate_puzzle
from .synthesizer import synthesize

__all__ = [
    "Difficulty",
    "DifficultyProfile",
    "PuzzleGenerator",
    "GenerationError",
    "generate_puzzle",
    "synthesize",
]
