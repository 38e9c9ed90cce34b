"""Inequality Sudoku puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import logging
import random
from dataclasses import replace
from typing import List, Optional, Tuple, Union

from .difficulty import Difficulty, DifficultyProfile
from .synthesizer import synthesize
from ..core.board import Board, NUM_CELLS
from ..core.puzzle import Puzzle
from ..core.relations import Relation, derive_relations, partition_relations
from ..solvers.propagation import count_solutions

logger = logging.getLogger(__name__)

FULL_HINT_RANGE = (0, NUM_CELLS)


class GenerationError(RuntimeError):
    """No puzzle satisfying the difficulty's contract could be generated."""


DifficultyLike = Union[Difficulty, str]


class PuzzleGenerator:
    """
    Generator for inequality Sudoku puzzles.

    Algorithm:
    1. Generate a complete valid Sudoku grid
    2. Derive the ordering relation of every pair of adjacent cells
    3. Keep all relations inside blocks and a share of those across blocks
    4. Reveal numbers until the puzzle has a unique solution
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None,
                 max_attempts: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            rng: Random source to use instead of a seeded one.
            max_attempts: Override the per-difficulty attempt bound.
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.max_attempts = max_attempts

    def generate(self, difficulty: DifficultyLike = Difficulty.NORMAL) -> Puzzle:
        """
        Generate a puzzle with the specified difficulty.

        Args:
            difficulty: Difficulty level or its name.

        Returns:
            A Puzzle with a unique solution.

        Raises:
            GenerationError: If no puzzle could be produced. Only the
                zero-hint level can fail this way.
        """
        puzzle, _ = self.generate_with_solution(difficulty)
        return puzzle

    def generate_batch(self, count: int, difficulty: DifficultyLike = Difficulty.NORMAL) -> List[Puzzle]:
        """Generate ``count`` puzzles of the same difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    def generate_with_solution(self, difficulty: DifficultyLike = Difficulty.NORMAL) -> Tuple[Puzzle, Board]:
        """
        Generate a puzzle along with its solution.

        Returns:
            Tuple of (puzzle, solution).
        """
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.from_name(difficulty)
        profile = difficulty.profile
        max_attempts = self.max_attempts if self.max_attempts is not None else profile.max_attempts

        for attempt in range(1, max_attempts + 1):
            result = self._attempt(profile)
            if result is not None:
                board, relations, solution = result
                logger.info("Generated %s puzzle with %d hints after %d attempt(s)",
                            difficulty.value, board.count_filled(), attempt)
                return Puzzle.from_board(board, relations, difficulty=difficulty.value,
                                         attempts=attempt), solution

        if not profile.allow_fallback:
            raise GenerationError(
                f"Could not generate a {difficulty.value} puzzle in {max_attempts} attempts"
            )

        logger.warning("No %s puzzle within hints %s after %d attempts, widening to %s",
                       difficulty.value, profile.hint_range, max_attempts, FULL_HINT_RANGE)
        result = self._attempt(replace(profile, hint_range=FULL_HINT_RANGE))
        if result is None:
            raise GenerationError(f"Fallback attempt for {difficulty.value} failed")
        board, relations, solution = result
        puzzle = Puzzle.from_board(board, relations, difficulty=difficulty.value,
                                   attempts=max_attempts + 1, relaxed=True)
        return puzzle, solution

    def _select_relations(self, solution: Board, profile: DifficultyProfile) -> List[Relation]:
        """All intra-block relations plus a random share of the inter-block ones."""
        intra, inter = partition_relations(derive_relations(solution))
        self.rng.shuffle(inter)
        keep = int(len(inter) * profile.inter_block_keep_ratio)
        return intra + inter[:keep]

    def _attempt(self, profile: DifficultyProfile) -> Optional[Tuple[Board, List[Relation], Board]]:
        """
        One generation attempt.

        Returns:
            (hints board, relations, solution), or None if the attempt has to
            be abandoned.
        """
        min_hints, max_hints = profile.min_hints, profile.max_hints
        solution = synthesize(self.rng)
        relations = self._select_relations(solution, profile)

        board = Board()
        order = list(range(NUM_CELLS))
        self.rng.shuffle(order)
        for idx in order[:profile.initial_reveals]:
            board[idx] = solution[idx]

        while True:
            count = count_solutions(board, relations, limit=2)
            if count == 0:
                logger.debug("Attempt has no solution, abandoning")
                return None
            if board.count_filled() > max_hints:
                logger.debug("Uniqueness needs more than %d hints, abandoning", max_hints)
                return None
            if count == 1:
                break

            unrevealed = board.get_empty_cells()
            if not unrevealed:
                logger.debug("Every cell revealed without reaching uniqueness")
                return None
            idx = self.rng.choice(unrevealed)
            board[idx] = solution[idx]

        hints = board.count_filled()
        if not min_hints <= hints <= max_hints:
            logger.debug("Unique with %d hints, outside %s", hints, profile.hint_range)
            return None
        return board, relations, solution


def generate_puzzle(difficulty: str, seed: Optional[int] = None) -> Puzzle:
    """
    Generate a puzzle for a named difficulty.

    Unknown names fall back to "Normal".

    Args:
        difficulty: Difficulty name, matched case-sensitively.
        seed: Optional seed for reproducible output.
    """
    return PuzzleGenerator(seed=seed).generate(Difficulty.from_name(difficulty))
