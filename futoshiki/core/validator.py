"""Validation utilities for inequality Sudoku puzzles."""

from __future__ import annotations
from typing import Iterable, Sequence, Union

from .board import Board, SIZE, NUM_CELLS
from .puzzle import Puzzle, NO_HINT
from .relations import Relation
from ..solvers.propagation import count_solutions


def is_valid_placement(board: Board, row: int, col: int, value: int) -> bool:
    """Check that ``value`` is not yet used in the row, column or box of (row, col)."""
    if value < 1 or value > SIZE:
        return False
    return value in board.get_candidates(row, col)


def is_valid_board(board: Board) -> bool:
    """True if no Sudoku rule is violated (empty cells allowed)."""
    return board.is_valid()


def violated_relations(values: Union[Board, Sequence[int]], relations: Iterable[Relation]) -> list:
    """Relations that do not hold on fully filled ``values``."""
    return [relation for relation in relations if not relation.holds(values)]


def validate_solution(puzzle: Puzzle, solution: Union[Board, Sequence[int]]) -> bool:
    """
    Validate that a filled grid solves the puzzle.

    Args:
        puzzle: The puzzle.
        solution: A Board or 81 row-major values.

    Returns:
        True if every hint is kept, the grid is a valid complete Sudoku and
        every relation holds.
    """
    board = solution if isinstance(solution, Board) else Board.from_cells(solution)
    if not board.is_solved():
        return False

    for idx in range(NUM_CELLS):
        hint = puzzle.grid[idx]
        if hint != NO_HINT and board[idx] != hint:
            return False

    return not violated_relations(board, puzzle.relations)


def has_unique_solution(puzzle: Puzzle) -> bool:
    """Check that a puzzle has exactly one solution."""
    return count_solutions(puzzle.grid, puzzle.relations, limit=2) == 1
