"""Random complete Sudoku grids."""

from __future__ import annotations
import random
from typing import Optional

from ..core.board import Board, NUM_CELLS, cell_row, cell_col


def synthesize(rng: Optional[random.Random] = None) -> Board:
    """
    Generate a random, fully solved Sudoku grid.

    Cells are filled in row-major order by backtracking; the candidates of
    each cell are shuffled before being tried, which is what makes successive
    grids differ.

    Args:
        rng: Random source. A fresh unseeded one is used if omitted.

    Returns:
        A complete, valid board.
    """
    rng = rng or random.Random()
    board = Board()
    if not _fill(board, 0, rng):
        raise RuntimeError("Backtracking failed to complete a Sudoku grid")
    return board


def _fill(board: Board, idx: int, rng: random.Random) -> bool:
    if idx == NUM_CELLS:
        return True

    row, col = cell_row(idx), cell_col(idx)
    candidates = board.get_candidates(row, col)
    rng.shuffle(candidates)

    for value in candidates:
        board.set(row, col, value)
        if _fill(board, idx + 1, rng):
            return True
        board.clear(row, col)

    return False
