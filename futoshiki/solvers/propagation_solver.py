"""Solver front-end for the propagation engine."""

from __future__ import annotations
from typing import Optional, Sequence

from .base_solver import BaseSolver
from .propagation import SolutionSearch
from ..core.board import Board
from ..core.relations import Relation


class PropagationSolver(BaseSolver):
    """
    Solves inequality Sudoku with bitset domain propagation and MRV search.

    With ``limit`` > 1 the search keeps going after the first solution so
    ``stats.solutions`` tells whether the puzzle is unique.
    """

    name = "Propagation"

    def __init__(self, limit: int = 2):
        super().__init__()
        self.limit = limit

    def _solve(self, board: Board, relations: Sequence[Relation]) -> Optional[Board]:
        search = SolutionSearch(relations, limit=self.limit)
        self.stats.solutions = search.run(board)
        self.stats.nodes_explored = search.stats.nodes_explored
        self.stats.backtracks = search.stats.backtracks
        self.stats.extra["propagations"] = search.stats.propagations
        self.stats.extra["unique"] = self.stats.solutions == 1

        if search.first_solution is None:
            return None
        return search.first_solution.to_board()
