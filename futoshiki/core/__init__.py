"""Core module for board representation, relations and validation."""

from .board import Board, PEERS, cell_index, cell_row, cell_col, cell_block
from .relations import Relation, derive_relations, partition_relations
from .puzzle import Puzzle, NO_HINT
from .validator import is_valid_placement, is_valid_board, validate_solution, has_unique_solution

__all__ = [
    "Board",
    "PEERS",
    "cell_index",
    "cell_row",
    "cell_col",
    "cell_block",
    "Relation",
    "derive_relations",
    "partition_relations",
    "Puzzle",
    "NO_HINT",
    "is_valid_placement",
    "is_valid_board",
    "validate_solution",
    "has_unique_solution",
]
