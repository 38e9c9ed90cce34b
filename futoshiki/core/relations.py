"""Ordering relations between grid-adjacent cells."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, TYPE_CHECKING

from .board import SIZE, NUM_CELLS, cell_index, cell_block

if TYPE_CHECKING:
    from .board import Board


@dataclass(frozen=True)
class Relation:
    """The value at cell ``a`` is strictly less than the value at cell ``b``."""
    a: int
    b: int

    def __post_init__(self):
        if not (0 <= self.a < NUM_CELLS and 0 <= self.b < NUM_CELLS):
            raise ValueError(f"Relation indices must be in [0, {NUM_CELLS}), got ({self.a}, {self.b})")

    def is_intra_block(self) -> bool:
        """True if both cells lie in the same 3x3 block."""
        return cell_block(self.a) == cell_block(self.b)

    def holds(self, values) -> bool:
        """Check the relation against an indexable of 81 values."""
        return values[self.a] < values[self.b]

    def to_dict(self) -> Dict[str, int]:
        return {"a": self.a, "b": self.b}

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> Relation:
        return cls(int(data["a"]), int(data["b"]))


def _oriented(board: Board, idx_a: int, idx_b: int) -> Relation:
    val_a, val_b = board[idx_a], board[idx_b]
    if val_a == val_b:
        raise ValueError(f"Adjacent cells {idx_a} and {idx_b} share value {val_a}")
    if val_a < val_b:
        return Relation(idx_a, idx_b)
    return Relation(idx_b, idx_a)


def derive_relations(board: Board) -> List[Relation]:
    """
    Derive every ordering relation between adjacent cells of a complete grid.

    Horizontal pairs are emitted row by row, followed by vertical pairs.
    Each relation is oriented so that it holds on ``board``, giving
    8 * 9 + 9 * 8 = 144 relations.

    Args:
        board: A fully filled board.

    Returns:
        List of relations.
    """
    if not board.is_complete():
        raise ValueError("Relations can only be derived from a complete board")

    relations = []

    for row in range(SIZE):
        for col in range(SIZE - 1):
            relations.append(_oriented(board, cell_index(row, col), cell_index(row, col + 1)))

    for row in range(SIZE - 1):
        for col in range(SIZE):
            relations.append(_oriented(board, cell_index(row, col), cell_index(row + 1, col)))

    return relations


def partition_relations(relations: Iterable[Relation]) -> Tuple[List[Relation], List[Relation]]:
    """Split relations into (intra-block, inter-block) lists, keeping order."""
    intra, inter = [], []
    for relation in relations:
        (intra if relation.is_intra_block() else inter).append(relation)
    return intra, inter
