"""Exported puzzle record."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from .board import Board, SIZE, BOX_SIZE, NUM_CELLS, cell_index
from .relations import Relation

# Marker for cells without a numeric hint in exported puzzles.
NO_HINT = -1


@dataclass(frozen=True)
class Puzzle:
    """
    A generated puzzle: numeric hints plus the ordering relations to honour.

    Attributes:
        grid: 81 row-major values, NO_HINT for unrevealed cells.
        relations: Relations ``a < b`` the solver has to respect.
        difficulty: Name of the difficulty level it was generated for.
        attempts: Number of generation attempts it took.
        relaxed: True if produced by the widened-range fallback attempt.
    """
    grid: Tuple[int, ...]
    relations: Tuple[Relation, ...]
    difficulty: str = ""
    attempts: int = 1
    relaxed: bool = False

    def __post_init__(self):
        if len(self.grid) != NUM_CELLS:
            raise ValueError(f"Puzzle grid must have {NUM_CELLS} cells, got {len(self.grid)}")
        for value in self.grid:
            if value != NO_HINT and not 1 <= value <= SIZE:
                raise ValueError(f"Hint values must be 1-{SIZE} or {NO_HINT}, got {value}")

    @classmethod
    def from_board(cls, board: Board, relations: Sequence[Relation], **meta) -> Puzzle:
        """Export a working board, mapping empty cells to NO_HINT."""
        grid = tuple(value if value else NO_HINT for value in board.to_cells())
        return cls(grid=grid, relations=tuple(relations), **meta)

    @property
    def hint_count(self) -> int:
        return sum(1 for value in self.grid if value != NO_HINT)

    def to_board(self) -> Board:
        """Working board with hints filled in and 0 elsewhere."""
        return Board.from_cells(self.grid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty,
            "hints": self.hint_count,
            "relaxed": self.relaxed,
            "grid": list(self.grid),
            "constraints": [relation.to_dict() for relation in self.relations],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Puzzle:
        return cls(
            grid=tuple(int(v) for v in data["grid"]),
            relations=tuple(Relation.from_dict(c) for c in data["constraints"]),
            difficulty=data.get("difficulty", ""),
            relaxed=bool(data.get("relaxed", False)),
        )

    def render(self, values: Optional[Sequence[int]] = None) -> str:
        """
        Draw the puzzle as text.

        Horizontal relations appear as '<' or '>' between cells, vertical ones
        as 'v' (upper cell smaller) or '^' (upper cell larger) below a cell.

        Args:
            values: Optional 81 values to show instead of the hints,
                    e.g. a solution.
        """
        cells = list(values) if values is not None else list(self.grid)
        right: Dict[int, str] = {}
        below: Dict[int, str] = {}
        for relation in self.relations:
            first, second = sorted((relation.a, relation.b))
            smaller_first = relation.a == first
            if second == first + 1:
                right[first] = '<' if smaller_first else '>'
            else:
                below[first] = 'v' if smaller_first else '^'

        lines = []
        for row in range(SIZE):
            cell_line = ''
            link_line = ''
            for col in range(SIZE):
                idx = cell_index(row, col)
                value = cells[idx]
                cell_line += str(value) if value is not None and value > 0 else '.'
                link_line += below.get(idx, ' ')
                if col < SIZE - 1:
                    gap = right.get(idx, ' ')
                    if gap == ' ' and (col + 1) % BOX_SIZE == 0:
                        gap = '|'
                    cell_line += f' {gap} '
                    link_line += '   '
            lines.append(cell_line.rstrip())
            if row < SIZE - 1:
                lines.append(link_line.rstrip())
        return '\n'.join(lines)

    def __str__(self) -> str:
        return self.render()
