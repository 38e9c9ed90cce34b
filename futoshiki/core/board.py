"""9x9 board representation and cell geometry helpers."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Sequence

SIZE = 9
BOX_SIZE = 3
NUM_CELLS = SIZE * SIZE
EMPTY = 0


def cell_index(row: int, col: int) -> int:
    """Row-major index of (row, col)."""
    return row * SIZE + col


def cell_row(idx: int) -> int:
    return idx // SIZE


def cell_col(idx: int) -> int:
    return idx % SIZE


def cell_block(idx: int) -> int:
    """Index (0-8) of the 3x3 block containing the cell."""
    return (cell_row(idx) // BOX_SIZE) * BOX_SIZE + cell_col(idx) // BOX_SIZE


def _build_peers() -> Tuple[Tuple[int, ...], ...]:
    peers = []
    for idx in range(NUM_CELLS):
        row, col, block = cell_row(idx), cell_col(idx), cell_block(idx)
        peers.append(tuple(
            other for other in range(NUM_CELLS)
            if other != idx and (
                cell_row(other) == row
                or cell_col(other) == col
                or cell_block(other) == block
            )
        ))
    return tuple(peers)


# Cells sharing a row, column or block with each cell (20 apiece).
PEERS = _build_peers()


class Board:
    """
    A 9x9 Sudoku grid.

    Values are 1-9, 0 marks an empty cell. Cells can be addressed either by
    (row, col) or by their row-major index in [0, 81).
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates empty board.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> Board:
        """Create a deep copy of the board."""
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        self.grid[row, col] = EMPTY

    def __getitem__(self, idx: int) -> int:
        return int(self.grid[cell_row(idx), cell_col(idx)])

    def __setitem__(self, idx: int, value: int) -> None:
        self.set(cell_row(idx), cell_col(idx), value)

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == EMPTY

    def get_row(self, row: int) -> np.ndarray:
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                         box_col:box_col + BOX_SIZE].flatten()

    def get_candidates(self, row: int, col: int) -> List[int]:
        """
        Values that can still be placed at an empty (row, col).

        Returns:
            Ascending list of values not used in the row, column or box.
            Empty list if the cell is already filled.
        """
        if not self.is_empty(row, col):
            return []

        used = set(self.get_row(row)) | set(self.get_col(col)) | set(self.get_box(row, col))
        return [value for value in range(1, SIZE + 1) if value not in used]

    def get_empty_cells(self) -> List[int]:
        """Row-major indices of all empty cells."""
        return [int(idx) for idx in np.flatnonzero(self.grid == EMPTY)]

    def count_empty(self) -> int:
        return int(np.sum(self.grid == EMPTY))

    def count_filled(self) -> int:
        return int(np.sum(self.grid != EMPTY))

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check that no row, column or box repeats a value.
        Does not check if the board is complete.
        """
        units = [self.get_row(i) for i in range(SIZE)]
        units += [self.get_col(j) for j in range(SIZE)]
        units += [
            self.get_box(box_row, box_col)
            for box_row in range(0, SIZE, BOX_SIZE)
            for box_col in range(0, SIZE, BOX_SIZE)
        ]
        for unit in units:
            non_zero = unit[unit != EMPTY]
            if len(non_zero) != len(set(non_zero)):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the board is completely and correctly filled."""
        return self.is_complete() and self.is_valid()

    def to_cells(self) -> List[int]:
        """Flatten to a row-major list of 81 ints."""
        return [int(v) for v in self.grid.flatten()]

    @classmethod
    def from_cells(cls, cells: Sequence[int]) -> Board:
        """
        Create a board from 81 row-major values.

        Non-positive values (including the exported "no hint" marker) become
        empty cells.
        """
        if len(cells) != NUM_CELLS:
            raise ValueError(f"Expected {NUM_CELLS} cells, got {len(cells)}")
        arr = np.array([max(int(v), EMPTY) for v in cells], dtype=np.int32)
        return cls(arr.reshape(SIZE, SIZE))

    def to_string(self) -> str:
        """Compact 81-char string, 0 for empty cells."""
        return ''.join(str(v) for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str) -> Board:
        """
        Create a board from an 81-char string.

        '0' or '.' mark empty cells; whitespace is ignored.
        """
        s = ''.join(s.split())
        if len(s) != NUM_CELLS:
            raise ValueError(f"String length must be {NUM_CELLS}, got {len(s)}")

        cells = []
        for c in s:
            if c == '.':
                cells.append(EMPTY)
            elif c.isdigit():
                cells.append(int(c))
            else:
                raise ValueError(f"Invalid cell character: {c!r}")
        return cls.from_cells(cells)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == EMPTY else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'
            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"Board(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
