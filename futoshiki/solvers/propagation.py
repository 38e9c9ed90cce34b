"""Bitset domain propagation and solution counting for inequality Sudoku."""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence, Tuple, Union

from ..core.board import Board, NUM_CELLS, SIZE, PEERS
from ..core.relations import Relation

logger = logging.getLogger(__name__)

# Bit v-1 set means value v is still possible.
FULL_DOMAIN = (1 << SIZE) - 1

POPCOUNT = tuple(bin(mask).count("1") for mask in range(FULL_DOMAIN + 1))
# Smallest / largest candidate of a domain; 0 for the empty domain.
MIN_VALUE = tuple((mask & -mask).bit_length() for mask in range(FULL_DOMAIN + 1))
MAX_VALUE = tuple(mask.bit_length() for mask in range(FULL_DOMAIN + 1))


def value_mask(value: int) -> int:
    return 1 << (value - 1)


def values_below(value: int) -> int:
    """Mask of all values strictly less than ``value``."""
    if value <= 1:
        return 0
    return (1 << (value - 1)) - 1


def values_above(value: int) -> int:
    """Mask of all values strictly greater than ``value``."""
    return FULL_DOMAIN & ~((1 << value) - 1)


def domain_values(mask: int) -> List[int]:
    """Candidate values of a domain in increasing order."""
    return [value for value in range(1, SIZE + 1) if mask & value_mask(value)]


GridLike = Union[Board, Sequence[int]]
RelationLike = Union[Relation, Tuple[int, int]]


@dataclass
class SearchStats:
    """Counters collected during a search."""
    nodes_explored: int = 0
    backtracks: int = 0
    propagations: int = 0


class DomainState:
    """The 81 cell domains; the only structure mutated during search."""

    __slots__ = ("domains",)

    def __init__(self, domains: Optional[List[int]] = None):
        self.domains = list(domains) if domains is not None else [FULL_DOMAIN] * NUM_CELLS

    def copy(self) -> DomainState:
        return DomainState(self.domains)

    def restrict(self, idx: int, mask: int, queue: Deque[int]) -> bool:
        """
        Intersect the domain of ``idx`` with ``mask``.

        Cells that collapse to a single value are pushed onto ``queue`` so
        their value gets excluded from their peers.

        Returns:
            False if the domain became empty.
        """
        current = self.domains[idx]
        narrowed = current & mask
        if narrowed == current:
            return True
        if not narrowed:
            return False
        self.domains[idx] = narrowed
        if POPCOUNT[narrowed] == 1:
            queue.append(idx)
        return True

    def to_board(self) -> Board:
        """Board of the assigned cells, 0 elsewhere."""
        return Board.from_cells([
            MAX_VALUE[d] if POPCOUNT[d] == 1 else 0 for d in self.domains
        ])


def _exclude_singletons(state: DomainState, queue: Deque[int]) -> bool:
    domains = state.domains
    while queue:
        idx = queue.popleft()
        keep = FULL_DOMAIN & ~domains[idx]
        for peer in PEERS[idx]:
            if not state.restrict(peer, keep, queue):
                return False
    return True


def _sweep_relations(state: DomainState, relations: Sequence[Tuple[int, int]],
                     queue: Deque[int]) -> Optional[bool]:
    """One pass over all relations. Returns None on failure, else whether anything changed."""
    domains = state.domains
    changed = False
    for a, b in relations:
        da = domains[a]
        db = domains[b]
        new_da = da & values_below(MAX_VALUE[db])
        if new_da != da:
            if not state.restrict(a, new_da, queue):
                return None
            changed = True
        new_db = db & values_above(MIN_VALUE[new_da])
        if new_db != db:
            if not state.restrict(b, new_db, queue):
                return None
            changed = True
    return changed


def propagate_all(state: DomainState, relations: Sequence[Tuple[int, int]],
                  queue: Optional[Deque[int]] = None) -> bool:
    """
    Run Sudoku exclusion and ordering exclusion to a fixed point.

    Args:
        state: Domains to narrow in place.
        relations: (a, b) index pairs meaning value[a] < value[b].
        queue: Cells whose singleton value still has to be removed from
               their peers.

    Returns:
        False if some domain became empty.
    """
    if queue is None:
        queue = deque()
    while True:
        if not _exclude_singletons(state, queue):
            return False
        changed = _sweep_relations(state, relations, queue)
        if changed is None:
            return False
        if not changed and not queue:
            return True


class SolutionSearch:
    """
    Backtracking search over bitset domains with a solution cap.

    Each branch works on its own copy of the domains, so nothing has to be
    undone when a branch fails.
    """

    def __init__(self, relations: Sequence[RelationLike], limit: int = 2):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.relations = _as_pairs(relations)
        self.limit = limit
        self.count = 0
        self.first_solution: Optional[DomainState] = None
        self.stats = SearchStats()

    def initial_state(self, grid: GridLike) -> Optional[DomainState]:
        """Domains after fixing the given cells, or None if they conflict."""
        cells = _as_cells(grid)
        state = DomainState()
        queue: Deque[int] = deque()
        for idx, value in enumerate(cells):
            if value > 0 and not state.restrict(idx, value_mask(value), queue):
                return None
        self.stats.propagations += 1
        if not propagate_all(state, self.relations, queue):
            return None
        return state

    def run(self, grid: GridLike) -> int:
        state = self.initial_state(grid)
        if state is None:
            logger.debug("Fixed cells are inconsistent, no solutions")
            return 0
        self._solve_recursive(state)
        return self.count

    def _select_cell(self, state: DomainState) -> Optional[int]:
        """Unassigned cell with the fewest candidates (first found on ties)."""
        best_idx = None
        best_len = SIZE + 1
        for idx, domain in enumerate(state.domains):
            size = POPCOUNT[domain]
            if size == 1:
                continue
            if size < best_len:
                best_len = size
                best_idx = idx
                if size == 2:
                    break
        return best_idx

    def _solve_recursive(self, state: DomainState) -> None:
        if self.count >= self.limit:
            return
        self.stats.nodes_explored += 1

        idx = self._select_cell(state)
        if idx is None:
            self.count += 1
            if self.first_solution is None:
                self.first_solution = state
            return

        for value in domain_values(state.domains[idx]):
            if self.count >= self.limit:
                return
            branch = state.copy()
            queue: Deque[int] = deque()
            branch.restrict(idx, value_mask(value), queue)
            self.stats.propagations += 1
            if propagate_all(branch, self.relations, queue):
                self._solve_recursive(branch)
            else:
                self.stats.backtracks += 1


def _as_cells(grid: GridLike) -> List[int]:
    cells = grid.to_cells() if isinstance(grid, Board) else [int(v) for v in grid]
    if len(cells) != NUM_CELLS:
        raise ValueError(f"Expected {NUM_CELLS} cells, got {len(cells)}")
    for value in cells:
        if value > SIZE:
            raise ValueError(f"Cell values must be at most {SIZE}, got {value}")
    return cells


def _as_pairs(relations: Sequence[RelationLike]) -> List[Tuple[int, int]]:
    pairs = []
    for relation in relations:
        if not isinstance(relation, Relation):
            a, b = relation
            relation = Relation(int(a), int(b))
        pairs.append((relation.a, relation.b))
    return pairs


def count_solutions(grid: GridLike, relations: Sequence[RelationLike], limit: int = 2) -> int:
    """
    Count the solutions of a partially filled grid, up to ``limit``.

    Args:
        grid: Board or 81 row-major values; values <= 0 are empty cells.
        relations: Relations (or (a, b) pairs) meaning value[a] < value[b].
        limit: Stop counting once this many solutions are found.

    Returns:
        Number of solutions found, at most ``limit``.
    """
    return SolutionSearch(relations, limit).run(grid)


def find_solution(grid: GridLike, relations: Sequence[RelationLike]) -> Optional[Board]:
    """First solution in search order, or None if there is none."""
    search = SolutionSearch(relations, limit=1)
    search.run(grid)
    if search.first_solution is None:
        return None
    return search.first_solution.to_board()
