"""Clue-constrained solver: count solutions or reconstruct one board."""

from __future__ import annotations
from typing import Dict, List, Optional, Set, Sequence, Tuple

from .base_solver import BaseSolver
from .row_search import RowSearch
from ..core.board import BerryBoard, N
from ..core.patterns import get_patterns_excluding_columns
from ..core.puzzle import ClueConstraint, to_constraints


def build_search(constraints: Sequence[ClueConstraint]) -> RowSearch:
    """
    Prepare a search for the given clues.

    A clue cell never holds a berry, so each row's candidates are restricted
    up front to patterns leaving that row's clue columns empty.
    """
    forbidden: Dict[int, Set[int]] = {}
    for clue in constraints:
        if not (0 <= clue.row < N and 0 <= clue.col < N):
            continue
        forbidden.setdefault(clue.row, set()).add(clue.col)

    row_candidates = [get_patterns_excluding_columns(forbidden.get(r, ())) for r in range(N)]
    return RowSearch(row_candidates, constraints)


def _run_count(search: RowSearch, cap: int) -> int:
    if cap <= 0:
        return 0

    found = [0]

    def on_solution(masks: Tuple[int, ...]) -> bool:
        found[0] += 1
        return found[0] >= cap

    search.run(on_solution)
    return found[0]


def _run_first(search: RowSearch) -> Optional[BerryBoard]:
    result: List[Tuple[int, ...]] = []

    def on_solution(masks: Tuple[int, ...]) -> bool:
        result.append(masks)
        return True

    search.run(on_solution)
    return BerryBoard.from_row_masks(result[0]) if result else None


def count_solutions(clues, cap: int = 2) -> int:
    """
    Count boards satisfying the exact-3 rule and every clue, up to cap.

    The default cap of 2 is enough to tell "none", "unique" and "several"
    apart. Impossible clue values simply give 0.

    Args:
        clues: A ClueGrid, {(row, col): value} mapping, or iterable of
               ClueConstraint / (row, col, value) tuples.
        cap: Stop once this many solutions have been found.

    Returns:
        Number of solutions found, between 0 and cap.
    """
    return _run_count(build_search(to_constraints(clues)), cap)


def solve_first(clues) -> Optional[BerryBoard]:
    """
    Return the first board satisfying the clues, or None if there is none.
    """
    return _run_first(build_search(to_constraints(clues)))


def has_unique_solution(clues) -> bool:
    """Check if the clues admit exactly one board."""
    return count_solutions(clues, cap=2) == 1


class ConstraintSolver(BaseSolver):
    """
    Row-pattern backtracking solver with clue feasibility pruning.

    Wraps count_solutions / solve_first with timing and search statistics.
    """

    name = "RowPattern+Backtracking"

    def _solve(self, constraints: List[ClueConstraint]) -> Optional[BerryBoard]:
        search = build_search(constraints)
        solution = _run_first(search)
        self._record(search)
        return solution

    def _count(self, constraints: List[ClueConstraint], cap: int) -> int:
        search = build_search(constraints)
        found = _run_count(search, cap)
        self._record(search)
        return found

    def _record(self, search: RowSearch) -> None:
        self.stats.nodes_explored = search.nodes_explored
        self.stats.backtracks = search.backtracks
