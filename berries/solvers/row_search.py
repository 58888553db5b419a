"""Row-by-row backtracking search shared by the solver and the board generator."""

from __future__ import annotations
from typing import Callable, Dict, List, Sequence, Tuple

from ..core.board import N, BOX_SIZE, BERRIES_PER_UNIT
from ..core.clues import neighbors
from ..core.patterns import Pattern, ROW_PATTERNS, pattern_columns, pattern_to_mask
from ..core.puzzle import ClueConstraint

# Called with the nine row masks of a full board; returns True to stop.
SolutionCallback = Callable[[Tuple[int, ...]], bool]

_POPCOUNT = tuple(bin(i).count("1") for i in range(1 << N))


def _candidate(pattern: Pattern) -> Tuple[int, Tuple[int, ...], Tuple[int, ...]]:
    cols = pattern_columns(pattern)
    block_hist = tuple(sum(1 for c in cols if c // BOX_SIZE == k) for k in range(BOX_SIZE))
    return pattern_to_mask(pattern), cols, block_hist


_CANDIDATES: Dict[Pattern, Tuple[int, Tuple[int, ...], Tuple[int, ...]]] = {
    p: _candidate(p) for p in ROW_PATTERNS
}


class _Clue:
    """A clue constraint pre-split into per-row neighbour masks."""

    __slots__ = ("row", "col", "target", "rows", "total", "remaining_after")

    def __init__(self, constraint: ClueConstraint):
        self.row = constraint.row
        self.col = constraint.col
        self.target = constraint.value

        masks: Dict[int, int] = {}
        for nr, nc in neighbors(self.row, self.col):
            masks[nr] = masks.get(nr, 0) | (1 << nc)
        self.rows = tuple(sorted(masks.items()))
        self.total = sum(_POPCOUNT[m] for _, m in self.rows)
        # neighbour cells in rows strictly below r, indexed by r
        self.remaining_after = tuple(
            sum(_POPCOUNT[m] for nr, m in self.rows if nr > r) for r in range(N)
        )


class RowSearch:
    """
    Depth-first search that fills the board one row pattern at a time.

    Per-column and per-block berry counters are shared by the whole search
    and mutated in place: each frame applies its row, recurses, and reverts
    the row before trying the next candidate or returning.

    Pruning after each committed row:
    - no column or block may exceed three berries;
    - when a band of three rows closes, its three blocks hold exactly three;
    - every column can still reach three with the rows left;
    - every clue touched by the row keeps confirmed <= target <=
      confirmed + remaining, with equality once no neighbour row is left.
    """

    def __init__(
        self,
        row_candidates: Sequence[Sequence[Pattern]],
        constraints: Sequence[ClueConstraint] = (),
    ):
        """
        Args:
            row_candidates: Nine pattern lists, tried in the given order.
            constraints: Clue constraints every solution must satisfy.
        """
        if len(row_candidates) != N:
            raise ValueError(f"Expected {N} candidate lists, got {len(row_candidates)}")

        self._candidates = [[_CANDIDATES[p] for p in patterns] for patterns in row_candidates]
        self._clues = [_Clue(c) for c in constraints]
        self._clues_by_row: List[List[_Clue]] = [[] for _ in range(N)]
        for clue in self._clues:
            for nr, _ in clue.rows:
                self._clues_by_row[nr].append(clue)

        self._col_counts = [0] * N
        self._block_counts = [0] * N
        self._row_masks = [0] * N
        self._on_solution: SolutionCallback = lambda masks: True

        self.nodes_explored = 0
        self.backtracks = 0

    def run(self, on_solution: SolutionCallback) -> bool:
        """
        Explore full boards in candidate order.

        Args:
            on_solution: Called for every full board found; returning True
                         stops the search.

        Returns:
            True if the search was stopped by on_solution.
        """
        # Nothing placed yet: confirmed = 0, remaining = every neighbour.
        for clue in self._clues:
            if clue.target < 0 or clue.target > clue.total:
                return False

        self._on_solution = on_solution
        return self._descend(0)

    def _clues_feasible(self, r: int) -> bool:
        masks = self._row_masks
        for clue in self._clues_by_row[r]:
            confirmed = 0
            for nr, m in clue.rows:
                if nr <= r:
                    confirmed += _POPCOUNT[masks[nr] & m]
            remaining = clue.remaining_after[r]
            if confirmed > clue.target:
                return False
            if confirmed + remaining < clue.target:
                return False
            if remaining == 0 and confirmed != clue.target:
                return False
        return True

    def _full_board_valid(self) -> bool:
        if any(count != BERRIES_PER_UNIT for count in self._col_counts):
            return False
        if any(count != BERRIES_PER_UNIT for count in self._block_counts):
            return False
        masks = self._row_masks
        for clue in self._clues:
            if sum(_POPCOUNT[masks[nr] & m] for nr, m in clue.rows) != clue.target:
                return False
        return True

    def _descend(self, r: int) -> bool:
        if r == N:
            if not self._full_board_valid():
                return False
            return self._on_solution(tuple(self._row_masks))

        col_counts = self._col_counts
        block_counts = self._block_counts
        base = (r // BOX_SIZE) * BOX_SIZE
        closes_band = r % BOX_SIZE == BOX_SIZE - 1
        # each column needs count + (N - 1 - r) >= 3
        min_col = BERRIES_PER_UNIT - (N - 1 - r)

        for mask, cols, (h0, h1, h2) in self._candidates[r]:
            self.nodes_explored += 1

            c0, c1, c2 = cols
            if (col_counts[c0] >= BERRIES_PER_UNIT
                    or col_counts[c1] >= BERRIES_PER_UNIT
                    or col_counts[c2] >= BERRIES_PER_UNIT):
                continue
            if (block_counts[base] + h0 > BERRIES_PER_UNIT
                    or block_counts[base + 1] + h1 > BERRIES_PER_UNIT
                    or block_counts[base + 2] + h2 > BERRIES_PER_UNIT):
                continue

            # apply
            col_counts[c0] += 1
            col_counts[c1] += 1
            col_counts[c2] += 1
            block_counts[base] += h0
            block_counts[base + 1] += h1
            block_counts[base + 2] += h2
            self._row_masks[r] = mask

            if closes_band and not (block_counts[base] == block_counts[base + 1]
                                    == block_counts[base + 2] == BERRIES_PER_UNIT):
                feasible = False
            elif min_col > 0 and min(col_counts) < min_col:
                feasible = False
            else:
                feasible = self._clues_feasible(r)

            stop = feasible and self._descend(r + 1)

            # revert
            col_counts[c0] -= 1
            col_counts[c1] -= 1
            col_counts[c2] -= 1
            block_counts[base] -= h0
            block_counts[base + 1] -= h1
            block_counts[base + 2] -= h2
            self._row_masks[r] = 0

            if stop:
                return True
            self.backtracks += 1

        return False
