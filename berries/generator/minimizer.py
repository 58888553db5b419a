"""Greedy clue minimization that preserves a unique solution."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.board import BerryBoard, N, BOX_SIZE
from ..core.clues import compute_clues
from ..core.puzzle import ClueConstraint, ClueGrid, Puzzle
from ..core.rng import Rng, make_rng, rand_int, shuffle
from ..solvers.constraint_solver import count_solutions

logger = logging.getLogger(__name__)


@dataclass
class MinimizerConfig:
    """
    Post-minimization knobs.

    Attributes:
        extra_clues: Removed clues to put back at random (more = easier).
        non_empty_blocks: Guarantee at least one clue in every 3x3 block.
    """
    extra_clues: int = 0
    non_empty_blocks: bool = False

    def validate(self) -> None:
        """Reject negative or non-integer extra_clues."""
        if (isinstance(self.extra_clues, bool)
                or not isinstance(self.extra_clues, int)
                or self.extra_clues < 0):
            raise ValueError(
                f"extra_clues must be integer >= 0 (got {self.extra_clues!r})"
            )


class PuzzleMinimizer:
    """
    Strip a full clue set down while keeping exactly one solution.

    Algorithm:
    1. Every empty cell of the solution gets its neighbour count as a clue
    2. Visit the clues in random order; drop each one if the remaining
       clues still have a unique solution
    3. Optionally put one removed clue back into every clue-less block
    4. Optionally put extra_clues random removed clues back

    The result is irreducible only for the visiting order used; different
    orders give different clue counts. Adding clues back never breaks
    uniqueness, so steps 3 and 4 need no re-check.
    """

    def __init__(
        self,
        config: Optional[MinimizerConfig] = None,
        rng: Optional[Rng] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            config: Post-minimization settings (defaults: no extras).
            rng: Source of uniform floats in [0, 1).
            seed: Seed for a private random.Random when rng is omitted.

        Raises:
            ValueError: if the configuration is invalid.
        """
        self.config = config or MinimizerConfig()
        self.config.validate()
        self.rng = make_rng(rng, seed)

    def minimize(self, solution: BerryBoard) -> Puzzle:
        """
        Build a uniquely solvable puzzle for a complete solution board.

        Args:
            solution: A valid, fully generated board. It is not modified.

        Returns:
            Puzzle pairing the solution with the reduced clue grid.
        """
        counts = compute_clues(solution)
        candidates = [
            ClueConstraint(r, c, int(counts[r, c])) for r, c in solution.empty_cells()
        ]

        active: Dict[ClueConstraint, None] = dict.fromkeys(candidates)
        order = list(candidates)
        shuffle(order, self.rng)

        for clue in order:
            del active[clue]
            if count_solutions(list(active), cap=2) != 1:
                active[clue] = None

        minimal = len(active)

        if self.config.non_empty_blocks:
            self._fill_empty_blocks(candidates, active)

        if self.config.extra_clues > 0:
            removed = [clue for clue in candidates if clue not in active]
            shuffle(removed, self.rng)
            for clue in removed[:self.config.extra_clues]:
                active[clue] = None

        logger.debug(
            "Minimized %d clues to %d, %d after post-processing",
            len(candidates), minimal, len(active),
        )

        grid = ClueGrid()
        for clue in active:
            grid.set(clue.row, clue.col, clue.value)
        return Puzzle(solution=solution, puzzle_clues=grid)

    def _fill_empty_blocks(
        self,
        candidates: List[ClueConstraint],
        active: Dict[ClueConstraint, None],
    ) -> None:
        for block_row in range(N // BOX_SIZE):
            for block_col in range(N // BOX_SIZE):
                if any(_in_block(clue, block_row, block_col) for clue in active):
                    continue

                removed = [
                    clue for clue in candidates
                    if clue not in active and _in_block(clue, block_row, block_col)
                ]
                if not removed:
                    continue

                active[removed[rand_int(self.rng, len(removed))]] = None


def _in_block(clue: ClueConstraint, block_row: int, block_col: int) -> bool:
    return clue.row // BOX_SIZE == block_row and clue.col // BOX_SIZE == block_col
