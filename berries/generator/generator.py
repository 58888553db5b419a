"""Berry board generator and puzzle generation with configurable difficulty."""

from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..core.board import BerryBoard, N
from ..core.patterns import get_all_patterns
from ..core.puzzle import Puzzle
from ..core.rng import Rng, make_rng, shuffle
from ..core.validator import check_constraints
from ..solvers.row_search import RowSearch
from .minimizer import MinimizerConfig, PuzzleMinimizer

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when no valid board could be built."""


class Difficulty(Enum):
    """Difficulty presets for generated puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def config(self) -> MinimizerConfig:
        """Minimizer settings for this difficulty (more clues = easier)."""
        configs = {
            Difficulty.EASY: MinimizerConfig(extra_clues=10, non_empty_blocks=True),
            Difficulty.MEDIUM: MinimizerConfig(extra_clues=4, non_empty_blocks=True),
            Difficulty.HARD: MinimizerConfig(extra_clues=0, non_empty_blocks=False),
        }
        return configs[self]


class BoardGenerator:
    """
    Generator for complete berry boards.

    Algorithm:
    1. Give every row its own shuffled copy of the 84 row patterns
    2. Fill rows top to bottom with the shared row search, taking the first
       pattern that keeps every column and block feasible
    3. Return the first complete board
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[Rng] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            rng: Source of uniform floats in [0, 1); overrides seed.
        """
        self.rng = make_rng(rng, seed)

    def generate(self) -> BerryBoard:
        """
        Generate a random complete board.

        Raises:
            GenerationError: if the search runs out of candidates.
        """
        row_candidates = []
        for _ in range(N):
            patterns = list(get_all_patterns())
            shuffle(patterns, self.rng)
            row_candidates.append(patterns)

        search = RowSearch(row_candidates)
        found: List[Tuple[int, ...]] = []

        def on_solution(masks: Tuple[int, ...]) -> bool:
            found.append(masks)
            return True

        if not search.run(on_solution):
            raise GenerationError("Failed to generate a valid board")

        board = BerryBoard.from_row_masks(found[0])
        check_constraints(board)
        logger.debug("Generated board after %d nodes", search.nodes_explored)
        return board


def make_puzzle(
    extra_clues: int = 0,
    non_empty_blocks: bool = False,
    rng: Optional[Rng] = None,
    seed: Optional[int] = None,
) -> Puzzle:
    """
    Generate a board and reduce its clues to a uniquely solvable puzzle.

    The configuration is checked before any search; the board generator and
    the minimizer draw from the same random source.

    Raises:
        ValueError: if extra_clues is negative or not an integer.
        GenerationError: if no board could be generated.
    """
    config = MinimizerConfig(extra_clues=extra_clues, non_empty_blocks=non_empty_blocks)
    config.validate()

    rng = make_rng(rng, seed)
    board = BoardGenerator(rng=rng).generate()
    return PuzzleMinimizer(config, rng=rng).minimize(board)


class PuzzleGenerator:
    """
    Generator for berry puzzles.

    Algorithm:
    1. Generate a complete board
    2. Compute every clue and greedily remove clues while the solution stays
       unique
    3. Add clues back according to the difficulty settings
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[Rng] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            rng: Source of uniform floats in [0, 1); overrides seed.
        """
        self.rng = make_rng(rng, seed)

    def generate(
        self,
        difficulty: Union[Difficulty, MinimizerConfig] = Difficulty.MEDIUM,
    ) -> Puzzle:
        """
        Generate a puzzle with the specified difficulty or settings.

        Returns:
            Puzzle with its solution and clues.
        """
        config = difficulty.config if isinstance(difficulty, Difficulty) else difficulty
        return make_puzzle(
            extra_clues=config.extra_clues,
            non_empty_blocks=config.non_empty_blocks,
            rng=self.rng,
        )

    def generate_batch(
        self,
        count: int,
        difficulty: Union[Difficulty, MinimizerConfig] = Difficulty.MEDIUM,
    ) -> List[Puzzle]:
        """
        Generate multiple puzzles with the same settings.
        """
        return [self.generate(difficulty) for _ in range(count)]
