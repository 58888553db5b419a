"""Generator module for creating berry boards and puzzles."""

from .generator import BoardGenerator, GenerationError, Difficulty, PuzzleGenerator, make_puzzle
from .minimizer import MinimizerConfig, PuzzleMinimizer

__all__ = [
    "BoardGenerator",
    "GenerationError",
    "Difficulty",
    "PuzzleGenerator",
    "make_puzzle",
    "MinimizerConfig",
    "PuzzleMinimizer",
]
