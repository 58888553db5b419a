"""Core module for berry boards, clue grids and validation."""

from .board import BerryBoard, N, BOX_SIZE, EMPTY, MARKED
from .puzzle import ClueGrid, ClueConstraint, Puzzle, NO_CLUE
from .patterns import ROW_PATTERNS, get_all_patterns, get_patterns_excluding_columns
from .clues import compute_clues, full_clue_grid, neighbors, neighbor_count
from .validator import check_constraints, is_valid_board, validate_solution, find_violations

__all__ = [
    "BerryBoard",
    "N",
    "BOX_SIZE",
    "EMPTY",
    "MARKED",
    "ClueGrid",
    "ClueConstraint",
    "Puzzle",
    "NO_CLUE",
    "ROW_PATTERNS",
    "get_all_patterns",
    "get_patterns_excluding_columns",
    "compute_clues",
    "full_clue_grid",
    "neighbors",
    "neighbor_count",
    "check_constraints",
    "is_valid_board",
    "validate_solution",
    "find_violations",
]
