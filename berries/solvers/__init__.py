"""Solvers module for berry puzzles."""

from .base_solver import BaseSolver, SolverStats
from .row_search import RowSearch
from .constraint_solver import (
    ConstraintSolver,
    build_search,
    count_solutions,
    solve_first,
    has_unique_solution,
)

__all__ = [
    "BaseSolver",
    "SolverStats",
    "RowSearch",
    "ConstraintSolver",
    "build_search",
    "count_solutions",
    "solve_first",
    "has_unique_solution",
]
