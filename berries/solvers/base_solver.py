"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple
import time
import tracemalloc

from ..core.board import BerryBoard
from ..core.puzzle import ClueConstraint, to_constraints


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    solutions: int = 0
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "solutions": self.solutions,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for berry puzzle solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = False):
        """
        Args:
            track_memory: Record peak allocation with tracemalloc. Slows the
                          search down noticeably.
        """
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, clues) -> Tuple[Optional[BerryBoard], SolverStats]:
        """
        Find one board satisfying the clues, with timing.

        Args:
            clues: A ClueGrid, {(row, col): value} mapping, or iterable of
                   ClueConstraint.

        Returns:
            Tuple of (solution or None, stats).
        """
        constraints = to_constraints(clues)
        self.stats = SolverStats(algorithm=self.name)

        solution = self._measure(lambda: self._solve(constraints))

        self.stats.solved = solution is not None and solution.is_valid()
        self.stats.solutions = 1 if solution is not None else 0
        return solution, self.stats

    def count(self, clues, cap: int = 2) -> Tuple[int, SolverStats]:
        """
        Count boards satisfying the clues, stopping at cap.

        Returns:
            Tuple of (number of solutions found, stats).
        """
        constraints = to_constraints(clues)
        self.stats = SolverStats(algorithm=self.name)

        found = self._measure(lambda: self._count(constraints, cap))

        self.stats.solutions = found
        self.stats.solved = found > 0
        self.stats.extra["unique"] = found == 1
        return found, self.stats

    def _measure(self, run):
        if self.track_memory:
            tracemalloc.start()
        start_time = time.perf_counter()
        try:
            return run()
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

    @abstractmethod
    def _solve(self, constraints: List[ClueConstraint]) -> Optional[BerryBoard]:
        """
        Internal solve method to be implemented by subclasses.

        Returns:
            The first board found, or None if the clues are unsatisfiable.
        """
        pass

    @abstractmethod
    def _count(self, constraints: List[ClueConstraint], cap: int) -> int:
        """Internal counting method to be implemented by subclasses."""
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
