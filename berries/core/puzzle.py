"""Clue grids, clue constraints and the solution/clue puzzle pair."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Mapping, Tuple, Optional, Sequence

import numpy as np

from .board import BerryBoard, N, BOX_SIZE

NO_CLUE = -1
MAX_CLUE = 8


@dataclass(frozen=True)
class ClueConstraint:
    """Exactly `value` of the up-to-8 neighbours of (row, col) are marked."""
    row: int
    col: int
    value: int


class ClueGrid:
    """
    A 9x9 grid of clue numbers.

    Each cell is either NO_CLUE (-1) or a neighbour count 0-8. Clues are only
    ever placed on cells that are empty in the associated solution board.
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (N, N):
                raise ValueError(f"Grid shape must be ({N}, {N}), got {grid.shape}")
            self.grid = grid.astype(np.int16)
            bad = (self.grid < NO_CLUE) | (self.grid > MAX_CLUE)
            if bad.any():
                r, c = np.argwhere(bad)[0]
                raise ValueError(
                    f"Clue at ({r}, {c}) must be -1 or 0-{MAX_CLUE}, got {self.grid[r, c]}"
                )
        else:
            self.grid = np.full((N, N), NO_CLUE, dtype=np.int16)

    def copy(self) -> ClueGrid:
        return ClueGrid(self.grid.copy())

    def get(self, row: int, col: int) -> Optional[int]:
        """Get the clue at (row, col), or None if the cell has no clue."""
        value = int(self.grid[row, col])
        return None if value == NO_CLUE else value

    def set(self, row: int, col: int, value: int) -> None:
        if value < 0 or value > MAX_CLUE:
            raise ValueError(f"Clue must be 0-{MAX_CLUE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        self.grid[row, col] = NO_CLUE

    def has_clue(self, row: int, col: int) -> bool:
        return self.grid[row, col] != NO_CLUE

    def count_clues(self) -> int:
        return int(np.sum(self.grid != NO_CLUE))

    def clue_cells(self) -> List[Tuple[int, int]]:
        """Positions holding a clue, row-major."""
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.grid != NO_CLUE))]

    def constraints(self) -> List[ClueConstraint]:
        """Convert the grid into solver constraints, row-major."""
        return [ClueConstraint(r, c, int(self.grid[r, c])) for r, c in self.clue_cells()]

    def block_has_clue(self, block_row: int, block_col: int) -> bool:
        """Check whether the 3x3 block (block_row, block_col) holds a clue."""
        block = self.grid[block_row * BOX_SIZE:(block_row + 1) * BOX_SIZE,
                          block_col * BOX_SIZE:(block_col + 1) * BOX_SIZE]
        return bool(np.any(block != NO_CLUE))

    def to_list81(self) -> List[int]:
        """Flatten row-major; -1 marks a cell without a clue."""
        return [int(v) for v in self.grid.flatten()]

    @classmethod
    def from_list81(cls, values: Sequence[int]) -> ClueGrid:
        if len(values) != N * N:
            raise ValueError(f"Expected {N * N} values, got {len(values)}")
        return cls(np.array(values, dtype=np.int16).reshape(N, N))

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[Optional[int]]]) -> ClueGrid:
        """Create a clue grid from rows where None means no clue."""
        rows = [[NO_CLUE if v is None else v for v in row] for row in data]
        return cls(np.array(rows, dtype=np.int16))

    def __str__(self) -> str:
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(N):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(N):
                val = self.grid[i, j]
                row_str += ' .' if val == NO_CLUE else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"ClueGrid(clues={self.count_clues()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClueGrid):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(tuple(self.to_list81()))


def to_constraints(clues) -> List[ClueConstraint]:
    """
    Normalize the accepted clue inputs into a list of ClueConstraint.

    Args:
        clues: A ClueGrid, a mapping {(row, col): value}, or an iterable of
               ClueConstraint / (row, col, value) tuples.

    Positions outside the 9x9 grid are kept; such a clue only constrains
    its in-grid neighbours, if it has any.
    """
    if isinstance(clues, ClueGrid):
        return clues.constraints()

    if isinstance(clues, Mapping):
        items = [ClueConstraint(int(r), int(c), int(v)) for (r, c), v in clues.items()]
    else:
        items = [
            item if isinstance(item, ClueConstraint)
            else ClueConstraint(int(item[0]), int(item[1]), int(item[2]))
            for item in clues
        ]

    return items


@dataclass
class Puzzle:
    """A generated puzzle: the solution board and the clues shown to the player."""
    solution: BerryBoard
    puzzle_clues: ClueGrid

    def count_clues(self) -> int:
        return self.puzzle_clues.count_clues()
