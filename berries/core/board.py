"""Berry board representation: a 9x9 grid of empty and marked cells."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Sequence

N = 9
BOX_SIZE = 3
BERRIES_PER_UNIT = 3

EMPTY = 0
MARKED = 1


class BerryBoard:
    """
    Represents a 9x9 berry board.

    Every cell is either EMPTY (0) or MARKED (1). A complete board has exactly
    three marked cells in every row, every column and every 3x3 block.
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a berry board.

        Args:
            grid: Optional initial 9x9 grid of 0/1 values. If None, creates
                  an empty board.
        """
        self.size = N
        self.box_size = BOX_SIZE

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (N, N):
                raise ValueError(f"Grid shape must be ({N}, {N}), got {grid.shape}")
            if not np.isin(grid, (EMPTY, MARKED)).all():
                raise ValueError("Grid cells must be 0 (empty) or 1 (marked)")
            self.grid = grid.astype(np.int8)
        else:
            self.grid = np.zeros((N, N), dtype=np.int8)

    def copy(self) -> BerryBoard:
        """Create a deep copy of the board."""
        return BerryBoard(self.grid.copy())

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty, 1 means marked."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col)."""
        if value not in (EMPTY, MARKED):
            raise ValueError(f"Value must be 0 or 1, got {value}")
        self.grid[row, col] = value

    def is_marked(self, row: int, col: int) -> bool:
        return self.grid[row, col] == MARKED

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_block(self, row: int, col: int) -> np.ndarray:
        """Get all values in the 3x3 block containing (row, col)."""
        block_row = (row // BOX_SIZE) * BOX_SIZE
        block_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[block_row:block_row + BOX_SIZE,
                         block_col:block_col + BOX_SIZE].flatten()

    @staticmethod
    def get_block_index(row: int, col: int) -> int:
        """Get the block index (0 to 8, row-major) for a cell."""
        return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)

    def marked_cells(self) -> List[Tuple[int, int]]:
        """Get list of all marked cell positions, row-major."""
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.grid == MARKED))]

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions, row-major."""
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.grid == EMPTY))]

    def count_marked(self) -> int:
        return int(np.sum(self.grid))

    def row_counts(self) -> np.ndarray:
        return self.grid.sum(axis=1)

    def col_counts(self) -> np.ndarray:
        return self.grid.sum(axis=0)

    def block_counts(self) -> np.ndarray:
        """Marked count per block, indexed by get_block_index."""
        blocks = self.grid.reshape(BOX_SIZE, BOX_SIZE, BOX_SIZE, BOX_SIZE)
        return blocks.sum(axis=(1, 3)).flatten()

    def is_valid(self) -> bool:
        """
        Check that every row, column and block holds exactly three berries.
        """
        return (
            bool(np.all(self.row_counts() == BERRIES_PER_UNIT))
            and bool(np.all(self.col_counts() == BERRIES_PER_UNIT))
            and bool(np.all(self.block_counts() == BERRIES_PER_UNIT))
        )

    def to_string(self) -> str:
        """Convert board to a compact 81-character string of 0s and 1s."""
        return ''.join(str(int(v)) for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str) -> BerryBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of length 81. '1' or '*' for a berry, '0' or '.' for
               an empty cell. Whitespace is ignored.
        """
        s = ''.join(s.split())
        if len(s) != N * N:
            raise ValueError(f"String length must be {N * N}, got {len(s)}")

        grid = np.zeros((N, N), dtype=np.int8)
        for idx, ch in enumerate(s):
            if ch in '1*':
                grid[idx // N, idx % N] = MARKED
            elif ch not in '0.':
                raise ValueError(f"Invalid board character: {ch!r}")

        return cls(grid)

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[int]]) -> BerryBoard:
        """Create a board from a 2D list."""
        return cls(np.array(data, dtype=np.int8))

    @classmethod
    def from_row_masks(cls, masks: Sequence[int]) -> BerryBoard:
        """Create a board from nine row bitmasks (bit c set = column c marked)."""
        grid = np.zeros((N, N), dtype=np.int8)
        for r, mask in enumerate(masks):
            for c in range(N):
                if mask >> c & 1:
                    grid[r, c] = MARKED
        return cls(grid)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(N):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(N):
                row_str += ' *' if self.grid[i, j] == MARKED else ' .'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"BerryBoard(marked={self.count_marked()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BerryBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
