"""Minesweeper-style clue numbers: berries among the 8 surrounding cells."""

from __future__ import annotations
from typing import List, Tuple

import numpy as np

from .board import BerryBoard, N
from .puzzle import ClueGrid

NEIGHBOR_DIRS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def neighbors(row: int, col: int) -> List[Tuple[int, int]]:
    """In-bounds neighbour positions of (row, col), excluding the cell itself."""
    result = []
    for dr, dc in NEIGHBOR_DIRS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < N and 0 <= nc < N:
            result.append((nr, nc))
    return result


def neighbor_count(row: int, col: int) -> int:
    """3 for a corner, 5 for an edge cell, 8 for an interior cell."""
    return len(neighbors(row, col))


def compute_clues(board: BerryBoard) -> np.ndarray:
    """
    Count marked neighbours for every cell of the board.

    Marked cells get a count too; callers decide which values to show.

    Returns:
        9x9 integer array of neighbour counts.
    """
    # Sum the 8 shifted copies of a zero-padded grid.
    padded = np.pad(board.grid.astype(np.int16), 1)
    clues = np.zeros((N, N), dtype=np.int16)
    for dr, dc in NEIGHBOR_DIRS:
        clues += padded[1 + dr:1 + dr + N, 1 + dc:1 + dc + N]
    return clues


def full_clue_grid(board: BerryBoard) -> ClueGrid:
    """Clue grid with a clue on every empty cell of the board."""
    clues = compute_clues(board)
    grid = ClueGrid()
    for r, c in board.empty_cells():
        grid.set(r, c, int(clues[r, c]))
    return grid
