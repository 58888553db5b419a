"""Validation utilities for berry boards and player progress."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence, Union

import numpy as np

from .board import BerryBoard, N, BOX_SIZE, BERRIES_PER_UNIT
from .clues import compute_clues, neighbors
from .puzzle import ClueGrid

# Player cell states.
PLAYER_EMPTY = -1
PLAYER_UNKNOWN = 0
PLAYER_BERRY = 1

PlayerBoard = Union[np.ndarray, Sequence[Sequence[int]]]


def check_constraints(board: BerryBoard) -> None:
    """
    Ensure every row, column and block holds exactly three berries.

    Raises:
        ValueError: naming the first offending row, column or block.
    """
    for r, total in enumerate(board.row_counts()):
        if total != BERRIES_PER_UNIT:
            raise ValueError(f"Row {r} has {total} berries")
    for c, total in enumerate(board.col_counts()):
        if total != BERRIES_PER_UNIT:
            raise ValueError(f"Col {c} has {total} berries")
    for b, total in enumerate(board.block_counts()):
        if total != BERRIES_PER_UNIT:
            raise ValueError(f"Block ({b // BOX_SIZE},{b % BOX_SIZE}) has {total} berries")


def is_valid_board(board: BerryBoard) -> bool:
    """Check if the board satisfies the exact-3 rule everywhere."""
    return board.is_valid()


def validate_solution(clues: ClueGrid, board: BerryBoard) -> bool:
    """
    Validate that a board solves a clue grid.

    Args:
        clues: The puzzle clues.
        board: The proposed solution.

    Returns:
        True if the board is complete and valid, no clue sits on a berry, and
        every clue equals the board's neighbour count.
    """
    if not board.is_valid():
        return False

    counts = compute_clues(board)
    for r, c in clues.clue_cells():
        if board.is_marked(r, c):
            return False
        if counts[r, c] != clues.grid[r, c]:
            return False
    return True


@dataclass
class ViolatedClue:
    row: int
    col: int
    clue: int
    berries: int
    unknown: int


@dataclass
class Violations:
    """Rule violations found on a partially solved player board."""
    row: List[bool] = field(default_factory=lambda: [False] * N)
    col: List[bool] = field(default_factory=lambda: [False] * N)
    block: List[bool] = field(default_factory=lambda: [False] * N)
    clue_area: np.ndarray = field(default_factory=lambda: np.zeros((N, N), dtype=bool))
    violated_clues: List[ViolatedClue] = field(default_factory=list)

    def any(self) -> bool:
        return any(self.row) or any(self.col) or any(self.block) or bool(self.clue_area.any())


def _unit_violated(cells: np.ndarray) -> bool:
    berries = int(np.sum(cells == PLAYER_BERRY))
    unknown = int(np.sum(cells == PLAYER_UNKNOWN))
    return berries > BERRIES_PER_UNIT or berries + unknown < BERRIES_PER_UNIT


def _violated_clues(player: np.ndarray, clues: ClueGrid) -> List[ViolatedClue]:
    violated = []
    for r, c in clues.clue_cells():
        value = int(clues.grid[r, c])
        berries = unknown = 0
        for nr, nc in neighbors(r, c):
            state = player[nr, nc]
            if state == PLAYER_BERRY:
                berries += 1
            elif state == PLAYER_UNKNOWN:
                # cells marked empty (-1) do not count as capacity
                unknown += 1
        if berries > value or berries + unknown < value:
            violated.append(ViolatedClue(r, c, value, berries, unknown))
    return violated


def find_violations(player_board: PlayerBoard, clues: ClueGrid) -> Violations:
    """
    Find rows, columns, blocks and clues that can no longer be satisfied.

    Player cells are -1 (marked empty), 0 (unknown) or 1 (berry). A unit is
    violated when it holds more than three berries or cannot reach three with
    its unknown cells. A clue is violated when its berries exceed it or its
    berries plus unknown neighbours fall short of it; only the clue cell
    itself is flagged in clue_area.
    """
    player = np.asarray(player_board)
    if player.shape != (N, N):
        raise ValueError(f"Player board shape must be ({N}, {N}), got {player.shape}")

    result = Violations()
    for i in range(N):
        result.row[i] = _unit_violated(player[i, :])
        result.col[i] = _unit_violated(player[:, i])
        br, bc = divmod(i, BOX_SIZE)
        result.block[i] = _unit_violated(
            player[br * BOX_SIZE:(br + 1) * BOX_SIZE, bc * BOX_SIZE:(bc + 1) * BOX_SIZE]
        )

    result.violated_clues = _violated_clues(player, clues)
    for v in result.violated_clues:
        result.clue_area[v.row, v.col] = True
    return result


def compute_clue_area_violations(player_board: PlayerBoard, clues: ClueGrid) -> Violations:
    """Like find_violations, but clue_area also covers each violated clue's neighbours."""
    result = find_violations(player_board, clues)
    for v in result.violated_clues:
        for nr, nc in neighbors(v.row, v.col):
            result.clue_area[nr, nc] = True
    return result
