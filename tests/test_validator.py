"""Unit tests for the player rules checker."""

import numpy as np
import pytest
from berries.core.puzzle import ClueGrid
from berries.core.validator import compute_clue_area_violations, find_violations


def player_board(fill: int = 0) -> np.ndarray:
    """9x9 player board: -1 marked empty, 0 unknown, 1 berry."""
    return np.full((9, 9), fill, dtype=np.int8)


class TestUnitRules:
    """Rows, columns and blocks must be able to reach exactly three berries."""

    def test_row_cannot_reach_three(self):
        board = player_board(-1)
        board[0, 0] = 1
        board[0, 1] = 1

        v = find_violations(board, ClueGrid())
        assert v.row[0]

    def test_row_can_still_reach_three(self):
        board = player_board(-1)
        board[0, 0] = 1
        board[0, 1] = 1
        board[0, 2] = 0

        v = find_violations(board, ClueGrid())
        assert not v.row[0]

    def test_row_with_four_berries(self):
        board = player_board(0)
        board[0, :4] = 1

        v = find_violations(board, ClueGrid())
        assert v.row[0]

    def test_decided_rows(self):
        board = player_board(-1)
        board[0, :3] = 1
        board[1, 0] = 1

        v = find_violations(board, ClueGrid())
        assert not v.row[0]
        assert v.row[1]

    def test_column_cannot_reach_three(self):
        board = player_board(-1)
        board[0, 0] = 1
        board[1, 0] = 1

        v = find_violations(board, ClueGrid())
        assert v.col[0]

    def test_column_can_still_reach_three(self):
        board = player_board(-1)
        board[0, 0] = 1
        board[1, 0] = 1
        board[2, 0] = 0

        v = find_violations(board, ClueGrid())
        assert not v.col[0]

    def test_block_cannot_reach_three(self):
        board = player_board(-1)
        board[0, 0] = 1
        board[0, 1] = 1

        v = find_violations(board, ClueGrid())
        assert v.block[0]

    def test_block_with_four_berries(self):
        board = player_board(0)
        board[0, :3] = 1
        board[1, 0] = 1

        v = find_violations(board, ClueGrid())
        assert v.block[0]

    def test_unknown_board_is_clean(self):
        v = find_violations(player_board(0), ClueGrid())
        assert not v.any()

    def test_accepts_nested_lists(self):
        rows = [[0] * 9 for _ in range(9)]
        assert not find_violations(rows, ClueGrid()).any()

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            find_violations(np.zeros((3, 3)), ClueGrid())


class TestClueRules:
    """Minesweeper-style clue feasibility."""

    def test_too_many_empties_around_clue(self):
        clues = ClueGrid()
        clues.set(4, 4, 3)
        board = player_board(-1)
        board[3, 3] = 1
        board[3, 4] = 1

        v = find_violations(board, clues)
        assert v.clue_area[4, 4]
        assert v.violated_clues[0].berries == 2
        assert v.violated_clues[0].unknown == 0

    def test_too_many_berries_around_clue(self):
        clues = ClueGrid()
        clues.set(4, 4, 2)
        board = player_board(0)
        board[3, 3:6] = 1

        v = find_violations(board, clues)
        assert v.clue_area[4, 4]

    def test_clue_still_feasible(self):
        clues = ClueGrid()
        clues.set(4, 4, 3)
        board = player_board(-1)
        board[3, 3] = 1
        board[3, 4] = 1
        board[3, 5] = 0

        v = find_violations(board, clues)
        assert not v.clue_area[4, 4]
        assert v.violated_clues == []

    def test_only_clue_cell_is_flagged(self):
        clues = ClueGrid()
        clues.set(4, 4, 0)
        board = player_board(0)
        board[3, 3] = 1

        v = find_violations(board, clues)
        assert v.clue_area[4, 4]
        assert not v.clue_area[3, 3]
        assert not v.clue_area[5, 5]

    def test_clue_area_includes_neighbors(self):
        clues = ClueGrid()
        clues.set(4, 4, 0)
        board = player_board(0)
        board[3, 3] = 1

        v = compute_clue_area_violations(board, clues)
        assert v.clue_area[4, 4]
        assert v.clue_area[3, 3]
        assert v.clue_area[5, 5]
        assert not v.clue_area[0, 0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
