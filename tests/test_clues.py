"""Unit tests for the row pattern catalog and clue computation."""

import pytest
from berries.core.board import BerryBoard
from berries.core.clues import compute_clues, full_clue_grid, neighbors, neighbor_count
from berries.core.patterns import (
    ROW_PATTERNS,
    get_all_patterns,
    get_patterns_excluding_columns,
    pattern_to_mask,
)
from berries.generator import BoardGenerator


def mini_clue_board() -> BerryBoard:
    """A few berries in easy-to-reason positions; not a valid full board."""
    board = BerryBoard()
    board.set(1, 1, 1)
    board.set(1, 2, 1)
    board.set(2, 1, 1)
    board.set(0, 8, 1)
    return board


class TestRowPatterns:
    """Tests for the row pattern catalog."""

    def test_catalog_has_84_distinct_patterns(self):
        patterns = get_all_patterns()
        assert len(patterns) == 84
        assert len(set(patterns)) == 84

    def test_every_pattern_has_three_berries(self):
        for pattern in ROW_PATTERNS:
            assert len(pattern) == 9
            assert sum(pattern) == 3
            assert set(pattern) <= {0, 1}

    def test_catalog_is_stable(self):
        assert get_all_patterns() is get_all_patterns()
        assert ROW_PATTERNS[0] == (1, 1, 1, 0, 0, 0, 0, 0, 0)

    def test_excluding_columns(self):
        subset = get_patterns_excluding_columns({0, 4})
        # choose 3 of the 7 remaining columns
        assert len(subset) == 35
        assert all(p[0] == 0 and p[4] == 0 for p in subset)

    def test_excluding_columns_preserves_order(self):
        subset = get_patterns_excluding_columns([8])
        positions = [ROW_PATTERNS.index(p) for p in subset]
        assert positions == sorted(positions)

    def test_excluding_nothing_returns_all(self):
        assert get_patterns_excluding_columns([]) == ROW_PATTERNS

    def test_pattern_to_mask(self):
        assert pattern_to_mask((1, 0, 0, 0, 0, 0, 0, 1, 1)) == 0b110000001


class TestComputeClues:
    """Tests for neighbour clue computation."""

    def test_hand_crafted_board(self):
        """Counts exclude the cell itself."""
        clues = compute_clues(mini_clue_board())

        # neighbours (1,1), (1,2), (2,1)
        assert clues[2, 2] == 3
        # only (1,1) is a neighbour
        assert clues[0, 0] == 1
        # a berry cell still gets a count: (1,2) and (2,1)
        assert clues[1, 1] == 2
        # corner berry with no berry neighbours
        assert clues[0, 8] == 0
        assert clues[1, 8] == 1
        assert clues[0, 7] == 1

    def test_neighbor_counts_by_position(self):
        assert neighbor_count(0, 0) == 3
        assert neighbor_count(8, 8) == 3
        assert neighbor_count(0, 4) == 5
        assert neighbor_count(4, 0) == 5
        assert neighbor_count(4, 4) == 8
        assert (0, 0) not in neighbors(0, 0)

    def test_counts_never_exceed_neighbor_count(self):
        board = BoardGenerator(seed=3).generate()
        clues = compute_clues(board)
        for r in range(9):
            for c in range(9):
                assert 0 <= clues[r, c] <= neighbor_count(r, c)

    def test_full_board_of_berries(self):
        """Every neighbour marked: counts equal the neighbour counts."""
        board = BerryBoard.from_string("1" * 81)
        clues = compute_clues(board)
        assert clues[0, 0] == 3
        assert clues[0, 4] == 5
        assert clues[4, 4] == 8

    def test_full_clue_grid_only_on_empty_cells(self):
        board = BoardGenerator(seed=11).generate()
        grid = full_clue_grid(board)
        clues = compute_clues(board)

        assert grid.count_clues() == 81 - 27
        for r in range(9):
            for c in range(9):
                if board.is_marked(r, c):
                    assert grid.get(r, c) is None
                else:
                    assert grid.get(r, c) == clues[r, c]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
