"""Unit tests for the puzzle pool file format."""

import json
import random

import pytest
from berries.core.clues import full_clue_grid
from berries.core.puzzle import ClueGrid
from berries.generator import BoardGenerator, MinimizerConfig
from berries.pool import (
    PoolFormatError,
    PuzzleEntry,
    PuzzlePool,
    decode_clues81,
    encode_clues81,
    generate_entries,
    human_complexity,
    load_puzzle,
    read_pool,
    score,
    sort_pool,
    validate_clues81,
    write_pool_atomic,
)


@pytest.fixture(scope="module")
def board():
    return BoardGenerator(seed=31).generate()


class TestClues81:
    """Tests for the clues81 encoding."""

    def test_encode_layout(self):
        grid = ClueGrid()
        grid.set(0, 0, 0)
        grid.set(8, 8, 3)
        values = encode_clues81(grid)

        assert len(values) == 81
        assert values[0] == 0
        assert values[80] == 3
        assert values.count(-1) == 79

    def test_decode(self, board):
        grid = full_clue_grid(board)
        assert decode_clues81(encode_clues81(grid)) == grid

    @pytest.mark.parametrize("bad", [[-1] * 80, [-1] * 80 + [9], [-1] * 80 + [-2], [-1] * 80 + [1.5]])
    def test_invalid_values(self, bad):
        with pytest.raises(PoolFormatError):
            validate_clues81(bad)


class TestScoring:
    """Tests for pool scoring and sorting."""

    def test_human_complexity(self):
        assert human_complexity(0, False) == 400
        assert human_complexity(5, True) == 335
        assert human_complexity(30, False) == 200

    def test_score(self):
        entry = PuzzleEntry(gen_seconds=4.0, human_complex=300, clues81=[])
        assert score(entry) == pytest.approx(500.0)

    def test_sort_is_stable(self):
        a = PuzzleEntry(1.0, 300, [1])
        b = PuzzleEntry(0.0, 300, [2])
        c = PuzzleEntry(1.0, 300, [3])
        pool = PuzzlePool(puzzles=[a, b, c])

        sort_pool(pool)
        assert [p.clues81 for p in pool.puzzles] == [[2], [1], [3]]


class TestPoolFile:
    """Tests for reading and writing pool files."""

    def test_missing_file_gives_empty_pool(self, tmp_path):
        pool = read_pool(str(tmp_path / "missing.json"), extra_clues=4, non_empty_blocks=True)
        assert pool.puzzles == []
        assert pool.extra_clues == 4
        assert pool.non_empty_blocks

    def test_write_then_read(self, tmp_path, board):
        path = str(tmp_path / "nested" / "pool.json")
        entry = PuzzleEntry(0.5, 400, encode_clues81(full_clue_grid(board)))
        write_pool_atomic(path, PuzzlePool(extra_clues=2, puzzles=[entry]))

        with open(path) as f:
            data = json.load(f)
        assert data["version"] == 1
        assert data["N"] == 9
        assert data["extraClues"] == 2
        assert data["puzzles"][0]["genSeconds"] == 0.5
        assert not (tmp_path / "nested" / "pool.json.tmp").exists()

        pool = read_pool(path)
        assert pool.extra_clues == 2
        assert pool.puzzles == [entry]

    def test_read_overrides_metadata(self, tmp_path):
        path = str(tmp_path / "pool.json")
        write_pool_atomic(path, PuzzlePool(extra_clues=2))
        assert read_pool(path, extra_clues=7, non_empty_blocks=True).extra_clues == 7

    @pytest.mark.parametrize("doc", [
        {"version": 2, "N": 9, "puzzles": []},
        {"version": 1, "N": 8, "puzzles": []},
        {"version": 1, "N": 9, "puzzles": {}},
        {"version": 1, "N": 9, "puzzles": [{"clues81": []}]},
        {"version": 1, "N": 9, "extraClues": None, "puzzles": []},
        {"version": 1, "N": 9, "extraClues": "many", "puzzles": []},
    ])
    def test_rejects_bad_documents(self, tmp_path, doc):
        path = tmp_path / "pool.json"
        path.write_text(json.dumps(doc))
        with pytest.raises(PoolFormatError):
            read_pool(str(path))

    def test_rejects_invalid_json(self, tmp_path):
        path = tmp_path / "pool.json"
        path.write_text("{not json")
        with pytest.raises(PoolFormatError):
            read_pool(str(path))


class TestLoadPuzzle:
    """Tests for rebuilding puzzles from pool records."""

    def test_load_recovers_solution(self, board):
        entry = PuzzleEntry(0.1, 400, encode_clues81(full_clue_grid(board)))
        puzzle = load_puzzle(entry)

        assert puzzle is not None
        assert puzzle.solution == board

    def test_unsolvable_record(self):
        values = [-1] * 81
        values[0] = 8
        assert load_puzzle(PuzzleEntry(0.1, 400, values)) is None

    def test_malformed_record(self):
        with pytest.raises(PoolFormatError):
            load_puzzle(PuzzleEntry(0.1, 400, [0] * 10))


class TestGenerateEntries:
    """Tests for appending generated puzzles."""

    def test_generate_and_reload(self, tmp_path):
        pool = PuzzlePool()
        saved = []

        def on_entry(entry):
            saved.append(entry)
            return True

        config = MinimizerConfig(extra_clues=5, non_empty_blocks=True)
        entries = generate_entries(
            pool, 1, config, rng=random.Random(17).random,
            progress=False, on_entry=on_entry,
        )

        assert len(entries) == 1
        assert pool.puzzles == entries == saved
        assert pool.extra_clues == 5
        assert pool.non_empty_blocks
        entry = entries[0]
        assert entry.gen_seconds >= 0
        assert entry.human_complex == human_complexity(5, True)

        puzzle = load_puzzle(entry)
        assert puzzle is not None
        assert puzzle.solution.is_valid()
        assert puzzle.puzzle_clues.to_list81() == entry.clues81

    def test_rejects_bad_config(self):
        with pytest.raises(ValueError):
            generate_entries(PuzzlePool(), 1, MinimizerConfig(extra_clues=-1), progress=False)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
