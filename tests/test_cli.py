"""Tests for the command-line interface."""

import json

import pytest
from berries.cli import main
from berries.core.clues import full_clue_grid
from berries.generator import BoardGenerator


def csv(values):
    return ",".join(str(v) for v in values)


@pytest.fixture(scope="module")
def board():
    return BoardGenerator(seed=77).generate()


class TestSolveCommand:
    """Tests for `berries solve`."""

    def test_solves_full_clue_grid(self, board, capsys):
        clues = full_clue_grid(board).to_list81()
        main(["solve", f"--clues={csv(clues)}"])

        out = capsys.readouterr().out
        assert "✓ Solved" in out
        assert "unique" in out
        assert str(board) in out

    def test_no_solution_exits(self, capsys):
        clues = [-1] * 81
        clues[0] = 8
        with pytest.raises(SystemExit) as exc:
            main(["solve", f"--clues={csv(clues)}"])
        assert exc.value.code == 1
        assert "No solution" in capsys.readouterr().out

    def test_wrong_length_exits(self, capsys):
        with pytest.raises(SystemExit):
            main(["solve", "--clues=1,2,3"])
        assert "expected 81 values" in capsys.readouterr().out

    def test_out_of_range_clue_exits(self, capsys):
        with pytest.raises(SystemExit):
            main(["solve", f"--clues={csv([9] + [-1] * 80)}"])
        assert "Error parsing clues" in capsys.readouterr().out


class TestCheckCommand:
    """Tests for `berries check`."""

    def test_unknown_board_is_clean(self, capsys):
        main(["check", f"--board={csv([0] * 81)}", f"--clues={csv([-1] * 81)}"])
        assert "No violations" in capsys.readouterr().out

    def test_reports_row_violation(self, capsys):
        player = [0] * 81
        player[0:4] = [1, 1, 1, 1]
        with pytest.raises(SystemExit) as exc:
            main(["check", f"--board={csv(player)}", f"--clues={csv([-1] * 81)}"])
        assert exc.value.code == 1
        assert "✗ Row 0" in capsys.readouterr().out

    def test_rejects_bad_cell_state(self, capsys):
        with pytest.raises(SystemExit):
            main(["check", f"--board={csv([2] * 81)}", f"--clues={csv([-1] * 81)}"])
        assert "cell states" in capsys.readouterr().out


class TestPoolCommands:
    """Tests for `berries generate` and `berries sort`."""

    def test_generate_then_sort(self, tmp_path, capsys):
        out = str(tmp_path / "pool.json")
        main(["generate", "-n", "1", "-x", "20", "-s", "4", "--no-progress", "-o", out])
        main(["generate", "-n", "1", "-x", "20", "-s", "5", "--no-progress", "-o", out])

        with open(out) as f:
            data = json.load(f)
        assert len(data["puzzles"]) == 2
        assert data["extraClues"] == 20
        assert data["nonEmptyBlocks"] is False

        main(["sort", "-o", out])
        with open(out) as f:
            data = json.load(f)
        assert len(data["puzzles"]) == 2
        assert "Pool size: 2" in capsys.readouterr().out

    def test_generate_rejects_negative_extra(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["generate", "-x", "-1", "-o", str(tmp_path / "pool.json")])
        assert "Invalid -x/--extra-clues" in capsys.readouterr().out

    def test_no_command_prints_help(self):
        with pytest.raises(SystemExit):
            main([])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
