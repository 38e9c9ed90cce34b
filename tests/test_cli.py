"""Tests for the command-line interface."""

import json

import pytest
from futoshiki.cli import main
from futoshiki.generator import PuzzleGenerator, Difficulty


@pytest.fixture
def puzzle_file(tmp_path):
    puzzle, solution = PuzzleGenerator(seed=4).generate_with_solution(Difficulty.EASY)
    path = tmp_path / "puzzle.json"
    path.write_text(json.dumps([puzzle.to_dict()]))
    return str(path), solution


class TestCli:
    """Tests for the CLI commands."""

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_generate_writes_json(self, tmp_path, capsys):
        output = tmp_path / "out.json"
        assert main(["generate", "-d", "Easy", "-s", "1", "-o", str(output)]) == 0

        data = json.loads(output.read_text())
        assert len(data) == 1
        assert data[0]["difficulty"] == "Easy"
        assert len(data[0]["grid"]) == 81
        assert "Total puzzles generated: 1" in capsys.readouterr().out

    def test_solve(self, puzzle_file, capsys):
        path, solution = puzzle_file
        assert main(["solve", "-p", path]) == 0
        assert "unique" in capsys.readouterr().out

    def test_check_correct(self, puzzle_file, capsys):
        path, solution = puzzle_file
        assert main(["check", "-p", path, "--solution", solution.to_string()]) == 0
        assert "Correct!" in capsys.readouterr().out

    def test_check_incorrect(self, puzzle_file, capsys):
        path, solution = puzzle_file
        wrong = "123456789" * 9
        assert main(["check", "-p", path, "--solution", wrong]) == 1
        out = capsys.readouterr().out
        assert "Incorrect!" in out
        assert "Sudoku rules violated" in out

    def test_check_valid_grid_wrong_answer(self, puzzle_file, capsys):
        path, solution = puzzle_file
        swapped = solution.to_string().translate(str.maketrans("12", "21"))
        assert main(["check", "-p", path, "--solution", swapped]) == 1

        out = capsys.readouterr().out
        assert "Incorrect!" in out
        assert "Sudoku rules violated" not in out

    def test_check_incomplete(self, puzzle_file, capsys):
        path, solution = puzzle_file
        assert main(["check", "-p", path, "--solution", "0" * 81]) == 1
        assert "Incomplete!" in capsys.readouterr().out

    def test_bad_index(self, puzzle_file, capsys):
        path, _ = puzzle_file
        assert main(["solve", "-p", path, "-i", "3"]) == 1
        assert "Error" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.json"
        assert main(["solve", "-p", str(missing)]) == 1
        assert "Error" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
