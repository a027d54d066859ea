"""Tests for the command-line interface."""

import io
import json

import pytest

from kudoku import cli
from kudoku.solvers import ExactCoverSolver

TEST_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
TEST_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"
CONTRADICTION = "55" + TEST_PUZZLE[2:]


class TestSolveCommand:
    """Tests for `kudoku solve`."""

    def test_single_puzzle(self, capsys):
        cli.main(["solve", "--puzzle", TEST_PUZZLE])
        assert capsys.readouterr().out == TEST_SOLUTION + "\n\n"

    def test_reads_stdin(self, capsys, monkeypatch):
        lines = "\n".join([TEST_PUZZLE, "too short", CONTRADICTION, TEST_SOLUTION]) + "\n"
        monkeypatch.setattr("sys.stdin", io.StringIO(lines))

        cli.main(["solve"])

        out = capsys.readouterr().out
        assert out == TEST_SOLUTION + "\n\n" + "\n" + TEST_SOLUTION + "\n\n"

    def test_reads_file(self, capsys, tmp_path):
        path = tmp_path / "puzzles.txt"
        path.write_text(TEST_PUZZLE + "\n")

        cli.main(["solve", "--input", str(path)])
        assert capsys.readouterr().out == TEST_SOLUTION + "\n\n"

    def test_max_solutions(self, capsys):
        cli.main(["solve", "--puzzle", "." * 81, "--max-solutions", "2", "--strategy", "full-scan"])
        lines = capsys.readouterr().out.split("\n")
        assert len(lines[0]) == 81
        assert len(lines[1]) == 81
        assert lines[2:] == ["", ""]

    def test_pretty(self, capsys):
        cli.main(["solve", "--puzzle", TEST_PUZZLE, "--pretty"])
        out = capsys.readouterr().out
        assert out.startswith("+-------+-------+-------+\n| 5 3 4 | 6 7 8 | 9 1 2 |")

    def test_verbose(self, capsys):
        cli.main(["solve", "--puzzle", TEST_PUZZLE, "--verbose", "--stats"])
        assert capsys.readouterr().out == TEST_SOLUTION + "\n\n"

    def test_interrupted_puzzle_keeps_separator(self, capsys, monkeypatch):
        """A timed-out puzzle still ends with its blank line and the stream continues."""
        stop_checks = [lambda: True]

        def stop_check(solver):
            return stop_checks.pop() if stop_checks else None

        monkeypatch.setattr(ExactCoverSolver, "_stop_check", stop_check)
        monkeypatch.setattr("sys.stdin", io.StringIO("." * 81 + "\n" + TEST_PUZZLE + "\n"))

        cli.main(["solve", "--timeout", "5"])

        assert capsys.readouterr().out == "\n" + TEST_SOLUTION + "\n\n"

    def test_timeout_option(self, capsys):
        cli.main(["solve", "--puzzle", "." * 81, "--timeout", "0.001"])
        out = capsys.readouterr().out
        assert out.endswith("\n\n") or out == "\n"

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 1

    def test_invalid_max_solutions(self):
        with pytest.raises(SystemExit) as exc:
            cli.main(["solve", "--puzzle", TEST_PUZZLE, "--max-solutions", "0"])
        assert exc.value.code == 1


class TestBenchmarkCommand:
    """Tests for `kudoku benchmark`."""

    def test_benchmark_writes_results(self, capsys, tmp_path):
        path = tmp_path / "puzzles.txt"
        path.write_text(TEST_PUZZLE + "\n" + CONTRADICTION + "\n")
        output = tmp_path / "results"

        cli.main(["benchmark", "--input", str(path), "--output", str(output), "--no-charts"])

        results = json.loads((output / "benchmark_results.json").read_text())
        assert len(results) == 4
        assert {r["strategy"] for r in results} == {"early-exit", "full-scan"}
        assert "Benchmark complete!" in capsys.readouterr().out
