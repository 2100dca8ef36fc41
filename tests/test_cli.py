"""Tests for the command-line entry point."""

import msgspec
import pytest

from tilebench.cli import EXIT_FATAL, EXIT_INTERRUPTED, EXIT_OK, build_parser, main
from tilebench.session import BenchmarkSession
from tilebench.stats import RunRecord


def run_cli(script, *extra: str) -> int:
    return main([str(script), "--dialect", "python", "--log-level", "error", *extra])


class TestParser:
    def test_defaults(self):
        args = build_parser().parse(["bench.txt"])
        assert args.script == "bench.txt"
        assert args.tile_size == 8
        assert args.workers is None
        assert args.dialect == "numba"
        assert args.log_level == "info"
        assert args.json is None
        assert args.report is False

    def test_invalid_dialect(self):
        with pytest.raises(SystemExit):
            build_parser().parse(["bench.txt", "--dialect", "cuda"])

    def test_invalid_tile_size(self, write_script):
        with pytest.raises(SystemExit):
            main([str(write_script("clear\n")), "--tile-size", "0"])


class TestMain:
    def test_success_prints_to_stdout(self, write_script, capsys):
        script = write_script(
            "resolution 8 8\nrun gradient.py 2\nprint frames ${sum frame-time}\n"
        )
        assert run_cli(script) == EXIT_OK
        captured = capsys.readouterr()
        assert captured.out.startswith("frames ")
        assert captured.err == ""

    def test_parse_error(self, write_script, capsys):
        script = write_script("print before\nframerate\n")
        assert run_cli(script) == EXIT_FATAL
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "line 2:" in captured.err

    def test_compile_error(self, write_script, kernel_dir, capsys):
        (kernel_dir / "broken.py").write_text("def main_image(:\n")
        script = write_script("resolution 8 8\nrun broken.py 1\n")
        assert run_cli(script) == EXIT_FATAL
        assert "broken.py" in capsys.readouterr().err

    def test_missing_script(self, tmp_path, capsys):
        assert run_cli(tmp_path / "absent.txt") == EXIT_FATAL
        assert "I/O error" in capsys.readouterr().err

    def test_interrupt(self, write_script, monkeypatch, capsys):
        def interrupt(self, path):
            raise KeyboardInterrupt

        monkeypatch.setattr(BenchmarkSession, "run_file", interrupt)
        assert run_cli(write_script("clear\n")) == EXIT_INTERRUPTED
        assert "interrupted" in capsys.readouterr().err

    def test_json_output(self, write_script, tmp_path):
        script = write_script("resolution 8 8\nrun gradient.py 3\nrun checker.py 1\n")
        out = tmp_path / "runs.json"
        assert run_cli(script, "--json", str(out)) == EXIT_OK

        records = msgspec.json.decode(out.read_bytes(), type=list[RunRecord])
        assert [len(r.frames) for r in records] == [3, 1]

    def test_report(self, write_script, capsys):
        script = write_script("resolution 16 8\nrun gradient.py 1\n")
        assert run_cli(script, "--report") == EXIT_OK
        out = capsys.readouterr().out
        assert "Resolution: 16x8" in out
        assert "Runs: 1" in out

    def test_log_file(self, write_script, tmp_path):
        log_file = tmp_path / "logs" / "run.txt"
        script = write_script("resolution 8 8\nrun gradient.py 1\n")
        status = main(
            [
                str(script),
                "--dialect",
                "python",
                "--log-level",
                "info",
                "--log-file",
                str(log_file),
            ]
        )
        assert status == EXIT_OK
        assert "Built" in log_file.read_text()

    def test_kernel_runtime_error(self, write_script, kernel_dir, tmp_path, capsys):
        (kernel_dir / "divide.py").write_text(
            "def main_image(x, y, c):\n    return 1.0 / 0.0, 0.0, 0.0, 1.0\n"
        )
        log_file = tmp_path / "run.txt"
        script = write_script("resolution 8 8\nrun divide.py 2\nprint never\n")

        status = run_cli(script, "--log-file", str(log_file))

        assert status == EXIT_FATAL
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ZeroDivisionError" in captured.err
        logged = log_file.read_text()
        assert "[ERROR]" in logged
        assert "divide.py" in logged
