"""Tests for the command-line interface."""

from pathlib import Path

import pytest

from csv_splitter import cli
from csv_splitter.cli import build_policy, create_parser, main
from csv_splitter.split.policy import ByLines, ByMaxSize, ByPartCount

HEADER = b"id,value\n"
ROWS = b"".join(f"{i},{i * i}\n".encode() for i in range(1, 11))


@pytest.fixture
def input_csv(tmp_path: Path) -> Path:
    path = tmp_path / "numbers.csv"
    path.write_bytes(HEADER + ROWS)
    return path


class TestMain:
    """Test cases for the CLI entry point."""

    def test_split_by_lines(self, input_csv: Path, capsys) -> None:
        exit_code = main([str(input_csv), "-l", "4"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Split completed: 3 parts created" in out
        assert f"total size: {len(ROWS)} B" in out
        assert (input_csv.parent / "numbers_part003.csv").exists()

    def test_split_by_size_string(self, input_csv: Path, capsys) -> None:
        exit_code = main([str(input_csv), "--size", "1K"])

        assert exit_code == 0
        assert "Split completed: 1 parts created" in capsys.readouterr().out
        assert (input_csv.parent / "numbers_part001.csv").read_bytes() == HEADER + ROWS

    def test_split_by_parts_into_output_dir(self, input_csv: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out" / "parts"

        exit_code = main(
            [str(input_csv), "-p", "2", "--output-dir", str(out_dir), "--chunk-size", "8"]
        )

        assert exit_code == 0
        parts = sorted(out_dir.iterdir())
        assert [p.name for p in parts][0] == "numbers_part001.csv"
        assert b"".join(p.read_bytes()[len(HEADER) :] for p in parts) == ROWS

    def test_missing_input_exits_non_zero(self, tmp_path: Path, caplog) -> None:
        exit_code = main([str(tmp_path / "absent.csv"), "-l", "10"])

        assert exit_code == 1
        assert "Error:" in caplog.text

    def test_empty_input_exits_non_zero(self, tmp_path: Path, caplog) -> None:
        empty = tmp_path / "empty.csv"
        empty.write_bytes(b"")

        assert main([str(empty), "-p", "3"]) == 1
        assert "Empty CSV file" in caplog.text

    def test_one_line_per_part(self, input_csv: Path, capsys) -> None:
        """Test that data ending exactly on a part boundary exits cleanly."""
        assert main([str(input_csv), "-l", "1"]) == 0

        assert "Split completed: 10 parts created" in capsys.readouterr().out
        assert (input_csv.parent / "numbers_part010.csv").read_bytes() == HEADER + b"10,100\n"
        assert not (input_csv.parent / "numbers_part011.csv").exists()

    def test_io_failure_mid_split_exits_non_zero(
        self, input_csv: Path, monkeypatch, caplog
    ) -> None:
        def fail(self, policy):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(cli.PartitionEngine, "split", fail)

        assert main([str(input_csv), "-l", "2"]) == 1
        assert "No space left on device" in caplog.text

    def test_unexpected_error_propagates(self, input_csv: Path, monkeypatch) -> None:
        """Test that programming errors are not reported as split failures."""

        def fail(self, policy):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(cli.PartitionEngine, "split", fail)

        with pytest.raises(RuntimeError, match="unexpected"):
            main([str(input_csv), "-l", "2"])


class TestArguments:
    """Test cases for argument validation."""

    @pytest.mark.parametrize(
        "args",
        [
            ["-l", "0"],
            ["-p", "-2"],
            ["-l", "ten"],
            ["-s", "abc"],
            ["-s", "-5"],
            ["-s", "0"],
            ["-l", "5", "-s", "1MB"],
            [],
        ],
    )
    def test_invalid_arguments_exit_with_usage_error(self, input_csv: Path, args) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([str(input_csv), *args])

        assert excinfo.value.code == 2

    def test_build_policy(self) -> None:
        parser = create_parser()

        assert build_policy(parser.parse_args(["f.csv", "-p", "3"])) == ByPartCount(3)
        assert build_policy(parser.parse_args(["f.csv", "-l", "100"])) == ByLines(100)
        assert build_policy(parser.parse_args(["f.csv", "-s", "10 kb"])) == ByMaxSize(10240)
