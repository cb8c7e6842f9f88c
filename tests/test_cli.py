from __future__ import annotations

import signal

import pytest

from tetris_optimizer import cli
from tetris_optimizer.solver import SolveResult


FOUR_PIECES = (
    "...#\n...#\n...#\n...#\n\n"
    "....\n....\n....\n####\n\n"
    ".###\n...#\n....\n....\n\n"
    "....\n..##\n.##.\n....\n"
)


@pytest.fixture
def input_file(tmp_path):
    def _write(text: str):
        path = tmp_path / "pieces.txt"
        path.write_text(text)
        return str(path)

    return _write


def test_solution_printed_to_stdout(input_file, capsys) -> None:
    assert cli.main([input_file(FOUR_PIECES)]) == 0
    out, err = capsys.readouterr()
    assert out == "ABBBB\nACCC.\nA..C.\nADD..\nDD...\n"
    assert out.count(".") == 9
    assert "Timing Breakdown" not in err


def test_invalid_input_prints_error(input_file, capsys) -> None:
    assert cli.main([input_file("...#\n..#.\n.#..\n#...\n")]) == 0
    out, err = capsys.readouterr()
    assert out == "ERROR\n"
    assert "invalid tetromino shape at piece 1" in err


def test_missing_file_prints_error(tmp_path, capsys) -> None:
    assert cli.main([str(tmp_path / "nope.txt")]) == 0
    out, err = capsys.readouterr()
    assert out == "ERROR\n"
    assert "cannot open file" in err


def test_time_flag_prints_breakdown(input_file, capsys) -> None:
    cli.main([input_file("....\n.##.\n.##.\n....\n"), "--time"])
    out, err = capsys.readouterr()
    assert out == "AA\nAA\n"
    assert "=== Timing Breakdown ===" in err
    assert "Parse:" in err
    assert "Total solve:" in err
    assert "Total:" in err


def test_timeout_message(input_file, capsys, monkeypatch) -> None:
    monkeypatch.setattr(cli, "solve", lambda cancel, pieces: SolveResult(timed_out=True))
    assert cli.main([input_file(FOUR_PIECES), "--timeout", "5"]) == 0
    out, _ = capsys.readouterr()
    assert out == cli.TIMEOUT_MESSAGE + "\n"


def test_signal_interrupts_search(input_file, capsys, monkeypatch) -> None:
    def interrupted_solve(cancel, pieces):
        signal.raise_signal(signal.SIGINT)
        assert cancel.is_set()
        return SolveResult(timed_out=True)

    previous = signal.getsignal(signal.SIGINT)
    monkeypatch.setattr(cli, "solve", interrupted_solve)
    assert cli.main([input_file(FOUR_PIECES)]) == 0
    out, _ = capsys.readouterr()
    assert out == "INTERRUPTED\n"
    assert signal.getsignal(signal.SIGINT) is previous


def test_usage_errors_exit_with_status_2(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2
    with pytest.raises(SystemExit):
        cli.main(["a.txt", "b.txt"])
    with pytest.raises(SystemExit):
        cli.main(["a.txt", "--timeout", "0"])
    with pytest.raises(SystemExit):
        cli.main(["a.txt", "--unknown"])


def test_parse_args_defaults() -> None:
    args = cli.parse_args(["pieces.txt"])
    assert args.input_file == "pieces.txt"
    assert args.time is False
    assert args.timeout == 300.0
    assert args.log_level == "WARNING"
