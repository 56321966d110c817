"""Tests for the ``fpmine`` command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from test_fpbase import TEXTBOOK
from test_io import TEXTBOOK_LINES

from fpmine.cli import build_parser, main


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "db.txt"
    path.write_text("\n".join(" ".join(map(str, t)) for t in TEXTBOOK) + "\n")
    return path


def test_mines_textbook(db_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "patterns.txt"
    assert main(["0.22", str(db_path), str(out)]) == 0
    assert out.read_text().splitlines() == TEXTBOOK_LINES
    assert "elapsed time:" in capsys.readouterr().out


def test_options(db_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "patterns.txt"
    assert main(["0.22", str(db_path), str(out), "--workers", "1", "--max-len", "1"]) == 0
    assert out.read_text().splitlines() == TEXTBOOK_LINES[:5]


def test_missing_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
    assert "usage" in capsys.readouterr().err


def test_non_numeric_support(db_path: Path, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["half", str(db_path), str(tmp_path / "out.txt")])
    assert exc.value.code == 1


def test_missing_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out.txt"
    assert main(["0.5", str(tmp_path / "nope.txt"), str(out)]) == 1
    assert "cannot read" in capsys.readouterr().err
    assert not out.exists()


def test_invalid_worker_count(db_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["0.22", str(db_path), str(tmp_path / "out.txt"), "--workers", "0"]) == 1
    assert "n_workers" in capsys.readouterr().err


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["0.1", "in.txt", "out.txt"])
    assert args.workers == 8
    assert args.max_len is None
    assert args.verbose == 0


def test_non_utf8_input(tmp_path: Path) -> None:
    db = tmp_path / "db.bin"
    db.write_bytes(b"1 2\xff3\n2 3\n")
    out = tmp_path / "patterns.txt"
    assert main(["0.5", str(db), str(out)]) == 0
    assert out.read_text().splitlines() == [
        "1:0.5000",
        "2:1.0000",
        "3:1.0000",
        "1,2:0.5000",
        "1,3:0.5000",
        "2,3:1.0000",
        "1,2,3:0.5000",
    ]
