# file: tests/test_orchestrator.py
from __future__ import annotations

import builtins
import json
from pathlib import Path
from typing import List

import pytest

from pbn_rotator import orchestrator
from pbn_rotator.pbn_io import read_pbn_file
from pbn_rotator.rotation_types import InvalidPattern, RotationBasis, RotationError, Seat
from pbn_rotator.setup_env import SetupError

from conftest import SAMPLE_PBN

# The sample file minus board 3, which has nothing to resolve a basis from.
SAMPLE_WITHOUT_BOARD_3 = SAMPLE_PBN.split('\n[Board "3"]')[0]


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    path = tmp_path / "ABS.pbn"
    path.write_text(SAMPLE_PBN, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# run_rotation
# ---------------------------------------------------------------------------


def test_run_rotation_writes_one_file_per_pattern(input_file: Path, capsys) -> None:
    report = orchestrator.run_rotation(input_file, ["S,NESW"])

    s_file = input_file.parent / "ABS - S.pbn"
    nesw_file = input_file.parent / "ABS - NESW.pbn"
    assert s_file.is_file()
    assert nesw_file.is_file()

    # Pattern S leaves boards 1 and 2 where they are.
    assert s_file.read_text(encoding="utf-8") == SAMPLE_WITHOUT_BOARD_3

    rotated = read_pbn_file(nesw_file)
    assert [b.number for b in rotated.boards] == [1, 2]
    assert rotated.games[0].tag_value("Event") == "Teaching set"
    assert rotated.boards[0].declarer is Seat.NORTH
    assert rotated.boards[1].tag_value("Student") == "E"

    assert report.total_failed == 2
    assert [p.pattern for p in report.patterns] == ["S", "NESW"]

    out, err = capsys.readouterr()
    assert "Read 3 boards from" in out
    assert "Wrote 2 boards to" in out
    assert "WARNING: [NESW] board 3 skipped" in err


def test_run_rotation_explicit_output_and_note(input_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "custom" / "out.pbn"
    orchestrator.run_rotation(
        input_file,
        ["NS"],
        output_file=target,
        basis=RotationBasis.DEALER,
        rotation_note=True,
    )

    boards = read_pbn_file(target).boards
    # Dealer basis: N, E, (none) -> targets N, S
    assert [b.number for b in boards] == [1, 2]
    assert boards[0].dealer is Seat.NORTH
    assert boards[1].dealer is Seat.SOUTH
    assert boards[1].tag_value("RotationNote").startswith("Board 2, chOption: S, chBasis: E")


def test_run_rotation_strict_skips_patterns_with_failures(input_file: Path, capsys) -> None:
    report = orchestrator.run_rotation(input_file, ["S"], strict=True)

    assert not (input_file.parent / "ABS - S.pbn").exists()
    assert report.patterns[0].output_file is None
    _, err = capsys.readouterr()
    assert "no file written (--strict)" in err


def test_run_rotation_strict_writes_clean_patterns(input_file: Path) -> None:
    report = orchestrator.run_rotation(
        input_file, ["E"], strict=True, basis=RotationBasis.NORTH, use_standard_vul=True
    )
    assert report.total_failed == 0
    boards = read_pbn_file(input_file.parent / "ABS - E.pbn").boards
    assert len(boards) == 3
    assert all(b.dealer is not None for b in boards[:2])
    assert boards[2].tag_value("Vulnerable") == "EW"


def test_run_rotation_writes_report(input_file: Path, tmp_path: Path) -> None:
    report_path = tmp_path / "run.json"
    orchestrator.run_rotation(input_file, ["NESW"], out_dir=tmp_path / "rot", report_path=report_path)

    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["patterns"][0]["pattern"] == "NESW"
    assert data["patterns"][0]["output_file"].endswith("ABS - NESW.pbn")
    assert (tmp_path / "rot" / "ABS - NESW.pbn").is_file()


def test_run_rotation_checks_patterns_before_writing(input_file: Path) -> None:
    with pytest.raises(InvalidPattern):
        orchestrator.run_rotation(input_file, ["S,NX"])
    assert not (input_file.parent / "ABS - S.pbn").exists()


def test_run_rotation_needs_boards(tmp_path: Path) -> None:
    path = tmp_path / "empty.pbn"
    path.write_text('[Event "Nothing here"]\n', encoding="utf-8")
    with pytest.raises(RotationError, match="No valid boards"):
        orchestrator.run_rotation(path, ["S"])


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


def test_main_partial_exit_code(input_file: Path) -> None:
    assert orchestrator.main(["-i", str(input_file), "-p", "S"]) == orchestrator.EXIT_PARTIAL


def test_main_success_exit_code(input_file: Path) -> None:
    code = orchestrator.main(["-i", str(input_file), "-p", "S,W", "-b", "north"])
    assert code == orchestrator.EXIT_OK
    assert (input_file.parent / "ABS - W.pbn").is_file()


@pytest.mark.parametrize(
    "extra",
    [
        ["-p", "NX"],
        ["-p", "S,N", "-o", "single.pbn"],
    ],
)
def test_main_error_exit_code(input_file: Path, capsys, extra: List[str]) -> None:
    code = orchestrator.main(["-i", str(input_file)] + extra)
    assert code == orchestrator.EXIT_ERROR
    _, err = capsys.readouterr()
    assert err.startswith("ERROR:")


def test_main_missing_input(tmp_path: Path) -> None:
    assert orchestrator.main(["-i", str(tmp_path / "missing.pbn")]) == orchestrator.EXIT_ERROR


def test_main_rejects_unknown_basis(input_file: Path) -> None:
    with pytest.raises(SystemExit):
        orchestrator.main(["-i", str(input_file), "-b", "compass"])


def test_setup_error_is_not_a_rotation_error() -> None:
    assert not issubclass(SetupError, RotationError)


# ---------------------------------------------------------------------------
# Interactive session
# ---------------------------------------------------------------------------


def test_interactive_session(monkeypatch, input_file: Path, capsys) -> None:
    answers: List[str] = [
        str(input_file),  # input file
        "s",              # patterns
        "",               # basis: default (standard)
        "",               # standard vulnerability: no
        "y",              # rotation note: yes
    ]

    def fake_input(prompt: str) -> str:
        return answers.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)

    code = orchestrator.main([])

    assert code == orchestrator.EXIT_PARTIAL
    assert answers == []
    boards = read_pbn_file(input_file.parent / "ABS - S.pbn").boards
    assert all(b.has_tag("RotationNote") for b in boards)
    out, _ = capsys.readouterr()
    assert "=== Session complete ===" in out


def test_run_rotation_reports_games_without_cards(input_file: Path, tmp_path: Path, capsys) -> None:
    report_path = tmp_path / "run.json"
    report = orchestrator.run_rotation(input_file, ["S"], report_path=report_path)

    assert report.games_without_cards == 1
    out, _ = capsys.readouterr()
    assert "Dropped 1 game(s) without cards" in out

    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["games_without_cards"] == 1

    # The header block is still copied into the output.
    written = read_pbn_file(input_file.parent / "ABS - S.pbn")
    assert written.games[0].tag_value("Event") == "Teaching set"


def test_run_rotation_quiet_when_every_game_has_cards(tmp_path: Path, capsys) -> None:
    path = tmp_path / "boards.pbn"
    path.write_text(SAMPLE_PBN.split('[Event ""]\n', 1)[1], encoding="utf-8")

    report = orchestrator.run_rotation(path, ["S"], basis=RotationBasis.NORTH)

    assert report.games_without_cards == 0
    out, _ = capsys.readouterr()
    assert "without cards" not in out


def test_interactive_session_eof_exits_cleanly(monkeypatch, capsys) -> None:
    def fake_input(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)

    assert orchestrator.main([]) == orchestrator.EXIT_ERROR
    _, err = capsys.readouterr()
    assert "ERROR: Input aborted (EOF)" in err


def test_interactive_session_eof_at_basis_choice(monkeypatch, input_file: Path) -> None:
    answers: List[str] = [str(input_file), "S"]

    def fake_input(prompt: str) -> str:
        if not answers:
            raise EOFError
        return answers.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)

    assert orchestrator.main([]) == orchestrator.EXIT_ERROR
    assert not (input_file.parent / "ABS - S.pbn").exists()
