"""
High-level Orchestrator for the PBN rotator.

This module provides the command-line entry that ties together:

- Section A: Output setup (setup_env.run_setup)
- Reading the input file (pbn_io.read_pbn_file)
- Section B: Batch rotation (batch_driver.run_batch)
- Section C: Writing one file per pattern (pbn_io.write_pbn_file)
- Optional run report (rotation_report)

It implements:

  • A non-interactive command:
        python -m pbn_rotator -i games.pbn -p S,NS,NESW --standard-vul

  • An interactive session when started with no arguments:
        - User picks the input file, patterns and basis
        - The same run is performed and a summary printed

  • Partial failures:
        - Boards whose basis cannot be resolved are reported as warnings
          and left out of that pattern's file
        - With --strict, a pattern with any failed board writes no file

Exit status: 0 success, 1 fatal error, 2 some boards could not be rotated.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .batch_driver import PatternResult, run_batch, with_rotation_note
from .board_model import Board
from .cli_io import _input_existing_file, _input_patterns, _yes_no
from .cli_prompts import prompt_choice
from .pattern_cycler import parse_pattern, split_patterns
from .pbn_io import PbnError, PbnFile, read_pbn_file, write_pbn_file
from .rotation_report import RotationRunReport, build_run_report
from .rotation_types import (
    DEFAULT_BASIS,
    DEFAULT_PATTERN,
    RotationBasis,
    RotationError,
)
from .setup_env import SetupError, run_setup

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2


# ---------------------------------------------------------------------------
# Output assembly
# ---------------------------------------------------------------------------


def _assemble_output(
    pbn: PbnFile,
    result: PatternResult,
    *,
    rotation_note: bool,
) -> List[Board]:
    """
    Build the game list for one pattern's file.

    Games without cards (header blocks) are kept untouched, rotated boards
    replace their originals, failed boards are left out.
    """
    failed = {f.position for f in result.failures}
    rotated = iter(zip(result.boards, result.records))

    games: List[Board] = []
    position = 0
    for game in pbn.games:
        if not game.has_cards():
            games.append(game)
            continue
        if position not in failed:
            board, record = next(rotated)
            games.append(with_rotation_note(board, record) if rotation_note else board)
        position += 1
    return games


def _report_failures(result: PatternResult) -> None:
    for f in result.failures:
        print(f"WARNING: [{result.pattern}] board {f.board_number} skipped: {f.reason}", file=sys.stderr)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def run_rotation(
    input_file: Path,
    patterns: Sequence[str],
    *,
    output_file: Optional[Path] = None,
    out_dir: Optional[Path] = None,
    basis: RotationBasis = DEFAULT_BASIS,
    use_standard_vul: bool = False,
    rotation_note: bool = False,
    strict: bool = False,
    report_path: Optional[Path] = None,
) -> RotationRunReport:
    """
    Rotate `input_file` once per pattern and write one PBN file each.

    Raises
    ------
    InvalidPattern
        Any pattern is malformed. Checked before anything is read or written.
    SetupError, PbnError
        Output locations or the input file cannot be used.
    RotationError
        The input has no boards with cards.
    """
    for entry in patterns:
        for p in split_patterns(entry):
            parse_pattern(p)

    setup = run_setup(
        input_file=input_file,
        patterns=patterns,
        output_file=output_file,
        out_dir=out_dir,
    )

    pbn = read_pbn_file(setup.input_file)
    boards = pbn.boards
    if not boards:
        raise RotationError(f"No valid boards found in {setup.input_file}")

    print(f"Read {len(boards)} boards from {setup.input_file}")
    without_cards = len(pbn.games) - len(boards)
    if without_cards:
        print(f"Dropped {without_cards} game(s) without cards from rotation (copied unchanged)")

    results = run_batch(
        boards,
        setup.patterns,
        basis=basis,
        use_standard_vul=use_standard_vul,
    )

    written: Dict[str, Path] = {}
    for pattern, result in results.items():
        _report_failures(result)
        if strict and result.failures:
            print(
                f"WARNING: [{pattern}] {len(result.failures)} board(s) failed; "
                f"no file written (--strict).",
                file=sys.stderr,
            )
            continue

        path = setup.output_files[pattern]
        games = _assemble_output(pbn, result, rotation_note=rotation_note)
        write_pbn_file(path, pbn, games)
        written[pattern] = path
        print(f"Wrote {len(result.boards)} boards to {path}")

    report = build_run_report(
        results,
        input_file=str(setup.input_file),
        basis=basis.value,
        use_standard_vul=use_standard_vul,
        output_files=written,
        games_without_cards=without_cards,
    )
    if report_path is not None:
        try:
            report.write(report_path)
        except OSError as exc:
            raise SetupError(f"Failed to write report to {report_path}: {exc}") from exc
        print(f"Report written to {report_path}")
    return report


# ---------------------------------------------------------------------------
# Interactive session
# ---------------------------------------------------------------------------


def _run_interactive_session() -> int:
    """
    Prompt for the run parameters, then call run_rotation().
    """
    print("\n=== PBN Rotation Session ===")

    try:
        input_file = _input_existing_file("Input PBN file")
        patterns = _input_patterns("Rotation pattern(s), comma separated", DEFAULT_PATTERN)

        print("\nBasis for the current orientation of each board:")
        basis = prompt_choice(
            "Choose basis",
            list(RotationBasis),
            default_index=list(RotationBasis).index(DEFAULT_BASIS),
            label=lambda b: b.value,
        )
        use_standard_vul = _yes_no("Use standard vulnerability by board number?", default=False)
        rotation_note = _yes_no("Add a RotationNote tag to each board?", default=False)

        print("")
        report = run_rotation(
            input_file,
            patterns,
            basis=basis,
            use_standard_vul=use_standard_vul,
            rotation_note=rotation_note,
        )
    except (RotationError, SetupError, PbnError, RuntimeError) as exc:
        print(f"\nERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print("\n=== Session complete ===")
    print(report.summary())
    return EXIT_PARTIAL if report.total_failed else EXIT_OK


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pbn-rotator",
        description="Rotate PBN deals so dealer/declarer follow a seat pattern.",
    )
    parser.add_argument("-i", "--input", required=True, type=Path, help="Input PBN file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output PBN file (single pattern only; default '<input> - <PATTERN>.pbn')",
    )
    parser.add_argument(
        "-p",
        "--pattern",
        default=DEFAULT_PATTERN,
        help="Rotation pattern(s), comma separated, e.g. S,NS,NESW [%(default)s]",
    )
    parser.add_argument(
        "-b",
        "--basis",
        default=DEFAULT_BASIS.value,
        choices=[b.value for b in RotationBasis],
        help="How to find each board's current orientation [%(default)s]",
    )
    parser.add_argument(
        "--standard-vul",
        action="store_true",
        help="Set vulnerability from the board number instead of rotating it",
    )
    parser.add_argument("--out-dir", type=Path, help="Directory for auto-named outputs")
    parser.add_argument(
        "--rotation-note",
        action="store_true",
        help="Add a RotationNote tag describing the rotation to each board",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Write no file for a pattern if any of its boards fails",
    )
    parser.add_argument("--report", type=Path, help="Write a run report (.json or .csv)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args_list = list(sys.argv[1:] if argv is None else argv)
    if not args_list:
        return _run_interactive_session()

    args = build_parser().parse_args(args_list)
    try:
        report = run_rotation(
            args.input,
            [args.pattern],
            output_file=args.output,
            out_dir=args.out_dir,
            basis=RotationBasis(args.basis),
            use_standard_vul=args.standard_vul,
            rotation_note=args.rotation_note,
            strict=args.strict,
            report_path=args.report,
        )
    except (RotationError, SetupError, PbnError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_PARTIAL if report.total_failed else EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
