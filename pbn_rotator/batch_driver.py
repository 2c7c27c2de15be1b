"""
Batch rotation: one set of input boards against one or more patterns.

For every pattern, for every board in input order:

    resolve basis  ->  target seat from pattern  ->  offset  ->  rotate

Each pattern produces its own PatternResult. A board whose basis cannot be
resolved is recorded as a BoardFailure and skipped; the remaining boards and
the other patterns are unaffected. A malformed pattern fails that pattern
before any board is looked at.

Boards are never renumbered and never modified in place, so the same parsed
input can be shared by every pattern.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .basis_resolver import resolve_basis
from .board_model import Board
from .field_rotator import rotate_board
from .pattern_cycler import parse_pattern, target_seat
from .rotation_types import (
    DEBUG_FILE_ENV,
    DEFAULT_BASIS,
    TAG_BCFLAGS,
    TAG_ROTATION_NOTE,
    InvalidPattern,
    MissingBasisData,
    RotationBasis,
    Seat,
)
from .seat_algebra import offset


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RotationRecord:
    """What was done to one board."""

    board_number: int
    basis: Seat
    basis_kind: str
    target: Seat
    rotation: int
    use_standard_vul: bool

    def to_note(self) -> str:
        return (
            f"Board {self.board_number}, chOption: {self.target.value}, "
            f"chBasis: {self.basis.value}, basisKind:{self.basis_kind}, "
            f"nOption:{self.target.index}, nBasis: {self.basis.index}, "
            f"nRot: {self.rotation}, "
            f"useStandardVul: {str(self.use_standard_vul).lower()}"
        )


@dataclass(frozen=True)
class BoardFailure:
    board_number: int
    position: int  # 0-based index in the input
    reason: str
    error: MissingBasisData


@dataclass
class PatternResult:
    pattern: str
    boards: List[Board] = field(default_factory=list)
    records: List[RotationRecord] = field(default_factory=list)
    failures: List[BoardFailure] = field(default_factory=list)
    error: Optional[InvalidPattern] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failures


# ---------------------------------------------------------------------------
# Debug trace
# ---------------------------------------------------------------------------


def _debug_trace(message: str) -> None:
    """
    Append a line to the file named by PBN_ROTATOR_DEBUG_FILE, if set.

    Best effort only: a trace that cannot be written never stops a run.
    """
    path_str = os.getenv(DEBUG_FILE_ENV)
    if not path_str:
        return
    try:
        path = Path(path_str)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(message + "\n")
    except OSError:
        pass


# ---------------------------------------------------------------------------
# Per-pattern run
# ---------------------------------------------------------------------------


def rotate_pattern(
    boards: Sequence[Board],
    pattern: str,
    *,
    basis: RotationBasis = DEFAULT_BASIS,
    use_standard_vul: bool = False,
) -> PatternResult:
    """
    Rotate every board for one pattern.

    Raises InvalidPattern before touching any board if `pattern` is bad.
    Basis failures are collected in the result, not raised.
    """
    seats = parse_pattern(pattern)
    result = PatternResult(pattern=pattern)

    for position, board in enumerate(boards):
        try:
            found = resolve_basis(board, basis)
        except MissingBasisData as exc:
            result.failures.append(
                BoardFailure(
                    board_number=board.number,
                    position=position,
                    reason=str(exc),
                    error=exc,
                )
            )
            _debug_trace(f"[{pattern}] board {board.number}: FAILED {exc}")
            continue

        target = target_seat(seats, board.number)
        k = offset(found.seat, target)
        result.boards.append(rotate_board(board, k, use_standard_vul=use_standard_vul))
        result.records.append(
            RotationRecord(
                board_number=board.number,
                basis=found.seat,
                basis_kind=found.kind,
                target=target,
                rotation=k,
                use_standard_vul=use_standard_vul,
            )
        )
        _debug_trace(
            f"[{pattern}] board {board.number}: basis {found.seat.value} ({found.kind}) "
            f"-> target {target.value}, k={k}"
        )

    return result


def run_batch(
    boards: Sequence[Board],
    patterns: Sequence[str],
    *,
    basis: RotationBasis = DEFAULT_BASIS,
    use_standard_vul: bool = False,
) -> Dict[str, PatternResult]:
    """
    Rotate `boards` once per pattern.

    Returns pattern -> PatternResult in the order given. A bad pattern yields
    a result with `error` set and no boards; other patterns still run.
    """
    results: Dict[str, PatternResult] = {}
    for pattern in patterns:
        try:
            results[pattern] = rotate_pattern(
                boards,
                pattern,
                basis=basis,
                use_standard_vul=use_standard_vul,
            )
        except InvalidPattern as exc:
            results[pattern] = PatternResult(pattern=pattern, error=exc)
    return results


def with_rotation_note(board: Board, record: RotationRecord) -> Board:
    """Attach the RotationNote tag (after BCFlags when the board has one)."""
    return board.with_tag_after(TAG_BCFLAGS, TAG_ROTATION_NOTE, record.to_note())
