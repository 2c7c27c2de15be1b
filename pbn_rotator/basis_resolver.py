"""
Basis resolution: which seat a board is currently oriented to.

Modes
-----
- Tag modes (basis-tag, student, declarer, dealer) read one tag.
- deal reads the seat the Deal tag lists holdings from.
- north / south / east / west ignore the board.
- standard tries RotationBasis, Student, Declarer, Dealer in that order and
  takes the first one that is present and holds a seat.

Failures are raised per board (MissingBasisData / UnrecognizedSeatToken);
the batch driver records them and carries on with the next board.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

from .board_model import Board
from .rotation_types import (
    TAG_BASIS,
    TAG_DEAL,
    TAG_DEALER,
    TAG_DECLARER,
    TAG_STUDENT,
    MissingBasisData,
    RotationBasis,
    Seat,
    UnrecognizedSeatToken,
)


@dataclass(frozen=True)
class Basis:
    seat: Seat
    kind: str  # tag name or fixed seat word that supplied the seat


# A lookup returns a Basis, or None when its data is absent.
# It may raise UnrecognizedSeatToken when the data is present but bad.
Lookup = Callable[[Board], Optional[Basis]]


def _tag_lookup(tag: str) -> Lookup:
    def lookup(board: Board) -> Optional[Basis]:
        seat = board.seat_token(tag)
        return Basis(seat, tag) if seat is not None else None

    return lookup


def _deal_lookup(board: Board) -> Optional[Basis]:
    raw = board.tag_value(TAG_DEAL)
    if raw is None or not raw.strip():
        return None
    seat = board.deal_first_seat
    if seat is None:
        raise UnrecognizedSeatToken(
            f"Board {board.number}: cannot read a starting seat from [Deal \"{raw}\"]",
            board_number=board.number,
        )
    return Basis(seat, TAG_DEAL)


def _fixed(seat: Seat) -> Lookup:
    return lambda board: Basis(seat, seat.word)


# Order matters for STANDARD.
STANDARD_CHAIN: Tuple[str, ...] = (TAG_BASIS, TAG_STUDENT, TAG_DECLARER, TAG_DEALER)

_LOOKUPS: Dict[RotationBasis, Lookup] = {
    RotationBasis.BASIS_TAG: _tag_lookup(TAG_BASIS),
    RotationBasis.STUDENT: _tag_lookup(TAG_STUDENT),
    RotationBasis.DECLARER: _tag_lookup(TAG_DECLARER),
    RotationBasis.DEALER: _tag_lookup(TAG_DEALER),
    RotationBasis.DEAL: _deal_lookup,
    RotationBasis.NORTH: _fixed(Seat.NORTH),
    RotationBasis.SOUTH: _fixed(Seat.SOUTH),
    RotationBasis.EAST: _fixed(Seat.EAST),
    RotationBasis.WEST: _fixed(Seat.WEST),
}


def first_success(board: Board, lookups: Sequence[Lookup]) -> Optional[Basis]:
    """
    Try each lookup in turn and return the first Basis found.

    A lookup whose data is present but unreadable counts as a miss here;
    only the single-tag modes surface UnrecognizedSeatToken.
    """
    for lookup in lookups:
        try:
            found = lookup(board)
        except UnrecognizedSeatToken:
            continue
        if found is not None:
            return found
    return None


def resolve_basis(board: Board, mode: RotationBasis = RotationBasis.STANDARD) -> Basis:
    """
    Return the seat `board` is currently oriented to under `mode`.

    Raises
    ------
    MissingBasisData
        The data the mode needs is absent (for STANDARD: none of the four
        tags holds a seat).
    UnrecognizedSeatToken
        Single-tag modes only: the tag is present but is not a seat.
    """
    if mode is RotationBasis.STANDARD:
        found = first_success(board, [_tag_lookup(t) for t in STANDARD_CHAIN])
        if found is None:
            raise MissingBasisData(
                f"Board {board.number}: none of {', '.join(STANDARD_CHAIN)} holds a seat",
                board_number=board.number,
            )
        return found

    found = _LOOKUPS[mode](board)
    if found is None:
        raise MissingBasisData(
            f"Board {board.number}: no data for basis '{mode.value}'",
            board_number=board.number,
        )
    return found
