"""
Tests for basis_resolver.resolve_basis().

Covers:
  - standard priority chain RotationBasis > Student > Declarer > Dealer
  - single-tag modes and their failures
  - Deal-based and fixed-seat modes
"""

from __future__ import annotations

import pytest

from pbn_rotator.basis_resolver import resolve_basis
from pbn_rotator.rotation_types import (
    MissingBasisData,
    RotationBasis,
    Seat,
    UnrecognizedSeatToken,
)

from conftest import DEAL_N


class TestStandardBasis:
    def test_reference_tag_wins_over_dealer(self, make_board):
        board = make_board(("RotationBasis", "E"), ("Dealer", "N"))
        found = resolve_basis(board, RotationBasis.STANDARD)
        assert found.seat is Seat.EAST
        assert found.kind == "RotationBasis"

    def test_student_before_declarer(self, make_board):
        board = make_board(("Dealer", "N"), ("Declarer", "W"), ("Student", "S"))
        found = resolve_basis(board)
        assert found.seat is Seat.SOUTH
        assert found.kind == "Student"

    def test_declarer_before_dealer(self, make_board):
        board = make_board(("Dealer", "N"), ("Declarer", "W"))
        assert resolve_basis(board).seat is Seat.WEST

    def test_dealer_last(self, make_board):
        board = make_board(("Dealer", "E"))
        found = resolve_basis(board)
        assert found.seat is Seat.EAST
        assert found.kind == "Dealer"

    def test_invalid_entries_fall_through(self, make_board):
        board = make_board(("RotationBasis", "?"), ("Declarer", ""), ("Dealer", "S"))
        assert resolve_basis(board).seat is Seat.SOUTH

    def test_nothing_usable_raises(self, make_board):
        board = make_board(("Vulnerable", "None"), ("Deal", DEAL_N), number=7)
        with pytest.raises(MissingBasisData) as excinfo:
            resolve_basis(board)
        assert excinfo.value.board_number == 7

    def test_declarer_with_irregular_prefix(self, make_board):
        board = make_board(("Declarer", "^E"))
        assert resolve_basis(board).seat is Seat.EAST

    def test_direction_word_accepted(self, make_board):
        board = make_board(("Student", "South"))
        assert resolve_basis(board).seat is Seat.SOUTH


class TestSingleTagModes:
    @pytest.mark.parametrize(
        "mode, tag",
        [
            (RotationBasis.BASIS_TAG, "RotationBasis"),
            (RotationBasis.STUDENT, "Student"),
            (RotationBasis.DECLARER, "Declarer"),
            (RotationBasis.DEALER, "Dealer"),
        ],
    )
    def test_reads_its_tag(self, make_board, mode, tag):
        board = make_board((tag, "W"))
        found = resolve_basis(board, mode)
        assert found.seat is Seat.WEST
        assert found.kind == tag

    def test_missing_tag_raises(self, make_board):
        board = make_board(("Dealer", "N"))
        with pytest.raises(MissingBasisData):
            resolve_basis(board, RotationBasis.DECLARER)

    def test_unrecognized_value_raises(self, make_board):
        board = make_board(("Student", "Bob"), ("Dealer", "N"))
        with pytest.raises(UnrecognizedSeatToken):
            resolve_basis(board, RotationBasis.STUDENT)

    def test_unrecognized_is_a_missing_basis_error(self, make_board):
        board = make_board(("Dealer", "Q"))
        with pytest.raises(MissingBasisData):
            resolve_basis(board, RotationBasis.DEALER)


class TestDealMode:
    def test_reads_listing_seat(self, make_board):
        board = make_board(("Dealer", "N"), ("Deal", "W:" + DEAL_N[2:]))
        found = resolve_basis(board, RotationBasis.DEAL)
        assert found.seat is Seat.WEST
        assert found.kind == "Deal"

    def test_missing_deal(self, make_board):
        with pytest.raises(MissingBasisData):
            resolve_basis(make_board(("Dealer", "N")), RotationBasis.DEAL)

    def test_unparsable_deal(self, make_board):
        board = make_board(("Deal", "AKQ.xxx.xxx.xxxx"))
        with pytest.raises(UnrecognizedSeatToken):
            resolve_basis(board, RotationBasis.DEAL)


@pytest.mark.parametrize(
    "mode, seat",
    [
        (RotationBasis.NORTH, Seat.NORTH),
        (RotationBasis.EAST, Seat.EAST),
        (RotationBasis.SOUTH, Seat.SOUTH),
        (RotationBasis.WEST, Seat.WEST),
    ],
)
def test_fixed_modes_ignore_board(make_board, mode, seat):
    found = resolve_basis(make_board(), mode)
    assert found.seat is seat
    assert found.kind == seat.word
