# file: pbn_rotator/seat_algebra.py
"""
Seat arithmetic on the four-seat cycle N -> E -> S -> W -> N.

All functions are total over the four seats and offsets 0-3; offsets outside
that range are reduced modulo 4.
"""

from __future__ import annotations

from typing import Tuple

from .rotation_types import SEAT_ORDER, Seat, Vulnerability


def offset(source: Seat, target: Seat) -> int:
    """
    Number of clockwise steps (0-3) that take `source` to `target`.

        offset(N, S) == 2
        offset(E, N) == 3
    """
    return (target.index - source.index) % 4


def rotate(seat: Seat, k: int) -> Seat:
    """Advance `seat` k positions clockwise."""
    return SEAT_ORDER[(seat.index + k) % 4]


def unrotate(seat: Seat, k: int) -> Seat:
    """Inverse of rotate(): the seat that `seat` came from."""
    return SEAT_ORDER[(seat.index - k) % 4]


def is_odd(k: int) -> bool:
    """True when an offset swaps the NS and EW partnerships."""
    return k % 2 == 1


def partnership(seat: Seat) -> Tuple[Seat, Seat]:
    """The (seat, partner) pair in N/E-first order, e.g. S -> (N, S)."""
    first = SEAT_ORDER[seat.index % 2]
    return first, rotate(first, 2)


def rotate_vulnerability(vul: Vulnerability, k: int) -> Vulnerability:
    """
    Odd offsets exchange NS and EW vulnerability.

    NONE and BOTH are fixed points for every offset.
    """
    if not is_odd(k):
        return vul
    if vul is Vulnerability.NS:
        return Vulnerability.EW
    if vul is Vulnerability.EW:
        return Vulnerability.NS
    return vul
