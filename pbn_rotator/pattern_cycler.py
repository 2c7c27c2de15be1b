# file: pbn_rotator/pattern_cycler.py
from __future__ import annotations

from typing import List, Sequence, Tuple

from .rotation_types import InvalidPattern, Seat


def parse_pattern(pattern: str) -> Tuple[Seat, ...]:
    """
    Parse a pattern such as "NESW" or "ns" into seats.

    Raises InvalidPattern for an empty string or any character that is not
    one of N, E, S, W (case-insensitive).
    """
    text = pattern.strip()
    if not text:
        raise InvalidPattern("Pattern cannot be empty")

    seats: List[Seat] = []
    for ch in text:
        seat = Seat.from_letter(ch)
        if seat is None:
            raise InvalidPattern(f"Invalid direction {ch!r} in pattern {pattern!r}")
        seats.append(seat)
    return tuple(seats)


def split_patterns(text: str) -> List[str]:
    """
    Split a comma-separated pattern list ("S, NS,NESW") into upper-cased
    patterns. Empty entries are kept so parse_pattern can reject them.
    """
    return [p.strip().upper() for p in text.split(",")]


def target_seat(pattern: Sequence[Seat], board_number: int) -> Seat:
    """Target seat for a 1-based board number: pattern[(n - 1) % len]."""
    if not pattern:
        raise InvalidPattern("Pattern cannot be empty")
    return pattern[(board_number - 1) % len(pattern)]
