"""
Board value type.

A Board is one game from a PBN file, kept as the ordered sequence of the
things that make it up:

    • Tag         [Name "value"]
    • Commentary  {free text, possibly spanning lines}
    • Line        anything else (auction calls, play tricks, table rows,
                  ';' comments)

Keeping the raw sequence means a board that is read and written without
changes comes back the same, and a rotated board only differs where a
seat-dependent value changed.

The typed properties (dealer, vulnerability, hands, auction, ...) are parsed
views of the tags. They are lenient: a missing or unparsable value reads as
None. Strict lookups for the basis resolver live in `seat_token()`.

Boards are frozen. Rotation builds a new Board; the input is never touched,
so one parsed file can be rotated against several patterns.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple, Union

from .rotation_types import (
    SEAT_ORDER,
    TAG_AUCTION,
    TAG_DEAL,
    TAG_DEALER,
    TAG_DECLARER,
    TAG_PLAY,
    TAG_SCORE,
    TAG_VULNERABLE,
    Seat,
    UnrecognizedSeatToken,
    Vulnerability,
)


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tag:
    name: str
    value: str

    def render(self) -> str:
        return f'[{self.name} "{self.value}"]'


@dataclass(frozen=True)
class Commentary:
    text: str  # raw text, braces included

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Line:
    text: str

    def render(self) -> str:
        return self.text


Element = Union[Tag, Commentary, Line]


@dataclass(frozen=True)
class Auction:
    start: Seat
    calls: Tuple[str, ...]


@dataclass(frozen=True)
class Play:
    leader: Seat
    tricks: Tuple[str, ...]


# ---------------------------------------------------------------------------
# Seat token parsing
# ---------------------------------------------------------------------------


def parse_seat_token(text: str) -> Optional[Seat]:
    """
    Parse a seat-valued tag value.

    Accepts a single letter (any case, optional '^' irregular-declarer
    prefix) or a full direction word. Returns None for anything else.
    """
    token = text.strip().lstrip("^")
    if len(token) == 1:
        return Seat.from_letter(token)
    return Seat.from_word(token)


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Board:
    """One game: a 1-based board number plus its ordered elements."""

    number: int
    elements: Tuple[Element, ...] = field(default_factory=tuple)

    # --- raw tag access ---------------------------------------------------

    @property
    def tags(self) -> Dict[str, str]:
        """Tag name -> raw value, in file order."""
        return {e.name: e.value for e in self.elements if isinstance(e, Tag)}

    def tag_value(self, name: str) -> Optional[str]:
        for e in self.elements:
            if isinstance(e, Tag) and e.name == name:
                return e.value
        return None

    def has_tag(self, name: str) -> bool:
        return self.tag_value(name) is not None

    def with_tag(self, name: str, value: str) -> "Board":
        """Return a copy with `name` set to `value` (appended if absent)."""
        if not self.has_tag(name):
            return replace(self, elements=self.elements + (Tag(name, value),))
        elements = tuple(
            Tag(name, value) if isinstance(e, Tag) and e.name == name else e
            for e in self.elements
        )
        return replace(self, elements=elements)

    def with_tag_after(self, anchor: str, name: str, value: str) -> "Board":
        """
        Insert a new tag directly after the section that follows `anchor`.

        Falls back to appending at the end when `anchor` is absent.
        """
        elements = list(self.elements)
        anchor_idx = next(
            (i for i, e in enumerate(elements) if isinstance(e, Tag) and e.name == anchor),
            None,
        )
        if anchor_idx is None:
            elements.append(Tag(name, value))
        else:
            insert_at = anchor_idx + 1
            while insert_at < len(elements) and isinstance(elements[insert_at], Line):
                insert_at += 1
            elements.insert(insert_at, Tag(name, value))
        return replace(self, elements=tuple(elements))

    def section(self, name: str) -> Tuple[str, ...]:
        """Data lines following tag `name`, up to the next tag."""
        lines: List[str] = []
        inside = False
        for e in self.elements:
            if isinstance(e, Tag):
                if inside:
                    break
                inside = e.name == name
            elif inside and isinstance(e, Line):
                if e.text.lstrip().startswith(";"):
                    continue
                lines.append(e.text)
        return tuple(lines)

    def seat_token(self, name: str) -> Optional[Seat]:
        """
        Strict seat lookup.

        Returns None when the tag is absent or empty, raises
        UnrecognizedSeatToken when it holds something other than a seat.
        """
        raw = self.tag_value(name)
        if raw is None or not raw.strip():
            return None
        seat = parse_seat_token(raw)
        if seat is None:
            raise UnrecognizedSeatToken(
                f"Board {self.number}: [{name} \"{raw}\"] is not a seat",
                board_number=self.number,
            )
        return seat

    # --- typed views --------------------------------------------------------

    def _lenient_seat(self, name: str) -> Optional[Seat]:
        raw = self.tag_value(name)
        return parse_seat_token(raw) if raw else None

    @property
    def dealer(self) -> Optional[Seat]:
        return self._lenient_seat(TAG_DEALER)

    @property
    def declarer(self) -> Optional[Seat]:
        return self._lenient_seat(TAG_DECLARER)

    @property
    def vulnerability(self) -> Vulnerability:
        raw = self.tag_value(TAG_VULNERABLE)
        if raw is None:
            return Vulnerability.NONE
        return Vulnerability.parse(raw) or Vulnerability.NONE

    @property
    def deal_first_seat(self) -> Optional[Seat]:
        """The seat the Deal tag lists holdings from ('N' in 'N:...')."""
        raw = self.tag_value(TAG_DEAL)
        if not raw or ":" not in raw:
            return None
        return Seat.from_letter(raw.split(":", 1)[0])

    @property
    def hands(self) -> Dict[Seat, str]:
        """
        Seat -> opaque holding text.

        PBN lists the four holdings clockwise from the seat before the colon.
        Missing holdings read as '-'.
        """
        first = self.deal_first_seat
        if first is None:
            return {}
        listed = self.tag_value(TAG_DEAL).split(":", 1)[1].split()
        listed += ["-"] * (4 - len(listed))
        return {
            SEAT_ORDER[(first.index + i) % 4]: listed[i]
            for i in range(4)
        }

    @property
    def auction(self) -> Optional[Auction]:
        start = self._lenient_seat(TAG_AUCTION)
        if start is None:
            return None
        return Auction(start=start, calls=self.section(TAG_AUCTION))

    @property
    def play(self) -> Optional[Play]:
        leader = self._lenient_seat(TAG_PLAY)
        if leader is None:
            return None
        return Play(leader=leader, tricks=self.section(TAG_PLAY))

    @property
    def score(self) -> Optional[str]:
        return self.tag_value(TAG_SCORE)

    @property
    def commentary(self) -> List[str]:
        return [e.text for e in self.elements if isinstance(e, Commentary)]

    def has_cards(self) -> bool:
        """True when at least one holding in the Deal tag has cards."""
        return any(h.replace(".", "").strip("-") for h in self.hands.values())
