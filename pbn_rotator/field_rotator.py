"""
Field rotation: move every seat-dependent part of a board by k seats.

Given a board and an offset k (0-3, clockwise), rotate_board() returns a new
Board where:

    • Dealer, Declarer, Auction, Play, RotationBasis, Student
        seat letters and direction words advance by k (case kept, '^'
        prefix kept)
    • Deal
        the listing seat advances by k and the holding text is kept in
        order, so each holding lands on the seat k places clockwise
    • Vulnerable
        NS <-> EW on odd k; None / All are fixed.  With use_standard_vul
        the value comes from the 16-board table instead, whatever k is.
    • Score
        NS <-> EW prefix on odd k
    • Commentary
        whole-word North/East/South/West (any case) advance by k

Everything else is copied as-is. Auction calls and play tricks are not
rewritten: they are listed relative to the starting seat, which moves.

The direction-word pass is word matching only. A direction used as a name
("West Coast Club") will be rotated too. Case follows the matched word when
it is upper, lower or capitalised; mixed case ("NoRTH") comes out
capitalised.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Callable, Dict, List

from .board_model import Board, Commentary, Element, Tag
from .rotation_types import (
    DIRECTION_WORDS,
    SEAT_VALUED_TAGS,
    TAG_DEAL,
    TAG_SCORE,
    TAG_VULNERABLE,
    Seat,
    Vulnerability,
)
from .seat_algebra import is_odd, rotate, rotate_vulnerability

_DIRECTION_RE = re.compile(r"\b(" + "|".join(DIRECTION_WORDS) + r")\b", re.IGNORECASE)

_PARTNERSHIP_SWAP: Dict[str, str] = {"NS": "EW", "EW": "NS"}


# ---------------------------------------------------------------------------
# Value rewriters
# ---------------------------------------------------------------------------


def _match_case(template: str, word: str) -> str:
    """
    Spell `word` in the case of `template`: upper, lower or capitalised.

    Mixed case ("NoRTH") has no counterpart for a word of another length
    and comes back capitalised, so such text does not survive a round trip.
    """
    if template.isupper():
        return word.upper()
    if template[0].isupper():
        return word
    return word.lower()


def rotate_seat_value(value: str, k: int) -> str:
    """
    Rotate a seat value: a letter ("N", "e", "^S") or a direction word
    ("North", "^west"). Case and the '^' prefix are kept.

    Anything else (empty, "-", "NS") comes back unchanged.
    """
    prefix = "^" if value.startswith("^") else ""
    token = value[len(prefix):].strip()
    if len(token) == 1:
        seat = Seat.from_letter(token)
        if seat is None:
            return value
        return prefix + _match_case(token, rotate(seat, k).value)

    seat = Seat.from_word(token)
    if seat is None:
        return value
    return prefix + _match_case(token, rotate(seat, k).word)


def rotate_deal_value(value: str, k: int) -> str:
    """'N:h1 h2 h3 h4' -> '<N+k>:h1 h2 h3 h4'."""
    if ":" not in value:
        return value
    first, rest = value.split(":", 1)
    return rotate_seat_value(first, k) + ":" + rest


def rotate_score_value(value: str, k: int) -> str:
    """
    Swap the partnership prefix on odd k.

        rotate_score_value("NS 420", 1) == "EW 420"
        rotate_score_value("NS 420", 2) == "NS 420"
    """
    if not is_odd(k):
        return value
    head = value[:2]
    if head in _PARTNERSHIP_SWAP:
        return _PARTNERSHIP_SWAP[head] + value[2:]
    return value


def rotate_vulnerability_value(
    value: str,
    k: int,
    *,
    board_number: int,
    use_standard_vul: bool = False,
) -> str:
    """
    Rewrite a Vulnerable tag value.

    The original spelling is kept when the value does not change.
    """
    current = Vulnerability.parse(value)
    if use_standard_vul:
        new = Vulnerability.for_board_number(board_number)
    elif current is None:
        return value
    else:
        new = rotate_vulnerability(current, k)
    if new is current:
        return value
    return new.value


def rotate_commentary(text: str, k: int) -> str:
    """
    Replace whole-word direction names by the direction k seats clockwise.

        rotate_commentary("North leads", 2) == "South leads"
        rotate_commentary("East and West", 1) == "South and North"
    """
    if k % 4 == 0:
        return text

    def repl(match: re.Match) -> str:
        found = match.group(0)
        seat = Seat.from_word(found)
        return _match_case(found, rotate(seat, k).word)

    return _DIRECTION_RE.sub(repl, text)


# ---------------------------------------------------------------------------
# Board rotation
# ---------------------------------------------------------------------------


def _tag_rewriters(board: Board, k: int, use_standard_vul: bool) -> Dict[str, Callable[[str], str]]:
    rewriters: Dict[str, Callable[[str], str]] = {
        name: (lambda v: rotate_seat_value(v, k)) for name in SEAT_VALUED_TAGS
    }
    rewriters[TAG_DEAL] = lambda v: rotate_deal_value(v, k)
    rewriters[TAG_SCORE] = lambda v: rotate_score_value(v, k)
    rewriters[TAG_VULNERABLE] = lambda v: rotate_vulnerability_value(
        v, k, board_number=board.number, use_standard_vul=use_standard_vul
    )
    return rewriters


def rotate_board(board: Board, k: int, *, use_standard_vul: bool = False) -> Board:
    """
    Return a copy of `board` with every seat-dependent field moved k seats
    clockwise. `board` itself is not modified.
    """
    k %= 4
    if k == 0 and not use_standard_vul:
        return board

    rewriters = _tag_rewriters(board, k, use_standard_vul)
    elements: List[Element] = []
    for e in board.elements:
        if isinstance(e, Tag) and e.name in rewriters:
            elements.append(Tag(e.name, rewriters[e.name](e.value)))
        elif isinstance(e, Commentary):
            elements.append(Commentary(rotate_commentary(e.text, k)))
        else:
            elements.append(e)

    return replace(board, elements=tuple(elements))
