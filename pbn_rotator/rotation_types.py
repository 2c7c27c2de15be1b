# pbn_rotator/rotation_types.py
#
# Enums, exceptions and constants shared by the rotation engine.
#
# This is a LEAF module: it has no pbn_rotator imports.
# Every other pbn_rotator module imports from here.
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Seats
# ---------------------------------------------------------------------------

class Seat(Enum):
    """
    One of the four table positions.

    The declaration order is the clockwise order used for rotation arithmetic:
    N=0, E=1, S=2, W=3.
    """

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @property
    def index(self) -> int:
        return SEAT_ORDER.index(self)

    @property
    def word(self) -> str:
        return DIRECTION_WORDS[self.index]

    @classmethod
    def from_letter(cls, text: str) -> Optional["Seat"]:
        """Return the seat for a single letter (any case), or None."""
        return _SEATS_BY_LETTER.get(text.strip().upper())

    @classmethod
    def from_word(cls, text: str) -> Optional["Seat"]:
        """Return the seat for a direction word (any case), or None."""
        return _SEATS_BY_WORD.get(text.strip().lower())


# Clockwise order. Partnerships are (0, 2) and (1, 3).
SEAT_ORDER: Tuple[Seat, ...] = (Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST)

DIRECTION_WORDS: Tuple[str, ...] = ("North", "East", "South", "West")

_SEATS_BY_LETTER: Dict[str, Seat] = {s.value: s for s in Seat}
_SEATS_BY_WORD: Dict[str, Seat] = {w.lower(): s for s, w in zip(SEAT_ORDER, DIRECTION_WORDS)}


# ---------------------------------------------------------------------------
# Vulnerability
# ---------------------------------------------------------------------------

class Vulnerability(Enum):
    NONE = "None"
    NS = "NS"
    EW = "EW"
    BOTH = "All"

    @classmethod
    def parse(cls, text: str) -> Optional["Vulnerability"]:
        """
        Parse a PBN 'Vulnerable' value.

        Accepts the spellings seen in the wild:
            None / Love / -   -> NONE
            NS                -> NS
            EW                -> EW
            All / Both        -> BOTH
        """
        return _VUL_SPELLINGS.get(text.strip().lower())

    @classmethod
    def for_board_number(cls, board_number: int) -> "Vulnerability":
        """Standard duplicate vulnerability for a 1-based board number."""
        return STANDARD_VULNERABILITY[(board_number - 1) % len(STANDARD_VULNERABILITY)]


_VUL_SPELLINGS: Dict[str, Vulnerability] = {
    "none": Vulnerability.NONE,
    "love": Vulnerability.NONE,
    "-": Vulnerability.NONE,
    "ns": Vulnerability.NS,
    "ew": Vulnerability.EW,
    "all": Vulnerability.BOTH,
    "both": Vulnerability.BOTH,
}

# Boards 1..16; board n uses entry (n - 1) % 16.
STANDARD_VULNERABILITY: List[Vulnerability] = [
    Vulnerability.NONE, Vulnerability.NS, Vulnerability.EW, Vulnerability.BOTH,
    Vulnerability.NS, Vulnerability.EW, Vulnerability.BOTH, Vulnerability.NONE,
    Vulnerability.EW, Vulnerability.BOTH, Vulnerability.NONE, Vulnerability.NS,
    Vulnerability.BOTH, Vulnerability.NONE, Vulnerability.NS, Vulnerability.EW,
]


# ---------------------------------------------------------------------------
# Rotation basis modes
# ---------------------------------------------------------------------------

class RotationBasis(Enum):
    """How the current orientation of a board is determined."""

    STANDARD = "standard"      # RotationBasis, Student, Declarer, Dealer
    BASIS_TAG = "basis-tag"    # [RotationBasis "x"]
    STUDENT = "student"        # [Student "x"]
    DECLARER = "declarer"
    DEALER = "dealer"
    DEAL = "deal"              # first seat of the Deal listing
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


# ---------------------------------------------------------------------------
# Tag names
# ---------------------------------------------------------------------------

TAG_BOARD = "Board"
TAG_DEALER = "Dealer"
TAG_VULNERABLE = "Vulnerable"
TAG_DEAL = "Deal"
TAG_DECLARER = "Declarer"
TAG_AUCTION = "Auction"
TAG_PLAY = "Play"
TAG_SCORE = "Score"
TAG_BASIS = "RotationBasis"
TAG_STUDENT = "Student"
TAG_BCFLAGS = "BCFlags"
TAG_ROTATION_NOTE = "RotationNote"

# Tags whose value is a single seat letter and which rotate with the board.
SEAT_VALUED_TAGS: Tuple[str, ...] = (
    TAG_DEALER,
    TAG_DECLARER,
    TAG_AUCTION,
    TAG_PLAY,
    TAG_BASIS,
    TAG_STUDENT,
)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_PATTERN: str = "NESW"
DEFAULT_BASIS: RotationBasis = RotationBasis.STANDARD

# Optional per-board trace. Enable by setting the env var to a file path.
DEBUG_FILE_ENV: str = "PBN_ROTATOR_DEBUG_FILE"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class RotationError(Exception):
    """Base class for rotation engine errors."""


class InvalidPattern(RotationError):
    """Raised when a rotation pattern string is empty or malformed."""


class MissingBasisData(RotationError):
    """Raised when a board lacks the data needed for the selected basis."""

    def __init__(self, message: str, board_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.board_number = board_number


class UnrecognizedSeatToken(MissingBasisData):
    """Raised when a basis-determining tag holds something other than N/E/S/W."""
