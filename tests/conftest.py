from __future__ import annotations

from typing import Sequence, Tuple

import pytest

from pbn_rotator.board_model import Board, Commentary, Line, Tag
from pbn_rotator.pbn_io import read_pbn


# ---------------------------------------------------------------------------
# Sample PBN file
# ---------------------------------------------------------------------------

# A header block, two boards that resolve under the standard basis and one
# board (3) with nothing to resolve a basis from.
SAMPLE_PBN = (
    "% PBN 2.1\n"
    "% EXPORT\n"
    "\n"
    '[Event "Teaching set"]\n'
    '[Site ""]\n'
    '[Date ""]\n'
    "\n"
    '[Event ""]\n'
    '[Board "1"]\n'
    '[Dealer "N"]\n'
    '[Vulnerable "None"]\n'
    '[Deal "N:AKQJ.T98.765.432 T98.AKQJ.432.765 765.432.AKQJ.T98 432.765.T98.AKQJ"]\n'
    '[Declarer "S"]\n'
    '[Contract "4S"]\n'
    '[Result "10"]\n'
    '[Score "NS 420"]\n'
    '[BCFlags "1f"]\n'
    '[Auction "N"]\n'
    "1S Pass 3S Pass\n"
    "4S Pass Pass Pass\n"
    '[Play "W"]\n'
    "HA H2 H5 HT\n"
    "{North opens 1S and South raises.\n"
    "East leads the heart ace.}\n"
    "\n"
    '[Board "2"]\n'
    '[Dealer "E"]\n'
    '[Vulnerable "NS"]\n'
    '[Student "S"]\n'
    '[Deal "E:T98.AKQJ.432.765 765.432.AKQJ.T98 432.765.T98.AKQJ AKQJ.T98.765.432"]\n'
    "{West is the student's left-hand opponent.}\n"
    "\n"
    '[Board "3"]\n'
    '[Vulnerable "EW"]\n'
    '[Deal "N:AKQJ.T98.765.432 T98.AKQJ.432.765 765.432.AKQJ.T98 432.765.T98.AKQJ"]\n'
)

DEAL_N = "N:AKQJ.T98.765.432 T98.AKQJ.432.765 765.432.AKQJ.T98 432.765.T98.AKQJ"


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_PBN


@pytest.fixture
def sample_pbn():
    return read_pbn(SAMPLE_PBN)


@pytest.fixture
def sample_boards(sample_pbn):
    """The three boards with cards (header block excluded)."""
    return sample_pbn.boards


@pytest.fixture
def make_board():
    """
    Factory building a Board from tag pairs, optional section lines and
    commentary, without going through the PBN reader.

        make_board(("Dealer", "N"), ("Deal", DEAL_N), number=5,
                   commentary=["{North leads}"])
    """

    def _make(
        *tags: Tuple[str, str],
        number: int = 1,
        lines: Sequence[str] = (),
        commentary: Sequence[str] = (),
    ) -> Board:
        elements = [Tag(name, value) for name, value in tags]
        elements += [Line(text) for text in lines]
        elements += [Commentary(text) for text in commentary]
        return Board(number=number, elements=tuple(elements))

    return _make
