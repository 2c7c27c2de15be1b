"""
PBN reading and writing.

Responsibilities
----------------
- Split a PBN file into its prologue (everything before the first tag:
  '%' directives, comments, blank lines) and its games.
- Turn each game into a Board made of Tag / Commentary / Line elements, in
  file order.
- Write boards back so that anything the rotation did not change comes out
  as it went in.

This module MUST NOT:
- Interpret or validate card holdings.
- Rotate anything.

Notes
-----
- Games are separated by blank lines. A blank line inside a multi-line
  {commentary} does not end the game.
- Files are read as UTF-8, falling back to Latin-1 (common for older PBN
  exports). The same encoding is used when writing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .board_model import Board, Commentary, Element, Line, Tag
from .rotation_types import TAG_BOARD, TAG_DEAL


class PbnError(Exception):
    """Raised when a PBN file cannot be read or parsed."""


_TAG_RE = re.compile(r'^\[(?P<name>[A-Za-z0-9_]+)\s+"(?P<value>.*)"\]$')


@dataclass(frozen=True)
class PbnFile:
    prologue: Tuple[str, ...] = ()
    games: Tuple[Board, ...] = field(default_factory=tuple)
    encoding: str = "utf-8"

    @property
    def boards(self) -> List[Board]:
        """Games that carry cards (header blocks and placeholders excluded)."""
        return [g for g in self.games if g.has_cards()]


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def parse_tag_line(line: str) -> Optional[Tag]:
    """'[Dealer "N"]' -> Tag('Dealer', 'N'); None if not a tag line."""
    m = _TAG_RE.match(line.strip())
    if not m:
        return None
    return Tag(m.group("name"), m.group("value"))


def _board_number(elements: Sequence[Element], fallback: int) -> int:
    for e in elements:
        if isinstance(e, Tag) and e.name == TAG_BOARD:
            try:
                return int(e.value.strip())
            except ValueError:
                break
    return fallback


def _split_games(lines: Sequence[str]) -> Tuple[List[str], List[List[Element]]]:
    prologue: List[str] = []
    games: List[List[Element]] = []
    current: List[Element] = []
    comment_buf: List[str] = []
    seen_tag = False
    comment_start = 0

    def close_game() -> None:
        nonlocal current
        if current:
            games.append(current)
        current = []

    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()

        if comment_buf:
            comment_buf.append(line)
            if "}" in line:
                current.append(Commentary("\n".join(comment_buf)))
                comment_buf = []
            continue

        tag = parse_tag_line(line)
        if not seen_tag and tag is None:
            prologue.append(line)
            continue

        if tag is not None:
            seen_tag = True
            current.append(tag)
        elif not stripped:
            close_game()
        elif stripped.startswith("{") and "}" not in stripped:
            comment_buf = [line]
            comment_start = lineno
        elif stripped.startswith("{"):
            current.append(Commentary(line))
        else:
            current.append(Line(line))

    if comment_buf:
        raise PbnError(f"Unterminated commentary starting at line {comment_start}")
    close_game()
    return prologue, games


def read_pbn(text: str, *, encoding: str = "utf-8") -> PbnFile:
    """
    Parse PBN text into a PbnFile.

    Board numbers come from the Board tag; when it is missing or not a
    number, the running count of games with a Deal tag is used.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    prologue, raw_games = _split_games(lines)

    games: List[Board] = []
    deal_count = 0
    for elements in raw_games:
        if any(isinstance(e, Tag) and e.name == TAG_DEAL for e in elements):
            deal_count += 1
        number = _board_number(elements, fallback=max(deal_count, 1))
        games.append(Board(number=number, elements=tuple(elements)))

    return PbnFile(prologue=tuple(prologue), games=tuple(games), encoding=encoding)


def read_pbn_file(path: Path) -> PbnFile:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise PbnError(f"Failed to read input file {path}: {exc}") from exc

    for encoding in ("utf-8", "latin-1"):
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        return read_pbn(text, encoding=encoding)

    # latin-1 decodes any byte string, so this is unreachable in practice.
    raise PbnError(f"Could not decode {path}")


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def render_board(board: Board) -> str:
    return "\n".join(e.render() for e in board.elements)


def write_pbn(pbn: PbnFile, games: Optional[Sequence[Board]] = None) -> str:
    """
    Render a PbnFile (or the same prologue with replacement `games`) to text.
    """
    body = games if games is not None else pbn.games
    parts: List[str] = []
    if pbn.prologue:
        parts.append("\n".join(pbn.prologue) + "\n")
    parts.append("\n\n".join(render_board(b) for b in body))
    return "".join(parts) + "\n"


def write_pbn_file(path: Path, pbn: PbnFile, games: Optional[Sequence[Board]] = None) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(write_pbn(pbn, games), encoding=pbn.encoding)
    except OSError as exc:
        raise PbnError(f"Failed to write output file {path}: {exc}") from exc
