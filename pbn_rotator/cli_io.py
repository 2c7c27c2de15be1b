# file: pbn_rotator/cli_io.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from .pattern_cycler import parse_pattern, split_patterns
from .rotation_types import InvalidPattern


def _input_with_default(prompt: str, default: Optional[str] = None) -> str:
    """
    Prompt the user for a value, showing an optional default.

    Returns the entered string, or the default if the user presses Enter.
    """
    if default is not None:
        full_prompt = f"{prompt} [{default}]: "
    else:
        full_prompt = f"{prompt}: "

    try:
        value = input(full_prompt).strip()
    except EOFError:
        raise RuntimeError("Input aborted (EOF) while prompting user.")

    if not value and default is not None:
        return default
    return value


def _yes_no(prompt: str, default: bool = True) -> bool:
    """
    Prompt for a yes/no response.

    Returns True for yes, False for no.
    """
    default_str = "Y/n" if default else "y/N"

    while True:
        try:
            raw = input(f"{prompt} ({default_str}): ").strip().lower()
        except EOFError:
            raise RuntimeError("Input aborted (EOF) while prompting user.")

        if not raw:
            return default
        if raw in {"y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False

        print("Please answer y or n.", file=sys.stderr)


def _input_existing_file(prompt: str, default: Optional[str] = None) -> Path:
    """Re-prompt until the answer names an existing file."""
    while True:
        raw = _input_with_default(prompt, default)
        path = Path(raw).expanduser()
        if raw and path.is_file():
            return path
        print(f"No such file: {raw!r}", file=sys.stderr)


def _input_patterns(prompt: str, default: str) -> List[str]:
    """
    Prompt for a comma-separated pattern list ("S,NS,NESW").

    Re-prompts until every entry is a valid pattern.
    """
    while True:
        raw = _input_with_default(prompt, default)
        patterns = split_patterns(raw)
        try:
            for p in patterns:
                parse_pattern(p)
        except InvalidPattern as exc:
            print(f"{exc}. Use the letters N, E, S, W.", file=sys.stderr)
            continue
        return patterns
