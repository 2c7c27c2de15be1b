"""
Section A – Output Setup

This module decides where each rotated file of a run goes. It does NOT read
or rotate boards. It only:

    • Normalises the requested patterns (trimmed, upper-cased, de-duplicated)
    • Builds one output path per pattern:
          "<stem> - <PATTERN><suffix>"   next to the input (or in out_dir)
    • Honours an explicit output path when exactly one pattern is requested
    • Creates the output directory
    • Returns a SetupResult consumed by the orchestrator
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .pattern_cycler import split_patterns

DEFAULT_SUFFIX = ".pbn"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SetupError(Exception):
    """Raised when the output locations cannot be prepared."""


# ---------------------------------------------------------------------------
# Data class returned by run_setup()
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetupResult:
    input_file: Path
    output_dir: Path
    patterns: List[str]
    output_files: Dict[str, Path]  # pattern -> resolved output path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _normalise_patterns(patterns: Sequence[str]) -> List[str]:
    """
    Flatten comma lists, trim and upper-case, drop repeats (first one wins).

        ["s, NS", "ns"] -> ["S", "NS"]
    """
    seen: List[str] = []
    for entry in patterns:
        for p in split_patterns(entry):
            if p not in seen:
                seen.append(p)
    return seen


def make_output_path(input_file: Path, pattern: str, out_dir: Optional[Path] = None) -> Path:
    """
    Default output name for one pattern.

        games/ABS2-2.pbn, "ns" -> games/ABS2-2 - NS.pbn
    """
    suffix = input_file.suffix or DEFAULT_SUFFIX
    directory = out_dir if out_dir is not None else input_file.parent
    return directory / f"{input_file.stem} - {pattern.upper()}{suffix}"


def _ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(f"Could not create output directory {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Main entry point for Section A
# ---------------------------------------------------------------------------


def run_setup(
    *,
    input_file: Path,
    patterns: Sequence[str],
    output_file: Optional[Path] = None,
    out_dir: Optional[Path] = None,
) -> SetupResult:
    """
    Plan output files for a rotation run.

    Parameters
    ----------
    input_file : Path
        The PBN file being rotated.

    patterns : sequence of str
        Patterns, each entry may itself be a comma list ("S,NS,NESW").

    output_file : Path, optional
        Explicit output path. Only allowed with a single pattern, since
        every other pattern would overwrite it.

    out_dir : Path, optional
        Directory for auto-named outputs (default: the input's directory).

    Returns
    -------
    SetupResult
    """
    normalised = _normalise_patterns(patterns)
    if not normalised:
        raise SetupError("No rotation pattern given.")

    if output_file is not None and len(normalised) > 1:
        raise SetupError(
            "Cannot use an explicit output file with multiple patterns. "
            "Output files will be auto-named."
        )

    if output_file is not None:
        files = {normalised[0]: output_file.expanduser().resolve()}
    else:
        files = {
            p: make_output_path(input_file, p, out_dir).expanduser().resolve()
            for p in normalised
        }

    directories = {f.parent for f in files.values()}
    for d in directories:
        _ensure_directory(d)

    output_dir = next(iter(files.values())).parent
    return SetupResult(
        input_file=input_file.expanduser().resolve(),
        output_dir=output_dir,
        patterns=normalised,
        output_files=files,
    )
