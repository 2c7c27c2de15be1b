"""
Rotation Run Report Module

Structured summary of a batch rotation run: per pattern, how many boards
were rotated, which failed and why, and how the offsets were distributed.

Usage:
    from pbn_rotator.rotation_report import build_run_report

    report = build_run_report(results, input_file="ABS2-2.pbn", basis="standard")
    report.to_json(Path("report.json"))
    report.to_csv(Path("report.csv"))
"""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .batch_driver import PatternResult


@dataclass
class PatternSummary:
    pattern: str
    boards_rotated: int
    boards_failed: int
    # offset (0-3) -> number of boards rotated by that much
    offsets: Dict[int, int] = field(default_factory=dict)
    failures: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    output_file: Optional[str] = None

    def __post_init__(self) -> None:
        for k in range(4):
            self.offsets.setdefault(k, 0)

    @property
    def boards_moved(self) -> int:
        """Boards whose offset was non-zero."""
        return sum(n for k, n in self.offsets.items() if k != 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "boards_rotated": self.boards_rotated,
            "boards_moved": self.boards_moved,
            "boards_failed": self.boards_failed,
            "offsets": {str(k): v for k, v in sorted(self.offsets.items())},
            "failures": self.failures,
            "error": self.error,
            "output_file": self.output_file,
        }


@dataclass
class RotationRunReport:
    input_file: str
    basis: str
    use_standard_vul: bool
    patterns: List[PatternSummary] = field(default_factory=list)
    # header blocks and other games with no cards, copied but not rotated
    games_without_cards: int = 0

    @property
    def total_failed(self) -> int:
        return sum(p.boards_failed for p in self.patterns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_file": self.input_file,
            "basis": self.basis,
            "use_standard_vul": self.use_standard_vul,
            "total_failed": self.total_failed,
            "games_without_cards": self.games_without_cards,
            "patterns": [p.to_dict() for p in self.patterns],
        }

    def to_json(self, path: Path, indent: int = 2) -> None:
        """Write report to JSON file."""
        path.write_text(json.dumps(self.to_dict(), indent=indent), encoding="utf-8")

    def to_csv(self, path: Path) -> None:
        """
        Write report to CSV file.

        Format: one row per pattern.
        """
        fieldnames = [
            "pattern",
            "boards_rotated",
            "boards_moved",
            "boards_failed",
            "k0",
            "k1",
            "k2",
            "k3",
            "error",
            "output_file",
        ]
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for p in self.patterns:
                writer.writerow({
                    "pattern": p.pattern,
                    "boards_rotated": p.boards_rotated,
                    "boards_moved": p.boards_moved,
                    "boards_failed": p.boards_failed,
                    "k0": p.offsets[0],
                    "k1": p.offsets[1],
                    "k2": p.offsets[2],
                    "k3": p.offsets[3],
                    "error": p.error or "",
                    "output_file": p.output_file or "",
                })

    def write(self, path: Path) -> None:
        """Write JSON or CSV depending on the file suffix (default JSON)."""
        if path.suffix.lower() == ".csv":
            self.to_csv(path)
        else:
            self.to_json(path)

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines = [
            f"Input: {self.input_file}",
            f"Basis: {self.basis}" + (" (standard vulnerability)" if self.use_standard_vul else ""),
        ]
        if self.games_without_cards:
            lines.append(f"Games without cards (not rotated): {self.games_without_cards}")
        lines.append("")
        for p in self.patterns:
            if p.error:
                lines.append(f"  {p.pattern:<8} ERROR: {p.error}")
                continue
            hist = " ".join(f"k{k}={n}" for k, n in sorted(p.offsets.items()))
            lines.append(
                f"  {p.pattern:<8} rotated {p.boards_rotated:4d}  "
                f"failed {p.boards_failed:3d}  [{hist}]"
            )
        return "\n".join(lines)


def summarise_pattern(result: PatternResult, output_file: Optional[Path] = None) -> PatternSummary:
    offsets: Dict[int, int] = {}
    for record in result.records:
        offsets[record.rotation] = offsets.get(record.rotation, 0) + 1

    return PatternSummary(
        pattern=result.pattern,
        boards_rotated=len(result.boards),
        boards_failed=len(result.failures),
        offsets=offsets,
        failures=[
            {"board": f.board_number, "position": f.position, "reason": f.reason}
            for f in result.failures
        ],
        error=str(result.error) if result.error else None,
        output_file=str(output_file) if output_file else None,
    )


def build_run_report(
    results: Mapping[str, PatternResult],
    *,
    input_file: str,
    basis: str,
    use_standard_vul: bool = False,
    output_files: Optional[Mapping[str, Path]] = None,
    games_without_cards: int = 0,
) -> RotationRunReport:
    """Collect one PatternSummary per pattern, in the order of `results`."""
    files = output_files or {}
    return RotationRunReport(
        input_file=input_file,
        basis=basis,
        use_standard_vul=use_standard_vul,
        patterns=[summarise_pattern(r, files.get(p)) for p, r in results.items()],
        games_without_cards=games_without_cards,
    )
