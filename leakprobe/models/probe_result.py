"""Probe result data models."""

import dataclasses
import json
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from tabulate import tabulate


@dataclass
class RssSample:
    """One RSS reading taken after an iteration."""
    iteration: int  # 1-based
    rss_mb: int
    delta_mb: int  # rss_mb minus the baseline

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RssSample':
        return cls(**data)


@dataclasses.dataclass
class StatSummary:
    """Statistical summary of a list of numeric values"""
    min: float
    max: float
    p50: float
    p95: float
    avg: float

    def to_dict(self) -> Dict[str, float]:
        return dataclasses.asdict(self)


@dataclass
class ProbeResult:
    """
    Complete probe run: baseline plus every per-iteration sample.

    This is the structure written by --out and summarised by --summary.
    """
    pid: int
    variant: str
    iterations: int
    initial_rss_mb: int
    samples: List[RssSample] = dataclasses.field(default_factory=list)

    @property
    def final_delta_mb(self) -> Optional[int]:
        return self.samples[-1].delta_mb if self.samples else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pid": self.pid,
            "variant": self.variant,
            "iterations": self.iterations,
            "initial_rss_mb": self.initial_rss_mb,
            "samples": [s.to_dict() for s in self.samples],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProbeResult':
        samples = [RssSample.from_dict(s) for s in data.get("samples", [])]
        return cls(
            pid=data["pid"],
            variant=data["variant"],
            iterations=data["iterations"],
            initial_rss_mb=data["initial_rss_mb"],
            samples=samples,
        )

    def save_to_file(self, file_path: str) -> None:
        """Save probe result to JSON file."""
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    @classmethod
    def load_from_file(cls, file_path: str) -> 'ProbeResult':
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def format_summary(self) -> str:
        """Render RSS statistics across all samples as a table."""
        from leakprobe.util.cal_utils import calculate_stat_summary

        rss = calculate_stat_summary([s.rss_mb for s in self.samples])
        rows = [
            ["initial", f"{self.initial_rss_mb:.2f}"],
            ["min", f"{rss.min:.2f}"],
            ["max", f"{rss.max:.2f}"],
            ["p50", f"{rss.p50:.2f}"],
            ["p95", f"{rss.p95:.2f}"],
            ["avg", f"{rss.avg:.2f}"],
            ["final increase", "None" if self.final_delta_mb is None else f"+{self.final_delta_mb:.2f}"],
        ]
        # Cells are pre-formatted strings and must print verbatim
        return tabulate(rows, headers=["RSS", "MB"], tablefmt="github", disable_numparse=True)

    def print_summary(self) -> None:
        """Print formatted summary to console."""
        print("\n=== Summary ===")
        print(f"variant={self.variant}  iterations={len(self.samples)}/{self.iterations}")
        print(self.format_summary())
