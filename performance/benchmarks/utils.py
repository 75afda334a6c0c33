"""Timing and console-report helpers for the headless benchmarks."""
from __future__ import annotations

import time
from typing import NamedTuple, Sequence

import numpy as np

REPORT_WIDTH = 80


class Timer:
    """Context manager; `elapsed` holds seconds after the block exits."""

    def __enter__(self):
        self.elapsed = 0.0
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc):
        self.elapsed = time.perf_counter() - self._start


class TimingSummary(NamedTuple):
    mean: float
    median: float
    std: float
    low: float
    high: float
    p95: float


# =============================================================================
# Statistics
# =============================================================================

def summarize(times: Sequence[float]) -> TimingSummary:
    """Summary of a list of durations in seconds; all zeros when empty."""
    if len(times) == 0:
        return TimingSummary(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    arr = np.asarray(times, dtype=np.float64)
    return TimingSummary(
        mean=float(arr.mean()),
        median=float(np.median(arr)),
        std=float(arr.std(ddof=1)) if arr.size > 1 else 0.0,
        low=float(arr.min()),
        high=float(arr.max()),
        p95=float(np.percentile(arr, 95)),
    )


# =============================================================================
# Console output
# =============================================================================

def ms(seconds: float) -> str:
    return f"{seconds * 1000:.2f}ms"


def header(title: str) -> None:
    rule = "=" * REPORT_WIDTH
    print(f"\n{rule}\n{title}\n{rule}")


def metric(label: str, value: str) -> None:
    print(f"  {label:<25} {value}")


def progress(current: int, total: int, label: str = "Progress") -> None:
    """Rewrites the same console line; call progress(total, total) to finish it."""
    percent = current / total * 100 if total > 0 else 100
    end = "\n" if current >= total else "\r"
    print(f"    {label}: {percent:.0f}% ({current}/{total})", end=end)
