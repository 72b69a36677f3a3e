"""Timing diagnostics for solver runs.

Summarizes the per-iteration timings recorded in a MaxFlowResult so long
runs can be inspected without walking the raw trace.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .data import MaxFlowResult


@dataclass(frozen=True)
class TimingSummary:
    """Statistics over per-iteration elapsed times, all in seconds.

    Attributes:
        count: Number of timed iterations.
        total: Sum of iteration times.
        mean: Average iteration time.
        median: Median iteration time.
        p95: 95th percentile iteration time.
        minimum: Fastest iteration.
        maximum: Slowest iteration.
    """

    count: int
    total: float
    mean: float
    median: float
    p95: float
    minimum: float
    maximum: float

    def as_milliseconds(self) -> dict[str, float | int]:
        """Return the summary with every duration converted to milliseconds."""
        return {
            "count": self.count,
            "total_ms": self.total * 1000.0,
            "mean_ms": self.mean * 1000.0,
            "median_ms": self.median * 1000.0,
            "p95_ms": self.p95 * 1000.0,
            "min_ms": self.minimum * 1000.0,
            "max_ms": self.maximum * 1000.0,
        }


def summarize_iteration_times(times: Sequence[float] | MaxFlowResult) -> TimingSummary:
    """Compute timing statistics for a run.

    Args:
        times: Per-iteration durations in seconds, or a MaxFlowResult whose
               iteration_times are used.

    Returns:
        TimingSummary. All fields are zero when there are no timed iterations.
    """
    if isinstance(times, MaxFlowResult):
        times = times.iteration_times
    if len(times) == 0:
        return TimingSummary(
            count=0, total=0.0, mean=0.0, median=0.0, p95=0.0, minimum=0.0, maximum=0.0
        )

    values = np.asarray(times, dtype=float)
    return TimingSummary(
        count=int(values.size),
        total=float(values.sum()),
        mean=float(values.mean()),
        median=float(np.median(values)),
        p95=float(np.percentile(values, 95)),
        minimum=float(values.min()),
        maximum=float(values.max()),
    )


def slowest_iterations(result: MaxFlowResult, count: int = 5) -> list[tuple[int, float]]:
    """Return ``(iteration, seconds)`` pairs for the slowest iterations, slowest first."""
    if not result.iteration_times or count <= 0:
        return []
    values = np.asarray(result.iteration_times, dtype=float)
    # Stable sort on the negated values keeps earlier iterations first on ties.
    order = np.argsort(-values, kind="stable")[:count]
    return [(int(idx) + 1, float(values[idx])) for idx in order]
