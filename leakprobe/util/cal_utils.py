import math

from leakprobe.models.probe_result import StatSummary


def nearest_rank(sorted_values: list[float], p: float) -> float:
    """Nearest-rank percentile of an already sorted, non-empty list."""
    k = math.ceil(p / 100.0 * len(sorted_values))
    return sorted_values[max(1, k) - 1]


def calculate_stat_summary(values: list[float]) -> StatSummary:
    """
    Summarise RSS readings (or their increases) over one run.

    Percentiles use the nearest-rank method, so every reported value is an
    actual sample. A run is tens of iterations, which makes p99 the same
    reading as max; it is not reported.
    """
    if not values:
        return StatSummary(min=0, max=0, p50=0, p95=0, avg=0)

    sorted_values = sorted(values)
    return StatSummary(
        min=sorted_values[0],
        max=sorted_values[-1],
        p50=nearest_rank(sorted_values, 50),
        p95=nearest_rank(sorted_values, 95),
        avg=sum(sorted_values) / len(sorted_values),
    )
