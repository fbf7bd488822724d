"""
Error-trajectory statistics.

The slope of log(error) against log(count) says how an estimator degrades as
the stream grows: about 0 for bounded error, about 1 for error that grows in
proportion to the number of pairs.
"""

import math
from typing import List, Optional, Sequence

import numpy as np

from .models import EstimatorSummary, ErrorSample, RunResult


def growth_slope(counts: Sequence[int], errors: Sequence[float]) -> Optional[float]:
    """
    Least-squares slope of log(error) vs log(count).

    Samples with zero (or non-finite) error carry no log-scale information
    and are dropped. Returns None with fewer than two distinct counts left.
    """
    points = [
        (c, e) for c, e in zip(counts, errors)
        if c > 0 and e > 0 and math.isfinite(e)
    ]
    if len({c for c, _ in points}) < 2:
        return None

    log_counts = np.log10(np.array([c for c, _ in points], dtype=np.float64))
    log_errors = np.log10(np.array([e for _, e in points], dtype=np.float64))
    slope, _intercept = np.polyfit(log_counts, log_errors, 1)
    return float(slope)


def summarize_estimator(name: str, samples: List[ErrorSample]) -> EstimatorSummary:
    if not samples:
        return EstimatorSummary(estimator=name, max_error=0.0, final_error=0.0, growth_slope=None)

    errors = np.array([s.error for s in samples], dtype=np.float64)
    return EstimatorSummary(
        estimator=name,
        max_error=float(errors.max()),
        final_error=float(errors[-1]),
        growth_slope=growth_slope([s.count for s in samples], errors.tolist()),
    )


def summarize_run(result: RunResult) -> List[EstimatorSummary]:
    """One summary per estimator, in column order."""
    return [summarize_estimator(name, result.samples_for(name)) for name in result.estimators]
