"""
Synthetic observation stream with a closed-form covariance.

Both series sit on the same base mean and share a perturbation whose sign
flips before every pair, so the stream reads ``m-d, m+d, m-d, ...``. Over any
even number of pairs the sample covariance is exactly ``d²``.
"""

from typing import Iterator, Optional, Tuple


def alternating_pairs(
    mean: float,
    perturbation: float = 1.0,
    count: Optional[int] = None,
) -> Iterator[Tuple[float, float]]:
    """
    Yield ``(x, y)`` pairs around ``mean``; unbounded when ``count`` is None.
    """
    x_diff = perturbation
    y_diff = perturbation
    produced = 0
    while count is None or produced < count:
        x_diff = -x_diff
        y_diff = -y_diff
        yield mean + x_diff, mean + y_diff
        produced += 1


def true_covariance(perturbation: float) -> float:
    return perturbation * perturbation
