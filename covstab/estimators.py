"""
Incremental covariance estimators.

Three variants share one contract — ``ingest(x, y)``, ``covariance()`` and a
stable ``name`` — and differ only in how they hold their running state:

  Naive    plain float sums of x, y and x*y
  Kahan    the same sums held in KahanAccumulators
  Welford  running means plus a sum of centered cross-products

``covariance()`` is the population covariance (divides by ``count``) and is
recomputed from state on every call. Querying it before the first ``ingest``
is a precondition violation and is only assertion-checked.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Union

from .kahan import KahanAccumulator


class EstimatorKind(Enum):
    """The closed set of estimator variants compared by the study."""
    NAIVE = "Naive"
    KAHAN = "Kahan"
    WELFORD = "Welford"


@dataclass
class _SumCovariance:
    """Shared sum-based update and read-out for the Naive and Kahan variants."""
    count: int = 0

    def ingest(self, x: float, y: float) -> None:
        self.count += 1
        self.sum_x += x
        self.sum_y += y
        self.sum_products += x * y

    def covariance(self) -> float:
        assert self.count > 0, "covariance() needs at least one observation"
        sum_x = float(self.sum_x)
        sum_y = float(self.sum_y)
        return (float(self.sum_products) - sum_x * sum_y / self.count) / self.count


@dataclass
class NaiveCovariance(_SumCovariance):
    sum_x: float = 0.0
    sum_y: float = 0.0
    sum_products: float = 0.0

    name = EstimatorKind.NAIVE.value


@dataclass
class KahanCovariance(_SumCovariance):
    sum_x: KahanAccumulator = field(default_factory=KahanAccumulator)
    sum_y: KahanAccumulator = field(default_factory=KahanAccumulator)
    sum_products: KahanAccumulator = field(default_factory=KahanAccumulator)

    name = EstimatorKind.KAHAN.value


@dataclass
class WelfordCovariance:
    """Online co-moment update around running means."""
    count: int = 0
    mean_x: float = 0.0
    mean_y: float = 0.0
    sum_products: float = 0.0

    name = EstimatorKind.WELFORD.value

    def ingest(self, x: float, y: float) -> None:
        # mean_x is advanced before the cross-product, mean_y after it.
        self.count += 1
        self.mean_x += (x - self.mean_x) / self.count
        self.sum_products += (x - self.mean_x) * (y - self.mean_y)
        self.mean_y += (y - self.mean_y) / self.count

    def covariance(self) -> float:
        assert self.count > 0, "covariance() needs at least one observation"
        return self.sum_products / self.count


CovarianceEstimator = Union[NaiveCovariance, KahanCovariance, WelfordCovariance]

_ESTIMATOR_TYPES = {
    EstimatorKind.NAIVE: NaiveCovariance,
    EstimatorKind.KAHAN: KahanCovariance,
    EstimatorKind.WELFORD: WelfordCovariance,
}


def create_estimator(kind: EstimatorKind) -> CovarianceEstimator:
    return _ESTIMATOR_TYPES[kind]()


def parse_kind(name: str) -> EstimatorKind:
    """Look up a kind by its label or enum name, case-insensitively."""
    key = name.strip().lower()
    for kind in EstimatorKind:
        if key in (kind.value.lower(), kind.name.lower()):
            return kind
    raise ValueError(f"Unknown estimator: {name!r}")


def create_estimators(kinds: Optional[Iterable[EstimatorKind]] = None) -> List[CovarianceEstimator]:
    """
    Fresh estimators in the fixed study order (Naive, Kahan, Welford).

    Duplicates in ``kinds`` are ignored.
    """
    selected = set(kinds) if kinds is not None else set(EstimatorKind)
    return [create_estimator(kind) for kind in EstimatorKind if kind in selected]
