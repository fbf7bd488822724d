"""
Data models for the measurement harness.

The harness, the summary statistics and the report generator communicate
via these dataclasses.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import (
    DEFAULT_FLOOR_DENOMINATOR,
    DEFAULT_PERTURBATION,
    DEFAULT_STREAM_LENGTH,
    SAMPLES_PER_RUN,
)
from .estimators import EstimatorKind


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------

@dataclass
class StudyConfig:
    """One study: a sweep over base means sharing every other parameter."""
    means: List[float]
    perturbation: float = DEFAULT_PERTURBATION
    stream_length: int = DEFAULT_STREAM_LENGTH
    sample_every: Optional[int] = None      # trajectory cadence, in pairs
    checkpoints: List[int] = field(default_factory=list)  # explicit sample lengths
    floor_denominator: bool = DEFAULT_FLOOR_DENOMINATOR  # relative error scaled by max(1, |target|)
    estimators: List[EstimatorKind] = field(default_factory=lambda: list(EstimatorKind))

    @property
    def mode(self) -> str:
        return "checkpoints" if self.checkpoints else "trajectory"

    @property
    def total_pairs(self) -> int:
        """Pairs ingested per mean."""
        return max(self.checkpoints) if self.checkpoints else self.stream_length

    @property
    def cadence(self) -> int:
        """Trajectory sampling step; 1% of the stream when not set."""
        return self.sample_every or max(1, self.stream_length // SAMPLES_PER_RUN)


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------

@dataclass
class ErrorSample:
    """One estimator read at one sampling point."""
    count: int                      # pairs ingested when the read happened
    estimator: str                  # estimator label
    covariance: float
    error: float                    # relative error (fraction, not percent)


@dataclass
class EstimatorSummary:
    """How one estimator's error behaved over a run."""
    estimator: str
    max_error: float
    final_error: float
    growth_slope: Optional[float]   # d log(error) / d log(count); None if not fittable


@dataclass
class RunResult:
    """Everything measured for one base mean."""
    mean: float
    perturbation: float
    true_covariance: float
    total_pairs: int
    estimators: List[str]           # labels, in column order
    samples: List[ErrorSample]
    max_errors: Dict[str, float]
    elapsed_sec: float = 0.0

    def samples_for(self, estimator: str) -> List[ErrorSample]:
        return [s for s in self.samples if s.estimator == estimator]

    def rows(self) -> List[List[ErrorSample]]:
        """Samples grouped by sampling point, each row in column order."""
        width = len(self.estimators)
        return [self.samples[i:i + width] for i in range(0, len(self.samples), width)]
