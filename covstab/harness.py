"""
Measurement harness — drives one synthetic stream through every estimator.

For each configured base mean:

  fresh estimators → alternating stream → lockstep ingest → periodic read
  → relative error vs d² → per-estimator maximum

Every pair is ingested by every estimator, in the same order, before the
next pair is drawn. Reads happen only at sampling points but the stream is
always consumed in full.
"""

import time
from typing import Callable, Dict, Iterator, List, Optional

from .estimators import CovarianceEstimator, create_estimators
from .metrics import percent, relative_error
from .models import ErrorSample, RunResult, StudyConfig
from .stream import alternating_pairs, true_covariance


def _sample_point_test(config: StudyConfig) -> Callable[[int], bool]:
    """Predicate on the number of pairs ingested so far."""
    if config.checkpoints:
        wanted = set(config.checkpoints)
        return wanted.__contains__

    step = config.cadence
    total = config.stream_length
    # The last cadence point at or past the end of the stream is not read.
    return lambda count: count % step == 0 and count < total


def iter_samples(
    config: StudyConfig,
    mean: float,
    estimators: Optional[List[CovarianceEstimator]] = None,
) -> Iterator[ErrorSample]:
    """
    Run one stream and yield an ErrorSample per estimator per sampling point.

    Args:
        config: Study settings (cadence or checkpoints, perturbation, metric)
        mean: Base mean for both series
        estimators: Estimators to drive; fresh ones from ``config`` if omitted.
            They are mutated in place.

    Yields:
        Samples in stream order; within a sampling point, in estimator order
    """
    if estimators is None:
        estimators = create_estimators(config.estimators)

    target = true_covariance(config.perturbation)
    is_sample_point = _sample_point_test(config)

    pairs = alternating_pairs(mean, config.perturbation, config.total_pairs)
    for count, (x, y) in enumerate(pairs, 1):
        for estimator in estimators:
            estimator.ingest(x, y)

        if not is_sample_point(count):
            continue

        for estimator in estimators:
            value = estimator.covariance()
            yield ErrorSample(
                count=count,
                estimator=estimator.name,
                covariance=value,
                error=relative_error(target, value, config.floor_denominator),
            )


def run_mean(config: StudyConfig, mean: float) -> RunResult:
    """Measure every configured estimator on one base mean."""
    t0 = time.time()
    estimators = create_estimators(config.estimators)
    names = [e.name for e in estimators]

    samples: List[ErrorSample] = []
    max_errors: Dict[str, float] = {name: 0.0 for name in names}
    for sample in iter_samples(config, mean, estimators):
        samples.append(sample)
        max_errors[sample.estimator] = max(max_errors[sample.estimator], sample.error)

    return RunResult(
        mean=mean,
        perturbation=config.perturbation,
        true_covariance=true_covariance(config.perturbation),
        total_pairs=config.total_pairs,
        estimators=names,
        samples=samples,
        max_errors=max_errors,
        elapsed_sec=time.time() - t0,
    )


def run_study(config: StudyConfig, verbose: bool = False) -> List[RunResult]:
    """
    Run every configured mean in order.

    Args:
        config: Validated study settings
        verbose: Print progress details

    Returns:
        One RunResult per mean, in configuration order
    """
    def log(msg: str):
        if verbose:
            print(msg)

    log(f"\n--- Study: mode={config.mode}, {len(config.means)} means, "
        f"{config.total_pairs} pairs each ---")
    if config.checkpoints:
        log(f"  Checkpoints: {config.checkpoints}")
    else:
        log(f"  Sampling every {config.cadence} pairs")
    log(f"  Perturbation: {config.perturbation} "
        f"(true covariance {true_covariance(config.perturbation)})")

    t_start = time.time()
    results: List[RunResult] = []
    for mean in config.means:
        log(f"\n  mean={mean}: ingesting {config.total_pairs} pairs...")
        result = run_mean(config, mean)
        results.append(result)

        log(f"    done in {result.elapsed_sec:.2f}s, {len(result.samples)} samples")
        for name in result.estimators:
            log(f"    {name}: max error {percent(result.max_errors[name]):.6g}%")

    log(f"\n=== Study complete in {time.time() - t_start:.2f}s ===")
    return results
