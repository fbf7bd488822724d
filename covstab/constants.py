"""
Study defaults and built-in run presets — the single source of truth.

The two reference modes differ in which means they sweep, where they
sample, and how the relative-error denominator is treated:

- ``trajectory``: two large means, one long stream, a sample every 1% of
  the stream; error scaled by |target|.
- ``checkpoints``: small-to-large means, error read at fixed stream
  lengths; error scaled by max(1, |target|) because a unit target is
  expected there.
"""

from typing import Any, Dict

# ---------------------------------------------------------------------------
# Stream defaults
# ---------------------------------------------------------------------------

DEFAULT_PERTURBATION = 1.0

# Relative error scaled by |target| unless a study asks for max(1, |target|)
DEFAULT_FLOOR_DENOMINATOR = False

DEFAULT_STREAM_LENGTH = 10_000_000

# Trajectory cadence when none is given: stream_length // SAMPLES_PER_RUN
SAMPLES_PER_RUN = 100

# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

PRESETS: Dict[str, Dict[str, Any]] = {
    "trajectory": {
        "means": [1e5, 1e7],
        "perturbation": DEFAULT_PERTURBATION,
        "stream_length": DEFAULT_STREAM_LENGTH,
        "floor_denominator": False,
    },
    "checkpoints": {
        "means": [1.0, 1e3, 1e6],
        "perturbation": DEFAULT_PERTURBATION,
        "checkpoints": [1_000, 10_000, 100_000, 1_000_000, 10_000_000],
        "floor_denominator": True,
    },
    # Short trajectory for smoke runs; still large enough for the naive
    # sums to lose precision at mean 1e7.
    "quick": {
        "means": [1e5, 1e7],
        "perturbation": DEFAULT_PERTURBATION,
        "stream_length": 200_000,
        "floor_denominator": False,
    },
}

DEFAULT_PRESET = "trajectory"

# ---------------------------------------------------------------------------
# Report layout
# ---------------------------------------------------------------------------

COLUMN_WIDTH = 25

# Significant digits for table cells
CELL_PRECISION = 10

MAX_ERROR_LABEL = "MaxError"
