"""
Console and JSON rendering of study results.

Produces, per base mean:
  1. an error trajectory table — one row per sampling point, one column per
     estimator, cells in percent, closed by a MaxError row
  2. a summary block — max error, final error, growth slope

``generate_json_report`` returns the same data as a JSON-ready dict.
"""

from typing import Iterable, List, Optional, Union

from .constants import CELL_PRECISION, COLUMN_WIDTH, MAX_ERROR_LABEL
from .metrics import percent
from .models import EstimatorSummary, RunResult, StudyConfig
from .utils import summarize_run


# ---------------------------------------------------------------------------
# Trajectory table
# ---------------------------------------------------------------------------

def format_cell(value: Union[int, float, str]) -> str:
    if isinstance(value, float):
        return f"{value:.{CELL_PRECISION}g}"
    return str(value)


def format_row(cells: Iterable[Union[int, float, str]], width: int = COLUMN_WIDTH) -> str:
    """Left-align cells in fixed-width columns; long cells push the rest right."""
    return "".join(format_cell(c).ljust(width) for c in cells)


def table_title(result: RunResult) -> str:
    return f"mean: {result.mean:f}"


def render_table(result: RunResult) -> str:
    lines = [table_title(result), format_row(["Count"] + result.estimators)]
    for row in result.rows():
        lines.append(format_row([row[0].count] + [percent(s.error) for s in row]))
    lines.append(format_row(
        [MAX_ERROR_LABEL] + [percent(result.max_errors[name]) for name in result.estimators]
    ))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def _slope_str(slope: Optional[float]) -> str:
    return "n/a" if slope is None else f"{slope:+.3f}"


def render_summary(result: RunResult, summaries: Optional[List[EstimatorSummary]] = None) -> str:
    if summaries is None:
        summaries = summarize_run(result)

    lines = [
        f"Summary (mean={result.mean:g}, d={result.perturbation:g}, "
        f"pairs={result.total_pairs}, {result.elapsed_sec:.2f}s)"
    ]
    for s in summaries:
        lines.append(
            f"  {s.estimator:<10} max={percent(s.max_error):.6g}% "
            f"final={percent(s.final_error):.6g}% "
            f"growth={_slope_str(s.growth_slope)}"
        )
    return "\n".join(lines)


def render_report(results: List[RunResult]) -> str:
    blocks = []
    for result in results:
        blocks.append(render_table(result) + "\n\n" + render_summary(result) + "\n\n")
    return "\n".join(blocks)


# ---------------------------------------------------------------------------
# JSON report
# ---------------------------------------------------------------------------

def _summary_to_dict(s: EstimatorSummary) -> dict:
    return {
        "max_error": s.max_error,
        "final_error": s.final_error,
        "growth_slope": s.growth_slope,
    }


def generate_json_report(config: StudyConfig, results: List[RunResult]) -> dict:
    """Full structured report; errors are fractions, not percent."""
    return {
        "config": {
            "mode": config.mode,
            "means": config.means,
            "perturbation": config.perturbation,
            "stream_length": config.stream_length,
            "sample_every": config.sample_every,
            "checkpoints": config.checkpoints,
            "floor_denominator": config.floor_denominator,
            "estimators": [k.value for k in config.estimators],
        },
        "runs": [
            {
                "mean": r.mean,
                "true_covariance": r.true_covariance,
                "total_pairs": r.total_pairs,
                "elapsed_sec": round(r.elapsed_sec, 3),
                "samples": [
                    {
                        "count": row[0].count,
                        "covariance": {s.estimator: s.covariance for s in row},
                        "error": {s.estimator: s.error for s in row},
                    }
                    for row in r.rows()
                ],
                "max_errors": r.max_errors,
                "summary": {s.estimator: _summary_to_dict(s) for s in summarize_run(r)},
            }
            for r in results
        ],
    }
