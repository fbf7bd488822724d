"""Tests for table, summary and JSON rendering."""

import json

from covstab.models import ErrorSample, RunResult, StudyConfig
from covstab.report_generator import (
    format_cell,
    format_row,
    generate_json_report,
    render_report,
    render_summary,
    render_table,
)
from covstab.utils import growth_slope, summarize_run


def _result():
    samples = []
    for count, naive, welford in [(100, 0.001, 1e-12), (200, 0.002, 0.0), (400, 0.004, 1e-12)]:
        samples.append(ErrorSample(count, "Naive", 1.0 + naive, naive))
        samples.append(ErrorSample(count, "Welford", 1.0, welford))
    return RunResult(
        mean=100000.0,
        perturbation=1.0,
        true_covariance=1.0,
        total_pairs=500,
        estimators=["Naive", "Welford"],
        samples=samples,
        max_errors={"Naive": 0.004, "Welford": 1e-12},
    )


class TestCells:
    def test_ten_significant_digits(self):
        assert format_cell(1 / 3) == "0.3333333333"
        assert format_cell(0.1) == "0.1"
        assert format_cell(1.5e-12) == "1.5e-12"

    def test_ints_and_labels_verbatim(self):
        assert format_cell(100000) == "100000"
        assert format_cell("MaxError") == "MaxError"

    def test_row_padding(self):
        row = format_row(["Count", "Naive"], width=8)
        assert row == "Count   Naive   "

    def test_long_cell_not_truncated(self):
        assert format_row(["abcdefghij", "x"], width=4) == "abcdefghijx   "


class TestTable:
    def test_layout(self):
        lines = render_table(_result()).split("\n")
        assert lines[0] == "mean: 100000.000000"
        assert lines[1].split() == ["Count", "Naive", "Welford"]
        assert lines[2].split() == ["100", "0.1", "1e-10"]
        assert lines[-1].split() == ["MaxError", "0.4", "1e-10"]
        assert len(lines) == 2 + 3 + 1


class TestSummary:
    def test_growth_slope_linear(self):
        assert abs(growth_slope([10, 100, 1000], [1e-6, 1e-5, 1e-4]) - 1.0) < 1e-9

    def test_growth_slope_flat(self):
        assert abs(growth_slope([10, 100, 1000], [3e-3, 3e-3, 3e-3])) < 1e-9

    def test_growth_slope_needs_two_nonzero_points(self):
        assert growth_slope([10, 100], [0.0, 1e-3]) is None
        assert growth_slope([], []) is None

    def test_summarize_run(self):
        summaries = summarize_run(_result())
        naive, welford = summaries
        assert naive.estimator == "Naive"
        assert naive.max_error == 0.004
        assert naive.final_error == 0.004
        assert abs(naive.growth_slope - 1.0) < 1e-9
        assert welford.growth_slope is not None
        assert abs(welford.growth_slope) < 1e-9

    def test_render_summary(self):
        text = render_summary(_result())
        assert text.startswith("Summary (mean=100000, d=1, pairs=500")
        assert "Naive" in text and "max=0.4%" in text and "growth=+1.000" in text

    def test_render_report_has_every_mean(self):
        other = _result()
        other.mean = 1e7
        text = render_report([_result(), other])
        assert "mean: 100000.000000" in text
        assert "mean: 10000000.000000" in text


class TestJson:
    def test_structure(self):
        config = StudyConfig(means=[1e5], stream_length=500, sample_every=100)
        report = generate_json_report(config, [_result()])
        json.dumps(report)

        assert report["config"]["mode"] == "trajectory"
        assert report["config"]["estimators"] == ["Naive", "Kahan", "Welford"]
        run = report["runs"][0]
        assert [s["count"] for s in run["samples"]] == [100, 200, 400]
        assert run["samples"][0]["error"] == {"Naive": 0.001, "Welford": 1e-12}
        assert run["max_errors"]["Naive"] == 0.004
        assert run["summary"]["Welford"]["final_error"] == 1e-12
