"""Tests for the command-line entry point."""

import json

import pytest

from covstab.__main__ import main


class TestRun:
    def test_tables(self, capsys):
        main(["run", "--preset", "quick", "--length", "1000", "--means", "1e5"])
        out = capsys.readouterr().out
        assert "mean: 100000.000000" in out
        assert out.count("\n900 ") == 1
        assert "MaxError" in out
        assert "Summary (mean=100000" in out

    def test_json(self, capsys):
        main([
            "run", "--means", "10", "1e7",
            "--checkpoints", "100", "1000",
            "--estimators", "naive", "welford",
            "--json",
        ])
        report = json.loads(capsys.readouterr().out)
        assert report["config"]["mode"] == "checkpoints"
        assert report["config"]["estimators"] == ["Naive", "Welford"]
        assert [r["mean"] for r in report["runs"]] == [10.0, 1e7]
        assert [s["count"] for s in report["runs"][0]["samples"]] == [100, 1000]

    def test_floor_flag(self, capsys):
        main(["run", "--preset", "checkpoints", "--checkpoints", "10",
              "--no-floor-denominator", "--json"])
        report = json.loads(capsys.readouterr().out)
        assert report["config"]["floor_denominator"] is False

    def test_length_switches_checkpoint_preset_to_trajectory(self, capsys):
        main(["run", "--preset", "checkpoints", "--length", "400", "--json"])
        report = json.loads(capsys.readouterr().out)
        assert report["config"]["mode"] == "trajectory"
        assert report["config"]["stream_length"] == 400
        assert report["runs"][0]["total_pairs"] == 400

    def test_length_with_checkpoints_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["run", "--length", "400", "--checkpoints", "100"])
        assert exc.value.code == 1
        assert "checkpoints" in capsys.readouterr().err

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "run.yaml"
        path.write_text("means: [1.0]\nstream_length: 400\nsample_every: 200\n")
        main(["run", "--config", str(path), "--verbose"])
        out = capsys.readouterr().out
        assert "Sampling every 200 pairs" in out
        assert "mean: 1.000000" in out

    def test_missing_config_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["run", "--config", str(tmp_path / "missing.yaml")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_bad_setting(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["run", "--preset", "quick", "--length", "0"])
        assert exc.value.code == 1
        assert "stream_length" in capsys.readouterr().err

    def test_preset_and_config_exclusive(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["run", "--preset", "quick", "--config", str(tmp_path / "x.yaml")])
        assert exc.value.code == 2


def test_presets_listing(capsys):
    main(["presets"])
    out = capsys.readouterr().out
    assert "trajectory (default)" in out
    assert "checkpoints" in out
    assert "quick" in out
