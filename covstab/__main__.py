"""
CLI entry point for the covariance stability study.

Usage:
    python -m covstab run [--preset NAME | --config FILE] [options]
    python -m covstab presets
"""

import argparse
import json
import sys

from .config import ConfigError, resolve_config
from .constants import DEFAULT_PRESET, PRESETS
from .estimators import EstimatorKind
from .harness import run_study
from .report_generator import generate_json_report, render_report


def _print_presets():
    for name in sorted(PRESETS):
        marker = " (default)" if name == DEFAULT_PRESET else ""
        print(f"{name}{marker}")
        for key, value in PRESETS[name].items():
            print(f"    {key}: {value}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="covstab",
        description="Measure relative error of incremental covariance estimators",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- run command ---
    run_parser = subparsers.add_parser(
        "run",
        help="Run a study and print the error tables",
    )
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--preset", "-p",
        default=None,
        choices=sorted(PRESETS),
        help=f"Built-in study settings (default: {DEFAULT_PRESET})",
    )
    source.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a YAML run file",
    )
    run_parser.add_argument(
        "--means", "-m",
        type=float,
        nargs="+",
        default=None,
        help="Base means to sweep (e.g. 1e5 1e7)",
    )
    run_parser.add_argument(
        "--length", "-n",
        dest="stream_length",
        type=int,
        default=None,
        help="Pairs per stream in trajectory mode",
    )
    cadence = run_parser.add_mutually_exclusive_group()
    cadence.add_argument(
        "--sample-every",
        type=int,
        default=None,
        help="Read estimators every N pairs (default: 1%% of the stream)",
    )
    cadence.add_argument(
        "--checkpoints",
        type=int,
        nargs="+",
        default=None,
        help="Read estimators after exactly these pair counts",
    )
    run_parser.add_argument(
        "--perturbation", "-d",
        type=float,
        default=None,
        help="Perturbation magnitude d (true covariance is d*d)",
    )
    run_parser.add_argument(
        "--floor-denominator",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Scale relative error by max(1, |target|) instead of |target|",
    )
    run_parser.add_argument(
        "--estimators", "-e",
        nargs="+",
        default=None,
        help=f"Subset of estimators ({', '.join(k.value for k in EstimatorKind)})",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report instead of tables",
    )
    run_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress details",
    )

    # --- presets command ---
    subparsers.add_parser(
        "presets",
        help="List built-in study presets",
    )

    args = parser.parse_args(argv)

    if args.command == "presets":
        _print_presets()
        return

    overrides = {
        "means": args.means,
        "stream_length": args.stream_length,
        "sample_every": args.sample_every,
        "checkpoints": args.checkpoints,
        "perturbation": args.perturbation,
        "floor_denominator": args.floor_denominator,
        "estimators": args.estimators,
    }
    try:
        config = resolve_config(args.preset, args.config, overrides)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e}", file=sys.stderr)
        sys.exit(1)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    results = run_study(config, verbose=args.verbose and not args.json)

    if args.json:
        print(json.dumps(generate_json_report(config, results), indent=2))
    else:
        print(render_report(results))


if __name__ == "__main__":
    main()
