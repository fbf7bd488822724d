"""
Study configuration — presets, YAML run files, and validation.

A run file mirrors ``StudyConfig`` field names, optionally on top of a
preset::

    preset: quick
    means: [1.0e+5, 1.0e+7]
    stream_length: 500000
    estimators: [Naive, Welford]
"""

import copy
import os
from typing import Any, Dict, Optional

import yaml

from .constants import (
    DEFAULT_FLOOR_DENOMINATOR,
    DEFAULT_PERTURBATION,
    DEFAULT_PRESET,
    PRESETS,
)
from .estimators import parse_kind
from .models import StudyConfig

_CONFIG_KEYS = {
    "means",
    "perturbation",
    "stream_length",
    "sample_every",
    "checkpoints",
    "floor_denominator",
    "estimators",
}

# Keys that put a study in trajectory mode; ``checkpoints`` is the other mode.
_TRAJECTORY_KEYS = {"stream_length", "sample_every"}


class ConfigError(ValueError):
    """Raised for study settings that cannot be run."""


def _as_count(value: Any) -> int:
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{value!r} is not a whole number")
    return int(number)


def preset_values(name: str) -> Dict[str, Any]:
    if name not in PRESETS:
        known = ", ".join(sorted(PRESETS))
        raise ConfigError(f"Unknown preset {name!r} (known: {known})")
    return copy.deepcopy(PRESETS[name])


def load_config_file(yaml_path: str) -> Dict[str, Any]:
    """
    Read a YAML run file into raw settings.

    A ``preset`` key pulls that preset in first; the file's own keys
    override it. Missing files raise FileNotFoundError.
    """
    if not os.path.exists(yaml_path):
        raise FileNotFoundError(yaml_path)

    with open(yaml_path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{yaml_path}: expected a mapping at the top level")

    values: Dict[str, Any] = {}
    preset = data.pop("preset", None)
    if preset is not None:
        values.update(preset_values(str(preset)))

    unknown = set(data) - _CONFIG_KEYS
    if unknown:
        raise ConfigError(f"{yaml_path}: unknown keys {sorted(unknown)}")
    return _layer(values, data)


def _layer(base: Dict[str, Any], layer: Dict[str, Any]) -> Dict[str, Any]:
    """
    Put ``layer`` on top of ``base``.

    Keys set to None in ``layer`` are skipped. A layer that picks a sampling
    mode drops the other mode's keys inherited from ``base``: ``checkpoints``
    drops ``stream_length``/``sample_every`` and either of those drops
    ``checkpoints``. Both modes in one layer is left for validation to reject.
    """
    given = {key: value for key, value in layer.items() if value is not None}
    merged = dict(base)
    if "checkpoints" in given:
        for key in _TRAJECTORY_KEYS:
            merged.pop(key, None)
    if _TRAJECTORY_KEYS & set(given):
        merged.pop("checkpoints", None)
    merged.update(given)
    return merged


def build_config(
    values: Dict[str, Any],
    overrides: Optional[Dict[str, Any]] = None,
) -> StudyConfig:
    """
    Validate raw settings and turn them into a StudyConfig.

    ``overrides`` entries set to None are ignored, so unset CLI flags can be
    passed straight through. An override that picks a sampling mode replaces
    the mode inherited from ``values`` (see ``_layer``).
    """
    merged = _layer(values, overrides or {})

    unknown = set(merged) - _CONFIG_KEYS
    if unknown:
        raise ConfigError(f"Unknown settings: {sorted(unknown)}")

    try:
        means = [float(m) for m in merged.get("means") or []]
        perturbation = float(merged.get("perturbation", DEFAULT_PERTURBATION))
        # PyYAML reads "1e3" as a string; go through float for counts.
        checkpoints = sorted({_as_count(c) for c in merged.get("checkpoints") or []})
        sample_every = merged.get("sample_every")
        if sample_every is not None:
            sample_every = _as_count(sample_every)
        if "stream_length" in merged:
            merged["stream_length"] = _as_count(merged["stream_length"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Bad numeric setting: {e}") from e

    if not means:
        raise ConfigError("At least one mean is required")

    if any(c <= 0 for c in checkpoints):
        raise ConfigError("Checkpoints must be positive")

    if checkpoints and (sample_every is not None or "stream_length" in merged):
        raise ConfigError(
            "Use either checkpoints or stream_length/sample_every, not both"
        )

    floor = merged.get("floor_denominator", DEFAULT_FLOOR_DENOMINATOR)
    if not isinstance(floor, bool):
        raise ConfigError(f"floor_denominator must be true or false, got {floor!r}")
    if not floor and perturbation == 0.0:
        raise ConfigError("Zero perturbation needs floor_denominator (true covariance is 0)")

    try:
        estimators = [parse_kind(str(name)) for name in merged.get("estimators") or []]
    except ValueError as e:
        raise ConfigError(str(e)) from e

    config = StudyConfig(
        means=means,
        perturbation=perturbation,
        checkpoints=checkpoints,
        floor_denominator=floor,
    )
    if estimators:
        config.estimators = estimators

    if not checkpoints:
        config.stream_length = int(merged.get("stream_length", config.stream_length))
        if config.stream_length <= 0:
            raise ConfigError("stream_length must be positive")
        if sample_every is None:
            sample_every = config.cadence
        config.sample_every = int(sample_every)
        if config.sample_every <= 0:
            raise ConfigError("sample_every must be positive")
    else:
        config.stream_length = max(checkpoints)

    return config


def resolve_config(
    preset: Optional[str] = None,
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> StudyConfig:
    """Preset or run file (the file wins when both are given), then overrides."""
    if config_path:
        values = load_config_file(config_path)
    else:
        values = preset_values(preset or DEFAULT_PRESET)
    return build_config(values, overrides)
