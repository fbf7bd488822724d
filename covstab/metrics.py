"""
Relative error of an estimate against a known target.
"""

from .constants import DEFAULT_FLOOR_DENOMINATOR


def relative_error(
    target: float,
    value: float,
    floor_denominator: bool = DEFAULT_FLOOR_DENOMINATOR,
) -> float:
    """
    |value - target| scaled by the target's magnitude.

    With ``floor_denominator`` the scale is ``max(1, |target|)`` so a target
    at or near zero does not blow the ratio up; without it the scale is
    ``|target|`` and the target must be non-zero.
    """
    if floor_denominator:
        return abs(value - target) / max(1.0, abs(target))
    return abs(value - target) / abs(target)


def percent(error: float) -> float:
    return error * 100
