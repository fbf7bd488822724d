"""Shared fixtures and the --runslow switch."""

import pytest

from covstab.models import StudyConfig


def pytest_addoption(parser):
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="run tests marked slow",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def small_trajectory():
    return StudyConfig(means=[10.0], stream_length=1000, sample_every=100)


@pytest.fixture
def small_checkpoints():
    return StudyConfig(means=[1.0], checkpoints=[10, 100, 1000], floor_denominator=True)
