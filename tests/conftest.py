"""Pytest fixtures for strokefit tests."""

import math
import tempfile

import pytest


@pytest.fixture(autouse=True)
def quiet_tracer():
    """Leave the global tracer disabled after every test."""
    yield
    from strokefit.tracer import configure_tracer
    configure_tracer(enabled=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Create default fitter configuration."""
    from strokefit.config import CurveConfig
    return CurveConfig()


@pytest.fixture
def fitter(default_config):
    """A fitter with default settings and no curve started."""
    from strokefit.curve import CurveFitter
    return CurveFitter(default_config)


@pytest.fixture
def arc_stroke():
    """Half circle of radius 50 sampled every 6 degrees, as a mouse would."""
    points = []
    for i in range(31):
        angle = math.pi * i / 30
        points.append([round(100 + 50 * math.cos(angle)), round(100 - 50 * math.sin(angle))])
    return points


@pytest.fixture
def zigzag_stroke():
    """Straight run, sharp turn back, then another sharp turn."""
    return [
        [0, 0], [10, 0], [20, 0], [30, 0],
        [25, 5], [20, 10], [15, 15],
        [25, 15], [35, 15],
    ]
