"""Pytest configuration for spikeraster tests."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def scenario_times():
    """Three spikes over two trials, the smallest raster with every feature."""
    return [2.0, 5.0, 8.0]
