import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest


class ZeroNoise:
    """Random source stub whose uniform draws are all zero."""

    def uniform(self, low=0.0, high=1.0, size=None):
        if size is None:
            return 0.0
        return np.zeros(size)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def zero_noise():
    return ZeroNoise()


@pytest.fixture
def rgba():
    """Factory for (H, W, 4) uint8 buffers, transparent unless filled."""
    def make(width, height, fill=(0, 0, 0, 0)):
        data = np.zeros((height, width, 4), dtype=np.uint8)
        data[:, :] = fill
        return data
    return make


@pytest.fixture
def red_dot(rgba):
    """2x2 buffer with one opaque red pixel at (0, 0)."""
    data = rgba(2, 2)
    data[0, 0] = (255, 0, 0, 255)
    return data
