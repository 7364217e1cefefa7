import numpy as np
import pytest

from backdrop.models.raster import Raster


def solid(width, height, rgba=(0, 0, 0, 0)) -> Raster:
    """Raster filled with a single RGBA colour."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return Raster(pixels=pixels)


def with_rows(width, height, top, bottom, rgba=(255, 0, 0, 255)) -> Raster:
    """Transparent canvas with rows top..bottom (inclusive) painted."""
    raster = solid(width, height)
    raster.pixels[top:bottom + 1] = rgba
    return raster


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_raster(rng):
    def _make(width, height):
        return Raster(pixels=rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8))
    return _make
